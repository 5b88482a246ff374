"""Graphics module for the SPACEBREAK rendering pipeline."""

from spacebreak.graphics.primitives import (
    Color,
    Buffer,
    new_buffer,
    clear,
    draw_rect,
    draw_circle,
)

__all__ = [
    "Color",
    "Buffer",
    "new_buffer",
    "clear",
    "draw_rect",
    "draw_circle",
]
