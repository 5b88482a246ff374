"""Basic drawing primitives for the SPACEBREAK frame buffer."""

from typing import Tuple
import numpy as np
from numpy.typing import NDArray

# Type aliases
Color = Tuple[int, int, int]
Buffer = NDArray[np.uint8]


def new_buffer(width: int, height: int) -> Buffer:
    """Allocate a black (height, width, 3) frame buffer."""
    return np.zeros((height, width, 3), dtype=np.uint8)


def clear(buffer: Buffer, color: Color = (0, 0, 0)) -> None:
    """Clear buffer to a solid color."""
    buffer[:, :] = color


def draw_rect(
    buffer: Buffer,
    x: float,
    y: float,
    width: float,
    height: float,
    color: Color,
) -> None:
    """Paint the box with top-left corner (x, y).

    Coordinates may be fractional (actor bounds are) and are rounded to the
    nearest pixel; whatever falls outside the buffer is dropped.
    """
    h, w = buffer.shape[:2]

    # Clamp to buffer bounds
    x1 = max(0, min(int(round(x)), w))
    y1 = max(0, min(int(round(y)), h))
    x2 = max(0, min(int(round(x + width)), w))
    y2 = max(0, min(int(round(y + height)), h))

    if x2 <= x1 or y2 <= y1:
        return

    buffer[y1:y2, x1:x2] = color


def draw_circle(
    buffer: Buffer,
    cx: float,
    cy: float,
    radius: float,
    color: Color,
) -> None:
    """Draw a circle on the buffer.

    Only the circle's bounding box is evaluated, so cost scales with the
    radius rather than with the buffer size.

    Args:
        buffer: Target numpy array (height, width, 3)
        cx: Center x coordinate
        cy: Center y coordinate
        radius: Circle radius in pixels
        color: RGB color tuple
    """
    h, w = buffer.shape[:2]

    x1 = max(0, int(np.floor(cx - radius)))
    y1 = max(0, int(np.floor(cy - radius)))
    x2 = min(w, int(np.ceil(cx + radius)) + 1)
    y2 = min(h, int(np.ceil(cy + radius)) + 1)

    if x2 <= x1 or y2 <= y1:
        return

    ys, xs = np.ogrid[y1:y2, x1:x2]
    dist_sq = (xs + 0.5 - cx) ** 2 + (ys + 0.5 - cy) ** 2
    mask = dist_sq <= radius ** 2

    buffer[y1:y2, x1:x2][mask] = color
