"""
Frame display for the game window.

The scene draws into a numpy RGB buffer; this turns it into a pygame
surface at window size.
"""

import pygame
import numpy as np
from numpy.typing import NDArray


class FrameDisplay:
    """
    The play field as a (height, width, 3) RGB buffer.

    The surfaces used for blitting are created on first render and reused
    on every frame after that.
    """

    def __init__(self, width: int = 800, height: int = 600) -> None:
        self._width = width
        self._height = height
        self._buffer = np.zeros((height, width, 3), dtype=np.uint8)
        self._surface: pygame.Surface | None = None
        self._scaled: pygame.Surface | None = None

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def buffer(self) -> NDArray[np.uint8]:
        """The live buffer. Draw into it in place."""
        return self._buffer

    def render(self, scale: float = 1.0) -> pygame.Surface:
        """
        Copy the buffer onto a surface.

        Args:
            scale: Size factor from play field to window pixels

        Returns:
            Surface of ``scale`` times the play field size
        """
        if self._surface is None:
            self._surface = pygame.Surface((self._width, self._height))

        # surfarray is indexed (x, y)
        pygame.surfarray.blit_array(self._surface, self._buffer.swapaxes(0, 1))
        if scale == 1.0:
            return self._surface

        size = (int(self._width * scale), int(self._height * scale))
        if self._scaled is None or self._scaled.get_size() != size:
            self._scaled = pygame.Surface(size)
        return pygame.transform.scale(self._surface, size, self._scaled)
