"""SPACEBREAK - breakout meets space invaders."""

__version__ = "0.1.0"
