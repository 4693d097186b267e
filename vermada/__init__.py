"""Building blocks for a tile-based side-scrolling platform game on pygame."""

__version__ = "1.0.1"