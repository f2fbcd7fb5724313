"""Pixel buffers and distance shading of colours."""

from __future__ import annotations

WINDOW_W = 1920
WINDOW_H = 1080

SHADE_NEAR = 50.0
SHADE_FAR = 350.0
FLOOR_NEAR = 50.0
FLOOR_FAR = 350.0

_ALPHA_MASK = 0xFF000000
_COLOUR_MASK = 0xFFFFFFFF


class Canvas:
    """A rectangular grid of 0xAARRGGBB pixels stored row by row."""

    def __init__(self, width: int, height: int, fill: int = 0) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"canvas size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.pixels = [fill & _COLOUR_MASK] * (width * height)

    def _index(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(
                f"pixel ({x}, {y}) is outside a {self.width}x{self.height} canvas"
            )
        return y * self.width + x

    def put(self, x: int, y: int, colour: int) -> None:
        """Set the pixel at column ``x`` and row ``y``."""
        self.pixels[self._index(x, y)] = colour & _COLOUR_MASK

    def get(self, x: int, y: int) -> int:
        """Return the pixel at column ``x`` and row ``y``."""
        return self.pixels[self._index(x, y)]


def _clamp(value: float) -> float:
    return min(max(value, 0.0), 1.0)


def _scale(colour: int, factor: float) -> int:
    colour &= _COLOUR_MASK
    red = int(((colour >> 16) & 0xFF) * factor)
    green = int(((colour >> 8) & 0xFF) * factor)
    blue = int((colour & 0xFF) * factor)
    return (colour & _ALPHA_MASK) | (red << 16) | (green << 8) | blue


def change_shade(colour: int, dist: float, avg: float) -> int:
    """Darken a wall colour with distance.

    Full brightness up to the near limit, black from the far limit on,
    and ``avg`` (clamped to 0..1) as the factor in between.
    """
    if dist <= SHADE_NEAR:
        factor = 1.0
    elif dist >= SHADE_FAR:
        factor = 0.0
    else:
        factor = _clamp(avg)
    return _scale(colour, factor)


def shade_floor(colour: int, y: int) -> int:
    """Darken a floor colour by how far row ``y`` is above the screen bottom."""
    check = WINDOW_H - y
    if check <= FLOOR_NEAR:
        factor = 1.0
    elif check >= FLOOR_FAR:
        factor = 0.0
    else:
        factor = _clamp(1.0 - (check - FLOOR_NEAR) / (FLOOR_FAR - FLOOR_NEAR))
    return _scale(colour, factor)