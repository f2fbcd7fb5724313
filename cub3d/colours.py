"""Ceiling and floor colour parsing."""

from __future__ import annotations

import re

from .errors import INV_CF, CubError

_COLOUR = re.compile(r" *([0-9]+) *, *([0-9]+) *, *([0-9]+) *")
_MAX_DIGITS = 3
_MAX_CHANNEL = 255


def create_rgb(rgb: tuple[int, int, int]) -> int:
    """Pack red, green and blue channels into a 0xRRGGBB integer."""
    red, green, blue = rgb
    return red << 16 | green << 8 | blue


def _strip_identifier(line: str) -> str:
    body = line.lstrip(" ")
    if body[:1] in ("C", "F") and body:
        return body[1:]
    return body


def parse_colour(line: str) -> tuple[int, int, int]:
    """Parse a ``C r,g,b`` or ``F r,g,b`` line into a channel triple.

    Raises CubError when the channels are malformed or out of range.
    """
    match = _COLOUR.fullmatch(_strip_identifier(line))
    if match is None:
        raise CubError(INV_CF)
    channels = match.groups()
    if any(len(channel) > _MAX_DIGITS for channel in channels):
        raise CubError(INV_CF)
    values = tuple(int(channel) for channel in channels)
    if any(value > _MAX_CHANNEL for value in values):
        raise CubError(INV_CF)
    return values  # type: ignore[return-value]