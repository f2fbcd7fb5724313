"""Parsing of the texture and colour elements at the top of a scene file."""

from __future__ import annotations

import os
from dataclasses import dataclass

from .colours import create_rgb, parse_colour
from .errors import (
    BAD_LMNT,
    CANT_TXTR,
    INV_TXTR,
    NOT_TXTR,
    TXTR_404,
    CubError,
)

MAP_CHARS = frozenset("10NEWSD ")

_WALL_IDENTIFIERS = {"NO": "north", "SO": "south", "WE": "west", "EA": "east"}
_SURFACE_IDENTIFIERS = {"C": "ceiling", "F": "floor"}


@dataclass
class Elements:
    """Texture paths and colours declared before the map."""

    north: str | None = None
    south: str | None = None
    west: str | None = None
    east: str | None = None
    ceiling: int | None = None
    floor: int | None = None
    ceiling_texture: str | None = None
    floor_texture: str | None = None

    def complete(self) -> bool:
        """Whether every wall texture and both surfaces have been given."""
        return (
            self.east is not None
            and self.west is not None
            and self.south is not None
            and self.north is not None
            and self.floor is not None
            and self.ceiling is not None
        )


def is_empty_line(line: str) -> bool:
    """True when the line holds only spaces and newlines."""
    return all(char in " \n" for char in line)


def is_map_line(line: str, strict: bool) -> bool:
    """True when the line holds only map characters.

    With ``strict`` a foreign character raises CubError instead.
    """
    if all(char in MAP_CHARS for char in line):
        return True
    if strict:
        raise CubError(BAD_LMNT)
    return False


def _words(line: str) -> list[str]:
    return [word for word in line.split(" ") if word]


def _readable(path: str) -> bool:
    try:
        descriptor = os.open(path, os.O_RDONLY)
    except OSError:
        return False
    os.close(descriptor)
    return True


def parse_texture_path(line: str, strict: bool) -> str | None:
    """Return the existing ``.xpm`` path named by an ``ID path`` line.

    On failure raise CubError when ``strict``, otherwise return None.
    """
    words = _words(line)
    if len(words) != 2 or not words[1].endswith(".xpm"):
        message = INV_TXTR
    elif not _readable(words[1]):
        message = TXTR_404
    else:
        return words[1]
    if strict:
        raise CubError(message)
    return None


def _assign_surface(elements: Elements, line: str, which: str) -> None:
    if len(_words(line)) == 2:
        path = parse_texture_path(line, False)
        if path is not None:
            setattr(elements, f"{which}_texture", path)
            setattr(elements, which, 0)
            return
    setattr(elements, which, create_rgb(parse_colour(line)))


def _apply_element(elements: Elements, line: str) -> bool:
    body = line.lstrip(" ")
    for ident, attr in _WALL_IDENTIFIERS.items():
        if body.startswith(ident + " "):
            setattr(elements, attr, parse_texture_path(line, True))
            return True
    for ident, attr in _SURFACE_IDENTIFIERS.items():
        if body.startswith(ident + " "):
            _assign_surface(elements, line, attr)
            return True
    return False


def parse_elements(lines: list[str]) -> tuple[Elements, int]:
    """Read elements from the top of ``lines``.

    Returns the elements and the index of the first non-empty line after
    them. Stops as soon as every element has been collected.
    """
    elements = Elements()
    index = len(lines)
    for position, line in enumerate(lines):
        if elements.complete():
            index = position
            break
        if is_empty_line(line) or _apply_element(elements, line):
            continue
        if is_map_line(line, False):
            raise CubError(CANT_TXTR)
        raise CubError(NOT_TXTR)
    while index < len(lines) and is_empty_line(lines[index]):
        index += 1
    return elements, index