"""The overhead minimap with its border and player marker."""

from __future__ import annotations

import math

from .canvas import Canvas
from .mapfile import Level

CELL = 40
RADIUS = 150
ORIGIN = 50
BORDER_START = 40
BORDER_SIZE = 320
BORDER_THICKNESS = 10
PLAYER_CENTRE = 200

WHITE = 0xFFFFFF
BLACK = 0x000000
WALL_COLOUR = 0x5E5E5D
DOOR_COLOUR = 0x422B19

Point = tuple[int, int]


def _cdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    quotient = abs(a) // abs(b)
    return -quotient if (a < 0) != (b < 0) else quotient


def player_triangle(cx: int, cy: int, angle: float) -> tuple[Point, Point, Point]:
    """Return the tip and two base corners of the player marker.

    The triangle points along ``angle`` and is shifted so that its
    centroid sits on (``cx``, ``cy``).
    """
    tip = (int(cx + math.cos(angle) * 20), int(cy + math.sin(angle) * 20))
    left = (
        int(cx + math.cos(angle + math.pi / 2) * 10),
        int(cy + math.sin(angle + math.pi / 2) * 10),
    )
    right = (
        int(cx + math.cos(angle - math.pi / 2) * 10),
        int(cy + math.sin(angle - math.pi / 2) * 10),
    )
    centre_x = _cdiv(tip[0] + left[0] + right[0], 3)
    centre_y = _cdiv(tip[1] + left[1] + right[1], 3)
    dx, dy = cx - centre_x, cy - centre_y
    return (
        (tip[0] + dx, tip[1] + dy),
        (left[0] + dx, left[1] + dy),
        (right[0] + dx, right[1] + dy),
    )


def _edge_x(y: int, start: Point, end: Point) -> int:
    if end[1] == start[1]:
        return start[0]
    return start[0] + _cdiv((end[0] - start[0]) * (y - start[1]), end[1] - start[1])


def _put(canvas: Canvas, x: int, y: int, colour: int) -> None:
    if 0 <= x < canvas.width and 0 <= y < canvas.height:
        canvas.put(x, y, colour)


def _fill_rows(canvas, first, last, edge1, edge2, colour) -> None:
    for y in range(first, last + 1):
        x1 = _edge_x(y, *edge1)
        x2 = _edge_x(y, *edge2)
        for x in range(min(x1, x2), max(x1, x2) + 1):
            _put(canvas, x, y, colour)


def fill_triangle(canvas: Canvas, points, colour: int) -> None:
    """Fill the triangle with corners ``points`` using scanlines."""
    top, middle, bottom = points
    if middle[1] < top[1]:
        top, middle = middle, top
    if bottom[1] < top[1]:
        top, bottom = bottom, top
    if bottom[1] < middle[1]:
        middle, bottom = bottom, middle
    if middle[1] != top[1]:
        _fill_rows(canvas, top[1], middle[1], (top, middle), (top, bottom), colour)
    if bottom[1] != middle[1]:
        _fill_rows(canvas, middle[1], bottom[1], (middle, bottom), (top, bottom), colour)


def draw_border(canvas: Canvas) -> None:
    """Draw the white frame around the minimap."""
    start, end = BORDER_START, BORDER_START + BORDER_SIZE
    inner_first = start + BORDER_THICKNESS
    inner_last = end - BORDER_THICKNESS
    for y in range(start, end):
        if inner_first < y < inner_last:
            columns = list(range(start, inner_first + 1)) + list(range(inner_last, end))
        else:
            columns = range(start, end)
        for x in columns:
            _put(canvas, x, y, WHITE)


def _tile_colour(level: Level, x: int, y: int, floor_colour: int) -> int:
    col, row = _cdiv(x, CELL), _cdiv(y, CELL)
    if not (0 <= col < level.width and 0 <= row < level.height):
        return BLACK
    if col >= len(level.grid[row]):
        return floor_colour
    char = level.grid[row][col]
    if char == "1":
        return WALL_COLOUR
    if char == " ":
        return BLACK
    if char == "D":
        return DOOR_COLOUR
    return floor_colour


def draw_minimap(canvas: Canvas, level: Level, floor_colour: int) -> None:
    """Draw the map around the player, the frame and the player marker."""
    centre_y = int(level.player_y * CELL)
    centre_x = int(level.player_x * CELL)
    for draw_y, y in enumerate(range(centre_y - RADIUS, centre_y + RADIUS), ORIGIN):
        for draw_x, x in enumerate(range(centre_x - RADIUS, centre_x + RADIUS), ORIGIN):
            _put(canvas, draw_x, draw_y, _tile_colour(level, x, y, floor_colour))
    draw_border(canvas)
    marker = player_triangle(PLAYER_CENTRE, PLAYER_CENTRE, level.angle)
    fill_triangle(canvas, marker, WHITE)