"""Reading a scene file and turning its map section into a validated level."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from pathlib import Path

from .elements import Elements, is_map_line, parse_elements
from .errors import (
    CANT_TXTR,
    DOOR_ERR,
    EMPTY,
    FILE_404,
    INVALID,
    NO_MAP,
    NO_PLYR,
    SMOL_MAP,
    USAGE,
    VOID,
    XTRA_PLYR,
    CubError,
)

WALL = "1"
FLOOR = "0"
DOOR = "D"
EMPTY_CELL = " "
PLAYER_CHARS = frozenset("NEWS")

MIN_FILE_LINES = 8
MIN_MAP_HEIGHT = 3

_START_ANGLES = {
    "N": 3 * math.pi / 2,
    "E": 0.0,
    "W": math.pi,
    "S": math.pi / 2,
}

Grid = list[list[str]]


@dataclass
class Level:
    """A validated map with the player's starting state and scene elements."""

    grid: Grid
    player_x: float
    player_y: float
    angle: float
    player: str
    elements: Elements = field(default_factory=Elements)

    @property
    def height(self) -> int:
        return len(self.grid)

    @property
    def width(self) -> int:
        return max((len(row) for row in self.grid), default=0)

    def cell(self, x: int, y: int) -> str:
        """Return the map character at column ``x`` and row ``y``."""
        if x < 0 or y < 0:
            raise IndexError(f"cell ({x}, {y}) is outside the map")
        return self.grid[y][x]


def read_cub_file(path: str | Path) -> list[str]:
    """Read a ``.cub`` file and return its lines without newlines."""
    path = str(path)
    if not path.endswith(".cub"):
        raise CubError(USAGE)
    try:
        with open(path, encoding="utf-8", errors="replace", newline="") as handle:
            content = handle.read()
    except OSError as exc:
        raise CubError(FILE_404) from exc
    if not content:
        raise CubError(EMPTY)
    lines = content.split("\n")
    if lines[-1] == "":
        lines.pop()
    if len(lines) < MIN_FILE_LINES:
        raise CubError(INVALID)
    return lines


def build_grid(lines: list[str], start: int) -> Grid:
    """Collect the map rows from ``start`` onward, padded to a common width."""
    rows = [line for line in lines[start:] if is_map_line(line, True)]
    if not rows:
        raise CubError(NO_MAP)
    if len(rows) < MIN_MAP_HEIGHT:
        raise CubError(SMOL_MAP)
    width = max(len(row) for row in rows)
    return [list(row.ljust(width, EMPTY_CELL)) for row in rows]


def start_angle(grid: Grid) -> float:
    """Facing angle given by the last player character in the grid, else 0."""
    angle = 0.0
    for row in grid:
        for char in row:
            if char in PLAYER_CHARS:
                angle = _START_ANGLES[char]
    return angle


def _take_player(grid: Grid) -> tuple[float, float, str]:
    found: tuple[float, float, str] | None = None
    for y, row in enumerate(grid):
        for x, char in enumerate(row):
            if char not in PLAYER_CHARS:
                continue
            if found is not None:
                raise CubError(XTRA_PLYR)
            found = (x + 0.5, y + 0.5, char)
            row[x] = FLOOR
    if found is None:
        raise CubError(NO_PLYR)
    return found


def _neighbours(grid: Grid, x: int, y: int):
    height = len(grid)
    width = len(grid[y])
    if x > 0:
        yield grid[y][x - 1]
    if x < width - 1:
        yield grid[y][x + 1]
    if y > 0:
        yield grid[y - 1][x]
    if y < height - 1:
        yield grid[y + 1][x]


def _check_void(grid: Grid, player: str) -> None:
    for y, row in enumerate(grid):
        for x, char in enumerate(row):
            if char == EMPTY_CELL:
                invalid = FLOOR
            elif char == player or char == DOOR:
                invalid = EMPTY_CELL
            else:
                continue
            if invalid in _neighbours(grid, x, y):
                raise CubError(VOID)


def _at(grid: Grid, x: int, y: int) -> str | None:
    if 0 <= y < len(grid) and 0 <= x < len(grid[y]):
        return grid[y][x]
    return None


def _check_doors(grid: Grid) -> None:
    for y, row in enumerate(grid):
        for x, char in enumerate(row):
            if char != DOOR:
                continue
            up, down = _at(grid, x, y - 1), _at(grid, x, y + 1)
            left, right = _at(grid, x - 1, y), _at(grid, x + 1, y)
            vertical = up == down == WALL and left == right == FLOOR
            horizontal = left == right == WALL and up == down == FLOOR
            if not (vertical or horizontal):
                raise CubError(DOOR_ERR)


def validate_grid(grid: Grid) -> tuple[float, float, str]:
    """Check the grid and take the player out of it.

    The player's cell becomes floor. Returns the player's centre
    coordinates and the character that marked it.
    """
    player_x, player_y, player = _take_player(grid)
    _check_void(grid, player)
    _check_doors(grid)
    return player_x, player_y, player


def parse_level(lines: list[str]) -> Level:
    """Build a level from the lines of a scene file."""
    elements, index = parse_elements(lines)
    if not elements.complete():
        raise CubError(CANT_TXTR)
    grid = build_grid(lines, index)
    angle = start_angle(grid)
    player_x, player_y, player = validate_grid(grid)
    return Level(
        grid=grid,
        player_x=player_x,
        player_y=player_y,
        angle=angle,
        player=player,
        elements=elements,
    )


def load_level(path: str | Path) -> Level:
    """Read and validate the scene file at ``path``."""
    return parse_level(read_cub_file(path))