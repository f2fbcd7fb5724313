"""Keyboard and mouse state, player movement, rotation and doors."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import IntEnum

from .canvas import WINDOW_W
from .mapfile import Level
from .raycast import DR, TWO_PI, limit_angle

SPEED = 0.07
ROT_SPEED = 0.06
MOUSE_EDGE = WINDOW_W // 5

OPEN_PROMPT = "OPEN DOORRRR [E]"
CLOSE_PROMPT = "CLOSE DOORRRR [E]"

_WALKABLE = frozenset("0O")
_CLOSED_DOOR = "D"
_OPEN_DOOR = "O"


class KeyCode(IntEnum):
    """Key codes delivered by the window system."""

    A = 0
    S = 1
    D = 2
    W = 13
    E = 14
    ESC = 53
    LEFT = 123
    RIGHT = 124
    DOWN = 125
    UP = 126


_HELD_KEYS = {
    KeyCode.W: "w",
    KeyCode.A: "a",
    KeyCode.S: "s",
    KeyCode.D: "d",
    KeyCode.LEFT: "left",
    KeyCode.RIGHT: "right",
}


@dataclass
class Keys:
    """Which movement and turning keys are held down.

    ESC and E are actions rather than held keys; the caller handles them.
    """

    w: bool = False
    a: bool = False
    s: bool = False
    d: bool = False
    left: bool = False
    right: bool = False

    def _set(self, code: int, value: bool) -> None:
        try:
            name = _HELD_KEYS[KeyCode(code)]
        except (ValueError, KeyError):
            return
        setattr(self, name, value)

    def press(self, code: int) -> None:
        """Mark the key with ``code`` as held."""
        self._set(code, True)

    def release(self, code: int) -> None:
        """Mark the key with ``code`` as released."""
        self._set(code, False)

    def mouse(self, x: int) -> None:
        """Turn while the pointer rests near the left or right screen edge."""
        if self.right and self.left:
            return
        if x < MOUSE_EDGE:
            self.left = True
        elif x > 4 * MOUSE_EDGE:
            self.right = True
        else:
            self.left = False
            self.right = False


def _cell(level: Level, x: int, y: int) -> str | None:
    if 0 <= y < len(level.grid) and 0 <= x < len(level.grid[y]):
        return level.grid[y][x]
    return None


def move_player(level: Level, keys: Keys) -> None:
    """Step the player for the held keys, sliding along blocked axes."""
    x, y = level.player_x, level.player_y
    speed = -SPEED if keys.s else SPEED
    for held, offset in (
        (keys.w, 0.0),
        (keys.a, -math.pi / 2),
        (keys.s, 0.0),
        (keys.d, math.pi / 2),
    ):
        if held:
            x += speed * math.cos(level.angle + offset)
            y += speed * math.sin(level.angle + offset)
    if _cell(level, int(x), int(level.player_y)) in _WALKABLE:
        level.player_x = x
    if _cell(level, int(level.player_x), int(y)) in _WALKABLE:
        level.player_y = y


def rotate_player(level: Level, keys: Keys) -> None:
    """Turn the player for the held arrow keys, keeping the angle in 0..2π."""
    if keys.right:
        level.angle += ROT_SPEED
    if keys.left:
        level.angle -= ROT_SPEED
    if level.angle < 0:
        level.angle += TWO_PI
    if level.angle >= TWO_PI:
        level.angle -= TWO_PI


def update(level: Level, keys: Keys) -> None:
    """Apply one frame of movement and rotation."""
    move_player(level, keys)
    rotate_player(level, keys)


_DOOR_CHECKS = (
    (45 * DR, (0, 1)),
    (135 * DR, (-1, 0)),
    (255 * DR, (0, -1)),
    (315 * DR, (1, 0)),
    (0.0, (1, 0)),
)


def _door_in_sector(level: Level, start: float, delta: tuple[int, int], target: str) -> bool:
    x = int(level.player_x) + delta[0]
    y = int(level.player_y) + delta[1]
    angle = limit_angle(level.angle, 0)
    divisor = 2 if start in (315 * DR, 0.0) else 1
    return start <= angle < start + math.pi / divisor and _cell(level, x, y) == target


def toggle_door(level: Level) -> bool:
    """Open or close the door the player faces; return whether one changed."""
    for target, replacement in ((_CLOSED_DOOR, _OPEN_DOOR), (_OPEN_DOOR, _CLOSED_DOOR)):
        for start, delta in _DOOR_CHECKS:
            if _door_in_sector(level, start, delta, target):
                x = int(level.player_x) + delta[0]
                y = int(level.player_y) + delta[1]
                level.grid[y][x] = replacement
                return True
    return False


def _facing_delta(angle: float) -> tuple[int, int] | None:
    if 45 * DR <= angle < 135 * DR:
        return 0, 1
    if 135 * DR <= angle < 225 * DR:
        return -1, 0
    if 225 * DR <= angle < 315 * DR:
        return 0, -1
    if 315 * DR <= angle < 360 * DR or 0 <= angle < 45 * DR:
        return 1, 0
    return None


def door_prompt(level: Level) -> str | None:
    """Text inviting the player to open or close the door ahead, if any."""
    delta = _facing_delta(level.angle)
    if delta is None:
        return None
    ahead = _cell(level, int(level.player_x) + delta[0], int(level.player_y) + delta[1])
    if ahead == _CLOSED_DOOR:
        return OPEN_PROMPT
    if ahead == _OPEN_DOOR:
        return CLOSE_PROMPT
    return None