"""Grid ray casting and the drawing of textured wall columns."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Mapping

from .canvas import SHADE_FAR, SHADE_NEAR, WINDOW_W, Canvas, change_shade, shade_floor
from .mapfile import Level

TILE = 64
DR = 0.0174533
TWO_PI = 2 * math.pi

_WALL = "1"
_DOOR = "D"


class Face(Enum):
    """The texture a ray hit."""

    NORTH = "north"
    EAST = "east"
    WEST = "west"
    SOUTH = "south"
    DOOR = "door"


@dataclass
class Camera:
    """Field of view and the number of screen columns to cast."""

    fov: float = 60.0 * DR
    columns: int = WINDOW_W

    @property
    def offset(self) -> float:
        """Angle between neighbouring rays."""
        return self.fov / self.columns

    @property
    def wall_factor(self) -> float:
        """Projection factor turning distance into on-screen wall height."""
        return (self.columns / 2) / math.tan(self.fov / 2)


@dataclass
class Ray:
    """The nearest wall hit along one angle."""

    angle: float
    distance: float
    intercept: float
    face: Face
    fisheye: float = 0.0
    wall_height: float = 0.0


def limit_angle(angle: float, offset: float) -> float:
    """Add ``offset`` and bring the result back into the 0..2π range."""
    angle += offset
    if angle < 0:
        angle += TWO_PI
    elif angle > TWO_PI:
        angle -= TWO_PI
    return angle


def _facing_down(angle: float) -> bool:
    return 0 < angle < math.pi


def _facing_left(angle: float) -> bool:
    return math.pi / 2 < angle < 3 * math.pi / 2


def _probe(level: Level, x: float, y: float) -> tuple[bool, bool]:
    """Return (ray may continue, stopped on a closed door) for a point."""
    if not (math.isfinite(x) and math.isfinite(y)) or x < 0 or y < 0:
        return False, False
    map_x = math.floor(x / TILE)
    map_y = math.floor(y / TILE)
    if map_y >= level.height or map_x >= level.width:
        return False, False
    row = level.grid[map_y]
    if map_x < len(row):
        if row[map_x] == _WALL:
            return False, False
        if row[map_x] == _DOOR:
            return False, True
    return True, False


def _march(level, x, y, x_step, y_step, probe_x, probe_y):
    while True:
        going, door = _probe(level, x + probe_x, y + probe_y)
        if not going:
            return x, y, door
        x += x_step
        y += y_step


def _length(dx: float, dy: float) -> float:
    distance = math.hypot(dx, dy)
    return float(int(distance)) if math.isfinite(distance) else math.inf


def horizontal_hit(level: Level, angle: float) -> tuple[float, float, float, bool]:
    """Follow the ray across horizontal grid lines.

    Returns the whole-pixel distance, the hit point and whether the ray
    stopped on a closed door. A ray parallel to the lines never hits.
    """
    px, py = level.player_x * TILE, level.player_y * TILE
    tangent = math.tan(angle)
    y = math.floor(py / TILE) * TILE
    y_step = float(TILE)
    if _facing_down(angle):
        y += TILE
        probe = 1
    else:
        y_step = -y_step
        probe = -1
    if tangent == 0:
        return math.inf, math.inf, y, False
    x_step = TILE / tangent
    x = px + (y - py) / tangent
    if _facing_left(angle) == (x_step > 0):
        x_step = -x_step
    x, y, door = _march(level, x, y, x_step, y_step, 0, probe)
    return _length(x - px, y - py), x, y, door


def vertical_hit(level: Level, angle: float) -> tuple[float, float, float, bool]:
    """Follow the ray across vertical grid lines.

    Returns the whole-pixel distance, the hit point and whether the ray
    stopped on a closed door.
    """
    px, py = level.player_x * TILE, level.player_y * TILE
    tangent = math.tan(angle)
    x = math.floor(px / TILE) * TILE
    x_step = float(TILE)
    if not _facing_left(angle):
        x += TILE
        probe = 1
    else:
        x_step = -x_step
        probe = -1
    y_step = TILE * tangent
    y = py + (x - px) * tangent
    if _facing_down(angle) == (y_step < 0):
        y_step = -y_step
    x, y, door = _march(level, x, y, x_step, y_step, probe, 0)
    return _length(x - px, y - py), x, y, door


def _select_face(angle: float, door: bool, vertical: bool) -> Face:
    if door:
        return Face.DOOR
    if vertical:
        return Face.WEST if math.pi / 2 < angle <= 3 * math.pi / 2 else Face.EAST
    return Face.SOUTH if 0 < angle <= math.pi else Face.NORTH


def cast_ray(level: Level, angle: float) -> Ray:
    """Cast one ray from the player and keep the nearer grid hit."""
    fisheye = limit_angle(level.angle - angle, 0)
    v_dist, _, v_y, v_door = vertical_hit(level, angle)
    h_dist, h_x, _, h_door = horizontal_hit(level, angle)
    if v_dist < h_dist:
        distance, intercept = v_dist * math.cos(fisheye), v_y
        face = _select_face(angle, v_door, True)
    else:
        distance, intercept = h_dist * math.cos(fisheye), h_x
        face = _select_face(angle, h_door, False)
    return Ray(angle=angle, distance=distance, intercept=intercept, face=face, fisheye=fisheye)


def cast_rays(level: Level, camera: Camera) -> list[Ray]:
    """Cast one ray per screen column, left to right across the view."""
    rays = []
    angle = limit_angle(level.angle - camera.fov / 2, 0)
    factor = camera.wall_factor
    for _ in range(camera.columns):
        ray = cast_ray(level, angle)
        ray.wall_height = TILE / ray.distance * factor if ray.distance > 0 else math.inf
        rays.append(ray)
        angle = limit_angle(angle, camera.offset)
    return rays


def _texture_column(ray: Ray, texture: Canvas) -> int:
    column = int(ray.intercept * (texture.width // TILE))
    if column >= texture.width:
        column %= texture.width
    return column


def _put_wall(canvas, x, y, texture, tex_x, tex_y, ray, avg):
    colour = change_shade(texture.get(tex_x, tex_y), ray.distance, avg)
    canvas.put(x, y, colour)


def draw_column(
    canvas: Canvas,
    x: int,
    ray: Ray,
    textures: Mapping[Face, Canvas],
    ceiling: int,
    floor: int,
) -> None:
    """Draw the ceiling, textured wall slice and floor for one column."""
    texture = textures[ray.face]
    tex_x = _texture_column(ray, texture)
    avg = 1.0 - (ray.distance - SHADE_NEAR) / (SHADE_FAR - SHADE_NEAR)
    screen_h = canvas.height
    wall_h = ray.wall_height
    if wall_h < screen_h:
        half = (screen_h - wall_h) / 2
        top = int(half)
        for y in range(top):
            canvas.put(x, y, ceiling)
        factor = texture.height / wall_h
        y = top
        while 0 <= y < screen_h - half:
            _put_wall(canvas, x, y, texture, tex_x, int((y - half) * factor), ray, avg)
            y += 1
        for y in range(max(y, 0), screen_h):
            canvas.put(x, y, shade_floor(floor, y))
    elif wall_h > screen_h:
        factor = texture.height / wall_h
        start = (int(wall_h) - screen_h) // 2 if math.isfinite(wall_h) else 0
        end = wall_h - start
        y = 0
        while start < end and y < screen_h:
            _put_wall(canvas, x, y, texture, tex_x, int(start * factor), ray, avg)
            start += 1
            y += 1