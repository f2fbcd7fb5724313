import math

import pytest

from cub3d.canvas import Canvas, shade_floor
from cub3d.mapfile import Level
from cub3d.raycast import (
    Camera,
    Face,
    Ray,
    cast_ray,
    cast_rays,
    draw_column,
    horizontal_hit,
    limit_angle,
    vertical_hit,
)

TILE = 64


def make_level(angle=0.0, door=None):
    rows = ["11111", "10001", "10001", "10001", "11111"]
    grid = [list(row) for row in rows]
    if door is not None:
        grid[2][3] = door
    return Level(grid=grid, player_x=2.5, player_y=2.5, angle=angle, player="E")


def test_limit_angle_wraps():
    assert limit_angle(-0.5, 0) == pytest.approx(2 * math.pi - 0.5)
    assert limit_angle(6.0, 1.0) == pytest.approx(7.0 - 2 * math.pi)
    assert limit_angle(1.0, 0.5) == pytest.approx(1.5)


def test_vertical_hit_east_wall():
    distance, x, y, door = vertical_hit(make_level(), 0.0)
    assert distance == (4 - 2.5) * TILE
    assert x == 4 * TILE
    assert y == 2.5 * TILE
    assert door is False


def test_horizontal_hit_south_wall():
    distance, _, y, door = horizontal_hit(make_level(), math.pi / 2)
    assert distance == (4 - 2.5) * TILE
    assert y == 4 * TILE
    assert door is False


def test_horizontal_parallel_never_hits():
    distance, _, _, _ = horizontal_hit(make_level(), 0.0)
    assert distance == float("inf")


def test_cast_ray_east_uses_vertical_face():
    ray = cast_ray(make_level(angle=0.0), 0.0)
    assert ray.face is Face.EAST
    assert ray.distance == pytest.approx((4 - 2.5) * TILE)
    assert ray.intercept == pytest.approx(2.5 * TILE)


def test_cast_ray_south_uses_horizontal_face():
    ray = cast_ray(make_level(angle=math.pi / 2), math.pi / 2)
    assert ray.face is Face.SOUTH
    assert ray.distance == pytest.approx((4 - 2.5) * TILE)


def test_cast_ray_west_and_north():
    assert cast_ray(make_level(angle=math.pi), math.pi).face is Face.WEST
    north = 3 * math.pi / 2
    assert cast_ray(make_level(angle=north), north).face is Face.NORTH


def test_closed_door_stops_ray():
    ray = cast_ray(make_level(door="D"), 0.0)
    assert ray.face is Face.DOOR
    assert ray.distance == pytest.approx((3 - 2.5) * TILE)


def test_open_door_lets_ray_through():
    ray = cast_ray(make_level(door="O"), 0.0)
    assert ray.face is Face.EAST
    assert ray.distance == pytest.approx((4 - 2.5) * TILE)


def test_camera_derived_values():
    camera = Camera(fov=1.0, columns=10)
    assert camera.offset == pytest.approx(0.1)
    assert camera.wall_factor == pytest.approx(5 / math.tan(0.5))


def test_cast_rays_one_per_column():
    level = make_level(angle=math.pi / 4)
    camera = Camera()
    rays = cast_rays(level, camera)
    assert len(rays) == camera.columns
    assert rays[0].angle == pytest.approx(math.pi / 4 - camera.fov / 2)
    for ray in rays:
        assert 0 < ray.distance < 5 * TILE
        assert ray.wall_height == pytest.approx(TILE / ray.distance * camera.wall_factor)


def uniform_texture(colour):
    return Canvas(TILE, TILE, fill=colour)


def test_draw_short_wall_column():
    canvas = Canvas(1, 1080)
    ray = Ray(angle=0.0, distance=40.0, intercept=0.0, face=Face.EAST, wall_height=540.0)
    draw_column(canvas, 0, ray, {Face.EAST: uniform_texture(0x00AA00)}, 0x112233, 0x445566)
    assert canvas.get(0, 0) == 0x112233
    assert canvas.get(0, 269) == 0x112233
    assert canvas.get(0, 270) == 0x00AA00
    assert canvas.get(0, 809) == 0x00AA00
    assert canvas.get(0, 810) == shade_floor(0x445566, 810)
    assert canvas.get(0, 1079) == 0x445566


def test_draw_tall_wall_fills_column_in_texture_order():
    texture = Canvas(TILE, TILE)
    for row in range(TILE):
        for col in range(TILE):
            texture.put(col, row, row)
    canvas = Canvas(1, 1080, fill=0xFFFFFF)
    ray = Ray(angle=0.0, distance=10.0, intercept=0.0, face=Face.NORTH, wall_height=2160.0)
    draw_column(canvas, 0, ray, {Face.NORTH: texture}, 0x112233, 0x445566)
    column = [canvas.get(0, y) for y in range(1080)]
    assert column == sorted(column)
    assert all(0 <= value < TILE for value in column)
    assert column[0] > 0
    assert column[-1] < TILE - 1


def test_draw_exact_height_draws_nothing():
    canvas = Canvas(1, 1080, fill=0xFFFFFF)
    ray = Ray(angle=0.0, distance=40.0, intercept=0.0, face=Face.EAST, wall_height=1080.0)
    draw_column(canvas, 0, ray, {Face.EAST: uniform_texture(0)}, 0x112233, 0x445566)
    assert set(canvas.pixels) == {0xFFFFFF}


def test_texture_column_wraps():
    texture = Canvas(TILE, TILE)
    for row in range(TILE):
        for col in range(TILE):
            texture.put(col, row, col)
    canvas = Canvas(1, 1080)
    ray = Ray(angle=0.0, distance=40.0, intercept=100.0, face=Face.WEST, wall_height=540.0)
    draw_column(canvas, 0, ray, {Face.WEST: texture}, 0, 0)
    assert canvas.get(0, 540) == 100 % TILE


def test_far_wall_column_is_dark():
    canvas = Canvas(1, 1080, fill=0xFFFFFF)
    ray = Ray(angle=0.0, distance=400.0, intercept=0.0, face=Face.EAST, wall_height=100.0)
    draw_column(canvas, 0, ray, {Face.EAST: uniform_texture(0x00AA00)}, 0x112233, 0x445566)
    assert canvas.get(0, 540) == 0
    assert canvas.get(0, 0) == 0x112233