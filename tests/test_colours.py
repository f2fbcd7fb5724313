import pytest

from cub3d import errors
from cub3d.colours import create_rgb, parse_colour
from cub3d.errors import CubError


@pytest.mark.parametrize("rgb", [(0, 0, 0), (255, 255, 255), (220, 100, 0), (1, 2, 3)])
def test_create_rgb_round_trip(rgb):
    packed = create_rgb(rgb)
    assert ((packed >> 16) & 0xFF, (packed >> 8) & 0xFF, packed & 0xFF) == rgb
    assert packed >> 24 == 0


def test_create_rgb_pure_red():
    assert create_rgb((255, 0, 0)) == 0xFF0000


@pytest.mark.parametrize(
    "line, expected",
    [
        ("F 220,100,0", (220, 100, 0)),
        ("C 225,30,0", (225, 30, 0)),
        ("   C   1 , 2 , 3  ", (1, 2, 3)),
        ("F 007,0,255", (7, 0, 255)),
        ("F 0,0,0", (0, 0, 0)),
    ],
)
def test_parse_colour_valid(line, expected):
    assert parse_colour(line) == expected


@pytest.mark.parametrize(
    "line",
    [
        "F 256,0,0",
        "F 1,2",
        "F 1,2,3,",
        "F ,1,2,3",
        "F 1,,2,3",
        "F a,b,c",
        "F 1000,0,0",
        "F 0255,0,0",
        "F 1,2,3 4",
        "F 1 2,3",
        "F ",
        "F -1,2,3",
        "F 1,2,3\t",
    ],
)
def test_parse_colour_invalid(line):
    with pytest.raises(CubError) as info:
        parse_colour(line)
    assert info.value.message == errors.INV_CF


def test_parse_colour_then_pack():
    packed = create_rgb(parse_colour("C 10,20,30"))
    assert packed & 0xFF == 30
    assert (packed >> 8) & 0xFF == 20
    assert (packed >> 16) & 0xFF == 10