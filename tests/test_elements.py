import pytest

from cub3d import errors
from cub3d.colours import create_rgb
from cub3d.elements import (
    Elements,
    is_empty_line,
    is_map_line,
    parse_elements,
    parse_texture_path,
)
from cub3d.errors import CubError


@pytest.fixture
def textures(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    names = ["north.xpm", "south.xpm", "west.xpm", "east.xpm", "sky.xpm"]
    for name in names:
        (tmp_path / name).write_text("/* XPM */\n")
    return names


def test_is_empty_line():
    assert is_empty_line("")
    assert is_empty_line("   ")
    assert is_empty_line(" \n ")
    assert not is_empty_line("  1 ")


def test_is_map_line_accepts_map_characters():
    assert is_map_line("  1101NEWSD0", False)
    assert is_map_line("", True)


def test_is_map_line_rejects_other_characters():
    assert not is_map_line("NO ./a.xpm", False)
    with pytest.raises(CubError) as info:
        is_map_line("11X1", True)
    assert info.value.message == errors.BAD_LMNT


def test_parse_texture_path_found(textures):
    assert parse_texture_path("NO north.xpm", True) == "north.xpm"
    assert parse_texture_path("   SO    south.xpm  ", False) == "south.xpm"


def test_parse_texture_path_missing_file(textures):
    with pytest.raises(CubError) as info:
        parse_texture_path("NO missing.xpm", True)
    assert info.value.message == errors.TXTR_404
    assert parse_texture_path("NO missing.xpm", False) is None


@pytest.mark.parametrize("line", ["NO north.png", "NO", "NO north.xpm extra"])
def test_parse_texture_path_invalid(textures, line):
    with pytest.raises(CubError) as info:
        parse_texture_path(line, True)
    assert info.value.message == errors.INV_TXTR
    assert parse_texture_path(line, False) is None


def test_elements_complete():
    elements = Elements(north="n", south="s", west="w", east="e", ceiling=0)
    assert not elements.complete()
    elements.floor = 0
    assert elements.complete()


def test_parse_elements_full(textures):
    lines = [
        "NO north.xpm",
        "SO south.xpm",
        "",
        "WE west.xpm",
        "EA east.xpm",
        "F 220,100,0",
        "C 225,30,0",
        "",
        "   ",
        "111",
        "1N1",
        "111",
    ]
    elements, index = parse_elements(lines)
    assert index == 9
    assert elements.north == "north.xpm"
    assert elements.south == "south.xpm"
    assert elements.west == "west.xpm"
    assert elements.east == "east.xpm"
    assert elements.floor == create_rgb((220, 100, 0))
    assert elements.ceiling == create_rgb((225, 30, 0))
    assert elements.ceiling_texture is None
    assert elements.complete()


def test_parse_elements_ceiling_texture(textures):
    lines = [
        "NO north.xpm",
        "SO south.xpm",
        "WE west.xpm",
        "EA east.xpm",
        "C sky.xpm",
        "F 1,2,3",
        "111",
    ]
    elements, index = parse_elements(lines)
    assert index == 6
    assert elements.ceiling_texture == "sky.xpm"
    assert elements.ceiling == 0
    assert elements.floor_texture is None


def test_parse_elements_incomplete_returns_end(textures):
    lines = ["NO north.xpm", "", ""]
    elements, index = parse_elements(lines)
    assert index == len(lines)
    assert not elements.complete()


def test_parse_elements_map_too_early(textures):
    with pytest.raises(CubError) as info:
        parse_elements(["NO north.xpm", "1111"])
    assert info.value.message == errors.CANT_TXTR


def test_parse_elements_unknown_element(textures):
    with pytest.raises(CubError) as info:
        parse_elements(["XX something"])
    assert info.value.message == errors.NOT_TXTR


def test_parse_elements_bad_colour(textures):
    with pytest.raises(CubError) as info:
        parse_elements(["F 300,0,0"])
    assert info.value.message == errors.INV_CF


def test_parse_elements_missing_texture(textures):
    with pytest.raises(CubError) as info:
        parse_elements(["EA nowhere.xpm"])
    assert info.value.message == errors.TXTR_404