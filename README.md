# cub3d

A raycasting maze explorer in the style of early first-person games. It reads a
level from a `.cub` file, checks that the level is sound, and opens a
1920×1080 window where you walk between textured walls, open and close doors,
and watch a minimap in the corner.

## Installing

```
pip install .
```

Running the tests needs the `test` extra:

```
pip install .[test]
pytest
```

## Running

```
cub3d path/to/level.cub
```

The argument must name a file that ends in `.cub`. Any problem with the level
or its images prints `--     Error.     --` on standard output, the reason on
standard error, and the command exits with status 1.

The game also loads a few images by paths relative to the directory it is
started from, so run it where these exist:

- `textures/xpm/wall.xpm` – the door texture
- `textures/xpm/green.xpm`, `pink.xpm`, `blue.xpm`, `yellow.xpm` – the
  animated sprite in the lower right of the screen

## Controls

| Key            | Action                          |
|----------------|---------------------------------|
| W / S          | walk forward / backward         |
| A / D          | step left / right               |
| ← / →          | turn                            |
| mouse at edge  | turn towards that side          |
| E              | open or close the door ahead    |
| Esc            | quit                            |

Closing the window also quits. When a door is straight ahead, the screen shows
`OPEN DOORRRR [E]` or `CLOSE DOORRRR [E]`.

## The `.cub` format

A level file has at least eight lines. It starts with six elements, in any
order and separated by any number of blank lines:

```
NO ./textures/north.xpm
SO ./textures/south.xpm
WE ./textures/west.xpm
EA ./textures/east.xpm
F 220,100,0
C 225,30,0
```

- `NO`, `SO`, `WE`, `EA` each name an existing `.xpm` file for that wall face.
- `F` and `C` give the floor and ceiling colour as three numbers from 0 to 255
  separated by commas. Either may instead name an existing `.xpm` file; the
  image is then loaded, but that surface is drawn black.

The map follows the elements, using these characters:

- `1` wall, `0` floor, space for nothing
- `N`, `S`, `E`, `W` the single player start and the direction it faces
- `D` a door, which must sit between exactly two walls with floor on the
  other two sides

The map must have at least three rows, shorter rows are padded with spaces,
and floor, the player and doors must never touch empty space.

## Using it as a library

The parts of the game can be used on their own:

```python
from cub3d.mapfile import load_level
from cub3d.raycast import Camera, cast_rays

level = load_level("maps/simple.cub")
rays = cast_rays(level, Camera())
print(rays[0].distance, rays[0].face)
```

- `cub3d.mapfile` – `read_cub_file`, `parse_level`, `load_level` and the
  `Level` they return (grid, player position, facing angle, elements).
- `cub3d.elements` – `parse_elements` and the `Elements` found at the top of
  a level file.
- `cub3d.colours` – `parse_colour` and `create_rgb`.
- `cub3d.raycast` – `Camera`, `cast_ray`, `cast_rays`, `draw_column` and the
  `Face` a ray hit.
- `cub3d.canvas` – the `Canvas` pixel buffer, `change_shade` and
  `shade_floor`.
- `cub3d.player` – `Keys`, `move_player`, `rotate_player`, `toggle_door` and
  `door_prompt`.
- `cub3d.minimap` – `draw_minimap` and its triangle helpers.
- `cub3d.app` – `load_xpm`, the `Game` class and `main`.

`cub3d.errors.CubError` is raised for every problem found while reading a
level or its images; `report_error` prints it the way the command does.