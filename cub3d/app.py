"""The game window: texture loading, the frame loop and the command entry point."""

from __future__ import annotations

import os
import re
import sys
from array import array
from pathlib import Path
from typing import Sequence

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pygame  # noqa: E402
from PIL import ImageColor  # noqa: E402

from .canvas import WINDOW_H, WINDOW_W, Canvas  # noqa: E402
from .errors import IMG, USAGE, XPM, CubError, report_error  # noqa: E402
from .mapfile import Level, load_level  # noqa: E402
from .minimap import draw_minimap  # noqa: E402
from .player import KeyCode, Keys, door_prompt, toggle_door, update  # noqa: E402
from .raycast import Camera, Face, cast_rays, draw_column  # noqa: E402

DOOR_TEXTURE = "./textures/xpm/wall.xpm"
SPRITE_FILES = (
    "textures/xpm/green.xpm",
    "textures/xpm/pink.xpm",
    "textures/xpm/blue.xpm",
    "textures/xpm/yellow.xpm",
    "textures/xpm/yellow.xpm",
)
SPRITE_POSITION = (1100, 790)
FRAMES_PER_SPRITE = 10
ANIMATION_STEPS = 4
PROMPT_POSITION = (960, 540)
PROMPT_COLOUR = (255, 255, 255)
QUIT_MESSAGE = "Game over! You quit :p"

TRANSPARENT = 0xFF000000

_COMMENT = re.compile(r"/\*.*?\*/", re.DOTALL)
_STRING = re.compile(r'"((?:[^"\\]|\\.)*)"')
_COLOUR_KEYS = frozenset({"c", "m", "g", "g4", "s"})
_COLOUR_PREFERENCE = ("c", "g", "g4", "m")

_PYGAME_KEYS = {
    pygame.K_w: KeyCode.W,
    pygame.K_a: KeyCode.A,
    pygame.K_s: KeyCode.S,
    pygame.K_d: KeyCode.D,
    pygame.K_e: KeyCode.E,
    pygame.K_ESCAPE: KeyCode.ESC,
    pygame.K_LEFT: KeyCode.LEFT,
    pygame.K_RIGHT: KeyCode.RIGHT,
    pygame.K_UP: KeyCode.UP,
    pygame.K_DOWN: KeyCode.DOWN,
}


def _hex_colour(digits: str) -> int:
    if not digits or len(digits) % 3:
        raise CubError(XPM)
    width = len(digits) // 3
    try:
        channels = [int(digits[i : i + width], 16) for i in range(0, len(digits), width)]
    except ValueError as exc:
        raise CubError(XPM) from exc
    if width == 1:
        channels = [channel * 17 for channel in channels]
    elif width > 2:
        channels = [channel >> (4 * (width - 2)) for channel in channels]
    red, green, blue = channels
    return red << 16 | green << 8 | blue


def _colour_value(value: str) -> int:
    if value.lower() == "none":
        return TRANSPARENT
    if value.startswith("#"):
        return _hex_colour(value[1:])
    for candidate in (value, value.replace(" ", "")):
        try:
            red, green, blue = ImageColor.getrgb(candidate)[:3]
        except ValueError:
            continue
        return red << 16 | green << 8 | blue
    raise CubError(XPM)


def _parse_colour_spec(spec: str) -> int:
    values: dict[str, list[str]] = {}
    key = None
    for token in spec.split():
        if token in _COLOUR_KEYS:
            key = token
            values[key] = []
        elif key is None:
            raise CubError(XPM)
        else:
            values[key].append(token)
    for key in _COLOUR_PREFERENCE:
        if values.get(key):
            return _colour_value(" ".join(values[key]))
    raise CubError(XPM)


def load_xpm(path: str | Path) -> Canvas:
    """Read an XPM image into a canvas; "None" pixels become transparent."""
    try:
        text = Path(path).read_text(encoding="latin-1")
    except OSError as exc:
        raise CubError(XPM) from exc
    strings = _STRING.findall(_COMMENT.sub("", text))
    if not strings:
        raise CubError(XPM)
    try:
        width, height, count, cpp = (int(v) for v in strings[0].split()[:4])
    except ValueError as exc:
        raise CubError(XPM) from exc
    if min(width, height, count, cpp) <= 0 or len(strings) < 1 + count + height:
        raise CubError(XPM)
    palette = {
        line[:cpp]: _parse_colour_spec(line[cpp:]) for line in strings[1 : 1 + count]
    }
    pixels: list[int] = []
    for row in strings[1 + count : 1 + count + height]:
        if len(row) < width * cpp:
            raise CubError(XPM)
        try:
            pixels.extend(palette[row[i : i + cpp]] for i in range(0, width * cpp, cpp))
        except KeyError as exc:
            raise CubError(XPM) from exc
    image = Canvas(width, height)
    image.pixels = pixels
    return image


def _load_required(path: str | None) -> Canvas:
    if path is None:
        raise CubError(XPM)
    return load_xpm(path)


def _load_sprites() -> list[Canvas]:
    sprites = []
    for path in SPRITE_FILES:
        try:
            sprites.append(load_xpm(path))
        except CubError as exc:
            raise CubError(IMG) from exc
    return sprites


def _blit(canvas: Canvas, image: Canvas, left: int, top: int) -> None:
    for dy in range(image.height):
        y = top + dy
        if not 0 <= y < canvas.height:
            continue
        row = image.pixels[dy * image.width : (dy + 1) * image.width]
        for dx, colour in enumerate(row):
            x = left + dx
            if 0 <= x < canvas.width and (colour & TRANSPARENT) != TRANSPARENT:
                canvas.put(x, y, colour)


def _rgb_bytes(canvas: Canvas) -> bytes:
    packed = array("I", canvas.pixels)
    if sys.byteorder == "big":
        packed.byteswap()
    raw = packed.tobytes()
    out = bytearray(len(canvas.pixels) * 3)
    out[0::3] = raw[2::4]
    out[1::3] = raw[1::4]
    out[2::3] = raw[0::4]
    return bytes(out)


class Game:
    """A loaded level with its textures, input state and rendered frames."""

    def __init__(self, level: Level) -> None:
        self.level = level
        self.keys = Keys()
        self.camera = Camera()
        self.counter = 0
        self.prompt: str | None = None
        self.canvas: Canvas | None = None
        elements = level.elements
        self.textures: dict[Face, Canvas] = {
            Face.NORTH: _load_required(elements.north),
            Face.EAST: _load_required(elements.east),
            Face.WEST: _load_required(elements.west),
            Face.SOUTH: _load_required(elements.south),
        }
        self.ceiling_texture = (
            load_xpm(elements.ceiling_texture) if elements.ceiling_texture else None
        )
        self.floor_texture = (
            load_xpm(elements.floor_texture) if elements.floor_texture else None
        )
        self.textures[Face.DOOR] = load_xpm(DOOR_TEXTURE)
        self.sprites = _load_sprites()

    def frame(self) -> Canvas:
        """Apply held input for one frame, then render it."""
        update(self.level, self.keys)
        return self.render()

    def render(self) -> Canvas:
        """Draw the view, minimap and animated sprite into a new canvas."""
        self.counter = (self.counter + 1) % (ANIMATION_STEPS * FRAMES_PER_SPRITE)
        canvas = Canvas(WINDOW_W, WINDOW_H)
        elements = self.level.elements
        ceiling = elements.ceiling or 0
        floor = elements.floor or 0
        for x, ray in enumerate(cast_rays(self.level, self.camera)):
            draw_column(canvas, x, ray, self.textures, ceiling, floor)
        draw_minimap(canvas, self.level, floor)
        sprite = self.sprites[self.counter // FRAMES_PER_SPRITE]
        _blit(canvas, sprite, *SPRITE_POSITION)
        self.prompt = door_prompt(self.level)
        self.canvas = canvas
        return canvas

    def _press(self, code: KeyCode) -> bool:
        """Handle a key press; return False when the game should stop."""
        if code == KeyCode.ESC:
            return False
        if code == KeyCode.E:
            toggle_door(self.level)
        else:
            self.keys.press(code)
        return True

    def _handle_events(self) -> bool:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                print(QUIT_MESSAGE)
                return False
            if event.type == pygame.KEYDOWN:
                code = _PYGAME_KEYS.get(event.key)
                if code is not None and not self._press(code):
                    return False
            elif event.type == pygame.KEYUP:
                code = _PYGAME_KEYS.get(event.key)
                if code is not None:
                    self.keys.release(code)
            elif event.type == pygame.MOUSEMOTION:
                self.keys.mouse(event.pos[0])
        return True

    def run(self) -> int:
        """Open the window and play until the player quits; return exit status."""
        pygame.init()
        try:
            screen = pygame.display.set_mode((WINDOW_W, WINDOW_H))
            pygame.display.set_caption("cub3d")
            font = pygame.font.Font(None, 24)
            while self._handle_events():
                canvas = self.frame()
                surface = pygame.image.frombuffer(
                    _rgb_bytes(canvas), (canvas.width, canvas.height), "RGB"
                )
                screen.blit(surface, (0, 0))
                if self.prompt:
                    screen.blit(font.render(self.prompt, True, PROMPT_COLOUR), PROMPT_POSITION)
                pygame.display.flip()
        finally:
            pygame.quit()
        return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Load the scene named on the command line and play it."""
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        if len(args) != 1:
            raise CubError(USAGE)
        game = Game(load_level(args[0]))
    except CubError as error:
        return report_error(error)
    return game.run()


if __name__ == "__main__":
    sys.exit(main())