"""Error type and the messages shown when a scene cannot be loaded."""

from __future__ import annotations

import sys
from typing import TextIO

ERROR_BANNER = "--     Error.     --\n"

MALLOC = "ur such a failure, computer! ;p L\n"
USAGE = "Usage: ./cub3d [map_path].cub\n"
FILE_404 = "File not found.\n"
TXTR_404 = "Texture not found.\n"
EMPTY = "Empty file.\n"
INVALID = "Invalid map file.\n"
INV_TXTR = "Invalid texture path.\n"
XPM = "Invalid .xpm file.\n"
NOT_TXTR = "Non-texture found in file.\n"
CANT_TXTR = "Couldn't get all textures.\n"
DOOR_ERR = "Door needs to be between exactly 2 walls.\n"
INV_CF = "Invalid assignment of ceiling/floor.\n"
SMOL_MAP = "Map too small.\n"
NO_MAP = "Map doesn't exist.\n"
BAD_LMNT = "Bad element in map.\n"
XTRA_PLYR = "Broddie, you can only have one player.\n"
NO_PLYR = "Soo.... u dont wanna play??????????????\n"
VOID = "You cant go into the void bruv\n"
IMG = "Image could not load.\n"


class CubError(Exception):
    """Raised when a scene file, texture or image is rejected."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


def report_error(
    error: CubError,
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> int:
    """Print the error banner and message; return the exit status to use."""
    out = sys.stdout if out is None else out
    err = sys.stderr if err is None else err
    out.write(ERROR_BANNER)
    out.flush()
    err.write(error.message)
    err.flush()
    return 1