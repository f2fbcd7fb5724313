"""Raycasting maze explorer that plays levels read from .cub files."""

__version__ = "0.1.0"