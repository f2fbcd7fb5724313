[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cub3d"
version = "0.1.0"
description = "A small raycasting first-person maze explorer driven by .cub level files"
requires-python = ">=3.10"
keywords = ["raycasting", "game", "maze", "pygame", "cub3d", "xpm"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: End Users/Desktop",
    "Environment :: X11 Applications",
    "Environment :: MacOS X",
    "Environment :: Win32 (MS Windows)",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment :: First Person Shooters",
]
dependencies = [
    "pygame",
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
cub3d = "cub3d.app:main"

[tool.hatch.build.targets.wheel]
packages = ["cub3d"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
