[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "vermada"
version = "1.0.1"
description = "Building blocks for a tile-based side-scrolling platform game: tile maps, entities, quadtree collisions, particles, menu widgets and stages"
requires-python = ">=3.10"
keywords = ["game", "platformer", "side-scroller", "pygame", "tilemap", "quadtree"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Side-Scrolling/Arcade Games",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["vermada"]

[tool.pytest.ini_options]
addopts = "-ra"
