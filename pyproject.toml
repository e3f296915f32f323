[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cgscene"
version = "0.1.0"
description = "A small scene graph with render states, rasterisation algorithms and interactive 2D transforms"
requires-python = ">=3.10"
dependencies = []
keywords = ["graphics", "scene graph", "rasterization", "bresenham", "scanline", "transform"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Multimedia :: Graphics",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["cgscene"]

[tool.pytest.ini_options]
addopts = "-ra"
