[build-system]
requires = ["setuptools>=61.0"]
build-backend = "setuptools.build_meta"

[project]
name = "cronoscore"
version = "0.1.0"
description = "Core of a small 3D game engine: application loop, modules, game objects, components, cameras, octree and timers."
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["game engine", "octree", "camera", "scene graph", "components", "timers"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
cronoscore = "cronoscore.main:main"

[tool.setuptools.packages.find]
include = ["cronoscore*"]

[tool.pytest.ini_options]
addopts = "-ra"
