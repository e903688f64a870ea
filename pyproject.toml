[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "freesteel"
version = "0.1.0"
description = "Geometry for computer aided manufacture: intervals, fibres, weaves, toolpath series, stock circles and surface boxing"
requires-python = ">=3.10"
dependencies = []
keywords = ["cam", "cnc", "toolpath", "machining", "geometry", "weave"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Manufacturing",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["freesteel"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
