[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "demexlight"
version = "0.1.0"
description = "Lighting console core: DMX fixtures, presets, groups, selectors, sequences and console actions"
requires-python = ">=3.10"
dependencies = []
keywords = ["dmx", "lighting", "console", "fixtures", "presets", "cues", "stage"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["demexlight"]

[tool.hatch.build.targets.sdist]
include = ["demexlight", "tests", "README.md", "pyproject.toml"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
