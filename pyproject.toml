[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "trafficsim"
version = "0.1.0"
description = "Traffic simulation logic: vector geometry, collision rectangles, blocking rules, car and tram speeds, traffic lights and scenario files"
requires-python = ">=3.10"
dependencies = []
keywords = ["traffic", "simulation", "collision", "traffic-lights", "tram", "scenario"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["trafficsim"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
