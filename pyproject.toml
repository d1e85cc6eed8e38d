[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "polyseg"
version = "0.1.0"
description = "Polymorphic collections that store elements in per-type segments, with type-aware traversal."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "polymorphism",
    "collection",
    "container",
    "segments",
    "type-erasure",
    "callables",
    "benchmark",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
polyseg-perf = "polyseg.perf:main"

[tool.hatch.build.targets.wheel]
packages = ["polyseg"]

[tool.hatch.build.targets.sdist]
include = ["polyseg", "tests", "pyproject.toml"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
