[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lrsuite"
version = "0.1.0"
description = "SLR(1) and canonical LR(1) parser table construction with shift-reduce parse traces and parse trees"
requires-python = ">=3.10"
dependencies = []
keywords = ["parser", "lr1", "slr", "grammar", "shift-reduce", "compiler", "first", "follow"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Compilers",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
lrsuite = "lrsuite.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["lrsuite"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
