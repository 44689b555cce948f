[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "zipfspath"
version = "0.1.0"
description = "Zip entry paths, glob-to-regex conversion, timestamp helpers and extra-field formatting"
requires-python = ">=3.10"
keywords = ["zip", "path", "archive", "glob", "dos-time", "extra-field"]
classifiers = [
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Intended Audience :: Developers",
    "Topic :: System :: Archiving :: Compression",
]
dependencies = []

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["zipfspath"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
