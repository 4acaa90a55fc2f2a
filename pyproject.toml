[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gymweights"
version = "0.1.0"
description = "Track gym exercises, the weights lifted and their history in a JSON file"
requires-python = ">=3.10"
dependencies = []
keywords = ["gym", "fitness", "workout", "exercise", "tracker", "json"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["gymweights"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
