[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "betterwrapped"
version = "0.1.0"
description = "Summarise your exported Spotify listening history from the command line"
requires-python = ">=3.10"
dependencies = []
keywords = ["spotify", "listening history", "statistics", "music", "cli"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Sound/Audio :: Analysis",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
bsw = "betterwrapped.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["betterwrapped"]

[tool.pytest.ini_options]
addopts = "-ra"
