[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "termprofile"
version = "0.1.0"
description = "Terminal emulator profiles: typed properties, colour palettes and a settings store"
requires-python = ">=3.10"
dependencies = []
keywords = ["terminal", "profile", "palette", "settings", "colors"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Terminals :: Terminal Emulators/X Terminals",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["termprofile"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
