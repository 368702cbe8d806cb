[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "prosally"
version = "0.1.0"
description = "Core chips of a 7800-class console: 6502-style CPU, RIOT timer and input, TIA sound"
requires-python = ">=3.10"
dependencies = []
keywords = ["emulator", "6502", "cpu", "riot", "tia", "sound", "7800"]
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
    "Topic :: System :: Emulators",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["prosally"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
