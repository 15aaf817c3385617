[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "connect4vp"
version = "0.1.0"
description = "Connect Four played by a negamax CPU model against a win-detection accelerator on a simulated bus"
requires-python = ">=3.10"
dependencies = []
keywords = ["connect-four", "game", "negamax", "virtual-platform", "simulation"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Board Games",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
connect4vp = "connect4vp.vp:main"

[tool.hatch.build.targets.wheel]
packages = ["connect4vp"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
