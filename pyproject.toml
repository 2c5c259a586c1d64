[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dtsched"
version = "0.1.0"
description = "Timer event scheduling: query handling, client helpers and container types"
requires-python = ">=3.10"
dependencies = []
keywords = ["scheduler", "timer", "events", "priority-queue", "queue", "stack", "map"]
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
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["dtsched"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
