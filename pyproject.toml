[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "timetrack"
version = "1.0.1"
description = "Billable-hours reporting over an SQLite time-tracking schema, with JSON-ready responses and CSV export"
requires-python = ">=3.10"
dependencies = []
keywords = ["time tracking", "billing", "reporting", "csv", "sqlite"]
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
    "Topic :: Office/Business",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["timetrack"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
