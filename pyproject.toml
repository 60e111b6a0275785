[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "opengemini"
version = "0.1.0"
description = "Client-side building blocks for openGemini: line protocol encoding, query and measurement statement builders, parameter substitution and response body decoding."
requires-python = ">=3.10"
keywords = ["opengemini", "time-series", "line-protocol", "influxql", "database", "query-builder"]
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
    "Topic :: Database :: Front-Ends",
]
dependencies = [
    "msgpack>=1.0",
    "zstandard>=0.21",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
]

[tool.hatch.build.targets.wheel]
packages = ["opengemini"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
