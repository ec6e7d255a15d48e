[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "jsonwriter"
version = "0.1.0"
description = "Compact and pretty JSON serialization with shortest round-trip float formatting and strict UTF-8 handling"
requires-python = ">=3.10"
dependencies = []
keywords = ["json", "serializer", "grisu2", "dtoa", "utf-8", "crc32"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Typing :: Typed",
    "Topic :: File Formats :: JSON",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["jsonwriter"]

[tool.hatch.build.targets.sdist]
include = ["jsonwriter", "tests"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
strict = true
