[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "addedit"
version = "0.14.0"
description = "Building blocks for an ed-style line editor: buffer, macros, UI and IO abstractions"
requires-python = ">=3.10"
dependencies = []
keywords = ["ed", "editor", "line-editor", "text", "macros"]
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
    "Topic :: Text Editors",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["addedit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
