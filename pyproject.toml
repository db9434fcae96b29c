[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pdfsyntax"
version = "0.1.0"
description = "Low-level PDF syntax: lexer, string decoding, primitives, cross-reference tables and path operators"
requires-python = ">=3.10"
dependencies = []
keywords = ["pdf", "lexer", "xref", "primitives", "content stream"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Text Processing :: Filters",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["pdfsyntax"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
