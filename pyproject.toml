[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "chromahl"
version = "0.1.0"
description = "Token streams, colours, styles and HTML and terminal formatters for syntax highlighting"
requires-python = ">=3.10"
dependencies = []
keywords = ["syntax highlighting", "formatter", "html", "css", "terminal", "ansi"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Text Processing :: Filters",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["chromahl"]

[tool.pytest.ini_options]
addopts = "-ra"
