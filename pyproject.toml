[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bookrender"
version = "0.1.0"
description = "Helpers for rendering Markdown books: Markdown to HTML, table of contents, chapter navigation, line includes and external backends"
requires-python = ">=3.11"
keywords = ["markdown", "book", "html", "renderer", "documentation"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Text Processing :: Markup :: Markdown",
    "Topic :: Documentation",
]
dependencies = [
    "markdown-it-py",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["bookrender"]

[tool.pytest.ini_options]
addopts = "-ra"
