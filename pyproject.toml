[build-system]
requires = ["hatchling>=1.18"]
build-backend = "hatchling.build"

[project]
name = "seitekit"
version = "0.4.4"
description = "Static site tooling: releases page assembly, contact form configuration, agent stream rendering and self-update helpers"
requires-python = ">=3.10"
dependencies = []
keywords = ["static-site-generator", "ssg", "markdown", "changelog", "self-update", "checksum", "llm"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Operating System :: MacOS",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: Site Management",
    "Topic :: Text Processing :: Markup :: Markdown",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
seitekit = "seitekit.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["seitekit"]

[tool.pytest.ini_options]
addopts = "-ra"
