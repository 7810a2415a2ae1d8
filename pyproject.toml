[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "prettystrict"
version = "0.1.0"
description = "A strict CSS linter that checks properties, at-rules, values, units, duplicates and declaration order."
requires-python = ">=3.10"
dependencies = []
keywords = ["css", "lint", "linter", "stylesheet", "quality"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Quality Assurance",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
prettystrict = "prettystrict.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["prettystrict"]

[tool.pytest.ini_options]
addopts = "-ra"
