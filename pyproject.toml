[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "vecformula"
version = "0.1.0"
description = "Parse and evaluate vector formulas with assignments, indexed rows, constants and function plugins"
requires-python = ">=3.10"
dependencies = []
keywords = ["formula", "expression", "parser", "vector", "calculator"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
vecformula = "vecformula.formula:main"

[tool.hatch.build.targets.wheel]
packages = ["vecformula"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
