[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "polyopt"
version = "0.1.0"
description = "Data dependence tests, transformation legality checks, dependence graphs and a C-rendering loop AST for polyhedral optimization"
requires-python = ">=3.10"
dependencies = []
keywords = ["compiler", "optimization", "polyhedral", "dependence-analysis", "parallelization"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Compilers",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["polyopt"]

[tool.pytest.ini_options]
addopts = "-ra"
