[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "satshare"
version = "0.1.0"
description = "Clause sharing between parallel SAT solver workers, diversified search parameters and variable-elimination helpers"
requires-python = ">=3.10"
dependencies = []
keywords = ["sat", "cdcl", "clause sharing", "variable elimination", "resolution", "parallel solving"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["satshare"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
