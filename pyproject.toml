[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "softieee"
version = "0.1.0"
description = "Bit-exact software IEEE-754 floating-point arithmetic and conversions on integer bit patterns"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "ieee-754",
    "floating-point",
    "soft-float",
    "binary16",
    "binary32",
    "binary64",
    "binary128",
]
classifiers = [
    "Development Status :: 4 - Beta",
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
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["softieee"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
strict = true
