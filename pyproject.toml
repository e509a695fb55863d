[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fpfmt"
version = "0.1.0"
description = "Exact IEEE-754 binary32/binary64 inspection, power-of-ten caches and fixed-precision decimal formatting"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "ieee754",
    "floating-point",
    "formatting",
    "decimal",
    "power-of-ten cache",
]
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
    "Topic :: Software Development :: Libraries",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = [
    "pytest",
    "hypothesis",
]

[project.scripts]
fpfmt-error-table = "fpfmt.compressed_cache:main"

[tool.hatch.build.targets.wheel]
packages = ["fpfmt"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
