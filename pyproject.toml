[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pipetally"
version = "0.1.0"
description = "Count pipe ends in photographs with circle detection and manual tally corrections"
requires-python = ">=3.10"
dependencies = [
    "numpy",
    "scipy",
    "pillow",
]
keywords = [
    "hough",
    "circle detection",
    "counting",
    "pipes",
    "image recognition",
    "canny",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: Manufacturing",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Image Recognition",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
pipetally = "pipetally.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["pipetally"]

[tool.hatch.build.targets.sdist]
include = [
    "pipetally",
    "tests",
    "README.md",
]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
