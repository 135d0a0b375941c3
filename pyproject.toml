[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "nv1robot"
version = "0.1.0"
description = "Control logic, wire messages and on-board menu for a four-wheel omni-drive soccer robot"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "robotics",
    "omni-wheel",
    "robocup",
    "cobs",
    "pid",
    "motor-control",
    "oled-menu",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Human Machine Interfaces",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["nv1robot"]

[tool.hatch.build.targets.sdist]
include = ["nv1robot", "tests", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
