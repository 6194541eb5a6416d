[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "difiko"
version = "0.1.5"
description = "Core of a keyboard-driven reviewer for local git branches: git access, diff and blame parsing, fuzzy pickers, key bindings and review state"
requires-python = ">=3.10"
dependencies = [
    "platformdirs",
]
keywords = ["git", "diff", "review", "blame", "fuzzy", "keybindings"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Operating System :: MacOS",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Version Control :: Git",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["difiko"]

[tool.hatch.build.targets.sdist]
include = ["difiko", "tests"]

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
