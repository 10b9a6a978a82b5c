[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tilearena"
version = "0.1.0"
description = "Top-down tile-map wave shooter with a grid map editor"
requires-python = ">=3.10"
keywords = ["game", "shooter", "tile map", "map editor", "pygame", "waves"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: X11 Applications",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Arcade",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
tilearena-game = "tilearena.game_app:main"
tilearena-editor = "tilearena.editor_app:main"

[tool.hatch.build.targets.wheel]
packages = ["tilearena"]

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
ignore_missing_imports = true
