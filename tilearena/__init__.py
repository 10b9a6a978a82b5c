"""Top-down tile-map wave shooter, its grid map editor and the map file format."""

__version__ = "0.1.0"