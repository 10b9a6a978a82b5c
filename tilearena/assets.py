"""Texture file locations for the game and the map editor, loaded on demand."""

from __future__ import annotations

import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pygame

GAME_TEXTURE_FILES: Mapping[str, str] = {
    "player": "player/player.png",
    "basic_enemy": "enemy/basic_enemy.png",
    "pistol": "weapons/pistol.png",
    "ar": "weapons/ar.png",
    "tile1": "tiles/tile1.png",
    "tile2": "tiles/tile2.png",
    "tile3": "tiles/tile3.png",
    "tile4": "tiles/tile4.png",
}
"""Texture names used by the game and their files below the asset directory."""

EDITOR_TEXTURE_FILES: Mapping[str, str] = {
    name: f"tiles/{name}.png"
    for name in ("tile1", "tile2", "tile3", "tile4", "player", "pistol", "ar")
}
"""Texture names used by the map editor and their files below the asset directory."""

GAME_TILE_TEXTURES = ("tile1", "tile2", "tile3", "tile4")
"""Tile textures in tile-id order."""

EDITOR_TILE_TEXTURES = GAME_TILE_TEXTURES + ("player",)
"""Editor palette textures in tile-id order; the last marks a player spawn."""

WEAPON_TEXTURES = ("pistol", "ar")
"""Weapon textures in weapon-id order."""


def _load_image(path: Path) -> Any:
    return pygame.image.load(os.fspath(path))


@dataclass
class TextureSet:
    """Named texture files, each loaded the first time it is asked for."""

    paths: Mapping[str, Path]
    loader: Callable[[Path], Any] = _load_image
    _cache: dict[str, Any] = field(default_factory=dict, init=False, repr=False)

    def get(self, name: str) -> Any:
        """Return the loaded texture called ``name``."""
        if name not in self._cache:
            try:
                path = self.paths[name]
            except KeyError:
                raise KeyError(f"unknown texture {name!r}") from None
            self._cache[name] = self.loader(path)
        return self._cache[name]


def _texture_set(base_dir: str | os.PathLike[str], files: Mapping[str, str]) -> TextureSet:
    base = Path(base_dir)
    return TextureSet({name: base / relative for name, relative in files.items()})


def load_game_textures(base_dir: str | os.PathLike[str]) -> TextureSet:
    """Return the game's textures found under ``base_dir``."""
    return _texture_set(base_dir, GAME_TEXTURE_FILES)


def load_editor_textures(base_dir: str | os.PathLike[str]) -> TextureSet:
    """Return the map editor's textures found under ``base_dir``."""
    return _texture_set(base_dir, EDITOR_TEXTURE_FILES)