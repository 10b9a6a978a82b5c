"""Map editor state: placing, marking and deleting tiles on the grid."""

from __future__ import annotations

from collections.abc import Sequence
from enum import IntEnum

from tilearena.geometry import CELL_SIZE, COLUMN_COUNT, ROW_COUNT, Vec2
from tilearena.mapfile import Tile, empty_tiles

AMOUNT_OF_TILE_TEXTURES = 5
AMOUNT_OF_WEAPONS = 2

_MAX_X = ROW_COUNT * CELL_SIZE - CELL_SIZE
_MAX_Y = COLUMN_COUNT * CELL_SIZE - CELL_SIZE


class Mode(IntEnum):
    """What a left click places."""

    PAINT = 0
    SOLID = 1
    PLAYER_SPAWN = 2
    WEAPON_BUY = 3

    @property
    def label(self) -> str:
        """Name shown on screen."""
        return _LABELS[self]


_LABELS = {
    Mode.PAINT: "Paint",
    Mode.SOLID: "Solid",
    Mode.PLAYER_SPAWN: "PlayerSpawn",
    Mode.WEAPON_BUY: "WeaponBuy",
}


def snap_to_grid(value: float) -> int:
    """Return the cell corner for a coordinate, truncating towards zero."""
    whole = int(value)
    cells = abs(whole) // CELL_SIZE
    return cells * CELL_SIZE if whole >= 0 else -cells * CELL_SIZE


def pointer_over_ui(mouse: Vec2, screen_width: float, screen_height: float) -> bool:
    """True when the mouse is over a part of the editor's interface."""
    if mouse.y >= screen_width - 200:
        return True
    if 10 <= mouse.y <= 40 and 10 <= mouse.x <= 80:
        return True
    return (
        screen_width - 250 <= mouse.x <= screen_width
        and screen_height - 800 <= mouse.y <= screen_height - 200
    )


class Editor:
    """The tiles being edited and the user's current choices."""

    def __init__(self, tiles: Sequence[Tile] | None = None) -> None:
        self.tiles: list[Tile] = list(tiles) if tiles is not None else empty_tiles()
        self.texture_id = 0
        self.mode = Mode.PAINT

    def tile_at(self, x: float, y: float) -> int | None:
        """Return the index of the active tile at cell corner (x, y), or None."""
        return next(
            (
                index
                for index, tile in enumerate(self.tiles)
                if tile.active and tile.pos.x == x and tile.pos.y == y
            ),
            None,
        )

    def place(self, world_pos: Vec2, over_ui: bool = False) -> bool:
        """Act on the cell under ``world_pos`` according to the mode.

        Paint and solid modes put a new tile on an empty cell; player-spawn
        and weapon-buy modes mark an existing tile. Returns whether a tile
        changed.
        """
        if over_ui:
            return False
        x, y = snap_to_grid(world_pos.x), snap_to_grid(world_pos.y)
        in_reach = world_pos.y >= 0 and world_pos.x <= _MAX_X and world_pos.y <= _MAX_Y
        if not in_reach:
            return False
        if self.mode in (Mode.PAINT, Mode.SOLID):
            if world_pos.x < 0 or self.tile_at(x, y) is not None:
                return False
            for index, tile in enumerate(self.tiles):
                if not tile.active:
                    self.tiles[index] = Tile(
                        id=self.texture_id,
                        pos=Vec2(float(x), float(y)),
                        active=True,
                        solid=self.mode is Mode.SOLID,
                    )
                    return True
            return False
        index = self.tile_at(x, y)
        if index is None:
            return False
        tile = self.tiles[index]
        if self.mode is Mode.PLAYER_SPAWN:
            if tile.solid:
                return False
            tile.player_spawn = True
            return True
        if tile.solid or tile.player_spawn:
            return False
        tile.weapon_buy = True
        tile.weapon_index = self.texture_id
        return True

    def delete(self, world_pos: Vec2) -> bool:
        """Remove the tile under ``world_pos``; returns whether one was removed."""
        index = self.tile_at(snap_to_grid(world_pos.x), snap_to_grid(world_pos.y))
        if index is None:
            return False
        tile = self.tiles[index]
        tile.pos = Vec2(0.0, 0.0)
        tile.active = False
        return True

    def set_mode(self, mode: Mode | int) -> None:
        """Choose what a left click places."""
        self.mode = Mode(mode)

    def select_texture(self, texture_id: int) -> None:
        """Choose the texture, or weapon in weapon-buy mode, to place."""
        if not 0 <= texture_id < AMOUNT_OF_TILE_TEXTURES:
            raise ValueError(f"unknown texture id {texture_id}")
        self.texture_id = texture_id