"""Reading and writing the plain-text tile map format.

A map is one line of tile records separated by ``;``. Each record reads
``id{{x,y},{active},{solid},{playerSpawn},{weaponBuy}{weaponIndex}}``.
"""

from __future__ import annotations

import itertools
import os
import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from tilearena.geometry import Vec2

MAX_TILES = 10000
"""Number of tile slots the editor keeps and writes out."""

_INT = r"\s*([+-]?\d+)"
_RECORD = re.compile(
    _INT
    + r"\{\{"
    + _INT
    + ","
    + _INT
    + r"\},\{"
    + _INT
    + r"\},\{"
    + _INT
    + r"\},\{"
    + _INT
    + r"\},\{"
    + _INT
    + r"\}\{"
    + _INT
    + r"\}\}"
)


class MapFormatError(ValueError):
    """Raised when map text cannot be read as tile records."""


@dataclass
class Tile:
    """One cell of the map."""

    id: int = -1
    pos: Vec2 = field(default_factory=Vec2)
    active: bool = False
    solid: bool = False
    player_spawn: bool = False
    weapon_buy: bool = False
    weapon_index: int = -1


def empty_tiles(count: int = MAX_TILES) -> list[Tile]:
    """Return ``count`` inactive tiles."""
    if count < 0:
        raise ValueError(f"tile count must not be negative, got {count}")
    return [Tile() for _ in range(count)]


def _format_tile(tile: Tile) -> str:
    return "%d{{%d,%d},{%d},{%d},{%d},{%d}{%d}}" % (
        tile.id,
        int(tile.pos.x),
        int(tile.pos.y),
        int(tile.active),
        int(tile.solid),
        int(tile.player_spawn),
        int(tile.weapon_buy),
        tile.weapon_index,
    )


def format_map(tiles: Iterable[Tile]) -> str:
    """Render tiles as a single map line."""
    return ";".join(_format_tile(tile) for tile in tiles)


def _records(text: str) -> Iterator[tuple[int, ...]]:
    line = text.split("\n", 1)[0]
    tokens = (token for token in line.split(";") if token.strip())
    for number, token in enumerate(tokens):
        match = _RECORD.match(token)
        if match is None:
            raise MapFormatError(f"malformed tile record {number}: {token!r}")
        yield tuple(int(group) for group in match.groups())


def _tile_from_record(record: tuple[int, ...]) -> Tile:
    tile_id, x, y, active, solid, spawn, weapon_buy, weapon_index = record
    return Tile(
        id=tile_id,
        pos=Vec2(float(x), float(y)),
        active=bool(active),
        solid=bool(solid),
        player_spawn=bool(spawn),
        weapon_buy=bool(weapon_buy),
        weapon_index=weapon_index,
    )


def parse_map(text: str, limit: int = MAX_TILES) -> list[Tile]:
    """Parse at most ``limit`` tiles from the first line of ``text``."""
    return [_tile_from_record(r) for r in itertools.islice(_records(text), limit)]


def count_active_tiles(text: str, limit: int = MAX_TILES) -> int:
    """Count records flagged active, stopping once ``limit`` is reached."""
    count = 0
    for record in _records(text):
        if count >= limit:
            break
        if record[3] == 1:
            count += 1
    return count


def _read_first_line(path: str | os.PathLike[str]) -> str:
    with open(path, encoding="utf-8") as handle:
        line = handle.readline()
    if not line:
        raise MapFormatError(f"map file {os.fspath(path)!r} is empty")
    return line


def load_map(path: str | os.PathLike[str], limit: int = MAX_TILES) -> list[Tile]:
    """Read tiles from a map file."""
    return parse_map(_read_first_line(path), limit)


def save_map(path: str | os.PathLike[str], tiles: Iterable[Tile]) -> None:
    """Write tiles to a map file."""
    with open(path, "w", encoding="utf-8") as handle:
        handle.write(format_map(tiles))