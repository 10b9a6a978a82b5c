"""The game world: everything that changes from one frame to the next."""

from __future__ import annotations

import random
from collections.abc import Sequence
from dataclasses import dataclass, field

from tilearena.camera import Camera2D
from tilearena.enemies import EnemyPool
from tilearena.geometry import CELL_SIZE, Rect, Vec2
from tilearena.mapfile import Tile
from tilearena.player import Player, aim_ray, create_player
from tilearena.projectiles import ProjectilePool
from tilearena.rounds import RoundManager
from tilearena.weapon_buy import Offer, WeaponBuy
from tilearena.weapons import Holster, Weapon, weapon_catalog

MAX_WEAPON_BUYS = 20


@dataclass
class DebugFlags:
    """Debug view switches."""

    debug_mode: bool = False
    player_hitbox: bool = False
    enemy_hitbox: bool = False
    solid_tile_hitbox: bool = False
    weapon_buy_hitbox: bool = False


@dataclass
class FrameInput:
    """Player input for one frame."""

    left: bool = False
    right: bool = False
    up: bool = False
    down: bool = False
    shoot: bool = False
    aim: bool = False
    reload: bool = False
    buy: bool = False
    toggle_debug: bool = False
    slot: int | None = None
    mouse: Vec2 = field(default_factory=Vec2)
    """Mouse position in screen coordinates."""
    wheel: float = 0.0
    drag: Vec2 | None = None
    """Mouse movement while dragging the view, in screen units."""


def spawn_objects(
    tiles: Sequence[Tile], player: Player, catalog: Sequence[Weapon]
) -> list[WeaponBuy]:
    """Place the player on its spawn tile and build the weapon stations."""
    buys: list[WeaponBuy] = []
    for tile in tiles:
        if tile.player_spawn:
            player.pos = tile.pos
        elif tile.weapon_buy:
            if not 0 <= tile.weapon_index < len(catalog):
                raise ValueError(f"unknown weapon index {tile.weapon_index}")
            if len(buys) >= MAX_WEAPON_BUYS:
                raise ValueError(f"more than {MAX_WEAPON_BUYS} weapon stations")
            buys.append(
                WeaponBuy(
                    id=tile.weapon_index,
                    pos=tile.pos,
                    weapon=catalog[tile.weapon_index],
                )
            )
    return buys


class World:
    """All game objects and the order in which they are updated."""

    def __init__(self, tiles: Sequence[Tile], rng: random.Random | None = None) -> None:
        self.rng = rng if rng is not None else random.Random()
        self.screen_width = 1280
        self.screen_height = 720
        self.tiles = list(tiles)
        self.catalog = weapon_catalog()
        self.holster = Holster(self.catalog[0])
        self.player = create_player(self.holster)
        self.enemies = EnemyPool()
        self.projectiles = ProjectilePool()
        self.rounds = RoundManager()
        self.debug = DebugFlags()
        self.camera = Camera2D(offset=Vec2(self.screen_width / 2, self.screen_height / 2))
        self.weapon_buys = spawn_objects(self.tiles, self.player, self.catalog)
        self.offers: list[tuple[WeaponBuy, Offer]] = []
        self.aim: tuple[Vec2, Vec2, bool] | None = None

    def step(self, inputs: FrameInput, dt: float) -> None:
        """Advance the whole world by one frame."""
        self._resolve_tiles()
        self.enemies.update(self.player, self.rounds, dt)
        self._spawn_enemy()
        self.rounds.update(dt)
        self._update_player(inputs, dt)
        self._update_weapon(inputs, dt)
        self._update_weapon_buys(inputs)
        self._update_camera(inputs)
        self.projectiles.update(self.enemies, self.player, dt)
        if inputs.toggle_debug:
            self.debug.debug_mode = not self.debug.debug_mode

    def _resolve_tiles(self) -> None:
        for tile in self.tiles:
            if tile.active and tile.solid:
                rect = Rect(tile.pos.x, tile.pos.y, CELL_SIZE, CELL_SIZE)
                self.player.block_against(rect)
                self.enemies.block_against(rect)
                self.projectiles.block_against(rect)

    def _spawn_enemy(self) -> None:
        if not self.rounds.can_spawn():
            return
        if all(enemy.active for enemy in self.enemies):
            return
        x = float(self.rng.randint(0, self.screen_width))
        y = float(self.rng.randint(0, self.screen_height))
        self.enemies.spawn(self.rounds, x, y)

    def _update_player(self, inputs: FrameInput, dt: float) -> None:
        player = self.player
        player.rotation_towards(self.camera.screen_to_world(inputs.mouse))
        player.update_animation(dt)
        player.move(inputs.left, inputs.right, inputs.up, inputs.down, dt)
        if inputs.shoot and player.weapon.can_shoot():
            spread = 0.0
            if not player.ads:
                limit = int(player.weapon.spread)
                spread = float(self.rng.randint(-limit, limit))
            player.try_shoot(self.projectiles, spread)
        player.set_ads(inputs.aim)
        self.aim = aim_ray(player, self.tiles, self.enemies) if inputs.aim else None

    def _update_weapon(self, inputs: FrameInput, dt: float) -> None:
        weapon = self.player.weapon
        weapon.rotation = self.player.rotation
        weapon.cool_down(dt)
        weapon.update_reload(dt, inputs.reload)
        if inputs.slot is not None:
            self.holster.switch_to(inputs.slot)

    def _update_weapon_buys(self, inputs: FrameInput) -> None:
        self.offers = []
        for buy in self.weapon_buys:
            offer = buy.offer(self.player)
            if offer is not None:
                self.offers.append((buy, offer))
                if inputs.buy:
                    buy.purchase(self.player)

    def _update_camera(self, inputs: FrameInput) -> None:
        if self.debug.debug_mode:
            self.camera.zoom_at(inputs.mouse, inputs.wheel)
            if inputs.drag is not None:
                self.camera.drag(inputs.drag)
        else:
            self.camera.follow(self.player.pos, self.player.width, self.player.height)