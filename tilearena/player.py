"""The player: movement, aiming, shooting and aim-down-sights."""

from __future__ import annotations

import dataclasses
import math
from collections.abc import Iterable
from dataclasses import dataclass, field

from tilearena.enemies import Enemy
from tilearena.geometry import CELL_SIZE, Rect, Vec2
from tilearena.mapfile import Tile
from tilearena.projectiles import ProjectilePool, create_projectile
from tilearena.weapons import Holster, Weapon

ADS_SPEED_PENALTY = 80
"""Speed lost while aiming down sights."""

_MUZZLE_FACTOR = 0.4
_DEGREES_PER_RADIAN = 180.0 / 3.14


@dataclass
class Player:
    """The player with hit box, movement, health, money and animation state."""

    holster: Holster
    pos: Vec2 = field(default_factory=Vec2)
    width: float = 50.0
    height: float = 50.0
    money: int = 0
    rotation: float = 0.0
    speed: float = 150.0
    velocity: Vec2 = field(default_factory=Vec2)
    health: int = 100
    ads: bool = False
    amount_of_frames: int = 2
    current_frame: int = 0
    frame_time: float = 0.0
    frame_speed: float = 0.3
    frame_rec: Rect = field(default_factory=lambda: Rect(0.0, 0.0, 64.0, 64.0))

    @property
    def weapon(self) -> Weapon:
        """The weapon in hand."""
        return self.holster.active()

    def rect(self) -> Rect:
        """Return the hit box."""
        return Rect(self.pos.x, self.pos.y, self.width, self.height)

    def move(self, left: bool, right: bool, up: bool, down: bool, dt: float) -> None:
        """Step along the current velocity for each held key, then set the new velocity."""
        x, y = self.pos.x, self.pos.y
        vx, vy = self.velocity.x, self.velocity.y
        step = self.speed * dt
        if left:
            x += vx
            vx = -step
        if right:
            x += vx
            vx = step
        if up:
            y += vy
            vy = -step
        if down:
            y += vy
            vy = step
        self.pos = Vec2(x, y)
        self.velocity = Vec2(vx, vy)

    def rotation_towards(self, target: Vec2) -> float:
        """Face ``target`` and return the new rotation in degrees."""
        radians = math.atan2(target.y - self.pos.y, target.x - self.pos.x)
        self.rotation = radians * _DEGREES_PER_RADIAN
        return self.rotation

    def block_against(self, tile_rect: Rect) -> None:
        """Stop movement along any axis that would run into ``tile_rect``."""
        vx, vy = self.velocity.x, self.velocity.y
        if Rect(self.pos.x + vx, self.pos.y, self.width, self.height).collides(tile_rect):
            vx = 0.0
        if Rect(self.pos.x, self.pos.y + vy, self.width, self.height).collides(tile_rect):
            vy = 0.0
        self.velocity = Vec2(vx, vy)

    def update_animation(self, dt: float) -> None:
        """Advance the sprite frame when its time is up."""
        self.frame_time += dt
        if self.frame_time >= self.frame_speed:
            self.frame_time = 0.0
            self.current_frame += 1
            if self.current_frame > self.amount_of_frames:
                self.current_frame = 0
            self.frame_rec = dataclasses.replace(
                self.frame_rec, y=float(self.current_frame) * self.frame_rec.width
            )

    def try_shoot(self, projectiles: ProjectilePool, spread: float) -> bool:
        """Fire the weapon in hand if it is ready; returns whether it fired.

        ``spread`` is the angle offset in degrees, ignored while aiming down sights.
        """
        weapon = self.weapon
        if not weapon.can_shoot():
            return False
        weapon.fire_rate_timer = weapon.fire_rate
        weapon.mag_capacity -= 1
        offset = 0.0 if self.ads else spread
        projectiles.add(create_projectile(self.pos, self.width, self.height, weapon, offset))
        return True

    def set_ads(self, aiming: bool) -> None:
        """Enter or leave aim-down-sights, slowing the player while aiming."""
        if aiming and not self.ads:
            self.speed -= ADS_SPEED_PENALTY
            self.ads = True
        elif not aiming and self.ads:
            self.speed += ADS_SPEED_PENALTY
            self.ads = False


def create_player(holster: Holster) -> Player:
    """Return a fresh player carrying ``holster``."""
    return Player(holster=holster)


def aim_ray(
    player: Player, tiles: Iterable[Tile], enemies: Iterable[Enemy]
) -> tuple[Vec2, Vec2, bool]:
    """Trace the aiming laser from the muzzle.

    Returns the origin, the end point and whether the ray stopped on a solid
    tile or a living enemy before reaching the weapon's range.
    """
    angle = math.radians(player.rotation)
    direction = Vec2(math.cos(angle), math.sin(angle))
    origin = (
        Vec2(player.pos.x + player.width / 2, player.pos.y + player.height / 2)
        + direction * (player.width * _MUZZLE_FACTOR)
    )
    reach = player.weapon.range
    blockers = [
        Rect(tile.pos.x, tile.pos.y, CELL_SIZE, CELL_SIZE) for tile in tiles if tile.solid
    ]
    blockers.extend(enemy.rect() for enemy in enemies if enemy.active)
    t = 0.0
    while t < reach:
        point = origin + direction * t
        if any(blocker.contains(point) for blocker in blockers):
            return origin, point, True
        t += 1.0
    return origin, origin + direction * reach, False