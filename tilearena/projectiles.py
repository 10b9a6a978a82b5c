"""Bullets fired by the player and the fixed pool they live in."""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Protocol

from tilearena.enemies import Enemy
from tilearena.geometry import Rect, Vec2
from tilearena.weapons import Weapon

MAX_PROJECTILES = 100
HIT_REWARD = 10
_PI = 3.14159265
_MUZZLE_FACTOR = 0.4


class _Shooter(Protocol):
    money: int


@dataclass
class Projectile:
    """A bullet travelling in a straight line until it runs out of range."""

    pos: Vec2 = field(default_factory=Vec2)
    previous_pos: Vec2 = field(default_factory=Vec2)
    dir: Vec2 = field(default_factory=Vec2)
    damage: int = 0
    speed: float = 0.0
    range: float = 0.0
    length: float = 0.0
    size: float = 0.0
    distance_traveled: float = 0.0
    active: bool = False

    def step(self, dt: float) -> None:
        """Move one frame along the direction and add to the distance travelled."""
        self.previous_pos = self.pos
        self.pos = self.pos + self.dir * (self.speed * dt)
        moved = self.pos - self.previous_pos
        self.distance_traveled += math.hypot(moved.x, moved.y)

    def destroy(self) -> None:
        """Take the projectile out of play."""
        self.active = False
        self.speed = 0.0


def create_projectile(
    pos: Vec2, width: float, height: float, weapon: Weapon, offset: float
) -> Projectile:
    """Fire a bullet from the muzzle of ``weapon`` held by a box at ``pos``.

    ``offset`` is the spread in degrees added to the weapon's rotation.
    """
    angle = (weapon.rotation + offset) * (_PI / 180.0)
    muzzle = width * _MUZZLE_FACTOR
    direction = Vec2(math.cos(angle), math.sin(angle))
    length = 20.0
    return Projectile(
        pos=Vec2(pos.x + width / 2, pos.y + height / 2) + direction * muzzle,
        dir=direction,
        damage=weapon.damage,
        speed=weapon.projectile_speed,
        range=weapon.range,
        length=length,
        size=5.0,
        distance_traveled=length,
        active=True,
    )


class ProjectilePool:
    """A fixed number of projectile slots, reused once bullets are spent."""

    def __init__(self, capacity: int = MAX_PROJECTILES) -> None:
        if capacity < 0:
            raise ValueError(f"capacity must not be negative, got {capacity}")
        self.projectiles = [Projectile() for _ in range(capacity)]

    def add(self, projectile: Projectile) -> bool:
        """Put a projectile in the first free slot; False if none is free."""
        for index, slot in enumerate(self.projectiles):
            if not slot.active:
                self.projectiles[index] = projectile
                return True
        return False

    def active(self) -> list[Projectile]:
        """Return the projectiles in flight."""
        return [p for p in self.projectiles if p.active]

    def block_against(self, tile_rect: Rect) -> None:
        """Destroy every projectile inside ``tile_rect``."""
        for projectile in self.active():
            if tile_rect.contains(projectile.pos):
                projectile.destroy()

    def update(self, enemies: Iterable[Enemy], player: _Shooter, dt: float) -> None:
        """Advance every projectile by one frame and resolve hits on enemies."""
        targets = list(enemies)
        for projectile in self.active():
            if projectile.distance_traveled >= projectile.range:
                projectile.destroy()
            projectile.step(dt)
            for enemy in targets:
                if enemy.active and enemy.rect().contains(projectile.pos):
                    enemy.health -= projectile.damage
                    projectile.destroy()
                    player.money += HIT_REWARD
                    break