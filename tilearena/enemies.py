"""Enemies that chase the player, and the fixed pool they live in."""

from __future__ import annotations

import dataclasses
import math
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Protocol

from tilearena.geometry import Rect, Vec2
from tilearena.rounds import RoundManager

MAX_SPAWN_ENEMIES = 40
KILL_REWARD = 80
_LAST_FRAME = 2


class _Target(Protocol):
    health: int
    money: int

    def rect(self) -> Rect: ...


@dataclass
class Enemy:
    """One enemy with its hit box, movement, attack and animation state."""

    pos: Vec2 = field(default_factory=Vec2)
    width: float = 0.0
    height: float = 0.0
    speed: float = 0.0
    velocity: Vec2 = field(default_factory=Vec2)
    damage: int = 0
    health: int = 0
    attack_cooldown: float = 0.0
    attack_timer: float = 0.0
    amount_of_frames: int = 0
    current_frame: int = 0
    frame_time: float = 0.0
    frame_speed: float = 0.0
    frame_rec: Rect = field(default_factory=lambda: Rect(0, 0, 0, 0))
    active: bool = False

    def rect(self) -> Rect:
        """Return the hit box."""
        return Rect(self.pos.x, self.pos.y, self.width, self.height)

    def can_attack(self) -> bool:
        """True once the attack cooldown has run out."""
        return self.attack_timer < 0.01

    def update_cooldown(self, dt: float) -> None:
        """Run the attack cooldown down by one frame."""
        if self.attack_timer <= 0.01:
            self.attack_timer = 0.0
        else:
            self.attack_timer -= dt

    def move_towards(self, target: Vec2, dt: float) -> None:
        """Step along the current velocity, then aim the velocity at ``target``."""
        dx = target.x - self.pos.x
        dy = target.y - self.pos.y
        length = math.hypot(dx, dy)
        if length < 0.1:
            return
        dir_x, dir_y = dx / length, dy / length
        self.pos = Vec2(
            self.pos.x + abs(dir_x) * self.velocity.x,
            self.pos.y + abs(dir_y) * self.velocity.y,
        )
        step = self.speed * dt
        vx, vy = self.velocity.x, self.velocity.y
        if dir_x > 0:
            vx = step
        elif dir_x < 0:
            vx = -step
        if dir_y > 0:
            vy = step
        elif dir_y < 0:
            vy = -step
        self.velocity = Vec2(vx, vy)

    def update_animation(self, dt: float) -> None:
        """Advance the sprite frame when its time is up."""
        self.frame_time += dt
        if self.frame_time >= self.frame_speed:
            self.frame_time = 0.0
            self.current_frame += 1
            if self.current_frame > _LAST_FRAME:
                self.current_frame = 0
            self.frame_rec = dataclasses.replace(
                self.frame_rec, y=float(self.current_frame) * self.frame_rec.width
            )

    def block_against(self, tile_rect: Rect) -> None:
        """Stop movement along any axis that would run into ``tile_rect``."""
        vx, vy = self.velocity.x, self.velocity.y
        if Rect(self.pos.x + vx, self.pos.y, self.width, self.height).collides(tile_rect):
            vx = 0.0
        if Rect(self.pos.x, self.pos.y + vy, self.width, self.height).collides(tile_rect):
            vy = 0.0
        self.velocity = Vec2(vx, vy)


def create_basic_enemy(x: float, y: float) -> Enemy:
    """Return a fresh basic enemy at (x, y)."""
    return Enemy(
        pos=Vec2(x, y),
        width=64,
        height=64,
        speed=100.0,
        damage=25,
        health=100,
        attack_cooldown=1.5,
        amount_of_frames=2,
        frame_speed=0.3,
        frame_rec=Rect(0, 0, 64, 64),
        active=True,
    )


class EnemyPool:
    """A fixed number of enemy slots, reused as enemies die."""

    def __init__(self, capacity: int = MAX_SPAWN_ENEMIES) -> None:
        if capacity < 0:
            raise ValueError(f"capacity must not be negative, got {capacity}")
        self.enemies = [Enemy() for _ in range(capacity)]

    def __iter__(self) -> Iterator[Enemy]:
        return iter(self.enemies)

    def spawn(self, rounds: RoundManager, x: float, y: float) -> Enemy | None:
        """Spawn one enemy at (x, y) if the round allows it and a slot is free."""
        if not rounds.can_spawn():
            return None
        for index, enemy in enumerate(self.enemies):
            if not enemy.active:
                fresh = create_basic_enemy(x, y)
                self.enemies[index] = fresh
                rounds.enemy_spawned()
                return fresh
        return None

    def active(self) -> list[Enemy]:
        """Return the living enemies."""
        return [enemy for enemy in self.enemies if enemy.active]

    def block_against(self, tile_rect: Rect) -> None:
        """Stop every living enemy from walking into ``tile_rect``."""
        for enemy in self.active():
            enemy.block_against(tile_rect)

    def update(self, player: _Target, rounds: RoundManager, dt: float) -> None:
        """Advance every living enemy by one frame.

        Dead enemies are removed and pay the player; the others chase the
        player and hit it when touching and off cooldown.
        """
        for enemy in self.active():
            if enemy.health <= 0:
                enemy.active = False
                enemy.speed = 0.0
                player.money += KILL_REWARD
                rounds.enemy_killed()
            player_rect = player.rect()
            enemy.move_towards(Vec2(player_rect.x, player_rect.y), dt)
            enemy.update_animation(dt)
            if enemy.rect().collides(player_rect) and enemy.can_attack():
                player.health -= enemy.damage
                enemy.attack_timer = enemy.attack_cooldown
            enemy.update_cooldown(dt)