from dataclasses import dataclass

import pytest

from tilearena.enemies import Enemy, create_basic_enemy
from tilearena.geometry import Rect, Vec2
from tilearena.projectiles import (
    HIT_REWARD,
    MAX_PROJECTILES,
    Projectile,
    ProjectilePool,
    create_projectile,
)
from tilearena.weapons import create_ar, create_pistol


@dataclass
class _Shooter:
    money: int = 0


def _bullet(pos=Vec2(0, 0), direction=Vec2(1, 0), speed=100.0, rng=1000.0):
    return Projectile(pos=pos, dir=direction, speed=speed, range=rng, damage=7, active=True)


def test_create_projectile_from_weapon():
    pistol = create_pistol()
    shot = create_projectile(Vec2(0, 0), 50.0, 50.0, pistol, 0.0)
    assert shot.active
    assert shot.dir.x == pytest.approx(1.0)
    assert shot.dir.y == pytest.approx(0.0, abs=1e-6)
    assert shot.pos.x == pytest.approx(25.0 + 50.0 * 0.4)
    assert shot.pos.y == pytest.approx(25.0)
    assert shot.damage == pistol.damage
    assert shot.speed == pistol.projectile_speed
    assert shot.range == pistol.range
    assert shot.distance_traveled == shot.length


def test_projectile_direction_is_unit_length():
    ar = create_ar()
    ar.rotation = 33.0
    shot = create_projectile(Vec2(10, 10), 50.0, 50.0, ar, 7.0)
    assert shot.dir.x**2 + shot.dir.y**2 == pytest.approx(1.0)


def test_step_moves_and_counts_distance():
    shot = _bullet()
    shot.step(0.5)
    assert shot.previous_pos == Vec2(0, 0)
    assert shot.pos.x == pytest.approx(shot.speed * 0.5)
    assert shot.distance_traveled == pytest.approx(shot.speed * 0.5)


def test_pool_add_uses_free_slots():
    pool = ProjectilePool(capacity=2)
    assert pool.add(_bullet())
    assert pool.add(_bullet())
    assert not pool.add(_bullet())
    assert len(pool.active()) == 2


def test_pool_default_capacity():
    assert len(ProjectilePool().projectiles) == MAX_PROJECTILES


def test_negative_capacity_raises():
    with pytest.raises(ValueError):
        ProjectilePool(capacity=-3)


def test_block_against_destroys_inside():
    pool = ProjectilePool()
    inside = _bullet(pos=Vec2(40, 40))
    outside = _bullet(pos=Vec2(200, 200))
    pool.add(inside)
    pool.add(outside)
    pool.block_against(Rect(32, 32, 32, 32))
    assert not inside.active
    assert inside.speed == 0.0
    assert outside.active


def test_out_of_range_projectile_destroyed():
    pool = ProjectilePool()
    shot = _bullet(rng=10.0)
    shot.distance_traveled = 10.0
    pool.add(shot)
    pool.update([], _Shooter(), 0.016)
    assert pool.active() == []


def test_hit_damages_enemy_and_pays():
    pool = ProjectilePool()
    enemy = create_basic_enemy(10, -10)
    shot = _bullet(pos=Vec2(0, 0), speed=100.0)
    pool.add(shot)
    player = _Shooter()
    pool.update([enemy], player, 0.2)
    assert enemy.health == 100 - shot.damage
    assert not shot.active
    assert player.money == HIT_REWARD


def test_inactive_enemy_not_hit():
    pool = ProjectilePool()
    ghost = Enemy(pos=Vec2(0, -10), width=64, height=64, health=50)
    shot = _bullet()
    pool.add(shot)
    player = _Shooter()
    pool.update([ghost], player, 0.1)
    assert ghost.health == 50
    assert shot.active
    assert player.money == 0