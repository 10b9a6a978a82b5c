from dataclasses import dataclass, field

import pytest

from tilearena.enemies import (
    KILL_REWARD,
    MAX_SPAWN_ENEMIES,
    EnemyPool,
    create_basic_enemy,
)
from tilearena.geometry import Rect, Vec2
from tilearena.rounds import RoundManager


@dataclass
class _Dummy:
    pos: Vec2 = field(default_factory=Vec2)
    width: float = 50.0
    height: float = 50.0
    health: int = 100
    money: int = 0

    def rect(self):
        return Rect(self.pos.x, self.pos.y, self.width, self.height)


def test_basic_enemy_stats():
    enemy = create_basic_enemy(3.0, 4.0)
    assert enemy.pos == Vec2(3.0, 4.0)
    assert enemy.health == 100
    assert enemy.damage == 25
    assert enemy.active
    assert enemy.rect() == Rect(3.0, 4.0, 64, 64)


def test_new_pool_holds_only_inactive_enemies():
    pool = EnemyPool(capacity=3)
    assert pool.active() == []
    assert [enemy.active for enemy in pool.enemies] == [False, False, False]


def test_attack_cooldown_cycle():
    enemy = create_basic_enemy(0, 0)
    assert enemy.can_attack()
    enemy.attack_timer = enemy.attack_cooldown
    assert not enemy.can_attack()
    enemy.update_cooldown(enemy.attack_cooldown)
    enemy.update_cooldown(0.0)
    assert enemy.attack_timer == 0.0
    assert enemy.can_attack()


def test_first_move_only_sets_velocity():
    enemy = create_basic_enemy(0, 0)
    enemy.move_towards(Vec2(100, 100), 0.5)
    assert enemy.pos == Vec2(0, 0)
    assert enemy.velocity.x == pytest.approx(enemy.speed * 0.5)
    assert enemy.velocity.y == pytest.approx(enemy.speed * 0.5)


def test_move_heads_toward_target():
    enemy = create_basic_enemy(200, 0)
    target = Vec2(0, 0)
    enemy.move_towards(target, 0.1)
    enemy.move_towards(target, 0.1)
    assert enemy.pos.x < 200
    assert enemy.pos.y == 0


def test_move_ignored_when_on_target():
    enemy = create_basic_enemy(10, 10)
    enemy.velocity = Vec2(5, 5)
    enemy.move_towards(Vec2(10.05, 10), 0.1)
    assert enemy.pos == Vec2(10, 10)
    assert enemy.velocity == Vec2(5, 5)


def test_block_against_zeroes_blocked_axis():
    enemy = create_basic_enemy(0, 0)
    enemy.velocity = Vec2(10, 10)
    enemy.block_against(Rect(66, 0, 32, 32))
    assert enemy.velocity == Vec2(0.0, 10)


def test_animation_wraps_after_last_frame():
    enemy = create_basic_enemy(0, 0)
    frames = []
    for _ in range(3):
        enemy.update_animation(enemy.frame_speed)
        frames.append(enemy.current_frame)
    assert frames == [1, 2, 0]
    assert enemy.frame_rec.y == enemy.current_frame * enemy.frame_rec.width


def test_pool_spawn_respects_round():
    pool = EnemyPool()
    rounds = RoundManager()
    enemy = pool.spawn(rounds, 5, 6)
    assert enemy is not None and enemy.pos == Vec2(5, 6)
    assert rounds.alive == 1
    rounds.in_break = True
    assert pool.spawn(rounds, 0, 0) is None
    assert len(pool.active()) == 1


def test_pool_full_refuses_spawn():
    pool = EnemyPool(capacity=1)
    rounds = RoundManager()
    pool.spawn(rounds, 0, 0)
    assert pool.spawn(rounds, 0, 0) is None
    assert rounds.spawned == 1


def test_pool_default_capacity():
    assert len(EnemyPool().enemies) == MAX_SPAWN_ENEMIES


def test_negative_capacity_raises():
    with pytest.raises(ValueError):
        EnemyPool(capacity=-1)


def test_dead_enemy_pays_player():
    pool = EnemyPool()
    rounds = RoundManager()
    enemy = pool.spawn(rounds, 1000, 1000)
    enemy.health = 0
    player = _Dummy()
    pool.update(player, rounds, 0.016)
    assert player.money == KILL_REWARD
    assert rounds.alive == 0
    assert pool.active() == []


def test_touching_enemy_hits_once_per_cooldown():
    pool = EnemyPool()
    rounds = RoundManager()
    enemy = pool.spawn(rounds, 10, 10)
    player = _Dummy()
    pool.update(player, rounds, 0.016)
    assert player.health == 100 - enemy.damage
    pool.update(player, rounds, 0.016)
    assert player.health == 100 - enemy.damage


def test_pool_block_against_only_active():
    pool = EnemyPool(capacity=2)
    rounds = RoundManager()
    enemy = pool.spawn(rounds, 0, 0)
    enemy.velocity = Vec2(10, 0)
    pool.enemies[1].velocity = Vec2(10, 0)
    pool.block_against(Rect(66, 0, 32, 32))
    assert enemy.velocity.x == 0.0
    assert pool.enemies[1].velocity.x == 10