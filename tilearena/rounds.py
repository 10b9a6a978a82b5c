"""Rounds of enemies with breaks in between."""

from __future__ import annotations

from dataclasses import dataclass

ENEMIES_PER_ROUND_STEP = 6
"""Extra enemies added to each new round."""


@dataclass
class RoundManager:
    """Tracks the current round, how many enemies it spawns and the break timer."""

    round_number: int = 1
    enemy_count: int = ENEMIES_PER_ROUND_STEP
    break_time: float = 2.0
    break_timer: float = 0.0
    in_break: bool = False
    all_enemies_spawned: bool = False
    spawned: int = 0
    alive: int = 0

    def start_round(self) -> None:
        """Begin the next round with more enemies."""
        self.round_number += 1
        self.enemy_count += ENEMIES_PER_ROUND_STEP
        self.in_break = False
        self.all_enemies_spawned = False

    def enemy_spawned(self) -> None:
        """Record that one enemy entered the arena."""
        self.spawned += 1
        self.alive += 1

    def enemy_killed(self) -> None:
        """Record that one enemy died."""
        self.alive -= 1

    def can_spawn(self) -> bool:
        """True while the round is running and still has enemies to spawn."""
        return not self.in_break and not self.all_enemies_spawned

    def _check_round_end(self) -> None:
        if self.all_enemies_spawned and self.alive == 0 and not self.in_break:
            self.in_break = True
            self.break_timer = self.break_time
            self.spawned = 0

    def _run_break_timer(self, dt: float) -> None:
        if self.in_break and self.break_timer >= 0.01:
            self.break_timer -= dt
        elif self.in_break and self.break_timer <= 0.1:
            self.break_timer = 0.0
            self.start_round()

    def update(self, dt: float) -> None:
        """Advance round state by one frame."""
        self._check_round_end()
        self._run_break_timer(dt)
        if self.enemy_count == self.spawned:
            self.all_enemies_spawned = True