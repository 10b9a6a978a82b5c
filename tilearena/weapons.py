"""Weapons, their firing and reloading rules, and the player's holster."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field

from tilearena.geometry import Rect, Vec2

MAX_WEAPONS = 3
"""Number of weapons the player can carry at once."""

EMPTY_ID = -1
"""Weapon id marking an unused holster slot."""

_READY_THRESHOLD = 0.01
_COOLDOWN_SNAP = 0.1


@dataclass
class Weapon:
    """A firearm together with its ammunition and timers."""

    id: int = EMPTY_ID
    name: str = ""
    pos: Vec2 = field(default_factory=Vec2)
    width: float = 0.0
    height: float = 0.0
    rotation: float = 0.0
    scale: float = 0.0
    damage: int = 0
    projectile_speed: float = 0.0
    range: float = 0.0
    spread: float = 0.0
    weapon_cost: int = 0
    ammo_cost: int = 0
    max_mag_capacity: int = 0
    mag_capacity: int = 0
    max_reserve_capacity: int = 0
    reserve_capacity: int = 0
    reload_time: float = 0.0
    reload_timer: float = 0.0
    fire_rate: float = 0.0
    fire_rate_timer: float = 0.0
    texture: str = ""
    frame_rec: Rect = field(default_factory=lambda: Rect(0, 0, 0, 0))

    def can_shoot(self) -> bool:
        """True when the fire-rate timer has run out and the magazine is not empty."""
        return self.fire_rate_timer < _READY_THRESHOLD and self.mag_capacity > 0

    def cool_down(self, dt: float) -> None:
        """Run the fire-rate timer down by one frame."""
        if self.fire_rate_timer <= _COOLDOWN_SNAP:
            self.fire_rate_timer = 0.0
        else:
            self.fire_rate_timer -= dt

    def update_reload(self, dt: float, reload_pressed: bool) -> None:
        """Start or continue a reload.

        A reload starts when asked for or when the magazine is empty, and
        only if there is reserve ammunition and room in the magazine. Once
        the reload time has passed, the magazine is topped up from reserve.
        """
        reloading = self.reload_timer > _READY_THRESHOLD
        if not (reload_pressed or reloading or self.mag_capacity <= 0):
            return
        if self.reserve_capacity <= 0 or self.mag_capacity >= self.max_mag_capacity:
            return
        if self.reload_timer <= _READY_THRESHOLD:
            self.reload_timer = self.reload_time
            return
        self.reload_timer -= dt
        if self.reload_timer <= _READY_THRESHOLD:
            loaded = min(self.max_mag_capacity - self.mag_capacity, self.reserve_capacity)
            self.mag_capacity += loaded
            self.reserve_capacity -= loaded
            self.reload_timer = 0.0


def create_pistol() -> Weapon:
    """Return the starting pistol."""
    return Weapon(
        id=0,
        name="pistol",
        width=32,
        height=32,
        scale=1.0,
        damage=100,
        projectile_speed=700.0,
        range=1000.0,
        spread=5.0,
        weapon_cost=50,
        ammo_cost=10,
        max_mag_capacity=1000,
        mag_capacity=1000,
        max_reserve_capacity=42,
        reserve_capacity=42,
        reload_time=1.5,
        fire_rate=0.2,
        texture="pistol",
        frame_rec=Rect(0, 0, 32, 32),
    )


def create_ar() -> Weapon:
    """Return the assault rifle."""
    return Weapon(
        id=1,
        name="ar",
        width=32,
        height=32,
        scale=1.0,
        damage=60,
        projectile_speed=500.0,
        range=800.0,
        spread=10.0,
        weapon_cost=100,
        ammo_cost=10,
        max_mag_capacity=35,
        mag_capacity=35,
        max_reserve_capacity=175,
        reserve_capacity=175,
        reload_time=2.0,
        fire_rate=0.2,
        texture="ar",
        frame_rec=Rect(0, 0, 32, 32),
    )


def create_empty_weapon() -> Weapon:
    """Return the placeholder held by an unused holster slot."""
    return Weapon()


def weapon_catalog() -> list[Weapon]:
    """Return every buyable weapon; a weapon's id is its index in the list."""
    return [create_pistol(), create_ar()]


class Holster:
    """The weapon slots the player carries and which one is in hand."""

    def __init__(self, starting: Weapon) -> None:
        self.slots: list[Weapon] = [copy.deepcopy(starting)]
        self.slots.extend(create_empty_weapon() for _ in range(MAX_WEAPONS - 1))
        self.current = 0

    def index_of(self, weapon_id: int) -> int | None:
        """Return the slot holding a weapon with this id, or None."""
        for index, weapon in enumerate(self.slots):
            if weapon.id == weapon_id:
                return index
        return None

    def empty_slot(self) -> int | None:
        """Return the first unused slot, or None if every slot is taken."""
        return self.index_of(EMPTY_ID)

    def switch_to(self, slot: int) -> bool:
        """Take the weapon in ``slot`` in hand, cancelling any reload.

        The first slot can always be chosen; the others only when they hold
        a weapon. Returns whether the switch happened.
        """
        if not 0 <= slot < len(self.slots):
            raise IndexError(f"holster slot {slot} out of range")
        if slot != 0 and self.slots[slot].id == EMPTY_ID:
            return False
        held = self.active()
        if held.reload_timer > 0.0:
            held.reload_timer = 0.0
        self.current = slot
        return True

    def active(self) -> Weapon:
        """Return the weapon in hand."""
        return self.slots[self.current]