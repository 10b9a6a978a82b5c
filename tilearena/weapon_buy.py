"""Wall stations where the player buys weapons and ammunition."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field

from tilearena.geometry import Rect, Vec2
from tilearena.player import Player
from tilearena.weapons import Weapon


@dataclass(frozen=True)
class Offer:
    """What a station offers the player standing at it."""

    name: str
    price: int
    affordable: bool
    refill: bool
    """True when the player already owns the weapon and the offer is ammunition."""


@dataclass
class WeaponBuy:
    """A station selling one weapon."""

    id: int
    pos: Vec2
    weapon: Weapon
    width: float = 32
    height: float = 32
    scale: float = 1.0
    frame_rec: Rect = field(default_factory=lambda: Rect(0, 0, 32, 32))

    def rect(self) -> Rect:
        """Return the area the player must touch to buy."""
        return Rect(self.pos.x, self.pos.y, self.width, self.height)

    def offer(self, player: Player) -> Offer | None:
        """Return what the player is offered, or None when not at the station."""
        if not player.rect().collides(self.rect()):
            return None
        if player.holster.index_of(self.weapon.id) is not None:
            price = self.weapon.ammo_cost
            return Offer(self.weapon.name, price, player.money >= price, True)
        price = self.weapon.weapon_cost
        return Offer(self.weapon.name, price, player.money >= price, False)

    def purchase(self, player: Player) -> bool:
        """Buy from the station; returns whether money changed hands.

        An owned weapon gets its reserve refilled when not already full. A new
        weapon goes into an empty slot, or replaces the one in hand.
        """
        if not player.rect().collides(self.rect()):
            return False
        holster = player.holster
        owned = holster.index_of(self.weapon.id)
        if owned is not None:
            held = holster.slots[owned]
            if player.money < self.weapon.ammo_cost:
                return False
            if held.reserve_capacity >= held.max_reserve_capacity:
                return False
            held.reserve_capacity = held.max_reserve_capacity
            player.money -= held.ammo_cost
            return True
        if player.money < self.weapon.weapon_cost:
            return False
        slot = holster.empty_slot()
        if slot is None:
            slot = holster.index_of(player.weapon.id)
            if slot is None:
                slot = holster.current
        holster.slots[slot] = copy.deepcopy(self.weapon)
        holster.current = slot
        player.money -= self.weapon.weapon_cost
        return True