import dataclasses

import pytest

from tilearena.geometry import Rect, Vec2
from tilearena.player import create_player
from tilearena.weapon_buy import Offer, WeaponBuy
from tilearena.weapons import Holster, create_ar, create_pistol


@pytest.fixture
def player():
    return create_player(Holster(create_pistol()))


@pytest.fixture
def ar_buy():
    return WeaponBuy(id=1, pos=Vec2(10, 10), weapon=create_ar())


def test_rect(ar_buy):
    assert ar_buy.rect() == Rect(10, 10, 32, 32)


def test_offer_none_when_away(player, ar_buy):
    player.pos = Vec2(500, 500)
    assert ar_buy.offer(player) is None
    assert ar_buy.purchase(player) is False


def test_offer_new_weapon(player, ar_buy):
    player.money = ar_buy.weapon.weapon_cost
    assert ar_buy.offer(player) == Offer("ar", ar_buy.weapon.weapon_cost, True, False)
    player.money = 0
    assert ar_buy.offer(player).affordable is False


def test_offer_ammo_for_owned_weapon(player):
    buy = WeaponBuy(id=0, pos=Vec2(0, 0), weapon=create_pistol())
    player.money = 0
    offer = buy.offer(player)
    assert offer.refill is True
    assert offer.price == buy.weapon.ammo_cost
    assert offer.affordable is False


def test_purchase_into_empty_slot(player, ar_buy):
    player.money = 500
    assert ar_buy.purchase(player) is True
    assert player.holster.slots[1].id == 1
    assert player.holster.current == 1
    assert player.weapon.name == "ar"
    assert player.money == 500 - ar_buy.weapon.weapon_cost


def test_purchased_weapon_is_a_copy(player, ar_buy):
    player.money = 500
    ar_buy.purchase(player)
    player.weapon.mag_capacity = 0
    assert ar_buy.weapon.mag_capacity == ar_buy.weapon.max_mag_capacity


def test_purchase_without_money_changes_nothing(player, ar_buy):
    player.money = ar_buy.weapon.weapon_cost - 1
    assert ar_buy.purchase(player) is False
    assert player.holster.index_of(1) is None
    assert player.money == ar_buy.weapon.weapon_cost - 1


def test_purchase_refills_reserve(player):
    buy = WeaponBuy(id=0, pos=Vec2(0, 0), weapon=create_pistol())
    player.weapon.reserve_capacity = 0
    player.money = 100
    assert buy.purchase(player) is True
    assert player.weapon.reserve_capacity == player.weapon.max_reserve_capacity
    assert player.money == 100 - player.weapon.ammo_cost


def test_purchase_full_reserve_refused(player):
    buy = WeaponBuy(id=0, pos=Vec2(0, 0), weapon=create_pistol())
    player.money = 100
    assert buy.purchase(player) is False
    assert player.money == 100


def test_purchase_with_full_holster_replaces_weapon_in_hand(player, ar_buy):
    slots = player.holster.slots
    slots[1] = dataclasses.replace(create_pistol(), id=7)
    slots[2] = dataclasses.replace(create_pistol(), id=8)
    player.money = 500
    assert ar_buy.purchase(player) is True
    assert slots[0].id == 1
    assert player.holster.current == 0
    assert [w.id for w in slots[1:]] == [7, 8]