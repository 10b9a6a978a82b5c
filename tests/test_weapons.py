import pytest

from tilearena.weapons import (
    EMPTY_ID,
    MAX_WEAPONS,
    Holster,
    create_ar,
    create_empty_weapon,
    create_pistol,
    weapon_catalog,
)


def test_pistol_matches_source_stats():
    pistol = create_pistol()
    assert pistol.id == 0
    assert pistol.name == "pistol"
    assert pistol.damage == 100
    assert pistol.mag_capacity == pistol.max_mag_capacity
    assert pistol.reserve_capacity == pistol.max_reserve_capacity


def test_ar_matches_source_stats():
    ar = create_ar()
    assert ar.id == 1
    assert ar.name == "ar"
    assert ar.range == 800.0
    assert ar.mag_capacity == ar.max_mag_capacity


def test_catalog_ids_are_indices():
    catalog = weapon_catalog()
    assert [weapon.id for weapon in catalog] == list(range(len(catalog)))


def test_empty_weapon_cannot_shoot():
    empty = create_empty_weapon()
    assert empty.id == EMPTY_ID
    assert not empty.can_shoot()


def test_can_shoot_depends_on_timer_and_magazine():
    pistol = create_pistol()
    assert pistol.can_shoot()
    pistol.fire_rate_timer = pistol.fire_rate
    assert not pistol.can_shoot()
    pistol.fire_rate_timer = 0.0
    pistol.mag_capacity = 0
    assert not pistol.can_shoot()


def test_cool_down_snaps_small_timer_to_zero():
    pistol = create_pistol()
    pistol.fire_rate_timer = 0.05
    pistol.cool_down(0.016)
    assert pistol.fire_rate_timer == 0.0


def test_cool_down_subtracts_frame_time():
    pistol = create_pistol()
    pistol.fire_rate_timer = 0.5
    pistol.cool_down(0.1)
    assert pistol.fire_rate_timer == pytest.approx(0.5 - 0.1)


def test_empty_magazine_starts_and_finishes_reload():
    ar = create_ar()
    ar.mag_capacity = 0
    ar.reserve_capacity = 5
    ar.update_reload(0.016, reload_pressed=False)
    assert ar.reload_timer == ar.reload_time
    assert ar.mag_capacity == 0
    ar.update_reload(ar.reload_time, reload_pressed=False)
    assert ar.mag_capacity == 5
    assert ar.reserve_capacity == 0
    assert ar.reload_timer == 0.0


def test_reload_conserves_ammunition_and_fills_magazine():
    ar = create_ar()
    ar.mag_capacity = 10
    total = ar.mag_capacity + ar.reserve_capacity
    ar.update_reload(0.016, reload_pressed=True)
    ar.update_reload(ar.reload_time, reload_pressed=False)
    assert ar.mag_capacity == ar.max_mag_capacity
    assert ar.mag_capacity + ar.reserve_capacity == total


def test_reload_needs_reserve_and_room():
    full = create_ar()
    full.update_reload(0.016, reload_pressed=True)
    assert full.reload_timer == 0.0
    dry = create_ar()
    dry.mag_capacity = 0
    dry.reserve_capacity = 0
    dry.update_reload(0.016, reload_pressed=True)
    assert dry.reload_timer == 0.0


def test_reload_not_started_without_request():
    ar = create_ar()
    ar.mag_capacity = 3
    ar.update_reload(0.016, reload_pressed=False)
    assert ar.reload_timer == 0.0
    assert ar.mag_capacity == 3


def test_holster_copies_starting_weapon():
    pistol = create_pistol()
    holster = Holster(pistol)
    holster.active().mag_capacity = 0
    assert pistol.mag_capacity == pistol.max_mag_capacity
    assert len(holster.slots) == MAX_WEAPONS


def test_holster_lookup():
    holster = Holster(create_pistol())
    assert holster.index_of(0) == 0
    assert holster.index_of(1) is None
    assert holster.empty_slot() == 1


def test_holster_full_has_no_empty_slot():
    holster = Holster(create_pistol())
    holster.slots[1] = create_ar()
    holster.slots[2] = create_ar()
    assert holster.empty_slot() is None


def test_switch_to_empty_slot_refused():
    holster = Holster(create_pistol())
    assert holster.switch_to(1) is False
    assert holster.current == 0


def test_switch_cancels_reload():
    holster = Holster(create_pistol())
    holster.slots[1] = create_ar()
    holster.active().reload_timer = 1.0
    assert holster.switch_to(1) is True
    assert holster.active().id == 1
    assert holster.slots[0].reload_timer == 0.0


def test_switch_to_out_of_range_raises():
    holster = Holster(create_pistol())
    with pytest.raises(IndexError):
        holster.switch_to(MAX_WEAPONS)