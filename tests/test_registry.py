from datetime import date

import pytest
from dateutil.relativedelta import relativedelta

from clubpairing.controllers import PlayerRegistry
from clubpairing.exceptions import (
    InvalidPlayerDataException,
    NameValidationException,
    PlayerNotFoundException,
    RatingValidationException,
)
from clubpairing.models.enums import AgeGroup
from clubpairing.models.player import Player, age_group_for

from conftest import counting_ids


def test_new_players_start_inactive_at_default_rating():
    registry = PlayerRegistry(id_source=counting_ids())
    player = registry.add("Alice", age_group=AgeGroup.U9)

    assert player.id == "player_1"
    assert player.rating == 1200
    assert not player.is_active
    assert str(player) == "Alice (1200)"


def test_name_is_stripped_and_required():
    registry = PlayerRegistry()
    assert registry.add("  Bob ", age_group=AgeGroup.U11).name == "Bob"
    with pytest.raises(NameValidationException):
        registry.add("   ", age_group=AgeGroup.U11)


def test_initial_rating_validated():
    registry = PlayerRegistry()
    assert registry.add("Cara", AgeGroup.U13, initial_rating=1450).rating == 1450
    with pytest.raises(RatingValidationException):
        registry.add("Dan", AgeGroup.U13, initial_rating=-5)


def test_age_group_from_date_of_birth():
    today = date(2025, 9, 1)
    assert age_group_for(date(2018, 1, 1), today) is AgeGroup.U9
    assert age_group_for(date(2016, 9, 1), today) is AgeGroup.U11
    assert age_group_for(date(2016, 9, 2), today) is AgeGroup.U9
    assert age_group_for(date(2013, 1, 1), today) is AgeGroup.U13
    with pytest.raises(InvalidPlayerDataException):
        age_group_for(date(2010, 1, 1), today)
    with pytest.raises(InvalidPlayerDataException):
        age_group_for(date(2026, 1, 1), today)


def test_add_derives_division_from_birthday():
    registry = PlayerRegistry()
    dob = date.today() - relativedelta(years=10)
    player = registry.add("Eve", date_of_birth=dob)
    assert player.age_group is AgeGroup.U11
    assert player.age == 10


def test_add_without_division_or_birthday_rejected():
    with pytest.raises(InvalidPlayerDataException):
        PlayerRegistry().add("Finn")


def test_ids_are_never_reused():
    registry = PlayerRegistry(id_source=lambda prefix: f"{prefix}same")
    first = registry.add("Gus", AgeGroup.U9)
    registry.remove(first.id)

    issued = iter(["player_same", "player_same", "player_other"])
    registry._id_source = lambda prefix: next(issued)
    second = registry.add("Hal", AgeGroup.U9)
    assert second.id == "player_other"


def test_toggle_and_eligibility_by_division():
    registry = PlayerRegistry(id_source=counting_ids())
    a = registry.add("Ann", AgeGroup.U9)
    b = registry.add("Ben", AgeGroup.U9)
    c = registry.add("Cy", AgeGroup.U11)
    registry.toggle_eligible(a.id)
    registry.set_eligible(c.id, True)

    assert registry.eligible_for(AgeGroup.U9) == [a]
    assert registry.eligible_for(AgeGroup.U11) == [c]
    assert registry.players(active_only=True) == [a, c]
    assert registry.toggle_eligible(a.id).is_active is False
    assert b.id in registry


def test_unknown_player_raises():
    registry = PlayerRegistry()
    with pytest.raises(PlayerNotFoundException):
        registry.get("nobody")
    with pytest.raises(PlayerNotFoundException):
        registry.remove("nobody")
    assert registry.find("nobody") is None


def test_registry_round_trip_keeps_issued_ids():
    registry = PlayerRegistry(id_source=counting_ids())
    kept = registry.add("Ida", AgeGroup.U13, initial_rating=1300)
    gone = registry.add("Jo", AgeGroup.U13)
    registry.remove(gone.id)

    restored = PlayerRegistry.from_dict(registry.to_dict())

    assert [p.to_dict() for p in restored] == [kept.to_dict()]
    assert gone.id in restored._issued_ids


def test_player_from_bad_record():
    with pytest.raises(InvalidPlayerDataException):
        Player.from_dict({"id": "x", "name": "Kim", "age_group": "u21"})
    with pytest.raises(InvalidPlayerDataException):
        Player.from_dict({"name": "Kim", "age_group": "u9"})
