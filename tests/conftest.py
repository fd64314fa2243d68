import itertools

import pytest

from clubpairing.controllers import Club
from clubpairing.models.enums import AgeGroup


def counting_ids():
    counter = itertools.count(1)
    return lambda prefix: f"{prefix}{next(counter)}"


def add_active(club, name, division=AgeGroup.U11, rating=None):
    result = club.add_player(name, age_group=division, initial_rating=rating)
    assert result, result.message
    player = result.value
    assert club.set_eligible(player.id, True)
    return player


@pytest.fixture
def club():
    return Club(id_source=counting_ids())
