import pytest

from clubpairing.exceptions import InvalidResultException
from clubpairing.rating import (
    expected_score,
    round_half_away_from_zero,
    update_ratings,
)


def test_equal_ratings_decisive_game():
    assert update_ratings(1200, 1200, 1.0) == (1216, 1184)
    assert update_ratings(1200, 1200, 0.0) == (1184, 1216)


def test_equal_ratings_draw_is_unchanged():
    assert update_ratings(1500, 1500, 0.5) == (1500, 1500)


def test_both_sides_use_pre_game_ratings():
    # favourite loses: E_a = 1 / (1 + 10 ** -1) = 0.909...
    assert update_ratings(1400, 1000, 0.0) == (1371, 1029)
    assert update_ratings(1000, 1400, 1.0) == (1029, 1371)


def test_decisive_result_moves_ratings_apart():
    for rating_a, rating_b in [(800, 1600), (1200, 1250), (1500, 1300), (1700, 1100)]:
        assert 32 * (1 - expected_score(rating_a, rating_b)) >= 0.5
        new_a, new_b = update_ratings(rating_a, rating_b, 1.0)
        assert new_a > rating_a
        assert new_b < rating_b


def test_expected_win_over_much_weaker_player_rounds_to_no_change():
    # 32 * (1 - 0.9943) is about 0.18, which rounds away
    assert update_ratings(2000, 1100, 1.0) == (2000, 1100)


def test_k_factor_is_configurable():
    assert update_ratings(1200, 1200, 1.0, k_factor=20) == (1210, 1190)


def test_expected_score():
    assert expected_score(1200, 1200) == pytest.approx(0.5)
    assert expected_score(1600, 1200) + expected_score(1200, 1600) == pytest.approx(1.0)
    assert expected_score(1600, 1200) == pytest.approx(10 / 11)


def test_rounding_ties_away_from_zero():
    assert round_half_away_from_zero(1200.5) == 1201
    assert round_half_away_from_zero(1200.49) == 1200
    assert round_half_away_from_zero(-0.5) == -1
    assert round_half_away_from_zero(2.5) == 3


@pytest.mark.parametrize("score", [0.25, 2, -1, "win", None])
def test_invalid_score_rejected(score):
    with pytest.raises(InvalidResultException):
        update_ratings(1200, 1200, score)
