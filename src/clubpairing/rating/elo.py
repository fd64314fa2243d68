"""Elo rating updates for a single game.

Both ratings are always computed from the same pre-game values, never one
after the other.
"""

# Club Pairing
# Copyright (C) 2025  Club Pairing developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import math
from typing import Tuple

from clubpairing.constants import ELO_SCALE, K_FACTOR, WIN_SCORE
from clubpairing.utils.validation import validate_score_strict


def round_half_away_from_zero(value: float) -> int:
    """Round to the nearest integer, ties away from zero (1200.5 -> 1201)."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def expected_score(rating_a: float, rating_b: float) -> float:
    """Expected score of player A against player B.

    Parameters
    ----------
    rating_a : float
        Rating of the player whose expectation is computed
    rating_b : float
        Rating of the opponent

    Returns
    -------
    float
        Value in (0, 1); 0.5 for equal ratings
    """
    return 1.0 / (1.0 + 10 ** ((rating_b - rating_a) / ELO_SCALE))


def update_ratings(
    rating_a: int, rating_b: int, score_a: float, k_factor: int = K_FACTOR
) -> Tuple[int, int]:
    """New ratings of both players after one game.

    Parameters
    ----------
    rating_a : int
        Pre-game rating of player A
    rating_b : int
        Pre-game rating of player B
    score_a : float
        A's score: 1 win, 0.5 draw, 0 loss. B scores ``1 - score_a``.
    k_factor : int
        Elo K constant

    Returns
    -------
    tuple of int
        ``(new_rating_a, new_rating_b)``

    Raises
    ------
    InvalidResultException
        When ``score_a`` is not 0, 0.5 or 1
    """
    score_a = validate_score_strict(score_a)
    expected_a = expected_score(rating_a, rating_b)
    expected_b = 1.0 - expected_a
    score_b = WIN_SCORE - score_a

    new_a = round_half_away_from_zero(rating_a + k_factor * (score_a - expected_a))
    new_b = round_half_away_from_zero(rating_b + k_factor * (score_b - expected_b))
    return new_a, new_b
