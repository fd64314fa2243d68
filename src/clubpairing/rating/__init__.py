from clubpairing.rating.elo import (
    expected_score,
    round_half_away_from_zero,
    update_ratings,
)

__all__ = [
    "expected_score",
    "round_half_away_from_zero",
    "update_ratings",
]
