from clubpairing.models.player.player import Player, age_group_for, age_on

__all__ = [
    "Player",
    "age_group_for",
    "age_on",
]
