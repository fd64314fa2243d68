from clubpairing.controllers.club import Club
from clubpairing.controllers.registry import PlayerRegistry

__all__ = [
    "Club",
    "PlayerRegistry",
]
