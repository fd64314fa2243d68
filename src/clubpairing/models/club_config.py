"""ClubConfig data class."""

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

from dataclasses import dataclass
from typing import Any, Dict

from clubpairing.constants import (
    DEFAULT_RATING,
    K_FACTOR,
    MIN_PLAYERS_TO_START,
)


@dataclass
class ClubConfig:
    """Club-wide settings.

    Attributes
    ----------
    k_factor : int
        Elo K constant used for every rated game.
    default_rating : int
        Rating given to newly registered players.
    min_players : int
        Eligible players needed to start a division.
    """

    k_factor: int = K_FACTOR
    default_rating: int = DEFAULT_RATING
    min_players: int = MIN_PLAYERS_TO_START

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return {
            "k_factor": self.k_factor,
            "default_rating": self.default_rating,
            "min_players": self.min_players,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ClubConfig":
        """Deserialize configuration from dictionary."""
        return cls(
            k_factor=int(data.get("k_factor", K_FACTOR)),
            default_rating=int(data.get("default_rating", DEFAULT_RATING)),
            min_players=max(
                MIN_PLAYERS_TO_START,
                int(data.get("min_players", MIN_PLAYERS_TO_START)),
            ),
        )
