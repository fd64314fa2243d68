"""Data model for tournament round."""

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

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from clubpairing.models.tournament.pairing import Pairing


@dataclass
class RoundData:
    """Container for all data related to a single tournament round.

    Attributes
    ----------
    round_number : int
        Round number (1-indexed).
    pairings : list of Pairing
        Boards in generation order; board ``i`` is ``pairings[i]``. The
        number of boards never changes after the round is created.
    """

    round_number: int
    pairings: List[Pairing] = field(default_factory=list)

    @property
    def is_completed(self) -> bool:
        """True once every board, byes included, has a result."""
        return all(p.is_decided for p in self.pairings)

    @property
    def pending_count(self) -> int:
        return sum(1 for p in self.pairings if not p.is_decided)

    @property
    def bye_player_id(self) -> Optional[str]:
        for pairing in self.pairings:
            if pairing.is_bye:
                return pairing.white
        return None

    def board(self, board_index: int) -> Optional[Pairing]:
        """Return the pairing on ``board_index`` (0-indexed), or None."""
        if 0 <= board_index < len(self.pairings):
            return self.pairings[board_index]
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize round data to dictionary."""
        return {
            "round_number": self.round_number,
            "pairings": [p.to_dict() for p in self.pairings],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RoundData":
        """Deserialize round data from dictionary."""
        return cls(
            round_number=data["round_number"],
            pairings=[Pairing.from_dict(p) for p in data.get("pairings", [])],
        )
