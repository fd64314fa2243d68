"""Tournament-scoped state of one roster member."""

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
from typing import Any, Dict, List


@dataclass
class RosterEntry:
    """
    A player admitted to a tournament, with the state that tournament owns.

    Attributes
    ----------
    player_id : str
        Registry ID of the player.
    seed : int
        Position in the roster snapshot; the last tie-break when sorting.
    points : float
        Tournament points, always a multiple of 0.5.
    opponents : list of str
        IDs already faced, in the order they were met. An ID appears at
        most once.
    """

    player_id: str
    seed: int
    points: float = 0.0
    opponents: List[str] = field(default_factory=list)

    def add_opponent(self, player_id: str) -> None:
        """Record an opponent; a repeat pairing does not duplicate the ID."""
        if player_id not in self.opponents:
            self.opponents.append(player_id)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "player_id": self.player_id,
            "seed": self.seed,
            "points": self.points,
            "opponents": list(self.opponents),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RosterEntry":
        return cls(
            player_id=str(data["player_id"]),
            seed=int(data["seed"]),
            points=float(data.get("points", 0.0)),
            opponents=[str(o) for o in data.get("opponents", [])],
        )
