"""Tournament aggregate for one division."""

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

from clubpairing.models.enums import AgeGroup
from clubpairing.models.tournament.roster_entry import RosterEntry
from clubpairing.models.tournament.round_data import RoundData


@dataclass
class Tournament:
    """State of the tournament running in one division.

    The aggregate only holds data and answers questions about it; the
    transitions (start, submit, advance) live in
    :mod:`clubpairing.controllers.tournament`.

    Attributes
    ----------
    division : AgeGroup
        Division this tournament governs.
    round_number : int
        Current round, starting at 1.
    roster : list of RosterEntry
        Snapshot of the players admitted at start, in admission order.
    rounds : list of RoundData
        Every round generated so far; the last one is the current round.
    """

    division: AgeGroup
    round_number: int = 1
    roster: List[RosterEntry] = field(default_factory=list)
    rounds: List[RoundData] = field(default_factory=list)

    @property
    def current_round(self) -> Optional[RoundData]:
        """The round being played, or None before round 1 exists."""
        return self.rounds[-1] if self.rounds else None

    @property
    def player_ids(self) -> List[str]:
        return [entry.player_id for entry in self.roster]

    def has_player(self, player_id: str) -> bool:
        return any(entry.player_id == player_id for entry in self.roster)

    def entry(self, player_id: str) -> Optional[RosterEntry]:
        for roster_entry in self.roster:
            if roster_entry.player_id == player_id:
                return roster_entry
        return None

    def is_round_complete(self) -> bool:
        """True iff every pairing of the current round has a result."""
        current = self.current_round
        if current is None:
            return False
        return current.is_completed

    def pending_boards(self) -> int:
        """Number of undecided boards in the current round."""
        current = self.current_round
        return current.pending_count if current else 0

    def to_dict(self) -> Dict[str, Any]:
        """Serialize tournament to dictionary."""
        return {
            "division": self.division.value,
            "round_number": self.round_number,
            "roster": [entry.to_dict() for entry in self.roster],
            "rounds": [r.to_dict() for r in self.rounds],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Tournament":
        """Deserialize tournament from dictionary."""
        return cls(
            division=AgeGroup(data["division"]),
            round_number=int(data.get("round_number", 1)),
            roster=[RosterEntry.from_dict(e) for e in data.get("roster", [])],
            rounds=[RoundData.from_dict(r) for r in data.get("rounds", [])],
        )
