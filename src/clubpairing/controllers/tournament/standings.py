"""Standings projection.

Ranks a tournament roster by points, then rating, then roster order, the
same order the pairing generator uses. Nothing here mutates state.
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

from dataclasses import dataclass
from typing import List, Mapping

from clubpairing.models.enums import AgeGroup
from clubpairing.models.player import Player
from clubpairing.models.tournament import Tournament


@dataclass(frozen=True)
class StandingRow:
    """One line of the standings table."""

    rank: int
    player_id: str
    name: str
    age_group: AgeGroup
    points: float
    rating: int


def get_standings(
    tournament: Tournament, players: Mapping[str, Player]
) -> List[StandingRow]:
    """Get current tournament standings.

    Parameters
    ----------
    tournament : Tournament
        Tournament to rank, at any point of a round
    players : mapping of str to Player
        Registry players by id, for names and live ratings

    Returns
    -------
    list of StandingRow
        Best first, ranks starting at 1
    """
    ranked = sorted(
        tournament.roster,
        key=lambda e: (-e.points, -players[e.player_id].rating, e.seed),
    )
    return [
        StandingRow(
            rank=rank,
            player_id=entry.player_id,
            name=players[entry.player_id].name,
            age_group=players[entry.player_id].age_group,
            points=entry.points,
            rating=players[entry.player_id].rating,
        )
        for rank, entry in enumerate(ranked, start=1)
    ]
