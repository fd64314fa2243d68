"""Greedy Swiss Pairing System Implementation.

Players are ranked by points, then rating, then roster order, and paired top
down with the first lower-ranked player they have not met yet. When everyone
left has already been met, the first remaining player is taken anyway: a
repeat game is better than an idle player. An odd player out gets the bye.

The policy is greedy on purpose. It does not look ahead to check whether
delaying a forced repeat would have saved a fresh pairing further down.
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

from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, List, Optional, Tuple

from clubpairing.exceptions import NoPairingAvailableException
from clubpairing.models.tournament import Pairing
from clubpairing.utils import setup_logger

logger = setup_logger(__name__)


@dataclass(frozen=True)
class PairingCandidate:
    """What the generator needs to know about one player.

    Attributes
    ----------
    player_id : str
        Player identifier
    points : float
        Tournament points so far
    rating : int
        Current rating, the first tie-break
    seed : int
        Roster order, the last tie-break
    opponents : frozenset of str
        IDs the player has already met
    """

    player_id: str
    points: float
    rating: int
    seed: int
    opponents: FrozenSet[str] = field(default_factory=frozenset)


def sort_candidates(candidates: Iterable[PairingCandidate]) -> List[PairingCandidate]:
    """Sort by points desc, then rating desc, then seed asc."""
    return sorted(candidates, key=lambda c: (-c.points, -c.rating, c.seed))


def _find_fresh_opponent(
    player: PairingCandidate, remaining: List[PairingCandidate]
) -> Optional[int]:
    """Index of the first remaining player ``player`` has not met, if any."""
    for i, other in enumerate(remaining):
        if other.player_id not in player.opponents:
            return i
    return None


def generate_round(candidates: Iterable[PairingCandidate]) -> List[Pairing]:
    """
    Create the pairings of one round.

    Parameters
    ----------
    candidates : iterable of PairingCandidate
        Every player to be paired this round

    Returns
    -------
    list of Pairing
        Boards in the order they were formed. A bye, if any, is the last
        board and is already decided as a white win.

    Raises
    ------
    NoPairingAvailableException
        When ``candidates`` is empty
    """
    remaining = sort_candidates(candidates)
    if not remaining:
        raise NoPairingAvailableException("Cannot pair an empty pool")

    pairings: List[Pairing] = []
    repeats: List[Tuple[str, str]] = []

    while len(remaining) >= 2:
        player1 = remaining.pop(0)

        best_idx = _find_fresh_opponent(player1, remaining)
        if best_idx is None:
            # Everyone left has been met already, take the next in line
            best_idx = 0
            repeats.append((player1.player_id, remaining[0].player_id))

        player2 = remaining.pop(best_idx)
        pairings.append(Pairing(white=player1.player_id, black=player2.player_id))

    if remaining:
        bye_player = remaining.pop()
        pairings.append(Pairing.bye(bye_player.player_id))
        logger.info("Bye assigned to %s", bye_player.player_id)

    if repeats:
        logger.warning("Forced %d repeat pairing(s): %s", len(repeats), repeats)

    return pairings
