"""Round management for tournaments.

This module handles starting a division, pairing generation and round
progression. Advancing is gated on every board of the current round being
decided.
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

from typing import List, Mapping, Sequence

from clubpairing.constants import BYE_SCORE, MIN_PLAYERS_TO_START
from clubpairing.exceptions import (
    InsufficientPlayersException,
    RoundIncompleteException,
)
from clubpairing.models.enums import AgeGroup
from clubpairing.models.player import Player
from clubpairing.models.tournament import RosterEntry, RoundData, Tournament
from clubpairing.pairing import PairingCandidate, generate_round
from clubpairing.utils import setup_logger

logger = setup_logger(__name__)


class RoundManager:
    """Manages round progression and pairing generation for tournaments.

    This class is responsible for:
    - Snapshotting the roster when a division starts
    - Generating pairings from current standings
    - Crediting byes the moment they are assigned
    - Refusing to advance while results are outstanding
    """

    def __init__(self, min_players: int = MIN_PLAYERS_TO_START):
        """Initialize the round manager.

        Args:
            min_players: Eligible players required to start a division
        """
        self.min_players = max(MIN_PLAYERS_TO_START, min_players)

    def start(self, division: AgeGroup, players: Sequence[Player]) -> Tournament:
        """Create a tournament for ``division`` and pair round 1.

        Args:
            division: The age group the tournament governs
            players: Eligible players, in roster order

        Returns:
            The new tournament, in round 1

        Raises:
            InsufficientPlayersException: If fewer than ``min_players`` are given
        """
        if len(players) < self.min_players:
            raise InsufficientPlayersException(
                f"Need at least {self.min_players} active players in "
                f"{division.label}, found {len(players)}"
            )

        tournament = Tournament(
            division=division,
            round_number=1,
            roster=[
                RosterEntry(player_id=p.id, seed=seed)
                for seed, p in enumerate(players)
            ],
        )
        ratings = {p.id: p.rating for p in players}
        tournament.rounds.append(self._build_round(tournament, 1, ratings))
        self._credit_byes(tournament, tournament.rounds[-1])

        logger.info(
            "Started %s with %d players", division.label, len(tournament.roster)
        )
        return tournament

    def advance(self, tournament: Tournament, ratings: Mapping[str, int]) -> RoundData:
        """Pair the next round once the current one is fully decided.

        Args:
            tournament: The running tournament
            ratings: Current rating of every roster player (id -> rating)

        Returns:
            The newly appended round

        Raises:
            RoundIncompleteException: If any board of the current round is undecided
        """
        if not tournament.is_round_complete():
            raise RoundIncompleteException(
                "All results must be entered first "
                f"({tournament.pending_boards()} game(s) pending)"
            )

        next_number = tournament.round_number + 1
        round_data = self._build_round(tournament, next_number, ratings)

        tournament.round_number = next_number
        tournament.rounds.append(round_data)
        self._credit_byes(tournament, round_data)

        logger.info(
            "%s advanced to round %d: %d boards",
            tournament.division.label,
            next_number,
            len(round_data.pairings),
        )
        return round_data

    def candidates(
        self, tournament: Tournament, ratings: Mapping[str, int]
    ) -> List[PairingCandidate]:
        """Pairing view of the roster."""
        return [
            PairingCandidate(
                player_id=entry.player_id,
                points=entry.points,
                rating=ratings[entry.player_id],
                seed=entry.seed,
                opponents=frozenset(entry.opponents),
            )
            for entry in tournament.roster
        ]

    def _build_round(
        self, tournament: Tournament, round_number: int, ratings: Mapping[str, int]
    ) -> RoundData:
        pairings = generate_round(self.candidates(tournament, ratings))
        return RoundData(round_number=round_number, pairings=pairings)

    def _credit_byes(self, tournament: Tournament, round_data: RoundData) -> None:
        """Award bye points at generation time; byes never touch ratings."""
        for pairing in round_data.pairings:
            if pairing.is_bye:
                entry = tournament.entry(pairing.white)
                if entry is not None:
                    entry.points += BYE_SCORE
                    logger.debug(
                        "Credited bye to %s in round %d",
                        pairing.white,
                        round_data.round_number,
                    )
