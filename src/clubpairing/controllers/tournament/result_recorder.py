"""Result recording and validation for tournaments.

This module handles recording one board's result with proper validation: the
board must belong to the current round, and a board that already has a result
is left alone so a retried submission is harmless.
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
from typing import Dict, Mapping, Optional, Union

from clubpairing.constants import K_FACTOR
from clubpairing.exceptions import InvalidBoardException, InvalidResultException
from clubpairing.models.enums import GameResult
from clubpairing.models.player import Player
from clubpairing.models.tournament import Pairing, Tournament
from clubpairing.rating import update_ratings
from clubpairing.utils import setup_logger

logger = setup_logger(__name__)


@dataclass
class RecordedResult:
    """What a submission did.

    Attributes
    ----------
    pairing : Pairing
        The board the result was submitted for
    already_decided : bool
        True when the board had a result and nothing changed
    rating_changes : dict of str to tuple of int
        ``player_id -> (old_rating, new_rating)`` for both players
    """

    pairing: Pairing
    already_decided: bool = False
    rating_changes: Dict[str, tuple] = field(default_factory=dict)


def coerce_result(result: Union[GameResult, float]) -> GameResult:
    """Accept a GameResult or white's score (1, 0.5, 0).

    Raises:
        InvalidResultException: If ``result`` is neither
    """
    if isinstance(result, GameResult):
        return result
    try:
        return GameResult.from_score(result)
    except (ValueError, TypeError) as e:
        raise InvalidResultException(
            f"Result must be 1, 0.5 or 0 for white: {result!r}"
        ) from e


class ResultRecorder:
    """Handles recording and validating match results.

    This class is responsible for:
    - Checking the board reference against the current round
    - Ignoring repeated submissions for a decided board
    - Updating points, ratings and opponent history together
    """

    def __init__(self, k_factor: int = K_FACTOR):
        self.k_factor = k_factor

    def record(
        self,
        tournament: Tournament,
        board_index: int,
        result: Union[GameResult, float],
        players: Mapping[str, Player],
        round_index: Optional[int] = None,
    ) -> RecordedResult:
        """Record the result of one board of the current round.

        Args:
            tournament: The running tournament
            board_index: Board number in the current round (0-indexed)
            result: Outcome, valued as white's score
            players: Registry players by id; ratings are updated in place
            round_index: Round the caller believes is current (0-indexed);
                None means the current round

        Returns:
            RecordedResult describing the change

        Raises:
            InvalidBoardException: If the round or board is not open for results
            InvalidResultException: If ``result`` is not a valid outcome
        """
        game_result = coerce_result(result)
        pairing = self._find_open_board(tournament, board_index, round_index)

        if pairing.is_decided:
            logger.info(
                "Board %d of round %d already decided, ignoring resubmission",
                board_index + 1,
                tournament.round_number,
            )
            return RecordedResult(pairing=pairing, already_decided=True)

        white_entry = tournament.entry(pairing.white)
        black_entry = tournament.entry(pairing.black) if pairing.black else None
        white = players.get(pairing.white)
        black = players.get(pairing.black) if pairing.black else None
        if white_entry is None or white is None or (
            pairing.black and (black_entry is None or black is None)
        ):
            raise InvalidBoardException(
                f"Board {board_index + 1} refers to a player outside the roster"
            )

        # compute everything first, then commit in one go
        rating_changes: Dict[str, tuple] = {}
        if black is not None:
            new_white, new_black = update_ratings(
                white.rating, black.rating, game_result.white_score, self.k_factor
            )
            rating_changes[white.id] = (white.rating, new_white)
            rating_changes[black.id] = (black.rating, new_black)

        pairing.result = game_result
        white_entry.points += game_result.white_score
        if black_entry is not None and black is not None:
            black_entry.points += game_result.black_score
            white_entry.add_opponent(black.id)
            black_entry.add_opponent(white.id)
            white.rating = rating_changes[white.id][1]
            black.rating = rating_changes[black.id][1]

        logger.info(
            "Round %d board %d: %s %s %s",
            tournament.round_number,
            board_index + 1,
            pairing.white,
            game_result.display,
            pairing.black,
        )
        return RecordedResult(pairing=pairing, rating_changes=rating_changes)

    def _find_open_board(
        self,
        tournament: Tournament,
        board_index: int,
        round_index: Optional[int],
    ) -> Pairing:
        current = tournament.current_round
        current_index = len(tournament.rounds) - 1
        if current is None:
            raise InvalidBoardException("Tournament has no round to record")
        if round_index is not None and round_index != current_index:
            raise InvalidBoardException(
                f"Round {round_index + 1} is not the current round "
                f"({current_index + 1})"
            )
        pairing = current.board(board_index)
        if pairing is None:
            raise InvalidBoardException(
                f"Board {board_index + 1} does not exist in round "
                f"{current.round_number} ({len(current.pairings)} boards)"
            )
        return pairing
