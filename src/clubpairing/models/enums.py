"""Enumerations shared across the engine."""

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

from enum import Enum
from typing import Optional

from clubpairing.constants import (
    DRAW_SCORE,
    LOSS_SCORE,
    RESULT_BLACK_WIN,
    RESULT_DRAW,
    RESULT_WHITE_WIN,
    WIN_SCORE,
)


class AgeGroup(Enum):
    """Age-group divisions run by the club.

    The value is the lower-case key used in saved files and on the command
    line, e.g. ``AgeGroup("u11")``.
    """

    U9 = "u9"
    U11 = "u11"
    U13 = "u13"

    @property
    def label(self) -> str:
        """Display label, e.g. ``U11``."""
        return self.value.upper()

    @classmethod
    def parse(cls, value: str) -> "AgeGroup":
        """Parse a division from user input, case insensitive.

        Raises
        ------
        ValueError
            When ``value`` names no known age group
        """
        return cls(value.strip().lower())


class GameResult(Enum):
    """Result of one board, valued as white's score."""

    WHITE_WIN = WIN_SCORE
    DRAW = DRAW_SCORE
    BLACK_WIN = LOSS_SCORE

    @property
    def white_score(self) -> float:
        return self.value

    @property
    def black_score(self) -> float:
        return WIN_SCORE - self.value

    @property
    def display(self) -> str:
        return _RESULT_DISPLAY[self]

    @classmethod
    def from_score(cls, white_score: float) -> "GameResult":
        """Look up the result for white's score (1, 0.5 or 0)."""
        return cls(float(white_score))

    @classmethod
    def parse(cls, token: str) -> Optional["GameResult"]:
        """Parse ``1-0``, ``0-1``, ``1/2-1/2`` and friends; ``None`` if unknown."""
        return _RESULT_TOKENS.get(token.strip().lower())


_RESULT_DISPLAY = {
    GameResult.WHITE_WIN: RESULT_WHITE_WIN,
    GameResult.DRAW: RESULT_DRAW,
    GameResult.BLACK_WIN: RESULT_BLACK_WIN,
}

_RESULT_TOKENS = {
    RESULT_WHITE_WIN: GameResult.WHITE_WIN,
    "1": GameResult.WHITE_WIN,
    "w": GameResult.WHITE_WIN,
    RESULT_DRAW: GameResult.DRAW,
    "1/2-1/2": GameResult.DRAW,
    "½-½": GameResult.DRAW,
    "0.5": GameResult.DRAW,
    "d": GameResult.DRAW,
    "=": GameResult.DRAW,
    RESULT_BLACK_WIN: GameResult.BLACK_WIN,
    "0": GameResult.BLACK_WIN,
    "b": GameResult.BLACK_WIN,
}


class ErrorKind(Enum):
    """Tags for rejected engine commands."""

    INSUFFICIENT_PLAYERS = "insufficient_players"
    INVALID_BOARD = "invalid_board"
    ALREADY_DECIDED = "already_decided"
    ROUND_INCOMPLETE = "round_incomplete"
    PLAYER_IN_USE = "player_in_use"
    PLAYER_NOT_FOUND = "player_not_found"
    NO_ACTIVE_TOURNAMENT = "no_active_tournament"
    INVALID_PLAYER_DATA = "invalid_player_data"
