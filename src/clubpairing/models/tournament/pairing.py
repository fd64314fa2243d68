"""Pairing data class."""

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
from typing import Any, Dict, Optional

from clubpairing.constants import RESULT_BYE, RESULT_PENDING
from clubpairing.models.enums import GameResult


@dataclass
class Pairing:
    """One board of a round.

    Attributes
    ----------
    white : str
        ID of the white player
    black : str or None
        ID of the black player, ``None`` for a bye
    result : GameResult or None
        ``None`` until decided. Once set it is never overwritten.
    """

    white: str
    black: Optional[str] = None
    result: Optional[GameResult] = None

    @classmethod
    def bye(cls, player_id: str) -> "Pairing":
        """A bye board, decided in white's favour from the start."""
        return cls(white=player_id, black=None, result=GameResult.WHITE_WIN)

    @property
    def is_bye(self) -> bool:
        return self.black is None

    @property
    def is_decided(self) -> bool:
        return self.result is not None

    @property
    def player_ids(self) -> tuple:
        if self.black is None:
            return (self.white,)
        return (self.white, self.black)

    @property
    def result_display(self) -> str:
        if self.is_bye:
            return RESULT_BYE
        if self.result is None:
            return RESULT_PENDING
        return self.result.display

    def to_dict(self) -> Dict[str, Any]:
        """Serialize pairing to dictionary."""
        return {
            "white": self.white,
            "black": self.black,
            "result": self.result.value if self.result is not None else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Pairing":
        """Deserialize pairing from dictionary."""
        result = data.get("result")
        return cls(
            white=data["white"],
            black=data.get("black"),
            result=GameResult.from_score(result) if result is not None else None,
        )
