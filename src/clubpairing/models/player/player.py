"""A club member who can be entered into a division."""

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

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Optional

from dateutil.relativedelta import relativedelta

from clubpairing.constants import AGE_GROUP_LIMITS, DEFAULT_RATING
from clubpairing.exceptions import InvalidPlayerDataException
from clubpairing.models.enums import AgeGroup
from clubpairing.utils import setup_logger

logger = setup_logger(__name__)


def age_on(date_of_birth: date, on_date: Optional[date] = None) -> int:
    """Age in whole years on ``on_date`` (today by default)."""
    return relativedelta(on_date or date.today(), date_of_birth).years


def age_group_for(date_of_birth: date, on_date: Optional[date] = None) -> AgeGroup:
    """Youngest age group a player born on ``date_of_birth`` may enter.

    Parameters
    ----------
    date_of_birth : date
        The player's birthday
    on_date : date, optional
        Reference day, usually the first day of the season. Defaults to today.

    Returns
    -------
    AgeGroup
        ``U9`` for players under 9, ``U11`` under 11, ``U13`` under 13

    Raises
    ------
    InvalidPlayerDataException
        When the player is too old for every division, or not born yet
    """
    on_date = on_date or date.today()
    age = age_on(date_of_birth, on_date)
    if date_of_birth > on_date:
        raise InvalidPlayerDataException(f"Date of birth {date_of_birth} is in the future")
    for key, limit in AGE_GROUP_LIMITS.items():
        if age < limit:
            return AgeGroup(key)
    raise InvalidPlayerDataException(
        f"A player aged {age} is too old for every division"
    )


@dataclass
class Player:
    """
    A registered club member.

    Ratings are kept here, on the registry entry, and are moved only by the
    Elo model after a decided game. Tournament points and opponent history
    are tournament scoped and live on the roster instead.

    Attributes
    ----------
    id : str
        Immutable unique identifier, issued by the registry.
    name : str
        Display name, never empty.
    age_group : AgeGroup
        Division the player competes in.
    rating : int
        Current Elo rating.
    is_active : bool
        Eligibility flag read when a division starts. New players start
        inactive.
    date_of_birth : date or None
        Birthday, when known.
    """

    _id: str
    name: str
    age_group: AgeGroup
    rating: int = DEFAULT_RATING
    is_active: bool = False
    date_of_birth: Optional[date] = None

    @property
    def id(self) -> str:
        """Immutable player identifier."""
        return self._id

    @property
    def age(self) -> Optional[int]:
        """Age in years, or None if date of birth is unknown."""
        if self.date_of_birth is None:
            logger.debug("%s has no date of birth set", self.name)
            return None
        return age_on(self.date_of_birth)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize player data to dictionary."""
        return {
            "id": self._id,
            "name": self.name,
            "age_group": self.age_group.value,
            "rating": self.rating,
            "is_active": self.is_active,
            "date_of_birth": (
                self.date_of_birth.isoformat() if self.date_of_birth else None
            ),
        }

    @classmethod
    def from_dict(cls, player_data: Dict[str, Any]) -> "Player":
        """Create a Player from serialized dictionary data.

        Raises
        ------
        InvalidPlayerDataException
            When a required key is missing or holds an unusable value
        """
        try:
            dob_value = player_data.get("date_of_birth")
            date_of_birth = date.fromisoformat(dob_value) if dob_value else None
            return cls(
                _id=str(player_data["id"]),
                name=player_data["name"],
                age_group=AgeGroup(player_data["age_group"]),
                rating=int(player_data.get("rating", DEFAULT_RATING)),
                is_active=bool(player_data.get("is_active", False)),
                date_of_birth=date_of_birth,
            )
        except (KeyError, ValueError, TypeError) as e:
            raise InvalidPlayerDataException(
                f"Unreadable player record {player_data!r}: {e}"
            ) from e

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return f"Player(name='{self.name}', rating={self.rating}, id='{self.id}')"

    def __str__(self) -> str:
        """Return human-readable string representation.

        Example
        -------
            Nicolas (1200)
        """
        return f"{self.name} ({self.rating})"
