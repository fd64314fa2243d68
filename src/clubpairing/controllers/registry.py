"""Player registry: the canonical list of club members."""

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

from datetime import date
from typing import Any, Callable, Dict, Iterator, List, Optional

from clubpairing.constants import DEFAULT_RATING
from clubpairing.exceptions import (
    InvalidPlayerDataException,
    PlayerNotFoundException,
)
from clubpairing.models.enums import AgeGroup
from clubpairing.models.player import Player, age_group_for
from clubpairing.utils import generate_id, setup_logger
from clubpairing.utils.validation import validate_name_strict, validate_rating_strict

logger = setup_logger(__name__)


class PlayerRegistry:
    """Owns the club's players, in registration order.

    IDs come from ``id_source`` (``generate_id`` by default); an ID that is
    already taken, or was ever handed out before, is drawn again so IDs stay
    unique and are never reused.
    """

    def __init__(self, id_source: Optional[Callable[[str], str]] = None) -> None:
        self._players: Dict[str, Player] = {}
        self._issued_ids: set = set()
        self._id_source = id_source or generate_id

    def __len__(self) -> int:
        return len(self._players)

    def __iter__(self) -> Iterator[Player]:
        return iter(self._players.values())

    def __contains__(self, player_id: object) -> bool:
        return player_id in self._players

    def _next_id(self) -> str:
        player_id = self._id_source("player_")
        while player_id in self._issued_ids:
            logger.debug("Identifier %s already issued, drawing again", player_id)
            player_id = self._id_source("player_")
        self._issued_ids.add(player_id)
        return player_id

    def add(
        self,
        name: str,
        age_group: Optional[AgeGroup] = None,
        initial_rating: Optional[int] = None,
        date_of_birth: Optional[date] = None,
        default_rating: int = DEFAULT_RATING,
    ) -> Player:
        """Register a new, not yet eligible, player.

        Args:
            name: Display name, must not be blank
            age_group: Division; derived from ``date_of_birth`` when omitted
            initial_rating: Starting rating, ``default_rating`` when omitted
            date_of_birth: Optional birthday
            default_rating: Rating used when ``initial_rating`` is None

        Returns:
            The created Player

        Raises:
            ValidationException: If the name or rating is unusable
            InvalidPlayerDataException: If no division can be determined
        """
        clean_name = validate_name_strict(name)
        rating = (
            default_rating
            if initial_rating is None
            else validate_rating_strict(initial_rating)
        )
        if age_group is None:
            if date_of_birth is None:
                raise InvalidPlayerDataException(
                    f"An age group or a date of birth is required for {clean_name}"
                )
            age_group = age_group_for(date_of_birth)

        player = Player(
            _id=self._next_id(),
            name=clean_name,
            age_group=age_group,
            rating=rating,
            date_of_birth=date_of_birth,
        )
        self._players[player.id] = player
        logger.info("Added player: %s (%s)", player.name, player.id)
        return player

    def get(self, player_id: str) -> Player:
        """Look up a player.

        Raises:
            PlayerNotFoundException: If no player has ``player_id``
        """
        player = self._players.get(player_id)
        if player is None:
            raise PlayerNotFoundException(f"No player with id {player_id}")
        return player

    def find(self, player_id: str) -> Optional[Player]:
        return self._players.get(player_id)

    def remove(self, player_id: str) -> Player:
        """Remove a player. Callers check tournament membership first.

        Raises:
            PlayerNotFoundException: If no player has ``player_id``
        """
        player = self.get(player_id)
        del self._players[player_id]
        logger.info("Removed player: %s (%s)", player.name, player_id)
        return player

    def set_eligible(self, player_id: str, is_active: bool) -> Player:
        """Set a player's eligibility for the next division start."""
        player = self.get(player_id)
        player.is_active = is_active
        logger.info("Set %s active status to: %s", player.name, is_active)
        return player

    def toggle_eligible(self, player_id: str) -> Player:
        player = self.get(player_id)
        return self.set_eligible(player_id, not player.is_active)

    def players(self, active_only: bool = False) -> List[Player]:
        """Players in registration order."""
        players = list(self._players.values())
        if active_only:
            return [p for p in players if p.is_active]
        return players

    def eligible_for(self, division: AgeGroup) -> List[Player]:
        """Active players of ``division`` in registration order."""
        return [
            p for p in self._players.values() if p.is_active and p.age_group == division
        ]

    def clear(self) -> None:
        """Forget every player. Issued IDs stay reserved."""
        self._players.clear()
        logger.info("Cleared player registry")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "players": [p.to_dict() for p in self._players.values()],
            "issued_ids": sorted(self._issued_ids),
        }

    @classmethod
    def from_dict(
        cls,
        data: Dict[str, Any],
        id_source: Optional[Callable[[str], str]] = None,
    ) -> "PlayerRegistry":
        registry = cls(id_source=id_source)
        for player_data in data.get("players", []):
            player = Player.from_dict(player_data)
            registry._players[player.id] = player
            registry._issued_ids.add(player.id)
        registry._issued_ids.update(str(i) for i in data.get("issued_ids", []))
        return registry
