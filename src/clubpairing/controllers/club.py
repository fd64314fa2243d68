"""Club - the command surface of the engine.

This is the primary interface for running divisions: it owns the player
registry and one tournament slot per age group, and coordinates the
specialized managers. Every command returns a :class:`CommandResult`
instead of raising for a rejected request.
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

import threading
from datetime import date
from typing import Any, Callable, Dict, List, Optional, Union

from clubpairing.controllers.registry import PlayerRegistry
from clubpairing.controllers.tournament import (
    ResultRecorder,
    RoundManager,
    StandingRow,
    get_standings,
)
from clubpairing.exceptions import (
    ClubPairingException,
    InvalidPlayerDataException,
    NoActiveTournamentException,
    PlayerInUseException,
)
from clubpairing.models.club_config import ClubConfig
from clubpairing.models.command_result import CommandResult
from clubpairing.models.enums import AgeGroup, ErrorKind, GameResult
from clubpairing.models.player import Player
from clubpairing.models.tournament import RoundData, Tournament
from clubpairing.utils import setup_logger
from clubpairing.utils.export import standings_csv

logger = setup_logger(__name__)


class Club:
    """Main club management class.

    This class coordinates all operations through specialized managers:
    - PlayerRegistry: owns the players and their ratings
    - RoundManager: starts divisions and pairs rounds
    - ResultRecorder: records board results and rating changes

    Commands run one at a time under a single re-entrant lock, so a
    multi-threaded shell sees one writer per club and reads a consistent
    snapshot.
    """

    def __init__(
        self,
        config: Optional[ClubConfig] = None,
        registry: Optional[PlayerRegistry] = None,
        id_source: Optional[Callable[[str], str]] = None,
    ) -> None:
        self.config = config or ClubConfig()
        self.registry = registry or PlayerRegistry(id_source=id_source)
        self.tournaments: Dict[AgeGroup, Optional[Tournament]] = {
            group: None for group in AgeGroup
        }
        self.archive_records: List[Tournament] = []
        self.round_manager = RoundManager(min_players=self.config.min_players)
        self.result_recorder = ResultRecorder(k_factor=self.config.k_factor)
        self._lock = threading.RLock()

    def _run(self, action: str, command: Callable[[], CommandResult]) -> CommandResult:
        """Run ``command`` under the lock, turning engine errors into rejections."""
        with self._lock:
            try:
                return command()
            except ClubPairingException as e:
                if e.kind is None:
                    raise
                logger.warning("%s rejected (%s): %s", action, e.kind.name, e)
                return CommandResult.failure(e.kind, str(e))

    def _active(self, division: AgeGroup) -> Tournament:
        tournament = self.tournaments.get(division)
        if tournament is None:
            raise NoActiveTournamentException(
                f"No active tournament in {division.label}"
            )
        return tournament

    def _players_by_id(self) -> Dict[str, Player]:
        return {p.id: p for p in self.registry}

    # ========== Player Management ==========

    def add_player(
        self,
        name: str,
        age_group: Optional[AgeGroup] = None,
        initial_rating: Optional[int] = None,
        date_of_birth: Optional[date] = None,
    ) -> CommandResult:
        """Register a player. The value is the new Player."""

        def command() -> CommandResult:
            player = self.registry.add(
                name,
                age_group=age_group,
                initial_rating=initial_rating,
                date_of_birth=date_of_birth,
                default_rating=self.config.default_rating,
            )
            return CommandResult.success(player, f"Added {player}")

        return self._run("add_player", command)

    def remove_player(self, player_id: str) -> CommandResult:
        """Remove a player who is not on any active tournament roster."""

        def command() -> CommandResult:
            for division, tournament in self.tournaments.items():
                if tournament is not None and tournament.has_player(player_id):
                    raise PlayerInUseException(
                        f"Player {player_id} is playing in {division.label}"
                    )
            player = self.registry.remove(player_id)
            return CommandResult.success(player, f"Removed {player.name}")

        return self._run("remove_player", command)

    def set_eligible(self, player_id: str, is_active: bool) -> CommandResult:
        def command() -> CommandResult:
            player = self.registry.set_eligible(player_id, is_active)
            return CommandResult.success(player)

        return self._run("set_eligible", command)

    def toggle_eligible(self, player_id: str) -> CommandResult:
        def command() -> CommandResult:
            player = self.registry.toggle_eligible(player_id)
            return CommandResult.success(player)

        return self._run("toggle_eligible", command)

    def clear_all(self) -> CommandResult:
        """Drop every player, tournament and archive record."""

        def command() -> CommandResult:
            self.registry.clear()
            self.tournaments = {group: None for group in AgeGroup}
            self.archive_records.clear()
            logger.info("Cleared all players and tournaments")
            return CommandResult.success()

        return self._run("clear_all", command)

    # ========== Tournament Commands ==========

    def start_tournament(self, division: AgeGroup) -> CommandResult:
        """Start ``division`` with its eligible players and pair round 1.

        A tournament already running in the division is archived once the
        new one has been created.
        """

        def command() -> CommandResult:
            tournament = self.round_manager.start(
                division, self.registry.eligible_for(division)
            )
            previous = self.tournaments.get(division)
            if previous is not None:
                self.archive_records.append(previous)
                logger.info("Archived previous %s tournament", division.label)
            self.tournaments[division] = tournament
            return CommandResult.success(
                tournament, f"{division.label} started with {len(tournament.roster)} players"
            )

        return self._run("start_tournament", command)

    def submit_result(
        self,
        division: AgeGroup,
        board_index: int,
        result: Union[GameResult, float],
        round_index: Optional[int] = None,
    ) -> CommandResult:
        """Record a board of the current round (0-indexed).

        The value is the RecordedResult: the board and each player's
        ``(old, new)`` rating.

        A repeated submission for a decided board is accepted as a no-op and
        tagged ``ALREADY_DECIDED``.
        """

        def command() -> CommandResult:
            tournament = self._active(division)
            recorded = self.result_recorder.record(
                tournament,
                board_index,
                result,
                self._players_by_id(),
                round_index=round_index,
            )
            if recorded.already_decided:
                return CommandResult.success(
                    recorded,
                    f"Board {board_index + 1} already decided",
                    error=ErrorKind.ALREADY_DECIDED,
                )
            return CommandResult.success(recorded)

        return self._run("submit_result", command)

    def advance_round(self, division: AgeGroup) -> CommandResult:
        """Pair the next round; rejected while any board is undecided."""

        def command() -> CommandResult:
            tournament = self._active(division)
            players = self._players_by_id()
            ratings = {pid: players[pid].rating for pid in tournament.player_ids}
            round_data = self.round_manager.advance(tournament, ratings)
            return CommandResult.success(
                round_data, f"{division.label} round {round_data.round_number}"
            )

        return self._run("advance_round", command)

    def archive(self, division: AgeGroup) -> CommandResult:
        """Close the division's tournament, keeping a read-only record."""

        def command() -> CommandResult:
            tournament = self._active(division)
            self.archive_records.append(tournament)
            self.tournaments[division] = None
            logger.info(
                "Archived %s after round %d", division.label, tournament.round_number
            )
            return CommandResult.success(tournament)

        return self._run("archive", command)

    # ========== Read-only Projections ==========

    def tournament(self, division: AgeGroup) -> Optional[Tournament]:
        return self.tournaments.get(division)

    def current_round(self, division: AgeGroup) -> CommandResult:
        def command() -> CommandResult:
            return CommandResult.success(self._active(division).current_round)

        return self._run("current_round", command)

    def is_round_complete(self, division: AgeGroup) -> bool:
        with self._lock:
            tournament = self.tournaments.get(division)
            return tournament is not None and tournament.is_round_complete()

    def get_standings(self, division: AgeGroup) -> CommandResult:
        """Ranked standings of the division. The value is a list of StandingRow."""

        def command() -> CommandResult:
            rows: List[StandingRow] = get_standings(
                self._active(division), self._players_by_id()
            )
            return CommandResult.success(rows)

        return self._run("get_standings", command)

    def export_standings_csv(self, division: AgeGroup) -> CommandResult:
        """Standings as ``Name,Points,Rating`` CSV text."""

        def command() -> CommandResult:
            rows = get_standings(self._active(division), self._players_by_id())
            return CommandResult.success(standings_csv(rows))

        return self._run("export_standings_csv", command)

    # ========== Serialization ==========

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the whole club to a dictionary."""
        with self._lock:
            return {
                "config": self.config.to_dict(),
                "registry": self.registry.to_dict(),
                "tournaments": {
                    group.value: (t.to_dict() if t is not None else None)
                    for group, t in self.tournaments.items()
                },
                "archive": [t.to_dict() for t in self.archive_records],
            }

    @classmethod
    def from_dict(
        cls,
        data: Dict[str, Any],
        id_source: Optional[Callable[[str], str]] = None,
    ) -> "Club":
        """Rebuild a club saved with :meth:`to_dict`.

        Raises:
            InvalidPlayerDataException: If an active roster names a player
                missing from the registry
        """
        club = cls(
            config=ClubConfig.from_dict(data.get("config", {})),
            registry=PlayerRegistry.from_dict(data.get("registry", {}), id_source),
        )
        for key, tournament_data in data.get("tournaments", {}).items():
            if tournament_data is None:
                continue
            tournament = Tournament.from_dict(tournament_data)
            unknown = [pid for pid in tournament.player_ids if pid not in club.registry]
            if unknown:
                raise InvalidPlayerDataException(
                    f"{tournament.division.label} roster names unknown players: "
                    f"{', '.join(unknown)}"
                )
            club.tournaments[AgeGroup(key)] = tournament
        club.archive_records = [
            Tournament.from_dict(t) for t in data.get("archive", [])
        ]
        logger.info(
            "Loaded club: %d players, %d active tournaments",
            len(club.registry),
            sum(1 for t in club.tournaments.values() if t is not None),
        )
        return club
