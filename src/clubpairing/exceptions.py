"""Exceptions for use in Club Pairing"""

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

from typing import Optional

from clubpairing.models.enums import ErrorKind

# ========== Base Application Exception ==========


class ClubPairingException(Exception):
    """Base exception for all Club Pairing errors.

    All custom exceptions in the application should inherit from this class.
    Exceptions that map onto a rejected engine command set ``kind`` so the
    command surface can turn them into a tagged result.
    """

    kind: Optional[ErrorKind] = None


# ========== Pairing Exceptions ==========


class PairingException(ClubPairingException):
    """Base exception for pairing-related errors."""

    pass


class NoPairingAvailableException(PairingException):
    """Raised when no valid pairing can be generated."""

    pass


# ========== Tournament Exceptions ==========


class TournamentException(ClubPairingException):
    """Base exception for tournament-related errors."""

    pass


class InsufficientPlayersException(TournamentException):
    """Raised when a division is started with fewer than two eligible players."""

    kind = ErrorKind.INSUFFICIENT_PLAYERS


class RoundIncompleteException(TournamentException):
    """Raised when advancing while boards of the current round are undecided."""

    kind = ErrorKind.ROUND_INCOMPLETE


class NoActiveTournamentException(TournamentException):
    """Raised when a division has no running tournament."""

    kind = ErrorKind.NO_ACTIVE_TOURNAMENT


# ========== Player Exceptions ==========


class PlayerException(ClubPairingException):
    """Base exception for player-related errors."""

    pass


class PlayerNotFoundException(PlayerException):
    """Raised when a requested player cannot be found."""

    kind = ErrorKind.PLAYER_NOT_FOUND


class PlayerInUseException(PlayerException):
    """Raised when removing a player who sits in an active tournament roster."""

    kind = ErrorKind.PLAYER_IN_USE


class InvalidPlayerDataException(PlayerException):
    """Raised when player data is invalid or incomplete."""

    kind = ErrorKind.INVALID_PLAYER_DATA


# ========== Result Exceptions ==========


class ResultException(ClubPairingException):
    """Base exception for result recording errors."""

    pass


class InvalidBoardException(ResultException):
    """Raised when a result names a round or board that is not open."""

    kind = ErrorKind.INVALID_BOARD


class InvalidResultException(ResultException):
    """Raised when a result is invalid (e.g., score out of range)."""

    pass


# ========== Validation Exceptions ==========


class ValidationException(ClubPairingException):
    """Base exception for validation errors."""

    kind = ErrorKind.INVALID_PLAYER_DATA


class RatingValidationException(ValidationException):
    """Raised when a rating value is invalid."""

    pass


class NameValidationException(ValidationException):
    """Raised when a player name is empty or malformed."""

    pass


# ========== File/Resource Exceptions ==========


class ResourceException(ClubPairingException):
    """Base exception for resource-related errors."""

    pass


class FileLoadException(ResourceException):
    """Raised when a file cannot be loaded."""

    pass


class FileSaveException(ResourceException):
    """Raised when a file cannot be saved."""

    pass
