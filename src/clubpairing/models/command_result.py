"""Tagged result returned by every engine command."""

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

from typing import Any, Generic, Optional, TypeVar

from clubpairing.models.enums import ErrorKind

T = TypeVar("T")


class CommandResult(Generic[T]):
    """Outcome of an engine command.

    Attributes:
        ok: Whether the command was accepted
        value: Payload of an accepted command (new state, or None)
        error: Tag of a rejection; also set to ``ALREADY_DECIDED`` on the
            accepted no-op of a repeated result submission
        message: Human-readable explanation

    Example:
        >>> result = club.advance_round(AgeGroup.U11)
        >>> if not result:
        ...     print(result.message)
    """

    def __init__(
        self,
        ok: bool,
        value: Optional[T] = None,
        error: Optional[ErrorKind] = None,
        message: str = "",
    ):
        self.ok = ok
        self.value = value
        self.error = error
        self.message = message

    @classmethod
    def success(
        cls, value: Any = None, message: str = "", error: Optional[ErrorKind] = None
    ) -> "CommandResult":
        return cls(ok=True, value=value, error=error, message=message)

    @classmethod
    def failure(cls, error: ErrorKind, message: str) -> "CommandResult":
        return cls(ok=False, error=error, message=message)

    def __bool__(self) -> bool:
        """Allow using result in boolean context: if result: ..."""
        return self.ok

    def __repr__(self) -> str:
        if self.ok:
            return f"CommandResult(OK, {self.value!r})"
        return f"CommandResult({self.error.name if self.error else 'ERROR'}, {self.message!r})"
