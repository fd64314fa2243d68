"""Tournament state machine for Club Pairing.

Starting, pairing, result entry and standings for one division, split the
way the rounds are run: the round manager opens rounds, the result recorder
closes boards, and the standings module reads the result.
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

from clubpairing.controllers.tournament.result_recorder import (
    RecordedResult,
    ResultRecorder,
    coerce_result,
)
from clubpairing.controllers.tournament.round_manager import RoundManager
from clubpairing.controllers.tournament.standings import StandingRow, get_standings

__all__ = [
    "RecordedResult",
    "ResultRecorder",
    "RoundManager",
    "StandingRow",
    "coerce_result",
    "get_standings",
]
