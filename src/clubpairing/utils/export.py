"""CSV export of division standings."""

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

import csv
import io
from typing import TYPE_CHECKING, Iterable

from clubpairing.constants import CSV_EXTENSION, STANDINGS_CSV_HEADER
from clubpairing.models.enums import AgeGroup

if TYPE_CHECKING:
    from clubpairing.controllers.tournament.standings import StandingRow


def format_points(points: float) -> str:
    """``1.0`` -> ``1``, ``1.5`` -> ``1.5``."""
    return f"{points:g}"


def standings_csv(rows: Iterable[StandingRow]) -> str:
    """Render standings as ``Name,Points,Rating`` CSV text."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(STANDINGS_CSV_HEADER)
    for row in rows:
        writer.writerow([row.name, format_points(row.points), row.rating])
    return buffer.getvalue()


def standings_filename(division: AgeGroup) -> str:
    return f"{division.value}_standings{CSV_EXTENSION}"
