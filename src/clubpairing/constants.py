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

# --- Constants ---
APP_NAME = "Club Pairing"
SAVE_FILE_EXTENSION = ".json"
DEFAULT_SAVE_FILE = f"clubpairing{SAVE_FILE_EXTENSION}"
CSV_EXTENSION = ".csv"
STANDINGS_CSV_HEADER = ("Name", "Points", "Rating")

# Game outcome scores
WIN_SCORE = 1.0
DRAW_SCORE = 0.5
LOSS_SCORE = 0.0
VALID_SCORES = (LOSS_SCORE, DRAW_SCORE, WIN_SCORE)

# A player left over in an odd round gets the full point
BYE_SCORE = WIN_SCORE

# Result type constants (for display and parsing)
RESULT_WHITE_WIN = "1-0"
RESULT_DRAW = "0.5-0.5"
RESULT_BLACK_WIN = "0-1"
RESULT_BYE = f"Bye ({BYE_SCORE})"
RESULT_PENDING = "pending"

# Elo
K_FACTOR = 32
DEFAULT_RATING = 1200
ELO_SCALE = 400

# Starting a division needs at least this many eligible players
MIN_PLAYERS_TO_START = 2

# Age group upper bounds (exclusive), youngest first
AGE_GROUP_LIMITS = {
    "u9": 9,
    "u11": 11,
    "u13": 13,
}
