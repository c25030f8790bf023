# Triple Threat
# Copyright (C) 2025  Triple Threat developers
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
SAVE_FILE_EXTENSION = ".json"
LOG_LEVEL_ENV_VAR = "TRIPLETHREAT_LOG_LEVEL"

# Roster limits
MIN_COMPETITORS = 8
MAX_COMPETITORS = 11

# Match quotas
MATCHES_PER_TRACK = 3
NUM_TRACKS = 3
TOTAL_MATCH_QUOTA = MATCHES_PER_TRACK * NUM_TRACKS
# Three tracks, two competitors each
COMPETITORS_PER_ROUND = 6

# Points
WIN_POINTS = 3
DOMINANT_WIN_POINTS = 5
CHAMPION_BONUS = 5
PLAYOFF_SIZE = 4

# Pair scoring thresholds
SCARCITY_BASE = 10
URGENT_SCARCITY = 8  # a competitor has <= 2 valid opponents left
RECORD_MISMATCH = 2
GOOD_FIRST_TIME_MAX_DIFF = 1

# Tournament phases
PHASE_REGISTRATION = "registration"
PHASE_SWISS = "swiss"
PHASE_CATCH_UP = "catch_up"
PHASE_CHAMPIONS_REVEAL = "champions_reveal"
PHASE_PLAYOFF_SEEDING = "playoff_seeding"

# Round kinds
ROUND_MAIN = "main"
ROUND_CATCH_UP = "catch_up"

# Skip reasons (matchmaking log)
SKIP_NO_ELIGIBLE = "No eligible players (all assigned or completed 3 matches)"
SKIP_ONE_ELIGIBLE = "Only 1 eligible player: {name}"
SKIP_NO_VALID_PAIRS = "No valid pairings possible (all players have faced each other)"
