"""Triple Threat: pairing and ranking engine for three-track tournaments.

Competitors play three matches in each of three game tracks. Rounds are
paired Swiss-style, one match per track, without same-track rematches;
standings use points and Buchholz scores; competitors who fall short of
their quota get catch-up matches against volunteers.
"""

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

from triplethreat.models import Competitor, Match, TournamentConfig, TournamentState, Track
from triplethreat.pairing import generate_round_pairings
from triplethreat.tournament import (
    RoundManager,
    compute_standings_scores,
    find_catch_up_volunteer,
    rank_standings,
    select_track_champion,
)

__version__ = "0.1.0"

__all__ = [
    "Competitor",
    "Match",
    "Track",
    "TournamentConfig",
    "TournamentState",
    "RoundManager",
    "generate_round_pairings",
    "compute_standings_scores",
    "rank_standings",
    "select_track_champion",
    "find_catch_up_volunteer",
]
