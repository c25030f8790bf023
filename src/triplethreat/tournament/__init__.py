"""Tournament management: standings, champions, catch-up and phase control.

The package splits the tournament flow into focused pieces:
Buchholz scores, tiebreak ordering, catch-up scheduling, result recording
and the phase state machine that ties them together.
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

from triplethreat.tournament.catch_up import (
    CatchUpPlan,
    DeclineOutcome,
    Shortfall,
    VolunteerResult,
    decline_volunteer,
    find_catch_up_volunteer,
    find_shortfalls,
    plan_catch_up_round,
)
from triplethreat.tournament.result_recorder import ResultRecorder
from triplethreat.tournament.round_manager import RoundManager, semifinal_pairings
from triplethreat.tournament.standings import (
    BuchholzScores,
    calculate_buchholz,
    compute_standings_scores,
)
from triplethreat.tournament.tiebreak_calculator import (
    TiebreakCalculator,
    rank_standings,
    select_track_champion,
    track_standings,
)

__all__ = [
    "RoundManager",
    "ResultRecorder",
    "TiebreakCalculator",
    "BuchholzScores",
    "calculate_buchholz",
    "compute_standings_scores",
    "rank_standings",
    "track_standings",
    "select_track_champion",
    "Shortfall",
    "VolunteerResult",
    "CatchUpPlan",
    "DeclineOutcome",
    "find_shortfalls",
    "find_catch_up_volunteer",
    "plan_catch_up_round",
    "decline_volunteer",
    "semifinal_pairings",
]
