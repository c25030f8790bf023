"""Round pairing: eligibility, pair scoring and the multi-track engine."""

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

from triplethreat.pairing.candidate_filter import (
    PairingCandidate,
    get_eligible_candidates,
)
from triplethreat.pairing.pair_scorer import (
    PairScore,
    PairSelection,
    find_best_pair,
    rank_pairs,
    score_pairs,
)
from triplethreat.pairing.swiss import SwissPairingResult, generate_round_pairings

__all__ = [
    "PairingCandidate",
    "get_eligible_candidates",
    "PairScore",
    "PairSelection",
    "find_best_pair",
    "rank_pairs",
    "score_pairs",
    "SwissPairingResult",
    "generate_round_pairings",
]
