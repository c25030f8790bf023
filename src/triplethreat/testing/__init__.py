"""Testing module for Triple Threat.

This module provides:
- Competitor and match builders for unit tests
- A whole-tournament simulator with invariant checks

Use the CLI: triplethreat-test
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

from triplethreat.testing.factory import CompetitorFactory, make_match
from triplethreat.testing.simulator import (
    SimulationConfig,
    SimulationReport,
    TournamentSimulator,
    check_invariants,
    run_batch,
)

__all__ = [
    "CompetitorFactory",
    "make_match",
    "SimulationConfig",
    "SimulationReport",
    "TournamentSimulator",
    "check_invariants",
    "run_batch",
]
