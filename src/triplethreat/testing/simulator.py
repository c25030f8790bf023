"""Tournament Simulator - plays whole tournaments with random results.

The simulator drives :class:`~triplethreat.tournament.round_manager.RoundManager`
through every phase and collects pairing-quality statistics and invariant
violations along the way. It is used by the test suite and by the
``triplethreat-test`` CLI.
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

import random
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from triplethreat.constants import (
    MATCHES_PER_TRACK,
    PHASE_SWISS,
    RECORD_MISMATCH,
    TOTAL_MATCH_QUOTA,
)
from triplethreat.models.enums import TRACK_ORDER, Track
from triplethreat.models.match import Match
from triplethreat.models.tournament_config import TournamentConfig
from triplethreat.models.tournament_state import TournamentState
from triplethreat.tournament.catch_up import find_shortfalls
from triplethreat.tournament.round_manager import RoundManager
from triplethreat.utils import setup_logger

logger = setup_logger(__name__)

# A streak this long at one station is reported as an issue
STICKY_STREAK = 4


@dataclass
class SimulationConfig:
    """Configuration for the tournament simulator."""

    num_competitors: int = 8
    seed: Optional[int] = None
    dominant_rate: float = 0.25
    verbose: bool = False
    tournament: TournamentConfig = field(default_factory=TournamentConfig)


@dataclass
class SimulationReport:
    """Statistics of one simulated tournament."""

    num_competitors: int
    total_rounds: int = 0
    rounds_played: int = 0
    matches_played: int = 0
    catch_up_matches: int = 0
    shortfalls_after_main: int = 0
    unmatched_after_catch_up: int = 0
    large_record_mismatches: int = 0
    max_consecutive_same_track: int = 0
    average_buchholz: float = 0.0
    rematch_violations: List[str] = field(default_factory=list)
    quota_violations: List[str] = field(default_factory=list)
    issues: List[str] = field(default_factory=list)
    champions: Dict[Track, Optional[str]] = field(default_factory=dict)
    playoff_seeds: List[str] = field(default_factory=list)
    final_state: Optional[TournamentState] = None

    @property
    def is_valid(self) -> bool:
        return not self.rematch_violations and not self.quota_violations


def check_invariants(state: TournamentState) -> Dict[str, List[str]]:
    """Look for same-track rematches and quota overruns.

    Catch-up matches booked as rematches are allowed and skipped.

    Returns:
        ``{"rematches": [...], "quota": [...]}`` with one message per problem
    """
    rematches = []
    pairs: Counter = Counter()
    for match in state.all_matches():
        if match.is_rematch:
            continue
        pairs[(match.track, frozenset(match.player_ids))] += 1
    for (track, ids), count in pairs.items():
        if count > 1:
            rematches.append(f"{' vs '.join(sorted(ids))} met {count} times in {track.value}")

    quota = []
    for competitor in state.competitors:
        for track in TRACK_ORDER:
            stats = competitor.track(track)
            if stats.matches_played > MATCHES_PER_TRACK:
                quota.append(
                    f"{competitor.display_name} played {stats.matches_played} "
                    f"{track.value} matches"
                )
            if len(set(stats.opponents)) != len(stats.opponents):
                quota.append(f"{competitor.display_name} lists an opponent twice")
        if competitor.matches_played > TOTAL_MATCH_QUOTA:
            quota.append(
                f"{competitor.display_name} played {competitor.matches_played} matches"
            )
    return {"rematches": rematches, "quota": quota}


class TournamentSimulator:
    """Plays a tournament from registration to playoff seeding."""

    def __init__(self, config: SimulationConfig):
        self.config = config
        self.random = (
            random.Random(config.seed) if config.seed is not None else random.Random()
        )
        self.manager = RoundManager(
            config.tournament, rng=random.Random(self.random.getrandbits(64))
        )
        self._last_track: Dict[str, Track] = {}
        self._streaks: Dict[str, int] = {}

    def _say(self, message: str) -> None:
        if self.config.verbose:
            print(message)

    def _inspect(
        self, state: TournamentState, match: Match, report: SimulationReport
    ) -> None:
        first = state.competitor(match.player1_id)
        second = state.competitor(match.player2_id)
        track = match.track
        a, b = first.track(track), second.track(track)

        # Only flagged when neither player is running out of matches
        if abs(a.net - b.net) >= RECORD_MISMATCH:
            if a.matches_played < 2 and b.matches_played < 2:
                report.large_record_mismatches += 1
                report.issues.append(
                    f"R{match.round_number} {track.value}: "
                    f"{first.display_name}({a.net:+d}) vs {second.display_name}({b.net:+d})"
                )

        for competitor in (first, second):
            if self._last_track.get(competitor.id) == track:
                streak = self._streaks.get(competitor.id, 1) + 1
            else:
                streak = 1
            self._streaks[competitor.id] = streak
            self._last_track[competitor.id] = track
            report.max_consecutive_same_track = max(
                report.max_consecutive_same_track, streak
            )
            if streak >= STICKY_STREAK:
                report.issues.append(
                    f"R{match.round_number}: {competitor.display_name} at "
                    f"{track.value} for {streak}+ rounds"
                )

        self._say(
            f"  {track.value}: {first.display_name}({a.wins}-{a.losses}) vs "
            f"{second.display_name}({b.wins}-{b.losses})"
        )

    def _play(self, state: TournamentState, match: Match) -> TournamentState:
        winner_id = self.random.choice(match.player_ids)
        is_dominant = self.random.random() < self.config.dominant_rate
        return self.manager.record_result(state, match.id, winner_id, is_dominant)

    def run(self) -> SimulationReport:
        """Simulate one tournament.

        Returns:
            A :class:`SimulationReport` holding the final state
        """
        manager = self.manager
        report = SimulationReport(num_competitors=self.config.num_competitors)

        state = manager.new_tournament()
        for i in range(self.config.num_competitors):
            state = manager.register_competitor(state, f"Player {i}", f"P{i}")
        state = manager.start_tournament(state)
        report.total_rounds = state.total_rounds
        self._say(
            f"=== Simulation: {self.config.num_competitors} competitors, "
            f"{state.total_rounds} rounds ==="
        )

        while state.phase == PHASE_SWISS:
            state = manager.start_round(state)
            if state.phase != PHASE_SWISS:
                self._say(f"Round {state.current_round + 1}: no matches possible")
                break
            round_data = state.latest_round
            self._say(f"Round {round_data.round_number}: {len(round_data.matches)} matches")
            for match in round_data.matches:
                self._inspect(state, match, report)
                state = self._play(state, match)
            report.rounds_played += 1
            report.matches_played += len(round_data.matches)
            state = manager.complete_round(state)

        report.shortfalls_after_main = len(find_shortfalls(state.competitors))

        state = manager.start_catch_up(state)
        for match in state.latest_round.matches:
            state = self._play(state, match)
        report.catch_up_matches = len(state.latest_round.matches)
        report.unmatched_after_catch_up = len(find_shortfalls(state.competitors))
        self._say(f"Catch-up: {report.catch_up_matches} match(es)")

        state = manager.complete_catch_up(state)
        report.champions = dict(state.champion_ids)
        state = manager.reveal_champions(state)
        state = manager.seed_playoffs(state)
        report.playoff_seeds = list(state.playoff_seeds)

        violations = check_invariants(state)
        report.rematch_violations = violations["rematches"]
        report.quota_violations = violations["quota"]
        report.issues.extend(violations["rematches"] + violations["quota"])

        competitors = state.competitors
        report.average_buchholz = (
            sum(c.buchholz for c in competitors) / len(competitors) if competitors else 0.0
        )
        report.final_state = state

        if self.config.verbose:
            print("\n--- Final Stats ---")
            for competitor in manager.standings(state):
                played = ", ".join(
                    f"{t.value}={competitor.track(t).matches_played}/3" for t in TRACK_ORDER
                )
                print(
                    f"{competitor.display_name}: {played} | "
                    f"Pts={competitor.total_points} | BH={competitor.buchholz}"
                )
            print(f"\nAvg Buchholz: {report.average_buchholz:.1f}")

        logger.info(
            f"Simulated {report.num_competitors} competitors: "
            f"{report.rounds_played} rounds, {len(report.issues)} issue(s)"
        )
        return report


def run_batch(
    sizes: List[int],
    runs: int,
    seed: Optional[int] = None,
    tournament: Optional[TournamentConfig] = None,
) -> Dict[int, List[SimulationReport]]:
    """Simulate ``runs`` tournaments for every roster size."""
    seeder = random.Random(seed) if seed is not None else random.Random()
    results: Dict[int, List[SimulationReport]] = {}
    for size in sizes:
        results[size] = [
            TournamentSimulator(
                SimulationConfig(
                    num_competitors=size,
                    seed=seeder.getrandbits(32),
                    tournament=tournament or TournamentConfig(),
                )
            ).run()
            for _ in range(runs)
        ]
    return results
