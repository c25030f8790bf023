"""Tournament state transitions.

:class:`RoundManager` moves a :class:`TournamentState` through its phases:

``registration -> swiss -> catch_up -> champions_reveal -> playoff_seeding``

Every method takes a snapshot and returns a new one. The manager itself
holds only configuration and the random source, never the state.
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
from dataclasses import replace
from typing import List, Optional, Tuple

from triplethreat.constants import (
    PHASE_CATCH_UP,
    PHASE_CHAMPIONS_REVEAL,
    PHASE_PLAYOFF_SEEDING,
    PHASE_REGISTRATION,
    PHASE_SWISS,
    ROUND_CATCH_UP,
)
from triplethreat.exceptions import (
    CompetitorNotFoundException,
    DuplicateCompetitorException,
    MatchNotFoundException,
    RoundNotFoundException,
    TournamentStateException,
)
from triplethreat.models.competitor import Competitor
from triplethreat.models.enums import TRACK_ORDER
from triplethreat.models.match import Match
from triplethreat.models.round_data import RoundData
from triplethreat.models.tournament_config import (
    TournamentConfig,
    calculate_total_rounds,
)
from triplethreat.models.tournament_state import TournamentState
from triplethreat.pairing.swiss import generate_round_pairings
from triplethreat.tournament.catch_up import decline_volunteer as replace_volunteer
from triplethreat.tournament.catch_up import plan_catch_up_round
from triplethreat.tournament.result_recorder import ResultRecorder
from triplethreat.tournament.standings import compute_standings_scores
from triplethreat.tournament.tiebreak_calculator import TiebreakCalculator
from triplethreat.type_hints import Phase
from triplethreat.utils import generate_id, setup_logger

logger = setup_logger(__name__)


class RoundManager:
    """Drives a tournament from registration to playoff seeding.

    This class is responsible for:
    - Roster registration and the start of the Swiss phase
    - Generating, scoring and closing rounds
    - Running the catch-up round and volunteer declines
    - Crowning track champions and seeding the playoffs
    """

    def __init__(
        self,
        config: Optional[TournamentConfig] = None,
        rng: Optional[random.Random] = None,
    ):
        """Initialize the round manager.

        Args:
            config: Tournament settings, defaults when omitted
            rng: Random source for track order, ids, tiebreaks and forced
                volunteers. Pass a seeded ``random.Random`` for reproducible runs.
        """
        self.config = config if config is not None else TournamentConfig()
        self.rng = rng if rng is not None else random.Random()
        self.recorder = ResultRecorder(self.config)
        self.tiebreaks = TiebreakCalculator(self.rng)

    # Helpers

    @staticmethod
    def _require_phase(state: TournamentState, action: str, *phases: Phase) -> None:
        if state.phase not in phases:
            raise TournamentStateException(
                f"Cannot {action} during the {state.phase} phase"
            )

    @staticmethod
    def _open_round(state: TournamentState) -> RoundData:
        latest = state.latest_round
        if latest is None or latest.is_completed:
            raise RoundNotFoundException("No round is in progress")
        return latest

    @staticmethod
    def _locate(state: TournamentState, match_id: str) -> Tuple[RoundData, Match]:
        for round_data in state.rounds:
            match = round_data.find_match(match_id)
            if match is not None:
                return round_data, match
        raise MatchNotFoundException(f"Match {match_id} not found")

    @staticmethod
    def _close(round_data: RoundData) -> RoundData:
        pending = round_data.pending_matches
        if pending:
            raise TournamentStateException(
                f"Round {round_data.round_number} still has {len(pending)} "
                "match(es) without a result"
            )
        return replace(round_data, is_completed=True)

    # Registration

    def new_tournament(self) -> TournamentState:
        return TournamentState(config=self.config)

    def register_competitor(
        self, state: TournamentState, name: str, nickname: str = ""
    ) -> TournamentState:
        """Add a competitor to the roster.

        Raises:
            TournamentStateException: Not in registration, or the roster is full
            DuplicateCompetitorException: The name or nickname is taken
        """
        self._require_phase(state, "register competitors", PHASE_REGISTRATION)
        name = name.strip()
        nickname = nickname.strip()
        if not name:
            raise TournamentStateException("Competitor name cannot be empty")
        if len(state.competitors) >= self.config.max_competitors:
            raise TournamentStateException(
                f"Roster is full ({self.config.max_competitors} competitors)"
            )
        taken = {c.name.lower() for c in state.competitors} | {
            c.nickname.lower() for c in state.competitors if c.nickname
        }
        for label in (name, nickname):
            if label and label.lower() in taken:
                raise DuplicateCompetitorException(f"'{label}' is already registered")

        competitor = Competitor(
            id=generate_id("competitor", self.rng), name=name, nickname=nickname
        )
        logger.info(f"Registered {competitor.display_name}")
        return replace(state, competitors=state.competitors + (competitor,))

    def add_bets(
        self, state: TournamentState, competitor_id: str, count: int = 1
    ) -> TournamentState:
        """Credit bets placed on a competitor (final standings tie-break)."""
        if state.competitor(competitor_id) is None:
            raise CompetitorNotFoundException(f"Competitor {competitor_id} not found")
        return replace(
            state,
            competitors=tuple(
                replace(c, bets_received=c.bets_received + count)
                if c.id == competitor_id
                else c
                for c in state.competitors
            ),
        )

    def start_tournament(self, state: TournamentState) -> TournamentState:
        """Lock the roster and enter the Swiss phase.

        Raises:
            TournamentStateException: Wrong phase or roster size out of bounds
        """
        self._require_phase(state, "start the tournament", PHASE_REGISTRATION)
        count = len(state.competitors)
        if not self.config.min_competitors <= count <= self.config.max_competitors:
            raise TournamentStateException(
                f"Need {self.config.min_competitors}-{self.config.max_competitors} "
                f"competitors, have {count}"
            )
        total_rounds = calculate_total_rounds(count)
        logger.info(f"Starting tournament with {count} competitors, {total_rounds} rounds")
        return replace(
            state,
            phase=PHASE_SWISS,
            total_rounds=total_rounds,
            competitors=tuple(compute_standings_scores(state.competitors)),
        )

    # Swiss rounds

    def start_round(self, state: TournamentState) -> TournamentState:
        """Generate the next main round.

        A round that produces no match at all ends the main schedule and
        moves the tournament to the catch-up phase.

        Raises:
            TournamentStateException: Wrong phase, or the previous round is open
        """
        self._require_phase(state, "start a round", PHASE_SWISS)
        latest = state.latest_round
        if latest is not None and not latest.is_completed:
            raise TournamentStateException(
                f"Round {latest.round_number} is still in progress"
            )

        round_number = state.current_round + 1
        result = generate_round_pairings(
            state.competitors, state.all_matches(), round_number, self.rng
        )
        logs = state.matchmaking_logs + (result.log,)

        if not result.matches:
            logger.info(
                f"Round {round_number} produced no matches; moving to catch-up"
            )
            return replace(state, phase=PHASE_CATCH_UP, matchmaking_logs=logs)

        logger.info(f"Round {round_number} started with {len(result.matches)} match(es)")
        return replace(
            state,
            rounds=state.rounds + (RoundData(round_number, matches=result.matches),),
            current_round=round_number,
            matchmaking_logs=logs,
        )

    def record_result(
        self,
        state: TournamentState,
        match_id: str,
        winner_id: str,
        is_dominant: bool = False,
    ) -> TournamentState:
        """Record the outcome of a match in the open round."""
        self._require_phase(state, "record results", PHASE_SWISS, PHASE_CATCH_UP)
        round_data = self._open_round(state)
        match = round_data.find_match(match_id)
        if match is None:
            raise MatchNotFoundException(
                f"Match {match_id} is not in round {round_data.round_number}"
            )
        competitors, decided = self.recorder.apply_match_result(
            state.competitors, match, winner_id, is_dominant
        )
        return replace(
            state.with_round(round_data.with_match(decided)),
            competitors=tuple(competitors),
        )

    def revert_result(self, state: TournamentState, match_id: str) -> TournamentState:
        """Clear the outcome of a match in the open round."""
        self._require_phase(state, "revert results", PHASE_SWISS, PHASE_CATCH_UP)
        round_data = self._open_round(state)
        match = round_data.find_match(match_id)
        if match is None:
            raise MatchNotFoundException(
                f"Match {match_id} is not in round {round_data.round_number}"
            )
        competitors, reverted = self.recorder.revert_match_result(
            state.competitors, match
        )
        return replace(
            state.with_round(round_data.with_match(reverted)),
            competitors=tuple(competitors),
        )

    def edit_result(
        self,
        state: TournamentState,
        match_id: str,
        winner_id: str,
        is_dominant: bool = False,
    ) -> TournamentState:
        """Correct a recorded outcome in any round played so far."""
        self._require_phase(state, "edit results", PHASE_SWISS, PHASE_CATCH_UP)
        round_data, match = self._locate(state, match_id)
        competitors, edited = self.recorder.edit_match_result(
            state.competitors, match, winner_id, is_dominant
        )
        return replace(
            state.with_round(round_data.with_match(edited)),
            competitors=tuple(competitors),
        )

    def complete_round(self, state: TournamentState) -> TournamentState:
        """Close the open main round.

        After the last scheduled round the tournament moves to catch-up.

        Raises:
            TournamentStateException: Wrong phase or undecided matches
        """
        self._require_phase(state, "complete a round", PHASE_SWISS)
        round_data = self._close(self._open_round(state))
        state = replace(
            state.with_round(round_data),
            competitors=tuple(compute_standings_scores(state.competitors)),
        )
        logger.info(f"Round {round_data.round_number} completed")
        if state.current_round >= state.total_rounds:
            logger.info("Main schedule finished; moving to catch-up")
            return replace(state, phase=PHASE_CATCH_UP)
        return state

    # Catch-up

    def start_catch_up(self, state: TournamentState) -> TournamentState:
        """Schedule the catch-up round for competitors short of the quota."""
        self._require_phase(state, "start catch-up", PHASE_CATCH_UP)
        latest = state.latest_round
        if latest is not None and not latest.is_completed:
            raise TournamentStateException(
                f"Round {latest.round_number} is still in progress"
            )
        round_number = (latest.round_number if latest else 0) + 1
        plan = plan_catch_up_round(state.competitors, round_number, self.rng)
        round_data = RoundData(round_number, kind=ROUND_CATCH_UP, matches=plan.matches)
        return replace(
            state,
            rounds=state.rounds + (round_data,),
            current_round=round_number,
        )

    def decline_volunteer(self, state: TournamentState, match_id: str) -> TournamentState:
        """Replace the volunteer of a catch-up match, or drop the match."""
        self._require_phase(state, "decline a volunteer", PHASE_CATCH_UP)
        round_data = self._open_round(state)
        if not round_data.is_catch_up:
            raise TournamentStateException("The open round is not a catch-up round")
        outcome = replace_volunteer(
            state.competitors, round_data.matches, match_id, self.rng
        )
        return state.with_round(replace(round_data, matches=outcome.matches))

    def complete_catch_up(self, state: TournamentState) -> TournamentState:
        """Close catch-up and determine the track champions.

        Calling this without starting a catch-up round skips it.
        """
        self._require_phase(state, "complete catch-up", PHASE_CATCH_UP)
        latest = state.latest_round
        if latest is not None and not latest.is_completed:
            if not latest.is_catch_up:
                raise TournamentStateException(
                    f"Round {latest.round_number} is still in progress"
                )
            state = state.with_round(self._close(latest))

        competitors = compute_standings_scores(state.competitors)
        history = state.all_matches()
        champion_ids = {}
        for track in TRACK_ORDER:
            champion = self.tiebreaks.select_track_champion(competitors, track, history)
            champion_ids[track] = champion.id if champion else None
            if champion:
                logger.info(f"{track.display_name} champion: {champion.display_name}")

        return replace(
            state,
            competitors=tuple(competitors),
            champion_ids=champion_ids,
            phase=PHASE_CHAMPIONS_REVEAL,
        )

    # Finals

    def reveal_champions(self, state: TournamentState) -> TournamentState:
        """Award the champion bonus and open playoff seeding."""
        self._require_phase(state, "reveal champions", PHASE_CHAMPIONS_REVEAL)
        competitors = self.recorder.award_champions(
            state.competitors, state.champion_ids
        )
        return replace(
            state, competitors=tuple(competitors), phase=PHASE_PLAYOFF_SEEDING
        )

    def seed_playoffs(self, state: TournamentState) -> TournamentState:
        """Seed the top of the standings into the playoffs."""
        self._require_phase(state, "seed the playoffs", PHASE_PLAYOFF_SEEDING)
        ranked = self.tiebreaks.rank_standings(state.competitors)
        seeds = tuple(c.id for c in ranked[: self.config.playoff_size])
        logger.info(f"Playoff seeds: {', '.join(seeds)}")
        return replace(state, playoff_seeds=seeds)

    def standings(self, state: TournamentState) -> List[Competitor]:
        return self.tiebreaks.rank_standings(
            compute_standings_scores(state.competitors)
        )


def semifinal_pairings(seeds: Tuple[str, ...]) -> List[Tuple[str, str]]:
    """Semifinals for four seeds: 1 vs 4 and 2 vs 3."""
    if len(seeds) < 4:
        return []
    return [(seeds[0], seeds[3]), (seeds[1], seeds[2])]
