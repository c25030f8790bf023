"""Result recording for matches.

Every operation takes the roster and a match and returns a new roster plus
the updated match; nothing is modified in place. Buchholz scores are
recomputed after each change since every opponent's points feed into them.
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

from dataclasses import replace
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from triplethreat.exceptions import (
    CompetitorNotFoundException,
    DuplicateResultException,
    InvalidResultException,
    QuotaExceededException,
    RepeatPairingException,
    ResultNotFoundException,
)
from triplethreat.models.competitor import Competitor
from triplethreat.models.match import Match
from triplethreat.models.tournament_config import TournamentConfig
from triplethreat.tournament.standings import compute_standings_scores
from triplethreat.type_hints import ChampionIds
from triplethreat.utils import setup_logger

logger = setup_logger(__name__)


class ResultRecorder:
    """Applies match outcomes to competitor records.

    This class is responsible for:
    - Validating a reported outcome against the match
    - Updating track records, points and opponent lists
    - Correcting an already recorded outcome
    - Awarding the champion bonus

    Main-schedule matches update both players. Catch-up matches update only
    the shortfall competitor(s); a volunteer's record never changes.
    """

    def __init__(self, config: Optional[TournamentConfig] = None):
        self.config = config if config is not None else TournamentConfig()

    def _index(self, competitors: Sequence[Competitor], match: Match) -> Dict[str, Competitor]:
        by_id = {c.id: c for c in competitors}
        for competitor_id in match.player_ids:
            if competitor_id not in by_id:
                raise CompetitorNotFoundException(
                    f"Competitor {competitor_id} of match {match.id} is not registered"
                )
        return by_id

    def _validate_winner(self, match: Match, winner_id: str) -> None:
        if not match.involves(winner_id):
            raise InvalidResultException(
                f"{winner_id} is not a player of match {match.id}"
            )

    @staticmethod
    def _rebuild(
        competitors: Sequence[Competitor], updated: Mapping[str, Competitor]
    ) -> List[Competitor]:
        return compute_standings_scores(
            [updated.get(c.id, c) for c in competitors]
        )

    def apply_match_result(
        self,
        competitors: Sequence[Competitor],
        match: Match,
        winner_id: str,
        is_dominant: bool = False,
    ) -> Tuple[List[Competitor], Match]:
        """Record the outcome of an undecided match.

        Args:
            competitors: Current roster snapshot
            match: The match being decided
            winner_id: One of the match's players
            is_dominant: Whether the win met the decisive-margin condition

        Returns:
            Tuple of (updated roster, decided match)

        Raises:
            DuplicateResultException: The match already has a result
            InvalidResultException: ``winner_id`` does not play in the match
            CompetitorNotFoundException: A player is missing from the roster
            RepeatPairingException: A main-schedule pair already met in the track
            QuotaExceededException: A recipient already played 3 matches in the track
        """
        if match.is_decided:
            raise DuplicateResultException(f"Match {match.id} already has a result")
        self._validate_winner(match, winner_id)
        by_id = self._index(competitors, match)

        track = match.track
        updated: Dict[str, Competitor] = {}
        for competitor_id in match.stat_recipients():
            competitor = by_id[competitor_id]
            opponent_id = match.opponent_of(competitor_id)
            stats = competitor.track(track)
            if stats.is_complete:
                raise QuotaExceededException(
                    f"{competitor.display_name} already played every "
                    f"{track.display_name} match"
                )
            if stats.has_faced(opponent_id) and not match.is_catch_up:
                raise RepeatPairingException(
                    f"{competitor_id} and {opponent_id} already met in {track.value}"
                )
            won = competitor_id == winner_id
            points = self.config.points_for(is_dominant) if won else 0
            updated[competitor_id] = replace(
                competitor.with_track(track, stats.with_result(opponent_id, won, is_dominant)),
                total_points=competitor.total_points + points,
            )

        decided = replace(match, winner_id=winner_id, is_dominant=is_dominant)
        logger.info(
            f"Match {match.id} ({track.value}): {by_id[winner_id].display_name} wins"
            f"{' (dominant)' if is_dominant else ''}"
        )
        return self._rebuild(competitors, updated), decided

    def revert_match_result(
        self, competitors: Sequence[Competitor], match: Match
    ) -> Tuple[List[Competitor], Match]:
        """Take back a recorded outcome and return the match undecided.

        Points, counters and the opponent entry are removed. A catch-up
        rematch (``is_rematch``) keeps the opponent entry since it predates
        the match.

        Raises:
            ResultNotFoundException: The match has no result yet
            CompetitorNotFoundException: A player is missing from the roster
        """
        if not match.is_decided:
            raise ResultNotFoundException(f"Match {match.id} has no result to revert")
        by_id = self._index(competitors, match)

        track = match.track
        keep_opponent = match.is_catch_up and match.is_rematch
        updated: Dict[str, Competitor] = {}
        for competitor_id in match.stat_recipients():
            competitor = by_id[competitor_id]
            won = competitor_id == match.winner_id
            stats = competitor.track(track).without_result(
                match.opponent_of(competitor_id),
                won,
                match.is_dominant,
                drop_opponent=not keep_opponent,
            )
            points = self.config.points_for(match.is_dominant) if won else 0
            updated[competitor_id] = replace(
                competitor.with_track(track, stats),
                total_points=competitor.total_points - points,
            )

        logger.info(f"Match {match.id} result reverted")
        reverted = replace(match, winner_id=None, is_dominant=False)
        return self._rebuild(competitors, updated), reverted

    def edit_match_result(
        self,
        competitors: Sequence[Competitor],
        match: Match,
        winner_id: str,
        is_dominant: bool = False,
    ) -> Tuple[List[Competitor], Match]:
        """Correct the outcome of an already decided match.

        The old outcome's wins, losses, dominant wins and points are taken
        back and the new ones applied. Matches played and opponent lists
        are unaffected.

        Raises:
            ResultNotFoundException: The match has no result yet
            InvalidResultException: ``winner_id`` does not play in the match
            CompetitorNotFoundException: A player is missing from the roster
        """
        if not match.is_decided:
            raise ResultNotFoundException(f"Match {match.id} has no result to edit")
        self._validate_winner(match, winner_id)
        by_id = self._index(competitors, match)

        old_winner, old_dominant = match.winner_id, match.is_dominant
        track = match.track
        updated: Dict[str, Competitor] = {}
        for competitor_id in match.stat_recipients():
            competitor = by_id[competitor_id]
            was_won = competitor_id == old_winner
            now_won = competitor_id == winner_id
            win_delta = int(now_won) - int(was_won)
            dominant_delta = int(now_won and is_dominant) - int(was_won and old_dominant)
            points_delta = (
                self.config.points_for(is_dominant) if now_won else 0
            ) - (self.config.points_for(old_dominant) if was_won else 0)
            stats = competitor.track(track).adjusted(
                wins=win_delta, losses=-win_delta, dominant_wins=dominant_delta
            )
            updated[competitor_id] = replace(
                competitor.with_track(track, stats),
                total_points=competitor.total_points + points_delta,
            )

        edited = replace(match, winner_id=winner_id, is_dominant=is_dominant)
        logger.info(
            f"Match {match.id} corrected: winner {old_winner} -> {winner_id}, "
            f"dominant {old_dominant} -> {is_dominant}"
        )
        return self._rebuild(competitors, updated), edited

    def award_champions(
        self,
        competitors: Sequence[Competitor],
        champion_ids: ChampionIds,
    ) -> List[Competitor]:
        """Add the champion bonus once per title held.

        Unknown or missing champions are ignored.
        """
        titles: Dict[str, int] = {}
        for champion_id in champion_ids.values():
            if champion_id:
                titles[champion_id] = titles.get(champion_id, 0) + 1

        updated = {}
        for competitor in competitors:
            count = titles.get(competitor.id, 0)
            if count:
                updated[competitor.id] = replace(
                    competitor,
                    total_points=competitor.total_points
                    + count * self.config.champion_bonus,
                )
                logger.info(
                    f"{competitor.display_name} receives {count} champion bonus(es)"
                )
        return self._rebuild(competitors, updated)
