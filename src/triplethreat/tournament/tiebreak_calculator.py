"""Tiebreak ordering for overall standings and track championships.

Standings are not stored anywhere; they are an ordering of the roster
computed on demand from the competitors' current scores.
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
from typing import Dict, List, Optional, Sequence

from triplethreat.models.competitor import Competitor
from triplethreat.models.enums import Track
from triplethreat.type_hints import MatchHistory
from triplethreat.utils import setup_logger

logger = setup_logger(__name__)


class TiebreakCalculator:
    """Orders competitors for the overall standings and per-track titles.

    Overall standings use, in order:
    - Total points
    - Aggregate Buchholz
    - Aggregate dominant wins
    - Bets received
    - A random draw

    Track standings use track wins, then track Buchholz, then the same
    aggregate signals. A track title can additionally be settled by the
    direct encounter between the top two.

    The random draw comes from the ``random.Random`` given at construction,
    so a seeded generator makes every ordering reproducible.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng if rng is not None else random.Random()

    def _random_keys(self, competitors: Sequence[Competitor]) -> Dict[str, float]:
        # One draw per competitor and call, in roster order
        return {competitor.id: self.rng.random() for competitor in competitors}

    def rank_standings(self, competitors: Sequence[Competitor]) -> List[Competitor]:
        """Order the roster for the overall standings (best first).

        Args:
            competitors: Roster with up-to-date Buchholz scores

        Returns:
            A new list; the input is not reordered
        """
        keys = self._random_keys(competitors)
        return sorted(
            competitors,
            key=lambda c: (
                -c.total_points,
                -c.buchholz,
                -c.dominant_wins,
                -c.bets_received,
                keys[c.id],
            ),
        )

    def track_standings(
        self, competitors: Sequence[Competitor], track: Track
    ) -> List[Competitor]:
        """Order the roster by their record in one track (best first)."""
        keys = self._random_keys(competitors)
        return sorted(
            competitors,
            key=lambda c: (
                -c.track(track).wins,
                -c.track(track).buchholz,
                -c.dominant_wins,
                -c.bets_received,
                keys[c.id],
            ),
        )

    @staticmethod
    def head_to_head(
        first_id: str,
        second_id: str,
        track: Track,
        match_history: MatchHistory,
    ) -> Optional[str]:
        """Return the winner of the decided direct match in ``track``, if any.

        When the two somehow met more than once, the latest decided match
        counts.
        """
        winner = None
        for match in match_history:
            if (
                match.track == track
                and match.is_decided
                and match.involves(first_id)
                and match.involves(second_id)
            ):
                winner = match.winner_id
        return winner

    def select_track_champion(
        self,
        competitors: Sequence[Competitor],
        track: Track,
        match_history: MatchHistory,
    ) -> Optional[Competitor]:
        """Pick the champion of one track.

        The leader of :meth:`track_standings` wins, except that when exactly
        two competitors share the top track-win count and they played each
        other in the track, the winner of that match takes the title.

        Args:
            competitors: Roster with up-to-date Buchholz scores
            track: Track to decide
            match_history: Every match of the tournament

        Returns:
            The champion, or None for an empty roster
        """
        ordered = self.track_standings(competitors, track)
        if not ordered:
            return None

        leader = ordered[0]
        top_wins = leader.track(track).wins
        tied = [c for c in ordered if c.track(track).wins == top_wins]
        if len(tied) == 2:
            winner_id = self.head_to_head(tied[0].id, tied[1].id, track, match_history)
            if winner_id == tied[1].id:
                logger.info(
                    f"{track.display_name}: {tied[1].display_name} takes the title "
                    f"over {leader.display_name} on head-to-head"
                )
                return tied[1]
        return leader


def rank_standings(
    competitors: Sequence[Competitor], rng: Optional[random.Random] = None
) -> List[Competitor]:
    """Order the roster for the overall standings (best first)."""
    return TiebreakCalculator(rng).rank_standings(competitors)


def track_standings(
    competitors: Sequence[Competitor],
    track: Track,
    rng: Optional[random.Random] = None,
) -> List[Competitor]:
    """Order the roster by their record in ``track`` (best first)."""
    return TiebreakCalculator(rng).track_standings(competitors, track)


def select_track_champion(
    competitors: Sequence[Competitor],
    track: Track,
    match_history: MatchHistory,
    rng: Optional[random.Random] = None,
) -> Optional[Competitor]:
    """Pick the champion of ``track``. See :meth:`TiebreakCalculator.select_track_champion`."""
    return TiebreakCalculator(rng).select_track_champion(
        competitors, track, match_history
    )
