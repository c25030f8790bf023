"""Opponent-strength (Buchholz) scores.

A competitor's Buchholz score in a track is the sum of the *current* point
totals of every opponent they faced there; the aggregate is the sum over the
three tracks. Opponents keep scoring after the match was played, so the
scores are always recomputed from scratch, never accumulated.
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

from dataclasses import dataclass, replace
from typing import Dict, List, Mapping, Sequence

from triplethreat.models.competitor import Competitor
from triplethreat.models.enums import TRACK_ORDER, Track


@dataclass(frozen=True)
class BuchholzScores:
    """Per-track and aggregate opponent strength of one competitor."""

    total: int
    by_track: Dict[Track, int]


def _points_by_id(competitors: Sequence[Competitor]) -> Dict[str, int]:
    return {competitor.id: competitor.total_points for competitor in competitors}


def _sum_opponent_points(
    competitor: Competitor, points: Mapping[str, int]
) -> BuchholzScores:
    by_track: Dict[Track, int] = {}
    for track in TRACK_ORDER:
        # Unknown ids contribute nothing
        by_track[track] = sum(
            points.get(opponent_id, 0)
            for opponent_id in competitor.track(track).opponents
        )
    return BuchholzScores(total=sum(by_track.values()), by_track=by_track)


def calculate_buchholz(
    competitor: Competitor, competitors: Sequence[Competitor]
) -> BuchholzScores:
    """Compute the Buchholz scores of one competitor.

    Args:
        competitor: The competitor to score
        competitors: Full roster, for opponents' current points

    Returns:
        Per-track and aggregate scores
    """
    return _sum_opponent_points(competitor, _points_by_id(competitors))


def compute_standings_scores(competitors: Sequence[Competitor]) -> List[Competitor]:
    """Return the roster with every Buchholz field recomputed.

    Only the aggregate ``buchholz`` and each track's ``buchholz`` change;
    every other field is carried over untouched. Idempotent.
    """
    points = _points_by_id(competitors)
    updated = []
    for competitor in competitors:
        scores = _sum_opponent_points(competitor, points)
        tracks = {
            track: replace(stats, buchholz=scores.by_track[track])
            for track, stats in competitor.tracks.items()
        }
        updated.append(replace(competitor, buchholz=scores.total, tracks=tracks))
    return updated
