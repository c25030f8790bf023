"""Eligibility filter for one track of one round."""

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

from dataclasses import dataclass
from typing import Iterable, List, Sequence

from triplethreat.constants import MATCHES_PER_TRACK
from triplethreat.models.competitor import Competitor, TrackStats
from triplethreat.models.enums import Track


@dataclass(frozen=True)
class PairingCandidate:
    """A competitor eligible for a track, with that track's record."""

    competitor: Competitor
    track: Track

    @property
    def id(self) -> str:
        return self.competitor.id

    @property
    def name(self) -> str:
        return self.competitor.display_name

    @property
    def stats(self) -> TrackStats:
        return self.competitor.track(self.track)

    @property
    def matches_in_track(self) -> int:
        return self.stats.matches_played

    def can_face(self, other: "PairingCandidate") -> bool:
        """Whether the two may still meet in this track (never a rematch)."""
        if self.id == other.id:
            return False
        return not (
            self.competitor.has_faced(other.id, self.track)
            or other.competitor.has_faced(self.id, self.track)
        )


def get_eligible_candidates(
    competitors: Sequence[Competitor],
    track: Track,
    assigned_ids: Iterable[str] = (),
) -> List[PairingCandidate]:
    """Return the competitors who can still be paired in ``track`` this round.

    A competitor is eligible when they are not already locked into another
    track this round and have played fewer than 3 matches in ``track``.
    Input order is preserved. An empty list is a valid answer.

    Args:
        competitors: Current roster snapshot
        track: The track being filled
        assigned_ids: Ids already assigned to a track this round

    Returns:
        Eligible candidates in roster order
    """
    assigned = set(assigned_ids)
    return [
        PairingCandidate(competitor=competitor, track=track)
        for competitor in competitors
        if competitor.id not in assigned
        and competitor.track(track).matches_played < MATCHES_PER_TRACK
    ]
