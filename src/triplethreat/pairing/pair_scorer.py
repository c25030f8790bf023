"""Multi-factor scoring of candidate pairs for one track.

Every pair of eligible candidates that has never met in the track is scored
on five metrics and the pairs are ordered by a strict priority cascade.
The no-rematch rule is absolute: when every remaining pair is a rematch the
scorer reports that no pairing is possible instead of relaxing it.
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

from dataclasses import dataclass
from itertools import combinations
from typing import Dict, List, Optional, Sequence, Tuple

from triplethreat.constants import (
    GOOD_FIRST_TIME_MAX_DIFF,
    RECORD_MISMATCH,
    SCARCITY_BASE,
    SKIP_NO_ELIGIBLE,
    SKIP_NO_VALID_PAIRS,
    SKIP_ONE_ELIGIBLE,
    URGENT_SCARCITY,
)
from triplethreat.models.enums import Track, other_tracks
from triplethreat.pairing.candidate_filter import PairingCandidate
from triplethreat.type_hints import MatchHistory, PairIds
from triplethreat.utils import setup_logger

logger = setup_logger(__name__)


@dataclass(frozen=True)
class PairScore:
    """Scoring metrics for one candidate pair.

    Attributes:
        first: First candidate (earlier in the eligible list)
        second: Second candidate
        cross_game_encounters: Other tracks where the pair already met (0-2)
        record_diff: Absolute difference of the two track nets
        scarcity: ``10 - min(remaining options of either competitor)``
        is_last_chance: This track is the pair's only chance to ever meet
        station_stickiness: How many of the two played this track last (0-2)
    """

    first: PairingCandidate
    second: PairingCandidate
    cross_game_encounters: int
    record_diff: int
    scarcity: int
    is_last_chance: bool
    station_stickiness: int

    @property
    def is_urgent(self) -> bool:
        return self.scarcity >= URGENT_SCARCITY

    @property
    def is_mismatch(self) -> bool:
        return self.record_diff >= RECORD_MISMATCH

    @property
    def is_good_first_time(self) -> bool:
        return (
            self.cross_game_encounters == 0
            and self.record_diff <= GOOD_FIRST_TIME_MAX_DIFF
        )

    @property
    def ids(self) -> PairIds:
        return (self.first.id, self.second.id)

    def priority_key(self) -> tuple:
        """Sort key; smaller is better.

        Order: last chance, urgent scarcity, no large record gap, low
        stickiness, good first-time, few cross-track encounters, high
        scarcity, small record gap.
        """
        return (
            not self.is_last_chance,
            not self.is_urgent,
            self.is_mismatch,
            self.station_stickiness,
            not self.is_good_first_time,
            self.cross_game_encounters,
            -self.scarcity,
            self.record_diff,
        )


@dataclass(frozen=True)
class PairSelection:
    """Outcome of a best-pair search.

    ``pair`` is None when no pairing is possible; ``skip_reason`` then says
    why.
    """

    track: Track
    eligible_count: int
    valid_pair_count: int
    pair: Optional[PairScore] = None
    skip_reason: Optional[str] = None

    @property
    def found(self) -> bool:
        return self.pair is not None


def last_tracks_played(match_history: MatchHistory) -> Dict[str, Track]:
    """Map each competitor to the track of their most recent match.

    Recency is by round number; among matches of the same round the later
    one in ``match_history`` wins.
    """
    latest: Dict[str, Tuple[int, Track]] = {}
    for match in match_history:
        for competitor_id in match.player_ids:
            seen = latest.get(competitor_id)
            if seen is None or match.round_number >= seen[0]:
                latest[competitor_id] = (match.round_number, match.track)
    return {cid: track for cid, (_, track) in latest.items()}


def remaining_options(
    candidate: PairingCandidate, candidates: Sequence[PairingCandidate]
) -> int:
    """Count the other eligible candidates ``candidate`` could still face."""
    return sum(1 for other in candidates if candidate.can_face(other))


def _is_last_chance(first: PairingCandidate, second: PairingCandidate) -> bool:
    a, b = first.competitor, second.competitor
    if a.has_met_anywhere(b.id) or b.has_met_anywhere(a.id):
        return False
    for track in other_tracks(first.track):
        both_complete = a.track(track).is_complete and b.track(track).is_complete
        already_met = a.has_faced(b.id, track) or b.has_faced(a.id, track)
        if not (both_complete or already_met):
            return False
    return True


def score_pair(
    first: PairingCandidate,
    second: PairingCandidate,
    candidates: Sequence[PairingCandidate],
    last_tracks: Dict[str, Track],
) -> PairScore:
    """Compute all metrics for a valid (never-met) pair."""
    track = first.track
    options = min(
        remaining_options(first, candidates), remaining_options(second, candidates)
    )
    stickiness = sum(
        1 for candidate in (first, second) if last_tracks.get(candidate.id) == track
    )
    return PairScore(
        first=first,
        second=second,
        cross_game_encounters=first.competitor.cross_track_encounters(
            second.id, excluding=track
        ),
        record_diff=abs(first.stats.net - second.stats.net),
        scarcity=SCARCITY_BASE - options,
        is_last_chance=_is_last_chance(first, second),
        station_stickiness=stickiness,
    )


def score_pairs(
    candidates: Sequence[PairingCandidate],
    match_history: MatchHistory = (),
) -> List[PairScore]:
    """Score every pair of candidates that has never met in their track.

    Args:
        candidates: Eligible candidates for a single track
        match_history: Prior matches, used for station stickiness

    Returns:
        Scores in enumeration order (unsorted)
    """
    last_tracks = last_tracks_played(match_history)
    return [
        score_pair(first, second, candidates, last_tracks)
        for first, second in combinations(candidates, 2)
        if first.can_face(second)
    ]


def rank_pairs(scores: Sequence[PairScore]) -> List[PairScore]:
    """Order scored pairs by the priority cascade (stable)."""
    return sorted(scores, key=PairScore.priority_key)


def find_best_pair(
    candidates: Sequence[PairingCandidate],
    track: Track,
    match_history: MatchHistory = (),
) -> PairSelection:
    """Pick the best pair for ``track`` or explain why there is none.

    Args:
        candidates: Output of :func:`get_eligible_candidates` for ``track``
        track: The track being filled
        match_history: Prior matches, used for station stickiness

    Returns:
        A :class:`PairSelection`; ``found`` is False when no pair exists
    """
    if not candidates:
        return PairSelection(
            track=track,
            eligible_count=0,
            valid_pair_count=0,
            skip_reason=SKIP_NO_ELIGIBLE,
        )
    if len(candidates) == 1:
        return PairSelection(
            track=track,
            eligible_count=1,
            valid_pair_count=0,
            skip_reason=SKIP_ONE_ELIGIBLE.format(name=candidates[0].name),
        )

    scores = score_pairs(candidates, match_history)
    if not scores:
        return PairSelection(
            track=track,
            eligible_count=len(candidates),
            valid_pair_count=0,
            skip_reason=SKIP_NO_VALID_PAIRS,
        )

    best = rank_pairs(scores)[0]
    logger.debug(
        "Best %s pair %s vs %s: %s",
        track.value,
        best.first.name,
        best.second.name,
        best.priority_key(),
    )
    return PairSelection(
        track=track,
        eligible_count=len(candidates),
        valid_pair_count=len(scores),
        pair=best,
    )
