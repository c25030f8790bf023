"""Multi-track Swiss round generation.

Each round fills up to three matches, one per track. Tracks are visited in a
random order so no track systematically gets first pick of the competitors.
The search is greedy: a pair chosen for an early track is locked in even if
that leaves a later track unfillable.
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
from dataclasses import dataclass
from typing import List, Optional, Sequence, Set, Tuple

from triplethreat.models.competitor import Competitor
from triplethreat.models.enums import TRACK_ORDER, Track
from triplethreat.models.match import Match
from triplethreat.models.matchmaking_log import (
    MatchmakingLog,
    MatchmakingLogEntry,
    SkippedTrack,
)
from triplethreat.pairing.candidate_filter import get_eligible_candidates
from triplethreat.pairing.pair_scorer import PairScore, PairSelection, find_best_pair
from triplethreat.utils import generate_id, setup_logger

logger = setup_logger(__name__)


@dataclass(frozen=True)
class SwissPairingResult:
    """Matches proposed for a round plus the round's diagnostic log."""

    matches: Tuple[Match, ...]
    log: MatchmakingLog


def shuffled_tracks(rng: random.Random) -> List[Track]:
    tracks = list(TRACK_ORDER)
    rng.shuffle(tracks)
    return tracks


def _signed(value: int) -> str:
    return f"+{value}" if value >= 0 else str(value)


def describe_reason(score: PairScore) -> str:
    """Short reason string for the log."""
    if score.is_last_chance:
        return "Last chance to meet"
    if score.is_urgent:
        return f"Running out of opponents (scarcity {score.scarcity})"
    if score.is_good_first_time:
        if score.record_diff == 0:
            return f"First-time matchup, same record ({_signed(score.first.stats.net)})"
        return "First-time matchup, close records"
    if score.cross_game_encounters == 0:
        return f"First-time matchup (record gap {score.record_diff})"
    return f"Cross-game rematch ({score.cross_game_encounters} prior encounter(s))"


def describe_details(selection: PairSelection) -> Tuple[str, ...]:
    """Ordered rationale lines for the chosen pair."""
    score = selection.pair
    details = [
        f"{selection.eligible_count} eligible players for this game",
        f"{selection.valid_pair_count} valid pairings considered",
    ]
    if score.cross_game_encounters == 0:
        details.append("Never faced each other in any game")
    else:
        details.append(
            f"Already faced each other in {score.cross_game_encounters} other game(s)"
        )
    first_net = _signed(score.first.stats.net)
    second_net = _signed(score.second.stats.net)
    if score.record_diff == 0:
        details.append(f"Identical records ({first_net})")
    elif score.is_mismatch:
        details.append(
            f"Record mismatch {first_net} vs {second_net} (no closer option ranked higher)"
        )
    else:
        details.append(f"Close records ({first_net} vs {second_net})")
    if score.station_stickiness == 0:
        details.append("Both players rotate in from another game")
    else:
        details.append(
            f"{score.station_stickiness} player(s) stay at this station from last match"
        )
    if score.is_last_chance:
        details.append("Last chance: they cannot meet in any other game")
    if score.is_urgent:
        details.append(
            f"Scarcity {score.scarcity}: a player has few valid opponents left"
        )
    return tuple(details)


def generate_round_pairings(
    competitors: Sequence[Competitor],
    match_history: Sequence[Match],
    round_number: int,
    rng: Optional[random.Random] = None,
) -> SwissPairingResult:
    """Propose the matches of one round.

    This is a pure function of the snapshot: nothing passed in is modified.
    The caller applies the returned matches to its own state.

    Args:
        competitors: Current roster snapshot
        match_history: Every match scheduled so far
        round_number: Number of the round being generated
        rng: Random source for the track order and match ids. A seeded
            ``random.Random`` makes the result reproducible.

    Returns:
        Up to three matches (one per track) and the round's log
    """
    rng = rng if rng is not None else random.Random()
    prior_matches = [m for m in match_history if m.round_number < round_number]

    matches: List[Match] = []
    entries: List[MatchmakingLogEntry] = []
    skipped: List[SkippedTrack] = []
    assigned_ids: Set[str] = set()

    for track in shuffled_tracks(rng):
        candidates = get_eligible_candidates(competitors, track, assigned_ids)
        selection = find_best_pair(candidates, track, prior_matches)

        if not selection.found:
            logger.info(
                "Round %s: skipping %s - %s",
                round_number,
                track.value,
                selection.skip_reason,
            )
            skipped.append(SkippedTrack(track=track, reason=selection.skip_reason))
            continue

        score = selection.pair
        first, second = score.first, score.second
        assigned_ids.update(score.ids)

        matches.append(
            Match(
                id=generate_id("match", rng),
                round_number=round_number,
                track=track,
                player1_id=first.id,
                player2_id=second.id,
            )
        )
        entries.append(
            MatchmakingLogEntry(
                round_number=round_number,
                track=track,
                player1_name=first.name,
                player2_name=second.name,
                player1_record=first.stats.record_label,
                player2_record=second.stats.record_label,
                reason=describe_reason(score),
                details=describe_details(selection),
            )
        )

    logger.info(
        "Round %s: generated %s match(es), skipped %s track(s)",
        round_number,
        len(matches),
        len(skipped),
    )
    return SwissPairingResult(
        matches=tuple(matches),
        log=MatchmakingLog(
            round_number=round_number,
            entries=tuple(entries),
            skipped_tracks=tuple(skipped),
        ),
    )
