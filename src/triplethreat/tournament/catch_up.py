"""Catch-up matches for competitors who missed part of their quota.

When the main schedule ends, some competitors usually have fewer than three
matches in one or more tracks. Catch-up matches close the gap: two
competitors who are both short in a track play each other, and anyone left
over plays a *volunteer*, a competitor who already completed all nine
matches. Only the short competitor's record is updated by a catch-up match.
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
from dataclasses import dataclass, replace
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

from triplethreat.exceptions import MatchNotFoundException, TournamentStateException
from triplethreat.models.competitor import Competitor
from triplethreat.models.enums import TRACK_ORDER, Track
from triplethreat.models.match import Match
from triplethreat.utils import generate_id, setup_logger

logger = setup_logger(__name__)


@dataclass(frozen=True)
class Shortfall:
    """How many matches a competitor still owes in each track."""

    competitor_id: str
    needed: Dict[Track, int]

    @property
    def total_needed(self) -> int:
        return sum(self.needed.values())

    def needs(self, track: Track) -> bool:
        return self.needed.get(track, 0) > 0

    def needed_tracks(self) -> List[Track]:
        """Tracks still owed, in fixed priority order."""
        return [track for track in TRACK_ORDER if self.needs(track)]


def find_shortfalls(competitors: Sequence[Competitor]) -> List[Shortfall]:
    """Return a :class:`Shortfall` for every competitor below the full quota.

    Roster order is preserved.
    """
    shortfalls = []
    for competitor in competitors:
        if competitor.is_quota_complete:
            continue
        shortfalls.append(
            Shortfall(
                competitor_id=competitor.id,
                needed={track: competitor.track(track).remaining for track in TRACK_ORDER},
            )
        )
    return shortfalls


@dataclass(frozen=True)
class VolunteerResult:
    """Outcome of a volunteer search.

    Attributes:
        volunteer: Chosen volunteer, None when nobody has completed the quota
        is_exhausted: No clean option was left; the volunteer may be a rematch
        is_forced: Every candidate was excluded and the volunteer was drawn at
            random ignoring the exclusions
        eligible_count: Quota-complete competitors left after exclusions
    """

    volunteer: Optional[Competitor]
    is_exhausted: bool = False
    is_forced: bool = False
    eligible_count: int = 0

    @property
    def found(self) -> bool:
        return self.volunteer is not None


def _closest_record(
    shortfall: Competitor, pool: Sequence[Competitor], track: Track
) -> Competitor:
    target = shortfall.track(track).net
    # Ties: fewer meetings in any track, then roster order
    return min(
        pool,
        key=lambda c: (
            abs(c.track(track).net - target),
            shortfall.cross_track_encounters(c.id),
        ),
    )


def _has_met_in_track(a: Competitor, b: Competitor, track: Track) -> bool:
    return a.has_faced(b.id, track) or b.has_faced(a.id, track)


def find_catch_up_volunteer(
    competitors: Sequence[Competitor],
    shortfall_id: str,
    track: Track,
    excluded_ids: Iterable[str] = (),
    rng: Optional[random.Random] = None,
) -> VolunteerResult:
    """Find a volunteer to play ``shortfall_id`` in ``track``.

    The search escalates:

    1. Quota-complete competitors not excluded and not yet met in the track,
       closest track record first.
    2. The same pool with rematches allowed (``is_exhausted``).
    3. A random quota-complete competitor, ignoring every exclusion
       (``is_exhausted`` and ``is_forced``).
    4. Nobody has completed the quota: no volunteer.

    The shortfall competitor is never their own volunteer.

    Args:
        competitors: Current roster snapshot
        shortfall_id: Competitor who needs the match
        track: Track the match is in
        excluded_ids: Declined or already-booked volunteers
        rng: Random source for the forced draw

    Returns:
        A :class:`VolunteerResult`
    """
    shortfall = next((c for c in competitors if c.id == shortfall_id), None)
    if shortfall is None:
        logger.warning(f"Unknown shortfall competitor {shortfall_id}")
        return VolunteerResult(volunteer=None)

    completed = [
        c for c in competitors if c.id != shortfall_id and c.is_quota_complete
    ]
    if not completed:
        logger.info(f"No quota-complete competitors to volunteer for {track.value}")
        return VolunteerResult(volunteer=None)

    excluded = set(excluded_ids)
    eligible = [c for c in completed if c.id not in excluded]

    if eligible:
        fresh = [c for c in eligible if not _has_met_in_track(shortfall, c, track)]
        if fresh:
            return VolunteerResult(
                volunteer=_closest_record(shortfall, fresh, track),
                eligible_count=len(eligible),
            )
        volunteer = _closest_record(shortfall, eligible, track)
        logger.info(
            f"Every volunteer already played {shortfall.display_name} in "
            f"{track.value}; rematch with {volunteer.display_name}"
        )
        return VolunteerResult(
            volunteer=volunteer, is_exhausted=True, eligible_count=len(eligible)
        )

    rng = rng if rng is not None else random.Random()
    volunteer = rng.choice(completed)
    logger.warning(
        f"All volunteers excluded for {shortfall.display_name} in {track.value}; "
        f"forcing {volunteer.display_name}"
    )
    return VolunteerResult(volunteer=volunteer, is_exhausted=True, is_forced=True)


@dataclass(frozen=True)
class CatchUpPlan:
    """Matches proposed for a catch-up round.

    ``unmatched_ids`` lists shortfall competitors left without a match.
    """

    matches: Tuple[Match, ...]
    shortfalls: Tuple[Shortfall, ...]
    unmatched_ids: Tuple[str, ...]


def _pair_shortfalls(
    by_id: Dict[str, Competitor],
    shortfalls: Sequence[Shortfall],
    round_number: int,
    assigned: Set[str],
    rng: random.Random,
) -> List[Match]:
    matches: List[Match] = []
    for track in TRACK_ORDER:
        waiting = [
            s.competitor_id
            for s in shortfalls
            if s.needs(track) and s.competitor_id not in assigned
        ]
        while len(waiting) >= 2:
            first = by_id[waiting.pop(0)]
            options = [
                cid for cid in waiting if not _has_met_in_track(first, by_id[cid], track)
            ]
            if not options:
                continue
            partner_id = min(options, key=first.cross_track_encounters)
            waiting.remove(partner_id)
            assigned.update((first.id, partner_id))
            matches.append(
                Match(
                    id=generate_id("match", rng),
                    round_number=round_number,
                    track=track,
                    player1_id=first.id,
                    player2_id=partner_id,
                    is_catch_up=True,
                    shortfall_id=first.id,
                    second_shortfall_id=partner_id,
                )
            )
    return matches


def _volunteer_for_any_track(
    competitors: Sequence[Competitor],
    shortfall: Shortfall,
    excluded: Set[str],
    rng: random.Random,
) -> Tuple[Optional[Track], VolunteerResult]:
    # A clean volunteer in any needed track beats a rematch in the first one
    fallback: Tuple[Optional[Track], VolunteerResult] = (None, VolunteerResult(None))
    for track in shortfall.needed_tracks():
        result = find_catch_up_volunteer(
            competitors, shortfall.competitor_id, track, excluded, rng
        )
        if result.found and not result.is_exhausted:
            return track, result
        if fallback[0] is None and result.found and not result.is_forced:
            fallback = (track, result)
    return fallback


def plan_catch_up_round(
    competitors: Sequence[Competitor],
    round_number: int,
    rng: Optional[random.Random] = None,
) -> CatchUpPlan:
    """Propose the matches of a catch-up round.

    First, competitors short in the same track are paired with each other
    (never a rematch in that track, fewest meetings elsewhere first). Then
    each competitor still unassigned gets a volunteer for the first needed
    track with a clean option; failing that, a rematch volunteer. Nobody
    plays twice in the round, so a volunteer is never booked twice.

    Args:
        competitors: Roster after the main schedule
        round_number: Number given to the catch-up round
        rng: Random source for match ids

    Returns:
        A :class:`CatchUpPlan`
    """
    rng = rng if rng is not None else random.Random()
    by_id = {c.id: c for c in competitors}
    shortfalls = find_shortfalls(competitors)
    assigned: Set[str] = set()

    matches = _pair_shortfalls(by_id, shortfalls, round_number, assigned, rng)

    unmatched: List[str] = []
    for shortfall in shortfalls:
        if shortfall.competitor_id in assigned:
            continue
        track, result = _volunteer_for_any_track(competitors, shortfall, assigned, rng)
        if track is None:
            unmatched.append(shortfall.competitor_id)
            continue
        volunteer = result.volunteer
        assigned.update((shortfall.competitor_id, volunteer.id))
        matches.append(
            Match(
                id=generate_id("match", rng),
                round_number=round_number,
                track=track,
                player1_id=shortfall.competitor_id,
                player2_id=volunteer.id,
                is_catch_up=True,
                shortfall_id=shortfall.competitor_id,
                volunteer_id=volunteer.id,
                is_volunteer_exhausted=result.is_exhausted,
                is_rematch=by_id[shortfall.competitor_id].has_faced(volunteer.id, track),
            )
        )

    logger.info(
        f"Catch-up round {round_number}: {len(shortfalls)} short competitor(s), "
        f"{len(matches)} match(es), {len(unmatched)} left unmatched"
    )
    return CatchUpPlan(
        matches=tuple(matches),
        shortfalls=tuple(shortfalls),
        unmatched_ids=tuple(unmatched),
    )


@dataclass(frozen=True)
class DeclineOutcome:
    """Catch-up matches after a volunteer declined.

    ``replacement`` is the new search result; when it found nobody the
    match was dropped from ``matches``.
    """

    matches: Tuple[Match, ...]
    replacement: VolunteerResult


def decline_volunteer(
    competitors: Sequence[Competitor],
    catch_up_matches: Sequence[Match],
    match_id: str,
    rng: Optional[random.Random] = None,
) -> DeclineOutcome:
    """Replace the volunteer of one catch-up match.

    The declined volunteer joins the match's declined list. The new search
    excludes every declined volunteer, the shortfall competitor, and the
    volunteers of the other undecided catch-up matches.

    Raises:
        MatchNotFoundException: ``match_id`` is not among the matches
        TournamentStateException: The match has no volunteer or is decided
    """
    index = next(
        (i for i, m in enumerate(catch_up_matches) if m.id == match_id), None
    )
    if index is None:
        raise MatchNotFoundException(f"Catch-up match {match_id} not found")
    match = catch_up_matches[index]
    if match.volunteer_id is None:
        raise TournamentStateException(f"Match {match_id} has no volunteer to decline")
    if match.is_decided:
        raise TournamentStateException(f"Match {match_id} already has a result")

    declined = match.declined_volunteer_ids + (match.volunteer_id,)
    booked = [
        m.volunteer_id
        for i, m in enumerate(catch_up_matches)
        if i != index and not m.is_decided and m.volunteer_id
    ]
    excluded = [*declined, match.shortfall_id, *booked]

    result = find_catch_up_volunteer(
        competitors, match.shortfall_id, match.track, excluded, rng
    )

    remaining = list(catch_up_matches)
    if not result.found:
        logger.info(f"No replacement volunteer for match {match_id}; dropping it")
        del remaining[index]
        return DeclineOutcome(matches=tuple(remaining), replacement=result)

    volunteer_id = result.volunteer.id
    shortfall = next(c for c in competitors if c.id == match.shortfall_id)
    if match.player1_id == match.volunteer_id:
        players = {"player1_id": volunteer_id}
    else:
        players = {"player2_id": volunteer_id}
    remaining[index] = replace(
        match,
        volunteer_id=volunteer_id,
        declined_volunteer_ids=declined,
        is_volunteer_exhausted=result.is_exhausted,
        is_volunteer_forced=result.is_forced,
        is_rematch=shortfall.has_faced(volunteer_id, match.track),
        **players,
    )
    logger.info(
        f"Match {match_id}: volunteer {match.volunteer_id} declined, "
        f"replaced by {volunteer_id}"
    )
    return DeclineOutcome(matches=tuple(remaining), replacement=result)
