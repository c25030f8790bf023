import pytest

from triplethreat.constants import SKIP_NO_ELIGIBLE, SKIP_NO_VALID_PAIRS
from triplethreat.models import Track
from triplethreat.pairing import (
    PairScore,
    find_best_pair,
    get_eligible_candidates,
    rank_pairs,
    score_pairs,
)
from triplethreat.pairing.candidate_filter import PairingCandidate
from triplethreat.pairing.pair_scorer import last_tracks_played
from triplethreat.testing import CompetitorFactory, make_match

factory = CompetitorFactory


def _candidates(roster, track=Track.CHESS):
    return get_eligible_candidates(roster, track)


def _score(name, **overrides):
    candidate = PairingCandidate(factory.create_competitor(name), Track.CHESS)
    other = PairingCandidate(factory.create_competitor(name + "-b"), Track.CHESS)
    values = dict(
        cross_game_encounters=0,
        record_diff=0,
        scarcity=3,
        is_last_chance=False,
        station_stickiness=0,
    )
    values.update(overrides)
    return PairScore(first=candidate, second=other, **values)


def test_first_round_picks_fresh_even_pair():
    roster = factory.create_roster(8)

    for track in Track:
        selection = find_best_pair(_candidates(roster, track), track)

        assert selection.found
        assert selection.pair.cross_game_encounters == 0
        assert selection.pair.record_diff == 0
        assert selection.pair.is_last_chance is False
        assert selection.eligible_count == 8
        assert selection.valid_pair_count == 28


def test_equal_pairs_keep_enumeration_order():
    roster = factory.create_roster(4)

    selection = find_best_pair(_candidates(roster), Track.CHESS)

    assert selection.pair.ids == ("p1", "p2")


def test_only_rematches_left_reports_no_valid_pair():
    # X and Y are the only eligible players and already met in chess
    x = factory.create_competitor(
        "x", tracks={Track.CHESS: factory.track_stats(wins=1, opponents=["y"])}
    )
    y = factory.create_competitor(
        "y", tracks={Track.CHESS: factory.track_stats(losses=1, opponents=["x"])}
    )

    selection = find_best_pair(_candidates([x, y]), Track.CHESS)

    assert not selection.found
    assert selection.skip_reason == SKIP_NO_VALID_PAIRS
    assert selection.eligible_count == 2
    assert selection.valid_pair_count == 0


def test_everyone_met_reports_no_valid_pair():
    a = factory.create_competitor(
        "a", tracks={Track.CHESS: factory.track_stats(wins=2, opponents=["b", "c"])}
    )
    b = factory.create_competitor(
        "b", tracks={Track.CHESS: factory.track_stats(wins=1, losses=1, opponents=["a", "c"])}
    )
    c = factory.create_competitor(
        "c", tracks={Track.CHESS: factory.track_stats(losses=2, opponents=["a", "b"])}
    )

    selection = find_best_pair(_candidates([a, b, c]), Track.CHESS)

    assert selection.skip_reason == SKIP_NO_VALID_PAIRS


def test_record_mismatch_is_accepted_rather_than_a_rematch():
    # Y is X's close-record option but a rematch; Z is far off but new
    x = factory.create_competitor(
        "x", tracks={Track.CHESS: factory.track_stats(wins=2, opponents=["y", "w"])}
    )
    y = factory.create_competitor(
        "y", tracks={Track.CHESS: factory.track_stats(wins=1, losses=1, opponents=["x", "z"])}
    )
    z = factory.create_competitor(
        "z", tracks={Track.CHESS: factory.track_stats(losses=1, opponents=["y"])}
    )

    selection = find_best_pair(_candidates([x, y, z]), Track.CHESS)

    assert selection.pair.ids == ("x", "z")
    assert selection.pair.is_mismatch
    assert selection.valid_pair_count == 1


def test_no_candidates_reports_no_eligible():
    selection = find_best_pair([], Track.SMASH)

    assert selection.skip_reason == SKIP_NO_ELIGIBLE


def test_single_candidate_is_named_in_reason():
    roster = [factory.create_competitor("p1", name="Solo")]

    selection = find_best_pair(_candidates(roster), Track.SMASH)

    assert selection.skip_reason == "Only 1 eligible player: Solo"


def test_scarcity_counts_remaining_opponents():
    # p1 already played p2 and p3, so only p4 and p5 remain for them
    p1 = factory.create_competitor(
        "p1", tracks={Track.CHESS: factory.track_stats(wins=2, opponents=["p2", "p3"])}
    )
    p2 = factory.create_competitor(
        "p2", tracks={Track.CHESS: factory.track_stats(losses=1, opponents=["p1"])}
    )
    p3 = factory.create_competitor(
        "p3", tracks={Track.CHESS: factory.track_stats(losses=1, opponents=["p1"])}
    )
    roster = [p1, p2, p3, factory.create_competitor("p4"), factory.create_competitor("p5")]

    scores = {s.ids: s for s in score_pairs(_candidates(roster))}

    assert ("p1", "p2") not in scores
    assert scores[("p1", "p4")].scarcity == 8
    assert scores[("p1", "p4")].is_urgent
    assert scores[("p2", "p3")].scarcity == 7
    assert not scores[("p2", "p3")].is_urgent


def test_urgent_pair_outranks_record_alignment():
    p1 = factory.create_competitor(
        "p1", tracks={Track.CHESS: factory.track_stats(wins=2, opponents=["p2", "p3"])}
    )
    p2 = factory.create_competitor(
        "p2", tracks={Track.CHESS: factory.track_stats(losses=1, opponents=["p1"])}
    )
    p3 = factory.create_competitor(
        "p3", tracks={Track.CHESS: factory.track_stats(losses=1, opponents=["p1"])}
    )
    roster = [p1, p2, p3, factory.create_competitor("p4"), factory.create_competitor("p5")]

    selection = find_best_pair(_candidates(roster), Track.CHESS)

    assert selection.pair.ids == ("p1", "p4")
    assert selection.pair.is_urgent
    assert selection.pair.is_mismatch


def test_cross_game_encounters_count_other_tracks_only():
    p1 = factory.create_competitor(
        "p1",
        tracks={
            Track.SMASH: factory.track_stats(wins=1, opponents=["p2"]),
            Track.PING_PONG: factory.track_stats(wins=1, opponents=["p2"]),
        },
    )
    p2 = factory.create_competitor(
        "p2",
        tracks={
            Track.SMASH: factory.track_stats(losses=1, opponents=["p1"]),
            Track.PING_PONG: factory.track_stats(losses=1, opponents=["p1"]),
        },
    )

    (score,) = score_pairs(_candidates([p1, p2], Track.CHESS))

    assert score.cross_game_encounters == 2
    assert not score.is_good_first_time


def test_last_chance_pair_is_detected_and_ranked_first():
    def finished_elsewhere(cid):
        return factory.create_competitor(
            cid,
            tracks={
                Track.CHESS: factory.track_stats(
                    wins=2, losses=1, opponents=[f"{cid}-c{i}" for i in range(3)]
                ),
                Track.PING_PONG: factory.track_stats(
                    wins=1, losses=2, opponents=[f"{cid}-t{i}" for i in range(3)]
                ),
            },
        )

    roster = [factory.create_competitor("fresh"), finished_elsewhere("a"), finished_elsewhere("b")]

    selection = find_best_pair(_candidates(roster, Track.SMASH), Track.SMASH)

    assert selection.pair.ids == ("a", "b")
    assert selection.pair.is_last_chance


def test_station_stickiness_uses_most_recent_track():
    history = [
        make_match("m1", Track.SMASH, "p1", "p2", round_number=1, winner_id="p1"),
        make_match("m2", Track.CHESS, "p1", "p3", round_number=2, winner_id="p3"),
        make_match("m3", Track.CHESS, "p2", "p4", round_number=2, winner_id="p2"),
    ]

    last = last_tracks_played(history)

    assert last == {
        "p1": Track.CHESS,
        "p2": Track.CHESS,
        "p3": Track.CHESS,
        "p4": Track.CHESS,
    }


def test_station_stickiness_counts_players_staying_put():
    history = [make_match("m1", Track.SMASH, "p1", "p2", round_number=1, winner_id="p1")]
    roster = factory.create_roster(4)
    # No smash opponents recorded so p1 and p2 may still be scored together
    scores = {s.ids: s for s in score_pairs(_candidates(roster, Track.SMASH), history)}

    assert scores[("p1", "p2")].station_stickiness == 2
    assert scores[("p1", "p3")].station_stickiness == 1
    assert scores[("p3", "p4")].station_stickiness == 0


class TestPriorityCascade:
    def test_last_chance_beats_urgency(self):
        urgent = _score("urgent", scarcity=9)
        last = _score("last", is_last_chance=True, scarcity=0)

        assert rank_pairs([urgent, last])[0] is last

    def test_urgency_beats_record_mismatch(self):
        calm = _score("calm", scarcity=3)
        urgent = _score("urgent", scarcity=8, record_diff=3)

        assert rank_pairs([calm, urgent])[0] is urgent

    def test_record_mismatch_avoided_before_stickiness(self):
        mismatch = _score("mismatch", record_diff=2)
        sticky = _score("sticky", station_stickiness=2)

        assert rank_pairs([mismatch, sticky])[0] is sticky

    def test_lower_stickiness_beats_good_first_time(self):
        sticky = _score("sticky", station_stickiness=1)
        seen = _score("seen", cross_game_encounters=1)

        assert rank_pairs([sticky, seen])[0] is seen

    def test_good_first_time_beats_cross_game_rematch(self):
        seen = _score("seen", cross_game_encounters=1, record_diff=0)
        fresh = _score("fresh", cross_game_encounters=0, record_diff=1)

        assert rank_pairs([seen, fresh])[0] is fresh

    def test_fewer_encounters_then_scarcity_then_record_diff(self):
        twice = _score("twice", cross_game_encounters=2, scarcity=7)
        once = _score("once", cross_game_encounters=1, scarcity=5)
        assert rank_pairs([twice, once])[0] is once

        relaxed = _score("relaxed", scarcity=3)
        scarce = _score("scarce", scarcity=6)
        assert rank_pairs([relaxed, scarce])[0] is scarce

        off_by_one = _score("off", record_diff=1)
        even = _score("even", record_diff=0)
        assert rank_pairs([off_by_one, even])[0] is even

    def test_ranking_is_stable_for_identical_keys(self):
        first = _score("first")
        second = _score("second")

        assert rank_pairs([first, second]) == [first, second]


@pytest.mark.parametrize("diff,mismatch", [(0, False), (1, False), (2, True), (4, True)])
def test_mismatch_threshold(diff, mismatch):
    assert _score("s", record_diff=diff).is_mismatch is mismatch
