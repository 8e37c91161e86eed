import random

import pytest

from padelmatch.exceptions import InvalidPlayerCountException
from padelmatch.models import EngineConfig
from padelmatch.pairing.duplicate_prevention import (
    generate_matches_with_duplicate_prevention,
    generate_skill_based_matches_with_freshness,
)
from padelmatch.pairing.freshness import RecentPairings, calculate_match_freshness
from padelmatch.pairing.history import (
    StaticHistoryProvider,
    load_recent_matches,
    recent_matches_from_sessions,
)
from padelmatch.pairing.matchmaking import generate_matches, generate_skill_based_matches


def _ids(team):
    return set(team.player_ids)


def _total_freshness(matches, recent):
    pairings = RecentPairings.from_matches(recent)
    return sum(calculate_match_freshness(m.team_a, m.team_b, pairings) for m in matches)


def test_four_players_without_history_keep_standard_split(four_players):
    match = generate_skill_based_matches_with_freshness(four_players, [])[0]
    assert _ids(match.team_a) == {"p1", "p4"}
    assert _ids(match.team_b) == {"p2", "p3"}


def test_four_players_avoid_last_weeks_match(four_players, make_played_match):
    recent = [make_played_match("m1", ("p1", "p4"), ("p2", "p3"))]

    match = generate_skill_based_matches_with_freshness(four_players, recent)[0]

    # 1+3 vs 2+4 trades 20 points of balance for fresh partnerships
    assert _ids(match.team_a) == {"p1", "p3"}
    assert _ids(match.team_b) == {"p2", "p4"}


def test_larger_pool_swaps_weak_partners(eight_players, make_played_match):
    recent = [make_played_match("m1", ("p1", "p8"), ("p2", "p7"))]

    matches = generate_skill_based_matches_with_freshness(eight_players, recent)

    assert _ids(matches[0].team_a) == {"p1", "p7"}
    assert _ids(matches[0].team_b) == {"p2", "p8"}
    assert _ids(matches[1].team_a) == {"p3", "p6"}
    assert _ids(matches[1].team_b) == {"p4", "p5"}


def test_no_history_matches_plain_generator(eight_players):
    chosen = generate_matches_with_duplicate_prevention(eight_players, "skill-based")
    plain = generate_skill_based_matches(eight_players)
    assert [m.player_ids for m in chosen] == [m.player_ids for m in plain]


def test_history_provider_is_consulted(
    eight_players, make_played_match, make_session
):
    match = make_played_match("m1", ("p1", "p8"), ("p2", "p7"))
    history = StaticHistoryProvider([make_session("s1", "2025-02-22", ["m1"])], [match])

    chosen = generate_matches_with_duplicate_prevention(
        eight_players, "skill-based", history
    )
    assert _ids(chosen[0].team_a) == {"p1", "p7"}


def test_random_mode_keeps_freshest_attempt(
    eight_players, make_played_match, make_session
):
    recent = [
        make_played_match("m1", ("p1", "p2"), ("p3", "p4")),
        make_played_match("m2", ("p5", "p6"), ("p7", "p8")),
    ]
    history = StaticHistoryProvider(
        [make_session("s1", "2025-02-22", ["m1", "m2"])], recent
    )

    chosen = generate_matches_with_duplicate_prevention(
        eight_players, "random-balanced", history, random.Random(99)
    )
    first_attempt = generate_matches(eight_players, "random-balanced", random.Random(99))

    assert _total_freshness(chosen, recent) >= _total_freshness(first_attempt, recent)
    ids = [pid for m in chosen for pid in m.player_ids]
    assert len(set(ids)) == 8


def test_all_attempts_failing_raises(make_player):
    players = [make_player(f"p{i}", 50) for i in range(6)]
    with pytest.raises(InvalidPlayerCountException):
        generate_matches_with_duplicate_prevention(
            players, "skill-based", config=EngineConfig(generation_attempts=2)
        )


def test_recent_matches_use_newest_sessions(make_played_match, make_session):
    matches = [
        make_played_match(f"m{i}", ("a", "b"), ("c", "d"), session_id=f"s{i}")
        for i in range(1, 5)
    ]
    sessions = [
        make_session("s1", "2025-01-04", ["m1"]),
        make_session("s3", "2025-01-18", ["m3"]),
        make_session("s4", "2025-01-25", ["m4"]),
        make_session("s2", "2025-01-11", ["m2"]),
    ]

    recent = recent_matches_from_sessions(sessions, matches, 3)
    assert [m.id for m in recent] == ["m2", "m3", "m4"]
    assert recent_matches_from_sessions(sessions, matches, 0) == []


def test_load_recent_matches_without_provider():
    assert load_recent_matches(None, 3) == []
