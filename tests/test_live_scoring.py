import random
from datetime import datetime, timedelta, timezone

import pytest

from padelmatch.exceptions import (
    InvalidMatchStateException,
    InvalidScoreException,
    MatchNotFoundException,
    TournamentStateException,
)
from padelmatch.models import EngineConfig, Match, MatchScore, MatchSide
from padelmatch.tournament.lifecycle import create_tournament
from padelmatch.tournament.live_scoring import (
    add_game,
    determine_winner,
    edit_match_score,
    score_tournament_point,
    start_match,
    start_tournament_match,
    undo_last_action,
    undo_tournament_point,
)

NOW = datetime(2025, 3, 1, 19, 0, tzinfo=timezone.utc)


def _waiting_match():
    return Match(
        id="m1",
        session_id="s1",
        court="A",
        team_a=MatchSide("p1", "p4"),
        team_b=MatchSide("p2", "p3"),
    )


def _play(match, sides):
    for i, side in enumerate(sides):
        match = add_game(match, side, now=NOW + timedelta(minutes=i + 1))
    return match


@pytest.mark.parametrize(
    "score, expected",
    [
        ((6, 4), "teamA"),
        ((4, 6), "teamB"),
        ((6, 5), "teamA"),
        ((5, 2), "teamA"),
        ((0, 5), "teamB"),
        ((5, 3), None),
        ((5, 5), None),
        ((4, 4), None),
        ((0, 0), None),
    ],
)
def test_determine_winner(score, expected):
    assert determine_winner(*score) == expected


def test_determine_winner_without_early_termination():
    config = EngineConfig(early_termination=False)
    assert determine_winner(5, 0, config) is None
    assert determine_winner(6, 0, config) == "teamA"


def test_early_termination_needs_a_lead():
    config = EngineConfig(games_to_win=3)
    assert determine_winner(2, 2, config) is None
    assert determine_winner(2, 1, config) == "teamA"


def test_start_match():
    match = start_match(_waiting_match(), now=NOW)
    assert match.status == "live"
    assert match.start_time == NOW

    with pytest.raises(InvalidMatchStateException):
        start_match(match)


def test_games_need_a_live_match():
    with pytest.raises(InvalidMatchStateException):
        add_game(_waiting_match(), "teamA")


def test_add_game_records_history():
    original = start_match(_waiting_match(), now=NOW)
    match = add_game(original, "teamB", now=NOW)

    assert match.team_b.games_won == 1
    assert original.team_b.games_won == 0
    assert len(match.history) == 1
    point = match.history[0]
    assert (point.team_a_score, point.team_b_score) == (0, 0)
    assert point.action == "teamB_score"
    assert point.timestamp == NOW


def test_match_completes_on_early_termination():
    match = _play(start_match(_waiting_match(), now=NOW), ["teamA"] * 4 + ["teamB"] * 2 + ["teamA"])

    assert match.status == "completed"
    assert match.winner == "teamA"
    assert (match.team_a.games_won, match.team_b.games_won) == (5, 2)
    assert match.end_time == NOW + timedelta(minutes=7)


def test_match_goes_to_six():
    sides = ["teamA", "teamB"] * 5 + ["teamB"]
    match = _play(start_match(_waiting_match()), sides)
    assert match.winner == "teamB"
    assert (match.team_a.games_won, match.team_b.games_won) == (5, 6)


def test_unknown_side():
    with pytest.raises(ValueError):
        add_game(start_match(_waiting_match()), "teamC")


def test_undo_reopens_completed_match():
    match = _play(start_match(_waiting_match()), ["teamA"] * 5)
    assert match.status == "completed"

    match = undo_last_action(match)
    assert match.status == "live"
    assert match.winner is None
    assert match.end_time is None
    assert (match.team_a.games_won, match.team_b.games_won) == (4, 0)
    assert len(match.history) == 4


def test_undo_needs_history():
    with pytest.raises(InvalidMatchStateException):
        undo_last_action(start_match(_waiting_match()))


def test_edit_score_completes_and_reopens():
    live = start_match(_waiting_match())

    finished = edit_match_score(live, 6, 1, now=NOW)
    assert finished.status == "completed"
    assert finished.winner == "teamA"

    reopened = edit_match_score(finished, 3, 3)
    assert reopened.status == "live"
    assert reopened.winner is None
    assert reopened.end_time is None


@pytest.mark.parametrize("score", [(-1, 0), (7, 0), (0, 8)])
def test_edit_score_rejects_out_of_range(score):
    with pytest.raises(InvalidScoreException):
        edit_match_score(start_match(_waiting_match()), *score)


def _field(make_player, count):
    return [make_player(f"p{i}", 100 - i) for i in range(count)]


def _tournament(players, tournament_type="single-elimination"):
    return create_tournament(
        "Club Night", tournament_type, players, rng=random.Random(21), now=NOW
    )


def test_start_tournament_match(make_player):
    tournament = _tournament(_field(make_player, 8))
    tournament.status = "setup"
    match_id = tournament.bracket[0][0].id

    started = start_tournament_match(tournament, match_id)

    assert started.status == "active"
    assert started.find_match(match_id).status == "in-progress"
    assert started.find_match(match_id).score == MatchScore(0, 0)
    assert tournament.find_match(match_id).status == "pending"

    with pytest.raises(InvalidMatchStateException):
        start_tournament_match(started, match_id)


def test_placeholder_match_cannot_start(make_player):
    tournament = _tournament(_field(make_player, 8))
    with pytest.raises(InvalidMatchStateException):
        start_tournament_match(tournament, tournament.bracket[1][0].id)
    with pytest.raises(MatchNotFoundException):
        start_tournament_match(tournament, "missing")


def test_points_need_a_started_match(make_player):
    tournament = _tournament(_field(make_player, 8))
    with pytest.raises(InvalidMatchStateException):
        score_tournament_point(tournament, tournament.bracket[0][0].id, "teamA")


def test_scoring_decides_single_elimination_final(make_player):
    tournament = _tournament(_field(make_player, 4))
    match_id = tournament.bracket[0][0].id
    tournament = start_tournament_match(tournament, match_id)

    for _ in range(4):
        tournament = score_tournament_point(tournament, match_id, "teamB")
    assert tournament.find_match(match_id).score == MatchScore(0, 4)
    assert tournament.status == "active"

    tournament = score_tournament_point(tournament, match_id, "teamB", now=NOW)

    match = tournament.find_match(match_id)
    assert match.status == "completed"
    assert match.winner == "teamB"
    assert tournament.status == "completed"
    assert tournament.winner == "p1"


def test_scoring_completed_match_is_refused(make_player):
    tournament = _tournament(_field(make_player, 8))
    match_id = tournament.bracket[0][0].id
    tournament = start_tournament_match(tournament, match_id)
    for _ in range(5):
        tournament = score_tournament_point(tournament, match_id, "teamA")

    with pytest.raises(InvalidMatchStateException):
        score_tournament_point(tournament, match_id, "teamB")


def test_scoring_beyond_games_to_win_is_refused(make_player):
    tournament = _tournament(_field(make_player, 8))
    match_id = tournament.bracket[0][0].id
    tournament = start_tournament_match(tournament, match_id)
    tournament.find_match(match_id).score = MatchScore(6, 5)

    with pytest.raises(InvalidScoreException):
        score_tournament_point(tournament, match_id, "teamA")


def test_round_robin_scoring_updates_standings(make_player):
    players = _field(make_player, 6)
    tournament = _tournament(players, "round-robin")
    match_id = tournament.bracket[0][0].id
    tournament = start_tournament_match(tournament, match_id)

    for _ in range(5):
        tournament = score_tournament_point(tournament, match_id, "teamA", players)

    assert tournament.find_match(match_id).score == MatchScore(5, 0)
    assert [row.points for row in tournament.round_robin_standings] == [3, 0]

    reopened = undo_tournament_point(tournament, match_id, "teamA", players)
    match = reopened.find_match(match_id)
    assert match.status == "in-progress"
    assert match.winner is None
    assert match.score == MatchScore(4, 0)
    assert reopened.round_robin_standings == []


def test_undo_within_a_running_match(make_player):
    tournament = _tournament(_field(make_player, 8))
    match_id = tournament.bracket[0][0].id
    tournament = start_tournament_match(tournament, match_id)
    tournament = score_tournament_point(tournament, match_id, "teamA")

    tournament = undo_tournament_point(tournament, match_id, "teamA")
    assert tournament.find_match(match_id).score == MatchScore(0, 0)

    with pytest.raises(InvalidScoreException):
        undo_tournament_point(tournament, match_id, "teamA")


def test_undo_refused_after_round_advanced(make_player):
    tournament = _tournament(_field(make_player, 8))
    first_round = [m.id for m in tournament.bracket[0]]
    for match_id in first_round:
        tournament = start_tournament_match(tournament, match_id)
        for _ in range(5):
            tournament = score_tournament_point(tournament, match_id, "teamA")

    assert tournament.current_round == 2
    with pytest.raises(InvalidMatchStateException):
        undo_tournament_point(tournament, first_round[0], "teamA")


def test_undo_refused_once_tournament_completed(make_player):
    tournament = _tournament(_field(make_player, 4))
    match_id = tournament.bracket[0][0].id
    tournament = start_tournament_match(tournament, match_id)
    for _ in range(5):
        tournament = score_tournament_point(tournament, match_id, "teamA")

    with pytest.raises(TournamentStateException):
        undo_tournament_point(tournament, match_id, "teamA")


def test_round_robin_undo_moves_current_round_back(make_player):
    players = _field(make_player, 6)
    tournament = _tournament(players, "round-robin")
    match_id = tournament.bracket[0][0].id
    tournament = start_tournament_match(tournament, match_id)

    for _ in range(5):
        tournament = score_tournament_point(tournament, match_id, "teamB", players)
    assert tournament.current_round == 2

    reopened = undo_tournament_point(tournament, match_id, "teamB", players)
    assert reopened.current_round == 1
