from datetime import datetime, timezone

import pytest

from padelmatch.models import (
    EngineConfig,
    Match,
    MatchTeam,
    Player,
    Session,
    Tournament,
    resolve_config,
)

STORED_PLAYER = {
    "id": "player-1",
    "name": "Ana",
    "skill": 72,
    "gender": "female",
    "isGuest": False,
    "availability": ["2025-03-01", "2025-03-08"],
    "stats": {
        "matchesPlayed": 4,
        "matchesWon": 3,
        "matchesLost": 1,
        "gamesWon": 22,
        "gamesLost": 13,
        "currentStreak": 2,
        "points": 9,
        "lastPlayed": "2025-02-22T21:00:00+00:00",
    },
    "createdAt": "2025-01-05T10:00:00+00:00",
}


def test_player_from_stored_dict():
    player = Player.from_dict(STORED_PLAYER)

    assert player.skill == 72
    assert player.stats.matches_won == 3
    assert player.stats.current_streak == 2
    assert player.created_at == datetime(2025, 1, 5, 10, tzinfo=timezone.utc)
    assert player.is_available_on("2025-03-08")
    assert not player.is_available_on("2025-03-15")
    assert player.to_dict() == STORED_PLAYER


def test_player_defaults_and_skill_truncation():
    player = Player.from_dict({"id": 7, "name": "Guest", "skill": 64.8})
    assert player.id == "7"
    assert player.skill == 64
    assert player.stats.matches_played == 0
    assert "gender" not in player.to_dict()
    assert str(player) == "Guest (64)"


def test_engine_config_from_app_settings():
    config = EngineConfig.from_dict({"gamesToWin": 4, "courtsAvailable": ["1", "2"]})
    assert config.games_to_win == 4
    assert config.courts_available == ["1", "2"]
    assert config.points_win == 3
    assert EngineConfig.from_dict(config.to_dict()) == config


def test_engine_config_validation():
    with pytest.raises(ValueError):
        EngineConfig(games_to_win=0)
    with pytest.raises(ValueError):
        EngineConfig(generation_attempts=0)
    assert resolve_config(None) == EngineConfig()


def test_match_from_stored_dict():
    match = Match.from_dict(
        {
            "id": "m1",
            "sessionId": "s1",
            "round": 1,
            "court": "B",
            "status": "live",
            "teamA": {"player1Id": "a", "player2Id": "b", "gamesWon": 3},
            "teamB": {"player1Id": "c", "player2Id": "d", "gamesWon": 1},
            "history": [
                {
                    "teamAScore": 2,
                    "teamBScore": 1,
                    "timestamp": "2025-03-01T19:20:00Z",
                    "action": "teamA_score",
                }
            ],
            "startTime": "2025-03-01T19:00:00Z",
        }
    )

    assert match.player_ids == ["a", "b", "c", "d"]
    assert match.side("teamA").games_won == 3
    assert match.team_b.has_pair("d", "c")
    assert match.history[0].team_a_score == 2
    assert match.winner is None
    assert "winner" not in match.to_dict()
    with pytest.raises(ValueError):
        match.side("teamC")


def test_session_round_trip():
    session = Session.from_dict(
        {"id": "s1", "date": "2025-03-01", "availablePlayers": ["a"], "matches": ["m1"]}
    )
    assert session.status == "planning"
    assert session.tiers.strong == []
    assert Session.from_dict(session.to_dict()) == session


def test_match_team_placeholder():
    assert MatchTeam().is_placeholder
    assert MatchTeam().name == "TBD"
    assert not MatchTeam("a", "b", "A + B").is_placeholder


def test_tournament_from_stored_dict():
    tournament = Tournament.from_dict(
        {
            "id": "t1",
            "name": "Cup",
            "type": "round-robin",
            "status": "active",
            "currentRound": 1,
            "totalRounds": 1,
            "players": ["a", "b", "c", "d"],
            "roundRobinFormat": "regular-doubles",
            "bracket": [
                [
                    {
                        "id": "tm1",
                        "round": 1,
                        "matchNumber": 1,
                        "teamA": {"player1Id": "a", "player2Id": "b", "name": "A + B"},
                        "teamB": {"player1Id": "c", "player2Id": "d", "name": "C + D"},
                        "court": "Court A",
                        "status": "completed",
                        "winner": "teamB",
                        "score": {"teamA": 2, "teamB": 6},
                    }
                ]
            ],
            "roundRobinStandings": [
                {
                    "teamId": "c-d",
                    "teamName": "C + D",
                    "player1Id": "c",
                    "player2Id": "d",
                    "played": 1,
                    "won": 1,
                    "points": 3,
                    "pointsFor": 6,
                    "pointsAgainst": 2,
                    "pointsDifference": 4,
                    "rank": 1,
                }
            ],
            "createdAt": "2025-03-01T18:00:00Z",
        }
    )

    assert tournament.is_round_robin
    assert not tournament.is_switch_doubles
    match = tournament.find_match("tm1")
    assert match.is_completed
    assert match.winning_team().name == "C + D"
    assert match.score.for_side("teamB") == 6
    assert tournament.round_robin_standings[0].points_difference == 4
    assert tournament.find_match("missing") is None
    assert Tournament.from_dict(tournament.to_dict()) == tournament
