import random

import pytest

from padelmatch.models import Match, MatchSide, Player, Session


@pytest.fixture
def make_player():
    def _make(player_id, skill, gender=None, name=None):
        return Player(
            id=player_id,
            name=name or player_id.upper(),
            skill=skill,
            gender=gender,
        )

    return _make


@pytest.fixture
def four_players(make_player):
    return [
        make_player("p1", 90),
        make_player("p2", 80),
        make_player("p3", 70),
        make_player("p4", 60),
    ]


@pytest.fixture
def eight_players(make_player):
    skills = [90, 85, 80, 75, 70, 65, 60, 55]
    return [make_player(f"p{i + 1}", skill) for i, skill in enumerate(skills)]


@pytest.fixture
def make_played_match():
    def _make(match_id, team_a, team_b, session_id="s1", winner="teamA", games=(6, 2)):
        return Match(
            id=match_id,
            session_id=session_id,
            court="A",
            team_a=MatchSide(*team_a, games_won=games[0]),
            team_b=MatchSide(*team_b, games_won=games[1]),
            status="completed",
            winner=winner,
        )

    return _make


@pytest.fixture
def make_session():
    def _make(session_id, day, match_ids):
        return Session(id=session_id, date=day, matches=list(match_ids))

    return _make


@pytest.fixture
def rng():
    return random.Random(1234)
