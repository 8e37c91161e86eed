import random
from datetime import datetime, timezone

import pytest

from padelmatch.exceptions import UnsupportedConfigurationException
from padelmatch.models import MatchScore
from padelmatch.tournament.bracket import update_tournament_with_result
from padelmatch.tournament.lifecycle import (
    NAME_ADJECTIVES,
    NAME_NOUNS,
    NAME_SPORTS,
    create_tournament,
    generate_tournament_name,
    get_tournament_status,
)

NOW = datetime(2025, 3, 1, 18, 0, tzinfo=timezone.utc)


def _field(make_player, count):
    return [make_player(f"p{i}", 100 - i) for i in range(count)]


def test_create_single_elimination(make_player):
    players = _field(make_player, 8)
    tournament = create_tournament(
        "Spring Cup", "single-elimination", players, rng=random.Random(1), now=NOW
    )

    assert tournament.status == "active"
    assert tournament.current_round == 1
    assert tournament.total_rounds == len(tournament.bracket) == 2
    assert tournament.players == [p.id for p in players]
    assert tournament.round_robin_format is None
    assert tournament.created_at == NOW
    assert tournament.id.startswith("tournament-")


def test_create_round_robin_defaults_to_regular_doubles(make_player):
    tournament = create_tournament("League", "round-robin", _field(make_player, 8))
    assert tournament.round_robin_format == "regular-doubles"
    assert tournament.total_rounds == 3


def test_seeded_creation_is_reproducible(make_player):
    players = _field(make_player, 8)
    first = create_tournament("A", "round-robin", players, "switch-doubles", random.Random(9), now=NOW)
    second = create_tournament("A", "round-robin", players, "switch-doubles", random.Random(9), now=NOW)
    assert first.to_dict() == second.to_dict()


@pytest.mark.parametrize(
    "tournament_type, round_robin_format",
    [
        ("double-elimination", None),
        ("swiss", None),
        ("single-elimination", "mixed-doubles"),
        ("round-robin", "americano"),
    ],
)
def test_unsupported_configurations(make_player, tournament_type, round_robin_format):
    with pytest.raises(UnsupportedConfigurationException):
        create_tournament(
            "X", tournament_type, _field(make_player, 8), round_robin_format=round_robin_format
        )


def test_tournament_status(make_player):
    tournament = create_tournament("Cup", "single-elimination", _field(make_player, 8))

    status = get_tournament_status(tournament)
    assert status.status == "Active"
    assert (status.completed_matches, status.total_matches) == (0, 3)
    assert status.winner is None

    tournament = update_tournament_with_result(
        tournament, tournament.bracket[0][0].id, "teamA", MatchScore(6, 2)
    )
    status = get_tournament_status(tournament)
    assert status.completed_matches == 1
    assert status.to_dict()["totalRounds"] == 2
    assert "winner" not in status.to_dict()


def test_generate_tournament_name():
    name = generate_tournament_name(random.Random(3))
    adjective, sport, noun = name.split(" ")
    assert adjective in NAME_ADJECTIVES
    assert sport in NAME_SPORTS
    assert noun in NAME_NOUNS
    assert name == generate_tournament_name(random.Random(3))
