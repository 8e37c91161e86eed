from padelmatch.models import EngineConfig
from padelmatch.pairing.balance import (
    balance_score,
    classify_balance,
    combined_skill,
    create_team,
    validate_team_balance,
)


def test_combined_skill_is_sum_of_partners(make_player):
    team = create_team(make_player("a", 72), make_player("b", 41))
    assert combined_skill(team) == 113
    assert team.combined_skill == 113
    assert team.name == "A + B"


def test_balance_score_is_symmetric(make_player):
    team_a = create_team(make_player("a", 90), make_player("b", 60))
    team_b = create_team(make_player("c", 80), make_player("d", 55))
    assert balance_score(team_a, team_b) == 15
    assert balance_score(team_b, team_a) == 15


def test_classify_balance_thresholds():
    assert classify_balance(0) == "Perfectly Balanced"
    assert classify_balance(5) == "Perfectly Balanced"
    assert classify_balance(6) == "Good Match"
    assert classify_balance(10) == "Good Match"
    assert classify_balance(11) == "Unbalanced"


def test_classify_balance_uses_config_thresholds():
    config = EngineConfig(perfect_balance_threshold=1, good_balance_threshold=2)
    assert classify_balance(2, config) == "Good Match"
    assert classify_balance(3, config) == "Unbalanced"


def test_validate_team_balance_severity(make_player):
    strong = create_team(make_player("a", 90), make_player("b", 90))

    even = validate_team_balance(strong, create_team(make_player("c", 85), make_player("d", 85)))
    assert even.severity == "low"
    assert even.is_balanced
    assert even.warning is None

    medium = validate_team_balance(strong, create_team(make_player("c", 80), make_player("d", 85)))
    assert medium.score == 15
    assert medium.severity == "medium"
    assert not medium.is_balanced
    assert "moderately" in medium.warning

    high = validate_team_balance(strong, create_team(make_player("c", 70), make_player("d", 70)))
    assert high.score == 40
    assert high.severity == "high"
    assert "severely" in high.warning
