import random
from datetime import date, datetime, timezone

from padelmatch.utils import (
    court_label,
    court_labels,
    generate_id,
    parse_timestamp,
    round_half_up,
)


def test_court_labels_extend_past_configured_courts():
    assert court_labels(4) == ["A", "B", "C", "D"]
    assert court_labels(3, ["Centre", "Side"]) == ["Centre", "Side", "C"]
    assert court_label(25) == "Z"
    assert court_label(26) == "AA"
    assert court_label(27) == "AB"
    assert court_label(52) == "BA"


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(3.5) == 4
    assert round_half_up(-2.5) == -2
    assert round_half_up(66.666, 1) == 66.7


def test_seeded_ids_are_reproducible():
    first = generate_id("match", random.Random(4))
    assert first == generate_id("match", random.Random(4))
    assert first.startswith("match-")
    assert len(first) == len("match-") + 16
    assert generate_id() != generate_id()


def test_parse_timestamp():
    utc = timezone.utc
    assert parse_timestamp(None) is None
    assert parse_timestamp("") is None
    assert parse_timestamp("2025-03-01") == datetime(2025, 3, 1, tzinfo=utc)
    assert parse_timestamp("2025-03-01T19:30:00") == datetime(2025, 3, 1, 19, 30, tzinfo=utc)
    assert parse_timestamp("2025-03-01T19:30:00+01:00") == datetime(2025, 3, 1, 18, 30, tzinfo=utc)
    assert parse_timestamp(date(2025, 3, 1)) == datetime(2025, 3, 1, tzinfo=utc)
