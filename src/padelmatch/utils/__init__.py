"""Shared helpers: logging, ids, injected randomness and time."""

# Padel Match
# Copyright (C) 2025  Padel Match developers
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

import logging
import math
import os
import random
import uuid
from datetime import date, datetime, timezone
from typing import List, Optional, Sequence, Union

from dateutil import parser as date_parser

LOGGER_ROOT = "padelmatch"
LOG_LEVEL_ENV = "PADELMATCH_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logger(name: str) -> logging.Logger:
    """Return a module logger under the shared ``padelmatch`` root.

    The root logger gets one stream handler the first time this is called.
    Its level comes from ``PADELMATCH_LOG_LEVEL`` (default WARNING).

    Args:
        name: Usually ``__name__`` of the calling module

    Returns:
        The configured logger
    """
    root = logging.getLogger(LOGGER_ROOT)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
        level_name = os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()
        root.setLevel(getattr(logging, level_name, logging.WARNING))

    if name == LOGGER_ROOT or name.startswith(LOGGER_ROOT + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_ROOT}.{name}")


def generate_id(prefix: str = "", rng: Optional[random.Random] = None) -> str:
    """Generate a unique identifier.

    When ``rng`` is given the id is drawn from it, so seeded runs produce
    the same ids.
    """
    if rng is not None:
        value = uuid.UUID(int=rng.getrandbits(128), version=4).hex
    else:
        value = uuid.uuid4().hex
    return f"{prefix}-{value[:16]}" if prefix else value[:16]


def resolve_rng(rng: Optional[random.Random]) -> random.Random:
    """Return the injected random source, or a fresh unseeded one."""
    return rng if rng is not None else random.Random()


def utc_now(now: Optional[datetime] = None) -> datetime:
    """Return the injected "current time", defaulting to the wall clock."""
    return now if now is not None else datetime.now(timezone.utc)


def parse_timestamp(value: Union[str, datetime, date, None]) -> Optional[datetime]:
    """Parse an ISO-8601 date or timestamp as stored by the persistence layer.

    Plain dates become midnight. Naive values are assumed to be UTC so they
    compare with the aware timestamps produced by :func:`utc_now`.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    else:
        parsed = date_parser.isoparse(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_timestamp(value: Optional[datetime]) -> Optional[str]:
    """Serialize a timestamp to ISO-8601, passing None through."""
    return value.isoformat() if value is not None else None


def round_half_up(value: float, digits: int = 0) -> float:
    """Round to ``digits`` decimals with halves going up (2.5 -> 3, -2.5 -> -2)."""
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def court_label(index: int, courts: Optional[Sequence[str]] = None) -> str:
    """Label for the ``index``-th court (0-based).

    Configured courts are used first, then the alphabet continues
    spreadsheet style (A..Z, AA, AB, ...).
    """
    if courts and index < len(courts):
        return courts[index]

    label = ""
    n = index
    while True:
        n, remainder = divmod(n, 26)
        label = chr(65 + remainder) + label
        if n == 0:
            break
        n -= 1
    return label


def court_labels(count: int, courts: Optional[Sequence[str]] = None) -> List[str]:
    """Labels for the first ``count`` courts."""
    return [court_label(i, courts) for i in range(count)]


__all__ = [
    "setup_logger",
    "generate_id",
    "resolve_rng",
    "utc_now",
    "parse_timestamp",
    "format_timestamp",
    "round_half_up",
    "court_label",
    "court_labels",
]
