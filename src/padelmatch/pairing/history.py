"""Recent-match history used by the freshness heuristic.

The engine never reads storage itself. Callers pass a history provider: any
callable taking the number of sessions to look back over and returning the
matches played in them.
"""

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

from datetime import datetime, timezone
from typing import Callable, List, Optional, Sequence, Set

from padelmatch.models.match import Match
from padelmatch.models.session import Session
from padelmatch.utils import parse_timestamp, setup_logger

logger = setup_logger(__name__)

HistoryProvider = Callable[[int], List[Match]]

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def _session_sort_key(session: Session) -> datetime:
    parsed = parse_timestamp(session.date)
    return parsed if parsed is not None else _OLDEST


def recent_matches_from_sessions(
    sessions: Sequence[Session], matches: Sequence[Match], session_count: int
) -> List[Match]:
    """Matches belonging to the ``session_count`` most recent sessions.

    Sessions are ordered by date, newest first. Matches keep the order of
    ``matches``.
    """
    if session_count <= 0:
        return []

    recent_sessions = sorted(sessions, key=_session_sort_key, reverse=True)[
        :session_count
    ]
    recent_ids: Set[str] = set()
    for session in recent_sessions:
        recent_ids.update(session.matches)

    return [match for match in matches if match.id in recent_ids]


class StaticHistoryProvider:
    """History provider over in-memory session and match lists."""

    def __init__(
        self,
        sessions: Optional[Sequence[Session]] = None,
        matches: Optional[Sequence[Match]] = None,
    ) -> None:
        self.sessions: List[Session] = list(sessions or [])
        self.matches: List[Match] = list(matches or [])

    def __call__(self, session_count: int) -> List[Match]:
        recent = recent_matches_from_sessions(
            self.sessions, self.matches, session_count
        )
        logger.debug(
            "Loaded %d recent matches from the last %d sessions",
            len(recent),
            session_count,
        )
        return recent


def load_recent_matches(
    history: Optional[HistoryProvider], session_count: int
) -> List[Match]:
    """Ask ``history`` for recent matches; no provider means no history."""
    if history is None:
        return []
    return list(history(session_count))
