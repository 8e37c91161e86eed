"""Data model for a social play session."""

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

from dataclasses import dataclass, field
from typing import Any, Dict, List

from padelmatch.constants import SESSION_PLANNING
from padelmatch.type_hints import SessionStatus


@dataclass
class SessionTiers:
    """Strong / weak split recorded for mixed-tier sessions."""

    strong: List[str] = field(default_factory=list)
    weak: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"strong": list(self.strong), "weak": list(self.weak)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SessionTiers":
        return cls(strong=list(data.get("strong", [])), weak=list(data.get("weak", [])))


@dataclass
class Session:
    """
    One evening of social play.

    Attributes
    ----------
    id : str
        Unique session id.
    date : str
        ISO date of the session; the freshness lookback orders by it.
    available_players : list of str
        Player ids taking part.
    matches : list of str
        Ids of the matches played in this session.
    status : str
        "planning", "active" or "completed".
    tiers : SessionTiers
        Strong / weak split, empty unless recorded.
    """

    id: str
    date: str
    available_players: List[str] = field(default_factory=list)
    matches: List[str] = field(default_factory=list)
    status: SessionStatus = SESSION_PLANNING
    tiers: SessionTiers = field(default_factory=SessionTiers)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize session to dictionary."""
        return {
            "id": self.id,
            "date": self.date,
            "availablePlayers": list(self.available_players),
            "matches": list(self.matches),
            "status": self.status,
            "tiers": self.tiers.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Session":
        """Deserialize session from dictionary."""
        return cls(
            id=data["id"],
            date=data["date"],
            available_players=list(data.get("availablePlayers", [])),
            matches=list(data.get("matches", [])),
            status=data.get("status", SESSION_PLANNING),
            tiers=SessionTiers.from_dict(data.get("tiers", {})),
        )
