"""A padel player and the running statistics kept for them."""

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

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from padelmatch.type_hints import Gender
from padelmatch.utils import format_timestamp, parse_timestamp, setup_logger

logger = setup_logger(__name__)


@dataclass
class PlayerStats:
    """Cumulative match statistics for a player.

    Attributes:
        matches_played: Matches finished
        matches_won: Matches won
        matches_lost: Matches lost (ties count as neither)
        games_won: Games won across all matches
        games_lost: Games conceded across all matches
        current_streak: Positive for consecutive wins, negative for losses
        points: 3 per win, 1 per tie
        last_played: ISO date/time of the last finished match
    """

    matches_played: int = 0
    matches_won: int = 0
    matches_lost: int = 0
    games_won: int = 0
    games_lost: int = 0
    current_streak: int = 0
    points: int = 0
    last_played: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "matchesPlayed": self.matches_played,
            "matchesWon": self.matches_won,
            "matchesLost": self.matches_lost,
            "gamesWon": self.games_won,
            "gamesLost": self.games_lost,
            "currentStreak": self.current_streak,
            "points": self.points,
        }
        if self.last_played is not None:
            data["lastPlayed"] = self.last_played
        return data

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "PlayerStats":
        data = data or {}
        return cls(
            matches_played=data.get("matchesPlayed", 0),
            matches_won=data.get("matchesWon", 0),
            matches_lost=data.get("matchesLost", 0),
            games_won=data.get("gamesWon", 0),
            games_lost=data.get("gamesLost", 0),
            current_streak=data.get("currentStreak", 0),
            points=data.get("points", 0),
            last_played=data.get("lastPlayed"),
        )


@dataclass
class Player:
    """Represents a player in the club.

    Attributes:
        id: Unique identifier for the player
        name: Display name
        skill: Skill rating, nominally 1-100
        gender: "male", "female" or None (used by mixed doubles)
        is_guest: Whether the player is a one-off guest
        availability: ISO dates the player is available on
        stats: Running statistics, replaced after every scored match
        created_at: When the player was registered
    """

    id: str
    name: str
    skill: int
    gender: Optional[Gender] = None
    is_guest: bool = False
    availability: List[str] = field(default_factory=list)
    stats: PlayerStats = field(default_factory=PlayerStats)
    created_at: Optional[datetime] = None

    def is_available_on(self, day: str) -> bool:
        """Check whether the player marked ``day`` (ISO date) as available."""
        return day in self.availability

    def to_dict(self) -> Dict[str, Any]:
        """Serialize player data to the stored dictionary format."""
        data: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "skill": self.skill,
            "isGuest": self.is_guest,
            "availability": list(self.availability),
            "stats": self.stats.to_dict(),
        }
        if self.gender is not None:
            data["gender"] = self.gender
        if self.created_at is not None:
            data["createdAt"] = format_timestamp(self.created_at)
        return data

    @classmethod
    def from_dict(cls, player_data: Dict[str, Any]) -> "Player":
        """Create a Player from serialized dictionary data.

        Args:
            player_data: Dictionary in the stored format

        Returns:
            Player instance
        """
        skill = player_data.get("skill", 0)
        if not isinstance(skill, int):
            logger.warning(
                "Non-integer skill %r for player %s, truncating",
                skill,
                player_data.get("name"),
            )
            skill = int(skill)

        return cls(
            id=str(player_data["id"]),
            name=player_data["name"],
            skill=skill,
            gender=player_data.get("gender"),
            is_guest=player_data.get("isGuest", False),
            availability=list(player_data.get("availability", [])),
            stats=PlayerStats.from_dict(player_data.get("stats")),
            created_at=parse_timestamp(player_data.get("createdAt")),
        )

    def __str__(self) -> str:
        return f"{self.name} ({self.skill})"
