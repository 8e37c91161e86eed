"""Data models for teams, match previews and session matches."""

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
from datetime import datetime
from typing import Any, Dict, List, Optional

from padelmatch.constants import MATCH_WAITING, TEAM_A, TEAM_B
from padelmatch.models.player import Player
from padelmatch.type_hints import (
    GameAction,
    MatchOutcome,
    MatchStatus,
    PlayerPair,
    TeamSide,
)
from padelmatch.utils import format_timestamp, parse_timestamp


@dataclass
class Team:
    """Two players paired for one match. Computed, never stored on its own.

    Attributes
    ----------
    player1 : Player
        First partner.
    player2 : Player
        Second partner.
    """

    player1: Player
    player2: Player

    @property
    def combined_skill(self) -> int:
        """Sum of both partners' skills."""
        return self.player1.skill + self.player2.skill

    @property
    def player_ids(self) -> PlayerPair:
        return self.player1.id, self.player2.id

    @property
    def name(self) -> str:
        return f"{self.player1.name} + {self.player2.name}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "player1": self.player1.to_dict(),
            "player2": self.player2.to_dict(),
            "combinedSkill": self.combined_skill,
        }


@dataclass
class MatchPreview:
    """A proposed match on a court, before the organiser confirms it."""

    court: str
    team_a: Team
    team_b: Team

    @property
    def player_ids(self) -> List[str]:
        return [*self.team_a.player_ids, *self.team_b.player_ids]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "court": self.court,
            "teamA": self.team_a.to_dict(),
            "teamB": self.team_b.to_dict(),
        }


@dataclass
class MatchSide:
    """One side of a stored session match."""

    player1_id: str
    player2_id: str
    games_won: int = 0

    @property
    def player_ids(self) -> PlayerPair:
        return self.player1_id, self.player2_id

    def has_pair(self, player1_id: str, player2_id: str) -> bool:
        """True when both ids are on this side."""
        ids = self.player_ids
        return player1_id in ids and player2_id in ids

    def to_dict(self) -> Dict[str, Any]:
        return {
            "player1Id": self.player1_id,
            "player2Id": self.player2_id,
            "gamesWon": self.games_won,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MatchSide":
        return cls(
            player1_id=data["player1Id"],
            player2_id=data["player2Id"],
            games_won=data.get("gamesWon", 0),
        )


@dataclass
class GamePoint:
    """Score snapshot taken before a live-scoring action, used for undo."""

    team_a_score: int
    team_b_score: int
    timestamp: datetime
    action: GameAction

    def to_dict(self) -> Dict[str, Any]:
        return {
            "teamAScore": self.team_a_score,
            "teamBScore": self.team_b_score,
            "timestamp": format_timestamp(self.timestamp),
            "action": self.action,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GamePoint":
        return cls(
            team_a_score=data["teamAScore"],
            team_b_score=data["teamBScore"],
            timestamp=parse_timestamp(data["timestamp"]),
            action=data["action"],
        )


@dataclass
class Match:
    """A match played during a social session.

    Attributes:
        id: Unique match id
        session_id: Owning session
        round: Round number within the session (1-indexed)
        court: Court label
        status: "waiting", "live" or "completed"
        team_a: First side
        team_b: Second side
        winner: "teamA", "teamB", "tie" or None while unfinished
        start_time: When play started
        end_time: When the match finished
        history: Score snapshots for undo, oldest first
    """

    id: str
    session_id: str
    court: str
    team_a: MatchSide
    team_b: MatchSide
    round: int = 1
    status: MatchStatus = MATCH_WAITING
    winner: Optional[MatchOutcome] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    history: List[GamePoint] = field(default_factory=list)

    @property
    def player_ids(self) -> List[str]:
        return [*self.team_a.player_ids, *self.team_b.player_ids]

    def side(self, team: TeamSide) -> MatchSide:
        """Return the side named ``team`` ("teamA" or "teamB")."""
        if team == TEAM_A:
            return self.team_a
        if team == TEAM_B:
            return self.team_b
        raise ValueError(f"Unknown side: {team}")

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "sessionId": self.session_id,
            "round": self.round,
            "court": self.court,
            "status": self.status,
            "teamA": self.team_a.to_dict(),
            "teamB": self.team_b.to_dict(),
            "history": [point.to_dict() for point in self.history],
        }
        if self.winner is not None:
            data["winner"] = self.winner
        if self.start_time is not None:
            data["startTime"] = format_timestamp(self.start_time)
        if self.end_time is not None:
            data["endTime"] = format_timestamp(self.end_time)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Match":
        return cls(
            id=data["id"],
            session_id=data["sessionId"],
            round=data.get("round", 1),
            court=data["court"],
            status=data.get("status", MATCH_WAITING),
            team_a=MatchSide.from_dict(data["teamA"]),
            team_b=MatchSide.from_dict(data["teamB"]),
            winner=data.get("winner"),
            start_time=parse_timestamp(data.get("startTime")),
            end_time=parse_timestamp(data.get("endTime")),
            history=[GamePoint.from_dict(p) for p in data.get("history", [])],
        )
