"""Tournament, bracket match and round-robin standing data classes."""

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

from padelmatch.constants import (
    ROUND_ROBIN,
    SWITCH_DOUBLES,
    TBD_NAME,
    TEAM_A,
    TEAM_B,
    TM_COMPLETED,
    TM_PENDING,
    TOURNAMENT_SETUP,
)
from padelmatch.type_hints import (
    PlayerPair,
    RoundRobinFormat,
    ScoreDict,
    TeamSide,
    TournamentMatchStatus,
    TournamentState,
    TournamentType,
)
from padelmatch.utils import format_timestamp, parse_timestamp


@dataclass
class MatchTeam:
    """A side of a tournament match: two player ids plus a display name.

    Later single-elimination rounds start with empty ids and the name
    "TBD" until the feeding round resolves.
    """

    player1_id: str = ""
    player2_id: str = ""
    name: str = TBD_NAME

    @property
    def is_placeholder(self) -> bool:
        return not self.player1_id and not self.player2_id

    @property
    def player_ids(self) -> PlayerPair:
        return self.player1_id, self.player2_id

    def to_dict(self) -> Dict[str, Any]:
        return {
            "player1Id": self.player1_id,
            "player2Id": self.player2_id,
            "name": self.name,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MatchTeam":
        return cls(
            player1_id=data.get("player1Id", ""),
            player2_id=data.get("player2Id", ""),
            name=data.get("name", TBD_NAME),
        )


@dataclass
class MatchScore:
    """Games won by each side."""

    team_a: int = 0
    team_b: int = 0

    def for_side(self, side: TeamSide) -> int:
        return self.team_a if side == TEAM_A else self.team_b

    def to_dict(self) -> ScoreDict:
        return {"teamA": self.team_a, "teamB": self.team_b}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MatchScore":
        return cls(team_a=data.get("teamA", 0), team_b=data.get("teamB", 0))


@dataclass
class TournamentMatch:
    """A single match inside a tournament bracket.

    Attributes:
        id: Unique match id
        round: Round number (1-indexed)
        match_number: Position within the round (1-indexed)
        team_a: First side
        team_b: Second side
        court: Court label, e.g. "Court A"
        winner: "teamA", "teamB" or None (unplayed, or a round-robin tie)
        status: "pending", "in-progress" or "completed"
        score: Games won per side once play has started
    """

    id: str
    round: int
    match_number: int
    team_a: MatchTeam = field(default_factory=MatchTeam)
    team_b: MatchTeam = field(default_factory=MatchTeam)
    court: Optional[str] = None
    winner: Optional[TeamSide] = None
    status: TournamentMatchStatus = TM_PENDING
    score: Optional[MatchScore] = None

    @property
    def is_completed(self) -> bool:
        return self.status == TM_COMPLETED

    @property
    def player_ids(self) -> List[str]:
        return [*self.team_a.player_ids, *self.team_b.player_ids]

    def side(self, team: TeamSide) -> MatchTeam:
        if team == TEAM_A:
            return self.team_a
        if team == TEAM_B:
            return self.team_b
        raise ValueError(f"Unknown side: {team}")

    def winning_team(self) -> Optional[MatchTeam]:
        """The winning side, or None when there is no winner yet."""
        if self.winner is None:
            return None
        return self.side(self.winner)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "round": self.round,
            "matchNumber": self.match_number,
            "teamA": self.team_a.to_dict(),
            "teamB": self.team_b.to_dict(),
            "status": self.status,
        }
        if self.court is not None:
            data["court"] = self.court
        if self.winner is not None:
            data["winner"] = self.winner
        if self.score is not None:
            data["score"] = self.score.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TournamentMatch":
        score = data.get("score")
        return cls(
            id=data["id"],
            round=data["round"],
            match_number=data["matchNumber"],
            team_a=MatchTeam.from_dict(data["teamA"]),
            team_b=MatchTeam.from_dict(data["teamB"]),
            court=data.get("court"),
            winner=data.get("winner"),
            status=data.get("status", TM_PENDING),
            score=MatchScore.from_dict(score) if score is not None else None,
        )


@dataclass
class RoundRobinStanding:
    """A ranked row of round-robin performance for a team or, in
    switch-doubles, a single player (``player2_id`` is then empty)."""

    team_id: str
    team_name: str
    player1_id: str
    player2_id: str = ""
    played: int = 0
    won: int = 0
    lost: int = 0
    tied: int = 0
    points: int = 0
    points_for: int = 0
    points_against: int = 0
    points_difference: int = 0
    rank: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "teamId": self.team_id,
            "teamName": self.team_name,
            "player1Id": self.player1_id,
            "player2Id": self.player2_id,
            "played": self.played,
            "won": self.won,
            "lost": self.lost,
            "tied": self.tied,
            "points": self.points,
            "pointsFor": self.points_for,
            "pointsAgainst": self.points_against,
            "pointsDifference": self.points_difference,
            "rank": self.rank,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RoundRobinStanding":
        return cls(
            team_id=data["teamId"],
            team_name=data["teamName"],
            player1_id=data["player1Id"],
            player2_id=data.get("player2Id", ""),
            played=data.get("played", 0),
            won=data.get("won", 0),
            lost=data.get("lost", 0),
            tied=data.get("tied", 0),
            points=data.get("points", 0),
            points_for=data.get("pointsFor", 0),
            points_against=data.get("pointsAgainst", 0),
            points_difference=data.get("pointsDifference", 0),
            rank=data.get("rank", 0),
        )


@dataclass
class Tournament:
    """
    A single-elimination or round-robin tournament.

    Attributes
    ----------
    id : str
        Unique tournament id.
    name : str
        Display name.
    type : str
        "single-elimination", "double-elimination" or "round-robin".
    status : str
        "setup", "active" or "completed"; only ever moves forward.
    current_round : int
        Round whose matches are still awaiting completion (1-indexed).
    total_rounds : int
        Always equal to ``len(bracket)``.
    players : list of str
        Participating player ids.
    bracket : list of list of TournamentMatch
        Rounds in order, each an ordered list of matches.
    round_robin_format : str, optional
        "regular-doubles", "mixed-doubles" or "switch-doubles".
    round_robin_standings : list of RoundRobinStanding, optional
        Cached standings.
    winner : str, optional
        Representative player id of the champion.
    created_at, completed_at : datetime, optional
        Lifecycle timestamps.
    """

    id: str
    name: str
    type: TournamentType
    status: TournamentState = TOURNAMENT_SETUP
    current_round: int = 1
    total_rounds: int = 0
    players: List[str] = field(default_factory=list)
    bracket: List[List[TournamentMatch]] = field(default_factory=list)
    round_robin_format: Optional[RoundRobinFormat] = None
    round_robin_standings: Optional[List[RoundRobinStanding]] = None
    winner: Optional[str] = None
    created_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    @property
    def is_round_robin(self) -> bool:
        return self.type == ROUND_ROBIN

    @property
    def is_switch_doubles(self) -> bool:
        return self.round_robin_format == SWITCH_DOUBLES

    def all_matches(self) -> List[TournamentMatch]:
        """Every match across all rounds, in bracket order."""
        return [match for round_matches in self.bracket for match in round_matches]

    def find_match(self, match_id: str) -> Optional[TournamentMatch]:
        for round_matches in self.bracket:
            for match in round_matches:
                if match.id == match_id:
                    return match
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize tournament to the stored dictionary format."""
        data: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "status": self.status,
            "currentRound": self.current_round,
            "totalRounds": self.total_rounds,
            "players": list(self.players),
            "bracket": [[m.to_dict() for m in rnd] for rnd in self.bracket],
            "createdAt": format_timestamp(self.created_at),
        }
        if self.round_robin_format is not None:
            data["roundRobinFormat"] = self.round_robin_format
        if self.round_robin_standings is not None:
            data["roundRobinStandings"] = [
                s.to_dict() for s in self.round_robin_standings
            ]
        if self.winner is not None:
            data["winner"] = self.winner
        if self.completed_at is not None:
            data["completedAt"] = format_timestamp(self.completed_at)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Tournament":
        """Deserialize tournament from the stored dictionary format."""
        standings = data.get("roundRobinStandings")
        bracket = [
            [TournamentMatch.from_dict(m) for m in rnd] for rnd in data.get("bracket", [])
        ]
        return cls(
            id=data["id"],
            name=data["name"],
            type=data["type"],
            status=data.get("status", TOURNAMENT_SETUP),
            current_round=data.get("currentRound", 1),
            total_rounds=data.get("totalRounds", len(bracket)),
            players=list(data.get("players", [])),
            bracket=bracket,
            round_robin_format=data.get("roundRobinFormat"),
            round_robin_standings=(
                [RoundRobinStanding.from_dict(s) for s in standings]
                if standings is not None
                else None
            ),
            winner=data.get("winner"),
            created_at=parse_timestamp(data.get("createdAt")),
            completed_at=parse_timestamp(data.get("completedAt")),
        )
