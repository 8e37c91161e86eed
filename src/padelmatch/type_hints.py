"""Type hints used in Padel Match."""

from typing import Dict, List, Literal, Tuple

# Side of a doubles match
TeamSide = Literal["teamA", "teamB"]
# Session matches and round-robin matches may also end level
MatchOutcome = Literal["teamA", "teamB", "tie"]

MatchmakingMode = Literal[
    "skill-based", "random-balanced", "mixed-tiers", "tournament"
]

TournamentType = Literal["single-elimination", "double-elimination", "round-robin"]
RoundRobinFormat = Literal["regular-doubles", "mixed-doubles", "switch-doubles"]

MatchStatus = Literal["waiting", "live", "completed"]
TournamentMatchStatus = Literal["pending", "in-progress", "completed"]
TournamentState = Literal["setup", "active", "completed"]
SessionStatus = Literal["planning", "active", "completed"]

Severity = Literal["low", "medium", "high"]
GameAction = Literal["teamA_score", "teamB_score", "undo"]

Gender = Literal["male", "female"]

# Two player ids forming a doubles pair
PlayerPair = Tuple[str, str]
# Rounds of tournament matches, in order
Bracket = List[List["TournamentMatch"]]
# {"teamA": n, "teamB": m}
ScoreDict = Dict[str, int]

#  LocalWords:  PlayerPair
