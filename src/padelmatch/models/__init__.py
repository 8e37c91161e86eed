"""Plain value records shared by the matchmaking and tournament engines."""

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

from padelmatch.models.engine_config import EngineConfig, resolve_config
from padelmatch.models.match import GamePoint, Match, MatchPreview, MatchSide, Team
from padelmatch.models.player import Player, PlayerStats
from padelmatch.models.session import Session, SessionTiers
from padelmatch.models.tournament import (
    MatchScore,
    MatchTeam,
    RoundRobinStanding,
    Tournament,
    TournamentMatch,
)

__all__ = [
    "EngineConfig",
    "resolve_config",
    "Player",
    "PlayerStats",
    "Team",
    "MatchPreview",
    "MatchSide",
    "GamePoint",
    "Match",
    "Session",
    "SessionTiers",
    "MatchTeam",
    "MatchScore",
    "TournamentMatch",
    "Tournament",
    "RoundRobinStanding",
]
