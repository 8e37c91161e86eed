"""Exceptions for use in Padel Match"""

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

from typing import List, Optional


# ========== Base Application Exception ==========


class PadelMatchException(Exception):
    """Base exception for all Padel Match errors.

    All custom exceptions in the engine inherit from this class, so callers
    can surface every engine failure with a single except clause.
    """

    pass


# ========== Matchmaking Exceptions ==========


class MatchmakingException(PadelMatchException):
    """Base exception for matchmaking errors."""

    pass


class InvalidPlayerCountException(MatchmakingException):
    """Raised when the player pool is too small or not a multiple of four."""

    def __init__(self, message: str, player_count: Optional[int] = None) -> None:
        super().__init__(message)
        self.player_count = player_count


class MatchValidationException(MatchmakingException):
    """Raised when generated matches fail the duplicate-player check.

    The individual problems are kept on ``errors`` so a caller can show them.
    """

    def __init__(self, errors: List[str]) -> None:
        super().__init__("; ".join(errors))
        self.errors = list(errors)


class UnknownMatchmakingModeException(MatchmakingException):
    """Raised when a matchmaking mode name is not recognised."""

    pass


# ========== Tournament Exceptions ==========


class TournamentException(PadelMatchException):
    """Base exception for tournament-related errors."""

    pass


class TournamentStateException(TournamentException):
    """Raised when tournament is in an invalid state for the requested operation."""

    pass


class InvalidMatchStateException(TournamentException):
    """Raised when a match cannot take the requested transition."""

    pass


# ========== Configuration Exceptions ==========


class ConfigurationException(PadelMatchException):
    """Base exception for configuration errors."""

    pass


class UnsupportedConfigurationException(ConfigurationException):
    """Raised for formats the engine cannot schedule.

    For example mixed doubles without both genders, or switch doubles with
    an odd number of players.
    """

    pass


# ========== Lookup Exceptions ==========


class EntityNotFoundException(PadelMatchException):
    """Base exception for ids that do not resolve."""

    pass


class MatchNotFoundException(EntityNotFoundException):
    """Raised when a match id is not present in a tournament or match list."""

    def __init__(self, match_id: str, where: str = "tournament") -> None:
        super().__init__(f"Match {match_id} not found in {where}")
        self.match_id = match_id


class PlayerNotFoundException(EntityNotFoundException):
    """Raised when a player id referenced by a match is not in the player list."""

    def __init__(self, player_id: str) -> None:
        super().__init__(f"Player {player_id} not found")
        self.player_id = player_id


# ========== Result Exceptions ==========


class ResultException(PadelMatchException):
    """Base exception for result recording errors."""

    pass


class InvalidScoreException(ResultException):
    """Raised when a score is negative or beyond the games-to-win threshold."""

    pass
