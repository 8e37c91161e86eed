"""EngineConfig data class."""

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
from typing import Any, Dict, List, Optional

from padelmatch.constants import (
    DEFAULT_COURTS,
    DEFAULT_GAMES_TO_WIN,
    DEFAULT_GENERATION_ATTEMPTS,
    DEFAULT_LOOKBACK_SESSIONS,
    EARLY_TERMINATION_MAX_TRAILING,
    GOOD_BALANCE_THRESHOLD,
    HIGH_IMBALANCE_THRESHOLD,
    LOSS_POINTS,
    LOW_FRESHNESS_WARNING,
    PERFECT_BALANCE_THRESHOLD,
    TIE_POINTS,
    WIN_POINTS,
)


@dataclass
class EngineConfig:
    """Tunable constants shared by every engine entry point.

    Attributes
    ----------
    games_to_win : int
        Games a side needs to win a match.
    early_termination : bool
        Whether a side reaching ``games_to_win - 1`` while the other side
        has at most ``early_termination_max_trailing`` games wins early.
    early_termination_max_trailing : int
        Trailing-side cap for early termination.
    points_win, points_tie, points_loss : int
        Standing points per result.
    perfect_balance_threshold, good_balance_threshold : int
        Upper bounds of the "Perfectly Balanced" and "Good Match" labels.
    high_imbalance_threshold : int
        Differences above this are reported with severity "high".
    lookback_sessions : int
        Number of most recent sessions scanned by the freshness heuristic.
    generation_attempts : int
        Attempts made by the duplicate-prevention search.
    low_freshness_warning : int
        Matches with a freshness below this are logged.
    courts_available : list of str
        Court labels assigned in generation order.
    """

    games_to_win: int = DEFAULT_GAMES_TO_WIN
    early_termination: bool = True
    early_termination_max_trailing: int = EARLY_TERMINATION_MAX_TRAILING
    points_win: int = WIN_POINTS
    points_tie: int = TIE_POINTS
    points_loss: int = LOSS_POINTS
    perfect_balance_threshold: int = PERFECT_BALANCE_THRESHOLD
    good_balance_threshold: int = GOOD_BALANCE_THRESHOLD
    high_imbalance_threshold: int = HIGH_IMBALANCE_THRESHOLD
    lookback_sessions: int = DEFAULT_LOOKBACK_SESSIONS
    generation_attempts: int = DEFAULT_GENERATION_ATTEMPTS
    low_freshness_warning: int = LOW_FRESHNESS_WARNING
    courts_available: List[str] = field(default_factory=lambda: list(DEFAULT_COURTS))

    def __post_init__(self) -> None:
        if self.games_to_win < 1:
            raise ValueError(f"games_to_win must be positive, got {self.games_to_win}")
        if self.generation_attempts < 1:
            raise ValueError(
                f"generation_attempts must be positive, got {self.generation_attempts}"
            )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return {
            "gamesToWin": self.games_to_win,
            "earlyTermination": self.early_termination,
            "earlyTerminationMaxTrailing": self.early_termination_max_trailing,
            "pointsWin": self.points_win,
            "pointsTie": self.points_tie,
            "pointsLoss": self.points_loss,
            "perfectBalanceThreshold": self.perfect_balance_threshold,
            "goodBalanceThreshold": self.good_balance_threshold,
            "highImbalanceThreshold": self.high_imbalance_threshold,
            "lookbackSessions": self.lookback_sessions,
            "generationAttempts": self.generation_attempts,
            "lowFreshnessWarning": self.low_freshness_warning,
            "courtsAvailable": list(self.courts_available),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EngineConfig":
        """Deserialize configuration from dictionary.

        Missing keys fall back to the defaults, so the stored app settings
        (which only carry ``gamesToWin`` and ``courtsAvailable``) load as-is.
        """
        defaults = cls()
        return cls(
            games_to_win=data.get("gamesToWin", defaults.games_to_win),
            early_termination=data.get("earlyTermination", defaults.early_termination),
            early_termination_max_trailing=data.get(
                "earlyTerminationMaxTrailing", defaults.early_termination_max_trailing
            ),
            points_win=data.get("pointsWin", defaults.points_win),
            points_tie=data.get("pointsTie", defaults.points_tie),
            points_loss=data.get("pointsLoss", defaults.points_loss),
            perfect_balance_threshold=data.get(
                "perfectBalanceThreshold", defaults.perfect_balance_threshold
            ),
            good_balance_threshold=data.get(
                "goodBalanceThreshold", defaults.good_balance_threshold
            ),
            high_imbalance_threshold=data.get(
                "highImbalanceThreshold", defaults.high_imbalance_threshold
            ),
            lookback_sessions=data.get("lookbackSessions", defaults.lookback_sessions),
            generation_attempts=data.get(
                "generationAttempts", defaults.generation_attempts
            ),
            low_freshness_warning=data.get(
                "lowFreshnessWarning", defaults.low_freshness_warning
            ),
            courts_available=list(
                data.get("courtsAvailable", defaults.courts_available)
            ),
        )


def resolve_config(config: Optional[EngineConfig]) -> EngineConfig:
    """Return ``config`` or the default configuration."""
    return config if config is not None else EngineConfig()
