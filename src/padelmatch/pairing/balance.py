"""Team-balance utilities: combined skill, balance score and classification."""

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

from dataclasses import dataclass
from typing import Optional

from padelmatch.constants import (
    BALANCE_GOOD,
    BALANCE_PERFECT,
    BALANCE_UNBALANCED,
    SEVERITY_HIGH,
    SEVERITY_LOW,
    SEVERITY_MEDIUM,
)
from padelmatch.models.engine_config import EngineConfig, resolve_config
from padelmatch.models.match import Team
from padelmatch.models.player import Player
from padelmatch.type_hints import Severity
from padelmatch.utils import setup_logger

logger = setup_logger(__name__)


@dataclass
class BalanceReport:
    """Outcome of a balance check for one pairing of teams.

    Attributes:
        score: Absolute combined-skill difference
        is_balanced: True while the difference is within the good threshold
        severity: "low", "medium" or "high"
        warning: Human readable text for medium and high severity
    """

    score: int
    is_balanced: bool
    severity: Severity
    warning: Optional[str] = None


def create_team(player1: Player, player2: Player) -> Team:
    """Pair two distinct players into a team."""
    return Team(player1=player1, player2=player2)


def combined_skill(team: Team) -> int:
    return team.player1.skill + team.player2.skill


def balance_score(team_a: Team, team_b: Team) -> int:
    """Absolute combined-skill difference; 0 is a perfectly even match."""
    return abs(combined_skill(team_a) - combined_skill(team_b))


def classify_balance(score: int, config: Optional[EngineConfig] = None) -> str:
    """Label a balance score.

    Args:
        score: Result of :func:`balance_score`
        config: Thresholds, defaults to 5 / 10

    Returns:
        "Perfectly Balanced", "Good Match" or "Unbalanced"
    """
    config = resolve_config(config)
    if score <= config.perfect_balance_threshold:
        return BALANCE_PERFECT
    if score <= config.good_balance_threshold:
        return BALANCE_GOOD
    return BALANCE_UNBALANCED


def validate_team_balance(
    team_a: Team, team_b: Team, config: Optional[EngineConfig] = None
) -> BalanceReport:
    """Grade how lopsided a pairing is.

    A "high" severity is logged as a warning. It is informational only and
    never stops generation.
    """
    config = resolve_config(config)
    score = balance_score(team_a, team_b)

    if score <= config.good_balance_threshold:
        return BalanceReport(score=score, is_balanced=True, severity=SEVERITY_LOW)

    if score <= config.high_imbalance_threshold:
        return BalanceReport(
            score=score,
            is_balanced=False,
            severity=SEVERITY_MEDIUM,
            warning=(
                f"Teams are moderately unbalanced ({score} point difference). "
                "Consider adjusting player skill ratings."
            ),
        )

    report = BalanceReport(
        score=score,
        is_balanced=False,
        severity=SEVERITY_HIGH,
        warning=(
            f"Teams are severely unbalanced ({score} point difference)! "
            "Matches will likely be blowouts. Please adjust player skill ratings."
        ),
    )
    logger.warning(
        "%s vs %s: %s", team_a.name, team_b.name, report.warning
    )
    return report
