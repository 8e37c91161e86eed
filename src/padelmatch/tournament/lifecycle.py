"""Tournament creation, progress summaries and name suggestions."""

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

import random
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional, Sequence

from padelmatch.constants import (
    REGULAR_DOUBLES,
    ROUND_ROBIN,
    ROUND_ROBIN_FORMATS,
    SINGLE_ELIMINATION,
    TM_COMPLETED,
    TOURNAMENT_ACTIVE,
    TOURNAMENT_COMPLETED,
    TOURNAMENT_SETUP,
)
from padelmatch.exceptions import UnsupportedConfigurationException
from padelmatch.models.engine_config import EngineConfig
from padelmatch.models.player import Player
from padelmatch.models.tournament import Tournament
from padelmatch.tournament.bracket import generate_tournament_bracket
from padelmatch.tournament.round_robin import generate_round_robin_bracket
from padelmatch.utils import generate_id, resolve_rng, setup_logger, utc_now

logger = setup_logger(__name__)

NAME_ADJECTIVES = [
    "Epic",
    "Ultimate",
    "Grand",
    "Super",
    "Mega",
    "Pro",
    "Elite",
    "Championship",
    "Master",
    "Premier",
]
NAME_SPORTS = ["Padel", "Doubles", "Match", "Game", "Round"]
NAME_NOUNS = [
    "Showdown",
    "Clash",
    "Battle",
    "Tournament",
    "Championship",
    "Cup",
    "Series",
    "League",
    "Challenge",
]

_STATUS_LABELS = {
    TOURNAMENT_SETUP: "Setup",
    TOURNAMENT_ACTIVE: "Active",
    TOURNAMENT_COMPLETED: "Completed",
}


def create_tournament(
    name: str,
    tournament_type: str,
    players: Sequence[Player],
    round_robin_format: Optional[str] = None,
    rng: Optional[random.Random] = None,
    config: Optional[EngineConfig] = None,
    now: Optional[datetime] = None,
) -> Tournament:
    """Create an active tournament with its full bracket or schedule.

    Args:
        name: Display name
        tournament_type: "single-elimination" or "round-robin"
        players: Participants
        round_robin_format: Round-robin variant, regular doubles by default
        rng: Random source for ids and switch-doubles shuffles
        config: Court labels
        now: Creation time

    Raises:
        UnsupportedConfigurationException: Unknown type or format, or one
            the engine cannot schedule (double elimination)
    """
    if tournament_type == SINGLE_ELIMINATION:
        if round_robin_format is not None:
            raise UnsupportedConfigurationException(
                "Round-robin formats only apply to round-robin tournaments"
            )
        bracket = generate_tournament_bracket(players, rng, config)
    elif tournament_type == ROUND_ROBIN:
        round_robin_format = round_robin_format or REGULAR_DOUBLES
        if round_robin_format not in ROUND_ROBIN_FORMATS:
            raise UnsupportedConfigurationException(
                f"Unknown round-robin format: {round_robin_format}"
            )
        bracket = generate_round_robin_bracket(players, round_robin_format, rng, config)
    else:
        raise UnsupportedConfigurationException(
            f"Tournament type {tournament_type!r} is not supported"
        )

    tournament = Tournament(
        id=generate_id("tournament", rng),
        name=name,
        type=tournament_type,
        round_robin_format=round_robin_format,
        status=TOURNAMENT_ACTIVE,
        current_round=1,
        total_rounds=len(bracket),
        players=[p.id for p in players],
        bracket=bracket,
        created_at=utc_now(now),
    )
    logger.info(
        f"Created {tournament_type} tournament '{name}' with {len(players)} players "
        f"and {tournament.total_rounds} rounds"
    )
    return tournament


@dataclass
class TournamentStatus:
    """Progress summary of a tournament."""

    status: str
    current_round: int
    total_rounds: int
    completed_matches: int
    total_matches: int
    winner: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "status": self.status,
            "currentRound": self.current_round,
            "totalRounds": self.total_rounds,
            "completedMatches": self.completed_matches,
            "totalMatches": self.total_matches,
        }
        if self.winner is not None:
            data["winner"] = self.winner
        return data


def get_tournament_status(tournament: Tournament) -> TournamentStatus:
    matches = tournament.all_matches()
    return TournamentStatus(
        status=_STATUS_LABELS.get(tournament.status, "Active"),
        current_round=tournament.current_round,
        total_rounds=tournament.total_rounds,
        completed_matches=sum(1 for m in matches if m.status == TM_COMPLETED),
        total_matches=len(matches),
        winner=tournament.winner,
    )


def generate_tournament_name(rng: Optional[random.Random] = None) -> str:
    """Suggest a name such as "Grand Padel Showdown"."""
    rng = resolve_rng(rng)
    adjective = rng.choice(NAME_ADJECTIVES)
    sport = rng.choice(NAME_SPORTS)
    noun = rng.choice(NAME_NOUNS)
    return f"{adjective} {sport} {noun}"
