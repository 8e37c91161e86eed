"""Round-robin standings.

Standings are rebuilt from the completed matches of a tournament. Fixed-team
formats rank teams; switch-doubles ranks individual players.
"""

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

import copy
from typing import Dict, List, Optional, Sequence, Tuple

from padelmatch.constants import TEAM_A, TEAM_B
from padelmatch.models.engine_config import EngineConfig, resolve_config
from padelmatch.models.player import Player
from padelmatch.models.tournament import (
    MatchTeam,
    RoundRobinStanding,
    Tournament,
    TournamentMatch,
)
from padelmatch.utils import setup_logger

logger = setup_logger(__name__)


class StandingsCalculator:
    """Builds ranked standings for round-robin tournaments.

    Points follow the configured win / tie / loss scheme (3 / 1 / 0 by
    default). Rows are ordered by points, then points difference, then
    points for; rows that tie on all three keep the order in which the team
    or player first appears in the bracket.
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = resolve_config(config)

    def calculate(
        self, tournament: Tournament, players: Optional[Sequence[Player]] = None
    ) -> List[RoundRobinStanding]:
        """Compute standings from scratch, ignoring any cached copy."""
        names = {p.id: p.name for p in players or []}
        rows: Dict[str, RoundRobinStanding] = {}

        for match in self._scored_matches(tournament):
            if tournament.is_switch_doubles:
                self._record_individuals(rows, match, names)
            else:
                self._record_teams(rows, match, names)

        standings = list(rows.values())
        for row in standings:
            row.points_difference = row.points_for - row.points_against
        return self.rank(standings)

    @staticmethod
    def rank(standings: List[RoundRobinStanding]) -> List[RoundRobinStanding]:
        """Return the rows in ranking order with 1-based ranks assigned."""
        ordered = sorted(
            standings,
            key=lambda s: (-s.points, -s.points_difference, -s.points_for),
        )
        for position, row in enumerate(ordered, start=1):
            row.rank = position
        return ordered

    @staticmethod
    def _scored_matches(tournament: Tournament) -> List[TournamentMatch]:
        return [
            m for m in tournament.all_matches() if m.is_completed and m.score is not None
        ]

    def _outcome_points(self, match: TournamentMatch, side: str) -> Tuple[int, str]:
        """Points earned by ``side`` and the result column to increment."""
        if match.winner is None:
            return self.config.points_tie, "tied"
        if match.winner == side:
            return self.config.points_win, "won"
        return self.config.points_loss, "lost"

    def _apply(
        self, row: RoundRobinStanding, match: TournamentMatch, side: str
    ) -> None:
        own = match.score.for_side(side)
        other = match.score.for_side(TEAM_B if side == TEAM_A else TEAM_A)
        points, column = self._outcome_points(match, side)

        row.played += 1
        row.points += points
        row.points_for += own
        row.points_against += other
        setattr(row, column, getattr(row, column) + 1)

    def _record_teams(
        self,
        rows: Dict[str, RoundRobinStanding],
        match: TournamentMatch,
        names: Dict[str, str],
    ) -> None:
        for side in (TEAM_A, TEAM_B):
            team: MatchTeam = match.side(side)
            team_id = f"{team.player1_id}-{team.player2_id}"
            if team_id not in rows:
                if team.player1_id in names and team.player2_id in names:
                    team_name = f"{names[team.player1_id]} + {names[team.player2_id]}"
                else:
                    team_name = team.name
                rows[team_id] = RoundRobinStanding(
                    team_id=team_id,
                    team_name=team_name,
                    player1_id=team.player1_id,
                    player2_id=team.player2_id,
                )
            self._apply(rows[team_id], match, side)

    def _record_individuals(
        self,
        rows: Dict[str, RoundRobinStanding],
        match: TournamentMatch,
        names: Dict[str, str],
    ) -> None:
        for side in (TEAM_A, TEAM_B):
            for player_id in match.side(side).player_ids:
                if player_id not in rows:
                    rows[player_id] = RoundRobinStanding(
                        team_id=player_id,
                        team_name=names.get(player_id, player_id),
                        player1_id=player_id,
                        player2_id="",
                    )
                self._apply(rows[player_id], match, side)


def calculate_round_robin_standings(
    tournament: Tournament,
    players: Optional[Sequence[Player]] = None,
    config: Optional[EngineConfig] = None,
) -> List[RoundRobinStanding]:
    """Current standings of a round-robin tournament.

    A non-empty cached ``round_robin_standings`` is returned as a copy
    instead of recomputing. Calling this repeatedly on the same data always
    yields the same rows.
    """
    if tournament.round_robin_standings:
        return copy.deepcopy(tournament.round_robin_standings)
    return StandingsCalculator(config).calculate(tournament, players)
