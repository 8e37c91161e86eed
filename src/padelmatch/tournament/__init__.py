"""Tournament engines: single-elimination brackets, round robins, standings
and live scoring.

Results enter through two updaters that both return a new tournament:
``update_tournament_with_result(tournament, match_id, winner, score, now)``
for brackets and ``update_round_robin_tournament_with_result(tournament,
match_id, winner, score, players, now, config)`` for round robins. Only the
round-robin one takes ``players``, to name standing rows; bracket teams
carry their names from the draw.
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

from padelmatch.tournament.bracket import (
    court_name,
    generate_tournament_bracket,
    is_round_complete,
    update_tournament_with_result,
)
from padelmatch.tournament.lifecycle import (
    TournamentStatus,
    create_tournament,
    generate_tournament_name,
    get_tournament_status,
)
from padelmatch.tournament.live_scoring import (
    add_game,
    determine_winner,
    edit_match_score,
    score_tournament_point,
    start_match,
    start_tournament_match,
    undo_last_action,
    undo_tournament_point,
)
from padelmatch.tournament.round_robin import (
    RoundRobinTeam,
    create_round_robin_teams,
    first_open_round,
    generate_round_robin_bracket,
    generate_round_robin_schedule,
    generate_switch_doubles_schedule,
    update_round_robin_tournament_with_result,
)
from padelmatch.tournament.standings import (
    StandingsCalculator,
    calculate_round_robin_standings,
)

__all__ = [
    "court_name",
    "generate_tournament_bracket",
    "is_round_complete",
    "update_tournament_with_result",
    "TournamentStatus",
    "create_tournament",
    "generate_tournament_name",
    "get_tournament_status",
    "add_game",
    "determine_winner",
    "edit_match_score",
    "score_tournament_point",
    "start_match",
    "start_tournament_match",
    "undo_last_action",
    "undo_tournament_point",
    "RoundRobinTeam",
    "create_round_robin_teams",
    "first_open_round",
    "generate_round_robin_bracket",
    "generate_round_robin_schedule",
    "generate_switch_doubles_schedule",
    "update_round_robin_tournament_with_result",
    "StandingsCalculator",
    "calculate_round_robin_standings",
]
