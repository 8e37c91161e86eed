"""Player statistics and leaderboards."""

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

from padelmatch.stats.calculations import (
    TopPerformers,
    calculate_games_win_rate,
    calculate_player_stats_for_period,
    calculate_skill_adjustment,
    calculate_team_chemistry,
    calculate_win_rate,
    format_streak,
    generate_match_summary,
    get_top_performers,
    rank_players,
    tournament_match_to_history,
    update_all_players_skills_after_match,
    update_player_skill_rating,
    update_player_stats,
    update_stats_after_match,
    update_stats_after_tournament_match,
)

__all__ = [
    "TopPerformers",
    "calculate_games_win_rate",
    "calculate_player_stats_for_period",
    "calculate_skill_adjustment",
    "calculate_team_chemistry",
    "calculate_win_rate",
    "format_streak",
    "generate_match_summary",
    "get_top_performers",
    "rank_players",
    "tournament_match_to_history",
    "update_all_players_skills_after_match",
    "update_player_skill_rating",
    "update_player_stats",
    "update_stats_after_match",
    "update_stats_after_tournament_match",
]
