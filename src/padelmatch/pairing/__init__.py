"""Team pairing: balance, recent history, freshness and matchmaking."""

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

from padelmatch.pairing.balance import (
    BalanceReport,
    balance_score,
    classify_balance,
    combined_skill,
    create_team,
    validate_team_balance,
)
from padelmatch.pairing.duplicate_prevention import (
    generate_matches_with_duplicate_prevention,
    generate_skill_based_matches_with_freshness,
)
from padelmatch.pairing.freshness import (
    RecentPairings,
    calculate_match_freshness,
    have_played_as_opponents,
    have_played_as_teammates,
    have_played_together,
)
from padelmatch.pairing.history import (
    HistoryProvider,
    StaticHistoryProvider,
    load_recent_matches,
    recent_matches_from_sessions,
)
from padelmatch.pairing.matchmaking import (
    MatchQuality,
    calculate_match_quality,
    confirm_match_previews,
    generate_matches,
    generate_mixed_tiers_matches,
    generate_random_balanced_matches,
    generate_skill_based_matches,
    generate_tournament_matches,
    get_quality_rating,
    validate_match_preview,
)

__all__ = [
    "BalanceReport",
    "balance_score",
    "classify_balance",
    "combined_skill",
    "create_team",
    "validate_team_balance",
    "RecentPairings",
    "calculate_match_freshness",
    "have_played_as_opponents",
    "have_played_as_teammates",
    "have_played_together",
    "HistoryProvider",
    "StaticHistoryProvider",
    "load_recent_matches",
    "recent_matches_from_sessions",
    "MatchQuality",
    "calculate_match_quality",
    "confirm_match_previews",
    "generate_matches",
    "generate_mixed_tiers_matches",
    "generate_random_balanced_matches",
    "generate_skill_based_matches",
    "generate_tournament_matches",
    "get_quality_rating",
    "validate_match_preview",
    "generate_matches_with_duplicate_prevention",
    "generate_skill_based_matches_with_freshness",
]
