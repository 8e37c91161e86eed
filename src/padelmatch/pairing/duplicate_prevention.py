"""Best-of-N match generation that steers away from recently played pairings."""

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
from typing import List, Optional, Sequence, Tuple

from padelmatch.constants import (
    LARGE_POOL_WEIGHTS,
    MODE_SKILL_BASED,
    PLAYERS_PER_MATCH,
    SMALL_POOL_WEIGHTS,
)
from padelmatch.exceptions import PadelMatchException
from padelmatch.models.engine_config import EngineConfig, resolve_config
from padelmatch.models.match import MatchPreview, Team
from padelmatch.models.player import Player
from padelmatch.pairing.balance import balance_score, create_team
from padelmatch.pairing.freshness import (
    RecentHistory,
    RecentPairings,
    calculate_match_freshness,
)
from padelmatch.pairing.history import HistoryProvider, load_recent_matches
from padelmatch.pairing.matchmaking import (
    check_match_pool,
    finalize_matches,
    generate_matches,
    sort_by_skill,
)
from padelmatch.type_hints import MatchmakingMode
from padelmatch.utils import court_label, setup_logger

logger = setup_logger(__name__)

Candidate = Tuple[Team, Team]


def _pick_best(
    candidates: List[Candidate],
    pairings: RecentPairings,
    weights: Tuple[float, float],
) -> Candidate:
    """Highest weighted balance + freshness; the first candidate wins ties."""
    balance_weight, freshness_weight = weights
    best = candidates[0]
    best_score = -1.0
    for team_a, team_b in candidates:
        balance = 100 - balance_score(team_a, team_b)
        freshness = calculate_match_freshness(team_a, team_b, pairings)
        score = balance * balance_weight + freshness * freshness_weight
        if score > best_score:
            best_score = score
            best = (team_a, team_b)
    return best


def generate_skill_based_matches_with_freshness(
    players: Sequence[Player],
    recent: RecentHistory,
    config: Optional[EngineConfig] = None,
) -> List[MatchPreview]:
    """Skill-based generation that also weighs how fresh each pairing is.

    For four players all three partnerings are scored with 60% balance and
    40% freshness. Larger pools build one match at a time from the remaining
    strongest and weakest players, comparing the standard split with the
    swapped-weak-partners split (once at least six players remain) at 70%
    balance and 30% freshness.
    """
    config = resolve_config(config)
    match_count = check_match_pool(players)
    pairings = (
        recent if isinstance(recent, RecentPairings) else RecentPairings.from_matches(recent)
    )
    remaining = sort_by_skill(players)

    if len(remaining) == PLAYERS_PER_MATCH:
        first, second, third, fourth = remaining
        candidates = [
            (create_team(first, fourth), create_team(second, third)),
            (create_team(first, third), create_team(second, fourth)),
            (create_team(first, second), create_team(third, fourth)),
        ]
        team_a, team_b = _pick_best(candidates, pairings, SMALL_POOL_WEIGHTS)
        matches = [
            MatchPreview(
                court=court_label(0, config.courts_available),
                team_a=team_a,
                team_b=team_b,
            )
        ]
        return finalize_matches(matches, config)

    matches: List[MatchPreview] = []
    for i in range(match_count):
        candidates = [
            (
                create_team(remaining[0], remaining[-1]),
                create_team(remaining[1], remaining[-2]),
            )
        ]
        if len(remaining) >= 6:
            candidates.append(
                (
                    create_team(remaining[0], remaining[-2]),
                    create_team(remaining[1], remaining[-1]),
                )
            )
        team_a, team_b = _pick_best(candidates, pairings, LARGE_POOL_WEIGHTS)
        matches.append(
            MatchPreview(
                court=court_label(i, config.courts_available),
                team_a=team_a,
                team_b=team_b,
            )
        )
        remaining = remaining[2:-2]

    return finalize_matches(matches, config)


def _total_freshness(matches: Sequence[MatchPreview], pairings: RecentPairings) -> int:
    return sum(
        calculate_match_freshness(m.team_a, m.team_b, pairings) for m in matches
    )


def generate_matches_with_duplicate_prevention(
    players: Sequence[Player],
    mode: MatchmakingMode,
    history: Optional[HistoryProvider] = None,
    rng: Optional[random.Random] = None,
    config: Optional[EngineConfig] = None,
) -> List[MatchPreview]:
    """Generate several match sets and keep the one with the freshest pairings.

    Each attempt runs the generator for ``mode`` (skill-based uses the
    freshness-aware variant). The attempt whose matches have the highest
    summed freshness wins; earlier attempts win ties. A failing attempt is
    logged and skipped. If every attempt fails, the plain generator is run
    once and its error, if any, propagates. Regenerating simply calls this
    again.

    Args:
        players: The pool, a multiple of four
        mode: Matchmaking mode name
        history: Provider of recent matches; None means no history
        rng: Random source for shuffling modes
        config: Engine configuration

    Returns:
        The chosen match previews in court order
    """
    config = resolve_config(config)
    recent_matches = load_recent_matches(history, config.lookback_sessions)
    pairings = RecentPairings.from_matches(recent_matches)

    best_matches: List[MatchPreview] = []
    best_score = -1
    for attempt in range(1, config.generation_attempts + 1):
        try:
            if mode == MODE_SKILL_BASED:
                candidate = generate_skill_based_matches_with_freshness(
                    players, pairings, config
                )
            else:
                candidate = generate_matches(players, mode, rng, config)
        except PadelMatchException as e:
            logger.warning("Matchmaking attempt %d failed: %s", attempt, e)
            continue

        score = _total_freshness(candidate, pairings)
        if score > best_score:
            best_score = score
            best_matches = candidate

    if not best_matches:
        logger.warning("Falling back to basic matchmaking without duplicate prevention")
        return generate_matches(players, mode, rng, config)

    if recent_matches:
        logger.info("Generated matches with freshness score %d", best_score)
        for index, match in enumerate(best_matches, start=1):
            freshness = calculate_match_freshness(match.team_a, match.team_b, pairings)
            if freshness < config.low_freshness_warning:
                logger.warning(
                    "Match %d has low freshness (%d): some players have played recently",
                    index,
                    freshness,
                )

    return best_matches
