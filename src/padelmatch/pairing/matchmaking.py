"""Matchmaking algorithms that split a player pool into doubles matches.

Three policies are available (skill-based, random-balanced, mixed-tiers) plus
a tournament seeding preview. All of them need a pool that is a multiple of
four and return one :class:`MatchPreview` per court, in court order.
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

import random
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, List, Optional, Sequence, Set, Tuple

from padelmatch.constants import (
    BALANCE_GOOD,
    BALANCE_PERFECT,
    MATCH_WAITING,
    MIN_TOURNAMENT_PLAYERS,
    MODE_MIXED_TIERS,
    MODE_RANDOM_BALANCED,
    MODE_SKILL_BASED,
    MODE_TOURNAMENT,
    PLAYERS_PER_MATCH,
    QUALITY_BALANCE_WEIGHT,
    QUALITY_FRESHNESS_WEIGHT,
    QUALITY_RATING_FLOOR,
    QUALITY_RATINGS,
    SESSION_ACTIVE,
)
from padelmatch.exceptions import (
    InvalidPlayerCountException,
    MatchValidationException,
    UnknownMatchmakingModeException,
)
from padelmatch.models.engine_config import EngineConfig, resolve_config
from padelmatch.models.match import Match, MatchPreview, MatchSide, Team
from padelmatch.models.player import Player
from padelmatch.models.session import Session
from padelmatch.pairing.balance import (
    balance_score,
    classify_balance,
    create_team,
    validate_team_balance,
)
from padelmatch.pairing.freshness import RecentPairings, calculate_match_freshness
from padelmatch.type_hints import MatchmakingMode
from padelmatch.utils import (
    court_label,
    generate_id,
    resolve_rng,
    round_half_up,
    setup_logger,
    utc_now,
)

logger = setup_logger(__name__)


def check_match_pool(players: Sequence[Player]) -> int:
    """Return the number of matches ``players`` fill.

    Raises:
        InvalidPlayerCountException: Fewer than 4 players or not a multiple of 4
    """
    count = len(players)
    if count < PLAYERS_PER_MATCH or count % PLAYERS_PER_MATCH != 0:
        raise InvalidPlayerCountException(
            f"Player count must be a multiple of 4 (minimum 4 players), got {count}",
            player_count=count,
        )
    return count // PLAYERS_PER_MATCH


def sort_by_skill(players: Sequence[Player]) -> List[Player]:
    """Strongest first; equal skills keep their input order."""
    return sorted(players, key=lambda p: p.skill, reverse=True)


def finalize_matches(
    matches: List[MatchPreview], config: EngineConfig
) -> List[MatchPreview]:
    """Report imbalanced matches and reject sets that reuse a player."""
    for match in matches:
        validate_team_balance(match.team_a, match.team_b, config)
    errors = validate_match_preview(matches)
    if errors:
        raise MatchValidationException(errors)
    return matches


def pair_extremes(
    teams: List[Team], match_count: int, config: EngineConfig
) -> List[MatchPreview]:
    """Sort teams by combined skill and match weakest against strongest."""
    ordered = sorted(teams, key=lambda t: t.combined_skill)
    return [
        MatchPreview(
            court=court_label(i, config.courts_available),
            team_a=ordered[i],
            team_b=ordered[len(ordered) - 1 - i],
        )
        for i in range(match_count)
    ]


def generate_skill_based_matches(
    players: Sequence[Player], config: Optional[EngineConfig] = None
) -> List[MatchPreview]:
    """Strongest-plus-weakest teams, deterministic for a given pool.

    With four players, seeds 1+4 play 2+3. With more, the remaining strongest
    and weakest form one team and the next strongest and next weakest form
    the opponents, until the pool is empty.
    """
    config = resolve_config(config)
    match_count = check_match_pool(players)
    remaining = sort_by_skill(players)
    logger.info("Generating %d skill-based matches", match_count)

    matches: List[MatchPreview] = []
    for i in range(match_count):
        team_a = create_team(remaining[0], remaining[-1])
        team_b = create_team(remaining[1], remaining[-2])
        matches.append(
            MatchPreview(
                court=court_label(i, config.courts_available),
                team_a=team_a,
                team_b=team_b,
            )
        )
        remaining = remaining[2:-2]

    return finalize_matches(matches, config)


def generate_random_balanced_matches(
    players: Sequence[Player],
    rng: Optional[random.Random] = None,
    config: Optional[EngineConfig] = None,
) -> List[MatchPreview]:
    """Random partnerships, then balanced pairings of those teams."""
    config = resolve_config(config)
    rng = resolve_rng(rng)
    match_count = check_match_pool(players)

    shuffled = list(players)
    rng.shuffle(shuffled)

    if len(shuffled) == PLAYERS_PER_MATCH:
        matches = [
            MatchPreview(
                court=court_label(0, config.courts_available),
                team_a=create_team(shuffled[0], shuffled[1]),
                team_b=create_team(shuffled[2], shuffled[3]),
            )
        ]
        return finalize_matches(matches, config)

    candidates = [
        create_team(shuffled[i], shuffled[j])
        for i in range(len(shuffled))
        for j in range(i + 1, len(shuffled))
    ]
    candidates.sort(key=lambda t: t.combined_skill)

    teams_needed = match_count * 2
    selected: List[Team] = []
    used: Set[str] = set()
    for team in candidates:
        if len(selected) >= teams_needed:
            break
        if team.player1.id not in used and team.player2.id not in used:
            selected.append(team)
            used.update(team.player_ids)

    if len(selected) < teams_needed:
        logger.debug("Greedy team selection fell short, pairing sequentially")
        selected = [
            create_team(shuffled[i], shuffled[i + 1])
            for i in range(0, len(shuffled), 2)
        ]

    return finalize_matches(pair_extremes(selected, match_count, config), config)


def generate_mixed_tiers_matches(
    players: Sequence[Player],
    rng: Optional[random.Random] = None,
    config: Optional[EngineConfig] = None,
) -> List[MatchPreview]:
    """Every team gets one player from the strong half and one from the weak half."""
    config = resolve_config(config)
    rng = resolve_rng(rng)
    match_count = check_match_pool(players)
    ranked = sort_by_skill(players)

    if len(ranked) == PLAYERS_PER_MATCH:
        matches = [
            MatchPreview(
                court=court_label(0, config.courts_available),
                team_a=create_team(ranked[0], ranked[3]),
                team_b=create_team(ranked[1], ranked[2]),
            )
        ]
        return finalize_matches(matches, config)

    half = len(ranked) // 2
    strong = ranked[:half]
    weak = ranked[half:]
    rng.shuffle(strong)
    rng.shuffle(weak)

    teams = [create_team(strong[i], weak[i]) for i in range(match_count * 2)]
    return finalize_matches(pair_extremes(teams, match_count, config), config)


def generate_tournament_matches(
    players: Sequence[Player], config: Optional[EngineConfig] = None
) -> List[MatchPreview]:
    """Preview of a seeded first tournament round.

    Players beyond the last full group of four (by seed) sit out.
    """
    config = resolve_config(config)
    if len(players) < MIN_TOURNAMENT_PLAYERS:
        raise InvalidPlayerCountException(
            "Tournament mode requires at least 4 players", player_count=len(players)
        )

    ranked = sort_by_skill(players)
    match_count = len(ranked) // PLAYERS_PER_MATCH
    sitting_out = len(ranked) - match_count * PLAYERS_PER_MATCH
    if sitting_out:
        logger.info("%d lowest seeded players sit out this round", sitting_out)

    matches: List[MatchPreview] = []
    for i in range(match_count):
        quartet = ranked[i * 4 : (i + 1) * 4]
        matches.append(
            MatchPreview(
                court=court_label(i, config.courts_available),
                team_a=create_team(quartet[0], quartet[3]),
                team_b=create_team(quartet[1], quartet[2]),
            )
        )
    return finalize_matches(matches, config)


def generate_matches(
    players: Sequence[Player],
    mode: MatchmakingMode,
    rng: Optional[random.Random] = None,
    config: Optional[EngineConfig] = None,
) -> List[MatchPreview]:
    """Run the plain generator for ``mode``, without freshness search.

    Raises:
        UnknownMatchmakingModeException: ``mode`` is not a known policy
    """
    generators: Dict[str, Callable[[], List[MatchPreview]]] = {
        MODE_SKILL_BASED: lambda: generate_skill_based_matches(players, config),
        MODE_RANDOM_BALANCED: lambda: generate_random_balanced_matches(
            players, rng, config
        ),
        MODE_MIXED_TIERS: lambda: generate_mixed_tiers_matches(players, rng, config),
        MODE_TOURNAMENT: lambda: generate_tournament_matches(players, config),
    }
    if mode not in generators:
        raise UnknownMatchmakingModeException(f"Unknown matchmaking mode: {mode}")
    return generators[mode]()


def validate_match_preview(matches: Sequence[MatchPreview]) -> List[str]:
    """Check a match set for reused players.

    Returns:
        Error strings; empty when the set is valid
    """
    errors: List[str] = []
    if not matches:
        errors.append("Must have at least one match")

    seen: Set[str] = set()
    for match in matches:
        for player_id in match.player_ids:
            if player_id in seen:
                errors.append(f"Player appears in multiple matches: {player_id}")
            seen.add(player_id)

        if match.team_a.player1.id == match.team_a.player2.id:
            errors.append(f"Team A has duplicate player in match {match.court}")
        if match.team_b.player1.id == match.team_b.player2.id:
            errors.append(f"Team B has duplicate player in match {match.court}")

    return errors


@dataclass
class MatchQuality:
    """Aggregate quality of a generated match set.

    Attributes:
        overall_score: 0.7 * balance + 0.3 * freshness, rounded
        balance_score: Mean per-match balance (100 - 2 * difference, floored at 0)
        freshness_score: Mean freshness
        perfectly_balanced: Matches labelled "Perfectly Balanced"
        good_matches: Matches labelled "Good Match"
        unbalanced: Matches labelled "Unbalanced"
        average_skill_difference: Mean combined-skill difference, one decimal
    """

    overall_score: int = 0
    balance_score: int = 0
    freshness_score: int = 0
    perfectly_balanced: int = 0
    good_matches: int = 0
    unbalanced: int = 0
    average_skill_difference: float = 0.0

    def to_dict(self) -> Dict[str, object]:
        return {
            "overallScore": self.overall_score,
            "balanceScore": self.balance_score,
            "freshnessScore": self.freshness_score,
            "details": {
                "perfectlyBalanced": self.perfectly_balanced,
                "goodMatches": self.good_matches,
                "unbalanced": self.unbalanced,
                "averageSkillDifference": self.average_skill_difference,
            },
        }


def calculate_match_quality(
    matches: Sequence[MatchPreview],
    recent_matches: Optional[Sequence[Match]] = None,
    config: Optional[EngineConfig] = None,
) -> MatchQuality:
    """Score a match set on balance and freshness."""
    config = resolve_config(config)
    if not matches:
        return MatchQuality()

    pairings = RecentPairings.from_matches(recent_matches or [])
    quality = MatchQuality()
    total_balance = 0
    total_freshness = 0
    total_difference = 0

    for match in matches:
        difference = balance_score(match.team_a, match.team_b)
        total_difference += difference
        total_balance += max(0, 100 - difference * 2)
        total_freshness += calculate_match_freshness(
            match.team_a, match.team_b, pairings
        )

        label = classify_balance(difference, config)
        if label == BALANCE_PERFECT:
            quality.perfectly_balanced += 1
        elif label == BALANCE_GOOD:
            quality.good_matches += 1
        else:
            quality.unbalanced += 1

    count = len(matches)
    average_balance = total_balance / count
    average_freshness = total_freshness / count
    overall = (
        average_balance * QUALITY_BALANCE_WEIGHT
        + average_freshness * QUALITY_FRESHNESS_WEIGHT
    )

    quality.overall_score = int(round_half_up(overall))
    quality.balance_score = int(round_half_up(average_balance))
    quality.freshness_score = int(round_half_up(average_freshness))
    quality.average_skill_difference = round_half_up(total_difference / count, 1)
    return quality


def get_quality_rating(score: float) -> str:
    """Map a quality score to "Excellent", "Very Good", "Good", "Fair" or "Poor"."""
    for minimum, label in QUALITY_RATINGS:
        if score >= minimum:
            return label
    return QUALITY_RATING_FLOOR


def confirm_match_previews(
    previews: Sequence[MatchPreview],
    session_date: Optional[str] = None,
    available_players: Optional[Sequence[str]] = None,
    now: Optional[datetime] = None,
    rng: Optional[random.Random] = None,
) -> Tuple[Session, List[Match]]:
    """Turn accepted previews into a new active session and its matches.

    Args:
        previews: The generated previews the organiser accepted
        session_date: ISO date of the session, defaults to today
        available_players: Player ids registered for the session, defaults
            to everyone in ``previews``
        now: Current time
        rng: Id source, for reproducible ids

    Returns:
        The session and one waiting match per preview, in court order
    """
    errors = validate_match_preview(previews)
    if errors:
        raise MatchValidationException(errors)

    if session_date is None:
        session_date = utc_now(now).date().isoformat()
    if available_players is None:
        available_players = [pid for preview in previews for pid in preview.player_ids]

    session = Session(
        id=generate_id("session", rng),
        date=session_date,
        available_players=list(available_players),
        status=SESSION_ACTIVE,
    )
    matches = [
        Match(
            id=generate_id("match", rng),
            session_id=session.id,
            round=1,
            court=preview.court,
            status=MATCH_WAITING,
            team_a=MatchSide(*preview.team_a.player_ids),
            team_b=MatchSide(*preview.team_b.player_ids),
        )
        for preview in previews
    ]
    session.matches = [match.id for match in matches]
    logger.info("Confirmed %d matches for session %s", len(matches), session.id)
    return session, matches
