"""Single-elimination bracket construction and round advancement."""

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
import random
from datetime import datetime
from typing import List, Optional, Sequence

from padelmatch.constants import (
    MIN_TOURNAMENT_PLAYERS,
    PLAYERS_PER_MATCH,
    TEAM_A,
    TEAM_B,
    TM_COMPLETED,
    TM_PENDING,
    TOURNAMENT_COMPLETED,
)
from padelmatch.exceptions import (
    InvalidMatchStateException,
    InvalidPlayerCountException,
    MatchNotFoundException,
    TournamentStateException,
)
from padelmatch.models.engine_config import EngineConfig, resolve_config
from padelmatch.models.player import Player
from padelmatch.models.tournament import MatchScore, MatchTeam, Tournament, TournamentMatch
from padelmatch.pairing.balance import create_team
from padelmatch.pairing.matchmaking import sort_by_skill
from padelmatch.type_hints import Bracket
from padelmatch.utils import court_label, generate_id, setup_logger, utc_now

logger = setup_logger(__name__)


def court_name(index: int, config: Optional[EngineConfig] = None) -> str:
    """Display name of the ``index``-th court in a round, e.g. "Court A"."""
    config = resolve_config(config)
    return f"Court {court_label(index, config.courts_available)}"


def _placeholder_match(
    round_number: int,
    index: int,
    rng: Optional[random.Random],
    config: EngineConfig,
) -> TournamentMatch:
    return TournamentMatch(
        id=generate_id("match", rng),
        round=round_number,
        match_number=index + 1,
        court=court_name(index, config),
        team_a=MatchTeam(),
        team_b=MatchTeam(),
        status=TM_PENDING,
    )


def generate_tournament_bracket(
    players: Sequence[Player],
    rng: Optional[random.Random] = None,
    config: Optional[EngineConfig] = None,
) -> Bracket:
    """Build a seeded single-elimination bracket.

    Players are seeded by skill. Round one holds one match per group of four
    seeds (1+4 vs 2+3 within the group); lowest seeds that do not fill a
    group sit out. Each later round is pre-allocated with half as many
    "TBD" matches, rounding down, until a single final remains.

    Args:
        players: Participants, at least four
        rng: Id source, for reproducible ids
        config: Court labels

    Returns:
        Rounds in order

    Raises:
        InvalidPlayerCountException: Fewer than four players
    """
    config = resolve_config(config)
    if len(players) < MIN_TOURNAMENT_PLAYERS:
        raise InvalidPlayerCountException(
            "Tournament requires at least 4 players", player_count=len(players)
        )

    seeds = sort_by_skill(players)
    first_round_size = len(seeds) // PLAYERS_PER_MATCH

    first_round: List[TournamentMatch] = []
    for i in range(first_round_size):
        quartet = seeds[i * 4 : (i + 1) * 4]
        team_a = create_team(quartet[0], quartet[3])
        team_b = create_team(quartet[1], quartet[2])
        first_round.append(
            TournamentMatch(
                id=generate_id("match", rng),
                round=1,
                match_number=i + 1,
                court=court_name(i, config),
                team_a=MatchTeam(*team_a.player_ids, name=team_a.name),
                team_b=MatchTeam(*team_b.player_ids, name=team_b.name),
                status=TM_PENDING,
            )
        )

    rounds = [first_round]
    remaining = first_round_size
    round_number = 2
    while remaining > 1:
        remaining //= 2
        rounds.append(
            [_placeholder_match(round_number, i, rng, config) for i in range(remaining)]
        )
        round_number += 1

    logger.info(
        f"Built bracket for {len(players)} players: {len(rounds)} rounds, "
        f"{first_round_size} first-round matches"
    )
    return rounds


def is_round_complete(round_matches: Sequence[TournamentMatch]) -> bool:
    """True when every match of the round is completed."""
    return all(match.status == TM_COMPLETED for match in round_matches)


def _advance_round(tournament: Tournament) -> None:
    current = tournament.bracket[tournament.current_round - 1]
    upcoming = tournament.bracket[tournament.current_round]

    winners = [
        copy.deepcopy(match.winning_team())
        for match in current
        if match.winning_team() is not None
    ]
    for i, match in enumerate(upcoming):
        if 2 * i + 1 >= len(winners):
            break
        match.team_a = winners[2 * i]
        match.team_b = winners[2 * i + 1]
        match.status = TM_PENDING
        match.score = MatchScore()
        match.winner = None

    tournament.current_round += 1
    logger.info(f"Tournament {tournament.id} advanced to round {tournament.current_round}")


def update_tournament_with_result(
    tournament: Tournament,
    match_id: str,
    winner: str,
    score: Optional[MatchScore] = None,
    now: Optional[datetime] = None,
) -> Tournament:
    """Record a single-elimination result and advance the bracket.

    The match is marked completed with ``winner``. ``score`` replaces the
    stored score when given; a match without any score gets 0-0. When this
    completes the current round, the next round is filled with the winners
    pairwise (winners of matches 2i and 2i+1 meet in match i) and
    ``current_round`` moves on. Completing the final completes the
    tournament and records the champion team's first player as ``winner``.

    Args:
        tournament: Current tournament value, left untouched
        match_id: Match to complete
        winner: "teamA" or "teamB"
        score: Final score
        now: Completion time

    Returns:
        The updated tournament

    Raises:
        MatchNotFoundException: ``match_id`` is not in the bracket
        InvalidMatchStateException: The match still waits for its teams
        TournamentStateException: The tournament is already completed
    """
    if winner not in (TEAM_A, TEAM_B):
        raise ValueError(f"Single-elimination winner must be teamA or teamB, got {winner!r}")
    if tournament.status == TOURNAMENT_COMPLETED:
        raise TournamentStateException(f"Tournament {tournament.id} is already completed")

    updated = copy.deepcopy(tournament)
    match = updated.find_match(match_id)
    if match is None:
        raise MatchNotFoundException(match_id, "tournament")
    if match.team_a.is_placeholder or match.team_b.is_placeholder:
        raise InvalidMatchStateException(
            f"Match {match_id} cannot be completed before its teams are known"
        )

    match.winner = winner
    match.status = TM_COMPLETED
    if score is not None:
        match.score = copy.deepcopy(score)
    elif match.score is None:
        match.score = MatchScore()

    current = updated.bracket[updated.current_round - 1]
    if is_round_complete(current) and updated.current_round < len(updated.bracket):
        _advance_round(updated)

    final_round = updated.bracket[-1]
    if len(final_round) == 1 and final_round[0].status == TM_COMPLETED:
        champion = final_round[0].winning_team()
        if champion is not None:
            updated.winner = champion.player1_id
            updated.status = TOURNAMENT_COMPLETED
            updated.completed_at = utc_now(now)
            logger.info(f"Tournament {updated.id} completed, champion {champion.name}")

    return updated
