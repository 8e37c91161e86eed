"""Player statistics, leaderboards and skill-rating adjustment."""

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
import math
import random
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List, Optional, Sequence

from padelmatch.constants import (
    MATCH_COMPLETED,
    MAX_SKILL_RATING,
    MIN_SKILL_RATING,
    SKILL_K_FACTOR,
    TEAM_A,
    TEAM_B,
    TIE,
    TM_COMPLETED,
    TOURNAMENT_DEFAULT_COURT,
    TOURNAMENT_LOSS_POINTS,
    TOURNAMENT_MAX_SKILL_CHANGE,
    TOURNAMENT_MIN_LOSS_POINTS,
    TOURNAMENT_MIN_SKILL,
    TOURNAMENT_SESSION_PREFIX,
    TOURNAMENT_SKILL_STEP,
    TOURNAMENT_WIN_POINTS,
)
from padelmatch.exceptions import InvalidMatchStateException, PlayerNotFoundException
from padelmatch.models.engine_config import EngineConfig, resolve_config
from padelmatch.models.match import Match, MatchSide
from padelmatch.models.player import Player, PlayerStats
from padelmatch.models.tournament import MatchScore, Tournament, TournamentMatch
from padelmatch.utils import (
    format_timestamp,
    generate_id,
    round_half_up,
    setup_logger,
    utc_now,
)

logger = setup_logger(__name__)

# Skill adjustment multipliers
DOMINANT_WIN_MULTIPLIER = 1.2
CLOSE_LOSS_MULTIPLIER = 0.8
SHUTOUT_BONUS = 3
ONE_GAME_BONUS = 2


def update_player_stats(
    player: Player,
    games_won: int,
    games_lost: int,
    is_winner: bool,
    match_date: str,
    is_tie: bool = False,
    config: Optional[EngineConfig] = None,
) -> Player:
    """Return ``player`` with one more finished match in its stats.

    Wins extend a winning streak (or start one at 1), losses extend a losing
    streak (or start one at -1). Ties leave the streak alone.
    """
    config = resolve_config(config)
    stats = copy.deepcopy(player.stats)

    stats.matches_played += 1
    stats.games_won += games_won
    stats.games_lost += games_lost
    stats.last_played = match_date

    if is_tie:
        stats.points += config.points_tie
    elif is_winner:
        stats.matches_won += 1
        stats.points += config.points_win
        stats.current_streak = stats.current_streak + 1 if stats.current_streak >= 0 else 1
    else:
        stats.matches_lost += 1
        stats.points += config.points_loss
        stats.current_streak = stats.current_streak - 1 if stats.current_streak <= 0 else -1

    updated = copy.deepcopy(player)
    updated.stats = stats
    return updated


def update_stats_after_match(
    players: Sequence[Player], match: Match, config: Optional[EngineConfig] = None
) -> List[Player]:
    """Apply a completed session match to the stats of its four players.

    Players not in the match are returned unchanged.
    """
    if match.winner is None:
        raise ValueError(f"Match {match.id} has no result yet")

    match_date = format_timestamp(match.end_time) or ""
    is_tie = match.winner == TIE
    sides: Dict[str, MatchSide] = {}
    for side in (match.team_a, match.team_b):
        for player_id in side.player_ids:
            sides[player_id] = side

    updated: List[Player] = []
    for player in players:
        side = sides.get(player.id)
        if side is None:
            updated.append(player)
            continue
        other = match.team_b if side is match.team_a else match.team_a
        is_winner = not is_tie and match.side(match.winner) is side
        updated.append(
            update_player_stats(
                player,
                side.games_won,
                other.games_won,
                is_winner,
                match_date,
                is_tie=is_tie,
                config=config,
            )
        )
    return updated


def tournament_match_to_history(
    tournament: Tournament,
    match: TournamentMatch,
    now: Optional[datetime] = None,
    rng: Optional[random.Random] = None,
) -> Match:
    """Record a completed tournament match as a regular match.

    The record belongs to the pseudo-session ``tournament-<id>``, keeps the
    round and court, takes games won from the final score and has no score
    history. A round-robin tie is stored with winner "tie".

    Raises:
        InvalidMatchStateException: The match is not completed
    """
    if match.status != TM_COMPLETED:
        raise InvalidMatchStateException(
            f"Match {match.id} is {match.status}, only completed matches are recorded"
        )

    score = match.score or MatchScore()
    played_at = utc_now(now)
    return Match(
        id=generate_id("match", rng),
        session_id=f"{TOURNAMENT_SESSION_PREFIX}{tournament.id}",
        round=match.round,
        court=match.court or TOURNAMENT_DEFAULT_COURT,
        status=MATCH_COMPLETED,
        team_a=MatchSide(*match.team_a.player_ids, games_won=score.team_a),
        team_b=MatchSide(*match.team_b.player_ids, games_won=score.team_b),
        winner=match.winner if match.winner is not None else TIE,
        start_time=played_at,
        end_time=played_at,
    )


def _tournament_skill_change(skill: int, opponent_average: float, is_winner: bool) -> int:
    if is_winner:
        step = math.floor((opponent_average - skill) / TOURNAMENT_SKILL_STEP)
        return max(1, min(TOURNAMENT_MAX_SKILL_CHANGE, 1 + step))
    step = math.floor((skill - opponent_average) / TOURNAMENT_SKILL_STEP)
    return max(-TOURNAMENT_MAX_SKILL_CHANGE, min(-1, -1 - step))


def update_stats_after_tournament_match(
    players: Sequence[Player], match: Match, config: Optional[EngineConfig] = None
) -> List[Player]:
    """Apply a recorded tournament match to its players' stats and skill.

    Tournament matches pay more than social ones: 15 points for a win, and
    3, 2 or 1 for a loss one game short, two games short or worse. Skill
    moves by 1 to 3: winners gain more the stronger the opponents were,
    losers drop more the weaker the opponents were. Skill stays within
    0..100. A tie pays the close-loss points and leaves skill and streak
    alone.

    Raises:
        PlayerNotFoundException: A player of the match is not in ``players``
    """
    config = resolve_config(config)
    if match.winner is None:
        raise ValueError(f"Match {match.id} has no result yet")
    by_id = {p.id: p for p in players}
    for player_id in match.player_ids:
        if player_id not in by_id:
            raise PlayerNotFoundException(player_id)

    is_tie = match.winner == TIE
    match_date = format_timestamp(match.end_time) or ""
    updated: List[Player] = []
    for player in players:
        if player.id in match.team_a.player_ids:
            own, other = match.team_a, match.team_b
        elif player.id in match.team_b.player_ids:
            own, other = match.team_b, match.team_a
        else:
            updated.append(player)
            continue

        is_winner = not is_tie and match.side(match.winner) is own
        opponent_average = (
            by_id[other.player1_id].skill + by_id[other.player2_id].skill
        ) / 2

        result = copy.deepcopy(player)
        stats = result.stats
        stats.matches_played += 1
        stats.games_won += own.games_won
        stats.games_lost += other.games_won
        stats.last_played = match_date

        if is_tie:
            stats.points += TOURNAMENT_LOSS_POINTS[1]
        elif is_winner:
            stats.matches_won += 1
            stats.points += TOURNAMENT_WIN_POINTS
            stats.current_streak = stats.current_streak + 1 if stats.current_streak >= 0 else 1
        else:
            stats.matches_lost += 1
            shortfall = config.games_to_win - own.games_won
            stats.points += TOURNAMENT_LOSS_POINTS.get(shortfall, TOURNAMENT_MIN_LOSS_POINTS)
            stats.current_streak = stats.current_streak - 1 if stats.current_streak <= 0 else -1

        if not is_tie:
            change = _tournament_skill_change(player.skill, opponent_average, is_winner)
            result.skill = max(TOURNAMENT_MIN_SKILL, min(MAX_SKILL_RATING, player.skill + change))
        updated.append(result)

    logger.debug("Applied tournament match %s to player stats", match.id)
    return updated


def calculate_win_rate(matches_won: int, matches_played: int) -> int:
    """Percentage of matches won, rounded."""
    if matches_played == 0:
        return 0
    return int(round_half_up(matches_won / matches_played * 100))


def calculate_games_win_rate(games_won: int, total_games: int) -> int:
    if total_games == 0:
        return 0
    return int(round_half_up(games_won / total_games * 100))


def _win_rate(player: Player) -> int:
    return calculate_win_rate(player.stats.matches_won, player.stats.matches_played)


def rank_players(players: Sequence[Player]) -> List[Player]:
    """Leaderboard order: points, win rate, games won, then name."""
    return sorted(
        players,
        key=lambda p: (
            -p.stats.points,
            -_win_rate(p),
            -p.stats.games_won,
            p.name.casefold(),
        ),
    )


@dataclass
class TopPerformers:
    """Leaderboard highlights; a field is None when nobody qualifies."""

    top_scorer: Optional[Player] = None
    best_win_rate: Optional[Player] = None
    longest_streak: Optional[Player] = None


def get_top_performers(players: Sequence[Player], min_matches: int = 3) -> TopPerformers:
    """Pick the top scorer, best win rate and longest current streak.

    Only players with at least one match count. The win-rate award also
    needs ``min_matches`` matches. Earlier players win ties.
    """
    active = [p for p in players if p.stats.matches_played > 0]
    if not active:
        return TopPerformers()

    qualified = [p for p in active if p.stats.matches_played >= min_matches]
    return TopPerformers(
        top_scorer=max(active, key=lambda p: p.stats.points),
        best_win_rate=max(qualified, key=_win_rate) if qualified else None,
        longest_streak=max(active, key=lambda p: abs(p.stats.current_streak)),
    )


def calculate_team_chemistry(
    player1: Player, player2: Player, matches: Sequence[Match]
) -> int:
    """Win percentage of the two players when partnered, 0 if never partnered."""
    together = [
        m
        for m in matches
        if m.team_a.has_pair(player1.id, player2.id)
        or m.team_b.has_pair(player1.id, player2.id)
    ]
    if not together:
        return 0

    wins = sum(
        1
        for m in together
        if m.winner == (TEAM_A if m.team_a.has_pair(player1.id, player2.id) else TEAM_B)
    )
    return int(round_half_up(wins / len(together) * 100))


def generate_match_summary(match: Match, players: Sequence[Player]) -> str:
    """One-line description of a match, e.g. for a results board."""
    names = {p.id: p.name for p in players}

    def side_name(side: MatchSide) -> str:
        return " + ".join(names.get(pid, "Unknown") for pid in side.player_ids)

    team_a, team_b = side_name(match.team_a), side_name(match.team_b)
    score_a, score_b = match.team_a.games_won, match.team_b.games_won

    if match.winner in (TEAM_A, TEAM_B):
        high, low = max(score_a, score_b), min(score_a, score_b)
        if match.winner == TEAM_A:
            return f"Court {match.court}: {team_a} (WIN {high}) vs {team_b} (LOSE {low})"
        return f"Court {match.court}: {team_a} (LOSE {low}) vs {team_b} (WIN {high})"
    return f"Court {match.court}: {team_a} vs {team_b} ({score_a}-{score_b})"


def format_streak(streak: int) -> str:
    if streak == 0:
        return "No streak"
    if streak > 0:
        return f"{streak}W"
    return f"{abs(streak)}L"


def calculate_skill_adjustment(
    player_skill: float,
    opponent_average_skill: float,
    is_winner: bool,
    games_won: int,
    games_lost: int,
    config: Optional[EngineConfig] = None,
) -> int:
    """Elo-style rating change for one player after a match.

    Uses K=32 on a 400-point scale. A dominant win (reaching ``games_to_win``
    while conceding at most one game) is worth 20% more, a loss by a single
    game at the end 20% less.
    """
    config = resolve_config(config)
    target = config.games_to_win
    expected = 1 / (1 + 10 ** ((opponent_average_skill - player_skill) / 400))
    actual = 1 if is_winner else 0
    adjustment = SKILL_K_FACTOR * (actual - expected)

    multiplier = 1.0
    if is_winner and games_won == target and games_lost <= 1:
        multiplier = DOMINANT_WIN_MULTIPLIER
    elif not is_winner and games_won == target - 1 and games_lost == target:
        multiplier = CLOSE_LOSS_MULTIPLIER

    return int(round_half_up(adjustment * multiplier))


def update_player_skill_rating(
    player: Player,
    teammate_skill: float,
    opponent1_skill: float,
    opponent2_skill: float,
    is_winner: bool,
    games_won: int,
    games_lost: int,
    config: Optional[EngineConfig] = None,
) -> Player:
    """Return ``player`` with a skill adjusted for the match result.

    Lopsided results move ratings further: 3 points for a shutout and 2 for
    a single conceded game, up for the winner and down for the loser. The
    result is clamped to 20..100.
    """
    config = resolve_config(config)
    opponent_average = (opponent1_skill + opponent2_skill) / 2
    adjustment = calculate_skill_adjustment(
        player.skill, opponent_average, is_winner, games_won, games_lost, config
    )

    high, low = max(games_won, games_lost), min(games_won, games_lost)
    if high == config.games_to_win:
        bonus = {0: SHUTOUT_BONUS, 1: ONE_GAME_BONUS}.get(low, 0)
        adjustment += bonus if is_winner else -bonus

    updated = copy.deepcopy(player)
    updated.skill = max(MIN_SKILL_RATING, min(MAX_SKILL_RATING, player.skill + adjustment))
    return updated


def update_all_players_skills_after_match(
    players: Sequence[Player], match: Match, config: Optional[EngineConfig] = None
) -> List[Player]:
    """Adjust the skill of all four players of a decided match.

    Ties, unfinished matches and matches with unknown players leave every
    rating unchanged.
    """
    by_id = {p.id: p for p in players}
    if match.winner not in (TEAM_A, TEAM_B) or any(
        pid not in by_id for pid in match.player_ids
    ):
        return list(players)

    updated: List[Player] = []
    for player in players:
        if player.id in match.team_a.player_ids:
            own, other, won = match.team_a, match.team_b, match.winner == TEAM_A
        elif player.id in match.team_b.player_ids:
            own, other, won = match.team_b, match.team_a, match.winner == TEAM_B
        else:
            updated.append(player)
            continue

        teammate_id = own.player2_id if own.player1_id == player.id else own.player1_id
        updated.append(
            update_player_skill_rating(
                player,
                by_id[teammate_id].skill,
                by_id[other.player1_id].skill,
                by_id[other.player2_id].skill,
                won,
                own.games_won,
                other.games_won,
                config,
            )
        )
    logger.debug("Updated skills after match %s", match.id)
    return updated


def calculate_player_stats_for_period(
    players: Sequence[Player],
    matches: Sequence[Match],
    start: datetime,
    end: datetime,
    config: Optional[EngineConfig] = None,
) -> List[Player]:
    """Players with stats rebuilt from matches that ended in ``[start, end]``.

    Streaks are not tracked per period and come back as 0. Players without
    a match in the period get zeroed counters and keep their last played date.
    """
    config = resolve_config(config)
    in_period = sorted(
        (m for m in matches if m.end_time is not None and start <= m.end_time <= end),
        key=lambda m: m.end_time,
    )

    period: Dict[str, PlayerStats] = {}
    for match in in_period:
        is_tie = match.winner == TIE
        for side_name, own, other in (
            (TEAM_A, match.team_a, match.team_b),
            (TEAM_B, match.team_b, match.team_a),
        ):
            for player_id in own.player_ids:
                stats = period.setdefault(player_id, PlayerStats())
                stats.matches_played += 1
                stats.games_won += own.games_won
                stats.games_lost += other.games_won
                stats.last_played = format_timestamp(match.end_time)
                if match.winner == side_name:
                    stats.matches_won += 1
                    stats.points += config.points_win
                elif is_tie:
                    stats.points += config.points_tie
                else:
                    stats.matches_lost += 1
                    stats.points += config.points_loss

    result: List[Player] = []
    for player in players:
        updated = copy.deepcopy(player)
        stats = period.get(player.id)
        if stats is None:
            updated.stats = PlayerStats(last_played=player.stats.last_played)
        else:
            updated.stats = stats
        result.append(updated)
    return result
