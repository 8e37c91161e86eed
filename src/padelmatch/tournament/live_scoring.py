"""Live scoring for session matches and tournament matches.

Every function returns a new value; the match or tournament passed in is
left untouched.
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
from datetime import datetime
from typing import Optional, Sequence

from padelmatch.constants import (
    ACTION_TEAM_A_SCORE,
    ACTION_TEAM_B_SCORE,
    MATCH_COMPLETED,
    MATCH_LIVE,
    MATCH_WAITING,
    TEAM_A,
    TEAM_B,
    TM_COMPLETED,
    TM_IN_PROGRESS,
    TM_PENDING,
    TOURNAMENT_ACTIVE,
    TOURNAMENT_COMPLETED,
    TOURNAMENT_SETUP,
)
from padelmatch.exceptions import (
    InvalidMatchStateException,
    InvalidScoreException,
    MatchNotFoundException,
    TournamentStateException,
)
from padelmatch.models.engine_config import EngineConfig, resolve_config
from padelmatch.models.match import GamePoint, Match
from padelmatch.models.player import Player
from padelmatch.models.tournament import MatchScore, Tournament, TournamentMatch
from padelmatch.tournament.bracket import update_tournament_with_result
from padelmatch.tournament.round_robin import (
    first_open_round,
    update_round_robin_tournament_with_result,
)
from padelmatch.tournament.standings import StandingsCalculator
from padelmatch.utils import setup_logger, utc_now

logger = setup_logger(__name__)


def determine_winner(
    team_a_games: int, team_b_games: int, config: Optional[EngineConfig] = None
) -> Optional[str]:
    """Decide whether a score ends the match.

    A side wins on reaching ``games_to_win``. With early termination on, a
    side also wins once it has ``games_to_win - 1`` games while the other
    side has at most ``early_termination_max_trailing`` and fewer games.

    Returns:
        "teamA", "teamB" or None while the match goes on
    """
    config = resolve_config(config)
    target = config.games_to_win

    if team_a_games >= target:
        return TEAM_A
    if team_b_games >= target:
        return TEAM_B

    if config.early_termination:
        cap = config.early_termination_max_trailing
        if team_a_games >= target - 1 and team_b_games <= cap and team_a_games > team_b_games:
            return TEAM_A
        if team_b_games >= target - 1 and team_a_games <= cap and team_b_games > team_a_games:
            return TEAM_B
    return None


def _check_side(team: str) -> None:
    if team not in (TEAM_A, TEAM_B):
        raise ValueError(f"Unknown side: {team}")


def _apply_detection(match: Match, config: EngineConfig, now: Optional[datetime]) -> None:
    winner = determine_winner(match.team_a.games_won, match.team_b.games_won, config)
    if winner is not None:
        match.status = MATCH_COMPLETED
        match.winner = winner
        match.end_time = utc_now(now)
        logger.info(
            f"Match {match.id} on court {match.court} won by {winner} "
            f"{match.team_a.games_won}-{match.team_b.games_won}"
        )


# ========== Session matches ==========


def start_match(match: Match, now: Optional[datetime] = None) -> Match:
    """Put a waiting match live and stamp its start time."""
    if match.status != MATCH_WAITING:
        raise InvalidMatchStateException(
            f"Match {match.id} is {match.status}, only waiting matches can start"
        )
    updated = copy.deepcopy(match)
    updated.status = MATCH_LIVE
    updated.start_time = utc_now(now)
    return updated


def add_game(
    match: Match,
    team: str,
    config: Optional[EngineConfig] = None,
    now: Optional[datetime] = None,
) -> Match:
    """Award one game to ``team`` and complete the match if that decides it.

    The score before the game is pushed onto ``history`` so it can be undone.
    """
    _check_side(team)
    if match.status != MATCH_LIVE:
        raise InvalidMatchStateException(
            f"Match {match.id} is {match.status}, games can only be added while live"
        )
    config = resolve_config(config)
    updated = copy.deepcopy(match)

    updated.history.append(
        GamePoint(
            team_a_score=updated.team_a.games_won,
            team_b_score=updated.team_b.games_won,
            timestamp=utc_now(now),
            action=ACTION_TEAM_A_SCORE if team == TEAM_A else ACTION_TEAM_B_SCORE,
        )
    )
    updated.side(team).games_won += 1
    _apply_detection(updated, config, now)
    return updated


def undo_last_action(match: Match) -> Match:
    """Restore the score from before the last game and reopen the match."""
    if not match.history:
        raise InvalidMatchStateException(f"Match {match.id} has nothing to undo")

    updated = copy.deepcopy(match)
    last = updated.history.pop()
    updated.team_a.games_won = last.team_a_score
    updated.team_b.games_won = last.team_b_score
    updated.status = MATCH_LIVE
    updated.winner = None
    updated.end_time = None
    return updated


def edit_match_score(
    match: Match,
    team_a_games: int,
    team_b_games: int,
    config: Optional[EngineConfig] = None,
    now: Optional[datetime] = None,
) -> Match:
    """Overwrite the score by hand.

    The match is reopened first, then the usual win detection runs on the
    new score, so an edit can complete a match or bring a completed one back
    to live. History is kept as is.

    Raises:
        InvalidScoreException: A score is negative or above ``games_to_win``
    """
    config = resolve_config(config)
    for games in (team_a_games, team_b_games):
        if games < 0 or games > config.games_to_win:
            raise InvalidScoreException(
                f"Scores must be between 0 and {config.games_to_win}, got {games}"
            )

    updated = copy.deepcopy(match)
    updated.team_a.games_won = team_a_games
    updated.team_b.games_won = team_b_games
    updated.status = MATCH_LIVE
    updated.winner = None
    updated.end_time = None
    _apply_detection(updated, config, now)
    return updated


# ========== Tournament matches ==========


def _locate(tournament: Tournament, match_id: str) -> TournamentMatch:
    match = tournament.find_match(match_id)
    if match is None:
        raise MatchNotFoundException(match_id, "tournament")
    return match


def start_tournament_match(tournament: Tournament, match_id: str) -> Tournament:
    """Move a pending match with known teams to in-progress at 0-0."""
    if tournament.status == TOURNAMENT_COMPLETED:
        raise TournamentStateException(f"Tournament {tournament.id} is already completed")

    updated = copy.deepcopy(tournament)
    match = _locate(updated, match_id)
    if match.status != TM_PENDING:
        raise InvalidMatchStateException(f"Match {match_id} is already {match.status}")
    if match.team_a.is_placeholder or match.team_b.is_placeholder:
        raise InvalidMatchStateException(
            f"Match {match_id} cannot start before its teams are known"
        )

    match.status = TM_IN_PROGRESS
    if match.score is None:
        match.score = MatchScore()
    if updated.status == TOURNAMENT_SETUP:
        updated.status = TOURNAMENT_ACTIVE
    return updated


def score_tournament_point(
    tournament: Tournament,
    match_id: str,
    team: str,
    players: Optional[Sequence[Player]] = None,
    config: Optional[EngineConfig] = None,
    now: Optional[datetime] = None,
) -> Tournament:
    """Add a game to ``team`` in an in-progress tournament match.

    When the game decides the match the result is handed to the
    single-elimination or round-robin updater, which advances the bracket
    or refreshes the standings.

    Raises:
        MatchNotFoundException: Unknown ``match_id``
        InvalidMatchStateException: The match is not in progress
        InvalidScoreException: ``team`` already has ``games_to_win`` games
    """
    _check_side(team)
    config = resolve_config(config)
    match = _locate(tournament, match_id)

    if match.status == TM_COMPLETED:
        raise InvalidMatchStateException(f"Match {match_id} is already completed")
    if match.status != TM_IN_PROGRESS:
        raise InvalidMatchStateException(f"Match {match_id} has not been started")

    score = copy.deepcopy(match.score) if match.score is not None else MatchScore()
    if score.for_side(team) >= config.games_to_win:
        raise InvalidScoreException(
            f"Cannot score beyond {config.games_to_win} games"
        )
    if team == TEAM_A:
        score.team_a += 1
    else:
        score.team_b += 1

    winner = determine_winner(score.team_a, score.team_b, config)
    if winner is None:
        updated = copy.deepcopy(tournament)
        _locate(updated, match_id).score = score
        return updated

    if tournament.is_round_robin:
        return update_round_robin_tournament_with_result(
            tournament, match_id, winner, score, players, now, config
        )
    return update_tournament_with_result(tournament, match_id, winner, score, now)


def undo_tournament_point(
    tournament: Tournament,
    match_id: str,
    team: str,
    players: Optional[Sequence[Player]] = None,
    config: Optional[EngineConfig] = None,
) -> Tournament:
    """Take a game away from ``team``, reopening the match if it was completed.

    A completed single-elimination match can only be reopened while its
    winner has not yet been carried into the next round.

    Raises:
        InvalidScoreException: ``team`` has no games to remove
        InvalidMatchStateException: The match result already fed a later round
        TournamentStateException: The tournament is completed
    """
    _check_side(team)
    if tournament.status == TOURNAMENT_COMPLETED:
        raise TournamentStateException(f"Tournament {tournament.id} is already completed")

    updated = copy.deepcopy(tournament)
    match = _locate(updated, match_id)
    score = match.score if match.score is not None else MatchScore()
    if score.for_side(team) <= 0:
        raise InvalidScoreException(f"{team} has no games to remove in match {match_id}")

    if (
        match.status == TM_COMPLETED
        and not updated.is_round_robin
        and match.round < updated.current_round
    ):
        raise InvalidMatchStateException(
            f"Match {match_id} already decided round {match.round + 1} pairings"
        )

    if team == TEAM_A:
        score.team_a -= 1
    else:
        score.team_b -= 1
    match.score = score

    if match.status == TM_COMPLETED:
        match.status = TM_IN_PROGRESS
        match.winner = None
        if updated.is_round_robin:
            updated.round_robin_standings = StandingsCalculator(config).calculate(
                updated, players
            )
            updated.current_round = first_open_round(updated)
    return updated
