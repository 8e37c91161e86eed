"""Round-robin schedules: fixed teams, mixed doubles and switch doubles."""

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
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Sequence, Tuple

from padelmatch.constants import (
    GENDER_FEMALE,
    GENDER_MALE,
    MIN_TOURNAMENT_PLAYERS,
    MIXED_DOUBLES,
    PLAYERS_PER_MATCH,
    REGULAR_DOUBLES,
    SWITCH_DOUBLES,
    TEAM_A,
    TEAM_B,
    TIE,
    TM_COMPLETED,
    TM_PENDING,
    TOURNAMENT_COMPLETED,
)
from padelmatch.exceptions import (
    InvalidPlayerCountException,
    MatchNotFoundException,
    TournamentStateException,
    UnsupportedConfigurationException,
)
from padelmatch.models.engine_config import EngineConfig
from padelmatch.models.match import Team
from padelmatch.models.player import Player
from padelmatch.models.tournament import MatchScore, MatchTeam, Tournament, TournamentMatch
from padelmatch.pairing.matchmaking import sort_by_skill
from padelmatch.tournament.bracket import court_name
from padelmatch.tournament.standings import StandingsCalculator
from padelmatch.type_hints import Bracket
from padelmatch.utils import generate_id, resolve_rng, setup_logger, utc_now

logger = setup_logger(__name__)


@dataclass
class RoundRobinTeam(Team):
    """A fixed partnership that plays every other team once."""

    id: str = ""

    def as_match_team(self) -> MatchTeam:
        return MatchTeam(*self.player_ids, name=self.name)


def create_round_robin_teams(
    players: Sequence[Player], round_robin_format: str = REGULAR_DOUBLES
) -> List[RoundRobinTeam]:
    """Split players into the fixed teams of a round robin.

    Regular doubles pairs skill-adjacent players (1+2, 3+4, ...); an odd
    player out is left without a team. Mixed doubles pairs the n-th best man
    with the n-th best woman, so the smaller gender decides the team count.

    Raises:
        UnsupportedConfigurationException: Mixed doubles without both genders,
            or a format that has no fixed teams
    """
    teams: List[RoundRobinTeam] = []

    if round_robin_format == REGULAR_DOUBLES:
        ranked = sort_by_skill(players)
        for i in range(0, len(ranked) - 1, 2):
            teams.append(
                RoundRobinTeam(ranked[i], ranked[i + 1], id=f"team-{i // 2 + 1}")
            )
        if len(ranked) % 2:
            logger.info(f"{ranked[-1].name} has no partner and sits out")
        return teams

    if round_robin_format == MIXED_DOUBLES:
        males = sort_by_skill([p for p in players if p.gender == GENDER_MALE])
        females = sort_by_skill([p for p in players if p.gender == GENDER_FEMALE])
        if not males or not females:
            raise UnsupportedConfigurationException(
                "Mixed doubles requires both male and female players"
            )
        for i in range(min(len(males), len(females))):
            teams.append(
                RoundRobinTeam(males[i], females[i], id=f"mixed-team-{i + 1}")
            )
        return teams

    raise UnsupportedConfigurationException(
        f"Round-robin format {round_robin_format!r} has no fixed teams"
    )


def _circle_rounds(
    teams: Sequence[RoundRobinTeam],
) -> List[List[Tuple[RoundRobinTeam, RoundRobinTeam]]]:
    """Pairings per round by the circle method.

    Position i meets position n-1-i, then everyone except the first slot
    shifts one place. An odd field gets an empty slot; whoever faces it sits
    the round out.
    """
    slots: List[Optional[RoundRobinTeam]] = list(teams)
    if len(slots) % 2:
        slots.append(None)
    size = len(slots)

    rounds = []
    for _ in range(size - 1):
        pairs = []
        for i in range(size // 2):
            home, away = slots[i], slots[size - 1 - i]
            if home is not None and away is not None:
                pairs.append((home, away))
        rounds.append(pairs)
        slots = [slots[0]] + slots[2:] + [slots[1]]
    return rounds


def generate_round_robin_schedule(
    teams: Sequence[RoundRobinTeam],
    rng: Optional[random.Random] = None,
    config: Optional[EngineConfig] = None,
) -> Bracket:
    """All-play-all schedule for fixed teams.

    N teams play N-1 rounds when N is even and N rounds when N is odd (one
    team rests each round). Every pair of teams meets exactly once.
    """
    rounds: Bracket = []
    for round_index, pairs in enumerate(_circle_rounds(teams)):
        rounds.append(
            [
                TournamentMatch(
                    id=generate_id("match", rng),
                    round=round_index + 1,
                    match_number=i + 1,
                    court=court_name(i, config),
                    team_a=home.as_match_team(),
                    team_b=away.as_match_team(),
                    status=TM_PENDING,
                )
                for i, (home, away) in enumerate(pairs)
            ]
        )
    return rounds


def generate_switch_doubles_schedule(
    players: Sequence[Player],
    rng: Optional[random.Random] = None,
    config: Optional[EngineConfig] = None,
) -> Bracket:
    """Rotating-partner schedule ranked per player.

    Runs one round fewer than there are players. Each round reshuffles the
    whole field and groups it into fours; players beyond the last full group
    rest. Partnerships are random, so repeats are possible.

    Raises:
        UnsupportedConfigurationException: Odd number of players
    """
    if len(players) % 2:
        raise UnsupportedConfigurationException(
            "Switch doubles requires even number of players"
        )
    rng = resolve_rng(rng)

    rounds: Bracket = []
    for round_index in range(len(players) - 1):
        field_order = list(players)
        rng.shuffle(field_order)

        round_matches = []
        for i in range(len(field_order) // PLAYERS_PER_MATCH):
            p1, p2, p3, p4 = field_order[i * 4 : (i + 1) * 4]
            round_matches.append(
                TournamentMatch(
                    id=generate_id("match", rng),
                    round=round_index + 1,
                    match_number=i + 1,
                    court=court_name(i, config),
                    team_a=MatchTeam(p1.id, p2.id, f"{p1.name} + {p2.name}"),
                    team_b=MatchTeam(p3.id, p4.id, f"{p3.name} + {p4.name}"),
                    status=TM_PENDING,
                )
            )
        rounds.append(round_matches)
    return rounds


def generate_round_robin_bracket(
    players: Sequence[Player],
    round_robin_format: str = REGULAR_DOUBLES,
    rng: Optional[random.Random] = None,
    config: Optional[EngineConfig] = None,
) -> Bracket:
    """Build the full round-robin schedule for ``round_robin_format``.

    Raises:
        InvalidPlayerCountException: Fewer than four players
        UnsupportedConfigurationException: The format cannot be scheduled
            with these players
    """
    if len(players) < MIN_TOURNAMENT_PLAYERS:
        raise InvalidPlayerCountException(
            "Round-robin tournament requires at least 4 players",
            player_count=len(players),
        )

    if round_robin_format == SWITCH_DOUBLES:
        return generate_switch_doubles_schedule(players, rng, config)

    teams = create_round_robin_teams(players, round_robin_format)
    if len(teams) < 2:
        raise UnsupportedConfigurationException(
            "Need at least 2 teams for round-robin tournament"
        )

    logger.info(
        f"Scheduling {round_robin_format} round robin for {len(teams)} teams"
    )
    return generate_round_robin_schedule(teams, rng, config)


def first_open_round(tournament: Tournament) -> int:
    """Number of the first round with a match still to finish.

    A fully played schedule reports its last round.
    """
    for round_number, round_matches in enumerate(tournament.bracket, start=1):
        if any(m.status != TM_COMPLETED for m in round_matches):
            return round_number
    return max(len(tournament.bracket), 1)


def update_round_robin_tournament_with_result(
    tournament: Tournament,
    match_id: str,
    winner: str,
    score: MatchScore,
    players: Optional[Sequence[Player]] = None,
    now: Optional[datetime] = None,
    config: Optional[EngineConfig] = None,
) -> Tournament:
    """Record a round-robin result and refresh the standings.

    ``winner`` may be "tie", stored as no winner. Standings are recomputed
    from every completed match. Once all matches are completed the
    tournament completes and the top standing's first player becomes the
    representative ``winner``. ``current_round`` follows the first round
    that still has a match to play.

    Raises:
        MatchNotFoundException: ``match_id`` is not in the schedule
        TournamentStateException: The tournament is already completed
    """
    if winner not in (TEAM_A, TEAM_B, TIE):
        raise ValueError(f"Winner must be teamA, teamB or tie, got {winner!r}")
    if tournament.status == TOURNAMENT_COMPLETED:
        raise TournamentStateException(f"Tournament {tournament.id} is already completed")

    updated = copy.deepcopy(tournament)
    match = updated.find_match(match_id)
    if match is None:
        raise MatchNotFoundException(match_id, "round-robin tournament")

    match.winner = None if winner == TIE else winner
    match.status = TM_COMPLETED
    match.score = copy.deepcopy(score)

    updated.round_robin_standings = StandingsCalculator(config).calculate(
        updated, players
    )
    updated.current_round = first_open_round(updated)

    if all(m.status == TM_COMPLETED for m in updated.all_matches()):
        updated.status = TOURNAMENT_COMPLETED
        updated.completed_at = utc_now(now)
        if updated.round_robin_standings:
            leader = updated.round_robin_standings[0]
            updated.winner = leader.player1_id
            logger.info(f"Round robin {updated.id} completed, won by {leader.team_name}")

    return updated
