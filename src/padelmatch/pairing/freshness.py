"""Freshness heuristic: how much a candidate match repeats recent history."""

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

from dataclasses import dataclass, field
from itertools import combinations
from typing import FrozenSet, Iterable, Sequence, Set, Union

from padelmatch.constants import (
    FRESHNESS_INTERACTION_PENALTY,
    FRESHNESS_REPEAT_MATCHUP_PENALTY,
    FRESHNESS_START,
    FRESHNESS_TEAMMATE_PENALTY,
)
from padelmatch.models.match import Match, Team


@dataclass
class RecentPairings:
    """
    Index of who played with and against whom in recent matches.

    Attributes
    ----------
    teammates : set of frozenset of str
        Player id pairs that shared a side.
    co_players : set of frozenset of str
        Player id pairs that appeared in the same match on either side.
    matchups : set of frozenset of frozenset of str
        Exact team-vs-team pairings, independent of side and order.
    """

    teammates: Set[FrozenSet[str]] = field(default_factory=set)
    co_players: Set[FrozenSet[str]] = field(default_factory=set)
    matchups: Set[FrozenSet[FrozenSet[str]]] = field(default_factory=set)

    def add_match(self, match: Match) -> None:
        side_a = frozenset(match.team_a.player_ids)
        side_b = frozenset(match.team_b.player_ids)
        self.teammates.add(side_a)
        self.teammates.add(side_b)
        self.matchups.add(frozenset({side_a, side_b}))
        for first, second in combinations(match.player_ids, 2):
            if first != second:
                self.co_players.add(frozenset({first, second}))

    @classmethod
    def from_matches(cls, matches: Iterable[Match]) -> "RecentPairings":
        pairings = cls()
        for match in matches:
            pairings.add_match(match)
        return pairings


RecentHistory = Union[RecentPairings, Sequence[Match]]


def _as_pairings(recent: RecentHistory) -> RecentPairings:
    if isinstance(recent, RecentPairings):
        return recent
    return RecentPairings.from_matches(recent)


def have_played_together(
    player1_id: str, player2_id: str, recent: RecentHistory
) -> bool:
    """Whether both players appeared in one recent match, on any side."""
    return frozenset({player1_id, player2_id}) in _as_pairings(recent).co_players


def have_played_as_teammates(
    player1_id: str, player2_id: str, recent: RecentHistory
) -> bool:
    return frozenset({player1_id, player2_id}) in _as_pairings(recent).teammates


def have_played_as_opponents(
    team_a: Team, team_b: Team, recent: RecentHistory
) -> bool:
    """Whether this exact team-vs-team pairing happened recently."""
    matchup = frozenset(
        {frozenset(team_a.player_ids), frozenset(team_b.player_ids)}
    )
    return matchup in _as_pairings(recent).matchups


def calculate_match_freshness(
    team_a: Team, team_b: Team, recent: RecentHistory
) -> int:
    """Score a candidate match from 0 (stale) to 100 (never seen).

    Penalties: 30 per team whose partners were recently teammates, 50 for a
    repeat of the exact matchup, and 5 for every pair of the four players
    that recently shared a match. The result never drops below zero and does
    not depend on which team is passed first.
    """
    pairings = _as_pairings(recent)
    score = FRESHNESS_START

    if have_played_as_teammates(team_a.player1.id, team_a.player2.id, pairings):
        score -= FRESHNESS_TEAMMATE_PENALTY
    if have_played_as_teammates(team_b.player1.id, team_b.player2.id, pairings):
        score -= FRESHNESS_TEAMMATE_PENALTY

    if have_played_as_opponents(team_a, team_b, pairings):
        score -= FRESHNESS_REPEAT_MATCHUP_PENALTY

    everyone = [*team_a.player_ids, *team_b.player_ids]
    interactions = sum(
        1
        for first, second in combinations(everyone, 2)
        if have_played_together(first, second, pairings)
    )
    score -= interactions * FRESHNESS_INTERACTION_PENALTY

    return max(0, score)
