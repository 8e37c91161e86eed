"""Testing tools for Padel Match.

This module provides:
- A seeded simulator for social sessions and tournaments
- An interactive CLI around it

Use the CLI: padelmatch-test
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

from padelmatch.testing.simulator import (
    GameSimulator,
    PadelSimulator,
    PlayerFactory,
    ResultPattern,
    SimulatorConfig,
    SkillDistribution,
    create_social_simulation,
    create_tournament_simulation,
)

__all__ = [
    "GameSimulator",
    "PadelSimulator",
    "PlayerFactory",
    "ResultPattern",
    "SimulatorConfig",
    "SkillDistribution",
    "create_social_simulation",
    "create_tournament_simulation",
]
