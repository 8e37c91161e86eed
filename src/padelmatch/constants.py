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

# --- Constants ---

# Match outcome points (round-robin standings and player stats)
WIN_POINTS = 3
TIE_POINTS = 1
LOSS_POINTS = 0

# Live scoring
DEFAULT_GAMES_TO_WIN = 6
EARLY_TERMINATION_MAX_TRAILING = 2

# Team balance thresholds (absolute combined-skill difference)
PERFECT_BALANCE_THRESHOLD = 5
GOOD_BALANCE_THRESHOLD = 10
HIGH_IMBALANCE_THRESHOLD = 20

BALANCE_PERFECT = "Perfectly Balanced"
BALANCE_GOOD = "Good Match"
BALANCE_UNBALANCED = "Unbalanced"

SEVERITY_LOW = "low"
SEVERITY_MEDIUM = "medium"
SEVERITY_HIGH = "high"

# Freshness heuristic
FRESHNESS_START = 100
FRESHNESS_TEAMMATE_PENALTY = 30
FRESHNESS_REPEAT_MATCHUP_PENALTY = 50
FRESHNESS_INTERACTION_PENALTY = 5
DEFAULT_LOOKBACK_SESSIONS = 3
LOW_FRESHNESS_WARNING = 70

# Duplicate prevention search
DEFAULT_GENERATION_ATTEMPTS = 5
# (balance weight, freshness weight)
SMALL_POOL_WEIGHTS = (0.6, 0.4)
LARGE_POOL_WEIGHTS = (0.7, 0.3)

# Match-quality metrics
QUALITY_BALANCE_WEIGHT = 0.7
QUALITY_FRESHNESS_WEIGHT = 0.3

PLAYERS_PER_MATCH = 4
MIN_TOURNAMENT_PLAYERS = 4

DEFAULT_COURTS = ["A", "B", "C", "D"]

# Matchmaking modes
MODE_SKILL_BASED = "skill-based"
MODE_RANDOM_BALANCED = "random-balanced"
MODE_MIXED_TIERS = "mixed-tiers"
MODE_TOURNAMENT = "tournament"

MATCHMAKING_MODES = [
    MODE_SKILL_BASED,
    MODE_RANDOM_BALANCED,
    MODE_MIXED_TIERS,
    MODE_TOURNAMENT,
]

# Tournament types
SINGLE_ELIMINATION = "single-elimination"
DOUBLE_ELIMINATION = "double-elimination"
ROUND_ROBIN = "round-robin"

# Round-robin formats
REGULAR_DOUBLES = "regular-doubles"
MIXED_DOUBLES = "mixed-doubles"
SWITCH_DOUBLES = "switch-doubles"

ROUND_ROBIN_FORMATS = [REGULAR_DOUBLES, MIXED_DOUBLES, SWITCH_DOUBLES]

# Session match status
MATCH_WAITING = "waiting"
MATCH_LIVE = "live"
MATCH_COMPLETED = "completed"

# Tournament match status
TM_PENDING = "pending"
TM_IN_PROGRESS = "in-progress"
TM_COMPLETED = "completed"

# Tournament status
TOURNAMENT_SETUP = "setup"
TOURNAMENT_ACTIVE = "active"
TOURNAMENT_COMPLETED = "completed"

# Session status
SESSION_PLANNING = "planning"
SESSION_ACTIVE = "active"
SESSION_COMPLETED = "completed"

# Sides
TEAM_A = "teamA"
TEAM_B = "teamB"
TIE = "tie"

# Game point actions (live scoring history)
ACTION_TEAM_A_SCORE = "teamA_score"
ACTION_TEAM_B_SCORE = "teamB_score"
ACTION_UNDO = "undo"

TBD_NAME = "TBD"

GENDER_MALE = "male"
GENDER_FEMALE = "female"

# Player skill rating bounds used by the dynamic rating update
MIN_SKILL_RATING = 20
MAX_SKILL_RATING = 100
SKILL_K_FACTOR = 32

# Completed tournament matches
TOURNAMENT_WIN_POINTS = 15
# Games short of games_to_win -> points for the losing side
TOURNAMENT_LOSS_POINTS = {1: 3, 2: 2}
TOURNAMENT_MIN_LOSS_POINTS = 1
TOURNAMENT_SKILL_STEP = 20
TOURNAMENT_MAX_SKILL_CHANGE = 3
TOURNAMENT_MIN_SKILL = 0
TOURNAMENT_SESSION_PREFIX = "tournament-"
TOURNAMENT_DEFAULT_COURT = "Tournament"

# Quality rating labels, highest first: (minimum score, label)
QUALITY_RATINGS = [
    (90, "Excellent"),
    (75, "Very Good"),
    (60, "Good"),
    (40, "Fair"),
]
QUALITY_RATING_FLOOR = "Poor"
