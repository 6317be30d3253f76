# Court Pairing
# Copyright (C) 2025  Court Pairing developers
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
PLAYERS_PER_MATCH = 4
MIN_PLAYERS = 4

# Schedule search
DEFAULT_CANDIDATE_COUNT = 200
# Players considered per court when searching for the best 4-player match
DEFAULT_SEARCH_WINDOW = 20
MIN_ROUNDS = 3

# Fairness cost weights
PARTNER_WEIGHT = 1000.0
OPPONENT_WEIGHT = 300.0
COURT_WEIGHT = 50.0
BYE_WEIGHT = 200.0

# Tournament settings defaults
DEFAULT_COURTS_COUNT = 2
DEFAULT_POINTS_PER_MATCH = 24
DEFAULT_MATCH_DURATION_MINUTES = 15
DEFAULT_MATCH_MINUTES_ESTIMATE = 12
DEFAULT_CHANGEOVER_MINUTES = 3

# Serves per player -> total points per match
SERVE_POINTS_MAPPING = {
    4: 16,
    6: 24,
    8: 32,
}

# Lower point totals play faster
DURATION_MULTIPLIERS = {
    16: 0.75,
    24: 1.0,
    32: 1.25,
}

DEFAULT_SERVES = 6
SHORT_MATCH_MINUTES = 10
LONG_MATCH_MINUTES = 18
# Adjusted duration must stay strictly closer than this to the estimate
DURATION_TOLERANCE_MINUTES = 3

# Health thresholds (percent of matches completed)
HEALTH_GOOD_THRESHOLD = 80.0
HEALTH_MODERATE_THRESHOLD = 50.0

# Logging
LOG_LEVEL_ENV_VAR = "COURTPAIRING_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"
