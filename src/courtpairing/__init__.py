"""Court Pairing - Americano tournament scheduling and standings engine."""

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

from courtpairing.scheduling.americano_scheduler import generate_schedule
from courtpairing.scheduling.time_recommendation import recommend
from courtpairing.tournament.health import compute_health, get_end_warnings
from courtpairing.tournament.result_recorder import update_match_score
from courtpairing.tournament.standings_calculator import (
    compute_winner_summary,
    recalculate_standings,
)

__version__ = "0.1.0"

__all__ = [
    "compute_health",
    "compute_winner_summary",
    "generate_schedule",
    "get_end_warnings",
    "recalculate_standings",
    "recommend",
    "update_match_score",
]
