"""Time budget to tournament format recommendations."""

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

import math
from dataclasses import dataclass
from typing import Any, Dict, Tuple

from courtpairing.constants import (
    DEFAULT_SERVES,
    DURATION_MULTIPLIERS,
    DURATION_TOLERANCE_MINUTES,
    LONG_MATCH_MINUTES,
    PLAYERS_PER_MATCH,
    SERVE_POINTS_MAPPING,
    SHORT_MATCH_MINUTES,
)
from courtpairing.models.enums import TournamentFormat
from courtpairing.utils import setup_logger
from courtpairing.utils.validation import (
    ValidationResult,
    validate_courts_count,
    validate_time_settings,
    validate_time_settings_strict,
)

logger = setup_logger(__name__)


@dataclass(frozen=True)
class TimeRecommendation:
    """Recommended format for a time budget.

    Attributes:
        estimated_rounds: Rounds that fit in the budget
        estimated_matches: Matches played across those rounds
        recommended_serves_per_player: Serves each player gets per match
        recommended_total_points_per_match: Fixed match total to play to
        estimated_duration_minutes: Time the estimated rounds take
        matches_per_round: Courts in use each round
    """

    estimated_rounds: int
    estimated_matches: int
    recommended_serves_per_player: int
    recommended_total_points_per_match: int
    estimated_duration_minutes: int
    matches_per_round: int

    @property
    def fits_within_time(self) -> bool:
        return self.estimated_duration_minutes > 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "estimated_rounds": self.estimated_rounds,
            "estimated_matches": self.estimated_matches,
            "recommended_serves_per_player": self.recommended_serves_per_player,
            "recommended_total_points_per_match": self.recommended_total_points_per_match,
            "estimated_duration_minutes": self.estimated_duration_minutes,
            "matches_per_round": self.matches_per_round,
        }

    def __str__(self) -> str:
        return (
            f"TimeRecommendation(rounds: {self.estimated_rounds}, "
            f"matches: {self.estimated_matches}, "
            f"serves: {self.recommended_serves_per_player}, "
            f"points: {self.recommended_total_points_per_match}, "
            f"duration: {self.estimated_duration_minutes}min)"
        )


class TimeRecommendationService:
    """Translates a time budget into rounds and a points-per-match value."""

    def generate_recommendation(
        self,
        total_minutes: int,
        match_minutes_estimate: int,
        changeover_minutes: int,
        courts_count: int,
        player_count: int,
    ) -> TimeRecommendation:
        """Recommend a format that fits the time budget.

        Args:
            total_minutes: Total time available for the tournament
            match_minutes_estimate: Estimated playing time of one match
            changeover_minutes: Time between matches on a court
            courts_count: Courts available
            player_count: Players taking part

        Returns:
            TimeRecommendation for the budget

        Raises:
            InsufficientTimeException: Budget shorter than one match cycle
            TooFewPlayersException: Fewer than four players
            InvalidConfigurationException: Non-positive courts or match cycle
        """
        validate_courts_count(courts_count)
        validate_time_settings_strict(
            total_minutes, match_minutes_estimate, changeover_minutes, player_count
        )

        matches_per_round = self.matches_per_round(courts_count, player_count)
        cycle = match_minutes_estimate + changeover_minutes
        estimated_rounds = total_minutes // cycle
        serves, points = self.select_points_option(match_minutes_estimate)

        recommendation = TimeRecommendation(
            estimated_rounds=estimated_rounds,
            estimated_matches=estimated_rounds * matches_per_round,
            recommended_serves_per_player=serves,
            recommended_total_points_per_match=points,
            estimated_duration_minutes=estimated_rounds * cycle,
            matches_per_round=matches_per_round,
        )
        logger.debug(f"Recommendation for {total_minutes} min: {recommendation}")
        return recommendation

    @staticmethod
    def matches_per_round(courts_count: int, player_count: int) -> int:
        """Courts in use per round, at least one once four players exist."""
        if player_count >= courts_count * PLAYERS_PER_MATCH:
            return courts_count
        return max(1, min(player_count // PLAYERS_PER_MATCH, courts_count))

    @staticmethod
    def select_points_option(match_minutes_estimate: int) -> Tuple[int, int]:
        """Pick (serves per player, total points) for an estimated match length.

        Short matches play to 16 and long ones to 32. In between, the highest
        points entry whose adjusted duration stays less than three minutes
        above the estimate wins.
        """
        if match_minutes_estimate < SHORT_MATCH_MINUTES:
            return 4, SERVE_POINTS_MAPPING[4]
        if match_minutes_estimate > LONG_MATCH_MINUTES:
            return 8, SERVE_POINTS_MAPPING[8]

        best_serves = DEFAULT_SERVES
        best_points = SERVE_POINTS_MAPPING[DEFAULT_SERVES]
        for serves, points in sorted(SERVE_POINTS_MAPPING.items()):
            multiplier = DURATION_MULTIPLIERS.get(points, 1.0)
            adjusted = int(match_minutes_estimate * multiplier + 0.5)
            if adjusted - match_minutes_estimate < DURATION_TOLERANCE_MINUTES:
                best_serves, best_points = serves, points
        return best_serves, best_points

    @staticmethod
    def calculate_rounds_for_player_count(
        player_count: int,
        courts_count: int,
        format: TournamentFormat = TournamentFormat.AMERICANO,
    ) -> int:
        """Rounds for a rounds-planned tournament.

        When everyone fits on court each round the count is round-robin style
        (``players - 1``); otherwise twice the rounds needed for everyone to
        play once.

        ``format`` is accepted so callers can pass a tournament's settings
        through unchanged. The count is the same for every format.
        """
        players_per_round = courts_count * PLAYERS_PER_MATCH
        if player_count <= players_per_round:
            return max(player_count - 1, 1)
        return math.ceil(player_count / players_per_round) * 2

    @staticmethod
    def validate_settings(
        total_minutes: int,
        match_minutes_estimate: int,
        changeover_minutes: int,
        player_count: int,
    ) -> ValidationResult:
        return validate_time_settings(
            total_minutes, match_minutes_estimate, changeover_minutes, player_count
        )


def recommend(
    total_minutes: int,
    match_minutes_estimate: int,
    changeover_minutes: int,
    courts_count: int,
    player_count: int,
) -> TimeRecommendation:
    """Module level shortcut for TimeRecommendationService.generate_recommendation."""
    return TimeRecommendationService().generate_recommendation(
        total_minutes,
        match_minutes_estimate,
        changeover_minutes,
        courts_count,
        player_count,
    )
