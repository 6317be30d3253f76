"""Tournament health metrics and end-of-tournament warnings."""

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

from dataclasses import dataclass
from typing import Any, Dict, List

from courtpairing.constants import HEALTH_GOOD_THRESHOLD, HEALTH_MODERATE_THRESHOLD
from courtpairing.models.enums import HealthLevel, RoundStatus
from courtpairing.models.match import Round
from courtpairing.models.tournament import Tournament
from courtpairing.utils import setup_logger

logger = setup_logger(__name__)


@dataclass(frozen=True)
class TournamentHealth:
    """Completion metrics of a tournament.

    Attributes:
        scheduled_matches: Matches in the schedule
        completed_matches: Matches completed (bye placeholders count as done)
        incomplete_matches_in_current_round: Unfinished matches in the current round
        scheduled_rounds: Rounds in the schedule
        completed_rounds: Rounds whose status is completed
        rounds_with_incomplete_matches: Rounds holding an unfinished match
        current_round_index: First round with an unfinished match, else the
            last round, or -1 without rounds
        players_without_match: Active players never placed in a match
    """

    scheduled_matches: int
    completed_matches: int
    incomplete_matches_in_current_round: int
    scheduled_rounds: int
    completed_rounds: int
    rounds_with_incomplete_matches: int
    current_round_index: int
    players_without_match: int

    @property
    def completion_percentage(self) -> float:
        if self.scheduled_matches == 0:
            return 0.0
        return self.completed_matches / self.scheduled_matches * 100

    @property
    def is_fully_complete(self) -> bool:
        return self.scheduled_matches > 0 and self.completed_matches == self.scheduled_matches

    @property
    def is_current_round_complete(self) -> bool:
        return self.incomplete_matches_in_current_round == 0

    @property
    def incomplete_matches(self) -> int:
        return self.scheduled_matches - self.completed_matches

    @property
    def health_level(self) -> HealthLevel:
        if self.is_fully_complete:
            return HealthLevel.COMPLETE
        if self.completion_percentage >= HEALTH_GOOD_THRESHOLD:
            return HealthLevel.GOOD
        if self.completion_percentage >= HEALTH_MODERATE_THRESHOLD:
            return HealthLevel.MODERATE
        return HealthLevel.LOW

    def to_summary(self) -> str:
        """Multi-line summary for an end-of-tournament confirmation."""
        lines = [
            f"Completed: {self.completed_matches} / {self.scheduled_matches} matches",
            f"Completion: {self.completion_percentage:.1f}%",
        ]
        if self.incomplete_matches_in_current_round > 0:
            lines.append(
                f"Incomplete in current round: {self.incomplete_matches_in_current_round}"
            )
        lines.append(
            f"Rounds: {self.completed_rounds} / {self.scheduled_rounds} completed"
        )
        return "\n".join(lines) + "\n"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "scheduled_matches": self.scheduled_matches,
            "completed_matches": self.completed_matches,
            "incomplete_matches_in_current_round": self.incomplete_matches_in_current_round,
            "scheduled_rounds": self.scheduled_rounds,
            "completed_rounds": self.completed_rounds,
            "rounds_with_incomplete_matches": self.rounds_with_incomplete_matches,
            "current_round_index": self.current_round_index,
            "players_without_match": self.players_without_match,
            "completion_percentage": self.completion_percentage,
            "health_level": self.health_level.value,
        }

    def __str__(self) -> str:
        return (
            f"TournamentHealth(completed: {self.completed_matches}/"
            f"{self.scheduled_matches}, currentRound: {self.current_round_index}, "
            f"incomplete: {self.incomplete_matches_in_current_round})"
        )


class TournamentHealthService:
    """Computes health metrics for a tournament snapshot."""

    def compute_health(self, tournament: Tournament) -> TournamentHealth:
        rounds = tournament.rounds
        scheduled = 0
        completed = 0
        rounds_with_incomplete = 0

        for round_data in rounds:
            scheduled += len(round_data.matches)
            completed += sum(1 for m in round_data.matches if m.status.is_finished)
            if round_data.has_unfinished_matches:
                rounds_with_incomplete += 1

        current_index = self.find_current_round_index(rounds)
        incomplete_in_current = 0
        if 0 <= current_index < len(rounds):
            incomplete_in_current = sum(
                1 for m in rounds[current_index].matches if not m.status.is_finished
            )

        health = TournamentHealth(
            scheduled_matches=scheduled,
            completed_matches=completed,
            incomplete_matches_in_current_round=incomplete_in_current,
            scheduled_rounds=len(rounds),
            completed_rounds=sum(
                1 for r in rounds if r.status == RoundStatus.COMPLETED
            ),
            rounds_with_incomplete_matches=rounds_with_incomplete,
            current_round_index=current_index,
            players_without_match=self.count_players_without_match(tournament),
        )
        if health.players_without_match:
            logger.warning(
                f"{health.players_without_match} active players have no match "
                f"in tournament {tournament.name}"
            )
        return health

    @staticmethod
    def find_current_round_index(rounds: List[Round]) -> int:
        for index, round_data in enumerate(rounds):
            if round_data.has_unfinished_matches:
                return index
        return len(rounds) - 1

    @staticmethod
    def count_players_without_match(tournament: Tournament) -> int:
        """Active players that no scheduled match contains."""
        in_matches = {pid for r in tournament.rounds for pid in r.playing_ids}
        return sum(1 for p in tournament.active_players if p.id not in in_matches)

    def can_end_tournament(self, tournament: Tournament) -> bool:
        """At least one match must be completed before ending."""
        return self.compute_health(tournament).completed_matches > 0

    def get_end_warnings(self, tournament: Tournament) -> List[str]:
        warnings = []
        health = self.compute_health(tournament)

        if health.incomplete_matches > 0:
            warnings.append(
                f"{health.incomplete_matches} matches are incomplete and will not count"
            )
        if health.incomplete_matches_in_current_round > 0:
            warnings.append(
                f"{health.incomplete_matches_in_current_round} matches in current "
                "round are unfinished"
            )
        if health.completion_percentage < HEALTH_MODERATE_THRESHOLD:
            warnings.append("Less than 50% of matches completed")

        return warnings


_service = TournamentHealthService()


def compute_health(tournament: Tournament) -> TournamentHealth:
    return _service.compute_health(tournament)


def get_end_warnings(tournament: Tournament) -> List[str]:
    return _service.get_end_warnings(tournament)


def can_end_tournament(tournament: Tournament) -> bool:
    return _service.can_end_tournament(tournament)
