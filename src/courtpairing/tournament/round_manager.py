"""Round management for tournaments.

This module creates scheduled tournaments, moves them into play and reports
round and tournament progress.
"""

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
from datetime import datetime
from typing import Optional, Sequence

from courtpairing.exceptions import (
    InvalidConfigurationException,
    TournamentStateException,
)
from courtpairing.models.enums import (
    RoundStatus,
    TournamentFormat,
    TournamentMode,
    TournamentStatus,
)
from courtpairing.models.match import Round
from courtpairing.models.player import Player
from courtpairing.models.tournament import Tournament, TournamentSettings
from courtpairing.scheduling.americano_scheduler import AmericanoScheduler
from courtpairing.utils import setup_logger

logger = setup_logger(__name__)


def _percentage(done: int, total: int) -> int:
    # Half rounds up
    return int(done / total * 100 + 0.5) if total > 0 else 0


@dataclass(frozen=True)
class RoundProgress:
    """Progress of a single round."""

    total_matches: int
    completed_matches: int
    percentage: int

    @property
    def remaining_matches(self) -> int:
        return self.total_matches - self.completed_matches

    @property
    def is_complete(self) -> bool:
        return self.completed_matches == self.total_matches


@dataclass(frozen=True)
class TournamentProgress:
    """Overall tournament progress."""

    total_matches: int
    completed_matches: int
    total_rounds: int
    completed_rounds: int
    match_percentage: int
    round_percentage: int

    @property
    def remaining_matches(self) -> int:
        return self.total_matches - self.completed_matches

    @property
    def remaining_rounds(self) -> int:
        return self.total_rounds - self.completed_rounds

    @property
    def is_complete(self) -> bool:
        return self.completed_matches == self.total_matches


class RoundManager:
    """Manages schedule creation and round progression for tournaments.

    This class is responsible for:
    - Turning settings into a round count and running the scheduler
    - Starting play on a scheduled tournament
    - Reporting round and tournament progress
    """

    def __init__(self, scheduler: Optional[AmericanoScheduler] = None):
        """Initialize the round manager.

        Args:
            scheduler: Scheduler to use; a default one is built when omitted
        """
        self.scheduler = scheduler or AmericanoScheduler()

    def planned_round_count(
        self, settings: TournamentSettings
    ) -> Optional[int]:
        """Round count implied by the settings, ``None`` for open-ended play.

        Raises:
            InvalidConfigurationException: If the planned mode lacks its value
        """
        if settings.mode == TournamentMode.ROUNDS_PLANNED:
            if not settings.planned_rounds or settings.planned_rounds < 1:
                raise InvalidConfigurationException(
                    "Rounds-planned tournaments need planned_rounds >= 1"
                )
            return settings.planned_rounds

        if settings.mode == TournamentMode.TIME_PLANNED:
            if not settings.total_minutes or settings.effective_match_duration <= 0:
                raise InvalidConfigurationException(
                    "Time-planned tournaments need total_minutes and a positive "
                    "match duration"
                )
            return max(settings.total_minutes // settings.effective_match_duration, 1)

        return None

    def create_scheduled_tournament(
        self,
        name: str,
        players: Sequence[Player],
        settings: Optional[TournamentSettings] = None,
        format: TournamentFormat = TournamentFormat.AMERICANO,
        seed: Optional[int] = None,
    ) -> Tournament:
        """Create a tournament with a generated schedule, ready to start.

        Raises:
            ScheduleException: If the roster cannot be scheduled
            InvalidConfigurationException: If the settings are unusable
        """
        settings = settings or TournamentSettings()
        result = self.scheduler.generate_schedule(
            players,
            settings.courts_count,
            format,
            seed=seed,
            num_rounds=self.planned_round_count(settings),
        )
        tournament = Tournament(
            name=name,
            format=format,
            status=TournamentStatus.READY,
            settings=settings,
            players=list(players),
            rounds=result.rounds,
            seed=result.seed,
        )
        logger.info(
            f"Created tournament {name}: {tournament.total_rounds} rounds, "
            f"{tournament.total_scheduled_matches} matches, seed {result.seed}"
        )
        return tournament

    def start_tournament(self, tournament: Tournament) -> Tournament:
        """Move a scheduled tournament into play.

        Raises:
            TournamentStateException: If the tournament cannot start
        """
        if not tournament.can_start:
            raise TournamentStateException(
                f"Tournament {tournament.name} cannot start from status "
                f"{tournament.status.value} with {tournament.active_player_count} "
                f"active players and {tournament.total_rounds} rounds"
            )

        now = datetime.now()
        tournament.status = TournamentStatus.IN_PROGRESS
        tournament.started_at = now
        first_round = tournament.rounds[0]
        first_round.status = RoundStatus.IN_PROGRESS
        first_round.started_at = now
        logger.info(f"Tournament {tournament.name} started")
        return tournament

    @staticmethod
    def get_round_progress(round_data: Round) -> RoundProgress:
        total = len(round_data.matches)
        completed = round_data.completed_matches_count
        return RoundProgress(
            total_matches=total,
            completed_matches=completed,
            percentage=_percentage(completed, total),
        )

    @staticmethod
    def get_tournament_progress(tournament: Tournament) -> TournamentProgress:
        total_matches = tournament.total_scheduled_matches
        completed_matches = tournament.total_completed_matches
        total_rounds = tournament.total_rounds
        completed_rounds = tournament.completed_rounds
        return TournamentProgress(
            total_matches=total_matches,
            completed_matches=completed_matches,
            total_rounds=total_rounds,
            completed_rounds=completed_rounds,
            match_percentage=_percentage(completed_matches, total_matches),
            round_percentage=_percentage(completed_rounds, total_rounds),
        )


def start_tournament(tournament: Tournament) -> Tournament:
    return RoundManager().start_tournament(tournament)


def create_scheduled_tournament(
    name: str,
    players: Sequence[Player],
    settings: Optional[TournamentSettings] = None,
    format: TournamentFormat = TournamentFormat.AMERICANO,
    seed: Optional[int] = None,
    scheduler: Optional[AmericanoScheduler] = None,
) -> Tournament:
    return RoundManager(scheduler).create_scheduled_tournament(
        name, players, settings, format, seed
    )


get_round_progress = RoundManager.get_round_progress
get_tournament_progress = RoundManager.get_tournament_progress
