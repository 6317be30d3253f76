"""Enumerations shared by the tournament models."""

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

from enum import Enum


class TournamentFormat(Enum):
    """Pairing format of a tournament."""

    AMERICANO = "americano"
    MIXED_AMERICANO = "mixed_americano"
    SAME_SEX_MALE = "same_sex_male"
    SAME_SEX_FEMALE = "same_sex_female"

    @property
    def display_name(self) -> str:
        return _FORMAT_NAMES[self][0]

    @property
    def description(self) -> str:
        return _FORMAT_NAMES[self][1]

    @property
    def is_mixed(self) -> bool:
        """Teams must be one male and one female player."""
        return self is TournamentFormat.MIXED_AMERICANO

    @property
    def requires_gender(self) -> bool:
        return self.is_mixed


_FORMAT_NAMES = {
    TournamentFormat.AMERICANO: (
        "Americano",
        "Open format - any player can partner with anyone",
    ),
    TournamentFormat.MIXED_AMERICANO: (
        "Mixed Americano",
        "Teams must be one male + one female",
    ),
    TournamentFormat.SAME_SEX_MALE: ("Same Sex (Male)", "All male players"),
    TournamentFormat.SAME_SEX_FEMALE: ("Same Sex (Female)", "All female players"),
}


class TournamentMode(Enum):
    """Planning strategy chosen when the tournament is created."""

    OPEN_ENDED = "open_ended"
    ROUNDS_PLANNED = "rounds_planned"
    TIME_PLANNED = "time_planned"

    @property
    def has_planned_end(self) -> bool:
        return self is not TournamentMode.OPEN_ENDED

    @property
    def is_time_based(self) -> bool:
        return self is TournamentMode.TIME_PLANNED

    @property
    def is_rounds_based(self) -> bool:
        return self is TournamentMode.ROUNDS_PLANNED


class TournamentStatus(Enum):
    DRAFT = "draft"
    READY = "ready"
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @property
    def display_name(self) -> str:
        return self.value.replace("_", " ").title()

    @property
    def can_edit(self) -> bool:
        return self is TournamentStatus.DRAFT

    @property
    def can_start(self) -> bool:
        return self in (TournamentStatus.READY, TournamentStatus.SCHEDULED)

    @property
    def is_active(self) -> bool:
        return self is TournamentStatus.IN_PROGRESS

    @property
    def is_finished(self) -> bool:
        return self in (TournamentStatus.COMPLETED, TournamentStatus.CANCELLED)


class Gender(Enum):
    MALE = "male"
    FEMALE = "female"
    UNSPECIFIED = "unspecified"

    @property
    def short_name(self) -> str:
        return {"male": "M", "female": "F"}.get(self.value, "-")


class MatchStatus(Enum):
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    BYE = "bye"

    @property
    def is_finished(self) -> bool:
        """Completed matches and bye placeholders need no further play."""
        return self in (MatchStatus.COMPLETED, MatchStatus.BYE)


class RoundStatus(Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class HealthLevel(Enum):
    """Coarse classification of tournament completion."""

    COMPLETE = "complete"
    GOOD = "good"
    MODERATE = "moderate"
    LOW = "low"

    @property
    def display_name(self) -> str:
        return self.value.title()

    @property
    def indicator(self) -> str:
        return {"complete": "✓", "good": "●", "moderate": "◐", "low": "○"}[
            self.value
        ]
