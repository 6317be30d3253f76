"""Exceptions for use in Court Pairing"""

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


# ========== Base Application Exception ==========


class CourtPairingException(Exception):
    """Base exception for all Court Pairing errors.

    All custom exceptions in the library inherit from this class, so callers
    can catch every engine failure with a single except clause.
    """

    pass


# ========== Schedule Exceptions ==========


class ScheduleException(CourtPairingException):
    """Base exception for schedule generation errors."""

    pass


class InsufficientPlayersException(ScheduleException):
    """Raised when fewer than four active players are available."""

    def __init__(self, active_count: int):
        self.active_count = active_count
        super().__init__(
            f"Need at least 4 active players to create a schedule (got {active_count})"
        )


class InvalidRosterException(ScheduleException):
    """Raised when the roster does not fit the requested format.

    Attributes:
        reason: ``"unspecified_gender"`` when an active player has no gender,
            ``"missing_gender"`` when one gender has no players,
            ``"unequal_gender_counts"`` when male and female counts differ.
        male_count: Active male players in the roster.
        female_count: Active female players in the roster.
        unspecified_count: Active players without a gender.
    """

    UNSPECIFIED_GENDER = "unspecified_gender"
    MISSING_GENDER = "missing_gender"
    UNEQUAL_GENDER_COUNTS = "unequal_gender_counts"

    def __init__(
        self,
        reason: str,
        male_count: int,
        female_count: int,
        unspecified_count: int = 0,
    ):
        self.reason = reason
        self.male_count = male_count
        self.female_count = female_count
        self.unspecified_count = unspecified_count
        if reason == self.UNSPECIFIED_GENDER:
            message = (
                f"Mixed format requires a gender for every active player "
                f"({unspecified_count} unspecified)"
            )
        elif reason == self.MISSING_GENDER:
            message = "Mixed format requires at least one male and one female player"
        else:
            message = (
                f"Mixed format requires equal number of male ({male_count}) "
                f"and female ({female_count}) players"
            )
        super().__init__(message)


class GenerationFailedException(ScheduleException):
    """Raised when a generated schedule breaks an internal invariant."""

    pass


# ========== Scoring Exceptions ==========


class ScoringException(CourtPairingException):
    """Base exception for score entry errors."""

    pass


class InvalidScoreException(ScoringException):
    """Raised when a score pair is negative or does not sum to the match total."""

    def __init__(self, score_a, score_b, points_per_match: int):
        self.score_a = score_a
        self.score_b = score_b
        self.points_per_match = points_per_match
        super().__init__(
            f"Scores must be non-negative and sum to {points_per_match} "
            f"(got {score_a} and {score_b})"
        )


class MatchNotFoundException(ScoringException):
    """Raised when a requested match cannot be found in the tournament."""

    pass


# ========== Tournament Exceptions ==========


class TournamentException(CourtPairingException):
    """Base exception for tournament-related errors."""

    pass


class TournamentStateException(TournamentException):
    """Raised when tournament is in an invalid state for the requested operation."""

    pass


# ========== Validation Exceptions ==========


class ValidationException(CourtPairingException):
    """Base exception for planning validation errors."""

    pass


class InsufficientTimeException(ValidationException):
    """Raised when the time budget does not fit a single match cycle."""

    pass


class TooFewPlayersException(ValidationException):
    """Raised when a plan is requested for fewer than four players."""

    pass


# ========== Configuration Exceptions ==========


class ConfigurationException(CourtPairingException):
    """Base exception for configuration errors."""

    pass


class InvalidConfigurationException(ConfigurationException):
    """Raised when configuration data is invalid."""

    pass
