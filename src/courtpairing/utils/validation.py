"""Validation utilities for Court Pairing.

This module provides reusable validation functions with consistent error handling.
"""

from typing import Optional

from courtpairing.constants import MIN_PLAYERS
from courtpairing.exceptions import (
    InsufficientTimeException,
    InvalidConfigurationException,
    InvalidScoreException,
    TooFewPlayersException,
)


class ValidationResult:
    """Result of a validation operation.

    Attributes:
        is_valid: Whether the validation passed
        error_message: Human-readable error message if invalid
    """

    def __init__(self, is_valid: bool, error_message: Optional[str] = None):
        self.is_valid = is_valid
        self.error_message = error_message

    def __bool__(self) -> bool:
        """Allow using result in boolean context: if result: ..."""
        return self.is_valid

    def __repr__(self) -> str:
        if self.is_valid:
            return "ValidationResult(VALID)"
        return f"ValidationResult(INVALID, {self.error_message!r})"


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


# ========== Score Validation ==========


def validate_scores(score_a, score_b, points_per_match: int) -> ValidationResult:
    """Validate that both scores are non-negative and sum to the match total.

    Args:
        score_a: Points scored by team A
        score_b: Points scored by team B
        points_per_match: Fixed total points of every match

    Returns:
        ValidationResult with validation status

    Example:
        >>> bool(validate_scores(14, 10, 24))
        True
        >>> bool(validate_scores(14, 9, 24))
        False
    """
    if not _is_int(score_a) or not _is_int(score_b):
        return ValidationResult(
            is_valid=False,
            error_message=f"Scores must be whole numbers (got {score_a!r}, {score_b!r})",
        )
    if score_a < 0 or score_b < 0:
        return ValidationResult(
            is_valid=False,
            error_message=f"Scores cannot be negative (got {score_a}, {score_b})",
        )
    if score_a + score_b != points_per_match:
        return ValidationResult(
            is_valid=False,
            error_message=(
                f"Scores must sum to {points_per_match} "
                f"(got {score_a} + {score_b} = {score_a + score_b})"
            ),
        )
    return ValidationResult(is_valid=True)


def validate_scores_strict(score_a, score_b, points_per_match: int) -> None:
    """Validate scores and raise exception if invalid.

    Raises:
        InvalidScoreException: If the score pair is invalid
    """
    if not validate_scores(score_a, score_b, points_per_match):
        raise InvalidScoreException(score_a, score_b, points_per_match)


def auto_balance_score(entered_score: int, points_per_match: int) -> int:
    """Return the opposing score so the pair sums to ``points_per_match``.

    The result is clamped to ``0..points_per_match``.
    """
    calculated = points_per_match - entered_score
    return max(0, min(points_per_match, calculated))


# ========== Planning Validation ==========


def validate_time_settings(
    total_minutes: int,
    match_minutes_estimate: int,
    changeover_minutes: int,
    player_count: int,
) -> ValidationResult:
    """Check that a time budget can hold at least one round.

    Returns:
        ValidationResult with validation status
    """
    cycle = match_minutes_estimate + changeover_minutes
    if cycle <= 0:
        return ValidationResult(
            is_valid=False,
            error_message="Match duration plus changeover must be positive",
        )
    if total_minutes < cycle:
        return ValidationResult(
            is_valid=False,
            error_message=(
                f"Not enough time for even one round "
                f"({total_minutes} min available, {cycle} min needed)"
            ),
        )
    if player_count < MIN_PLAYERS:
        return ValidationResult(
            is_valid=False,
            error_message=f"Need at least {MIN_PLAYERS} players (got {player_count})",
        )
    return ValidationResult(is_valid=True)


def validate_time_settings_strict(
    total_minutes: int,
    match_minutes_estimate: int,
    changeover_minutes: int,
    player_count: int,
) -> None:
    """Validate a time budget and raise the matching exception if invalid.

    Raises:
        InvalidConfigurationException: If the match cycle is not positive
        InsufficientTimeException: If the budget is shorter than one cycle
        TooFewPlayersException: If fewer than four players are planned
    """
    result = validate_time_settings(
        total_minutes, match_minutes_estimate, changeover_minutes, player_count
    )
    if result:
        return
    cycle = match_minutes_estimate + changeover_minutes
    if cycle <= 0:
        raise InvalidConfigurationException(result.error_message)
    if total_minutes < cycle:
        raise InsufficientTimeException(result.error_message)
    raise TooFewPlayersException(result.error_message)


def validate_courts_count(courts_count: int) -> None:
    """Raise if the court count is not a positive integer."""
    if not _is_int(courts_count) or courts_count < 1:
        raise InvalidConfigurationException(
            f"Courts count must be a positive integer (got {courts_count!r})"
        )
