"""Validation utilities for Spread Pairing.

This module provides reusable validation functions with consistent error handling.
"""

# Spread Pairing
# Copyright (C) 2025  Spread Pairing developers
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

from typing import Any, Optional

from spreadpairing.constants import MAX_RATING, MIN_RATING
from spreadpairing.exceptions import RatingValidationException, ScoreValidationException


class ValidationResult:
    """Result of a validation operation.

    Attributes:
        is_valid: Whether the validation passed
        error_message: Human-readable error message if invalid
        value: Parsed value if valid
    """

    def __init__(
        self,
        is_valid: bool,
        error_message: Optional[str] = None,
        value: Any = None,
    ):
        self.is_valid = is_valid
        self.error_message = error_message
        self.value = value

    def __bool__(self) -> bool:
        """Allow using result in boolean context: if result: ..."""
        return self.is_valid

    def __repr__(self) -> str:
        if self.is_valid:
            return f"ValidationResult(VALID, {self.value!r})"
        return f"ValidationResult(INVALID, {self.error_message!r})"


# ========== Rating Validation ==========


def validate_rating(
    rating: Any, min_rating: int = MIN_RATING, max_rating: int = MAX_RATING
) -> ValidationResult:
    """Validate a seed rating.

    Args:
        rating: Rating value to validate, as a number or text
        min_rating: Minimum allowed rating
        max_rating: Maximum allowed rating

    Returns:
        ValidationResult with the integer rating as its value

    Example:
        >>> result = validate_rating("1500")
        >>> if result:
        ...     print(f"Valid rating: {result.value}")
    """
    try:
        rating_int = int(str(rating).strip())
    except (ValueError, TypeError):
        return ValidationResult(
            is_valid=False,
            error_message=f"Rating must be a number: {rating}",
        )

    if rating_int < min_rating or rating_int > max_rating:
        return ValidationResult(
            is_valid=False,
            error_message=f"Rating must be between {min_rating} and {max_rating}: {rating_int}",
        )

    return ValidationResult(is_valid=True, value=rating_int)


def validate_rating_strict(rating: Any) -> int:
    """Validate rating and return it or raise exception.

    Raises:
        RatingValidationException: If rating is invalid
    """
    result = validate_rating(rating)
    if not result.is_valid:
        raise RatingValidationException(result.error_message)
    return result.value


# ========== Score Validation ==========


def validate_score(score: Any) -> ValidationResult:
    """Validate a game score (a non-negative integer)."""
    try:
        score_int = int(str(score).strip())
    except (ValueError, TypeError):
        return ValidationResult(
            is_valid=False,
            error_message=f"Score must be a whole number: {score}",
        )
    if score_int < 0:
        return ValidationResult(
            is_valid=False,
            error_message=f"Score cannot be negative: {score_int}",
        )
    return ValidationResult(is_valid=True, value=score_int)


def validate_score_strict(score: Any) -> int:
    """Validate score and return it or raise exception.

    Raises:
        ScoreValidationException: If score is invalid
    """
    result = validate_score(score)
    if not result.is_valid:
        raise ScoreValidationException(result.error_message)
    return result.value
