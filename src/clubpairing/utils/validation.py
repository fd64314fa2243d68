"""Validation utilities for Club Pairing.

This module provides reusable validation functions with consistent error handling.
"""

# Club Pairing
# Copyright (C) 2025  Club Pairing developers
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

from typing import Optional

from clubpairing.constants import VALID_SCORES
from clubpairing.exceptions import (
    InvalidResultException,
    NameValidationException,
    RatingValidationException,
)


class ValidationResult:
    """Result of a validation operation.

    Attributes:
        is_valid: Whether the validation passed
        error_message: Human-readable error message if invalid
        sanitized_value: Cleaned/normalized value if valid
    """

    def __init__(
        self,
        is_valid: bool,
        error_message: Optional[str] = None,
        sanitized_value: Optional[str] = None,
    ):
        self.is_valid = is_valid
        self.error_message = error_message
        self.sanitized_value = sanitized_value

    def __bool__(self) -> bool:
        """Allow using result in boolean context: if result: ..."""
        return self.is_valid

    def __repr__(self) -> str:
        if self.is_valid:
            return f"ValidationResult(VALID, {self.sanitized_value!r})"
        return f"ValidationResult(INVALID, {self.error_message!r})"


# ========== Name Validation ==========


def validate_name(name: Optional[str]) -> ValidationResult:
    """Validate a player's display name.

    Any non-blank text is accepted; club rosters hold nicknames and
    initials, so no character set is enforced.

    Args:
        name: Name to validate

    Returns:
        ValidationResult with the stripped name
    """
    if not name or not name.strip():
        return ValidationResult(
            is_valid=False,
            error_message="Name is required",
        )
    return ValidationResult(is_valid=True, sanitized_value=name.strip())


def validate_name_strict(name: Optional[str]) -> str:
    """Validate a name and return it stripped, or raise.

    Raises:
        NameValidationException: If the name is blank
    """
    result = validate_name(name)
    if not result.is_valid:
        raise NameValidationException(result.error_message)
    return result.sanitized_value or ""


# ========== Rating Validation ==========


def validate_rating(
    rating: Optional[int], min_rating: int = 0, max_rating: int = 3000
) -> ValidationResult:
    """Validate a chess rating.

    Args:
        rating: Rating value to validate
        min_rating: Minimum allowed rating
        max_rating: Maximum allowed rating

    Returns:
        ValidationResult with validation status
    """
    if rating is None:
        return ValidationResult(is_valid=True, sanitized_value=None)

    try:
        rating_int = int(rating)
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

    return ValidationResult(is_valid=True, sanitized_value=str(rating_int))


def validate_rating_strict(
    rating: int, min_rating: int = 0, max_rating: int = 3000
) -> int:
    """Validate rating and return integer or raise exception.

    Args:
        rating: Rating value to validate
        min_rating: Minimum allowed rating
        max_rating: Maximum allowed rating

    Returns:
        Validated rating as integer

    Raises:
        RatingValidationException: If rating is invalid
    """
    result = validate_rating(rating, min_rating, max_rating)
    if not result.is_valid:
        raise RatingValidationException(result.error_message)
    return int(result.sanitized_value or "0")


# ========== Score Validation ==========


def validate_score(score: float) -> ValidationResult:
    """Validate a game score (must be 0.0, 0.5, or 1.0).

    Args:
        score: Score to validate

    Returns:
        ValidationResult with validation status
    """
    try:
        float_score = float(score)
        if float_score not in VALID_SCORES:
            return ValidationResult(
                is_valid=False,
                error_message=f"Score must be 0.0, 0.5, or 1.0: {score}",
            )
        return ValidationResult(is_valid=True, sanitized_value=str(float_score))
    except (ValueError, TypeError):
        return ValidationResult(
            is_valid=False,
            error_message=f"Score must be a number: {score}",
        )


def validate_score_strict(score: float) -> float:
    """Validate a score and return it as float, or raise.

    Raises:
        InvalidResultException: If the score is not 0, 0.5 or 1
    """
    result = validate_score(score)
    if not result.is_valid:
        raise InvalidResultException(result.error_message)
    return float(result.sanitized_value or "0")
