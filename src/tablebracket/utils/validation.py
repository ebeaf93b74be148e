"""Input validation helpers.

Most ``validate_*`` functions return a :class:`ValidationResult`;
``validate_player_name_strict`` and ``validate_table_count`` raise the
matching exception instead.
"""

# Table Bracket
# Copyright (C) 2025  Table Bracket developers
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

import re
from typing import Optional

from tablebracket.constants import BYE_NAME
from tablebracket.exceptions import (
    InvalidConfigurationException,
    InvalidPlayerDataException,
)


class ValidationResult:
    """Result of a validation check.

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


# ========== Phone Validation ==========


def validate_phone(phone: Optional[str], required: bool = False) -> ValidationResult:
    """Validate a phone number.

    Accepts various formats:
    - (123) 456-7890
    - 123-456-7890
    - 123.456.7890
    - 1234567890
    - +1 123 456 7890
    - 555-0101 (short local numbers, 7 digits)

    Args:
        phone: Phone number to validate
        required: Whether phone is required

    Returns:
        ValidationResult with validation status and sanitized number
    """
    if not phone or not phone.strip():
        if required:
            return ValidationResult(
                is_valid=False,
                error_message="Phone number is required",
            )
        return ValidationResult(is_valid=True, sanitized_value=None)

    phone = phone.strip()

    # Remove common formatting characters
    digits_only = re.sub(r"[\s\-\.\(\)\+]", "", phone)

    if not digits_only.isdigit():
        return ValidationResult(
            is_valid=False,
            error_message=f"Phone number contains invalid characters: {phone}",
        )

    if len(digits_only) < 7 or len(digits_only) > 15:
        return ValidationResult(
            is_valid=False,
            error_message=f"Phone number must be 7-15 digits: {phone}",
        )

    return ValidationResult(is_valid=True, sanitized_value=digits_only)


# ========== Player Name Validation ==========


def validate_player_name(name: Optional[str]) -> ValidationResult:
    """Validate a player name.

    Names must be non-empty and must not collide with the reserved bye name.

    Args:
        name: Name to validate

    Returns:
        ValidationResult with the stripped name
    """
    if not name or not name.strip():
        return ValidationResult(is_valid=False, error_message="Name is required")

    name = name.strip()

    if name.lower() == BYE_NAME.lower():
        return ValidationResult(
            is_valid=False,
            error_message=f"'{name}' is reserved for bye slots",
        )

    return ValidationResult(is_valid=True, sanitized_value=name)


def validate_player_name_strict(name: Optional[str]) -> str:
    """Validate a player name and return it stripped.

    Raises:
        InvalidPlayerDataException: If the name is empty or reserved
    """
    result = validate_player_name(name)
    if not result.is_valid:
        raise InvalidPlayerDataException(result.error_message)
    return result.sanitized_value or ""


# ========== Generic Validation ==========


def validate_positive_integer(
    value: Optional[int], field_name: str = "Value"
) -> ValidationResult:
    """Validate that a value is a positive integer.

    Args:
        value: Value to validate
        field_name: Name of the field for error messages

    Returns:
        ValidationResult with validation status
    """
    if value is None:
        return ValidationResult(
            is_valid=False,
            error_message=f"{field_name} is required",
        )

    if isinstance(value, bool) or not isinstance(value, int):
        return ValidationResult(
            is_valid=False,
            error_message=f"{field_name} must be a whole number",
        )

    if value <= 0:
        return ValidationResult(
            is_valid=False,
            error_message=f"{field_name} must be positive",
        )
    return ValidationResult(is_valid=True, sanitized_value=str(value))


def validate_table_count(count: Optional[int]) -> int:
    """Validate a table count and return it.

    Raises:
        InvalidConfigurationException: If the count is not a positive integer
    """
    result = validate_positive_integer(count, "Table count")
    if not result.is_valid:
        raise InvalidConfigurationException(result.error_message)
    return int(result.sanitized_value or "0")


# ========== Score Validation ==========


def validate_scores(
    score1: object, score2: object, race: Optional[int] = None
) -> ValidationResult:
    """Validate a pair of match scores.

    Scores must be non-negative whole numbers and must differ. When a race
    limit is given, the winner must reach it exactly and the loser must stay
    below it.

    Args:
        score1: Score of the first slot
        score2: Score of the second slot
        race: Optional race limit for the match

    Returns:
        ValidationResult with validation status
    """
    for score in (score1, score2):
        if isinstance(score, bool) or not isinstance(score, int):
            return ValidationResult(
                is_valid=False,
                error_message=f"Score must be a whole number: {score!r}",
            )
        if score < 0:
            return ValidationResult(
                is_valid=False,
                error_message=f"Score cannot be negative: {score}",
            )

    if score1 == score2:
        return ValidationResult(
            is_valid=False,
            error_message=f"Tied scores are not allowed: {score1}-{score2}",
        )

    if race:
        if score1 > race or score2 > race:
            return ValidationResult(
                is_valid=False,
                error_message=f"Scores cannot exceed the race to {race}: {score1}-{score2}",
            )
        if max(score1, score2) != race:
            return ValidationResult(
                is_valid=False,
                error_message=f"One player must reach {race}: {score1}-{score2}",
            )

    return ValidationResult(is_valid=True, sanitized_value=f"{score1}-{score2}")
