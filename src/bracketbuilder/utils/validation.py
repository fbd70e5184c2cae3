"""Validation utilities for Bracket Builder.

This module provides reusable validation functions with consistent error handling.
"""

# Bracket Builder
# Copyright (C) 2025  Bracket Builder developers
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

import datetime
from typing import Any, Optional, Union

from dateutil import parser as date_parser

from bracketbuilder.constants import MIN_TOURNAMENT_NAME_LENGTH
from bracketbuilder.exceptions import InvalidParticipantException, ValidationException


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
        sanitized_value: Any = None,
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


# Two defaults that differ in every date field
_TIME_ONLY_DEFAULTS = (
    datetime.datetime(2000, 1, 1),
    datetime.datetime(2001, 2, 2),
)


def _invalid(message: str) -> ValidationResult:
    return ValidationResult(is_valid=False, error_message=message)


# ========== Generic Validation ==========


def validate_non_empty(
    value: Optional[str], field_name: str = "Field"
) -> ValidationResult:
    """Validate that a field is not empty.

    Args:
        value: Value to validate
        field_name: Name of the field for error messages

    Returns:
        ValidationResult with validation status
    """
    if not value or not str(value).strip():
        return _invalid(f"{field_name} is required")
    return ValidationResult(is_valid=True, sanitized_value=str(value).strip())


# ========== Tournament Fields ==========


def validate_tournament_name(name: Optional[str]) -> ValidationResult:
    """Validate a tournament name: required, at least three characters."""
    result = validate_non_empty(name, "Tournament name")
    if not result:
        return result
    if len(result.sanitized_value) < MIN_TOURNAMENT_NAME_LENGTH:
        return _invalid(
            f"Tournament name must be at least {MIN_TOURNAMENT_NAME_LENGTH} characters"
        )
    return result


def validate_location(location: Optional[str]) -> ValidationResult:
    """Validate a tournament location (required)."""
    return validate_non_empty(location, "Location")


def validate_date(
    value: Optional[Union[str, datetime.date]],
    today: Optional[datetime.date] = None,
) -> ValidationResult:
    """Validate a tournament date.

    Args:
        value: ISO date string or date object
        today: Reference day, defaults to the local current date

    Returns:
        ValidationResult whose sanitized value is a ``datetime.date``
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return _invalid("Date is required")

    if isinstance(value, datetime.datetime):
        parsed = value.date()
    elif isinstance(value, datetime.date):
        parsed = value
    else:
        try:
            parsed = date_parser.isoparse(str(value).strip()).date()
        except (ValueError, OverflowError):
            return _invalid(f"Invalid date: {value}")

    today = today or datetime.date.today()
    if parsed < today:
        return _invalid("Date cannot be in the past")
    return ValidationResult(is_valid=True, sanitized_value=parsed)


def validate_time(value: Optional[Union[str, datetime.time]]) -> ValidationResult:
    """Validate a tournament start time.

    Accepts ``HH:MM`` and anything else python-dateutil understands as a
    time of day (``2pm``, ``14:30:00``). Text with a date part, such as
    ``2025-01-01``, is rejected.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return _invalid("Time is required")

    if isinstance(value, datetime.time):
        return ValidationResult(is_valid=True, sanitized_value=value)

    text = str(value).strip()
    try:
        # Any date field in the text overrides at least one of the two defaults
        results = [
            (date_parser.parse(text, default=default), default)
            for default in _TIME_ONLY_DEFAULTS
        ]
    except (ValueError, OverflowError):
        return _invalid(f"Invalid time: {value}")
    if any(parsed.date() != default.date() for parsed, default in results):
        return _invalid(f"Invalid time: {value}")
    return ValidationResult(is_valid=True, sanitized_value=results[0][0].time())


def validate_date_strict(
    value: Union[str, datetime.date], today: Optional[datetime.date] = None
) -> datetime.date:
    """Validate a date and return it or raise exception.

    Raises:
        ValidationException: If the date is missing, malformed or in the past
    """
    result = validate_date(value, today)
    if not result.is_valid:
        raise ValidationException(result.error_message)
    return result.sanitized_value


# ========== Participant Fields ==========


def validate_username(username: Optional[str]) -> ValidationResult:
    """Validate a guest username (required)."""
    return validate_non_empty(username, "Username")


def validate_username_strict(username: Optional[str]) -> str:
    """Validate a username and return it stripped or raise exception.

    Raises:
        InvalidParticipantException: If the username is invalid
    """
    result = validate_username(username)
    if not result.is_valid:
        raise InvalidParticipantException(result.error_message)
    return result.sanitized_value
