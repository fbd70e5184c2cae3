"""Exceptions for use in Bracket Builder"""

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

from typing import Dict, Optional

# ========== Base Application Exception ==========


class BracketBuilderException(Exception):
    """Base exception for all Bracket Builder errors.

    All custom exceptions in the application should inherit from this class.
    This enables catching all application-specific errors with a single except clause.
    """

    pass


# ========== Match Exceptions ==========


class MatchException(BracketBuilderException):
    """Base exception for match and bracket graph errors."""

    pass


class MatchNotFoundException(MatchException):
    """Raised when a requested match cannot be found."""

    def __init__(self, match_id: str):
        super().__init__(f"Match not found: {match_id}")
        self.match_id = match_id


class InvalidEdgeException(MatchException):
    """Raised when a connection would make a match feed into itself."""

    def __init__(self, source_id: str, target_id: str):
        super().__init__(
            f"Connecting {source_id} -> {target_id} would create a cycle"
        )
        self.source_id = source_id
        self.target_id = target_id


class InvalidSlotException(MatchException):
    """Raised when a slot name other than team1/team2 is used."""

    pass


# ========== Participant Exceptions ==========


class ParticipantException(BracketBuilderException):
    """Base exception for participant-related errors."""

    pass


class InvalidParticipantException(ParticipantException):
    """Raised when participant data is invalid or incomplete."""

    pass


class DuplicateParticipantException(ParticipantException):
    """Raised when attempting to add a participant that already exists."""

    pass


# ========== Validation Exceptions ==========


class ValidationException(BracketBuilderException):
    """Base exception for validation errors."""

    pass


class TournamentValidationException(ValidationException):
    """Raised when tournament details fail submit-time validation.

    Attributes
    ----------
    errors : dict of str to str
        Field name mapped to a human-readable message.
    """

    def __init__(self, errors: Dict[str, str], message: Optional[str] = None):
        if message is None:
            fields = ", ".join(sorted(errors))
            message = f"Invalid tournament details: {fields}"
        super().__init__(message)
        self.errors = dict(errors)
