"""Submit boundary: validate tournament details and build the payload.

The payload is a plain dictionary handed to whatever saves the
tournament. Nothing here talks to the network.
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
from typing import Any, Dict, Iterable, List, Optional

from bracketbuilder.exceptions import TournamentValidationException
from bracketbuilder.models import Match, Participant, TournamentDetails
from bracketbuilder.type_hints import FieldErrors
from bracketbuilder.utils import setup_logger
from bracketbuilder.utils.validation import (
    validate_date,
    validate_location,
    validate_time,
    validate_tournament_name,
)

logger = setup_logger(__name__)


def validate_tournament_details(
    details: TournamentDetails, today: Optional[datetime.date] = None
) -> FieldErrors:
    """
    Check the form fields that must be valid before submitting.

    Parameters
    ----------
    details : TournamentDetails
        Values entered by the organizer.
    today : datetime.date, optional
        Reference day for the "not in the past" rule.

    Returns
    -------
    dict of str to str
        Field name -> message. Empty when everything is valid.
    """
    checks = {
        "name": validate_tournament_name(details.name),
        "location": validate_location(details.location),
        "date": validate_date(details.date, today),
        "time": validate_time(details.time),
    }
    return {field: r.error_message for field, r in checks.items() if not r.is_valid}


def collect_participants(
    participants: Iterable[Participant], matches: List[Match]
) -> List[Participant]:
    """Given participants followed by any others placed in matches, once each."""
    seen = set()
    result = []
    placed = [p for match in matches for p in match.participants()]
    for participant in list(participants) + placed:
        if participant.id in seen:
            continue
        seen.add(participant.id)
        result.append(participant)
    return result


def build_payload(
    details: TournamentDetails,
    matches: List[Match],
    participants: Iterable[Participant] = (),
    today: Optional[datetime.date] = None,
) -> Dict[str, Any]:
    """Validate and serialize a tournament for the persistence layer.

    Args:
        details: Tournament metadata
        matches: Current bracket
        participants: Roster members and guests to include
        today: Reference day for date validation

    Returns:
        The tournament dictionary

    Raises:
        TournamentValidationException: If any field is invalid; the
            exception's ``errors`` maps field names to messages
    """
    errors = validate_tournament_details(details, today)
    if errors:
        logger.warning(f"Tournament details rejected: {sorted(errors)}")
        raise TournamentValidationException(errors)

    start = datetime.datetime.combine(
        validate_date(details.date, today).sanitized_value,
        validate_time(details.time).sanitized_value,
    )
    payload = {
        "name": details.name.strip(),
        "location": details.location.strip(),
        "description": details.description,
        "startDate": start.isoformat(),
        "format": details.format,
        "participants": [
            p.to_dict() for p in collect_participants(participants, matches)
        ],
        "matches": [m.to_dict() for m in matches],
    }
    logger.info(
        f"Built tournament payload '{payload['name']}' with {len(matches)} match(es)"
    )
    return payload
