"""A participant that can be dragged into a match slot."""

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

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from bracketbuilder.constants import GUEST_ID_PREFIX
from bracketbuilder.exceptions import InvalidParticipantException
from bracketbuilder.utils.validation import validate_username_strict


class ParticipantStatus(Enum):
    """Invitation status of a participant. Informational only."""

    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    DECLINED = "DECLINED"


@dataclass(frozen=True)
class Participant:
    """
    A channel member or ad-hoc guest placed into match slots.

    Participants are owned by the roster. The bracket only stores
    references to them, so instances are immutable.

    Attributes
    ----------
    id : str
        Unique identifier. Guests use the ``guest_<username>`` form.
    username : str
        Display name.
    profile_picture : str or None
        URL of the avatar, if any.
    is_guest : bool
        Whether the participant was added ad hoc instead of from the channel.
    status : ParticipantStatus
        Invitation status, not enforced by the editor.
    """

    id: str
    username: str
    profile_picture: Optional[str] = None
    is_guest: bool = False
    status: ParticipantStatus = ParticipantStatus.PENDING

    def __post_init__(self):
        if not self.id:
            raise InvalidParticipantException("Participant id is required")

    def __str__(self) -> str:
        return self.username

    def to_dict(self) -> Dict[str, Any]:
        """Serialize participant to the submission shape."""
        return {
            "id": self.id,
            "userId": self.id,
            "username": self.username,
            "profilePicture": self.profile_picture,
            "status": self.status.value,
            "isGuest": self.is_guest,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Participant":
        """Build a participant from a roster entry.

        Accepts both the roster shape (``profilePicture``) and the
        snake_case shape.
        """
        participant_id = data.get("id")
        if participant_id is None:
            participant_id = data.get("userId")
        if participant_id is None or str(participant_id).strip() == "":
            raise InvalidParticipantException(f"Roster entry has no id: {data!r}")
        # JSON rosters may carry numeric ids; ids travel as text in drags
        participant_id = str(participant_id)
        status = data.get("status", ParticipantStatus.PENDING.value)
        if not isinstance(status, ParticipantStatus):
            try:
                status = ParticipantStatus(str(status).upper())
            except ValueError:
                status = ParticipantStatus.PENDING
        return cls(
            id=participant_id,
            username=data.get("username", participant_id),
            profile_picture=data.get("profilePicture", data.get("profile_picture")),
            is_guest=bool(data.get("isGuest", data.get("is_guest", False))),
            status=status,
        )


def guest_id(username: str) -> str:
    """Return the participant id used for a guest with this username."""
    return f"{GUEST_ID_PREFIX}{username.strip()}"


def make_guest(username: Optional[str]) -> Participant:
    """Create a guest participant.

    Args:
        username: Guest display name, surrounding whitespace is stripped

    Returns:
        A guest Participant with a ``guest_<username>`` id

    Raises:
        InvalidParticipantException: If the username is blank
    """
    username = validate_username_strict(username)
    return Participant(id=guest_id(username), username=username, is_guest=True)
