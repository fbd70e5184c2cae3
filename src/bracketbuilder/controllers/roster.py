"""Participants available for placement: channel members and guests."""

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

from typing import Any, Dict, Iterable, List, Optional, Union

from bracketbuilder.exceptions import (
    DuplicateParticipantException,
    InvalidParticipantException,
)
from bracketbuilder.models import Participant, make_guest
from bracketbuilder.utils import setup_logger

logger = setup_logger(__name__)

RosterEntry = Union[Participant, Dict[str, Any]]


class GuestList:
    """Ad-hoc guests added by the organizer, in insertion order."""

    def __init__(self):
        self._guests: List[Participant] = []

    def __len__(self) -> int:
        return len(self._guests)

    def __iter__(self):
        return iter(list(self._guests))

    def add_guest(self, username: Optional[str]) -> Participant:
        """Add a guest by username.

        Args:
            username: Display name of the guest

        Returns:
            The new guest participant

        Raises:
            InvalidParticipantException: If the username is blank
            DuplicateParticipantException: If a guest with that name exists
        """
        guest = make_guest(username)
        if any(g.id == guest.id for g in self._guests):
            raise DuplicateParticipantException(
                f"Guest already added: {guest.username}"
            )
        self._guests.append(guest)
        logger.info(f"Added guest {guest.id}")
        return guest

    def remove_guest(self, guest_id: str) -> bool:
        """Remove a guest. Returns False if no such guest exists."""
        remaining = [g for g in self._guests if g.id != guest_id]
        if len(remaining) == len(self._guests):
            logger.warning(f"Cannot remove unknown guest {guest_id}")
            return False
        self._guests = remaining
        logger.info(f"Removed guest {guest_id}")
        return True


class Roster:
    """Channel members plus the guest list.

    Parameters
    ----------
    members : iterable of Participant or dict
        Channel members, as Participants or roster dictionaries
        (``{"id", "username", "profilePicture"}``).
    """

    def __init__(self, members: Iterable[RosterEntry] = ()):
        self.members: List[Participant] = []
        self.guests = GuestList()
        for entry in members:
            participant = (
                entry if isinstance(entry, Participant) else Participant.from_dict(entry)
            )
            if participant.is_guest:
                raise InvalidParticipantException(
                    f"Channel member cannot be a guest: {participant.id}"
                )
            if self.get(participant.id) is not None:
                logger.warning(f"Ignoring duplicate roster entry {participant.id}")
                continue
            self.members.append(participant)

    def add_guest(self, username: Optional[str]) -> Participant:
        return self.guests.add_guest(username)

    def remove_guest(self, guest_id: str) -> bool:
        return self.guests.remove_guest(guest_id)

    def all_participants(self) -> List[Participant]:
        """Members first, then guests."""
        return self.members + list(self.guests)

    def get(self, participant_id: str) -> Optional[Participant]:
        for participant in self.members + list(self.guests):
            if participant.id == participant_id:
                return participant
        return None
