"""Contents of a match slot.

A slot is either empty (``None``, shown as TBD), a single participant
(:class:`SoloSlot`) or a team of participants (:class:`TeamSlot`).
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

from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, Optional, Tuple

from bracketbuilder.constants import EMPTY_SLOT_LABEL
from bracketbuilder.exceptions import InvalidParticipantException
from bracketbuilder.models.participant import Participant
from bracketbuilder.type_hints import Slot

ParticipantLookup = Callable[[str], Optional[Participant]]


def _resolve(
    participant_id: Any, lookup: Optional[ParticipantLookup], is_guest: bool = False
) -> Participant:
    """Find a serialized participant reference in the roster.

    Unknown ids become placeholder participants named after their id, so
    a stored bracket still loads when the roster has changed.
    """
    if participant_id is None or participant_id == "":
        raise InvalidParticipantException("Slot entry has no participant id")
    participant_id = str(participant_id)
    participant = lookup(participant_id) if lookup else None
    if participant is None:
        participant = Participant(
            id=participant_id, username=participant_id, is_guest=is_guest
        )
    return participant


@dataclass(frozen=True)
class SoloSlot:
    """A slot holding one participant."""

    participant: Participant

    def to_dict(self) -> Dict[str, Any]:
        return {"userId": self.participant.id}

    @classmethod
    def from_dict(
        cls, data: Dict[str, Any], lookup: Optional[ParticipantLookup] = None
    ) -> "SoloSlot":
        """Deserialize a ``{"userId": ...}`` slot.

        Args:
            data: Serialized slot
            lookup: Maps a participant id to a roster participant

        Returns:
            The slot
        """
        return cls(_resolve(data.get("userId", data.get("id")), lookup))


@dataclass(frozen=True)
class TeamSlot:
    """A slot holding a team of participants and its score.

    Attributes
    ----------
    players : tuple of Participant
        Team members in the order they were dropped in.
    score : int
        Team score, carried through untouched by the editor.
    """

    players: Tuple[Participant, ...] = field(default_factory=tuple)
    score: int = 0

    def has_player(self, participant_id: str) -> bool:
        return any(p.id == participant_id for p in self.players)

    def with_player(self, participant: Participant) -> "TeamSlot":
        """Return a copy with ``participant`` appended, once."""
        if self.has_player(participant.id):
            return self
        return replace(self, players=self.players + (participant,))

    def without_player(self, participant_id: str) -> "TeamSlot":
        """Return a copy without the given player."""
        return replace(
            self, players=tuple(p for p in self.players if p.id != participant_id)
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "team",
            "players": [{"id": p.id, "isGuest": p.is_guest} for p in self.players],
            "score": self.score,
        }

    @classmethod
    def from_dict(
        cls, data: Dict[str, Any], lookup: Optional[ParticipantLookup] = None
    ) -> "TeamSlot":
        """Deserialize a team slot; repeated players are kept once."""
        team = cls(score=int(data.get("score", 0) or 0))
        for entry in data.get("players", []):
            if isinstance(entry, dict):
                player = _resolve(
                    entry.get("id", entry.get("userId")),
                    lookup,
                    bool(entry.get("isGuest", False)),
                )
            else:
                player = _resolve(entry, lookup)
            team = team.with_player(player)
        return team


def slot_participants(slot: Slot) -> Tuple[Participant, ...]:
    """Return every participant referenced by a slot."""
    if isinstance(slot, SoloSlot):
        return (slot.participant,)
    if isinstance(slot, TeamSlot):
        return slot.players
    return ()


def slot_label(slot: Slot) -> str:
    """Human-readable label for a slot."""
    if isinstance(slot, SoloSlot):
        return slot.participant.username
    if isinstance(slot, TeamSlot):
        if not slot.players:
            return EMPTY_SLOT_LABEL
        return " & ".join(p.username for p in slot.players)
    return EMPTY_SLOT_LABEL


def slot_to_dict(slot: Slot) -> Optional[Dict[str, Any]]:
    """Serialize a slot; empty slots become ``None``."""
    if slot is None:
        return None
    return slot.to_dict()


def slot_from_dict(
    data: Optional[Dict[str, Any]], lookup: Optional[ParticipantLookup] = None
) -> Slot:
    """Deserialize a slot written by :func:`slot_to_dict`."""
    if data is None:
        return None
    if data.get("type") == "team" or "players" in data:
        return TeamSlot.from_dict(data, lookup)
    return SoloSlot.from_dict(data, lookup)
