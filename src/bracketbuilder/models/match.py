"""Match node of the bracket graph."""

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

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from bracketbuilder.constants import DEFAULT_BEST_OF, FIRST_ROUND
from bracketbuilder.models.participant import Participant
from bracketbuilder.models.slot import (
    ParticipantLookup,
    TeamSlot,
    slot_from_dict,
    slot_participants,
    slot_to_dict,
)
from bracketbuilder.type_hints import Slot


class TeamType(Enum):
    """Whether a match is played by single participants or by teams."""

    SOLO = "solo"
    TEAM = "team"


@dataclass(frozen=True)
class Position:
    """Canvas coordinates of the top-left corner of a match box."""

    x: float = 0.0
    y: float = 0.0

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "Position":
        if not data:
            return cls()
        return cls(x=float(data.get("x", 0.0)), y=float(data.get("y", 0.0)))


def new_match_id() -> str:
    """Allocate a fresh match id."""
    return str(uuid.uuid4())


@dataclass
class Match:
    """
    A node of the bracket: two slots and at most one outgoing edge.

    Attributes
    ----------
    id : str
        Stable identifier assigned at creation.
    position : Position
        Canvas coordinates, changed by dragging or auto-arrange.
    team1, team2 : SoloSlot, TeamSlot or None
        The two slots. ``None`` is an unfilled (TBD) slot.
    round : int
        Derived from the connection graph, never set by hand.
    match_number : int
        Display ordinal, unique within a round.
    next_match_id : str or None
        The match the winner advances to.
    rounds : int
        Best-of count. Opaque to the editor.
    team_type : TeamType
        Solo or team match. Opaque to the editor beyond slot handling.
    """

    id: str = field(default_factory=new_match_id)
    position: Position = field(default_factory=Position)
    team1: Slot = None
    team2: Slot = None
    round: int = FIRST_ROUND
    match_number: int = 1
    next_match_id: Optional[str] = None
    rounds: int = DEFAULT_BEST_OF
    team_type: TeamType = TeamType.SOLO

    @classmethod
    def team_match(cls, **kwargs) -> "Match":
        """Create a team match with two empty teams."""
        kwargs.setdefault("team1", TeamSlot())
        kwargs.setdefault("team2", TeamSlot())
        return cls(team_type=TeamType.TEAM, **kwargs)

    @property
    def is_terminal(self) -> bool:
        return self.next_match_id is None

    def participant_ids(self) -> List[str]:
        """Ids of every participant placed in this match."""
        return [p.id for p in self.participants()]

    def participants(self) -> List[Participant]:
        return list(slot_participants(self.team1) + slot_participants(self.team2))

    def to_dict(self) -> Dict[str, Any]:
        """Serialize match to the submission shape."""
        return {
            "id": self.id,
            "round": self.round,
            "matchNumber": self.match_number,
            "team1": slot_to_dict(self.team1),
            "team2": slot_to_dict(self.team2),
            "position": self.position.to_dict(),
            "nextMatchId": self.next_match_id,
            "rounds": self.rounds,
            "teamType": self.team_type.value,
            "score1": 0,
            "score2": 0,
            "winner": None,
        }

    @classmethod
    def from_dict(
        cls, data: Dict[str, Any], lookup: Optional[ParticipantLookup] = None
    ) -> "Match":
        """
        Deserialize a match written by :meth:`to_dict`.

        Both the camelCase submission shape and snake_case keys are
        accepted. Scores and winner are not part of the editor model and
        are dropped.

        Parameters
        ----------
        data : dict
            Serialized match.
        lookup : callable, optional
            Maps a participant id to the roster participant. Ids it does not
            know become placeholder participants.

        Returns
        -------
        Match
            The match. ``round`` and ``match_number`` are taken as stored;
            the editor recomputes them when it loads a bracket.
        """
        team_type = TeamType(data.get("teamType", data.get("team_type", "solo")))
        team1 = slot_from_dict(data.get("team1"), lookup)
        team2 = slot_from_dict(data.get("team2"), lookup)
        if team_type == TeamType.TEAM:
            team1 = team1 if isinstance(team1, TeamSlot) else TeamSlot()
            team2 = team2 if isinstance(team2, TeamSlot) else TeamSlot()

        next_match_id = data.get("nextMatchId", data.get("next_match_id"))
        return cls(
            id=str(data["id"]) if data.get("id") is not None else new_match_id(),
            position=Position.from_dict(data.get("position")),
            team1=team1,
            team2=team2,
            round=int(data.get("round", FIRST_ROUND)),
            match_number=int(data.get("matchNumber", data.get("match_number", 1))),
            next_match_id=str(next_match_id) if next_match_id is not None else None,
            rounds=int(data.get("rounds", DEFAULT_BEST_OF)),
            team_type=team_type,
        )
