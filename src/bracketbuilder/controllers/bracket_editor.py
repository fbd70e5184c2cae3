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

"""
Bracket editing controller.

This module turns organizer gestures into match-list changes. The
BracketEditor handles:
- Adding, moving, deleting and clearing matches
- Placing participants into slots, by call or by drag and drop
- Connecting matches and keeping rounds consistent
- Undo and redo

Every gesture on a known match is committed to the history exactly once,
even when it leaves the bracket as it was. Unknown ids, a match clicked
twice and undo at the oldest snapshot commit nothing.
"""

import datetime
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from bracketbuilder.bracket import graph, store
from bracketbuilder.bracket.history import MatchHistory
from bracketbuilder.bracket.layout import LayoutConfig, auto_arrange
from bracketbuilder.bracket.rounds import propagate_rounds, renumber_matches
from bracketbuilder.constants import DEFAULT_BEST_OF, SLOT_NAMES
from bracketbuilder.controllers.roster import Roster
from bracketbuilder.controllers.submission import build_payload
from bracketbuilder.exceptions import InvalidEdgeException, InvalidSlotException
from bracketbuilder.models import (
    Match,
    Participant,
    Position,
    SoloSlot,
    TeamSlot,
    TeamType,
    TournamentDetails,
)
from bracketbuilder.type_hints import Slot, SlotName
from bracketbuilder.utils import setup_logger

logger = setup_logger(__name__)

PositionLike = Union[Position, Tuple[float, float]]
MatchEntry = Union[Match, Dict[str, Any]]


def _as_position(position: PositionLike) -> Position:
    if isinstance(position, Position):
        return position
    x, y = position
    return Position(float(x), float(y))


def _check_slot(slot: str) -> None:
    if slot not in SLOT_NAMES:
        raise InvalidSlotException(f"Unknown slot '{slot}', expected one of {SLOT_NAMES}")


class BracketEditor:
    """
    Controller for bracket editing.

    The controller keeps no Qt state. It exposes the current match list and
    the undo/redo position so any front end can render them.

    Parameters
    ----------
    roster : Roster, optional
        Channel members and guests available for placement.
    layout : LayoutConfig, optional
        Grid used by :meth:`auto_arrange`.
    matches : iterable of Match or dict, optional
        An existing bracket to edit, as Matches or serialized matches.
        Rounds and match numbers are recomputed and it becomes the first
        history snapshot.

    Attributes
    ----------
    dragged_participant : Participant or None
        Participant currently being dragged. Never part of the history.
    connection_mode : bool
        Whether match clicks select connection endpoints.
    connection_source : str or None
        Id of the match picked as the source of a new connection.
    """

    def __init__(
        self,
        roster: Optional[Roster] = None,
        layout: Optional[LayoutConfig] = None,
        matches: Optional[Iterable[MatchEntry]] = None,
    ):
        self.roster = roster or Roster()
        self.layout = layout or LayoutConfig()
        self.history = MatchHistory(self._load(matches or []))
        self.dragged_participant: Optional[Participant] = None
        self.connection_mode = False
        self.connection_source: Optional[str] = None

    def _load(self, entries: Iterable[MatchEntry]) -> List[Match]:
        loaded = [
            entry
            if isinstance(entry, Match)
            else Match.from_dict(entry, self.roster.get)
            for entry in entries
        ]
        if loaded:
            logger.info(f"Loaded bracket with {len(loaded)} match(es)")
        return store.load_matches(loaded)

    # ---- State -------------------------------------------------------

    @property
    def matches(self) -> List[Match]:
        return self.history.current

    @property
    def history_index(self) -> int:
        return self.history.history_index

    @property
    def snapshot_count(self) -> int:
        return self.history.snapshot_count

    @property
    def can_undo(self) -> bool:
        return self.history.can_undo

    @property
    def can_redo(self) -> bool:
        return self.history.can_redo

    @property
    def connections(self) -> List[graph.Connection]:
        return graph.get_connections(self.matches)

    def get_match(self, match_id: str) -> Optional[Match]:
        return store.find_match(self.matches, match_id)

    def _commit(self, new_state: List[Match], action: str) -> List[Match]:
        logger.info(f"{action} ({len(new_state)} match(es))")
        return self.history.commit(new_state)

    def _existing(self, match_id: str, action: str) -> Optional[Match]:
        match = self.get_match(match_id)
        if match is None:
            logger.warning(f"Cannot {action}: match {match_id} not found")
        return match

    # ---- Matches -----------------------------------------------------

    def add_match(
        self,
        position: Optional[PositionLike] = None,
        team_type: TeamType = TeamType.SOLO,
        rounds: int = DEFAULT_BEST_OF,
    ) -> Match:
        """Create a match in round 1 and commit it."""
        matches = self.matches
        match = store.create_match(
            matches,
            position=_as_position(position) if position is not None else None,
            team_type=team_type,
            rounds=rounds,
        )
        self._commit(store.add_match(matches, match), f"Added match {match.id}")
        return match

    def add_team_match(
        self, position: Optional[PositionLike] = None, rounds: int = DEFAULT_BEST_OF
    ) -> Match:
        """Create a team match with two empty teams."""
        return self.add_match(position, team_type=TeamType.TEAM, rounds=rounds)

    def move_match(self, match_id: str, position: PositionLike) -> bool:
        """Move a match on the canvas.

        Every drag is its own history step, even one that ends where it
        started. Rounds are not affected.
        """
        match = self._existing(match_id, "move")
        if match is None:
            return False
        new_position = _as_position(position)
        self._commit(
            store.update_match(self.matches, match_id, position=new_position),
            f"Moved match {match_id} to ({new_position.x}, {new_position.y})",
        )
        return True

    def delete_match(self, match_id: str) -> bool:
        """Delete a match and every connection into it."""
        if self._existing(match_id, "delete") is None:
            return False
        if self.connection_source == match_id:
            self.connection_source = None
        self._commit(
            store.delete_match(self.matches, match_id), f"Deleted match {match_id}"
        )
        return True

    def clear_all(self) -> None:
        """Remove every match as a single undoable step."""
        self.connection_source = None
        self._commit(store.clear_all(), "Cleared all matches")

    def auto_arrange(self) -> List[Match]:
        """Re-flow every match onto the grid as a single undoable step."""
        return self._commit(
            auto_arrange(self.matches, self.layout), "Auto-arranged matches"
        )

    def update_settings(
        self,
        match_id: str,
        rounds: Optional[int] = None,
        team_type: Optional[TeamType] = None,
    ) -> bool:
        """
        Change a match's best-of count or team type.

        Switching the team type empties both slots, since solo and team
        slots hold different things.
        """
        match = self._existing(match_id, "update settings")
        if match is None:
            return False

        changes: Dict[str, Any] = {}
        if rounds is not None and rounds != match.rounds:
            if rounds < 1:
                raise ValueError(f"Best-of count must be positive, got {rounds}")
            changes["rounds"] = rounds
        if team_type is not None and team_type != match.team_type:
            empty = TeamSlot() if team_type == TeamType.TEAM else None
            changes.update(team_type=team_type, team1=empty, team2=empty)
        if not changes:
            return False

        self._commit(
            store.update_match(self.matches, match_id, **changes),
            f"Updated settings of match {match_id}: {sorted(changes)}",
        )
        return True

    # ---- Slots -------------------------------------------------------

    def assign_participant(
        self, match_id: str, slot: SlotName, participant: Participant
    ) -> bool:
        """
        Place a participant into a slot.

        A solo slot is overwritten. A team slot gains the participant as a
        player. The same participant may sit in several matches at once.

        Returns
        -------
        bool
            True if a history step was committed. Re-placing the same
            participant still counts as a step.
        """
        _check_slot(slot)
        match = self._existing(match_id, "assign participant")
        if match is None:
            return False

        current: Slot = getattr(match, slot)
        if match.team_type == TeamType.TEAM:
            team = current if isinstance(current, TeamSlot) else TeamSlot()
            new_slot: Slot = team.with_player(participant)
        else:
            new_slot = SoloSlot(participant)

        self._commit(
            store.update_match(self.matches, match_id, **{slot: new_slot}),
            f"Assigned {participant.id} to {slot} of match {match_id}",
        )
        return True

    def remove_participant(
        self, match_id: str, slot: SlotName, participant_id: Optional[str] = None
    ) -> bool:
        """Empty a slot, or drop one player from a team slot."""
        _check_slot(slot)
        match = self._existing(match_id, "remove participant")
        if match is None:
            return False

        current: Slot = getattr(match, slot)
        if match.team_type == TeamType.TEAM:
            team = current if isinstance(current, TeamSlot) else TeamSlot()
            if participant_id is None:
                new_slot: Slot = TeamSlot(score=team.score)
            else:
                new_slot = team.without_player(participant_id)
        else:
            new_slot = None

        self._commit(
            store.update_match(self.matches, match_id, **{slot: new_slot}),
            f"Cleared {slot} of match {match_id}",
        )
        return True

    # ---- Connections -------------------------------------------------

    def connect(self, source_id: str, target_id: str) -> bool:
        """
        Make the winner of ``source_id`` advance to ``target_id``.

        Any earlier edge out of the source is replaced. Connecting a match
        to itself only cancels the current selection.

        Parameters
        ----------
        source_id : str
            Match whose winner advances.
        target_id : str
            Match the winner advances to.

        Returns
        -------
        bool
            True if an edge was written and committed.

        Raises
        ------
        InvalidEdgeException
            If the edge would close a cycle. Nothing is committed.
        """
        if source_id == target_id:
            self.connection_source = None
            return False

        source = self._existing(source_id, "connect")
        if source is None or self._existing(target_id, "connect") is None:
            return False
        if source.next_match_id == target_id:
            return False

        matches = self.matches
        if graph.would_create_cycle(source_id, target_id, matches):
            logger.warning(f"Rejected connection {source_id} -> {target_id}: cycle")
            raise InvalidEdgeException(source_id, target_id)

        previous_target = source.next_match_id
        result = store.update_match(matches, source_id, next_match_id=target_id)
        result = propagate_rounds(target_id, result)
        if previous_target is not None:
            result = propagate_rounds(previous_target, result)
        self._commit(
            renumber_matches(result), f"Connected {source_id} -> {target_id}"
        )
        return True

    def disconnect(self, source_id: str) -> bool:
        """Remove the outgoing edge of a match."""
        source = self._existing(source_id, "disconnect")
        if source is None or source.next_match_id is None:
            return False
        previous_target = source.next_match_id
        result = store.update_match(self.matches, source_id, next_match_id=None)
        result = propagate_rounds(previous_target, result)
        self._commit(
            renumber_matches(result), f"Disconnected {source_id} -> {previous_target}"
        )
        return True

    # ---- Gestures ----------------------------------------------------

    def begin_participant_drag(self, participant: Participant) -> None:
        self.dragged_participant = participant

    def end_participant_drag(self) -> None:
        self.dragged_participant = None

    def drop_participant(self, match_id: str, slot: SlotName) -> bool:
        """Drop the dragged participant onto a slot and end the drag."""
        participant = self.dragged_participant
        self.dragged_participant = None
        if participant is None:
            logger.debug("Drop without a dragged participant ignored")
            return False
        return self.assign_participant(match_id, slot, participant)

    def toggle_connection_mode(self) -> bool:
        """Switch connection mode on or off; any selection is dropped."""
        self.connection_mode = not self.connection_mode
        self.connection_source = None
        return self.connection_mode

    def select_match(self, match_id: str) -> bool:
        """
        Handle a click on a match while in connection mode.

        The first click picks the source, the second the target. Clicking
        the source again deselects it.

        Returns
        -------
        bool
            True if the click created a connection.
        """
        if not self.connection_mode:
            return False
        if self.connection_source is None:
            if self._existing(match_id, "select") is not None:
                self.connection_source = match_id
            return False
        source_id = self.connection_source
        self.connection_source = None
        return self.connect(source_id, match_id)

    # ---- History -----------------------------------------------------

    def undo(self) -> List[Match]:
        self.connection_source = None
        return self.history.undo()

    def redo(self) -> List[Match]:
        self.connection_source = None
        return self.history.redo()

    # ---- Submit ------------------------------------------------------

    def submit(
        self, details: TournamentDetails, today: Optional[datetime.date] = None
    ) -> Dict[str, Any]:
        """Validate the tournament details and serialize the bracket.

        Raises:
            TournamentValidationException: With a field -> message map
        """
        return build_payload(
            details, self.matches, self.roster.all_participants(), today
        )
