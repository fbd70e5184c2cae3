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
Bracket editor state.

This module computes which toolbar actions are available for the current
bracket, so front ends do not repeat the checks.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING, Optional

from bracketbuilder.models import slot_label

if TYPE_CHECKING:
    from bracketbuilder.controllers import BracketEditor


class EditorMode(Enum):
    """
    What a click on the canvas currently means.
    """

    NO_EDITOR = auto()  # Nothing loaded
    EDITING = auto()  # Plain editing
    DRAGGING_PARTICIPANT = auto()  # A participant is being dragged
    PICK_SOURCE = auto()  # Connection mode, waiting for the source match
    PICK_TARGET = auto()  # Connection mode, source chosen


@dataclass
class EditorState:
    """
    Encapsulates the computed state of the bracket editor.

    Attributes
    ----------
    match_count : int
        Number of matches on the canvas
    connection_count : int
        Number of drawn connections
    history_index : int
        Cursor in the undo log
    snapshot_count : int
        Total snapshots in the undo log
    mode : EditorMode
        Current interaction mode
    can_undo : bool
        Whether the undo button should be enabled
    can_redo : bool
        Whether the redo button should be enabled
    can_arrange : bool
        Whether auto-arrange has anything to do
    can_clear : bool
        Whether clear-all has anything to do
    can_submit : bool
        Whether there is a bracket worth submitting
    source_label : str or None
        Label of the selected connection source, if any
    """

    match_count: int
    connection_count: int
    history_index: int
    snapshot_count: int
    mode: EditorMode
    can_undo: bool
    can_redo: bool
    can_arrange: bool
    can_clear: bool
    can_submit: bool
    source_label: Optional[str] = None

    @classmethod
    def compute(cls, editor: Optional["BracketEditor"]) -> "EditorState":
        """
        Compute the current editor state.

        Parameters
        ----------
        editor : BracketEditor or None
            The editor, or None if nothing is loaded

        Returns
        -------
        EditorState
            The computed state object with all derived properties
        """
        if editor is None:
            return cls(
                match_count=0,
                connection_count=0,
                history_index=0,
                snapshot_count=0,
                mode=EditorMode.NO_EDITOR,
                can_undo=False,
                can_redo=False,
                can_arrange=False,
                can_clear=False,
                can_submit=False,
            )

        matches = editor.matches
        match_count = len(matches)

        if editor.dragged_participant is not None:
            mode = EditorMode.DRAGGING_PARTICIPANT
        elif editor.connection_mode and editor.connection_source is not None:
            mode = EditorMode.PICK_TARGET
        elif editor.connection_mode:
            mode = EditorMode.PICK_SOURCE
        else:
            mode = EditorMode.EDITING

        source_label = None
        if editor.connection_source is not None:
            source = editor.get_match(editor.connection_source)
            if source is not None:
                source_label = (
                    f"Round {source.round} Match {source.match_number}: "
                    f"{slot_label(source.team1)} vs {slot_label(source.team2)}"
                )

        return cls(
            match_count=match_count,
            connection_count=len(editor.connections),
            history_index=editor.history_index,
            snapshot_count=editor.snapshot_count,
            mode=mode,
            can_undo=editor.can_undo,
            can_redo=editor.can_redo,
            can_arrange=match_count > 0,
            can_clear=match_count > 0,
            can_submit=match_count > 0,
            source_label=source_label,
        )

    @property
    def status_message(self) -> str:
        """
        Get a human-readable status message for the current state.

        Returns
        -------
        str
            A message describing what the user can do next
        """
        if self.mode == EditorMode.NO_EDITOR:
            return "No bracket loaded."
        elif self.mode == EditorMode.DRAGGING_PARTICIPANT:
            return "Drop the participant on a match slot."
        elif self.mode == EditorMode.PICK_SOURCE:
            return "Select the match whose winner advances."
        elif self.mode == EditorMode.PICK_TARGET:
            return (
                f"Source: {self.source_label}. Select the match the winner "
                f"advances to, or the same match again to cancel."
            )
        elif self.match_count == 0:
            return "Add a match to start building the bracket."
        return (
            f"{self.match_count} match(es), {self.connection_count} connection(s). "
            f"Step {self.history_index} of {self.snapshot_count - 1}."
        )
