"""Snapshot-based undo/redo for the match list."""

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

import copy
from typing import List, Optional, Tuple

from bracketbuilder.models import Match
from bracketbuilder.utils import setup_logger

logger = setup_logger(__name__)

Snapshot = Tuple[Match, ...]


class MatchHistory:
    """Linear undo/redo log of full match-list snapshots.

    The log starts with one empty snapshot. Every committed change appends
    a deep copy of the new list and drops whatever lay beyond the cursor,
    so there is no branching history.

    Attributes
    ----------
    history_index : int
        Position of the cursor in the snapshot log.
    """

    def __init__(self, initial: Optional[List[Match]] = None):
        self._snapshots: List[Snapshot] = [self._freeze(initial or [])]
        self.history_index = 0

    @staticmethod
    def _freeze(matches: List[Match]) -> Snapshot:
        return tuple(copy.deepcopy(list(matches)))

    @staticmethod
    def _thaw(snapshot: Snapshot) -> List[Match]:
        return copy.deepcopy(list(snapshot))

    @property
    def snapshot_count(self) -> int:
        """Total number of snapshots in the log."""
        return len(self._snapshots)

    @property
    def can_undo(self) -> bool:
        return self.history_index > 0

    @property
    def can_redo(self) -> bool:
        return self.history_index < len(self._snapshots) - 1

    @property
    def current(self) -> List[Match]:
        """A copy of the snapshot under the cursor."""
        return self._thaw(self._snapshots[self.history_index])

    def commit(self, new_state: List[Match]) -> List[Match]:
        """Record ``new_state`` as the newest snapshot.

        Args:
            new_state: Match list after one user gesture

        Returns:
            A copy of the committed state
        """
        discarded = len(self._snapshots) - 1 - self.history_index
        if discarded:
            logger.debug(f"Discarding {discarded} redo snapshot(s)")
        self._snapshots = self._snapshots[: self.history_index + 1]
        self._snapshots.append(self._freeze(new_state))
        self.history_index = len(self._snapshots) - 1
        return self.current

    def undo(self) -> List[Match]:
        """Step back one snapshot; a no-op at the oldest snapshot."""
        if not self.can_undo:
            logger.debug("Nothing to undo")
            return self.current
        self.history_index -= 1
        return self.current

    def redo(self) -> List[Match]:
        """Step forward one snapshot; a no-op at the newest snapshot."""
        if not self.can_redo:
            logger.debug("Nothing to redo")
            return self.current
        self.history_index += 1
        return self.current

    def reset(self, initial: Optional[List[Match]] = None) -> None:
        """Forget all history and start again from ``initial``."""
        self._snapshots = [self._freeze(initial or [])]
        self.history_index = 0
