"""Drag source for participants and drop targets for match slots."""

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

from typing import TYPE_CHECKING, Optional

from PyQt6 import QtCore, QtGui, QtWidgets
from PyQt6.QtCore import QMimeData, Qt, pyqtSignal
from PyQt6.QtGui import (
    QDrag,
    QDragEnterEvent,
    QDragLeaveEvent,
    QDragMoveEvent,
    QDropEvent,
    QMouseEvent,
)

from bracketbuilder.constants import PARTICIPANT_MIME_PREFIX
from bracketbuilder.models import Participant, slot_label
from bracketbuilder.type_hints import SlotName

if TYPE_CHECKING:
    from bracketbuilder.controllers import BracketEditor


def encode_participant_mime(participant_id: str) -> str:
    """Text payload carried by a participant drag."""
    return f"{PARTICIPANT_MIME_PREFIX}{participant_id}"


def decode_participant_mime(text: Optional[str]) -> Optional[str]:
    """Participant id from a drag payload, or None for foreign drags."""
    if not text or not text.startswith(PARTICIPANT_MIME_PREFIX):
        return None
    participant_id = text[len(PARTICIPANT_MIME_PREFIX) :]
    return participant_id or None


def _accepts(mime_data: QMimeData) -> bool:
    return mime_data.hasText() and decode_participant_mime(mime_data.text()) is not None


class ParticipantDragList(QtWidgets.QListWidget):
    """QListWidget subclass that implements drag-and-drop and click-to-place functionality for bracket participants."""

    editor: "BracketEditor"
    selected_participant: Optional[Participant]

    def __init__(
        self, editor: "BracketEditor", parent: Optional[QtWidgets.QWidget] = None
    ) -> None:
        super().__init__(parent)

        self.editor = editor
        self.selected_participant = None

        self.setDragEnabled(True)
        self.setDragDropMode(QtWidgets.QAbstractItemView.DragDropMode.DragOnly)
        self.setDefaultDropAction(Qt.DropAction.CopyAction)
        self.setSelectionMode(QtWidgets.QAbstractItemView.SelectionMode.SingleSelection)

    def populate(self) -> None:
        """Fill the list from the editor's roster, members then guests."""
        self.clear()
        for participant in self.editor.roster.all_participants():
            label = participant.username
            if participant.is_guest:
                label = f"{label} (guest)"
            item = QtWidgets.QListWidgetItem(label)
            item.setData(Qt.ItemDataRole.UserRole, participant)
            self.addItem(item)

    def participant_at(self, row: int) -> Optional[Participant]:
        item = self.item(row)
        if item is None:
            return None
        return item.data(Qt.ItemDataRole.UserRole)

    def startDrag(self, supported_actions: Qt.DropAction) -> None:
        """Start drag operation from the participant list."""
        current_item: Optional[QtWidgets.QListWidgetItem] = self.currentItem()
        if not current_item:
            return

        participant: Optional[Participant] = current_item.data(
            Qt.ItemDataRole.UserRole
        )
        if not participant:
            return

        self.editor.begin_participant_drag(participant)

        drag = QDrag(self)
        mime_data = QMimeData()
        mime_data.setText(encode_participant_mime(participant.id))
        drag.setMimeData(mime_data)

        pixmap = QtGui.QPixmap(200, 30)
        pixmap.fill(QtGui.QColor(255, 255, 255, 200))
        painter = QtGui.QPainter(pixmap)
        painter.drawText(
            pixmap.rect(), Qt.AlignmentFlag.AlignCenter, participant.username
        )
        painter.end()
        drag.setPixmap(pixmap)
        drag.setHotSpot(QtCore.QPoint(100, 15))

        drag.exec(supported_actions)
        # Dropped or cancelled, the drag is over either way
        self.editor.end_participant_drag()

    def mousePressEvent(self, event: QMouseEvent) -> None:
        """Handle mouse press for click-to-select functionality."""
        super().mousePressEvent(event)

        if event.button() == Qt.MouseButton.LeftButton:
            item: Optional[QtWidgets.QListWidgetItem] = self.itemAt(
                event.position().toPoint()
            )
            if not item:
                return
            self.select_participant(item.data(Qt.ItemDataRole.UserRole))

    def select_participant(self, participant: Optional[Participant]) -> None:
        """Pick a participant for click-to-place."""
        self.selected_participant = participant
        if participant is not None:
            self.editor.begin_participant_drag(participant)


class MatchSlotLabel(QtWidgets.QLabel):
    """One slot of a match box, accepting participant drops."""

    slot_changed = pyqtSignal(str, str)

    def __init__(
        self,
        editor: "BracketEditor",
        match_id: str,
        slot: SlotName,
        parent: Optional[QtWidgets.QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.editor = editor
        self.match_id = match_id
        self.slot = slot
        self.setAcceptDrops(True)
        self.refresh()

    def refresh(self) -> None:
        """Show the slot's current contents."""
        match = self.editor.get_match(self.match_id)
        self.setText(slot_label(getattr(match, self.slot)) if match else "")

    def place_participant(self, participant_id: str) -> bool:
        """Drop a participant from the roster into this slot."""
        participant = self.editor.roster.get(participant_id)
        if participant is None:
            self.editor.end_participant_drag()
            return False
        self.editor.begin_participant_drag(participant)
        changed = self.editor.drop_participant(self.match_id, self.slot)
        if changed:
            self.refresh()
            self.slot_changed.emit(self.match_id, self.slot)
        return changed

    def dragEnterEvent(self, event: QDragEnterEvent) -> None:
        """Handle drag enter events."""
        if _accepts(event.mimeData()):
            event.acceptProposedAction()
        else:
            event.ignore()

    def dragMoveEvent(self, event: QDragMoveEvent) -> None:
        """Handle drag move events."""
        if _accepts(event.mimeData()):
            event.acceptProposedAction()
        else:
            event.ignore()

    def dragLeaveEvent(self, event: QDragLeaveEvent) -> None:
        """Handle drag leave events."""
        QtWidgets.QApplication.restoreOverrideCursor()
        super().dragLeaveEvent(event)

    def dropEvent(self, event: QDropEvent) -> None:
        """Handle drop events."""
        QtWidgets.QApplication.restoreOverrideCursor()

        if not event.mimeData().hasText():
            event.ignore()
            return

        participant_id = decode_participant_mime(event.mimeData().text())
        if participant_id is None:
            event.ignore()
            return

        self.place_participant(participant_id)
        event.acceptProposedAction()

    def mousePressEvent(self, event: QMouseEvent) -> None:
        """Click-to-place: drop the selected participant here."""
        if (
            event.button() == Qt.MouseButton.LeftButton
            and self.editor.dragged_participant is not None
        ):
            if self.editor.drop_participant(self.match_id, self.slot):
                self.refresh()
                self.slot_changed.emit(self.match_id, self.slot)
            return
        super().mousePressEvent(event)
