import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
QtWidgets = pytest.importorskip("PyQt6.QtWidgets")

from bracketbuilder.controllers import BracketEditor, Roster  # noqa: E402
from bracketbuilder.gui.widgets.drag_list import (  # noqa: E402
    MatchSlotLabel,
    ParticipantDragList,
    decode_participant_mime,
    encode_participant_mime,
)


@pytest.fixture(scope="module")
def qapp():
    app = QtWidgets.QApplication.instance() or QtWidgets.QApplication([])
    yield app


@pytest.fixture
def editor():
    roster = Roster([{"id": "u1", "username": "alice"}])
    roster.add_guest("zed")
    return BracketEditor(roster)


def test_mime_payload():
    assert decode_participant_mime(encode_participant_mime("u1")) == "u1"
    assert decode_participant_mime("plain text") is None
    assert decode_participant_mime(encode_participant_mime("")) is None
    assert decode_participant_mime(None) is None


def test_populate_lists_members_then_guests(qapp, editor):
    widget = ParticipantDragList(editor)
    widget.populate()
    assert widget.count() == 2
    assert widget.item(1).text() == "zed (guest)"
    assert widget.participant_at(0).id == "u1"
    assert widget.participant_at(5) is None


def test_select_participant_starts_placement(qapp, editor):
    widget = ParticipantDragList(editor)
    widget.populate()
    widget.select_participant(widget.participant_at(1))
    assert editor.dragged_participant.id == "guest_zed"


def test_place_participant_updates_slot(qapp, editor):
    match = editor.add_match()
    label = MatchSlotLabel(editor, match.id, "team1")
    assert label.text() == "TBD"

    changed = []
    label.slot_changed.connect(lambda match_id, slot: changed.append((match_id, slot)))

    assert label.place_participant("u1")
    assert label.text() == "alice"
    assert changed == [(match.id, "team1")]
    assert editor.dragged_participant is None
    assert editor.get_match(match.id).team1.participant.id == "u1"


def test_place_unknown_participant(qapp, editor):
    match = editor.add_match()
    label = MatchSlotLabel(editor, match.id, "team2")
    count = editor.snapshot_count
    assert not label.place_participant("nobody")
    assert editor.snapshot_count == count


def test_drop_with_numeric_roster_id(qapp):
    editor = BracketEditor(Roster([{"id": 5, "username": "five"}]))
    match = editor.add_match()
    label = MatchSlotLabel(editor, match.id, "team1")
    participant_id = decode_participant_mime(encode_participant_mime("5"))
    assert label.place_participant(participant_id)
    assert label.text() == "five"
