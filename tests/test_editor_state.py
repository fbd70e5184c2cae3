from bracketbuilder.controllers import BracketEditor
from bracketbuilder.gui.editor_state import EditorMode, EditorState
from bracketbuilder.models import Participant


def test_no_editor():
    state = EditorState.compute(None)
    assert state.mode == EditorMode.NO_EDITOR
    assert not state.can_submit
    assert state.status_message == "No bracket loaded."


def test_empty_editor():
    state = EditorState.compute(BracketEditor())
    assert state.mode == EditorMode.EDITING
    assert not state.can_undo
    assert not state.can_clear
    assert state.status_message.startswith("Add a match")


def test_counts_and_history():
    editor = BracketEditor()
    a = editor.add_match()
    b = editor.add_match()
    editor.connect(a.id, b.id)
    state = EditorState.compute(editor)
    assert state.match_count == 2
    assert state.connection_count == 1
    assert state.history_index == 3
    assert state.can_undo and not state.can_redo
    assert state.status_message == "2 match(es), 1 connection(s). Step 3 of 3."


def test_connection_modes():
    editor = BracketEditor()
    match = editor.add_match()
    editor.toggle_connection_mode()
    assert EditorState.compute(editor).mode == EditorMode.PICK_SOURCE

    editor.select_match(match.id)
    state = EditorState.compute(editor)
    assert state.mode == EditorMode.PICK_TARGET
    assert state.source_label == "Round 1 Match 1: TBD vs TBD"
    assert "Source: Round 1 Match 1" in state.status_message


def test_dragging_mode():
    editor = BracketEditor()
    editor.begin_participant_drag(Participant("u1", "alice"))
    assert EditorState.compute(editor).mode == EditorMode.DRAGGING_PARTICIPANT
