import pytest

from bracketbuilder.bracket.rounds import rounds_are_consistent
from bracketbuilder.controllers import BracketEditor, Roster
from bracketbuilder.exceptions import InvalidEdgeException, InvalidSlotException
from bracketbuilder.models import (
    Match,
    Participant,
    Position,
    SoloSlot,
    TeamSlot,
    TeamType,
)

ALICE = Participant(id="u1", username="alice")
BOB = Participant(id="u2", username="bob")
CAROL = Participant(id="u3", username="carol")


def _editor():
    return BracketEditor(Roster([ALICE, BOB, CAROL]))


def _rounds(editor):
    return {m.id: m.round for m in editor.matches}


def test_add_match_commits_one_step():
    editor = _editor()
    match = editor.add_match((10, 20))
    assert editor.snapshot_count == 2
    assert editor.history_index == 1
    stored = editor.get_match(match.id)
    assert stored.position == Position(10, 20)
    assert stored.round == 1
    assert stored.match_number == 1


def test_match_numbers_grow_in_round_one():
    editor = _editor()
    numbers = [editor.add_match().match_number for _ in range(3)]
    assert numbers == [1, 2, 3]


def test_converging_matches_get_next_round():
    editor = _editor()
    m3 = editor.add_match()
    m1 = editor.add_match()
    m2 = editor.add_match()

    assert editor.connect(m1.id, m3.id)
    assert editor.connect(m2.id, m3.id)

    rounds = _rounds(editor)
    assert rounds[m3.id] == 1 + max(rounds[m1.id], rounds[m2.id]) == 2
    assert rounds_are_consistent(editor.matches)


def test_chain_rounds_and_delete_middle():
    editor = _editor()
    m1, m2, m3 = (editor.add_match() for _ in range(3))
    editor.connect(m1.id, m2.id)
    editor.connect(m2.id, m3.id)
    assert [_rounds(editor)[m.id] for m in (m1, m2, m3)] == [1, 2, 3]

    editor.delete_match(m2.id)

    assert all(m.next_match_id != m2.id for m in editor.matches)
    assert editor.get_match(m1.id).next_match_id is None
    assert editor.get_match(m3.id).round == 1
    assert rounds_are_consistent(editor.matches)


def test_undo_three_then_commit_discards_future():
    editor = _editor()
    match = editor.add_match()
    start = editor.snapshot_count
    placements = [
        ("team1", ALICE),
        ("team2", BOB),
        ("team1", CAROL),
        ("team2", ALICE),
        ("team1", BOB),
    ]
    for slot, participant in placements:
        assert editor.assign_participant(match.id, slot, participant)
    assert editor.snapshot_count == start + 5

    for _ in range(3):
        editor.undo()
    editor.assign_participant(match.id, "team2", CAROL)

    assert not editor.can_redo
    assert editor.snapshot_count == start + 3
    assert editor.history_index == editor.snapshot_count - 1


def test_self_connection_is_deselect_without_history():
    editor = _editor()
    m1 = editor.add_match()
    before = (editor.matches, editor.snapshot_count)
    editor.connection_source = m1.id

    assert not editor.connect(m1.id, m1.id)

    assert editor.connection_source is None
    assert (editor.matches, editor.snapshot_count) == before


def test_cycle_is_rejected_and_nothing_committed():
    editor = _editor()
    m1, m2, m3 = (editor.add_match() for _ in range(3))
    editor.connect(m1.id, m2.id)
    editor.connect(m2.id, m3.id)
    before = (editor.matches, editor.snapshot_count)

    with pytest.raises(InvalidEdgeException):
        editor.connect(m3.id, m1.id)

    assert (editor.matches, editor.snapshot_count) == before


def test_reconnect_replaces_edge_and_updates_old_target():
    editor = _editor()
    a, b, c = (editor.add_match() for _ in range(3))
    editor.connect(a.id, b.id)
    assert _rounds(editor)[b.id] == 2

    editor.connect(a.id, c.id)

    assert editor.get_match(a.id).next_match_id == c.id
    assert _rounds(editor) == {a.id: 1, b.id: 1, c.id: 2}
    assert rounds_are_consistent(editor.matches)


def test_connect_is_one_undo_step():
    editor = _editor()
    a, b = editor.add_match(), editor.add_match()
    count = editor.snapshot_count
    editor.connect(a.id, b.id)
    assert editor.snapshot_count == count + 1

    editor.undo()
    assert editor.get_match(a.id).next_match_id is None
    assert editor.get_match(b.id).round == 1


def test_connecting_existing_edge_commits_nothing():
    editor = _editor()
    a, b = editor.add_match(), editor.add_match()
    editor.connect(a.id, b.id)
    count = editor.snapshot_count
    assert not editor.connect(a.id, b.id)
    assert editor.snapshot_count == count


def test_deep_propagation_through_long_chain():
    editor = _editor()
    chain = [editor.add_match() for _ in range(5)]
    # Link back to front so every new edge pushes rounds further down
    for upstream, downstream in reversed(list(zip(chain, chain[1:]))):
        editor.connect(upstream.id, downstream.id)
    assert [_rounds(editor)[m.id] for m in chain] == [1, 2, 3, 4, 5]
    assert rounds_are_consistent(editor.matches)


def test_disconnect_resets_target_round():
    editor = _editor()
    a, b = editor.add_match(), editor.add_match()
    editor.connect(a.id, b.id)
    assert editor.disconnect(a.id)
    assert editor.get_match(b.id).round == 1
    assert not editor.disconnect(a.id)


def test_round_change_renumbers_matches():
    editor = _editor()
    a, b, c = (editor.add_match() for _ in range(3))
    editor.connect(a.id, c.id)
    numbers = {m.id: (m.round, m.match_number) for m in editor.matches}
    assert numbers == {a.id: (1, 1), b.id: (1, 2), c.id: (2, 1)}


def test_assign_overwrites_solo_slot():
    editor = _editor()
    match = editor.add_match()
    editor.assign_participant(match.id, "team1", ALICE)
    editor.assign_participant(match.id, "team1", BOB)
    assert editor.get_match(match.id).team1 == SoloSlot(BOB)


def test_same_participant_in_several_matches():
    editor = _editor()
    a, b = editor.add_match(), editor.add_match()
    editor.assign_participant(a.id, "team1", ALICE)
    editor.assign_participant(b.id, "team2", ALICE)
    assert editor.get_match(a.id).participant_ids() == ["u1"]
    assert editor.get_match(b.id).participant_ids() == ["u1"]


def test_remove_participant():
    editor = _editor()
    match = editor.add_match()
    editor.assign_participant(match.id, "team2", ALICE)
    assert editor.remove_participant(match.id, "team2")
    assert editor.get_match(match.id).team2 is None
    assert editor.remove_participant(match.id, "team2")
    assert editor.get_match(match.id).team2 is None


def test_team_match_slots_collect_players():
    editor = _editor()
    match = editor.add_team_match()
    editor.assign_participant(match.id, "team1", ALICE)
    editor.assign_participant(match.id, "team1", BOB)
    assert editor.assign_participant(match.id, "team1", ALICE)
    assert editor.get_match(match.id).team1 == TeamSlot(players=(ALICE, BOB))

    editor.remove_participant(match.id, "team1", "u1")
    assert editor.get_match(match.id).team1 == TeamSlot(players=(BOB,))

    editor.remove_participant(match.id, "team1")
    assert editor.get_match(match.id).team1 == TeamSlot()


def test_unknown_slot_name():
    editor = _editor()
    match = editor.add_match()
    with pytest.raises(InvalidSlotException):
        editor.assign_participant(match.id, "team3", ALICE)


def test_unknown_match_ids_are_soft_noops():
    editor = _editor()
    editor.add_match()
    count = editor.snapshot_count
    assert not editor.assign_participant("missing", "team1", ALICE)
    assert not editor.remove_participant("missing", "team1")
    assert not editor.move_match("missing", (1, 1))
    assert not editor.delete_match("missing")
    assert not editor.connect("missing", "other")
    assert not editor.update_settings("missing", rounds=5)
    assert editor.snapshot_count == count


def test_move_match_keeps_rounds_and_is_undoable():
    editor = _editor()
    a, b = editor.add_match(), editor.add_match()
    editor.connect(a.id, b.id)
    editor.move_match(b.id, (900, 0))
    assert editor.get_match(b.id).round == 2
    editor.move_match(b.id, (0, 900))

    editor.undo()
    assert editor.get_match(b.id).position == Position(900, 0)


def test_clear_all_is_one_step():
    editor = _editor()
    for _ in range(3):
        editor.add_match()
    editor.clear_all()
    assert editor.matches == []
    editor.undo()
    assert len(editor.matches) == 3


def test_auto_arrange_is_one_step():
    editor = _editor()
    for i in range(4):
        editor.add_match((i * 13, i * 17))
    count = editor.snapshot_count
    arranged = editor.auto_arrange()
    assert editor.snapshot_count == count + 1
    assert arranged[3].position == Position(0, 170)
    editor.undo()
    assert editor.matches[3].position == Position(39, 51)


def test_update_settings_switches_team_type():
    editor = _editor()
    match = editor.add_match()
    editor.assign_participant(match.id, "team1", ALICE)
    assert editor.update_settings(match.id, rounds=5, team_type=TeamType.TEAM)
    updated = editor.get_match(match.id)
    assert updated.rounds == 5
    assert updated.team1 == TeamSlot()
    assert not editor.update_settings(match.id, rounds=5)


def test_drag_and_drop_gesture():
    editor = _editor()
    match = editor.add_match()
    editor.begin_participant_drag(BOB)
    assert editor.drop_participant(match.id, "team1")
    assert editor.dragged_participant is None
    assert editor.get_match(match.id).team1 == SoloSlot(BOB)
    # A second drop with nothing dragged does nothing
    assert not editor.drop_participant(match.id, "team2")


def test_click_to_connect_gesture():
    editor = _editor()
    a, b = editor.add_match(), editor.add_match()
    assert not editor.select_match(a.id)

    editor.toggle_connection_mode()
    assert not editor.select_match(a.id)
    assert editor.connection_source == a.id
    assert editor.select_match(b.id)
    assert editor.connection_source is None
    assert editor.get_match(a.id).next_match_id == b.id


def test_click_same_match_twice_deselects():
    editor = _editor()
    a = editor.add_match()
    editor.toggle_connection_mode()
    count = editor.snapshot_count
    editor.select_match(a.id)
    assert not editor.select_match(a.id)
    assert editor.connection_source is None
    assert editor.snapshot_count == count


def test_drag_state_is_not_in_history():
    editor = _editor()
    editor.add_match()
    count = editor.snapshot_count
    editor.begin_participant_drag(ALICE)
    editor.toggle_connection_mode()
    editor.end_participant_drag()
    assert editor.snapshot_count == count


def test_connections_view():
    editor = _editor()
    a, b = editor.add_match(), editor.add_match()
    editor.connect(a.id, b.id)
    assert [(c.source_id, c.target_id) for c in editor.connections] == [(a.id, b.id)]


def test_repeated_identical_assignments_are_separate_steps():
    editor = _editor()
    match = editor.add_match()
    start = editor.snapshot_count
    for _ in range(5):
        assert editor.assign_participant(match.id, "team1", ALICE)
    assert editor.snapshot_count == start + 5

    for _ in range(5):
        editor.undo()
    assert editor.get_match(match.id).team1 is None


def test_move_to_same_position_is_still_a_step():
    editor = _editor()
    match = editor.add_match((10, 10))
    count = editor.snapshot_count
    assert editor.move_match(match.id, (10, 10))
    assert editor.snapshot_count == count + 1
    assert editor.can_undo


def test_editor_starts_from_saved_bracket():
    source = _editor()
    a, b, final = source.add_match(), source.add_match(), source.add_match()
    source.connect(a.id, final.id)
    source.connect(b.id, final.id)
    source.assign_participant(a.id, "team1", ALICE)
    source.assign_participant(b.id, "team2", BOB)
    saved = [m.to_dict() for m in source.matches]

    editor = BracketEditor(Roster([ALICE, BOB, CAROL]), matches=saved)
    assert editor.snapshot_count == 1
    assert not editor.can_undo
    assert editor.matches == source.matches
    assert editor.get_match(a.id).team1 == SoloSlot(ALICE)

    editor.disconnect(b.id)
    editor.undo()
    assert editor.matches == source.matches
    assert not editor.can_undo


def test_editor_loads_match_objects_and_fixes_rounds():
    editor = BracketEditor(
        matches=[Match(id="x", next_match_id="y"), Match(id="y", round=5)]
    )
    assert editor.get_match("y").round == 2
    assert rounds_are_consistent(editor.matches)
