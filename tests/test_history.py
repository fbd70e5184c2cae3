from bracketbuilder.bracket.history import MatchHistory
from bracketbuilder.models import Match, Position


def _states(n):
    """n successive states, each adding one match."""
    return [[Match(id=f"m{j}") for j in range(i + 1)] for i in range(n)]


def test_starts_with_one_empty_snapshot():
    history = MatchHistory()
    assert history.snapshot_count == 1
    assert history.history_index == 0
    assert history.current == []
    assert not history.can_undo
    assert not history.can_redo


def test_commit_advances_cursor():
    history = MatchHistory()
    for state in _states(3):
        history.commit(state)
    assert history.snapshot_count == 4
    assert history.history_index == 3
    assert [m.id for m in history.current] == ["m0", "m1", "m2"]


def test_undo_redo_round_trip_for_every_prefix():
    history = MatchHistory()
    for state in _states(4):
        history.commit(state)
        before = history.current
        history.undo()
        assert history.redo() == before


def test_undo_past_beginning_is_noop():
    history = MatchHistory()
    history.commit([Match(id="a")])
    history.undo()
    for _ in range(5):
        assert history.undo() == []
    assert history.history_index == 0


def test_redo_past_end_is_noop():
    history = MatchHistory()
    history.commit([Match(id="a")])
    assert [m.id for m in history.redo()] == ["a"]
    assert history.history_index == 1


def test_commit_after_undo_discards_future():
    history = MatchHistory()
    for state in _states(5):
        history.commit(state)
    for _ in range(3):
        history.undo()
    history.commit([Match(id="new")])

    assert history.snapshot_count == 4
    assert not history.can_redo
    seen = []
    while history.can_undo:
        history.undo()
        seen.append([m.id for m in history.current])
    assert seen == [["m0", "m1"], ["m0"], []]


def test_snapshots_are_isolated_from_callers():
    history = MatchHistory()
    state = [Match(id="a")]
    history.commit(state)
    state[0].position = Position(99, 99)
    history.current[0].position = Position(42, 42)
    assert history.current[0].position == Position(0, 0)


def test_reset():
    history = MatchHistory()
    history.commit([Match(id="a")])
    history.reset([Match(id="b")])
    assert history.snapshot_count == 1
    assert [m.id for m in history.current] == ["b"]
