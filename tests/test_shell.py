import json

from prompt_toolkit.completion import NestedCompleter

from bracketbuilder.controllers import Roster
from bracketbuilder.shell import ShellSession, execute_command
from bracketbuilder.shell.__main__ import create_completer, load_roster, main


def _session():
    return ShellSession(
        Roster([{"id": "u1", "username": "alice"}, {"id": "u2", "username": "bob"}])
    )


def _run(session, *lines):
    return [execute_command(session, line) for line in lines]


def test_add_and_connect_with_aliases():
    session = _session()
    out = _run(session, "add", "/add 300 0", "connect m1 m2")
    assert out == ["Added m1", "Added m2", "Connected m1 -> m2"]

    first = session.editor.get_match(session.aliases["m1"])
    second = session.editor.get_match(session.aliases["m2"])
    assert first.next_match_id == second.id
    assert second.round == 2


def test_assign_by_username_and_id():
    session = _session()
    _run(session, "add")
    assert execute_command(session, "assign m1 team1 alice") == (
        "Assigned alice to m1 team1"
    )
    assert execute_command(session, "assign m1 team2 u2") == "Assigned bob to m1 team2"
    assert execute_command(session, "assign m1 team2 u2") == "Assigned bob to m1 team2"
    assert session.editor.snapshot_count == 5


def test_cycle_is_reported_not_raised():
    session = _session()
    _run(session, "add", "add", "connect m1 m2")
    out = execute_command(session, "connect m2 m1")
    assert out.startswith("\033[91mError:")
    assert session.editor.get_match(session.aliases["m2"]).next_match_id is None


def test_unknown_inputs():
    session = _session()
    assert "Unknown command: frobnicate" in execute_command(session, "frobnicate")
    assert "Match not found: m9" in execute_command(session, "delete m9")
    _run(session, "add")
    assert "Unknown participant: zoe" in execute_command(session, "assign m1 team1 zoe")
    assert "Unknown slot" in execute_command(session, "assign m1 team3 alice")
    assert "Usage:" in execute_command(session, "connect m1")
    assert execute_command(session, "") == ""


def test_undo_redo_messages():
    session = _session()
    assert execute_command(session, "undo") == "Nothing to undo."
    _run(session, "add")
    assert execute_command(session, "undo") == "Undone"
    assert session.editor.matches == []
    assert execute_command(session, "redo") == "Redone"
    assert execute_command(session, "redo") == "Nothing to redo."


def test_guests():
    session = _session()
    assert execute_command(session, 'guest add "Zed Z"') == "Added guest guest_Zed Z"
    assert "(guest)" in execute_command(session, "participants")
    assert execute_command(session, "guest remove Zed Z") == "Removed guest guest_Zed Z"
    assert execute_command(session, "guest remove nobody") == "No such guest: nobody"


def test_submit_reports_field_errors_then_payload():
    session = _session()
    _run(session, "add")
    out = execute_command(session, "submit")
    assert "name: Tournament name is required" in out
    assert "location: Location is required" in out

    _run(
        session,
        "set name Spring Cup",
        "set location Gym",
        "set date 2099-04-01",
        "set time 10:00",
    )
    payload = json.loads(execute_command(session, "submit"))
    assert payload["name"] == "Spring Cup"
    assert payload["startDate"] == "2099-04-01T10:00:00"
    assert len(payload["matches"]) == 1


def test_show_and_exit():
    session = _session()
    assert execute_command(session, "show") == "No matches."
    _run(session, "add", "add", "connect m1 m2")
    shown = execute_command(session, "show")
    assert "m1" in shown and "-> m2" in shown
    assert execute_command(session, "quit") == "Bye."
    assert not session.running


def test_help():
    session = _session()
    assert "connect" in execute_command(session, "help")
    assert "Command: arrange" in execute_command(session, "help /arrange")


def test_completer_accepts_both_prefixes():
    completer = create_completer()
    assert isinstance(completer, NestedCompleter)
    assert "add" in completer.options
    assert "/add" in completer.options


def test_load_roster(tmp_path):
    members = tmp_path / "members.json"
    members.write_text(json.dumps([{"id": "u1", "username": "alice"}]))
    assert [p.username for p in load_roster(str(members)).members] == ["alice"]
    assert load_roster(None).members == []


def test_main_runs_script(tmp_path, capsys):
    script = tmp_path / "bracket.txt"
    script.write_text("# two matches\nadd\nadd\n\nconnect m1 m2\nshow\n")
    assert main(["--script", str(script)]) == 0
    out = capsys.readouterr().out
    assert "Connected m1 -> m2" in out
    assert "Round 2" in out


def test_main_missing_script(tmp_path):
    assert main(["--script", str(tmp_path / "missing.txt")]) == 1


def test_main_bad_members_file(tmp_path):
    members = tmp_path / "members.json"
    members.write_text('{"id": "u1"}')
    assert main(["--members", str(members), "--list-commands"]) == 0
    assert main(["--members", str(members), "--script", str(members)]) == 1


def test_main_loads_saved_bracket(tmp_path, capsys):
    saved = tmp_path / "bracket.json"
    saved.write_text(
        json.dumps(
            {
                "name": "Cup",
                "matches": [
                    {"id": "a", "nextMatchId": "b", "team1": {"userId": "u1"}},
                    {"id": "b"},
                ],
            }
        )
    )
    script = tmp_path / "cmds.txt"
    script.write_text("show\nundo\n")
    assert main(["--bracket", str(saved), "--script", str(script)]) == 0
    out = capsys.readouterr().out
    assert "-> m2" in out
    assert "Round 2" in out
    assert "Nothing to undo." in out


def test_main_bad_bracket_file(tmp_path):
    saved = tmp_path / "bracket.json"
    saved.write_text('"not a bracket"')
    assert main(["--bracket", str(saved), "--list-commands"]) == 0
    assert main(["--bracket", str(saved), "--script", str(saved)]) == 1


def test_session_aliases_loaded_matches():
    session = ShellSession(matches=[{"id": "a"}, {"id": "b"}])
    assert session.aliases == {"m1": "a", "m2": "b"}
    assert execute_command(session, "add") == "Added m3"
