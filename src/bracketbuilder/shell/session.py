"""Command parsing and execution for the bracket shell.

Kept apart from the prompt loop so commands can be scripted and tested.
"""

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

import json
import shlex
from typing import Any, Callable, Dict, Iterable, List, Optional

from bracketbuilder.controllers import BracketEditor, Roster
from bracketbuilder.exceptions import (
    BracketBuilderException,
    MatchNotFoundException,
    TournamentValidationException,
)
from bracketbuilder.models import (
    Match,
    Participant,
    TournamentDetails,
    guest_id,
    slot_label,
)
from bracketbuilder.utils import setup_logger

logger = setup_logger(__name__)


# ANSI color codes for terminal output
class Colors:
    HEADER = "\033[95m"
    OKBLUE = "\033[94m"
    OKCYAN = "\033[96m"
    OKGREEN = "\033[92m"
    WARNING = "\033[93m"
    FAIL = "\033[91m"
    ENDC = "\033[0m"
    BOLD = "\033[1m"


# Command definitions with their options
COMMANDS = {
    "add": {
        "description": "Add a solo match",
        "options": {"<x> <y>": "Canvas position (default: 0 0)"},
    },
    "team": {
        "description": "Add a team match",
        "options": {"<x> <y>": "Canvas position (default: 0 0)"},
    },
    "assign": {
        "description": "Place a participant into a slot",
        "options": {
            "<match>": "Match alias (m1, m2, ...) or id",
            "team1": "First slot",
            "team2": "Second slot",
            "<participant>": "Participant id or username",
        },
    },
    "unassign": {
        "description": "Empty a slot, or remove one team player",
        "options": {
            "<match>": "Match alias or id",
            "team1": "First slot",
            "team2": "Second slot",
            "<participant>": "Team player to remove (optional)",
        },
    },
    "connect": {
        "description": "Winner of the first match advances to the second",
        "options": {"<source>": "Source match", "<target>": "Target match"},
    },
    "disconnect": {
        "description": "Remove the outgoing connection of a match",
        "options": {"<source>": "Source match"},
    },
    "move": {
        "description": "Move a match on the canvas",
        "options": {"<match>": "Match alias or id", "<x> <y>": "New position"},
    },
    "delete": {
        "description": "Delete a match and its connections",
        "options": {"<match>": "Match alias or id"},
    },
    "clear": {"description": "Remove every match", "options": {}},
    "arrange": {"description": "Auto-arrange matches on a grid", "options": {}},
    "undo": {"description": "Undo the last change", "options": {}},
    "redo": {"description": "Redo the last undone change", "options": {}},
    "show": {"description": "Show the bracket", "options": {}},
    "guest": {
        "description": "Add or remove a guest participant",
        "options": {"add": "Add a guest by username", "remove": "Remove a guest"},
    },
    "participants": {"description": "List available participants", "options": {}},
    "set": {
        "description": "Set a tournament detail",
        "options": {
            "name": "Tournament name",
            "date": "Date (YYYY-MM-DD)",
            "time": "Time (HH:MM)",
            "location": "Location",
            "description": "Description",
        },
    },
    "submit": {"description": "Validate and print the tournament payload", "options": {}},
    "help": {
        "description": "Show help for specific command",
        "options": {"<command>": "Command name to get help for"},
    },
    "exit": {"description": "Exit the shell", "options": {}},
}


class ShellError(BracketBuilderException):
    """Raised for malformed shell commands."""

    pass


class ShellSession:
    """State of one shell session: the editor, match aliases and details.

    Matches get short aliases (``m1``, ``m2``, ...) in creation order so
    they can be typed instead of their ids.
    """

    def __init__(
        self,
        roster: Optional[Roster] = None,
        matches: Optional[Iterable[Any]] = None,
    ):
        self.editor = BracketEditor(roster, matches=matches)
        self.details = TournamentDetails()
        self.aliases: Dict[str, str] = {}
        self.running = True
        self._next_alias = 1
        for match in self.editor.matches:
            self.remember(match)

    def remember(self, match: Match) -> str:
        alias = f"m{self._next_alias}"
        self._next_alias += 1
        self.aliases[alias] = match.id
        return alias

    def alias_of(self, match_id: str) -> str:
        for alias, known_id in self.aliases.items():
            if known_id == match_id:
                return alias
        return match_id

    def resolve_match(self, token: str) -> str:
        match_id = self.aliases.get(token, token)
        if self.editor.get_match(match_id) is None:
            raise MatchNotFoundException(token)
        return match_id

    def resolve_participant(self, token: str) -> Participant:
        roster = self.editor.roster
        participant = roster.get(token)
        if participant is None:
            for candidate in roster.all_participants():
                if candidate.username == token:
                    return candidate
            raise ShellError(f"Unknown participant: {token}")
        return participant


def _position(args: List[str]) -> Optional[tuple]:
    if not args:
        return None
    if len(args) != 2:
        raise ShellError("Expected a position: <x> <y>")
    try:
        return float(args[0]), float(args[1])
    except ValueError:
        raise ShellError(f"Invalid position: {' '.join(args)}")


def _require(args: List[str], count: int, usage: str) -> None:
    if len(args) < count:
        raise ShellError(f"Usage: {usage}")


def format_bracket(session: ShellSession) -> str:
    """Render the bracket as text, grouped by round."""
    matches = session.editor.matches
    if not matches:
        return "No matches."
    lines = []
    for round_number in sorted({m.round for m in matches}):
        lines.append(f"{Colors.BOLD}Round {round_number}{Colors.ENDC}")
        for match in [m for m in matches if m.round == round_number]:
            arrow = ""
            if match.next_match_id:
                arrow = f" -> {session.alias_of(match.next_match_id)}"
            lines.append(
                f"  {session.alias_of(match.id):4} #{match.match_number} "
                f"{slot_label(match.team1)} vs {slot_label(match.team2)} "
                f"@ ({match.position.x:g}, {match.position.y:g}){arrow}"
            )
    editor = session.editor
    lines.append(f"History: {editor.history_index}/{editor.snapshot_count - 1}")
    return "\n".join(lines)


def format_help(command: Optional[str] = None) -> str:
    """Help text for one command or the whole table."""
    if command is None:
        lines = [f"{Colors.BOLD}Available Commands:{Colors.ENDC}"]
        for cmd, info in COMMANDS.items():
            lines.append(f"  {Colors.OKGREEN}{cmd:15}{Colors.ENDC} - {info['description']}")
        return "\n".join(lines)

    if command not in COMMANDS:
        return f"{Colors.FAIL}Unknown command: {command}{Colors.ENDC}"

    cmd_info = COMMANDS[command]
    lines = [
        f"{Colors.BOLD}{Colors.OKBLUE}Command: {command}{Colors.ENDC}",
        f"{Colors.BOLD}Description:{Colors.ENDC} {cmd_info['description']}",
    ]
    if cmd_info["options"]:
        lines.append(f"{Colors.BOLD}Options:{Colors.ENDC}")
        for option, description in cmd_info["options"].items():
            lines.append(f"  {Colors.OKCYAN}{option:20}{Colors.ENDC} {description}")
    return "\n".join(lines)


def _cmd_add(session: ShellSession, args: List[str]) -> str:
    match = session.editor.add_match(_position(args))
    return f"Added {session.remember(match)}"


def _cmd_team(session: ShellSession, args: List[str]) -> str:
    match = session.editor.add_team_match(_position(args))
    return f"Added team match {session.remember(match)}"


def _cmd_assign(session: ShellSession, args: List[str]) -> str:
    _require(args, 3, "assign <match> <team1|team2> <participant>")
    match_id = session.resolve_match(args[0])
    participant = session.resolve_participant(" ".join(args[2:]))
    if session.editor.assign_participant(match_id, args[1], participant):
        return f"Assigned {participant.username} to {args[0]} {args[1]}"
    return "Nothing changed."


def _cmd_unassign(session: ShellSession, args: List[str]) -> str:
    _require(args, 2, "unassign <match> <team1|team2> [participant]")
    match_id = session.resolve_match(args[0])
    participant_id = None
    if len(args) > 2:
        participant_id = session.resolve_participant(" ".join(args[2:])).id
    if session.editor.remove_participant(match_id, args[1], participant_id):
        return f"Cleared {args[0]} {args[1]}"
    return "Nothing changed."


def _cmd_connect(session: ShellSession, args: List[str]) -> str:
    _require(args, 2, "connect <source> <target>")
    source = session.resolve_match(args[0])
    target = session.resolve_match(args[1])
    if session.editor.connect(source, target):
        return f"Connected {args[0]} -> {args[1]}"
    return "Nothing changed."


def _cmd_disconnect(session: ShellSession, args: List[str]) -> str:
    _require(args, 1, "disconnect <source>")
    if session.editor.disconnect(session.resolve_match(args[0])):
        return f"Disconnected {args[0]}"
    return "Nothing changed."


def _cmd_move(session: ShellSession, args: List[str]) -> str:
    _require(args, 3, "move <match> <x> <y>")
    match_id = session.resolve_match(args[0])
    if session.editor.move_match(match_id, _position(args[1:3])):
        return f"Moved {args[0]}"
    return "Nothing changed."


def _cmd_delete(session: ShellSession, args: List[str]) -> str:
    _require(args, 1, "delete <match>")
    session.editor.delete_match(session.resolve_match(args[0]))
    return f"Deleted {args[0]}"


def _cmd_clear(session: ShellSession, args: List[str]) -> str:
    session.editor.clear_all()
    return "Cleared all matches"


def _cmd_arrange(session: ShellSession, args: List[str]) -> str:
    session.editor.auto_arrange()
    return "Arranged matches"


def _cmd_undo(session: ShellSession, args: List[str]) -> str:
    if not session.editor.can_undo:
        return "Nothing to undo."
    session.editor.undo()
    return "Undone"


def _cmd_redo(session: ShellSession, args: List[str]) -> str:
    if not session.editor.can_redo:
        return "Nothing to redo."
    session.editor.redo()
    return "Redone"


def _cmd_show(session: ShellSession, args: List[str]) -> str:
    return format_bracket(session)


def _cmd_guest(session: ShellSession, args: List[str]) -> str:
    _require(args, 2, "guest <add|remove> <username>")
    action, username = args[0], " ".join(args[1:])
    roster = session.editor.roster
    if action == "add":
        guest = roster.add_guest(username)
        return f"Added guest {guest.id}"
    if action == "remove":
        target = username if roster.get(username) else guest_id(username)
        if roster.remove_guest(target):
            return f"Removed guest {target}"
        return f"No such guest: {username}"
    raise ShellError(f"Unknown guest action: {action}")


def _cmd_participants(session: ShellSession, args: List[str]) -> str:
    participants = session.editor.roster.all_participants()
    if not participants:
        return "No participants."
    return "\n".join(
        f"  {p.id:20} {p.username}{' (guest)' if p.is_guest else ''}"
        for p in participants
    )


def _cmd_set(session: ShellSession, args: List[str]) -> str:
    _require(args, 2, "set <name|date|time|location|description> <value>")
    field, value = args[0], " ".join(args[1:])
    if field not in ("name", "date", "time", "location", "description"):
        raise ShellError(f"Unknown field: {field}")
    setattr(session.details, field, value)
    return f"Set {field}"


def _cmd_submit(session: ShellSession, args: List[str]) -> str:
    try:
        payload = session.editor.submit(session.details)
    except TournamentValidationException as e:
        return "\n".join(
            f"{Colors.FAIL}{field}: {message}{Colors.ENDC}"
            for field, message in sorted(e.errors.items())
        )
    return json.dumps(payload, indent=2)


def _cmd_help(session: ShellSession, args: List[str]) -> str:
    return format_help(args[0].lstrip("/") if args else None)


def _cmd_exit(session: ShellSession, args: List[str]) -> str:
    session.running = False
    return "Bye."


HANDLERS: Dict[str, Callable[[ShellSession, List[str]], str]] = {
    "add": _cmd_add,
    "team": _cmd_team,
    "assign": _cmd_assign,
    "unassign": _cmd_unassign,
    "connect": _cmd_connect,
    "disconnect": _cmd_disconnect,
    "move": _cmd_move,
    "delete": _cmd_delete,
    "clear": _cmd_clear,
    "arrange": _cmd_arrange,
    "undo": _cmd_undo,
    "redo": _cmd_redo,
    "show": _cmd_show,
    "guest": _cmd_guest,
    "participants": _cmd_participants,
    "set": _cmd_set,
    "submit": _cmd_submit,
    "help": _cmd_help,
    "exit": _cmd_exit,
    "quit": _cmd_exit,
}


def execute_command(session: ShellSession, line: str) -> str:
    """Run one command line and return its output text.

    Errors are reported in the output; they never end the session.
    """
    try:
        tokens = shlex.split(line)
    except ValueError as e:
        return f"{Colors.FAIL}Error: {e}{Colors.ENDC}"
    if not tokens:
        return ""

    command = tokens[0].lstrip("/").lower()
    handler = HANDLERS.get(command)
    if handler is None:
        return f"{Colors.FAIL}Unknown command: {command}{Colors.ENDC}"

    try:
        return handler(session, tokens[1:])
    except BracketBuilderException as e:
        logger.debug(f"Command '{line}' failed: {e}")
        return f"{Colors.FAIL}Error: {e}{Colors.ENDC}"
