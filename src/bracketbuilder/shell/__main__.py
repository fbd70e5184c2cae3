"""Interactive bracket shell.

Run with ``python -m bracketbuilder.shell`` or ``bracketbuilder-shell``.
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

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import NestedCompleter, WordCompleter
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.styles import Style

from bracketbuilder.controllers import Roster
from bracketbuilder.exceptions import BracketBuilderException
from bracketbuilder.shell.session import (
    COMMANDS,
    Colors,
    ShellSession,
    execute_command,
    format_help,
)
from bracketbuilder.utils import configure_logging, setup_logger

logger = setup_logger(__name__)

PROMPT_STYLE = Style.from_dict({"prompt": "ansicyan bold"})


def print_banner():
    """Print the shell banner."""
    banner = f"""
{Colors.OKBLUE}╔═══════════════════════════════════════════════════════════════╗
║                                                               ║
║                    BRACKET BUILDER - SHELL                    ║
║                                                               ║
╚═══════════════════════════════════════════════════════════════╝{Colors.ENDC}

Type {Colors.BOLD}/help{Colors.ENDC} to see all available commands
Type {Colors.BOLD}exit{Colors.ENDC} or {Colors.BOLD}quit{Colors.ENDC} to leave
"""
    print(banner)


def create_completer() -> NestedCompleter:
    """Create autocomplete completer for interactive mode."""
    # Support both "/command" and "command" formats
    completions = {}
    for cmd, info in COMMANDS.items():
        options_completer = (
            WordCompleter(list(info["options"].keys())) if info["options"] else None
        )
        completions[cmd] = options_completer
        completions[f"/{cmd}"] = options_completer

    completions["help"] = WordCompleter(list(COMMANDS.keys()))
    completions["/help"] = completions["help"]
    return NestedCompleter.from_nested_dict(completions)


def load_roster(path: Optional[str]) -> Roster:
    """Load channel members from a JSON list of ``{id, username}`` objects."""
    if not path:
        return Roster()
    with open(path, "r", encoding="utf-8") as f:
        members = json.load(f)
    if not isinstance(members, list):
        raise ValueError(f"{path}: expected a JSON list of members")
    return Roster(members)


def load_bracket(path: Optional[str]) -> List[Dict[str, Any]]:
    """Load saved matches: a JSON list, or a tournament object with ``matches``."""
    if not path:
        return []
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = data.get("matches", [])
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a JSON list of matches")
    return data


def run_script(session: ShellSession, path: Path) -> int:
    """Run commands from a file, one per line. Blank lines and # comments are skipped."""
    for raw_line in path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        print(f"{Colors.OKCYAN}> {line}{Colors.ENDC}")
        output = execute_command(session, line)
        if output:
            print(output)
        if not session.running:
            break
    return 0


def run_interactive(session: ShellSession) -> int:
    """Run the prompt loop until exit or end of input."""
    print_banner()
    prompt = PromptSession(
        completer=create_completer(), history=InMemoryHistory(), style=PROMPT_STYLE
    )
    while session.running:
        try:
            line = prompt.prompt([("class:prompt", "bracket> ")])
        except KeyboardInterrupt:
            continue
        except EOFError:
            break
        output = execute_command(session, line)
        if output:
            print(output)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Build a tournament bracket from the terminal"
    )
    parser.add_argument("--members", help="JSON file with channel members")
    parser.add_argument("--bracket", help="JSON file with a saved bracket to edit")
    parser.add_argument("--script", help="Run commands from a file and exit")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging")
    parser.add_argument(
        "--list-commands", action="store_true", help="Print the command table and exit"
    )
    args = parser.parse_args(argv)

    configure_logging(args.verbose)

    if args.list_commands:
        print(format_help())
        return 0

    try:
        roster = load_roster(args.members)
    except (OSError, ValueError, BracketBuilderException) as e:
        print(f"{Colors.FAIL}Could not load members: {e}{Colors.ENDC}")
        return 1

    try:
        session = ShellSession(roster, load_bracket(args.bracket))
    except (OSError, ValueError, KeyError, BracketBuilderException) as e:
        print(f"{Colors.FAIL}Could not load bracket: {e}{Colors.ENDC}")
        return 1
    if args.script:
        script = Path(args.script)
        if not script.exists():
            print(f"{Colors.FAIL}Error: File not found: {script}{Colors.ENDC}")
            return 1
        return run_script(session, script)
    return run_interactive(session)


if __name__ == "__main__":
    sys.exit(main())
