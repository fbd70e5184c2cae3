"""Connection graph derived from ``next_match_id`` links.

Connections are never stored on their own. They are materialised on
demand from the matches for drawing arrows and for the round engine.
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

from typing import Dict, Iterable, List, NamedTuple, Optional, Set

from bracketbuilder.models import Match


class Connection(NamedTuple):
    """Edge from the match whose winner advances to the match it feeds."""

    source_id: str
    target_id: str


def index_matches(matches: Iterable[Match]) -> Dict[str, Match]:
    """Map match id -> match."""
    return {m.id: m for m in matches}


def get_connections(matches: List[Match]) -> List[Connection]:
    """All edges whose target still exists, in match order."""
    known = index_matches(matches)
    return [
        Connection(m.id, m.next_match_id)
        for m in matches
        if m.next_match_id is not None and m.next_match_id in known
    ]


def get_parents(match_id: str, matches: List[Match]) -> List[Match]:
    """Matches feeding into ``match_id``."""
    return [m for m in matches if m.next_match_id == match_id]


def get_children(match_id: str, matches: List[Match]) -> List[Match]:
    """Matches downstream of ``match_id`` (at most one)."""
    match = index_matches(matches).get(match_id)
    if match is None or match.next_match_id is None:
        return []
    return [m for m in matches if m.id == match.next_match_id]


def root_matches(matches: List[Match]) -> List[Match]:
    """Matches nothing feeds into."""
    targets = {m.next_match_id for m in matches if m.next_match_id}
    return [m for m in matches if m.id not in targets]


def terminal_matches(matches: List[Match]) -> List[Match]:
    """Matches with no outgoing edge."""
    return [m for m in matches if m.next_match_id is None]


def ancestors(match_id: str, matches: List[Match]) -> Set[str]:
    """Ids of every match that eventually feeds into ``match_id``."""
    found: Set[str] = set()
    stack = [match_id]
    while stack:
        current = stack.pop()
        for parent in get_parents(current, matches):
            if parent.id not in found:
                found.add(parent.id)
                stack.append(parent.id)
    return found


def path_from(match_id: str, matches: List[Match]) -> List[str]:
    """Follow edges from ``match_id`` until a terminal match or a repeat."""
    by_id = index_matches(matches)
    path: List[str] = []
    seen: Set[str] = set()
    current: Optional[str] = match_id
    while current is not None and current in by_id and current not in seen:
        seen.add(current)
        path.append(current)
        current = by_id[current].next_match_id
    return path


def would_create_cycle(source_id: str, target_id: str, matches: List[Match]) -> bool:
    """
    Check whether adding ``source_id -> target_id`` closes a loop.

    The new edge replaces any existing edge out of the source, so only the
    path leaving the target matters: if it reaches the source, the source
    would become reachable from itself.

    Parameters
    ----------
    source_id : str
        Match whose winner would advance.
    target_id : str
        Match the winner would advance to.
    matches : list of Match
        Current bracket.

    Returns
    -------
    bool
        True if the edge must be rejected.
    """
    if source_id == target_id:
        return True
    return source_id in path_from(target_id, matches)
