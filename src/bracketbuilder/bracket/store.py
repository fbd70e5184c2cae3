"""Match store: pure operations over the ordered list of matches.

Every function returns a new list and leaves its input untouched, so a
list handed to the history manager is never changed behind its back.
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

from dataclasses import replace
from typing import Any, Iterable, List, Optional

from bracketbuilder.bracket.graph import get_children, would_create_cycle
from bracketbuilder.bracket.rounds import (
    propagate_rounds,
    recompute_all_rounds,
    renumber_matches,
)
from bracketbuilder.constants import FIRST_ROUND
from bracketbuilder.models import Match, Position, TeamType
from bracketbuilder.utils import setup_logger

logger = setup_logger(__name__)


def find_match(matches: List[Match], match_id: str) -> Optional[Match]:
    """Return the match with ``match_id``, or None."""
    for match in matches:
        if match.id == match_id:
            return match
    return None


def create_match(matches: List[Match], **initial: Any) -> Match:
    """
    Allocate a new match.

    The new match starts in round 1 with empty slots, at ``(0, 0)`` unless a
    position is given, numbered after the matches already in round 1. Team
    matches get two empty teams.

    Parameters
    ----------
    matches : list of Match
        Current bracket, used for numbering only.
    **initial
        Field values for the new match. ``round`` and ``match_number`` are
        derived and ignored.

    Returns
    -------
    Match
        The new match. It is not added to ``matches``.
    """
    initial.pop("round", None)
    initial.pop("match_number", None)
    position = initial.pop("position", None)
    if position is None:
        position = Position()
    elif not isinstance(position, Position):
        position = Position(*position)

    match_number = sum(1 for m in matches if m.round == FIRST_ROUND) + 1
    team_type = initial.get("team_type", TeamType.SOLO)
    if team_type == TeamType.TEAM:
        initial.pop("team_type")
        return Match.team_match(
            position=position, round=FIRST_ROUND, match_number=match_number, **initial
        )
    return Match(
        position=position, round=FIRST_ROUND, match_number=match_number, **initial
    )


def add_match(matches: List[Match], match: Match) -> List[Match]:
    """Append a match to the bracket."""
    return list(matches) + [match]


def update_match(matches: List[Match], match_id: str, **changes: Any) -> List[Match]:
    """
    Shallow-merge ``changes`` into one match.

    An unknown ``match_id`` is a silent no-op: the list comes back with
    the same contents.

    Raises:
        ValueError: If ``changes`` tries to change the match id
        TypeError: If ``changes`` names a field Match does not have
    """
    if "id" in changes and changes["id"] != match_id:
        raise ValueError("A match id cannot be changed")

    result = []
    found = False
    for match in matches:
        if match.id == match_id:
            match = replace(match, **changes)
            found = True
        result.append(match)

    if not found:
        logger.debug(f"update_match: no match {match_id}")
    return result


def delete_match(matches: List[Match], match_id: str) -> List[Match]:
    """
    Remove a match and every edge pointing at it.

    Matches that fed into the removed one lose their ``next_match_id``.
    Matches downstream of it lose a parent, so their rounds are recomputed,
    then match numbers are reassigned.
    """
    target = find_match(matches, match_id)
    if target is None:
        logger.debug(f"delete_match: no match {match_id}")
        return list(matches)

    children = [c.id for c in get_children(match_id, matches)]
    result = [
        replace(m, next_match_id=None) if m.next_match_id == match_id else m
        for m in matches
        if m.id != match_id
    ]
    # Former parents lost their outgoing edge but keep their own parents
    for child_id in children:
        result = propagate_rounds(child_id, result)
    return renumber_matches(result)


def clear_all() -> List[Match]:
    """Return an empty bracket."""
    return []


def load_matches(matches: Iterable[Match]) -> List[Match]:
    """
    Make a stored bracket safe to edit.

    Duplicate ids are dropped, then edges are re-added one at a time in
    list order; an edge to a missing match or one that would close a loop
    is removed. Rounds and match numbers are recomputed from what remains.

    Parameters
    ----------
    matches : iterable of Match
        Bracket as it was saved.

    Returns
    -------
    list of Match
        A bracket with a consistent round invariant.
    """
    unique: List[Match] = []
    seen = set()
    for match in matches:
        if match.id in seen:
            logger.warning(f"Dropping duplicate match {match.id}")
            continue
        seen.add(match.id)
        unique.append(match)

    result = [replace(m, next_match_id=None) for m in unique]
    for i, match in enumerate(unique):
        target_id = match.next_match_id
        if target_id is None:
            continue
        if target_id not in seen:
            logger.warning(f"Dropping edge {match.id} -> {target_id}: no such match")
            continue
        if would_create_cycle(match.id, target_id, result):
            logger.warning(f"Dropping edge {match.id} -> {target_id}: cycle")
            continue
        result[i] = replace(result[i], next_match_id=target_id)

    return renumber_matches(recompute_all_rounds(result))
