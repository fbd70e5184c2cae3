"""Round propagation.

A match's round is derived from the connection graph only::

    round(m) = 1                                  if m has no parents
    round(m) = 1 + max(round(p) for p in parents)  otherwise

Canvas position never feeds back into the round.
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

from collections import defaultdict
from dataclasses import replace
from typing import Dict, List, Optional, Set

from bracketbuilder.bracket.graph import get_children, get_parents, index_matches
from bracketbuilder.constants import FIRST_ROUND
from bracketbuilder.models import Match
from bracketbuilder.utils import setup_logger

logger = setup_logger(__name__)


def expected_round(match_id: str, matches: List[Match]) -> int:
    """Round ``match_id`` should have given its parents' current rounds."""
    parents = get_parents(match_id, matches)
    if not parents:
        return FIRST_ROUND
    return 1 + max(p.round for p in parents)


def propagate_rounds(match_id: str, matches: List[Match]) -> List[Match]:
    """
    Recompute the round of ``match_id`` and push changes downstream.

    Propagation stops at a match whose round did not change or at a
    terminal match. The input list is left untouched.

    Parameters
    ----------
    match_id : str
        Match whose parents just changed.
    matches : list of Match
        Current bracket, assumed acyclic.

    Returns
    -------
    list of Match
        Bracket with updated rounds.
    """
    result = list(matches)
    _propagate(match_id, result, set())
    return result


def _propagate(match_id: str, matches: List[Match], visiting: Set[str]) -> None:
    if match_id in visiting:
        # Only reachable on a cyclic graph, which connect() refuses to build
        logger.warning(f"Cycle detected at match {match_id}, stopping propagation")
        return

    position = _index_of(match_id, matches)
    if position is None:
        return

    new_round = expected_round(match_id, matches)
    current = matches[position]
    if current.round == new_round:
        return

    logger.debug(f"Match {match_id}: round {current.round} -> {new_round}")
    matches[position] = replace(current, round=new_round)

    visiting.add(match_id)
    for child in get_children(match_id, matches):
        _propagate(child.id, matches, visiting)
    visiting.discard(match_id)


def _index_of(match_id: str, matches: List[Match]) -> Optional[int]:
    for i, match in enumerate(matches):
        if match.id == match_id:
            return i
    return None


def compute_rounds(matches: List[Match]) -> Dict[str, int]:
    """Compute every round from scratch, ignoring stored values."""
    by_id = index_matches(matches)
    parents: Dict[str, List[str]] = defaultdict(list)
    for match in matches:
        if match.next_match_id in by_id:
            parents[match.next_match_id].append(match.id)

    rounds: Dict[str, int] = {}

    def depth(match_id: str, trail: Set[str]) -> int:
        if match_id in rounds:
            return rounds[match_id]
        if match_id in trail:
            return FIRST_ROUND
        trail.add(match_id)
        value = 1 + max(
            (depth(p, trail) for p in parents[match_id]), default=FIRST_ROUND - 1
        )
        trail.discard(match_id)
        rounds[match_id] = value
        return value

    for match in matches:
        depth(match.id, set())
    return rounds


def recompute_all_rounds(matches: List[Match]) -> List[Match]:
    """Return the bracket with every round recomputed from the graph."""
    rounds = compute_rounds(matches)
    return [
        m if m.round == rounds[m.id] else replace(m, round=rounds[m.id])
        for m in matches
    ]


def rounds_are_consistent(matches: List[Match]) -> bool:
    """Check the round invariant for every match."""
    return all(m.round == expected_round(m.id, matches) for m in matches)


def renumber_matches(matches: List[Match]) -> List[Match]:
    """Give every round match numbers 1..n in list order."""
    counters: Dict[int, int] = defaultdict(int)
    result = []
    for match in matches:
        counters[match.round] += 1
        number = counters[match.round]
        result.append(
            match if match.match_number == number else replace(match, match_number=number)
        )
    return result
