"""Bracket editing engine: store, history, rounds, graph and layout."""

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

from bracketbuilder.bracket.graph import (
    Connection,
    get_children,
    get_connections,
    get_parents,
    would_create_cycle,
)
from bracketbuilder.bracket.history import MatchHistory
from bracketbuilder.bracket.layout import LayoutConfig, auto_arrange
from bracketbuilder.bracket.rounds import (
    compute_rounds,
    propagate_rounds,
    recompute_all_rounds,
    renumber_matches,
    rounds_are_consistent,
)
from bracketbuilder.bracket.store import (
    add_match,
    clear_all,
    create_match,
    delete_match,
    find_match,
    load_matches,
    update_match,
)

__all__ = [
    "Connection",
    "get_children",
    "get_connections",
    "get_parents",
    "would_create_cycle",
    "MatchHistory",
    "LayoutConfig",
    "auto_arrange",
    "compute_rounds",
    "propagate_rounds",
    "recompute_all_rounds",
    "renumber_matches",
    "rounds_are_consistent",
    "add_match",
    "clear_all",
    "create_match",
    "delete_match",
    "find_match",
    "load_matches",
    "update_match",
]
