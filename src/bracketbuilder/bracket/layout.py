"""Grid auto-arrange.

A plain re-flow in list order. Bracket structure is ignored.
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

from dataclasses import dataclass, replace
from typing import List, Optional

from bracketbuilder.constants import (
    HORIZONTAL_GAP,
    LAYOUT_COLUMNS,
    MATCH_BOX_HEIGHT,
    MATCH_BOX_WIDTH,
    VERTICAL_GAP,
)
from bracketbuilder.models import Match, Position


@dataclass(frozen=True)
class LayoutConfig:
    """Grid geometry used by :func:`auto_arrange`.

    Attributes
    ----------
    columns : int
        Matches per row.
    box_width, box_height : float
        Size of a match box.
    horizontal_gap, vertical_gap : float
        Space between neighbouring boxes.
    """

    columns: int = LAYOUT_COLUMNS
    box_width: float = MATCH_BOX_WIDTH
    box_height: float = MATCH_BOX_HEIGHT
    horizontal_gap: float = HORIZONTAL_GAP
    vertical_gap: float = VERTICAL_GAP

    def __post_init__(self):
        if self.columns < 1:
            raise ValueError(f"columns must be at least 1, got {self.columns}")

    def position_for(self, index: int) -> Position:
        """Grid position of the ``index``-th match (0-based)."""
        row, col = divmod(index, self.columns)
        return Position(
            x=col * (self.box_width + self.horizontal_gap),
            y=row * (self.box_height + self.vertical_gap),
        )


def auto_arrange(
    matches: List[Match], config: Optional[LayoutConfig] = None
) -> List[Match]:
    """Place matches on a grid in their current order."""
    config = config or LayoutConfig()
    return [
        replace(match, position=config.position_for(i))
        for i, match in enumerate(matches)
    ]
