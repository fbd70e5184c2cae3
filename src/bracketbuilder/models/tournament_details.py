"""TournamentDetails data class."""

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

import datetime
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from bracketbuilder.constants import TOURNAMENT_FORMAT


@dataclass
class TournamentDetails:
    """Tournament metadata entered alongside the bracket.

    Attributes
    ----------
    name : str
        Tournament name.
    date : str or datetime.date or None
        Start date, ``YYYY-MM-DD`` when given as text.
    time : str or datetime.time or None
        Start time, ``HH:MM`` when given as text.
    location : str
        Where the tournament takes place.
    description : str
        Free text shown with the tournament.
    format : str
        Tournament format label sent to the backend.
    """

    name: str = ""
    date: Optional[Union[str, datetime.date]] = None
    time: Optional[Union[str, datetime.time]] = None
    location: str = ""
    description: str = ""
    format: str = TOURNAMENT_FORMAT

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TournamentDetails":
        """Deserialize details from a form dictionary."""
        return cls(
            name=data.get("name") or "",
            date=data.get("date"),
            time=data.get("time"),
            location=data.get("location") or "",
            description=data.get("description") or "",
            format=data.get("format", TOURNAMENT_FORMAT),
        )
