"""Data model of the bracket editor."""

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

from bracketbuilder.models.match import Match, Position, TeamType, new_match_id
from bracketbuilder.models.participant import (
    Participant,
    ParticipantStatus,
    guest_id,
    make_guest,
)
from bracketbuilder.models.slot import SoloSlot, TeamSlot, slot_from_dict, slot_label
from bracketbuilder.models.tournament_details import TournamentDetails

__all__ = [
    "Match",
    "Position",
    "TeamType",
    "new_match_id",
    "Participant",
    "ParticipantStatus",
    "guest_id",
    "make_guest",
    "SoloSlot",
    "TeamSlot",
    "slot_from_dict",
    "slot_label",
    "TournamentDetails",
]
