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

# --- Constants ---

# Auto-arrange grid
LAYOUT_COLUMNS = 3
MATCH_BOX_WIDTH = 220.0
MATCH_BOX_HEIGHT = 120.0
HORIZONTAL_GAP = 50.0
VERTICAL_GAP = 50.0

# Match defaults
DEFAULT_BEST_OF = 3
FIRST_ROUND = 1
EMPTY_SLOT_LABEL = "TBD"

# Slot names
SLOT_TEAM1 = "team1"
SLOT_TEAM2 = "team2"
SLOT_NAMES = (SLOT_TEAM1, SLOT_TEAM2)

# Participants
GUEST_ID_PREFIX = "guest_"

# Submission
TOURNAMENT_FORMAT = "single elimination"
MIN_TOURNAMENT_NAME_LENGTH = 3

# Drag and drop
PARTICIPANT_MIME_PREFIX = "participant:"
