"""Type hints used in Bracket Builder."""

from typing import TYPE_CHECKING, Dict, List, Literal, Optional, Union

if TYPE_CHECKING:
    from bracketbuilder.models.match import Match
    from bracketbuilder.models.slot import SoloSlot, TeamSlot

# Which of the two slots of a match
SlotName = Literal["team1", "team2"]

# Anything that can sit in a slot, None being an empty "TBD" slot
Slot = Optional[Union["SoloSlot", "TeamSlot"]]

# Ordered list of matches, one history snapshot
Matches = List["Match"]

# Field name -> error message, from submit-time validation
FieldErrors = Dict[str, str]

#  LocalWords:  TBD
