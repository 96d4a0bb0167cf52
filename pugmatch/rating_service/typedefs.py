from enum import Enum
from typing import Dict, List, NamedTuple

from pugmatch.rating import Rating

PlayerID = str
RatingDict = Dict[PlayerID, Rating]


class MatchOutcome(Enum):
    """
    Result of a match from the point of view of one team.
    """
    VICTORY = "VICTORY"
    DEFEAT = "DEFEAT"
    DRAW = "DRAW"


class PostMatchRatings(NamedTuple):
    """
    New ratings for both sides of a match, in the same order the old ratings
    were given. For a draw "winners" is simply the first team.
    """
    winners: List[Rating]
    losers: List[Rating]


class RatingServiceError(Exception):
    pass
