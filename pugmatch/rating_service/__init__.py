"""
Post match skill rating updates
"""

from .game_rater import GameRater, GameRatingError, update_post_match
from .typedefs import (
    MatchOutcome,
    PlayerID,
    PostMatchRatings,
    RatingDict,
    RatingServiceError
)

__all__ = (
    "GameRater",
    "GameRatingError",
    "MatchOutcome",
    "PlayerID",
    "PostMatchRatings",
    "RatingDict",
    "RatingServiceError",
    "update_post_match",
)
