"""
Type definitions for player ratings
"""

from typing import NamedTuple, Union

import trueskill

from .config import config
from .players import Rank

AnyRating = Union["Rating", trueskill.Rating, tuple[float, float]]


class Rating(NamedTuple):
    """
    A container for holding a mu, sigma pair and computing the displayed
    skill rating (SR).
    """
    mu: float
    sigma: float

    def of(value: AnyRating) -> "Rating":
        if isinstance(value, trueskill.Rating):
            return Rating(value.mu, value.sigma)
        elif isinstance(value, Rating):
            return value

        return Rating(*value)

    def displayed(self) -> int:
        return displayed_rating(self.mu, self.sigma)


def displayed_rating(mu: float, sigma: float) -> int:
    """
    The conservative SR shown on leaderboards. Players are ranked by the skill
    we are ~99% sure they have, so new players start low and climb as their
    sigma shrinks.

    # Examples
    >>> displayed_rating(25.0, 5.0)
    1000
    >>> displayed_rating(10.0, 5.0)
    0
    """
    return max(0, round((mu - 3 * sigma) * 100))


def seed_rating(rank: Union[str, Rank]) -> Rating:
    """
    Get the initial rating for a newly registered player from their
    self-reported rank. Every tier starts with the same sigma.

    # Errors
    Raises `ValueError` for unknown rank names.
    """
    rank = Rank.from_value(rank)
    return Rating(float(config.RANK_SEEDING[rank.value]), config.SEEDED_SIGMA)
