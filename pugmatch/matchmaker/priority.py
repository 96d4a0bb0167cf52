"""
Recency based priority for deciding who plays next
"""

import logging
import math
from datetime import datetime, timedelta, timezone
from typing import Optional

import humanize

from ..players import Candidate

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = timedelta(days=1).total_seconds()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: datetime) -> datetime:
    # Naive timestamps from the player store are stored in UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def priority_score(
    last_played_at: Optional[datetime],
    now: Optional[datetime] = None
) -> float:
    """
    Fractional days since the player's last completed match in any role.
    Players who have never played get `math.inf`, so they are always picked
    before anyone who has.

    # Examples
    >>> from datetime import datetime
    >>> priority_score(None)
    inf
    >>> priority_score(datetime(2024, 1, 1), now=datetime(2024, 1, 3, 12))
    2.5
    """
    if last_played_at is None:
        return math.inf

    now = _as_utc(now or utcnow())
    elapsed = now - _as_utc(last_played_at)
    # Clock skew can put a match slightly in the future
    return max(0.0, elapsed.total_seconds() / SECONDS_PER_DAY)


def candidate_priority(
    candidate: Candidate,
    now: Optional[datetime] = None
) -> float:
    score = priority_score(candidate.last_played_at, now)
    if logger.isEnabledFor(logging.DEBUG):
        if math.isinf(score):
            logger.debug("%s has never played", candidate)
        else:
            logger.debug(
                "%s last played %s ago",
                candidate,
                humanize.naturaldelta(timedelta(days=score))
            )
    return score
