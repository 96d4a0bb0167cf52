"""
Per guild matchmaking weights
"""

import math
from typing import NamedTuple, Optional, Protocol

from ..config import config
from ..decorators import with_logger
from ..exceptions import InvalidWeights

GuildID = str


class MatchmakingWeights(NamedTuple):
    """
    How the match optimizer trades off keeping teams even (fairness) against
    picking the players who have waited longest (priority). The two weights
    must each be in [0, 1] and add up to 1.
    """
    fairness_weight: float
    priority_weight: float

    @classmethod
    def default(cls) -> "MatchmakingWeights":
        return cls(
            config.DEFAULT_FAIRNESS_WEIGHT,
            config.DEFAULT_PRIORITY_WEIGHT
        )

    def validate(self) -> "MatchmakingWeights":
        """
        # Errors
        Raises `InvalidWeights` describing the first broken constraint.
        """
        for name, value in zip(self._fields, self):
            if not isinstance(value, (int, float)) or math.isnan(value):
                raise InvalidWeights(f"{name} must be a number, got {value!r}")
            if not 0.0 <= value <= 1.0:
                raise InvalidWeights(f"{name} must be between 0 and 1, got {value}")

        total = self.fairness_weight + self.priority_weight
        if not math.isclose(total, 1.0, rel_tol=0, abs_tol=1e-9):
            raise InvalidWeights(f"weights must add up to 1, got {total}")

        return self


class WeightsLookup(Protocol):
    def get(self, guild_id: GuildID) -> MatchmakingWeights:
        ...


@with_logger
class GuildWeights:
    """
    In memory store of matchmaking weights by guild. Weights are validated
    when they are written so a bad configuration is reported to whoever is
    setting it rather than at match time.
    """

    def __init__(self, weights: Optional[dict[GuildID, MatchmakingWeights]] = None):
        self._weights: dict[GuildID, MatchmakingWeights] = {}
        for guild_id, guild_weights in (weights or {}).items():
            self.set(guild_id, guild_weights)

    def get(self, guild_id: GuildID) -> MatchmakingWeights:
        return self._weights.get(guild_id) or MatchmakingWeights.default()

    def set(self, guild_id: GuildID, weights: MatchmakingWeights) -> None:
        weights = MatchmakingWeights(*weights).validate()
        self._logger.info("Setting weights for guild %s to %s", guild_id, weights)
        self._weights[guild_id] = weights

    def reset(self, guild_id: GuildID) -> None:
        self._weights.pop(guild_id, None)

    def __contains__(self, guild_id: GuildID) -> bool:
        return guild_id in self._weights
