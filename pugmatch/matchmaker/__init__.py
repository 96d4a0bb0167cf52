"""
The matchmaker system

Turns the players present for a PUG into two role balanced teams. Selection
decides who plays and in which role, balancing decides who plays with whom.
"""
from .algorithm import MatchOptimizer, PrioritySelector, TeamBalancer
from .priority import priority_score
from .selection import SelectionEntry, TeamAssignment
from .weights import GuildWeights, MatchmakingWeights, WeightsLookup

__all__ = (
    "GuildWeights",
    "MatchOptimizer",
    "MatchmakingWeights",
    "PrioritySelector",
    "SelectionEntry",
    "TeamAssignment",
    "TeamBalancer",
    "WeightsLookup",
    "priority_score",
)
