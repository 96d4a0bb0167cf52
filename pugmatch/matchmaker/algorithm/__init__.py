from .match_optimizer import MatchOptimizer, OptimizationResult
from .priority_selection import PrioritySelector, RankedCandidate
from .team_balancer import (
    TeamBalancer,
    balance_by_rank,
    balance_by_skill,
    by_rank,
    by_skill
)

__all__ = (
    "MatchOptimizer",
    "OptimizationResult",
    "PrioritySelector",
    "RankedCandidate",
    "TeamBalancer",
    "balance_by_rank",
    "balance_by_skill",
    "by_rank",
    "by_skill",
)
