import itertools
from datetime import datetime
from typing import Iterable, Iterator, NamedTuple, Optional, Sequence

from sortedcontainers import SortedList

from ...config import config
from ...decorators import with_logger
from ...players import Candidate, Role
from ..selection import SelectionEntry, TeamAssignment
from ..weights import MatchmakingWeights
from .priority_selection import (
    PrioritySelector,
    RankedCandidate,
    select_top_n
)
from .team_balancer import TeamBalancer, by_skill

# Candidate pool is a list of ranked candidates for each role
CandidatePools = dict[Role, list[RankedCandidate]]


class SkillBand(NamedTuple):
    low: float
    high: float
    buffer: float

    def __contains__(self, mu: float) -> bool:
        return self.low <= mu <= self.high

    def expanded(self, factor: float) -> "SkillBand":
        extra = self.buffer * (factor - 1)
        return SkillBand(self.low - extra, self.high + extra, self.buffer * factor)


class Normalization(NamedTuple):
    max_fairness: float
    max_priority: float


class CostMetrics(NamedTuple):
    fairness_cost: float
    priority_cost: float
    normalized_fairness: float
    normalized_priority: float
    total_cost: float


class OptimizationResult(NamedTuple):
    selected: list[SelectionEntry]
    teams: TeamAssignment
    metrics: CostMetrics
    evaluated: int


def skill_band(base: Sequence[SelectionEntry]) -> SkillBand:
    """
    The range of skill around the priority picked players that alternative
    picks may come from. The band extends past the base players' skill range
    by half that range on either side.
    """
    mus = [entry.mu for entry in base]
    low, high = min(mus), max(mus)
    spread = high - low
    if spread == 0:
        buffer = config.DEFAULT_BAND_BUFFER
    else:
        buffer = spread * config.SKILL_BAND_BUFFER

    return SkillBand(low - buffer, high + buffer, buffer)


def target_pool_sizes(num_players: int) -> dict[Role, int]:
    """How many candidates to consider for each role"""
    if num_players <= 15:
        return {Role.TANK: 3, Role.DPS: 5, Role.SUPPORT: 5}
    return {Role.TANK: 4, Role.DPS: 6, Role.SUPPORT: 6}


def capped_priority(score: float) -> float:
    return min(score, config.MAX_PRIORITY_DAYS)


@with_logger
class MatchOptimizer:
    """
    Looks for a better set of players than pure priority selection.

    The guild's `MatchmakingWeights` decide how the optimizer trades off the
    two things a good match needs:

    - fairness: the difference in total skill (mu) between the two teams
    - priority: how overdue the players who would sit out are

    Each is normalized to [0, 1] and the total cost is
    `fairness_weight * F^2 + priority_weight * P^1.5`, so small imbalances are
    cheap and making an overdue player wait is expensive.

    # Algorithm
    1. Pick the base 10 players by priority. This also validates the pool.
    2. Find a skill band around the base players.
    3. For each role, take the most overdue in band candidates as the pool
        for that role. If the pools come up short, widen the band once.
    4. Try every combination of 2 tanks, 4 dps and 4 supports from the pools,
        balance each one by skill and keep the cheapest.

    Whenever there is nothing to choose from, the base players are returned.
    """

    def __init__(
        self,
        weights: Optional[MatchmakingWeights] = None,
        now: Optional[datetime] = None,
        selector: Optional[PrioritySelector] = None,
    ):
        self.weights = (weights or MatchmakingWeights.default()).validate()
        self.selector = selector or PrioritySelector(now=now)
        self.balancer = TeamBalancer(by_skill)

    def optimize(self, pool: Sequence[Candidate]) -> list[SelectionEntry]:
        """
        # Errors
        Raises the same errors as `PrioritySelector.select`.
        """
        selected, _ = self.run(pool)
        return selected

    def run(
        self,
        pool: Sequence[Candidate]
    ) -> tuple[list[SelectionEntry], Optional[OptimizationResult]]:
        """
        Like `optimize`, but also returns the search result that picked the
        players. The result is `None` when the base players were kept.
        """
        ranked = self.selector.rank(pool)
        base = self.selector.select_ranked(ranked)
        if len(ranked) == config.REQUIRED_PLAYERS:
            return base, None

        pools = self.build_candidate_pools(ranked, skill_band(base))

        if not self._has_alternatives(pools):
            self._logger.debug("No alternative candidates, using base team")
            return base, None

        result = self.find_best(pools)
        if result is None:
            self._logger.debug("No valid combination found, using base team")
            return base, None

        self._logger.info(
            "Evaluated %d combinations, best cost %f (fairness %f, priority %f)",
            result.evaluated,
            result.metrics.total_cost,
            result.metrics.fairness_cost,
            result.metrics.priority_cost
        )
        return result.selected, result

    def build_candidate_pools(
        self,
        ranked: SortedList,
        band: SkillBand
    ) -> CandidatePools:
        targets = target_pool_sizes(len(ranked))

        pools, is_full = self._build_pools(ranked, band, targets)
        if is_full:
            return pools

        band = band.expanded(config.BAND_EXPANSION_FACTOR)
        self._logger.debug("Pools not full, expanding skill band to %s", band)
        pools, _ = self._build_pools(ranked, band, targets)
        return pools

    def _build_pools(
        self,
        ranked: SortedList,
        band: SkillBand,
        targets: dict[Role, int]
    ) -> tuple[CandidatePools, bool]:
        in_band = [item for item in ranked if item.candidate.mu in band]
        pools = {
            role: select_top_n(in_band, role, targets[role])[0]
            for role in Role
        }
        is_full = all(len(pools[role]) >= targets[role] for role in Role)
        return pools, is_full

    def _has_alternatives(self, pools: CandidatePools) -> bool:
        quota = self.selector.quota
        if any(len(pools[role]) < quota[role] for role in Role):
            return False
        if all(len(pools[role]) == quota[role] for role in Role):
            return False

        unique_players = {
            item.index for candidates in pools.values() for item in candidates
        }
        return len(unique_players) >= config.REQUIRED_PLAYERS

    def find_best(self, pools: CandidatePools) -> Optional[OptimizationResult]:
        candidates = {
            item.index: item
            for role in Role
            for item in pools[role]
        }
        normalization = self.normalization(candidates.values())

        best: Optional[OptimizationResult] = None
        evaluated = 0
        for selection in self.combinations(pools):
            evaluated += 1
            teams = self.balancer.balance(selection)
            metrics = self.cost(teams, candidates.values(), normalization)
            if best is None or metrics.total_cost < best.metrics.total_cost:
                best = OptimizationResult(selection, teams, metrics, 0)

        if best is None:
            return None
        return best._replace(evaluated=evaluated)

    def combinations(self, pools: CandidatePools) -> Iterator[list[SelectionEntry]]:
        """
        Every role stratified selection that doesn't use a player twice.
        """
        quota = self.selector.quota
        role_combinations = [
            [
                (role, combination)
                for combination in itertools.combinations(pools[role], quota[role])
            ]
            for role in Role
        ]
        for parts in itertools.product(*role_combinations):
            indices = [item.index for _, combination in parts for item in combination]
            if len(set(indices)) != len(indices):
                continue

            yield [
                item.entry(role)
                for role, combination in parts
                for item in combination
            ]

    def normalization(
        self,
        candidates: Iterable[RankedCandidate]
    ) -> Normalization:
        candidates = list(candidates)
        mus = [item.candidate.mu for item in candidates]
        team_size = sum(config.TEAM_COMPOSITION.values())
        max_fairness = (max(mus) - min(mus)) * team_size
        max_priority = sum(
            capped_priority(item.score) ** config.PRIORITY_EXPONENT
            for item in candidates
        )
        return Normalization(max_fairness or 1, max_priority or 1)

    def cost(
        self,
        teams: TeamAssignment,
        candidates: Iterable[RankedCandidate],
        normalization: Normalization
    ) -> CostMetrics:
        selected = {entry.player_id for entry in teams.all_entries}
        fairness_cost = teams.skill_imbalance
        priority_cost = sum(
            capped_priority(item.score) ** config.PRIORITY_EXPONENT
            for item in candidates
            if item.candidate.player_id not in selected
        )

        normalized_fairness = fairness_cost / normalization.max_fairness
        normalized_priority = priority_cost / normalization.max_priority
        total_cost = (
            self.weights.fairness_weight
            * normalized_fairness ** config.FAIRNESS_EXPONENT
            + self.weights.priority_weight
            * normalized_priority ** config.PRIORITY_EXPONENT
        )
        return CostMetrics(
            fairness_cost,
            priority_cost,
            normalized_fairness,
            normalized_priority,
            total_cost
        )
