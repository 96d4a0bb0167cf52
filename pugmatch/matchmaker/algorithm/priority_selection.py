from datetime import datetime
from typing import Iterable, NamedTuple, Optional, Sequence

from sortedcontainers import SortedList

from ...config import config
from ...decorators import with_logger
from ...exceptions import (
    InsufficientPlayers,
    InsufficientRoleComposition,
    RoleDeficit
)
from ...players import Candidate, Role
from ..priority import candidate_priority, utcnow
from ..selection import SelectionEntry


class RankedCandidate(NamedTuple):
    """
    A candidate with their priority score. `index` is the candidate's position
    in the input pool and breaks ties between equal scores.
    """
    candidate: Candidate
    score: float
    index: int

    def entry(self, role: Role) -> SelectionEntry:
        return SelectionEntry.create(self.candidate, role, self.score)


def rank_by_priority(
    pool: Sequence[Candidate],
    now: Optional[datetime] = None
) -> SortedList:
    """
    Sort the pool from most to least overdue. Never played candidates come
    first and equal scores keep their input order.
    """
    now = now or utcnow()
    return SortedList(
        (
            RankedCandidate(candidate, candidate_priority(candidate, now), index)
            for index, candidate in enumerate(pool)
        ),
        key=lambda ranked: (-ranked.score, ranked.index)
    )


def select_top_n(
    ranked: Iterable[RankedCandidate],
    role: Role,
    count: int,
    exclude: frozenset[int] = frozenset()
) -> tuple[list[RankedCandidate], int]:
    """
    Pick the `count` highest priority candidates who can play `role`, skipping
    any input index in `exclude`. `ranked` must already be in priority order.

    # Returns
    The picked candidates (fewer than `count` if there aren't enough) and the
    number of candidates that were eligible.
    """
    eligible = [
        item for item in ranked
        if item.index not in exclude and item.candidate.can_play(role)
    ]
    return eligible[:count], len(eligible)


@with_logger
class PrioritySelector:
    """
    Picks the players for the next match.

    Roles are filled one at a time in scarcity order (tank, support, dps by
    default). For each role the candidates who have waited the longest since
    their last match are picked first. A candidate is only ever picked once.

    # Errors
    `select` raises `InsufficientPlayers` when the pool is smaller than a
    match, and `InsufficientRoleComposition` listing every role whose quota
    couldn't be filled.
    """

    def __init__(
        self,
        now: Optional[datetime] = None,
        role_order: Optional[Sequence[Role]] = None,
    ):
        self.now = now
        self.role_order = tuple(
            Role.from_value(role)
            for role in (role_order or config.ROLE_FILL_ORDER)
        )

    @property
    def quota(self) -> dict[Role, int]:
        return {
            Role.from_value(role): count
            for role, count in config.role_quota.items()
        }

    def select(self, pool: Sequence[Candidate]) -> list[SelectionEntry]:
        return self.select_ranked(self.rank(pool))

    def rank(self, pool: Sequence[Candidate]) -> SortedList:
        """
        Check that the pool is big enough for a match and sort it by priority.
        """
        pool = list(pool)
        required = config.REQUIRED_PLAYERS
        if len(pool) < required:
            raise InsufficientPlayers(required=required, found=len(pool))

        return rank_by_priority(pool, self.now)

    def select_ranked(self, ranked: SortedList) -> list[SelectionEntry]:
        quota = self.quota
        selected: list[SelectionEntry] = []
        assigned: set[int] = set()
        deficits: list[RoleDeficit] = []

        for role in self.role_order:
            needed = quota[role]
            picked, available = select_top_n(
                ranked, role, needed, frozenset(assigned)
            )
            if len(picked) < needed:
                self._logger.debug(
                    "Only %d of %d %s slots can be filled",
                    available, needed, role.value
                )
                deficits.append(RoleDeficit(role, needed, available))

            for item in picked:
                assigned.add(item.index)
                selected.append(item.entry(role))

        if deficits:
            raise InsufficientRoleComposition(deficits)

        self._logger.debug("Selected players: %s", selected)
        return selected
