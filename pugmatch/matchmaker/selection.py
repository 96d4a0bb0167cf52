import math
from collections import Counter
from typing import NamedTuple, Sequence

from ..config import config
from ..players import Candidate, Role


def rank_value(candidate: Candidate) -> int:
    return config.RANK_VALUES[candidate.rank.value]


class SelectionEntry(NamedTuple):
    """
    A candidate picked for a match, together with the role they will play and
    the priority they were picked with. A priority of `math.inf` means the
    player has never played.
    """
    candidate: Candidate
    assigned_role: Role
    priority_score: float

    @classmethod
    def create(
        cls,
        candidate: Candidate,
        assigned_role: Role,
        priority_score: float
    ) -> "SelectionEntry":
        if not candidate.can_play(assigned_role):
            raise ValueError(
                f"{candidate} can't play {assigned_role.value}"
            )
        return cls(candidate, assigned_role, priority_score)

    @property
    def player_id(self) -> str:
        return self.candidate.player_id

    @property
    def rank_value(self) -> int:
        return rank_value(self.candidate)

    @property
    def mu(self) -> float:
        return self.candidate.mu

    @property
    def never_played(self) -> bool:
        return math.isinf(self.priority_score)

    def __repr__(self) -> str:
        return f"{self.candidate}:{self.assigned_role.value}"


def role_counts(entries: Sequence[SelectionEntry]) -> dict[Role, int]:
    counts = Counter(entry.assigned_role for entry in entries)
    return {role: counts[role] for role in Role}


class TeamAssignment(NamedTuple):
    """
    The two teams of a match. Each team is ordered by the order players were
    assigned to it.
    """
    team1: tuple[SelectionEntry, ...]
    team2: tuple[SelectionEntry, ...]

    @property
    def teams(self) -> tuple[tuple[SelectionEntry, ...], ...]:
        return (self.team1, self.team2)

    @property
    def all_entries(self) -> tuple[SelectionEntry, ...]:
        return self.team1 + self.team2

    @property
    def player_ids(self) -> set[str]:
        return {entry.player_id for entry in self.all_entries}

    @property
    def rank_sums(self) -> tuple[int, int]:
        return (
            sum(entry.rank_value for entry in self.team1),
            sum(entry.rank_value for entry in self.team2),
        )

    @property
    def mu_sums(self) -> tuple[float, float]:
        return (
            sum(entry.mu for entry in self.team1),
            sum(entry.mu for entry in self.team2),
        )

    @property
    def rank_imbalance(self) -> int:
        team1_sum, team2_sum = self.rank_sums
        return abs(team1_sum - team2_sum)

    @property
    def skill_imbalance(self) -> float:
        team1_sum, team2_sum = self.mu_sums
        return abs(team1_sum - team2_sum)
