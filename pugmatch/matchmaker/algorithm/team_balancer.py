from collections import Counter
from typing import Callable, Optional, Sequence

from ...config import config
from ...decorators import with_logger
from ...players import Role
from ..selection import SelectionEntry, TeamAssignment, role_counts

EntryValue = Callable[[SelectionEntry], float]


def by_rank(entry: SelectionEntry) -> float:
    return entry.rank_value


def by_skill(entry: SelectionEntry) -> float:
    return entry.mu


@with_logger
class TeamBalancer:
    """
    Splits the selected players into two teams with the same role layout.

    Players are handled one role at a time (tank, dps, support by default),
    strongest first within a role. Each player joins the team with the lower
    running total, team 1 on ties, unless that team's slots for the role are
    already taken. Because every role is split evenly the role quota holds by
    construction.

    This is a greedy algorithm. It is deterministic but not guaranteed to find
    the most even split.
    """

    def __init__(
        self,
        value: EntryValue = by_rank,
        role_order: Optional[Sequence[Role]] = None,
    ):
        self.value = value
        self.role_order = tuple(
            Role.from_value(role)
            for role in (role_order or config.BALANCE_ROLE_ORDER)
        )

    @property
    def team_composition(self) -> dict[Role, int]:
        return {
            Role.from_value(role): count
            for role, count in config.TEAM_COMPOSITION.items()
        }

    def balance(self, selected: Sequence[SelectionEntry]) -> TeamAssignment:
        """
        # Errors
        Raises `ValueError` if `selected` is not a valid set of players for a
        match. This indicates a bug in player selection.
        """
        selected = list(selected)
        self._check_selection(selected)

        composition = self.team_composition
        teams: tuple[list[SelectionEntry], list[SelectionEntry]] = ([], [])
        totals = [0.0, 0.0]
        counts = (Counter(), Counter())

        for role in self.role_order:
            group = sorted(
                (entry for entry in selected if entry.assigned_role is role),
                key=self.value,
                reverse=True
            )
            for entry in group:
                team = 0 if totals[0] <= totals[1] else 1
                if counts[team][role] >= composition[role]:
                    team = 1 - team

                teams[team].append(entry)
                totals[team] += self.value(entry)
                counts[team][role] += 1

        self._logger.debug(
            "Balanced teams %s (%s) vs %s (%s)",
            teams[0], totals[0], teams[1], totals[1]
        )
        return TeamAssignment(tuple(teams[0]), tuple(teams[1]))

    def _check_selection(self, selected: list[SelectionEntry]) -> None:
        required = config.REQUIRED_PLAYERS
        if len(selected) != required:
            raise ValueError(
                f"Expected exactly {required} players, got {len(selected)}"
            )

        if len({entry.player_id for entry in selected}) != len(selected):
            raise ValueError("A player was selected more than once")

        expected = {
            role: count * 2 for role, count in self.team_composition.items()
        }
        found = role_counts(selected)
        if any(found[role] != expected.get(role, 0) for role in Role):
            raise ValueError(
                f"Selected roles {found} don't match the quota {expected}"
            )

        missing = set(Role) - set(self.role_order)
        if missing:
            raise ValueError(f"No balancing order for roles {missing}")


def balance_by_rank(selected: Sequence[SelectionEntry]) -> TeamAssignment:
    return TeamBalancer(by_rank).balance(selected)


def balance_by_skill(selected: Sequence[SelectionEntry]) -> TeamAssignment:
    return TeamBalancer(by_skill).balance(selected)
