"""
Player type definitions
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, unique
from typing import Iterable, Optional, Union


@unique
class Role(Enum):
    TANK = "tank"
    DPS = "dps"
    SUPPORT = "support"

    @staticmethod
    def from_value(value: Union[str, "Role"]) -> "Role":
        if isinstance(value, Role):
            return value
        elif isinstance(value, str):
            return Role(value.strip().lower())

        raise TypeError(f"Unsupported role type {type(value)}!")


@unique
class Rank(Enum):
    BRONZE = "bronze"
    SILVER = "silver"
    GOLD = "gold"
    PLATINUM = "platinum"
    DIAMOND = "diamond"
    MASTER = "master"
    GRANDMASTER = "grandmaster"

    @staticmethod
    def from_value(value: Union[str, "Rank"]) -> "Rank":
        if isinstance(value, Rank):
            return value
        elif isinstance(value, str):
            try:
                return Rank(value.strip().lower())
            except ValueError:
                raise ValueError(f"Unknown rank {value!r}") from None

        raise TypeError(f"Unsupported rank type {type(value)}!")


@dataclass(frozen=True)
class Candidate:
    """
    A registered player who is present for matchmaking.

    Built fresh for every matchmaking run from the caller's player records.
    `mu` and `sigma` describe the player's skill belief and are owned by the
    caller's store.
    """
    player_id: str
    battle_tag: str
    rank: Rank
    available_roles: frozenset[Role]
    mu: float
    sigma: float
    last_played_at: Optional[datetime] = field(default=None, compare=False)

    def __post_init__(self):
        # Accept plain strings and lists from the caller's records
        object.__setattr__(self, "rank", Rank.from_value(self.rank))
        object.__setattr__(
            self,
            "available_roles",
            frozenset(Role.from_value(role) for role in self.available_roles)
        )
        if not self.available_roles:
            raise ValueError(f"Player {self.player_id} has no roles")
        if not self.sigma > 0:
            raise ValueError(
                f"Player {self.player_id} has non positive sigma {self.sigma}"
            )

    def can_play(self, role: Role) -> bool:
        return role in self.available_roles

    @classmethod
    def from_record(
        cls,
        player_id: str,
        battle_tag: str,
        rank: Union[str, Rank],
        roles: Iterable[Union[str, Role]],
        mu: float,
        sigma: float,
        last_played_at: Optional[datetime] = None,
    ) -> "Candidate":
        return cls(
            player_id=player_id,
            battle_tag=battle_tag,
            rank=rank,
            available_roles=frozenset(roles),
            mu=mu,
            sigma=sigma,
            last_played_at=last_played_at,
        )

    def __str__(self) -> str:
        return f"{self.battle_tag}({self.rank.value})"
