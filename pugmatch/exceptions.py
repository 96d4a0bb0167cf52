"""
Common exception definitions
"""

from typing import Iterable, NamedTuple

from .players import Role


class MatchmakingError(Exception):
    """
    Base class for failures the caller is expected to report to the user.

    These are never retried by the matchmaker itself.
    """
    def __init__(self, message, *args, **kwargs):
        super().__init__(message, *args, **kwargs)
        self.message = message


class InsufficientPlayers(MatchmakingError):
    """
    Fewer eligible players are present than a match needs.
    """
    def __init__(self, required: int, found: int, *args, **kwargs):
        super().__init__(
            f"Not enough players. Need {required}+, found {found}.",
            *args,
            **kwargs
        )
        self.required = required
        self.found = found


class RoleDeficit(NamedTuple):
    role: Role
    required: int
    available: int

    def __str__(self) -> str:
        return f"{self.role.value} ({self.available}/{self.required})"


class InsufficientRoleComposition(MatchmakingError):
    """
    The present players can't fill the quota for one or more roles. Holds one
    `RoleDeficit` per role that came up short.
    """
    def __init__(self, deficits: Iterable[RoleDeficit], *args, **kwargs):
        deficits = tuple(deficits)
        super().__init__(
            "Can't fill every role. Missing players for: "
            + ", ".join(str(deficit) for deficit in deficits),
            *args,
            **kwargs
        )
        self.deficits = deficits

    @property
    def roles(self) -> tuple[Role, ...]:
        return tuple(deficit.role for deficit in self.deficits)

    def deficit_for(self, role: Role) -> RoleDeficit:
        for deficit in self.deficits:
            if deficit.role is role:
                return deficit
        raise KeyError(role)


class InvalidWeights(MatchmakingError):
    """
    Guild matchmaking weights are out of range or don't sum to 1.
    """
    def __init__(self, reason: str, *args, **kwargs):
        super().__init__(f"Invalid matchmaking weights: {reason}", *args, **kwargs)
        self.reason = reason
