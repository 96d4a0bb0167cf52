"""
PUG matchmaking core.

# Overview
Picks ad-hoc 5v5 teams for a role based team game out of whoever is present,
and keeps a running skill estimate for every registered player. Everything
around it (chat commands, voice channel polling, storage) lives in the
calling bot. The core only works on player records it is handed and returns
plain values for the caller to persist.

## Selection
A match needs 2 tanks, 4 dps and 4 supports. Players who have waited the
longest since their last match are picked first, and scarce roles are filled
before common ones so flexible players end up where they are needed. Players
who have never played always go first.

## Balancing
The 10 picked players are split into two teams of 1 tank, 2 dps and 2
supports, keeping the teams' total rank as even as a greedy split allows.

When more than 10 players are present, an optimizer may swap some of the
priority picks for players that make the match fairer. How much fairness is
allowed to outweigh waiting time is configured per guild with
`MatchmakingWeights`.

## Ratings
Each player's skill is a Gaussian belief (mu, sigma), seeded from their self
reported rank. After a match, winners gain and losers lose mu in proportion
to how uncertain their rating is, and every sigma shrinks towards a floor.
The displayed skill rating (SR) is the conservative `(mu - 3 * sigma) * 100`.
"""

from .config import TRACE, config
from .exceptions import (
    InsufficientPlayers,
    InsufficientRoleComposition,
    InvalidWeights,
    MatchmakingError,
    RoleDeficit
)
from .matchmaker import (
    GuildWeights,
    MatchmakingWeights,
    SelectionEntry,
    TeamAssignment
)
from .matchmaking_service import MatchmakingService, MatchResult
from .player_service import PlayerLookup, PlayerRoster
from .players import Candidate, Rank, Role
from .rating import Rating, displayed_rating, seed_rating
from .rating_service import update_post_match

__author__ = "PUG matchmaking contributors"
__license__ = "GPLv3"

__all__ = (
    "Candidate",
    "GuildWeights",
    "InsufficientPlayers",
    "InsufficientRoleComposition",
    "InvalidWeights",
    "MatchResult",
    "MatchmakingError",
    "MatchmakingService",
    "MatchmakingWeights",
    "PlayerLookup",
    "PlayerRoster",
    "Rank",
    "Rating",
    "RoleDeficit",
    "Role",
    "SelectionEntry",
    "TRACE",
    "TeamAssignment",
    "config",
    "displayed_rating",
    "seed_rating",
    "update_post_match",
)
