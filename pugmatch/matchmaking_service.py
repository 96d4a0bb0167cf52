"""
Creates PUG teams from the players present in a guild
"""

import logging
from datetime import datetime
from typing import Iterable, NamedTuple, Optional, Sequence, Union

from .config import config
from .decorators import timed, with_logger
from .matchmaker.algorithm import MatchOptimizer, PrioritySelector, TeamBalancer
from .matchmaker.selection import SelectionEntry, TeamAssignment
from .matchmaker.weights import GuildID, MatchmakingWeights, WeightsLookup
from .player_service import PlayerLookup
from .players import Candidate, Rank
from .rating import AnyRating, Rating, seed_rating
from .rating_service import GameRater, PostMatchRatings

logger = logging.getLogger(__name__)


class MatchResult(NamedTuple):
    teams: TeamAssignment
    weights: MatchmakingWeights
    # True only when the optimizer search picked the players
    optimized: bool

    @property
    def team1(self) -> tuple[SelectionEntry, ...]:
        return self.teams.team1

    @property
    def team2(self) -> tuple[SelectionEntry, ...]:
        return self.teams.team2


@with_logger
class MatchmakingService:
    """
    Composes player lookup, selection and balancing into a single call.

    Nothing here mutates the player store. Callers persist the resulting
    teams, and must make sure only one match is being created per guild at a
    time.
    """

    def __init__(
        self,
        player_lookup: PlayerLookup,
        weights_lookup: WeightsLookup,
        game_rater: Optional[GameRater] = None,
    ):
        self.player_lookup = player_lookup
        self.weights_lookup = weights_lookup
        self.game_rater = game_rater or GameRater()

    @timed(logger=logger, limit=lambda: config.SLOW_MATCHMAKING_WARNING)
    def create_match_teams(
        self,
        present_user_ids: Iterable[str],
        guild_id: GuildID,
        now: Optional[datetime] = None,
    ) -> MatchResult:
        """
        Pick and balance two teams from the users who are present.

        # Errors
        - `InvalidWeights` if the guild's weights are misconfigured.
        - `InsufficientPlayers` if fewer than 10 present users are registered.
        - `InsufficientRoleComposition` if the registered players can't fill
            every role.
        """
        weights = MatchmakingWeights(*self.weights_lookup.get(guild_id)).validate()

        present_user_ids = list(present_user_ids)
        candidates = self.player_lookup.resolve(present_user_ids)
        self._logger.debug(
            "Guild %s: %d of %d present users are registered",
            guild_id, len(candidates), len(present_user_ids)
        )

        selected, optimized = self.select_players(candidates, weights, now)
        teams = TeamBalancer().balance(selected)

        self._logger.info(
            "Guild %s: created teams %s vs %s with rank sums %s",
            guild_id, teams.team1, teams.team2, teams.rank_sums
        )
        return MatchResult(teams, weights, optimized)

    def select_players(
        self,
        candidates: Sequence[Candidate],
        weights: MatchmakingWeights,
        now: Optional[datetime] = None,
    ) -> tuple[list[SelectionEntry], bool]:
        """
        The 10 players to balance, and whether the optimizer picked them
        rather than falling back to priority order.
        """
        selector = PrioritySelector(now=now)
        if config.USE_MATCH_OPTIMIZER:
            optimizer = MatchOptimizer(weights, selector=selector)
            selected, result = optimizer.run(candidates)
            return selected, result is not None

        return selector.select(candidates), False

    def seed_rating(self, rank: Union[str, Rank]) -> Rating:
        return seed_rating(rank)

    def update_post_match(
        self,
        winners: Sequence[AnyRating],
        losers: Sequence[AnyRating],
        is_draw: bool = False
    ) -> PostMatchRatings:
        """
        New ratings after a match. The caller must persist these together
        with the match result so a failure can't leave ratings half updated.
        """
        return self.game_rater.update_post_match(winners, losers, is_draw)
