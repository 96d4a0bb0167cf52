from typing import Iterable, List, Optional, Sequence

import trueskill

from pugmatch.config import config
from pugmatch.rating import AnyRating, Rating

from ..decorators import with_logger
from .typedefs import (
    MatchOutcome,
    PostMatchRatings,
    RatingDict,
    RatingServiceError
)


class GameRatingError(RatingServiceError):
    pass


@with_logger
class GameRater:
    """
    Two team TrueSkill update with a sigma floor.

    Matches are rated in a copy of the configured environment with no
    dynamics factor (tau), so a match can never make a player's rating less
    certain. Sigma is then clamped so it never drops below the configured
    floor, and a sigma that is already below the floor is left alone.
    """

    def __init__(
        self,
        env: Optional[trueskill.TrueSkill] = None,
        sigma_floor: Optional[float] = None
    ):
        self._env = env
        self._sigma_floor = sigma_floor

    @property
    def env(self) -> trueskill.TrueSkill:
        # Look up the global environment lazily so config refreshes apply
        return self._env or trueskill.global_env()

    @property
    def rating_env(self) -> trueskill.TrueSkill:
        env = self.env
        return trueskill.TrueSkill(
            mu=env.mu,
            sigma=env.sigma,
            beta=env.beta,
            tau=0,
            draw_probability=env.draw_probability
        )

    @property
    def sigma_floor(self) -> float:
        if self._sigma_floor is not None:
            return self._sigma_floor
        return config.SIGMA_FLOOR

    def update_post_match(
        self,
        winners: Sequence[AnyRating],
        losers: Sequence[AnyRating],
        is_draw: bool = False
    ) -> PostMatchRatings:
        """
        Compute new ratings after a match. For a draw the order of the two
        teams doesn't matter.

        When the skill gap is too large for trueskill to compute an update
        and the favourites won, the ratings are returned unchanged.

        # Errors
        Raises `ValueError` if either team is empty and `GameRatingError` if
        an upset or a draw can't be rated.
        """
        winners = [Rating.of(rating) for rating in winners]
        losers = [Rating.of(rating) for rating in losers]
        if not winners or not losers:
            raise ValueError("Both teams need at least one player")

        env = self.rating_env
        rating_groups = [
            [env.create_rating(*rating) for rating in team]
            for team in (winners, losers)
        ]
        ranks = [0, 0 if is_draw else 1]

        self._logger.debug("Rating groups: %s", rating_groups)
        self._logger.debug("Ranks: %s", ranks)

        try:
            new_winners, new_losers = env.rate(rating_groups, ranks)
        except (FloatingPointError, ZeroDivisionError) as e:
            if not is_draw and _team_mu(winners) >= _team_mu(losers):
                self._logger.warning(
                    "Skill gap too large to rate %s vs %s, keeping ratings",
                    winners, losers
                )
                return PostMatchRatings(winners, losers)

            raise GameRatingError(
                f"Can't rate match {winners} vs {losers} (draw={is_draw})"
            ) from e

        return PostMatchRatings(
            [self._clamped(old, new) for old, new in zip(winners, new_winners)],
            [self._clamped(old, new) for old, new in zip(losers, new_losers)],
        )

    def rate_teams(
        self,
        team_a: RatingDict,
        team_b: RatingDict,
        outcome: MatchOutcome
    ) -> RatingDict:
        """
        Rate a match between two teams keyed by player id. `outcome` is the
        result for `team_a`.
        """
        if outcome is MatchOutcome.VICTORY:
            winners, losers = team_a, team_b
        elif outcome is MatchOutcome.DEFEAT:
            winners, losers = team_b, team_a
        elif outcome is MatchOutcome.DRAW:
            winners, losers = team_a, team_b
        else:
            raise GameRatingError(f"Inconsistent outcome {outcome}")

        new_winners, new_losers = self.update_post_match(
            list(winners.values()),
            list(losers.values()),
            is_draw=outcome is MatchOutcome.DRAW
        )
        player_rating_map = dict(zip(winners.keys(), new_winners))
        player_rating_map.update(zip(losers.keys(), new_losers))

        return player_rating_map

    def match_quality(
        self,
        team_a: Iterable[AnyRating],
        team_b: Iterable[AnyRating]
    ) -> float:
        """
        TrueSkill draw probability of the match, for diagnostics. 1.0 means
        the teams are perfectly even.
        """
        env = self.env
        rating_groups = [
            [env.create_rating(*Rating.of(rating)) for rating in team]
            for team in (team_a, team_b)
        ]
        return env.quality(rating_groups)

    def _clamped(self, old: Rating, new: trueskill.Rating) -> Rating:
        # A sigma that already sits below the floor is left alone
        sigma = min(old.sigma, max(self.sigma_floor, new.sigma))
        return Rating(new.mu, sigma)


def _team_mu(ratings: List[Rating]) -> float:
    return sum(rating.mu for rating in ratings)


def update_post_match(
    winners: Sequence[AnyRating],
    losers: Sequence[AnyRating],
    is_draw: bool = False
) -> PostMatchRatings:
    return GameRater().update_post_match(winners, losers, is_draw)
