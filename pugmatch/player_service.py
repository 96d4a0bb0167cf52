"""
Looks up registered players for matchmaking
"""

from dataclasses import replace
from datetime import datetime
from typing import Iterable, Iterator, Optional, Protocol, Union

from .decorators import with_logger
from .players import Candidate, Rank, Role
from .rating import Rating, seed_rating


class PlayerLookup(Protocol):
    def resolve(self, user_ids: Iterable[str]) -> list[Candidate]:
        """
        Return the registered players among `user_ids`. Unknown ids are left
        out.
        """
        ...


@with_logger
class PlayerRoster:
    """
    In memory store of registered players, keyed by user id.
    """

    def __init__(self, players: Iterable[Candidate] = ()):
        self._players: dict[str, Candidate] = {}
        for player in players:
            self[player.player_id] = player

    def __len__(self) -> int:
        return len(self._players)

    def __iter__(self) -> Iterator[Candidate]:
        return iter(self._players.values())

    def __contains__(self, user_id: str) -> bool:
        return user_id in self._players

    def __getitem__(self, user_id: str) -> Optional[Candidate]:
        return self._players.get(user_id)

    def __setitem__(self, user_id: str, player: Candidate) -> None:
        self._players[user_id] = player

    def register(
        self,
        user_id: str,
        battle_tag: str,
        roles: Iterable[Union[str, Role]],
        rank: Union[str, Rank],
        rating: Optional[Rating] = None,
        last_played_at: Optional[datetime] = None,
    ) -> Candidate:
        """
        Add a player, seeding their rating from their rank unless one is
        given.
        """
        mu, sigma = rating or seed_rating(rank)
        player = Candidate.from_record(
            user_id, battle_tag, rank, roles, mu, sigma, last_played_at
        )
        self[user_id] = player
        self._logger.debug("Registered %s as %s", user_id, player)
        return player

    def update_rating(self, user_id: str, rating: Rating) -> Candidate:
        mu, sigma = rating
        self[user_id] = replace(self._players[user_id], mu=mu, sigma=sigma)
        return self[user_id]

    def mark_played(self, user_ids: Iterable[str], played_at: datetime) -> None:
        for user_id in user_ids:
            self[user_id] = replace(
                self._players[user_id],
                last_played_at=played_at
            )

    def resolve(self, user_ids: Iterable[str]) -> list[Candidate]:
        resolved = []
        seen = set()
        for user_id in user_ids:
            if user_id in seen:
                continue
            seen.add(user_id)

            player = self[user_id]
            if player is None:
                self._logger.debug("Ignoring unregistered user %s", user_id)
                continue
            resolved.append(player)

        return resolved
