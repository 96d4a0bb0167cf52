"""
This module is the 'top level' configuration for all the unit tests.

'Real world' fixtures are put here.
If a test suite needs specific mocked versions of dependencies,
these should be put in the ``conftest.py'' relative to it.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import hypothesis
import pytest

from pugmatch.config import TRACE
from pugmatch.matchmaker.selection import SelectionEntry
from pugmatch.matchmaker.weights import GuildWeights
from pugmatch.player_service import PlayerRoster
from pugmatch.players import Candidate, Rank, Role
from pugmatch.rating import seed_rating

logging.getLogger().setLevel(TRACE)
hypothesis.settings.register_profile(
    "nightly",
    max_examples=10_000,
    deadline=None,
    print_blob=True
)

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)
ALL_ROLES = (Role.TANK, Role.DPS, Role.SUPPORT)
# Assigned roles in quota order for a full match
MATCH_ROLES = (
    Role.TANK, Role.TANK,
    Role.DPS, Role.DPS, Role.DPS, Role.DPS,
    Role.SUPPORT, Role.SUPPORT, Role.SUPPORT, Role.SUPPORT,
)


def pytest_configure(config):
    config.addinivalue_line(
        "addopts", "--strict-markers"
    )
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "performance: marks tests as performance tests (deselect with '-m \"not performance\"')"
    )


_player_id_counter = 0


def make_candidate(
    player_id: Optional[str] = None,
    roles=ALL_ROLES,
    rank="gold",
    mu: Optional[float] = None,
    sigma: Optional[float] = None,
    days_since_played: Optional[float] = None,
    last_played_at: Optional[datetime] = None,
) -> Candidate:
    """
    Make a candidate with a unique id. The rating defaults to the seed for the
    rank and `days_since_played` is relative to `NOW`.
    """
    global _player_id_counter
    _player_id_counter += 1
    player_id = player_id or f"user{_player_id_counter}"

    seed_mu, seed_sigma = seed_rating(rank)
    if days_since_played is not None:
        last_played_at = NOW - timedelta(days=days_since_played)

    return Candidate.from_record(
        player_id=player_id,
        battle_tag=f"Player{_player_id_counter}#1234",
        rank=rank,
        roles=roles,
        mu=seed_mu if mu is None else mu,
        sigma=seed_sigma if sigma is None else sigma,
        last_played_at=last_played_at,
    )


def make_roster(tanks: int, dps: int, supports: int, **kwargs) -> list[Candidate]:
    """Single role players, tanks first"""
    return (
        [make_candidate(roles=[Role.TANK], **kwargs) for _ in range(tanks)]
        + [make_candidate(roles=[Role.DPS], **kwargs) for _ in range(dps)]
        + [make_candidate(roles=[Role.SUPPORT], **kwargs) for _ in range(supports)]
    )


def make_selection(ranks=None, mus=None) -> list[SelectionEntry]:
    """
    A valid 10 player selection. `ranks` and `mus` are given in quota order:
    2 tanks, 4 dps, 4 supports.
    """
    ranks = ranks or ["gold"] * len(MATCH_ROLES)
    mus = mus or [None] * len(MATCH_ROLES)
    return [
        SelectionEntry.create(
            make_candidate(roles=[role], rank=rank, mu=mu),
            role,
            100.0 - i
        )
        for i, (role, rank, mu) in enumerate(zip(MATCH_ROLES, ranks, mus))
    ]


@pytest.fixture(scope="session")
def now():
    return NOW


@pytest.fixture(scope="session")
def candidate_factory():
    return make_candidate


@pytest.fixture(scope="session")
def roster_factory():
    return make_roster


@pytest.fixture(scope="session")
def selection_factory():
    return make_selection


@pytest.fixture
def player_roster():
    return PlayerRoster()


@pytest.fixture
def guild_weights():
    return GuildWeights()


@pytest.fixture(params=list(Rank))
def rank(request):
    return request.param
