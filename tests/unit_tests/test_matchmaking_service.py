import logging
from collections import Counter
from unittest import mock

import pytest

from pugmatch.exceptions import (
    InsufficientPlayers,
    InsufficientRoleComposition,
    InvalidWeights
)
from pugmatch.matchmaker.weights import MatchmakingWeights
from pugmatch.matchmaking_service import MatchmakingService
from pugmatch.player_service import PlayerRoster
from pugmatch.players import Role
from pugmatch.rating import Rating


@pytest.fixture
def service(player_roster, guild_weights):
    return MatchmakingService(player_roster, guild_weights)


def register_players(roster, count, roles=("tank", "dps", "support"), rank="gold"):
    start = len(roster)
    return [
        roster.register(f"user{i}", f"Player{i}#1234", roles, rank).player_id
        for i in range(start, start + count)
    ]


def assert_valid_teams(result):
    for team in (result.team1, result.team2):
        assert len(team) == 5
        assert Counter(entry.assigned_role for entry in team) == {
            Role.TANK: 1, Role.DPS: 2, Role.SUPPORT: 2
        }
    assert len(result.teams.player_ids) == 10


def test_create_match_same_rank(service, player_roster, now):
    user_ids = register_players(player_roster, 10)

    result = service.create_match_teams(user_ids, "guild", now=now)

    assert_valid_teams(result)
    assert result.teams.rank_imbalance == 0
    assert result.teams.player_ids == set(user_ids)
    assert result.weights == MatchmakingWeights(0.2, 0.8)


def test_create_match_drops_unregistered(service, player_roster, now):
    user_ids = register_players(player_roster, 10)

    result = service.create_match_teams(
        ["stranger"] + user_ids + ["other"], "guild", now=now
    )

    assert result.teams.player_ids == set(user_ids)


def test_create_match_unregistered_count_against(service, player_roster, now):
    user_ids = register_players(player_roster, 9)

    with pytest.raises(InsufficientPlayers) as e:
        service.create_match_teams(user_ids + ["a", "b", "c"], "guild", now=now)

    assert e.value.required == 10
    assert e.value.found == 9


def test_create_match_duplicate_ids(service, player_roster, now):
    user_ids = register_players(player_roster, 9)

    with pytest.raises(InsufficientPlayers):
        service.create_match_teams(user_ids + user_ids[:1], "guild", now=now)


def test_create_match_dps_only(service, player_roster, now):
    user_ids = register_players(player_roster, 10, roles=["dps"])

    with pytest.raises(InsufficientRoleComposition) as e:
        service.create_match_teams(user_ids, "guild", now=now)

    assert set(e.value.roles) == {Role.TANK, Role.SUPPORT}


def test_create_match_invalid_weights(player_roster, now):
    user_ids = register_players(player_roster, 10)
    weights_lookup = mock.Mock()
    weights_lookup.get.return_value = MatchmakingWeights(0.7, 0.7)
    player_lookup = mock.Mock(wraps=player_roster)
    service = MatchmakingService(player_lookup, weights_lookup)

    with pytest.raises(InvalidWeights):
        service.create_match_teams(user_ids, "guild", now=now)

    weights_lookup.get.assert_called_once_with("guild")
    player_lookup.resolve.assert_not_called()


def test_create_match_uses_guild_weights(service, player_roster, guild_weights, now):
    user_ids = register_players(player_roster, 12)
    guild_weights.set("guild", MatchmakingWeights(1.0, 0.0))

    result = service.create_match_teams(user_ids, "guild", now=now)

    assert_valid_teams(result)
    assert result.weights == MatchmakingWeights(1.0, 0.0)
    # Every role pool holds the same few flex players, so there is nothing
    # for the optimizer to choose between
    assert not result.optimized


def test_create_match_optimized(service, player_roster, guild_weights, now):
    user_ids = register_players(player_roster, 2, roles=["tank"])
    user_ids += register_players(player_roster, 5, roles=["dps"])
    user_ids += register_players(player_roster, 4, roles=["support"])
    guild_weights.set("guild", MatchmakingWeights(1.0, 0.0))

    result = service.create_match_teams(user_ids, "guild", now=now)

    assert_valid_teams(result)
    assert result.optimized
    assert len(result.teams.player_ids & set(user_ids[2:7])) == 4


def test_create_match_exact_pool_not_optimized(service, player_roster, now):
    user_ids = register_players(player_roster, 2, roles=["tank"])
    user_ids += register_players(player_roster, 4, roles=["dps"])
    user_ids += register_players(player_roster, 4, roles=["support"])

    result = service.create_match_teams(user_ids, "guild", now=now)

    assert_valid_teams(result)
    assert not result.optimized
    assert result.teams.player_ids == set(user_ids)


def test_create_match_priority_only(mocker, service, player_roster, now):
    mocker.patch("pugmatch.matchmaking_service.config.USE_MATCH_OPTIMIZER", False)
    user_ids = register_players(player_roster, 12)
    for user_id in user_ids[:2]:
        player_roster.mark_played([user_id], now)

    result = service.create_match_teams(user_ids, "guild", now=now)

    assert_valid_teams(result)
    assert not result.optimized
    assert result.teams.player_ids == set(user_ids[2:])


def test_create_match_picks_overdue_players(service, player_roster, now):
    tanks = register_players(player_roster, 3, roles=["tank"])
    others = register_players(player_roster, 4, roles=["dps"])
    others += register_players(player_roster, 4, roles=["support"])
    player_roster.mark_played(others, now)
    player_roster.mark_played(tanks[:1], now)

    result = service.create_match_teams(tanks + others, "guild", now=now)

    assert result.teams.player_ids == set(tanks[1:] + others)


def test_create_match_slow_warning(mocker, service, player_roster, now, caplog):
    mocker.patch(
        "pugmatch.matchmaking_service.config.SLOW_MATCHMAKING_WARNING", 0
    )
    user_ids = register_players(player_roster, 10)

    with caplog.at_level(logging.WARNING):
        service.create_match_teams(user_ids, "guild", now=now)

    assert "create_match_teams took" in caplog.text


def test_seed_rating(service):
    assert service.seed_rating("platinum") == Rating(30.0, 5.0)


def test_update_post_match(service):
    game_rater = mock.Mock()
    service = MatchmakingService(PlayerRoster(), service.weights_lookup, game_rater)
    winners, losers = [Rating(25.0, 5.0)], [Rating(20.0, 5.0)]

    service.update_post_match(winners, losers, is_draw=True)

    game_rater.update_post_match.assert_called_once_with(winners, losers, True)


def test_update_post_match_default_rater(service):
    (winner,), (loser,) = service.update_post_match(
        [Rating(25.0, 5.0)], [Rating(25.0, 5.0)]
    )

    assert winner.mu > 25.0 > loser.mu
