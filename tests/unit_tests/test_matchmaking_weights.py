import math

import pytest

from pugmatch.exceptions import InvalidWeights
from pugmatch.matchmaker.weights import GuildWeights, MatchmakingWeights


def test_default_weights():
    assert MatchmakingWeights.default() == MatchmakingWeights(0.2, 0.8)


@pytest.mark.parametrize("weights", (
    (0.2, 0.8),
    (1.0, 0.0),
    (0, 1),
    (0.1 + 0.2, 0.7),
))
def test_valid_weights(weights):
    assert MatchmakingWeights(*weights).validate() == weights


@pytest.mark.parametrize("weights", (
    (0.5, 0.6),
    (0.3, 0.3),
    (-0.2, 1.2),
    (1.5, -0.5),
    (math.nan, 0.5),
    (math.inf, 0.0),
    ("0.5", 0.5),
    (None, 1.0),
))
def test_invalid_weights(weights):
    with pytest.raises(InvalidWeights):
        MatchmakingWeights(*weights).validate()


def test_invalid_weights_message():
    with pytest.raises(InvalidWeights) as e:
        MatchmakingWeights(0.5, 0.25).validate()

    assert e.value.reason == "weights must add up to 1, got 0.75"
    assert e.value.message.startswith("Invalid matchmaking weights")


def test_guild_weights_default(guild_weights):
    assert guild_weights.get("guild") == MatchmakingWeights(0.2, 0.8)
    assert "guild" not in guild_weights


def test_guild_weights_set(guild_weights):
    guild_weights.set("guild", (0.5, 0.5))

    assert "guild" in guild_weights
    assert guild_weights.get("guild") == MatchmakingWeights(0.5, 0.5)
    assert guild_weights.get("other") == MatchmakingWeights.default()


def test_guild_weights_set_invalid(guild_weights):
    with pytest.raises(InvalidWeights):
        guild_weights.set("guild", (0.5, 0.6))

    assert "guild" not in guild_weights


def test_guild_weights_reset(guild_weights):
    guild_weights.set("guild", (1.0, 0.0))
    guild_weights.reset("guild")
    guild_weights.reset("unknown")

    assert guild_weights.get("guild") == MatchmakingWeights.default()


def test_guild_weights_init():
    guild_weights = GuildWeights({"guild": MatchmakingWeights(0.4, 0.6)})

    assert guild_weights.get("guild") == MatchmakingWeights(0.4, 0.6)

    with pytest.raises(InvalidWeights):
        GuildWeights({"guild": MatchmakingWeights(0.4, 0.4)})


def test_default_weights_follow_config(mocker, guild_weights):
    mocker.patch("pugmatch.matchmaker.weights.config.DEFAULT_FAIRNESS_WEIGHT", 0.5)
    mocker.patch("pugmatch.matchmaker.weights.config.DEFAULT_PRIORITY_WEIGHT", 0.5)

    assert guild_weights.get("guild") == MatchmakingWeights(0.5, 0.5)
