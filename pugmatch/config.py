"""
Matchmaking config variables
"""

import logging
import os
from typing import Callable

import trueskill
import yaml

from .decorators import with_logger

# Logging setup
TRACE = 5
logging.addLevelName(TRACE, "TRACE")


@with_logger
class ConfigurationStore:
    def __init__(self):
        """
        Change default values here.
        """
        self.LOG_LEVEL = "DEBUG"

        # Team shape. A match is two teams of TEAM_COMPOSITION each.
        self.REQUIRED_PLAYERS = 10
        self.TEAM_COMPOSITION = {
            "tank": 1,
            "dps": 2,
            "support": 2,
        }
        # Scarce roles are filled first so flex players don't get used up
        # on roles that are easy to fill.
        self.ROLE_FILL_ORDER = ["tank", "support", "dps"]
        self.BALANCE_ROLE_ORDER = ["tank", "dps", "support"]

        self.RANK_VALUES = {
            "bronze": 1,
            "silver": 2,
            "gold": 3,
            "platinum": 4,
            "diamond": 5,
            "master": 6,
            "grandmaster": 7,
        }

        # Rating seeds, in TrueSkill units
        self.RANK_SEEDING = {
            "bronze": 15.0,
            "silver": 20.0,
            "gold": 25.0,
            "platinum": 30.0,
            "diamond": 35.0,
            "master": 40.0,
            "grandmaster": 45.0,
        }
        # Seeded players start with less uncertainty than a blank rating
        self.SEEDED_SIGMA = 5.0
        # Deviation never shrinks below this after a match
        self.SIGMA_FLOOR = 1.0

        self.TRUESKILL_MU = 25.0
        self.TRUESKILL_SIGMA = 25.0 / 3
        # Skill difference that gives the stronger side ~76% win chance
        self.TRUESKILL_BETA = 25.0 / 6
        self.TRUESKILL_TAU = 25.0 / 300
        self.TRUESKILL_DRAW_PROBABILITY = 0.10

        # Per guild weights used when the guild has none configured
        self.DEFAULT_FAIRNESS_WEIGHT = 0.2
        self.DEFAULT_PRIORITY_WEIGHT = 0.8

        # Values for the weighted match optimizer
        self.USE_MATCH_OPTIMIZER = True
        self.SKILL_BAND_BUFFER = 0.5
        # Buffer used when every base player has the same mean
        self.DEFAULT_BAND_BUFFER = 5.0
        self.BAND_EXPANSION_FACTOR = 1.25
        # Never played players count as ten years overdue in the cost function
        self.MAX_PRIORITY_DAYS = 365 * 10
        self.FAIRNESS_EXPONENT = 2.0
        self.PRIORITY_EXPONENT = 1.5

        # Seconds before a match creation is reported as slow
        self.SLOW_MATCHMAKING_WARNING = 0.5

        self._defaults = {
            key: value for key, value in vars(self).items() if key.isupper()
        }

        self._callbacks: dict[str, Callable] = {}
        self.refresh()

    def refresh(self) -> None:
        new_values = self._defaults.copy()

        config_file = os.getenv("CONFIGURATION_FILE")
        if config_file is not None:
            try:
                with open(config_file) as f:
                    new_values.update(yaml.safe_load(f))
            except FileNotFoundError:
                self._logger.warning(
                    "No configuration file found at %s",
                    config_file
                )
            except TypeError:
                self._logger.info(
                    "Configuration file at %s appears to be empty",
                    config_file
                )

        triggered_callback_keys = tuple(
            key
            for key in new_values
            if key in self._callbacks
            and hasattr(self, key)
            and getattr(self, key) != new_values[key]
        )

        for key, new_value in new_values.items():
            old_value = getattr(self, key, None)
            if new_value != old_value:
                self._logger.info(
                    "New value for %s: %r -> %r", key, old_value, new_value
                )
            setattr(self, key, new_value)

        for key in triggered_callback_keys:
            self._dispatch_callback(key)

    def register_callback(self, key: str, callback: Callable) -> None:
        self._callbacks[key.upper()] = callback

    def _dispatch_callback(self, key: str) -> None:
        self._callbacks[key]()

    @property
    def role_quota(self) -> dict[str, int]:
        """Number of players needed per role across both teams"""
        return {
            role: count * 2 for role, count in self.TEAM_COMPOSITION.items()
        }


def set_log_level():
    logger = logging.getLogger()
    logger.setLevel(config.LOG_LEVEL)


def setup_trueskill():
    trueskill.setup(
        mu=config.TRUESKILL_MU,
        sigma=config.TRUESKILL_SIGMA,
        beta=config.TRUESKILL_BETA,
        tau=config.TRUESKILL_TAU,
        draw_probability=config.TRUESKILL_DRAW_PROBABILITY
    )


config = ConfigurationStore()
config.register_callback("LOG_LEVEL", set_log_level)
for _key in (
    "TRUESKILL_MU",
    "TRUESKILL_SIGMA",
    "TRUESKILL_BETA",
    "TRUESKILL_TAU",
    "TRUESKILL_DRAW_PROBABILITY",
):
    config.register_callback(_key, setup_trueskill)
setup_trueskill()
