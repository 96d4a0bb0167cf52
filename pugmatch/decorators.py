"""
Helper decorators
"""

import logging
import time
from functools import wraps
from typing import Callable, Union

_logger = logging.getLogger(__name__)

Limit = Union[float, Callable[[], float]]


def with_logger(cls):
    """
    Give a class a `_logger` named after it, so log lines from the matchmaker
    can be filtered by component.

    # Examples
    >>> @with_logger
    ... class Balancer:
    ...    pass
    >>> Balancer._logger.name
    'Balancer'
    """
    cls._logger = logging.getLogger(cls.__qualname__)
    return cls


def _limit_seconds(limit: Limit) -> float:
    if callable(limit):
        return limit()
    return limit


def _timed_decorator(f, logger=_logger, limit: Limit = 0.2):
    @wraps(f)
    def wrapper(*args, **kwargs):
        start = time.perf_counter()
        try:
            return f(*args, **kwargs)
        finally:
            elapsed = time.perf_counter() - start
            if elapsed >= _limit_seconds(limit):
                logger.warning("%s took %s s to finish", f.__name__, str(elapsed))

    return wrapper


def timed(*args, **kwargs):
    """
    Log a warning when a call takes longer than `limit` seconds. The limit is
    looked up on every call when it is given as a function, which lets it
    follow config refreshes. Failed calls are timed too.

    # Examples
    >>> import time
    >>> from unittest import mock
    >>> log = mock.Mock()
    >>> @timed(logger=log, limit=lambda: 0.05)
    ... def select():
    ...    time.sleep(0.1)
    >>> select()
    >>> log.warning.assert_called_once()
    """
    if len(args) == 1 and callable(args[0]):
        return _timed_decorator(args[0])
    return lambda f: _timed_decorator(f, *args, **kwargs)
