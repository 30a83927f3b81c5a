"""
Fail-soft boundary for review analysis functions.

Scraped reviews arrive with missing text, foreign languages and odd
shapes; one bad record must never abort an ingestion batch. Wrapped
functions log the failure and return their documented default instead
of raising.
"""

import copy
import functools
import logging
from typing import Any, Callable

logger = logging.getLogger(__name__)


def fail_soft(default: Any) -> Callable:
    """
    Decorator: return a fresh copy of `default` if the wrapped call raises.

    The failure is logged on the wrapped function's module logger with
    the traceback attached. Returned defaults are deep-copied so callers
    can mutate them safely.

    Usage:
        @fail_soft(default=[])
        def extract_keywords(text, count=5): ...
    """
    def decorator(func: Callable) -> Callable:
        func_logger = logging.getLogger(func.__module__)

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except Exception as e:
                func_logger.error(
                    f"{func.__name__} failed, returning default: {e}",
                    exc_info=True,
                    extra={"operation": func.__name__},
                )
                return copy.deepcopy(default)

        wrapper.default = default
        return wrapper

    return decorator
