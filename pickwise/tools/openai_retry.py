"""Backoff for OpenAI rate limits."""
import logging
import time
from functools import wraps
from typing import Any, Callable, TypeVar

from openai import RateLimitError

from pickwise.app.settings import settings

logger = logging.getLogger(__name__)

T = TypeVar("T")


def retry_with_backoff(
    max_retries: int | None = None,
    initial_delay: float = 1.0,
    max_delay: float = 20.0,
    backoff_factor: float = 2.0,
):
    """
    Retry a call that hits an OpenAI 429, sleeping with exponential backoff.

    Only rate limits are retried. Quota exhaustion (``insufficient_quota``) is
    also reported as a 429 but will not clear by waiting, so it is raised
    immediately. Everything else propagates untouched.

    Args:
        max_retries: Retry attempts after the first call; defaults to
            ``settings.openai_rate_limit_retries``.
        initial_delay: Seconds to wait before the first retry.
        max_delay: Upper bound for a single wait.
        backoff_factor: Multiplier applied to the delay after each retry.
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            retries = settings.openai_rate_limit_retries if max_retries is None else max_retries
            delay = initial_delay
            attempt = 0
            while True:
                try:
                    return func(*args, **kwargs)
                except RateLimitError as exc:
                    error_msg = str(exc)
                    if "insufficient_quota" in error_msg.lower():
                        logger.error("OpenAI quota exhausted, check billing: %s", error_msg)
                        raise
                    if attempt >= retries:
                        logger.error("OpenAI still rate limited after %d attempts: %s", attempt + 1, error_msg)
                        raise
                    attempt += 1
                    logger.warning(
                        "OpenAI rate limit hit (attempt %d/%d), retrying in %.1fs",
                        attempt,
                        retries + 1,
                        delay,
                    )
                    time.sleep(delay)
                    delay = min(delay * backoff_factor, max_delay)

        return wrapper

    return decorator
