"""Retry decorator for handling transient failures."""

import asyncio
import logging
from functools import wraps
from typing import Any, Callable

logger = logging.getLogger(__name__)


def retry_on_failure(
    max_attempts: int = 3,
    delay: float = 1.0,
    exceptions: tuple = (Exception,),
):
    """Decorator for retrying failed coroutines with exponential backoff.

    Args:
        max_attempts: Maximum number of attempts (default: 3). A value of 1
            calls the coroutine once without retrying.
        delay: Initial delay in seconds between retries (default: 1.0).
        exceptions: Tuple of exception types to catch and retry.

    Returns:
        Decorated coroutine function with retry logic.

    Example:
        @retry_on_failure(max_attempts=3, delay=1.0)
        async def fetch_data():
            # operation that might fail
            pass
    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            for attempt in range(max_attempts):
                try:
                    return await func(*args, **kwargs)
                except exceptions as e:
                    if attempt == max_attempts - 1:
                        # Last attempt failed, re-raise the exception
                        if max_attempts > 1:
                            logger.error(
                                f"All {max_attempts} attempts failed for "
                                f"{func.__name__}: {e}"
                            )
                        raise

                    # Calculate exponential backoff delay
                    wait_time = delay * (2**attempt)
                    logger.warning(
                        f"Attempt {attempt + 1}/{max_attempts} failed for "
                        f"{func.__name__}: {e}. "
                        f"Retrying in {wait_time:.1f}s..."
                    )
                    await asyncio.sleep(wait_time)

            return None

        return wrapper

    return decorator
