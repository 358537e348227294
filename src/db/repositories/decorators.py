import asyncio
from collections.abc import Awaitable, Callable
import functools
import logging
from typing import Any, TypeVar

from sqlalchemy.exc import OperationalError, SQLAlchemyError

from core.exceptions import DatabaseError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def with_retry(max_retries: int = 3, log_prefix: str = "", base_delay: float = 0.1):
    """Retry a repository read on OperationalError with exponential backoff.

    Any SQLAlchemyError left after the last attempt surfaces as DatabaseError.

    Args:
        max_retries: Maximum number of attempts
        log_prefix: Operation description for log messages
        base_delay: Delay before the second attempt, doubled each time
    """

    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            operation = log_prefix or func.__name__
            key = _lookup_key(args, kwargs)

            for attempt in range(max_retries):
                try:
                    return await func(*args, **kwargs)
                except OperationalError as e:
                    if attempt < max_retries - 1:
                        logger.warning("OperationalError while %s %s (attempt %d): %s", operation, key, attempt + 1, e)
                        await asyncio.sleep(base_delay * (2**attempt))
                        continue
                    logger.error("Database error while %s %s: %s", operation, key, e)
                    raise DatabaseError(message="Database failure") from e
                except SQLAlchemyError as e:
                    logger.error("Database error while %s %s: %s", operation, key, e)
                    raise DatabaseError(message="Database failure") from e

            raise DatabaseError(message="Database failure")

        return wrapper

    return decorator


def _lookup_key(args: tuple, kwargs: dict) -> str:
    # First positional argument is the session
    if len(args) > 1 and isinstance(args[1], int | str):
        return str(args[1])
    for key in ("id", "email"):
        if key in kwargs:
            return f"{key}={kwargs[key]}"
    return ""
