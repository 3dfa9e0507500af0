"""Retry utility with exponential backoff for external API calls."""

import asyncio
from typing import Any, Awaitable, Callable, Optional, Tuple, Type, TypeVar

from ..utils.logging import get_logger

logger = get_logger(__name__)

T = TypeVar('T')

# Default retry settings
DEFAULT_MAX_RETRIES = 2
DEFAULT_BASE_DELAY = 0.5  # seconds
DEFAULT_MAX_DELAY = 30.0  # seconds
DEFAULT_BACKOFF_FACTOR = 2.0


async def retry_request(
    func: Callable[..., Awaitable[T]],
    *args: Any,
    max_retries: int = DEFAULT_MAX_RETRIES,
    base_delay: float = DEFAULT_BASE_DELAY,
    max_delay: float = DEFAULT_MAX_DELAY,
    backoff_factor: float = DEFAULT_BACKOFF_FACTOR,
    exceptions: Tuple[Type[Exception], ...] = (Exception,),
    on_retry: Optional[Callable[[Exception, int], None]] = None,
    **kwargs: Any,
) -> T:
    """
    Await a coroutine function with retry logic (non-decorator version).

    Only exceptions listed in ``exceptions`` are retried; anything else
    propagates on the first occurrence.

    Raises:
        The last exception if all retries fail
    """
    delay = base_delay

    for attempt in range(max_retries + 1):
        try:
            return await func(*args, **kwargs)
        except exceptions as e:
            if attempt >= max_retries:
                if max_retries:
                    logger.warning(
                        f"All {max_retries} retries exhausted for "
                        f"{getattr(func, '__name__', func)}: {e}"
                    )
                raise

            logger.debug(
                f"Retry {attempt + 1}/{max_retries} for "
                f"{getattr(func, '__name__', func)}: {e}"
            )
            if on_retry:
                on_retry(e, attempt + 1)

            await asyncio.sleep(delay)
            delay = min(delay * backoff_factor, max_delay)

    # This should never happen, but satisfies type checker
    raise RuntimeError("Unexpected state in retry logic")
