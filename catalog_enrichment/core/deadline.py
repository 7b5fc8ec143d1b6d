import concurrent.futures
import logging
from typing import Callable, TypeVar

from catalog_enrichment.core.errors import EnrichmentTimeoutError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def run_with_deadline(func: Callable[[], T], timeout: float, retries: int = 1) -> T:
    """Call func under a wall-clock deadline, retrying on timeout only.

    Exceptions raised by func propagate unchanged. A timed-out attempt is
    abandoned, not cancelled: its worker thread runs to completion.
    """
    attempts = retries + 1
    for attempt in range(1, attempts + 1):
        executor = concurrent.futures.ThreadPoolExecutor(max_workers=1)
        future = executor.submit(func)
        try:
            return future.result(timeout=timeout)
        except concurrent.futures.TimeoutError:
            logger.warning("Attempt %d/%d exceeded %.0fs deadline", attempt, attempts, timeout)
        finally:
            executor.shutdown(wait=False)

    raise EnrichmentTimeoutError(f"Enrichment did not finish within {timeout:.0f}s after {attempts} attempts")
