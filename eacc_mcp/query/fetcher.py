"""Chunked ledger scan with per-chunk failure tolerance."""

import logging
from typing import Callable, List, Optional, Set

from eacc_mcp.protocols import JobSource
from eacc_mcp.types import FetchResult, Job

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 20


async def fetch_up_to(
    source: JobSource,
    total_available: int,
    max_to_scan: int,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    stop_when: Optional[Callable[[List[Job]], bool]] = None,
) -> FetchResult:
    """Read jobs from the start of the ledger in fixed-size windows.

    Windows are ``[start, min(start + chunk_size, bound))`` with
    ``bound = min(total_available, max_to_scan)`` and are awaited one at a
    time. A window whose read raises is logged and skipped; the scan goes on
    with the next one. After every successful window ``stop_when`` is asked
    whether enough has been collected.

    Args:
        source: Where to read from.
        total_available: Ledger length at call time.
        max_to_scan: Upper bound on indices to request.
        chunk_size: Window width.
        stop_when: Called with the jobs accumulated so far; returning True
            ends the scan early.

    Returns:
        FetchResult with jobs in ledger order, no duplicate ids, and the
        windows that failed.

    Raises:
        ValueError: If chunk_size is not positive.
    """
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be >= 1, got {chunk_size}")

    result = FetchResult()
    bound = min(total_available, max_to_scan)
    if bound <= 0:
        return result

    seen: Set[int] = set()
    for start in range(0, bound, chunk_size):
        end = min(start + chunk_size, bound)
        logger.debug(f"Fetching jobs {start} to {end - 1}")
        result.scanned = end

        try:
            batch = await source.range(start, end)
        except Exception as e:
            logger.warning(f"Error fetching batch {start}-{end}: {type(e).__name__}: {e}")
            result.failed_ranges.append((start, end))
            continue

        for job in batch:
            # Each index belongs to exactly one window
            if job.id < start or job.id >= end or job.id in seen:
                continue
            seen.add(job.id)
            result.jobs.append(job)

        if stop_when is not None and stop_when(result.jobs):
            logger.debug(f"Scan target met after {len(result.jobs)} jobs (scanned {end})")
            break

    if result.partial:
        logger.info(
            f"Scan finished with {len(result.failed_ranges)} failed batch(es); "
            f"{len(result.jobs)} jobs collected"
        )
    return result
