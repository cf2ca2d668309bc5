"""
Query planning for the marketplace tools.

Each tool gets one stateless method. The planner decides which indices to
read, hands the raw records to the filter engine, trims to the requested
limit, and renders the answer. Nothing is cached between calls: every
method re-reads the ledger length.
"""

import logging
from typing import Optional

from eacc_mcp.protocols import JobSource
from eacc_mcp.query import formatter
from eacc_mcp.query.fetcher import DEFAULT_CHUNK_SIZE, fetch_up_to
from eacc_mcp.query.filters import apply_filters, count_matching
from eacc_mcp.types import JobFilters, QueryResult

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 10
DEFAULT_OVERSAMPLE = 3


class JobQueryService:
    """Answers the four marketplace queries against a JobSource.

    Search oversampling: filters run after the fetch, so ``search`` scans up
    to ``limit * oversample_factor`` jobs from the start of the ledger to
    absorb filter attrition. When matches are sparse it can return fewer
    than ``limit`` jobs even though more exist further on.
    """

    def __init__(
        self,
        source: JobSource,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        oversample_factor: int = DEFAULT_OVERSAMPLE,
        default_limit: int = DEFAULT_LIMIT,
        payment_unit: str = formatter.DEFAULT_PAYMENT_UNIT,
    ):
        if chunk_size < 1:
            raise ValueError(f"chunk_size must be >= 1, got {chunk_size}")
        if oversample_factor < 1:
            raise ValueError(f"oversample_factor must be >= 1, got {oversample_factor}")
        if default_limit < 1:
            raise ValueError(f"default_limit must be >= 1, got {default_limit}")
        self._source = source
        self.chunk_size = chunk_size
        self.oversample_factor = oversample_factor
        self.default_limit = default_limit
        self.payment_unit = payment_unit

    def _resolve_limit(self, limit: Optional[int]) -> int:
        if limit is None:
            return self.default_limit
        if limit < 1:
            raise ValueError(f"limit must be >= 1, got {limit}")
        return limit

    # === get_job_count ===

    async def job_count(self) -> str:
        total = await self._source.count()
        logger.debug(f"Got count: {total}")
        return formatter.format_job_count(total)

    # === search_jobs ===

    async def search(
        self,
        status: Optional[str] = None,
        category: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> QueryResult:
        """Filtered jobs in ledger order, at most ``limit`` of them."""
        limit = self._resolve_limit(limit)
        filters = JobFilters(status=status, category=category)

        total = await self._source.count()
        logger.info(f"Total jobs in marketplace: {total}")
        if total <= 0:
            return QueryResult(jobs=[], total=0, filters=filters)

        fetched = await fetch_up_to(
            self._source,
            total_available=total,
            max_to_scan=limit * self.oversample_factor,
            chunk_size=self.chunk_size,
            stop_when=lambda jobs: count_matching(jobs, filters) >= limit,
        )
        matched = apply_filters(fetched.jobs, filters)
        return QueryResult(
            jobs=matched[:limit],
            total=total,
            filters=filters,
            failed_ranges=list(fetched.failed_ranges),
        )

    async def search_jobs(
        self,
        status: Optional[str] = None,
        category: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> str:
        result = await self.search(status=status, category=category, limit=limit)
        if result.total == 0:
            return formatter.format_empty_marketplace()
        return formatter.format_search_results(
            result.jobs,
            result.total,
            result.filters,
            result.failed_ranges,
            payment_unit=self.payment_unit,
        )

    # === get_job_details ===

    async def job_details(self, job_id: int) -> str:
        job = await self._source.by_id(job_id)
        if job is None:
            return formatter.format_job_not_found(job_id)
        return formatter.format_job_details(job, payment_unit=self.payment_unit)

    # === get_recent_jobs ===

    async def recent(self, limit: Optional[int] = None) -> QueryResult:
        """The newest ``limit`` jobs, highest ledger index first."""
        limit = self._resolve_limit(limit)
        total = await self._source.count()
        if total <= 0:
            return QueryResult(jobs=[], total=0)

        start = max(0, total - limit)
        window = await self._source.range(start, total)
        jobs = sorted(
            (job for job in window if start <= job.id < total),
            key=lambda job: job.id,
            reverse=True,
        )
        return QueryResult(jobs=jobs[:limit], total=total)

    async def recent_jobs(self, limit: Optional[int] = None) -> str:
        result = await self.recent(limit=limit)
        if result.total == 0:
            return formatter.format_empty_marketplace()
        return formatter.format_recent_jobs(result.jobs, payment_unit=self.payment_unit)
