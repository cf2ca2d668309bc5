"""
In-memory job source.

A list-backed ledger for testing and local development. Jobs are indexed by
position, exactly like the on-chain ledger.
"""

import logging
from typing import Any, Iterable, List, Mapping, Optional, Union

from eacc_mcp.types import Job

logger = logging.getLogger(__name__)


class InMemoryJobSource:
    """Job source backed by a Python list."""

    def __init__(self, jobs: Optional[Iterable[Union[Job, Mapping[str, Any]]]] = None):
        """Initialize the ledger.

        Args:
            jobs: Jobs (or job mappings) in ledger order. A job's ``id`` must
                equal its position.
        """
        self._jobs: List[Job] = []
        for job in jobs or []:
            self.append(job)

    def append(self, job: Union[Job, Mapping[str, Any]]) -> Job:
        """Add a job at the end of the ledger."""
        if not isinstance(job, Job):
            job = Job.from_dict(job)
        if job.id != len(self._jobs):
            raise ValueError(f"job id {job.id} does not match ledger position {len(self._jobs)}")
        self._jobs.append(job)
        return job

    async def count(self) -> int:
        return len(self._jobs)

    async def range(self, start: int, end: int) -> List[Job]:
        start = max(0, start)
        end = min(len(self._jobs), end)
        if start >= end:
            return []
        logger.debug(f"Reading jobs {start} to {end - 1} from memory")
        return list(self._jobs[start:end])

    async def by_id(self, job_id: int) -> Optional[Job]:
        if job_id < 0 or job_id >= len(self._jobs):
            return None
        return self._jobs[job_id]
