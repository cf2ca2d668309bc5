"""
Pytest fixtures and test configuration for eacc-mcp tests.
"""

import logging
from decimal import Decimal
from typing import Iterable, List, Optional, Set, Tuple

import pytest

from eacc_mcp.config import get_settings
from eacc_mcp.mcp.server import reset_source
from eacc_mcp.query.planner import JobQueryService
from eacc_mcp.sources.memory import InMemoryJobSource
from eacc_mcp.types import Job

# Statuses of the five-job ledger used throughout the tests
SAMPLE_STATUSES = ["open", "closed", "open", "open", "taken"]


def make_job(job_id: int, **fields) -> Job:
    """Build a Job with only the given fields present."""
    return Job(id=job_id, **fields)


def make_ledger(count: int, statuses: Optional[List[str]] = None) -> List[Job]:
    """A ledger of ``count`` jobs with cycling statuses and simple titles."""
    statuses = statuses or ["open", "taken", "closed"]
    return [
        Job(
            id=i,
            title=f"Job number {i}",
            status=statuses[i % len(statuses)],
            payment_amount=Decimal(i),
            timestamp=1_700_000_000 + i * 60,
        )
        for i in range(count)
    ]


class RecordingJobSource(InMemoryJobSource):
    """In-memory source that records calls and can fail chosen windows."""

    def __init__(self, jobs: Iterable[Job] = (), fail_starts: Iterable[int] = ()):
        super().__init__(jobs)
        self.fail_starts: Set[int] = set(fail_starts)
        self.range_calls: List[Tuple[int, int]] = []
        self.count_calls = 0
        self.by_id_calls: List[int] = []

    async def count(self) -> int:
        self.count_calls += 1
        return await super().count()

    async def range(self, start: int, end: int) -> List[Job]:
        self.range_calls.append((start, end))
        if start in self.fail_starts:
            raise ConnectionError(f"RPC error reading {start}-{end}")
        return await super().range(start, end)

    async def by_id(self, job_id: int) -> Optional[Job]:
        self.by_id_calls.append(job_id)
        return await super().by_id(job_id)


class BrokenJobSource:
    """Source whose every read fails."""

    def __init__(self, message: str = "RPC unavailable"):
        self.message = message

    async def count(self) -> int:
        raise ConnectionError(self.message)

    async def range(self, start: int, end: int) -> List[Job]:
        raise ConnectionError(self.message)

    async def by_id(self, job_id: int) -> Optional[Job]:
        raise ConnectionError(self.message)


@pytest.fixture(autouse=True)
def clean_state():
    """Drop cached settings, the server's data source and package log handlers."""
    get_settings.cache_clear()
    reset_source()
    yield
    get_settings.cache_clear()
    reset_source()
    package_logger = logging.getLogger("eacc_mcp")
    package_logger.handlers.clear()
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True


@pytest.fixture
def sample_jobs() -> List[Job]:
    """Five jobs, statuses [open, closed, open, open, taken]."""
    return [
        Job(
            id=0,
            escrow_id=100,
            title="Design a logo",
            description="Vector logo for a DeFi project",
            tags=("digital", "design"),
            status="open",
            payment_amount=Decimal("0.5"),
            timestamp=1_700_000_000,
            creator="0x1111111111111111111111111111111111111111",
        ),
        Job(
            id=1,
            escrow_id=101,
            title="Edit a promo video",
            tags=("video",),
            status="closed",
            payment_amount=Decimal("1.25"),
            timestamp=1_700_000_600,
            creator="0x2222222222222222222222222222222222222222",
            worker="0x3333333333333333333333333333333333333333",
        ),
        Job(
            id=2,
            title="Write smart contract tests",
            description="Foundry test suite for an escrow contract",
            tags=("development",),
            status="Open",
            timestamp=1_700_001_200,
        ),
        Job(id=3, status="open"),
        Job(
            id=4,
            escrow_id=104,
            title="Translate whitepaper",
            description="English to Spanish, digital delivery",
            status="taken",
            payment_amount=Decimal("2"),
        ),
    ]


@pytest.fixture
def source(sample_jobs) -> RecordingJobSource:
    return RecordingJobSource(sample_jobs)


@pytest.fixture
def query_service(source) -> JobQueryService:
    return JobQueryService(source)


@pytest.fixture
def empty_source() -> RecordingJobSource:
    return RecordingJobSource([])
