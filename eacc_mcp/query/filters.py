"""Status and category predicates over job records.

All functions are pure and keep input order. A missing field never raises;
it simply fails to match.
"""

from typing import Iterable, List, Optional

from eacc_mcp.types import Job, JobFilters, JobStatus


def matches_status(job: Job, status: Optional[str]) -> bool:
    if status is None or status.lower() == JobStatus.ALL.value:
        return True
    if job.status is None:
        return False
    return job.status.lower() == status.lower()


def matches_category(job: Job, category: Optional[str]) -> bool:
    """Case-insensitive substring match on title, description, or any tag."""
    if category is None or category == "":
        return True
    needle = category.lower()

    if job.title is not None and needle in job.title.lower():
        return True
    if job.description is not None and needle in job.description.lower():
        return True
    if job.tags is not None:
        return any(needle in tag.lower() for tag in job.tags)
    return False


def matches(job: Job, filters: JobFilters) -> bool:
    return matches_status(job, filters.status) and matches_category(job, filters.category)


def apply_filters(jobs: Iterable[Job], filters: JobFilters) -> List[Job]:
    """Keep the jobs that satisfy every supplied filter."""
    if not filters.is_active:
        return list(jobs)
    return [job for job in jobs if matches(job, filters)]


def count_matching(jobs: Iterable[Job], filters: JobFilters) -> int:
    return sum(1 for job in jobs if matches(job, filters))
