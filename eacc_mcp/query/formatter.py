"""Text rendering for tool results.

Pure functions: no I/O, no source access. Every optional field is checked
with ``is None`` so zero amounts and empty titles still render as values.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Sequence, Tuple

from eacc_mcp.types import Job, JobFilters

DEFAULT_PAYMENT_UNIT = "ETH"
TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def format_timestamp(timestamp: Optional[int]) -> Optional[str]:
    """Unix seconds to local display time; None if absent or out of range."""
    if timestamp is None:
        return None
    try:
        return datetime.fromtimestamp(timestamp).strftime(TIME_FORMAT)
    except (OverflowError, OSError, ValueError):
        return None


def format_payment(
    amount: Optional[Decimal], unit: str = DEFAULT_PAYMENT_UNIT, token: Optional[str] = None
) -> Optional[str]:
    """Native amounts carry ``unit``; token amounts are base units of ``token``."""
    if amount is None:
        return None
    if token is not None:
        return f"{amount:f} base units of token {token}"
    return f"{amount:f} {unit}"


def _title(job: Job) -> str:
    return job.title if job.title is not None else "Untitled"


def _partial_note(failed_ranges: Sequence[Tuple[int, int]]) -> str:
    spans = ", ".join(f"{start}-{end - 1}" for start, end in failed_ranges)
    return (
        f"Note: {len(failed_ranges)} batch(es) could not be fetched (jobs {spans}); "
        "results may be incomplete."
    )


def _with_note(text: str, failed_ranges: Sequence[Tuple[int, int]]) -> str:
    if not failed_ranges:
        return text
    return f"{text}\n\n{_partial_note(failed_ranges)}"


# =============================================================================
# COUNT
# =============================================================================


def format_job_count(total: int) -> str:
    return f"There are currently {total} jobs on the marketplace."


def format_empty_marketplace() -> str:
    return "No jobs found on the marketplace."


# =============================================================================
# LISTS
# =============================================================================


def format_job_line(
    index: int,
    job: Job,
    payment_unit: str = DEFAULT_PAYMENT_UNIT,
    show_escrow: bool = False,
) -> str:
    """One numbered entry. ``index`` is 1-based."""
    ident = f"Job #{job.id}"
    if show_escrow and job.escrow_id is not None:
        ident += f" (escrow {job.escrow_id})"

    parts = [f"{index}. {ident}: {_title(job)}"]
    if job.status is not None:
        parts.append(job.status)
    payment = format_payment(job.payment_amount, payment_unit, job.payment_token)
    if payment is not None:
        parts.append(payment)
    created = format_timestamp(job.timestamp)
    if created is not None:
        parts.append(created)
    return " - ".join(parts)


def format_job_list(
    jobs: Sequence[Job], payment_unit: str = DEFAULT_PAYMENT_UNIT, show_escrow: bool = False
) -> str:
    return "\n".join(
        format_job_line(i, job, payment_unit, show_escrow) for i, job in enumerate(jobs, 1)
    )


def describe_filters(filters: JobFilters) -> str:
    """``status: x, category: y`` for the filters that actually narrow."""
    parts: List[str] = []
    if filters.narrows_status:
        parts.append(f"status: {filters.status}")
    if filters.narrows_category:
        parts.append(f"category: {filters.category}")
    return ", ".join(parts)


def format_search_results(
    jobs: Sequence[Job],
    total: int,
    filters: JobFilters,
    failed_ranges: Sequence[Tuple[int, int]] = (),
    payment_unit: str = DEFAULT_PAYMENT_UNIT,
) -> str:
    if not jobs:
        if filters.is_active:
            status = filters.status if filters.narrows_status else "any"
            category = filters.category if filters.narrows_category else "any"
            text = (
                f"No jobs found matching your criteria (status: {status}, category: {category})."
            )
        else:
            text = "No jobs found."
        return _with_note(text, failed_ranges)

    summary = describe_filters(filters)
    filter_text = f" (filtered by {summary})" if summary else ""
    header = f"Found {len(jobs)} of {total} total jobs{filter_text}:"
    return _with_note(f"{header}\n\n{format_job_list(jobs, payment_unit)}", failed_ranges)


def format_recent_jobs(
    jobs: Sequence[Job],
    failed_ranges: Sequence[Tuple[int, int]] = (),
    payment_unit: str = DEFAULT_PAYMENT_UNIT,
) -> str:
    if not jobs:
        return _with_note("No recent jobs found.", failed_ranges)
    header = f"Most recent jobs ({len(jobs)} found):"
    body = format_job_list(jobs, payment_unit, show_escrow=True)
    return _with_note(f"{header}\n\n{body}", failed_ranges)


# =============================================================================
# DETAILS
# =============================================================================


def format_job_details(job: Job, payment_unit: str = DEFAULT_PAYMENT_UNIT) -> str:
    payment = format_payment(job.payment_amount, payment_unit, job.payment_token)
    created = format_timestamp(job.timestamp)

    lines = [
        f"Job #{job.id} Details:",
        f"Title: {_title(job)}",
        f"Description: {job.description if job.description is not None else 'No content available'}",
        f"Content hash: {job.content_hash if job.content_hash is not None else 'No content available'}",
        f"Payment: {payment if payment is not None else 'TBD'}",
        f"Status: {job.status if job.status is not None else 'Unknown'}",
        f"Owner: {job.creator if job.creator is not None else 'Unknown'}",
    ]
    if job.worker is not None:
        lines.append(f"Worker: {job.worker}")
    if job.escrow_id is not None:
        lines.append(f"Escrow ID: {job.escrow_id}")
    if job.tags:
        lines.append(f"Tags: {', '.join(job.tags)}")
    lines.append(f"Created: {created if created is not None else 'Unknown'}")
    return "\n".join(lines)


def format_job_not_found(job_id: int) -> str:
    return f"Job #{job_id} not found."
