"""Handlers for the marketplace job tools."""

from typing import Any, Dict

from eacc_mcp.config import get_settings
from eacc_mcp.mcp.sanitize import sanitize_string, validate_enum, validate_integer
from eacc_mcp.query.planner import JobQueryService
from eacc_mcp.types import VALID_STATUS_FILTERS

# ---------------------------------------------------------------------------
# Validators
# ---------------------------------------------------------------------------


def _validate_limit(arguments: Dict[str, Any]) -> int:
    """Positive integer limit, clamped to the configured maximum."""
    settings = get_settings()
    limit = validate_integer(arguments.get("limit"), "limit", 1, default=settings.default_limit)
    return min(limit, settings.max_limit)


def validate_get_job_count(arguments: Dict[str, Any]) -> Dict[str, Any]:
    return {}


def validate_search_jobs(arguments: Dict[str, Any]) -> Dict[str, Any]:
    sanitized: Dict[str, Any] = {}
    sanitized["status"] = validate_enum(arguments.get("status"), "status", VALID_STATUS_FILTERS)
    category = sanitize_string(arguments.get("category"), "category", 200, required=False)
    sanitized["category"] = category.strip() or None
    sanitized["limit"] = _validate_limit(arguments)
    return sanitized


def validate_get_job_details(arguments: Dict[str, Any]) -> Dict[str, Any]:
    sanitized: Dict[str, Any] = {}
    sanitized["jobId"] = validate_integer(arguments.get("jobId"), "jobId")
    return sanitized


def validate_get_recent_jobs(arguments: Dict[str, Any]) -> Dict[str, Any]:
    sanitized: Dict[str, Any] = {}
    sanitized["limit"] = _validate_limit(arguments)
    return sanitized


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


async def handle_get_job_count(args: Dict[str, Any], q: JobQueryService) -> str:
    return await q.job_count()


async def handle_search_jobs(args: Dict[str, Any], q: JobQueryService) -> str:
    return await q.search_jobs(
        status=args.get("status"),
        category=args.get("category"),
        limit=args.get("limit"),
    )


async def handle_get_job_details(args: Dict[str, Any], q: JobQueryService) -> str:
    return await q.job_details(args["jobId"])


async def handle_get_recent_jobs(args: Dict[str, Any], q: JobQueryService) -> str:
    return await q.recent_jobs(limit=args.get("limit"))


HANDLERS = {
    "get_job_count": handle_get_job_count,
    "search_jobs": handle_search_jobs,
    "get_job_details": handle_get_job_details,
    "get_recent_jobs": handle_get_recent_jobs,
}

VALIDATORS = {
    "get_job_count": validate_get_job_count,
    "search_jobs": validate_search_jobs,
    "get_job_details": validate_get_job_details,
    "get_recent_jobs": validate_get_recent_jobs,
}

# What each tool does, for "Failed to <operation>: ..." error text
OPERATIONS = {
    "get_job_count": "get job count",
    "search_jobs": "search jobs",
    "get_job_details": "get job details",
    "get_recent_jobs": "get recent jobs",
}
