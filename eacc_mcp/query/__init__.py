"""Job aggregation and filtering engine.

- fetcher: chunked ledger scan tolerant to failed chunks
- filters: status/category predicates
- planner: JobQueryService, one strategy per tool
- formatter: text rendering of results
"""

from eacc_mcp.query.fetcher import DEFAULT_CHUNK_SIZE, fetch_up_to
from eacc_mcp.query.filters import apply_filters, matches, matches_category, matches_status
from eacc_mcp.query.planner import JobQueryService

__all__ = [
    "DEFAULT_CHUNK_SIZE",
    "fetch_up_to",
    "apply_filters",
    "matches",
    "matches_category",
    "matches_status",
    "JobQueryService",
]
