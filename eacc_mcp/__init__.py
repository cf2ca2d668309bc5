"""
eacc-mcp - read-only EACC job marketplace queries for conversational agents.

Counts, searches, inspects and lists recent marketplace jobs through MCP tools.
"""

from .protocols import JobSource, MarketplaceError
from .query import JobQueryService
from .types import Job, JobFilters, JobStatus

try:
    from importlib.metadata import version

    __version__ = version("eacc-mcp")
except Exception:
    __version__ = "0.0.0"

__all__ = ["Job", "JobFilters", "JobStatus", "JobQueryService", "JobSource", "MarketplaceError"]
