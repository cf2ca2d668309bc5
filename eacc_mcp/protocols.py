"""
eacc-mcp Protocol Definitions
=============================

The interface contract between the query engine and whatever provides
marketplace data.

The engine never inspects a source at runtime: anything that implements the
three methods of ``JobSource`` can be plugged in. Two implementations ship
with the package:

- ``eacc_mcp.sources.memory.InMemoryJobSource``: a list-backed ledger for
  tests and local development.
- ``eacc_mcp.sources.chain.ChainJobSource``: read-only access to the
  marketplace contract over JSON-RPC.

Error handling philosophy:
- A source may raise from any method; the engine treats that as a
  transport-level fault.
- During a chunked scan one failed window is logged and skipped, never
  allowed to void the whole query.
- Anything else propagates to the MCP boundary, which renders it as text.
- A source that cannot be built or connected raises
  ``SourceInitializationError``.
"""

from __future__ import annotations

from typing import List, Optional, Protocol, runtime_checkable

from eacc_mcp.types import Job

# =============================================================================
# ERRORS
# =============================================================================


class MarketplaceError(Exception):
    """Base for all eacc-mcp errors."""

    pass


class SourceInitializationError(MarketplaceError):
    """Raised when a data source cannot be configured or connected."""

    pass


class SourceUnavailableError(MarketplaceError):
    """Raised by a source when a read against the ledger fails."""

    pass


# =============================================================================
# DATA SOURCE
# =============================================================================


@runtime_checkable
class JobSource(Protocol):
    """Read-only view of the job ledger.

    Indices are ledger positions: ``0 <= id < count()``. The ledger is
    append-only, so a higher index always means a more recently created job.
    """

    async def count(self) -> int:
        """Number of jobs in the ledger right now."""
        ...

    async def range(self, start: int, end: int) -> List[Job]:
        """Jobs with ``start <= id < end``, in ledger order."""
        ...

    async def by_id(self, job_id: int) -> Optional[Job]:
        """One job, or ``None`` if no job has that id."""
        ...
