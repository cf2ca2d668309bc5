"""
Shared job types for eacc-mcp.

These records are the vocabulary between the data sources, the query engine
and the MCP layer. A source produces Jobs; the engine filters and orders
them; the formatter renders them. Every field except ``id`` may be absent,
and absence is always ``None`` (never an empty string or zero).
"""

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, List, Mapping, Optional, Tuple

# === Enums ===


class JobStatus(str, Enum):
    """Marketplace job status values accepted by the search filter.

    ``ALL`` is a filter value only; no job carries it.
    """

    OPEN = "open"
    TAKEN = "taken"
    COMPLETED = "completed"
    CLOSED = "closed"
    ALL = "all"


VALID_STATUS_FILTERS = [s.value for s in JobStatus]


# === Coercion helpers ===


def _opt_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return None


def _opt_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, bytes):
        return "0x" + value.hex()
    return str(value)


def _opt_decimal(value: Any) -> Optional[Decimal]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None


def _opt_tags(value: Any) -> Optional[Tuple[str, ...]]:
    if value is None or isinstance(value, (str, bytes)):
        return None
    try:
        return tuple(str(tag) for tag in value if tag is not None)
    except TypeError:
        return None


def _first(data: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return None


# === Records ===


@dataclass(frozen=True)
class Job:
    """Read-only projection of one marketplace job.

    ``id`` is the ledger index: assigned once at creation, never reused, and
    the only field guaranteed to be present.
    """

    id: int
    escrow_id: Optional[int] = None
    title: Optional[str] = None
    description: Optional[str] = None
    tags: Optional[Tuple[str, ...]] = None
    status: Optional[str] = None
    payment_amount: Optional[Decimal] = None
    payment_token: Optional[str] = None  # ERC-20 address; None for the native token
    timestamp: Optional[int] = None  # unix seconds
    creator: Optional[str] = None
    worker: Optional[str] = None
    content_hash: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Job":
        """Build a Job from a loosely-typed mapping.

        Accepts both snake_case and the camelCase keys used by marketplace
        clients (``escrowId``, ``paymentAmount``, ``contentHash``). Optional
        values that cannot be coerced are dropped to ``None``; a missing or
        malformed ``id`` raises ``ValueError``.
        """
        job_id = _opt_int(_first(data, "id", "job_id", "jobId"))
        if job_id is None:
            raise ValueError(f"job record has no usable id: {data!r}")

        roles = data.get("roles") if isinstance(data.get("roles"), Mapping) else {}
        creator = _first(data, "creator")
        if creator is None:
            creator = roles.get("creator")
        worker = _first(data, "worker")
        if worker is None:
            worker = roles.get("worker")

        return cls(
            id=job_id,
            escrow_id=_opt_int(_first(data, "escrow_id", "escrowId")),
            title=_opt_str(data.get("title")),
            description=_opt_str(data.get("description")),
            tags=_opt_tags(data.get("tags")),
            status=_opt_str(_first(data, "status", "state")),
            payment_amount=_opt_decimal(_first(data, "payment_amount", "paymentAmount", "amount")),
            payment_token=_opt_str(_first(data, "payment_token", "paymentToken", "token")),
            timestamp=_opt_int(data.get("timestamp")),
            creator=_opt_str(creator),
            worker=_opt_str(worker),
            content_hash=_opt_str(_first(data, "content_hash", "contentHash")),
        )

    def to_dict(self) -> dict:
        """Serialize to a JSON-friendly dict (absent fields stay ``None``)."""
        return {
            "id": self.id,
            "escrow_id": self.escrow_id,
            "title": self.title,
            "description": self.description,
            "tags": list(self.tags) if self.tags is not None else None,
            "status": self.status,
            "payment_amount": str(self.payment_amount) if self.payment_amount is not None else None,
            "payment_token": self.payment_token,
            "timestamp": self.timestamp,
            "creator": self.creator,
            "worker": self.worker,
            "content_hash": self.content_hash,
        }


@dataclass(frozen=True)
class JobFilters:
    """Search predicates. ``None`` means "do not narrow"."""

    status: Optional[str] = None
    category: Optional[str] = None

    @property
    def narrows_status(self) -> bool:
        return self.status is not None and self.status.lower() != JobStatus.ALL.value

    @property
    def narrows_category(self) -> bool:
        return self.category is not None and self.category != ""

    @property
    def is_active(self) -> bool:
        return self.narrows_status or self.narrows_category


@dataclass
class FetchResult:
    """Outcome of a chunked scan over the ledger."""

    jobs: List[Job] = field(default_factory=list)
    scanned: int = 0  # Ledger indices requested (including failed windows)
    failed_ranges: List[Tuple[int, int]] = field(default_factory=list)  # Half-open windows

    @property
    def partial(self) -> bool:
        return len(self.failed_ranges) > 0


@dataclass
class QueryResult:
    """Structured answer of a list query, before rendering."""

    jobs: List[Job]
    total: int  # Ledger length at call time
    filters: JobFilters = field(default_factory=JobFilters)
    failed_ranges: List[Tuple[int, int]] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "count": len(self.jobs),
            "filters": {"status": self.filters.status, "category": self.filters.category},
            "failed_ranges": [list(r) for r in self.failed_ranges],
            "jobs": [job.to_dict() for job in self.jobs],
        }
