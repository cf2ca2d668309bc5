"""Handler registry for MCP tools.

Exposes HANDLERS and VALIDATORS keyed by tool name.
"""

from typing import Callable, Dict

from eacc_mcp.mcp.handlers.jobs import HANDLERS as _JOBS_H
from eacc_mcp.mcp.handlers.jobs import OPERATIONS as _JOBS_O
from eacc_mcp.mcp.handlers.jobs import VALIDATORS as _JOBS_V

HANDLERS: Dict[str, Callable] = {
    **_JOBS_H,
}

VALIDATORS: Dict[str, Callable] = {
    **_JOBS_V,
}

OPERATIONS: Dict[str, str] = {
    **_JOBS_O,
}
