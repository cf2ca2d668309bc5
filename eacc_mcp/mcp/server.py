"""
eacc-mcp MCP Server - read-only EACC marketplace queries for MCP clients.

Exposes the job query engine as four MCP tools so a conversational agent can
count, search, inspect and list recent marketplace jobs.

Every call returns exactly one text block. Nothing raises past call_tool:
bad arguments, an unreachable chain and unexpected faults all come back as
readable text.

Usage:
    eacc-mcp serve  # Start MCP server (stdio transport)
"""

import asyncio
import logging
import time
from typing import Any, Dict, List, Optional

from jsonschema import Draft7Validator
from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from eacc_mcp.config import Settings, get_settings
from eacc_mcp.mcp.handlers import HANDLERS, OPERATIONS, VALIDATORS
from eacc_mcp.mcp.tool_definitions import TOOLS
from eacc_mcp.protocols import JobSource, SourceInitializationError
from eacc_mcp.query.planner import JobQueryService

logger = logging.getLogger(__name__)

SERVER_NAME = "eacc-marketplace"

# Initialize MCP server
mcp = Server(SERVER_NAME)

# Process-wide data source, created on first tool call
_source: Optional[JobSource] = None

_schema_validators: Dict[str, Draft7Validator] = {
    tool.name: Draft7Validator(tool.inputSchema) for tool in TOOLS
}


class ToolInputError(ValueError):
    """Raised when tool arguments fail validation."""

    pass


def set_source(source: Optional[JobSource]) -> None:
    """Use ``source`` for all subsequent tool calls."""
    global _source
    _source = source


def reset_source() -> None:
    """Forget the current source; the next call builds a fresh one."""
    set_source(None)


def get_source() -> JobSource:
    """Get or create the marketplace data source."""
    global _source
    if _source is None:
        from eacc_mcp.sources.chain import ChainJobSource

        try:
            _source = ChainJobSource.from_settings(get_settings())
        except Exception as e:
            raise SourceInitializationError(str(e)) from e
        logger.info("Marketplace source created")
    return _source


def get_query_service(settings: Optional[Settings] = None) -> JobQueryService:
    settings = settings or get_settings()
    return JobQueryService(
        get_source(),
        chunk_size=settings.chunk_size,
        oversample_factor=settings.search_oversample,
        default_limit=settings.default_limit,
        payment_unit=settings.payment_unit,
    )


# =============================================================================
# INPUT VALIDATION & SANITIZATION
# =============================================================================


def validate_tool_input(name: str, arguments: Dict[str, Any]) -> Dict[str, Any]:
    """Validate and sanitize MCP tool inputs.

    Raises:
        ToolInputError: If the arguments don't fit the tool's schema.
    """
    try:
        if not isinstance(arguments, dict):
            raise ValueError(f"arguments must be an object, got {type(arguments).__name__}")

        errors = sorted(
            _schema_validators[name].iter_errors(arguments), key=lambda err: list(err.path)
        )
        if errors:
            first = errors[0]
            path = ".".join(str(part) for part in first.path) or "(root)"
            raise ValueError(f"Schema validation failed at {path}: {first.message}")

        return VALIDATORS[name](arguments)

    except (ValueError, TypeError) as e:
        logger.warning(f"Input validation failed for tool {name}: {e}")
        raise ToolInputError(str(e)) from e


def handle_tool_error(e: Exception, tool_name: str, arguments: Any) -> List[TextContent]:
    """Render a failed tool call as text."""
    if isinstance(e, ToolInputError):
        return [TextContent(type="text", text=f"Invalid input: {e}")]

    if isinstance(e, SourceInitializationError):
        logger.error(f"Marketplace client initialization failed for tool {tool_name}: {e}")
        return [
            TextContent(type="text", text=f"Failed to initialize marketplace client: {e}")
        ]

    argument_keys = list(arguments.keys()) if isinstance(arguments, dict) else []
    logger.error(
        f"Error in tool {tool_name}",
        extra={
            "tool_name": tool_name,
            "arguments_keys": argument_keys,
            "error_type": type(e).__name__,
            "error_message": str(e),
        },
        exc_info=True,
    )
    operation = OPERATIONS.get(tool_name, f"run {tool_name}")
    message = str(e) or type(e).__name__
    return [TextContent(type="text", text=f"Failed to {operation}: {message}")]


# =============================================================================
# MCP PROTOCOL HANDLERS
# =============================================================================


@mcp.list_tools()
async def list_tools() -> list[Tool]:
    """List the marketplace query tools."""
    return list(TOOLS)


@mcp.call_tool()
async def call_tool(name: str, arguments: Optional[dict[str, Any]]) -> list[TextContent]:
    """Handle tool calls with validation and error handling."""
    if arguments is None:
        arguments = {}

    handler = HANDLERS.get(name) if isinstance(name, str) else None
    if handler is None:
        logger.warning(f"Unknown tool requested: {name!r}")
        return [TextContent(type="text", text=f"Unknown tool: {name}")]

    started = time.monotonic()
    try:
        sanitized_args = validate_tool_input(name, arguments)
        result = await handler(sanitized_args, get_query_service())
        logger.info(f"Tool {name} completed in {(time.monotonic() - started) * 1000:.0f}ms")
        return [TextContent(type="text", text=result)]

    except Exception as e:
        return handle_tool_error(e, name, arguments)


async def run_server():
    """Run the MCP server."""
    async with stdio_server() as (read_stream, write_stream):
        logger.info("EACC MCP server running on stdio")
        await mcp.run(
            read_stream,
            write_stream,
            mcp.create_initialization_options(),
        )


def main(source: Optional[JobSource] = None):
    """Entry point for MCP server.

    Args:
        source: Data source to serve from. Defaults to the on-chain
            marketplace configured through ``EACC_*`` settings.
    """
    if source is not None:
        set_source(source)
    asyncio.run(run_server())


if __name__ == "__main__":
    main()
