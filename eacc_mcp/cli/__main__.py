"""
eacc-mcp CLI - query the EACC job marketplace or run the MCP server.

Usage:
    eacc-mcp [serve]
    eacc-mcp count
    eacc-mcp search [--status S] [--category C] [--limit N] [--json]
    eacc-mcp recent [--limit N] [--json]
    eacc-mcp job JOB_ID [--json]
"""

import argparse
import asyncio
import json
import logging
import sys
from typing import List, Optional

from eacc_mcp.config import get_settings
from eacc_mcp.logging_config import setup_logging
from eacc_mcp.mcp.sanitize import sanitize_string
from eacc_mcp.query.planner import JobQueryService
from eacc_mcp.types import VALID_STATUS_FILTERS

logger = logging.getLogger(__name__)


def _query_service() -> JobQueryService:
    from eacc_mcp.mcp.server import get_query_service

    return get_query_service()


def cmd_serve(args):
    """Start MCP server."""
    from eacc_mcp.mcp.server import main as mcp_main

    try:
        mcp_main()
    except KeyboardInterrupt:
        logger.info("MCP server stopped")


def cmd_count(args, q: JobQueryService):
    print(asyncio.run(q.job_count()))


def cmd_search(args, q: JobQueryService):
    category = None
    if args.category is not None:
        category = sanitize_string(args.category, "category", 200, required=False).strip() or None

    if args.json:
        result = asyncio.run(q.search(status=args.status, category=category, limit=args.limit))
        print(json.dumps(result.to_dict(), indent=2, default=str))
    else:
        print(asyncio.run(q.search_jobs(status=args.status, category=category, limit=args.limit)))


def cmd_recent(args, q: JobQueryService):
    if args.json:
        result = asyncio.run(q.recent(limit=args.limit))
        print(json.dumps(result.to_dict(), indent=2, default=str))
    else:
        print(asyncio.run(q.recent_jobs(limit=args.limit)))


def cmd_job(args, q: JobQueryService):
    if args.json:
        from eacc_mcp.mcp.server import get_source

        job = asyncio.run(get_source().by_id(args.job_id))
        print(json.dumps(job.to_dict() if job is not None else None, indent=2, default=str))
    else:
        print(asyncio.run(q.job_details(args.job_id)))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="eacc-mcp",
        description="Read-only EACC marketplace queries (MCP server and CLI)",
    )
    parser.add_argument("--log-level", help="Log level (default: EACC_LOG_LEVEL or WARNING)")

    subparsers = parser.add_subparsers(dest="command")

    # serve
    subparsers.add_parser("serve", help="Start MCP server (stdio transport)")

    # count
    subparsers.add_parser("count", help="Show the number of jobs on the marketplace")

    # search
    p_search = subparsers.add_parser("search", help="Search jobs by status and category")
    p_search.add_argument("--status", "-s", type=str.lower, choices=VALID_STATUS_FILTERS)
    p_search.add_argument("--category", "-c", help="Text to match in title, description or tags")
    p_search.add_argument("--limit", "-l", type=int, default=None)
    p_search.add_argument("--json", "-j", action="store_true")

    # recent
    p_recent = subparsers.add_parser("recent", help="Show the newest jobs")
    p_recent.add_argument("--limit", "-l", type=int, default=None)
    p_recent.add_argument("--json", "-j", action="store_true")

    # job
    p_job = subparsers.add_parser("job", help="Show one job in detail")
    p_job.add_argument("job_id", type=int, help="Job ID (ledger index)")
    p_job.add_argument("--json", "-j", action="store_true")

    return parser


def main(argv: Optional[List[str]] = None):
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    setup_logging(
        level=args.log_level or settings.log_level,
        log_to_file=settings.log_to_file,
        data_dir=settings.data_dir,
    )

    if args.command in (None, "serve"):
        cmd_serve(args)
        return

    try:
        q = _query_service()
        if args.command == "count":
            cmd_count(args, q)
        elif args.command == "search":
            cmd_search(args, q)
        elif args.command == "recent":
            cmd_recent(args, q)
        elif args.command == "job":
            cmd_job(args, q)
    except (ValueError, TypeError) as e:
        logger.error(f"Input validation error: {e}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Command failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
