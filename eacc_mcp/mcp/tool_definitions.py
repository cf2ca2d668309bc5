"""MCP tool schema definitions for the marketplace queries.

Each Tool() defines the name, description, and JSON Schema for one MCP tool.
Validators and handlers live in eacc_mcp.mcp.handlers.
"""

from mcp.types import Tool

from eacc_mcp.types import VALID_STATUS_FILTERS

TOOLS = [
    Tool(
        name="get_job_count",
        description="Get the total number of jobs on the EACC marketplace",
        inputSchema={
            "type": "object",
            "properties": {},
        },
    ),
    Tool(
        name="search_jobs",
        description="Search for jobs on the EACC marketplace with optional filters",
        inputSchema={
            "type": "object",
            "properties": {
                "status": {
                    "type": "string",
                    "description": "Job status filter (open, taken, completed, etc.)",
                    "enum": VALID_STATUS_FILTERS,
                },
                "category": {
                    "type": "string",
                    "description": "Job category/type filter (digital, video, development, etc.). Matched against title, description and tags.",
                },
                "limit": {
                    "type": "integer",
                    "description": "Maximum number of jobs to return",
                    "default": 10,
                    "minimum": 1,
                },
            },
        },
    ),
    Tool(
        name="get_job_details",
        description="Get detailed information about a specific job",
        inputSchema={
            "type": "object",
            "properties": {
                "jobId": {
                    "type": "integer",
                    "description": "The ID of the job to get details for",
                },
            },
            "required": ["jobId"],
        },
    ),
    Tool(
        name="get_recent_jobs",
        description="Get recently created jobs from the marketplace, newest first",
        inputSchema={
            "type": "object",
            "properties": {
                "limit": {
                    "type": "integer",
                    "description": "Number of recent jobs to return",
                    "default": 10,
                    "minimum": 1,
                },
            },
        },
    ),
]
