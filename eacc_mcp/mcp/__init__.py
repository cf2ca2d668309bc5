"""MCP front end: tool schemas, argument validation, handlers and server."""
