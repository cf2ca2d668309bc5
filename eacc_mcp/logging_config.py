"""
Logging setup for eacc-mcp.

The MCP server talks JSON-RPC over stdout, so console output always goes to
stderr. A dated log file under ``<data_dir>/logs`` is optional.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

LOGGER_NAME = "eacc_mcp"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DEFAULT_LEVEL = logging.WARNING

# Marks handlers created here so repeated setup replaces them instead of stacking
_OWNED_ATTR = "_eacc_mcp_handler"


def _resolve_level(level: Optional[str]) -> int:
    if not level:
        return DEFAULT_LEVEL
    resolved = logging.getLevelName(level.upper())
    return resolved if isinstance(resolved, int) else DEFAULT_LEVEL


def setup_logging(
    level: Optional[str] = None,
    log_to_file: bool = False,
    data_dir: Optional[Path] = None,
) -> logging.Logger:
    """Configure the ``eacc_mcp`` logger.

    Args:
        level: Level name (case-insensitive). Unknown names fall back to WARNING.
        log_to_file: Also write to ``<data_dir>/logs/local-<date>.log``.
        data_dir: Base directory for the log file.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(_resolve_level(level))

    for handler in list(logger.handlers):
        if getattr(handler, _OWNED_ATTR, False):
            logger.removeHandler(handler)
            handler.close()

    formatter = logging.Formatter(LOG_FORMAT)

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(formatter)
    setattr(console, _OWNED_ATTR, True)
    logger.addHandler(console)

    if log_to_file:
        if data_dir is None:
            raise ValueError("data_dir is required when log_to_file is set")
        log_dir = Path(data_dir) / "logs"
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / f"local-{datetime.now().strftime('%Y-%m-%d')}.log"
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        setattr(file_handler, _OWNED_ATTR, True)
        logger.addHandler(file_handler)

    logger.propagate = False
    return logger
