"""
Job sources: implementations of ``eacc_mcp.protocols.JobSource``.
"""

from eacc_mcp.sources.chain import ChainJobSource
from eacc_mcp.sources.memory import InMemoryJobSource

__all__ = ["ChainJobSource", "InMemoryJobSource"]
