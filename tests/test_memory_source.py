"""Tests for the list-backed job source."""

import pytest

from eacc_mcp.protocols import JobSource
from eacc_mcp.sources.memory import InMemoryJobSource
from eacc_mcp.types import Job


class TestInMemoryJobSource:
    def test_satisfies_protocol(self):
        assert isinstance(InMemoryJobSource(), JobSource)

    def test_accepts_mappings(self):
        source = InMemoryJobSource([{"id": 0, "title": "Logo"}, Job(id=1)])
        assert source.append({"id": 2}).id == 2

    def test_rejects_out_of_order_ids(self):
        with pytest.raises(ValueError, match="ledger position"):
            InMemoryJobSource([Job(id=1)])

    @pytest.mark.asyncio
    async def test_range_is_clamped(self):
        source = InMemoryJobSource([Job(id=i) for i in range(4)])
        assert [j.id for j in await source.range(-5, 2)] == [0, 1]
        assert [j.id for j in await source.range(2, 50)] == [2, 3]
        assert await source.range(3, 3) == []

    @pytest.mark.asyncio
    async def test_by_id(self):
        source = InMemoryJobSource([Job(id=0, title="Only")])
        assert (await source.by_id(0)).title == "Only"
        assert await source.by_id(1) is None
        assert await source.by_id(-1) is None
