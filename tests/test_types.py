"""Tests for the shared job types."""

from dataclasses import FrozenInstanceError
from decimal import Decimal

import pytest

from eacc_mcp.types import (
    VALID_STATUS_FILTERS,
    FetchResult,
    Job,
    JobFilters,
    JobStatus,
    QueryResult,
)


class TestJob:
    """Tests for the Job record."""

    def test_only_id_is_required(self):
        job = Job(id=7)
        assert job.id == 7
        assert job.title is None
        assert job.tags is None
        assert job.payment_amount is None

    def test_is_immutable(self):
        job = Job(id=1, title="Logo")
        with pytest.raises(FrozenInstanceError):
            job.title = "Other"  # type: ignore[misc]

    def test_from_dict_accepts_camel_case(self):
        job = Job.from_dict(
            {
                "id": 3,
                "escrowId": "42",
                "title": "Video edit",
                "tags": ["video", "edit"],
                "status": "open",
                "paymentAmount": "1.5",
                "timestamp": 1_700_000_000,
                "contentHash": "0xabc",
            }
        )
        assert job.escrow_id == 42
        assert job.tags == ("video", "edit")
        assert job.payment_amount == Decimal("1.5")
        assert job.content_hash == "0xabc"

    def test_from_dict_reads_roles(self):
        job = Job.from_dict({"id": 0, "roles": {"creator": "0xaaa", "worker": "0xbbb"}})
        assert job.creator == "0xaaa"
        assert job.worker == "0xbbb"

    def test_from_dict_top_level_creator_wins_over_roles(self):
        job = Job.from_dict({"id": 0, "creator": "0xtop", "roles": {"creator": "0xrole"}})
        assert job.creator == "0xtop"

    def test_from_dict_drops_malformed_optionals(self):
        job = Job.from_dict(
            {"id": 1, "escrowId": "not-a-number", "paymentAmount": "lots", "tags": "video"}
        )
        assert job.escrow_id is None
        assert job.payment_amount is None
        assert job.tags is None

    def test_from_dict_keeps_zero_values(self):
        job = Job.from_dict({"id": 0, "paymentAmount": 0, "timestamp": 0, "title": ""})
        assert job.payment_amount == Decimal(0)
        assert job.timestamp == 0
        assert job.title == ""

    def test_from_dict_requires_id(self):
        with pytest.raises(ValueError, match="no usable id"):
            Job.from_dict({"title": "No id"})

    def test_from_dict_rejects_boolean_id(self):
        with pytest.raises(ValueError):
            Job.from_dict({"id": True})

    def test_to_dict_round_trips_through_from_dict(self):
        job = Job(
            id=5,
            escrow_id=9,
            title="Audit",
            tags=("security",),
            status="taken",
            payment_amount=Decimal("3.75"),
            payment_token="0xtoken",
            timestamp=1_700_000_000,
            creator="0xc",
        )
        assert Job.from_dict(job.to_dict()) == job

    def test_from_dict_accepts_whole_number_floats(self):
        job = Job.from_dict({"id": 2.0, "escrowId": 7.0, "timestamp": 1_700_000_000.0})
        assert job.id == 2
        assert job.escrow_id == 7
        assert job.timestamp == 1_700_000_000

    def test_from_dict_drops_fractional_floats(self):
        assert Job.from_dict({"id": 1, "timestamp": 12.5}).timestamp is None
        with pytest.raises(ValueError, match="no usable id"):
            Job.from_dict({"id": 1.5})

    def test_from_dict_reads_payment_token(self):
        job = Job.from_dict({"id": 0, "paymentAmount": "25", "token": "0xtoken"})
        assert job.payment_token == "0xtoken"


class TestJobFilters:
    """Tests for JobFilters activity flags."""

    def test_empty_filters_are_inactive(self):
        assert not JobFilters().is_active

    def test_status_all_does_not_narrow(self):
        filters = JobFilters(status="ALL")
        assert not filters.narrows_status
        assert not filters.is_active

    def test_empty_category_does_not_narrow(self):
        assert not JobFilters(category="").is_active

    def test_concrete_filters_are_active(self):
        assert JobFilters(status="open").is_active
        assert JobFilters(category="video").is_active


class TestResults:
    def test_fetch_result_partial(self):
        assert not FetchResult().partial
        assert FetchResult(failed_ranges=[(0, 20)]).partial

    def test_query_result_to_dict(self):
        result = QueryResult(
            jobs=[Job(id=1, title="A")],
            total=10,
            filters=JobFilters(status="open"),
            failed_ranges=[(20, 40)],
        )
        data = result.to_dict()
        assert data["total"] == 10
        assert data["count"] == 1
        assert data["filters"] == {"status": "open", "category": None}
        assert data["failed_ranges"] == [[20, 40]]
        assert data["jobs"][0]["title"] == "A"

    def test_status_filter_values(self):
        assert VALID_STATUS_FILTERS == ["open", "taken", "completed", "closed", "all"]
        assert JobStatus("open") is JobStatus.OPEN
