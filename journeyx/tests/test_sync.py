"""
Tests for the travel book sync gateway.

Sinks are replaced with in-memory fakes; asyncio entry points are driven
with asyncio.run.
"""

import asyncio
from datetime import datetime, timezone

import pytest
from pydantic_core import PydanticUndefined

from journeyx.shared.errors import (
    ConfigurationError,
    PreconditionError,
    SyncError,
    SyncErrorCategory,
    SyncTimeoutError,
)
from journeyx.sync import (
    SYNC_ERROR_MESSAGES,
    InMemoryDocumentSink,
    SupabaseDocumentSink,
    SyncGateway,
    build_sync_document,
    classify_sync_error,
    sanitize_document_id,
    sanitize_payload,
    sync_error_message,
)


class _SlowSink:
    """Sink whose write never settles within a short budget."""

    def __init__(self, delay: float):
        self.delay = delay
        self.calls = 0

    async def write(self, account, document_id, document):
        self.calls += 1
        await asyncio.sleep(self.delay)


class _FailingSink:
    def __init__(self, error: Exception):
        self.error = error
        self.calls = 0

    async def write(self, account, document_id, document):
        self.calls += 1
        raise self.error


def _gateway(sink, timeout_seconds=5.0):
    return SyncGateway(sink, timeout_seconds=timeout_seconds, clock=lambda: 1700000000000)


class TestSanitizeDocumentId:
    """Tests for sanitize_document_id."""

    def test_ascii_title(self):
        assert sanitize_document_id("Kyoto Trip!!") == "kyoto-trip"

    def test_runs_collapse_and_ends_trim(self):
        assert sanitize_document_id("  --Tokyo   2025 / Spring-- ") == "tokyo-2025-spring"

    def test_mixed_script_keeps_ascii_parts(self):
        assert sanitize_document_id("京都 Kyoto 3日") == "kyoto-3"

    def test_non_ascii_title_falls_back_to_timestamp(self):
        doc_id = sanitize_document_id("京都慢旅手冊", now_ms=1700000000000)

        assert doc_id == "journey-book-1700000000000"

    def test_fallback_uses_current_time_when_unset(self):
        doc_id = sanitize_document_id("京都慢旅手冊")

        assert doc_id.startswith("journey-book-")
        assert doc_id[len("journey-book-"):].isdigit()


class TestSanitizePayload:
    """Tests for sanitize_payload."""

    def test_absent_markers_become_none_at_any_depth(self):
        payload = {
            "a": PydanticUndefined,
            "b": [1, {"c": ..., "d": "keep"}],
            "e": {"f": {"g": PydanticUndefined}},
        }

        assert sanitize_payload(payload) == {
            "a": None,
            "b": [1, {"c": None, "d": "keep"}],
            "e": {"f": {"g": None}},
        }

    def test_tuples_become_lists(self):
        assert sanitize_payload({"x": (1, (2, 3))}) == {"x": [1, [2, 3]]}

    def test_falsy_values_are_kept(self):
        payload = {"zero": 0, "empty": "", "no": False, "none": None}

        assert sanitize_payload(payload) == payload


class TestClassifySyncError:
    """Tests for failure categorization."""

    @pytest.mark.parametrize(
        "error,category",
        [
            (Exception("permission-denied: Missing or insufficient permissions"),
             SyncErrorCategory.PERMISSION),
            (Exception("new row violates row-level security policy"),
             SyncErrorCategory.PERMISSION),
            (Exception("Service unavailable"), SyncErrorCategory.NETWORK),
            (ConnectionError("reset by peer"), SyncErrorCategory.NETWORK),
            (Exception("Invalid API key"), SyncErrorCategory.CONFIG),
            (ConfigurationError("missing url"), SyncErrorCategory.CONFIG),
            (asyncio.TimeoutError(), SyncErrorCategory.TIMEOUT),
            (ValueError("something odd"), SyncErrorCategory.GENERIC),
        ],
    )
    def test_buckets(self, error, category):
        assert classify_sync_error(error) == category

    def test_sync_error_keeps_its_category(self):
        error = SyncError("boom", category=SyncErrorCategory.NETWORK)

        assert classify_sync_error(error) == SyncErrorCategory.NETWORK

    def test_generic_message_fallback(self):
        assert sync_error_message(RuntimeError("???")) == "同步失敗，請稍後再試。"

    def test_precondition_message_passes_through(self):
        assert sync_error_message(PreconditionError("請輸入使用者名稱")) == "請輸入使用者名稱"


class TestBuildSyncDocument:
    """Tests for the document layout."""

    def test_metadata_and_data(self, trip_plan, trip_request):
        updated_at = datetime(2025, 1, 1, tzinfo=timezone.utc)

        document = build_sync_document(trip_plan, trip_request, "京都之旅", updated_at)

        metadata = document["metadata"]
        assert metadata["title"] == "京都之旅"
        assert metadata["destination"] == "京都"
        assert metadata["members"] == "2 位成人"
        assert metadata["preferences"] == "步調輕鬆"
        assert metadata["syncedFrom"] == "JourneyXPro"
        assert metadata["tripTitle"] == trip_plan.trip_title
        assert document["updatedAt"] == "2025-01-01T00:00:00+00:00"
        assert document["data"][0]["events"][0]["id"] == "1-0"

    def test_missing_request_leaves_party_empty(self, trip_plan):
        document = build_sync_document(trip_plan, None, "t")

        assert document["metadata"]["members"] is None
        assert document["metadata"]["preferences"] is None

    def test_absent_event_fields_are_written_as_nulls(self, two_day_plan):
        document = build_sync_document(two_day_plan, None, "t")

        lunch = document["data"][0]["events"][1]
        assert "locationUrl" in lunch and lunch["locationUrl"] is None
        assert "details" in lunch and lunch["details"] is None
        assert document["data"][0]["events"][0]["locationUrl"].startswith("https://")


class TestUploadTravelBook:
    """Tests for SyncGateway.upload_travel_book."""

    def test_successful_write(self, trip_plan, trip_request):
        sink = InMemoryDocumentSink()

        result = asyncio.run(
            _gateway(sink).upload_travel_book(trip_plan, trip_request, " alice ", "Kyoto Trip!!")
        )

        assert result.file_id == "kyoto-trip"
        assert result.file_name == "Kyoto Trip!!"
        document = sink.documents["alice/kyoto-trip"]
        assert document["metadata"]["syncedFrom"] == "JourneyXPro"
        assert len(document["data"]) == len(trip_plan.days)

    def test_written_document_keeps_nulls(self, two_day_plan):
        sink = InMemoryDocumentSink()

        asyncio.run(_gateway(sink).upload_travel_book(two_day_plan, None, "alice", "Kyoto"))

        lunch = sink.documents["alice/kyoto"]["data"][0]["events"][1]
        assert lunch["locationUrl"] is None
        assert lunch["details"] is None
        assert lunch["locationName"] == two_day_plan.destination

    def test_blank_title_falls_back_to_trip_title(self, trip_plan):
        sink = InMemoryDocumentSink()

        result = asyncio.run(_gateway(sink).upload_travel_book(trip_plan, None, "alice", "  "))

        assert result.file_name == trip_plan.trip_title
        # Only the day count survives sanitizing
        assert result.file_id == "3"

    def test_non_ascii_title_uses_clock(self, trip_plan):
        sink = InMemoryDocumentSink()

        result = asyncio.run(
            _gateway(sink).upload_travel_book(trip_plan, None, "alice", "京都慢旅手冊")
        )

        assert result.file_id == "journey-book-1700000000000"
        assert "alice/journey-book-1700000000000" in sink.documents

    @pytest.mark.parametrize("account", ["", "   ", None])
    def test_blank_account_writes_nothing(self, trip_plan, account):
        sink = InMemoryDocumentSink()

        with pytest.raises(PreconditionError) as excinfo:
            asyncio.run(_gateway(sink).upload_travel_book(trip_plan, None, account, "t"))

        assert excinfo.value.message == "請輸入使用者名稱"
        assert sink.documents == {}

    def test_slow_write_times_out(self, trip_plan):
        sink = _SlowSink(delay=1.0)

        with pytest.raises(SyncTimeoutError) as excinfo:
            asyncio.run(
                _gateway(sink, timeout_seconds=0.01).upload_travel_book(
                    trip_plan, None, "alice", "t"
                )
            )

        assert excinfo.value.category == SyncErrorCategory.TIMEOUT
        assert sync_error_message(excinfo.value) == SYNC_ERROR_MESSAGES[SyncErrorCategory.TIMEOUT]
        assert sink.calls == 1

    def test_failure_is_categorized_and_not_retried(self, trip_plan):
        sink = _FailingSink(Exception("403 Forbidden"))

        with pytest.raises(SyncError) as excinfo:
            asyncio.run(_gateway(sink).upload_travel_book(trip_plan, None, "alice", "t"))

        assert excinfo.value.category == SyncErrorCategory.PERMISSION
        assert sink.calls == 1

    def test_unconfigured_supabase_sink_is_config_error(self, trip_plan):
        sink = SupabaseDocumentSink(supabase_url="", supabase_key="", table="itineraries")
        sink.supabase_url = None
        sink.supabase_key = None

        with pytest.raises(SyncError) as excinfo:
            asyncio.run(_gateway(sink).upload_travel_book(trip_plan, None, "alice", "t"))

        assert excinfo.value.category == SyncErrorCategory.CONFIG
