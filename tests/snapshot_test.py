"""Tests of the snapshot conversion."""

from datetime import datetime, timezone

from mongodb_helpers.snapshot import convert_query_snapshot
from tests.utilities.fakes import FakeDocument, FakeResultSet, FakeTimestamp


def test_records_keep_result_order_and_ids() -> None:
    """Records follow the result set order and carry their document id."""
    result_set = FakeResultSet(
        [FakeDocument("b", {"name": "second"}), FakeDocument("a", {"name": "first"}), FakeDocument("c", {})]
    )
    assert convert_query_snapshot(result_set) == [
        {"name": "second", "id": "b"},
        {"name": "first", "id": "a"},
        {"id": "c"},
    ]


def test_document_id_overrides_data_id() -> None:
    """The id stored in the document never replaces the document id."""
    result_set = FakeResultSet([FakeDocument("real-id", {"id": "765a9d71-84de-482b-aa53-46d32753175a"})])
    assert convert_query_snapshot(result_set)[0]["id"] == "real-id"


def test_dates_are_transformed_by_default() -> None:
    """Timestamp-like values become datetimes unless disabled."""
    timestamp = FakeTimestamp(0)
    result_set = FakeResultSet([FakeDocument("a", {"created_at": timestamp})])

    assert convert_query_snapshot(result_set)[0]["created_at"] == datetime(1970, 1, 1, tzinfo=timezone.utc)
    assert convert_query_snapshot(result_set, transform_dates=False)[0]["created_at"] is timestamp


def test_empty_result_set() -> None:
    """An empty result set converts to no records."""
    assert convert_query_snapshot(FakeResultSet([])) == []
