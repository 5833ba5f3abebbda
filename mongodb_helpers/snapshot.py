"""Conversion of query results into plain records."""

from __future__ import annotations

from mongodb_helpers.types import Record, ResultSet
from mongodb_helpers.utils import convert_timestamps


def convert_query_snapshot(result_set: ResultSet, transform_dates: bool = True) -> list[Record]:
    """Return the records of a result set, including their document id.

    Records keep the result set order. The document id always wins over an ``id`` field stored in the document.

    Args:
        result_set: The result set returned by executing a query.
        transform_dates: Convert timestamp-like values into datetimes. Default: True.
    """
    records: list[Record] = []
    for document in result_set.documents:
        data = document.data()
        if transform_dates:
            data = convert_timestamps(data)
        records.append({**data, "id": str(document.id)})
    return records
