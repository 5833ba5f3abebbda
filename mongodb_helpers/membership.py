"""Membership queries over match sets larger than the per-query value limit."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from logging import Logger, getLogger
from typing import Optional

from mongodb_helpers.errors import QueryExecutionError
from mongodb_helpers.snapshot import convert_query_snapshot
from mongodb_helpers.types import MatchValue, QueryResult, QuerySource, Record
from mongodb_helpers.utils import chunk_values, require_positive

DEFAULT_CHUNK_SIZE: int = 10

_logger: Logger = getLogger(__name__)


async def _query_chunk(query: QuerySource, field_name: str, chunk: list[MatchValue]) -> list[Record]:
    result_set = await query.where_in(field_name, chunk).execute()
    return convert_query_snapshot(result_set, transform_dates=True)


async def fetch_docs_by_array_membership(
    query: QuerySource,
    field_name: str,
    values: Sequence[MatchValue],
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    *,
    max_concurrency: int = 1,
) -> QueryResult[list[Record]]:
    """Fetch the documents whose ``field_name`` is one of ``values``, whatever the number of values.

    Databases cap the number of values a single membership query may carry (commonly 10). The values are split into
    chunks of at most ``chunk_size`` values, the last chunk holding the remainder, and one query is issued per chunk.

    Records are returned in chunk order, then in the order each chunk query returned them. Chunks are queried one
    after the other unless ``max_concurrency`` allows several chunk queries in flight at once; the record order is
    the same either way.

    Args:
        query: The query to restrict.
        field_name: The field whose value must be one of values.
        values: The match values. An empty sequence issues no query.
        chunk_size: Maximum number of values per query. Default: 10.
        max_concurrency: Maximum number of chunk queries in flight. Default: 1 (sequential).

    Returns:
        A successful result holding the records, or a failed result holding the error of the first failing chunk
        (in chunk order). Chunks not started yet when a chunk fails are never queried, and the records of the other
        chunks are discarded.

    Raises:
        InvalidArgumentError: if chunk_size or max_concurrency is not a positive integer.
    """
    require_positive("max_concurrency", max_concurrency)
    chunks: list[list[MatchValue]] = chunk_values(values, chunk_size)
    _logger.debug("querying %s in %d values as %d chunk(s)", field_name, len(values), len(chunks))

    if max_concurrency == 1:
        records: list[Record] = []
        for index, chunk in enumerate(chunks):
            _logger.debug("querying chunk %d of %d", index + 1, len(chunks))
            try:
                records.extend(await _query_chunk(query, field_name, chunk))
            except QueryExecutionError as error:
                return QueryResult.failure(error)
        return QueryResult.success(records)

    semaphore = asyncio.Semaphore(max_concurrency)
    failed = asyncio.Event()

    async def run(index: int, chunk: list[MatchValue]) -> Optional[list[Record]]:
        async with semaphore:
            # chunks not started before a failure are skipped
            if failed.is_set():
                _logger.debug("skipping chunk %d of %d after a failed chunk", index + 1, len(chunks))
                return None
            try:
                return await _query_chunk(query, field_name, chunk)
            except QueryExecutionError:
                failed.set()
                raise

    outcomes = await asyncio.gather(*(run(index, chunk) for index, chunk in enumerate(chunks)), return_exceptions=True)
    records = []
    for outcome in outcomes:
        if isinstance(outcome, QueryExecutionError):
            return QueryResult.failure(outcome)
        if isinstance(outcome, BaseException):
            raise outcome
        if outcome is not None:
            records.extend(outcome)
    return QueryResult.success(records)


async def get_docs_by_array_membership(
    query: QuerySource,
    field_name: str,
    values: Sequence[MatchValue],
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    *,
    max_concurrency: int = 1,
) -> list[Record]:
    """Same as fetch_docs_by_array_membership, but a failing chunk query raises its QueryExecutionError."""
    result = await fetch_docs_by_array_membership(
        query, field_name, values, chunk_size, max_concurrency=max_concurrency
    )
    return result.unwrap()
