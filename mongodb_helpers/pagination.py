"""Cursor based pagination over a query."""

from __future__ import annotations

from logging import Logger, getLogger
from typing import Optional

from mongodb_helpers.errors import QueryExecutionError
from mongodb_helpers.snapshot import convert_query_snapshot
from mongodb_helpers.types import DocumentHandle, Page, QueryResult, QuerySource, ResultSet
from mongodb_helpers.utils import require_positive

DEFAULT_PAGE_SIZE: int = 10

_logger: Logger = getLogger(__name__)


async def fetch_page(
    query: QuerySource,
    last_document: Optional[DocumentHandle] = None,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> QueryResult[Page]:
    """Fetch one page of a query, reporting a failed query as a failure result.

    Args:
        query: The query to paginate.
        last_document: The last document of the previous page (Page.last_doc). None fetches the first page.
        page_size: How many records to fetch. Default: 10.

    Returns:
        A successful result holding the page, or a failed result holding the QueryExecutionError. An empty page has
        no last_doc, whatever cursor was given.

    Raises:
        InvalidArgumentError: if page_size is not a positive integer.
    """
    require_positive("page_size", page_size)
    paginated_query: QuerySource = query.limit(page_size)
    if last_document is not None:
        paginated_query = paginated_query.start_after(last_document)

    _logger.debug("fetching page of %d after %s", page_size, getattr(last_document, "id", None))
    try:
        result_set: ResultSet = await paginated_query.execute()
    except QueryExecutionError as error:
        return QueryResult.failure(error)

    if result_set.empty:
        return QueryResult.success(Page.empty())
    return QueryResult.success(
        Page(data=convert_query_snapshot(result_set), last_doc=result_set.documents[-1]),
    )


async def get_paginated_data(
    query: QuerySource,
    last_document: Optional[DocumentHandle] = None,
    page_size: int = DEFAULT_PAGE_SIZE,
    *,
    logger: Optional[Logger] = None,
) -> Page:
    """Fetch one page of a query, degrading to an empty page when the query fails.

    The failure is logged through ``logger`` (the module logger by default) and never raised, so an empty page means
    either "no more data" or "query failed". Use fetch_page to tell them apart.
    """
    result: QueryResult[Page] = await fetch_page(query, last_document, page_size)
    if not result.ok:
        (logger or _logger).error("Could not fetch page: %s", result.error, exc_info=result.error)
        return Page.empty()
    return result.value
