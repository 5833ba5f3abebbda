"""Helpers for paginating, batching and converting MongoDB query results."""

from mongodb_helpers.connector import MongoDBConnector
from mongodb_helpers.errors import InvalidArgumentError, MongoDBHelpersError, QueryExecutionError
from mongodb_helpers.membership import fetch_docs_by_array_membership, get_docs_by_array_membership
from mongodb_helpers.pagination import fetch_page, get_paginated_data
from mongodb_helpers.query import MongoDocument, MongoQuery, MongoResultSet
from mongodb_helpers.settings import HelperSettings
from mongodb_helpers.snapshot import convert_query_snapshot
from mongodb_helpers.types import Page, QueryResult, Temporal
from mongodb_helpers.utils import convert_timestamps

__all__ = [
    "HelperSettings",
    "InvalidArgumentError",
    "MongoDBConnector",
    "MongoDBHelpersError",
    "MongoDocument",
    "MongoQuery",
    "MongoResultSet",
    "Page",
    "QueryExecutionError",
    "QueryResult",
    "Temporal",
    "convert_query_snapshot",
    "convert_timestamps",
    "fetch_docs_by_array_membership",
    "fetch_page",
    "get_docs_by_array_membership",
    "get_paginated_data",
]
