"""MongoDB/DocumentDB connector utility"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from functools import cached_property
from logging import Logger, getLogger
from typing import Any, Optional, TypeAlias

from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase

from mongodb_helpers.membership import get_docs_by_array_membership
from mongodb_helpers.pagination import get_paginated_data
from mongodb_helpers.query import MongoDocument, MongoQuery
from mongodb_helpers.settings import HelperSettings
from mongodb_helpers.types import MatchValue, Page, Record

MongoVersion: TypeAlias = tuple[int, int]


class MongoDBConnector:
    """MongoDB/DocumentDB connector class"""

    def __init__(
        self,
        connection_string: str,
        db_name: str,
        options: Optional[dict[str, Any]] = None,
        settings: Optional[HelperSettings] = None,
    ) -> None:
        self._connection_string = connection_string
        self._db_name = db_name
        self._options: dict[str, Any] = options or {}
        self._settings: HelperSettings = settings or HelperSettings()
        self._logger: Logger = getLogger(__name__)
        self._version: MongoVersion | None = None

    @cached_property
    def mongo_client(self) -> AsyncMongoClient:
        """Provide an AsyncMongoClient instance. Client is cached and reused."""
        return AsyncMongoClient(
            self._connection_string,
            datetime_conversion=self._settings.datetime_conversion.upper(),
            **self._options,
        )

    async def connect(self) -> MongoVersion:
        """Check that the server is reachable and record its version."""
        try:
            server_info: dict[str, Any] = await self.mongo_client.server_info()
            version_array: list[int] = server_info["versionArray"]
            self._version = (version_array[0], version_array[1])
        except Exception as exception:
            self._logger.exception("Could not connect to MongoDB")
            msg = "Could not connect to MongoDB"
            raise RuntimeError(msg) from exception
        return self._version

    async def close(self) -> None:
        """Close the client, if it was ever created."""
        if "mongo_client" in self.__dict__:
            await self.mongo_client.close()
            del self.__dict__["mongo_client"]

    @property
    def settings(self) -> HelperSettings:
        """Return the helper settings."""
        return self._settings

    @property
    def database(self) -> AsyncDatabase:
        """Provide an AsyncDatabase instance."""
        return self.mongo_client[self._db_name]

    @property
    def version(self) -> MongoVersion | None:
        """Returns the MongoVersion that is being used, once connect() has run."""
        return self._version

    def query(
        self,
        collection_name: str,
        filter: Optional[Mapping[str, Any]] = None,  # pylint: disable=redefined-builtin
    ) -> MongoQuery:
        """Create a MongoQuery over a collection of the database."""
        return MongoQuery(self.database[collection_name], filter)

    async def get_page(
        self,
        collection_name: str,
        last_document: Optional[MongoDocument] = None,
        filter: Optional[Mapping[str, Any]] = None,  # pylint: disable=redefined-builtin
    ) -> Page:
        """Fetch one page of settings.page_size records from a collection. A failed query gives an empty page."""
        return await get_paginated_data(
            self.query(collection_name, filter),
            last_document,
            self._settings.page_size,
            logger=self._logger,
        )

    async def get_docs_by_array_membership(
        self,
        collection_name: str,
        field_name: str,
        values: Sequence[MatchValue],
        filter: Optional[Mapping[str, Any]] = None,  # pylint: disable=redefined-builtin
    ) -> list[Record]:
        """Fetch the documents of a collection whose field_name is one of values, settings.chunk_size at a time."""
        self._logger.info(
            "Querying %s.%s on %s with %d value(s)", self._db_name, collection_name, field_name, len(values)
        )
        return await get_docs_by_array_membership(
            self.query(collection_name, filter),
            field_name,
            values,
            self._settings.chunk_size,
            max_concurrency=self._settings.max_concurrency,
        )
