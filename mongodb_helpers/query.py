"""pymongo binding of the query capability used by the helpers."""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from typing import TYPE_CHECKING, Any, Optional

from bson.errors import BSONError
from pymongo import ASCENDING
from pymongo.errors import PyMongoError
from typing_extensions import Self

from mongodb_helpers.errors import InvalidArgumentError, QueryExecutionError
from mongodb_helpers.types import MatchValue
from mongodb_helpers.utils import require_positive

if TYPE_CHECKING:
    from pymongo.asynchronous.collection import AsyncCollection


class MongoDocument:
    """A document returned by a MongoQuery."""

    def __init__(self, document: Mapping[str, Any]) -> None:
        self._document: Mapping[str, Any] = document

    @property
    def id(self) -> str:
        """Return the document _id as a string."""
        return str(self._document["_id"])

    @property
    def object_id(self) -> Any:
        """Return the raw _id value, used as the pagination key."""
        return self._document["_id"]

    def data(self) -> dict[str, Any]:
        """Return the document fields without _id."""
        return {key: value for key, value in self._document.items() if key != "_id"}

    def __repr__(self) -> str:
        return f"MongoDocument(id={self.id!r})"


class MongoResultSet:
    """The documents returned by executing a MongoQuery, in _id order."""

    def __init__(self, documents: Sequence[MongoDocument]) -> None:
        self._documents: list[MongoDocument] = list(documents)

    @property
    def empty(self) -> bool:
        """Return True if the query matched no documents."""
        return not self._documents

    @property
    def documents(self) -> list[MongoDocument]:
        """Return the matched documents."""
        return self._documents

    def __iter__(self) -> Iterator[MongoDocument]:
        return iter(self._documents)

    def __len__(self) -> int:
        return len(self._documents)


class MongoQuery:
    """Query over a pymongo AsyncCollection.

    Builder methods return a new MongoQuery and leave the receiver untouched. Results are sorted by ascending _id, so
    start_after can resume with a plain ``_id > cursor`` condition.
    """

    def __init__(
        self,
        collection: AsyncCollection,
        filter: Optional[Mapping[str, Any]] = None,  # pylint: disable=redefined-builtin
        *,
        conditions: tuple[Mapping[str, Any], ...] = (),
        max_results: Optional[int] = None,
    ) -> None:
        self._collection: AsyncCollection = collection
        self._filter: dict[str, Any] = dict(filter or {})
        self._conditions: tuple[Mapping[str, Any], ...] = conditions
        self._max_results: Optional[int] = max_results

    def _copy(self, **changes: Any) -> Self:
        arguments: dict[str, Any] = {"conditions": self._conditions, "max_results": self._max_results}
        arguments.update(changes)
        return type(self)(self._collection, self._filter, **arguments)

    @property
    def collection(self) -> AsyncCollection:
        """Return the queried collection."""
        return self._collection

    @property
    def filter(self) -> dict[str, Any]:
        """Return the MongoDB filter document this query runs with."""
        parts: list[Mapping[str, Any]] = ([self._filter] if self._filter else []) + list(self._conditions)
        if not parts:
            return {}
        if len(parts) == 1:
            return dict(parts[0])
        return {"$and": [dict(part) for part in parts]}

    @property
    def max_results(self) -> Optional[int]:
        """Return the result bound set with limit(), if any."""
        return self._max_results

    def where_in(self, field_name: str, values: Sequence[MatchValue]) -> Self:
        """Restrict the query to documents whose field_name is one of values."""
        return self._copy(conditions=self._conditions + ({field_name: {"$in": list(values)}},))

    def limit(self, count: int) -> Self:
        """Bound the query to at most count documents."""
        return self._copy(max_results=require_positive("limit", count))

    def start_after(self, cursor: MongoDocument) -> Self:
        """Resume the query after cursor, a document returned by an earlier MongoQuery."""
        if not isinstance(cursor, MongoDocument):
            raise InvalidArgumentError(f"Cannot resume a MongoQuery after {type(cursor).__name__}")
        return self._copy(conditions=self._conditions + ({"_id": {"$gt": cursor.object_id}},))

    async def execute(self) -> MongoResultSet:
        """Run the query.

        Raises:
            QueryExecutionError: if pymongo fails to run the query, or the filter cannot be encoded to BSON.
        """
        cursor = self._collection.find(self.filter).sort([("_id", ASCENDING)])
        if self._max_results is not None:
            cursor = cursor.limit(self._max_results)
        try:
            documents: list[Mapping[str, Any]] = await cursor.to_list(length=None)
        except (PyMongoError, BSONError) as error:
            msg = f"Query on {self._collection.name} failed: {error}"
            raise QueryExecutionError(msg) from error
        return MongoResultSet([MongoDocument(document) for document in documents])
