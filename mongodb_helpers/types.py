"""Custom type definitions for mongodb-helpers."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Generic, Optional, Protocol, TypeAlias, TypeVar, runtime_checkable

from typing_extensions import Self

from mongodb_helpers.errors import QueryExecutionError

Record: TypeAlias = dict[str, Any]
MatchValue: TypeAlias = Any

T = TypeVar("T")


@runtime_checkable
class Temporal(Protocol):
    """A timestamp-like value that can be converted into a standard datetime.

    bson.Timestamp and bson.datetime_ms.DatetimeMS both satisfy this protocol."""

    def as_datetime(self) -> datetime:
        """Return the value as a datetime."""


class DocumentHandle(Protocol):
    """One document returned by a query."""

    @property
    def id(self) -> str:
        """Return the identifier assigned to the document by the database."""

    def data(self) -> Mapping[str, Any]:
        """Return the document fields, without the identifier."""


class ResultSet(Protocol):
    """The ordered documents returned by executing a query."""

    @property
    def empty(self) -> bool:
        """Return True if the query matched no documents."""

    @property
    def documents(self) -> Sequence[DocumentHandle]:
        """Return the matched documents in result order."""


class QuerySource(Protocol):
    """A query that can be narrowed, bounded, resumed and executed.

    Builder methods never modify the receiver, they return a new query."""

    def where_in(self, field_name: str, values: Sequence[MatchValue]) -> Self:
        """Restrict the query to documents whose ``field_name`` is one of ``values``."""

    def limit(self, count: int) -> Self:
        """Bound the query to at most ``count`` documents."""

    def start_after(self, cursor: DocumentHandle) -> Self:
        """Resume the query after ``cursor``."""

    async def execute(self) -> ResultSet:
        """Run the query. Raises QueryExecutionError when the database fails."""


@dataclass(frozen=True)
class Page:
    """One page of records plus the cursor needed to fetch the next one."""

    data: list[Record] = field(default_factory=list)
    last_doc: Optional[DocumentHandle] = None

    @classmethod
    def empty(cls) -> Self:
        """Return a page with no records and no cursor."""
        return cls(data=[], last_doc=None)


@dataclass(frozen=True)
class QueryResult(Generic[T]):
    """Outcome of a helper that queries the database: either a value or a QueryExecutionError.

    Lets the caller decide whether a failed query should degrade or abort."""

    value: Optional[T] = None
    error: Optional[QueryExecutionError] = None

    @classmethod
    def success(cls, value: T) -> QueryResult[T]:
        """Wrap a successful value."""
        return cls(value=value)

    @classmethod
    def failure(cls, error: QueryExecutionError) -> QueryResult[T]:
        """Wrap a query failure."""
        return cls(error=error)

    @property
    def ok(self) -> bool:
        """Return True if the query succeeded."""
        return self.error is None

    def unwrap(self) -> T:
        """Return the value, or raise the carried error."""
        if self.error is not None:
            raise self.error
        return self.value
