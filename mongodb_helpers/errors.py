"""Exceptions raised by mongodb-helpers."""


class MongoDBHelpersError(Exception):
    """Base class for all mongodb-helpers errors."""


class QueryExecutionError(MongoDBHelpersError, RuntimeError):
    """The underlying document database failed to execute a query.

    Transport, permission and validation failures reported by the client all surface as this error. The original
    client exception is available as ``__cause__``."""


class InvalidArgumentError(MongoDBHelpersError, ValueError):
    """An argument passed to a helper is malformed (page size, chunk size, cursor, non-mapping document...)."""
