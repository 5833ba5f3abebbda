"""Pytest fixtures shared by the unit tests."""

import pytest

from tests.utilities.fakes import FakeQuery, QueryLog, make_documents


@pytest.fixture
def query_log() -> QueryLog:
    """Record of the queries executed by the fake query."""
    return QueryLog()


@pytest.fixture
def numbered_query(query_log: QueryLog) -> FakeQuery:
    """A fake query over 25 documents whose 'number' field runs from 0 to 24."""
    return FakeQuery(make_documents(25), query_log)
