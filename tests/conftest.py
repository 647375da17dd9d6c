"""Shared test fixtures."""

from unittest.mock import MagicMock

import pytest

from cassandra_dbapi.cluster.session import SessionHandle
from cassandra_dbapi.dbapi.connection import Connection
from cassandra_dbapi.models.consistency import ConsistencyLevel


class FakeType:
    """Stand-in for a cassandra.cqltypes class; only ``typename`` is read."""

    def __init__(self, typename: str):
        self.typename = typename


class FakeDriverResult:
    """Minimal cassandra.cluster.ResultSet replacement.

    ``column_names`` is None for results that carry no rows (DDL, DML),
    matching what the driver reports.
    """

    def __init__(self, column_names=None, rows=(), column_types=None):
        self.column_names = column_names
        self.column_types = column_types
        self._rows = list(rows)
        self.iterated = False

    def __iter__(self):
        self.iterated = True
        return iter(self._rows)


def rows_result(columns: list[str], rows: list[tuple], types: list[str] | None = None):
    """Build a row-producing fake driver result."""
    column_types = [FakeType(t) for t in types] if types else None
    return FakeDriverResult(columns, rows, column_types)


def void_result():
    """Build a fake driver result with no rows (e.g. INSERT)."""
    return FakeDriverResult()


@pytest.fixture
def driver_session():
    """Mock driver Session; execute() returns a void result by default."""
    session = MagicMock()
    session.keyspace = "shop"
    session.execute.return_value = void_result()
    return session


@pytest.fixture
def driver_cluster():
    """Mock driver Cluster."""
    return MagicMock()


@pytest.fixture
def handle(driver_cluster, driver_session):
    """Session handle over the mock cluster and session."""
    return SessionHandle(driver_cluster, driver_session)


@pytest.fixture
def conn(handle):
    """Open connection at the default consistency level."""
    connection = Connection(handle, ConsistencyLevel.LOCAL_ONE)
    yield connection
    connection.close()
