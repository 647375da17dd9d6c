"""DB-API 2.0 connection, cursor and result objects."""

from cassandra_dbapi.dbapi.connection import LEGACY_COLUMNS_QUERY, Connection, connect
from cassandra_dbapi.dbapi.cursor import SUCCESS_NO_INFO, Cursor, PreparedCursor
from cassandra_dbapi.dbapi.results import ExecutionResult, ListResultSet, ResultSet

__all__ = [
    "LEGACY_COLUMNS_QUERY",
    "SUCCESS_NO_INFO",
    "Connection",
    "Cursor",
    "ExecutionResult",
    "ListResultSet",
    "PreparedCursor",
    "ResultSet",
    "connect",
]
