"""DB-API 2.0 (PEP 249) interface to Apache Cassandra."""

from cassandra_dbapi.dbapi import (
    SUCCESS_NO_INFO,
    Connection,
    Cursor,
    PreparedCursor,
    connect,
)
from cassandra_dbapi.exceptions import (
    CQLSyntaxError,
    DatabaseError,
    DataError,
    Error,
    IntegrityError,
    InterfaceError,
    InternalError,
    InvalidURIError,
    NotSupportedError,
    OperationalError,
    ProgrammingError,
    SSLParamsError,
    UnknownHostError,
    Warning,
)
from cassandra_dbapi.models.consistency import ConsistencyLevel
from cassandra_dbapi.properties import get_property_info

apilevel = "2.0"
threadsafety = 1  # Threads may share the module, but not connections
paramstyle = "format"  # Driver-side %s binding; prepared statements take ? markers

__all__ = [
    "SUCCESS_NO_INFO",
    "CQLSyntaxError",
    "Connection",
    "ConsistencyLevel",
    "Cursor",
    "DataError",
    "DatabaseError",
    "Error",
    "IntegrityError",
    "InterfaceError",
    "InternalError",
    "InvalidURIError",
    "NotSupportedError",
    "OperationalError",
    "PreparedCursor",
    "ProgrammingError",
    "SSLParamsError",
    "UnknownHostError",
    "Warning",
    "apilevel",
    "connect",
    "get_property_info",
    "paramstyle",
    "threadsafety",
]
