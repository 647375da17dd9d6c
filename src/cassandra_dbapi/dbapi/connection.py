"""DB-API connection over a Cassandra session."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from cassandra_dbapi.cluster.factory import create_session
from cassandra_dbapi.cluster.session import SessionHandle
from cassandra_dbapi.dbapi.cursor import Cursor, PreparedCursor
from cassandra_dbapi.dbapi.unsupported import UnsupportedOperations
from cassandra_dbapi.exceptions import DatabaseError, InterfaceError, driver_message
from cassandra_dbapi.models.consistency import ConsistencyLevel
from cassandra_dbapi.uri import parse_uri

logger = logging.getLogger(__name__)

# Column introspection query sent by database IDEs against Cassandra 2.x.
# Those IDE versions assume index_name is never null, so unless the
# connection opts into native nulls, null text values of this one query
# come back as the string "null".
LEGACY_COLUMNS_QUERY = (
    "SELECT column_name as name,\n"
    "       validator,\n"
    "       columnfamily_name as table_name,\n"
    "       type,\n"
    "       index_name,\n"
    "       index_options,\n"
    "       index_type,\n"
    "       component_index as position\n"
    "FROM system.schema_columns\n"
    "WHERE keyspace_name = ?"
)


class Connection(UnsupportedOperations):
    """An open session plus per-connection settings.

    Cassandra has no transactions: autocommit is always on, commit() and
    rollback() do nothing. The consistency level can be changed at any time
    (also through the ``CONSISTENCY <LEVEL>`` command); it is a plain
    attribute without locking, so a caller changing it while another thread
    prepares a statement races with that thread. Prepared statements keep
    the level that was current when they were prepared.
    """

    UNSUPPORTED = {
        "set_isolation_level": "Cassandra provides no support for transactions.",
        "native_sql": "Cassandra does not support SQL natively.",
        "prepare_call": None,
        "set_savepoint": None,
        "release_savepoint": None,
        "rollback_to_savepoint": None,
        "get_type_map": None,
        "set_type_map": None,
        "set_holdability": None,
        "get_holdability": None,
        "create_blob": None,
        "create_clob": None,
        "abort": None,
        "set_network_timeout": None,
        "get_network_timeout": None,
        "unwrap": None,
    }

    def __init__(
        self,
        session_handle: SessionHandle,
        consistency_level: ConsistencyLevel = ConsistencyLevel.LOCAL_ONE,
        *,
        native_nulls: bool = False,
    ) -> None:
        """Initialize with an open session. Use connect() instead."""
        self._handle = session_handle
        self._consistency_level = consistency_level
        self._native_nulls = native_nulls
        self._closed = False
        self._read_only = False

    # -- State --

    @property
    def closed(self) -> bool:
        """Whether close() has been called."""
        return self._closed

    def check_closed(self) -> None:
        """Raise InterfaceError if the connection is closed."""
        if self._closed:
            raise InterfaceError("Connection was previously closed.")

    @property
    def session_handle(self) -> SessionHandle:
        """The shared session handle."""
        self.check_closed()
        return self._handle

    @property
    def consistency_level(self) -> ConsistencyLevel:
        """The level new statements run at."""
        self.check_closed()
        return self._consistency_level

    @consistency_level.setter
    def consistency_level(self, level: ConsistencyLevel) -> None:
        self.check_closed()
        self._consistency_level = level

    @property
    def autocommit(self) -> bool:
        """Always True."""
        self.check_closed()
        return True

    @autocommit.setter
    def autocommit(self, value: bool) -> None:
        self.check_closed()

    @property
    def read_only(self) -> bool:
        """Stored for callers that ask; writes are not blocked."""
        self.check_closed()
        return self._read_only

    @read_only.setter
    def read_only(self, value: bool) -> None:
        self.check_closed()
        self._read_only = value

    @property
    def catalog(self) -> str | None:
        """The session keyspace."""
        self.check_closed()
        try:
            return self._handle.keyspace
        except Exception as e:
            raise DatabaseError(driver_message(e)) from e

    @catalog.setter
    def catalog(self, value: str | None) -> None:
        """The keyspace is fixed per session, so this is ignored."""

    schema = catalog

    @property
    def isolation_level(self) -> None:
        """No transaction isolation exists."""
        self.check_closed()
        return None

    def is_valid(self, timeout: float | None = None) -> bool:
        """True while the connection is open."""
        self.check_closed()
        return True

    # -- Statements --

    def cursor(self) -> Cursor:
        """Create a cursor for plain CQL statements."""
        self.check_closed()
        return Cursor(self)

    def prepare(self, cql: str) -> PreparedCursor:
        """Prepare ``cql`` on the server at the current consistency level."""
        self.check_closed()
        try:
            prepared = self._handle.prepare(cql)
        except Exception as e:
            raise DatabaseError(driver_message(e)) from e
        null_placeholder = not self._native_nulls and cql == LEGACY_COLUMNS_QUERY
        return PreparedCursor(self, prepared, null_placeholder=null_placeholder)

    def commit(self) -> None:
        """No-op: every statement is applied immediately."""
        self.check_closed()

    def rollback(self) -> None:
        """No-op: there is nothing to roll back."""
        self.check_closed()

    # -- Lifecycle --

    def close(self) -> None:
        """Release the session and its cluster. Closing twice is a no-op."""
        if self._closed:
            return
        self._closed = True
        self._handle.close()

    def __enter__(self) -> Connection:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def connect(
    uri: str,
    properties: Mapping[str, Any] | None = None,
    *,
    native_nulls: bool = False,
    **kwargs: Any,
) -> Connection:
    """Open a connection from a ``cassandra://`` URI.

    ``properties`` and keyword arguments (``user``, ``password``,
    ``sslenabled``, ``verifyServerCertificate``, ``consistencyLevel``)
    override the same options in the URI; keyword arguments win over
    ``properties``.
    """
    merged: dict[str, Any] = dict(properties or {})
    merged.update(kwargs)
    config = parse_uri(uri, merged)
    handle = create_session(config)
    return Connection(handle, config.consistency_level, native_nulls=native_nulls)

