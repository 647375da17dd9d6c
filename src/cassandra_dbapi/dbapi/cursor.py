"""DB-API cursors: plain statements, prepared statements and batches.

A cursor holds one result at a time. ``execute`` first offers the text to
the meta-command executors (``CONSISTENCY`` and ``CONSISTENCY <LEVEL>``) and
only sends it to Cassandra if none of them handles it.

Cursors are not thread-safe: callers sharing one must synchronize
themselves.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from typing import TYPE_CHECKING, Any

from cassandra.protocol import SyntaxException
from cassandra.query import BatchStatement, PreparedStatement, SimpleStatement, Statement

from cassandra_dbapi.dbapi.executors import execute_meta_command
from cassandra_dbapi.dbapi.results import Column, ExecutionResult, ResultSet, classify
from cassandra_dbapi.dbapi.unsupported import UnsupportedOperations
from cassandra_dbapi.exceptions import (
    CQLSyntaxError,
    DatabaseError,
    InterfaceError,
    NotSupportedError,
    ProgrammingError,
    driver_message,
)
from cassandra_dbapi.models.consistency import ConsistencyLevel

if TYPE_CHECKING:
    from cassandra_dbapi.dbapi.connection import Connection

logger = logging.getLogger(__name__)

# Per-statement batch outcome: succeeded, no row count available
SUCCESS_NO_INFO = -2

FETCH_FORWARD = "forward"


class Cursor(UnsupportedOperations):
    """Executes CQL text against the connection's session."""

    UNSUPPORTED = {
        "cancel": "Cassandra provides no support for interrupting an operation.",
        "callproc": "Cassandra has no stored procedures.",
        "nextset": None,
        "scroll": None,
        "set_fetch_direction": None,
        "set_query_timeout": None,
        "set_max_field_size": None,
        "set_escape_processing": None,
        "set_poolable": None,
        "close_on_completion": None,
        "get_result_set_holdability": None,
        "get_result_set_concurrency": None,
        "get_result_set_type": None,
        "get_generated_keys": None,
        "unwrap": None,
    }

    def __init__(self, connection: Connection) -> None:
        """Initialize for a connection. Use Connection.cursor() instead."""
        self.connection = connection
        self.arraysize = 1
        # Overrides the connection level for this cursor when set
        self.consistency_level: ConsistencyLevel | None = None
        self.lastrowid = None
        self._result: ResultSet | None = None
        self._batch: BatchStatement | None = None
        self._batch_size = 0
        self._closed = False

    # -- State --

    @property
    def closed(self) -> bool:
        """Whether close() has been called."""
        return self._closed

    def _check_closed(self) -> None:
        if self._closed:
            raise InterfaceError("Statement was previously closed.")
        self.connection.check_closed()

    def _level(self) -> ConsistencyLevel:
        return self.consistency_level or self.connection.consistency_level

    @property
    def description(self) -> list[Column] | None:
        """Column descriptions of the current result, or None."""
        return self._result.description if self._result is not None else None

    @property
    def rowcount(self) -> int:
        """Always -1: Cassandra does not report affected rows."""
        self._check_closed()
        return -1

    @property
    def result(self) -> ResultSet | None:
        """The current row-producing result, if any."""
        return self._result

    @property
    def fetch_direction(self) -> str:
        """Results can only be read forward."""
        return FETCH_FORWARD

    def set_cursor_name(self, name: str) -> None:
        """Accepted and ignored: positioned updates are not supported."""
        self._check_closed()

    def get_more_results(self, current: int | None = None) -> bool:
        """Always False: a statement yields at most one result."""
        self._check_closed()
        if current is not None:
            raise NotSupportedError("get_more_results is not supported by Cassandra.")
        return False

    def setinputsizes(self, sizes: Any) -> None:
        """No-op, as PEP 249 permits."""

    def setoutputsize(self, size: int, column: int | None = None) -> None:
        """No-op, as PEP 249 permits."""

    # -- Execution --

    def _run(
        self, statement: Statement, params: Any = None, *, null_placeholder: bool = False
    ) -> ExecutionResult:
        """Send a statement to Cassandra and classify the outcome."""
        handle = self.connection.session_handle
        try:
            raw = handle.execute(statement, params)
        except SyntaxException as e:
            raise CQLSyntaxError(driver_message(e)) from e
        except Exception as e:
            raise DatabaseError(driver_message(e)) from e
        return classify(raw, null_placeholder=null_placeholder)

    def execute(self, cql: str, params: Sequence[Any] | None = None) -> bool:
        """Execute a statement. Returns True if it produced rows.

        Row results are then available through the fetch methods; other
        results leave ``description`` as None.
        """
        self._check_closed()
        self._result = None
        result = execute_meta_command(self.connection, cql)
        if result is None:
            level = self._level()
            logger.debug("Executing at %s: %s", level, cql)
            statement = SimpleStatement(cql, consistency_level=level.driver_value)
            result = self._run(statement, params)
        self._result = result.result_set
        return result.is_query

    def executemany(self, cql: str, seq_of_params: Sequence[Sequence[Any]]) -> None:
        """Execute the statement once per parameter set."""
        for params in seq_of_params:
            self.execute(cql, params)

    # -- Batches --

    def _add_to_batch(self, statement: Statement, params: Any = None) -> None:
        self._check_closed()
        if self._batch is None:
            self._batch = BatchStatement()
        self._batch.add(statement, params)
        self._batch_size += 1

    def add_batch(self, cql: str, params: Sequence[Any] | None = None) -> None:
        """Queue a statement for the next execute_batch()."""
        self._add_to_batch(SimpleStatement(cql), params)

    def clear_batch(self) -> None:
        """Drop all queued batch statements."""
        self._batch = None
        self._batch_size = 0

    @property
    def batch_size(self) -> int:
        """Number of statements queued for the next batch."""
        return self._batch_size

    def execute_batch(self) -> list[int]:
        """Run all queued statements as one Cassandra batch.

        Returns one SUCCESS_NO_INFO per statement. The queue is emptied
        whether or not the batch succeeds.
        """
        self._check_closed()
        if self._batch is None:
            raise DatabaseError("No batch statements were submitted")
        batch, count = self._batch, self._batch_size
        batch.consistency_level = self._level().driver_value
        handle = self.connection.session_handle
        logger.debug("Executing batch of %d statements", count)
        try:
            handle.execute(batch)
        except Exception as e:
            raise DatabaseError(driver_message(e)) from e
        finally:
            self.clear_batch()
        return [SUCCESS_NO_INFO] * count

    # -- Fetching --

    def _current_result(self) -> ResultSet:
        self._check_closed()
        if self._result is None:
            raise ProgrammingError("No result set available.")
        return self._result

    def fetchone(self) -> tuple[Any, ...] | None:
        """Fetch the next row, or None if exhausted."""
        return self._current_result().fetchone()

    def fetchmany(self, size: int | None = None) -> list[tuple[Any, ...]]:
        """Fetch up to ``size`` rows (default: arraysize)."""
        return self._current_result().fetchmany(self.arraysize if size is None else size)

    def fetchall(self) -> list[tuple[Any, ...]]:
        """Fetch all remaining rows."""
        return self._current_result().fetchall()

    def __iter__(self) -> Iterator[tuple[Any, ...]]:
        return iter(self._current_result())

    # -- Lifecycle --

    def close(self) -> None:
        """Close the cursor. Closing twice is a no-op."""
        self._closed = True
        self._result = None
        self.clear_batch()

    def __enter__(self) -> Cursor:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class PreparedCursor(Cursor):
    """A cursor bound to one server-side prepared statement.

    The consistency level is captured when the statement is prepared, not
    when it runs. Meta-commands are not recognized here.
    """

    def __init__(
        self,
        connection: Connection,
        prepared: PreparedStatement,
        *,
        null_placeholder: bool = False,
    ) -> None:
        """Initialize with a driver PreparedStatement. Use Connection.prepare() instead."""
        super().__init__(connection)
        self.prepared = prepared
        self.null_placeholder = null_placeholder
        self.consistency_level = connection.consistency_level
        prepared.consistency_level = self.consistency_level.driver_value

    @property
    def query_string(self) -> str:
        """The prepared CQL text."""
        text: str = self.prepared.query_string
        return text

    def execute(self, params: Sequence[Any] | None = None) -> bool:  # type: ignore[override]
        """Bind ``params`` and execute. Returns True if it produced rows."""
        self._check_closed()
        self._result = None
        bound = self.prepared.bind(params or ())
        result = self._run(bound, null_placeholder=self.null_placeholder)
        self._result = result.result_set
        return result.is_query

    def executemany(self, seq_of_params: Sequence[Sequence[Any]]) -> None:  # type: ignore[override]
        """Execute once per parameter set."""
        for params in seq_of_params:
            self.execute(params)

    def add_batch(self, params: Sequence[Any] | None = None) -> None:  # type: ignore[override]
        """Queue the statement bound to ``params`` for the next execute_batch()."""
        self._add_to_batch(self.prepared.bind(params or ()))
