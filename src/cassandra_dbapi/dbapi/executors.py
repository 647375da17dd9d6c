"""Meta-commands handled by the adapter instead of the query engine.

Each executor inspects the trimmed statement text and either returns an
ExecutionResult (it handled the command) or None (not its command). The
cursor tries them in ``META_COMMAND_EXECUTORS`` order; the first result
wins, and unhandled text goes to the server.

Unlike the connection string, where an unknown consistency level silently
falls back to the default, ``CONSISTENCY <LEVEL>`` with an unknown level is
an error.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Protocol

from cassandra_dbapi.dbapi.results import ExecutionResult, ListResultSet
from cassandra_dbapi.exceptions import DatabaseError
from cassandra_dbapi.models.consistency import ConsistencyLevel

if TYPE_CHECKING:
    from cassandra_dbapi.dbapi.connection import Connection

logger = logging.getLogger(__name__)


class StatementExecutor(Protocol):
    """Handles a statement if it recognizes it."""

    def execute(self, connection: Connection, cql: str) -> ExecutionResult | None:
        """Return a result if the statement was handled, else None."""
        ...


class SetConsistencyLevelExecutor:
    """``CONSISTENCY <LEVEL>``: change the connection's consistency level."""

    PATTERN = re.compile(r"CONSISTENCY (\w+)", re.IGNORECASE)

    def execute(self, connection: Connection, cql: str) -> ExecutionResult | None:
        """Set the level, or raise DatabaseError if the level is unknown."""
        match = self.PATTERN.fullmatch(cql.strip())
        if match is None:
            return None
        try:
            level = ConsistencyLevel.parse(match.group(1))
        except ValueError as e:
            raise DatabaseError(str(e)) from e
        connection.consistency_level = level
        logger.debug("Consistency level set to %s", level)
        return ExecutionResult()


class GetConsistencyLevelExecutor:
    """``CONSISTENCY``: report the connection's consistency level."""

    PATTERN = re.compile(r"CONSISTENCY", re.IGNORECASE)

    def execute(self, connection: Connection, cql: str) -> ExecutionResult | None:
        """Return a one-row ``consistency_level`` result."""
        if self.PATTERN.fullmatch(cql.strip()) is None:
            return None
        level = connection.consistency_level
        return ExecutionResult(ListResultSet([level.value], "consistency_level"))


META_COMMAND_EXECUTORS: tuple[StatementExecutor, ...] = (
    SetConsistencyLevelExecutor(),
    GetConsistencyLevelExecutor(),
)


def execute_meta_command(connection: Connection, cql: str) -> ExecutionResult | None:
    """Run the first executor that handles ``cql``; None if none does."""
    for executor in META_COMMAND_EXECUTORS:
        result = executor.execute(connection, cql)
        if result is not None:
            return result
    return None
