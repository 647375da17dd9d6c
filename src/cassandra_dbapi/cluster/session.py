"""Session handle: one cluster plus the session opened on it."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from cassandra.cluster import Cluster, ResultSet, Session
    from cassandra.query import PreparedStatement, Statement

logger = logging.getLogger(__name__)


class SessionHandle:
    """Owns a driver Cluster and the Session bound to it.

    Shared by a Connection and every cursor it creates. ``close()`` shuts
    the session down first, then the cluster, and does so at most once.
    """

    def __init__(self, cluster: Cluster, session: Session) -> None:
        """Initialize with a connected cluster and its session."""
        self._cluster = cluster
        self._session = session
        self._closed = False

    @property
    def session(self) -> Session:
        """The underlying driver session."""
        return self._session

    @property
    def keyspace(self) -> str | None:
        """The keyspace the session is bound to."""
        keyspace: str | None = self._session.keyspace
        return keyspace

    @property
    def closed(self) -> bool:
        """Whether close() has run."""
        return self._closed

    def execute(self, statement: Statement | str, params: Any = None) -> ResultSet:
        """Run a statement and block until the result arrives."""
        return self._session.execute(statement, params)

    def prepare(self, cql: str) -> PreparedStatement:
        """Prepare a statement on the server."""
        return self._session.prepare(cql)

    def close(self) -> None:
        """Shut down the session, then the cluster. Repeated calls are no-ops."""
        if self._closed:
            return
        self._closed = True
        try:
            self._session.shutdown()
        finally:
            self._cluster.shutdown()
        logger.info("Cluster connection closed")
