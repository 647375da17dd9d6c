"""Cluster and session establishment."""

from cassandra_dbapi.cluster.factory import create_session
from cassandra_dbapi.cluster.session import SessionHandle
from cassandra_dbapi.cluster.tls import build_ssl_context

__all__ = ["SessionHandle", "build_ssl_context", "create_session"]
