"""Turn a ConnectionConfig into a live cluster and session."""

import logging
import socket

from cassandra.auth import PlainTextAuthProvider
from cassandra.cluster import EXEC_PROFILE_DEFAULT, Cluster, ExecutionProfile
from cassandra.policies import DCAwareRoundRobinPolicy, TokenAwarePolicy
from cassandra.query import tuple_factory

from cassandra_dbapi.cluster.session import SessionHandle
from cassandra_dbapi.cluster.tls import build_ssl_context
from cassandra_dbapi.exceptions import OperationalError, UnknownHostError, driver_message
from cassandra_dbapi.models.connection_config import ConnectionConfig

logger = logging.getLogger(__name__)


def resolve_contact_points(config: ConnectionConfig) -> list[str]:
    """Resolve every configured host to an IP address, preserving order."""
    addresses = []
    for host, _ in config.contact_points():
        try:
            addresses.append(socket.gethostbyname(host))
        except (socket.gaierror, UnicodeError) as e:
            raise UnknownHostError(host) from e
    return addresses


def build_cluster(config: ConnectionConfig) -> Cluster:
    """Create (but do not connect) a driver Cluster for the configuration."""
    contact_points = resolve_contact_points(config)
    logger.info("Contact points: %s", ", ".join(contact_points))

    profile = ExecutionProfile(
        load_balancing_policy=TokenAwarePolicy(DCAwareRoundRobinPolicy()),
        consistency_level=config.consistency_level.driver_value,
        row_factory=tuple_factory,
    )
    kwargs: dict[str, object] = {
        "contact_points": contact_points,
        "execution_profiles": {EXEC_PROFILE_DEFAULT: profile},
    }

    port = config.port
    if port is not None:
        kwargs["port"] = port

    logger.info("sslenabled: %s", config.ssl_enabled)
    if config.ssl_enabled:
        kwargs["ssl_context"] = build_ssl_context(config.verify_server_cert)

    if config.user and config.password is not None:
        kwargs["auth_provider"] = PlainTextAuthProvider(
            username=config.user, password=config.password
        )
        logger.info("Using authentication as user '%s'", config.user)

    return Cluster(**kwargs)


def create_session(config: ConnectionConfig) -> SessionHandle:
    """Connect to the cluster and open a session on the configured keyspace."""
    cluster = build_cluster(config)
    try:
        session = cluster.connect(config.keyspace)
    except Exception as e:
        cluster.shutdown()
        raise OperationalError(driver_message(e)) from e
    logger.info("Connected to %s (keyspace=%s)", ",".join(config.hosts), config.keyspace)
    return SessionHandle(cluster, session)
