"""Tests for cluster and session creation (no Cassandra needed)."""

import socket
import ssl
from unittest.mock import MagicMock, call, patch

import pytest
from cassandra.auth import PlainTextAuthProvider
from cassandra.cluster import EXEC_PROFILE_DEFAULT, NoHostAvailable
from cassandra.policies import DCAwareRoundRobinPolicy, TokenAwarePolicy
from cassandra.query import tuple_factory

from cassandra_dbapi.cluster.factory import build_cluster, create_session
from cassandra_dbapi.cluster.session import SessionHandle
from cassandra_dbapi.exceptions import OperationalError, UnknownHostError
from cassandra_dbapi.models.consistency import ConsistencyLevel
from cassandra_dbapi.uri import parse_uri

ADDRESSES = {"node1": "10.0.0.1", "node2": "10.0.0.2", "localhost": "127.0.0.1"}


def fake_resolve(host):
    try:
        return ADDRESSES[host]
    except KeyError:
        raise socket.gaierror(-2, "Name or service not known") from None


@pytest.fixture
def mock_cluster_cls():
    """Patch the driver Cluster class and host resolution."""
    with (
        patch("cassandra_dbapi.cluster.factory.Cluster") as cluster_cls,
        patch("cassandra_dbapi.cluster.factory.socket.gethostbyname", side_effect=fake_resolve),
    ):
        yield cluster_cls


def cluster_kwargs(cluster_cls):
    return cluster_cls.call_args.kwargs


def test_contact_points_resolved_in_order(mock_cluster_cls):
    build_cluster(parse_uri("cassandra://node2,node1/"))
    assert cluster_kwargs(mock_cluster_cls)["contact_points"] == ["10.0.0.2", "10.0.0.1"]


def test_no_port_uses_driver_default(mock_cluster_cls):
    build_cluster(parse_uri("cassandra://node1/"))
    assert "port" not in cluster_kwargs(mock_cluster_cls)


def test_last_port_applies_to_cluster(mock_cluster_cls):
    build_cluster(parse_uri("cassandra://node1:9042,node2:9142/"))
    assert cluster_kwargs(mock_cluster_cls)["port"] == 9142


def test_unknown_host(mock_cluster_cls):
    with pytest.raises(UnknownHostError, match="nowhere") as exc_info:
        build_cluster(parse_uri("cassandra://node1,nowhere/"))
    assert exc_info.value.host == "nowhere"
    mock_cluster_cls.assert_not_called()


def test_default_profile(mock_cluster_cls):
    build_cluster(parse_uri("cassandra://node1/?consistencyLevel=quorum"))
    profile = cluster_kwargs(mock_cluster_cls)["execution_profiles"][EXEC_PROFILE_DEFAULT]
    assert profile.consistency_level == ConsistencyLevel.QUORUM.driver_value
    assert profile.row_factory is tuple_factory


def test_default_profile_is_token_aware(mock_cluster_cls):
    build_cluster(parse_uri("cassandra://node1/"))
    profile = cluster_kwargs(mock_cluster_cls)["execution_profiles"][EXEC_PROFILE_DEFAULT]
    policy = profile.load_balancing_policy
    assert isinstance(policy, TokenAwarePolicy)
    assert isinstance(policy._child_policy, DCAwareRoundRobinPolicy)


def test_credentials_applied(mock_cluster_cls):
    build_cluster(parse_uri("cassandra://node1/?user=alice&password=pw"))
    auth = cluster_kwargs(mock_cluster_cls)["auth_provider"]
    assert isinstance(auth, PlainTextAuthProvider)
    assert auth.username == "alice"
    assert auth.password == "pw"


def test_empty_password_still_authenticates(mock_cluster_cls):
    build_cluster(parse_uri("cassandra://node1/?user=alice&password="))
    assert "auth_provider" in cluster_kwargs(mock_cluster_cls)


@pytest.mark.parametrize(
    "uri",
    [
        "cassandra://node1/?user=alice",
        "cassandra://node1/?password=pw",
        "cassandra://node1/?user=&password=pw",
    ],
)
def test_credentials_skipped_when_incomplete(mock_cluster_cls, uri):
    build_cluster(parse_uri(uri))
    assert "auth_provider" not in cluster_kwargs(mock_cluster_cls)


def test_no_tls_by_default(mock_cluster_cls):
    build_cluster(parse_uri("cassandra://node1/"))
    assert "ssl_context" not in cluster_kwargs(mock_cluster_cls)


def test_tls_applied_once_for_all_hosts(mock_cluster_cls):
    with patch("cassandra_dbapi.cluster.factory.build_ssl_context") as build_ctx:
        build_ctx.return_value = ssl.create_default_context()
        build_cluster(parse_uri("cassandra://node1,node2/?sslenabled=true"))
    build_ctx.assert_called_once_with(True)
    assert cluster_kwargs(mock_cluster_cls)["ssl_context"] is build_ctx.return_value


def test_tls_verifies_chain_against_resolved_addresses(mock_cluster_cls):
    build_cluster(parse_uri("cassandra://node1/?sslenabled=true"))
    kwargs = cluster_kwargs(mock_cluster_cls)
    assert kwargs["contact_points"] == ["10.0.0.1"]
    context = kwargs["ssl_context"]
    assert context.verify_mode == ssl.CERT_REQUIRED
    # The driver passes the resolved address as server_hostname
    assert context.check_hostname is False


def test_tls_permissive(mock_cluster_cls):
    with patch("cassandra_dbapi.cluster.factory.build_ssl_context") as build_ctx:
        build_cluster(
            parse_uri("cassandra://node1/?sslenabled=1&verifyServerCertificate=false")
        )
    build_ctx.assert_called_once_with(False)


def test_create_session_connects_to_keyspace(mock_cluster_cls):
    handle = create_session(parse_uri("cassandra://localhost/shop.orders"))
    cluster = mock_cluster_cls.return_value
    cluster.connect.assert_called_once_with("shop")
    assert isinstance(handle, SessionHandle)
    assert handle.session is cluster.connect.return_value


def test_create_session_without_keyspace(mock_cluster_cls):
    create_session(parse_uri("cassandra://localhost"))
    mock_cluster_cls.return_value.connect.assert_called_once_with(None)


def test_create_session_failure_shuts_cluster_down(mock_cluster_cls):
    cluster = mock_cluster_cls.return_value
    cluster.connect.side_effect = NoHostAvailable("Unable to connect to any servers", {})
    with pytest.raises(OperationalError, match="Unable to connect to any servers"):
        create_session(parse_uri("cassandra://localhost/"))
    cluster.shutdown.assert_called_once()


class TestSessionHandle:
    def test_close_releases_session_then_cluster(self):
        parent = MagicMock()
        handle = SessionHandle(parent.cluster, parent.session)
        handle.close()
        assert parent.mock_calls == [call.session.shutdown(), call.cluster.shutdown()]

    def test_close_is_idempotent(self, handle, driver_cluster, driver_session):
        handle.close()
        handle.close()
        driver_session.shutdown.assert_called_once()
        driver_cluster.shutdown.assert_called_once()
        assert handle.closed

    def test_cluster_released_even_if_session_shutdown_fails(self, driver_cluster, driver_session):
        driver_session.shutdown.side_effect = RuntimeError("boom")
        handle = SessionHandle(driver_cluster, driver_session)
        with pytest.raises(RuntimeError):
            handle.close()
        driver_cluster.shutdown.assert_called_once()

    def test_keyspace(self, handle):
        assert handle.keyspace == "shop"
