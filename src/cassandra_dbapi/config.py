"""Environment-variable-based configuration."""

import os


def get_keystore_type() -> str:
    """Return the TLS key material type from CASSANDRA_DBAPI_KEYSTORE_TYPE."""
    return os.environ.get("CASSANDRA_DBAPI_KEYSTORE_TYPE", "PEM")


def get_keystore_password() -> str:
    """Return the TLS key material password from CASSANDRA_DBAPI_KEYSTORE_PASSWORD."""
    return os.environ.get("CASSANDRA_DBAPI_KEYSTORE_PASSWORD", "")


def get_keystore_location() -> str:
    """Return the TLS key material location from CASSANDRA_DBAPI_KEYSTORE."""
    return os.environ.get("CASSANDRA_DBAPI_KEYSTORE", "")


def get_log_level() -> str:
    """Return the logging level from CASSANDRA_DBAPI_LOG_LEVEL."""
    return os.environ.get("CASSANDRA_DBAPI_LOG_LEVEL", "WARNING")
