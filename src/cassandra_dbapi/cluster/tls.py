"""TLS contexts for the cluster connection.

Two modes: verifying (system trust store, certificate chain only) and
permissive, which accepts any server certificate. Contact points reach the
driver as resolved addresses, so the verifying context does not match
certificate names against them. Permissive mode is meant for
self-signed or ad-hoc test clusters and may present a client certificate
taken from the keystore configured in the environment.
"""

from __future__ import annotations

import logging
import ssl
from urllib.parse import unquote, urlparse
from urllib.request import url2pathname

from cassandra_dbapi.config import (
    get_keystore_location,
    get_keystore_password,
    get_keystore_type,
)
from cassandra_dbapi.exceptions import SSLParamsError

logger = logging.getLogger(__name__)

SUPPORTED_KEYSTORE_TYPES = ("PEM",)


def normalize_keystore_url(location: str) -> str:
    """Coerce a bare filesystem path into a ``file:`` locator.

    Locations that already carry a URL scheme are returned unchanged.
    A single-letter scheme is treated as a Windows drive, not a scheme.
    """
    if not location:
        return location
    scheme = urlparse(location).scheme
    if len(scheme) > 1:
        return location
    return f"file:{location}"


def _keystore_path(url: str) -> str:
    """Turn a ``file:`` locator back into a local path."""
    parsed = urlparse(url)
    if parsed.scheme != "file":
        raise SSLParamsError(f"Unsupported keystore location: {url}")
    if parsed.netloc and parsed.netloc != "localhost":
        raise SSLParamsError(f"Keystore must be a local file: {url}")
    return url2pathname(unquote(parsed.path))


def build_trust_all_context(
    keystore_url: str = "", keystore_type: str = "PEM", keystore_password: str = ""
) -> ssl.SSLContext:
    """Build a context that accepts any server certificate.

    If a keystore is given, its certificate chain and key are loaded so the
    client can authenticate itself. Raises SSLParamsError if loading fails.
    """
    context = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
    context.check_hostname = False
    context.verify_mode = ssl.CERT_NONE

    if not keystore_url:
        return context

    if keystore_type.upper() not in SUPPORTED_KEYSTORE_TYPES:
        raise SSLParamsError(f"Unsupported keystore type: {keystore_type}")

    path = _keystore_path(keystore_url)
    try:
        context.load_cert_chain(certfile=path, password=keystore_password or None)
    except (OSError, ssl.SSLError) as e:
        raise SSLParamsError(f"Unable to load keystore {path}: {e}") from e
    logger.debug("Loaded client key material from %s", path)
    return context


def build_ssl_context(verify_server_cert: bool) -> ssl.SSLContext:
    """Return the TLS context for a cluster, depending on the verification mode."""
    if verify_server_cert:
        logger.info("TLS enabled with server certificate verification")
        context = ssl.create_default_context()
        context.check_hostname = False
        return context

    logger.info("TLS enabled without server certificate verification")
    return build_trust_all_context(
        normalize_keystore_url(get_keystore_location()),
        get_keystore_type(),
        get_keystore_password(),
    )
