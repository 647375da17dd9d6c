"""Connection string parsing.

Grammar::

    cassandra://host1[:port1][,host2...]/[keyspace[.collection]][?opt=val[&opt=val...]]

Options may also be passed as a property mapping, which takes precedence
over the same option in the URI. Option names are case-insensitive.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any

from cassandra_dbapi.exceptions import InvalidURIError
from cassandra_dbapi.models.connection_config import ConnectionConfig
from cassandra_dbapi.models.consistency import ConsistencyLevel

logger = logging.getLogger(__name__)

PREFIX = "cassandra://"

USER = "user"
PASSWORD = "password"
ENABLE_SSL = "sslenabled"
VERIFY_SERVER_CERTIFICATE = "verifyServerCertificate"
CONSISTENCY_LEVEL = "consistencyLevel"

_OPTION_SEPARATOR_RE = re.compile(r"[&;]")


def is_true(value: str | None) -> bool:
    """Interpret ``"1"`` or ``"true"`` (any case) as true, anything else as false."""
    return value is not None and (value == "1" or value.lower() == "true")


def parse_options(options_part: str) -> dict[str, str]:
    """Parse ``a=1&b=2;c=3`` into a dict with lowercased keys.

    Tokens without ``=`` are ignored. When a key repeats, the last value wins.
    """
    options: dict[str, str] = {}
    for part in _OPTION_SEPARATOR_RE.split(options_part):
        key, sep, value = part.partition("=")
        if not sep:
            continue
        options[key.lower()] = value
    return options


def _get_option(
    properties: Mapping[str, str], options: Mapping[str, str], name: str
) -> str | None:
    """Return the option from properties, falling back to the URI options."""
    key = name.lower()
    if key in properties:
        return properties[key]
    return options.get(key)


def _normalize_properties(properties: Mapping[str, Any] | None) -> dict[str, str]:
    """Lowercase property keys and drop None values."""
    if not properties:
        return {}
    return {str(k).lower(): str(v) for k, v in properties.items() if v is not None}


def parse_uri(uri: str, properties: Mapping[str, Any] | None = None) -> ConnectionConfig:
    """Parse a connection string plus optional property overrides.

    Raises InvalidURIError if the scheme prefix is missing, if options are
    given without a ``/`` separator, if no host is present, or if a host
    carries a non-numeric port.
    """
    if not uri.startswith(PREFIX):
        raise InvalidURIError(f"URI needs to start with {PREFIX}")

    rest = uri[len(PREFIX) :]
    options: dict[str, str] = {}

    last_slash = rest.rfind("/")
    if last_slash < 0:
        if "?" in rest:
            raise InvalidURIError("URI contains options without trailing slash")
        server_part = rest
        ns_part = ""
    else:
        server_part = rest[:last_slash]
        ns_part = rest[last_slash + 1 :]
        ns_part, question, options_part = ns_part.partition("?")
        if question:
            options = parse_options(options_part)

    if not server_part:
        raise InvalidURIError("URI does not contain any host")

    props = _normalize_properties(properties)

    keyspace: str | None = None
    collection: str | None = None
    if ns_part:
        keyspace, dot, coll = ns_part.partition(".")
        collection = coll if dot else None

    raw_level = _get_option(props, options, CONSISTENCY_LEVEL)
    level = ConsistencyLevel.parse_or_default(raw_level)
    if raw_level is not None and level.value != raw_level.strip().upper():
        logger.warning("Unknown consistency level %r, using %s", raw_level, level)

    verify_option = _get_option(props, options, VERIFY_SERVER_CERTIFICATE)

    config = ConnectionConfig(
        uri=uri,
        hosts=tuple(server_part.split(",")),
        keyspace=keyspace,
        collection=collection,
        user=_get_option(props, options, USER),
        password=_get_option(props, options, PASSWORD),
        ssl_enabled=is_true(_get_option(props, options, ENABLE_SSL)),
        verify_server_cert=True if verify_option is None else is_true(verify_option),
        consistency_level=level,
    )
    # Malformed ports fail here rather than at connect time
    config.contact_points()
    return config
