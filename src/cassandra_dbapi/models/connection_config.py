"""Parsed connection settings."""

from pydantic import BaseModel, ConfigDict, Field

from cassandra_dbapi.exceptions import InvalidURIError
from cassandra_dbapi.models.consistency import ConsistencyLevel


class ConnectionConfig(BaseModel):
    """Immutable result of parsing a ``cassandra://`` connection string.

    ``hosts`` keeps the raw ``host[:port]`` entries in the order they were
    given. The cluster protocol uses a single port, so the last port found
    on any host applies to all of them (see ``port``).
    """

    model_config = ConfigDict(frozen=True)

    uri: str
    hosts: tuple[str, ...] = Field(min_length=1)
    keyspace: str | None = None
    collection: str | None = None
    user: str | None = None
    password: str | None = Field(default=None, repr=False)
    ssl_enabled: bool = False
    verify_server_cert: bool = True
    consistency_level: ConsistencyLevel = ConsistencyLevel.LOCAL_ONE

    def contact_points(self) -> list[tuple[str, int | None]]:
        """Split every host entry into ``(host, port)``; port is None if absent."""
        points: list[tuple[str, int | None]] = []
        for entry in self.hosts:
            idx = entry.find(":")
            if idx > 0:
                raw_port = entry[idx + 1 :].strip()
                try:
                    port = int(raw_port)
                except ValueError:
                    raise InvalidURIError(f"Invalid port '{raw_port}' in host '{entry}'") from None
                points.append((entry[:idx].strip(), port))
            else:
                points.append((entry.strip(), None))
        return points

    @property
    def port(self) -> int | None:
        """The shared cluster port: the last one parsed, or None."""
        port = None
        for _, host_port in self.contact_points():
            if host_port is not None:
                port = host_port
        return port

    def __str__(self) -> str:
        return self.uri
