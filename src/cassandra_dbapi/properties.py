"""Descriptions of the connection options, for tools that render a connection dialog."""

from pydantic import BaseModel

from cassandra_dbapi.models.consistency import ConsistencyLevel
from cassandra_dbapi.uri import CONSISTENCY_LEVEL, ENABLE_SSL, VERIFY_SERVER_CERTIFICATE

_BOOLEAN_CHOICES = ["true", "false"]


class PropertyInfo(BaseModel):
    """One configurable connection option."""

    name: str
    default: str
    description: str
    choices: list[str] | None = None
    required: bool = False


def get_property_info() -> list[PropertyInfo]:
    """Return the options accepted in the URI or the property mapping."""
    return [
        PropertyInfo(
            name=ENABLE_SSL,
            default="false",
            description="Enable ssl.",
            choices=_BOOLEAN_CHOICES,
        ),
        PropertyInfo(
            name=VERIFY_SERVER_CERTIFICATE,
            default="true",
            description=(
                "Configure a connection that uses SSL but does not verify "
                "the identity of the server."
            ),
            choices=_BOOLEAN_CHOICES,
        ),
        PropertyInfo(
            name=CONSISTENCY_LEVEL,
            default=ConsistencyLevel.default().value,
            description=(
                "Consistency level determines how many nodes in the replica must "
                "respond for the coordinator node to successfully process a "
                "non-lightweight transaction."
            ),
            choices=[level.value for level in ConsistencyLevel],
        ),
    ]
