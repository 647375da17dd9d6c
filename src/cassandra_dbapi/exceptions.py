"""PEP 249 exception hierarchy plus the Cassandra-specific error kinds."""


class Warning(Exception):  # noqa: A001 (name mandated by PEP 249)
    """Important warnings, e.g. data truncation."""


class Error(Exception):
    """Base class of every error raised by this package."""


class InterfaceError(Error):
    """Misuse of the interface: closed resources, malformed connection strings."""


class InvalidURIError(InterfaceError, ValueError):
    """The connection string does not follow the ``cassandra://`` grammar."""


class DatabaseError(Error):
    """Errors reported by, or while talking to, the database."""


class DataError(DatabaseError):
    """Problems with the processed data."""


class OperationalError(DatabaseError):
    """Errors outside the caller's control: network, TLS, cluster availability."""


class UnknownHostError(OperationalError):
    """A contact point host name could not be resolved."""

    def __init__(self, host: str) -> None:
        """Initialize with the host that failed to resolve."""
        self.host = host
        super().__init__(f"Unknown host: {host}")


class SSLParamsError(OperationalError):
    """TLS key material could not be loaded."""


class IntegrityError(DatabaseError):
    """Relational integrity violations."""


class InternalError(DatabaseError):
    """Internal errors of the database."""


class ProgrammingError(DatabaseError):
    """Errors in the statement or in how the cursor is used."""


class CQLSyntaxError(ProgrammingError):
    """The query engine rejected the statement text as syntactically invalid."""


class NotSupportedError(DatabaseError):
    """The requested operation has no Cassandra counterpart."""


def driver_message(error: BaseException) -> str:
    """The server-side message of a driver error, falling back to str(error)."""
    message = getattr(error, "message", None)
    if isinstance(message, str) and message:
        return message
    return str(error)
