"""Uniform handling of client-contract operations Cassandra cannot provide."""

from collections.abc import Callable, Mapping
from typing import Any, ClassVar, NoReturn

from cassandra_dbapi.exceptions import NotSupportedError


class UnsupportedOperations:
    """Mixin that answers every name in ``UNSUPPORTED`` with a raising callable.

    ``UNSUPPORTED`` maps an operation name to its error message (None for a
    generic one). Operations the class defines itself are never affected;
    ``__getattr__`` only runs after normal lookup fails.
    """

    UNSUPPORTED: ClassVar[Mapping[str, str | None]] = {}

    def __getattr__(self, name: str) -> Callable[..., NoReturn]:
        if name not in type(self).UNSUPPORTED:
            raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")
        message = type(self).UNSUPPORTED[name] or f"{name} is not supported by Cassandra."

        def unsupported(*args: Any, **kwargs: Any) -> NoReturn:
            raise NotSupportedError(message)

        unsupported.__name__ = name
        return unsupported

    @classmethod
    def supports(cls, name: str) -> bool:
        """Whether ``name`` is a working operation of this class."""
        return name not in cls.UNSUPPORTED and callable(getattr(cls, name, None))
