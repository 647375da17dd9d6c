"""Consistency level enumeration shared by the URI parser and meta-commands."""

from __future__ import annotations

from enum import StrEnum

from cassandra import ConsistencyLevel as DriverConsistencyLevel


class ConsistencyLevel(StrEnum):
    """How many replicas must acknowledge a read or write."""

    ALL = "ALL"
    EACH_QUORUM = "EACH_QUORUM"
    QUORUM = "QUORUM"
    LOCAL_QUORUM = "LOCAL_QUORUM"
    ONE = "ONE"
    TWO = "TWO"
    THREE = "THREE"
    LOCAL_ONE = "LOCAL_ONE"
    ANY = "ANY"
    SERIAL = "SERIAL"
    LOCAL_SERIAL = "LOCAL_SERIAL"

    @classmethod
    def default(cls) -> ConsistencyLevel:
        """The level used when none is configured."""
        return cls.LOCAL_ONE

    @classmethod
    def parse(cls, text: str) -> ConsistencyLevel:
        """Match a level name case-insensitively. Raises ValueError if unknown."""
        try:
            return cls[text.strip().upper()]
        except KeyError:
            raise ValueError(f"No enum constant ConsistencyLevel.{text}") from None

    @classmethod
    def parse_or_default(cls, text: str | None) -> ConsistencyLevel:
        """Like parse(), but unknown or missing names resolve to the default."""
        if text is None:
            return cls.default()
        try:
            return cls.parse(text)
        except ValueError:
            return cls.default()

    @property
    def driver_value(self) -> int:
        """The matching ``cassandra.ConsistencyLevel`` constant."""
        value: int = getattr(DriverConsistencyLevel, self.value)
        return value
