"""Result sets and execution results.

``DriverResultSet`` adapts a raw ``cassandra.cluster.ResultSet`` to the
fetch methods cursors expose. Rows are pulled from the driver lazily, so
paging stays with the driver. ``ListResultSet`` serves synthetic results
produced by meta-commands.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from typing import Any

# PEP 249 description entry: name, type_code, display_size, internal_size,
# precision, scale, null_ok
Column = tuple[str, str | None, None, None, None, None, None]

NULL_PLACEHOLDER = "null"
_TEXT_TYPES = frozenset({"text", "varchar", "ascii"})


def _column(name: str, type_code: str | None) -> Column:
    return (name, type_code, None, None, None, None, None)


class ResultSet:
    """Forward-only rows with a PEP 249 description."""

    def __init__(self, description: Sequence[Column], rows: Iterable[tuple[Any, ...]]) -> None:
        """Initialize with column descriptions and an iterable of row tuples."""
        self.description: list[Column] = list(description)
        self._rows: Iterator[tuple[Any, ...]] = iter(rows)

    @property
    def column_names(self) -> list[str]:
        """Column names in result order."""
        return [col[0] for col in self.description]

    def __iter__(self) -> Iterator[tuple[Any, ...]]:
        return self

    def __next__(self) -> tuple[Any, ...]:
        return next(self._rows)

    def fetchone(self) -> tuple[Any, ...] | None:
        """Fetch the next row, or None if exhausted."""
        return next(self._rows, None)

    def fetchmany(self, size: int) -> list[tuple[Any, ...]]:
        """Fetch up to ``size`` rows."""
        rows = []
        for _ in range(size):
            row = next(self._rows, None)
            if row is None:
                break
            rows.append(row)
        return rows

    def fetchall(self) -> list[tuple[Any, ...]]:
        """Fetch all remaining rows."""
        return list(self._rows)


class ListResultSet(ResultSet):
    """A single-column, in-memory result: one row per value."""

    def __init__(self, values: Sequence[Any], column_name: str, type_code: str = "text") -> None:
        """Initialize with the column values and the column name."""
        super().__init__([_column(column_name, type_code)], [(v,) for v in values])


class DriverResultSet(ResultSet):
    """Rows from a raw driver result.

    With ``null_placeholder`` set, null values in text columns are returned
    as the literal string ``"null"``. Older IDE introspection code cannot
    handle real nulls in one legacy column query.
    """

    def __init__(self, raw: Any, *, null_placeholder: bool = False) -> None:
        """Initialize with a driver ResultSet."""
        names = list(raw.column_names or [])
        types = list(raw.column_types or [None] * len(names))
        type_codes = [getattr(t, "typename", None) for t in types]
        self.raw = raw
        self.null_placeholder = null_placeholder
        self._text_positions = frozenset(
            i for i, code in enumerate(type_codes) if code in _TEXT_TYPES
        )
        super().__init__(
            [_column(n, c) for n, c in zip(names, type_codes, strict=False)],
            self._iter_rows(),
        )

    def _iter_rows(self) -> Iterator[tuple[Any, ...]]:
        for row in self.raw:
            yield self._convert(row)

    def _convert(self, row: Any) -> tuple[Any, ...]:
        values = tuple(row)
        if not self.null_placeholder or not self._text_positions:
            return values
        return tuple(
            NULL_PLACEHOLDER if v is None and i in self._text_positions else v
            for i, v in enumerate(values)
        )


def is_query(raw: Any) -> bool:
    """Whether a raw driver result carries column metadata (i.e. produces rows)."""
    return bool(getattr(raw, "column_names", None))


@dataclass
class ExecutionResult:
    """Outcome of one execute call: either a row-producing result or none."""

    result_set: ResultSet | None = None

    @property
    def is_query(self) -> bool:
        """True when rows can be fetched."""
        return self.result_set is not None


def classify(raw: Any, *, null_placeholder: bool = False) -> ExecutionResult:
    """Wrap a raw driver result as a row-producing or row-count result."""
    if raw is None or not is_query(raw):
        return ExecutionResult()
    return ExecutionResult(DriverResultSet(raw, null_placeholder=null_placeholder))
