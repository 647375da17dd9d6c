"""Minimal interactive CQL shell on top of the DB-API connection.

Usage:
    python -m cassandra_dbapi cassandra://localhost:9042/my_keyspace
    python -m cassandra_dbapi cassandra://localhost/ -e "CONSISTENCY QUORUM" -e "SELECT ..."

Statements are read one per line from ``-e`` options or stdin. A trailing
``;`` is stripped and blank lines are skipped. ``CONSISTENCY`` and
``CONSISTENCY <LEVEL>`` work as in cqlsh.
"""

import argparse
import logging
import sys
from collections.abc import Iterable
from typing import TextIO

from cassandra_dbapi.config import get_log_level
from cassandra_dbapi.dbapi.connection import Connection, connect
from cassandra_dbapi.dbapi.cursor import Cursor
from cassandra_dbapi.exceptions import Error


def iter_statements(lines: Iterable[str]) -> Iterable[str]:
    """Yield non-blank statements with surrounding whitespace and ``;`` removed."""
    for line in lines:
        statement = line.strip().rstrip(";").strip()
        if statement:
            yield statement


def _format_value(value: object) -> str:
    return "" if value is None else str(value)


def format_result(cursor: Cursor) -> str:
    """Render the cursor's current rows as a tab-separated table with a header."""
    names = [col[0] for col in cursor.description or []]
    lines = ["\t".join(names)]
    lines.extend("\t".join(_format_value(v) for v in row) for row in cursor.fetchall())
    return "\n".join(lines)


def run_statements(
    conn: Connection, statements: Iterable[str], out: TextIO, err: TextIO
) -> int:
    """Execute statements in order, printing results. Returns the error count."""
    errors = 0
    cursor = conn.cursor()
    try:
        for statement in statements:
            try:
                if cursor.execute(statement):
                    print(format_result(cursor), file=out)
                else:
                    print("OK", file=out)
            except Error as e:
                errors += 1
                print(f"Error: {e}", file=err)
    finally:
        cursor.close()
    return errors


def main(argv: list[str] | None = None) -> int:
    """Parse arguments, connect and run the shell."""
    parser = argparse.ArgumentParser(description="Run CQL statements through cassandra-dbapi")
    parser.add_argument("uri", help="Connection string, e.g. cassandra://localhost:9042/ks")
    parser.add_argument("--user", default=None, help="User name (overrides the URI)")
    parser.add_argument("--password", default=None, help="Password (overrides the URI)")
    parser.add_argument(
        "-e",
        "--execute",
        action="append",
        default=None,
        metavar="CQL",
        help="Statement to execute; repeatable. Reads stdin when omitted.",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, get_log_level().upper(), logging.WARNING),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        stream=sys.stderr,
    )

    properties = {"user": args.user, "password": args.password}
    try:
        conn = connect(args.uri, properties)
    except Error as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    with conn:
        source = args.execute if args.execute is not None else sys.stdin
        errors = run_statements(conn, iter_statements(source), sys.stdout, sys.stderr)
    return 1 if errors else 0
