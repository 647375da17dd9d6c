"""Entry point for the cassandra-dbapi shell."""

import sys

from cassandra_dbapi.shell import main

if __name__ == "__main__":
    sys.exit(main())
