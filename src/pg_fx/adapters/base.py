"""Database client protocol definition.

Defines the ``DatabaseClient`` Protocol consumed by the extractor and
the lifecycle executor.  Every operation in pg-fx receives a client
explicitly; there is no ambient connection.

Usage:
    from pg_fx.adapters.base import DatabaseClient

    def do_work(client: DatabaseClient) -> None:
        rows = client.execute("SELECT proname FROM pg_proc")
        client.execute("DROP FUNCTION increment;")
"""

from typing import Any, Protocol


class DatabaseClient(Protocol):
    """Synchronous statement executor that all adapters must implement.

    Transaction scoping is owned by whoever created the client: an
    adapter may commit each statement on its own, or the client may be
    bound to a connection inside an open transaction.
    """

    def execute(self, sql: str, params: dict[str, Any] | None = None) -> list[dict]:
        """Execute a SQL statement and return its rows.

        Args:
            sql: Raw SQL statement.
            params: Optional dict of named parameters for the statement.

        Returns:
            List of dicts, one per result row.  Empty list for statements
            that return no rows (DDL).

        Raises:
            DatabaseConnectionError: If the database cannot be reached.
            QueryError: If the statement fails.

        Example:
            rows = client.execute(
                "SELECT tgname AS name FROM pg_trigger"
            )
        """
        ...
