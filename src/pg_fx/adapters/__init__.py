"""Database adapters package.

Provides the ``DatabaseClient`` Protocol and the PostgreSQL adapter.

Usage:
    from pg_fx.adapters import DatabaseClient, PostgresAdapter
"""

from pg_fx.adapters.base import DatabaseClient
from pg_fx.adapters.postgres import ConnectionClient, PostgresAdapter

__all__ = [
    "DatabaseClient",
    "PostgresAdapter",
    "ConnectionClient",
]
