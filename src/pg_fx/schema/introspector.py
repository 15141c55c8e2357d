"""PostgreSQL function and trigger extraction via pg_catalog.

This module queries the live database for every user-defined schema
object that can be dumped:
- Functions (name, ``pg_get_functiondef`` output)
- Triggers (name, table, ``pg_get_triggerdef`` output)

Queries are read-only and safe to run outside a write transaction.
Errors from the client propagate unchanged.

Usage:
    from pg_fx.adapters import PostgresAdapter
    from pg_fx.schema.introspector import list_functions, list_triggers

    adapter = PostgresAdapter(database_url)
    functions = list_functions(adapter)
    triggers = list_triggers(adapter)
"""

import logging

from pg_fx.adapters.base import DatabaseClient
from pg_fx.schema.models import Function, Trigger

logger = logging.getLogger(__name__)

# Routines written in C or built into the server are not dumpable, and
# pg_* / information_schema namespaces belong to the system.
FUNCTIONS_WITH_DEFINITIONS_QUERY = """
    SELECT
        pp.proname AS name,
        pg_get_functiondef(pp.oid) AS definition
    FROM pg_proc pp
    INNER JOIN pg_namespace pn
        ON (pn.oid = pp.pronamespace)
    INNER JOIN pg_language pl
        ON (pl.oid = pp.prolang)
    WHERE pl.lanname NOT IN ('c', 'internal')
        AND pn.nspname NOT LIKE 'pg\\_%'
        AND pn.nspname <> 'information_schema'
"""

# Internal triggers back foreign keys and are recreated with their
# constraints, so their definitions cannot be replayed.  Triggers with a
# parent are partition clones (PostgreSQL 13+); creating the parent
# trigger recreates them.
TRIGGERS_WITH_DEFINITIONS_QUERY = """
    SELECT
        pt.tgname AS name,
        pt.tgrelid::regclass::text AS table_name,
        pg_get_triggerdef(pt.oid) AS definition
    FROM pg_trigger pt
    WHERE NOT pt.tgisinternal
        AND pt.tgparentid = 0
"""


def list_functions(client: DatabaseClient) -> list[Function]:
    """Return every user-defined function in the database.

    One entry per catalog row: overloads sharing a name appear once per
    signature.  Result order is whatever the catalog returns.

    Args:
        client: Database client to query.

    Returns:
        List of ``Function`` models.

    Raises:
        DatabaseConnectionError: If the database is unreachable.
        QueryError: If the catalog query fails.
    """
    rows = client.execute(FUNCTIONS_WITH_DEFINITIONS_QUERY)
    functions = [Function(name=row["name"], definition=row["definition"]) for row in rows]
    logger.debug("Extracted %d functions", len(functions))
    return functions


def list_triggers(client: DatabaseClient) -> list[Trigger]:
    """Return every user trigger in the database, across all namespaces.

    Args:
        client: Database client to query.

    Returns:
        List of ``Trigger`` models with ``table`` resolved by the catalog.

    Raises:
        DatabaseConnectionError: If the database is unreachable.
        QueryError: If the catalog query fails.
    """
    rows = client.execute(TRIGGERS_WITH_DEFINITIONS_QUERY)
    triggers = [
        Trigger(
            name=row["name"],
            table=row.get("table_name") or "",
            definition=row["definition"],
        )
        for row in rows
    ]
    logger.debug("Extracted %d triggers", len(triggers))
    return triggers
