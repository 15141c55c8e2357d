"""Create and drop functions and triggers on a live database.

Each operation issues exactly one statement through the supplied client.
There is no transaction management, existence check, or retry here: the
caller decides how statements are grouped and what happens on failure.

Usage:
    from pg_fx.schema.executor import create_function, drop_function

    with adapter.transaction() as client:
        create_function(client, "CREATE OR REPLACE FUNCTION ...")
        drop_trigger(client, "audit_rows", "widgets")
"""

import logging

from pg_fx.adapters.base import DatabaseClient

logger = logging.getLogger(__name__)


def _execute(client: DatabaseClient, sql: str) -> None:
    logger.debug("Executing: %s", sql)
    client.execute(sql)


def create_function(client: DatabaseClient, definition: str) -> None:
    """Create a function from its complete definition.

    The statement is executed verbatim.  Use ``CREATE OR REPLACE`` in the
    definition to make it safe to run repeatedly.

    Args:
        client: Database client.
        definition: Full ``CREATE [OR REPLACE] FUNCTION`` statement.

    Raises:
        QueryError: If the statement fails.
    """
    _execute(client, definition)


def create_trigger(client: DatabaseClient, definition: str) -> None:
    """Create a trigger from its complete definition.

    Args:
        client: Database client.
        definition: Full ``CREATE TRIGGER`` statement.

    Raises:
        QueryError: If the statement fails.
    """
    _execute(client, definition)


def drop_function(
    client: DatabaseClient,
    name: str,
    arguments: str | None = None,
) -> None:
    """Drop a function by name.

    Without ``arguments`` the server resolves the name on its own, which
    succeeds only when exactly one function has that name.  Pass the
    argument types (``"integer, text"``, or ``""`` for none) to target
    one overload.

    Args:
        client: Database client.
        name: Function name, optionally schema-qualified.
        arguments: Argument type list of the overload to drop.

    Raises:
        ObjectNotFoundError: If no matching function exists.
        AmbiguousSignatureError: If ``arguments`` is omitted and several
            overloads share the name.
    """
    if arguments is None:
        _execute(client, f"DROP FUNCTION {name};")
    else:
        _execute(client, f"DROP FUNCTION {name}({arguments});")


def drop_trigger(client: DatabaseClient, name: str, table: str) -> None:
    """Drop a trigger from the table it is bound to.

    Args:
        client: Database client.
        name: Trigger name.
        table: Table the trigger is bound to.

    Raises:
        ObjectNotFoundError: If the trigger does not exist on ``table``.
    """
    _execute(client, f"DROP TRIGGER {name} ON {table};")
