"""Shared fixtures: an in-memory stand-in for a PostgreSQL catalog.

``FakePostgres`` implements the ``DatabaseClient`` protocol and
understands exactly the statements pg-fx issues: the two catalog
queries, ``CREATE [OR REPLACE] FUNCTION``, ``CREATE TRIGGER``,
``DROP FUNCTION`` and ``DROP TRIGGER``.  It raises the same errors the
Postgres adapter raises for the matching SQLSTATEs.
"""

import copy
import re
from contextlib import contextmanager

import pytest

from pg_fx.errors import AmbiguousSignatureError, ObjectNotFoundError, QueryError
from pg_fx.schema.introspector import (
    FUNCTIONS_WITH_DEFINITIONS_QUERY,
    TRIGGERS_WITH_DEFINITIONS_QUERY,
)

CREATE_FUNCTION = re.compile(
    r"^\s*CREATE\s+(?P<replace>OR\s+REPLACE\s+)?FUNCTION\s+(?P<name>[\w.]+)\s*\((?P<args>[^)]*)\)",
    re.IGNORECASE,
)
CREATE_TRIGGER = re.compile(
    r"^\s*CREATE\s+TRIGGER\s+(?P<name>\w+)\s.*?\sON\s+(?P<table>[\w.]+)",
    re.IGNORECASE | re.DOTALL,
)
DROP_FUNCTION = re.compile(r"^DROP FUNCTION (?P<name>[\w.]+)(?:\((?P<args>[^)]*)\))?;$")
DROP_TRIGGER = re.compile(r"^DROP TRIGGER (?P<name>\w+) ON (?P<table>[\w.]+);$")


def _arg_types(args: str) -> str:
    """Reduce ``i integer, j text`` to ``integer,text``."""
    types = []
    for arg in args.split(","):
        parts = arg.split()
        if parts:
            types.append(parts[-1].lower())
    return ",".join(types)


def _normalize_types(args: str) -> str:
    return ",".join(a.strip().lower() for a in args.split(",") if a.strip())


class FakePostgres:
    """Catalog-backed ``DatabaseClient`` double.

    Attributes:
        functions: ``(name, argument types) -> definition``
        triggers: ``(name, table) -> definition``
        statements: Every SQL string received, in order.
    """

    def __init__(self) -> None:
        self.functions: dict[tuple[str, str], str] = {}
        self.triggers: dict[tuple[str, str], str] = {}
        self.statements: list[str] = []
        self.closed = False

    @contextmanager
    def transaction(self):
        """Yield self; restore the catalog if the block raises."""
        saved = (copy.deepcopy(self.functions), copy.deepcopy(self.triggers))
        try:
            yield self
        except Exception:
            self.functions, self.triggers = saved
            raise

    def close(self) -> None:
        self.closed = True

    def execute(self, sql: str, params: dict | None = None) -> list[dict]:
        self.statements.append(sql)

        if sql == FUNCTIONS_WITH_DEFINITIONS_QUERY:
            return [
                {"name": name, "definition": definition}
                for (name, _), definition in self.functions.items()
            ]
        if sql == TRIGGERS_WITH_DEFINITIONS_QUERY:
            return [
                {"name": name, "table_name": table, "definition": definition}
                for (name, table), definition in self.triggers.items()
            ]

        if match := CREATE_FUNCTION.match(sql):
            key = (match["name"], _arg_types(match["args"]))
            if key in self.functions and not match["replace"]:
                raise QueryError(f'function "{key[0]}" already exists', sqlstate="42723")
            # Catalog reconstructions come back in canonical form.
            self.functions[key] = re.sub(
                r"^\s*CREATE\s+(OR\s+REPLACE\s+)?FUNCTION",
                "CREATE OR REPLACE FUNCTION",
                sql.strip().rstrip(";"),
                flags=re.IGNORECASE,
            )
            return []

        if match := CREATE_TRIGGER.match(sql):
            key = (match["name"], match["table"])
            if key in self.triggers:
                raise QueryError(f'trigger "{key[0]}" already exists', sqlstate="42710")
            self.triggers[key] = sql.strip().rstrip(";")
            return []

        if match := DROP_FUNCTION.match(sql):
            name = match["name"]
            if match["args"] is None:
                keys = [key for key in self.functions if key[0] == name]
                if len(keys) > 1:
                    raise AmbiguousSignatureError(
                        f'function name "{name}" is not unique', sqlstate="42725"
                    )
            else:
                wanted = (name, _normalize_types(match["args"]))
                keys = [key for key in self.functions if key == wanted]
            if not keys:
                raise ObjectNotFoundError(
                    f"function {name} does not exist", sqlstate="42883"
                )
            del self.functions[keys[0]]
            return []

        if match := DROP_TRIGGER.match(sql):
            key = (match["name"], match["table"])
            if key not in self.triggers:
                raise ObjectNotFoundError(
                    f'trigger "{key[0]}" for table "{key[1]}" does not exist',
                    sqlstate="42704",
                )
            del self.triggers[key]
            return []

        raise QueryError(f"syntax error at or near {sql.split()[0]!r}", sqlstate="42601")


@pytest.fixture
def fake_db() -> FakePostgres:
    """Empty fake database."""
    return FakePostgres()
