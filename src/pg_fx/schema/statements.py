"""Migration statements for functions and triggers.

``SchemaStatements`` is what a migration step calls: it resolves an
object's SQL from its versioned definition file (or an inline
definition) and hands the statement to the lifecycle executor.

Usage:
    from pg_fx.schema.statements import SchemaStatements

    with adapter.transaction() as client:
        statements = SchemaStatements(client, definitions_root="db")
        statements.create_function("increment")             # v01
        statements.update_function("increment", version=2)
        statements.create_trigger("audit_rows", version=1)
"""

from pathlib import Path

from pg_fx.adapters.base import DatabaseClient
from pg_fx.definitions import Definition, ObjectKind
from pg_fx.schema import executor


class SchemaStatements:
    """Create, drop, and update functions and triggers by name and version.

    Args:
        client: Database client; transaction scoping is the caller's.
        definitions_root: Directory holding ``functions/`` and
            ``triggers/`` definition files.
    """

    def __init__(self, client: DatabaseClient, definitions_root: str | Path = "db") -> None:
        self._client = client
        self._definitions_root = Path(definitions_root)

    def _resolve_sql(
        self,
        kind: ObjectKind,
        name: str,
        version: int | None,
        sql_definition: str | None,
    ) -> str:
        """Pick the inline definition or read the versioned file.

        Raises:
            ValueError: If both ``version`` and ``sql_definition`` are set.
            DefinitionNotFoundError: If the versioned file is missing.
        """
        if version is not None and sql_definition is not None:
            raise ValueError("sql_definition and version cannot both be set")
        if sql_definition is not None:
            return sql_definition
        return Definition(
            name, version=version or 1, kind=kind, root=self._definitions_root
        ).to_sql()

    # ------------------------------------------------------------------
    # Functions
    # ------------------------------------------------------------------

    def create_function(
        self,
        name: str,
        version: int | None = None,
        sql_definition: str | None = None,
    ) -> None:
        """Create a function from ``<root>/functions/<name>_vNN.sql``.

        Args:
            name: Function name.
            version: Definition version (defaults to 1).
            sql_definition: Inline statement used instead of a file.
        """
        sql = self._resolve_sql("function", name, version, sql_definition)
        executor.create_function(self._client, sql)

    def drop_function(self, name: str, arguments: str | None = None) -> None:
        """Drop a function, optionally a single overload."""
        executor.drop_function(self._client, name, arguments)

    def update_function(
        self,
        name: str,
        version: int | None = None,
        sql_definition: str | None = None,
        arguments: str | None = None,
    ) -> None:
        """Replace a function by dropping it and creating the new version.

        The new SQL is resolved before anything is dropped, so a missing
        definition file leaves the database untouched.
        """
        sql = self._resolve_sql("function", name, version, sql_definition)
        executor.drop_function(self._client, name, arguments)
        executor.create_function(self._client, sql)

    # ------------------------------------------------------------------
    # Triggers
    # ------------------------------------------------------------------

    def create_trigger(
        self,
        name: str,
        version: int | None = None,
        sql_definition: str | None = None,
    ) -> None:
        """Create a trigger from ``<root>/triggers/<name>_vNN.sql``."""
        sql = self._resolve_sql("trigger", name, version, sql_definition)
        executor.create_trigger(self._client, sql)

    def drop_trigger(self, name: str, on: str) -> None:
        """Drop trigger ``name`` from table ``on``."""
        executor.drop_trigger(self._client, name, on)

    def update_trigger(
        self,
        name: str,
        on: str,
        version: int | None = None,
        sql_definition: str | None = None,
    ) -> None:
        """Replace a trigger by dropping it and creating the new version."""
        sql = self._resolve_sql("trigger", name, version, sql_definition)
        executor.drop_trigger(self._client, name, on)
        executor.create_trigger(self._client, sql)
