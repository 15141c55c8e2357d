"""Versioned SQL definition files.

Each function or trigger keeps one file per version under a definitions
root::

    db/functions/increment_v01.sql
    db/functions/increment_v02.sql
    db/triggers/audit_rows_v01.sql

Migrations refer to an object by name and version; the file supplies the
complete statement.

Usage:
    from pg_fx.definitions import Definition

    sql = Definition("increment", version=2, kind="function", root="db").to_sql()
"""

from pathlib import Path
from typing import Literal

from pg_fx.errors import DefinitionNotFoundError

ObjectKind = Literal["function", "trigger"]

_DIRECTORIES: dict[str, str] = {"function": "functions", "trigger": "triggers"}


class Definition:
    """A versioned SQL file for one function or trigger.

    Args:
        name: Object name, used as the file name stem.
        version: Version number, zero-padded to two digits in the file name.
        kind: ``"function"`` or ``"trigger"``.
        root: Directory holding the ``functions/`` and ``triggers/`` folders.
    """

    def __init__(
        self,
        name: str,
        version: int,
        kind: ObjectKind = "function",
        root: str | Path = "db",
    ) -> None:
        if kind not in _DIRECTORIES:
            raise ValueError(f"Unknown definition kind: {kind!r}")
        self.name = name
        self.version = version
        self.kind = kind
        self.root = Path(root)

    @property
    def version_label(self) -> str:
        return f"{self.version:02d}"

    @property
    def path(self) -> Path:
        return self.root / _DIRECTORIES[self.kind] / f"{self.name}_v{self.version_label}.sql"

    def to_sql(self) -> str:
        """Read the definition file.

        Raises:
            DefinitionNotFoundError: If the file is missing or blank.
        """
        if not self.path.exists():
            raise DefinitionNotFoundError(
                f"Definition for {self.kind} {self.name} v{self.version_label} "
                f"not found: {self.path}"
            )
        sql = self.path.read_text()
        if not sql.strip():
            raise DefinitionNotFoundError(
                f"Definition for {self.kind} {self.name} v{self.version_label} "
                f"is empty: {self.path}"
            )
        return sql

    def __repr__(self) -> str:
        return f"Definition({self.kind}={self.name!r}, version={self.version})"
