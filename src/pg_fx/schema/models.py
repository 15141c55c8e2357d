"""Pydantic models for executable schema objects.

This module contains the schema object value types:
- Function: a stored routine and its recreating definition
- Trigger: a table-bound trigger, its table, and its recreating definition
- SnapshotDiff: result of comparing a snapshot with the live database

All object models are frozen: instances are extraction-time snapshots
and compare by value.
"""

import re
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

ObjectKind = Literal["function", "trigger"]

# "CREATE TRIGGER name AFTER INSERT ON public.widgets FOR EACH ROW ..."
_TRIGGER_TABLE_PATTERN = re.compile(
    r"\sON\s+((?:\"[^\"]+\"|[\w$]+)(?:\.(?:\"[^\"]+\"|[\w$]+))?)",
    re.IGNORECASE,
)


def table_from_trigger_definition(definition: str) -> str:
    """Extract the table a ``CREATE TRIGGER`` statement is bound to.

    Returns:
        Table name as written in the statement (possibly schema-qualified
        and quoted), or ``""`` if no ``ON`` clause is found.

    Example:
        >>> table_from_trigger_definition(
        ...     "CREATE TRIGGER audit_rows AFTER INSERT ON public.widgets "
        ...     "FOR EACH ROW EXECUTE FUNCTION audit()"
        ... )
        'public.widgets'
    """
    match = _TRIGGER_TABLE_PATTERN.search(definition)
    return match.group(1) if match else ""


# ============================================================================
# Schema Object Models
# ============================================================================


class Function(BaseModel):
    """A stored function or procedure.

    ``name`` is not unique: overloads share it.  ``definition`` is the
    complete statement that recreates the routine.

    Example:
        >>> fn = Function(name="increment", definition="CREATE FUNCTION ...")
        >>> fn.kind
        'function'
    """

    model_config = ConfigDict(frozen=True)

    name: str
    definition: str

    @property
    def kind(self) -> ObjectKind:
        return "function"

    @property
    def sort_key(self) -> tuple[str, str]:
        return (self.name, self.definition)


class Trigger(BaseModel):
    """A trigger bound to a table.

    ``table`` is needed to drop the trigger.  When it is not supplied it
    is derived from the ``ON <table>`` clause of ``definition``.

    Example:
        >>> trg = Trigger(
        ...     name="audit_rows",
        ...     definition="CREATE TRIGGER audit_rows AFTER INSERT ON widgets "
        ...     "FOR EACH ROW EXECUTE FUNCTION audit()",
        ... )
        >>> trg.table
        'widgets'
    """

    model_config = ConfigDict(frozen=True)

    name: str
    definition: str
    table: str = ""

    @model_validator(mode="before")
    @classmethod
    def _derive_table(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("table"):
            definition = data.get("definition")
            if isinstance(definition, str):
                data = {**data, "table": table_from_trigger_definition(definition)}
        return data

    @property
    def kind(self) -> ObjectKind:
        return "trigger"

    @property
    def sort_key(self) -> tuple[str, str, str]:
        return (self.name, self.definition, self.table)


# ============================================================================
# Comparison Result
# ============================================================================


class ObjectDiff(BaseModel):
    """A schema object whose presence or definition differs."""

    kind: ObjectKind
    name: str
    table: str | None = None
    message: str = ""

    @property
    def label(self) -> str:
        """Human-readable identifier, e.g. ``audit_rows ON widgets``."""
        if self.table:
            return f"{self.name} ON {self.table}"
        return self.name


class SnapshotDiff(BaseModel):
    """Result of comparing a snapshot against the live database.

    Example:
        >>> SnapshotDiff().in_sync
        True
        >>> SnapshotDiff().format_report()
        'Schema objects in sync'
    """

    missing: list[ObjectDiff] = Field(default_factory=list)
    extra: list[ObjectDiff] = Field(default_factory=list)
    changed: list[ObjectDiff] = Field(default_factory=list)

    @property
    def in_sync(self) -> bool:
        return not (self.missing or self.extra or self.changed)

    @property
    def difference_count(self) -> int:
        return len(self.missing) + len(self.extra) + len(self.changed)

    def format_report(self) -> str:
        """Format comparison result as human-readable report."""
        if self.in_sync:
            return "Schema objects in sync"

        lines = ["Schema objects have drifted:"]

        sections = (
            ("Missing from database", self.missing),
            ("Not in snapshot", self.extra),
            ("Definition changed", self.changed),
        )
        for title, diffs in sections:
            if diffs:
                lines.append(f"\n  {title} ({len(diffs)}):")
                for diff in diffs:
                    line = f"    - {diff.kind} {diff.label}"
                    if diff.message:
                        line = f"{line}: {diff.message}"
                    lines.append(line)

        return "\n".join(lines)
