"""Function and trigger extraction, lifecycle, and snapshots.

Provides catalog extraction (``list_functions``, ``list_triggers``),
create/drop operations (``create_function``, ``drop_trigger``, ...),
the canonical snapshot (``dump``, ``load``), and snapshot comparison
(``compare_snapshot``).

Usage:
    from pg_fx.schema import list_functions, list_triggers, dump, load
    from pg_fx.schema import create_function, drop_function
    from pg_fx.schema import SchemaStatements, compare_snapshot
"""

from pg_fx.schema.comparator import compare_snapshot
from pg_fx.schema.dumper import dump, load
from pg_fx.schema.executor import (
    create_function,
    create_trigger,
    drop_function,
    drop_trigger,
)
from pg_fx.schema.introspector import list_functions, list_triggers
from pg_fx.schema.models import Function, ObjectDiff, SnapshotDiff, Trigger
from pg_fx.schema.statements import SchemaStatements

__all__ = [
    "list_functions",
    "list_triggers",
    "create_function",
    "create_trigger",
    "drop_function",
    "drop_trigger",
    "dump",
    "load",
    "compare_snapshot",
    "SchemaStatements",
    "Function",
    "Trigger",
    "ObjectDiff",
    "SnapshotDiff",
]
