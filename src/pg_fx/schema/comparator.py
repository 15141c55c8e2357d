"""Snapshot comparison using set operations.

Compares the objects recorded in a snapshot against the objects
extracted from the live database.  Definitions are compared as exact
text.  Pure logic: no I/O, no database connections.

Usage:
    from pg_fx.schema.comparator import compare_snapshot
    from pg_fx.schema.dumper import load

    expected = load(snapshot_path.read_text())
    actual = (list_functions(client), list_triggers(client))

    diff = compare_snapshot(expected, actual)
    if not diff.in_sync:
        print(diff.format_report())
"""

from collections import defaultdict
from collections.abc import Iterable

from pg_fx.schema.models import Function, ObjectDiff, SnapshotDiff, Trigger

ObjectSet = tuple[Iterable[Function], Iterable[Trigger]]
_Key = tuple[str, str, str]


def _index(objects: ObjectSet) -> dict[_Key, list[str]]:
    """Group definitions by (kind, name, table).

    Overloaded functions share a key, so each key maps to the sorted
    list of its definitions.
    """
    functions, triggers = objects
    index: dict[_Key, list[str]] = defaultdict(list)
    for function in functions:
        index[("function", function.name, "")].append(function.definition)
    for trigger in triggers:
        index[("trigger", trigger.name, trigger.table)].append(trigger.definition)
    return {key: sorted(definitions) for key, definitions in index.items()}


def _diff(key: _Key, message: str) -> ObjectDiff:
    kind, name, table = key
    return ObjectDiff(kind=kind, name=name, table=table or None, message=message)


def compare_snapshot(expected: ObjectSet, actual: ObjectSet) -> SnapshotDiff:
    """Compare snapshot objects against live database objects.

    Performs set operations on (kind, name, table) keys to find:
    - Missing: in *expected* but not in *actual*
    - Extra: in *actual* but not in *expected*
    - Changed: in both, with different definition text

    Args:
        expected: ``(functions, triggers)`` from the snapshot file.
        actual: ``(functions, triggers)`` extracted from the database.

    Returns:
        ``SnapshotDiff`` listing every difference, sorted by key.

    Examples:
        >>> fn = Function(name="f", definition="CREATE FUNCTION f() ...")
        >>> compare_snapshot(([fn], []), ([fn], [])).in_sync
        True
        >>> compare_snapshot(([fn], []), ([], [])).missing[0].name
        'f'
    """
    expected_index = _index(expected)
    actual_index = _index(actual)

    expected_keys = set(expected_index)
    actual_keys = set(actual_index)

    missing = [
        _diff(key, "Not present in database")
        for key in sorted(expected_keys - actual_keys)
    ]
    extra = [
        _diff(key, "Not present in snapshot")
        for key in sorted(actual_keys - expected_keys)
    ]
    changed = [
        _diff(key, "Definition text differs")
        for key in sorted(expected_keys & actual_keys)
        if expected_index[key] != actual_index[key]
    ]

    return SnapshotDiff(missing=missing, extra=extra, changed=changed)
