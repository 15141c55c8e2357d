"""Tests for snapshot comparison.

compare_snapshot() is pure set logic over (kind, name, table) keys with
exact text comparison of definitions.
"""

import inspect

from pg_fx.schema.comparator import compare_snapshot
from pg_fx.schema.models import Function, SnapshotDiff, Trigger

F1 = Function(name="increment", definition="CREATE OR REPLACE FUNCTION increment(i integer) ...")
F2 = Function(name="increment", definition="CREATE OR REPLACE FUNCTION increment(i bigint) ...")
AUDIT = Function(name="audit", definition="CREATE OR REPLACE FUNCTION audit() ...")
T1 = Trigger(name="audit_rows", table="widgets", definition="CREATE TRIGGER audit_rows ... ON widgets ...")
T2 = Trigger(name="audit_rows", table="gadgets", definition="CREATE TRIGGER audit_rows ... ON gadgets ...")


class TestSignature:
    def test_two_parameters(self) -> None:
        assert list(inspect.signature(compare_snapshot).parameters) == ["expected", "actual"]


class TestCompareSnapshot:
    """Missing, extra and changed detection."""

    def test_identical_sets_in_sync(self) -> None:
        diff = compare_snapshot(([F1, AUDIT], [T1]), ([AUDIT, F1], [T1]))
        assert isinstance(diff, SnapshotDiff)
        assert diff.in_sync

    def test_both_empty(self) -> None:
        assert compare_snapshot(([], []), ([], [])).in_sync

    def test_missing_function(self) -> None:
        diff = compare_snapshot(([F1, AUDIT], []), ([AUDIT], []))
        assert [(d.kind, d.name) for d in diff.missing] == [("function", "increment")]
        assert diff.extra == []
        assert diff.changed == []

    def test_extra_trigger_keeps_table(self) -> None:
        diff = compare_snapshot(([], [T1]), ([], [T1, T2]))
        assert len(diff.extra) == 1
        assert diff.extra[0].table == "gadgets"
        assert diff.extra[0].label == "audit_rows ON gadgets"

    def test_changed_definition(self) -> None:
        edited = Function(name="audit", definition=AUDIT.definition + " -- edited")
        diff = compare_snapshot(([AUDIT], []), ([edited], []))
        assert [d.name for d in diff.changed] == ["audit"]
        assert diff.missing == []

    def test_whitespace_counts_as_change(self) -> None:
        """Definitions are compared as exact text."""
        spaced = Function(name="audit", definition=AUDIT.definition.replace(" ", "  "))
        assert not compare_snapshot(([AUDIT], []), ([spaced], [])).in_sync

    def test_overload_added(self) -> None:
        """An extra overload under an existing name is reported as a change."""
        diff = compare_snapshot(([F1], []), ([F1, F2], []))
        assert [d.name for d in diff.changed] == ["increment"]

    def test_overload_order_irrelevant(self) -> None:
        assert compare_snapshot(([F1, F2], []), ([F2, F1], [])).in_sync

    def test_results_sorted(self) -> None:
        a = Function(name="a", definition="A")
        b = Function(name="b", definition="B")
        diff = compare_snapshot(([b, a], []), ([], []))
        assert [d.name for d in diff.missing] == ["a", "b"]
