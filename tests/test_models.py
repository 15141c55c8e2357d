"""Tests for the schema object models."""

import pytest
from pydantic import ValidationError

from pg_fx.schema.models import (
    Function,
    ObjectDiff,
    SnapshotDiff,
    Trigger,
    table_from_trigger_definition,
)


class TestFunction:
    """Function is an immutable value object."""

    def test_equality_by_value(self) -> None:
        a = Function(name="f", definition="CREATE FUNCTION f() ...")
        b = Function(name="f", definition="CREATE FUNCTION f() ...")
        assert a == b
        assert hash(a) == hash(b)

    def test_different_definition_not_equal(self) -> None:
        a = Function(name="f", definition="CREATE FUNCTION f(i integer) ...")
        b = Function(name="f", definition="CREATE FUNCTION f(i bigint) ...")
        assert a != b

    def test_frozen(self) -> None:
        fn = Function(name="f", definition="x")
        with pytest.raises(ValidationError):
            fn.name = "g"

    def test_requires_definition(self) -> None:
        with pytest.raises(ValidationError):
            Function(name="f")

    def test_kind(self) -> None:
        assert Function(name="f", definition="x").kind == "function"


class TestTrigger:
    """Trigger carries its table, derived from the definition if omitted."""

    def test_table_derived_from_definition(self) -> None:
        trg = Trigger(
            name="audit_rows",
            definition="CREATE TRIGGER audit_rows AFTER INSERT OR UPDATE ON public.widgets "
            "FOR EACH ROW EXECUTE FUNCTION audit()",
        )
        assert trg.table == "public.widgets"

    def test_explicit_table_wins(self) -> None:
        trg = Trigger(
            name="audit_rows",
            table="widgets",
            definition="CREATE TRIGGER audit_rows AFTER INSERT ON public.widgets ...",
        )
        assert trg.table == "widgets"

    def test_same_name_different_tables(self) -> None:
        a = Trigger(name="touch", definition="CREATE TRIGGER touch BEFORE UPDATE ON a ...")
        b = Trigger(name="touch", definition="CREATE TRIGGER touch BEFORE UPDATE ON b ...")
        assert a != b
        assert (a.table, b.table) == ("a", "b")

    def test_frozen(self) -> None:
        trg = Trigger(name="t", table="x", definition="CREATE TRIGGER t ...")
        with pytest.raises(ValidationError):
            trg.table = "y"

    def test_kind(self) -> None:
        assert Trigger(name="t", table="x", definition="...").kind == "trigger"


class TestTableFromTriggerDefinition:
    """Table extraction from pg_get_triggerdef output."""

    @pytest.mark.parametrize(
        ("definition", "table"),
        [
            ("CREATE TRIGGER t BEFORE UPDATE ON widgets FOR EACH ROW EXECUTE FUNCTION f()", "widgets"),
            ("CREATE TRIGGER t AFTER DELETE ON app.widgets FOR EACH ROW EXECUTE FUNCTION f()", "app.widgets"),
            ('CREATE TRIGGER t AFTER INSERT ON "Odd Table" FOR EACH ROW EXECUTE FUNCTION f()', '"Odd Table"'),
            ("CREATE TRIGGER t AFTER UPDATE OF price ON items FOR EACH ROW EXECUTE FUNCTION f()", "items"),
            ("create trigger t after insert on lower_case for each row execute function f()", "lower_case"),
        ],
    )
    def test_extracts_table(self, definition: str, table: str) -> None:
        assert table_from_trigger_definition(definition) == table

    def test_no_on_clause(self) -> None:
        assert table_from_trigger_definition("not a trigger") == ""


class TestSnapshotDiff:
    """SnapshotDiff reporting."""

    def test_empty_is_in_sync(self) -> None:
        diff = SnapshotDiff()
        assert diff.in_sync
        assert diff.difference_count == 0
        assert diff.format_report() == "Schema objects in sync"

    def test_report_lists_each_section(self) -> None:
        diff = SnapshotDiff(
            missing=[ObjectDiff(kind="function", name="increment")],
            extra=[ObjectDiff(kind="trigger", name="audit_rows", table="widgets")],
            changed=[ObjectDiff(kind="function", name="audit")],
        )
        report = diff.format_report()
        assert not diff.in_sync
        assert diff.difference_count == 3
        assert "Missing from database (1)" in report
        assert "- function increment" in report
        assert "- trigger audit_rows ON widgets" in report
        assert "Definition changed (1)" in report

    def test_report_includes_messages(self) -> None:
        diff = SnapshotDiff(
            changed=[ObjectDiff(kind="function", name="audit", message="Definition text differs")],
        )
        assert "- function audit: Definition text differs" in diff.format_report()
