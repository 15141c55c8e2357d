"""Canonical snapshot of functions and triggers.

``dump`` turns extracted objects into a deterministic text document that
can be committed next to the table schema and replayed with psql;
``load`` parses it back.  Pure logic: no I/O, no database connections.

Document layout::

    -- pg-fx schema objects
    -- functions: 1
    -- triggers: 1

    -- function: "increment" lines=6
    CREATE OR REPLACE FUNCTION public.increment(i integer)
    ...
    ;

    -- trigger: "audit_rows" on="widgets" lines=1
    CREATE TRIGGER audit_rows AFTER INSERT ON widgets ...
    ;

Functions precede triggers so replaying the file creates every trigger
function before the triggers that call it.  Within a kind, objects are
ordered by name, then definition text, so catalog order never leaks
into the output.

Usage:
    from pg_fx.schema.dumper import dump, load

    text = dump(list_functions(client), list_triggers(client))
    functions, triggers = load(text)
"""

import json
import re
from collections.abc import Iterable

from pg_fx.errors import DefinitionParseError
from pg_fx.schema.models import Function, Trigger

HEADER = "-- pg-fx schema objects"
TERMINATOR = ";"

_QUOTED = r'"(?:[^"\\]|\\.)*"'
_FUNCTION_COUNT = re.compile(r"^-- functions: (\d+)$")
_TRIGGER_COUNT = re.compile(r"^-- triggers: (\d+)$")
_FUNCTION_HEADER = re.compile(rf"^-- function: (?P<name>{_QUOTED}) lines=(?P<lines>\d+)$")
_TRIGGER_HEADER = re.compile(
    rf"^-- trigger: (?P<name>{_QUOTED}) on=(?P<table>{_QUOTED}) lines=(?P<lines>\d+)$"
)


def _quote(value: str) -> str:
    return json.dumps(value, ensure_ascii=False)


def _block(header: str, definition: str) -> list[str]:
    body = definition.split("\n")
    return ["", f"{header} lines={len(body)}", *body, TERMINATOR]


def dump(functions: Iterable[Function], triggers: Iterable[Trigger]) -> str:
    """Serialize functions and triggers into the canonical document.

    Args:
        functions: Extracted functions, in any order.
        triggers: Extracted triggers, in any order.

    Returns:
        Canonical text ending with a single newline.  Permuting either
        input yields byte-identical output.

    Example:
        >>> dump([], [])
        '-- pg-fx schema objects\\n-- functions: 0\\n-- triggers: 0\\n'
    """
    ordered_functions = sorted(functions, key=lambda f: f.sort_key)
    ordered_triggers = sorted(triggers, key=lambda t: t.sort_key)

    lines = [
        HEADER,
        f"-- functions: {len(ordered_functions)}",
        f"-- triggers: {len(ordered_triggers)}",
    ]
    for function in ordered_functions:
        lines.extend(_block(f"-- function: {_quote(function.name)}", function.definition))
    for trigger in ordered_triggers:
        lines.extend(
            _block(
                f"-- trigger: {_quote(trigger.name)} on={_quote(trigger.table)}",
                trigger.definition,
            )
        )

    return "\n".join(lines) + "\n"


class _Reader:
    """Line cursor over a canonical document."""

    def __init__(self, text: str) -> None:
        self.lines = text.split("\n")
        if self.lines and self.lines[-1] == "":
            self.lines.pop()
        self.pos = 0

    @property
    def exhausted(self) -> bool:
        return self.pos >= len(self.lines)

    def next(self, expected: str) -> str:
        if self.exhausted:
            raise DefinitionParseError(
                f"unexpected end of document, expected {expected}",
                line=self.pos + 1,
            )
        line = self.lines[self.pos]
        self.pos += 1
        return line

    def match(self, pattern: re.Pattern, expected: str) -> re.Match:
        line = self.next(expected)
        match = pattern.match(line)
        if match is None:
            raise DefinitionParseError(f"expected {expected}, got {line!r}", line=self.pos)
        return match

    def unquote(self, value: str) -> str:
        try:
            return json.loads(value)
        except json.JSONDecodeError as e:
            raise DefinitionParseError(f"invalid quoted name {value}: {e}", line=self.pos) from e

    def definition(self, count: int) -> str:
        if count < 1:
            raise DefinitionParseError("definition must span at least one line", line=self.pos)
        body = [self.next("definition line") for _ in range(count)]
        if self.next("terminator") != TERMINATOR:
            raise DefinitionParseError(
                f"expected {TERMINATOR!r} after definition", line=self.pos
            )
        return "\n".join(body)


def load(text: str) -> tuple[list[Function], list[Trigger]]:
    """Parse a canonical document back into functions and triggers.

    Args:
        text: Document produced by ``dump``.

    Returns:
        Tuple of (functions, triggers) in document order.

    Raises:
        DefinitionParseError: If the document is malformed or its header
            counts disagree with its contents.

    Example:
        >>> load(dump([], []))
        ([], [])
    """
    reader = _Reader(text)

    if reader.next("header") != HEADER:
        raise DefinitionParseError(f"expected {HEADER!r}", line=1)
    function_count = int(reader.match(_FUNCTION_COUNT, "function count").group(1))
    trigger_count = int(reader.match(_TRIGGER_COUNT, "trigger count").group(1))

    functions: list[Function] = []
    triggers: list[Trigger] = []

    while not reader.exhausted:
        if reader.next("blank separator") != "":
            raise DefinitionParseError("expected blank line between objects", line=reader.pos)

        line = reader.next("object header")
        if match := _FUNCTION_HEADER.match(line):
            name = reader.unquote(match["name"])
            definition = reader.definition(int(match["lines"]))
            functions.append(Function(name=name, definition=definition))
        elif match := _TRIGGER_HEADER.match(line):
            name = reader.unquote(match["name"])
            table = reader.unquote(match["table"])
            definition = reader.definition(int(match["lines"]))
            triggers.append(Trigger(name=name, table=table, definition=definition))
        else:
            raise DefinitionParseError(f"expected object header, got {line!r}", line=reader.pos)

    if len(functions) != function_count:
        raise DefinitionParseError(
            f"header declares {function_count} functions, found {len(functions)}"
        )
    if len(triggers) != trigger_count:
        raise DefinitionParseError(
            f"header declares {trigger_count} triggers, found {len(triggers)}"
        )

    return functions, triggers
