"""Exception taxonomy for pg-fx.

Every error raised by the library derives from ``FxError``.  Driver
exceptions are translated by the adapter layer into these classes with
the original exception chained as ``__cause__``; nothing is retried or
swallowed.

Usage:
    from pg_fx.errors import ObjectNotFoundError

    try:
        drop_function(client, "increment")
    except ObjectNotFoundError:
        ...
"""


class FxError(Exception):
    """Base class for all pg-fx errors."""

    pass


class DatabaseConnectionError(FxError):
    """Raised when the database cannot be reached or authentication fails."""

    pass


class QueryError(FxError):
    """Raised when a statement fails (syntax, privileges, etc.).

    Attributes:
        sqlstate: Five-character SQLSTATE reported by the server, if any.
    """

    def __init__(self, message: str, sqlstate: str | None = None) -> None:
        super().__init__(message)
        self.sqlstate = sqlstate


class ObjectNotFoundError(QueryError):
    """Raised when a drop targets a function or trigger that does not exist."""

    pass


class AmbiguousSignatureError(QueryError):
    """Raised when a function name matches several overloads."""

    pass


class DefinitionParseError(FxError):
    """Raised when a canonical snapshot cannot be parsed.

    Attributes:
        line: 1-based line number where parsing failed, if known.
    """

    def __init__(self, message: str, line: int | None = None) -> None:
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)
        self.line = line


class DefinitionNotFoundError(FxError):
    """Raised when a versioned SQL definition file is missing or empty."""

    pass
