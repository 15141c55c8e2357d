"""pg-fx: version-controlled PostgreSQL functions and triggers.

Extracts function and trigger definitions from the system catalog,
creates and drops them during migrations, and writes a canonical,
order-independent snapshot that rebuilds them from scratch.

Usage:
    from pg_fx import PostgresAdapter, list_functions, list_triggers, dump
    from pg_fx import create_function, drop_trigger, SchemaStatements
    from pg_fx import get_adapter, get_schema_statements, load_fx_config
"""

__version__ = "0.1.0"

# Adapters
from pg_fx.adapters.base import DatabaseClient
from pg_fx.adapters.postgres import PostgresAdapter

# Config
from pg_fx.config.loader import load_fx_config
from pg_fx.config.models import DatabaseProfile, FxConfig

# Errors
from pg_fx.errors import (
    AmbiguousSignatureError,
    DatabaseConnectionError,
    DefinitionNotFoundError,
    DefinitionParseError,
    FxError,
    ObjectNotFoundError,
    QueryError,
)

# Factory
from pg_fx.factory import (
    ProfileNotFoundError,
    get_adapter,
    get_schema_statements,
    resolve_url,
)

# Schema objects
from pg_fx.schema.comparator import compare_snapshot
from pg_fx.schema.dumper import dump, load
from pg_fx.schema.executor import (
    create_function,
    create_trigger,
    drop_function,
    drop_trigger,
)
from pg_fx.schema.introspector import list_functions, list_triggers
from pg_fx.schema.models import Function, SnapshotDiff, Trigger
from pg_fx.schema.statements import SchemaStatements

__all__ = [
    # Adapters
    "DatabaseClient",
    "PostgresAdapter",
    # Config
    "load_fx_config",
    "DatabaseProfile",
    "FxConfig",
    # Errors
    "FxError",
    "DatabaseConnectionError",
    "QueryError",
    "ObjectNotFoundError",
    "AmbiguousSignatureError",
    "DefinitionParseError",
    "DefinitionNotFoundError",
    # Factory
    "get_adapter",
    "get_schema_statements",
    "resolve_url",
    "ProfileNotFoundError",
    # Schema objects
    "Function",
    "Trigger",
    "SnapshotDiff",
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
]
