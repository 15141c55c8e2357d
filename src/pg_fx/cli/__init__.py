"""CLI for dumping, checking, and restoring functions and triggers.

Usage:
    FX_PROFILE=dev pg-fx dump
    pg-fx --profile dev dump --output db/schema_objects.sql
    pg-fx --profile dev check
    pg-fx --profile scratch restore db/schema_objects.sql
    pg-fx profiles

Commands:
    profiles  - List available profiles
    dump      - Write the canonical snapshot of the live database
    check     - Compare a snapshot with the live database
    restore   - Replay a snapshot into the database in one transaction
"""

import argparse
import logging
import os
import sys
import tempfile
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from pg_fx.config.loader import load_fx_config
from pg_fx.errors import DefinitionParseError, FxError
from pg_fx.factory import ProfileNotFoundError, get_adapter
from pg_fx.schema.comparator import compare_snapshot
from pg_fx.schema.dumper import dump, load
from pg_fx.schema.executor import create_function, create_trigger
from pg_fx.schema.introspector import list_functions, list_triggers

console = Console()
logger = logging.getLogger(__name__)


# ============================================================================
# Helpers
# ============================================================================


def _config_path(args: argparse.Namespace) -> Path | None:
    return Path(args.config) if getattr(args, "config", None) else None


def _snapshot_path(args: argparse.Namespace, explicit: str | None) -> Path:
    """Use the explicit path, else the ``[snapshot] file`` setting."""
    if explicit:
        return Path(explicit)
    return Path(load_fx_config(_config_path(args)).snapshot_file)


def read_snapshot(path: Path) -> str:
    """Read a snapshot without newline translation."""
    with open(path, encoding="utf-8", newline="") as f:
        return f.read()


def write_snapshot(path: Path, text: str) -> None:
    """Write a snapshot atomically.

    The text goes to a temporary file in the target directory that
    replaces ``path`` only once fully written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(text)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def _connect(args: argparse.Namespace):
    return get_adapter(
        profile_name=args.profile,
        config_path=_config_path(args),
        env_prefix=args.env_prefix,
    )


# ============================================================================
# Commands
# ============================================================================


def cmd_profiles(args: argparse.Namespace) -> int:
    """List available profiles from fx.toml.

    Reads only local TOML config -- no database calls.

    Returns:
        0 on success, 1 if fx.toml is missing or invalid.
    """
    try:
        config = load_fx_config(_config_path(args))
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error: {e}[/red]")
        return 1

    table = Table(title="Database Profiles", show_header=True, header_style="bold")
    table.add_column("", width=2)
    table.add_column("Profile")
    table.add_column("Description")

    for name, profile in config.profiles.items():
        current = name == args.profile
        table.add_row(
            "[bold green]*[/bold green]" if current else " ",
            f"[bold cyan]{name}[/bold cyan]" if current else name,
            profile.description or "",
        )

    console.print(table)
    return 0


def cmd_dump(args: argparse.Namespace) -> int:
    """Extract functions and triggers and write the canonical snapshot.

    Nothing is written if extraction fails.

    Returns:
        0 on success, 1 on failure.
    """
    try:
        output = _snapshot_path(args, args.output)
        adapter = _connect(args)
    except (FileNotFoundError, ProfileNotFoundError, ValueError) as e:
        console.print(f"[red]Error: {e}[/red]")
        return 1

    try:
        functions = list_functions(adapter)
        triggers = list_triggers(adapter)
    except FxError as e:
        console.print(f"[bold red]x[/bold red] Extraction failed: {e}")
        return 1
    finally:
        adapter.close()

    write_snapshot(output, dump(functions, triggers))
    console.print(
        f"[bold green]v[/bold green] Dumped {len(functions)} functions and "
        f"{len(triggers)} triggers to [cyan]{output}[/cyan]"
    )
    return 0


def cmd_check(args: argparse.Namespace) -> int:
    """Compare a snapshot file with the live database.

    Returns:
        0 when in sync, 1 on drift or failure.
    """
    try:
        snapshot = _snapshot_path(args, args.snapshot)
        expected = load(read_snapshot(snapshot))
        adapter = _connect(args)
    except (FileNotFoundError, ProfileNotFoundError, DefinitionParseError, ValueError) as e:
        console.print(f"[red]Error: {e}[/red]")
        return 1

    try:
        actual = (list_functions(adapter), list_triggers(adapter))
    except FxError as e:
        console.print(f"[bold red]x[/bold red] Extraction failed: {e}")
        return 1
    finally:
        adapter.close()

    diff = compare_snapshot(expected, actual)
    if diff.in_sync:
        console.print(f"[bold green]v[/bold green] {diff.format_report()}")
        return 0

    table = Table(title="Schema Object Drift", show_header=True, header_style="bold")
    table.add_column("Kind", style="dim")
    table.add_column("Object")
    table.add_column("Status")
    table.add_column("Detail", style="dim")
    for status, diffs in (
        ("[red]missing[/red]", diff.missing),
        ("[yellow]extra[/yellow]", diff.extra),
        ("[magenta]changed[/magenta]", diff.changed),
    ):
        for item in diffs:
            table.add_row(item.kind, item.label, status, item.message)

    console.print(table)
    console.print(f"[bold red]x[/bold red] {diff.difference_count} differences")
    return 1


def cmd_restore(args: argparse.Namespace) -> int:
    """Replay a snapshot: all functions, then all triggers, in one transaction.

    Returns:
        0 on success, 1 on failure (the transaction is rolled back).
    """
    try:
        functions, triggers = load(read_snapshot(Path(args.snapshot)))
        adapter = _connect(args)
    except (FileNotFoundError, ProfileNotFoundError, DefinitionParseError, ValueError) as e:
        console.print(f"[red]Error: {e}[/red]")
        return 1

    try:
        with adapter.transaction() as client:
            for function in functions:
                logger.info("Creating function %s", function.name)
                create_function(client, function.definition)
            for trigger in triggers:
                logger.info("Creating trigger %s on %s", trigger.name, trigger.table)
                create_trigger(client, trigger.definition)
    except FxError as e:
        console.print(f"[bold red]x[/bold red] Restore failed, rolled back: {e}")
        return 1
    finally:
        adapter.close()

    console.print(
        f"[bold green]v[/bold green] Restored {len(functions)} functions and "
        f"{len(triggers)} triggers"
    )
    return 0


# ============================================================================
# Main entry point
# ============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pg-fx",
        description="Version PostgreSQL functions and triggers",
    )
    parser.add_argument("--config", help="Path to fx.toml (default: ./fx.toml)")
    parser.add_argument("--profile", help="Profile name from fx.toml")
    parser.add_argument(
        "--env-prefix",
        default="",
        help=(
            "Prefix for environment variable lookup "
            "(e.g., --env-prefix APP_ reads APP_FX_PROFILE)"
        ),
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Log statements")

    subparsers = parser.add_subparsers(dest="command", required=True)

    p_profiles = subparsers.add_parser("profiles", help="List available profiles")
    p_profiles.set_defaults(func=cmd_profiles)

    p_dump = subparsers.add_parser("dump", help="Write the canonical snapshot")
    p_dump.add_argument("--output", "-o", help="Snapshot file (default: from fx.toml)")
    p_dump.set_defaults(func=cmd_dump)

    p_check = subparsers.add_parser("check", help="Compare a snapshot with the database")
    p_check.add_argument("--snapshot", "-s", help="Snapshot file (default: from fx.toml)")
    p_check.set_defaults(func=cmd_check)

    p_restore = subparsers.add_parser("restore", help="Replay a snapshot into the database")
    p_restore.add_argument("snapshot", help="Snapshot file to replay")
    p_restore.set_defaults(func=cmd_restore)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
