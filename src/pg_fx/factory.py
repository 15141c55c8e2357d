"""Database adapter factory.

Resolves a profile from fx.toml (explicit name or ``FX_PROFILE``
environment variable, optionally prefixed) and builds a
``PostgresAdapter`` for it, plus ``SchemaStatements`` rooted at the
configured definitions path.
"""

import logging
import os
from pathlib import Path
from urllib.parse import quote

from pg_fx.adapters.base import DatabaseClient
from pg_fx.adapters.postgres import PostgresAdapter
from pg_fx.config.loader import load_fx_config
from pg_fx.config.models import DatabaseProfile
from pg_fx.schema.statements import SchemaStatements

logger = logging.getLogger(__name__)

PROFILE_ENV_VAR = "FX_PROFILE"


class ProfileNotFoundError(Exception):
    """Raised when no database profile is configured."""

    pass


def get_active_profile_name(env_prefix: str = "") -> str:
    """Get active profile name from the environment.

    Args:
        env_prefix: Prefix for the variable name (``APP_`` reads
            ``APP_FX_PROFILE``).

    Returns:
        Profile name

    Raises:
        ProfileNotFoundError: If the variable is unset
    """
    var_name = f"{env_prefix}{PROFILE_ENV_VAR}"
    env_profile = os.environ.get(var_name)
    if env_profile:
        return env_profile

    raise ProfileNotFoundError(
        "No database profile configured.\n"
        f"Run: {var_name}=<name> pg-fx dump  (or pass --profile <name>)"
    )


def resolve_url(profile: DatabaseProfile) -> str:
    """Resolve profile URL with password substitution.

    Args:
        profile: Database profile from config

    Returns:
        Connection URL with password substituted
    """
    url = profile.url
    if profile.db_password and "[YOUR-PASSWORD]" in url:
        url = url.replace("[YOUR-PASSWORD]", quote(profile.db_password, safe=""))
    return url


def get_profile(
    profile_name: str | None = None,
    config_path: Path | None = None,
    env_prefix: str = "",
) -> tuple[str, DatabaseProfile]:
    """Get profile name and configuration.

    Returns:
        Tuple of (profile_name, DatabaseProfile)

    Raises:
        ProfileNotFoundError: If no profile is configured or the named
            profile is not in fx.toml
        FileNotFoundError: If fx.toml is missing
    """
    if profile_name is None:
        profile_name = get_active_profile_name(env_prefix)

    config = load_fx_config(config_path)
    if profile_name not in config.profiles:
        available = ", ".join(config.profiles.keys()) or "(none)"
        raise ProfileNotFoundError(
            f"Profile '{profile_name}' not found in fx.toml.\n"
            f"Available profiles: {available}"
        )

    return profile_name, config.profiles[profile_name]


def get_adapter(
    profile_name: str | None = None,
    config_path: Path | None = None,
    env_prefix: str = "",
    **engine_kwargs,
) -> PostgresAdapter:
    """Create a ``PostgresAdapter`` for a configured profile.

    Args:
        profile_name: Profile name from fx.toml.  If None, uses the
            ``FX_PROFILE`` environment variable.
        config_path: Path to fx.toml (default: ``./fx.toml``).
        env_prefix: Prefix for the profile environment variable.
        **engine_kwargs: Forwarded to the SQLAlchemy engine.

    Example:
        >>> adapter = get_adapter("dev")
        >>> functions = list_functions(adapter)
    """
    name, profile = get_profile(profile_name, config_path, env_prefix)
    logger.debug("Using database profile %s", name)
    return PostgresAdapter(resolve_url(profile), **engine_kwargs)


def get_schema_statements(
    client: DatabaseClient,
    config_path: Path | None = None,
) -> SchemaStatements:
    """Create ``SchemaStatements`` rooted at the configured definitions path.

    Args:
        client: Database client (or transaction-bound client) to run on.
        config_path: Path to fx.toml (default: ``./fx.toml``).

    Example:
        >>> with get_adapter("dev").transaction() as client:
        ...     get_schema_statements(client).update_function("increment", version=2)
    """
    config = load_fx_config(config_path)
    return SchemaStatements(client, config.definitions_path)
