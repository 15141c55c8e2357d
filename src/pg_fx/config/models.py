"""Pydantic models for pg-fx configuration."""

from pydantic import BaseModel, Field


# ============================================================================
# Configuration Models
# ============================================================================


class DatabaseProfile(BaseModel):
    """Database connection profile from fx.toml."""

    url: str
    description: str = ""
    db_password: str | None = None  # For [YOUR-PASSWORD] placeholder substitution


class FxConfig(BaseModel):
    """Complete pg-fx configuration from fx.toml."""

    profiles: dict[str, DatabaseProfile] = Field(default_factory=dict)
    snapshot_file: str = "db/schema_objects.sql"
    definitions_path: str = "db"
