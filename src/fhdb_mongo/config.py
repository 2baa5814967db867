"""Settings for the fh.db shim, resolved from the environment.

Usage:
    from fhdb_mongo.config import get_settings

    settings = get_settings()
    print(settings.mongodb_conn_url)
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

MAX_COLLECTION_NAME = 70


class FhDbSettings(BaseSettings):
    """Connection settings.

    The connection URL keeps the legacy ``MONGODB_CONN_URL`` variable name;
    everything else is read with the ``FHDB_`` prefix.
    """

    model_config = SettingsConfigDict(
        env_prefix="FHDB_",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    mongodb_conn_url: str = Field(
        default="mongodb://localhost:27017/db",
        validation_alias=AliasChoices("MONGODB_CONN_URL", "FHDB_MONGODB_CONN_URL"),
        description="MongoDB connection string; the path names the database",
    )

    default_database: str = Field(
        default="db",
        description="Database used when the connection string names none",
    )

    server_selection_timeout_ms: int = Field(default=5000, ge=0)

    connect_timeout_ms: int = Field(default=10000, ge=0)

    max_collection_name: int = Field(
        default=MAX_COLLECTION_NAME,
        gt=0,
        description="Longest accepted 'type' (collection name)",
    )


@lru_cache
def get_settings() -> FhDbSettings:
    """Return the cached process-wide settings."""
    return FhDbSettings()
