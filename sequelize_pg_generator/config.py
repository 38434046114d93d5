"""Configuration management for sequelize-pg-generator."""

import os
from pathlib import Path
from pydantic_settings import BaseSettings
from pydantic import Field
from typing import Optional


def _find_env_file() -> Optional[str]:
    """Find .env file in multiple locations.

    Search order:
    1. Current working directory
    2. ~/.sequelize-pg-generator/.env
    """
    # Current directory
    if os.path.exists(".env"):
        return ".env"

    # User config directory
    user_env = Path.home() / ".sequelize-pg-generator" / ".env"
    if user_env.exists():
        return str(user_env)

    return None


class Settings(BaseSettings):
    """Settings loaded from environment variables.

    Connection fields use the libpq variable names (PGHOST, PGPORT, ...), so
    an environment prepared for psql works unchanged. Command line options
    take precedence.
    """

    # PostgreSQL connection
    pghost: Optional[str] = Field(
        default=None,
        description="Hostname of the database server"
    )
    pgport: Optional[int] = Field(
        default=None,
        description="Port the database server listens on"
    )
    pguser: Optional[str] = Field(
        default=None,
        description="User to connect as"
    )
    pgpassword: Optional[str] = Field(
        default=None,
        description="Password of the database user"
    )
    pgdatabase: Optional[str] = Field(
        default=None,
        description="Database to introspect"
    )
    pgschema: str = Field(
        default="public",
        description="Schema to model"
    )

    # Output
    indent: str = Field(
        default="\t",
        description="Indentation used in generated files"
    )

    class Config:
        env_file = _find_env_file()
        env_file_encoding = "utf-8"
        extra = "ignore"
        # libpq treats an empty PG* variable as unset
        env_ignore_empty = True


# Global settings instance
settings = Settings()
