"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
API starts without any configuration; override them in production,
in particular ``JWT_SECRET``.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "User Registry API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Secret used to sign registration tokens and their lifetime in
    # seconds.
    jwt_secret: str = os.getenv("JWT_SECRET", "change_me")
    token_expire_seconds: int = int(os.getenv("TOKEN_EXPIRE_SECONDS", "360000"))

    # bcrypt cost factor (log2 of the number of key expansion rounds).
    bcrypt_rounds: int = int(os.getenv("BCRYPT_ROUNDS", "10"))

    # Path to the SQLite file backing the user collection.  A relative
    # path is resolved against the package root by ``core.db``.
    database_url: str = os.getenv("DATABASE_URL", "user_registry.db")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "5000"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables must
# be set before this module is imported.
settings = Settings()
