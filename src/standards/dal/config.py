from __future__ import annotations

"""
Database Configuration.

Describes which backend the data-access layer talks to. The value is
resolved once at process start (usually from the environment) and passed
explicitly to Database.connect(); nothing in the DAL reads the environment
on its own.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

SQLITE = "sqlite"
POSTGRES = "postgres"

MEMORY_PATH = ":memory:"
DEFAULT_SQLITE_PATH = os.path.join("db", "standards.sqlite")


@dataclass(frozen=True)
class DatabaseConfig:
    """
    Immutable connection settings.

    Attributes:
        backend: Either "sqlite" or "postgres".
        path: SQLite database file, or ":memory:".
        host: PostgreSQL host name.
        port: PostgreSQL port.
        username: PostgreSQL role.
        password: PostgreSQL password.
        database: PostgreSQL database name.
    """
    backend: str = SQLITE
    path: str = DEFAULT_SQLITE_PATH
    host: str = "localhost"
    port: int = 5432
    username: str = "postgres"
    password: str = ""
    database: str = "standards"

    @property
    def is_postgres(self) -> bool:
        return self.backend == POSTGRES

    def describe(self) -> str:
        """Human-readable target without credentials, used in log lines."""
        if self.is_postgres:
            return f"PostgreSQL at {self.host}:{self.port}/{self.database}"
        if self.path == MEMORY_PATH:
            return "SQLite (in-memory)"
        return f"SQLite at {self.path}"

    # -------------------------------------------------------------------------
    # FACTORIES
    # -------------------------------------------------------------------------

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "DatabaseConfig":
        """
        Select the backend from the ENV variable.

        ENV=production selects PostgreSQL configured by the DATABASE_* variables,
        ENV=testing selects in-memory SQLite, anything else a SQLite file at
        DATABASE_PATH.
        """
        env = os.environ if env is None else env
        mode = (env.get("ENV") or "development").strip().lower()

        if mode == "production":
            return cls(
                backend=POSTGRES,
                host=env.get("DATABASE_HOST") or "localhost",
                port=_parse_port(env.get("DATABASE_PORT")),
                username=env.get("DATABASE_USERNAME") or "postgres",
                password=env.get("DATABASE_PASSWORD") or "",
                database=env.get("DATABASE_NAME") or "standards",
            )

        if mode == "testing":
            return cls.for_testing()

        return cls(backend=SQLITE, path=env.get("DATABASE_PATH") or DEFAULT_SQLITE_PATH)

    @classmethod
    def for_testing(cls) -> "DatabaseConfig":
        return cls(backend=SQLITE, path=MEMORY_PATH)

    @classmethod
    def for_production(
            cls,
            host: str = "localhost",
            port: int = 5432,
            username: str = "postgres",
            password: str = "",
            database: str = "standards",
    ) -> "DatabaseConfig":
        return cls(
            backend=POSTGRES,
            host=host,
            port=port,
            username=username,
            password=password,
            database=database,
        )


def _parse_port(raw: Optional[str]) -> int:
    try:
        return int(raw) if raw else 5432
    except ValueError:
        return 5432
