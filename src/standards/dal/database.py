from __future__ import annotations

"""
Database Connection Wrapper.

A thin layer over a DB-API connection (sqlite3 or psycopg2) that hides the
differences the repositories care about: placeholder style, how the id of
an inserted row is returned, and transaction boundaries.
"""

import logging
import os
import sqlite3
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Sequence

from standards.dal import schema
from standards.dal.config import MEMORY_PATH, POSTGRES, DatabaseConfig

logger = logging.getLogger(__name__)


class Database:
    """
    Connection handle shared by every repository.

    Statements are written with "?" placeholders; they are rewritten to
    "%s" for PostgreSQL. Writes outside transaction() are committed
    immediately.
    """

    def __init__(self, connection: Any, config: DatabaseConfig) -> None:
        self.connection = connection
        self.config = config
        self._transaction_depth = 0

    # -------------------------------------------------------------------------
    # LIFECYCLE
    # -------------------------------------------------------------------------

    @classmethod
    def connect(cls, config: DatabaseConfig) -> "Database":
        """
        Open a connection for the given configuration.

        Args:
            config: Backend selection and credentials.

        Returns:
            Database: Ready-to-use handle.
        """
        logger.debug(f"Connecting to {config.describe()}")

        if config.is_postgres:
            # Optional dependency, provided by the 'postgres' extra
            import psycopg2

            connection = psycopg2.connect(
                host=config.host,
                port=config.port,
                user=config.username,
                password=config.password,
                dbname=config.database,
            )
            return cls(connection, config)

        if config.path != MEMORY_PATH:
            parent = os.path.dirname(os.path.abspath(config.path))
            os.makedirs(parent, exist_ok=True)

        connection = sqlite3.connect(config.path)
        connection.execute("PRAGMA foreign_keys = ON")
        return cls(connection, config)

    def close(self) -> None:
        self.connection.close()

    def __enter__(self) -> "Database":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # -------------------------------------------------------------------------
    # STATEMENTS
    # -------------------------------------------------------------------------

    def execute(self, sql: str, params: Sequence[Any] = ()) -> Any:
        """Run one statement and return its cursor."""
        cursor = self.connection.cursor()
        cursor.execute(self._prepare(sql), tuple(params))
        self._autocommit()
        return cursor

    def query(self, sql: str, params: Sequence[Any] = ()) -> List[Dict[str, Any]]:
        """Run a SELECT and return the rows as column -> value dicts."""
        cursor = self.connection.cursor()
        cursor.execute(self._prepare(sql), tuple(params))
        names = [d[0] for d in cursor.description]
        return [dict(zip(names, row)) for row in cursor.fetchall()]

    def insert(self, sql: str, params: Sequence[Any] = ()) -> int:
        """Run an INSERT and return the generated id."""
        cursor = self.connection.cursor()
        if self.config.is_postgres:
            cursor.execute(self._prepare(sql) + " RETURNING id", tuple(params))
            new_id = cursor.fetchone()[0]
        else:
            cursor.execute(sql, tuple(params))
            new_id = cursor.lastrowid
        self._autocommit()
        return int(new_id)

    @contextmanager
    def transaction(self) -> Iterator["Database"]:
        """
        Group statements into one unit of work.

        Commits when the block exits normally and rolls back when it raises.
        Nested blocks join the outermost transaction.
        """
        self._transaction_depth += 1
        try:
            yield self
        except BaseException:
            self._transaction_depth -= 1
            if self._transaction_depth == 0:
                self.connection.rollback()
            raise
        else:
            self._transaction_depth -= 1
            if self._transaction_depth == 0:
                self.connection.commit()

    # -------------------------------------------------------------------------
    # MIGRATIONS
    # -------------------------------------------------------------------------

    def migrate(self) -> List[str]:
        """Create every table that does not exist yet."""
        backend = POSTGRES if self.config.is_postgres else "sqlite"
        with self.transaction():
            for statement in schema.create_statements(backend):
                self.execute(statement)
        logger.info(f"Migrated {len(schema.table_names())} tables on {self.config.describe()}")
        return schema.table_names()

    def revert(self) -> List[str]:
        """Drop every table, dependents first."""
        with self.transaction():
            for statement in schema.drop_statements():
                self.execute(statement)
        logger.info(f"Reverted {len(schema.table_names())} tables on {self.config.describe()}")
        return list(reversed(schema.table_names()))

    def existing_tables(self) -> List[str]:
        if self.config.is_postgres:
            rows = self.query(
                "SELECT table_name AS name FROM information_schema.tables "
                "WHERE table_schema = 'public'"
            )
        else:
            rows = self.query("SELECT name FROM sqlite_master WHERE type = 'table'")
        return sorted(r["name"] for r in rows if r["name"] != "sqlite_sequence")

    # -------------------------------------------------------------------------
    # INTERNALS
    # -------------------------------------------------------------------------

    def _prepare(self, sql: str) -> str:
        if self.config.is_postgres:
            return sql.replace("?", "%s")
        return sql

    def _autocommit(self) -> None:
        if self._transaction_depth == 0:
            self.connection.commit()

