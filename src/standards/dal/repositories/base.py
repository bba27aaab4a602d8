from __future__ import annotations

"""
Generic Repository.

One implementation of find / find_all / create / update / delete shared by
every table. Entity repositories only add their own query helpers on top
of _filter() and _first().
"""

import logging
from datetime import datetime, timezone
from typing import Any, Generic, List, Optional, Type, get_type_hints

from standards.dal.database import Database
from standards.dal.models import ModelT, to_db_value
from standards.domain.errors import RecordNotFoundError

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Repository(Generic[ModelT]):
    """
    CRUD access to a single table.

    Args:
        database: Shared connection handle.
    """

    model: Type[ModelT]

    def __init__(self, database: Database) -> None:
        self.database = database

    @property
    def table(self) -> str:
        return self.model.__table__

    # -------------------------------------------------------------------------
    # READ
    # -------------------------------------------------------------------------

    def find(self, record_id: int) -> Optional[ModelT]:
        return self._first(id=record_id)

    def find_all(self) -> List[ModelT]:
        return self._filter()

    # -------------------------------------------------------------------------
    # WRITE
    # -------------------------------------------------------------------------

    def create(self, model: ModelT) -> ModelT:
        """
        Insert a new record.

        The id and both timestamps are assigned here and written back onto
        the given instance, which is also returned.
        """
        now = utc_now()
        model.inserted_at = now
        model.updated_at = now

        row = model.to_row()
        columns = [*self.model.data_columns(), "inserted_at", "updated_at"]
        placeholders = ", ".join("?" for _ in columns)
        sql = f"INSERT INTO {self.table} ({', '.join(columns)}) VALUES ({placeholders})"

        model.id = self.database.insert(sql, [row[c] for c in columns])
        logger.debug(f"Created {self.table}#{model.id}")
        return model

    def update(self, model: ModelT) -> ModelT:
        """
        Persist every field of an existing record and refresh updated_at.

        Raises:
            RecordNotFoundError: If the record has no id or no longer exists.
        """
        if model.id is None or self.find(model.id) is None:
            raise RecordNotFoundError(self.table, model.id)

        model.updated_at = utc_now()
        row = model.to_row()
        columns = [*self.model.data_columns(), "updated_at"]
        assignments = ", ".join(f"{c} = ?" for c in columns)
        sql = f"UPDATE {self.table} SET {assignments} WHERE id = ?"

        self.database.execute(sql, [row[c] for c in columns] + [model.id])
        logger.debug(f"Updated {self.table}#{model.id}")
        return model

    def delete(self, record_id: int) -> None:
        """
        Remove a record.

        Raises:
            RecordNotFoundError: If no record has that id.
        """
        if self.find(record_id) is None:
            raise RecordNotFoundError(self.table, record_id)
        self.database.execute(f"DELETE FROM {self.table} WHERE id = ?", [record_id])
        logger.debug(f"Deleted {self.table}#{record_id}")

    # -------------------------------------------------------------------------
    # QUERY HELPERS
    # -------------------------------------------------------------------------

    def _filter(self, **criteria: Any) -> List[ModelT]:
        """Records whose columns equal every given value, ordered by id."""
        hints = get_type_hints(self.model)
        columns = self.model.columns()
        clauses: List[str] = []
        params: List[Any] = []

        for column, value in criteria.items():
            if column not in columns:
                raise ValueError(f"Unknown column '{column}' for {self.table}")
            if value is None:
                clauses.append(f"{column} IS NULL")
            else:
                clauses.append(f"{column} = ?")
                params.append(to_db_value(value, hints[column]))

        sql = f"SELECT * FROM {self.table}"
        if clauses:
            sql += " WHERE " + " AND ".join(clauses)
        sql += " ORDER BY id"

        return [self.model.from_row(row) for row in self.database.query(sql, params)]

    def _first(self, **criteria: Any) -> Optional[ModelT]:
        rows = self._filter(**criteria)
        return rows[0] if rows else None
