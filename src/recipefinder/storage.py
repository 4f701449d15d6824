"""Key/value persistence for shopping and kitchen collections."""

from typing import Any, Protocol

from sqlalchemy import Table, delete, insert, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from recipefinder.logging_config import get_logger
from recipefinder.models import ROW_MODELS

logger = get_logger(__name__)


class StorageError(Exception):
    """Raised when a collection cannot be read or written."""

    def __init__(self, message: str, key: str | None = None):
        super().__init__(message)
        self.key = key


class ItemStore(Protocol):
    """Anything that can load and save an ordered list of rows by key."""

    def load(self, key: str) -> list[dict[str, Any]]: ...

    def save(self, key: str, rows: list[dict[str, Any]]) -> None: ...


class InMemoryStore:
    """Process-local store, used when no database is wired in and in tests."""

    def __init__(self) -> None:
        self._data: dict[str, list[dict[str, Any]]] = {}

    def load(self, key: str) -> list[dict[str, Any]]:
        return [dict(row) for row in self._data.get(key, [])]

    def save(self, key: str, rows: list[dict[str, Any]]) -> None:
        self._data[key] = [dict(row) for row in rows]


class SqlItemStore:
    """
    Store each collection in its own table through a SQLAlchemy session.

    ``save`` replaces the whole collection in one transaction, so a failed
    write leaves the previously committed rows in place.
    """

    def __init__(self, session: Session):
        self.session = session

    def _table(self, key: str) -> Table:
        model = ROW_MODELS.get(key)
        if model is None:
            raise StorageError(f"No table for collection {key!r}", key=key)
        return model.__table__

    def load(self, key: str) -> list[dict[str, Any]]:
        table = self._table(key)
        columns = [column for column in table.columns if column.name != "position"]
        try:
            result = self.session.execute(select(*columns).order_by(table.c.position))
            return [dict(row) for row in result.mappings()]
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StorageError(f"Failed to load {key}: {e}", key=key) from e

    def save(self, key: str, rows: list[dict[str, Any]]) -> None:
        table = self._table(key)
        names = [column.name for column in table.columns if column.name != "position"]
        values = [
            {"position": position, **{name: row[name] for name in names if name in row}}
            for position, row in enumerate(rows)
        ]
        try:
            self.session.execute(delete(table))
            if values:
                self.session.execute(insert(table), values)
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StorageError(f"Failed to save {key}: {e}", key=key) from e
        logger.debug(f"Saved {len(values)} rows to {key}")
