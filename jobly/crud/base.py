"""
Shared repository shape for the keyed entities (companies, jobs).

Each entity has a single-column primary key; lookups, partial updates and
deletes are identical apart from the table, key and field aliases.
"""

import logging
from typing import Any, Dict, Generic, Mapping, Optional, Type, TypeVar
from sqlalchemy import bindparam, text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobly.core.database import Base
from jobly.core.errors import BadRequestError, NotFoundError
from jobly.core.sql import sql_for_partial_update

ModelType = TypeVar("ModelType", bound=Base)

logger = logging.getLogger(__name__)


class CRUDBase(Generic[ModelType]):
    """
    Args:
        model: SQLAlchemy model class
        key: Name of the primary key column
        label: Entity name used in error messages ("company", "job")
        js_to_sql: External field name -> column name, for names that differ
    """

    def __init__(self, model: Type[ModelType], key: str, label: str, js_to_sql: Optional[Dict[str, str]] = None):
        self.model = model
        self.key = key
        self.label = label
        self.js_to_sql = js_to_sql or {}

    def not_found(self, key: Any) -> NotFoundError:
        return NotFoundError(f"No {self.label}: {key}")

    def get_by_key(self, db: Session, key: Any) -> Optional[ModelType]:
        """Fetch the row by primary key, or None."""
        return db.get(self.model, key)

    def update_row(self, db: Session, key: Any, data: Mapping[str, Any]) -> ModelType:
        """
        Partial update: only the fields present in data change.

        Raises:
            BadRequestError: If data is empty
            NotFoundError: If no row has this key
        """
        update = sql_for_partial_update(data, self.js_to_sql)
        table = self.model.__table__
        columns = [self.js_to_sql.get(name, name) for name in data.keys()]
        unknown = [col for col in columns if col not in table.c or col == self.key]
        if unknown:
            raise BadRequestError(f"Cannot update field(s): {', '.join(unknown)}")

        stmt = text(
            f'UPDATE {table.name} '
            f'SET {update.set_cols} '
            f'WHERE "{self.key}" = {update.next_placeholder} '
            f'RETURNING "{self.key}"'
        ).bindparams(
            *[bindparam(f"p{idx}", type_=table.c[col].type) for idx, col in enumerate(columns, start=1)],
            bindparam(f"p{len(columns) + 1}", type_=table.c[self.key].type),
        )

        try:
            result = db.execute(stmt, update.params(key)).first()
        except IntegrityError as e:
            db.rollback()
            raise BadRequestError(f"Invalid update for {self.label} {key}: {e.orig}")
        if result is None:
            db.rollback()
            raise self.not_found(key)

        db.commit()
        logger.info(f"Updated {self.label} {key}: {', '.join(columns)}")

        # commit() expired the identity map, so this reloads the updated row
        return db.get(self.model, key)

    def remove(self, db: Session, key: Any) -> None:
        """
        Delete the row with this key.

        Raises:
            NotFoundError: If no row has this key
        """
        obj = self.get_by_key(db, key)
        if obj is None:
            raise self.not_found(key)

        db.delete(obj)
        db.commit()
        logger.info(f"Deleted {self.label} {key}")
