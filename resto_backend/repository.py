# resto_backend/repository.py
# type: ignore
#
# Per-model wrapper around the request session. Each write commits on its own;
# unique violations raised by a write are rolled back and become ConflictError.

import logging
from contextlib import contextmanager
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from resto_backend.core.exceptions import ConflictError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")


# PostgreSQL SQLSTATE for unique_violation
UNIQUE_VIOLATION = "23505"


def is_unique_violation(exc: IntegrityError) -> bool:
    """True for duplicate-key errors; other integrity errors are re-raised."""
    pgcode = getattr(exc.orig, "pgcode", None)
    if pgcode is not None:
        return pgcode == UNIQUE_VIOLATION
    # SQLite reports no SQLSTATE, only its message
    return "unique constraint failed" in str(exc.orig).lower()


class Repository(Generic[ModelT]):
    def __init__(self, db: Session, model: Type[ModelT]):
        self.db = db
        self.model = model

    # -- reads --------------------------------------------------------
    def find_by_id(self, entity_id) -> Optional[ModelT]:
        return self.db.get(self.model, entity_id)

    def find_one_by(self, **filters) -> Optional[ModelT]:
        """Look up a row by a unique field, e.g. ``find_one_by(email=...)``."""
        return self.db.scalars(select(self.model).filter_by(**filters).limit(1)).first()

    def find_all_by(self, **filters) -> List[ModelT]:
        """All rows matching a foreign key or other column filter."""
        stmt = select(self.model).filter_by(**filters).order_by(self.model.created_at)
        return list(self.db.scalars(stmt).all())

    def find_all(self) -> List[ModelT]:
        return self.find_all_by()

    def exists(self, **filters) -> bool:
        return self.find_one_by(**filters) is not None

    # -- writes -------------------------------------------------------
    def insert(self, values: Dict[str, Any], conflict_detail: str = "Resource conflict") -> ModelT:
        entity = self.model(**values)
        with self._conflicts_as(conflict_detail):
            self.db.add(entity)
            self.db.commit()
        self.db.refresh(entity)
        return entity

    def patch(self, entity_id, values: Dict[str, Any], conflict_detail: str = "Resource conflict") -> ModelT:
        """Write only the given columns of one row and return the stored result."""
        if values:
            # the UPDATE itself may hit a unique index, before any commit
            with self._conflicts_as(conflict_detail):
                self.db.execute(
                    update(self.model).where(self.model.id == entity_id).values(**values)
                )
                self.db.commit()
        return self.find_by_id(entity_id)

    def delete(self, entity: ModelT) -> None:
        # ORM delete so relationship cascades and SET NULL rules run
        self.db.delete(entity)
        self.db.commit()

    @contextmanager
    def _conflicts_as(self, conflict_detail: str):
        """Roll back and raise ConflictError when the block hits a unique constraint."""
        try:
            yield
        except IntegrityError as e:
            self.db.rollback()
            if is_unique_violation(e):
                logger.warning(
                    f"Unique constraint rejected write on {self.model.__tablename__}: {conflict_detail}"
                )
                raise ConflictError(conflict_detail) from e
            raise
