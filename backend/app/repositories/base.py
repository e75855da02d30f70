from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import ConflictError
from app.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)

logger = logging.getLogger(__name__)


class SqlRepository(Generic[ModelT]):
    model: type[ModelT]
    conflict_message = "Resource already exists with the same unique fields"

    def __init__(self, db: Session) -> None:
        self.db = db

    def get(self, record_id: str) -> ModelT | None:
        return self.db.get(self.model, record_id)

    def list(self) -> Sequence[ModelT]:
        return self.db.execute(select(self.model)).unique().scalars().all()

    def add(self, record: ModelT) -> ModelT:
        self.db.add(record)
        self.commit()
        self.db.refresh(record)
        return record

    def update(self, record: ModelT, values: dict) -> ModelT:
        for key, value in values.items():
            setattr(record, key, value)
        self.commit()
        self.db.refresh(record)
        return record

    def delete(self, record: ModelT) -> None:
        self.db.delete(record)
        self.commit()

    def commit(self) -> None:
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            logger.warning("Unique constraint rejected %s write: %s", self.model.__name__, exc.orig)
            raise ConflictError(self.conflict_message) from exc
        except Exception:
            self.db.rollback()
            raise
