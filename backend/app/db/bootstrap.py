from __future__ import annotations

import logging

from sqlalchemy import inspect

from app.core.config import get_settings
from app.db.base import Base
from app.db.session import engine
import app.models  # noqa: F401

logger = logging.getLogger(__name__)


def missing_tables() -> list[str]:
    with engine.connect() as connection:
        existing = set(inspect(connection).get_table_names())
    return sorted(set(Base.metadata.tables) - existing)


def ensure_schema() -> None:
    """Create any tables the models declare but the database lacks.

    Alembic migrations remain the source of truth for deployed databases;
    this keeps local and demo databases usable without running them.
    """
    if not get_settings().auto_create_schema:
        return
    missing = missing_tables()
    if not missing:
        return
    logger.info("Creating missing tables: %s", ", ".join(missing))
    Base.metadata.create_all(bind=engine)
