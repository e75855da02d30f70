import uuid
from datetime import datetime

from sqlalchemy import BigInteger, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from app.core.clock import insertion_stamp
from app.db.base import Base
from app.models.study_resource import ResourceType, resource_type_enum


class LearningPreference(Base):
    """Per-user study preference.

    More than one row per user is tolerated; readers use the earliest one.
    """

    __tablename__ = "learning_preferences"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False
    )
    preferred_type: Mapped[ResourceType] = mapped_column(resource_type_enum, nullable=False)
    study_duration: Mapped[int] = mapped_column(Integer, nullable=False, default=30)
    created_seq: Mapped[int] = mapped_column(BigInteger, nullable=False, default=insertion_stamp)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), onupdate=func.now())
