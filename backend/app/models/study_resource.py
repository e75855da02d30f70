import uuid
from datetime import datetime
from enum import Enum

from sqlalchemy import BigInteger, DateTime, Enum as SAEnum, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from app.core.clock import insertion_stamp
from app.db.base import Base
from app.models.course import Course


class ResourceType(str, Enum):
    VIDEO = "VIDEO"
    ARTICLE = "ARTICLE"
    PRACTICE_QUIZ = "PRACTICE_QUIZ"
    FLASHCARDS = "FLASHCARDS"
    TEXTBOOK = "TEXTBOOK"
    NOTES = "NOTES"
    OTHER = "OTHER"


resource_type_enum = SAEnum(ResourceType, name="resource_type")


class StudyResource(Base):
    __tablename__ = "study_resources"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    course_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("courses.id", ondelete="CASCADE"), index=True, nullable=False
    )
    type: Mapped[ResourceType] = mapped_column(resource_type_enum, nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    url: Mapped[str] = mapped_column(String(2048), nullable=False)
    created_seq: Mapped[int] = mapped_column(BigInteger, nullable=False, default=insertion_stamp)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), onupdate=func.now())

    course: Mapped[Course] = relationship(lazy="joined")
