"""create enrollment and study tables

Revision ID: 20261018_0002
Revises: 20261018_0001
Create Date: 2026-10-18 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision = "20261018_0002"
down_revision = "20261018_0001"
branch_labels = None
depends_on = None


# Shared by two tables, so the type is created once up front.
resource_type_enum = postgresql.ENUM(
    "VIDEO",
    "ARTICLE",
    "PRACTICE_QUIZ",
    "FLASHCARDS",
    "TEXTBOOK",
    "NOTES",
    "OTHER",
    name="resource_type",
    create_type=False,
)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade() -> None:
    resource_type_enum.create(op.get_bind(), checkfirst=True)

    op.create_table(
        "enrollments",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("user_id", sa.String(length=36), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("course_id", sa.String(length=36), sa.ForeignKey("courses.id", ondelete="CASCADE"), nullable=False),
        sa.Column("semester", sa.String(length=50), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("user_id", "course_id", "semester", name="uq_enrollments_user_course_semester"),
    )
    op.create_index("ix_enrollments_user_id", "enrollments", ["user_id"])
    op.create_index("ix_enrollments_course_id", "enrollments", ["course_id"])

    op.create_table(
        "study_resources",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("course_id", sa.String(length=36), sa.ForeignKey("courses.id", ondelete="CASCADE"), nullable=False),
        sa.Column("type", resource_type_enum, nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("url", sa.String(length=2048), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_study_resources_course_id", "study_resources", ["course_id"])

    op.create_table(
        "learning_preferences",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("user_id", sa.String(length=36), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("preferred_type", resource_type_enum, nullable=False),
        sa.Column("study_duration", sa.Integer(), nullable=False, server_default="30"),
        *_timestamps(),
    )
    op.create_index("ix_learning_preferences_user_id", "learning_preferences", ["user_id"])

    op.create_table(
        "learning_recommendations",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("user_id", sa.String(length=36), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("course_id", sa.String(length=36), sa.ForeignKey("courses.id", ondelete="CASCADE"), nullable=False),
        sa.Column(
            "resource_id",
            sa.String(length=36),
            sa.ForeignKey("study_resources.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("reason", sa.Text(), nullable=False),
        sa.Column("priority", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("completed", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
    )
    op.create_index("ix_learning_recommendations_user_id", "learning_recommendations", ["user_id"])
    op.create_index("ix_learning_recommendations_course_id", "learning_recommendations", ["course_id"])
    op.create_index("ix_learning_recommendations_resource_id", "learning_recommendations", ["resource_id"])


def downgrade() -> None:
    op.drop_table("learning_recommendations")
    op.drop_table("learning_preferences")
    op.drop_table("study_resources")
    op.drop_table("enrollments")
    resource_type_enum.drop(op.get_bind(), checkfirst=True)
