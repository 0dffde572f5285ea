"""
Completion ORM model.

Existence of a row means the learner has completed the lesson.

Dependencies: sqlalchemy, curriculum.boundary.db.base
System role: Lesson completion persistence
"""

from uuid import UUID

from sqlalchemy import ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from curriculum.boundary.db.base import Base, UUIDMixin, TimestampMixin


class CompletionModel(Base, UUIDMixin, TimestampMixin):
    """Completion ORM model, unique per (learner, lesson)."""

    __tablename__ = "completions"
    __table_args__ = (
        UniqueConstraint("learner_id", "lesson_id", name="uq_completions_learner_lesson"),
    )

    learner_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        nullable=False,
        index=True,
    )

    lesson_id: Mapped[UUID] = mapped_column(
        ForeignKey("lessons.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    lesson = relationship("LessonModel", back_populates="completions")
