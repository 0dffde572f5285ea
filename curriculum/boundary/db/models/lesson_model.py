"""
Lesson ORM model.

One step of a course. Lessons of a course are sequenced by their integer
order, which is unique within the course.

Dependencies: sqlalchemy, curriculum.boundary.db.base
System role: Lesson persistence
"""

from uuid import UUID

from sqlalchemy import ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from curriculum.boundary.db.base import Base, UUIDMixin, TimestampMixin


class LessonModel(Base, UUIDMixin, TimestampMixin):
    """
    Lesson ORM model.

    Gaps in order values are allowed (deletes do not renumber); duplicates
    are not.

    Attributes:
        id: UUID primary key (auto-generated)
        course_id: Owning course (CASCADE on course deletion)
        title: Lesson title
        body: Lesson content
        media_url: Optional media reference (video, image, ...)
        order: Position key within the course, stored as lesson_order

    Constraints:
        (course_id, lesson_order): UNIQUE
    """

    __tablename__ = "lessons"
    __table_args__ = (
        UniqueConstraint("course_id", "lesson_order", name="uq_lessons_course_order"),
    )

    course_id: Mapped[UUID] = mapped_column(
        ForeignKey("courses.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        doc="Lesson title",
    )

    body: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
        doc="Lesson content",
    )

    media_url: Mapped[str | None] = mapped_column(
        String(1024),
        nullable=True,
        default=None,
        doc="Optional media reference",
    )

    order: Mapped[int] = mapped_column(
        "lesson_order",
        Integer,
        nullable=False,
        doc="Position within the course (unique per course)",
    )

    # Relationships
    course = relationship("CourseModel", back_populates="lessons")
    completions = relationship(
        "CompletionModel",
        back_populates="lesson",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
