"""
Course ORM model.

Represents a course: an ordered container of lessons that learners enroll in
once it has been published.

Dependencies: sqlalchemy, curriculum.boundary.db.base, curriculum.core
System role: Course persistence
"""

from sqlalchemy import Enum, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from curriculum.boundary.db.base import Base, UUIDMixin, TimestampMixin
from curriculum.core.course_state_machine import CourseStatus


class CourseModel(Base, UUIDMixin, TimestampMixin):
    """
    Course ORM model.

    New courses start as DRAFT. Status only changes through
    CourseStateMachine transitions. Deleting a course removes its lessons,
    their completions, and its enrollments (ON DELETE CASCADE; the CRUD layer
    also deletes them explicitly so SQLite behaves the same).

    Attributes:
        id: UUID primary key (auto-generated)
        title: Course title (255 char limit)
        description: Optional course description (up to 4096 chars)
        cover_url: Optional cover image reference
        status: Lifecycle state (DRAFT/PUBLISHED)
        lessons: LessonModel rows of this course, ascending order
        enrollments: EnrollmentModel rows of this course
        created_at: Course creation timestamp (UTC)
        updated_at: Last modification timestamp (UTC)
    """

    __tablename__ = "courses"

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        doc="Course title",
    )

    description: Mapped[str | None] = mapped_column(
        String(4096),
        nullable=True,
        default=None,
        doc="Course description",
    )

    cover_url: Mapped[str | None] = mapped_column(
        String(1024),
        nullable=True,
        default=None,
        doc="Cover image reference",
    )

    status: Mapped[CourseStatus] = mapped_column(
        Enum(CourseStatus, native_enum=False, length=32),
        nullable=False,
        default=CourseStatus.DRAFT,
        index=True,
    )

    # Relationships
    lessons = relationship(
        "LessonModel",
        back_populates="course",
        order_by="LessonModel.order",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    enrollments = relationship(
        "EnrollmentModel",
        back_populates="course",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
