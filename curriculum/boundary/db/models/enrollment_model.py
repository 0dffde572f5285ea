"""
Enrollment ORM model.

Pairs a learner with a course. At most one row per (learner, course).

Dependencies: sqlalchemy, curriculum.boundary.db.base
System role: Enrollment persistence
"""

from uuid import UUID

from sqlalchemy import ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from curriculum.boundary.db.base import Base, UUIDMixin, TimestampMixin


class EnrollmentModel(Base, UUIDMixin, TimestampMixin):
    """
    Enrollment ORM model.

    learner_id references a user owned by the external identity provider,
    so it carries no foreign key.
    """

    __tablename__ = "enrollments"
    __table_args__ = (
        UniqueConstraint("learner_id", "course_id", name="uq_enrollments_learner_course"),
    )

    learner_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        nullable=False,
        index=True,
    )

    course_id: Mapped[UUID] = mapped_column(
        ForeignKey("courses.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    course = relationship("CourseModel", back_populates="enrollments")
