"""
Curriculum coordinator.

Entry point for every curriculum mutation and progression query: lesson
add/edit/remove/reorder, publish/unpublish, enroll, complete, navigation
and progress. Each public operation validates locally first, then performs
its writes as one transaction against the persistence boundary.

Callers that reorder optimistically should call list_lessons() after a
failure and discard their local copy; the persisted sequence always wins.

Dependencies: curriculum.core, curriculum.boundary.db.CRUD
System role: Curriculum use case orchestration
"""

import logging
from typing import Sequence
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from curriculum.application.services.unit_of_work import unit_of_work
from curriculum.boundary.db.CRUD.completion_crud import completion_crud
from curriculum.boundary.db.CRUD.course_crud import course_crud
from curriculum.boundary.db.CRUD.enrollment_crud import enrollment_crud
from curriculum.boundary.db.CRUD.lesson_crud import lesson_crud
from curriculum.boundary.db.models import (
    CompletionModel,
    CourseModel,
    EnrollmentModel,
    LessonModel,
)
from curriculum.core.actor import Actor, Role
from curriculum.core.course_state_machine import CourseStateMachine
from curriculum.core.exceptions import (
    CourseNotFound,
    DuplicateLessonOrder,
    LessonNotFound,
    NotEnrolled,
    PermissionDenied,
    PersistenceError,
)
from curriculum.core.ordering_policy import OrderingPolicy
from curriculum.core.progress_tracker import CompletionResult, CourseProgress, ProgressTracker

logger = logging.getLogger(__name__)


class SessionCompletionStore:
    """CompletionStore backed by the completions table."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def find(self, learner_id: UUID, lesson_id: UUID) -> CompletionModel | None:
        return await completion_crud.get_for(self.db, learner_id, lesson_id)

    async def add(self, learner_id: UUID, lesson_id: UUID) -> CompletionModel:
        return await completion_crud.create(self.db, learner_id=learner_id, lesson_id=lesson_id)


class CurriculumCoordinator:
    """Curriculum use case orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize coordinator with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    @staticmethod
    def _require_admin(actor: Actor, operation: str) -> None:
        if not actor.is_admin:
            raise PermissionDenied(operation, Role.ADMIN.value, details={"user_id": str(actor.user_id)})

    async def _load_course(self, course_id: UUID) -> CourseModel:
        course = await course_crud.get_by_id(self.db, course_id)
        if course is None:
            raise CourseNotFound(str(course_id))
        return course

    async def _require_course(self, course_id: UUID) -> None:
        if not await course_crud.exists(self.db, course_id):
            raise CourseNotFound(str(course_id))

    async def _load_lesson(self, lesson_id: UUID) -> LessonModel:
        lesson = await lesson_crud.get_by_id(self.db, lesson_id)
        if lesson is None:
            raise LessonNotFound(str(lesson_id))
        return lesson

    @staticmethod
    def _lost_insert_race(error: PersistenceError) -> bool:
        return isinstance(error.__cause__, IntegrityError)

    async def _load_visible_course(self, actor: Actor, course_id: UUID) -> CourseModel:
        course = await self._load_course(course_id)
        CourseStateMachine.ensure_visible(course, actor)
        return course

    # ------------------------------------------------------------------
    # Lesson authoring
    # ------------------------------------------------------------------

    async def add_lesson(
        self,
        actor: Actor,
        course_id: UUID,
        title: str,
        body: str = "",
        media_url: str | None = None,
        requested_order: int | None = None,
    ) -> LessonModel:
        """
        Add a lesson to a course.

        Args:
            actor: Caller (admin)
            course_id: Course UUID
            title: Lesson title
            body: Lesson content
            media_url: Optional media reference
            requested_order: Position to use; appended after the last lesson when None

        Returns:
            LessonModel: Created lesson

        Raises:
            PermissionDenied: Caller is not an admin
            CourseNotFound: Course does not exist
            DuplicateLessonOrder: requested_order is already used in the course
            ValueError: requested_order is not a positive integer
        """
        self._require_admin(actor, "add_lesson")

        async with unit_of_work(self.db, "add_lesson"):
            await self._require_course(course_id)
            existing_orders = await lesson_crud.list_orders(self.db, course_id)

            if requested_order is None:
                order = OrderingPolicy.next_order_for_insert(existing_orders)
            else:
                if requested_order < 1:
                    raise ValueError("Lesson order must be a positive integer")
                order = requested_order

            if not OrderingPolicy.validate_sequence([*existing_orders, order]):
                raise DuplicateLessonOrder(str(course_id), order)

            lesson = await lesson_crud.create(
                self.db,
                course_id=course_id,
                title=title,
                body=body,
                media_url=media_url,
                order=order,
            )

        logger.info(
            "Lesson added",
            extra={
                "course_id": str(course_id),
                "lesson_id": str(lesson.id),
                "order": order,
                "order_requested": requested_order is not None,
            },
        )
        return lesson

    async def update_lesson(
        self,
        actor: Actor,
        lesson_id: UUID,
        title: str | None = None,
        body: str | None = None,
        media_url: str | None = None,
    ) -> LessonModel:
        """
        Edit lesson fields. Order is only changed by reorder_lessons().

        Raises:
            PermissionDenied: Caller is not an admin
            LessonNotFound: Lesson does not exist
        """
        self._require_admin(actor, "update_lesson")

        updates = {
            key: value
            for key, value in {"title": title, "body": body, "media_url": media_url}.items()
            if value is not None
        }

        async with unit_of_work(self.db, "update_lesson"):
            lesson = await self._load_lesson(lesson_id)
            if updates:
                lesson = await lesson_crud.update_by_id(self.db, lesson_id, **updates)

        logger.info(
            "Lesson updated",
            extra={"lesson_id": str(lesson_id), "updates": list(updates)},
        )
        return lesson

    async def remove_lesson(self, actor: Actor, lesson_id: UUID) -> None:
        """
        Delete a lesson. Remaining lessons keep their order values (gaps allowed).

        Raises:
            PermissionDenied: Caller is not an admin
            LessonNotFound: Lesson does not exist
        """
        self._require_admin(actor, "remove_lesson")

        async with unit_of_work(self.db, "remove_lesson"):
            lesson = await self._load_lesson(lesson_id)
            course_id = lesson.course_id
            await lesson_crud.delete_with_completions(self.db, lesson_id)

        logger.info(
            "Lesson removed",
            extra={"lesson_id": str(lesson_id), "course_id": str(course_id)},
        )

    async def reorder_lessons(
        self,
        actor: Actor,
        course_id: UUID,
        new_ordered_ids: Sequence[UUID],
    ) -> list[LessonModel]:
        """
        Reorder every lesson of a course.

        The submitted ids must be a permutation of the course's current
        lessons. Orders are rewritten to 1..N by position, as one batch.

        Args:
            actor: Caller (admin)
            course_id: Course UUID
            new_ordered_ids: Every lesson id of the course, first to last

        Returns:
            list[LessonModel]: The persisted sequence after the reorder

        Raises:
            PermissionDenied: Caller is not an admin
            CourseNotFound: Course does not exist
            InvalidReorderSet: new_ordered_ids is not a permutation of the current lessons
        """
        self._require_admin(actor, "reorder_lessons")

        async with unit_of_work(self.db, "reorder_lessons"):
            await self._require_course(course_id)
            current = [lesson.id for lesson in await lesson_crud.list_by_course(self.db, course_id)]

            assignments = OrderingPolicy.apply_reorder(current, list(new_ordered_ids))
            if not OrderingPolicy.validate_sequence(assignments.values()):
                raise RuntimeError("Reorder produced duplicate order values")

            await lesson_crud.write_orders(self.db, course_id, assignments)
            lessons = list(await lesson_crud.list_by_course(self.db, course_id))

        logger.info(
            "Lessons reordered",
            extra={"course_id": str(course_id), "lesson_count": len(lessons)},
        )
        return lessons

    # ------------------------------------------------------------------
    # Course lifecycle
    # ------------------------------------------------------------------

    async def publish_course(self, actor: Actor, course_id: UUID) -> CourseModel:
        """
        Publish a course.

        Raises:
            PermissionDenied: Caller is not an admin
            CourseNotFound: Course does not exist
            PublishPrecondition: Course has no lessons
        """
        self._require_admin(actor, "publish_course")

        async with unit_of_work(self.db, "publish_course"):
            course = await self._load_course(course_id)
            lesson_count = await course_crud.count_lessons(self.db, course_id)
            CourseStateMachine.publish(course, lesson_count)
            await self.db.flush()

        logger.info(
            "Course published",
            extra={"course_id": str(course_id), "lesson_count": lesson_count},
        )
        return course

    async def unpublish_course(self, actor: Actor, course_id: UUID) -> CourseModel:
        """
        Return a course to draft. Succeeds for a course that is already a draft.

        Raises:
            PermissionDenied: Caller is not an admin
            CourseNotFound: Course does not exist
        """
        self._require_admin(actor, "unpublish_course")

        async with unit_of_work(self.db, "unpublish_course"):
            course = await self._load_course(course_id)
            CourseStateMachine.unpublish(course)
            await self.db.flush()

        logger.info("Course unpublished", extra={"course_id": str(course_id)})
        return course

    # ------------------------------------------------------------------
    # Learner progression
    # ------------------------------------------------------------------

    async def enroll(self, actor: Actor, course_id: UUID) -> tuple[EnrollmentModel, bool]:
        """
        Enroll the caller in a published course. Repeat calls are no-ops.

        Returns:
            (enrollment, created) where created is False if already enrolled

        Raises:
            CourseNotFound: Course does not exist
            CourseNotAvailable: Course is not published
        """
        try:
            async with unit_of_work(self.db, "enroll"):
                course = await self._load_course(course_id)
                CourseStateMachine.ensure_enrollable(course)
                enrollment, created = await enrollment_crud.get_or_create(
                    self.db, actor.user_id, course_id
                )
        except PersistenceError as e:
            if not self._lost_insert_race(e):
                raise
            # A concurrent request inserted the same (learner, course) pair first
            async with unit_of_work(self.db, "enroll", commit=False):
                enrollment = await enrollment_crud.get_for(self.db, actor.user_id, course_id)
            if enrollment is None:
                raise
            created = False

        logger.info(
            "Learner enrolled" if created else "Learner already enrolled",
            extra={"course_id": str(course_id), "learner_id": str(actor.user_id)},
        )
        return enrollment, created

    async def complete_lesson(
        self,
        actor: Actor,
        lesson_id: UUID,
    ) -> CompletionResult[CompletionModel]:
        """
        Mark a lesson complete for the caller. Repeat calls are no-ops.

        Raises:
            LessonNotFound: Lesson does not exist
            CourseNotAvailable: Learner asked for a lesson of an unpublished course
            NotEnrolled: Caller is not enrolled in the lesson's course
        """
        try:
            async with unit_of_work(self.db, "complete_lesson"):
                lesson = await self._load_lesson(lesson_id)
                course_id = lesson.course_id
                await self._load_visible_course(actor, course_id)
                if not await enrollment_crud.is_enrolled(self.db, actor.user_id, course_id):
                    raise NotEnrolled(str(actor.user_id), str(course_id))

                result = await ProgressTracker.complete_lesson(
                    SessionCompletionStore(self.db), actor.user_id, lesson_id
                )
        except PersistenceError as e:
            if not self._lost_insert_race(e):
                raise
            # A concurrent request recorded the same completion first
            async with unit_of_work(self.db, "complete_lesson", commit=False):
                existing = await completion_crud.get_for(self.db, actor.user_id, lesson_id)
            if existing is None:
                raise
            result = CompletionResult(completion=existing, created=False)

        logger.info(
            "Lesson completed" if result.created else "Lesson already completed",
            extra={
                "lesson_id": str(lesson_id),
                "course_id": str(course_id),
                "learner_id": str(actor.user_id),
            },
        )
        return result

    async def list_lessons(self, actor: Actor, course_id: UUID) -> list[LessonModel]:
        """
        Authoritative lesson sequence of a course (ascending order).

        Raises:
            CourseNotFound: Course does not exist
            CourseNotAvailable: Learner asked for an unpublished course
        """
        async with unit_of_work(self.db, "list_lessons", commit=False):
            await self._load_visible_course(actor, course_id)
            return list(await lesson_crud.list_by_course(self.db, course_id))

    async def get_lesson(self, actor: Actor, lesson_id: UUID) -> tuple[LessonModel, bool]:
        """
        Fetch a lesson with the caller's completion flag.

        Returns:
            (lesson, is_completed)

        Raises:
            LessonNotFound: Lesson does not exist
            CourseNotAvailable: Learner asked for a lesson of an unpublished course
        """
        async with unit_of_work(self.db, "get_lesson", commit=False):
            lesson = await self._load_lesson(lesson_id)
            await self._load_visible_course(actor, lesson.course_id)
            completion = await completion_crud.get_for(self.db, actor.user_id, lesson_id)
        return lesson, completion is not None

    async def lesson_neighbors(
        self,
        actor: Actor,
        lesson_id: UUID,
    ) -> tuple[UUID | None, UUID | None]:
        """
        Previous and next lesson ids around a lesson in its course.

        Raises:
            LessonNotFound: Lesson does not exist
            CourseNotAvailable: Learner asked for a lesson of an unpublished course
        """
        async with unit_of_work(self.db, "lesson_neighbors", commit=False):
            lesson = await self._load_lesson(lesson_id)
            await self._load_visible_course(actor, lesson.course_id)
            sequence = [
                item.id for item in await lesson_crud.list_by_course(self.db, lesson.course_id)
            ]
        return ProgressTracker.neighbors(sequence, lesson_id)

    async def course_progress(self, actor: Actor, course_id: UUID) -> CourseProgress:
        """
        The caller's progress through a course.

        Completions are read joined to current lessons, so lessons deleted
        concurrently drop out of both numerator and denominator.

        Raises:
            CourseNotFound: Course does not exist
            CourseNotAvailable: Learner asked for an unpublished course
        """
        async with unit_of_work(self.db, "course_progress", commit=False):
            await self._load_visible_course(actor, course_id)
            lessons = await lesson_crud.list_by_course(self.db, course_id)
            completed = await completion_crud.completed_lesson_ids(
                self.db, actor.user_id, course_id
            )
        return ProgressTracker.summarize(lessons, completed)
