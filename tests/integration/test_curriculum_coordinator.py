"""
Integration tests for CurriculumCoordinator.

Runs every coordinator operation against an in-memory SQLite database and
checks the ordering, publication and progression rules end to end,
including order uniqueness at rest after every mutation.

System role: Verification of curriculum use cases over real persistence
"""

import uuid

import pytest
from sqlalchemy import Update, select
from sqlalchemy.exc import OperationalError

from curriculum.application.services.course_service import CourseService
from curriculum.application.services.curriculum_coordinator import CurriculumCoordinator
from curriculum.boundary.db.CRUD.completion_crud import completion_crud
from curriculum.boundary.db.CRUD.enrollment_crud import enrollment_crud
from curriculum.boundary.db.models import CompletionModel, EnrollmentModel, LessonModel
from curriculum.core.actor import Actor
from curriculum.core.course_state_machine import CourseStatus
from curriculum.core.exceptions import (
    CourseNotAvailable,
    CourseNotFound,
    DuplicateLessonOrder,
    InvalidReorderSet,
    LessonNotFound,
    NotEnrolled,
    PermissionDenied,
    PersistenceError,
    PublishPrecondition,
)


@pytest.fixture
def coordinator(test_async_db) -> CurriculumCoordinator:
    return CurriculumCoordinator(test_async_db)


@pytest.fixture
def course_service(test_async_db) -> CourseService:
    return CourseService(test_async_db)


async def make_course(course_service: CourseService, admin: Actor, title: str = "Algebra") -> uuid.UUID:
    course = await course_service.create_course(admin, title=title, description="Intro course")
    return course["id"]


async def make_lessons(
    coordinator: CurriculumCoordinator,
    admin: Actor,
    course_id: uuid.UUID,
    titles: list[str],
) -> list[LessonModel]:
    return [await coordinator.add_lesson(admin, course_id, title=title) for title in titles]


@pytest.fixture
async def published_course(coordinator, course_service, admin):
    """Published course with four lessons A..D."""
    course_id = await make_course(course_service, admin)
    lessons = await make_lessons(coordinator, admin, course_id, ["A", "B", "C", "D"])
    await coordinator.publish_course(admin, course_id)
    return course_id, lessons


async def orders_by_id(db, course_id: uuid.UUID) -> dict[uuid.UUID, int]:
    result = await db.execute(
        select(LessonModel.id, LessonModel.order).where(LessonModel.course_id == course_id)
    )
    return {lesson_id: order for lesson_id, order in result.all()}


async def assert_orders_unique(db, course_id: uuid.UUID) -> None:
    orders = list((await orders_by_id(db, course_id)).values())
    assert len(orders) == len(set(orders))


class TestAddLesson:
    """Test suite for CurriculumCoordinator.add_lesson()."""

    @pytest.mark.asyncio
    async def test_lessons_append_in_sequence(
        self, test_async_db, coordinator, course_service, admin
    ) -> None:
        # Arrange
        course_id = await make_course(course_service, admin)

        # Act
        lessons = await make_lessons(coordinator, admin, course_id, ["A", "B", "C"])

        # Assert
        assert [lesson.order for lesson in lessons] == [1, 2, 3]
        await assert_orders_unique(test_async_db, course_id)

    @pytest.mark.asyncio
    async def test_requested_order_is_used(
        self, coordinator, course_service, admin
    ) -> None:
        course_id = await make_course(course_service, admin)

        lesson = await coordinator.add_lesson(admin, course_id, title="Late", requested_order=10)
        following = await coordinator.add_lesson(admin, course_id, title="After")

        assert lesson.order == 10
        assert following.order == 11

    @pytest.mark.asyncio
    async def test_duplicate_requested_order_is_rejected_without_write(
        self, test_async_db, coordinator, course_service, admin
    ) -> None:
        # Arrange
        course_id = await make_course(course_service, admin)
        await make_lessons(coordinator, admin, course_id, ["A", "B"])

        # Act
        with pytest.raises(DuplicateLessonOrder) as exc_info:
            await coordinator.add_lesson(admin, course_id, title="Clash", requested_order=2)

        # Assert
        assert exc_info.value.details["order"] == 2
        assert sorted((await orders_by_id(test_async_db, course_id)).values()) == [1, 2]

    @pytest.mark.asyncio
    async def test_non_positive_order_is_rejected(
        self, coordinator, course_service, admin
    ) -> None:
        course_id = await make_course(course_service, admin)

        with pytest.raises(ValueError):
            await coordinator.add_lesson(admin, course_id, title="Zero", requested_order=0)

    @pytest.mark.asyncio
    async def test_unknown_course_raises_not_found(self, coordinator, admin) -> None:
        with pytest.raises(CourseNotFound):
            await coordinator.add_lesson(admin, uuid.uuid4(), title="Orphan")

    @pytest.mark.asyncio
    async def test_learner_cannot_add_lessons(
        self, coordinator, course_service, admin, learner
    ) -> None:
        course_id = await make_course(course_service, admin)

        with pytest.raises(PermissionDenied):
            await coordinator.add_lesson(learner, course_id, title="Sneaky")


class TestUpdateAndRemoveLesson:
    """Test suite for update_lesson() and remove_lesson()."""

    @pytest.mark.asyncio
    async def test_update_changes_fields_not_order(
        self, coordinator, course_service, admin
    ) -> None:
        course_id = await make_course(course_service, admin)
        (lesson,) = await make_lessons(coordinator, admin, course_id, ["Draft title"])

        updated = await coordinator.update_lesson(
            admin, lesson.id, title="Final title", body="Content"
        )

        assert updated.title == "Final title"
        assert updated.body == "Content"
        assert updated.order == 1

    @pytest.mark.asyncio
    async def test_update_unknown_lesson_raises(self, coordinator, admin) -> None:
        with pytest.raises(LessonNotFound):
            await coordinator.update_lesson(admin, uuid.uuid4(), title="Nope")

    @pytest.mark.asyncio
    async def test_remove_leaves_gap(
        self, test_async_db, coordinator, course_service, admin
    ) -> None:
        # Arrange
        course_id = await make_course(course_service, admin)
        a, b, c = await make_lessons(coordinator, admin, course_id, ["A", "B", "C"])

        # Act
        await coordinator.remove_lesson(admin, b.id)

        # Assert
        assert await orders_by_id(test_async_db, course_id) == {a.id: 1, c.id: 3}
        appended = await coordinator.add_lesson(admin, course_id, title="D")
        assert appended.order == 4

    @pytest.mark.asyncio
    async def test_remove_deletes_lesson_completions(
        self, test_async_db, coordinator, course_service, admin, learner
    ) -> None:
        # Arrange
        course_id = await make_course(course_service, admin)
        a, b = await make_lessons(coordinator, admin, course_id, ["A", "B"])
        await coordinator.publish_course(admin, course_id)
        await coordinator.enroll(learner, course_id)
        await coordinator.complete_lesson(learner, a.id)

        # Act
        await coordinator.remove_lesson(admin, a.id)

        # Assert
        result = await test_async_db.execute(
            select(CompletionModel).where(CompletionModel.lesson_id == a.id)
        )
        assert result.scalars().all() == []
        progress = await coordinator.course_progress(learner, course_id)
        assert progress.total_lessons == 1
        assert progress.percent_complete == 0


class TestReorderLessons:
    """Test suite for CurriculumCoordinator.reorder_lessons()."""

    @pytest.mark.asyncio
    async def test_reorder_assigns_dense_positions(
        self, test_async_db, coordinator, course_service, admin
    ) -> None:
        # Arrange
        course_id = await make_course(course_service, admin)
        a, b, c = await make_lessons(coordinator, admin, course_id, ["A", "B", "C"])

        # Act
        lessons = await coordinator.reorder_lessons(admin, course_id, [c.id, a.id, b.id])

        # Assert
        assert [lesson.id for lesson in lessons] == [c.id, a.id, b.id]
        assert [lesson.order for lesson in lessons] == [1, 2, 3]
        assert await orders_by_id(test_async_db, course_id) == {c.id: 1, a.id: 2, b.id: 3}

    @pytest.mark.asyncio
    async def test_reorder_closes_gaps(
        self, test_async_db, coordinator, course_service, admin
    ) -> None:
        course_id = await make_course(course_service, admin)
        a = await coordinator.add_lesson(admin, course_id, title="A", requested_order=2)
        b = await coordinator.add_lesson(admin, course_id, title="B", requested_order=7)

        await coordinator.reorder_lessons(admin, course_id, [b.id, a.id])

        assert await orders_by_id(test_async_db, course_id) == {b.id: 1, a.id: 2}

    @pytest.mark.asyncio
    async def test_swapping_adjacent_lessons_keeps_orders_unique(
        self, test_async_db, coordinator, course_service, admin
    ) -> None:
        course_id = await make_course(course_service, admin)
        a, b = await make_lessons(coordinator, admin, course_id, ["A", "B"])

        await coordinator.reorder_lessons(admin, course_id, [b.id, a.id])
        await coordinator.reorder_lessons(admin, course_id, [a.id, b.id])

        assert await orders_by_id(test_async_db, course_id) == {a.id: 1, b.id: 2}

    @pytest.mark.asyncio
    async def test_invalid_reorder_leaves_orders_unchanged(
        self, test_async_db, coordinator, course_service, admin
    ) -> None:
        # Arrange
        course_id = await make_course(course_service, admin)
        a_id, _, c_id = [lesson.id for lesson in await make_lessons(coordinator, admin, course_id, ["A", "B", "C"])]
        before = await orders_by_id(test_async_db, course_id)

        # Act
        with pytest.raises(InvalidReorderSet):
            await coordinator.reorder_lessons(admin, course_id, [c_id, a_id])
        with pytest.raises(InvalidReorderSet):
            await coordinator.reorder_lessons(admin, course_id, [c_id, a_id, uuid.uuid4()])
        with pytest.raises(InvalidReorderSet):
            await coordinator.reorder_lessons(admin, course_id, [c_id, c_id, a_id])

        # Assert
        assert await orders_by_id(test_async_db, course_id) == before

    @pytest.mark.asyncio
    async def test_failed_batch_write_rolls_back_every_order(
        self, test_async_db, coordinator, course_service, admin, monkeypatch
    ) -> None:
        # Arrange
        course_id = await make_course(course_service, admin)
        a_id, b_id, c_id = [
            lesson.id for lesson in await make_lessons(coordinator, admin, course_id, ["A", "B", "C"])
        ]
        original_execute = test_async_db.execute
        updates_seen = 0

        async def fail_on_second_update(statement, *args, **kwargs):
            # First UPDATE parks rows on negative orders; the next one fails
            nonlocal updates_seen
            if isinstance(statement, Update):
                updates_seen += 1
                if updates_seen == 2:
                    raise OperationalError("UPDATE lessons", {}, Exception("disk I/O error"))
            return await original_execute(statement, *args, **kwargs)

        monkeypatch.setattr(test_async_db, "execute", fail_on_second_update)

        # Act
        with pytest.raises(PersistenceError) as exc_info:
            await coordinator.reorder_lessons(admin, course_id, [c_id, a_id, b_id])

        # Assert
        assert exc_info.value.details["operation"] == "reorder_lessons"
        assert isinstance(exc_info.value.__cause__, OperationalError)
        assert updates_seen == 2
        assert await orders_by_id(test_async_db, course_id) == {a_id: 1, b_id: 2, c_id: 3}

    @pytest.mark.asyncio
    async def test_list_lessons_reflects_reorder(
        self, coordinator, course_service, admin
    ) -> None:
        course_id = await make_course(course_service, admin)
        a, b, c = await make_lessons(coordinator, admin, course_id, ["A", "B", "C"])

        await coordinator.reorder_lessons(admin, course_id, [b.id, c.id, a.id])
        lessons = await coordinator.list_lessons(admin, course_id)

        assert [lesson.title for lesson in lessons] == ["B", "C", "A"]


class TestPublication:
    """Test suite for publish_course() and unpublish_course()."""

    @pytest.mark.asyncio
    async def test_empty_course_cannot_be_published(
        self, coordinator, course_service, admin
    ) -> None:
        course_id = await make_course(course_service, admin)

        with pytest.raises(PublishPrecondition):
            await coordinator.publish_course(admin, course_id)

        course = await course_service.get_course(admin, course_id)
        assert course["status"] == CourseStatus.DRAFT

    @pytest.mark.asyncio
    async def test_publish_then_unpublish(
        self, coordinator, course_service, admin
    ) -> None:
        course_id = await make_course(course_service, admin)
        await make_lessons(coordinator, admin, course_id, ["A"])

        published = await coordinator.publish_course(admin, course_id)
        assert published.status == CourseStatus.PUBLISHED

        drafted = await coordinator.unpublish_course(admin, course_id)
        assert drafted.status == CourseStatus.DRAFT

        again = await coordinator.unpublish_course(admin, course_id)
        assert again.status == CourseStatus.DRAFT

    @pytest.mark.asyncio
    async def test_learner_cannot_publish(
        self, coordinator, course_service, admin, learner
    ) -> None:
        course_id = await make_course(course_service, admin)
        await make_lessons(coordinator, admin, course_id, ["A"])

        with pytest.raises(PermissionDenied):
            await coordinator.publish_course(learner, course_id)


class TestEnrollment:
    """Test suite for CurriculumCoordinator.enroll()."""

    @pytest.mark.asyncio
    async def test_draft_course_is_not_enrollable(
        self, coordinator, course_service, admin, learner
    ) -> None:
        course_id = await make_course(course_service, admin)

        with pytest.raises(CourseNotAvailable):
            await coordinator.enroll(learner, course_id)

    @pytest.mark.asyncio
    async def test_enroll_is_idempotent(
        self, test_async_db, coordinator, course_service, admin, learner
    ) -> None:
        # Arrange
        course_id = await make_course(course_service, admin)
        await make_lessons(coordinator, admin, course_id, ["A"])
        await coordinator.publish_course(admin, course_id)

        # Act
        first, first_created = await coordinator.enroll(learner, course_id)
        second, second_created = await coordinator.enroll(learner, course_id)

        # Assert
        assert first_created is True
        assert second_created is False
        assert first.id == second.id
        result = await test_async_db.execute(
            select(EnrollmentModel).where(EnrollmentModel.course_id == course_id)
        )
        assert len(result.scalars().all()) == 1

    @pytest.mark.asyncio
    async def test_enroll_that_loses_insert_race_returns_existing(
        self, test_async_db, coordinator, learner, published_course, monkeypatch
    ) -> None:
        # Arrange: the pair is already stored, but this request read before it was
        course_id, _ = published_course
        existing, _ = await coordinator.enroll(learner, course_id)
        existing_id = existing.id
        committed_read = enrollment_crud.get_for
        reads = 0

        async def read_before_other_commit(session, learner_id, course_id):
            nonlocal reads
            reads += 1
            if reads == 1:
                return None
            return await committed_read(session, learner_id, course_id)

        monkeypatch.setattr(enrollment_crud, "get_for", read_before_other_commit)

        # Act
        enrollment, created = await coordinator.enroll(learner, course_id)

        # Assert
        assert created is False
        assert enrollment.id == existing_id
        result = await test_async_db.execute(
            select(EnrollmentModel).where(EnrollmentModel.course_id == course_id)
        )
        assert len(result.scalars().all()) == 1


class TestCompletionAndProgress:
    """Test suite for complete_lesson(), course_progress() and lesson_neighbors()."""

    @pytest.mark.asyncio
    async def test_completion_requires_enrollment(
        self, coordinator, learner, published_course
    ) -> None:
        _, lessons = published_course

        with pytest.raises(NotEnrolled):
            await coordinator.complete_lesson(learner, lessons[0].id)

    @pytest.mark.asyncio
    async def test_progress_boundaries(
        self, coordinator, learner, published_course
    ) -> None:
        # Arrange
        course_id, lessons = published_course
        await coordinator.enroll(learner, course_id)

        # Act / Assert
        assert (await coordinator.course_progress(learner, course_id)).percent_complete == 0

        await coordinator.complete_lesson(learner, lessons[0].id)
        progress = await coordinator.course_progress(learner, course_id)
        assert progress.percent_complete == 25
        assert progress.next_lesson_id == lessons[1].id

        for lesson in lessons[1:]:
            await coordinator.complete_lesson(learner, lesson.id)
        progress = await coordinator.course_progress(learner, course_id)
        assert progress.percent_complete == 100
        assert progress.next_lesson_id is None

    @pytest.mark.asyncio
    async def test_lessons_complete_in_any_order(
        self, coordinator, learner, published_course
    ) -> None:
        course_id, lessons = published_course
        await coordinator.enroll(learner, course_id)

        result = await coordinator.complete_lesson(learner, lessons[3].id)

        assert result.created is True
        progress = await coordinator.course_progress(learner, course_id)
        assert progress.next_lesson_id == lessons[0].id

    @pytest.mark.asyncio
    async def test_complete_is_idempotent(
        self, test_async_db, coordinator, learner, published_course
    ) -> None:
        course_id, lessons = published_course
        await coordinator.enroll(learner, course_id)

        first = await coordinator.complete_lesson(learner, lessons[0].id)
        second = await coordinator.complete_lesson(learner, lessons[0].id)

        assert first.created is True
        assert second.created is False
        assert second.completion.id == first.completion.id
        result = await test_async_db.execute(
            select(CompletionModel).where(CompletionModel.learner_id == learner.user_id)
        )
        assert len(result.scalars().all()) == 1

    @pytest.mark.asyncio
    async def test_complete_that_loses_insert_race_returns_existing(
        self, test_async_db, coordinator, learner, published_course, monkeypatch
    ) -> None:
        # Arrange
        course_id, lessons = published_course
        lesson_id = lessons[0].id
        await coordinator.enroll(learner, course_id)
        first = await coordinator.complete_lesson(learner, lesson_id)
        first_id = first.completion.id
        committed_read = completion_crud.get_for
        reads = 0

        async def read_before_other_commit(session, learner_id, lesson_id):
            nonlocal reads
            reads += 1
            if reads == 1:
                return None
            return await committed_read(session, learner_id, lesson_id)

        monkeypatch.setattr(completion_crud, "get_for", read_before_other_commit)

        # Act
        result = await coordinator.complete_lesson(learner, lesson_id)

        # Assert
        assert result.created is False
        assert result.completion.id == first_id
        assert reads == 2
        rows = await test_async_db.execute(
            select(CompletionModel).where(CompletionModel.learner_id == learner.user_id)
        )
        assert len(rows.scalars().all()) == 1

    @pytest.mark.asyncio
    async def test_progress_is_per_learner(
        self, coordinator, learner, other_learner, published_course
    ) -> None:
        course_id, lessons = published_course
        await coordinator.enroll(learner, course_id)
        await coordinator.enroll(other_learner, course_id)

        await coordinator.complete_lesson(learner, lessons[0].id)

        assert (await coordinator.course_progress(other_learner, course_id)).percent_complete == 0

    @pytest.mark.asyncio
    async def test_get_lesson_reports_completion_flag(
        self, coordinator, learner, published_course
    ) -> None:
        course_id, lessons = published_course
        await coordinator.enroll(learner, course_id)
        await coordinator.complete_lesson(learner, lessons[1].id)

        _, done = await coordinator.get_lesson(learner, lessons[1].id)
        _, not_done = await coordinator.get_lesson(learner, lessons[2].id)

        assert done is True
        assert not_done is False

    @pytest.mark.asyncio
    async def test_neighbors_follow_course_order(
        self, coordinator, admin, learner, published_course
    ) -> None:
        # Arrange
        course_id, (a, b, c, d) = published_course
        await coordinator.reorder_lessons(admin, course_id, [d.id, c.id, b.id, a.id])

        # Act / Assert
        assert await coordinator.lesson_neighbors(learner, d.id) == (None, c.id)
        assert await coordinator.lesson_neighbors(learner, b.id) == (c.id, a.id)
        assert await coordinator.lesson_neighbors(learner, a.id) == (b.id, None)

    @pytest.mark.asyncio
    async def test_learner_cannot_read_unpublished_course(
        self, coordinator, admin, learner, published_course
    ) -> None:
        course_id, lessons = published_course
        first_id = lessons[0].id
        await coordinator.unpublish_course(admin, course_id)

        with pytest.raises(CourseNotAvailable):
            await coordinator.list_lessons(learner, course_id)
        with pytest.raises(CourseNotAvailable):
            await coordinator.lesson_neighbors(learner, first_id)
        with pytest.raises(CourseNotAvailable):
            await coordinator.course_progress(learner, course_id)

    @pytest.mark.asyncio
    async def test_empty_course_progress_is_zero(
        self, coordinator, course_service, admin
    ) -> None:
        course_id = await make_course(course_service, admin)

        progress = await coordinator.course_progress(admin, course_id)

        assert progress.total_lessons == 0
        assert progress.percent_complete == 0
