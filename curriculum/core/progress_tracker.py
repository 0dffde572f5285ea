"""
Learner progress tracking.

Derives a learner's completion state over a course's ordered lesson sequence
and answers lesson-to-lesson navigation. Lessons are navigable in any order;
completing one does not gate or unlock another.

Dependencies: curriculum.core
System role: Progress computation and idempotent lesson completion
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Generic, Hashable, Iterable, Protocol, Sequence, TypeVar
from uuid import UUID

from curriculum.core.exceptions import LessonNotInSequence
from curriculum.core.ordering_policy import OrderingPolicy

logger = logging.getLogger(__name__)

IdT = TypeVar("IdT", bound=Hashable)
CompletionT = TypeVar("CompletionT")


class CompletionStore(Protocol[CompletionT]):
    """Persistence needed to record completions."""

    async def find(self, learner_id: UUID, lesson_id: UUID) -> CompletionT | None: ...

    async def add(self, learner_id: UUID, lesson_id: UUID) -> CompletionT: ...


class SequencedLesson(Protocol):
    """Lesson fields the progress summary reads."""

    id: Any
    title: str
    order: int


@dataclass(frozen=True)
class CompletionResult(Generic[CompletionT]):
    """Outcome of completing a lesson; created is False on a repeat."""

    completion: CompletionT
    created: bool


@dataclass(frozen=True)
class LessonProgress:
    """Completion flag of one lesson in the sequence."""

    lesson_id: Any
    title: str
    order: int
    completed: bool


@dataclass(frozen=True)
class CourseProgress:
    """Snapshot of a learner's progress through one course."""

    total_lessons: int
    completed_lessons: int
    percent_complete: int
    next_lesson_id: Any | None = None
    lessons: list[LessonProgress] = field(default_factory=list)


class ProgressTracker:
    """Progress rules over an ordered lesson sequence."""

    @staticmethod
    def percent_complete(sequence: Sequence[IdT], completed_ids: Iterable[IdT]) -> int:
        """
        Percentage of the sequence the learner has completed.

        Completed ids outside the sequence (e.g. deleted lessons) are ignored.

        Args:
            sequence: Lesson ids in course order
            completed_ids: Lesson ids the learner has completed

        Returns:
            int: round(100 * |completed ∩ sequence| / |sequence|), 0 for an empty sequence
        """
        if not sequence:
            return 0
        done = set(completed_ids) & set(sequence)
        return round(100 * len(done) / len(sequence))

    @staticmethod
    def neighbors(sequence: Sequence[IdT], current_id: IdT) -> tuple[IdT | None, IdT | None]:
        """
        Previous and next lesson around current_id.

        Args:
            sequence: Lesson ids in course order
            current_id: Lesson being viewed

        Returns:
            (previous, next); None at either boundary

        Raises:
            LessonNotInSequence: current_id is not in the sequence
        """
        try:
            index = list(sequence).index(current_id)
        except ValueError:
            raise LessonNotInSequence(str(current_id)) from None

        previous = sequence[index - 1] if index > 0 else None
        following = sequence[index + 1] if index + 1 < len(sequence) else None
        return previous, following

    @staticmethod
    def summarize(
        lessons: Iterable[SequencedLesson],
        completed_ids: Iterable[Any],
    ) -> CourseProgress:
        """
        Build a progress snapshot for a course.

        Args:
            lessons: Lessons of the course (any order; sorted here)
            completed_ids: Lesson ids the learner has completed

        Returns:
            CourseProgress with per-lesson flags and the first incomplete lesson
        """
        ordered = OrderingPolicy.sort_lessons(lessons)
        sequence = [lesson.id for lesson in ordered]
        done = set(completed_ids) & set(sequence)

        items = [
            LessonProgress(
                lesson_id=lesson.id,
                title=lesson.title,
                order=lesson.order,
                completed=lesson.id in done,
            )
            for lesson in ordered
        ]
        next_lesson_id = next((item.lesson_id for item in items if not item.completed), None)

        return CourseProgress(
            total_lessons=len(sequence),
            completed_lessons=len(done),
            percent_complete=ProgressTracker.percent_complete(sequence, done),
            next_lesson_id=next_lesson_id,
            lessons=items,
        )

    @staticmethod
    async def complete_lesson(
        store: CompletionStore[CompletionT],
        learner_id: UUID,
        lesson_id: UUID,
    ) -> CompletionResult[CompletionT]:
        """
        Mark a lesson complete for a learner.

        Idempotent: a repeat call returns the existing record and creates nothing.

        Args:
            store: Completion persistence
            learner_id: Learner UUID
            lesson_id: Lesson UUID

        Returns:
            CompletionResult with the completion record and whether it was created
        """
        existing = await store.find(learner_id, lesson_id)
        if existing is not None:
            logger.debug(
                "Lesson already completed",
                extra={"learner_id": str(learner_id), "lesson_id": str(lesson_id)},
            )
            return CompletionResult(completion=existing, created=False)

        completion = await store.add(learner_id, lesson_id)
        return CompletionResult(completion=completion, created=True)
