"""
Lesson ordering policy.

Assigns and validates lesson order values so that no two lessons of a course
ever share an order at rest. Plain inserts append after the current maximum;
explicit reorders always renormalize to a dense 1..N range instead of trusting
caller-submitted numbers.

Dependencies: None (pure domain layer)
System role: Ordering invariant for course lesson sequences
"""

from collections import Counter
from typing import Hashable, Iterable, Protocol, Sequence, TypeVar

from curriculum.core.exceptions import InvalidReorderSet

IdT = TypeVar("IdT", bound=Hashable)


class Ordered(Protocol):
    """Anything carrying an integer lesson order."""

    order: int


OrderedT = TypeVar("OrderedT", bound=Ordered)


class OrderingPolicy:
    """Pure rules for lesson order values within one course."""

    @staticmethod
    def next_order_for_insert(existing_orders: Iterable[int]) -> int:
        """
        Order value for a lesson appended to the course.

        Args:
            existing_orders: Orders currently used in the course

        Returns:
            int: max(existing) + 1, or 1 for an empty course
        """
        return max(existing_orders, default=0) + 1

    @staticmethod
    def apply_reorder(
        current_sequence: Sequence[IdT],
        new_sequence: Sequence[IdT],
    ) -> dict[IdT, int]:
        """
        Compute dense order assignments for a reordered sequence.

        Args:
            current_sequence: Lesson ids of the course as currently persisted
            new_sequence: Desired lesson ids, first to last

        Returns:
            dict: lesson id -> 1-indexed position in new_sequence

        Raises:
            InvalidReorderSet: new_sequence is not a permutation of current_sequence
        """
        current = set(current_sequence)
        requested = set(new_sequence)
        repeated = [item for item, count in Counter(new_sequence).items() if count > 1]
        missing = [item for item in current_sequence if item not in requested]
        unexpected = [item for item in new_sequence if item not in current]

        if repeated or missing or unexpected or len(new_sequence) != len(current_sequence):
            raise InvalidReorderSet(
                "Reorder sequence must contain every lesson of the course exactly once",
                missing=[str(item) for item in missing],
                unexpected=[str(item) for item in unexpected + repeated],
                details={
                    "expected_count": len(current_sequence),
                    "received_count": len(new_sequence),
                },
            )

        return {item: position for position, item in enumerate(new_sequence, start=1)}

    @staticmethod
    def validate_sequence(orders: Iterable[int]) -> bool:
        """Return True iff all order values are pairwise distinct."""
        seen: set[int] = set()
        for order in orders:
            if order in seen:
                return False
            seen.add(order)
        return True

    @staticmethod
    def sort_lessons(lessons: Iterable[OrderedT]) -> list[OrderedT]:
        """Return lessons in course sequence (ascending order value)."""
        return sorted(lessons, key=lambda lesson: lesson.order)
