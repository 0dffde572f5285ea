"""
Test suite for BaseCRUD generic database operations.

Tests create, read, count, update, delete and exists against a mocked
AsyncSession, verifying the session calls each operation makes.

System role: Verification of generic database layer foundation
"""

import uuid
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from curriculum.boundary.db.CRUD.base_crud import BaseCRUD
from curriculum.boundary.db.models import CourseModel


@pytest.fixture
def base_crud() -> BaseCRUD:
    """Provide BaseCRUD instance over CourseModel."""
    return BaseCRUD(CourseModel)


@pytest.fixture
def mock_session() -> AsyncSession:
    """Provide mock async database session."""
    return AsyncMock(spec=AsyncSession)


@pytest.fixture
def sample_id() -> uuid.UUID:
    """Provide sample UUID for testing."""
    return uuid.uuid4()


def scalar_result(value: Any) -> MagicMock:
    result = MagicMock()
    result.scalar_one_or_none = MagicMock(return_value=value)
    result.scalar_one = MagicMock(return_value=value)
    return result


class TestBaseCRUDCreate:
    """Test suite for BaseCRUD.create() method."""

    @pytest.mark.asyncio
    async def test_create_should_add_instance_with_fields(
        self, base_crud: BaseCRUD, mock_session: AsyncSession
    ) -> None:
        """Test create builds the model from kwargs and adds it to the session."""
        # Arrange
        mock_session.flush = AsyncMock()
        mock_session.refresh = AsyncMock()

        # Act
        course = await base_crud.create(mock_session, title="Geometry")

        # Assert
        mock_session.add.assert_called_once_with(course)
        assert isinstance(course, CourseModel)
        assert course.title == "Geometry"

    @pytest.mark.asyncio
    async def test_create_should_flush_before_refresh(
        self, base_crud: BaseCRUD, mock_session: AsyncSession
    ) -> None:
        """Test flush is called before refresh to ensure ID generation."""
        # Arrange
        call_order = []

        async def flush_effect() -> None:
            call_order.append("flush")

        async def refresh_effect(obj: Any) -> None:
            call_order.append("refresh")

        mock_session.flush = AsyncMock(side_effect=flush_effect)
        mock_session.refresh = AsyncMock(side_effect=refresh_effect)

        # Act
        await base_crud.create(mock_session, title="Geometry")

        # Assert
        assert call_order == ["flush", "refresh"]


class TestBaseCRUDReads:
    """Test suite for get_by_id(), get_all() and count()."""

    @pytest.mark.asyncio
    async def test_get_by_id_should_return_model_when_found(
        self, base_crud: BaseCRUD, mock_session: AsyncSession, sample_id: uuid.UUID
    ) -> None:
        # Arrange
        instance = MagicMock(id=sample_id)
        mock_session.execute = AsyncMock(return_value=scalar_result(instance))

        # Act
        result = await base_crud.get_by_id(mock_session, sample_id)

        # Assert
        assert result is instance
        mock_session.execute.assert_called_once()

    @pytest.mark.asyncio
    async def test_get_by_id_should_return_none_when_not_found(
        self, base_crud: BaseCRUD, mock_session: AsyncSession, sample_id: uuid.UUID
    ) -> None:
        mock_session.execute = AsyncMock(return_value=scalar_result(None))

        assert await base_crud.get_by_id(mock_session, sample_id) is None

    @pytest.mark.asyncio
    async def test_get_all_should_return_all_records(
        self, base_crud: BaseCRUD, mock_session: AsyncSession
    ) -> None:
        # Arrange
        instances = [MagicMock(), MagicMock()]
        mock_scalars = MagicMock()
        mock_scalars.all = MagicMock(return_value=instances)
        mock_result = MagicMock()
        mock_result.scalars = MagicMock(return_value=mock_scalars)
        mock_session.execute = AsyncMock(return_value=mock_result)

        # Act
        result = await base_crud.get_all(mock_session, limit=10, offset=20)

        # Assert
        assert result == instances
        mock_session.execute.assert_called_once()

    @pytest.mark.asyncio
    async def test_count_should_return_integer(
        self, base_crud: BaseCRUD, mock_session: AsyncSession
    ) -> None:
        mock_session.execute = AsyncMock(return_value=scalar_result(7))

        assert await base_crud.count(mock_session) == 7


class TestBaseCRUDUpdateByID:
    """Test suite for BaseCRUD.update_by_id() method."""

    @pytest.mark.asyncio
    async def test_update_by_id_should_return_updated_model_when_found(
        self, base_crud: BaseCRUD, mock_session: AsyncSession, sample_id: uuid.UUID
    ) -> None:
        # Arrange
        updated = MagicMock(id=sample_id)
        mock_session.execute = AsyncMock(return_value=scalar_result(updated))

        # Act
        result = await base_crud.update_by_id(mock_session, sample_id, title="Renamed")

        # Assert
        assert result is updated

    @pytest.mark.asyncio
    async def test_update_by_id_should_return_none_when_not_found(
        self, base_crud: BaseCRUD, mock_session: AsyncSession, sample_id: uuid.UUID
    ) -> None:
        mock_session.execute = AsyncMock(return_value=scalar_result(None))

        assert await base_crud.update_by_id(mock_session, sample_id, title="Renamed") is None


class TestBaseCRUDDeleteAndExists:
    """Test suite for delete_by_id() and exists()."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("rowcount, expected", [(1, True), (0, False)])
    async def test_delete_by_id_reports_rowcount(
        self,
        base_crud: BaseCRUD,
        mock_session: AsyncSession,
        sample_id: uuid.UUID,
        rowcount: int,
        expected: bool,
    ) -> None:
        # Arrange
        mock_result = MagicMock()
        mock_result.rowcount = rowcount
        mock_session.execute = AsyncMock(return_value=mock_result)

        # Act
        result = await base_crud.delete_by_id(mock_session, sample_id)

        # Assert
        assert result is expected
        mock_session.execute.assert_called_once()

    @pytest.mark.asyncio
    async def test_exists_should_return_true_when_id_found(
        self, base_crud: BaseCRUD, mock_session: AsyncSession, sample_id: uuid.UUID
    ) -> None:
        mock_session.scalar = AsyncMock(return_value=sample_id)

        assert await base_crud.exists(mock_session, sample_id) is True

    @pytest.mark.asyncio
    async def test_exists_should_return_false_when_id_not_found(
        self, base_crud: BaseCRUD, mock_session: AsyncSession, sample_id: uuid.UUID
    ) -> None:
        mock_session.scalar = AsyncMock(return_value=None)

        assert await base_crud.exists(mock_session, sample_id) is False
