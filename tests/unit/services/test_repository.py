"""
Unit tests for the DuckDB memory repository.
"""

from datetime import date
from unittest.mock import MagicMock

import duckdb
import pytest

from timeless.models.database import create_database
from timeless.models.memory import MemoryDraft
from timeless.services.repository import MemoryRepository
from timeless.ui.handlers.error import DatabaseError


@pytest.fixture
def repository():
    db_manager = create_database(":memory:")
    yield MemoryRepository(db_manager)
    db_manager.close()


def _draft(title: str, memory_date: date, images: list[str] | None = None) -> MemoryDraft:
    return MemoryDraft(
        title=title,
        description=f"{title} description",
        date=memory_date,
        images=images if images is not None else [f"https://assets.example.com/{title}.jpg"],
    )


class TestMemoryRepository:
    """Test cases for MemoryRepository."""

    def test_list_all_empty(self, repository):
        assert repository.list_all() == []
        assert repository.count() == 0

    def test_create_then_list(self, repository):
        repository.create(_draft("Beach", date(2025, 7, 30), ["https://a/imgA.jpg", "https://a/imgB.jpg"]))

        memories = repository.list_all()

        assert len(memories) == 1
        memory = memories[0]
        assert memory.title == "Beach"
        assert memory.description == "Beach description"
        assert memory.date == date(2025, 7, 30)
        assert memory.images == ["https://a/imgA.jpg", "https://a/imgB.jpg"]
        assert memory.created_at is not None
        assert memory.created_at == memory.updated_at

    def test_list_all_sorted_by_memory_date(self, repository):
        repository.create(_draft("later", date(2025, 8, 1)))
        repository.create(_draft("earliest", date(2024, 9, 1)))
        repository.create(_draft("middle", date(2025, 1, 15)))

        titles = [memory.title for memory in repository.list_all()]

        assert titles == ["earliest", "middle", "later"]

    def test_get(self, repository):
        repository.create(_draft("Beach", date(2025, 7, 30)))
        memory_id = repository.list_all()[0].id

        assert repository.get(memory_id).title == "Beach"
        assert repository.get("missing") is None

    def test_update_replaces_fields(self, repository):
        repository.create(_draft("Beach", date(2025, 7, 30), ["https://a/1.jpg", "https://a/2.jpg"]))
        original = repository.list_all()[0]

        repository.update(original.id, _draft("Mountains", date(2025, 8, 2), ["https://a/2.jpg", "https://a/3.jpg"]))

        updated = repository.get(original.id)
        assert updated.title == "Mountains"
        assert updated.date == date(2025, 8, 2)
        assert updated.images == ["https://a/2.jpg", "https://a/3.jpg"]
        assert updated.created_at == original.created_at
        assert updated.updated_at >= original.updated_at
        assert repository.count() == 1

    def test_update_missing_memory(self, repository):
        with pytest.raises(DatabaseError) as exc_info:
            repository.update("missing", _draft("x", date(2025, 1, 1)))

        assert exc_info.value.code == "memory_not_found"

    def test_create_with_no_images(self, repository):
        repository.create(_draft("Empty", date(2025, 1, 1), []))

        assert repository.list_all()[0].images == []

    def test_query_failure_is_wrapped(self):
        db_manager = MagicMock()
        db_manager.execute_query.side_effect = duckdb.Error("connection lost")
        repository = MemoryRepository(db_manager)

        with pytest.raises(DatabaseError) as exc_info:
            repository.list_all()

        assert exc_info.value.code == "list_failed"
        assert isinstance(exc_info.value.original_exception, duckdb.Error)

    def test_create_failure_keeps_image_urls_in_details(self):
        db_manager = MagicMock()
        db_manager.execute_query.side_effect = duckdb.Error("constraint violated")
        repository = MemoryRepository(db_manager)

        with pytest.raises(DatabaseError) as exc_info:
            repository.create(_draft("Beach", date(2025, 7, 30), ["https://a/1.jpg"]))

        assert exc_info.value.details["image_urls"] == ["https://a/1.jpg"]
