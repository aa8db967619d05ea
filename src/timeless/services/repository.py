"""
Memory repository backed by DuckDB.

Each public operation maps to one call against the memories collection.
Image URLs are expected to be uploaded already; nothing here talks to the
asset host, so a save that fails after uploads succeeded leaves those
uploads unreferenced.
"""

from datetime import UTC, datetime

import duckdb

from timeless.ui.handlers.error import DatabaseError
from ..logging_config import get_logger, log_performance, log_user_action
from ..models.database import DatabaseManager
from ..models.memory import Memory, MemoryDraft
from ..models.schema import MEMORY_COLUMNS

logger = get_logger(__name__)

_SELECT_COLUMNS = ", ".join(MEMORY_COLUMNS)


def _utc_now() -> datetime:
    # DuckDB TIMESTAMP columns are naive; values are stored as UTC
    return datetime.now(UTC).replace(tzinfo=None)


class MemoryRepository:
    """Reads and writes memories in the ``memories`` table."""

    def __init__(self, db_manager: DatabaseManager) -> None:
        self.db_manager = db_manager

    def _row_to_memory(self, row: tuple) -> Memory:
        return Memory.from_record(dict(zip(MEMORY_COLUMNS, row)))

    def list_all(self) -> list[Memory]:
        """
        Fetch every memory, oldest memory date first.

        Returns:
            list[Memory]: All memories sorted ascending by date

        Raises:
            DatabaseError: If the query fails
        """
        start_time = datetime.now()
        try:
            rows = self.db_manager.execute_query(
                f"SELECT {_SELECT_COLUMNS} FROM memories ORDER BY memory_date ASC, created_at ASC"  # nosec B608
            )
        except duckdb.Error as e:
            raise DatabaseError(
                f"Failed to list memories: {e}",
                code="list_failed",
                details={"operation": "list_all"},
                original_exception=e,
            ) from e

        memories = [self._row_to_memory(row) for row in rows]
        duration = (datetime.now() - start_time).total_seconds()
        log_performance("list_memories", duration, count=len(memories))
        return memories

    def get(self, memory_id: str) -> Memory | None:
        """
        Fetch a single memory by id.

        Returns:
            Memory if found, None otherwise

        Raises:
            DatabaseError: If the query fails
        """
        try:
            rows = self.db_manager.execute_query(
                f"SELECT {_SELECT_COLUMNS} FROM memories WHERE id = ?", (memory_id,)  # nosec B608
            )
        except duckdb.Error as e:
            raise DatabaseError(
                f"Failed to load memory {memory_id}: {e}",
                code="get_failed",
                details={"operation": "get", "memory_id": memory_id},
                original_exception=e,
            ) from e

        return self._row_to_memory(rows[0]) if rows else None

    def create(self, draft: MemoryDraft) -> None:
        """
        Insert a new memory with a generated id.

        Raises:
            DatabaseError: If the insert fails
        """
        memory = Memory.create_new(draft, created_at=_utc_now())
        record = memory.to_record()

        try:
            self.db_manager.execute_query(
                "INSERT INTO memories (id, title, description, image_urls, memory_date, created_at, updated_at) "
                "VALUES (?, ?, ?, ?, ?, ?, ?)",
                (
                    memory.id,
                    record["title"],
                    record["description"],
                    record["image_urls"],
                    memory.date,
                    memory.created_at,
                    memory.updated_at,
                ),
            )
        except duckdb.Error as e:
            raise DatabaseError(
                f"Failed to save memory: {e}",
                code="create_failed",
                user_message="Failed to save memory. Please try again.",
                details={"operation": "create", "image_urls": record["image_urls"]},
                original_exception=e,
            ) from e

        log_user_action(
            "memory_created",
            memory_id=memory.id,
            memory_date=record["memory_date"],
            image_count=len(record["image_urls"]),
        )

    def update(self, memory_id: str, patch: MemoryDraft) -> None:
        """
        Replace title, description, date and images of an existing memory.

        Raises:
            DatabaseError: If the memory does not exist or the update fails
        """
        record = patch.to_record()

        try:
            rows = self.db_manager.execute_query(
                "UPDATE memories SET title = ?, description = ?, image_urls = ?, memory_date = ?, updated_at = ? "
                "WHERE id = ? RETURNING id",
                (
                    record["title"],
                    record["description"],
                    record["image_urls"],
                    patch.date,
                    _utc_now(),
                    memory_id,
                ),
            )
        except duckdb.Error as e:
            raise DatabaseError(
                f"Failed to update memory {memory_id}: {e}",
                code="update_failed",
                user_message="Failed to update memory. Please try again.",
                details={"operation": "update", "memory_id": memory_id},
                original_exception=e,
            ) from e

        if not rows:
            raise DatabaseError(
                f"Memory {memory_id} not found",
                code="memory_not_found",
                user_message="This memory no longer exists.",
                details={"operation": "update", "memory_id": memory_id},
            )

        log_user_action("memory_updated", memory_id=memory_id, image_count=len(record["image_urls"]))

    def count(self) -> int:
        """Number of stored memories."""
        try:
            rows = self.db_manager.execute_query("SELECT COUNT(*) FROM memories")
        except duckdb.Error as e:
            raise DatabaseError(f"Failed to count memories: {e}", original_exception=e) from e
        return int(rows[0][0]) if rows else 0
