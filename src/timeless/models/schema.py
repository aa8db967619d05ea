"""
Database schema definitions for timeless application.

This module contains SQL schema definitions for the memories collection.
"""

MEMORIES_TABLE_SCHEMA = """
CREATE TABLE IF NOT EXISTS memories (
    id TEXT PRIMARY KEY,
    title TEXT NOT NULL,
    description TEXT NOT NULL,
    image_urls TEXT[] NOT NULL,
    memory_date DATE NOT NULL,
    created_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,
    updated_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP
);
"""

MEMORIES_TABLE_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_memories_memory_date ON memories(memory_date);",
]

ALL_SCHEMA_STATEMENTS = [MEMORIES_TABLE_SCHEMA] + MEMORIES_TABLE_INDEXES

# Columns every memories table must carry, in select order
MEMORY_COLUMNS = (
    "id",
    "title",
    "description",
    "image_urls",
    "memory_date",
    "created_at",
    "updated_at",
)


def get_schema_statements() -> list[str]:
    """
    Get all database schema creation statements.

    Returns:
        List of SQL statements to create tables and indexes
    """
    return ALL_SCHEMA_STATEMENTS


def validate_schema_compatibility() -> bool:
    """
    Check that every Memory wire field appears in the table schema.

    Returns:
        True if schema is compatible, False otherwise
    """
    schema_lower = MEMORIES_TABLE_SCHEMA.lower()
    return all(column in schema_lower for column in MEMORY_COLUMNS)
