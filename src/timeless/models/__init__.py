"""
Models module for timeless application.

This module contains data models and schemas:
- Memory / MemoryDraft: A dated photo memory and its editable fields
- Database schemas and table definitions
- DatabaseManager: Database connection and schema management
"""

from .database import DatabaseManager, create_database
from .memory import Memory, MemoryDraft
from .schema import get_schema_statements, validate_schema_compatibility

__all__ = [
    "Memory",
    "MemoryDraft",
    "DatabaseManager",
    "create_database",
    "get_schema_statements",
    "validate_schema_compatibility",
]
