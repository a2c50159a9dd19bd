"""
Base repository class for database access.

Provides a common abstraction layer for all repositories, encapsulating
Supabase client access and providing shared utilities for data operations.
"""

from typing import Any, Generic, Optional, TypeVar
from supabase import Client


T = TypeVar("T")

# PostgREST error code for a unique-constraint violation
UNIQUE_VIOLATION = "23505"


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Provides common functionality for database operations:
    - Supabase client access via self._db
    - Generic type parameter for model type hints

    Subclasses implement domain-specific data access methods and handle
    dict-to-Pydantic model mapping internally. Repositories are bound to
    the client of one portal session, so every query runs under that
    user's Row Level Security.

    Example:
        class StudentRepository(BaseRepository[StudentRecord]):
            def get_by_id(self, student_id: str) -> Optional[StudentRecord]:
                result = self._db.table("students").select("*").eq("id", student_id).execute()
                row = self._first(result)
                return StudentRecord(**row) if row else None
    """

    def __init__(self, db: Client) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Supabase client instance for database operations.
        """
        self._db = db

    @staticmethod
    def _first(result: Any) -> Optional[dict[str, Any]]:
        """Return the first row of a query result, or None."""
        if result is None or not result.data:
            return None
        return result.data[0]

    @staticmethod
    def _rows(result: Any) -> list[dict[str, Any]]:
        """Return all rows of a query result."""
        if result is None or not result.data:
            return []
        return list(result.data)
