"""
Base repository class for Supabase-backed stores.

Wraps the client and the table name so that subclasses only deal with
queries and row mapping.
"""

from typing import TypeVar, Generic
from supabase import Client


T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base class for Supabase repositories.

    Subclasses set ``table_name`` (or pass ``table`` explicitly) and map
    rows to Pydantic models internally.

    Example:
        class UserRepository(BaseRepository[UserRecord]):
            table_name = "users"

            def find_by_id(self, user_id: str) -> Optional[UserRecord]:
                result = self._table().select("*").eq("id", user_id).execute()
                return self._map(result.data[0]) if result.data else None
    """

    table_name: str = ""

    def __init__(self, db: Client, table: str | None = None) -> None:
        """
        Args:
            db: Supabase client instance for database operations.
            table: Overrides ``table_name`` (configurable table names).
        """
        self._db = db
        if table:
            self.table_name = table

    def _table(self):
        """Start a query builder on this repository's table."""
        return self._db.table(self.table_name)
