"""
Persistence collaborator contract

The import pipeline never owns a database. It borrows a store per call and
needs two operations: probe for an existing row by natural key, and insert.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple


@dataclass
class InsertResult:
    """Outcome of one insert: an id, or a reason it failed."""
    id: Optional[str] = None
    error_reason: Optional[str] = None
    conflict: bool = False

    @property
    def ok(self) -> bool:
        return self.error_reason is None and not self.conflict


class RecordStore(ABC):
    """
    Abstract persistence collaborator.

    Implementations enforce `unique_keys` (table -> columns that must be
    unique when set) and report a violation as InsertResult(conflict=True),
    so a lost probe-then-insert race still counts as a duplicate.
    """

    def __init__(self, unique_keys: Optional[Mapping[str, Tuple[str, ...]]] = None):
        self.unique_keys: Dict[str, Tuple[str, ...]] = dict(unique_keys or {})

    @abstractmethod
    async def find_one(self, table: str, filters: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        """First row whose columns equal every filter value, or None."""
        pass

    @abstractmethod
    async def insert(self, table: str, row: Mapping[str, Any]) -> InsertResult:
        pass

    def conflicting_key(self, table: str, row: Mapping[str, Any], existing: Mapping[str, Any]) -> Optional[str]:
        """Unique column on which `row` collides with `existing`, if any."""
        for column in self.unique_keys.get(table, ()):
            value = row.get(column)
            if value not in (None, '') and existing.get(column) == value:
                return column
        return None
