"""
In-memory store

Process-local tables, used for dry runs and tests.
"""

import uuid
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .base import InsertResult, RecordStore


class MemoryStore(RecordStore):
    """
    Example:
        store = MemoryStore({'outreach_leads': ('contact_email',)})
        await store.insert('outreach_leads', {'contact_email': 'a@b.de'})
    """

    def __init__(self, unique_keys: Optional[Mapping[str, Tuple[str, ...]]] = None):
        super().__init__(unique_keys)
        self.tables: Dict[str, List[Dict[str, Any]]] = {}

    def rows(self, table: str) -> List[Dict[str, Any]]:
        return [dict(row) for row in self.tables.get(table, [])]

    async def find_one(self, table: str, filters: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        for row in self.tables.get(table, []):
            if all(row.get(column) == value for column, value in filters.items()):
                return dict(row)
        return None

    async def insert(self, table: str, row: Mapping[str, Any]) -> InsertResult:
        rows = self.tables.setdefault(table, [])
        for existing in rows:
            column = self.conflicting_key(table, row, existing)
            if column:
                return InsertResult(conflict=True, error_reason=f"duplicate {column}")

        stored = dict(row)
        stored['id'] = uuid.uuid4().hex
        rows.append(stored)
        return InsertResult(id=stored['id'])
