"""
JSON file store

Keeps every table in one JSON document on disk. Reloaded before and saved
after each insert, so separate processes see each other's rows.
"""

import json
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from core.errors import PersistenceError
from .base import InsertResult, RecordStore


class JsonFileStore(RecordStore):

    def __init__(
        self,
        path: Union[str, Path],
        unique_keys: Optional[Mapping[str, Tuple[str, ...]]] = None
    ):
        super().__init__(unique_keys)
        self.path = Path(path)

    def load(self) -> Dict[str, List[Dict[str, Any]]]:
        """
        Read all tables.

        Raises:
            PersistenceError: If the file exists but is not a JSON object
        """
        if not self.path.exists():
            return {}

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            raise PersistenceError(f"Cannot read store file {self.path}: {exc}") from exc

        if not isinstance(data, dict):
            raise PersistenceError(f"Store file {self.path} is not a JSON object")
        return data

    def save(self, data: Dict[str, List[Dict[str, Any]]]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + '.tmp')
        with open(tmp_path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False, default=str)
        tmp_path.replace(self.path)

    async def find_one(self, table: str, filters: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        for row in self.load().get(table, []):
            if all(row.get(column) == value for column, value in filters.items()):
                return row
        return None

    async def insert(self, table: str, row: Mapping[str, Any]) -> InsertResult:
        data = self.load()
        rows = data.setdefault(table, [])
        for existing in rows:
            column = self.conflicting_key(table, row, existing)
            if column:
                return InsertResult(conflict=True, error_reason=f"duplicate {column}")

        stored = dict(row)
        stored['id'] = uuid.uuid4().hex
        stored.setdefault('created_at', datetime.now(timezone.utc).isoformat())
        rows.append(stored)

        try:
            self.save(data)
        except OSError as exc:
            return InsertResult(error_reason=f"write failed: {exc}")
        return InsertResult(id=stored['id'])
