"""
REST store

Talks to a PostgREST endpoint (e.g. Supabase) over HTTP. Each call makes
its own request; nothing is pooled. Blocking requests run in a worker thread
so the executor's event loop keeps scheduling.
"""

import asyncio
from typing import Any, Dict, Mapping, Optional, Tuple

import requests

from core.errors import PersistenceError
from .base import InsertResult, RecordStore


class RestStore(RecordStore):
    """
    Example:
        store = RestStore("https://xyz.supabase.co", api_key)
        row = await store.find_one("outreach_leads", {"contact_email": "a@b.de"})
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = 30.0,
        unique_keys: Optional[Mapping[str, Tuple[str, ...]]] = None
    ):
        """
        Args:
            base_url: Project URL; '/rest/v1' is appended
            api_key: Service key sent as apikey and bearer token
            timeout: Per-request timeout in seconds
            unique_keys: Informational; uniqueness is enforced by the database
        """
        super().__init__(unique_keys)
        self.base_url = f"{base_url.rstrip('/')}/rest/v1"
        self.api_key = api_key
        self.timeout = timeout

    def _headers(self, **extra: str) -> Dict[str, str]:
        headers = {
            'apikey': self.api_key,
            'Authorization': f'Bearer {self.api_key}',
            'Content-Type': 'application/json',
        }
        headers.update(extra)
        return headers

    def _find_one_sync(self, table: str, filters: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        params = {column: f"eq.{value}" for column, value in filters.items()}
        params['select'] = '*'
        params['limit'] = '1'

        try:
            response = requests.get(
                f"{self.base_url}/{table}",
                params=params,
                headers=self._headers(),
                timeout=self.timeout
            )
            response.raise_for_status()
            rows = response.json()
        except (requests.RequestException, ValueError) as exc:
            raise PersistenceError(f"Lookup in {table} failed: {exc}") from exc

        if not isinstance(rows, list):
            raise PersistenceError(f"Unexpected lookup response from {table}")
        return rows[0] if rows else None

    def _insert_sync(self, table: str, row: Mapping[str, Any]) -> InsertResult:
        try:
            response = requests.post(
                f"{self.base_url}/{table}",
                json=dict(row),
                headers=self._headers(Prefer='return=representation'),
                timeout=self.timeout
            )
        except requests.RequestException as exc:
            raise PersistenceError(f"Insert into {table} failed: {exc}") from exc

        # Unique constraint violation
        if response.status_code == 409:
            return InsertResult(conflict=True, error_reason=response.text[:200] or 'conflict')

        if response.status_code >= 400:
            return InsertResult(error_reason=f"HTTP {response.status_code}: {response.text[:200]}")

        try:
            data = response.json()
        except ValueError:
            return InsertResult(id=None)

        if isinstance(data, list) and data:
            data = data[0]
        record_id = data.get('id') if isinstance(data, dict) else None
        return InsertResult(id=str(record_id) if record_id is not None else None)

    async def find_one(self, table: str, filters: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        return await asyncio.to_thread(self._find_one_sync, table, filters)

    async def insert(self, table: str, row: Mapping[str, Any]) -> InsertResult:
        return await asyncio.to_thread(self._insert_sync, table, row)
