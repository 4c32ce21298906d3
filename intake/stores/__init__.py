"""
Persistence collaborators for Outreach Intake
"""

from typing import Optional

from core.config import ImporterConfig, get_config
from core.errors import IntakeError
from .base import InsertResult, RecordStore
from .json_store import JsonFileStore
from .memory import MemoryStore
from .rest_store import RestStore


def default_unique_keys(config: ImporterConfig) -> dict:
    return {
        config.leads_table: ('contact_email',),
        config.companies_table: ('domain',),
    }


def create_store(config: Optional[ImporterConfig] = None, backend: Optional[str] = None) -> RecordStore:
    """
    Build the store selected by configuration (or an explicit backend name).

    Raises:
        IntakeError: If 'rest' is selected without URL and key
    """
    config = config or get_config()
    backend = backend or config.store_backend
    unique_keys = default_unique_keys(config)

    if backend == 'json':
        return JsonFileStore(config.store_path, unique_keys)
    if backend == 'rest':
        if not config.has_rest:
            raise IntakeError("REST store needs SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY")
        return RestStore(config.supabase_url, config.supabase_key, config.http_timeout, unique_keys)
    return MemoryStore(unique_keys)


__all__ = [
    'InsertResult', 'RecordStore', 'MemoryStore', 'JsonFileStore', 'RestStore',
    'create_store', 'default_unique_keys',
]
