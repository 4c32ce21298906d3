"""
Outreach Intake Configuration
Centralized configuration management
"""

import os
from pathlib import Path
from typing import Optional, Dict, Any, FrozenSet
from dotenv import load_dotenv

from ._version import __version__


STORE_BACKENDS = ('memory', 'json', 'rest')


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, '').strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name, '').strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


class ImporterConfig:
    """
    Centralized configuration for Outreach Intake.
    Loads from .env and provides typed access to all settings.
    """

    def __init__(self, env_file: Optional[Path] = None):
        if env_file is None:
            env_file = Path(__file__).parent.parent / '.env'

        if env_file.exists():
            load_dotenv(env_file)

        self.framework_name = "Outreach Intake"
        self.framework_version = __version__

        # Persistence collaborator
        store = os.getenv('INTAKE_STORE', 'memory').strip().lower()
        self.store_backend = store if store in STORE_BACKENDS else 'memory'

        store_path = os.getenv('INTAKE_STORE_PATH', '').strip()
        self.store_path = Path(store_path).expanduser() if store_path else Path.home() / '.intake' / 'store.json'

        self.supabase_url = os.getenv('SUPABASE_URL', '').rstrip('/')
        self.supabase_key = os.getenv('SUPABASE_SERVICE_ROLE_KEY', '')
        self.http_timeout = _env_float('INTAKE_HTTP_TIMEOUT', 30.0)

        self.companies_table = os.getenv('INTAKE_COMPANIES_TABLE', 'outreach_companies')
        self.leads_table = os.getenv('INTAKE_LEADS_TABLE', 'outreach_leads')

        # Pipeline tuning
        self.concurrency = max(1, _env_int('INTAKE_CONCURRENCY', 1))
        self.sample_size = max(0, _env_int('INTAKE_SAMPLE_SIZE', 5))

        self.log_level = os.getenv('INTAKE_LOG_LEVEL', 'WARNING').strip().upper() or 'WARNING'

        suppression = os.getenv('INTAKE_SUPPRESSION_FILE', '').strip()
        self.suppression_file = Path(suppression).expanduser() if suppression else None

    @property
    def has_rest(self) -> bool:
        return bool(self.supabase_url and self.supabase_key)

    def load_suppression_list(self) -> FrozenSet[str]:
        """Read the do-not-contact list, one e-mail per line, '#' comments allowed."""
        if self.suppression_file is None or not self.suppression_file.exists():
            return frozenset()

        emails = set()
        with open(self.suppression_file, 'r', encoding='utf-8') as f:
            for line in f:
                entry = line.strip().lower()
                if entry and not entry.startswith('#'):
                    emails.add(entry)
        return frozenset(emails)

    def get_config_status(self) -> Dict[str, Any]:
        return {
            'framework': {
                'name': self.framework_name,
                'version': self.framework_version
            },
            'intake': {
                'store': self.store_backend,
                'rest': self.has_rest,
                'concurrency': self.concurrency,
                'sample_size': self.sample_size,
                'suppression_list': self.suppression_file is not None,
            }
        }

    def __repr__(self) -> str:
        status = self.get_config_status()
        return f"ImporterConfig({status['intake']})"


# Global config instance
_config: Optional[ImporterConfig] = None


def get_config() -> ImporterConfig:
    global _config
    if _config is None:
        _config = ImporterConfig()
    return _config


def reload_config(env_file: Optional[Path] = None) -> ImporterConfig:
    global _config
    _config = ImporterConfig(env_file)
    return _config
