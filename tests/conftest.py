import sys
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from core.config import ImporterConfig
from intake.stores import MemoryStore, default_unique_keys

ENV_VARS = (
    'INTAKE_STORE', 'INTAKE_STORE_PATH', 'SUPABASE_URL', 'SUPABASE_SERVICE_ROLE_KEY',
    'INTAKE_HTTP_TIMEOUT', 'INTAKE_COMPANIES_TABLE', 'INTAKE_LEADS_TABLE',
    'INTAKE_CONCURRENCY', 'INTAKE_SAMPLE_SIZE', 'INTAKE_LOG_LEVEL', 'INTAKE_SUPPRESSION_FILE',
)


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture()
def config(clean_env: pytest.MonkeyPatch, tmp_path: Path) -> ImporterConfig:
    return ImporterConfig(env_file=tmp_path / '.env')


@pytest.fixture()
def store(config: ImporterConfig) -> MemoryStore:
    return MemoryStore(default_unique_keys(config))


@pytest.fixture(autouse=True)
def reset_global_config(monkeypatch: pytest.MonkeyPatch) -> None:
    import core.config
    monkeypatch.setattr(core.config, '_config', None)
