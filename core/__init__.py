"""Outreach Intake Core"""

from ._version import __version__
from .config import ImporterConfig, get_config, reload_config
from .errors import (
    IntakeError, ParseError, MappingIncomplete, MappingFrozen,
    UnknownField, PersistenceError,
)
from .models import RawTable, ColumnMapping, SKIP

__all__ = [
    '__version__',
    'ImporterConfig', 'get_config', 'reload_config',
    'IntakeError', 'ParseError', 'MappingIncomplete', 'MappingFrozen',
    'UnknownField', 'PersistenceError',
    'RawTable', 'ColumnMapping', 'SKIP',
]
