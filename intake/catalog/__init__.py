"""
Field catalogs and header pattern dictionaries for Outreach Intake
"""

from .fields import (
    FieldSpec, FieldCatalog, ORGANIZATION_FIELDS, CONTACT_FIELDS,
    TEXT, INTEGER, LIST, HIRING_SLOTS, HIRING_ATTRIBUTES, hiring_key,
)
from .patterns import (
    PatternDictionary, ORGANIZATION_PATTERNS, CONTACT_PATTERNS, normalize_header,
)

__all__ = [
    'FieldSpec', 'FieldCatalog', 'ORGANIZATION_FIELDS', 'CONTACT_FIELDS',
    'TEXT', 'INTEGER', 'LIST', 'HIRING_SLOTS', 'HIRING_ATTRIBUTES', 'hiring_key',
    'PatternDictionary', 'ORGANIZATION_PATTERNS', 'CONTACT_PATTERNS', 'normalize_header',
]
