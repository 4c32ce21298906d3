"""
Data normalizers for Outreach Intake
"""

from .field_normalizer import (
    normalize_field, parse_int, split_list, coerce, looks_like_email, normalize_email,
)
from .domain_normalizer import normalize_domain, extract_domain, domain_label
from .names import compose_full_name

__all__ = [
    'normalize_field',
    'parse_int',
    'split_list',
    'coerce',
    'looks_like_email',
    'normalize_email',
    'normalize_domain',
    'extract_domain',
    'domain_label',
    'compose_full_name',
]
