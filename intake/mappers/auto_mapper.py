"""
Auto column mapper

Classifies each column header of an uploaded table into a catalog field (or
'skip') and assembles the per-import ColumnMapping.

Contact headers go through three phases, first match wins:
1. exact phrase match on the normalized header
2. whole-word phrase match, longest phrase first, vetoed by the field's
   exclusion phrases
3. e-mail fallback driven by sample values

Organization headers use a single first-substring-wins pass.
"""

import logging
import re
from functools import lru_cache
from typing import Dict, Iterable, List, Optional, Pattern

from core.models import ColumnMapping, RawTable, SKIP
from ..catalog import (
    CONTACT_FIELDS, CONTACT_PATTERNS, ORGANIZATION_FIELDS, ORGANIZATION_PATTERNS,
    FieldCatalog, PatternDictionary, normalize_header,
)
from ..catalog.patterns import EMAIL_HINTS
from ..normalizers.field_normalizer import looks_like_email

logger = logging.getLogger(__name__)


@lru_cache(maxsize=4096)
def _word_pattern(phrase: str) -> Pattern:
    return re.compile(r'(?<!\w)' + re.escape(phrase) + r'(?!\w)')


def contains_phrase(header: str, phrase: str) -> bool:
    """True if phrase occurs in header as whole words ('cell' is not in 'parcel')."""
    return bool(_word_pattern(phrase).search(header))


def classify_column(
    header: str,
    patterns: PatternDictionary = CONTACT_PATTERNS,
    samples: Optional[Iterable[str]] = None
) -> str:
    """
    Classify one contact-import header.

    Args:
        header: Raw header text
        patterns: Pattern dictionary for the contact catalog
        samples: A few non-empty values from the column

    Returns:
        Field key, or SKIP
    """
    normalized = normalize_header(header)
    if not normalized:
        return SKIP

    # Phase 1: exact phrase
    exact = patterns.exact_lookup(normalized)
    if exact:
        return exact

    # Phase 2: whole-word, longest phrase first, with exclusions
    for field_key, phrase in patterns.ranked_pairs():
        if not contains_phrase(normalized, phrase):
            continue
        if patterns.is_excluded(field_key, normalized):
            logger.debug("Header %r matched %r for %s but was excluded", header, phrase, field_key)
            continue
        return field_key

    # Phase 3: e-mail column recognised by its values
    if _is_email_column(normalized, patterns, samples):
        return 'email'

    return SKIP


def _is_email_column(
    normalized: str,
    patterns: PatternDictionary,
    samples: Optional[Iterable[str]]
) -> bool:
    if not any(hint in normalized for hint in EMAIL_HINTS):
        return False
    if patterns.is_excluded('email', normalized):
        return False
    return any(looks_like_email(value) for value in (samples or ()))


def classify_organization_column(
    header: str,
    patterns: PatternDictionary = ORGANIZATION_PATTERNS
) -> str:
    """
    Classify one organization-import header.

    Fields are tried in dictionary order; the first field with an exact-only
    phrase equal to the header or a phrase contained in it wins.
    """
    normalized = normalize_header(header)
    if not normalized:
        return SKIP

    for field_key in patterns.field_keys():
        if normalized in patterns.exact_only.get(field_key, ()):
            return field_key
        for phrase in patterns.phrases.get(field_key, ()):
            if phrase in normalized:
                return field_key

    return SKIP


class AutoMapper:
    """
    Build a ColumnMapping for a whole table.

    Example:
        mapper = AutoMapper.for_contacts()
        mapping = mapper.auto_map(table)
        print(mapper.missing_required(mapping))
    """

    def __init__(
        self,
        catalog: FieldCatalog,
        patterns: PatternDictionary,
        use_samples: bool = False,
        simple: bool = False,
        sample_size: int = 5,
        custom_patterns: Optional[Dict[str, List[str]]] = None
    ):
        """
        Args:
            catalog: Target field catalog
            patterns: Header vocabulary for the catalog
            use_samples: Feed column samples to the classifier (contacts)
            simple: Use the single-phase substring classifier (organizations)
            sample_size: Non-empty values sampled per column
            custom_patterns: Extra phrases per field, tried before the defaults
        """
        self.catalog = catalog
        self.patterns = patterns.extend(custom_patterns) if custom_patterns else patterns
        self.use_samples = use_samples
        self.simple = simple
        self.sample_size = sample_size

    @classmethod
    def for_contacts(cls, sample_size: int = 5, custom_patterns: Optional[Dict[str, List[str]]] = None) -> 'AutoMapper':
        return cls(CONTACT_FIELDS, CONTACT_PATTERNS, use_samples=True,
                   sample_size=sample_size, custom_patterns=custom_patterns)

    @classmethod
    def for_organizations(cls, custom_patterns: Optional[Dict[str, List[str]]] = None) -> 'AutoMapper':
        return cls(ORGANIZATION_FIELDS, ORGANIZATION_PATTERNS, simple=True,
                   custom_patterns=custom_patterns)

    def classify(self, header: str, samples: Optional[List[str]] = None) -> str:
        if self.simple:
            return classify_organization_column(header, self.patterns)
        return classify_column(header, self.patterns, samples if self.use_samples else None)

    def auto_map(self, table: RawTable) -> ColumnMapping:
        """
        Classify every column of the table.

        Returns:
            A fresh, unfrozen ColumnMapping covering every column
        """
        assignments = {}
        for index, header in enumerate(table.headers):
            samples = table.column_samples(index, self.sample_size) if self.use_samples else None
            field_key = self.classify(header, samples)
            logger.debug("Column %d %r -> %s", index, header, field_key)
            assignments[index] = field_key

        return ColumnMapping(
            table.column_count,
            assignments,
            allowed=self.catalog.keys(),
            catalog_name=self.catalog.name,
        )

    def missing_required(self, mapping: ColumnMapping) -> List[str]:
        return self.catalog.missing_required(mapping.mapped_fields())

    def is_complete(self, mapping: ColumnMapping) -> bool:
        return not self.missing_required(mapping)

    def get_mapping_confidence(self, mapping: ColumnMapping) -> float:
        """
        Confidence score for the mapping (0.0 to 1.0).

        Required fields covered: up to 0.8. Share of columns that found a
        field: up to 0.2.
        """
        required = self.catalog.required_keys()
        score = 0.0
        if required:
            covered = len(required) - len(self.missing_required(mapping))
            score += 0.8 * covered / len(required)
        else:
            score += 0.8

        if len(mapping):
            score += 0.2 * len(mapping.mapped_items()) / len(mapping)

        return min(score, 1.0)

    def get_mapping_summary(self, mapping: ColumnMapping, headers: Iterable[str]) -> Dict[str, str]:
        """
        Returns:
            Dict of {target_field: source_header}; the last column wins on collisions
        """
        headers = list(headers)
        summary = {}
        for index, field_key in mapping.mapped_items():
            summary[field_key] = headers[index] if index < len(headers) else f"#{index}"
        return summary
