"""
Row normalization

Turns one raw row plus the frozen ColumnMapping into a typed record:
1. flatten mapped, non-empty cells into field -> text (last column wins)
2. coerce per catalog kind (int / list / text)
3. compose signal structures (contacts)
4. synthesize the full name from first/last (contacts)
5. gate on required fields
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Sequence, Tuple, Union

from core.models import ColumnMapping, RawTable
from ..catalog import CONTACT_FIELDS, ORGANIZATION_FIELDS, FieldCatalog
from ..catalog.fields import HIRING_SIGNALS, JOB_CHANGE, RELOCATION
from ..models import ContactRecord, OrganizationRecord
from ..signals import compose_hiring_signals, compose_job_change, compose_location_move
from .field_normalizer import coerce, normalize_field
from .names import compose_full_name

logger = logging.getLogger(__name__)

Record = Union[OrganizationRecord, ContactRecord]


def flatten_row(row: Sequence[str], mapping: ColumnMapping) -> Dict[str, str]:
    """
    Collect mapped, non-empty cells of one row.

    Short rows are tolerated (missing cells count as empty). When two
    columns map to the same field the later column wins.

    Returns:
        field key -> raw cell text
    """
    values: Dict[str, str] = {}
    for index, field_key in mapping.mapped_items():
        cell = RawTable.cell(tuple(row), index)
        if not cell:
            continue
        if field_key in values:
            logger.debug("Column %d overrides earlier value for %s", index, field_key)
        values[field_key] = cell
    return values


class RecordBuilder(ABC):
    """Per-shape builder from flattened values to a typed record."""

    catalog: FieldCatalog

    def coerce_values(self, values: Dict[str, str], skip_categories: Iterable[str] = ()) -> Dict[str, Any]:
        skip_categories = set(skip_categories)
        typed = {}
        for key, raw in values.items():
            spec = self.catalog.get(key)
            if spec is None or spec.category in skip_categories:
                continue
            value = coerce(raw, spec.kind)
            if value is not None:
                typed[key] = value
        return typed

    @abstractmethod
    def build(self, values: Dict[str, str], row_number: int = 0) -> Record:
        pass


class OrganizationBuilder(RecordBuilder):
    catalog = ORGANIZATION_FIELDS

    def build(self, values: Dict[str, str], row_number: int = 0) -> OrganizationRecord:
        return OrganizationRecord(
            **self.coerce_values(values),
            row_number=row_number,
            raw=dict(values),
        )


class ContactBuilder(RecordBuilder):
    catalog = CONTACT_FIELDS

    COMPOSITE_CATEGORIES = (HIRING_SIGNALS, JOB_CHANGE, RELOCATION)

    def build(self, values: Dict[str, str], row_number: int = 0) -> ContactRecord:
        typed = self.coerce_values(values, skip_categories=self.COMPOSITE_CATEGORIES)

        composite_values = {}
        for key, raw in values.items():
            spec = self.catalog.get(key)
            if spec is not None and spec.category in self.COMPOSITE_CATEGORIES:
                text = normalize_field(raw)
                if text:
                    composite_values[key] = text

        record = ContactRecord(
            **typed,
            hiring_signals=compose_hiring_signals(composite_values),
            job_change_data=compose_job_change(composite_values),
            location_move_data=compose_location_move(composite_values),
            row_number=row_number,
            raw=dict(values),
        )

        if not record.full_name:
            synthesized = compose_full_name(record.first_name, record.last_name)
            if synthesized:
                record.full_name = synthesized
                record.name_synthesized = True

        return record


@dataclass
class NormalizationResult:
    """Gate-passing records plus the rows the gate dropped."""
    records: List[Record] = field(default_factory=list)
    skipped: List[Tuple[int, List[str]]] = field(default_factory=list)

    @property
    def total_rows(self) -> int:
        return len(self.records) + len(self.skipped)


def normalize_rows(table: RawTable, mapping: ColumnMapping, builder: RecordBuilder) -> NormalizationResult:
    """
    Normalize every data row and apply the required-field gate.

    Args:
        table: Parsed table
        mapping: Column mapping (normally frozen by now)
        builder: Shape-specific record builder

    Returns:
        NormalizationResult; row numbers are 1-based data-row positions
    """
    result = NormalizationResult()
    for position, row in enumerate(table.rows, start=1):
        record = builder.build(flatten_row(row, mapping), row_number=position)
        missing = record.missing_required()
        if missing:
            logger.debug("Row %d dropped, missing %s", position, ', '.join(missing))
            result.skipped.append((position, missing))
            continue
        result.records.append(record)
    return result
