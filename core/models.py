"""
Outreach Intake Data Models

Structural models shared by both import pipelines: the parsed table and the
column-to-field mapping.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from .errors import MappingFrozen, UnknownField


SKIP = 'skip'


@dataclass(frozen=True)
class RawTable:
    """Header row plus data rows, exactly as tokenized. Rows may be ragged."""
    headers: Tuple[str, ...]
    rows: Tuple[Tuple[str, ...], ...]

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def column_count(self) -> int:
        return len(self.headers)

    @staticmethod
    def cell(row: Tuple[str, ...], index: int) -> str:
        """Cell at index, or '' when the row is shorter than the header."""
        return row[index] if 0 <= index < len(row) else ''

    def column_samples(self, index: int, limit: int = 5) -> List[str]:
        """First `limit` non-empty values of a column, in row order."""
        samples = []
        if limit <= 0:
            return samples
        for row in self.rows:
            value = self.cell(row, index)
            if value:
                samples.append(value)
                if len(samples) >= limit:
                    break
        return samples


class ColumnMapping:
    """
    Total mapping from column index to a target field key or SKIP.

    Every column of the table has an entry. Overrides may reassign any column
    to any catalog field (or SKIP) until the mapping is frozen, which happens
    when execution starts.

    Example:
        mapping = ColumnMapping(3, {0: 'name'}, allowed={'name', 'city'})
        mapping.override(2, 'city')
        mapping.freeze()
    """

    def __init__(
        self,
        column_count: int,
        assignments: Optional[Dict[int, str]] = None,
        allowed: Optional[Iterable[str]] = None,
        catalog_name: str = 'import'
    ):
        """
        Args:
            column_count: Number of columns in the source table
            assignments: Initial column index -> field key (others are SKIP)
            allowed: Field keys a column may map to; None disables validation
            catalog_name: Catalog label used in error messages
        """
        self._allowed = frozenset(allowed) if allowed is not None else None
        self._catalog_name = catalog_name
        self._frozen = False
        self._fields: List[str] = [SKIP] * column_count

        for index, field_key in (assignments or {}).items():
            self._assign(index, field_key)

    def _assign(self, index: int, field_key: str) -> None:
        if not 0 <= index < len(self._fields):
            raise IndexError(f"Column index {index} out of range (0..{len(self._fields) - 1})")
        if field_key != SKIP and self._allowed is not None and field_key not in self._allowed:
            raise UnknownField(field_key, self._catalog_name)
        self._fields[index] = field_key

    def __len__(self) -> int:
        return len(self._fields)

    def __getitem__(self, index: int) -> str:
        return self._fields[index]

    def __iter__(self) -> Iterator[Tuple[int, str]]:
        return iter(enumerate(self._fields))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ColumnMapping):
            return NotImplemented
        return self._fields == other._fields

    def __repr__(self) -> str:
        return f"ColumnMapping({self.as_dict()})"

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        self._frozen = True

    def override(self, index: int, field_key: str) -> None:
        """
        Reassign one column.

        Raises:
            MappingFrozen: If execution already started
            UnknownField: If the field is not in the active catalog
        """
        if self._frozen:
            raise MappingFrozen("Column mapping is frozen once the import has started")
        self._assign(index, field_key)

    def mapped_items(self) -> List[Tuple[int, str]]:
        """(index, field) pairs for every non-skipped column, in column order."""
        return [(i, f) for i, f in enumerate(self._fields) if f != SKIP]

    def mapped_fields(self) -> set:
        return {f for f in self._fields if f != SKIP}

    def duplicate_targets(self) -> Dict[str, List[int]]:
        """Fields claimed by more than one column. The last column wins."""
        seen: Dict[str, List[int]] = {}
        for index, field_key in self.mapped_items():
            seen.setdefault(field_key, []).append(index)
        return {f: cols for f, cols in seen.items() if len(cols) > 1}

    def as_dict(self) -> Dict[int, str]:
        return dict(enumerate(self._fields))
