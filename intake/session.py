"""
Import session

One uploaded file, start to finish:
parse -> auto-map -> (override) -> check required -> freeze -> normalize -> execute
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional, Union

from core.errors import IntakeError, MappingIncomplete
from core.models import ColumnMapping, RawTable
from .executor import CompleteCallback, ImportExecutor, ProgressCallback
from .loaders import CSVLoader, parse_table
from .models import ImportOutcome
from .normalizers.row_normalizer import NormalizationResult, normalize_rows
from .pipelines import ImportPipeline
from .stores import RecordStore

logger = logging.getLogger(__name__)


class ImportSession:
    """
    Example:
        session = ImportSession.from_file(ContactPipeline(), "leads.csv")
        session.override("Mail", "email")
        outcome = asyncio.run(session.execute(MemoryStore()))
    """

    def __init__(
        self,
        pipeline: ImportPipeline,
        table: RawTable,
        custom_patterns: Optional[Dict[str, List[str]]] = None
    ):
        self.pipeline = pipeline
        self.table = table
        self.mapper = pipeline.create_mapper(custom_patterns)
        self.mapping: ColumnMapping = self.mapper.auto_map(table)
        self.outcome: Optional[ImportOutcome] = None
        self.records: List = []

    @classmethod
    def from_text(cls, pipeline: ImportPipeline, text: str, **kwargs) -> 'ImportSession':
        """Raises ParseError for empty or header-only text."""
        return cls(pipeline, parse_table(text), **kwargs)

    @classmethod
    def from_file(
        cls,
        pipeline: ImportPipeline,
        path: Union[str, Path],
        encoding: Optional[str] = None,
        **kwargs
    ) -> 'ImportSession':
        return cls(pipeline, CSVLoader(path, encoding).load(), **kwargs)

    def column_index(self, column: Union[int, str]) -> int:
        """
        Resolve a column given as index or header text.

        A numeric string is an index unless a header has that exact text;
        other text matches a header exactly, then case-insensitively.
        """
        headers = list(self.table.headers)
        if isinstance(column, int) or (column.strip().isdigit() and column not in headers):
            index = int(column)
            if not 0 <= index < len(headers):
                raise IntakeError(f"Column index {index} out of range (0..{len(headers) - 1})")
            return index

        if column in headers:
            return headers.index(column)

        lowered = [h.strip().lower() for h in headers]
        if column.strip().lower() in lowered:
            return lowered.index(column.strip().lower())

        raise IntakeError(f"No column named '{column}' (columns: {', '.join(headers)})")

    def override(self, column: Union[int, str], field_key: str) -> None:
        """Reassign one column before execution (MappingFrozen afterwards)."""
        index = self.column_index(column)
        self.mapping.override(index, field_key)
        logger.debug("Column %d %r overridden -> %s", index, self.table.headers[index], field_key)

    def missing_required(self) -> List[str]:
        return self.mapper.missing_required(self.mapping)

    def check_mapping(self) -> None:
        """
        Raises:
            MappingIncomplete: If a required field has no column
        """
        missing = self.missing_required()
        if missing:
            raise MappingIncomplete(missing)

    def normalize(self) -> NormalizationResult:
        """Normalize every row under the current mapping (no persistence)."""
        self.check_mapping()
        for field_key, columns in self.mapping.duplicate_targets().items():
            names = ', '.join(repr(self.table.headers[i]) for i in columns)
            logger.warning("Field %s is mapped by %s; the last column wins", field_key, names)
        return normalize_rows(self.table, self.mapping, self.pipeline.builder)

    def preview(self) -> ImportOutcome:
        """
        Dry run: normalize and gate rows without touching a store.

        Returns:
            Outcome holding only the gate drops; gate-passing records are
            kept in `records`
        """
        result = self.normalize()
        outcome = self.pipeline.new_outcome()
        for row, missing in result.skipped:
            outcome.record_skipped(row, missing)
        self.records = result.records
        return outcome

    async def execute(
        self,
        store: RecordStore,
        concurrency: int = 1,
        on_progress: Optional[ProgressCallback] = None,
        on_complete: Optional[CompleteCallback] = None
    ) -> ImportOutcome:
        """
        Freeze the mapping, normalize and persist.

        Raises:
            MappingIncomplete: If a required field has no column; nothing is imported
        """
        self.check_mapping()
        self.mapping.freeze()

        result = self.normalize()
        outcome = self.pipeline.new_outcome()
        for row, missing in result.skipped:
            outcome.record_skipped(row, missing)

        logger.info(
            "%d of %d rows passed the required-field gate",
            len(result.records), result.total_rows
        )

        executor = ImportExecutor(store, concurrency, on_progress, on_complete)
        self.outcome = await executor.run(self.pipeline, result.records, outcome)
        return self.outcome
