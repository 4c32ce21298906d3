"""
Intake error taxonomy

Everything the import pipeline raises derives from IntakeError so the CLI
can report it in one place. Per-record persistence failures are counted by
the executor instead of raised.
"""

from typing import Iterable, List


class IntakeError(Exception):
    """Base class for import pipeline errors."""


class ParseError(IntakeError):
    """The uploaded file is empty, malformed or has no data rows."""


class MappingIncomplete(IntakeError):
    """One or more required target fields have no column mapped."""

    def __init__(self, missing: Iterable[str]):
        self.missing: List[str] = list(missing)
        super().__init__(f"Required fields not mapped: {', '.join(self.missing)}")


class MappingFrozen(IntakeError):
    """A column mapping was changed after execution started."""


class UnknownField(IntakeError):
    """A column was mapped to a field the active catalog does not define."""

    def __init__(self, field_key: str, catalog: str):
        self.field_key = field_key
        super().__init__(f"Unknown field '{field_key}' for {catalog} import")


class PersistenceError(IntakeError):
    """The persistence backend could not be reached or answered garbage."""
