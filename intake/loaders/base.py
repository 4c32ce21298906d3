"""
Abstract base class for table loaders
"""

from abc import ABC, abstractmethod

from core.models import RawTable


class TableLoader(ABC):
    """
    Abstract base class for loading a RawTable from some source.

    All loaders must implement load(), which either returns a table with a
    header row and at least one data row or raises ParseError.
    """

    @abstractmethod
    def load(self) -> RawTable:
        pass
