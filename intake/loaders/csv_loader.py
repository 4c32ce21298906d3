"""
CSV loader with encoding detection

Reads a provider export from disk and hands the text to the tokenizer.
"""

from pathlib import Path
from typing import Optional, Union

from core.errors import ParseError
from core.models import RawTable
from .base import TableLoader
from .tokenizer import parse_table


class CSVLoader(TableLoader):
    """
    Load a delimited export file.

    Example:
        table = CSVLoader("contacts.csv").load()
        print(table.headers)
    """

    ENCODINGS = ('utf-8-sig', 'cp1252', 'latin1')

    def __init__(self, file_path: Union[str, Path], encoding: Optional[str] = None):
        """
        Args:
            file_path: Path to the file
            encoding: Force an encoding instead of detecting one

        Raises:
            FileNotFoundError: If the file doesn't exist
        """
        self.file_path = Path(file_path)
        self.encoding = encoding

        if not self.file_path.exists():
            raise FileNotFoundError(f"CSV file not found: {file_path}")

    def load(self) -> RawTable:
        """
        Read and tokenize the file.

        Raises:
            ParseError: If the file has no data rows or cannot be decoded
        """
        text = self.read_text()
        try:
            return parse_table(text)
        except ParseError as exc:
            raise ParseError(f"{self.file_path.name}: {exc}") from exc

    def read_text(self) -> str:
        data = self.file_path.read_bytes()
        encoding = self.encoding or self._detect_encoding(data)
        try:
            return data.decode(encoding)
        except (UnicodeDecodeError, LookupError) as exc:
            raise ParseError(f"{self.file_path.name}: cannot decode as {encoding}") from exc

    def _detect_encoding(self, data: bytes) -> str:
        """
        Pick the first encoding that decodes the whole file.

        UTF-8 is assumed; the Windows code pages cover legacy exports with
        umlauts. latin1 decodes any byte sequence, so it always terminates.
        """
        for encoding in self.ENCODINGS:
            try:
                data.decode(encoding)
                return encoding
            except UnicodeDecodeError:
                continue
        return 'latin1'
