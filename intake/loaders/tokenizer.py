"""
Delimited-text tokenizer

Turns raw file text into a RawTable:
- Lines split on line breaks, blank lines dropped
- Fields split on ',' or ';' outside double quotes (per line, no sniffing)
- Every field trimmed
- First line is the header row

Format constraint: quoting is tracked per line, so a quoted field cannot
contain a line break, and doubled quotes ("") are not an escape.
"""

import re
from typing import List

from core.errors import ParseError
from core.models import RawTable


DELIMITERS = (',', ';')
QUOTE = '"'

_LINE_BREAK = re.compile(r'\r\n|\r|\n')


def tokenize_line(line: str) -> List[str]:
    """
    Split one line into trimmed fields.

    Examples:
        >>> tokenize_line('a, "b;c" ;d')
        ['a', 'b;c', 'd']
    """
    fields = []
    current = []
    in_quotes = False

    for char in line:
        if char == QUOTE:
            in_quotes = not in_quotes
        elif char in DELIMITERS and not in_quotes:
            fields.append(''.join(current).strip())
            current = []
        else:
            current.append(char)

    fields.append(''.join(current).strip())
    return fields


def split_lines(text: str) -> List[str]:
    """Non-blank lines of the text, BOM removed."""
    if text.startswith('\ufeff'):
        text = text[1:]
    return [line for line in _LINE_BREAK.split(text) if line.strip()]


def parse_table(text: str) -> RawTable:
    """
    Parse raw file text into headers and data rows.

    Rows keep their own length; RawTable.cell() reads past the end as empty.

    Raises:
        ParseError: If the text has fewer than two non-blank lines
    """
    lines = split_lines(text or '')
    if len(lines) < 2:
        raise ParseError("File needs a header line and at least one data row")

    parsed = [tuple(tokenize_line(line)) for line in lines]
    return RawTable(headers=parsed[0], rows=tuple(parsed[1:]))
