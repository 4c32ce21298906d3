from pathlib import Path

import pytest

from core.errors import ParseError
from intake.loaders import CSVLoader, parse_table, tokenize_line


def test_tokenize_line_splits_on_both_delimiters_and_trims() -> None:
    assert tokenize_line(' a , b;c ') == ['a', 'b', 'c']


def test_tokenize_line_keeps_delimiters_inside_quotes() -> None:
    assert tokenize_line('"Acme, Inc.";"x;y",z') == ['Acme, Inc.', 'x;y', 'z']


def test_tokenize_line_keeps_empty_fields() -> None:
    assert tokenize_line('a,,c,') == ['a', '', 'c', '']


def test_parse_table_drops_blank_lines_and_keeps_ragged_rows() -> None:
    table = parse_table('Name,Email,Firma\r\n\r\nJane,jane@acme.de\n\nJohn,john@acme.de,Acme,extra\n')
    assert table.headers == ('Name', 'Email', 'Firma')
    assert table.rows == (
        ('Jane', 'jane@acme.de'),
        ('John', 'john@acme.de', 'Acme', 'extra'),
    )
    assert table.row_count == 2
    assert table.column_count == 3


def test_parse_table_strips_byte_order_mark() -> None:
    table = parse_table('\ufeffFirmenname\nAcme GmbH')
    assert table.headers == ('Firmenname',)


@pytest.mark.parametrize('text', ['', '   \n\n', 'Name,Email\n', 'Name,Email\n  \n'])
def test_parse_table_without_data_rows_raises(text: str) -> None:
    with pytest.raises(ParseError):
        parse_table(text)


def test_quoted_line_break_is_not_joined() -> None:
    table = parse_table('Name,Notes\nJane,"first\nsecond"')
    assert table.rows == (('Jane', 'first'), ('second',))


def test_cell_and_samples_tolerate_short_rows() -> None:
    table = parse_table('a,b\n1\n,2\n3,4')
    assert table.cell(table.rows[0], 1) == ''
    assert table.column_samples(1) == ['2', '4']
    assert table.column_samples(0, limit=1) == ['1']
    assert table.column_samples(0, limit=0) == []


def test_csv_loader_decodes_legacy_encoding(tmp_path: Path) -> None:
    path = tmp_path / 'export.csv'
    path.write_bytes('Firmenname;Stadt\nMüller GmbH;Köln\n'.encode('cp1252'))
    table = CSVLoader(path).load()
    assert table.rows == (('Müller GmbH', 'Köln'),)


def test_csv_loader_reports_file_name_on_parse_error(tmp_path: Path) -> None:
    path = tmp_path / 'empty.csv'
    path.write_text('Firmenname\n', encoding='utf-8')
    with pytest.raises(ParseError, match='empty.csv'):
        CSVLoader(path).load()


def test_csv_loader_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        CSVLoader(tmp_path / 'missing.csv')
