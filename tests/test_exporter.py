import csv
import json
from pathlib import Path

from intake.exporters import CSVExporter
from intake.models import ImportIssue
from intake.normalizers.row_normalizer import ContactBuilder


def read_rows(path: Path):
    with open(path, newline='', encoding='utf-8') as f:
        return list(csv.DictReader(f))


def test_export_issues_sorted_by_row(tmp_path: Path) -> None:
    path = tmp_path / 'reports' / 'issues.csv'
    issues = [
        ImportIssue(5, 'b@acme.de', 'insert failed'),
        ImportIssue(2, '', 'missing required: email'),
    ]

    count = CSVExporter().export_issues(issues, str(path))

    assert count == 2
    assert read_rows(path) == [
        {'Row': '2', 'Key': '', 'Reason': 'missing required: email'},
        {'Row': '5', 'Key': 'b@acme.de', 'Reason': 'insert failed'},
    ]


def test_export_records_flattens_lists_and_signals(tmp_path: Path) -> None:
    record = ContactBuilder().build({
        'full_name': 'Jane Doe',
        'email': 'jane@acme.de',
        'company_name': 'Acme',
        'tags': 'warm, dach',
        'hiring_title_1': 'Engineer',
    }, row_number=3)
    path = tmp_path / 'records.csv'

    CSVExporter().export_records([record], ['full_name', 'tags', 'hiring_signals', 'city'], str(path))

    row = read_rows(path)[0]
    assert row['row'] == '3'
    assert row['tags'] == 'warm; dach'
    assert json.loads(row['hiring_signals']) == [{'title': 'Engineer'}]
    assert row['city'] == ''
