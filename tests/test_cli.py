import argparse
import csv
import json
from pathlib import Path

import pytest

from core import __version__
from intake.cli import main, parse_override


@pytest.fixture()
def orgs_file(tmp_path: Path) -> Path:
    path = tmp_path / 'orgs.csv'
    path.write_text('Firmenname;Website;Notiz\nAcme GmbH;acme.de;x\n;;y\n', encoding='utf-8')
    return path


def test_parse_override() -> None:
    assert parse_override('Kontakt Mail=email') == ('Kontakt Mail', 'email')
    assert parse_override('a=b=skip') == ('a=b', 'skip')
    with pytest.raises(argparse.ArgumentTypeError):
        parse_override('email')


def test_version(clean_env, capsys) -> None:
    assert main(['version']) == 0
    assert __version__ in capsys.readouterr().out


def test_fields_lists_catalog(clean_env, capsys) -> None:
    assert main(['fields', 'organizations']) == 0
    assert 'headcount' in capsys.readouterr().out


def test_import_organizations(clean_env, orgs_file: Path, tmp_path: Path) -> None:
    report = tmp_path / 'issues.csv'
    assert main(['organizations', str(orgs_file), '--store', 'memory', '--report', str(report)]) == 0

    with open(report, newline='', encoding='utf-8') as f:
        rows = list(csv.DictReader(f))
    assert [row['Row'] for row in rows] == ['2']


def test_import_into_json_store(clean_env, orgs_file: Path, tmp_path: Path) -> None:
    clean_env.setenv('INTAKE_STORE', 'json')
    clean_env.setenv('INTAKE_STORE_PATH', str(tmp_path / 'store.json'))

    assert main(['organizations', str(orgs_file)]) == 0
    assert (tmp_path / 'store.json').exists()


def test_dry_run_writes_records(clean_env, orgs_file: Path, tmp_path: Path) -> None:
    report = tmp_path / 'preview.csv'
    assert main(['organizations', str(orgs_file), '--dry-run', '--report', str(report)]) == 0

    with open(report, newline='', encoding='utf-8') as f:
        rows = list(csv.DictReader(f))
    assert [(row['name'], row['website']) for row in rows] == [('Acme GmbH', 'acme.de')]


def test_dry_run_report_keeps_signal_data(clean_env, tmp_path: Path) -> None:
    path = tmp_path / 'leads.csv'
    path.write_text(
        'Name,Email,Firma,Hiring Title 1,Previous Company\n'
        'Jane Doe,jane@acme.de,Acme,Engineer,Globex\n',
        encoding='utf-8'
    )
    report = tmp_path / 'preview.csv'

    assert main(['contacts', str(path), '--dry-run', '--report', str(report)]) == 0

    with open(report, newline='', encoding='utf-8') as f:
        rows = list(csv.DictReader(f))
    assert len(rows) == 1
    assert json.loads(rows[0]['hiring_signals']) == [{'title': 'Engineer'}]
    assert json.loads(rows[0]['job_change_data']) == {'previous_company': 'Globex'}
    assert rows[0]['email'] == 'jane@acme.de'


def test_missing_required_fields_exit_code(clean_env, tmp_path: Path, capsys) -> None:
    path = tmp_path / 'leads.csv'
    path.write_text('Vorname,Email\nJane,jane@acme.de\n', encoding='utf-8')

    assert main(['contacts', str(path)]) == 2
    assert 'company_name' in capsys.readouterr().out


def test_override_fixes_mapping(clean_env, tmp_path: Path) -> None:
    path = tmp_path / 'leads.csv'
    path.write_text('Name,Email,Arbeitsstelle\nJane Doe,jane@acme.de,Acme\n', encoding='utf-8')

    assert main(['contacts', str(path), '--map', 'Arbeitsstelle=company_name']) == 0


def test_missing_file(clean_env, tmp_path: Path) -> None:
    assert main(['organizations', str(tmp_path / 'nope.csv')]) == 2
