import asyncio
from pathlib import Path

import pytest

from core.errors import IntakeError, MappingFrozen, MappingIncomplete, ParseError, UnknownField
from core.models import SKIP
from intake.pipelines import ContactPipeline, OrganizationPipeline
from intake.session import ImportSession


def test_organizations_end_to_end(config, store) -> None:
    session = ImportSession.from_text(OrganizationPipeline(config), 'Firmenname\nAcme GmbH\n')

    assert session.mapping.as_dict() == {0: 'name'}
    outcome = asyncio.run(session.execute(store))

    assert outcome.as_dict() == {'created': 1, 'duplicates': 0, 'errors': 0, 'skipped_incomplete': 0}
    assert session.mapping.frozen


def test_contacts_end_to_end(config, store) -> None:
    text = 'Name,Email,Firma\nJane Doe,jane@acme.de,Acme\nJohn Roe,,Acme\n'
    session = ImportSession.from_text(ContactPipeline(config, suppressed_emails=()), text)

    outcome = asyncio.run(session.execute(store))

    assert outcome.contacts_created == 1
    assert outcome.companies_created == 1
    assert outcome.duplicates == 0
    assert outcome.errors == 0
    assert outcome.skipped_incomplete == 1
    assert [issue.row for issue in outcome.issues] == [2]
    assert [r['contact_name'] for r in store.rows(config.leads_table)] == ['Jane Doe']


def test_reimport_counts_duplicates(config, store) -> None:
    text = 'Firmenname;Website\nAcme GmbH;acme.de\nGlobex;globex.com\n'
    pipeline = OrganizationPipeline(config)

    asyncio.run(ImportSession.from_text(pipeline, text).execute(store))
    outcome = asyncio.run(ImportSession.from_text(pipeline, text).execute(store))

    assert outcome.created == 0
    assert outcome.duplicates == 2


def test_missing_required_blocks_execution(config, store) -> None:
    session = ImportSession.from_text(ContactPipeline(config, suppressed_emails=()), 'Vorname,Email\nJane,jane@acme.de\n')

    with pytest.raises(MappingIncomplete) as excinfo:
        asyncio.run(session.execute(store))

    assert excinfo.value.missing == ['full_name', 'company_name']
    assert not session.mapping.frozen
    assert store.rows(config.leads_table) == []


def test_override_by_header_and_index(config, store) -> None:
    text = 'Vorname,Nachname,Kontakt-Email,Arbeitsstelle\nJane,Doe,jane@acme.de,Acme\n'
    session = ImportSession.from_text(ContactPipeline(config, suppressed_emails=()), text)

    session.override('arbeitsstelle', 'company_name')
    session.override(2, 'email')
    outcome = asyncio.run(session.execute(store))

    assert session.mapping[3] == 'company_name'
    assert outcome.contacts_created == 1
    assert store.rows(config.leads_table)[0]['contact_name'] == 'Jane Doe'


def test_override_after_execution_is_rejected(config, store) -> None:
    session = ImportSession.from_text(OrganizationPipeline(config), 'Firmenname,Ort\nAcme,Köln\n')
    asyncio.run(session.execute(store))

    with pytest.raises(MappingFrozen):
        session.override('Ort', SKIP)


def test_override_validation(config) -> None:
    session = ImportSession.from_text(OrganizationPipeline(config), 'Firmenname,Ort\nAcme,Köln\n')

    with pytest.raises(UnknownField):
        session.override('Ort', 'email')
    with pytest.raises(IntakeError):
        session.override('Land', 'city')
    with pytest.raises(IntakeError):
        session.override('5', 'city')


def test_preview_does_not_persist_or_freeze(config) -> None:
    text = 'Firmenname,Ort\nAcme,Köln\n,Bonn\n'
    session = ImportSession.from_text(OrganizationPipeline(config), text)

    outcome = session.preview()

    assert [r.name for r in session.records] == ['Acme']
    assert outcome.skipped_incomplete == 1
    assert not session.mapping.frozen


def test_header_only_file_is_a_parse_error(config, tmp_path: Path) -> None:
    path = tmp_path / 'leads.csv'
    path.write_text('Name,Email,Firma\n', encoding='utf-8')
    with pytest.raises(ParseError):
        ImportSession.from_file(ContactPipeline(config, suppressed_emails=()), path)


def test_duplicate_targets_last_column_wins(config, store) -> None:
    text = 'Firmenname,Company\nOld Name,New Name\n'
    session = ImportSession.from_text(OrganizationPipeline(config), text)
    assert session.mapping.duplicate_targets() == {'name': [0, 1]}

    asyncio.run(session.execute(store))
    assert store.rows(config.companies_table)[0]['name'] == 'New Name'
