import pytest

from core.models import SKIP
from intake.catalog import CONTACT_PATTERNS
from intake.loaders import parse_table
from intake.mappers import AutoMapper, classify_column, classify_organization_column
from intake.mappers.auto_mapper import contains_phrase


@pytest.mark.parametrize('header, expected', [
    ('Name', 'full_name'),
    ('E-Mail', 'email'),
    ('Firma', 'company_name'),
    ('Company Name', 'company_name'),
    ('companyName', 'company_name'),
    ('Vorname', 'first_name'),
    ('Last Name', 'last_name'),
    ('Hiring Title 1', 'hiring_title_1'),
    ('Hiring_Title_1', 'hiring_title_1'),
    ('Job Posting 2 URL', 'hiring_url_2'),
    ('Previous Company', 'job_change_previous_company'),
    ('HQ City', 'hq_city'),
    ('Email Verification Status', 'email_verification_status'),
    ('Level', 'seniority'),
])
def test_exact_phrases(header: str, expected: str) -> None:
    assert classify_column(header) == expected


@pytest.mark.parametrize('header, expected', [
    ('Name Unternehmen', 'company_name'),
    ('LinkedIn Profile URL', 'linkedin_url'),
    ('Email Status Code', 'email_verification_status'),
    ('Anzahl der Mitarbeiter', 'company_headcount'),
])
def test_whole_word_phrases_longest_first(header: str, expected: str) -> None:
    assert classify_column(header) == expected


def test_exclusion_vetoes_generic_name_match() -> None:
    assert classify_column('Name of Company') == 'company_name'
    assert classify_column('Name of Company') != 'full_name'


def test_exclusion_can_leave_header_unmapped() -> None:
    assert classify_column('Office Mobile') == SKIP
    assert classify_column('Company Name (previous)') != 'company_name'


def test_word_boundaries() -> None:
    assert contains_phrase('cell phone', 'cell')
    assert not contains_phrase('parcel', 'cell')
    assert classify_column('Parcel') == SKIP


def test_email_fallback_needs_email_like_samples() -> None:
    header = 'Mailadresse Person'
    assert classify_column(header, samples=['jane@acme.de']) == 'email'
    assert classify_column(header) == SKIP
    assert classify_column(header, samples=['n/a', 'unknown']) == SKIP


def test_email_fallback_ignores_status_columns() -> None:
    assert classify_column('Mailstatus', samples=['jane@acme.de']) == SKIP


def test_email_fallback_honours_email_exclusions() -> None:
    for header in ('Email Opt-Out', 'Email Sent', 'Email Opened', 'Email Domain', 'Email Score'):
        assert classify_column(header, samples=['jane@acme.de']) != 'email', header


def test_unknown_header_is_skipped() -> None:
    assert classify_column('Spalte 17') == SKIP
    assert classify_column('   ') == SKIP


def test_classifier_is_pure() -> None:
    headers = ['Name', 'Name of Company', 'Mailadresse Person', 'Hiring 3 Location']
    first = [classify_column(h, CONTACT_PATTERNS, ['a@b.de']) for h in headers]
    second = [classify_column(h, CONTACT_PATTERNS, ['a@b.de']) for h in headers]
    assert first == second


@pytest.mark.parametrize('header, expected', [
    ('Firmenname', 'name'),
    ('Name', 'name'),
    ('Website URL', 'website'),
    ('Domain', 'domain'),
    ('Branche', 'industry'),
    ('Standort', 'city'),
    ('Mitarbeiteranzahl', 'headcount'),
    ('Vorname', SKIP),
])
def test_organization_classifier(header: str, expected: str) -> None:
    assert classify_organization_column(header) == expected


def test_organization_classifier_first_field_wins() -> None:
    # 'company' belongs to name, which is tried before headcount
    assert classify_organization_column('Company Size') == 'name'


def test_auto_map_contacts() -> None:
    table = parse_table('Name,Email,Firma\nJane Doe,jane@acme.de,Acme\n')
    mapper = AutoMapper.for_contacts()
    mapping = mapper.auto_map(table)

    assert mapping.as_dict() == {0: 'full_name', 1: 'email', 2: 'company_name'}
    assert mapper.is_complete(mapping)
    assert mapper.get_mapping_confidence(mapping) == pytest.approx(1.0)
    assert not mapping.frozen


def test_auto_map_uses_samples_for_contacts() -> None:
    table = parse_table('Kontaktmail,Firma,Name\njane@acme.de,Acme,Jane\n')
    mapping = AutoMapper.for_contacts().auto_map(table)
    assert mapping[0] == 'email'


def test_auto_map_organizations() -> None:
    table = parse_table('Firmenname;Ort;Irgendwas\nAcme GmbH;Köln;x\n')
    mapper = AutoMapper.for_organizations()
    mapping = mapper.auto_map(table)

    assert mapping.as_dict() == {0: 'name', 1: 'city', 2: SKIP}
    assert mapper.missing_required(mapping) == []
    assert mapper.get_mapping_confidence(mapping) == pytest.approx(0.8 + 0.2 * 2 / 3)
    assert mapper.get_mapping_summary(mapping, table.headers) == {'name': 'Firmenname', 'city': 'Ort'}


def test_auto_map_reports_missing_required() -> None:
    table = parse_table('Vorname,Email\nJane,jane@acme.de\n')
    mapper = AutoMapper.for_contacts()
    mapping = mapper.auto_map(table)
    assert mapper.missing_required(mapping) == ['full_name', 'company_name']
    assert not mapper.is_complete(mapping)


def test_custom_patterns_take_priority() -> None:
    mapper = AutoMapper.for_organizations({'name': ['Kunde']})
    assert mapper.classify('Kunde') == 'name'
    assert AutoMapper.for_organizations().classify('Kunde') == SKIP
