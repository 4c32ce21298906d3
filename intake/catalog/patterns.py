"""
Header pattern dictionaries

Per-field header phrases (synonyms, abbreviations, German and English
variants) plus per-field exclusion phrases that veto a match. Phrases are
stored in the same normalized form the classifier applies to headers, so
'hiringTitle1', 'Hiring_Title_1' and 'Hiring Title 1' all read
'hiring title 1'.
"""

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from .fields import HIRING_SLOTS, hiring_key


_CAMEL = re.compile(r'(?<=[a-z])(?=[A-Z])')
_LETTER_DIGIT = re.compile(r'(?<=[^\W\d_])(?=\d)|(?<=\d)(?=[^\W\d_])')
_SEPARATORS = re.compile(r'[_.\s]+')


def normalize_header(text: str) -> str:
    """
    Lowercase, trim and tokenize a header for matching.

    camelCase is split only when the header has no separators of its own,
    so 'LinkedIn URL' stays 'linkedin url' while 'companyName' becomes
    'company name'. Letters and digits are always separated.

    Examples:
        >>> normalize_header('  Hiring_Title1 ')
        'hiring title 1'
    """
    text = (text or '').strip()
    if not re.search(r'[\s_\-.]', text):
        text = _CAMEL.sub(' ', text)
    text = _LETTER_DIGIT.sub(' ', text)
    text = _SEPARATORS.sub(' ', text.lower())
    return text.strip()


def _freeze(table: Optional[Mapping[str, Iterable[str]]]) -> Mapping[str, Tuple[str, ...]]:
    frozen = {}
    for key, phrases in (table or {}).items():
        normalized = []
        for phrase in phrases:
            value = normalize_header(phrase)
            if value and value not in normalized:
                normalized.append(value)
        frozen[key] = tuple(normalized)
    return MappingProxyType(frozen)


@dataclass(frozen=True)
class PatternDictionary:
    """
    Immutable header vocabulary for one catalog.

    Attributes:
        phrases: field -> phrases matched exactly or as whole words
        exclusions: field -> phrases whose presence vetoes a whole-word match
        exact_only: field -> phrases too generic for whole-word matching;
            they only count when they are the entire header
    """
    phrases: Mapping[str, Tuple[str, ...]]
    exclusions: Mapping[str, Tuple[str, ...]] = field(default_factory=dict)
    exact_only: Mapping[str, Tuple[str, ...]] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, 'phrases', _freeze(self.phrases))
        object.__setattr__(self, 'exclusions', _freeze(self.exclusions))
        object.__setattr__(self, 'exact_only', _freeze(self.exact_only))

        # Longest phrase first; the sort is stable, so ties keep field order
        pairs = [
            (field_key, phrase)
            for field_key, phrases in self.phrases.items()
            for phrase in phrases
        ]
        pairs.sort(key=lambda pair: len(pair[1]), reverse=True)
        object.__setattr__(self, '_ranked', tuple(pairs))

    def field_keys(self) -> List[str]:
        keys = list(self.phrases)
        keys.extend(k for k in self.exact_only if k not in self.phrases)
        return keys

    def ranked_pairs(self) -> Tuple[Tuple[str, str], ...]:
        """All (field, phrase) pairs, longest phrase first."""
        return self._ranked

    def exact_lookup(self, header: str) -> Optional[str]:
        """Field whose phrase list contains the normalized header verbatim."""
        for field_key in self.field_keys():
            if header in self.phrases.get(field_key, ()) or header in self.exact_only.get(field_key, ()):
                return field_key
        return None

    def is_excluded(self, field_key: str, header: str) -> bool:
        return any(phrase in header for phrase in self.exclusions.get(field_key, ()))

    def extend(self, custom_phrases: Mapping[str, Iterable[str]]) -> 'PatternDictionary':
        """
        Copy with custom phrases prepended (higher priority) per field.

        Args:
            custom_phrases: field -> extra phrases

        Returns:
            New PatternDictionary; self is unchanged
        """
        merged: Dict[str, List[str]] = {k: list(v) for k, v in self.phrases.items()}
        for field_key, phrases in custom_phrases.items():
            merged[field_key] = list(phrases) + merged.get(field_key, [])
        return PatternDictionary(
            phrases=merged,
            exclusions=dict(self.exclusions),
            exact_only=dict(self.exact_only),
        )


# ── Organization import ─────────────────────────────────────────────────────
# Consumed in field order by the single-phase substring classifier.

ORGANIZATION_PATTERNS = PatternDictionary(
    phrases={
        'name': ['firmenname', 'company', 'firma', 'unternehmen', 'organization', 'organisation'],
        'website': ['website', 'url', 'homepage', 'webseite'],
        'domain': ['domain'],
        'industry': ['branche', 'industry', 'sector', 'sektor'],
        'city': ['stadt', 'city', 'ort'],
        'headcount': ['mitarbeiter', 'headcount', 'employee', 'size', 'größe'],
    },
    exact_only={
        'name': ['name'],
    },
)


# ── Contact import ──────────────────────────────────────────────────────────

_HIRING_PREFIXES = (
    'hiring', 'job posting', 'posting', 'open position', 'open role',
    'vacancy', 'stellenanzeige', 'vakanz',
)
_UNNUMBERED_PREFIXES = ('hiring', 'job posting', 'stellenanzeige')
_HIRING_ATTRIBUTE_WORDS = {
    'title': ('title', 'titel', 'name', 'role'),
    'url': ('url', 'link'),
    'location': ('location', 'standort', 'ort'),
    'date': ('date', 'datum', 'posted', 'posted date'),
}
_HIRING_EXCLUSIONS = {
    'title': ('url', 'link', 'location', 'standort', 'date', 'datum', 'posted'),
    'url': ('location', 'standort', 'date', 'datum'),
    'location': ('url', 'link', 'date', 'datum'),
    'date': ('url', 'link', 'location', 'standort'),
}


def _hiring_phrases() -> Dict[str, List[str]]:
    phrases: Dict[str, List[str]] = {}
    for slot in HIRING_SLOTS:
        for attribute, words in _HIRING_ATTRIBUTE_WORDS.items():
            entries = []
            for prefix in _HIRING_PREFIXES:
                for word in words:
                    entries.append(f"{prefix} {word} {slot}")
                    entries.append(f"{prefix} {slot} {word}")
                if attribute == 'title':
                    entries.append(f"{prefix} {slot}")
                if slot == 1 and prefix in _UNNUMBERED_PREFIXES:
                    entries.extend(f"{prefix} {word}" for word in words)
            phrases[hiring_key(attribute, slot)] = entries
    return phrases


def _hiring_exclusions() -> Dict[str, Tuple[str, ...]]:
    return {
        hiring_key(attribute, slot): excluded
        for slot in HIRING_SLOTS
        for attribute, excluded in _HIRING_EXCLUSIONS.items()
    }


_COMPANY_WORDS = ('company', 'firma', 'firmen', 'unternehmen', 'organization', 'organisation', 'account')
_HQ_WORDS = ('hq', 'headquarter', 'hauptsitz', 'zentrale')
_MOVE_WORDS = ('move', 'moved', 'umzug', 'relocat', 'from', 'previous', 'herkunft', 'zielland')
_PERSON_LOCATION_EXCLUSIONS = _COMPANY_WORDS + _HQ_WORDS + _MOVE_WORDS + ('hiring', 'posting', 'job')

CONTACT_PATTERNS = PatternDictionary(
    phrases={
        # Person
        'full_name': [
            'name', 'full name', 'fullname', 'contact name', 'contact person', 'person name',
            'lead name', 'prospect name', 'kontaktname', 'kontaktperson', 'kontakt',
            'ansprechpartner', 'ansprechpartnerin', 'vollständiger name',
        ],
        'first_name': ['first name', 'firstname', 'vorname', 'given name', 'forename'],
        'last_name': ['last name', 'lastname', 'nachname', 'surname', 'family name', 'familienname'],
        'email': [
            'email', 'e-mail', 'e mail', 'mail', 'email address', 'e-mail address', 'e-mail-adresse',
            'e-mail adresse', 'emailadresse', 'mail address', 'work email', 'business email',
            'contact email', 'primary email', 'geschäftliche e-mail',
        ],
        'email_verification_status': [
            'email verification status', 'email verification', 'email status', 'e-mail status',
            'verification status', 'email verified', 'email validation', 'e-mail verifizierung',
            'verifizierungsstatus',
        ],
        'email_quality': ['email quality', 'e-mail qualität', 'email confidence', 'email score'],
        'role': [
            'job title', 'title', 'position', 'role', 'rolle', 'titel', 'jobtitel', 'current title',
            'contact role', 'berufsbezeichnung', 'stellenbezeichnung',
        ],
        'decision_level': [
            'decision level', 'decision maker', 'decision', 'entscheider', 'entscheider-level',
            'entscheiderlevel', 'entscheidungsebene',
        ],
        'functional_area': [
            'functional area', 'function', 'job function', 'business function', 'funktion',
            'funktionsbereich', 'bereich',
        ],
        'seniority': ['seniority', 'seniority level', 'management level', 'seniorität', 'hierarchie'],
        'department': ['department', 'abteilung', 'dept'],
        'education': ['education', 'ausbildung', 'studium', 'degree', 'university', 'hochschule'],
        'mobile_phone': [
            'mobile', 'mobile phone', 'mobil', 'mobilnummer', 'mobiltelefon', 'handy', 'cell',
            'cell phone', 'phone', 'phone number', 'telefon', 'telefonnummer', 'telephone', 'tel',
        ],
        'direct_phone': ['direct phone', 'direct dial', 'direct number', 'durchwahl', 'direktwahl'],
        'office_phone': [
            'office phone', 'work phone', 'company phone', 'business phone', 'hq phone',
            'büro telefon', 'bürotelefon', 'festnetz', 'zentrale telefon',
        ],
        'linkedin_url': [
            'linkedin', 'linkedin url', 'linkedin profile', 'linkedin profil', 'personal linkedin',
            'person linkedin url', 'contact linkedin',
        ],
        'profile_id': ['profile id', 'person id', 'contact id', 'lead id'],
        'lead_source': ['lead source', 'source', 'quelle', 'lead quelle', 'datenquelle'],
        'country': ['country', 'land', 'person country', 'contact country'],
        'state': ['state', 'bundesland', 'province', 'person state'],
        'region': ['region', 'sales region', 'territory', 'gebiet'],
        'city': ['city', 'stadt', 'ort', 'location', 'wohnort', 'person city', 'contact city'],

        # Company
        'company_name': [
            'company', 'company name', 'companyname', 'firma', 'firmenname', 'unternehmen',
            'unternehmensname', 'organization', 'organisation', 'organization name', 'account',
            'account name', 'employer', 'arbeitgeber', 'business name', 'firm',
        ],
        'company_alias': ['company alias', 'alias', 'short name', 'kurzname', 'brand', 'marke', 'dba'],
        'company_type': ['company type', 'unternehmenstyp', 'firmentyp', 'rechtsform', 'legal form', 'ownership'],
        'company_description': [
            'company description', 'description', 'beschreibung', 'about', 'about company',
            'firmenbeschreibung', 'unternehmensbeschreibung', 'company overview', 'overview',
        ],
        'company_domain': ['domain', 'company domain', 'website domain', 'domain name', 'domäne'],
        'company_website': [
            'website', 'company website', 'web', 'url', 'homepage', 'webseite', 'internetseite',
            'company url', 'site', 'www',
        ],
        'company_linkedin_url': [
            'company linkedin', 'company linkedin url', 'company linkedin profile', 'linkedin company',
            'linkedin company url', 'firmen linkedin', 'unternehmens linkedin', 'organization linkedin',
        ],
        'company_size': [
            'company size', 'size', 'größe', 'groesse', 'unternehmensgröße', 'size range',
            'employee range', 'mitarbeiterspanne',
        ],
        'company_headcount': [
            'headcount', 'company headcount', 'employees', 'employee count', 'number of employees',
            'mitarbeiter', 'mitarbeiterzahl', 'anzahl mitarbeiter', 'staff count', '# employees',
        ],
        'industry': ['industry', 'branche', 'sector', 'sektor', 'vertical'],
        'company_industries': ['industries', 'company industries', 'branchen', 'sub industries', 'sectors'],
        'company_technologies': [
            'technologies', 'technology', 'company technologies', 'tech stack', 'technologien',
            'software stack',
        ],
        'revenue_range': [
            'revenue', 'revenue range', 'annual revenue', 'company revenue', 'umsatz', 'jahresumsatz',
            'umsatzklasse', 'financials', 'turnover',
        ],
        'founding_year': [
            'founded', 'founding year', 'founded year', 'year founded', 'gründungsjahr',
            'gruendungsjahr', 'gegründet', 'established',
        ],
        'open_positions_estimate': [
            'open positions', 'open jobs', 'offene stellen', 'number of open positions',
            'job openings', 'vacancies',
        ],
        'current_ats': [
            'ats', 'current ats', 'applicant tracking system', 'bewerbermanagementsystem',
            'bewerbermanagement', 'recruiting software',
        ],
        'hiring_volume': ['hiring volume', 'recruiting volume', 'hires per year', 'einstellungsvolumen'],
        'recruiting_challenges': ['recruiting challenges', 'challenges', 'pain points', 'herausforderungen'],

        # Company address
        'company_address_line': [
            'company address', 'address', 'adresse', 'address line', 'street', 'straße', 'strasse',
            'anschrift', 'company street', 'firmenadresse',
        ],
        'company_city': ['company city', 'firmenort', 'firmen stadt', 'unternehmensstadt'],
        'company_zip': [
            'zip', 'zip code', 'postal code', 'postcode', 'plz', 'postleitzahl', 'company zip',
            'company postal code',
        ],
        'company_state': ['company state', 'company region', 'firmen bundesland'],
        'company_country': ['company country', 'firmenland', 'unternehmensland', 'country of company'],

        # Headquarters
        'hq_address_line': [
            'hq address', 'hq street', 'headquarters address', 'headquarter address', 'hauptsitz adresse',
        ],
        'hq_city': ['hq city', 'headquarters city', 'headquarter city', 'hauptsitz stadt', 'hauptsitz'],
        'hq_zip': ['hq zip', 'hq postal code', 'headquarters zip', 'headquarters postal code', 'hauptsitz plz'],
        'hq_state': ['hq state', 'headquarters state', 'headquarter state', 'hauptsitz bundesland'],
        'hq_country': ['hq country', 'headquarters country', 'headquarter country', 'hauptsitz land'],

        **_hiring_phrases(),

        # Job change signal
        'job_change_previous_company': [
            'previous company', 'former company', 'old company', 'previous employer', 'former employer',
            'vorheriger arbeitgeber', 'ehemaliger arbeitgeber', 'vorherige firma',
            'job change previous company',
        ],
        'job_change_previous_title': [
            'previous title', 'former title', 'old title', 'previous job title', 'previous position',
            'former position', 'vorherige position', 'job change previous title',
        ],
        'job_change_new_company': [
            'new company', 'new employer', 'neuer arbeitgeber', 'neue firma', 'job change new company',
        ],
        'job_change_new_title': [
            'new title', 'new job title', 'new position', 'neue position', 'job change new title',
        ],
        'job_change_date': [
            'job change date', 'date of job change', 'job change', 'job changed', 'jobwechsel',
            'jobwechsel datum',
        ],

        # Relocation signal
        'location_move_from_country': [
            'from country', 'move from country', 'moved from country', 'previous country',
            'location move from country', 'herkunftsland', 'umzug von land',
        ],
        'location_move_from_state': [
            'from state', 'move from state', 'moved from state', 'previous state', 'location move from state',
        ],
        'location_move_to_country': [
            'to country', 'move to country', 'moved to country', 'new country',
            'location move to country', 'zielland', 'umzug nach land',
        ],
        'location_move_to_state': [
            'to state', 'move to state', 'moved to state', 'new state', 'location move to state',
        ],
        'location_move_date': [
            'location move date', 'move date', 'moved date', 'relocation date', 'umzugsdatum',
        ],

        # Meta / campaign
        'segment': ['segment', 'customer segment', 'zielgruppe'],
        'priority': ['priority', 'priorität', 'prio'],
        'score': ['score', 'lead score', 'bewertung'],
        'campaign': ['campaign', 'campaign name', 'kampagne', 'sequence'],
        'notes': ['notes', 'note', 'notizen', 'notiz', 'comment', 'comments', 'kommentar', 'bemerkung'],
        'tags': ['tags', 'tag', 'labels', 'schlagworte'],
    },
    exclusions={
        'full_name': _COMPANY_WORDS + (
            'first', 'last', 'vorname', 'nachname', 'user', 'file', 'domain', 'campaign', 'kampagne',
            'product', 'produkt', 'school', 'hiring', 'posting', 'stellen', 'brand', 'short',
            'mail', 'phone', 'telefon', 'mobil', 'handy', 'linkedin', 'title', 'titel', 'position',
            'rolle', 'role', 'city', 'stadt', 'country',
        ),
        'first_name': _COMPANY_WORDS,
        'last_name': _COMPANY_WORDS,
        'email': (
            'verif', 'status', 'quality', 'qualität', 'valid', 'bounce', 'confidence', 'score',
            'domain', 'opt', 'sent', 'opened',
        ),
        'role': (
            'previous', 'former', 'vorherig', 'ehemalig', 'new', 'neue', 'hiring', 'posting',
            'stellenanzeige', 'vacancy', 'vakanz', 'open',
        ),
        'functional_area': ('job change',),
        'mobile_phone': ('office', 'work', 'company', 'business', 'direct', 'büro', 'firmen', 'zentrale', 'hq', 'fax'),
        'linkedin_url': _COMPANY_WORDS,
        'lead_source': ('hiring',),
        'country': _PERSON_LOCATION_EXCLUSIONS,
        'state': _PERSON_LOCATION_EXCLUSIONS,
        'region': _COMPANY_WORDS + _HQ_WORDS,
        'city': _PERSON_LOCATION_EXCLUSIONS,
        'company_name': (
            'website', 'domain', 'url', 'linkedin', 'size', 'headcount', 'employee', 'mitarbeiter',
            'industr', 'address', 'adresse', 'street', 'strasse', 'straße', 'city', 'stadt', 'zip',
            'plz', 'postal', 'country', 'state', 'phone', 'telefon', 'description', 'beschreibung',
            'type', 'alias', 'technolog', 'revenue', 'umsatz', 'founded', 'gegründet',
            'previous', 'former', 'new', 'neue', 'neuer', 'vorherig', 'ehemalig',
        ),
        'company_website': (
            'linkedin', 'hiring', 'posting', 'stellen', 'job', 'profile', 'facebook', 'twitter',
            'xing', 'instagram', 'logo', 'image', 'photo',
        ),
        'company_size': ('growth', 'wachstum'),
        'company_headcount': ('range', 'spanne', 'growth', 'wachstum'),
        'company_address_line': _HQ_WORDS + ('mail', 'ip address', 'web'),
        'company_zip': _HQ_WORDS,
        'open_positions_estimate': ('title', 'url', 'link', 'location', 'date'),
        'job_change_date': ('previous', 'new', 'company', 'title'),
        **_hiring_exclusions(),
    },
    exact_only={
        'first_name': ['first', 'given'],
        'last_name': ['last'],
        'seniority': ['level'],
        'company_type': ['type', 'typ'],
        'profile_id': ['id'],
        'department': ['team'],
    },
)


# Sample-driven e-mail fallback
EMAIL_HINTS = ('mail',)
