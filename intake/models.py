"""
Record and outcome models for Outreach Intake

One explicit record type per entity shape, every optional attribute
declared. Records are built per row, handed to the executor, and dropped.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, fields, asdict
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


def _compact(values: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in values.items() if v is not None and v != '' and v != []}


@dataclass
class HiringSignal:
    """One open job posting, assembled from a numbered column slot."""
    title: str
    url: Optional[str] = None
    location: Optional[str] = None
    date: Optional[str] = None
    slot: int = field(default=0, compare=False)

    def to_dict(self) -> Dict[str, Any]:
        return _compact({
            'title': self.title,
            'url': self.url,
            'location': self.location,
            'date': self.date,
        })


@dataclass
class JobChangeData:
    previous_company: Optional[str] = None
    previous_title: Optional[str] = None
    new_company: Optional[str] = None
    new_title: Optional[str] = None
    date: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return _compact(asdict(self))


@dataclass
class LocationMoveData:
    from_country: Optional[str] = None
    from_state: Optional[str] = None
    to_country: Optional[str] = None
    to_state: Optional[str] = None
    date: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return _compact(asdict(self))


# Attributes that describe where a record came from, not what it holds
_BOOKKEEPING = ('row_number', 'raw', 'name_synthesized')


@dataclass
class OrganizationRecord:
    """Organization-only import record."""
    name: Optional[str] = None
    website: Optional[str] = None
    domain: Optional[str] = None
    industry: Optional[str] = None
    city: Optional[str] = None
    headcount: Optional[int] = None

    # Bookkeeping
    row_number: int = 0
    raw: Dict[str, str] = field(default_factory=dict)

    def missing_required(self) -> List[str]:
        return [] if self.name else ['name']

    def is_complete(self) -> bool:
        return not self.missing_required()

    def to_dict(self) -> Dict[str, Any]:
        """Populated attributes only."""
        return _compact({f.name: getattr(self, f.name) for f in fields(self) if f.name not in _BOOKKEEPING})


@dataclass
class ContactRecord:
    """Contact lead import record."""

    # Person
    full_name: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    email_verification_status: Optional[str] = None
    email_quality: Optional[str] = None
    role: Optional[str] = None
    decision_level: Optional[str] = None
    functional_area: Optional[str] = None
    seniority: Optional[str] = None
    department: Optional[str] = None
    education: Optional[str] = None
    mobile_phone: Optional[str] = None
    direct_phone: Optional[str] = None
    office_phone: Optional[str] = None
    linkedin_url: Optional[str] = None
    profile_id: Optional[str] = None
    lead_source: Optional[str] = None
    country: Optional[str] = None
    state: Optional[str] = None
    region: Optional[str] = None
    city: Optional[str] = None

    # Company
    company_name: Optional[str] = None
    company_alias: Optional[str] = None
    company_type: Optional[str] = None
    company_description: Optional[str] = None
    company_domain: Optional[str] = None
    company_website: Optional[str] = None
    company_linkedin_url: Optional[str] = None
    company_size: Optional[str] = None
    company_headcount: Optional[int] = None
    industry: Optional[str] = None
    company_industries: Optional[List[str]] = None
    company_technologies: Optional[List[str]] = None
    revenue_range: Optional[str] = None
    founding_year: Optional[int] = None
    open_positions_estimate: Optional[int] = None
    current_ats: Optional[str] = None
    hiring_volume: Optional[str] = None
    recruiting_challenges: Optional[List[str]] = None

    # Company address
    company_address_line: Optional[str] = None
    company_city: Optional[str] = None
    company_zip: Optional[str] = None
    company_state: Optional[str] = None
    company_country: Optional[str] = None

    # Headquarters
    hq_address_line: Optional[str] = None
    hq_city: Optional[str] = None
    hq_zip: Optional[str] = None
    hq_state: Optional[str] = None
    hq_country: Optional[str] = None

    # Meta / campaign
    segment: Optional[str] = None
    priority: Optional[str] = None
    score: Optional[int] = None
    campaign: Optional[str] = None
    notes: Optional[str] = None
    tags: Optional[List[str]] = None

    # Signals
    hiring_signals: Optional[List[HiringSignal]] = None
    job_change_data: Optional[JobChangeData] = None
    location_move_data: Optional[LocationMoveData] = None

    # Bookkeeping
    row_number: int = 0
    raw: Dict[str, str] = field(default_factory=dict)
    name_synthesized: bool = False

    def missing_required(self) -> List[str]:
        """
        Required: company name, e-mail, and either an explicit full name or
        both first and last name.
        """
        missing = []
        if not self.company_name:
            missing.append('company_name')
        has_name = (self.full_name and not self.name_synthesized) or (self.first_name and self.last_name)
        if not has_name:
            missing.append('full_name')
        if not self.email:
            missing.append('email')
        return missing

    def is_complete(self) -> bool:
        return not self.missing_required()

    def to_dict(self) -> Dict[str, Any]:
        """Populated attributes only, signal structures as plain dicts/lists."""
        values = {}
        for f in fields(self):
            if f.name in _BOOKKEEPING:
                continue
            values[f.name] = getattr(self, f.name)

        if self.hiring_signals:
            values['hiring_signals'] = [signal.to_dict() for signal in self.hiring_signals]
        if self.job_change_data:
            values['job_change_data'] = self.job_change_data.to_dict()
        if self.location_move_data:
            values['location_move_data'] = self.location_move_data.to_dict()

        return _compact(values)


def record_attribute_names(record_type) -> Tuple[str, ...]:
    """Declared data attributes of a record type (bookkeeping excluded)."""
    return tuple(f.name for f in fields(record_type) if f.name not in _BOOKKEEPING)


class PersistStatus(Enum):
    CREATED = 'created'
    DUPLICATE = 'duplicate'
    ERROR = 'error'
    SUPPRESSED = 'suppressed'


@dataclass
class PersistResult:
    """What happened to one record at the persistence layer."""
    status: PersistStatus
    record_id: Optional[str] = None
    company_created: bool = False
    reason: Optional[str] = None


@dataclass
class ImportIssue:
    """A row that was not created, and why."""
    row: int
    key: str
    reason: str


@dataclass
class ImportOutcome(ABC):
    """Counters shared by both import shapes."""
    duplicates: int = 0
    errors: int = 0
    skipped_incomplete: int = 0
    issues: List[ImportIssue] = field(default_factory=list)

    @abstractmethod
    def _count_created(self, result: PersistResult) -> None:
        pass

    @property
    @abstractmethod
    def created_count(self) -> int:
        pass

    def record(self, result: PersistResult, row: int = 0, key: str = '') -> None:
        """Fold one persist result into the counters."""
        if result.status is PersistStatus.CREATED:
            self._count_created(result)
        elif result.status is PersistStatus.DUPLICATE:
            self.duplicates += 1
        elif result.status is PersistStatus.SUPPRESSED:
            self._count_suppressed(result)
            self.issues.append(ImportIssue(row, key, result.reason or 'suppressed'))
        else:
            self.errors += 1
            self.issues.append(ImportIssue(row, key, result.reason or 'insert failed'))

    def _count_suppressed(self, result: PersistResult) -> None:
        self.errors += 1

    def record_skipped(self, row: int, missing: List[str]) -> None:
        self.skipped_incomplete += 1
        self.issues.append(ImportIssue(row, '', f"missing required: {', '.join(missing)}"))

    @property
    def processed(self) -> int:
        return self.created_count + self.duplicates + self.errors

    def as_dict(self) -> Dict[str, int]:
        return {k: v for k, v in asdict(self).items() if k != 'issues'}


@dataclass
class OrganizationOutcome(ImportOutcome):
    created: int = 0

    def _count_created(self, result: PersistResult) -> None:
        self.created += 1

    @property
    def created_count(self) -> int:
        return self.created

    def as_dict(self) -> Dict[str, int]:
        return {
            'created': self.created,
            'duplicates': self.duplicates,
            'errors': self.errors,
            'skipped_incomplete': self.skipped_incomplete,
        }


@dataclass
class ContactOutcome(ImportOutcome):
    contacts_created: int = 0
    companies_created: int = 0
    suppressed: int = 0

    def record(self, result: PersistResult, row: int = 0, key: str = '') -> None:
        # A parent organization can be created even when the contact insert fails
        if result.company_created:
            self.companies_created += 1
        super().record(result, row, key)

    def _count_created(self, result: PersistResult) -> None:
        self.contacts_created += 1

    def _count_suppressed(self, result: PersistResult) -> None:
        self.suppressed += 1

    @property
    def created_count(self) -> int:
        return self.contacts_created

    @property
    def processed(self) -> int:
        return super().processed + self.suppressed

    def as_dict(self) -> Dict[str, int]:
        return {
            'contacts_created': self.contacts_created,
            'companies_created': self.companies_created,
            'duplicates': self.duplicates,
            'errors': self.errors,
            'suppressed': self.suppressed,
            'skipped_incomplete': self.skipped_incomplete,
        }
