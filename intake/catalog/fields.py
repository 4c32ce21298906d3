"""
Field catalogs

Static description of every target field an import column may be mapped to,
one catalog per entity shape. Order matters: it is the display order and the
tie-break order for the column classifier.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Mapping, Optional, Tuple


# Value kinds used by the row normalizer
TEXT = 'text'
INTEGER = 'int'
LIST = 'list'

# Categories
ORGANIZATION = 'organization'
PERSON = 'person'
COMPANY = 'company'
COMPANY_ADDRESS = 'company_address'
HEADQUARTERS = 'headquarters'
HIRING_SIGNALS = 'hiring_signals'
JOB_CHANGE = 'job_change'
RELOCATION = 'relocation'
META = 'meta'

HIRING_SLOTS = range(1, 6)
HIRING_ATTRIBUTES = ('title', 'url', 'location', 'date')


@dataclass(frozen=True)
class FieldSpec:
    """One target field."""
    key: str
    label: str
    category: str
    required: bool = False
    kind: str = TEXT


@dataclass(frozen=True)
class FieldCatalog:
    """
    Ordered set of target fields for one entity shape.

    `alternatives` lets a required field be satisfied by a group of other
    fields instead (a contact's full name by first + last name).
    """
    name: str
    fields: Tuple[FieldSpec, ...]
    alternatives: Mapping[str, Tuple[str, ...]] = field(default_factory=dict)

    def __post_init__(self):
        index = {spec.key: spec for spec in self.fields}
        if len(index) != len(self.fields):
            raise ValueError(f"Duplicate field keys in {self.name} catalog")
        object.__setattr__(self, '_index', index)

    def __contains__(self, key: str) -> bool:
        return key in self._index

    def __iter__(self):
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    def get(self, key: str) -> Optional[FieldSpec]:
        return self._index.get(key)

    def keys(self) -> List[str]:
        return [spec.key for spec in self.fields]

    def kind_of(self, key: str) -> str:
        spec = self._index.get(key)
        return spec.kind if spec else TEXT

    def required_keys(self) -> List[str]:
        return [spec.key for spec in self.fields if spec.required]

    def missing_required(self, present: Iterable[str]) -> List[str]:
        """
        Required keys not covered by `present` (directly or via alternatives).

        Args:
            present: Field keys that are mapped (or populated)

        Returns:
            Missing required keys, in catalog order
        """
        present = set(present)
        missing = []
        for key in self.required_keys():
            if key in present:
                continue
            alternative = self.alternatives.get(key)
            if alternative and all(k in present for k in alternative):
                continue
            missing.append(key)
        return missing


ORGANIZATION_FIELDS = FieldCatalog(
    name='organizations',
    fields=(
        FieldSpec('name', 'Company name', ORGANIZATION, required=True),
        FieldSpec('website', 'Website', ORGANIZATION),
        FieldSpec('domain', 'Domain', ORGANIZATION),
        FieldSpec('industry', 'Industry', ORGANIZATION),
        FieldSpec('city', 'City', ORGANIZATION),
        FieldSpec('headcount', 'Headcount', ORGANIZATION, kind=INTEGER),
    ),
)


def hiring_key(attribute: str, slot: int) -> str:
    return f"hiring_{attribute}_{slot}"


def _hiring_fields() -> Tuple[FieldSpec, ...]:
    specs = []
    for slot in HIRING_SLOTS:
        for attribute in HIRING_ATTRIBUTES:
            specs.append(FieldSpec(
                hiring_key(attribute, slot),
                f"Hiring signal {slot}: {attribute}",
                HIRING_SIGNALS,
            ))
    return tuple(specs)


CONTACT_FIELDS = FieldCatalog(
    name='contacts',
    fields=(
        # Person
        FieldSpec('full_name', 'Full name', PERSON, required=True),
        FieldSpec('first_name', 'First name', PERSON),
        FieldSpec('last_name', 'Last name', PERSON),
        FieldSpec('email', 'E-mail', PERSON, required=True),
        FieldSpec('email_verification_status', 'E-mail verification status', PERSON),
        FieldSpec('email_quality', 'E-mail quality', PERSON),
        FieldSpec('role', 'Role / job title', PERSON),
        FieldSpec('decision_level', 'Decision level', PERSON),
        FieldSpec('functional_area', 'Functional area', PERSON),
        FieldSpec('seniority', 'Seniority', PERSON),
        FieldSpec('department', 'Department', PERSON),
        FieldSpec('education', 'Education', PERSON),
        FieldSpec('mobile_phone', 'Mobile phone', PERSON),
        FieldSpec('direct_phone', 'Direct phone', PERSON),
        FieldSpec('office_phone', 'Office phone', PERSON),
        FieldSpec('linkedin_url', 'LinkedIn URL', PERSON),
        FieldSpec('profile_id', 'Profile ID', PERSON),
        FieldSpec('lead_source', 'Lead source', PERSON),
        FieldSpec('country', 'Country', PERSON),
        FieldSpec('state', 'State', PERSON),
        FieldSpec('region', 'Region', PERSON),
        FieldSpec('city', 'City', PERSON),

        # Company
        FieldSpec('company_name', 'Company name', COMPANY, required=True),
        FieldSpec('company_alias', 'Company alias', COMPANY),
        FieldSpec('company_type', 'Company type', COMPANY),
        FieldSpec('company_description', 'Company description', COMPANY),
        FieldSpec('company_domain', 'Company domain', COMPANY),
        FieldSpec('company_website', 'Company website', COMPANY),
        FieldSpec('company_linkedin_url', 'Company LinkedIn URL', COMPANY),
        FieldSpec('company_size', 'Company size', COMPANY),
        FieldSpec('company_headcount', 'Company headcount', COMPANY, kind=INTEGER),
        FieldSpec('industry', 'Industry', COMPANY),
        FieldSpec('company_industries', 'Industries', COMPANY, kind=LIST),
        FieldSpec('company_technologies', 'Technologies', COMPANY, kind=LIST),
        FieldSpec('revenue_range', 'Revenue range', COMPANY),
        FieldSpec('founding_year', 'Founding year', COMPANY, kind=INTEGER),
        FieldSpec('open_positions_estimate', 'Open positions', COMPANY, kind=INTEGER),
        FieldSpec('current_ats', 'Current ATS', COMPANY),
        FieldSpec('hiring_volume', 'Hiring volume', COMPANY),
        FieldSpec('recruiting_challenges', 'Recruiting challenges', COMPANY, kind=LIST),

        # Company address
        FieldSpec('company_address_line', 'Company address', COMPANY_ADDRESS),
        FieldSpec('company_city', 'Company city', COMPANY_ADDRESS),
        FieldSpec('company_zip', 'Company ZIP', COMPANY_ADDRESS),
        FieldSpec('company_state', 'Company state', COMPANY_ADDRESS),
        FieldSpec('company_country', 'Company country', COMPANY_ADDRESS),

        # Headquarters
        FieldSpec('hq_address_line', 'HQ address', HEADQUARTERS),
        FieldSpec('hq_city', 'HQ city', HEADQUARTERS),
        FieldSpec('hq_zip', 'HQ ZIP', HEADQUARTERS),
        FieldSpec('hq_state', 'HQ state', HEADQUARTERS),
        FieldSpec('hq_country', 'HQ country', HEADQUARTERS),
    ) + _hiring_fields() + (
        # Job change signal
        FieldSpec('job_change_previous_company', 'Job change: previous company', JOB_CHANGE),
        FieldSpec('job_change_previous_title', 'Job change: previous title', JOB_CHANGE),
        FieldSpec('job_change_new_company', 'Job change: new company', JOB_CHANGE),
        FieldSpec('job_change_new_title', 'Job change: new title', JOB_CHANGE),
        FieldSpec('job_change_date', 'Job change: date', JOB_CHANGE),

        # Relocation signal
        FieldSpec('location_move_from_country', 'Relocation: from country', RELOCATION),
        FieldSpec('location_move_from_state', 'Relocation: from state', RELOCATION),
        FieldSpec('location_move_to_country', 'Relocation: to country', RELOCATION),
        FieldSpec('location_move_to_state', 'Relocation: to state', RELOCATION),
        FieldSpec('location_move_date', 'Relocation: date', RELOCATION),

        # Meta / campaign
        FieldSpec('segment', 'Segment', META),
        FieldSpec('priority', 'Priority', META),
        FieldSpec('score', 'Score', META, kind=INTEGER),
        FieldSpec('campaign', 'Campaign', META),
        FieldSpec('notes', 'Notes', META),
        FieldSpec('tags', 'Tags', META, kind=LIST),
    ),
    alternatives={'full_name': ('first_name', 'last_name')},
)
