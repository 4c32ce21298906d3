"""
Import pipelines

One concrete pipeline per entity shape. Both share the tokenizer, the
executor and the store contract; each owns its field catalog, pattern
dictionary, record builder and persistence rules.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Tuple

from core.config import ImporterConfig, get_config
from .catalog import (
    CONTACT_FIELDS, CONTACT_PATTERNS, ORGANIZATION_FIELDS, ORGANIZATION_PATTERNS,
    FieldCatalog, PatternDictionary,
)
from .mappers import AutoMapper
from .models import (
    ContactOutcome, ContactRecord, ImportOutcome, OrganizationOutcome,
    OrganizationRecord, PersistResult, PersistStatus, record_attribute_names,
)
from .normalizers import domain_label, extract_domain, looks_like_email, normalize_domain, normalize_email
from .normalizers.row_normalizer import ContactBuilder, OrganizationBuilder, RecordBuilder
from .stores import InsertResult, RecordStore

logger = logging.getLogger(__name__)


def _organization_row(
    name: str,
    domain: str,
    website: Optional[str] = None,
    industry: Optional[str] = None,
    city: Optional[str] = None,
    headcount: Optional[int] = None
) -> Dict[str, Any]:
    return {
        'name': name,
        'domain': domain or None,
        'website': website or (f'https://{domain}' if domain else None),
        'industry': industry,
        'city': city,
        'headcount': headcount,
        'outreach_status': 'neu',
        'warm_score': 0,
    }


def _from_insert(result: InsertResult, company_created: bool = False) -> PersistResult:
    if result.conflict:
        return PersistResult(PersistStatus.DUPLICATE, company_created=company_created,
                             reason=result.error_reason)
    if result.error_reason:
        return PersistResult(PersistStatus.ERROR, company_created=company_created,
                             reason=result.error_reason)
    return PersistResult(PersistStatus.CREATED, record_id=result.id, company_created=company_created)


class ImportPipeline(ABC):
    """
    Per-shape import behaviour.

    Subclasses set `name`, `catalog`, `patterns`, `builder` and `record_type`, and
    implement natural-key probing plus persistence.
    """

    name: str = ''
    catalog: FieldCatalog
    patterns: PatternDictionary
    builder: RecordBuilder
    record_type: type

    def __init__(self, config: Optional[ImporterConfig] = None):
        self.config = config or get_config()

    @abstractmethod
    def create_mapper(self, custom_patterns: Optional[Dict[str, List[str]]] = None) -> AutoMapper:
        pass

    @abstractmethod
    def new_outcome(self) -> ImportOutcome:
        pass

    @abstractmethod
    def natural_key(self, record) -> Dict[str, Any]:
        """Column filter used to probe for an already-persisted record."""
        pass

    def report_columns(self) -> List[str]:
        """Record attributes in declaration order; signals stay composed."""
        return list(record_attribute_names(self.record_type))

    def describe(self, record) -> str:
        """Short identifier for issue reports."""
        key = self.natural_key(record)
        return ', '.join(str(v) for v in key.values())

    @abstractmethod
    async def persist(self, record, store: RecordStore) -> PersistResult:
        """Probe, then insert one record. Store exceptions propagate."""
        pass


class OrganizationPipeline(ImportPipeline):
    """Organization-only import: one row becomes one organization."""

    name = 'organizations'
    catalog = ORGANIZATION_FIELDS
    patterns = ORGANIZATION_PATTERNS
    builder = OrganizationBuilder()
    record_type = OrganizationRecord

    @property
    def table(self) -> str:
        return self.config.companies_table

    def create_mapper(self, custom_patterns: Optional[Dict[str, List[str]]] = None) -> AutoMapper:
        return AutoMapper.for_organizations(custom_patterns)

    def new_outcome(self) -> OrganizationOutcome:
        return OrganizationOutcome()

    @staticmethod
    def record_domain(record: OrganizationRecord) -> str:
        return normalize_domain(record.domain) or normalize_domain(record.website)

    def natural_key(self, record: OrganizationRecord) -> Dict[str, Any]:
        domain = self.record_domain(record)
        return {'domain': domain} if domain else {'name': record.name}

    def to_row(self, record: OrganizationRecord) -> Dict[str, Any]:
        return _organization_row(
            record.name,
            self.record_domain(record),
            website=record.website,
            industry=record.industry,
            city=record.city,
            headcount=record.headcount,
        )

    async def persist(self, record: OrganizationRecord, store: RecordStore) -> PersistResult:
        existing = await store.find_one(self.table, self.natural_key(record))
        if existing:
            return PersistResult(PersistStatus.DUPLICATE, record_id=existing.get('id'))

        return _from_insert(await store.insert(self.table, self.to_row(record)))


class ContactPipeline(ImportPipeline):
    """
    Contact lead import.

    Each contact is linked to an organization, which is looked up by domain
    or name and created when missing.
    """

    name = 'contacts'
    catalog = CONTACT_FIELDS
    patterns = CONTACT_PATTERNS
    builder = ContactBuilder()
    record_type = ContactRecord

    def __init__(
        self,
        config: Optional[ImporterConfig] = None,
        suppressed_emails: Optional[Iterable[str]] = None
    ):
        super().__init__(config)
        if suppressed_emails is None:
            self.suppressed_emails: FrozenSet[str] = self.config.load_suppression_list()
        else:
            self.suppressed_emails = frozenset(normalize_email(e) for e in suppressed_emails)

    @property
    def table(self) -> str:
        return self.config.leads_table

    @property
    def companies_table(self) -> str:
        return self.config.companies_table

    def create_mapper(self, custom_patterns: Optional[Dict[str, List[str]]] = None) -> AutoMapper:
        return AutoMapper.for_contacts(self.config.sample_size, custom_patterns)

    def new_outcome(self) -> ContactOutcome:
        return ContactOutcome()

    def natural_key(self, record: ContactRecord) -> Dict[str, Any]:
        return {'contact_email': normalize_email(record.email)}

    @staticmethod
    def company_domain(record: ContactRecord) -> str:
        return (
            normalize_domain(record.company_domain)
            or normalize_domain(record.company_website)
            or extract_domain(record.email)
        )

    async def resolve_company(self, record: ContactRecord, store: RecordStore) -> Tuple[Optional[str], bool, Optional[str]]:
        """
        Find or create the contact's organization.

        Returns:
            (company id, created?, failure reason)
        """
        domain = self.company_domain(record)

        existing = None
        if domain:
            existing = await store.find_one(self.companies_table, {'domain': domain})
        if existing is None and record.company_name:
            existing = await store.find_one(self.companies_table, {'name': record.company_name})
        if existing:
            return existing.get('id'), False, None

        name = record.company_name or domain_label(domain)
        row = _organization_row(
            name,
            domain,
            website=record.company_website,
            industry=record.industry,
            city=record.company_city or record.hq_city,
            headcount=record.company_headcount,
        )
        result = await store.insert(self.companies_table, row)

        if result.conflict and domain:
            # Created by someone else since the probe
            existing = await store.find_one(self.companies_table, {'domain': domain})
            if existing:
                return existing.get('id'), False, None
        if not result.ok:
            return None, False, f"company insert failed: {result.error_reason or 'conflict'}"

        logger.debug("Created organization %r for row %d", name, record.row_number)
        return result.id, True, None

    def to_row(self, record: ContactRecord, company_id: Optional[str]) -> Dict[str, Any]:
        row = record.to_dict()

        # Lead table column names
        row['contact_name'] = row.pop('full_name', None)
        row['contact_email'] = normalize_email(row.pop('email', None))
        row['contact_role'] = row.pop('role', None)
        row['contact_linkedin'] = row.pop('linkedin_url', None)
        row['contact_phone'] = record.mobile_phone or record.direct_phone or record.office_phone
        row['list_name'] = row.pop('campaign', None)

        row['company_id'] = company_id
        row['decision_level'] = record.decision_level or 'unknown'
        row['functional_area'] = record.functional_area or 'unknown'
        row['lead_source'] = record.lead_source or 'import'
        row['segment'] = record.segment or 'hiring_company'
        row['priority'] = record.priority or 'warm'
        row['outreach_status'] = 'not_contacted'

        # A bare 'state' has no lead column; it feeds region and the company address
        state = row.pop('state', None)
        row['company_state'] = record.company_state or state
        for part in ('address_line', 'city', 'zip', 'country'):
            row[f'hq_{part}'] = getattr(record, f'hq_{part}') or getattr(record, f'company_{part}')
        row['hq_state'] = record.hq_state or row['company_state']

        row['country'] = record.country or record.company_country or record.hq_country or 'DE'
        row['region'] = record.region or state or record.company_state or record.hq_state
        row['city'] = record.city or record.company_city or record.hq_city

        return {key: value for key, value in row.items() if value is not None}

    async def persist(self, record: ContactRecord, store: RecordStore) -> PersistResult:
        email = normalize_email(record.email)
        if not looks_like_email(email):
            return PersistResult(PersistStatus.ERROR, reason=f"invalid e-mail '{record.email}'")

        if email in self.suppressed_emails:
            logger.warning("Row %d: %s is on the do-not-contact list", record.row_number, email)
            return PersistResult(PersistStatus.SUPPRESSED, reason='on do-not-contact list')

        existing = await store.find_one(self.table, {'contact_email': email})
        if existing:
            return PersistResult(PersistStatus.DUPLICATE, record_id=existing.get('id'))

        company_id, company_created, failure = await self.resolve_company(record, store)
        if failure:
            return PersistResult(PersistStatus.ERROR, reason=failure)

        result = await store.insert(self.table, self.to_row(record, company_id))
        return _from_insert(result, company_created)


PIPELINES = {
    OrganizationPipeline.name: OrganizationPipeline,
    ContactPipeline.name: ContactPipeline,
}


def get_pipeline(name: str, config: Optional[ImporterConfig] = None) -> ImportPipeline:
    """
    Raises:
        KeyError: If no pipeline has that name
    """
    return PIPELINES[name](config)
