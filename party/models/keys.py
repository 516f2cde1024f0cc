"""Composite natural keys for reference rows and party sub-entities.

Each key is an immutable value: two keys are equal, and hash equally, when
every constituent field is equal. ``None`` fields take part in the
comparison like any other value.
"""

from __future__ import annotations

from dataclasses import astuple, dataclass
from datetime import date
from uuid import UUID


@dataclass(frozen=True)
class CompositeKey:
    """Base for composite keys."""

    def as_tuple(self) -> tuple:
        """Column values in primary-key order (for ``Session.get``)."""
        return astuple(self)


@dataclass(frozen=True)
class ReferenceKey(CompositeKey):
    code: str
    locale_id: str


@dataclass(frozen=True)
class ContactMechanismId(CompositeKey):
    party_id: UUID | None
    type: str | None
    role: str | None


@dataclass(frozen=True)
class PhysicalAddressId(CompositeKey):
    party_id: UUID | None
    type: str | None
    role: str | None


@dataclass(frozen=True)
class IdentityDocumentId(CompositeKey):
    party_id: UUID | None
    type: str | None
    country_of_issue: str | None
    issue_date: date | None


@dataclass(frozen=True)
class TaxNumberId(CompositeKey):
    party_id: UUID | None
    type: str | None


@dataclass(frozen=True)
class ExternalReferenceId(CompositeKey):
    party_id: UUID | None
    type: str | None


@dataclass(frozen=True)
class AttributeId(CompositeKey):
    party_id: UUID | None
    type: str | None


@dataclass(frozen=True)
class PreferenceId(CompositeKey):
    party_id: UUID | None
    type: str | None


@dataclass(frozen=True)
class LockId(CompositeKey):
    party_id: UUID | None
    type: str | None


@dataclass(frozen=True)
class RoleId(CompositeKey):
    party_id: UUID | None
    type: str | None


@dataclass(frozen=True)
class SourceOfFundsId(CompositeKey):
    person_id: UUID | None
    type: str | None


@dataclass(frozen=True)
class IndustryAllocationId(CompositeKey):
    organization_id: UUID | None
    system: str | None
    industry: str | None


@dataclass(frozen=True)
class MandataryId(CompositeKey):
    mandate_id: UUID | None
    party_id: UUID | None


@dataclass(frozen=True)
class MandatePropertyId(CompositeKey):
    mandate_id: UUID | None
    type: str | None


@dataclass(frozen=True)
class MandateLinkId(CompositeKey):
    mandate_id: UUID | None
    type: str | None
    target: str | None


@dataclass(frozen=True)
class AssociationPropertyId(CompositeKey):
    association_id: UUID | None
    type: str | None


@dataclass(frozen=True)
class RoleTypeAttributeTypeConstraintId(CompositeKey):
    role_type: str | None
    attribute_type: str | None
    attribute_type_qualifier: str | None
    type: str | None
