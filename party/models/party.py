"""Party aggregate: parties, organizations, persons and their owned sub-entities.

``Organization`` and ``Person`` use joined-table inheritance from ``Party``.
Owned collections are keyed by composite natural keys; the ``add_*``
methods replace any existing item with an equal key ("upsert by natural
key") before appending the new one.
"""

from __future__ import annotations

import datetime
import uuid
from decimal import Decimal
from typing import Any

from sqlalchemy import Float, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from party.models.base import Base, CodeEnumType, StringListType, TimestampMixin
from party.models.enums import (
    MeasurementSystem,
    MeasurementUnit,
    PartyType,
    PhysicalAddressType,
    ValueType,
)
from party.models.keys import (
    AttributeId,
    CompositeKey,
    ContactMechanismId,
    ExternalReferenceId,
    IdentityDocumentId,
    IndustryAllocationId,
    LockId,
    PhysicalAddressId,
    PreferenceId,
    RoleId,
    SourceOfFundsId,
    TaxNumberId,
)


def upsert_by_key(collection: list[Any], item: Any) -> None:
    """Replace the item in ``collection`` whose ``key`` equals ``item.key``, or append."""
    key: CompositeKey = item.key
    for existing in [existing for existing in collection if existing.key == key]:
        collection.remove(existing)
    collection.append(item)


def remove_by_key(collection: list[Any], key: CompositeKey) -> bool:
    """Remove the item with the given key; return whether one was removed."""
    for existing in collection:
        if existing.key == key:
            collection.remove(existing)
            return True
    return False


class ValueMixin:
    """Typed value columns shared by attributes and association/mandate properties."""

    boolean_value: Mapped[bool | None] = mapped_column(nullable=True, default=None)
    date_value: Mapped[datetime.date | None] = mapped_column(nullable=True, default=None)
    decimal_value: Mapped[Decimal | None] = mapped_column(nullable=True, default=None)
    double_value: Mapped[float | None] = mapped_column(Float, nullable=True, default=None)
    integer_value: Mapped[int | None] = mapped_column(nullable=True, default=None)
    string_value: Mapped[str | None] = mapped_column(String(1000), nullable=True, default=None)

    def has_value_for(self, value_type: ValueType) -> bool:
        """Return whether the column matching ``value_type`` holds a value."""
        column = f"{ValueType.from_code(value_type).code}_value"
        return getattr(self, column) is not None

    @property
    def value(self) -> Any:
        for column in (
            "string_value",
            "integer_value",
            "decimal_value",
            "double_value",
            "date_value",
            "boolean_value",
        ):
            value = getattr(self, column)
            if value is not None:
                return value
        return None


class Party(TimestampMixin, Base):
    """A person or organization."""

    __tablename__ = "party_parties"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    tenant_id: Mapped[uuid.UUID] = mapped_column(nullable=False, index=True)
    type: Mapped[PartyType] = mapped_column(CodeEnumType(PartyType), nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)

    contact_mechanisms: Mapped[list[ContactMechanism]] = relationship(
        back_populates="party", cascade="all, delete-orphan", lazy="selectin"
    )
    physical_addresses: Mapped[list[PhysicalAddress]] = relationship(
        back_populates="party", cascade="all, delete-orphan", lazy="selectin"
    )
    identity_documents: Mapped[list[IdentityDocument]] = relationship(
        back_populates="party", cascade="all, delete-orphan", lazy="selectin"
    )
    tax_numbers: Mapped[list[TaxNumber]] = relationship(
        back_populates="party", cascade="all, delete-orphan", lazy="selectin"
    )
    external_references: Mapped[list[ExternalReference]] = relationship(
        back_populates="party", cascade="all, delete-orphan", lazy="selectin"
    )
    attributes: Mapped[list[Attribute]] = relationship(
        back_populates="party", cascade="all, delete-orphan", lazy="selectin"
    )
    preferences: Mapped[list[Preference]] = relationship(
        back_populates="party", cascade="all, delete-orphan", lazy="selectin"
    )
    locks: Mapped[list[Lock]] = relationship(
        back_populates="party", cascade="all, delete-orphan", lazy="selectin"
    )
    roles: Mapped[list[Role]] = relationship(
        back_populates="party", cascade="all, delete-orphan", lazy="selectin"
    )

    __mapper_args__ = {"polymorphic_on": "type"}

    def __init__(self, **kwargs: Any) -> None:
        kwargs.setdefault("id", uuid.uuid4())
        super().__init__(**kwargs)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(id={self.id}, tenant_id={self.tenant_id}, "
            f"name={self.name!r})"
        )

    def _own(self, item: Any) -> Any:
        item.party_id = self.id
        return item

    def add_contact_mechanism(self, contact_mechanism: ContactMechanism) -> None:
        upsert_by_key(self.contact_mechanisms, self._own(contact_mechanism))

    def add_physical_address(self, physical_address: PhysicalAddress) -> None:
        upsert_by_key(self.physical_addresses, self._own(physical_address))

    def add_identity_document(self, identity_document: IdentityDocument) -> None:
        upsert_by_key(self.identity_documents, self._own(identity_document))

    def add_tax_number(self, tax_number: TaxNumber) -> None:
        upsert_by_key(self.tax_numbers, self._own(tax_number))

    def add_external_reference(self, external_reference: ExternalReference) -> None:
        upsert_by_key(self.external_references, self._own(external_reference))

    def add_attribute(self, attribute: Attribute) -> None:
        upsert_by_key(self.attributes, self._own(attribute))

    def add_preference(self, preference: Preference) -> None:
        upsert_by_key(self.preferences, self._own(preference))

    def add_lock(self, lock: Lock) -> None:
        upsert_by_key(self.locks, self._own(lock))

    def add_role(self, role: Role) -> None:
        upsert_by_key(self.roles, self._own(role))

    def remove_contact_mechanism(self, type: str, role: str) -> bool:
        return remove_by_key(self.contact_mechanisms, ContactMechanismId(self.id, type, role))

    def remove_physical_address(self, type: PhysicalAddressType, role: str) -> bool:
        return remove_by_key(self.physical_addresses, PhysicalAddressId(self.id, type, role))

    def remove_attribute(self, type: str) -> bool:
        return remove_by_key(self.attributes, AttributeId(self.id, type))

    def remove_preference(self, type: str) -> bool:
        return remove_by_key(self.preferences, PreferenceId(self.id, type))

    def get_contact_mechanism(self, type: str, role: str) -> ContactMechanism | None:
        key = ContactMechanismId(self.id, type, role)
        return next((item for item in self.contact_mechanisms if item.key == key), None)

    def get_attribute(self, type: str) -> Attribute | None:
        key = AttributeId(self.id, type)
        return next((item for item in self.attributes if item.key == key), None)

    def get_preference(self, type: str) -> Preference | None:
        key = PreferenceId(self.id, type)
        return next((item for item in self.preferences if item.key == key), None)

    def has_role(self, role_type: str) -> bool:
        return any(role.type == role_type for role in self.roles)


class Organization(Party):
    """An organization party."""

    __tablename__ = "party_organizations"

    id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("party_parties.id", ondelete="CASCADE"), primary_key=True
    )
    countries_of_tax_residence: Mapped[list[str]] = mapped_column(
        StringListType, nullable=False, default=list
    )

    industry_allocations: Mapped[list[IndustryAllocation]] = relationship(
        back_populates="organization", cascade="all, delete-orphan", lazy="selectin"
    )

    __mapper_args__ = {"polymorphic_identity": PartyType.ORGANIZATION}

    def add_industry_allocation(self, industry_allocation: IndustryAllocation) -> None:
        industry_allocation.organization_id = self.id
        upsert_by_key(self.industry_allocations, industry_allocation)


class Person(Party):
    """A natural person."""

    __tablename__ = "party_persons"

    id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("party_parties.id", ondelete="CASCADE"), primary_key=True
    )
    given_name: Mapped[str | None] = mapped_column(String(100), nullable=True, default=None)
    middle_names: Mapped[str | None] = mapped_column(String(100), nullable=True, default=None)
    surname: Mapped[str | None] = mapped_column(String(100), nullable=True, default=None)
    maiden_name: Mapped[str | None] = mapped_column(String(100), nullable=True, default=None)
    preferred_name: Mapped[str | None] = mapped_column(String(100), nullable=True, default=None)
    initials: Mapped[str | None] = mapped_column(String(20), nullable=True, default=None)
    title: Mapped[str | None] = mapped_column(String(50), nullable=True, default=None)
    gender: Mapped[str | None] = mapped_column(String(50), nullable=True, default=None)
    race: Mapped[str | None] = mapped_column(String(50), nullable=True, default=None)
    marital_status: Mapped[str | None] = mapped_column(String(50), nullable=True, default=None)
    marital_status_date: Mapped[datetime.date | None] = mapped_column(nullable=True, default=None)
    marriage_type: Mapped[str | None] = mapped_column(String(50), nullable=True, default=None)
    date_of_birth: Mapped[datetime.date | None] = mapped_column(nullable=True, default=None)
    date_of_death: Mapped[datetime.date | None] = mapped_column(nullable=True, default=None)
    country_of_birth: Mapped[str | None] = mapped_column(String(2), nullable=True, default=None)
    country_of_residence: Mapped[str | None] = mapped_column(
        String(2), nullable=True, default=None
    )
    countries_of_citizenship: Mapped[list[str]] = mapped_column(
        StringListType, nullable=False, default=list
    )
    countries_of_tax_residence: Mapped[list[str]] = mapped_column(
        StringListType, nullable=False, default=list
    )
    employment_status: Mapped[str | None] = mapped_column(String(50), nullable=True, default=None)
    employment_type: Mapped[str | None] = mapped_column(String(50), nullable=True, default=None)
    occupation: Mapped[str | None] = mapped_column(String(50), nullable=True, default=None)
    language: Mapped[str | None] = mapped_column(String(2), nullable=True, default=None)
    residency_status: Mapped[str | None] = mapped_column(String(50), nullable=True, default=None)
    residential_type: Mapped[str | None] = mapped_column(String(50), nullable=True, default=None)
    measurement_system: Mapped[MeasurementSystem | None] = mapped_column(
        CodeEnumType(MeasurementSystem), nullable=True, default=None
    )
    time_zone: Mapped[str | None] = mapped_column(String(50), nullable=True, default=None)

    sources_of_funds: Mapped[list[SourceOfFunds]] = relationship(
        back_populates="person", cascade="all, delete-orphan", lazy="selectin"
    )

    __mapper_args__ = {"polymorphic_identity": PartyType.PERSON}

    def add_source_of_funds(self, source_of_funds: SourceOfFunds) -> None:
        source_of_funds.person_id = self.id
        upsert_by_key(self.sources_of_funds, source_of_funds)


class ContactMechanism(Base):
    __tablename__ = "party_contact_mechanisms"

    party_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("party_parties.id", ondelete="CASCADE"), primary_key=True
    )
    type: Mapped[str] = mapped_column(String(50), primary_key=True)
    role: Mapped[str] = mapped_column(String(50), primary_key=True)
    value: Mapped[str] = mapped_column(String(200), nullable=False)
    purposes: Mapped[list[str]] = mapped_column(StringListType, nullable=False, default=list)

    party: Mapped[Party] = relationship(back_populates="contact_mechanisms")

    @property
    def key(self) -> ContactMechanismId:
        return ContactMechanismId(self.party_id, self.type, self.role)


class PhysicalAddress(Base):
    __tablename__ = "party_physical_addresses"

    party_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("party_parties.id", ondelete="CASCADE"), primary_key=True
    )
    type: Mapped[PhysicalAddressType] = mapped_column(
        CodeEnumType(PhysicalAddressType), primary_key=True
    )
    role: Mapped[str] = mapped_column(String(50), primary_key=True)
    purposes: Mapped[list[str]] = mapped_column(StringListType, nullable=False, default=list)
    building_floor: Mapped[str | None] = mapped_column(String(20), nullable=True, default=None)
    building_name: Mapped[str | None] = mapped_column(String(50), nullable=True, default=None)
    building_room: Mapped[str | None] = mapped_column(String(30), nullable=True, default=None)
    complex_name: Mapped[str | None] = mapped_column(String(50), nullable=True, default=None)
    complex_unit_number: Mapped[str | None] = mapped_column(
        String(20), nullable=True, default=None
    )
    farm_description: Mapped[str | None] = mapped_column(String(50), nullable=True, default=None)
    farm_name: Mapped[str | None] = mapped_column(String(50), nullable=True, default=None)
    farm_number: Mapped[str | None] = mapped_column(String(50), nullable=True, default=None)
    line1: Mapped[str | None] = mapped_column(String(100), nullable=True, default=None)
    line2: Mapped[str | None] = mapped_column(String(100), nullable=True, default=None)
    line3: Mapped[str | None] = mapped_column(String(100), nullable=True, default=None)
    site_block: Mapped[str | None] = mapped_column(String(50), nullable=True, default=None)
    site_number: Mapped[str | None] = mapped_column(String(50), nullable=True, default=None)
    street_name: Mapped[str | None] = mapped_column(String(100), nullable=True, default=None)
    street_number: Mapped[str | None] = mapped_column(String(30), nullable=True, default=None)
    suburb: Mapped[str | None] = mapped_column(String(50), nullable=True, default=None)
    city: Mapped[str | None] = mapped_column(String(50), nullable=True, default=None)
    region: Mapped[str | None] = mapped_column(String(50), nullable=True, default=None)
    country: Mapped[str] = mapped_column(String(2), nullable=False)
    postal_code: Mapped[str | None] = mapped_column(String(30), nullable=True, default=None)
    latitude: Mapped[str | None] = mapped_column(String(50), nullable=True, default=None)
    longitude: Mapped[str | None] = mapped_column(String(50), nullable=True, default=None)

    party: Mapped[Party] = relationship(back_populates="physical_addresses")

    @property
    def key(self) -> PhysicalAddressId:
        return PhysicalAddressId(self.party_id, self.type, self.role)


class IdentityDocument(Base):
    __tablename__ = "party_identity_documents"

    party_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("party_parties.id", ondelete="CASCADE"), primary_key=True
    )
    type: Mapped[str] = mapped_column(String(50), primary_key=True)
    country_of_issue: Mapped[str] = mapped_column(String(2), primary_key=True)
    issue_date: Mapped[datetime.date] = mapped_column(primary_key=True)
    number: Mapped[str] = mapped_column(String(30), nullable=False)
    expiry_date: Mapped[datetime.date | None] = mapped_column(nullable=True, default=None)
    provided_date: Mapped[datetime.date | None] = mapped_column(nullable=True, default=None)

    party: Mapped[Party] = relationship(back_populates="identity_documents")

    @property
    def key(self) -> IdentityDocumentId:
        return IdentityDocumentId(self.party_id, self.type, self.country_of_issue, self.issue_date)


class TaxNumber(Base):
    __tablename__ = "party_tax_numbers"

    party_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("party_parties.id", ondelete="CASCADE"), primary_key=True
    )
    type: Mapped[str] = mapped_column(String(50), primary_key=True)
    country_of_issue: Mapped[str] = mapped_column(String(2), nullable=False)
    number: Mapped[str] = mapped_column(String(50), nullable=False)

    party: Mapped[Party] = relationship(back_populates="tax_numbers")

    @property
    def key(self) -> TaxNumberId:
        return TaxNumberId(self.party_id, self.type)


class ExternalReference(Base):
    __tablename__ = "party_external_references"

    party_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("party_parties.id", ondelete="CASCADE"), primary_key=True
    )
    type: Mapped[str] = mapped_column(String(50), primary_key=True)
    value: Mapped[str] = mapped_column(String(100), nullable=False)

    party: Mapped[Party] = relationship(back_populates="external_references")

    @property
    def key(self) -> ExternalReferenceId:
        return ExternalReferenceId(self.party_id, self.type)


class Attribute(ValueMixin, Base):
    __tablename__ = "party_attributes"

    party_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("party_parties.id", ondelete="CASCADE"), primary_key=True
    )
    type: Mapped[str] = mapped_column(String(50), primary_key=True)
    unit: Mapped[MeasurementUnit | None] = mapped_column(
        CodeEnumType(MeasurementUnit), nullable=True, default=None
    )

    party: Mapped[Party] = relationship(back_populates="attributes")

    @property
    def key(self) -> AttributeId:
        return AttributeId(self.party_id, self.type)


class Preference(Base):
    __tablename__ = "party_preferences"

    party_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("party_parties.id", ondelete="CASCADE"), primary_key=True
    )
    type: Mapped[str] = mapped_column(String(50), primary_key=True)
    value: Mapped[str] = mapped_column(String(200), nullable=False)

    party: Mapped[Party] = relationship(back_populates="preferences")

    @property
    def key(self) -> PreferenceId:
        return PreferenceId(self.party_id, self.type)


class Lock(Base):
    __tablename__ = "party_locks"

    party_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("party_parties.id", ondelete="CASCADE"), primary_key=True
    )
    type: Mapped[str] = mapped_column(String(50), primary_key=True)
    effective_from: Mapped[datetime.date | None] = mapped_column(nullable=True, default=None)
    effective_to: Mapped[datetime.date | None] = mapped_column(nullable=True, default=None)

    party: Mapped[Party] = relationship(back_populates="locks")

    @property
    def key(self) -> LockId:
        return LockId(self.party_id, self.type)


class Role(Base):
    __tablename__ = "party_roles"

    party_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("party_parties.id", ondelete="CASCADE"), primary_key=True
    )
    type: Mapped[str] = mapped_column(String(50), primary_key=True)
    purpose: Mapped[str | None] = mapped_column(String(50), nullable=True, default=None)
    effective_from: Mapped[datetime.date | None] = mapped_column(nullable=True, default=None)
    effective_to: Mapped[datetime.date | None] = mapped_column(nullable=True, default=None)

    party: Mapped[Party] = relationship(back_populates="roles")

    @property
    def key(self) -> RoleId:
        return RoleId(self.party_id, self.type)


class SourceOfFunds(Base):
    __tablename__ = "party_sources_of_funds"

    person_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("party_persons.id", ondelete="CASCADE"), primary_key=True
    )
    type: Mapped[str] = mapped_column(String(50), primary_key=True)
    description: Mapped[str | None] = mapped_column(String(200), nullable=True, default=None)
    percentage: Mapped[int | None] = mapped_column(nullable=True, default=None)
    effective_from: Mapped[datetime.date | None] = mapped_column(nullable=True, default=None)
    effective_to: Mapped[datetime.date | None] = mapped_column(nullable=True, default=None)

    person: Mapped[Person] = relationship(back_populates="sources_of_funds")

    @property
    def key(self) -> SourceOfFundsId:
        return SourceOfFundsId(self.person_id, self.type)


class IndustryAllocation(Base):
    __tablename__ = "party_industry_allocations"

    organization_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("party_organizations.id", ondelete="CASCADE"), primary_key=True
    )
    system: Mapped[str] = mapped_column(String(50), primary_key=True)
    industry: Mapped[str] = mapped_column(String(50), primary_key=True)
    effective_from: Mapped[datetime.date | None] = mapped_column(nullable=True, default=None)
    effective_to: Mapped[datetime.date | None] = mapped_column(nullable=True, default=None)

    organization: Mapped[Organization] = relationship(back_populates="industry_allocations")

    @property
    def key(self) -> IndustryAllocationId:
        return IndustryAllocationId(self.organization_id, self.system, self.industry)
