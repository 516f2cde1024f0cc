"""Reference-data entities.

Reference rows are read-only lookup data, keyed by ``(code, locale_id)``
(some tables add a parent code to the key), carrying a sort index and a
display name. A row without a ``tenant_id`` is visible to every tenant.
"""

from __future__ import annotations

import uuid

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from party.models.base import Base, CodeEnumType, StringListType
from party.models.enums import ConstraintType, MeasurementUnitType, ValueType
from party.models.keys import ReferenceKey, RoleTypeAttributeTypeConstraintId


class ReferenceDataMixin:
    """Columns shared by every localized reference table."""

    code: Mapped[str] = mapped_column(String(50), primary_key=True)
    locale_id: Mapped[str] = mapped_column(String(10), primary_key=True)
    tenant_id: Mapped[uuid.UUID | None] = mapped_column(nullable=True, default=None)
    sort_index: Mapped[int | None] = mapped_column(nullable=True, default=None)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str] = mapped_column(String(200), nullable=False, default="")

    @property
    def key(self) -> ReferenceKey:
        return ReferenceKey(self.code, self.locale_id)

    def is_visible_to_tenant(self, tenant_id: uuid.UUID | None) -> bool:
        return self.tenant_id is None or self.tenant_id == tenant_id

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, locale_id={self.locale_id!r})"


class PartyTypesMixin:
    """Reference rows restricted to a subset of party types."""

    party_types: Mapped[list[str]] = mapped_column(StringListType, nullable=False, default=list)

    def is_valid_for_party_type(self, party_type_code: str) -> bool:
        return str(party_type_code) in (self.party_types or [])


class AssociationType(ReferenceDataMixin, Base):
    __tablename__ = "party_association_types"


class AssociationPropertyType(ReferenceDataMixin, Base):
    __tablename__ = "party_association_property_types"

    association_type: Mapped[str] = mapped_column(String(50), primary_key=True)
    value_type: Mapped[ValueType] = mapped_column(CodeEnumType(ValueType), nullable=False)


class AttributeTypeCategory(ReferenceDataMixin, Base):
    __tablename__ = "party_attribute_type_categories"


class AttributeType(PartyTypesMixin, ReferenceDataMixin, Base):
    __tablename__ = "party_attribute_types"

    category: Mapped[str] = mapped_column(String(50), nullable=False)
    value_type: Mapped[ValueType] = mapped_column(CodeEnumType(ValueType), nullable=False)
    unit_type: Mapped[MeasurementUnitType | None] = mapped_column(
        CodeEnumType(MeasurementUnitType), nullable=True, default=None
    )


class ContactMechanismType(ReferenceDataMixin, Base):
    __tablename__ = "party_contact_mechanism_types"

    plural: Mapped[str] = mapped_column(String(50), nullable=False, default="")


class ContactMechanismRole(PartyTypesMixin, ReferenceDataMixin, Base):
    __tablename__ = "party_contact_mechanism_roles"


class ContactMechanismPurpose(PartyTypesMixin, ReferenceDataMixin, Base):
    __tablename__ = "party_contact_mechanism_purposes"

    contact_mechanism_types: Mapped[list[str]] = mapped_column(
        StringListType, nullable=False, default=list
    )

    def is_valid_for_contact_mechanism_type(self, contact_mechanism_type_code: str) -> bool:
        return contact_mechanism_type_code in (self.contact_mechanism_types or [])


class EmploymentStatus(ReferenceDataMixin, Base):
    __tablename__ = "party_employment_statuses"


class EmploymentType(ReferenceDataMixin, Base):
    __tablename__ = "party_employment_types"

    employment_status: Mapped[str] = mapped_column(String(50), nullable=False)


class ExternalReferenceType(PartyTypesMixin, ReferenceDataMixin, Base):
    __tablename__ = "party_external_reference_types"


class Gender(ReferenceDataMixin, Base):
    __tablename__ = "party_genders"


class IdentityDocumentType(PartyTypesMixin, ReferenceDataMixin, Base):
    __tablename__ = "party_identity_document_types"

    country_of_issue: Mapped[str | None] = mapped_column(String(2), nullable=True, default=None)


class IndustryClassificationSystem(ReferenceDataMixin, Base):
    __tablename__ = "party_industry_classification_systems"


class IndustryClassificationCategory(ReferenceDataMixin, Base):
    __tablename__ = "party_industry_classification_categories"

    system: Mapped[str] = mapped_column(String(50), primary_key=True)


class IndustryClassification(ReferenceDataMixin, Base):
    __tablename__ = "party_industry_classifications"

    system: Mapped[str] = mapped_column(String(50), primary_key=True)
    category: Mapped[str | None] = mapped_column(String(50), nullable=True, default=None)
    parent: Mapped[str | None] = mapped_column(String(50), nullable=True, default=None)


class LockTypeCategory(ReferenceDataMixin, Base):
    __tablename__ = "party_lock_type_categories"


class LockType(PartyTypesMixin, ReferenceDataMixin, Base):
    __tablename__ = "party_lock_types"

    category: Mapped[str] = mapped_column(String(50), nullable=False)


class MandataryRole(ReferenceDataMixin, Base):
    __tablename__ = "party_mandatary_roles"


class MandateType(ReferenceDataMixin, Base):
    __tablename__ = "party_mandate_types"


class MandatePropertyType(ReferenceDataMixin, Base):
    __tablename__ = "party_mandate_property_types"

    mandate_type: Mapped[str] = mapped_column(String(50), primary_key=True)
    value_type: Mapped[ValueType] = mapped_column(CodeEnumType(ValueType), nullable=False)


class MaritalStatus(ReferenceDataMixin, Base):
    __tablename__ = "party_marital_statuses"


class MarriageType(ReferenceDataMixin, Base):
    __tablename__ = "party_marriage_types"

    marital_status: Mapped[str] = mapped_column(String(50), primary_key=True)


class NextOfKinType(ReferenceDataMixin, Base):
    __tablename__ = "party_next_of_kin_types"


class Occupation(ReferenceDataMixin, Base):
    __tablename__ = "party_occupations"


class PhysicalAddressRole(PartyTypesMixin, ReferenceDataMixin, Base):
    __tablename__ = "party_physical_address_roles"


class PhysicalAddressPurpose(PartyTypesMixin, ReferenceDataMixin, Base):
    __tablename__ = "party_physical_address_purposes"


class PreferenceTypeCategory(ReferenceDataMixin, Base):
    __tablename__ = "party_preference_type_categories"


class PreferenceType(PartyTypesMixin, ReferenceDataMixin, Base):
    __tablename__ = "party_preference_types"

    category: Mapped[str] = mapped_column(String(50), nullable=False)
    pattern: Mapped[str | None] = mapped_column(String(1000), nullable=True, default=None)


class Race(ReferenceDataMixin, Base):
    __tablename__ = "party_races"


class ResidencyStatus(ReferenceDataMixin, Base):
    __tablename__ = "party_residency_statuses"


class ResidentialType(ReferenceDataMixin, Base):
    __tablename__ = "party_residential_types"


class RoleType(PartyTypesMixin, ReferenceDataMixin, Base):
    __tablename__ = "party_role_types"


class SourceOfFundsType(ReferenceDataMixin, Base):
    __tablename__ = "party_source_of_funds_types"


class TaxNumberType(PartyTypesMixin, ReferenceDataMixin, Base):
    __tablename__ = "party_tax_number_types"

    country_of_issue: Mapped[str | None] = mapped_column(String(2), nullable=True, default=None)


class TimeToContact(ReferenceDataMixin, Base):
    __tablename__ = "party_times_to_contact"


class Title(ReferenceDataMixin, Base):
    __tablename__ = "party_titles"

    abbreviation: Mapped[str] = mapped_column(String(20), nullable=False, default="")


class RoleTypeAttributeTypeConstraint(Base):
    """A constraint applied to an attribute of a party assigned a particular role."""

    __tablename__ = "party_role_type_attribute_type_constraints"

    role_type: Mapped[str] = mapped_column(String(50), primary_key=True)
    attribute_type: Mapped[str] = mapped_column(String(50), primary_key=True)
    attribute_type_qualifier: Mapped[str] = mapped_column(
        String(50), primary_key=True, default=""
    )
    type: Mapped[ConstraintType] = mapped_column(CodeEnumType(ConstraintType), primary_key=True)
    value: Mapped[str | None] = mapped_column(String(1000), nullable=True, default=None)

    @property
    def key(self) -> RoleTypeAttributeTypeConstraintId:
        return RoleTypeAttributeTypeConstraintId(
            self.role_type, self.attribute_type, self.attribute_type_qualifier, self.type
        )

    @property
    def integer_value(self) -> int:
        if not self.value:
            return 0
        return int(self.value)


# Every localized reference table, in the order they are seeded.
REFERENCE_MODELS: tuple[type[ReferenceDataMixin], ...] = (
    AssociationType,
    AssociationPropertyType,
    AttributeTypeCategory,
    AttributeType,
    ContactMechanismType,
    ContactMechanismRole,
    ContactMechanismPurpose,
    EmploymentStatus,
    EmploymentType,
    ExternalReferenceType,
    Gender,
    IdentityDocumentType,
    IndustryClassificationSystem,
    IndustryClassificationCategory,
    IndustryClassification,
    LockTypeCategory,
    LockType,
    MandataryRole,
    MandateType,
    MandatePropertyType,
    MaritalStatus,
    MarriageType,
    NextOfKinType,
    Occupation,
    PhysicalAddressRole,
    PhysicalAddressPurpose,
    PreferenceTypeCategory,
    PreferenceType,
    Race,
    ResidencyStatus,
    ResidentialType,
    RoleType,
    SourceOfFundsType,
    TaxNumberType,
    TimeToContact,
    Title,
)
