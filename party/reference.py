"""Localized reference-data lookups and code validation.

Every ``get_<type>s(locale_id)`` method returns the rows for one locale
(matched ignoring case) in display order. The ``_for_tenant`` variants
also drop rows that belong to other tenants. The ``is_valid_*`` checks
look across all locales and accept a code when a global row, or a row for
the tenant, carries it.
"""

from __future__ import annotations

import uuid
from collections.abc import Callable
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from party.exceptions import InvalidArgumentError, InvalidCodeError, ServiceUnavailableError
from party.models.enums import MeasurementUnit, PhysicalAddressType, ValueType
from party.models.reference import (
    AssociationPropertyType,
    AssociationType,
    AttributeType,
    AttributeTypeCategory,
    ContactMechanismPurpose,
    ContactMechanismRole,
    ContactMechanismType,
    EmploymentStatus,
    EmploymentType,
    ExternalReferenceType,
    Gender,
    IdentityDocumentType,
    IndustryClassification,
    IndustryClassificationCategory,
    IndustryClassificationSystem,
    LockType,
    LockTypeCategory,
    MandataryRole,
    MandatePropertyType,
    MandateType,
    MaritalStatus,
    MarriageType,
    NextOfKinType,
    Occupation,
    PhysicalAddressPurpose,
    PhysicalAddressRole,
    PreferenceType,
    PreferenceTypeCategory,
    Race,
    ResidencyStatus,
    ResidentialType,
    RoleType,
    RoleTypeAttributeTypeConstraint,
    SourceOfFundsType,
    TaxNumberType,
    TimeToContact,
    Title,
)
from party.store.repositories import (
    ReferenceDataRepository,
    RoleTypeAttributeTypeConstraintRepository,
)


class PartyReferenceService:
    """Read-only access to the party reference data."""

    def __init__(self, session: Session) -> None:
        self.session = session
        self._repositories: dict[type, ReferenceDataRepository] = {}
        self._constraints = RoleTypeAttributeTypeConstraintRepository(session)

    def repository(self, model: type) -> ReferenceDataRepository:
        if model not in self._repositories:
            self._repositories[model] = ReferenceDataRepository(self.session, model)
        return self._repositories[model]

    def _for_locale(self, model: type, locale_id: str) -> list[Any]:
        if not locale_id or not locale_id.strip():
            raise InvalidArgumentError("locale_id")
        try:
            return self.repository(model).find_by_locale(locale_id)
        except SQLAlchemyError as e:
            raise ServiceUnavailableError(
                f"Failed to retrieve the {model.__tablename__} for the locale ({locale_id})"
            ) from e

    def _for_tenant(self, model: type, tenant_id: uuid.UUID, locale_id: str) -> list[Any]:
        if not locale_id or not locale_id.strip():
            raise InvalidArgumentError("locale_id")
        try:
            return self.repository(model).find_by_locale_for_tenant(locale_id, tenant_id)
        except SQLAlchemyError as e:
            raise ServiceUnavailableError(
                f"Failed to retrieve the {model.__tablename__} for the tenant ({tenant_id}) "
                f"and the locale ({locale_id})"
            ) from e

    def _rows(self, model: type, tenant_id: uuid.UUID | None, code: str | None) -> list[Any]:
        if not code:
            return []
        try:
            return self.repository(model).find_all_by_code(code, tenant_id)
        except SQLAlchemyError as e:
            raise ServiceUnavailableError(
                f"Failed to retrieve the {model.__tablename__} ({code}) "
                f"for the tenant ({tenant_id})"
            ) from e

    def _exists(
        self,
        model: type,
        tenant_id: uuid.UUID | None,
        code: str | None,
        predicate: Callable[[Any], bool] | None = None,
    ) -> bool:
        return any(
            predicate is None or predicate(row) for row in self._rows(model, tenant_id, code)
        )

    # -- localized lists -----------------------------------------------------

    def get_association_property_types(self, locale_id: str) -> list[AssociationPropertyType]:
        return self._for_locale(AssociationPropertyType, locale_id)

    def get_association_property_types_for_tenant(
        self, tenant_id: uuid.UUID, locale_id: str
    ) -> list[AssociationPropertyType]:
        return self._for_tenant(AssociationPropertyType, tenant_id, locale_id)

    def get_association_types(self, locale_id: str) -> list[AssociationType]:
        return self._for_locale(AssociationType, locale_id)

    def get_association_types_for_tenant(
        self, tenant_id: uuid.UUID, locale_id: str
    ) -> list[AssociationType]:
        return self._for_tenant(AssociationType, tenant_id, locale_id)

    def get_attribute_type_categories(self, locale_id: str) -> list[AttributeTypeCategory]:
        return self._for_locale(AttributeTypeCategory, locale_id)

    def get_attribute_type_categories_for_tenant(
        self, tenant_id: uuid.UUID, locale_id: str
    ) -> list[AttributeTypeCategory]:
        return self._for_tenant(AttributeTypeCategory, tenant_id, locale_id)

    def get_attribute_types(self, locale_id: str) -> list[AttributeType]:
        return self._for_locale(AttributeType, locale_id)

    def get_attribute_types_for_tenant(
        self, tenant_id: uuid.UUID, locale_id: str
    ) -> list[AttributeType]:
        return self._for_tenant(AttributeType, tenant_id, locale_id)

    def get_contact_mechanism_purposes(self, locale_id: str) -> list[ContactMechanismPurpose]:
        return self._for_locale(ContactMechanismPurpose, locale_id)

    def get_contact_mechanism_purposes_for_tenant(
        self, tenant_id: uuid.UUID, locale_id: str
    ) -> list[ContactMechanismPurpose]:
        return self._for_tenant(ContactMechanismPurpose, tenant_id, locale_id)

    def get_contact_mechanism_roles(self, locale_id: str) -> list[ContactMechanismRole]:
        return self._for_locale(ContactMechanismRole, locale_id)

    def get_contact_mechanism_roles_for_tenant(
        self, tenant_id: uuid.UUID, locale_id: str
    ) -> list[ContactMechanismRole]:
        return self._for_tenant(ContactMechanismRole, tenant_id, locale_id)

    def get_contact_mechanism_types(self, locale_id: str) -> list[ContactMechanismType]:
        return self._for_locale(ContactMechanismType, locale_id)

    def get_contact_mechanism_types_for_tenant(
        self, tenant_id: uuid.UUID, locale_id: str
    ) -> list[ContactMechanismType]:
        return self._for_tenant(ContactMechanismType, tenant_id, locale_id)

    def get_employment_statuses(self, locale_id: str) -> list[EmploymentStatus]:
        return self._for_locale(EmploymentStatus, locale_id)

    def get_employment_statuses_for_tenant(
        self, tenant_id: uuid.UUID, locale_id: str
    ) -> list[EmploymentStatus]:
        return self._for_tenant(EmploymentStatus, tenant_id, locale_id)

    def get_employment_types(self, locale_id: str) -> list[EmploymentType]:
        return self._for_locale(EmploymentType, locale_id)

    def get_employment_types_for_tenant(
        self, tenant_id: uuid.UUID, locale_id: str
    ) -> list[EmploymentType]:
        return self._for_tenant(EmploymentType, tenant_id, locale_id)

    def get_external_reference_types(self, locale_id: str) -> list[ExternalReferenceType]:
        return self._for_locale(ExternalReferenceType, locale_id)

    def get_external_reference_types_for_tenant(
        self, tenant_id: uuid.UUID, locale_id: str
    ) -> list[ExternalReferenceType]:
        return self._for_tenant(ExternalReferenceType, tenant_id, locale_id)

    def get_genders(self, locale_id: str) -> list[Gender]:
        return self._for_locale(Gender, locale_id)

    def get_genders_for_tenant(self, tenant_id: uuid.UUID, locale_id: str) -> list[Gender]:
        return self._for_tenant(Gender, tenant_id, locale_id)

    def get_identity_document_types(self, locale_id: str) -> list[IdentityDocumentType]:
        return self._for_locale(IdentityDocumentType, locale_id)

    def get_identity_document_types_for_tenant(
        self, tenant_id: uuid.UUID, locale_id: str
    ) -> list[IdentityDocumentType]:
        return self._for_tenant(IdentityDocumentType, tenant_id, locale_id)

    def get_industry_classification_categories(
        self, locale_id: str
    ) -> list[IndustryClassificationCategory]:
        return self._for_locale(IndustryClassificationCategory, locale_id)

    def get_industry_classification_categories_for_tenant(
        self, tenant_id: uuid.UUID, locale_id: str
    ) -> list[IndustryClassificationCategory]:
        return self._for_tenant(IndustryClassificationCategory, tenant_id, locale_id)

    def get_industry_classification_systems(
        self, locale_id: str
    ) -> list[IndustryClassificationSystem]:
        return self._for_locale(IndustryClassificationSystem, locale_id)

    def get_industry_classification_systems_for_tenant(
        self, tenant_id: uuid.UUID, locale_id: str
    ) -> list[IndustryClassificationSystem]:
        return self._for_tenant(IndustryClassificationSystem, tenant_id, locale_id)

    def get_industry_classifications(self, locale_id: str) -> list[IndustryClassification]:
        return self._for_locale(IndustryClassification, locale_id)

    def get_industry_classifications_for_tenant(
        self, tenant_id: uuid.UUID, locale_id: str
    ) -> list[IndustryClassification]:
        return self._for_tenant(IndustryClassification, tenant_id, locale_id)

    def get_lock_type_categories(self, locale_id: str) -> list[LockTypeCategory]:
        return self._for_locale(LockTypeCategory, locale_id)

    def get_lock_type_categories_for_tenant(
        self, tenant_id: uuid.UUID, locale_id: str
    ) -> list[LockTypeCategory]:
        return self._for_tenant(LockTypeCategory, tenant_id, locale_id)

    def get_lock_types(self, locale_id: str) -> list[LockType]:
        return self._for_locale(LockType, locale_id)

    def get_lock_types_for_tenant(self, tenant_id: uuid.UUID, locale_id: str) -> list[LockType]:
        return self._for_tenant(LockType, tenant_id, locale_id)

    def get_mandatary_roles(self, locale_id: str) -> list[MandataryRole]:
        return self._for_locale(MandataryRole, locale_id)

    def get_mandatary_roles_for_tenant(
        self, tenant_id: uuid.UUID, locale_id: str
    ) -> list[MandataryRole]:
        return self._for_tenant(MandataryRole, tenant_id, locale_id)

    def get_mandate_property_types(self, locale_id: str) -> list[MandatePropertyType]:
        return self._for_locale(MandatePropertyType, locale_id)

    def get_mandate_property_types_for_tenant(
        self, tenant_id: uuid.UUID, locale_id: str
    ) -> list[MandatePropertyType]:
        return self._for_tenant(MandatePropertyType, tenant_id, locale_id)

    def get_mandate_types(self, locale_id: str) -> list[MandateType]:
        return self._for_locale(MandateType, locale_id)

    def get_mandate_types_for_tenant(
        self, tenant_id: uuid.UUID, locale_id: str
    ) -> list[MandateType]:
        return self._for_tenant(MandateType, tenant_id, locale_id)

    def get_marital_statuses(self, locale_id: str) -> list[MaritalStatus]:
        return self._for_locale(MaritalStatus, locale_id)

    def get_marital_statuses_for_tenant(
        self, tenant_id: uuid.UUID, locale_id: str
    ) -> list[MaritalStatus]:
        return self._for_tenant(MaritalStatus, tenant_id, locale_id)

    def get_marriage_types(self, locale_id: str) -> list[MarriageType]:
        return self._for_locale(MarriageType, locale_id)

    def get_marriage_types_for_tenant(
        self, tenant_id: uuid.UUID, locale_id: str
    ) -> list[MarriageType]:
        return self._for_tenant(MarriageType, tenant_id, locale_id)

    def get_next_of_kin_types(self, locale_id: str) -> list[NextOfKinType]:
        return self._for_locale(NextOfKinType, locale_id)

    def get_next_of_kin_types_for_tenant(
        self, tenant_id: uuid.UUID, locale_id: str
    ) -> list[NextOfKinType]:
        return self._for_tenant(NextOfKinType, tenant_id, locale_id)

    def get_occupations(self, locale_id: str) -> list[Occupation]:
        return self._for_locale(Occupation, locale_id)

    def get_occupations_for_tenant(self, tenant_id: uuid.UUID, locale_id: str) -> list[Occupation]:
        return self._for_tenant(Occupation, tenant_id, locale_id)

    def get_physical_address_purposes(self, locale_id: str) -> list[PhysicalAddressPurpose]:
        return self._for_locale(PhysicalAddressPurpose, locale_id)

    def get_physical_address_purposes_for_tenant(
        self, tenant_id: uuid.UUID, locale_id: str
    ) -> list[PhysicalAddressPurpose]:
        return self._for_tenant(PhysicalAddressPurpose, tenant_id, locale_id)

    def get_physical_address_roles(self, locale_id: str) -> list[PhysicalAddressRole]:
        return self._for_locale(PhysicalAddressRole, locale_id)

    def get_physical_address_roles_for_tenant(
        self, tenant_id: uuid.UUID, locale_id: str
    ) -> list[PhysicalAddressRole]:
        return self._for_tenant(PhysicalAddressRole, tenant_id, locale_id)

    def get_preference_type_categories(self, locale_id: str) -> list[PreferenceTypeCategory]:
        return self._for_locale(PreferenceTypeCategory, locale_id)

    def get_preference_type_categories_for_tenant(
        self, tenant_id: uuid.UUID, locale_id: str
    ) -> list[PreferenceTypeCategory]:
        return self._for_tenant(PreferenceTypeCategory, tenant_id, locale_id)

    def get_preference_types(self, locale_id: str) -> list[PreferenceType]:
        return self._for_locale(PreferenceType, locale_id)

    def get_preference_types_for_tenant(
        self, tenant_id: uuid.UUID, locale_id: str
    ) -> list[PreferenceType]:
        return self._for_tenant(PreferenceType, tenant_id, locale_id)

    def get_races(self, locale_id: str) -> list[Race]:
        return self._for_locale(Race, locale_id)

    def get_races_for_tenant(self, tenant_id: uuid.UUID, locale_id: str) -> list[Race]:
        return self._for_tenant(Race, tenant_id, locale_id)

    def get_residency_statuses(self, locale_id: str) -> list[ResidencyStatus]:
        return self._for_locale(ResidencyStatus, locale_id)

    def get_residency_statuses_for_tenant(
        self, tenant_id: uuid.UUID, locale_id: str
    ) -> list[ResidencyStatus]:
        return self._for_tenant(ResidencyStatus, tenant_id, locale_id)

    def get_residential_types(self, locale_id: str) -> list[ResidentialType]:
        return self._for_locale(ResidentialType, locale_id)

    def get_residential_types_for_tenant(
        self, tenant_id: uuid.UUID, locale_id: str
    ) -> list[ResidentialType]:
        return self._for_tenant(ResidentialType, tenant_id, locale_id)

    def get_role_types(self, locale_id: str) -> list[RoleType]:
        return self._for_locale(RoleType, locale_id)

    def get_role_types_for_tenant(self, tenant_id: uuid.UUID, locale_id: str) -> list[RoleType]:
        return self._for_tenant(RoleType, tenant_id, locale_id)

    def get_source_of_funds_types(self, locale_id: str) -> list[SourceOfFundsType]:
        return self._for_locale(SourceOfFundsType, locale_id)

    def get_source_of_funds_types_for_tenant(
        self, tenant_id: uuid.UUID, locale_id: str
    ) -> list[SourceOfFundsType]:
        return self._for_tenant(SourceOfFundsType, tenant_id, locale_id)

    def get_tax_number_types(self, locale_id: str) -> list[TaxNumberType]:
        return self._for_locale(TaxNumberType, locale_id)

    def get_tax_number_types_for_tenant(
        self, tenant_id: uuid.UUID, locale_id: str
    ) -> list[TaxNumberType]:
        return self._for_tenant(TaxNumberType, tenant_id, locale_id)

    def get_times_to_contact(self, locale_id: str) -> list[TimeToContact]:
        return self._for_locale(TimeToContact, locale_id)

    def get_times_to_contact_for_tenant(
        self, tenant_id: uuid.UUID, locale_id: str
    ) -> list[TimeToContact]:
        return self._for_tenant(TimeToContact, tenant_id, locale_id)

    def get_titles(self, locale_id: str) -> list[Title]:
        return self._for_locale(Title, locale_id)

    def get_titles_for_tenant(self, tenant_id: uuid.UUID, locale_id: str) -> list[Title]:
        return self._for_tenant(Title, tenant_id, locale_id)

    def get_role_type_attribute_type_constraints(
        self, role_type: str | None = None
    ) -> list[RoleTypeAttributeTypeConstraint]:
        """Constraints for one role type (ignoring case), or every constraint."""
        if role_type:
            return self._constraints.find_by_role_type(role_type)
        return self._constraints.find_all()

    # -- single lookups ------------------------------------------------------

    def get_attribute_type(self, tenant_id: uuid.UUID, code: str) -> AttributeType | None:
        return next(iter(self._rows(AttributeType, tenant_id, code)), None)

    def get_attribute_type_value_type(self, tenant_id: uuid.UUID, code: str) -> ValueType | None:
        attribute_type = self.get_attribute_type(tenant_id, code)
        return attribute_type.value_type if attribute_type is not None else None

    def get_association_property_type(
        self, tenant_id: uuid.UUID, association_type: str, code: str
    ) -> AssociationPropertyType | None:
        rows = self._rows(AssociationPropertyType, tenant_id, code)
        return next((row for row in rows if row.association_type == association_type), None)

    def get_mandate_property_type(
        self, tenant_id: uuid.UUID, mandate_type: str, code: str
    ) -> MandatePropertyType | None:
        rows = self._rows(MandatePropertyType, tenant_id, code)
        return next((row for row in rows if row.mandate_type == mandate_type), None)

    def get_preference_type(
        self, tenant_id: uuid.UUID, party_type: str, code: str
    ) -> PreferenceType | None:
        rows = self._rows(PreferenceType, tenant_id, code)
        return next((row for row in rows if row.is_valid_for_party_type(party_type)), None)

    # -- validity checks -----------------------------------------------------

    def is_valid_association_type(self, tenant_id: uuid.UUID, code: str | None) -> bool:
        return self._exists(AssociationType, tenant_id, code)

    def is_valid_association_property_type(
        self, tenant_id: uuid.UUID, association_type: str, code: str | None
    ) -> bool:
        return self._exists(
            AssociationPropertyType,
            tenant_id,
            code,
            lambda row: row.association_type == association_type,
        )

    def is_valid_attribute_type(
        self, tenant_id: uuid.UUID, party_type: str, code: str | None
    ) -> bool:
        return self._exists(
            AttributeType, tenant_id, code, lambda row: row.is_valid_for_party_type(party_type)
        )

    def is_valid_attribute_type_category(self, tenant_id: uuid.UUID, code: str | None) -> bool:
        return self._exists(AttributeTypeCategory, tenant_id, code)

    def is_valid_contact_mechanism_type(self, tenant_id: uuid.UUID, code: str | None) -> bool:
        return self._exists(ContactMechanismType, tenant_id, code)

    def is_valid_contact_mechanism_role(
        self, tenant_id: uuid.UUID, party_type: str, code: str | None
    ) -> bool:
        return self._exists(
            ContactMechanismRole,
            tenant_id,
            code,
            lambda row: row.is_valid_for_party_type(party_type),
        )

    def is_valid_contact_mechanism_purpose(
        self,
        tenant_id: uuid.UUID,
        party_type: str,
        contact_mechanism_type: str,
        code: str | None,
    ) -> bool:
        return self._exists(
            ContactMechanismPurpose,
            tenant_id,
            code,
            lambda row: row.is_valid_for_party_type(party_type)
            and row.is_valid_for_contact_mechanism_type(contact_mechanism_type),
        )

    def is_valid_employment_status(self, tenant_id: uuid.UUID, code: str | None) -> bool:
        return self._exists(EmploymentStatus, tenant_id, code)

    def is_valid_employment_type(
        self, tenant_id: uuid.UUID, employment_status: str | None, code: str | None
    ) -> bool:
        """Check the employment type, and that it belongs to ``employment_status`` when given."""
        return self._exists(
            EmploymentType,
            tenant_id,
            code,
            lambda row: not employment_status or row.employment_status == employment_status,
        )

    def is_valid_external_reference_type(
        self, tenant_id: uuid.UUID, party_type: str, code: str | None
    ) -> bool:
        return self._exists(
            ExternalReferenceType,
            tenant_id,
            code,
            lambda row: row.is_valid_for_party_type(party_type),
        )

    def is_valid_gender(self, tenant_id: uuid.UUID, code: str | None) -> bool:
        return self._exists(Gender, tenant_id, code)

    def is_valid_identity_document_type(
        self, tenant_id: uuid.UUID, party_type: str, code: str | None
    ) -> bool:
        return self._exists(
            IdentityDocumentType,
            tenant_id,
            code,
            lambda row: row.is_valid_for_party_type(party_type),
        )

    def is_valid_industry_classification(
        self, tenant_id: uuid.UUID, system: str | None, code: str | None
    ) -> bool:
        if not system:
            return False
        return self._exists(
            IndustryClassification, tenant_id, code, lambda row: row.system == system
        )

    def is_valid_lock_type(self, tenant_id: uuid.UUID, party_type: str, code: str | None) -> bool:
        return self._exists(
            LockType, tenant_id, code, lambda row: row.is_valid_for_party_type(party_type)
        )

    def is_valid_mandatary_role(self, tenant_id: uuid.UUID, code: str | None) -> bool:
        return self._exists(MandataryRole, tenant_id, code)

    def is_valid_mandate_type(self, tenant_id: uuid.UUID, code: str | None) -> bool:
        return self._exists(MandateType, tenant_id, code)

    def is_valid_mandate_property_type(
        self, tenant_id: uuid.UUID, mandate_type: str, code: str | None
    ) -> bool:
        return self._exists(
            MandatePropertyType, tenant_id, code, lambda row: row.mandate_type == mandate_type
        )

    def is_valid_marital_status(self, tenant_id: uuid.UUID, code: str | None) -> bool:
        return self._exists(MaritalStatus, tenant_id, code)

    def is_valid_marriage_type(
        self, tenant_id: uuid.UUID, marital_status: str | None, code: str | None
    ) -> bool:
        """Check a marriage type against the marital status it qualifies.

        Any value is accepted when there is no marital status, or when the
        marital status has no marriage types at all.
        """
        if not marital_status:
            return True
        candidates = [
            row
            for row in self.repository(MarriageType).find_all()
            if row.marital_status == marital_status and row.is_visible_to_tenant(tenant_id)
        ]
        if not candidates:
            return True
        return any(row.code == code for row in candidates)

    def is_valid_measurement_unit_for_attribute_type(
        self, tenant_id: uuid.UUID, attribute_type: str, unit: MeasurementUnit | None
    ) -> bool:
        """Check that ``unit`` measures what the attribute type measures.

        An attribute type without a unit type accepts only ``None``.
        """
        unit_type = unit.unit_type if unit is not None else None
        return self._exists(
            AttributeType, tenant_id, attribute_type, lambda row: row.unit_type == unit_type
        )

    def is_valid_next_of_kin_type(self, tenant_id: uuid.UUID, code: str | None) -> bool:
        return self._exists(NextOfKinType, tenant_id, code)

    def is_valid_occupation(self, tenant_id: uuid.UUID, code: str | None) -> bool:
        return self._exists(Occupation, tenant_id, code)

    def is_valid_physical_address_type(self, code: str | None) -> bool:
        try:
            PhysicalAddressType.from_code(code)
        except InvalidCodeError:
            return False
        return True

    def is_valid_physical_address_role(
        self, tenant_id: uuid.UUID, party_type: str, code: str | None
    ) -> bool:
        return self._exists(
            PhysicalAddressRole,
            tenant_id,
            code,
            lambda row: row.is_valid_for_party_type(party_type),
        )

    def is_valid_physical_address_purpose(
        self, tenant_id: uuid.UUID, party_type: str, code: str | None
    ) -> bool:
        return self._exists(
            PhysicalAddressPurpose,
            tenant_id,
            code,
            lambda row: row.is_valid_for_party_type(party_type),
        )

    def is_valid_preference_type(
        self, tenant_id: uuid.UUID, party_type: str, code: str | None
    ) -> bool:
        return self._exists(
            PreferenceType, tenant_id, code, lambda row: row.is_valid_for_party_type(party_type)
        )

    def is_valid_race(self, tenant_id: uuid.UUID, code: str | None) -> bool:
        return self._exists(Race, tenant_id, code)

    def is_valid_residency_status(self, tenant_id: uuid.UUID, code: str | None) -> bool:
        return self._exists(ResidencyStatus, tenant_id, code)

    def is_valid_residential_type(self, tenant_id: uuid.UUID, code: str | None) -> bool:
        return self._exists(ResidentialType, tenant_id, code)

    def is_valid_role_type(self, tenant_id: uuid.UUID, party_type: str, code: str | None) -> bool:
        return self._exists(
            RoleType, tenant_id, code, lambda row: row.is_valid_for_party_type(party_type)
        )

    def is_valid_source_of_funds_type(self, tenant_id: uuid.UUID, code: str | None) -> bool:
        return self._exists(SourceOfFundsType, tenant_id, code)

    def is_valid_tax_number_type(
        self, tenant_id: uuid.UUID, party_type: str, code: str | None
    ) -> bool:
        return self._exists(
            TaxNumberType, tenant_id, code, lambda row: row.is_valid_for_party_type(party_type)
        )

    def is_valid_time_to_contact(self, tenant_id: uuid.UUID, code: str | None) -> bool:
        return self._exists(TimeToContact, tenant_id, code)

    def is_valid_title(self, tenant_id: uuid.UUID, code: str | None) -> bool:
        return self._exists(Title, tenant_id, code)
