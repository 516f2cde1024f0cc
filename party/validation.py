"""Validation of party aggregates against the reference data.

Validators collect every problem they find instead of stopping at the
first one; an empty list means the aggregate is valid.
"""

from __future__ import annotations

import re
import uuid
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from party.exceptions import InvalidCodeError
from party.models.association import Association
from party.models.enums import (
    ConstraintType,
    PartyType,
    PhysicalAddressType,
    RequiredMandataries,
)
from party.models.mandate import Mandate
from party.models.party import Attribute, Organization, Party, Person, PhysicalAddress
from party.reference import PartyReferenceService

COUNTRY_CODE = re.compile(r"[A-Z]{2}")
LANGUAGE_CODE = re.compile(r"[A-Z]{2}")

INVALID_CODE = "is not a valid code"

_SIZE_CONSTRAINTS = (ConstraintType.MAX_SIZE, ConstraintType.MIN_SIZE, ConstraintType.SIZE)


@dataclass(frozen=True)
class ConstraintViolation:
    """One failed check: the offending property path, a message and the value."""

    property: str
    message: str
    value: Any = None

    def __str__(self) -> str:
        return f"{self.property}: {self.message}"


class _Violations(list):
    def add(self, property: str, message: str, value: Any = None) -> None:
        self.append(ConstraintViolation(property, message, value))


# Field rules per physical address type. A field not listed as required or
# optional for a type must be empty for that type.
_ADDRESS_FIELDS = (
    "building_floor",
    "building_name",
    "building_room",
    "city",
    "complex_name",
    "complex_unit_number",
    "farm_description",
    "farm_name",
    "farm_number",
    "line1",
    "line2",
    "line3",
    "region",
    "site_block",
    "site_number",
    "street_name",
    "street_number",
    "suburb",
)

_REQUIRED_ADDRESS_FIELDS: dict[PhysicalAddressType, tuple[str, ...]] = {
    PhysicalAddressType.BUILDING: ("building_name", "city", "street_name"),
    PhysicalAddressType.COMPLEX: ("city", "complex_name", "complex_unit_number", "street_name"),
    PhysicalAddressType.FARM: ("farm_number",),
    PhysicalAddressType.INTERNATIONAL: ("line1",),
    PhysicalAddressType.SITE: ("city", "site_block", "site_number"),
    PhysicalAddressType.STREET: ("city", "street_name"),
    PhysicalAddressType.UNSTRUCTURED: ("line1",),
}

_OPTIONAL_ADDRESS_FIELDS: dict[PhysicalAddressType, tuple[str, ...]] = {
    PhysicalAddressType.BUILDING: (
        "building_floor",
        "building_room",
        "region",
        "street_number",
        "suburb",
    ),
    PhysicalAddressType.COMPLEX: ("region", "street_number", "suburb"),
    PhysicalAddressType.FARM: (
        "city",
        "farm_description",
        "farm_name",
        "region",
        "street_name",
        "street_number",
        "suburb",
    ),
    PhysicalAddressType.INTERNATIONAL: ("city", "line2", "line3", "region"),
    PhysicalAddressType.SITE: ("region", "street_name", "street_number", "suburb"),
    PhysicalAddressType.STREET: ("region", "street_number", "suburb"),
    PhysicalAddressType.UNSTRUCTURED: ("city", "line2", "line3", "region"),
}


def _has_text(value: Any) -> bool:
    return value is not None and str(value).strip() != ""


def _is_present(value: Any) -> bool:
    if isinstance(value, (list, tuple, set)):
        return len(value) > 0
    return _has_text(value) if isinstance(value, str) else value is not None


def validate_physical_address(
    address: PhysicalAddress, path: str = "physical_address"
) -> list[ConstraintViolation]:
    """Check the address fields against the rules for its type.

    Every address needs a country and a postal code, and a suburb is only
    allowed together with a city.
    """
    violations = _Violations()
    try:
        address_type = PhysicalAddressType.from_code(address.type)
    except InvalidCodeError:
        violations.add(f"{path}.type", "is not a valid physical address type", address.type)
        return violations

    required = _REQUIRED_ADDRESS_FIELDS[address_type]
    allowed = set(required) | set(_OPTIONAL_ADDRESS_FIELDS[address_type])

    for name in required:
        if not _has_text(getattr(address, name)):
            violations.add(f"{path}.{name}", f"is required for a {address_type} address")
    for name in _ADDRESS_FIELDS:
        value = getattr(address, name)
        if name not in allowed and _has_text(value):
            violations.add(
                f"{path}.{name}", f"is not supported for a {address_type} address", value
            )

    if not _has_text(address.country):
        violations.add(f"{path}.country", "is required")
    elif not COUNTRY_CODE.fullmatch(address.country):
        violations.add(f"{path}.country", "is not a valid country code", address.country)
    if not _has_text(address.postal_code):
        violations.add(f"{path}.postal_code", "is required")
    if _has_text(address.suburb) and not _has_text(address.city) and "city" not in required:
        violations.add(f"{path}.city", "is required with a suburb")

    return violations


class PartyValidator:
    """Validate persons, organizations, associations and mandates for a tenant.

    Parameters
    ----------
    reference_service : PartyReferenceService
        Source of the reference data the codes are checked against.
    """

    # Person fields a REQUIRED role constraint may name directly; any other
    # name refers to an attribute type.
    REQUIRED_PERSON_FIELDS = frozenset(
        {
            "contact_mechanisms",
            "countries_of_citizenship",
            "countries_of_tax_residence",
            "country_of_birth",
            "country_of_residence",
            "date_of_birth",
            "date_of_death",
            "employment_status",
            "employment_type",
            "gender",
            "given_name",
            "identity_documents",
            "initials",
            "language",
            "marital_status",
            "marital_status_date",
            "marriage_type",
            "measurement_system",
            "occupation",
            "physical_addresses",
            "preferred_name",
            "race",
            "residency_status",
            "residential_type",
            "sources_of_funds",
            "surname",
            "tax_numbers",
            "time_zone",
            "title",
        }
    )

    def __init__(self, reference_service: PartyReferenceService) -> None:
        self.reference = reference_service
        ref = reference_service
        # Reference types a REFERENCE role constraint may name
        self._reference_checks: dict[str, Callable[[uuid.UUID, str], bool]] = {
            "employment_status": ref.is_valid_employment_status,
            "gender": ref.is_valid_gender,
            "marital_status": ref.is_valid_marital_status,
            "next_of_kin_type": ref.is_valid_next_of_kin_type,
            "occupation": ref.is_valid_occupation,
            "race": ref.is_valid_race,
            "residency_status": ref.is_valid_residency_status,
            "residential_type": ref.is_valid_residential_type,
            "source_of_funds_type": ref.is_valid_source_of_funds_type,
            "time_to_contact": ref.is_valid_time_to_contact,
            "title": ref.is_valid_title,
        }

    # -- aggregates ----------------------------------------------------------

    def validate_person(self, tenant_id: uuid.UUID, person: Person) -> list[ConstraintViolation]:
        violations = self._validate_party(tenant_id, person, PartyType.PERSON)
        ref = self.reference

        for name in (
            "gender",
            "race",
            "title",
            "marital_status",
            "occupation",
            "employment_status",
            "residency_status",
            "residential_type",
        ):
            value = getattr(person, name)
            if _has_text(value) and not self._reference_checks[name](tenant_id, value):
                violations.add(name, INVALID_CODE, value)

        if _has_text(person.employment_type) and not ref.is_valid_employment_type(
            tenant_id, person.employment_status, person.employment_type
        ):
            violations.add("employment_type", INVALID_CODE, person.employment_type)
        if not ref.is_valid_marriage_type(tenant_id, person.marital_status, person.marriage_type):
            violations.add(
                "marriage_type",
                f"is not valid for the marital status ({person.marital_status})",
                person.marriage_type,
            )

        for name in ("country_of_birth", "country_of_residence"):
            value = getattr(person, name)
            if _has_text(value) and not COUNTRY_CODE.fullmatch(value):
                violations.add(name, "is not a valid country code", value)
        self._check_countries(
            violations, "countries_of_citizenship", person.countries_of_citizenship
        )
        self._check_countries(
            violations, "countries_of_tax_residence", person.countries_of_tax_residence
        )
        if _has_text(person.language) and not LANGUAGE_CODE.fullmatch(person.language):
            violations.add("language", "is not a valid language code", person.language)
        if (
            person.date_of_birth is not None
            and person.date_of_death is not None
            and person.date_of_death < person.date_of_birth
        ):
            violations.add("date_of_death", "is before the date of birth", person.date_of_death)

        for index, source in enumerate(person.sources_of_funds):
            if not ref.is_valid_source_of_funds_type(tenant_id, source.type):
                violations.add(f"sources_of_funds[{index}].type", INVALID_CODE, source.type)

        for role in person.roles:
            self._validate_role_constraints(violations, tenant_id, person, role.type)

        return violations

    def validate_organization(
        self, tenant_id: uuid.UUID, organization: Organization
    ) -> list[ConstraintViolation]:
        violations = self._validate_party(tenant_id, organization, PartyType.ORGANIZATION)
        self._check_countries(
            violations, "countries_of_tax_residence", organization.countries_of_tax_residence
        )
        for index, allocation in enumerate(organization.industry_allocations):
            if not self.reference.is_valid_industry_classification(
                tenant_id, allocation.system, allocation.industry
            ):
                violations.add(
                    f"industry_allocations[{index}]",
                    f"is not a valid industry for the system ({allocation.system})",
                    allocation.industry,
                )
        return violations

    def validate_association(
        self, tenant_id: uuid.UUID, association: Association
    ) -> list[ConstraintViolation]:
        violations = _Violations()
        if not self.reference.is_valid_association_type(tenant_id, association.type):
            violations.add("type", INVALID_CODE, association.type)
        if association.first_party_id == association.second_party_id:
            violations.add(
                "second_party_id", "must differ from the first party", association.second_party_id
            )
        self._check_effective_dates(violations, association)

        for index, prop in enumerate(association.properties):
            property_type = self.reference.get_association_property_type(
                tenant_id, association.type, prop.type
            )
            self._check_property(violations, f"properties[{index}]", prop, property_type)
        return violations

    def validate_mandate(self, tenant_id: uuid.UUID, mandate: Mandate) -> list[ConstraintViolation]:
        violations = _Violations()
        if not self.reference.is_valid_mandate_type(tenant_id, mandate.type):
            violations.add("type", INVALID_CODE, mandate.type)
        self._check_effective_dates(violations, mandate)

        required = RequiredMandataries.from_code(mandate.required_mandataries)
        minimum = {RequiredMandataries.ANY_TWO: 2, RequiredMandataries.ANY_THREE: 3}.get(
            required, 1
        )
        count = len(mandate.mandataries)
        if count == 0:
            violations.add("mandataries", "at least one is required")
        elif count < minimum:
            violations.add(
                "mandataries", f"at least {minimum} are required for {required.description}", count
            )
        for index, mandatary in enumerate(mandate.mandataries):
            if not self.reference.is_valid_mandatary_role(tenant_id, mandatary.role):
                violations.add(f"mandataries[{index}].role", INVALID_CODE, mandatary.role)

        for index, prop in enumerate(mandate.properties):
            property_type = self.reference.get_mandate_property_type(
                tenant_id, mandate.type, prop.type
            )
            self._check_property(violations, f"properties[{index}]", prop, property_type)
        return violations

    # -- shared party checks -------------------------------------------------

    def _validate_party(
        self, tenant_id: uuid.UUID, party: Party, party_type: PartyType
    ) -> _Violations:
        violations = _Violations()
        ref = self.reference
        code = party_type.code
        not_for_party_type = f"is not valid for a {code}"

        if not _has_text(party.name):
            violations.add("name", "is required")

        for index, mechanism in enumerate(party.contact_mechanisms):
            path = f"contact_mechanisms[{index}]"
            if not ref.is_valid_contact_mechanism_type(tenant_id, mechanism.type):
                violations.add(f"{path}.type", INVALID_CODE, mechanism.type)
            if not ref.is_valid_contact_mechanism_role(tenant_id, code, mechanism.role):
                violations.add(f"{path}.role", not_for_party_type, mechanism.role)
            for purpose in mechanism.purposes or ():
                if not ref.is_valid_contact_mechanism_purpose(
                    tenant_id, code, mechanism.type, purpose
                ):
                    violations.add(f"{path}.purposes", not_for_party_type, purpose)

        for index, address in enumerate(party.physical_addresses):
            path = f"physical_addresses[{index}]"
            violations.extend(validate_physical_address(address, path))
            if not ref.is_valid_physical_address_role(tenant_id, code, address.role):
                violations.add(f"{path}.role", not_for_party_type, address.role)
            for purpose in address.purposes or ():
                if not ref.is_valid_physical_address_purpose(tenant_id, code, purpose):
                    violations.add(f"{path}.purposes", not_for_party_type, purpose)

        for index, document in enumerate(party.identity_documents):
            path = f"identity_documents[{index}]"
            if not ref.is_valid_identity_document_type(tenant_id, code, document.type):
                violations.add(f"{path}.type", not_for_party_type, document.type)
            if not COUNTRY_CODE.fullmatch(document.country_of_issue or ""):
                violations.add(
                    f"{path}.country_of_issue",
                    "is not a valid country code",
                    document.country_of_issue,
                )
            if (
                document.expiry_date is not None
                and document.issue_date is not None
                and document.expiry_date < document.issue_date
            ):
                violations.add(
                    f"{path}.expiry_date", "is before the issue date", document.expiry_date
                )

        for index, tax_number in enumerate(party.tax_numbers):
            if not ref.is_valid_tax_number_type(tenant_id, code, tax_number.type):
                violations.add(f"tax_numbers[{index}].type", not_for_party_type, tax_number.type)

        for index, reference in enumerate(party.external_references):
            if not ref.is_valid_external_reference_type(tenant_id, code, reference.type):
                violations.add(
                    f"external_references[{index}].type", not_for_party_type, reference.type
                )

        for index, attribute in enumerate(party.attributes):
            self._check_attribute(violations, tenant_id, code, attribute, f"attributes[{index}]")

        for index, preference in enumerate(party.preferences):
            path = f"preferences[{index}]"
            preference_type = ref.get_preference_type(tenant_id, code, preference.type)
            if preference_type is None:
                violations.add(f"{path}.type", not_for_party_type, preference.type)
            elif preference_type.pattern and not re.fullmatch(
                preference_type.pattern, preference.value or ""
            ):
                violations.add(
                    f"{path}.value", "does not match the required pattern", preference.value
                )

        for index, lock in enumerate(party.locks):
            if not ref.is_valid_lock_type(tenant_id, code, lock.type):
                violations.add(f"locks[{index}].type", not_for_party_type, lock.type)

        for index, role in enumerate(party.roles):
            if not ref.is_valid_role_type(tenant_id, code, role.type):
                violations.add(f"roles[{index}].type", not_for_party_type, role.type)

        return violations

    def _check_attribute(
        self,
        violations: _Violations,
        tenant_id: uuid.UUID,
        party_type: str,
        attribute: Attribute,
        path: str,
    ) -> None:
        attribute_type = self.reference.get_attribute_type(tenant_id, attribute.type)
        if attribute_type is None or not attribute_type.is_valid_for_party_type(party_type):
            violations.add(f"{path}.type", f"is not valid for a {party_type}", attribute.type)
            return
        if not attribute.has_value_for(attribute_type.value_type):
            violations.add(path, f"requires a {attribute_type.value_type} value", attribute.value)
        if not self.reference.is_valid_measurement_unit_for_attribute_type(
            tenant_id, attribute.type, attribute.unit
        ):
            violations.add(f"{path}.unit", "is not valid for the attribute type", attribute.unit)

    def _validate_role_constraints(
        self, violations: _Violations, tenant_id: uuid.UUID, person: Person, role_type: str
    ) -> None:
        """Apply the attribute constraints of a role type to the person holding it.

        REQUIRED may name a person field or an attribute type. The size,
        pattern and reference constraints only apply to attributes, and
        only when the person has that attribute.
        """
        context = f"for the role type ({role_type})"
        for constraint in self.reference.get_role_type_attribute_type_constraints(role_type):
            constraint_type = ConstraintType.from_code(constraint.type)
            name = constraint.attribute_type

            if constraint_type == ConstraintType.REQUIRED:
                if name in self.REQUIRED_PERSON_FIELDS:
                    present = _is_present(getattr(person, name))
                else:
                    present = person.get_attribute(name) is not None
                if not present:
                    violations.add(name, f"is required {context}")
                continue

            attribute = person.get_attribute(name)
            if attribute is None:
                continue
            text = "" if attribute.value is None else str(attribute.value)
            size = constraint.integer_value if constraint_type in _SIZE_CONSTRAINTS else 0

            if constraint_type == ConstraintType.MAX_SIZE and len(text) > size:
                violations.add(name, f"must be at most {size} characters {context}", text)
            elif constraint_type == ConstraintType.MIN_SIZE and len(text) < size:
                violations.add(name, f"must be at least {size} characters {context}", text)
            elif constraint_type == ConstraintType.SIZE and len(text) != size:
                violations.add(name, f"must be exactly {size} characters {context}", text)
            elif constraint_type == ConstraintType.PATTERN and not re.fullmatch(
                constraint.value or "", text
            ):
                violations.add(name, f"does not match the pattern {context}", text)
            elif constraint_type == ConstraintType.REFERENCE:
                check = self._reference_checks.get(constraint.value or "")
                if check is None or not check(tenant_id, text):
                    violations.add(name, f"is not a valid {constraint.value} {context}", text)

    @staticmethod
    def _check_property(
        violations: _Violations, path: str, prop: Any, property_type: Any
    ) -> None:
        if property_type is None:
            violations.add(f"{path}.type", INVALID_CODE, prop.type)
        elif not prop.has_value_for(property_type.value_type):
            violations.add(path, f"requires a {property_type.value_type} value", prop.value)

    @staticmethod
    def _check_countries(
        violations: _Violations, name: str, codes: Iterable[str] | None
    ) -> None:
        for code in codes or []:
            if not COUNTRY_CODE.fullmatch(code):
                violations.add(name, "is not a valid country code", code)

    @staticmethod
    def _check_effective_dates(violations: _Violations, entity: Any) -> None:
        if (
            entity.effective_from is not None
            and entity.effective_to is not None
            and entity.effective_to < entity.effective_from
        ):
            violations.add("effective_to", "is before the effective from date", entity.effective_to)
