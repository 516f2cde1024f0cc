"""Standard reference data and its loader.

The rows below are the codes the sample-data generators draw from. The
same codes are written for every requested locale; display names are
English for all of them.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from sqlalchemy import inspect
from sqlalchemy.orm import Session

from party.models.enums import ConstraintType, MeasurementUnitType, ValueType
from party.models.reference import (
    REFERENCE_MODELS,
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

logger = logging.getLogger(__name__)

BOTH = ["organization", "person"]
ORGANIZATION = ["organization"]
PERSON = ["person"]


def _rows(*codes: str, **extra: Any) -> list[dict[str, Any]]:
    """Rows named after their codes, e.g. ``"non_binary"`` -> ``"Non Binary"``."""
    return [{"code": code, "name": code.replace("_", " ").title(), **extra} for code in codes]


REFERENCE_DATA: dict[type, list[dict[str, Any]]] = {
    AssociationType: _rows("employer_employee", "parent_child", "spouse", "director"),
    AssociationPropertyType: [
        {"code": "start_date", "name": "Start Date", "association_type": "employer_employee",
         "value_type": ValueType.DATE},
        {"code": "job_title", "name": "Job Title", "association_type": "employer_employee",
         "value_type": ValueType.STRING},
        {"code": "shareholding", "name": "Shareholding", "association_type": "director",
         "value_type": ValueType.DECIMAL},
    ],
    AttributeTypeCategory: _rows("anthropometric", "employment", "registration"),
    AttributeType: [
        {"code": "height", "name": "Height", "category": "anthropometric",
         "value_type": ValueType.DECIMAL, "unit_type": MeasurementUnitType.LENGTH,
         "party_types": PERSON},
        {"code": "weight", "name": "Weight", "category": "anthropometric",
         "value_type": ValueType.DECIMAL, "unit_type": MeasurementUnitType.MASS,
         "party_types": PERSON},
        {"code": "employer_name", "name": "Employer Name", "category": "employment",
         "value_type": ValueType.STRING, "party_types": PERSON},
        {"code": "employee_count", "name": "Employee Count", "category": "registration",
         "value_type": ValueType.INTEGER, "party_types": ORGANIZATION},
        {"code": "registration_number", "name": "Registration Number",
         "category": "registration", "value_type": ValueType.STRING,
         "party_types": ORGANIZATION},
    ],
    ContactMechanismType: [
        {"code": "email_address", "name": "Email Address", "plural": "Email Addresses"},
        {"code": "mobile_number", "name": "Mobile Number", "plural": "Mobile Numbers"},
        {"code": "phone_number", "name": "Phone Number", "plural": "Phone Numbers"},
        {"code": "fax_number", "name": "Fax Number", "plural": "Fax Numbers"},
    ],
    ContactMechanismRole: [
        *_rows("personal_email_address", "personal_mobile_number", "home_phone_number",
               party_types=PERSON),
        *_rows("work_email_address", "work_phone_number", party_types=BOTH),
        *_rows("main_email_address", "main_phone_number", "main_fax_number",
               party_types=ORGANIZATION),
    ],
    ContactMechanismPurpose: [
        {"code": "billing", "name": "Billing", "party_types": BOTH,
         "contact_mechanism_types": ["email_address", "phone_number"]},
        {"code": "marketing", "name": "Marketing", "party_types": PERSON,
         "contact_mechanism_types": ["email_address", "mobile_number"]},
        {"code": "security", "name": "Security", "party_types": BOTH,
         "contact_mechanism_types": ["email_address", "mobile_number"]},
    ],
    EmploymentStatus: _rows("employed", "unemployed", "retired", "student", "other"),
    EmploymentType: [
        *_rows("full_time", "part_time", "contractor", "self_employed",
               employment_status="employed"),
        *_rows("pensioner", employment_status="retired"),
    ],
    ExternalReferenceType: [
        *_rows("crm_customer_id", party_types=BOTH),
        *_rows("legacy_person_id", party_types=PERSON),
        *_rows("legacy_organization_id", party_types=ORGANIZATION),
    ],
    Gender: _rows("female", "male", "non_binary", "transgender", "unknown"),
    IdentityDocumentType: [
        {"code": "passport", "name": "Passport", "party_types": PERSON},
        {"code": "drivers_license", "name": "Driver's License", "party_types": PERSON},
        {"code": "us_social_security_card", "name": "Social Security Card",
         "party_types": PERSON, "country_of_issue": "US"},
        {"code": "company_registration", "name": "Company Registration",
         "party_types": ORGANIZATION},
    ],
    IndustryClassificationSystem: _rows("isic", "naics"),
    IndustryClassificationCategory: [
        *_rows("section_c", "section_k", "section_j", system="isic"),
        *_rows("sector_52", "sector_54", system="naics"),
    ],
    IndustryClassification: [
        {"code": "6419", "name": "Other Monetary Intermediation", "system": "isic",
         "category": "section_k"},
        {"code": "6201", "name": "Computer Programming Activities", "system": "isic",
         "category": "section_j"},
        {"code": "1071", "name": "Manufacture Of Bakery Products", "system": "isic",
         "category": "section_c"},
        {"code": "522110", "name": "Commercial Banking", "system": "naics",
         "category": "sector_52"},
        {"code": "541511", "name": "Custom Computer Programming Services",
         "system": "naics", "category": "sector_54"},
    ],
    LockTypeCategory: _rows("compliance", "fraud"),
    LockType: [
        {"code": "suspected_fraud", "name": "Suspected Fraud", "category": "fraud",
         "party_types": BOTH},
        {"code": "deceased", "name": "Deceased", "category": "compliance",
         "party_types": PERSON},
        {"code": "sanctioned", "name": "Sanctioned", "category": "compliance",
         "party_types": BOTH},
    ],
    MandataryRole: _rows("signatory", "approver", "delegate"),
    MandateType: _rows("banking_mandate", "power_of_attorney"),
    MandatePropertyType: [
        {"code": "transaction_limit", "name": "Transaction Limit",
         "mandate_type": "banking_mandate", "value_type": ValueType.DECIMAL},
        {"code": "scope", "name": "Scope", "mandate_type": "power_of_attorney",
         "value_type": ValueType.STRING},
    ],
    MaritalStatus: _rows("single", "married", "divorced", "widowed", "life_partner"),
    MarriageType: _rows("in_community_of_property", "ante_nuptial_contract",
                        marital_status="married"),
    NextOfKinType: _rows("spouse", "parent", "sibling", "child", "friend"),
    Occupation: _rows("accountant", "engineer", "teacher", "nurse", "software_developer",
                      "sales_representative", "other"),
    PhysicalAddressRole: [
        *_rows("residential", party_types=PERSON),
        *_rows("postal", "work", party_types=BOTH),
        *_rows("main", "registered_office", party_types=ORGANIZATION),
    ],
    PhysicalAddressPurpose: [
        *_rows("billing", "correspondence", "delivery", party_types=BOTH),
        *_rows("permanent", party_types=PERSON),
    ],
    PreferenceTypeCategory: _rows("communication"),
    PreferenceType: [
        {"code": "correspondence_language", "name": "Correspondence Language",
         "category": "communication", "party_types": BOTH, "pattern": "[A-Z]{2}"},
        {"code": "time_to_contact", "name": "Time To Contact", "category": "communication",
         "party_types": PERSON},
    ],
    Race: _rows("asian", "black", "coloured", "indian", "white", "other", "unknown"),
    ResidencyStatus: _rows("citizen", "permanent_resident", "foreign_national", "refugee"),
    ResidentialType: _rows("owner", "renter", "living_with_parents", "other"),
    RoleType: [
        *_rows("customer", "supplier", party_types=BOTH),
        *_rows("employee", "test_person_role", party_types=PERSON),
        *_rows("employer", party_types=ORGANIZATION),
    ],
    SourceOfFundsType: _rows("salary", "savings", "investments", "inheritance",
                             "pension", "business_income"),
    TaxNumberType: [
        {"code": "us_ssn", "name": "Social Security Number", "party_types": PERSON,
         "country_of_issue": "US"},
        {"code": "us_ein", "name": "Employer Identification Number",
         "party_types": ORGANIZATION, "country_of_issue": "US"},
        {"code": "gb_utr", "name": "Unique Taxpayer Reference", "party_types": BOTH,
         "country_of_issue": "GB"},
    ],
    TimeToContact: _rows("anytime", "morning", "afternoon", "evening"),
    Title: [
        {"code": "mr", "name": "Mister", "abbreviation": "Mr"},
        {"code": "mrs", "name": "Missus", "abbreviation": "Mrs"},
        {"code": "ms", "name": "Ms", "abbreviation": "Ms"},
        {"code": "miss", "name": "Miss", "abbreviation": "Miss"},
        {"code": "dr", "name": "Doctor", "abbreviation": "Dr"},
        {"code": "prof", "name": "Professor", "abbreviation": "Prof"},
    ],
}

ROLE_TYPE_ATTRIBUTE_TYPE_CONSTRAINTS: list[dict[str, Any]] = [
    {"role_type": "employee", "attribute_type": "employer_name", "type": ConstraintType.REQUIRED},
    {"role_type": "employee", "attribute_type": "employer_name", "type": ConstraintType.MAX_SIZE,
     "value": "100"},
    {"role_type": "test_person_role", "attribute_type": "given_name",
     "type": ConstraintType.REQUIRED},
    {"role_type": "test_person_role", "attribute_type": "surname",
     "type": ConstraintType.REQUIRED},
    {"role_type": "test_person_role", "attribute_type": "date_of_birth",
     "type": ConstraintType.REQUIRED},
    {"role_type": "test_person_role", "attribute_type": "employer_name",
     "type": ConstraintType.MIN_SIZE, "value": "2"},
    {"role_type": "test_person_role", "attribute_type": "employer_name",
     "type": ConstraintType.PATTERN, "value": "[A-Za-z0-9 &.,'-]+"},
]


def _identity(model: type, values: dict[str, Any]) -> dict[str, Any]:
    return {column.key: values[column.key] for column in inspect(model).primary_key}


def _insert_missing(session: Session, model: type, rows: Iterable[dict[str, Any]]) -> int:
    inserted = 0
    for values in rows:
        if session.get(model, _identity(model, values)) is None:
            session.add(model(**values))
            inserted += 1
    return inserted


def load_reference_data(session: Session, locale_ids: Iterable[str] = ("en-US",)) -> int:
    """Insert the standard reference rows that are not already present.

    Rows are matched on their primary key, so loading twice (or loading a
    second locale later) only adds what is missing.

    Parameters
    ----------
    session : Session
        Session to write through; the caller commits.
    locale_ids : Iterable[str]
        Locales to write every reference row for.

    Returns
    -------
    int
        Number of rows inserted.
    """
    locale_ids = list(locale_ids)
    inserted = 0
    for model in REFERENCE_MODELS:
        seed_rows = REFERENCE_DATA.get(model, [])
        # Highest sort index is listed first
        rows = [
            {**row, "locale_id": locale_id, "sort_index": len(seed_rows) - position}
            for locale_id in locale_ids
            for position, row in enumerate(seed_rows)
        ]
        count = _insert_missing(session, model, rows)
        if count:
            logger.debug("Inserted %d %s row(s)", count, model.__tablename__)
        inserted += count

    constraints = [
        {"attribute_type_qualifier": "", "value": None, **row}
        for row in ROLE_TYPE_ATTRIBUTE_TYPE_CONSTRAINTS
    ]
    inserted += _insert_missing(session, RoleTypeAttributeTypeConstraint, constraints)

    session.flush()
    logger.info("Loaded %d reference row(s) for locale(s) %s", inserted, ", ".join(locale_ids))
    return inserted
