"""Tests for the reference data repositories, loader and service."""

import uuid

import pytest
from sqlalchemy.orm import Session

from party.exceptions import InvalidArgumentError
from party.models.enums import MeasurementUnit
from party.models.party import Person
from party.models.reference import Gender, MarriageType, RoleType
from party.reference import PartyReferenceService
from party.reference_data import REFERENCE_DATA, load_reference_data
from party.store.repositories import ReferenceDataRepository


class TestLoadReferenceData:
    """Tests for seeding reference data."""

    def test_loading_twice_inserts_nothing(self, session: Session) -> None:
        assert load_reference_data(session) == 0

    def test_second_locale_added(self, session: Session) -> None:
        inserted = load_reference_data(session, ["en-US", "en-GB"])
        expected = sum(len(rows) for rows in REFERENCE_DATA.values())
        assert inserted == expected

    def test_constraints_loaded(self, reference_service: PartyReferenceService) -> None:
        constraints = reference_service.get_role_type_attribute_type_constraints("employee")
        assert {c.type.code for c in constraints} == {"required", "max_size"}
        assert all(c.attribute_type == "employer_name" for c in constraints)


class TestReferenceDataRepository:
    """Tests for localized reference lookups."""

    def test_rejects_non_reference_model(self, session: Session) -> None:
        with pytest.raises(TypeError):
            ReferenceDataRepository(session, Person)

    def test_locale_matched_ignoring_case(self, session: Session) -> None:
        repository = ReferenceDataRepository(session, Gender)
        assert len(repository.find_by_locale("EN-us")) == len(REFERENCE_DATA[Gender])

    def test_unknown_locale_is_empty(self, session: Session) -> None:
        assert ReferenceDataRepository(session, Gender).find_by_locale("xx-XX") == []

    def test_ordered_by_sort_index_descending_nulls_last(self, session: Session) -> None:
        session.add_all(
            [
                Gender(code="zz_unsorted", locale_id="en-US", name="Aaa", sort_index=None),
                Gender(code="zz_top", locale_id="en-US", name="Zzz", sort_index=100),
            ]
        )
        session.flush()

        codes = [row.code for row in ReferenceDataRepository(session, Gender).find_by_locale("en-US")]
        assert codes[0] == "zz_top"
        assert codes[1] == "female"
        assert codes[-1] == "zz_unsorted"

    def test_find_by_code(self, session: Session) -> None:
        row = ReferenceDataRepository(session, RoleType).find_by_code("employee", "en-us")
        assert row is not None
        assert row.party_types == ["person"]
        assert row.key.as_tuple() == ("employee", "en-US")


class TestPartyReferenceService:
    """Tests for the reference data service."""

    @pytest.fixture
    def tenant_gender(self, session: Session, other_tenant_id: uuid.UUID) -> Gender:
        gender = Gender(
            code="tenant_gender", locale_id="en-US", tenant_id=other_tenant_id, name="Tenant"
        )
        session.add(gender)
        session.flush()
        return gender

    def test_get_genders(self, reference_service: PartyReferenceService) -> None:
        genders = reference_service.get_genders("en-US")
        assert [g.code for g in genders][:2] == ["female", "male"]

    @pytest.mark.parametrize("locale_id", ["", "   ", None])
    def test_blank_locale_rejected(
        self, reference_service: PartyReferenceService, locale_id: str
    ) -> None:
        with pytest.raises(InvalidArgumentError) as exc_info:
            reference_service.get_titles(locale_id)
        assert exc_info.value.name == "locale_id"

    def test_for_tenant_hides_other_tenants_rows(
        self,
        reference_service: PartyReferenceService,
        tenant_gender: Gender,
        tenant_id: uuid.UUID,
        other_tenant_id: uuid.UUID,
    ) -> None:
        mine = [g.code for g in reference_service.get_genders_for_tenant(tenant_id, "en-US")]
        theirs = [g.code for g in reference_service.get_genders_for_tenant(other_tenant_id, "en-US")]

        assert "tenant_gender" not in mine
        assert theirs[-1] == "tenant_gender"
        assert "tenant_gender" in [g.code for g in reference_service.get_genders("en-US")]

    def test_is_valid_respects_tenant(
        self,
        reference_service: PartyReferenceService,
        tenant_gender: Gender,
        tenant_id: uuid.UUID,
        other_tenant_id: uuid.UUID,
    ) -> None:
        assert reference_service.is_valid_gender(tenant_id, "female")
        assert not reference_service.is_valid_gender(tenant_id, "tenant_gender")
        assert reference_service.is_valid_gender(other_tenant_id, "tenant_gender")
        assert not reference_service.is_valid_gender(tenant_id, None)
        assert not reference_service.is_valid_gender(tenant_id, "robot")

    def test_party_type_scoped_codes(
        self, reference_service: PartyReferenceService, tenant_id: uuid.UUID
    ) -> None:
        assert reference_service.is_valid_role_type(tenant_id, "person", "employee")
        assert not reference_service.is_valid_role_type(tenant_id, "organization", "employee")
        assert reference_service.is_valid_contact_mechanism_role(
            tenant_id, "organization", "main_email_address"
        )
        assert not reference_service.is_valid_contact_mechanism_role(
            tenant_id, "person", "main_email_address"
        )

    def test_contact_mechanism_purpose(
        self, reference_service: PartyReferenceService, tenant_id: uuid.UUID
    ) -> None:
        assert reference_service.is_valid_contact_mechanism_purpose(
            tenant_id, "person", "mobile_number", "marketing"
        )
        assert not reference_service.is_valid_contact_mechanism_purpose(
            tenant_id, "organization", "mobile_number", "marketing"
        )
        assert not reference_service.is_valid_contact_mechanism_purpose(
            tenant_id, "person", "fax_number", "marketing"
        )

    def test_marriage_type(
        self, reference_service: PartyReferenceService, session: Session, tenant_id: uuid.UUID
    ) -> None:
        assert reference_service.is_valid_marriage_type(
            tenant_id, "married", "ante_nuptial_contract"
        )
        assert not reference_service.is_valid_marriage_type(tenant_id, "married", "unknown")
        assert not reference_service.is_valid_marriage_type(tenant_id, "married", None)
        # no marriage types for the status, or no status: anything goes
        assert reference_service.is_valid_marriage_type(tenant_id, "single", "anything")
        assert reference_service.is_valid_marriage_type(tenant_id, None, "anything")

    def test_marriage_type_of_other_tenant_ignored(
        self,
        reference_service: PartyReferenceService,
        session: Session,
        tenant_id: uuid.UUID,
        other_tenant_id: uuid.UUID,
    ) -> None:
        session.add(
            MarriageType(
                code="customary",
                locale_id="en-US",
                marital_status="life_partner",
                tenant_id=other_tenant_id,
                name="Customary",
            )
        )
        session.flush()

        assert reference_service.is_valid_marriage_type(tenant_id, "life_partner", "anything")
        assert not reference_service.is_valid_marriage_type(
            other_tenant_id, "life_partner", "anything"
        )

    def test_scoped_by_parent_code(
        self, reference_service: PartyReferenceService, tenant_id: uuid.UUID
    ) -> None:
        assert reference_service.is_valid_employment_type(tenant_id, "employed", "full_time")
        assert not reference_service.is_valid_employment_type(tenant_id, "retired", "full_time")
        assert reference_service.is_valid_industry_classification(tenant_id, "naics", "522110")
        assert not reference_service.is_valid_industry_classification(tenant_id, "isic", "522110")
        assert reference_service.is_valid_association_property_type(
            tenant_id, "employer_employee", "job_title"
        )
        assert not reference_service.is_valid_association_property_type(
            tenant_id, "spouse", "job_title"
        )
        assert reference_service.is_valid_mandate_property_type(
            tenant_id, "banking_mandate", "transaction_limit"
        )

    def test_measurement_unit_for_attribute_type(
        self, reference_service: PartyReferenceService, tenant_id: uuid.UUID
    ) -> None:
        check = reference_service.is_valid_measurement_unit_for_attribute_type
        assert check(tenant_id, "height", MeasurementUnit.IMPERIAL_INCH)
        assert not check(tenant_id, "height", MeasurementUnit.METRIC_KILOGRAM)
        assert not check(tenant_id, "height", None)
        assert check(tenant_id, "employer_name", None)
        assert not check(tenant_id, "employer_name", MeasurementUnit.METRIC_LITER)

    def test_physical_address_type(self, reference_service: PartyReferenceService) -> None:
        assert reference_service.is_valid_physical_address_type("farm")
        assert not reference_service.is_valid_physical_address_type("castle")

    def test_single_lookups(
        self, reference_service: PartyReferenceService, tenant_id: uuid.UUID
    ) -> None:
        assert reference_service.get_attribute_type_value_type(tenant_id, "height").code == "decimal"
        assert reference_service.get_attribute_type_value_type(tenant_id, "missing") is None
        preference_type = reference_service.get_preference_type(
            tenant_id, "person", "correspondence_language"
        )
        assert preference_type.pattern == "[A-Z]{2}"
        assert reference_service.get_preference_type(
            tenant_id, "organization", "time_to_contact"
        ) is None
