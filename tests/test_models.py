"""Tests for the party, association and mandate models."""

import uuid
from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy import select, text
from sqlalchemy.orm import Session

from party.models.association import Association, AssociationProperty
from party.models.enums import (
    MeasurementUnit,
    PartyType,
    PhysicalAddressType,
    RequiredMandataries,
    ValueType,
)
from party.models.keys import AttributeId, ContactMechanismId
from party.models.mandate import Mandatary, Mandate, MandateLink, MandateProperty
from party.models.party import (
    Attribute,
    ContactMechanism,
    IndustryAllocation,
    Organization,
    Party,
    Person,
    PhysicalAddress,
    Role,
    SourceOfFunds,
)
from party.models.snapshot import Snapshot


class TestParty:
    """Tests for the party aggregate in memory."""

    def test_id_assigned_on_creation(self, tenant_id: uuid.UUID) -> None:
        first = Person(tenant_id=tenant_id, name="A")
        second = Person(tenant_id=tenant_id, name="B")
        assert isinstance(first.id, uuid.UUID)
        assert first.id != second.id

    def test_explicit_id_kept(self, tenant_id: uuid.UUID) -> None:
        party_id = uuid.uuid4()
        assert Organization(id=party_id, tenant_id=tenant_id, name="Acme").id == party_id

    def test_add_sets_owner(self, sample_person: Person) -> None:
        sample_person.add_role(Role(type="customer"))
        assert sample_person.roles[0].party_id == sample_person.id

    def test_add_replaces_item_with_equal_key(self, sample_person: Person) -> None:
        sample_person.add_contact_mechanism(
            ContactMechanism(type="email_address", role="personal_email_address", value="a@x.com")
        )
        sample_person.add_contact_mechanism(
            ContactMechanism(type="email_address", role="personal_email_address", value="b@x.com")
        )
        sample_person.add_contact_mechanism(
            ContactMechanism(type="email_address", role="work_email_address", value="c@x.com")
        )

        assert len(sample_person.contact_mechanisms) == 2
        found = sample_person.get_contact_mechanism("email_address", "personal_email_address")
        assert found is not None
        assert found.value == "b@x.com"
        assert found.key == ContactMechanismId(
            sample_person.id, "email_address", "personal_email_address"
        )

    def test_remove_by_key(self, sample_person: Person) -> None:
        sample_person.add_attribute(Attribute(type="height", decimal_value=Decimal("180")))

        assert sample_person.remove_attribute("height") is True
        assert sample_person.remove_attribute("height") is False
        assert sample_person.get_attribute("height") is None

    def test_attribute_key(self, sample_person: Person) -> None:
        attribute = Attribute(type="weight", decimal_value=Decimal("70"))
        sample_person.add_attribute(attribute)
        assert attribute.key == AttributeId(sample_person.id, "weight")

    def test_has_role(self, sample_person: Person) -> None:
        sample_person.add_role(Role(type="employee"))
        assert sample_person.has_role("employee")
        assert not sample_person.has_role("customer")

    def test_source_of_funds_owned_by_person(self, sample_person: Person) -> None:
        sample_person.add_source_of_funds(SourceOfFunds(type="salary", percentage=60))
        sample_person.add_source_of_funds(SourceOfFunds(type="salary", percentage=80))
        assert len(sample_person.sources_of_funds) == 1
        assert sample_person.sources_of_funds[0].person_id == sample_person.id
        assert sample_person.sources_of_funds[0].percentage == 80

    def test_industry_allocation_key_includes_industry(self, tenant_id: uuid.UUID) -> None:
        organization = Organization(tenant_id=tenant_id, name="Acme")
        organization.add_industry_allocation(IndustryAllocation(system="isic", industry="6419"))
        organization.add_industry_allocation(IndustryAllocation(system="isic", industry="6201"))
        assert len(organization.industry_allocations) == 2


class TestValues:
    """Tests for typed attribute and property values."""

    def test_has_value_for(self) -> None:
        attribute = Attribute(type="height", decimal_value=Decimal("1.8"))
        assert attribute.has_value_for(ValueType.DECIMAL)
        assert attribute.has_value_for("decimal")
        assert not attribute.has_value_for(ValueType.STRING)

    def test_value_returns_populated_column(self) -> None:
        assert Attribute(type="x", integer_value=3).value == 3
        assert Attribute(type="x", boolean_value=False).value is False
        assert Attribute(type="x").value is None


class TestAssociation:
    """Tests for associations."""

    def test_involves(self, tenant_id: uuid.UUID) -> None:
        first, second = uuid.uuid4(), uuid.uuid4()
        association = Association(
            tenant_id=tenant_id, type="spouse", first_party_id=first, second_party_id=second
        )
        assert association.involves(first)
        assert association.involves(second)
        assert not association.involves(uuid.uuid4())

    def test_properties_upserted(self, tenant_id: uuid.UUID) -> None:
        association = Association(
            tenant_id=tenant_id,
            type="employer_employee",
            first_party_id=uuid.uuid4(),
            second_party_id=uuid.uuid4(),
        )
        association.add_property(AssociationProperty(type="job_title", string_value="Clerk"))
        association.add_property(AssociationProperty(type="job_title", string_value="Manager"))

        assert len(association.properties) == 1
        assert association.get_property("job_title").string_value == "Manager"
        assert association.has_property("job_title")
        assert association.remove_property("job_title")
        assert not association.has_property("job_title")


class TestMandate:
    """Tests for mandates."""

    @pytest.fixture
    def mandate(self, tenant_id: uuid.UUID) -> Mandate:
        return Mandate(
            tenant_id=tenant_id,
            type="banking_mandate",
            required_mandataries=RequiredMandataries.ANY,
        )

    def test_mandatary_upsert_by_party(self, mandate: Mandate) -> None:
        party_id = uuid.uuid4()
        mandate.add_mandatary(Mandatary(party_id=party_id, role="signatory"))
        mandate.add_mandatary(Mandatary(party_id=party_id, role="approver"))

        assert len(mandate.mandataries) == 1
        assert mandate.mandataries[0].role == "approver"
        assert mandate.party_ids == [party_id]

    def test_remove_mandatary(self, mandate: Mandate) -> None:
        party_id = uuid.uuid4()
        mandate.add_mandatary(Mandatary(party_id=party_id, role="signatory"))
        assert mandate.remove_mandatary_for_party(party_id)
        assert mandate.mandataries == []

    def test_links_keyed_by_type_and_target(self, mandate: Mandate) -> None:
        mandate.add_link(MandateLink(type="account", target="A1"))
        mandate.add_link(MandateLink(type="account", target="A1"))
        mandate.add_link(MandateLink(type="account", target="A2"))
        mandate.add_link(MandateLink(type="product", target="P1"))

        assert len(mandate.links) == 3
        assert len(mandate.get_links("account")) == 2
        assert mandate.remove_links("account") == 2
        assert [link.target for link in mandate.links] == ["P1"]

    def test_properties(self, mandate: Mandate) -> None:
        mandate.add_property(MandateProperty(type="transaction_limit", decimal_value=Decimal("10")))
        assert mandate.get_property("transaction_limit").value == Decimal("10")
        assert mandate.remove_property("transaction_limit")
        assert mandate.get_property("transaction_limit") is None


class TestPersistence:
    """Tests for mapping the aggregates to the database."""

    def test_person_round_trip(self, session: Session, sample_person: Person) -> None:
        sample_person.add_attribute(
            Attribute(
                type="height",
                decimal_value=Decimal("180.5"),
                unit=MeasurementUnit.METRIC_CENTIMETER,
            )
        )
        sample_person.add_physical_address(
            PhysicalAddress(
                type=PhysicalAddressType.STREET,
                role="residential",
                street_name="Main Street",
                city="Springfield",
                country="US",
                postal_code="12345",
                purposes=["billing", "correspondence"],
            )
        )
        sample_person.countries_of_citizenship = ["US", "GB"]
        session.add(sample_person)
        session.commit()
        session.expunge_all()

        loaded = session.get(Person, sample_person.id)
        assert loaded is not None
        assert loaded.type is PartyType.PERSON
        assert loaded.countries_of_citizenship == ["US", "GB"]
        assert loaded.get_attribute("height").unit is MeasurementUnit.METRIC_CENTIMETER
        assert loaded.get_attribute("height").decimal_value == Decimal("180.5")
        address = loaded.physical_addresses[0]
        assert address.type is PhysicalAddressType.STREET
        assert address.purposes == ["billing", "correspondence"]

    def test_polymorphic_load(self, session: Session, tenant_id: uuid.UUID) -> None:
        person = Person(tenant_id=tenant_id, name="Person")
        organization = Organization(tenant_id=tenant_id, name="Organization")
        session.add_all([person, organization])
        session.commit()
        session.expunge_all()

        parties = session.scalars(select(Party).order_by(Party.name)).all()
        assert [type(party) for party in parties] == [Organization, Person]

    def test_mandate_stored_with_numeric_code(self, session: Session, tenant_id: uuid.UUID) -> None:
        mandate = Mandate(
            tenant_id=tenant_id,
            type="banking_mandate",
            required_mandataries=RequiredMandataries.ANY_TWO,
        )
        session.add(mandate)
        session.commit()

        stored = session.scalar(text("SELECT required_mandataries FROM party_mandates"))
        assert stored == 2

        session.expunge_all()
        assert session.get(Mandate, mandate.id).required_mandataries is RequiredMandataries.ANY_TWO

    def test_removing_child_deletes_row(self, session: Session, sample_person: Person) -> None:
        sample_person.add_role(Role(type="customer"))
        session.add(sample_person)
        session.commit()

        sample_person.roles.clear()
        session.commit()

        assert session.scalars(select(Role)).all() == []

    def test_snapshot_defaults(self, tenant_id: uuid.UUID) -> None:
        snapshot = Snapshot(
            tenant_id=tenant_id, entity_type="person", entity_id=uuid.uuid4(), data="{}"
        )
        assert snapshot.id is not None
        assert snapshot.timestamp is not None
        assert date.today() == snapshot.timestamp.date()
