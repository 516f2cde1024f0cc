"""Person generator."""

from __future__ import annotations

import datetime
import random
import uuid
from decimal import Decimal
from typing import Iterator

from party.generators.address import AddressFactory, CountryDistribution
from party.generators.base import BaseGenerator
from party.models.enums import MeasurementSystem, MeasurementUnit
from party.models.party import (
    Attribute,
    ContactMechanism,
    IdentityDocument,
    Person,
    Preference,
    Role,
    SourceOfFunds,
    TaxNumber,
)


class PersonGenerator(BaseGenerator):
    """Generate synthetic persons that pass validation against the standard reference data."""

    GENDERS = ["female", "male", "non_binary"]
    GENDER_WEIGHTS = [0.49, 0.49, 0.02]

    TITLES = {
        "female": ["ms", "mrs", "miss", "dr"],
        "male": ["mr", "mr", "mr", "dr"],
        "non_binary": ["dr", "prof"],
    }

    MARITAL_STATUSES = ["single", "married", "divorced", "widowed", "life_partner"]
    MARITAL_WEIGHTS = [0.40, 0.40, 0.10, 0.05, 0.05]

    EMPLOYMENT_STATUSES = ["employed", "unemployed", "retired", "student"]
    EMPLOYMENT_WEIGHTS = [0.65, 0.10, 0.15, 0.10]

    EMPLOYMENT_TYPES = ["full_time", "part_time", "contractor", "self_employed"]
    OCCUPATIONS = [
        "accountant",
        "engineer",
        "teacher",
        "nurse",
        "software_developer",
        "sales_representative",
    ]
    SOURCES_OF_FUNDS = {
        "employed": "salary",
        "unemployed": "savings",
        "retired": "pension",
        "student": "savings",
    }

    def __init__(
        self,
        seed: int | None = None,
        locale: str = "en_US",
        country_distribution: CountryDistribution | None = None,
    ) -> None:
        super().__init__(seed, locale)
        self._address_factory = AddressFactory(distribution=country_distribution, seed=seed)

    def generate(self, tenant_id: uuid.UUID) -> Person:
        """Generate a single person for a tenant.

        Returns
        -------
        Person
            Generated person, not yet persisted.
        """
        return self._generate_one(tenant_id)

    def generate_batch(self, tenant_id: uuid.UUID, count: int) -> Iterator[Person]:
        """Generate multiple persons.

        Parameters
        ----------
        tenant_id : uuid.UUID
            Tenant the persons belong to.
        count : int
            Number of persons to generate.

        Yields
        ------
        Person
            Generated persons.
        """
        for _ in range(count):
            yield self._generate_one(tenant_id)

    def _generate_one(self, tenant_id: uuid.UUID) -> Person:
        fake = self.fake
        gender = random.choices(self.GENDERS, weights=self.GENDER_WEIGHTS, k=1)[0]
        if gender == "female":
            given_name = fake.first_name_female()
        elif gender == "male":
            given_name = fake.first_name_male()
        else:
            given_name = fake.first_name()
        surname = fake.last_name()
        country = self._address_factory.pick_country()

        marital_status = random.choices(self.MARITAL_STATUSES, weights=self.MARITAL_WEIGHTS, k=1)[0]
        employment_status = random.choices(
            self.EMPLOYMENT_STATUSES, weights=self.EMPLOYMENT_WEIGHTS, k=1
        )[0]
        employed = employment_status == "employed"

        person = Person(
            tenant_id=tenant_id,
            name=f"{given_name} {surname}",
            given_name=given_name,
            surname=surname,
            preferred_name=given_name,
            initials=given_name[0].upper(),
            title=random.choice(self.TITLES[gender]),
            gender=gender,
            date_of_birth=fake.date_of_birth(minimum_age=18, maximum_age=90),
            country_of_birth=country,
            country_of_residence=country,
            countries_of_citizenship=[country],
            countries_of_tax_residence=[country],
            marital_status=marital_status,
            marriage_type=(
                random.choice(["in_community_of_property", "ante_nuptial_contract"])
                if marital_status == "married"
                else None
            ),
            employment_status=employment_status,
            employment_type=random.choice(self.EMPLOYMENT_TYPES) if employed else None,
            occupation=random.choice(self.OCCUPATIONS) if employed else None,
            residency_status="citizen",
            residential_type=random.choice(["owner", "renter", "living_with_parents"]),
            language="EN",
            measurement_system=(
                MeasurementSystem.US_CUSTOMARY if country == "US" else MeasurementSystem.METRIC
            ),
            time_zone=fake.timezone(),
        )

        email = f"{given_name}.{surname}@{fake.free_email_domain()}".lower()
        person.add_contact_mechanism(
            ContactMechanism(
                type="email_address",
                role="personal_email_address",
                value=email,
                purposes=["security"],
            )
        )
        person.add_contact_mechanism(
            ContactMechanism(
                type="mobile_number",
                role="personal_mobile_number",
                value=fake.numerify("+1##########"),
            )
        )
        person.add_physical_address(
            self._address_factory.generate(
                role="residential", purposes=["correspondence"], country=country
            )
        )

        issue_date = fake.date_between(start_date="-9y", end_date="-1d")
        person.add_identity_document(
            IdentityDocument(
                type="passport",
                country_of_issue=country,
                issue_date=issue_date,
                expiry_date=issue_date + datetime.timedelta(days=3652),
                number=fake.bothify("?########", letters="ABCDEFGHJKLMNPRSTUVWXYZ"),
            )
        )
        if country == "US":
            person.add_tax_number(
                TaxNumber(type="us_ssn", country_of_issue="US", number=fake.numerify("###-##-####"))
            )
        elif country == "GB":
            person.add_tax_number(
                TaxNumber(type="gb_utr", country_of_issue="GB", number=fake.numerify("##########"))
            )

        imperial = person.measurement_system == MeasurementSystem.US_CUSTOMARY
        height_cm = random.gauss(170, 10)
        person.add_attribute(
            Attribute(
                type="height",
                decimal_value=Decimal(str(round(height_cm / 2.54 if imperial else height_cm, 1))),
                unit=(
                    MeasurementUnit.CUSTOMARY_INCH
                    if imperial
                    else MeasurementUnit.METRIC_CENTIMETER
                ),
            )
        )
        person.add_preference(Preference(type="correspondence_language", value="EN"))
        person.add_role(Role(type="customer"))
        if employed:
            person.add_attribute(Attribute(type="employer_name", string_value=fake.company()))
            person.add_role(Role(type="employee"))
        person.add_source_of_funds(
            SourceOfFunds(type=self.SOURCES_OF_FUNDS[employment_status], percentage=100)
        )
        return person
