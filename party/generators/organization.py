"""Organization generator."""

from __future__ import annotations

import random
import uuid
from typing import Iterator

from party.generators.address import AddressFactory, CountryDistribution
from party.generators.base import BaseGenerator
from party.models.party import (
    Attribute,
    ContactMechanism,
    ExternalReference,
    IndustryAllocation,
    Organization,
    Role,
    TaxNumber,
)


class OrganizationGenerator(BaseGenerator):
    """Generate synthetic organizations."""

    # (system, industry) pairs from the standard reference data
    INDUSTRIES = [
        ("isic", "6419"),
        ("isic", "6201"),
        ("isic", "1071"),
        ("naics", "522110"),
        ("naics", "541511"),
    ]

    def __init__(
        self,
        seed: int | None = None,
        locale: str = "en_US",
        country_distribution: CountryDistribution | None = None,
    ) -> None:
        super().__init__(seed, locale)
        self._address_factory = AddressFactory(distribution=country_distribution, seed=seed)

    def generate(self, tenant_id: uuid.UUID) -> Organization:
        """Generate a single organization for a tenant."""
        return self._generate_one(tenant_id)

    def generate_batch(self, tenant_id: uuid.UUID, count: int) -> Iterator[Organization]:
        for _ in range(count):
            yield self._generate_one(tenant_id)

    def _generate_one(self, tenant_id: uuid.UUID) -> Organization:
        fake = self.fake
        country = self._address_factory.pick_country()
        name = fake.company()

        organization = Organization(
            tenant_id=tenant_id,
            name=name,
            countries_of_tax_residence=[country],
        )
        domain = fake.domain_name()
        organization.add_contact_mechanism(
            ContactMechanism(
                type="email_address",
                role="main_email_address",
                value=f"info@{domain}",
                purposes=["billing"],
            )
        )
        organization.add_contact_mechanism(
            ContactMechanism(
                type="phone_number", role="main_phone_number", value=fake.numerify("+1##########")
            )
        )
        organization.add_physical_address(
            self._address_factory.generate(
                role="registered_office", purposes=["correspondence"], country=country
            )
        )

        for system, industry in random.sample(self.INDUSTRIES, k=random.randint(1, 2)):
            organization.add_industry_allocation(
                IndustryAllocation(system=system, industry=industry)
            )

        if country == "US":
            organization.add_tax_number(
                TaxNumber(type="us_ein", country_of_issue="US", number=fake.numerify("##-#######"))
            )
        elif country == "GB":
            organization.add_tax_number(
                TaxNumber(type="gb_utr", country_of_issue="GB", number=fake.numerify("##########"))
            )

        organization.add_external_reference(
            ExternalReference(type="crm_customer_id", value=fake.bothify("CRM-########"))
        )
        organization.add_attribute(
            Attribute(type="registration_number", string_value=fake.bothify("REG-####-??????"))
        )
        organization.add_attribute(
            Attribute(type="employee_count", integer_value=int(random.lognormvariate(4, 1.5)) + 1)
        )
        organization.add_role(Role(type="customer"))
        organization.add_role(Role(type="employer"))
        return organization
