"""Association generator linking generated organizations and persons."""

from __future__ import annotations

import datetime
import random
import uuid
from typing import Iterator, Sequence

from party.generators.base import BaseGenerator
from party.models.association import Association, AssociationProperty
from party.models.party import Organization, Person


class AssociationGenerator(BaseGenerator):
    """Generate associations between existing parties of one tenant.

    Employment links join an organization to a person; spouse and
    parent/child links join two persons.
    """

    PERSON_TYPES = ["spouse", "parent_child"]

    def generate_employment(
        self, tenant_id: uuid.UUID, employer: Organization, employee: Person
    ) -> Association:
        start = self.fake.date_between(start_date="-15y", end_date="today")
        association = Association(
            tenant_id=tenant_id,
            type="employer_employee",
            first_party_id=employer.id,
            second_party_id=employee.id,
            effective_from=start,
        )
        association.add_property(AssociationProperty(type="start_date", date_value=start))
        association.add_property(
            AssociationProperty(type="job_title", string_value=self.fake.job()[:100])
        )
        return association

    def generate_personal(
        self, tenant_id: uuid.UUID, first: Person, second: Person, type: str | None = None
    ) -> Association:
        return Association(
            tenant_id=tenant_id,
            type=type or random.choice(self.PERSON_TYPES),
            first_party_id=first.id,
            second_party_id=second.id,
            effective_from=datetime.date.today(),
        )

    def generate_batch(
        self,
        tenant_id: uuid.UUID,
        organizations: Sequence[Organization],
        persons: Sequence[Person],
        count: int,
    ) -> Iterator[Association]:
        """Generate ``count`` associations among the given parties.

        Employment links are produced when there is at least one
        organization; personal links need at least two persons. Nothing is
        produced when neither is possible.
        """
        if not persons or (not organizations and len(persons) < 2):
            return
        for _ in range(count):
            if organizations and (len(persons) < 2 or random.random() < 0.6):
                yield self.generate_employment(
                    tenant_id, random.choice(organizations), random.choice(persons)
                )
            else:
                first, second = random.sample(list(persons), k=2)
                yield self.generate_personal(tenant_id, first, second)
