"""Tests for the tenant-scoped aggregate repositories."""

import datetime
import uuid

import pytest
from sqlalchemy.orm import Session

from party.models.association import Association
from party.models.enums import EntityType, PartyType, RequiredMandataries, SortDirection
from party.models.mandate import Mandatary, Mandate
from party.models.party import Organization, Person
from party.models.snapshot import Snapshot
from party.store.repositories import (
    AssociationRepository,
    MandateRepository,
    Page,
    Pageable,
    PartyRepository,
    PersonRepository,
    SnapshotRepository,
)


def _persons(session: Session, tenant_id: uuid.UUID, *names: str) -> list[Person]:
    persons = [
        Person(tenant_id=tenant_id, name=name, preferred_name=name[::-1]) for name in names
    ]
    session.add_all(persons)
    session.flush()
    return persons


class TestPageable:
    """Tests for paging parameters."""

    def test_offset(self) -> None:
        assert Pageable(page_index=3, page_size=20).offset == 60

    @pytest.mark.parametrize("page_index,page_size", [(-1, 10), (0, 0), (0, -5)])
    def test_invalid_values_rejected(self, page_index: int, page_size: int) -> None:
        with pytest.raises(ValueError):
            Pageable(page_index=page_index, page_size=page_size)


class TestPage:
    """Tests for result pages."""

    @pytest.mark.parametrize("total,size,pages", [(0, 10, 0), (1, 10, 1), (10, 10, 1), (11, 10, 2)])
    def test_total_pages(self, total: int, size: int, pages: int) -> None:
        assert Page(items=[], total=total, page_size=size).total_pages == pages

    def test_len_and_iter(self) -> None:
        page = Page(items=["a", "b"], total=5)
        assert len(page) == 2
        assert list(page) == ["a", "b"]


class TestPersonRepository:
    """Tests for person queries."""

    def test_find_by_tenant_and_id_is_tenant_scoped(
        self, session: Session, tenant_id: uuid.UUID, other_tenant_id: uuid.UUID
    ) -> None:
        (person,) = _persons(session, tenant_id, "Alice")
        repository = PersonRepository(session)

        assert repository.find_by_tenant_and_id(tenant_id, person.id) is person
        assert repository.find_by_tenant_and_id(other_tenant_id, person.id) is None
        assert repository.exists_by_tenant_and_id(tenant_id, person.id)
        assert not repository.exists_by_tenant_and_id(other_tenant_id, person.id)
        assert repository.exists_by_id(person.id)

    def test_page_sorted_by_name(self, session: Session, tenant_id: uuid.UUID) -> None:
        _persons(session, tenant_id, "Carol", "alice", "Bob")
        repository = PersonRepository(session)

        ascending = repository.find_page_by_tenant(tenant_id, Pageable(sort_by="name"))
        descending = repository.find_page_by_tenant(
            tenant_id, Pageable(sort_by="name", sort_direction=SortDirection.DESCENDING)
        )

        assert ascending.total == 3
        names = [p.name for p in ascending]
        assert names == sorted(names)
        assert [p.name for p in descending] == list(reversed(names))

    def test_sort_by_preferred_name(self, session: Session, tenant_id: uuid.UUID) -> None:
        _persons(session, tenant_id, "Ab", "Ba")
        page = PersonRepository(session).find_page_by_tenant(
            tenant_id, Pageable(sort_by="preferred_name")
        )
        assert [p.preferred_name for p in page] == ["aB", "bA"]

    def test_unknown_sort_rejected(self, session: Session, tenant_id: uuid.UUID) -> None:
        with pytest.raises(ValueError):
            PersonRepository(session).find_page_by_tenant(tenant_id, Pageable(sort_by="surname"))

    def test_paging(self, session: Session, tenant_id: uuid.UUID) -> None:
        _persons(session, tenant_id, *(f"Person {i:02d}" for i in range(7)))
        page = PersonRepository(session).find_page_by_tenant(
            tenant_id, Pageable(page_index=1, page_size=3, sort_by="name")
        )

        assert page.total == 7
        assert page.total_pages == 3
        assert [p.name for p in page] == ["Person 03", "Person 04", "Person 05"]

    def test_name_filter_ignores_case(self, session: Session, tenant_id: uuid.UUID) -> None:
        _persons(session, tenant_id, "Johnson", "Ann Johns", "Smith")
        page = PersonRepository(session).find_page_by_tenant_and_name_containing(
            tenant_id, "JOHN", Pageable(sort_by="name")
        )
        assert [p.name for p in page] == ["Ann Johns", "Johnson"]

    def test_name_filter_escapes_wildcards(self, session: Session, tenant_id: uuid.UUID) -> None:
        _persons(session, tenant_id, "100% Real", "100 Real")
        page = PersonRepository(session).find_page_by_tenant_and_name_containing(
            tenant_id, "0%", Pageable()
        )
        assert [p.name for p in page] == ["100% Real"]

    def test_delete_by_tenant_and_id(
        self, session: Session, tenant_id: uuid.UUID, other_tenant_id: uuid.UUID
    ) -> None:
        (person,) = _persons(session, tenant_id, "Alice")
        repository = PersonRepository(session)

        assert repository.delete_by_tenant_and_id(other_tenant_id, person.id) is False
        assert repository.delete_by_tenant_and_id(tenant_id, person.id) is True
        assert not repository.exists_by_id(person.id)


class TestPartyRepository:
    """Tests for queries across both party types."""

    def test_find_page_includes_both_types(self, session: Session, tenant_id: uuid.UUID) -> None:
        _persons(session, tenant_id, "Zed")
        session.add(Organization(tenant_id=tenant_id, name="Acme"))
        session.flush()

        page = PartyRepository(session).find_page_by_tenant(tenant_id, Pageable(sort_by="name"))
        assert [type(p) for p in page] == [Organization, Person]

    def test_tenant_and_type_lookups(
        self, session: Session, tenant_id: uuid.UUID, other_tenant_id: uuid.UUID
    ) -> None:
        (person,) = _persons(session, tenant_id, "Alice")
        repository = PartyRepository(session)

        assert repository.get_tenant_id_by_party_id(person.id) == tenant_id
        assert repository.get_tenant_id_by_party_id(uuid.uuid4()) is None
        assert repository.get_type_by_tenant_and_id(tenant_id, person.id) is PartyType.PERSON
        assert repository.get_type_by_tenant_and_id(other_tenant_id, person.id) is None

    def test_count_existing(
        self, session: Session, tenant_id: uuid.UUID, other_tenant_id: uuid.UUID
    ) -> None:
        first, second = _persons(session, tenant_id, "A", "B")
        (foreign,) = _persons(session, other_tenant_id, "C")
        repository = PartyRepository(session)

        assert repository.count_existing(tenant_id, [first.id, second.id, first.id]) == 2
        assert repository.count_existing(tenant_id, [first.id, foreign.id]) == 1
        assert repository.count_existing(tenant_id, []) == 0


class TestAssociationAndMandateRepositories:
    """Tests for finding associations and mandates by party."""

    def test_associations_for_party_either_side(
        self, session: Session, tenant_id: uuid.UUID
    ) -> None:
        a, b, c = _persons(session, tenant_id, "A", "B", "C")
        session.add_all(
            [
                Association(
                    tenant_id=tenant_id, type="spouse", first_party_id=a.id, second_party_id=b.id
                ),
                Association(
                    tenant_id=tenant_id, type="parent_child", first_party_id=c.id, second_party_id=a.id
                ),
                Association(
                    tenant_id=tenant_id, type="parent_child", first_party_id=b.id, second_party_id=c.id
                ),
            ]
        )
        session.flush()

        page = AssociationRepository(session).find_page_by_tenant_and_party_id(
            tenant_id, a.id, Pageable(sort_by="type")
        )
        assert [assoc.type for assoc in page] == ["parent_child", "spouse"]

    def test_mandates_for_party(self, session: Session, tenant_id: uuid.UUID) -> None:
        a, b = _persons(session, tenant_id, "A", "B")
        mandate = Mandate(
            tenant_id=tenant_id, type="banking_mandate", required_mandataries=RequiredMandataries.ALL
        )
        mandate.add_mandatary(Mandatary(party_id=a.id, role="signatory"))
        session.add(mandate)
        session.flush()

        repository = MandateRepository(session)
        page = repository.find_page_by_tenant_and_party_id(tenant_id, a.id, Pageable())
        assert list(page) == [mandate]
        assert repository.find_page_by_tenant_and_party_id(tenant_id, b.id, Pageable()).total == 0


class TestSnapshotRepository:
    """Tests for snapshot history queries."""

    def test_date_range_is_inclusive(self, session: Session, tenant_id: uuid.UUID) -> None:
        entity_id = uuid.uuid4()
        for day in (1, 2, 3):
            session.add(
                Snapshot(
                    tenant_id=tenant_id,
                    entity_type=EntityType.PERSON,
                    entity_id=entity_id,
                    timestamp=datetime.datetime(2024, 5, day, 23, 59),
                    data="{}",
                )
            )
        session.flush()
        repository = SnapshotRepository(session)

        page = repository.find_page_by_tenant_and_entity(
            tenant_id,
            EntityType.PERSON,
            entity_id,
            Pageable(sort_by="timestamp", sort_direction=SortDirection.DESCENDING),
            from_date=datetime.date(2024, 5, 2),
            to_date=datetime.date(2024, 5, 3),
        )
        assert [s.timestamp.day for s in page] == [3, 2]

        other_type = repository.find_page_by_tenant_and_entity(
            tenant_id, EntityType.ORGANIZATION, entity_id, Pageable()
        )
        assert other_type.total == 0
