"""Repositories for the party aggregates and the reference data.

Queries are written explicitly with SQLAlchemy ``select()``. Every
aggregate lookup is scoped to a tenant: an entity that belongs to another
tenant behaves exactly like one that does not exist.
"""

from __future__ import annotations

import datetime
import logging
import uuid
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, ClassVar, Generic, TypeVar

from sqlalchemy import ColumnElement, Select, func, or_, select
from sqlalchemy.orm import InstrumentedAttribute, Session

from party.models.association import Association
from party.models.enums import CodeEnum, PartyType, SortDirection
from party.models.mandate import Mandatary, Mandate
from party.models.party import Organization, Party, Person
from party.models.reference import ReferenceDataMixin, RoleTypeAttributeTypeConstraint
from party.models.snapshot import Snapshot

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Pageable:
    """Paging and sorting parameters for list queries."""

    page_index: int = 0
    page_size: int = 50
    sort_by: str | CodeEnum | None = None
    sort_direction: SortDirection = SortDirection.ASCENDING

    def __post_init__(self) -> None:
        if self.page_index < 0:
            raise ValueError(f"page_index must be >= 0, got {self.page_index}")
        if self.page_size < 1:
            raise ValueError(f"page_size must be >= 1, got {self.page_size}")

    @property
    def offset(self) -> int:
        return self.page_index * self.page_size


@dataclass
class Page(Generic[T]):
    """One page of results plus the total number of matching rows."""

    items: list[T] = field(default_factory=list)
    total: int = 0
    page_index: int = 0
    page_size: int = 50

    @property
    def total_pages(self) -> int:
        if self.total == 0:
            return 0
        return (self.total + self.page_size - 1) // self.page_size

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)


def _contains_ignore_case(column: InstrumentedAttribute, value: str) -> ColumnElement[bool]:
    return func.lower(column).contains(value.lower(), autoescape=True)


class AggregateRepository(Generic[T]):
    """Tenant-scoped data access for one aggregate root.

    Subclasses set ``model``, the columns a page may be sorted by and the
    default sort column.
    """

    model: ClassVar[type]
    sort_columns: ClassVar[Mapping[str, str]] = {}
    default_sort: ClassVar[str] = "id"

    def __init__(self, session: Session) -> None:
        self.session = session

    def _by_tenant_and_id(self, tenant_id: uuid.UUID, entity_id: uuid.UUID) -> Select:
        return select(self.model).where(
            self.model.tenant_id == tenant_id, self.model.id == entity_id
        )

    def exists_by_tenant_and_id(self, tenant_id: uuid.UUID, entity_id: uuid.UUID) -> bool:
        stmt = (
            select(self.model.id)
            .where(self.model.tenant_id == tenant_id, self.model.id == entity_id)
            .limit(1)
        )
        return self.session.scalar(stmt) is not None

    def exists_by_id(self, entity_id: uuid.UUID) -> bool:
        """Return whether the id is taken in any tenant."""
        stmt = select(self.model.id).where(self.model.id == entity_id).limit(1)
        return self.session.scalar(stmt) is not None

    def find_by_tenant_and_id(self, tenant_id: uuid.UUID, entity_id: uuid.UUID) -> T | None:
        return self.session.scalars(self._by_tenant_and_id(tenant_id, entity_id)).first()

    def delete_by_tenant_and_id(self, tenant_id: uuid.UUID, entity_id: uuid.UUID) -> bool:
        """Delete the aggregate and everything it owns; return whether it existed."""
        entity = self.find_by_tenant_and_id(tenant_id, entity_id)
        if entity is None:
            return False
        self.session.delete(entity)
        self.session.flush()
        return True

    def find_page_by_tenant(self, tenant_id: uuid.UUID, pageable: Pageable) -> Page[T]:
        stmt = select(self.model).where(self.model.tenant_id == tenant_id)
        return self._page(stmt, pageable)

    def save(self, entity: T) -> T:
        self.session.add(entity)
        self.session.flush()
        return entity

    def _order_by(self, pageable: Pageable) -> ColumnElement[Any]:
        sort_by = self.default_sort
        if pageable.sort_by is not None:
            code = str(pageable.sort_by)
            if code not in self.sort_columns:
                raise ValueError(f"Cannot sort {self.model.__name__} by {code!r}")
            sort_by = self.sort_columns[code]
        column = getattr(self.model, sort_by)
        if SortDirection.from_code(pageable.sort_direction) == SortDirection.DESCENDING:
            return column.desc()
        return column.asc()

    def _page(self, stmt: Select, pageable: Pageable) -> Page[T]:
        count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
        total = self.session.scalar(count_stmt) or 0
        stmt = (
            stmt.order_by(self._order_by(pageable), self.model.id)
            .offset(pageable.offset)
            .limit(pageable.page_size)
        )
        items = list(self.session.scalars(stmt).all())
        return Page(
            items=items,
            total=total,
            page_index=pageable.page_index,
            page_size=pageable.page_size,
        )


class _NamedPartyRepository(AggregateRepository[T]):
    sort_columns: ClassVar[Mapping[str, str]] = {"name": "name"}
    default_sort: ClassVar[str] = "name"

    def find_page_by_tenant_and_name_containing(
        self, tenant_id: uuid.UUID, filter: str, pageable: Pageable
    ) -> Page[T]:
        """Page of parties whose name contains ``filter``, ignoring case."""
        stmt = select(self.model).where(
            self.model.tenant_id == tenant_id,
            _contains_ignore_case(self.model.name, filter),
        )
        return self._page(stmt, pageable)


class PartyRepository(_NamedPartyRepository[Party]):
    model = Party

    def get_tenant_id_by_party_id(self, party_id: uuid.UUID) -> uuid.UUID | None:
        return self.session.scalar(select(Party.tenant_id).where(Party.id == party_id))

    def get_type_by_tenant_and_id(
        self, tenant_id: uuid.UUID, party_id: uuid.UUID
    ) -> PartyType | None:
        return self.session.scalar(
            select(Party.type).where(Party.tenant_id == tenant_id, Party.id == party_id)
        )

    def count_existing(self, tenant_id: uuid.UUID, party_ids: Sequence[uuid.UUID]) -> int:
        """Number of distinct ids in ``party_ids`` that exist for the tenant."""
        if not party_ids:
            return 0
        stmt = select(func.count()).where(
            Party.tenant_id == tenant_id, Party.id.in_(set(party_ids))
        )
        return self.session.scalar(stmt) or 0


class OrganizationRepository(_NamedPartyRepository[Organization]):
    model = Organization


class PersonRepository(_NamedPartyRepository[Person]):
    model = Person
    sort_columns: ClassVar[Mapping[str, str]] = {
        "name": "name",
        "preferred_name": "preferred_name",
    }


class AssociationRepository(AggregateRepository[Association]):
    model = Association
    sort_columns: ClassVar[Mapping[str, str]] = {"type": "type"}
    default_sort: ClassVar[str] = "type"

    def find_page_by_tenant_and_party_id(
        self, tenant_id: uuid.UUID, party_id: uuid.UUID, pageable: Pageable
    ) -> Page[Association]:
        """Associations in which the party is either the first or the second party."""
        stmt = select(Association).where(
            Association.tenant_id == tenant_id,
            or_(Association.first_party_id == party_id, Association.second_party_id == party_id),
        )
        return self._page(stmt, pageable)


class MandateRepository(AggregateRepository[Mandate]):
    model = Mandate
    sort_columns: ClassVar[Mapping[str, str]] = {"type": "type"}
    default_sort: ClassVar[str] = "type"

    def find_page_by_tenant_and_party_id(
        self, tenant_id: uuid.UUID, party_id: uuid.UUID, pageable: Pageable
    ) -> Page[Mandate]:
        """Mandates that name the party as one of their mandataries."""
        stmt = (
            select(Mandate)
            .join(Mandatary, Mandatary.mandate_id == Mandate.id)
            .where(Mandate.tenant_id == tenant_id, Mandatary.party_id == party_id)
        )
        return self._page(stmt, pageable)


class SnapshotRepository(AggregateRepository[Snapshot]):
    """Append-only snapshot history; snapshots are never updated."""

    model = Snapshot
    sort_columns: ClassVar[Mapping[str, str]] = {"timestamp": "timestamp"}
    default_sort: ClassVar[str] = "timestamp"

    def find_page_by_tenant_and_entity(
        self,
        tenant_id: uuid.UUID,
        entity_type: CodeEnum,
        entity_id: uuid.UUID,
        pageable: Pageable,
        from_date: datetime.date | None = None,
        to_date: datetime.date | None = None,
    ) -> Page[Snapshot]:
        """Snapshots of one entity in timestamp order.

        ``from_date`` and ``to_date`` are inclusive calendar days.
        """
        stmt = select(Snapshot).where(
            Snapshot.tenant_id == tenant_id,
            Snapshot.entity_type == entity_type,
            Snapshot.entity_id == entity_id,
        )
        if from_date is not None:
            stmt = stmt.where(
                Snapshot.timestamp >= datetime.datetime.combine(from_date, datetime.time.min)
            )
        if to_date is not None:
            end = datetime.datetime.combine(to_date + datetime.timedelta(days=1), datetime.time.min)
            stmt = stmt.where(Snapshot.timestamp < end)
        return self._page(stmt, pageable)


class ReferenceDataRepository(Generic[T]):
    """Read-only access to one localized reference table.

    Rows are ordered by locale, then sort index (highest first, rows without
    a sort index last), then name.
    """

    def __init__(self, session: Session, model: type[T]) -> None:
        if not issubclass(model, ReferenceDataMixin):
            raise TypeError(f"{model.__name__} is not a reference data model")
        self.session = session
        self.model = model

    def _ordered(self, stmt: Select) -> Select:
        return stmt.order_by(
            self.model.locale_id.asc(),
            self.model.sort_index.is_(None),
            self.model.sort_index.desc(),
            self.model.name.asc(),
        )

    def find_all(self) -> list[T]:
        return list(self.session.scalars(self._ordered(select(self.model))).all())

    def find_by_locale(self, locale_id: str) -> list[T]:
        """Rows whose locale matches ``locale_id`` ignoring case; empty if none do."""
        stmt = select(self.model).where(func.lower(self.model.locale_id) == locale_id.lower())
        return list(self.session.scalars(self._ordered(stmt)).all())

    def find_by_locale_for_tenant(self, locale_id: str, tenant_id: uuid.UUID | None) -> list[T]:
        """Rows for the locale that are global or belong to ``tenant_id``."""
        stmt = select(self.model).where(
            func.lower(self.model.locale_id) == locale_id.lower(),
            or_(self.model.tenant_id.is_(None), self.model.tenant_id == tenant_id),
        )
        return list(self.session.scalars(self._ordered(stmt)).all())

    def find_all_by_code(self, code: str, tenant_id: uuid.UUID | None = None) -> list[T]:
        """Rows with the code in every locale that are global or belong to ``tenant_id``."""
        stmt = select(self.model).where(
            self.model.code == code,
            or_(self.model.tenant_id.is_(None), self.model.tenant_id == tenant_id),
        )
        return list(self.session.scalars(self._ordered(stmt)).all())

    def find_by_code(self, code: str, locale_id: str) -> T | None:
        stmt = select(self.model).where(
            self.model.code == code,
            func.lower(self.model.locale_id) == locale_id.lower(),
        )
        return self.session.scalars(stmt).first()


class RoleTypeAttributeTypeConstraintRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def find_by_role_type(self, role_type: str) -> list[RoleTypeAttributeTypeConstraint]:
        stmt = (
            select(RoleTypeAttributeTypeConstraint)
            .where(func.lower(RoleTypeAttributeTypeConstraint.role_type) == role_type.lower())
            .order_by(
                RoleTypeAttributeTypeConstraint.attribute_type,
                RoleTypeAttributeTypeConstraint.attribute_type_qualifier,
                RoleTypeAttributeTypeConstraint.type,
            )
        )
        return list(self.session.scalars(stmt).all())

    def find_all(self) -> list[RoleTypeAttributeTypeConstraint]:
        stmt = select(RoleTypeAttributeTypeConstraint).order_by(
            RoleTypeAttributeTypeConstraint.role_type,
            RoleTypeAttributeTypeConstraint.attribute_type,
        )
        return list(self.session.scalars(stmt).all())
