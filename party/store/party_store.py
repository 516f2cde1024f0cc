"""Tenant-scoped store for parties, associations, mandates and snapshots.

Every create and update appends a ``Snapshot`` holding the JSON form of the
aggregate. Business errors (``*NotFoundError``, ``Duplicate*Error``,
``InvalidArgumentError``) propagate unchanged; any other failure is wrapped
in ``ServiceUnavailableError``.

Checks run before anything is flushed. When a check rejects an aggregate,
the caller's unsaved edits are discarded, so a ``unit_of_work`` that commits
on the business error does not store them.
"""

from __future__ import annotations

import datetime
import functools
import inspect
import logging
import uuid
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from party.exceptions import (
    AssociationNotFoundError,
    BusinessError,
    DuplicateAssociationError,
    DuplicateMandateError,
    DuplicateOrganizationError,
    DuplicatePersonError,
    InvalidArgumentError,
    MandateNotFoundError,
    OrganizationNotFoundError,
    PartyNotFoundError,
    PersonNotFoundError,
    ServiceUnavailableError,
)
from party.models.association import Association
from party.models.enums import (
    AssociationSortBy,
    EntityType,
    MandateSortBy,
    OrganizationSortBy,
    PartySortBy,
    PartyType,
    PersonSortBy,
    SortDirection,
)
from party.models.mandate import Mandate
from party.models.party import Organization, Party, Person
from party.models.snapshot import Snapshot
from party.serialization import to_json
from party.store.repositories import (
    AssociationRepository,
    MandateRepository,
    OrganizationRepository,
    Page,
    Pageable,
    PartyRepository,
    PersonRepository,
    SnapshotRepository,
)

if TYPE_CHECKING:
    from party.validation import PartyValidator

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


def _wrap_failures(message: str) -> Callable[[F], F]:
    """Re-raise database failures as ``ServiceUnavailableError``.

    ``message`` is formatted with the call's arguments, so it can name the
    entity and the tenant, e.g. ``"... ({person.id}) for the tenant ({tenant_id})"``.
    Business errors pass through untouched.
    """

    def decorator(func: F) -> F:
        signature = inspect.signature(func)

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return func(*args, **kwargs)
            except BusinessError:
                raise
            except SQLAlchemyError as e:
                bound = signature.bind(*args, **kwargs)
                bound.apply_defaults()
                text = message.format(**bound.arguments)
                logger.error(text, exc_info=True)
                raise ServiceUnavailableError(text) from e

        return wrapper  # type: ignore[return-value]

    return decorator


def _log_context(
    tenant_id: uuid.UUID, entity_type: EntityType, entity_id: uuid.UUID
) -> dict[str, Any]:
    """Return the ``extra`` fields picked up by ``JsonFormatter``."""
    return {"tenant_id": tenant_id, "entity_type": entity_type.code, "entity_id": entity_id}


class PartyStore:
    """Create, read, update and delete party aggregates for a tenant.

    Parameters
    ----------
    session : Session
        Session the store reads and writes through. Transaction boundaries
        belong to the caller, typically ``unit_of_work``.
    validator : PartyValidator, optional
        When given, aggregates are validated before they are created or
        updated and rejected with ``InvalidArgumentError``.
    """

    def __init__(self, session: Session, validator: PartyValidator | None = None) -> None:
        self.session = session
        self.validator = validator
        self.parties = PartyRepository(session)
        self.organizations = OrganizationRepository(session)
        self.persons = PersonRepository(session)
        self.associations = AssociationRepository(session)
        self.mandates = MandateRepository(session)
        self.snapshots = SnapshotRepository(session)

    # -- helpers -------------------------------------------------------------

    def _snapshot(self, tenant_id: uuid.UUID, entity_type: EntityType, entity: Any) -> None:
        snapshot = Snapshot(
            tenant_id=tenant_id,
            entity_type=entity_type,
            entity_id=entity.id,
            data=to_json(entity),
        )
        self.snapshots.save(snapshot)

    @contextmanager
    def _checking(self) -> Iterator[None]:
        """Run pre-save checks without autoflush.

        Every store write flushes, so anything still new or dirty when a
        check fails is an unsaved edit of the rejected aggregate. New objects
        are expunged and dirty ones expired.
        """
        try:
            with self.session.no_autoflush:
                yield
        except BusinessError:
            for obj in list(self.session.new):
                self.session.expunge(obj)
            for obj in list(self.session.dirty):
                self.session.expire(obj)
            raise

    @staticmethod
    def _assign_tenant(name: str, tenant_id: uuid.UUID, entity: Any) -> None:
        if entity.tenant_id is None:
            entity.tenant_id = tenant_id
        elif entity.tenant_id != tenant_id:
            raise InvalidArgumentError(f"{name}.tenant_id")

    def _validate(
        self, entity_type: EntityType, method: str, tenant_id: uuid.UUID, entity: Any
    ) -> None:
        if self.validator is None:
            return
        violations = getattr(self.validator, method)(tenant_id, entity)
        if violations:
            logger.info(
                "Rejected invalid %s (%s) with %d violation(s)",
                entity_type.code,
                entity.id,
                len(violations),
                extra=_log_context(tenant_id, entity_type, entity.id),
            )
            raise InvalidArgumentError(entity_type.code, violations)

    def _attach(self, entity: Any) -> Any:
        if entity in self.session:
            return entity
        return self.session.merge(entity)

    def _require_party(self, tenant_id: uuid.UUID, party_id: uuid.UUID) -> None:
        if not self.parties.exists_by_tenant_and_id(tenant_id, party_id):
            raise PartyNotFoundError(tenant_id, party_id)

    @staticmethod
    def _pageable(
        sort_by: Any,
        sort_direction: SortDirection | None,
        page_index: int | None,
        page_size: int | None,
    ) -> Pageable:
        if page_index is not None and page_index < 0:
            raise InvalidArgumentError("page_index")
        if page_size is not None and not 0 < page_size <= MAX_PAGE_SIZE:
            raise InvalidArgumentError("page_size")
        return Pageable(
            page_index=page_index or 0,
            page_size=page_size or DEFAULT_PAGE_SIZE,
            sort_by=sort_by,
            sort_direction=sort_direction or SortDirection.ASCENDING,
        )

    # -- associations --------------------------------------------------------

    @_wrap_failures(
        "Failed to create the association ({association.id}) "
        "for the tenant ({tenant_id})"
    )
    def create_association(self, tenant_id: uuid.UUID, association: Association) -> Association:
        with self._checking():
            if self.associations.exists_by_id(association.id):
                raise DuplicateAssociationError(association.id)
            self._assign_tenant("association", tenant_id, association)
            self._require_party(tenant_id, association.first_party_id)
            self._require_party(tenant_id, association.second_party_id)
            self._validate(EntityType.ASSOCIATION, "validate_association", tenant_id, association)

        self.associations.save(association)
        self._snapshot(tenant_id, EntityType.ASSOCIATION, association)
        logger.info(
            "Created association %s for tenant %s",
            association.id,
            tenant_id,
            extra=_log_context(tenant_id, EntityType.ASSOCIATION, association.id),
        )
        return association

    @_wrap_failures(
        "Failed to update the association ({association.id}) "
        "for the tenant ({tenant_id})"
    )
    def update_association(self, tenant_id: uuid.UUID, association: Association) -> Association:
        with self._checking():
            self._assign_tenant("association", tenant_id, association)
            if not self.associations.exists_by_tenant_and_id(tenant_id, association.id):
                raise AssociationNotFoundError(tenant_id, association.id)
            self._require_party(tenant_id, association.first_party_id)
            self._require_party(tenant_id, association.second_party_id)
            self._validate(EntityType.ASSOCIATION, "validate_association", tenant_id, association)

        association = self.associations.save(self._attach(association))
        self._snapshot(tenant_id, EntityType.ASSOCIATION, association)
        logger.info(
            "Updated association %s for tenant %s",
            association.id,
            tenant_id,
            extra=_log_context(tenant_id, EntityType.ASSOCIATION, association.id),
        )
        return association

    @_wrap_failures(
        "Failed to delete the association ({association_id}) "
        "for the tenant ({tenant_id})"
    )
    def delete_association(self, tenant_id: uuid.UUID, association_id: uuid.UUID) -> None:
        if not self.associations.delete_by_tenant_and_id(tenant_id, association_id):
            raise AssociationNotFoundError(tenant_id, association_id)
        logger.info(
            "Deleted association %s for tenant %s",
            association_id,
            tenant_id,
            extra=_log_context(tenant_id, EntityType.ASSOCIATION, association_id),
        )

    @_wrap_failures(
        "Failed to retrieve the association ({association_id}) "
        "for the tenant ({tenant_id})"
    )
    def get_association(self, tenant_id: uuid.UUID, association_id: uuid.UUID) -> Association:
        association = self.associations.find_by_tenant_and_id(tenant_id, association_id)
        if association is None:
            raise AssociationNotFoundError(tenant_id, association_id)
        return association

    @_wrap_failures(
        "Failed to retrieve the associations for the party ({party_id}) "
        "for the tenant ({tenant_id})"
    )
    def get_associations_for_party(
        self,
        tenant_id: uuid.UUID,
        party_id: uuid.UUID,
        sort_by: AssociationSortBy | None = AssociationSortBy.TYPE,
        sort_direction: SortDirection | None = SortDirection.ASCENDING,
        page_index: int | None = None,
        page_size: int | None = None,
    ) -> Page[Association]:
        self._require_party(tenant_id, party_id)
        pageable = self._pageable(sort_by, sort_direction, page_index, page_size)
        return self.associations.find_page_by_tenant_and_party_id(tenant_id, party_id, pageable)

    # -- mandates ------------------------------------------------------------

    @_wrap_failures("Failed to create the mandate ({mandate.id}) for the tenant ({tenant_id})")
    def create_mandate(self, tenant_id: uuid.UUID, mandate: Mandate) -> Mandate:
        with self._checking():
            if self.mandates.exists_by_id(mandate.id):
                raise DuplicateMandateError(mandate.id)
            self._assign_tenant("mandate", tenant_id, mandate)
            for mandatary in mandate.mandataries:
                self._require_party(tenant_id, mandatary.party_id)
            self._validate(EntityType.MANDATE, "validate_mandate", tenant_id, mandate)

        self.mandates.save(mandate)
        self._snapshot(tenant_id, EntityType.MANDATE, mandate)
        logger.info(
            "Created mandate %s with %d mandataries for tenant %s",
            mandate.id,
            len(mandate.mandataries),
            tenant_id,
            extra=_log_context(tenant_id, EntityType.MANDATE, mandate.id),
        )
        return mandate

    @_wrap_failures("Failed to update the mandate ({mandate.id}) for the tenant ({tenant_id})")
    def update_mandate(self, tenant_id: uuid.UUID, mandate: Mandate) -> Mandate:
        with self._checking():
            self._assign_tenant("mandate", tenant_id, mandate)
            if not self.mandates.exists_by_tenant_and_id(tenant_id, mandate.id):
                raise MandateNotFoundError(tenant_id, mandate.id)
            for mandatary in mandate.mandataries:
                self._require_party(tenant_id, mandatary.party_id)
            self._validate(EntityType.MANDATE, "validate_mandate", tenant_id, mandate)

        mandate = self.mandates.save(self._attach(mandate))
        self._snapshot(tenant_id, EntityType.MANDATE, mandate)
        logger.info(
            "Updated mandate %s for tenant %s",
            mandate.id,
            tenant_id,
            extra=_log_context(tenant_id, EntityType.MANDATE, mandate.id),
        )
        return mandate

    @_wrap_failures("Failed to delete the mandate ({mandate_id}) for the tenant ({tenant_id})")
    def delete_mandate(self, tenant_id: uuid.UUID, mandate_id: uuid.UUID) -> None:
        if not self.mandates.delete_by_tenant_and_id(tenant_id, mandate_id):
            raise MandateNotFoundError(tenant_id, mandate_id)
        logger.info(
            "Deleted mandate %s for tenant %s",
            mandate_id,
            tenant_id,
            extra=_log_context(tenant_id, EntityType.MANDATE, mandate_id),
        )

    @_wrap_failures("Failed to retrieve the mandate ({mandate_id}) for the tenant ({tenant_id})")
    def get_mandate(self, tenant_id: uuid.UUID, mandate_id: uuid.UUID) -> Mandate:
        mandate = self.mandates.find_by_tenant_and_id(tenant_id, mandate_id)
        if mandate is None:
            raise MandateNotFoundError(tenant_id, mandate_id)
        return mandate

    @_wrap_failures(
        "Failed to retrieve the mandates for the party ({party_id}) "
        "for the tenant ({tenant_id})"
    )
    def get_mandates_for_party(
        self,
        tenant_id: uuid.UUID,
        party_id: uuid.UUID,
        sort_by: MandateSortBy | None = MandateSortBy.TYPE,
        sort_direction: SortDirection | None = SortDirection.ASCENDING,
        page_index: int | None = None,
        page_size: int | None = None,
    ) -> Page[Mandate]:
        self._require_party(tenant_id, party_id)
        pageable = self._pageable(sort_by, sort_direction, page_index, page_size)
        return self.mandates.find_page_by_tenant_and_party_id(tenant_id, party_id, pageable)

    # -- organizations -------------------------------------------------------

    @_wrap_failures(
        "Failed to create the organization ({organization.id}) "
        "for the tenant ({tenant_id})"
    )
    def create_organization(self, tenant_id: uuid.UUID, organization: Organization) -> Organization:
        with self._checking():
            if self.parties.exists_by_id(organization.id):
                raise DuplicateOrganizationError(organization.id)
            self._assign_tenant("organization", tenant_id, organization)
            self._validate(
                EntityType.ORGANIZATION, "validate_organization", tenant_id, organization
            )

        self.organizations.save(organization)
        self._snapshot(tenant_id, EntityType.ORGANIZATION, organization)
        logger.info(
            "Created organization %s for tenant %s",
            organization.id,
            tenant_id,
            extra=_log_context(tenant_id, EntityType.ORGANIZATION, organization.id),
        )
        return organization

    @_wrap_failures(
        "Failed to update the organization ({organization.id}) "
        "for the tenant ({tenant_id})"
    )
    def update_organization(self, tenant_id: uuid.UUID, organization: Organization) -> Organization:
        with self._checking():
            self._assign_tenant("organization", tenant_id, organization)
            if not self.organizations.exists_by_tenant_and_id(tenant_id, organization.id):
                raise OrganizationNotFoundError(tenant_id, organization.id)
            self._validate(
                EntityType.ORGANIZATION, "validate_organization", tenant_id, organization
            )

        organization = self.organizations.save(self._attach(organization))
        self._snapshot(tenant_id, EntityType.ORGANIZATION, organization)
        logger.info(
            "Updated organization %s for tenant %s",
            organization.id,
            tenant_id,
            extra=_log_context(tenant_id, EntityType.ORGANIZATION, organization.id),
        )
        return organization

    @_wrap_failures(
        "Failed to delete the organization ({organization_id}) "
        "for the tenant ({tenant_id})"
    )
    def delete_organization(self, tenant_id: uuid.UUID, organization_id: uuid.UUID) -> None:
        if not self.organizations.delete_by_tenant_and_id(tenant_id, organization_id):
            raise OrganizationNotFoundError(tenant_id, organization_id)
        logger.info(
            "Deleted organization %s for tenant %s",
            organization_id,
            tenant_id,
            extra=_log_context(tenant_id, EntityType.ORGANIZATION, organization_id),
        )

    @_wrap_failures(
        "Failed to retrieve the organization ({organization_id}) "
        "for the tenant ({tenant_id})"
    )
    def get_organization(self, tenant_id: uuid.UUID, organization_id: uuid.UUID) -> Organization:
        organization = self.organizations.find_by_tenant_and_id(tenant_id, organization_id)
        if organization is None:
            raise OrganizationNotFoundError(tenant_id, organization_id)
        return organization

    @_wrap_failures("Failed to retrieve the filtered organizations for the tenant ({tenant_id})")
    def get_organizations(
        self,
        tenant_id: uuid.UUID,
        filter: str | None = None,
        sort_by: OrganizationSortBy | None = OrganizationSortBy.NAME,
        sort_direction: SortDirection | None = SortDirection.ASCENDING,
        page_index: int | None = None,
        page_size: int | None = None,
    ) -> Page[Organization]:
        pageable = self._pageable(sort_by, sort_direction, page_index, page_size)
        if filter:
            return self.organizations.find_page_by_tenant_and_name_containing(
                tenant_id, filter, pageable
            )
        return self.organizations.find_page_by_tenant(tenant_id, pageable)

    # -- persons -------------------------------------------------------------

    @_wrap_failures("Failed to create the person ({person.id}) for the tenant ({tenant_id})")
    def create_person(self, tenant_id: uuid.UUID, person: Person) -> Person:
        with self._checking():
            if self.parties.exists_by_id(person.id):
                raise DuplicatePersonError(person.id)
            self._assign_tenant("person", tenant_id, person)
            self._validate(EntityType.PERSON, "validate_person", tenant_id, person)

        self.persons.save(person)
        self._snapshot(tenant_id, EntityType.PERSON, person)
        logger.info(
            "Created person %s for tenant %s",
            person.id,
            tenant_id,
            extra=_log_context(tenant_id, EntityType.PERSON, person.id),
        )
        return person

    @_wrap_failures("Failed to update the person ({person.id}) for the tenant ({tenant_id})")
    def update_person(self, tenant_id: uuid.UUID, person: Person) -> Person:
        with self._checking():
            self._assign_tenant("person", tenant_id, person)
            if not self.persons.exists_by_tenant_and_id(tenant_id, person.id):
                raise PersonNotFoundError(tenant_id, person.id)
            self._validate(EntityType.PERSON, "validate_person", tenant_id, person)

        person = self.persons.save(self._attach(person))
        self._snapshot(tenant_id, EntityType.PERSON, person)
        logger.info(
            "Updated person %s for tenant %s",
            person.id,
            tenant_id,
            extra=_log_context(tenant_id, EntityType.PERSON, person.id),
        )
        return person

    @_wrap_failures("Failed to delete the person ({person_id}) for the tenant ({tenant_id})")
    def delete_person(self, tenant_id: uuid.UUID, person_id: uuid.UUID) -> None:
        if not self.persons.delete_by_tenant_and_id(tenant_id, person_id):
            raise PersonNotFoundError(tenant_id, person_id)
        logger.info(
            "Deleted person %s for tenant %s",
            person_id,
            tenant_id,
            extra=_log_context(tenant_id, EntityType.PERSON, person_id),
        )

    @_wrap_failures("Failed to retrieve the person ({person_id}) for the tenant ({tenant_id})")
    def get_person(self, tenant_id: uuid.UUID, person_id: uuid.UUID) -> Person:
        person = self.persons.find_by_tenant_and_id(tenant_id, person_id)
        if person is None:
            raise PersonNotFoundError(tenant_id, person_id)
        return person

    @_wrap_failures("Failed to retrieve the filtered persons for the tenant ({tenant_id})")
    def get_persons(
        self,
        tenant_id: uuid.UUID,
        filter: str | None = None,
        sort_by: PersonSortBy | None = PersonSortBy.NAME,
        sort_direction: SortDirection | None = SortDirection.ASCENDING,
        page_index: int | None = None,
        page_size: int | None = None,
    ) -> Page[Person]:
        pageable = self._pageable(sort_by, sort_direction, page_index, page_size)
        if filter:
            return self.persons.find_page_by_tenant_and_name_containing(tenant_id, filter, pageable)
        return self.persons.find_page_by_tenant(tenant_id, pageable)

    # -- parties -------------------------------------------------------------

    @_wrap_failures("Failed to delete the party ({party_id}) for the tenant ({tenant_id})")
    def delete_party(self, tenant_id: uuid.UUID, party_id: uuid.UUID) -> None:
        if not self.parties.delete_by_tenant_and_id(tenant_id, party_id):
            raise PartyNotFoundError(tenant_id, party_id)
        logger.info(
            "Deleted party %s for tenant %s",
            party_id,
            tenant_id,
            extra={"tenant_id": tenant_id, "entity_id": party_id},
        )

    @_wrap_failures("Failed to retrieve the party ({party_id}) for the tenant ({tenant_id})")
    def get_party(self, tenant_id: uuid.UUID, party_id: uuid.UUID) -> Party:
        party = self.parties.find_by_tenant_and_id(tenant_id, party_id)
        if party is None:
            raise PartyNotFoundError(tenant_id, party_id)
        return party

    @_wrap_failures("Failed to retrieve the filtered parties for the tenant ({tenant_id})")
    def get_parties(
        self,
        tenant_id: uuid.UUID,
        filter: str | None = None,
        sort_by: PartySortBy | None = PartySortBy.NAME,
        sort_direction: SortDirection | None = SortDirection.ASCENDING,
        page_index: int | None = None,
        page_size: int | None = None,
    ) -> Page[Party]:
        pageable = self._pageable(sort_by, sort_direction, page_index, page_size)
        if filter:
            return self.parties.find_page_by_tenant_and_name_containing(tenant_id, filter, pageable)
        return self.parties.find_page_by_tenant(tenant_id, pageable)

    @_wrap_failures("Failed to retrieve the ID of the tenant for the party ({party_id})")
    def get_tenant_id_for_party(self, party_id: uuid.UUID) -> uuid.UUID | None:
        return self.parties.get_tenant_id_by_party_id(party_id)

    @_wrap_failures(
        "Failed to retrieve the type for the party ({party_id}) "
        "for the tenant ({tenant_id})"
    )
    def get_type_for_party(self, tenant_id: uuid.UUID, party_id: uuid.UUID) -> PartyType | None:
        return self.parties.get_type_by_tenant_and_id(tenant_id, party_id)

    # -- snapshots -----------------------------------------------------------

    @_wrap_failures(
        "Failed to retrieve the snapshots for the {entity_type} ({entity_id}) "
        "for the tenant ({tenant_id})"
    )
    def get_snapshots(
        self,
        tenant_id: uuid.UUID,
        entity_type: EntityType,
        entity_id: uuid.UUID,
        from_date: datetime.date | None = None,
        to_date: datetime.date | None = None,
        sort_direction: SortDirection | None = SortDirection.ASCENDING,
        page_index: int | None = None,
        page_size: int | None = None,
    ) -> Page[Snapshot]:
        if from_date is not None and to_date is not None and from_date > to_date:
            raise InvalidArgumentError("from_date")
        pageable = self._pageable("timestamp", sort_direction, page_index, page_size)
        return self.snapshots.find_page_by_tenant_and_entity(
            tenant_id, entity_type, entity_id, pageable, from_date=from_date, to_date=to_date
        )
