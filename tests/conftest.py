"""Pytest configuration and fixtures."""

import uuid
from collections.abc import Iterator

import pytest
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from party.models.party import Person
from party.reference import PartyReferenceService
from party.reference_data import load_reference_data
from party.store import PartyStore, create_party_engine, create_schema, party_session_factory
from party.validation import PartyValidator


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def tenant_id() -> uuid.UUID:
    """Tenant the test data belongs to."""
    return uuid.UUID("00000000-0000-0000-0000-000000000001")


@pytest.fixture
def other_tenant_id() -> uuid.UUID:
    """A second tenant, used to check isolation."""
    return uuid.UUID("00000000-0000-0000-0000-000000000002")


@pytest.fixture
def engine() -> Iterator[Engine]:
    """In-memory SQLite engine with the party schema."""
    engine = create_party_engine("sqlite:///:memory:", poolclass=StaticPool)
    create_schema(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine: Engine) -> sessionmaker:
    return party_session_factory(engine)


@pytest.fixture
def session(session_factory: sessionmaker) -> Iterator[Session]:
    """Session with the standard reference data loaded."""
    session = session_factory()
    load_reference_data(session)
    session.commit()
    yield session
    session.close()


@pytest.fixture
def reference_service(session: Session) -> PartyReferenceService:
    return PartyReferenceService(session)


@pytest.fixture
def validator(reference_service: PartyReferenceService) -> PartyValidator:
    return PartyValidator(reference_service)


@pytest.fixture
def store(session: Session) -> PartyStore:
    """Store without validation."""
    return PartyStore(session)


@pytest.fixture
def validating_store(session: Session, validator: PartyValidator) -> PartyStore:
    return PartyStore(session, validator=validator)


@pytest.fixture
def sample_person(tenant_id: uuid.UUID) -> Person:
    """A minimal valid person."""
    return Person(
        tenant_id=tenant_id,
        name="Jane Doe",
        given_name="Jane",
        surname="Doe",
        preferred_name="Jane",
        gender="female",
        title="ms",
    )
