"""Persistence for party aggregates: sessions, repositories and the party store."""

from party.store.party_store import PartyStore
from party.store.repositories import Page, Pageable
from party.store.session import (
    create_party_engine,
    create_schema,
    party_session_factory,
    unit_of_work,
)

__all__ = [
    "Page",
    "Pageable",
    "PartyStore",
    "create_party_engine",
    "create_schema",
    "party_session_factory",
    "unit_of_work",
]
