"""Domain models for the party module."""

from party.models.association import Association, AssociationProperty
from party.models.base import Base
from party.models.mandate import Mandate, Mandatary, MandateLink, MandateProperty
from party.models.party import (
    Attribute,
    ContactMechanism,
    ExternalReference,
    IdentityDocument,
    IndustryAllocation,
    Lock,
    Organization,
    Party,
    Person,
    PhysicalAddress,
    Preference,
    Role,
    SourceOfFunds,
    TaxNumber,
)
from party.models.snapshot import Snapshot

__all__ = [
    "Association",
    "AssociationProperty",
    "Attribute",
    "Base",
    "ContactMechanism",
    "ExternalReference",
    "IdentityDocument",
    "IndustryAllocation",
    "Lock",
    "Mandatary",
    "Mandate",
    "MandateLink",
    "MandateProperty",
    "Organization",
    "Party",
    "Person",
    "PhysicalAddress",
    "Preference",
    "Role",
    "Snapshot",
    "SourceOfFunds",
    "TaxNumber",
]
