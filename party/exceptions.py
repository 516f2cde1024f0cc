"""Custom exception hierarchy for the party domain.

Errors derived from ``BusinessError`` are expected, recoverable outcomes
(an entity that does not exist, an identifier that is already taken, an
aggregate that fails validation). ``unit_of_work`` commits the enclosing
transaction when one of them escapes. Every other error rolls it back.
"""

from __future__ import annotations

from typing import Any
from uuid import UUID


class PartyError(Exception):
    """Base exception for all party errors."""


class BusinessError(PartyError):
    """An expected outcome the caller inspects; never rolls back the transaction."""


class EntityNotFoundError(BusinessError):
    """Raised when an entity does not exist for the tenant."""

    entity_name = "entity"

    def __init__(self, tenant_id: UUID | None, entity_id: UUID) -> None:
        self.tenant_id = tenant_id
        self.entity_id = entity_id
        if tenant_id is None:
            message = f"The {self.entity_name} ({entity_id}) could not be found"
        else:
            message = (
                f"The {self.entity_name} ({entity_id}) could not be found "
                f"for the tenant ({tenant_id})"
            )
        super().__init__(message)


class PartyNotFoundError(EntityNotFoundError):
    entity_name = "party"


class OrganizationNotFoundError(EntityNotFoundError):
    entity_name = "organization"


class PersonNotFoundError(EntityNotFoundError):
    entity_name = "person"


class AssociationNotFoundError(EntityNotFoundError):
    entity_name = "association"


class MandateNotFoundError(EntityNotFoundError):
    entity_name = "mandate"


class DuplicateEntityError(BusinessError):
    """Raised when a creation collides with an existing identifier."""

    entity_name = "entity"

    def __init__(self, entity_id: UUID) -> None:
        self.entity_id = entity_id
        super().__init__(f"The {self.entity_name} ({entity_id}) already exists")


class DuplicatePartyError(DuplicateEntityError):
    entity_name = "party"


class DuplicateOrganizationError(DuplicateEntityError):
    entity_name = "organization"


class DuplicatePersonError(DuplicateEntityError):
    entity_name = "person"


class DuplicateAssociationError(DuplicateEntityError):
    entity_name = "association"


class DuplicateMandateError(DuplicateEntityError):
    entity_name = "mandate"


class InvalidArgumentError(BusinessError):
    """Raised when an argument, or the aggregate passed as one, is invalid."""

    def __init__(self, name: str, violations: list[Any] | None = None) -> None:
        self.name = name
        self.violations = list(violations or [])
        if self.violations:
            super().__init__(
                f"Invalid argument ({name}): {len(self.violations)} constraint violation(s)"
            )
        else:
            super().__init__(f"Invalid argument ({name})")


class InvalidCodeError(PartyError, ValueError):
    """Raised when an enumeration is given a code outside its closed set."""

    def __init__(self, enum_name: str, code: Any) -> None:
        self.enum_name = enum_name
        self.code = code
        super().__init__(f"Failed to determine the {enum_name} with the invalid code ({code})")


class ServiceUnavailableError(PartyError):
    """Raised when the underlying storage fails unexpectedly."""


class ConfigurationError(PartyError):
    """Raised when configuration is invalid or missing."""
