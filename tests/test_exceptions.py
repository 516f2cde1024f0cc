"""Tests for custom exception hierarchy."""

import uuid

import pytest

from party.exceptions import (
    AssociationNotFoundError,
    BusinessError,
    ConfigurationError,
    DuplicateMandateError,
    DuplicatePersonError,
    EntityNotFoundError,
    InvalidArgumentError,
    InvalidCodeError,
    PartyError,
    PartyNotFoundError,
    PersonNotFoundError,
    ServiceUnavailableError,
)
from party.validation import ConstraintViolation

TENANT_ID = uuid.UUID("00000000-0000-0000-0000-000000000001")
ENTITY_ID = uuid.UUID("11111111-1111-1111-1111-111111111111")


class TestExceptionHierarchy:
    """Test exception inheritance chain."""

    @pytest.mark.parametrize(
        "error",
        [
            PersonNotFoundError(TENANT_ID, ENTITY_ID),
            DuplicateMandateError(ENTITY_ID),
            InvalidArgumentError("page_size"),
        ],
    )
    def test_business_errors(self, error: Exception) -> None:
        assert isinstance(error, BusinessError)
        assert isinstance(error, PartyError)

    @pytest.mark.parametrize(
        "error",
        [
            ServiceUnavailableError("down"),
            ConfigurationError("bad"),
            InvalidCodeError("Gender", "x"),
        ],
    )
    def test_non_business_errors(self, error: Exception) -> None:
        assert isinstance(error, PartyError)
        assert not isinstance(error, BusinessError)

    def test_not_found_subclasses(self) -> None:
        assert issubclass(PartyNotFoundError, EntityNotFoundError)
        assert issubclass(AssociationNotFoundError, EntityNotFoundError)

    def test_invalid_code_is_value_error(self) -> None:
        assert isinstance(InvalidCodeError("Gender", "x"), ValueError)


class TestMessages:
    """Tests for exception messages and attributes."""

    def test_not_found_with_tenant(self) -> None:
        err = PersonNotFoundError(TENANT_ID, ENTITY_ID)

        assert str(err) == (
            f"The person ({ENTITY_ID}) could not be found for the tenant ({TENANT_ID})"
        )
        assert err.tenant_id == TENANT_ID
        assert err.entity_id == ENTITY_ID

    def test_not_found_without_tenant(self) -> None:
        assert str(AssociationNotFoundError(None, ENTITY_ID)) == (
            f"The association ({ENTITY_ID}) could not be found"
        )

    def test_duplicate(self) -> None:
        assert str(DuplicatePersonError(ENTITY_ID)) == f"The person ({ENTITY_ID}) already exists"

    def test_invalid_argument_without_violations(self) -> None:
        err = InvalidArgumentError("locale_id")

        assert str(err) == "Invalid argument (locale_id)"
        assert err.violations == []

    def test_invalid_argument_with_violations(self) -> None:
        violations = [
            ConstraintViolation("gender", "is not a valid code", "robot"),
            ConstraintViolation("name", "is required"),
        ]
        err = InvalidArgumentError("person", violations)

        assert str(err) == "Invalid argument (person): 2 constraint violation(s)"
        assert [str(v) for v in err.violations] == [
            "gender: is not a valid code",
            "name: is required",
        ]

    def test_invalid_code(self) -> None:
        err = InvalidCodeError("Gender", "robot")

        assert err.enum_name == "Gender"
        assert err.code == "robot"
        assert "(robot)" in str(err)
