"""Tests for composite keys."""

import uuid
from dataclasses import FrozenInstanceError
from datetime import date

import pytest

from party.models.keys import (
    AttributeId,
    IdentityDocumentId,
    MandateLinkId,
    ReferenceKey,
    RoleId,
    RoleTypeAttributeTypeConstraintId,
)

PARTY_ID = uuid.UUID("11111111-1111-1111-1111-111111111111")


class TestCompositeKeys:
    """Tests for structural equality of keys."""

    def test_equal_when_fields_equal(self) -> None:
        assert AttributeId(PARTY_ID, "height") == AttributeId(PARTY_ID, "height")
        assert hash(AttributeId(PARTY_ID, "height")) == hash(AttributeId(PARTY_ID, "height"))

    def test_not_equal_when_any_field_differs(self) -> None:
        key = IdentityDocumentId(PARTY_ID, "passport", "US", date(2020, 1, 1))
        assert key != IdentityDocumentId(PARTY_ID, "passport", "US", date(2020, 1, 2))
        assert key != IdentityDocumentId(PARTY_ID, "passport", "GB", date(2020, 1, 1))

    def test_none_fields_compare(self) -> None:
        assert RoleId(None, "customer") == RoleId(None, "customer")
        assert RoleId(None, "customer") != RoleId(PARTY_ID, "customer")

    def test_different_key_types_not_equal(self) -> None:
        assert AttributeId(PARTY_ID, "x") != RoleId(PARTY_ID, "x")

    def test_usable_in_sets(self) -> None:
        keys = {
            MandateLinkId(PARTY_ID, "account", "A1"),
            MandateLinkId(PARTY_ID, "account", "A1"),
            MandateLinkId(PARTY_ID, "account", "A2"),
        }
        assert len(keys) == 2

    def test_as_tuple(self) -> None:
        assert ReferenceKey("female", "en-US").as_tuple() == ("female", "en-US")
        key = RoleTypeAttributeTypeConstraintId("employee", "employer_name", "", "required")
        assert key.as_tuple() == ("employee", "employer_name", "", "required")

    def test_keys_are_immutable(self) -> None:
        key = ReferenceKey("female", "en-US")
        with pytest.raises(FrozenInstanceError):
            key.code = "male"  # type: ignore[misc]
