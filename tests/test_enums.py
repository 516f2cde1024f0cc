"""Tests for the code/description enumerations."""

import pytest

from party.exceptions import InvalidCodeError
from party.models.enums import (
    AssociationSortBy,
    CodeEnum,
    ConstraintType,
    EntityType,
    MandateSortBy,
    MeasurementSystem,
    MeasurementUnit,
    MeasurementUnitType,
    OrganizationSortBy,
    PartySortBy,
    PartyType,
    PersonSortBy,
    PhysicalAddressType,
    RequiredMandataries,
    SortDirection,
    ValueType,
)

ALL_ENUMS = [
    AssociationSortBy,
    ConstraintType,
    EntityType,
    MandateSortBy,
    MeasurementSystem,
    MeasurementUnit,
    MeasurementUnitType,
    OrganizationSortBy,
    PartySortBy,
    PartyType,
    PersonSortBy,
    PhysicalAddressType,
    RequiredMandataries,
    SortDirection,
    ValueType,
]

ALL_MEMBERS = [member for enum_class in ALL_ENUMS for member in enum_class]
NUMERIC_MEMBERS = [
    member for enum_class in ALL_ENUMS if enum_class.has_numeric_codes() for member in enum_class
]


class TestRoundTrips:
    """Every member survives its code and numeric code lookups."""

    def test_every_enumeration_listed(self) -> None:
        assert set(CodeEnum.__subclasses__()) == set(ALL_ENUMS)

    @pytest.mark.parametrize("member", ALL_MEMBERS, ids=repr)
    def test_code_round_trip(self, member: CodeEnum) -> None:
        assert type(member).from_code(member.code) is member

    @pytest.mark.parametrize("member", NUMERIC_MEMBERS, ids=repr)
    def test_numeric_code_round_trip(self, member: CodeEnum) -> None:
        assert type(member).from_numeric_code(member.to_numeric_code()) is member

    @pytest.mark.parametrize(
        "enum_class", [e for e in ALL_ENUMS if e.has_numeric_codes()], ids=lambda e: e.__name__
    )
    def test_numeric_codes_unique(self, enum_class: type[CodeEnum]) -> None:
        codes = [member.numeric_code for member in enum_class]
        assert len(set(codes)) == len(codes)


class TestFromCode:
    """Tests for code lookups."""

    @pytest.mark.parametrize(
        "enum_class,code,member",
        [
            (PartyType, "person", PartyType.PERSON),
            (EntityType, "mandate", EntityType.MANDATE),
            (ConstraintType, "max_size", ConstraintType.MAX_SIZE),
            (ValueType, "decimal", ValueType.DECIMAL),
            (PhysicalAddressType, "international", PhysicalAddressType.INTERNATIONAL),
            (SortDirection, "desc", SortDirection.DESCENDING),
            (PersonSortBy, "preferred_name", PersonSortBy.PREFERRED_NAME),
        ],
    )
    def test_known_code(self, enum_class, code, member) -> None:
        assert enum_class.from_code(code) is member

    def test_unknown_code_raises(self) -> None:
        with pytest.raises(InvalidCodeError) as exc_info:
            PartyType.from_code("robot")

        assert exc_info.value.enum_name == "PartyType"
        assert exc_info.value.code == "robot"
        assert "robot" in str(exc_info.value)

    def test_invalid_code_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            ValueType.from_code("currency")

    def test_none_raises(self) -> None:
        with pytest.raises(InvalidCodeError):
            EntityType.from_code(None)

    def test_code_is_case_sensitive(self) -> None:
        with pytest.raises(InvalidCodeError):
            PartyType.from_code("PERSON")


class TestNumericCodes:
    """Tests for dense numeric codes."""

    def test_party_type_numeric_codes(self) -> None:
        assert PartyType.ORGANIZATION.numeric_code == 1
        assert PartyType.PERSON.numeric_code == 2

    def test_required_mandataries_round_trip(self) -> None:
        for member in RequiredMandataries:
            assert RequiredMandataries.from_numeric_code(member.to_numeric_code()) is member

    def test_required_mandataries_codes(self) -> None:
        assert [m.numeric_code for m in RequiredMandataries] == [0, 1, 2, 3]

    def test_entity_type_from_numeric_code(self) -> None:
        assert EntityType.from_numeric_code(4) is EntityType.PERSON

    def test_unknown_numeric_code_raises(self) -> None:
        with pytest.raises(InvalidCodeError):
            MeasurementSystem.from_numeric_code(99)

    def test_enum_without_numeric_codes(self) -> None:
        assert not ConstraintType.has_numeric_codes()
        assert SortDirection.has_numeric_codes()
        with pytest.raises(InvalidCodeError):
            ConstraintType.REQUIRED.to_numeric_code()
        with pytest.raises(InvalidCodeError):
            ConstraintType.from_numeric_code(0)


class TestCodeEnumBehaviour:
    """Tests for string behaviour and attributes."""

    def test_str_is_code(self) -> None:
        assert str(PartyType.PERSON) == "person"
        assert f"{SortDirection.ASCENDING}" == "asc"

    def test_equal_and_hash_like_code(self) -> None:
        assert PartyType.PERSON == "person"
        lookup = {"person": 1}
        assert lookup[PartyType.PERSON] == 1
        assert {PartyType.PERSON: 1}["person"] == 1

    def test_description(self) -> None:
        assert RequiredMandataries.ANY_TWO.description == "Any Two"

    def test_measurement_unit_system_and_type(self) -> None:
        unit = MeasurementUnit.IMPERIAL_POUND
        assert unit.system is MeasurementSystem.IMPERIAL
        assert unit.unit_type is MeasurementUnitType.MASS

    def test_every_system_measures_every_unit_type(self) -> None:
        pairs = {(unit.system, unit.unit_type) for unit in MeasurementUnit}
        assert len(pairs) == len(MeasurementSystem) * len(MeasurementUnitType)
