"""Enumeration types for the party domain.

Every member carries a ``code`` (its persisted and serialized form), a
``description`` and, for the compact-storage enumerations, a dense
``numeric_code``. Lookups are exhaustive: an unknown code raises
``InvalidCodeError`` rather than falling back to a default member.
"""

from __future__ import annotations

from enum import Enum

from party.exceptions import InvalidCodeError


class CodeEnum(str, Enum):
    """Closed set of code/description pairs."""

    def __new__(cls, code: str, description: str, numeric_code: int | None = None) -> "CodeEnum":
        obj = str.__new__(cls, code)
        obj._value_ = code
        obj.code = code
        obj.description = description
        obj.numeric_code = numeric_code
        return obj

    def __str__(self) -> str:
        return self.code

    # Members compare equal to their code, so they must hash like it too.
    def __hash__(self) -> int:
        return hash(self.code)

    @classmethod
    def from_code(cls, code: str | None) -> "CodeEnum":
        """Return the member with the given code.

        Raises
        ------
        InvalidCodeError
            If no member has the code.
        """
        if isinstance(code, str):
            member = cls._value2member_map_.get(code)
            if member is not None:
                return member
        raise InvalidCodeError(cls.__name__, code)

    @classmethod
    def from_numeric_code(cls, numeric_code: int | None) -> "CodeEnum":
        """Return the member with the given numeric code.

        Raises
        ------
        InvalidCodeError
            If no member has the numeric code, or the enumeration has none.
        """
        if numeric_code is not None:
            for member in cls:
                if member.numeric_code is not None and member.numeric_code == numeric_code:
                    return member
        raise InvalidCodeError(cls.__name__, numeric_code)

    @classmethod
    def has_numeric_codes(cls) -> bool:
        return all(member.numeric_code is not None for member in cls)

    def to_numeric_code(self) -> int:
        if self.numeric_code is None:
            raise InvalidCodeError(type(self).__name__, self.code)
        return self.numeric_code


class PartyType(CodeEnum):
    ORGANIZATION = ("organization", "Organization", 1)
    PERSON = ("person", "Person", 2)


class EntityType(CodeEnum):
    ASSOCIATION = ("association", "Association", 1)
    MANDATE = ("mandate", "Mandate", 2)
    ORGANIZATION = ("organization", "Organization", 3)
    PERSON = ("person", "Person", 4)


class ConstraintType(CodeEnum):
    MAX_SIZE = ("max_size", "Max Size")
    MIN_SIZE = ("min_size", "Min Size")
    PATTERN = ("pattern", "Pattern")
    REFERENCE = ("reference", "Reference")
    REQUIRED = ("required", "Required")
    SIZE = ("size", "Size")


class ValueType(CodeEnum):
    BOOLEAN = ("boolean", "Boolean")
    DATE = ("date", "Date")
    DECIMAL = ("decimal", "Decimal")
    DOUBLE = ("double", "Double")
    INTEGER = ("integer", "Integer")
    STRING = ("string", "String")


class RequiredMandataries(CodeEnum):
    ALL = ("all", "All", 0)
    ANY = ("any", "Any", 1)
    ANY_TWO = ("any_two", "Any Two", 2)
    ANY_THREE = ("any_three", "Any Three", 3)


class MeasurementSystem(CodeEnum):
    METRIC = ("metric", "Metric", 1)
    IMPERIAL = ("imperial", "Imperial", 2)
    US_CUSTOMARY = ("us_customary", "US Customary", 3)


class MeasurementUnitType(CodeEnum):
    LENGTH = ("length", "Length")
    MASS = ("mass", "Mass")
    VOLUME = ("volume", "Volume")


class MeasurementUnit(CodeEnum):
    """Unit of measure, tied to a measurement system and a unit type."""

    def __new__(
        cls,
        code: str,
        description: str,
        system: MeasurementSystem,
        unit_type: MeasurementUnitType,
    ) -> "MeasurementUnit":
        obj = str.__new__(cls, code)
        obj._value_ = code
        obj.code = code
        obj.description = description
        obj.numeric_code = None
        obj.system = system
        obj.unit_type = unit_type
        return obj

    METRIC_CENTIMETER = (
        "metric_centimeter", "Centimeter", MeasurementSystem.METRIC, MeasurementUnitType.LENGTH
    )
    METRIC_KILOGRAM = (
        "metric_kilogram", "Kilogram", MeasurementSystem.METRIC, MeasurementUnitType.MASS
    )
    METRIC_LITER = ("metric_liter", "Liter", MeasurementSystem.METRIC, MeasurementUnitType.VOLUME)
    IMPERIAL_INCH = (
        "imperial_inch", "Inch", MeasurementSystem.IMPERIAL, MeasurementUnitType.LENGTH
    )
    IMPERIAL_POUND = (
        "imperial_pound", "Pound", MeasurementSystem.IMPERIAL, MeasurementUnitType.MASS
    )
    IMPERIAL_GALLON = (
        "imperial_gallon", "Gallon", MeasurementSystem.IMPERIAL, MeasurementUnitType.VOLUME
    )
    CUSTOMARY_INCH = (
        "customary_inch", "Inch", MeasurementSystem.US_CUSTOMARY, MeasurementUnitType.LENGTH
    )
    CUSTOMARY_POUND = (
        "customary_pound", "Pound", MeasurementSystem.US_CUSTOMARY, MeasurementUnitType.MASS
    )
    CUSTOMARY_GALLON = (
        "customary_gallon", "Gallon", MeasurementSystem.US_CUSTOMARY, MeasurementUnitType.VOLUME
    )


class PhysicalAddressType(CodeEnum):
    BUILDING = ("building", "Building")
    COMPLEX = ("complex", "Complex")
    FARM = ("farm", "Farm")
    INTERNATIONAL = ("international", "International")
    SITE = ("site", "Site")
    STREET = ("street", "Street")
    UNSTRUCTURED = ("unstructured", "Unstructured")


class SortDirection(CodeEnum):
    ASCENDING = ("asc", "Ascending", 0)
    DESCENDING = ("desc", "Descending", 1)


class OrganizationSortBy(CodeEnum):
    NAME = ("name", "Sort By Name")


class PersonSortBy(CodeEnum):
    NAME = ("name", "Sort By Name")
    PREFERRED_NAME = ("preferred_name", "Sort By Preferred Name")


class PartySortBy(CodeEnum):
    NAME = ("name", "Sort By Name")


class AssociationSortBy(CodeEnum):
    TYPE = ("type", "Sort By Type")


class MandateSortBy(CodeEnum):
    TYPE = ("type", "Sort By Type")
