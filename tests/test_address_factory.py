"""Tests for AddressFactory and CountryDistribution."""

from collections import Counter

import pytest

from party.generators.address import (
    LOCALE_MAP,
    AddressFactory,
    CountryDistribution,
    _COUNTRY_GENERATORS,
)
from party.models.enums import PhysicalAddressType
from party.models.party import PhysicalAddress
from party.validation import validate_physical_address


class TestCountryDistribution:
    """Tests for CountryDistribution."""

    def test_us_dominant_weights(self) -> None:
        """Default distribution has 80% US and sums to ~1.0."""
        dist = CountryDistribution.us_dominant()
        assert dist.weights["US"] == 0.80
        assert abs(sum(dist.weights.values()) - 1.0) < 1e-9
        assert len(dist.weights) == 6

    def test_us_only(self) -> None:
        assert CountryDistribution.us_only().weights == {"US": 1.0}

    def test_frozen(self) -> None:
        dist = CountryDistribution.us_only()
        with pytest.raises(AttributeError):
            dist.weights = {"GB": 1.0}  # type: ignore[misc]

    def test_every_country_has_a_locale(self) -> None:
        assert set(CountryDistribution.us_dominant().weights) <= set(LOCALE_MAP)


class TestAddressFactory:
    """Tests for AddressFactory."""

    def test_generate_sets_role_and_purposes(self) -> None:
        factory = AddressFactory(seed=42)

        address = factory.generate("residential", purposes=["correspondence"])

        assert isinstance(address, PhysicalAddress)
        assert address.role == "residential"
        assert address.purposes == ["correspondence"]

    def test_specific_country_overrides_distribution(self) -> None:
        factory = AddressFactory(distribution=CountryDistribution.us_only(), seed=42)

        assert factory.generate("postal", country="GB").country == "GB"

    def test_us_addresses(self) -> None:
        factory = AddressFactory(distribution=CountryDistribution.us_only(), seed=42)

        types = {factory.generate("residential").type for _ in range(50)}

        assert types <= {PhysicalAddressType.STREET, PhysicalAddressType.BUILDING}
        assert PhysicalAddressType.STREET in types

    def test_za_addresses_have_suburbs(self) -> None:
        factory = AddressFactory(seed=42)

        for _ in range(20):
            address = factory.generate("residential", country="ZA")
            assert address.suburb
            assert address.city

    def test_unmapped_country_is_international(self) -> None:
        factory = AddressFactory(distribution=CountryDistribution.us_only(), seed=42)

        address = factory.generate("postal", country="DE")

        assert address.type == PhysicalAddressType.INTERNATIONAL
        assert address.line1
        assert address.postal_code

    @pytest.mark.parametrize("country", ["US", "GB", "ZA", "DE", "FR", "BR"])
    def test_generated_addresses_are_valid(self, country: str) -> None:
        factory = AddressFactory(seed=7)

        for _ in range(10):
            address = factory.generate("residential", country=country)
            assert validate_physical_address(address) == []

    def test_distribution_is_respected(self) -> None:
        factory = AddressFactory(
            distribution=CountryDistribution(weights={"US": 0.5, "GB": 0.5}), seed=42
        )

        counts = Counter(factory.generate("postal").country for _ in range(200))

        assert set(counts) == {"US", "GB"}

    def test_structured_generators_registered(self) -> None:
        assert set(_COUNTRY_GENERATORS) == {"US", "GB", "ZA"}
