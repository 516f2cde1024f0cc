"""Physical address factory with worldwide locale support."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Callable

from faker import Faker

from party.models.enums import PhysicalAddressType
from party.models.party import PhysicalAddress


@dataclass(frozen=True)
class CountryDistribution:
    """Weighted distribution of countries for address generation.

    Parameters
    ----------
    weights : dict[str, float]
        Mapping of ISO 3166-1 alpha-2 country code to weight.
        Weights are relative (do not need to sum to 1.0).
    """

    weights: dict[str, float] = field(default_factory=lambda: {"US": 1.0})

    @classmethod
    def us_dominant(cls) -> "CountryDistribution":
        """Default: 80% United States, 20% spread across 5 other countries."""
        return cls(
            weights={
                "US": 0.80,
                "GB": 0.06,
                "ZA": 0.05,
                "DE": 0.03,
                "FR": 0.03,
                "BR": 0.03,
            }
        )

    @classmethod
    def us_only(cls) -> "CountryDistribution":
        """100% United States addresses."""
        return cls(weights={"US": 1.0})


# Mapping of ISO country code -> Faker locale
LOCALE_MAP: dict[str, str] = {
    "US": "en_US",
    "GB": "en_GB",
    "ZA": "en_US",
    "DE": "de_DE",
    "FR": "fr_FR",
    "BR": "pt_BR",
}


class AddressFactory:
    """Generate valid physical addresses for multiple countries.

    Uses Faker with locale-specific providers. Each configured country
    gets a dedicated Faker instance. Countries with a structured generator
    produce street, building or complex addresses; every other country
    produces an international address.

    Parameters
    ----------
    distribution : CountryDistribution | None
        Country weight distribution. Defaults to ``us_dominant()``.
    seed : int | None
        Random seed for reproducibility.
    """

    def __init__(
        self,
        distribution: CountryDistribution | None = None,
        seed: int | None = None,
    ) -> None:
        self._distribution = distribution or CountryDistribution.us_dominant()
        self._countries = list(self._distribution.weights.keys())
        self._weights = list(self._distribution.weights.values())
        self._fakers: dict[str, Faker] = {}

        for country_code in self._countries:
            locale = LOCALE_MAP.get(country_code, "en_US")
            faker_instance = Faker(locale)
            if seed is not None:
                faker_instance.seed_instance(seed)
            self._fakers[country_code] = faker_instance

    def pick_country(self) -> str:
        return random.choices(self._countries, weights=self._weights, k=1)[0]

    def generate(
        self,
        role: str,
        purposes: list[str] | None = None,
        country: str | None = None,
    ) -> PhysicalAddress:
        """Generate an address, optionally for a specific country.

        Parameters
        ----------
        role : str
            Physical address role code, e.g. ``residential``.
        purposes : list[str] | None
            Physical address purpose codes.
        country : str | None
            ISO 3166-1 alpha-2 code. If ``None``, picks based on
            the configured distribution.

        Returns
        -------
        PhysicalAddress
            Generated address, not yet attached to a party.
        """
        if country is None:
            country = self.pick_country()

        fake = self._fakers.get(country)
        if fake is None:
            fake = Faker(LOCALE_MAP.get(country, "en_US"))

        generator = _COUNTRY_GENERATORS.get(country, _generate_international)
        address = generator(fake, country)
        address.role = role
        address.purposes = list(purposes or [])
        return address


# ---------------------------------------------------------------------------
# Per-country address generators
# ---------------------------------------------------------------------------

def _generate_us(fake: Faker, country: str) -> PhysicalAddress:
    """US street address, occasionally in a named building."""
    if random.random() < 0.15:
        return PhysicalAddress(
            type=PhysicalAddressType.BUILDING,
            building_name=f"{fake.last_name()} Tower",
            building_floor=str(random.randint(1, 40)),
            street_name=fake.street_name(),
            street_number=fake.building_number(),
            city=fake.city(),
            region=fake.state_abbr(),
            postal_code=fake.zipcode(),
            country=country,
        )
    return PhysicalAddress(
        type=PhysicalAddressType.STREET,
        street_name=fake.street_name(),
        street_number=fake.building_number(),
        city=fake.city(),
        region=fake.state_abbr(),
        postal_code=fake.zipcode(),
        country=country,
    )


def _generate_gb(fake: Faker, country: str) -> PhysicalAddress:
    """UK street address."""
    return PhysicalAddress(
        type=PhysicalAddressType.STREET,
        street_name=fake.street_name(),
        street_number=str(random.randint(1, 999)),
        city=fake.city(),
        region=fake.county(),
        postal_code=fake.postcode(),
        country=country,
    )


def _generate_za(fake: Faker, country: str) -> PhysicalAddress:
    """South African complex or street address."""
    if random.random() < 0.4:
        return PhysicalAddress(
            type=PhysicalAddressType.COMPLEX,
            complex_name=f"{fake.last_name()} Gardens",
            complex_unit_number=str(random.randint(1, 200)),
            street_name=fake.street_name(),
            street_number=str(random.randint(1, 300)),
            suburb=fake.city(),
            city=fake.city(),
            postal_code=f"{random.randint(1, 9999):04d}",
            country=country,
        )
    return PhysicalAddress(
        type=PhysicalAddressType.STREET,
        street_name=fake.street_name(),
        street_number=str(random.randint(1, 300)),
        suburb=fake.city(),
        city=fake.city(),
        postal_code=f"{random.randint(1, 9999):04d}",
        country=country,
    )


def _generate_international(fake: Faker, country: str) -> PhysicalAddress:
    """Fallback: unstructured lines for countries without a structured generator."""
    region = ""
    for method in ("state", "region", "province"):
        if hasattr(fake, method):
            region = getattr(fake, method)()
            break

    return PhysicalAddress(
        type=PhysicalAddressType.INTERNATIONAL,
        line1=f"{fake.street_name()} {fake.building_number()}",
        city=fake.city(),
        region=region or None,
        postal_code=fake.postcode(),
        country=country,
    )


_COUNTRY_GENERATORS: dict[str, Callable[[Faker, str], PhysicalAddress]] = {
    "US": _generate_us,
    "GB": _generate_gb,
    "ZA": _generate_za,
}
