"""Configuration management for the party module."""

from dataclasses import dataclass, field
from pathlib import Path

from party.exceptions import ConfigurationError


@dataclass
class DatabaseConfig:
    """Database connection configuration.

    ``url_override`` wins over the individual connection fields, so a
    ``DATABASE_URL`` such as ``sqlite:///party.db`` can be used locally.
    """

    host: str = "localhost"
    port: int = 5432
    database: str = "party"
    user: str = "postgres"
    password: str = "postgres"
    driver: str = "postgresql+psycopg"
    echo: bool = False
    pool_size: int | None = 5
    url_override: str | None = None

    @property
    def url(self) -> str:
        """Get the SQLAlchemy database URL."""
        if self.url_override:
            return self.url_override
        return (
            f"{self.driver}://{self.user}:{self.password}"
            f"@{self.host}:{self.port}/{self.database}"
        )


@dataclass
class OutputConfig:
    """Output configuration for exported sample data."""

    json_output_dir: Path = field(default_factory=lambda: Path("output"))
    pretty_json: bool = False


@dataclass
class GeneratorConfig:
    """Sample data generation configuration."""

    seed: int | None = None
    faker_locale: str = "en_US"
    num_persons: int = 50
    num_organizations: int = 10
    num_associations: int = 20
    country_weights: dict[str, float] | None = None


@dataclass
class PartyConfig:
    """Main configuration for the party module."""

    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    generator: GeneratorConfig = field(default_factory=GeneratorConfig)
    default_locale_id: str = "en-US"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "PartyConfig":
        """Create config from environment variables."""
        import json
        import os

        try:
            database = DatabaseConfig(
                host=os.getenv("PARTY_DB_HOST", "localhost"),
                port=int(os.getenv("PARTY_DB_PORT", "5432")),
                database=os.getenv("PARTY_DB_NAME", "party"),
                user=os.getenv("PARTY_DB_USER", "postgres"),
                password=os.getenv("PARTY_DB_PASSWORD", "postgres"),
                echo=os.getenv("PARTY_DB_ECHO", "false").lower() == "true",
                pool_size=int(os.getenv("PARTY_DB_POOL_SIZE", "5")),
                url_override=os.getenv("DATABASE_URL") or None,
            )

            output = OutputConfig(
                json_output_dir=Path(os.getenv("OUTPUT_DIR", "output")),
                pretty_json=os.getenv("PRETTY_JSON", "false").lower() == "true",
            )

            country_weights_str = os.getenv("COUNTRY_WEIGHTS")
            generator = GeneratorConfig(
                seed=int(os.getenv("SEED")) if os.getenv("SEED") else None,
                faker_locale=os.getenv("FAKER_LOCALE", "en_US"),
                country_weights=json.loads(country_weights_str) if country_weights_str else None,
            )
        except ValueError as e:
            raise ConfigurationError(f"Invalid party configuration: {e}") from e

        return cls(
            database=database,
            output=output,
            generator=generator,
            default_locale_id=os.getenv("LOCALE_ID", "en-US"),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )
