#!/usr/bin/env python3
"""Load reference data and generated sample parties into a database.

This script:
- Creates the party schema (if missing)
- Seeds the standard reference data for the requested locales
- Generates persons, organizations and associations for one tenant and
  stores them through ``PartyStore`` (validated, with snapshots)
- Optionally writes the stored aggregates to JSON files

Usage:
    python scripts/load_sample_data.py
    python scripts/load_sample_data.py --database-url sqlite:///party.db --persons 200
    python scripts/load_sample_data.py --json --output-dir local/
"""

import argparse
import logging
import sys
import time
import uuid
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from party.config import PartyConfig
from party.generators.address import CountryDistribution
from party.generators.association import AssociationGenerator
from party.generators.organization import OrganizationGenerator
from party.generators.person import PersonGenerator
from party.logging import setup_logging
from party.reference import PartyReferenceService
from party.reference_data import load_reference_data
from party.sinks.json_file import JsonFileSink
from party.store import (
    PartyStore,
    create_party_engine,
    create_schema,
    party_session_factory,
    unit_of_work,
)
from party.validation import PartyValidator

logger = logging.getLogger("party.scripts.load_sample_data")


def main() -> None:
    """Main entry point."""
    config = PartyConfig.from_env()

    parser = argparse.ArgumentParser(description="Load sample party data")
    parser.add_argument(
        "--database-url",
        default=config.database.url,
        help="SQLAlchemy database URL (default: from PARTY_DB_* / DATABASE_URL)",
    )
    parser.add_argument(
        "--tenant-id",
        type=uuid.UUID,
        default=None,
        help="Tenant to create the parties for (default: a new random tenant)",
    )
    parser.add_argument(
        "--persons",
        type=int,
        default=config.generator.num_persons,
        help=f"Number of persons (default: {config.generator.num_persons})",
    )
    parser.add_argument(
        "--organizations",
        type=int,
        default=config.generator.num_organizations,
        help=f"Number of organizations (default: {config.generator.num_organizations})",
    )
    parser.add_argument(
        "--associations",
        type=int,
        default=config.generator.num_associations,
        help=f"Number of associations (default: {config.generator.num_associations})",
    )
    parser.add_argument("--seed", type=int, default=config.generator.seed)
    parser.add_argument(
        "--locale",
        action="append",
        dest="locales",
        help=f"Reference data locale, may repeat (default: {config.default_locale_id})",
    )
    parser.add_argument("--json", action="store_true", help="Also write JSON files")
    parser.add_argument("--output-dir", type=Path, default=config.output.json_output_dir)
    parser.add_argument("--log-format", choices=["standard", "json"], default="standard")
    parser.add_argument("--log-level", default=config.log_level)

    args = parser.parse_args()
    setup_logging(args.log_level, args.log_format)

    tenant_id = args.tenant_id or uuid.uuid4()
    distribution = (
        CountryDistribution(weights=config.generator.country_weights)
        if config.generator.country_weights
        else None
    )

    engine = create_party_engine(
        args.database_url,
        echo=config.database.echo,
        pool_size=config.database.pool_size,
    )
    create_schema(engine)
    session_factory = party_session_factory(engine)

    start = time.perf_counter()
    with unit_of_work(session_factory) as session:
        load_reference_data(session, args.locales or [config.default_locale_id])

    person_gen = PersonGenerator(
        seed=args.seed, locale=config.generator.faker_locale, country_distribution=distribution
    )
    organization_gen = OrganizationGenerator(
        seed=args.seed, locale=config.generator.faker_locale, country_distribution=distribution
    )
    association_gen = AssociationGenerator(seed=args.seed, locale=config.generator.faker_locale)

    with unit_of_work(session_factory) as session:
        store = PartyStore(session, validator=PartyValidator(PartyReferenceService(session)))

        persons = [
            store.create_person(tenant_id, person)
            for person in person_gen.generate_batch(tenant_id, args.persons)
        ]
        organizations = [
            store.create_organization(tenant_id, organization)
            for organization in organization_gen.generate_batch(tenant_id, args.organizations)
        ]
        associations = [
            store.create_association(tenant_id, association)
            for association in association_gen.generate_batch(
                tenant_id, organizations, persons, args.associations
            )
        ]

    elapsed = time.perf_counter() - start
    logger.info(
        "Loaded %d persons, %d organizations and %d associations for tenant %s in %.2fs",
        len(persons),
        len(organizations),
        len(associations),
        tenant_id,
        elapsed,
    )

    if args.json:
        sink = JsonFileSink(args.output_dir, pretty=config.output.pretty_json)
        for entity_type, records in (
            ("persons", persons),
            ("organizations", organizations),
            ("associations", associations),
        ):
            path = sink.write_batch(entity_type, records)
            logger.info("Saved %d records to %s", len(records), path)


if __name__ == "__main__":
    main()
