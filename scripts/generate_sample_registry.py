#!/usr/bin/env python3
"""Generate a sample land registry and publish its notifications.

Runs ``LandRegistryScenario`` against a fresh in-memory ledger. Every
registration, attestation and transfer event goes to the sink chosen with
``--sink`` (or ``NOTIFICATION_SINK``): memory, console, json or kafka.
"""

import argparse
import logging
import time
from dataclasses import replace
from pathlib import Path

from delphi.config import DelphiConfig
from delphi.logging import setup_logging
from delphi.scenarios import LandRegistryScenario
from delphi.sinks import build_sink

logger = logging.getLogger("delphi.scripts.generate_sample_registry")


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Generate a sample property registry and publish its events"
    )
    parser.add_argument(
        "--authorities",
        type=int,
        default=3,
        help="Number of authorities (default: 3)",
    )
    parser.add_argument(
        "--types-per-authority",
        type=int,
        default=2,
        help="Property types per authority (default: 2)",
    )
    parser.add_argument(
        "--claimants",
        type=int,
        default=20,
        help="Number of claimant accounts (default: 20)",
    )
    parser.add_argument(
        "--transfer-rate",
        type=float,
        default=0.3,
        help="Share of claims transferred (default: 0.3)",
    )
    parser.add_argument(
        "--split-rate",
        type=float,
        default=0.3,
        help="Share of transfers that split the property (default: 0.3)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for reproducibility (default: SEED or none)",
    )
    parser.add_argument(
        "--sink",
        type=str,
        choices=["memory", "console", "json", "kafka"],
        default=None,
        help="Where notifications go (default: NOTIFICATION_SINK or memory)",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Directory for the json sink (default: OUTPUT_DIR or ./output)",
    )
    parser.add_argument(
        "--kafka-bootstrap",
        type=str,
        default=None,
        help="Kafka bootstrap servers for the kafka sink",
    )
    args = parser.parse_args()

    config = DelphiConfig.from_env()
    if args.sink:
        config.sink = args.sink
    if args.output_dir:
        config.output = replace(config.output, json_output_dir=args.output_dir)
    if args.kafka_bootstrap:
        config.kafka = replace(config.kafka, bootstrap_servers=args.kafka_bootstrap)
    seed = args.seed if args.seed is not None else config.seed

    setup_logging(config.log_level, config.log_format)

    logger.info("=" * 60)
    logger.info("Delphi - Sample Land Registry")
    logger.info("=" * 60)
    logger.info("Authorities: %d, claimants: %d", args.authorities, args.claimants)
    logger.info("Seed: %s", seed)
    logger.info("Sink: %s", config.sink)
    logger.info("=" * 60)

    start = time.perf_counter()
    scenario = LandRegistryScenario(
        num_authorities=args.authorities,
        types_per_authority=args.types_per_authority,
        num_claimants=args.claimants,
        transfer_rate=args.transfer_rate,
        split_rate=args.split_rate,
        seed=seed,
        config=config,
        sink=build_sink(config),
    )
    ledger = scenario.generate()
    elapsed = time.perf_counter() - start

    for name, count in ledger.query.summary().items():
        logger.info("  %s: %d", name, count)
    for name, count in scenario.stats.items():
        logger.info("  %s: %d", name, count)
    logger.info("Generated in %.2fs", elapsed)

    ledger.close()


if __name__ == "__main__":
    main()
