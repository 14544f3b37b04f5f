#!/usr/bin/env python3
"""
Main entry point for the inventory sync system.

This module provides the CLI that loads configuration once and then runs
the sync loop as a long-lived process.
"""

import argparse
import sys
from pathlib import Path

from .audit.logger import SyncLogger
from .config.loader import ConfigLoader
from .exceptions import ConfigurationError
from .reconciliation.sync_manager import SyncManager


def create_logger(config, verbose: bool = False) -> SyncLogger:
    """Create logger instance from configuration."""
    logger = SyncLogger("inventory_sync")
    logging_config = config.logging
    if verbose:
        logging_config = logging_config.model_copy(update={"level": "DEBUG"})
    logger.setup_logging(logging_config)
    return logger


def main(argv=None) -> int:
    """Main entry point for inventory sync."""
    parser = argparse.ArgumentParser(
        description="Inventory sync from the ERP catalog to the storefront catalog",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run continuously using config.yaml
  inventory-sync config.yaml

  # Configuration from ERP_API_URL, EASY_ORDER_BASE_URL, EASY_ORDER_API_KEY
  inventory-sync

  # Run a single round without writing to the storefront
  inventory-sync config.yaml --once --dry-run
        """,
    )

    parser.add_argument(
        "config_file",
        nargs="?",
        help="Path to the YAML configuration file (default: environment only)",
    )

    parser.add_argument(
        "--once", action="store_true", help="Run a single sync round and exit"
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Detect and log changes without writing to the target catalog",
    )

    parser.add_argument(
        "--validate-only",
        action="store_true",
        help="Only validate configuration without running sync",
    )

    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose logging"
    )

    args = parser.parse_args(argv)

    try:
        if args.config_file:
            config = ConfigLoader.load_from_file(Path(args.config_file))
        else:
            config = ConfigLoader.load_from_env()
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    if args.dry_run:
        config = config.model_copy(
            update={"sync": config.sync.model_copy(update={"dry_run": True})}
        )

    logger = create_logger(config, args.verbose)
    logger.info(
        f"Loaded configuration (source: {config.source.url}, "
        f"target: {config.target.base_url}, policy: {config.sync.field_policy.value})"
    )

    if args.validate_only:
        logger.info("Configuration validation completed successfully")
        return 0

    manager = SyncManager.from_config(config, logger)

    try:
        if args.once:
            summary = manager.run_forever(max_rounds=1)
            if summary is None or summary.status in ("failed", "completed_with_failures"):
                return 1
            return 0

        manager.run_forever()
    except KeyboardInterrupt:
        logger.info("Sync stopped")

    return 0


if __name__ == "__main__":
    sys.exit(main())
