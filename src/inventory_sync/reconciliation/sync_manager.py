"""
Sync manager coordinating reconciliation rounds.

A round fetches both catalogs, matches and diffs their variants, batches
the corrections per target product and applies them sequentially. Rounds
repeat on a fixed interval measured from the end of the previous round.
"""

import time
import uuid
from datetime import datetime, timezone
from typing import Callable, List, Optional

import requests

from ..audit.logger import SyncLogger
from ..config.loader import ConfigLoader
from ..config.models import InventorySyncConfig, ProductUpdateResult, RoundSummary
from ..providers.source_provider import SourceCatalogProvider
from ..providers.target_provider import TargetCatalogProvider
from .change_detector import build_update_batch, detect_changes
from .matcher import match_variants
from .product_updater import ProductUpdater


class SyncManager:
    """Manager for running sync rounds between the source and target catalogs."""

    def __init__(
        self,
        config: InventorySyncConfig,
        logger: SyncLogger,
        source_provider: SourceCatalogProvider,
        target_provider: TargetCatalogProvider,
        updater: Optional[ProductUpdater] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize the sync manager.

        Args:
            config: System configuration
            logger: Logger instance
            source_provider: Provider for the source catalog
            target_provider: Provider for the target catalog
            updater: Product updater; built from the target provider when omitted
            sleep: Function used to wait between rounds
        """
        self.config = config
        self.logger = logger
        self.source_provider = source_provider
        self.target_provider = target_provider
        self.updater = updater or ProductUpdater(
            target_provider, logger, dry_run=config.sync.dry_run
        )
        self.sleep = sleep
        self.last_summary: Optional[RoundSummary] = None

    @classmethod
    def from_config(
        cls,
        config: InventorySyncConfig,
        logger: SyncLogger,
        session: Optional[requests.Session] = None,
    ) -> "SyncManager":
        """Build a manager and its providers from configuration."""
        session = session or requests.Session()
        timeout = config.http.timeout_seconds
        source_provider = SourceCatalogProvider(
            config.source, logger, session=session, timeout_seconds=timeout
        )
        target_provider = TargetCatalogProvider(
            config.target,
            ConfigLoader.resolve_secret(config.target.api_key),
            logger,
            session=session,
            timeout_seconds=timeout,
        )
        return cls(config, logger, source_provider, target_provider)

    def run_round(self) -> RoundSummary:
        """
        Run one complete fetch, diff and update cycle.

        Returns:
            RoundSummary with the round's counts and status
        """
        run_id = str(uuid.uuid4())
        start_time = datetime.now(timezone.utc)
        logger = self.logger.bind(run_id=run_id)

        logger.info("Starting sync round")

        source = self.source_provider.fetch_products()
        target = self.target_provider.fetch_products()

        summary = RoundSummary(
            run_id=run_id,
            start_time=start_time.isoformat(),
            status="started",
            source_products=len(source.products),
            target_products=len(target.products),
        )

        if not source.products or not target.products:
            logger.warning(
                "Not enough data to compare",
                extra={
                    "source_status": source.status,
                    "target_status": target.status,
                    "source_products": len(source.products),
                    "target_products": len(target.products),
                },
            )
            status = "skipped" if source.ok and target.ok else "failed"
            return self._finish(summary, start_time, [], status)

        pairs = match_variants(source.products, target.products)
        batch = build_update_batch(detect_changes(pairs, self.config.sync.field_policy))
        summary.matched_pairs = len(pairs)
        summary.products_to_update = len(batch)

        logger.info(
            f"Matched {len(pairs)} variants, found differences in {len(batch)} products"
        )

        results = []
        for product_id, updates in batch.items():
            results.append(self.updater.apply(product_id, updates))

        return self._finish(summary, start_time, results)

    def _finish(
        self,
        summary: RoundSummary,
        start_time: datetime,
        results: List[ProductUpdateResult],
        status: Optional[str] = None,
    ) -> RoundSummary:
        """Fill in timing, counts and status, and log the summary."""
        end_time = datetime.now(timezone.utc)
        duration = (end_time - start_time).total_seconds()

        summary.end_time = end_time.isoformat()
        summary.duration = duration
        summary.successful_updates = sum(
            1 for r in results if r.status in ("success", "dry_run")
        )
        summary.failed_updates = sum(1 for r in results if r.status == "failed")
        summary.skipped_updates = sum(1 for r in results if r.status == "skipped")

        if status is None:
            status = "completed" if summary.failed_updates == 0 else "completed_with_failures"
        summary.status = status

        summary.summary = (
            f"Sync round {status} in {duration:.1f}s. "
            f"Source products: {summary.source_products}, "
            f"target products: {summary.target_products}, "
            f"matched variants: {summary.matched_pairs}. "
            f"Updated {summary.successful_updates}/{summary.products_to_update} products "
            f"({summary.failed_updates} failed, {summary.skipped_updates} skipped)"
        )

        failed = summary.failed_updates or status == "failed"
        log = self.logger.error if failed else self.logger.info
        log(summary.summary, extra={"run_id": summary.run_id, "status": status})
        return summary

    def run_forever(self, max_rounds: Optional[int] = None) -> Optional[RoundSummary]:
        """
        Run sync rounds until stopped.

        Each round runs to completion before the interval wait starts.
        Errors escaping a round are logged and the loop continues. Only
        the latest round summary is kept.

        Args:
            max_rounds: Stop after this many rounds (None runs indefinitely)

        Returns:
            Summary of the last round, or None if that round raised
        """
        interval = self.config.sync.interval_seconds
        rounds = 0

        self.logger.info(f"Continuous sync every {interval:g} seconds")

        while max_rounds is None or rounds < max_rounds:
            rounds += 1
            self.last_summary = None
            try:
                self.last_summary = self.run_round()
            except Exception as e:
                self.logger.error(f"Sync round failed: {str(e)}", exc_info=True)

            if max_rounds is not None and rounds >= max_rounds:
                break
            self.sleep(interval)

        return self.last_summary
