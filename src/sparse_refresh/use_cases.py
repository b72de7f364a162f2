"""Business logic use cases."""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from sparse_refresh.core import (
    ConfigProvider,
    ConfigurationUnavailable,
    EvaluationCriteria,
    ItemEvaluator,
    ItemQueryFailure,
    LibraryStore,
    MediaItem,
    ProgressSink,
    RefreshExecutor,
    RunSummary,
    TaskState,
)
from sparse_refresh.core.heuristics import age_cutoff, minutes_since_refresh

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class RefreshService:
    """Run one sparse-refresh pass for a single item kind."""

    def __init__(
        self,
        evaluator: ItemEvaluator,
        library_store: LibraryStore,
        refresh_executor: RefreshExecutor,
        config_provider: ConfigProvider,
        dry_run: bool = False,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.evaluator = evaluator
        self.library_store = library_store
        self.refresh_executor = refresh_executor
        self.config_provider = config_provider
        self.dry_run = dry_run
        self.clock = clock or utc_now
        self.state = TaskState.NOT_STARTED

    def passes_gates(self, item: MediaItem, criteria: EvaluationCriteria, now: datetime) -> bool:
        """Premiere window, cooldown and needs-refresh gates on a selected item."""
        cutoff = age_cutoff(criteria.max_days, now)
        if cutoff is not None and item.premiere_date is not None and item.premiere_date < cutoff:
            return False

        if minutes_since_refresh(item.date_last_refreshed, now) <= criteria.refresh_cooldown_minutes:
            return False

        return self.evaluator.needs_refresh(item, criteria)

    async def collect_candidates(self, criteria: EvaluationCriteria, now: datetime) -> list[MediaItem]:
        """Materialize the gated candidate list, preserving store order."""
        selected: list[MediaItem] = []
        try:
            async for item in self.evaluator.select_candidates(criteria, self.library_store, now):
                selected.append(item)
        except ItemQueryFailure:
            raise
        except Exception as e:
            raise ItemQueryFailure(f"Failed to enumerate {self.evaluator.item_type_name}: {e}") from e

        return [item for item in selected if self.passes_gates(item, criteria, now)]

    async def execute(
        self,
        cancellation: Optional[asyncio.Event] = None,
        progress: Optional[ProgressSink] = None,
    ) -> RunSummary:
        """Select sparse items and refresh them one by one.

        Args:
            cancellation: Set to request a clean stop before the next item
            progress: Receives a percentage after every item

        Returns:
            Summary with the terminal state and counters

        Raises:
            ConfigurationUnavailable: Criteria could not be read
            ItemQueryFailure: The library store failed to enumerate items
        """
        self.state = TaskState.RUNNING
        now = self.clock()

        try:
            criteria = self.config_provider.load_criteria()
        except ConfigurationUnavailable:
            self.state = TaskState.FAILED
            raise
        except Exception as e:
            self.state = TaskState.FAILED
            raise ConfigurationUnavailable(f"Could not read criteria: {e}") from e

        try:
            candidates = await self.collect_candidates(criteria, now)
            intensity = self.evaluator.refresh_intensity(self.config_provider)
        except Exception:
            self.state = TaskState.FAILED
            raise

        summary = RunSummary(state=TaskState.RUNNING, total=len(candidates))
        logger.info("Found %d sparse %s", summary.total, self.evaluator.item_type_name)

        for index, item in enumerate(candidates, 1):
            if cancellation is not None and cancellation.is_set():
                logger.info(
                    "Cancelled after %d of %d %s",
                    summary.processed, summary.total, self.evaluator.item_type_name,
                )
                self.state = summary.state = TaskState.CANCELLED
                return summary

            decision = self.evaluator.evaluate(item, criteria)
            logger.info("[%d/%d] %s needs refresh:", index, summary.total, item.display_name)
            for deficiency in decision.missing_reasons:
                logger.info("    %s", deficiency.message)

            if not self.dry_run:
                try:
                    await self.refresh_executor.refresh(
                        item,
                        replace_all_images=intensity.replace_all_images,
                        replace_all_metadata=intensity.replace_all_metadata,
                    )
                    summary.refreshed += 1
                except Exception:
                    logger.exception("Refresh failed for %s (%s)", item.display_name, item.id)
                    summary.failed += 1
                    summary.failed_item_ids.append(item.id)

            summary.processed += 1
            if progress is not None and summary.processed < summary.total:
                progress.report(100.0 * summary.processed / summary.total)

        if progress is not None:
            progress.report(100.0)

        self.state = summary.state = TaskState.COMPLETED
        logger.info(
            "Finished %s: %d processed, %d refreshed, %d failed",
            self.evaluator.item_type_name, summary.processed, summary.refreshed, summary.failed,
        )
        return summary
