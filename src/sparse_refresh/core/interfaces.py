"""Core interfaces for adapters and evaluators."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import AsyncIterator

from sparse_refresh.core.entities import (
    Deficiency,
    EvaluationCriteria,
    ItemKind,
    ItemQuery,
    MediaItem,
    RefreshDecision,
    RefreshIntensity,
)


class LibraryStore(ABC):
    """Interface for querying items from a media library."""

    @abstractmethod
    def query_items(self, query: ItemQuery) -> AsyncIterator[MediaItem]:
        """Stream items matching the query, in the requested order."""
        pass


class RefreshExecutor(ABC):
    """Interface for triggering a metadata/image refresh."""

    @abstractmethod
    async def refresh(
        self, item: MediaItem, replace_all_images: bool, replace_all_metadata: bool
    ) -> None:
        """Queue a refresh of the item."""
        pass


class ConfigProvider(ABC):
    """Interface for reading live configuration."""

    @abstractmethod
    def load_criteria(self) -> EvaluationCriteria:
        """Read a fresh criteria snapshot."""
        pass

    @abstractmethod
    def load_refresh_intensity(self) -> RefreshIntensity:
        """Read the replace-all flags."""
        pass


class ProgressSink(ABC):
    """Interface for reporting run progress."""

    @abstractmethod
    def report(self, percent: float) -> None:
        """Report progress as a percentage between 0 and 100."""
        pass


class ItemEvaluator(ABC):
    """Interface for kind-specific sparse metadata rules."""

    kind: ItemKind
    item_type_name: str
    name: str
    description: str

    @abstractmethod
    def select_candidates(
        self, criteria: EvaluationCriteria, store: LibraryStore, now: datetime
    ) -> AsyncIterator[MediaItem]:
        """Query the store for items of this kind."""
        pass

    @abstractmethod
    def needs_refresh(self, item: MediaItem, criteria: EvaluationCriteria) -> bool:
        """Check whether any deficiency applies to the item."""
        pass

    @abstractmethod
    def explain_deficiencies(
        self, item: MediaItem, criteria: EvaluationCriteria
    ) -> list[Deficiency]:
        """List every deficiency of the item, in fixed order."""
        pass

    @abstractmethod
    def refresh_intensity(self, config: ConfigProvider) -> RefreshIntensity:
        """Read the replace-all flags from live configuration."""
        pass

    def evaluate(self, item: MediaItem, criteria: EvaluationCriteria) -> RefreshDecision:
        """Build the full decision for an item."""
        reasons = self.explain_deficiencies(item, criteria)
        return RefreshDecision(should_refresh=bool(reasons), missing_reasons=reasons)
