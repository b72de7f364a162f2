"""Sparse metadata evaluator, parametrized by item kind."""

from datetime import datetime
from typing import AsyncIterator

from sparse_refresh.core import (
    ConfigProvider,
    Deficiency,
    EvaluationCriteria,
    ItemEvaluator,
    ItemKind,
    ItemQuery,
    LibraryStore,
    MediaItem,
    RefreshIntensity,
    SortOrder,
)
from sparse_refresh.core.heuristics import age_cutoff
from sparse_refresh.evaluators import rules


class SparseItemEvaluator(ItemEvaluator):
    """Apply the shared completeness checks to one kind of item."""

    def __init__(
        self,
        kind: ItemKind,
        item_type_name: str,
        name: str,
        description: str,
    ) -> None:
        self.kind = kind
        self.item_type_name = item_type_name
        self.name = name
        self.description = description

    def build_query(self, criteria: EvaluationCriteria, now: datetime) -> ItemQuery:
        """Build the library query for this kind."""
        return ItemQuery(
            item_kinds=[self.kind],
            exclude_virtual=True,
            recursive=True,
            min_date_created=age_cutoff(criteria.max_days, now),
            order_by=[("SortName", SortOrder.ASCENDING)],
        )

    def select_candidates(
        self, criteria: EvaluationCriteria, store: LibraryStore, now: datetime
    ) -> AsyncIterator[MediaItem]:
        return store.query_items(self.build_query(criteria, now))

    def needs_refresh(self, item: MediaItem, criteria: EvaluationCriteria) -> bool:
        return rules.any_deficiency(item, criteria)

    def explain_deficiencies(
        self, item: MediaItem, criteria: EvaluationCriteria
    ) -> list[Deficiency]:
        return rules.all_deficiencies(item, criteria)

    def refresh_intensity(self, config: ConfigProvider) -> RefreshIntensity:
        return config.load_refresh_intensity()

    def __repr__(self) -> str:
        return f"<SparseItemEvaluator {self.item_type_name}>"
