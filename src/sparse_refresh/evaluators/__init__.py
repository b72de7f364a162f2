"""Kind-specific sparse metadata evaluators."""

from sparse_refresh.core import ItemKind
from sparse_refresh.evaluators.sparse import SparseItemEvaluator

MOVIE_EVALUATOR = SparseItemEvaluator(
    kind=ItemKind.MOVIE,
    item_type_name="movies",
    name="Refresh sparse movies",
    description="Refresh movies with missing metadata based on requirements configured.",
)

SERIES_EVALUATOR = SparseItemEvaluator(
    kind=ItemKind.SERIES,
    item_type_name="series",
    name="Refresh sparse series",
    description="Refresh series with missing metadata based on requirements configured.",
)

EPISODE_EVALUATOR = SparseItemEvaluator(
    kind=ItemKind.EPISODE,
    item_type_name="episodes",
    name="Refresh sparse episodes",
    description="Refresh episodes with missing metadata based on requirements configured.",
)

EVALUATORS = {
    ItemKind.MOVIE: MOVIE_EVALUATOR,
    ItemKind.SERIES: SERIES_EVALUATOR,
    ItemKind.EPISODE: EPISODE_EVALUATOR,
}


def get_evaluator(kind: ItemKind) -> SparseItemEvaluator:
    """Look up the evaluator for an item kind."""
    return EVALUATORS[kind]


__all__ = [
    "SparseItemEvaluator",
    "MOVIE_EVALUATOR",
    "SERIES_EVALUATOR",
    "EPISODE_EVALUATOR",
    "EVALUATORS",
    "get_evaluator",
]
