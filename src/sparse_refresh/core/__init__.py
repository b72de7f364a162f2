"""Core domain layer."""

from sparse_refresh.core.entities import (
    Deficiency,
    DeficiencyCategory,
    EvaluationCriteria,
    ImageType,
    ItemKind,
    ItemQuery,
    MediaItem,
    RefreshDecision,
    RefreshIntensity,
    RunSummary,
    SortOrder,
    TaskState,
)
from sparse_refresh.core.errors import (
    ConfigurationUnavailable,
    ItemQueryFailure,
    RefreshFailure,
    SparseRefreshError,
)
from sparse_refresh.core.interfaces import (
    ConfigProvider,
    ItemEvaluator,
    LibraryStore,
    ProgressSink,
    RefreshExecutor,
)

__all__ = [
    "MediaItem",
    "ItemKind",
    "ImageType",
    "ItemQuery",
    "SortOrder",
    "EvaluationCriteria",
    "RefreshIntensity",
    "Deficiency",
    "DeficiencyCategory",
    "RefreshDecision",
    "RunSummary",
    "TaskState",
    "SparseRefreshError",
    "ConfigurationUnavailable",
    "ItemQueryFailure",
    "RefreshFailure",
    "LibraryStore",
    "RefreshExecutor",
    "ConfigProvider",
    "ProgressSink",
    "ItemEvaluator",
]
