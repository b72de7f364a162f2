"""Core domain entities."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional


class ItemKind(str, Enum):
    """Kind of library item."""

    MOVIE = "Movie"
    SERIES = "Series"
    EPISODE = "Episode"


class ImageType(str, Enum):
    """Image slot on a library item."""

    PRIMARY = "Primary"
    BACKDROP = "Backdrop"
    LOGO = "Logo"
    THUMB = "Thumb"
    BANNER = "Banner"


class SortOrder(str, Enum):
    ASCENDING = "Ascending"
    DESCENDING = "Descending"


class TaskState(str, Enum):
    """Lifecycle of one refresh run."""

    NOT_STARTED = "not_started"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


class DeficiencyCategory(str, Enum):
    """Metadata checks, in reporting order."""

    PROVIDER_IDS = "provider_ids"
    MISSING_OVERVIEW = "missing_overview"
    OVERVIEW_BAD_NAME = "overview_bad_name"
    MISSING_NAME = "missing_name"
    NAME_IS_DATE = "name_is_date"
    BAD_NAME = "bad_name"
    MISSING_IMAGE = "missing_image"


@dataclass
class MediaItem:
    """Library item as seen by the evaluator (read-only)."""

    id: str
    kind: ItemKind
    name: Optional[str] = None
    sort_name: Optional[str] = None
    overview: Optional[str] = None
    provider_ids: dict[str, str] = field(default_factory=dict)
    premiere_date: Optional[datetime] = None
    date_created: Optional[datetime] = None
    date_last_refreshed: Optional[datetime] = None
    image_counts: dict[ImageType, int] = field(default_factory=dict)
    is_virtual: bool = False

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Item id cannot be empty")
        # Timestamps without a zone are UTC
        for name in ("premiere_date", "date_created", "date_last_refreshed"):
            value = getattr(self, name)
            if value is not None and value.tzinfo is None:
                setattr(self, name, value.replace(tzinfo=timezone.utc))

    def image_count(self, image_type: ImageType) -> int:
        return self.image_counts.get(image_type, 0)

    @property
    def display_name(self) -> str:
        return self.name or f"<unnamed {self.kind.value.lower()} {self.id}>"


@dataclass
class ItemQuery:
    """Filter handed to the library store."""

    item_kinds: list[ItemKind]
    exclude_virtual: bool = True
    recursive: bool = True
    min_date_created: Optional[datetime] = None
    order_by: list[tuple[str, SortOrder]] = field(
        default_factory=lambda: [("SortName", SortOrder.ASCENDING)]
    )


@dataclass(frozen=True)
class EvaluationCriteria:
    """Snapshot of the sparse-detection options for one run."""

    max_days: int = -1
    refresh_cooldown_minutes: int = 60
    minimum_provider_ids: int = 1
    check_missing_overview: bool = True
    check_missing_name: bool = True
    check_name_is_date: bool = True
    check_overview_bad_name: bool = False
    bad_names: tuple[str, ...] = ()
    missing_image_threshold: int = 1

    @property
    def has_age_limit(self) -> bool:
        return self.max_days != -1


@dataclass(frozen=True)
class RefreshIntensity:
    """How hard a refresh should hit existing metadata and images."""

    replace_all_images: bool = False
    replace_all_metadata: bool = False


@dataclass
class Deficiency:
    """One failed completeness check."""

    category: DeficiencyCategory
    message: str


@dataclass
class RefreshDecision:
    """Outcome of evaluating one item."""

    should_refresh: bool
    missing_reasons: list[Deficiency]


@dataclass
class RunSummary:
    """Aggregate result of one refresh run."""

    state: TaskState
    total: int = 0
    processed: int = 0
    refreshed: int = 0
    failed: int = 0
    failed_item_ids: list[str] = field(default_factory=list)
