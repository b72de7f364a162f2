"""Completeness checks shared by every item kind.

Each check is a pure function of an item and a criteria snapshot. Note that
``bad_name`` is always active while ``overview_bad_name`` is behind a toggle:
a title starting with a placeholder fragment is treated as sparse no matter
how the overview checks are configured.
"""

import logging
from typing import Callable

from sparse_refresh.core.entities import (
    Deficiency,
    DeficiencyCategory,
    EvaluationCriteria,
    ImageType,
    MediaItem,
)
from sparse_refresh.core.heuristics import contains_any, is_blank, is_date, starts_with_any

logger = logging.getLogger(__name__)


def too_few_provider_ids(item: MediaItem, criteria: EvaluationCriteria) -> bool:
    return len(item.provider_ids) < criteria.minimum_provider_ids


def missing_overview(item: MediaItem, criteria: EvaluationCriteria) -> bool:
    return criteria.check_missing_overview and is_blank(item.overview)


def overview_bad_name(item: MediaItem, criteria: EvaluationCriteria) -> bool:
    return criteria.check_overview_bad_name and contains_any(item.overview, criteria.bad_names)


def missing_name(item: MediaItem, criteria: EvaluationCriteria) -> bool:
    return criteria.check_missing_name and is_blank(item.name)


def name_is_date(item: MediaItem, criteria: EvaluationCriteria) -> bool:
    return criteria.check_name_is_date and is_date(item.name)


def bad_name(item: MediaItem, criteria: EvaluationCriteria) -> bool:
    return starts_with_any(item.name, criteria.bad_names)


def missing_image(
    item: MediaItem, image_type: ImageType, criteria: EvaluationCriteria
) -> bool:
    """Image slot holds fewer images than the threshold (0 disables)."""
    threshold = criteria.missing_image_threshold
    return threshold > 0 and item.image_count(image_type) < threshold


def missing_primary_image(item: MediaItem, criteria: EvaluationCriteria) -> bool:
    return missing_image(item, ImageType.PRIMARY, criteria)


def _provider_message(item: MediaItem, criteria: EvaluationCriteria) -> str:
    present = ", ".join(sorted(item.provider_ids)) or "none"
    return (
        f"has {len(item.provider_ids)} provider ids, needs {criteria.minimum_provider_ids}"
        f" (present: {present})"
    )


Check = Callable[[MediaItem, EvaluationCriteria], bool]

# Reporting order is fixed
CHECKS: list[tuple[DeficiencyCategory, Check, Callable[[MediaItem, EvaluationCriteria], str]]] = [
    (DeficiencyCategory.PROVIDER_IDS, too_few_provider_ids, _provider_message),
    (DeficiencyCategory.MISSING_OVERVIEW, missing_overview, lambda i, c: "missing overview"),
    (DeficiencyCategory.OVERVIEW_BAD_NAME, overview_bad_name, lambda i, c: "overview contains a bad name"),
    (DeficiencyCategory.MISSING_NAME, missing_name, lambda i, c: "missing name"),
    (DeficiencyCategory.NAME_IS_DATE, name_is_date, lambda i, c: "name is a date"),
    (DeficiencyCategory.BAD_NAME, bad_name, lambda i, c: "name starts with a bad name"),
    (DeficiencyCategory.MISSING_IMAGE, missing_primary_image, lambda i, c: "missing primary image"),
]


def any_deficiency(item: MediaItem, criteria: EvaluationCriteria) -> bool:
    """True as soon as one check fails."""
    return (
        too_few_provider_ids(item, criteria)
        or missing_overview(item, criteria)
        or missing_name(item, criteria)
        or name_is_date(item, criteria)
        or bad_name(item, criteria)
        or overview_bad_name(item, criteria)
        or missing_primary_image(item, criteria)
    )


def all_deficiencies(item: MediaItem, criteria: EvaluationCriteria) -> list[Deficiency]:
    """Run every check without short-circuiting."""
    deficiencies = []
    for category, check, describe in CHECKS:
        if check(item, criteria):
            deficiencies.append(Deficiency(category=category, message=describe(item, criteria)))
    logger.debug("%s: %d deficiencies", item.id, len(deficiencies))
    return deficiencies
