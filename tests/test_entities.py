"""Tests for core entities."""

from datetime import datetime, timezone

import pytest

from sparse_refresh.core import (
    EvaluationCriteria,
    ImageType,
    ItemKind,
    ItemQuery,
    MediaItem,
    SortOrder,
)


def test_item_creation() -> None:
    """Test creating a valid item."""
    item = MediaItem(
        id="abc123",
        kind=ItemKind.MOVIE,
        name="Inception",
        overview="A thief who steals corporate secrets.",
        provider_ids={"Tmdb": "27205", "Imdb": "tt1375666"},
        date_created=datetime.now(timezone.utc),
        image_counts={ImageType.PRIMARY: 1, ImageType.BACKDROP: 3},
    )

    assert item.name == "Inception"
    assert item.kind == ItemKind.MOVIE
    assert item.provider_ids["Tmdb"] == "27205"
    assert item.image_count(ImageType.BACKDROP) == 3
    assert item.image_count(ImageType.LOGO) == 0
    assert item.display_name == "Inception"


def test_item_validation() -> None:
    """Test item validation."""
    with pytest.raises(ValueError, match="Item id cannot be empty"):
        MediaItem(id="", kind=ItemKind.MOVIE, name="Inception")


def test_unnamed_item_display_name() -> None:
    """Test display name fallback for items without a name."""
    item = MediaItem(id="abc123", kind=ItemKind.EPISODE)

    assert item.display_name == "<unnamed episode abc123>"


def test_item_query_defaults() -> None:
    """Test default query ordering and filters."""
    query = ItemQuery(item_kinds=[ItemKind.MOVIE])

    assert query.exclude_virtual is True
    assert query.recursive is True
    assert query.min_date_created is None
    assert query.order_by == [("SortName", SortOrder.ASCENDING)]


def test_criteria_age_limit() -> None:
    """Test -1 means no age limit."""
    assert not EvaluationCriteria(max_days=-1).has_age_limit
    assert EvaluationCriteria(max_days=0).has_age_limit
    assert EvaluationCriteria(max_days=30).has_age_limit


def test_timestamps_without_timezone_are_utc() -> None:
    """Test naive timestamps are stored as UTC."""
    item = MediaItem(
        id="abc123",
        kind=ItemKind.MOVIE,
        premiere_date=datetime(2010, 7, 16),
        date_created=datetime(2026, 10, 1, 8, 0),
        date_last_refreshed=datetime(2026, 10, 17, 11, 0, tzinfo=timezone.utc),
    )

    assert item.premiere_date == datetime(2010, 7, 16, tzinfo=timezone.utc)
    assert item.date_created.tzinfo == timezone.utc
    assert item.date_last_refreshed == datetime(2026, 10, 17, 11, 0, tzinfo=timezone.utc)
