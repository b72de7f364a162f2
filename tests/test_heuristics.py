"""Tests for shared string and date heuristics."""

import math
from datetime import datetime, timedelta, timezone

import pytest

from sparse_refresh.core.heuristics import (
    age_cutoff,
    contains_any,
    is_blank,
    is_date,
    minutes_since_refresh,
    split_bad_names,
    starts_with_any,
)

NOW = datetime(2026, 10, 17, 12, 30, tzinfo=timezone.utc)


def test_split_bad_names_trims_and_drops_empty():
    """Test splitting on every supported delimiter."""
    assert split_bad_names(" auto_scan, VTS_01 ;; untitled |\nfoo ") == (
        "auto_scan",
        "VTS_01",
        "untitled",
        "foo",
    )


def test_split_bad_names_keeps_order_and_dedupes():
    """Test duplicates are dropped case-insensitively, first one wins."""
    assert split_bad_names("b, a, B, c, A") == ("b", "a", "c")


def test_split_bad_names_empty():
    """Test empty settings produce no fragments."""
    assert split_bad_names("") == ()
    assert split_bad_names(None) == ()
    assert split_bad_names(" , ; | ") == ()


def test_is_blank():
    assert is_blank(None)
    assert is_blank("")
    assert is_blank("   \t\n")
    assert not is_blank(" x ")


def test_starts_with_any_case_insensitive():
    """Test prefix match ignores case in both directions."""
    assert starts_with_any("AUTO_SCAN S01E01", ["auto_scan"])
    assert starts_with_any("auto_scan s01e01", ["AUTO_SCAN"])
    assert not starts_with_any("My auto_scan", ["auto_scan"])
    assert not starts_with_any(None, ["auto_scan"])
    assert not starts_with_any("Anything", [])


def test_starts_with_any_unicode_folding():
    """Test culture-aware folding such as German sharp s."""
    assert starts_with_any("STRASSE 1", ["straße"])


def test_contains_any_substring():
    """Test substring match anywhere in the text."""
    assert contains_any("Overview from AUTO_SCAN tool", ["auto_scan"])
    assert not contains_any("A real synopsis", ["auto_scan"])
    assert not contains_any(None, ["auto_scan"])


@pytest.mark.parametrize(
    "text",
    [
        "2024-01-01",
        "2024/01/01",
        "01/31/2024",
        "31.01.2024",
        "2024-01-01 10:15:00",
        "2024-01-01T10:15:00Z",
        "2024-01-01T10:15:00.123+02:00",
        "January 1, 2024",
        "1 Jan 2024",
        " 2024-01-01 ",
    ],
)
def test_is_date_recognizes_dates(text):
    """Test common date layouts are recognized."""
    assert is_date(text)


@pytest.mark.parametrize(
    "text",
    ["Inception", "1917", "2012", "Apollo 13", "Blade Runner 2049", "", None, "13/13/2024", "2024-W01"],
)
def test_is_date_rejects_titles(text):
    """Test regular titles and bare years are not dates."""
    assert not is_date(text)


def test_minutes_since_refresh():
    """Test elapsed minutes since the last refresh."""
    assert minutes_since_refresh(NOW - timedelta(minutes=11), NOW) == pytest.approx(11)
    assert minutes_since_refresh(None, NOW) == math.inf


def test_minutes_since_refresh_naive_timestamp_is_utc():
    """Test naive timestamps are treated as UTC."""
    naive = (NOW - timedelta(minutes=5)).replace(tzinfo=None)
    assert minutes_since_refresh(naive, NOW) == pytest.approx(5)


def test_age_cutoff():
    """Test the cutoff is midnight UTC minus max_days."""
    assert age_cutoff(-1, NOW) is None
    assert age_cutoff(0, NOW) == datetime(2026, 10, 17, tzinfo=timezone.utc)
    assert age_cutoff(30, NOW) == datetime(2026, 9, 17, tzinfo=timezone.utc)
