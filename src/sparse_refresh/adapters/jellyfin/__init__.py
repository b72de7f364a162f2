"""Jellyfin server adapter."""

from sparse_refresh.adapters.jellyfin.client import JellyfinClient, parse_item, parse_jellyfin_datetime

__all__ = ["JellyfinClient", "parse_item", "parse_jellyfin_datetime"]
