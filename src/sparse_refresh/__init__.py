"""Detect library items with sparse metadata and refresh them."""

__version__ = "0.1.0"
