"""Adapters for the host library, configuration and progress reporting."""
