"""Progress sinks."""

from sparse_refresh.adapters.progress.console_progress import ConsoleProgress

__all__ = ["ConsoleProgress"]
