"""Error types raised by the refresh pipeline."""

from typing import Optional


class SparseRefreshError(Exception):
    """Base exception for sparse refresh errors."""

    def __init__(self, message: str, suggestion: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.suggestion = suggestion

    def __str__(self) -> str:
        if self.suggestion:
            return f"{self.message}. {self.suggestion}"
        return self.message


class ConfigurationUnavailable(SparseRefreshError):
    """Criteria could not be read. Aborts the run before any item."""
    pass


class ItemQueryFailure(SparseRefreshError):
    """The library store failed to enumerate candidates. Aborts the run."""
    pass


class RefreshFailure(SparseRefreshError):
    """The refresh collaborator failed for a single item."""

    def __init__(self, message: str, item_id: str, suggestion: Optional[str] = None) -> None:
        super().__init__(message, suggestion)
        self.item_id = item_id
