"""Console progress reporting."""

from typing import Optional

from sparse_refresh.core import ProgressSink


class ConsoleProgress(ProgressSink):
    """Print progress on the first report, every `step` percent, and at 100."""

    def __init__(self, step: float = 10.0) -> None:
        self.step = step
        self.last_percent = 0.0
        self._last_printed: Optional[float] = None

    def report(self, percent: float) -> None:
        self.last_percent = percent
        if (
            self._last_printed is None
            or percent >= 100
            or percent - self._last_printed >= self.step
        ):
            self._last_printed = percent
            print(f"  └─ Progress: {percent:.0f}%")
