"""Tests for console progress reporting."""

from sparse_refresh.adapters.progress import ConsoleProgress


def test_console_progress_prints_each_step(capsys):
    """Test progress is printed once per step and always at 100."""
    progress = ConsoleProgress(step=25)

    for percent in (10, 25, 40, 55, 99, 100):
        progress.report(percent)

    lines = capsys.readouterr().out.splitlines()
    assert lines == [
        "  └─ Progress: 10%",
        "  └─ Progress: 40%",
        "  └─ Progress: 99%",
        "  └─ Progress: 100%",
    ]
    assert progress.last_percent == 100
