from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

from qreconcile.services.progress import ProgressTracker


def test_progress_disabled_without_tty():
    with patch("qreconcile.services.progress.is_tty_enabled", return_value=False):
        with ProgressTracker(2) as tracker:
            tracker.start_file(Path("a.csv"))
            tracker.finish_file(status="ok")
            assert tracker.pbar is None
            assert tracker.current_file == 1


def test_progress_updates_bar_on_tty():
    bar = MagicMock()
    with patch("qreconcile.services.progress.is_tty_enabled", return_value=True), \
            patch("qreconcile.services.progress.tqdm", return_value=bar):
        tracker = ProgressTracker(1)
        tracker.start_file(Path("a.csv"))
        bar.set_description.assert_called_with("Reconciling files (a.csv)")
        tracker.finish_file(status="ok")
        bar.update.assert_called_once_with(1)
        bar.set_postfix.assert_called_once_with(status="ok")
        tracker.close()
        bar.close.assert_called_once()
        assert tracker.pbar is None
