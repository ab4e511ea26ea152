"""Unit tests for RichProgressReporter adapter."""

import io

import pytest
from rich.console import Console


def _quiet_console() -> Console:
    return Console(file=io.StringIO(), force_terminal=False)


@pytest.mark.progress
class TestRichProgressReporter:
    """Tests for RichProgressReporter."""

    def test_rich_reporter_satisfies_protocol(self) -> None:
        """RichProgressReporter should implement ProgressReporter."""
        from importgate.core.ports import ProgressReporter
        from importgate.progress import RichProgressReporter

        reporter = RichProgressReporter(console=_quiet_console())
        assert isinstance(reporter, ProgressReporter)

    def test_callback_updates_completed(self) -> None:
        """The callback sets the completed byte count."""
        from importgate.progress import RichProgressReporter

        with RichProgressReporter(console=_quiet_console()) as reporter:
            callback = reporter.start_task("s3://bucket/a.csv", 1000)
            callback(250, 1000)

            task = reporter._progress.tasks[0]
            assert task.completed == 250
            assert task.total == 1000

    def test_unknown_total_is_indeterminate(self) -> None:
        """A total of 0 starts an indeterminate task."""
        from importgate.progress import RichProgressReporter

        with RichProgressReporter(console=_quiet_console()) as reporter:
            reporter.start_task("-", 0)

            assert reporter._progress.tasks[0].total is None

    def test_finish_task_completes(self) -> None:
        """finish_task() marks the task as finished, even without a total."""
        from importgate.progress import RichProgressReporter

        with RichProgressReporter(console=_quiet_console()) as reporter:
            known = reporter.start_task("known", 100)
            unknown = reporter.start_task("unknown", 0)
            known(40, 100)
            unknown(70, 0)
            reporter.finish_task("known")
            reporter.finish_task("unknown")

            tasks = {task.description: task for task in reporter._progress.tasks}
            assert tasks["known"].finished
            assert tasks["unknown"].finished
            assert tasks["unknown"].total == 70

    def test_finish_unknown_task_is_ignored(self) -> None:
        """finish_task() for an unknown name does nothing."""
        from importgate.progress import RichProgressReporter

        with RichProgressReporter(console=_quiet_console()) as reporter:
            reporter.finish_task("never-started")

    def test_start_task_starts_display(self) -> None:
        """start_task() works without entering the context manager."""
        from importgate.progress import RichProgressReporter

        reporter = RichProgressReporter(console=_quiet_console())
        callback = reporter.start_task("test", 10)
        callback(10, 10)
        reporter.finish_task("test")
        reporter.__exit__(None, None, None)


@pytest.mark.progress
class TestNullProgressReporter:
    """Tests for NullProgressReporter."""

    def test_satisfies_protocol(self) -> None:
        """NullProgressReporter implements ProgressReporter and does nothing."""
        from importgate.core.ports import NullProgressReporter, ProgressReporter

        reporter = NullProgressReporter()
        assert isinstance(reporter, ProgressReporter)
        reporter.start_task("x", 10)(5, 10)
        reporter.finish_task("x")
