"""Rich-based progress reporter for terminal output."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.progress import (
    BarColumn,
    DownloadColumn,
    Progress,
    TaskID,
    TextColumn,
    TimeRemainingColumn,
    TransferSpeedColumn,
)


if TYPE_CHECKING:
    from types import TracebackType

    from importgate.core.ports import ProgressCallback


class RichProgressReporter:
    """Progress reporter using Rich for terminal display.

    Shows one bar per transfer with size, speed and ETA. A total of 0
    means the length is unknown and the bar is shown as indeterminate.

    Example:
        with RichProgressReporter() as reporter:
            callback = reporter.start_task("s3://bucket/a.csv", size)
            stream = gateway.open_input_stream("s3://bucket/a.csv", progress=callback)
    """

    def __init__(self, console: Console | None = None) -> None:
        """Initialize the progress display.

        Args:
            console: Console to draw on. Defaults to stderr so that data
                written to stdout is not interleaved with the bars.
        """
        self._progress = Progress(
            TextColumn("[bold blue]{task.description}"),
            BarColumn(),
            DownloadColumn(),
            TransferSpeedColumn(),
            TimeRemainingColumn(),
            console=console or Console(stderr=True),
        )
        self._tasks: dict[str, TaskID] = {}
        self._started = False

    def __enter__(self) -> RichProgressReporter:
        """Start the progress display."""
        self._progress.start()
        self._started = True
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Stop the progress display."""
        self._progress.stop()
        self._started = False

    def start_task(self, name: str, total: int) -> ProgressCallback:
        """Start tracking a transfer.

        Args:
            name: Human-readable name for the task.
            total: Total bytes, or 0 if unknown.

        Returns:
            A callback to update progress.
        """
        if not self._started:
            self._progress.start()
            self._started = True

        task_id = self._progress.add_task(name, total=total or None)
        self._tasks[name] = task_id

        def callback(done: int, _total: int) -> None:
            self._progress.update(task_id, completed=done)

        return callback

    def finish_task(self, name: str) -> None:
        """Mark a task as complete.

        Args:
            name: The task name.
        """
        task_id = self._tasks.pop(name, None)
        if task_id is None:
            return
        task = next(task for task in self._progress.tasks if task.id == task_id)
        if task.total is None:
            self._progress.update(task_id, total=task.completed)
        self._progress.update(task_id, completed=task.total or task.completed)
