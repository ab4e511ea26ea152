"""Progress reporting adapters."""

from importgate.progress.rich_progress import RichProgressReporter


__all__ = ["RichProgressReporter"]
