# ABOUTME: Page progress tracking for long corpus scans using Rich progress bars
# ABOUTME: The driver calls the tracker once per page title it encounters

from typing import Any

from rich.progress import BarColumn, MofNCompleteColumn, Progress, SpinnerColumn, TextColumn, TimeElapsedColumn


class PageProgressTracker:
    """Advances a Rich progress task by one step per page."""

    def __init__(self, progress: Progress, task_id: Any):
        self.progress = progress
        self.task_id = task_id
        self.pages = 0

    def __call__(self) -> None:
        self.pages += 1
        self.progress.advance(self.task_id)

    def __enter__(self):
        self.progress.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.progress.stop()


def create_page_progress(
    console, total: int | None = None, description: str = "📚 Extracting categories..."
) -> tuple[Progress, Any, PageProgressTracker]:
    """Create a progress display counting scanned pages.

    Args:
        console: Rich console instance
        total: Expected number of pages, None for an open-ended spinner
        description: Progress description

    Returns:
        Tuple of (progress, task_id, tracker)
    """
    progress = Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    )

    task_id = progress.add_task(description, total=total)
    tracker = PageProgressTracker(progress, task_id)

    return progress, task_id, tracker
