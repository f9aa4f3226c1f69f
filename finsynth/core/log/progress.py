"""Rich progress bars drawn on the logging console."""
from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Optional

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
)


class ProgressTask:
    def __init__(self, progress: Progress, task_id: TaskID) -> None:
        self._progress = progress
        self._task_id = task_id

    def advance(self, amount: float = 1.0) -> None:
        self._progress.advance(self._task_id, amount)

    def describe(self, description: str) -> None:
        self._progress.update(self._task_id, description=description)


class ProgressManager:
    """Hands out transient progress bars.

    Once logging is initialised the bars share the rich handler's console,
    so log lines print above the bar.
    """

    def __init__(self) -> None:
        self._console: Optional[Console] = None

    def use_console(self, console: Console) -> None:
        self._console = console

    def reset_console(self) -> None:
        self._console = None

    @contextmanager
    def task(self, description: str, *, total: Optional[float] = None) -> Iterator[ProgressTask]:
        progress = Progress(
            TextColumn("[bold cyan]{task.description}"),
            BarColumn(bar_width=None),
            MofNCompleteColumn(),
            TimeElapsedColumn(),
            console=self._console or Console(stderr=True),
            transient=True,
        )
        with progress:
            yield ProgressTask(progress, progress.add_task(description, total=total))


progress_manager = ProgressManager()
