"""Render git transfer progress with rich."""

from typing import Dict, Optional

from git import RemoteProgress
from rich.console import Console
from rich.progress import BarColumn, Progress, TaskID, TaskProgressColumn, TextColumn

STAGE_LABELS = {
    RemoteProgress.COUNTING: "Counting objects",
    RemoteProgress.COMPRESSING: "Compressing objects",
    RemoteProgress.RECEIVING: "Receiving objects",
    RemoteProgress.RESOLVING: "Resolving deltas",
    RemoteProgress.WRITING: "Writing objects",
    RemoteProgress.FINDING_SOURCES: "Finding sources",
    RemoteProgress.CHECKING_OUT: "Checking out files",
}


class ConsoleProgress(RemoteProgress):
    """GitPython progress handler drawing one bar per transfer stage."""

    def __init__(self, console: Optional[Console] = None):
        super().__init__()
        self._progress = Progress(
            TextColumn("{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            TextColumn("{task.fields[message]}"),
            console=console,
            transient=False,
        )
        self._tasks: Dict[int, TaskID] = {}

    def __enter__(self) -> "ConsoleProgress":
        self._progress.start()
        return self

    def __exit__(self, *exc_info) -> None:
        self._progress.stop()

    def update(self, op_code, cur_count, max_count=None, message=""):
        stage = op_code & RemoteProgress.OP_MASK
        task = self._tasks.get(stage)
        if task is None:
            label = STAGE_LABELS.get(stage, "Transferring")
            task = self._progress.add_task(label, total=max_count or None, message="")
            self._tasks[stage] = task

        self._progress.update(
            task,
            completed=cur_count,
            total=max_count or None,
            message=message or "",
        )
        if op_code & RemoteProgress.END:
            self._progress.update(task, completed=max_count or cur_count)
