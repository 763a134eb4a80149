from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from rich.console import Console
from rich.progress import MofNCompleteColumn, Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.table import Table
from rich.traceback import Traceback

from run_reporting.utils.logging_protocol import LoggingProtocol, ProgressTask


class RichConsoleLogger(LoggingProtocol):
    """LoggingProtocol implementation printing to a rich Console."""

    def __init__(self, console: Console | None = None, show_tracebacks: bool = True) -> None:
        self._console = console or Console()
        self._show_tracebacks = show_tracebacks

    @property
    def console(self) -> Console:
        return self._console

    def report_message(self, message: str) -> None:
        self._console.print(message)

    def report_warning(self, message: str) -> None:
        self._console.print(f"[yellow]WARNING[/yellow] {message}")

    def report_error(self, message: str) -> None:
        self._console.print(f"[red]ERROR[/red] {message}")

    def report_exception(self, context: str, exc: BaseException) -> None:
        self._console.print(f"[red]EXCEPTION[/red] {context}: {exc}")
        if self._show_tracebacks and exc.__traceback__ is not None:
            self._console.print(Traceback.from_exception(type(exc), exc, exc.__traceback__))

    def report_table_message(self, row_data: dict[str, Any]) -> None:
        table = Table(show_header=True, header_style="bold")
        for key in row_data:
            table.add_column(str(key))
        table.add_row(*(_format_cell(v) for v in row_data.values()))
        self._console.print(table)

    @contextmanager
    def progress(self, description: str, *, total: int | None = None) -> Iterator[ProgressTask]:
        prog = Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            MofNCompleteColumn(),
            TimeElapsedColumn(),
            console=self._console,
            transient=True,
        )
        prog.start()

        try:
            task_id = prog.add_task(description, total=total)

            class _Task:
                def advance(self, n: int = 1) -> None:
                    prog.advance(task_id, n)

                def set_total(self, total: int | None) -> None:
                    prog.update(task_id, total=total)

                def set_completed(self, completed: int) -> None:
                    prog.update(task_id, completed=completed)

                def set_description(self, description: str) -> None:
                    prog.update(task_id, description=description)

                def close(self) -> None:
                    # Context manager owns lifecycle.
                    pass

            task: ProgressTask = _Task()
            yield task
        finally:
            prog.stop()


def _format_cell(value: Any) -> str:
    if isinstance(value, float):
        return f"{value:.4f}"
    return str(value)
