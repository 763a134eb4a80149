from __future__ import annotations

from collections.abc import Iterator
from contextlib import AbstractContextManager, contextmanager
from typing import Any, Protocol, runtime_checkable


class ProgressTask(Protocol):
    def advance(self, n: int = 1) -> None: ...
    def set_total(self, total: int | None) -> None: ...
    def set_completed(self, completed: int) -> None: ...
    def set_description(self, description: str) -> None: ...
    def close(self) -> None: ...


@runtime_checkable
class LoggingProtocol(Protocol):
    def report_message(self, message: str) -> None: ...
    def report_warning(self, message: str) -> None: ...
    def report_error(self, message: str) -> None: ...
    def report_exception(self, context: str, exc: BaseException) -> None: ...
    def report_table_message(self, row_data: dict[str, Any]) -> None: ...

    def progress(self, description: str, *, total: int | None = None) -> AbstractContextManager[ProgressTask]: ...


class _NullProgress(ProgressTask):
    def advance(self, n: int = 1) -> None:
        pass

    def set_total(self, total: int | None) -> None:
        pass

    def set_completed(self, completed: int) -> None:
        pass

    def set_description(self, description: str) -> None:
        pass

    def close(self) -> None:
        pass


class NullLogger(LoggingProtocol):
    """
    Full no-op implementation of LoggingProtocol.

    Default hook for ReportManager and reporters when no sink is wanted:
      - unit tests
      - embedding the manager in another tool
      - disabling all output
    """

    def report_message(self, message: str) -> None:
        pass

    def report_warning(self, message: str) -> None:
        pass

    def report_error(self, message: str) -> None:
        pass

    def report_exception(self, context: str, exc: BaseException) -> None:
        pass

    def report_table_message(self, row_data: dict[str, Any]) -> None:
        pass

    @contextmanager
    def progress(self, description: str, *, total: int | None = None) -> Iterator[ProgressTask]:
        yield _NullProgress()
