from typing import Protocol

from tower_runner.core.models.job import JobEvent


class OutputSinkPort(Protocol):
    """Console-like destination for job output, written in counter order."""

    def emit(self, event: JobEvent) -> None:  # pragma: no cover - protocol
        ...
