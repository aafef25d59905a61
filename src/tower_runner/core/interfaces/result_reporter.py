"""Port through which the run outcome reaches the hosting pipeline."""

from abc import ABC, abstractmethod


class ResultReporterPort(ABC):
    @abstractmethod
    def report_success(self, message: str = "") -> None:
        pass

    @abstractmethod
    def report_failure(self, message: str) -> None:
        pass
