"""Reports the run outcome to a hosted build/release pipeline.

The host agent picks up `##vso[...]` logging commands from stdout; the
process exit code carries the same outcome for any other runner.
"""

import sys
from typing import Optional, TextIO

from tower_runner.core.interfaces.result_reporter import ResultReporterPort


def _escape(message: str) -> str:
    # logging command values must stay on a single line
    return message.replace("\r", "%0D").replace("\n", "%0A")


class PipelineResultAdapter(ResultReporterPort):
    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self._stream = stream or sys.stdout
        self.result: Optional[str] = None
        self.message: str = ""

    @property
    def exit_code(self) -> int:
        return 0 if self.result == "Succeeded" else 1

    def report_success(self, message: str = "") -> None:
        self._complete("Succeeded", message)

    def report_failure(self, message: str) -> None:
        self._complete("Failed", message)

    def _complete(self, result: str, message: str) -> None:
        self.result = result
        self.message = message
        self._stream.write(f"##vso[task.complete result={result};]{_escape(message)}\n")
        self._stream.flush()
