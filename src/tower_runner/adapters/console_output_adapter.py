from typing import Optional

from rich.console import Console

from tower_runner.core.interfaces.output_sink import OutputSinkPort
from tower_runner.core.models.job import JobEvent


class ConsoleOutputAdapter(OutputSinkPort):
    """Writes job output verbatim to the console.

    Markup, emoji codes and highlighting are disabled: the text comes from a remote
    playbook run and is full of square brackets and colons.
    """

    def __init__(self, console: Optional[Console] = None) -> None:
        self._console = console or Console(markup=False, highlight=False, emoji=False, soft_wrap=True)

    def emit(self, event: JobEvent) -> None:
        self._console.print(event.stdout or "")
