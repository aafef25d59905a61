"""JobRunner: drives one job from template name to reported outcome.

1. Resolve the job template id by exact name.
2. Launch a job from it.
3. Poll until terminal while streaming the job output.
4. Report success or failure to the hosting pipeline.

Every error is fatal to the run and becomes a failure report carrying the
error message.
"""

from typing import Optional

from tower_runner.core.exceptions import TowerRunnerError
from tower_runner.core.interfaces.result_reporter import ResultReporterPort
from tower_runner.core.logging_config import job_id_var
from tower_runner.core.managers.job_launcher import JobLauncher
from tower_runner.core.managers.job_poller import JobPoller
from tower_runner.core.managers.job_resolver import JobResolver
from tower_runner.core.models.job import JobStatus
from tower_runner.core.settings import logger


class JobRunner:
    def __init__(
        self,
        resolver: JobResolver,
        launcher: JobLauncher,
        poller: JobPoller,
        reporter: ResultReporterPort,
    ) -> None:
        self._resolver = resolver
        self._launcher = launcher
        self._poller = poller
        self._reporter = reporter

    async def run(self, template_name: str) -> Optional[str]:
        """Run the named template to completion.

        Returns the terminal status, or None when the run aborted on an error.
        """
        try:
            template_id = await self._resolver.resolve(template_name)
            job_id = await self._launcher.launch(template_id)
            job_id_var.set(job_id)
            status = await self._poller.poll_until_terminal(job_id)
        except TowerRunnerError as exc:
            logger.error(f"[job:run] aborted: {exc.message}")
            if exc.diagnostic:
                logger.debug(f"[job:run] diagnostic: {exc.diagnostic}")
            self._reporter.report_failure(exc.message)
            return None

        if status == JobStatus.successful:
            self._reporter.report_success()
        else:
            self._reporter.report_failure(f"Job {job_id} finished with status '{status}'")
        return status
