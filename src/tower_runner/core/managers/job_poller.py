"""JobPoller: the status-polling state machine.

States: pending -> active -> terminal(successful | failed). Each iteration
queries the job status, streams new events once the job has left `pending`,
and stops only on a terminal status. Unrecognised status strings count as
active, so polling continues for them. Any error propagates unchanged.
"""

import asyncio

from tower_runner.core.config import JobRunnerConfig
from tower_runner.core.exceptions import RemoteError
from tower_runner.core.interfaces.output_sink import OutputSinkPort
from tower_runner.core.managers.event_fetcher import EventPageFetcher
from tower_runner.core.managers.tower_client import TowerClient, remote_error
from tower_runner.core.models.job import (
    NO_EVENTS_DISPLAYED,
    PollState,
    classify_status,
)
from tower_runner.core.settings import logger
from tower_runner.core.utils.api_urls import TowerApiUrls


class JobPoller:
    def __init__(
        self,
        client: TowerClient,
        urls: TowerApiUrls,
        fetcher: EventPageFetcher,
        sink: OutputSinkPort,
        config: JobRunnerConfig,
    ) -> None:
        self._client = client
        self._urls = urls
        self._fetcher = fetcher
        self._sink = sink
        self.config = config

    async def get_status(self, job_id: str) -> str:
        response = await self._client.send("GET", self._urls.job(job_id))
        if response.status != 200:
            raise remote_error(response, f"Failed to get details of job {job_id}")

        status = response.json_field("status")
        if not isinstance(status, str):
            raise RemoteError(
                status=response.status,
                message=f"Details of job {job_id} did not contain a status",
                body=response.body,
            )
        return status

    async def poll_until_terminal(self, job_id: str) -> str:
        """Poll until the job reaches `successful` or `failed`; return that status."""
        cursor = NO_EVENTS_DISPLAYED
        state = PollState.pending

        while True:
            status = await self.get_status(job_id)
            new_state = classify_status(status)
            if new_state != state:
                logger.info(f"[job:poll] job_id={job_id} {state} -> {new_state} (status={status})")
                state = new_state

            if new_state != PollState.pending:
                cursor = await self._emit_new_events(job_id, cursor)

            if new_state == PollState.terminal:
                logger.info(f"[job:poll] terminal status reached job_id={job_id} status={status}")
                return status

            logger.debug(f"[job:poll] job_id={job_id} status={status} sleeping {self.config.poll_interval}s")
            await asyncio.sleep(self.config.poll_interval)

    async def _emit_new_events(self, job_id: str, cursor: int) -> int:
        result = await self._fetcher.fetch_new_events(job_id, cursor)
        for event in result.events:
            self._sink.emit(event)
        # never move the cursor backwards, even on a misbehaving fetch result
        return max(cursor, result.last_displayed)
