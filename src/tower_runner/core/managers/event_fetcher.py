"""Retrieval of new job events and their reassembly into counter order.

The service delivers events only approximately by counter across pages, so
each fetch buffers what it receives by counter and emits ascending. Counters
never received are gaps and stay absent.
"""

from typing import Dict, List

from pydantic import ValidationError

from tower_runner.core.config import JobRunnerConfig
from tower_runner.core.exceptions import RemoteError
from tower_runner.core.managers.tower_client import TowerClient, remote_error
from tower_runner.core.models.job import EventFetchResult, EventPage, JobEvent
from tower_runner.core.settings import logger
from tower_runner.core.utils.api_urls import TowerApiUrls


class EventStream:
    """Sparse buffer keyed by counter, local to one fetch.

    Events at or below `last_displayed` are dropped on arrival.
    """

    def __init__(self, last_displayed: int) -> None:
        self.last_displayed = last_displayed
        self._buffer: Dict[int, JobEvent] = {}

    def add(self, event: JobEvent) -> bool:
        if event.counter <= self.last_displayed:
            return False
        self._buffer[event.counter] = event
        return True

    def __len__(self) -> int:
        return len(self._buffer)

    def drain(self) -> EventFetchResult:
        events: List[JobEvent] = [self._buffer[c] for c in sorted(self._buffer)]
        self._buffer = {}
        if events:
            self.last_displayed = events[-1].counter
        return EventFetchResult(events=events, last_displayed=self.last_displayed)


class EventPageFetcher:
    def __init__(self, client: TowerClient, urls: TowerApiUrls, config: JobRunnerConfig) -> None:
        self._client = client
        self._urls = urls
        self.config = config

    def starting_page(self, last_displayed: int) -> int:
        """Page holding the event right after `last_displayed` (pages are 1-based)."""
        return max(last_displayed, 0) // self.config.page_size + 1

    async def fetch_new_events(self, job_id: str, last_displayed: int) -> EventFetchResult:
        """Fetch every event newer than `last_displayed`, following `next` links.

        Any non-200 page aborts the whole fetch; nothing is returned for the
        pages already read so the caller can retry from the same cursor.
        """
        stream = EventStream(last_displayed)
        page_url = self._urls.job_events(
            job_id, self.config.page_size, self.starting_page(last_displayed)
        )
        pages = 0

        while page_url:
            response = await self._client.send("GET", page_url)
            if response.status != 200:
                raise remote_error(response, f"Failed to get events of job {job_id}")

            page = self._parse_page(job_id, response.status, response.body)
            pages += 1
            for event in page.results:
                stream.add(event)

            page_url = self._urls.resolve_next(page.next) if page.next else None

        result = stream.drain()
        logger.debug(
            f"[job:events] job_id={job_id} pages={pages} new_events={len(result.events)} "
            f"last_displayed={last_displayed}->{result.last_displayed}"
        )
        return result

    def _parse_page(self, job_id: str, status: int, body) -> EventPage:
        if not isinstance(body, dict):
            raise RemoteError(
                status=status,
                message=f"Events page of job {job_id} is not a JSON object",
                body=body,
            )
        try:
            return EventPage.model_validate(body)
        except ValidationError as exc:
            raise RemoteError(
                status=status,
                message=f"Events page of job {job_id} is malformed",
                body=body,
                diagnostic=str(exc),
            ) from exc
