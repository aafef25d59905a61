from enum import StrEnum
from typing import List, Optional

from pydantic import BaseModel, Field

# Cursor value before any event has been displayed. Kept below every valid
# counter so that a service numbering its events from 0 still gets it shown.
NO_EVENTS_DISPLAYED = -1


class JobStatus(StrEnum):
    pending = "pending"
    running = "running"
    successful = "successful"
    failed = "failed"


TERMINAL_STATUSES = frozenset({JobStatus.successful, JobStatus.failed})


class PollState(StrEnum):
    pending = "pending"
    active = "active"  # any non-pending, non-terminal status, unknown labels included
    terminal = "terminal"


def is_terminal_status(status: Optional[str]) -> bool:
    return status in TERMINAL_STATUSES


def classify_status(status: Optional[str]) -> PollState:
    """Map a raw service status string onto the polling state machine."""
    if status == JobStatus.pending:
        return PollState.pending
    if is_terminal_status(status):
        return PollState.terminal
    return PollState.active


class JobEvent(BaseModel):
    counter: int
    stdout: Optional[str] = ""


class EventPage(BaseModel):
    """One page of the job events listing."""

    count: Optional[int] = None
    results: List[JobEvent] = Field(default_factory=list)
    next: Optional[str] = None  # relative (or absolute) URI of the next page


class EventFetchResult(BaseModel):
    events: List[JobEvent] = Field(default_factory=list)
    last_displayed: int = NO_EVENTS_DISPLAYED
