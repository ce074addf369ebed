"""Compute Engine task entities."""

from dataclasses import dataclass
from enum import Enum


class TaskStatus(str, Enum):
    """Status of a background analysis task."""

    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"
    CANCELED = "CANCELED"

    @property
    def is_processing(self) -> bool:
        return self in (TaskStatus.PENDING, TaskStatus.IN_PROGRESS)


@dataclass(frozen=True)
class AnalysisTask:
    """Snapshot of a task as seen by one poll.

    ``status`` keeps the raw string when the server reports a status this
    client does not know about.
    """

    id: str
    status: TaskStatus | str
    analysis_id: str | None = None
