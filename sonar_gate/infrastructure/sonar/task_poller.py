"""Compute Engine task poller.

The scanner only uploads the report; SonarQube processes it in the
background. The poller asks for the task status until it is SUCCESS, a
terminal failure, or the retry budget is spent.

    PENDING / IN_PROGRESS  -> sleep, poll again
    SUCCESS                -> return analysis id
    FAILED / CANCELED / ?  -> TaskFailedError, no further polls
    budget spent           -> AnalysisTimeoutError

``max_retry`` is the number of polls; the poller sleeps between polls, so
it sleeps ``max_retry - 1`` times at most.
"""

import asyncio
from collections.abc import Awaitable, Callable

import structlog
from tenacity import AsyncRetrying, RetryCallState, RetryError, retry_if_result, stop_after_attempt, wait_fixed

from sonar_gate.domain.entities.task import AnalysisTask, TaskStatus
from sonar_gate.infrastructure.sonar.errors import (
    AnalysisTimeoutError,
    AnalysisWaitInterruptedError,
    TaskFailedError,
)
from sonar_gate.infrastructure.sonar.schemas import TaskResponse
from sonar_gate.infrastructure.sonar.ws_client import SonarWsClient

log = structlog.get_logger()


def _still_processing(task: AnalysisTask) -> bool:
    return isinstance(task.status, TaskStatus) and task.status.is_processing


class TaskPoller:
    """Waits for a submitted analysis task to finish."""

    def __init__(
        self,
        ws: SonarWsClient,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._ws = ws
        self._sleep = sleep

    async def get_task(self, task_id: str) -> AnalysisTask:
        """Fetch the current state of a task."""
        response = await self._ws.call("api/ce/task", {"id": task_id}, TaskResponse)
        task = response.task
        try:
            status: TaskStatus | str = TaskStatus(task.status)
        except ValueError:
            status = task.status
        return AnalysisTask(id=task.id, status=status, analysis_id=task.analysis_id)

    async def _poll(self, task_id: str) -> AnalysisTask:
        task = await self.get_task(task_id)
        if task.status == TaskStatus.SUCCESS or _still_processing(task):
            return task
        status = task.status.value if isinstance(task.status, TaskStatus) else task.status
        raise TaskFailedError(task_id, status)

    @staticmethod
    def _log_wait(retry_state: RetryCallState) -> None:
        log.info(
            "quality_gate_wait",
            message="Waiting quality gate to complete...",
            attempt=retry_state.attempt_number,
        )

    async def wait_for_analysis(self, task_id: str, max_retry: int, wait_ms: int) -> str:
        """Poll ``task_id`` until it succeeds and return its analysis id.

        Raises:
            TaskFailedError: task reached FAILED, CANCELED or an unknown status
            AnalysisTimeoutError: still pending after ``max_retry`` polls
            AnalysisWaitInterruptedError: the wait was cancelled

        """
        if max_retry < 1:
            raise ValueError("max_retry must be >= 1")

        retrying = AsyncRetrying(
            stop=stop_after_attempt(max_retry),
            wait=wait_fixed(wait_ms / 1000),
            retry=retry_if_result(_still_processing),
            before_sleep=self._log_wait,
            sleep=self._sleep,
        )
        try:
            task = await retrying(self._poll, task_id)
        except RetryError:
            log.error(
                "quality_gate_timeout",
                message="Analysis id not found. Try increasing query.max_retry, query.wait_ms, or both.",
                task_id=task_id,
                max_retry=max_retry,
                wait_ms=wait_ms,
            )
            raise AnalysisTimeoutError(task_id, max_retry, wait_ms) from None
        except asyncio.CancelledError as e:
            # The task's cancel request is left pending (no uncancel()), so
            # the caller still sees it via Task.cancelling().
            log.warning("quality_gate_wait_cancelled", task_id=task_id)
            raise AnalysisWaitInterruptedError(f"Waiting for task {task_id} was cancelled") from e

        if not task.analysis_id:
            raise TaskFailedError(task_id, "SUCCESS without analysis id")
        log.debug("analysis_ready", task_id=task_id, analysis_id=task.analysis_id)
        return task.analysis_id
