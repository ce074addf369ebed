"""Errors raised while talking to SonarQube.

Everything here is fatal for the operation that raised it; callers get one
of these (with the original exception chained) and nothing is retried.
"""


class SonarGateError(Exception):
    """Base class for all sonar-gate failures."""


class ReportTaskError(SonarGateError):
    """report-task.txt is missing, unreadable, or lacks a required key."""


class TaskFailedError(SonarGateError):
    """Compute Engine task ended in a non-success state."""

    def __init__(self, task_id: str, status: str) -> None:
        super().__init__(f"Analysis in SonarQube is not successful ({status})")
        self.task_id = task_id
        self.status = status


class AnalysisTimeoutError(SonarGateError):
    """Task still pending after the whole polling budget was spent."""

    def __init__(self, task_id: str, max_retry: int, wait_ms: int) -> None:
        super().__init__("Report processing is taking longer than the configured wait limit.")
        self.task_id = task_id
        self.max_retry = max_retry
        self.wait_ms = wait_ms


class AnalysisWaitInterruptedError(SonarGateError):
    """Waiting for the task was cancelled."""


class HttpError(SonarGateError):
    """Web service answered with a non-200 status."""

    def __init__(self, url: str, status_code: int) -> None:
        super().__init__(f"HTTP {status_code} for {url}")
        self.url = url
        self.status_code = status_code


class DecodeError(SonarGateError):
    """Web service response body could not be decoded."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Unable to decode response of {url}: {reason}")
        self.url = url


class CacheLoadError(SonarGateError):
    """Loading a cache entry failed."""

    def __init__(self, cache: str, key: str) -> None:
        super().__init__(f"Failed to get {cache} for {key}")
        self.cache = cache
        self.key = key
