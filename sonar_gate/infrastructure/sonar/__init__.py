"""SonarQube web service adapters."""

from sonar_gate.infrastructure.sonar.errors import (
    AnalysisTimeoutError,
    AnalysisWaitInterruptedError,
    CacheLoadError,
    DecodeError,
    HttpError,
    ReportTaskError,
    SonarGateError,
    TaskFailedError,
)
from sonar_gate.infrastructure.sonar.issues import IssueResolver
from sonar_gate.infrastructure.sonar.quality_gate import QualityGateEvaluator
from sonar_gate.infrastructure.sonar.report_task import ReportTask, read_report_task
from sonar_gate.infrastructure.sonar.rules import RuleResolver
from sonar_gate.infrastructure.sonar.task_poller import TaskPoller
from sonar_gate.infrastructure.sonar.ws_client import SonarWsClient

__all__ = [
    "AnalysisTimeoutError",
    "AnalysisWaitInterruptedError",
    "CacheLoadError",
    "DecodeError",
    "HttpError",
    "IssueResolver",
    "QualityGateEvaluator",
    "ReportTask",
    "ReportTaskError",
    "RuleResolver",
    "SonarGateError",
    "SonarWsClient",
    "TaskFailedError",
    "TaskPoller",
    "read_report_task",
]
