"""Domain entities returned to callers."""

from sonar_gate.domain.entities.issue import Issue, Severity
from sonar_gate.domain.entities.quality_gate import Condition, QualityGate, QualityGateStatus
from sonar_gate.domain.entities.rule import Rule, RuleType
from sonar_gate.domain.entities.task import AnalysisTask, TaskStatus

__all__ = [
    "AnalysisTask",
    "Condition",
    "Issue",
    "QualityGate",
    "QualityGateStatus",
    "Rule",
    "RuleType",
    "Severity",
    "TaskStatus",
]
