"""Quality gate entities."""

from dataclasses import dataclass, field
from enum import Enum


class QualityGateStatus(str, Enum):
    """Verdict of a quality gate or of one of its conditions."""

    OK = "OK"
    WARN = "WARN"
    ERROR = "ERROR"
    NONE = "NONE"


@dataclass(frozen=True)
class Condition:
    """One evaluated condition of a quality gate."""

    metric_key: str
    metric_name: str
    symbol: str
    actual: str | None = None
    warning: str | None = None
    error: str | None = None
    status: QualityGateStatus | None = None


@dataclass(frozen=True)
class QualityGate:
    """Quality gate verdict for one analysis."""

    status: QualityGateStatus | None
    conditions: tuple[Condition, ...] = field(default_factory=tuple)

    @property
    def failed(self) -> bool:
        return self.status == QualityGateStatus.ERROR
