"""Issue entities."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class Severity(str, Enum):
    """Issue severity, lowest to highest."""

    INFO = "INFO"
    MINOR = "MINOR"
    MAJOR = "MAJOR"
    CRITICAL = "CRITICAL"
    BLOCKER = "BLOCKER"


@dataclass(frozen=True)
class Issue:
    """Issue raised by an analysis.

    ``file`` is absolute (joined with the project base directory) and is
    ``None`` when the issue is not attached to a file component.
    """

    key: str
    rule_key: str
    component_key: str
    message: str
    severity: Severity
    file: Path | None = None
    line: int | None = None
    new: bool = True
