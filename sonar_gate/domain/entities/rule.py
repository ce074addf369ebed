"""Rule entities."""

from dataclasses import dataclass
from enum import Enum


class RuleType(str, Enum):
    """Kind of problem a rule detects."""

    CODE_SMELL = "CODE_SMELL"
    BUG = "BUG"
    VULNERABILITY = "VULNERABILITY"
    SECURITY_HOTSPOT = "SECURITY_HOTSPOT"


@dataclass(frozen=True)
class Rule:
    """Rule metadata. All fields are empty when the server returned no rule."""

    key: str | None = None
    repo: str | None = None
    name: str | None = None
    description: str | None = None
    type: RuleType | None = None
    debt_rem_fn_type: str | None = None
    debt_rem_fn_base_effort: str | None = None
