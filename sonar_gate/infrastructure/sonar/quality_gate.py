"""Quality gate evaluation for a finished analysis."""

import structlog

from sonar_gate.domain.entities.quality_gate import Condition, QualityGate, QualityGateStatus
from sonar_gate.domain.services.metric_catalog import get_metric_name
from sonar_gate.infrastructure.sonar.schemas import ProjectStatus, ProjectStatusResponse, WsCondition
from sonar_gate.infrastructure.sonar.ws_client import SonarWsClient

log = structlog.get_logger()

_COMPARATOR_SYMBOLS = {
    "GT": ">",
    "LT": "<",
    "EQ": "=",
    "NE": "!=",
}


def comparator_symbol(comparator: str | None) -> str:
    """Symbol for a condition comparator; empty when there is none."""
    if comparator is None:
        return ""
    return _COMPARATOR_SYMBOLS.get(comparator, comparator)


def to_condition(condition: WsCondition) -> Condition:
    return Condition(
        metric_key=condition.metric_key,
        metric_name=get_metric_name(condition.metric_key),
        symbol=comparator_symbol(condition.comparator),
        actual=condition.actual_value,
        warning=condition.warning_threshold,
        error=condition.error_threshold,
        status=condition.status,
    )


def to_quality_gate(project_status: ProjectStatus) -> QualityGate:
    return QualityGate(
        status=project_status.status,
        conditions=tuple(to_condition(c) for c in project_status.conditions),
    )


def log_quality_gate(quality_gate: QualityGate) -> None:
    """Log the verdict, then each condition at a level matching its status."""
    status = quality_gate.status.value if quality_gate.status else None
    log.info("quality_gate_status", status=status)
    for condition in quality_gate.conditions:
        if condition.status == QualityGateStatus.OK:
            log.info("quality_gate_condition", metric=condition.metric_name, actual=condition.actual)
        elif condition.status == QualityGateStatus.WARN:
            log.warning(
                "quality_gate_condition",
                metric=condition.metric_name,
                actual=condition.actual,
                symbol=condition.symbol,
                threshold=condition.warning,
            )
        elif condition.status == QualityGateStatus.ERROR:
            log.error(
                "quality_gate_condition",
                metric=condition.metric_name,
                actual=condition.actual,
                symbol=condition.symbol,
                threshold=condition.error,
            )


class QualityGateEvaluator:
    """Fetches and normalises the quality gate verdict of an analysis."""

    def __init__(self, ws: SonarWsClient) -> None:
        self._ws = ws

    async def evaluate(self, analysis_id: str) -> QualityGate:
        """One remote call, no retry; any failure propagates."""
        log.debug("quality_gate_request", analysis_id=analysis_id)
        response = await self._ws.call(
            "api/qualitygates/project_status",
            {"analysisId": analysis_id},
            ProjectStatusResponse,
        )
        return to_quality_gate(response.project_status)
