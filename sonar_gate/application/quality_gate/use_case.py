"""Quality gate use case - orchestrates task wait, gate evaluation and issue fetch."""

from collections.abc import Iterable
from pathlib import Path

import structlog

from sonar_gate.domain.entities.issue import Issue
from sonar_gate.domain.entities.quality_gate import QualityGate
from sonar_gate.domain.entities.rule import Rule
from sonar_gate.domain.ports.config import AnalysisConfig, QueryConfig
from sonar_gate.infrastructure.sonar.issues import IssueResolver
from sonar_gate.infrastructure.sonar.quality_gate import QualityGateEvaluator, log_quality_gate
from sonar_gate.infrastructure.sonar.report_task import ReportTask, read_report_task
from sonar_gate.infrastructure.sonar.rules import RuleResolver
from sonar_gate.infrastructure.sonar.task_poller import TaskPoller

log = structlog.get_logger()


class QualityGateUseCase:
    """Reads report-task.txt and answers for the analysis it points to."""

    def __init__(
        self,
        query: QueryConfig,
        analysis: AnalysisConfig,
        poller: TaskPoller,
        evaluator: QualityGateEvaluator,
        issues: IssueResolver,
        rules: RuleResolver,
    ) -> None:
        self._query = query
        self._analysis = analysis
        self._poller = poller
        self._evaluator = evaluator
        self._issues = issues
        self._rules = rules

    def _report_task(self) -> ReportTask:
        return read_report_task(Path(self._analysis.work_dir))

    async def load_quality_gate(self) -> QualityGate:
        """Wait for the submitted analysis and return its quality gate."""
        report_task = self._report_task()
        log.info(
            "report_task_loaded",
            project_key=report_task.project_key,
            ce_task_id=report_task.ce_task_id,
            server_url=report_task.server_url,
        )
        analysis_id = await self._poller.wait_for_analysis(
            report_task.ce_task_id,
            self._query.max_retry,
            self._query.wait_ms,
        )
        quality_gate = await self._evaluator.evaluate(analysis_id)
        log_quality_gate(quality_gate)
        return quality_gate

    async def get_new_issues(self) -> list[Issue]:
        """Unresolved issues of the reported project on the configured branch."""
        report_task = self._report_task()
        issues = await self._issues.fetch_new_issues(report_task.project_key, self._analysis.branch)
        log.info("issues_fetched", project=report_task.project_key, branch=self._analysis.branch, count=len(issues))
        return issues

    async def get_rule(self, rule_key: str) -> Rule:
        return await self._rules.get_rule(rule_key)

    async def get_rules_for(self, issues: Iterable[Issue]) -> dict[str, Rule]:
        """Rule of every distinct rule key in ``issues``, in first-seen order."""
        rules: dict[str, Rule] = {}
        for issue in issues:
            if issue.rule_key not in rules:
                rules[issue.rule_key] = await self._rules.get_rule(issue.rule_key)
        return rules
