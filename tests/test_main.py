"""Tests for the sonar-gate command line entry point."""

import pytest

from sonar_gate.container import Container
from sonar_gate.domain.entities.quality_gate import QualityGateStatus
from sonar_gate.domain.ports.config import AnalysisConfig, AppConfig, QueryConfig, SonarConfig
from sonar_gate.main import (
    EXIT_ERROR,
    EXIT_GATE_FAILED,
    EXIT_OK,
    apply_cli_overrides,
    build_parser,
    exit_code_for,
    run,
)
from tests.conftest import SONAR_URL, task_body


@pytest.fixture
def config(tmp_path):
    (tmp_path / "report-task.txt").write_text("projectKey=p\nceTaskId=TASK-1\n", encoding="utf-8")
    return AppConfig(
        sonar=SonarConfig(url=SONAR_URL),
        query=QueryConfig(max_retry=2, wait_ms=0),
        analysis=AnalysisConfig(work_dir=str(tmp_path)),
    )


class TestCliOverrides:
    def test_overrides_analysis(self):
        args = build_parser().parse_args(["--work-dir", "w", "--base-dir", "/b", "--branch", "main"])

        config = apply_cli_overrides(AppConfig(), args)

        assert config.analysis.work_dir == "w"
        assert config.analysis.project_base_dir == "/b"
        assert config.analysis.branch == "main"

    def test_no_overrides_keeps_config(self):
        original = AppConfig()

        assert apply_cli_overrides(original, build_parser().parse_args([])) is original


@pytest.mark.parametrize(
    ("status", "code"),
    [
        (QualityGateStatus.OK, EXIT_OK),
        (QualityGateStatus.WARN, EXIT_OK),
        (QualityGateStatus.NONE, EXIT_OK),
        (None, EXIT_OK),
        (QualityGateStatus.ERROR, EXIT_GATE_FAILED),
    ],
)
def test_exit_code_for(status, code):
    assert exit_code_for(status) == code


class TestRun:
    @pytest.mark.asyncio
    async def test_failed_gate(self, fake_sonar, config):
        fake_sonar.route("api/ce/task", task_body("SUCCESS", "AN-1"))
        fake_sonar.route("api/qualitygates/project_status", {"projectStatus": {"status": "ERROR"}})

        code = await run(Container(config, transport=fake_sonar.transport), fetch_issues=False, resolve_rules=False)

        assert code == EXIT_GATE_FAILED
        assert fake_sonar.calls("api/issues/search") == []

    @pytest.mark.asyncio
    async def test_with_issues_and_rules(self, fake_sonar, config):
        fake_sonar.route("api/ce/task", task_body("SUCCESS", "AN-1"))
        fake_sonar.route("api/qualitygates/project_status", {"projectStatus": {"status": "OK"}})
        fake_sonar.route(
            "api/issues/search",
            {
                "total": 1,
                "ps": 100,
                "issues": [{"key": "I1", "rule": "r:1", "component": "p", "severity": "INFO"}],
                "components": [],
            },
        )
        fake_sonar.route("api/rules/show", {"rule": {"key": "r:1"}})

        code = await run(Container(config, transport=fake_sonar.transport), fetch_issues=False, resolve_rules=True)

        assert code == EXIT_OK
        assert len(fake_sonar.calls("api/issues/search")) == 1
        assert len(fake_sonar.calls("api/rules/show")) == 1

    @pytest.mark.asyncio
    async def test_task_failure_is_error_exit(self, fake_sonar, config):
        fake_sonar.route("api/ce/task", task_body("FAILED"))

        code = await run(Container(config, transport=fake_sonar.transport), fetch_issues=True, resolve_rules=False)

        assert code == EXIT_ERROR
