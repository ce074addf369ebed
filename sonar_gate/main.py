"""Command line entry point: wait for the analysis, check its quality gate."""

import argparse
import asyncio
import sys
from pathlib import Path

import httpx
import structlog

from sonar_gate.container import Container
from sonar_gate.domain.entities.quality_gate import QualityGateStatus
from sonar_gate.domain.ports.config import AppConfig
from sonar_gate.infrastructure.config import load_config
from sonar_gate.infrastructure.sonar.errors import SonarGateError
from sonar_gate.shared.logging import setup_logging

log = structlog.get_logger()

EXIT_OK = 0
EXIT_GATE_FAILED = 1
EXIT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sonar-gate",
        description="Wait for a SonarQube analysis and report its quality gate and new issues.",
    )
    parser.add_argument("--config-dir", type=Path, default=None, help="Directory with default.toml")
    parser.add_argument("--work-dir", default=None, help="Directory containing report-task.txt")
    parser.add_argument("--base-dir", default=None, help="Project base directory for issue paths")
    parser.add_argument("--branch", default=None, help="Branch the analysis ran on")
    parser.add_argument("--issues", action="store_true", help="Also fetch new issues")
    parser.add_argument("--rules", action="store_true", help="Resolve rules of new issues (implies --issues)")
    return parser


def apply_cli_overrides(config: AppConfig, args: argparse.Namespace) -> AppConfig:
    """Return config with command line values taking precedence."""
    analysis = {}
    if args.work_dir:
        analysis["work_dir"] = args.work_dir
    if args.base_dir:
        analysis["project_base_dir"] = args.base_dir
    if args.branch:
        analysis["ref_name"] = args.branch
    if not analysis:
        return config
    return config.model_copy(update={"analysis": config.analysis.model_copy(update=analysis)})


def exit_code_for(status: QualityGateStatus | None) -> int:
    return EXIT_GATE_FAILED if status == QualityGateStatus.ERROR else EXIT_OK


async def run(container: Container, fetch_issues: bool, resolve_rules: bool) -> int:
    use_case = container.use_case
    try:
        quality_gate = await use_case.load_quality_gate()
        if fetch_issues or resolve_rules:
            issues = await use_case.get_new_issues()
            for issue in issues:
                log.info(
                    "new_issue",
                    key=issue.key,
                    rule=issue.rule_key,
                    severity=issue.severity.value,
                    file=str(issue.file) if issue.file else None,
                    line=issue.line,
                    message=issue.message,
                )
            if resolve_rules:
                rules = await use_case.get_rules_for(issues)
                for key, rule in rules.items():
                    log.info("rule", key=key, name=rule.name, type=rule.type.value if rule.type else None)
    except (SonarGateError, httpx.HTTPError) as e:
        log.error("sonar_gate_failed", error=str(e), error_type=type(e).__name__)
        return EXIT_ERROR
    finally:
        await container.aclose()
    return exit_code_for(quality_gate.status)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    config = apply_cli_overrides(load_config(args.config_dir), args)
    setup_logging(
        level=config.log_level,
        file_path=config.log_file or "",
        rotation_max_mb=config.log_rotation_max_mb,
        rotation_backups=config.log_rotation_backups,
    )
    log.info("sonar_gate_start", sonar_url=config.sonar.url, branch=config.analysis.branch)
    return asyncio.run(run(Container(config), args.issues, args.rules))


if __name__ == "__main__":
    sys.exit(main())
