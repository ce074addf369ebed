"""Dependency Injection Container - centralized service management."""

from functools import cached_property

import httpx

from sonar_gate.application.quality_gate.use_case import QualityGateUseCase
from sonar_gate.domain.ports.config import AppConfig
from sonar_gate.infrastructure.config import load_config
from sonar_gate.infrastructure.sonar.issues import IssueResolver
from sonar_gate.infrastructure.sonar.quality_gate import QualityGateEvaluator
from sonar_gate.infrastructure.sonar.rules import RuleResolver
from sonar_gate.infrastructure.sonar.task_poller import TaskPoller
from sonar_gate.infrastructure.sonar.ws_client import SonarWsClient


class Container:
    """Dependency Injection Container with lazy initialization.

    All dependencies are created on first access and cached, so the
    component and rule caches live as long as the container.

    Usage:
        container = Container()
        quality_gate = await container.use_case.load_quality_gate()
        await container.aclose()
    """

    def __init__(
        self,
        config: AppConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize container with optional config and HTTP transport overrides."""
        self._config_override = config
        self._transport = transport

    @cached_property
    def config(self) -> AppConfig:
        """Application configuration."""
        if self._config_override:
            return self._config_override
        return load_config()

    @cached_property
    def ws(self) -> SonarWsClient:
        return SonarWsClient(self.config.sonar, transport=self._transport)

    @cached_property
    def poller(self) -> TaskPoller:
        return TaskPoller(self.ws)

    @cached_property
    def evaluator(self) -> QualityGateEvaluator:
        return QualityGateEvaluator(self.ws)

    @cached_property
    def issues(self) -> IssueResolver:
        return IssueResolver(
            self.ws,
            self.config.analysis.project_base_dir,
            concurrency=self.config.analysis.resolve_concurrency,
        )

    @cached_property
    def rules(self) -> RuleResolver:
        return RuleResolver(self.ws)

    @cached_property
    def use_case(self) -> QualityGateUseCase:
        return QualityGateUseCase(
            query=self.config.query,
            analysis=self.config.analysis,
            poller=self.poller,
            evaluator=self.evaluator,
            issues=self.issues,
            rules=self.rules,
        )

    async def aclose(self) -> None:
        """Close the HTTP client if it was created."""
        if "ws" in self.__dict__:
            await self.ws.aclose()
