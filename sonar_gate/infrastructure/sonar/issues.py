"""New issue search with file resolution.

Issues come from ``api/issues/search`` page by page. Each issue on a file
component is mapped to a path under the project base directory; the
component's relative path is only relative to its module, so the module
ancestors from ``api/components/show`` are prepended to it. Resolved paths
are cached per component key for the lifetime of the resolver.
"""

import asyncio
import logging
from functools import partial
from pathlib import Path

from sonar_gate.domain.entities.issue import Issue
from sonar_gate.infrastructure.sonar.cache import AsyncLoadingCache
from sonar_gate.infrastructure.sonar.schemas import (
    ComponentShowResponse,
    IssueSearchResponse,
    WsIssue,
    WsIssueComponent,
)
from sonar_gate.infrastructure.sonar.ws_client import SonarWsClient

logger = logging.getLogger(__name__)

# Server refuses to page past this many results.
MAX_SEARCH_ISSUES = 10_000

# Component qualifiers
FILE = "FIL"
UNIT_TEST_FILE = "UTS"
MODULE = "BRC"

SUPPORTED_QUALIFIERS = frozenset({FILE, UNIT_TEST_FILE})


def compute_page_count(total: int, page_size: int) -> int:
    """Pages to fetch for ``total`` issues, capped at MAX_SEARCH_ISSUES.

    ``page_size + 1`` keeps a zero page size from dividing by zero; the
    trailing ``+ 1`` makes sure a partial last page is still requested.
    """
    nb_page = total // (page_size + 1) + 1
    max_page = MAX_SEARCH_ISSUES // (page_size + 1) + 1
    return min(nb_page, max_page)


def module_relative_path(path: str, ancestors) -> str:
    """Prefix ``path`` with the path of every module ancestor.

    Ancestors are listed innermost first, so each module is inserted in
    front of what is already there: ``outer/inner/path``.
    """
    parts = [path]
    for ancestor in ancestors:
        if ancestor.qualifier == MODULE and ancestor.path:
            parts.insert(0, ancestor.path)
    return "/".join(parts)


def _branch_param(branch: str | None) -> str | None:
    if branch is None or not branch.strip():
        return None
    return branch


class IssueResolver:
    """Fetches unresolved issues of a project and resolves their files."""

    def __init__(
        self,
        ws: SonarWsClient,
        project_base_dir: Path | str,
        concurrency: int = 8,
    ) -> None:
        self._ws = ws
        self._project_base_dir = Path(project_base_dir).resolve()
        self._component_files: AsyncLoadingCache[str, str] = AsyncLoadingCache("component file")
        self._lookups = asyncio.Semaphore(concurrency)

    @property
    def component_files(self) -> AsyncLoadingCache[str, str]:
        return self._component_files

    async def fetch_new_issues(self, project_key: str, branch: str | None = None) -> list[Issue]:
        """All unresolved issues of ``project_key`` (optionally on ``branch``).

        The page count is computed once from the first page's ``total``
        and trusted for the rest of the run.
        """
        branch = _branch_param(branch)
        first = await self._search(project_key, branch, 1)
        page_count = compute_page_count(first.total_issues, first.page_size)
        logger.debug(
            "Issue search for %s: total=%d page_size=%d pages=%d",
            project_key,
            first.total_issues,
            first.page_size,
            page_count,
        )

        issues = await self._to_issues(first, branch)
        for page in range(2, page_count + 1):
            response = await self._search(project_key, branch, page)
            issues.extend(await self._to_issues(response, branch))
        return issues

    async def _search(self, project_key: str, branch: str | None, page: int) -> IssueSearchResponse:
        return await self._ws.call(
            "api/issues/search",
            {"componentKeys": project_key, "p": page, "resolved": False, "branch": branch},
            IssueSearchResponse,
        )

    async def _to_issues(self, response: IssueSearchResponse, branch: str | None) -> list[Issue]:
        files = {c.key: c for c in response.components if c.qualifier in SUPPORTED_QUALIFIERS}
        try:
            async with asyncio.TaskGroup() as group:
                tasks = [
                    group.create_task(self._to_issue(issue, files.get(issue.component), branch))
                    for issue in response.issues
                ]
        except ExceptionGroup as failed:
            # Remaining lookups are cancelled by now.
            raise failed.exceptions[0]
        return [task.result() for task in tasks]

    async def _to_issue(
        self,
        issue: WsIssue,
        component: WsIssueComponent | None,
        branch: str | None,
    ) -> Issue:
        file = None
        if component is not None:
            relative = await self._component_files.get(
                component.key, partial(self._component_path, component, branch)
            )
            file = self._project_base_dir / relative
        return Issue(
            key=issue.key,
            rule_key=issue.rule,
            component_key=issue.component,
            file=file,
            line=issue.line,
            message=issue.message,
            severity=issue.severity,
            new=True,
        )

    async def _component_path(self, component: WsIssueComponent, branch: str | None) -> str:
        async with self._lookups:
            show = await self._ws.call(
                "api/components/show",
                {"component": component.key, "branch": branch},
                ComponentShowResponse,
            )
        path = show.component.path if show.component and show.component.path else component.path
        if not path:
            raise ValueError(f"Component {component.key} has no path")
        return module_relative_path(path, show.ancestors)
