"""Response schemas of the SonarQube web services used here.

Only the fields this client reads are declared; everything else in the
payload is ignored. Enumerated fields use the domain enums, so an unknown
severity or rule type fails decoding.
"""

from pydantic import BaseModel, ConfigDict, Field

from sonar_gate.domain.entities.issue import Severity
from sonar_gate.domain.entities.quality_gate import QualityGateStatus
from sonar_gate.domain.entities.rule import RuleType


class _WsModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


# api/ce/task


class CeTask(_WsModel):
    id: str
    status: str
    analysis_id: str | None = Field(default=None, alias="analysisId")
    component_key: str | None = Field(default=None, alias="componentKey")
    error_message: str | None = Field(default=None, alias="errorMessage")


class TaskResponse(_WsModel):
    task: CeTask


# api/qualitygates/project_status


class WsCondition(_WsModel):
    status: QualityGateStatus | None = None
    metric_key: str = Field(alias="metricKey")
    comparator: str | None = None
    warning_threshold: str | None = Field(default=None, alias="warningThreshold")
    error_threshold: str | None = Field(default=None, alias="errorThreshold")
    actual_value: str | None = Field(default=None, alias="actualValue")


class ProjectStatus(_WsModel):
    status: QualityGateStatus | None = None
    conditions: list[WsCondition] = []


class ProjectStatusResponse(_WsModel):
    project_status: ProjectStatus = Field(alias="projectStatus")


# api/issues/search


class WsIssue(_WsModel):
    key: str
    rule: str
    component: str
    severity: Severity
    message: str = ""
    line: int | None = None


class WsIssueComponent(_WsModel):
    key: str
    qualifier: str | None = None
    path: str | None = None


class Paging(_WsModel):
    page_index: int = Field(default=1, alias="pageIndex")
    page_size: int = Field(default=100, alias="pageSize")
    total: int = 0


class IssueSearchResponse(_WsModel):
    # Older servers send total/p/ps at top level, newer ones only "paging".
    total: int | None = None
    p: int | None = None
    ps: int | None = None
    paging: Paging | None = None
    issues: list[WsIssue] = []
    components: list[WsIssueComponent] = []

    @property
    def total_issues(self) -> int:
        if self.total is not None:
            return self.total
        return self.paging.total if self.paging else 0

    @property
    def page_size(self) -> int:
        if self.ps is not None:
            return self.ps
        return self.paging.page_size if self.paging else 0


# api/components/show


class WsComponent(_WsModel):
    key: str
    qualifier: str | None = None
    path: str | None = None
    name: str | None = None


class ComponentShowResponse(_WsModel):
    component: WsComponent | None = None
    ancestors: list[WsComponent] = []


# api/rules/show


class WsRule(_WsModel):
    key: str | None = None
    repo: str | None = None
    name: str | None = None
    md_desc: str | None = Field(default=None, alias="mdDesc")
    type: RuleType | None = None
    debt_rem_fn_type: str | None = Field(default=None, alias="debtRemFnType")
    rem_fn_base_effort: str | None = Field(default=None, alias="remFnBaseEffort")


class RuleShowResponse(_WsModel):
    rule: WsRule | None = None
