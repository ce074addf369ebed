"""Configuration models, filled by the TOML loader."""

from pydantic import BaseModel, ConfigDict, Field


class SonarConfig(BaseModel):
    """SonarQube server connection."""

    url: str = "http://localhost:9000"
    # Token or user name. A token goes here with an empty password.
    login: str = ""
    password: str = ""
    timeout: int = 30

    model_config = ConfigDict(extra="ignore")

    @property
    def credentials(self) -> tuple[str, str] | None:
        """Basic-auth pair, or None when no login is configured."""
        if not self.login:
            return None
        return self.login, self.password


class QueryConfig(BaseModel):
    """Polling budget while the Compute Engine processes the report."""

    max_retry: int = Field(default=50, ge=1)
    wait_ms: int = Field(default=1000, ge=0)


class AnalysisConfig(BaseModel):
    """Where the scanner left its files and which branch was analysed."""

    ref_name: str | None = None  # blank = no branch filter
    work_dir: str = "."  # holds report-task.txt
    project_base_dir: str = "."
    resolve_concurrency: int = Field(default=8, ge=1)

    @property
    def branch(self) -> str | None:
        if self.ref_name is None or not self.ref_name.strip():
            return None
        return self.ref_name.strip()


class AppConfig(BaseModel):
    """Full application configuration."""

    sonar: SonarConfig = SonarConfig()
    query: QueryConfig = QueryConfig()
    analysis: AnalysisConfig = AnalysisConfig()
    log_level: str = "INFO"
    # Log file: path relative to cwd or absolute. Empty = only stdout. Rotation when file exceeds max_mb.
    log_file: str = ""
    log_rotation_max_mb: int = 5
    log_rotation_backups: int = 3
