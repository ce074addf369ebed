"""TOML configuration loader with env overrides."""

import logging
import os
import tomllib
from pathlib import Path

from sonar_gate.domain.ports.config import (
    AnalysisConfig,
    AppConfig,
    QueryConfig,
    SonarConfig,
)

logger = logging.getLogger(__name__)


def _load_toml(path: Path) -> dict:
    """Load TOML file."""
    with open(path, "rb") as f:
        return tomllib.load(f)


def _set_int(config: dict, section: str, key: str, env_name: str) -> None:
    """Copy an integer env var into config, ignoring unparsable values."""
    raw = os.getenv(env_name)
    if not raw:
        return
    try:
        config.setdefault(section, {})[key] = int(raw)
    except ValueError:
        logger.warning("Invalid %s env value: %r, ignoring", env_name, raw)


def _apply_env_overrides(config: dict) -> dict:
    """Apply environment variable overrides."""
    if url := os.getenv("SONAR_HOST_URL"):
        config.setdefault("sonar", {})["url"] = url.strip()
    if login := os.getenv("SONAR_LOGIN") or os.getenv("SONAR_TOKEN"):
        config.setdefault("sonar", {})["login"] = login.strip()
    if password := os.getenv("SONAR_PASSWORD"):
        config.setdefault("sonar", {})["password"] = password
    _set_int(config, "query", "max_retry", "SONAR_QUERY_MAX_RETRY")
    _set_int(config, "query", "wait_ms", "SONAR_QUERY_WAIT")
    if ref_name := os.getenv("SONAR_REF_NAME"):
        config.setdefault("analysis", {})["ref_name"] = ref_name.strip()
    if work_dir := os.getenv("SONAR_WORK_DIR"):
        config.setdefault("analysis", {})["work_dir"] = work_dir.strip()
    if base_dir := os.getenv("SONAR_PROJECT_BASE_DIR"):
        config.setdefault("analysis", {})["project_base_dir"] = base_dir.strip()
    if level := os.getenv("LOG_LEVEL"):
        config.setdefault("logging", {})["level"] = level.upper()
    if path := os.getenv("LOG_FILE"):
        config.setdefault("logging", {})["file"] = path.strip()
    return config


def load_config(config_dir: Path | None = None) -> AppConfig:
    """Load configuration from TOML files with env overrides.

    Loads default.toml, then development.toml if exists.
    """
    if config_dir is None:
        config_dir = Path(__file__).resolve().parent.parent.parent.parent / "config"

    config: dict = {}

    default_path = config_dir / "default.toml"
    if default_path.exists():
        config = _load_toml(default_path)

    dev_path = config_dir / "development.toml"
    if dev_path.exists():
        dev_config = _load_toml(dev_path)
        for key, value in dev_config.items():
            if isinstance(value, dict) and key in config and isinstance(config[key], dict):
                config[key] = {**config[key], **value}
            else:
                config[key] = value

    config = _apply_env_overrides(config)

    sonar = SonarConfig(**(config.get("sonar") or {}))
    query = QueryConfig(**(config.get("query") or {}))
    analysis = AnalysisConfig(**(config.get("analysis") or {}))
    logging_raw = config.get("logging") or {}
    log_level = logging_raw.get("level", "INFO")
    log_file = (logging_raw.get("file") or "").strip()
    log_rotation_max_mb = int(logging_raw.get("log_rotation_max_mb", 5))
    log_rotation_backups = int(logging_raw.get("log_rotation_backups", 3))

    return AppConfig(
        sonar=sonar,
        query=query,
        analysis=analysis,
        log_level=log_level,
        log_file=log_file,
        log_rotation_max_mb=log_rotation_max_mb,
        log_rotation_backups=log_rotation_backups,
    )
