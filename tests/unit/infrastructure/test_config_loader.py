"""Tests for TOML config loader."""

import tempfile
from pathlib import Path

import pytest
from pydantic import ValidationError

from sonar_gate.infrastructure.config.toml_loader import _apply_env_overrides, load_config


class TestLoadConfig:
    """Tests for load_config function."""

    def test_loads_default_config(self):
        """Loads the shipped config/default.toml."""
        config = load_config()

        assert config.sonar.url == "http://localhost:9000"
        assert config.query.max_retry == 50
        assert config.query.wait_ms == 1000
        assert config.analysis.work_dir == ".scannerwork"
        assert config.analysis.branch is None

    def test_loads_from_custom_dir(self):
        """Loads config from custom directory."""
        with tempfile.TemporaryDirectory() as tmpdir:
            (Path(tmpdir) / "default.toml").write_text("""
[sonar]
url = "https://sonar.example.com"
login = "squ_token"

[query]
max_retry = 5
wait_ms = 250

[analysis]
ref_name = "develop"
""")
            config = load_config(Path(tmpdir))

            assert config.sonar.url == "https://sonar.example.com"
            assert config.sonar.credentials == ("squ_token", "")
            assert config.query.max_retry == 5
            assert config.query.wait_ms == 250
            assert config.analysis.branch == "develop"

    def test_merges_development_config(self):
        """Merges development.toml over default.toml."""
        with tempfile.TemporaryDirectory() as tmpdir:
            (Path(tmpdir) / "default.toml").write_text("""
[query]
max_retry = 50
wait_ms = 1000
""")
            (Path(tmpdir) / "development.toml").write_text("""
[query]
max_retry = 3
""")
            config = load_config(Path(tmpdir))

            assert config.query.max_retry == 3
            assert config.query.wait_ms == 1000

    def test_handles_missing_files(self):
        """Empty directory means built-in defaults."""
        with tempfile.TemporaryDirectory() as tmpdir:
            config = load_config(Path(tmpdir))

            assert config.analysis.work_dir == "."
            assert config.log_level == "INFO"

    def test_rejects_zero_retry(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            (Path(tmpdir) / "default.toml").write_text("[query]\nmax_retry = 0\n")

            with pytest.raises(ValidationError):
                load_config(Path(tmpdir))

    def test_blank_ref_name_is_no_branch(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            (Path(tmpdir) / "default.toml").write_text('[analysis]\nref_name = "  "\n')

            assert load_config(Path(tmpdir)).analysis.branch is None


class TestApplyEnvOverrides:
    """Tests for _apply_env_overrides function."""

    def test_sonar_overrides(self, monkeypatch):
        monkeypatch.setenv("SONAR_HOST_URL", "https://ci-sonar:9000")
        monkeypatch.setenv("SONAR_TOKEN", "squ_abc")

        result = _apply_env_overrides({})

        assert result["sonar"]["url"] == "https://ci-sonar:9000"
        assert result["sonar"]["login"] == "squ_abc"

    def test_query_overrides(self, monkeypatch):
        monkeypatch.setenv("SONAR_QUERY_MAX_RETRY", "7")
        monkeypatch.setenv("SONAR_QUERY_WAIT", "2000")

        result = _apply_env_overrides({})

        assert result["query"] == {"max_retry": 7, "wait_ms": 2000}

    def test_invalid_int_ignored(self, monkeypatch):
        monkeypatch.setenv("SONAR_QUERY_MAX_RETRY", "lots")

        result = _apply_env_overrides({"query": {"max_retry": 50}})

        assert result["query"]["max_retry"] == 50

    def test_analysis_overrides(self, monkeypatch):
        monkeypatch.setenv("SONAR_REF_NAME", "feature/login")
        monkeypatch.setenv("SONAR_WORK_DIR", "build/sonar")
        monkeypatch.setenv("SONAR_PROJECT_BASE_DIR", "/builds/acme/shop")

        result = _apply_env_overrides({})

        assert result["analysis"] == {
            "ref_name": "feature/login",
            "work_dir": "build/sonar",
            "project_base_dir": "/builds/acme/shop",
        }

    def test_log_level_override(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")

        result = _apply_env_overrides({})

        assert result["logging"]["level"] == "DEBUG"
