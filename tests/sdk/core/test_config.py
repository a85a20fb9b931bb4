"""
Tests for secretenv.sdk.core.config.

This module tests:
- Locating and loading the YAML configuration file
- Validation of environments and $secret values
- Resolver construction from settings
- The published JSON schema
"""

from pathlib import Path

import pytest
import yaml

from secretenv.sdk.core.config import (
    CONFIG_ENV_VAR,
    SecretEnvConfigModel,
    find_config_file,
    json_schema,
    load_config,
    parse_config,
)
from secretenv.sdk.secrets import DEFAULT_TIMEOUT, PlainValue, SecretReference, SecretValue

SAMPLE_CONFIG = {
    "resolver": {"timeout": 45},
    "environments": {
        "github": {
            "GITHUB_TOKEN": {
                "$secret": {"provider": "1password", "reference": "op://Private/GitHub/token"}
            },
            "LOG_LEVEL": "debug",
        },
        "db": {
            "PGPASSWORD": {"$secret": {"provider": "pass", "reference": "db/prod"}},
        },
    },
}


def write_config(path: Path, data) -> Path:
    with open(path, "w") as f:
        yaml.safe_dump(data, f)
    return path


@pytest.fixture
def isolated_home(tmp_path, monkeypatch):
    """Point HOME and the working directory at empty temp dirs."""
    home = tmp_path / "home"
    work = tmp_path / "work"
    home.mkdir()
    work.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    monkeypatch.chdir(work)
    return home, work


class TestLoadConfig:
    """Loading configuration files."""

    def test_load_explicit_path(self, tmp_path):
        config = load_config(write_config(tmp_path / "config.yaml", SAMPLE_CONFIG))

        assert config.resolver.timeout == 45
        assert set(config.environments) == {"github", "db"}

        github = config.get_environment("github")
        assert github["LOG_LEVEL"] == PlainValue(value="debug")
        assert github["GITHUB_TOKEN"] == SecretValue(
            secret=SecretReference(provider="1password", reference="op://Private/GitHub/token")
        )

    def test_environment_key_order_is_preserved(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("environments:\n  app:\n    ZED: z\n    ALPHA: a\n    MID: m\n")
        config = load_config(path)
        assert list(config.get_environment("app")) == ["ZED", "ALPHA", "MID"]

    def test_missing_explicit_path(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.yaml")

    def test_env_var_path(self, tmp_path, monkeypatch):
        path = write_config(tmp_path / "from-env.yaml", SAMPLE_CONFIG)
        monkeypatch.setenv(CONFIG_ENV_VAR, str(path))

        assert find_config_file() == path
        assert "github" in load_config().environments

    def test_home_config(self, isolated_home):
        home, _ = isolated_home
        (home / ".secretenv").mkdir()
        path = write_config(home / ".secretenv" / "config.yaml", SAMPLE_CONFIG)

        assert find_config_file() == path

    def test_working_directory_config(self, isolated_home):
        _, work = isolated_home
        path = write_config(work / "secretenv.yaml", SAMPLE_CONFIG)

        assert find_config_file() == path

    def test_no_config_file(self, isolated_home):
        assert find_config_file() is None
        config = load_config()
        assert config.environments == {}
        assert config.resolver.timeout == DEFAULT_TIMEOUT

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(path).environments == {}

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("environments: [unclosed\n")
        with pytest.raises(ValueError, match="Failed to parse YAML"):
            load_config(path)

    def test_invalid_env_value(self, tmp_path):
        path = write_config(tmp_path / "bad.yaml", {"environments": {"app": {"PORT": 8080}}})
        with pytest.raises(ValueError, match="Invalid config"):
            load_config(path)

    def test_unknown_top_level_key(self, tmp_path):
        path = write_config(tmp_path / "bad.yaml", {"vault": {"enabled": True}})
        with pytest.raises(ValueError, match="Invalid config"):
            load_config(path)

    def test_non_mapping_document(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ValueError, match="Config must be a mapping"):
            load_config(path)

    def test_unknown_provider_is_accepted_at_load_time(self):
        # Unknown providers fail at resolution time, with the key reported there
        config = parse_config(
            {"environments": {"app": {"X": {"$secret": {"provider": "vault", "reference": "y"}}}}}
        )
        assert config.get_environment("app")["X"].as_secret().provider == "vault"


class TestSettings:
    def test_null_timeout_disables(self):
        config = parse_config({"resolver": {"timeout": None}})
        assert config.resolver.timeout is None
        assert config.create_resolver().timeout is None

    def test_timeout_must_be_positive(self):
        with pytest.raises(ValueError):
            parse_config({"resolver": {"timeout": 0}})

    def test_create_resolver_uses_timeout(self):
        resolver = parse_config(SAMPLE_CONFIG).create_resolver()
        assert resolver.timeout == 45

    def test_unknown_environment(self):
        config = parse_config(SAMPLE_CONFIG)
        with pytest.raises(KeyError, match="Unknown environment 'nope'"):
            config.get_environment("nope")


class TestJsonSchema:
    def test_schema_describes_secret_form(self):
        schema = json_schema()
        assert schema["title"] == SecretEnvConfigModel.__name__
        assert "$secret" in str(schema)
        assert "1password" in str(schema)
        assert "environments" in schema["properties"]
