"""Tests for reltools.core.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from reltools.core.config import (
    Config,
    GithubConfig,
    RuntimeFlags,
    config_path_from_env,
    load_config,
    load_config_or_default,
)
from reltools.core.result import Err, Ok


class TestConfigDefaults:
    def test_defaults(self) -> None:
        config = Config()
        assert config.github.repo is None
        assert config.github.security_repo is None
        assert config.release.docs_url is None
        assert config.release.security_versions == 3

    def test_frozen(self) -> None:
        config = Config()
        with pytest.raises(AttributeError):
            config.github = GithubConfig(repo="x/y")  # type: ignore[misc]


class TestFromDict:
    def test_full(self) -> None:
        config = Config.from_dict(
            {
                "github": {"repo": "acme/app", "security_repo": "acme/app-security"},
                "release": {"docs_url": "https://docs/x", "security_versions": 2},
            }
        )
        assert config.github.repo == "acme/app"
        assert config.github.security_repo == "acme/app-security"
        assert config.release.docs_url == "https://docs/x"
        assert config.release.security_versions == 2

    def test_empty(self) -> None:
        assert Config.from_dict({}) == Config()

    def test_ignores_wrong_types(self) -> None:
        config = Config.from_dict({"github": {"repo": 42}, "release": {"security_versions": True}})
        assert config.github.repo is None
        assert config.release.security_versions == 3

    def test_rejects_zero_series(self) -> None:
        with pytest.raises(ValueError):
            Config.from_dict({"release": {"security_versions": 0}})


class TestCommentRepo:
    def test_regular(self) -> None:
        config = Config(github=GithubConfig(repo="acme/app", security_repo="acme/sec"))
        assert config.comment_repo(RuntimeFlags()) == "acme/app"

    def test_security(self) -> None:
        config = Config(github=GithubConfig(repo="acme/app", security_repo="acme/sec"))
        assert config.comment_repo(RuntimeFlags(security=True)) == "acme/sec"

    def test_security_without_mirror(self) -> None:
        config = Config(github=GithubConfig(repo="acme/app"))
        assert config.comment_repo(RuntimeFlags(security=True)) == "acme/app"


class TestRuntimeFlags:
    def test_from_env(self) -> None:
        flags = RuntimeFlags.from_env({"RELTOOLS_SECURITY": "true", "RELTOOLS_DRY_RUN": "1"})
        assert flags == RuntimeFlags(security=True, dry_run=True)

    @pytest.mark.parametrize("value", ["", "0", "false", "no", "off"])
    def test_falsy(self, value: str) -> None:
        assert not RuntimeFlags.from_env({"RELTOOLS_DRY_RUN": value}).dry_run

    def test_missing(self) -> None:
        assert RuntimeFlags.from_env({}) == RuntimeFlags()


def test_config_path_from_env() -> None:
    assert config_path_from_env({}) == Path("reltools.toml")
    assert config_path_from_env({"RELTOOLS_CONFIG": "/etc/rt.toml"}) == Path("/etc/rt.toml")


class TestLoadConfig:
    def test_valid(self, tmp_path: Path) -> None:
        path = tmp_path / "reltools.toml"
        path.write_text('[github]\nrepo = "acme/app"\n', encoding="utf-8")

        result = load_config(path)

        assert isinstance(result, Ok)
        assert result.value.github.repo == "acme/app"

    def test_missing_file(self, tmp_path: Path) -> None:
        result = load_config(tmp_path / "nope.toml")
        assert isinstance(result, Err)
        assert "not found" in result.error.message

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "reltools.toml"
        path.write_text("[github\n", encoding="utf-8")

        result = load_config(path)

        assert isinstance(result, Err)
        assert "Invalid TOML" in result.error.message

    def test_invalid_structure(self, tmp_path: Path) -> None:
        path = tmp_path / "reltools.toml"
        path.write_text("[release]\nsecurity_versions = -1\n", encoding="utf-8")

        result = load_config(path)

        assert isinstance(result, Err)
        assert "Invalid config structure" in result.error.message

    def test_or_default_missing(self, tmp_path: Path) -> None:
        assert load_config_or_default(tmp_path / "nope.toml") == Ok(Config())

    def test_or_default_broken(self, tmp_path: Path) -> None:
        path = tmp_path / "reltools.toml"
        path.write_text("not toml [", encoding="utf-8")
        assert isinstance(load_config_or_default(path), Err)
