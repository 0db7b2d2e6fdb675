"""Typed configuration loading and access.

Two sources feed the release tooling:

- `reltools.toml` (optional) for repository slugs and message settings.
- Environment flags (`RELTOOLS_SECURITY`, `RELTOOLS_DRY_RUN`) that select how
  a run behaves. They are read once into `RuntimeFlags` by the CLI and passed
  down explicitly; nothing below the CLI looks at the environment.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_int, get_str, get_table

__all__ = [
    "Config",
    "ConfigError",
    "GithubConfig",
    "ReleaseConfig",
    "RuntimeFlags",
    "DEFAULT_CONFIG_PATH",
    "DEFAULT_SECURITY_VERSIONS",
    "config_path_from_env",
    "load_config",
    "load_config_or_default",
]

DEFAULT_CONFIG_PATH = Path("reltools.toml")
DEFAULT_SECURITY_VERSIONS = 3

ENV_CONFIG = "RELTOOLS_CONFIG"
ENV_SECURITY = "RELTOOLS_SECURITY"
ENV_DRY_RUN = "RELTOOLS_DRY_RUN"

_TRUTHY = frozenset({"1", "true", "yes", "on"})


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class GithubConfig:
    """Repositories that comments and catalog lookups go to."""

    repo: str | None = None  # owner/name
    # Security releases are prepared in a private mirror.
    security_repo: str | None = None


@dataclass(frozen=True, slots=True)
class ReleaseConfig:
    # None keeps the notifier's built-in documentation link.
    docs_url: str | None = None
    security_versions: int = DEFAULT_SECURITY_VERSIONS


@dataclass(frozen=True, slots=True)
class RuntimeFlags:
    """Process-wide switches, captured once at startup."""

    security: bool = False
    dry_run: bool = False

    @classmethod
    def from_env(cls, environ: Mapping[str, str]) -> RuntimeFlags:
        return cls(
            security=_is_truthy(environ.get(ENV_SECURITY)),
            dry_run=_is_truthy(environ.get(ENV_DRY_RUN)),
        )


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    github: GithubConfig = field(default_factory=GithubConfig)
    release: ReleaseConfig = field(default_factory=ReleaseConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML)."""
        github: StrDict = get_table(data, "github") or {}
        release: StrDict = get_table(data, "release") or {}

        security_versions = get_int(release, "security_versions")
        if security_versions is not None and security_versions < 1:
            raise ValueError(f"release.security_versions must be >= 1, got {security_versions}")

        return cls(
            github=GithubConfig(
                repo=get_str(github, "repo"),
                security_repo=get_str(github, "security_repo"),
            ),
            release=ReleaseConfig(
                docs_url=get_str(release, "docs_url") or None,
                security_versions=security_versions or DEFAULT_SECURITY_VERSIONS,
            ),
        )

    def comment_repo(self, flags: RuntimeFlags) -> str | None:
        """Repository that receives comments for this run."""
        if flags.security and self.github.security_repo:
            return self.github.security_repo
        return self.github.repo


def _is_truthy(value: str | None) -> bool:
    if value is None:
        return False
    return value.strip().lower() in _TRUTHY


def config_path_from_env(environ: Mapping[str, str]) -> Path:
    override = environ.get(ENV_CONFIG)
    if override:
        return Path(override).expanduser()
    return DEFAULT_CONFIG_PATH


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file."""
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(path: Path) -> Result[Config, ConfigError]:
    """Like load_config, but a missing file yields the default Config.

    A file that exists but is broken is still an error.
    """
    if not path.exists():
        return Ok(Config())
    return load_config(path)
