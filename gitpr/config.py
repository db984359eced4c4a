"""Configuration loading from YAML and environment.

Credentials are never read from here: they come from the git credential
store on every run.
"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from gitpr.errors import ConfigError

DEFAULT_CONFIG_PATH = Path("~/.config/git-pr/config.yaml")

# Injected by load_config so ${VAR} substitution sees the current env
_current_env: dict[str, str] = {}


class GitHubConfig(BaseSettings):
    """GitHub API settings."""

    model_config = SettingsConfigDict(env_prefix="GITHUB_", extra="ignore")

    api_url: str = Field(default="https://api.github.com", description="API base URL")
    host: str = Field(default="github.com", description="Host asked from git credential fill")
    timeout: float | None = Field(default=None, gt=0, description="Request timeout in seconds; none by default")


class PRConfig(BaseSettings):
    """Pull request defaults."""

    model_config = SettingsConfigDict(env_prefix="GIT_PR_", extra="ignore")

    base: str = Field(default="master", description="Default base branch")
    remote: str = Field(default="origin", description="Remote to fetch from and push to")
    editor: str | None = Field(default=None, description="Editor used when core.editor is unset")
    message_file: str = Field(default="PULLREQ_EDITMSG", description="Edit-message file name inside the git dir")


class LoggingConfig(BaseSettings):
    """Logging settings."""

    model_config = SettingsConfigDict(env_prefix="LOGGING_", extra="ignore")

    level: str = Field(default="WARNING", description="Log level")
    format: str = Field(
        default="%(levelname)s %(name)s: %(message)s",
        description="Log format",
    )


class AppConfig(BaseSettings):
    """Root application config from YAML + env."""

    model_config = SettingsConfigDict(extra="ignore")

    github: GitHubConfig = Field(default_factory=GitHubConfig)
    pr: PRConfig = Field(default_factory=PRConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def _substitute_env(value: Any) -> Any:
    """Replace ${VAR} and $VAR in strings with os.environ."""
    if isinstance(value, str):
        if value.startswith("${") and value.endswith("}"):
            key = value[2:-1].strip()
            return _current_env.get(key, value)
        if value.startswith("$") and not value.startswith("${"):
            key = value[1:].strip()
            return _current_env.get(key, value)
        return value
    if isinstance(value, dict):
        return {k: _substitute_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_substitute_env(v) for v in value]
    return value


def load_config(config_path: Path | None = None) -> AppConfig:
    """Load config from YAML file and environment.

    A missing default file is not an error: defaults and GITHUB_*, GIT_PR_*,
    LOGGING_* environment variables apply. An explicitly given path must
    exist.

    Raises:
        ConfigError: If an explicit file is missing, the file cannot be read
            or decoded, is not valid YAML or holds invalid values.
    """
    global _current_env
    _current_env = dict(os.environ)

    path = (config_path or DEFAULT_CONFIG_PATH).expanduser()
    try:
        if not path.is_file():
            if config_path is not None:
                raise ConfigError(f"{path}: config file not found")
            return AppConfig()
        raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        if not isinstance(raw, dict):
            raise ConfigError(f"{path}: expected a mapping at top level")
        raw = _substitute_env(raw)
        return AppConfig(
            github=GitHubConfig(**(raw.get("github") or {})),
            pr=PRConfig(**(raw.get("pr") or {})),
            logging=LoggingConfig(**(raw.get("logging") or {})),
        )
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"{path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"{path}: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"{path}: {e}") from e
