"""Configuration loading from YAML, action inputs and environment.

Action inputs follow the GitHub Actions convention: ``INPUT_<NAME>``
environment variables with the input name upper-cased (``INPUT_BASE-BRANCH``).
They override the ``inputs`` section of an optional YAML file. The token and
repository fall back to ``GITHUB_TOKEN`` and ``GITHUB_REPOSITORY``.
"""

import os
from pathlib import Path
from typing import Any, List, Mapping

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from verbranch.errors import InvalidInputError
from verbranch.models import BumpLevel
from verbranch.services.info_comment import DEFAULT_BOT_ID, DEFAULT_BOT_LOGIN
from verbranch.services.manifest import DEFAULT_VERSION_FILE

INPUT_ENV_PREFIX = "INPUT_"
# Inputs where an explicit "" is a real value, not "unset"
KEEP_EMPTY_INPUTS = ("name_prefix",)


class GitHubConfig(BaseSettings):
    """GitHub API settings (GITHUB_* environment of a workflow run)."""

    model_config = SettingsConfigDict(env_prefix="GITHUB_", extra="ignore")

    token: str | None = Field(default=None, description="Token used when the github-token input is empty")
    api_url: str = Field(default="https://api.github.com", description="API base URL")
    repository: str | None = Field(default=None, description="owner/repo of the workflow run")


class LoggingConfig(BaseSettings):
    """Logging settings."""

    model_config = SettingsConfigDict(env_prefix="LOGGING_", extra="ignore")

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format",
    )


def _input_alias(name: str) -> str:
    return name.replace("_", "-")


class ActionInputs(BaseModel):
    """Every recognized input, validated once before the pipeline runs."""

    model_config = ConfigDict(alias_generator=_input_alias, populate_by_name=True, extra="ignore")

    github_token: str | None = None
    repository: str | None = None
    base_branch: str | None = None
    name_prefix: str = "rel_"
    version_level: BumpLevel | None = None
    pre_id: str = ""
    custom_version: str = ""
    version_file: str = DEFAULT_VERSION_FILE
    # Info mode: report on an existing versioning PR, create nothing
    pr_number: int | None = Field(default=None, ge=1)
    pr_create: bool = False
    pr_title: str | None = None
    pr_description: str | None = None
    pr_draft: bool = False
    pr_fail_if_exist: bool = False
    pr_assignees: List[str] = Field(default_factory=list)
    pr_reviewers: List[str] = Field(default_factory=list)
    pr_team_reviewers: List[str] = Field(default_factory=list)
    pr_labels: List[str] = Field(default_factory=list)
    pr_info_comment: bool = True
    pr_info_comment_template: Path | None = None
    bot_login: str = DEFAULT_BOT_LOGIN
    bot_id: int | None = DEFAULT_BOT_ID

    @model_validator(mode="before")
    @classmethod
    def _drop_empty(cls, data: Any) -> Any:
        """Empty inputs mean "not set" so that defaults apply, except KEEP_EMPTY_INPUTS."""
        if not isinstance(data, Mapping):
            return data
        values = {}
        for key, value in data.items():
            if value is None:
                continue
            if isinstance(value, str) and not value.strip() and str(key).replace("-", "_") not in KEEP_EMPTY_INPUTS:
                continue
            values[key] = value
        return values

    @field_validator("pr_assignees", "pr_reviewers", "pr_team_reviewers", "pr_labels", mode="before")
    @classmethod
    def _split_list(cls, value: Any) -> Any:
        """Accept comma or newline separated strings as well as lists."""
        if isinstance(value, str):
            value = value.replace("\n", ",").split(",")
        if isinstance(value, (list, tuple)):
            return [str(v).strip() for v in value if str(v).strip()]
        return value

    @field_validator("base_branch", "name_prefix", "pre_id", "custom_version", "version_file", mode="before")
    @classmethod
    def _strip(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value

    @field_validator("version_level", mode="before")
    @classmethod
    def _level_lower(cls, value: Any) -> Any:
        return value.strip().lower() if isinstance(value, str) else value

    @model_validator(mode="after")
    def _check_required(self) -> "ActionInputs":
        if self.pr_number is not None:
            return self
        if not self.base_branch:
            raise ValueError("Must provide base branch.")
        if self.version_level is None:
            raise ValueError("Must provide version-level: major, minor, patch or prerelease.")
        return self


class AppConfig(BaseSettings):
    """Root application config from YAML + env."""

    model_config = SettingsConfigDict(extra="ignore")

    github: GitHubConfig = Field(default_factory=GitHubConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    inputs: ActionInputs

    @property
    def token_resolved(self) -> str | None:
        return self.inputs.github_token or self.github.token

    @property
    def repository_resolved(self) -> str | None:
        return self.inputs.repository or self.github.repository


def _format_validation_error(error: ValidationError) -> str:
    parts = []
    for err in error.errors():
        msg = str(err.get("msg", "")).removeprefix("Value error, ")
        loc = ".".join(str(p) for p in err.get("loc", ()))
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(parts)


def _substitute_env(value: Any, env: Mapping[str, str]) -> Any:
    """Replace ${VAR} and $VAR strings with values from env."""
    if isinstance(value, str):
        if value.startswith("${") and value.endswith("}"):
            return env.get(value[2:-1].strip(), value)
        if value.startswith("$") and not value.startswith("${"):
            return env.get(value[1:].strip(), value)
        return value
    if isinstance(value, dict):
        return {k: _substitute_env(v, env) for k, v in value.items()}
    if isinstance(value, list):
        return [_substitute_env(v, env) for v in value]
    return value


def _find_input(env: Mapping[str, str], name: str) -> str | None:
    """Return the INPUT_* value for field name, or None when no variable is set."""
    for key in (f"{INPUT_ENV_PREFIX}{_input_alias(name).upper()}", f"{INPUT_ENV_PREFIX}{name.upper()}"):
        if key in env:
            return env[key]
    return None


def read_inputs(env: Mapping[str, str]) -> dict[str, str]:
    """Collect INPUT_* variables for every known input; absent inputs are ""."""
    values: dict[str, str] = {}
    for name in ActionInputs.model_fields:
        value = _find_input(env, name)
        values[_input_alias(name)] = "" if value is None else value
    return values


def load_config(config_path: Path | None = None, env: Mapping[str, str] | None = None) -> AppConfig:
    """Load config from an optional YAML file, INPUT_* variables and GITHUB_/LOGGING_ env.

    Raises:
        InvalidInputError: a value is missing or cannot be validated.
    """
    env = dict(os.environ) if env is None else dict(env)

    raw: dict[str, Any] = {}
    if config_path is not None and config_path.is_file():
        raw = _substitute_env(yaml.safe_load(config_path.read_text()) or {}, env)

    inputs_raw = dict(raw.get("inputs") or {})
    for name in ActionInputs.model_fields:
        value = _find_input(env, name)
        if value is None:
            continue
        if value.strip() or name in KEEP_EMPTY_INPUTS:
            inputs_raw[_input_alias(name)] = value

    try:
        return AppConfig(
            github=GitHubConfig(**(raw.get("github") or {})),
            logging=LoggingConfig(**(raw.get("logging") or {})),
            inputs=ActionInputs.model_validate(inputs_raw),
        )
    except ValidationError as e:
        raise InvalidInputError(_format_validation_error(e)) from e
