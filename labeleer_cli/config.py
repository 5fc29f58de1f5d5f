"""Tool settings and the resolved project configuration."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from labeleer_cli.errors import ResolutionCancelled

DEFAULT_CONFIG_PATH = ".labeleer.yaml"


@dataclass
class ApiConfig:
    """Labeleer API connection settings."""

    base_url: str = "https://labeleer.com/api"
    user_agent: str = "Labeleer-CLI"


@dataclass
class AppConfig:
    """Top-level tool configuration."""

    api: ApiConfig = field(default_factory=ApiConfig)
    log_level: str = "WARNING"


@dataclass(frozen=True)
class PartialConfig:
    """Project identity resolved before a label file is known."""

    project_id: str
    access_token: str = field(repr=False)


@dataclass(frozen=True)
class ProjectConfig:
    """Everything an action needs: project identity plus the local label file."""

    project_id: str
    access_token: str = field(repr=False)
    local_file_path: Path


def load_config(config_path: str | None = None) -> AppConfig:
    """Load tool settings from an optional YAML file.

    The default ``.labeleer.yaml`` may be absent, in which case defaults are
    used. The environment variable LABELEER_API_URL overrides the base URL.

    Args:
        config_path: Explicit path to a YAML file, or None for the default.

    Returns:
        Validated AppConfig instance.

    Raises:
        FileNotFoundError: If an explicitly given file does not exist.
        ValueError: If configuration values are invalid.
    """
    path = Path(config_path or DEFAULT_CONFIG_PATH)
    raw: dict = {}
    if path.exists():
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    elif config_path is not None:
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    if not isinstance(raw, dict):
        raise ValueError(f"Configuration file {path} must contain a mapping.")

    api_raw = raw.get("api", {}) or {}
    api = ApiConfig(
        base_url=api_raw.get("base_url", ApiConfig.base_url),
        user_agent=api_raw.get("user_agent", ApiConfig.user_agent),
    )

    # Environment variable override for the API location
    env_base_url = os.environ.get("LABELEER_API_URL")
    if env_base_url:
        api.base_url = env_base_url

    config = AppConfig(api=api, log_level=str(raw.get("log_level", AppConfig.log_level)).upper())
    _validate_config(config)
    return config


def _validate_config(config: AppConfig) -> None:
    """Validate tool settings.

    Raises:
        ValueError: If validation fails.
    """
    if not config.api.base_url:
        raise ValueError("api.base_url must not be empty.")

    if not config.api.base_url.startswith(("http://", "https://")):
        raise ValueError(f"api.base_url must be an http(s) URL, got {config.api.base_url!r}.")

    if not config.api.user_agent:
        raise ValueError("api.user_agent must not be empty.")

    if not isinstance(logging.getLevelName(config.log_level), int):
        raise ValueError(f"Unknown log_level: {config.log_level}")


def assemble_project_config(partial: PartialConfig, local_file_path: str | Path) -> ProjectConfig:
    """Combine credentials and the label file path into a ProjectConfig.

    Raises:
        ResolutionCancelled: If the project ID or access token is empty, so
            no action can ever run with a partial configuration.
    """
    if not partial.project_id or not partial.access_token:
        raise ResolutionCancelled(
            "A project ID and an access token are both required. "
            "Set LABELEER_PROJECT_ID and LABELEER_ACCESS_TOKEN in a .env file."
        )
    if not local_file_path:
        raise ResolutionCancelled("No label file was selected.")

    return ProjectConfig(
        project_id=partial.project_id,
        access_token=partial.access_token,
        local_file_path=Path(local_file_path).resolve(),
    )
