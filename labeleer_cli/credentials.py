"""Resolve the Labeleer project ID and access token for the current project."""

import logging
import re
from pathlib import Path

from dotenv.main import DotEnv
from rich.markup import escape

from labeleer_cli.config import PartialConfig
from labeleer_cli.discovery import find_candidates
from labeleer_cli.terminal import Choice, Terminal

logger = logging.getLogger(__name__)

ACCESS_TOKEN_KEY = re.compile(r"^LABELEER.*TOKEN$")
PROJECT_ID_KEY = re.compile(r"^LABELEER.*PROJECT_ID$")
_TOKEN_SAFE_VALUE = re.compile(r"^[A-Za-z0-9_-]+$")


def read_env_candidates(env_path: str | Path) -> tuple[list[str], list[str]]:
    """Collect access token and project ID candidates from an env file.

    Keys are matched by pattern rather than exact name, so files holding
    several environments (``LABELEER_STAGING_ACCESS_TOKEN`` next to
    ``LABELEER_ACCESS_TOKEN``) yield several candidates.

    Args:
        env_path: Path to the ``.env`` file.

    Every binding is kept, so a key repeated under different sections of
    the file contributes one candidate per occurrence.

    Returns:
        Tuple of (access token candidates, project ID candidates) in file order.
    """
    bindings = DotEnv(env_path, interpolate=False, encoding="utf-8").parse()
    tokens: list[str] = []
    project_ids: list[str] = []

    for key, value in bindings:
        if not value or not _TOKEN_SAFE_VALUE.match(value):
            continue
        if ACCESS_TOKEN_KEY.match(key):
            tokens.append(value)
        if PROJECT_ID_KEY.match(key):
            project_ids.append(value)

    logger.debug(
        "Read %d token and %d project ID candidate(s) from %s",
        len(tokens),
        len(project_ids),
        env_path,
    )
    return tokens, project_ids


def _pick(terminal: Terminal, message: str, candidates: list[str]) -> str:
    """Return the only candidate, or let the user select one."""
    if len(candidates) == 1:
        return candidates[0]
    return terminal.select(message, [Choice(name=c, value=c) for c in candidates])


def read_project_from_env(terminal: Terminal, env_path: str | Path) -> PartialConfig | None:
    """Read the project identity from an env file.

    Returns None when the file lacks either a token or a project ID. When a
    family has several candidates the user picks one of them.
    """
    tokens, project_ids = read_env_candidates(env_path)
    if not tokens or not project_ids:
        return None

    access_token = _pick(terminal, "Multiple access tokens found. Please select one:", tokens)
    project_id = _pick(terminal, "Multiple project IDs found. Please select one:", project_ids)
    return PartialConfig(project_id=project_id, access_token=access_token)


def inquire_project_config(terminal: Terminal) -> PartialConfig:
    """Prompt for the access token (masked) and project ID."""
    access_token = terminal.secret("Please enter your project access token:")
    project_id = terminal.ask("Please enter your project ID:")
    return PartialConfig(project_id=project_id.strip(), access_token=access_token.strip())


def _select_env_file(terminal: Terminal, candidates: list[Path]) -> Path:
    """Return the only env file, or let the user select one."""
    if len(candidates) == 1:
        return candidates[0]
    return terminal.select(
        "Identified multiple .env files. Please select one to use:",
        [Choice(name=path.name, value=path) for path in candidates],
    )


def resolve_credentials(terminal: Terminal, project_root: str | Path) -> PartialConfig:
    """Resolve the project identity from ``.env*`` files or by prompting.

    Args:
        terminal: Terminal used for selections and prompts.
        project_root: Directory searched (non-recursively) for env files.

    Returns:
        The resolved PartialConfig. Values may be empty when the user
        entered nothing at the fallback prompts.
    """
    candidates = find_candidates("env", project_root)
    if not candidates:
        terminal.warn("Unable to locate any .env files.")
        return inquire_project_config(terminal)

    env_path = _select_env_file(terminal, candidates)
    project = read_project_from_env(terminal, env_path)
    if project is None:
        terminal.warn(
            f"Unable to locate project configuration from [bold]{escape(env_path.name)}[/bold]."
        )
        terminal.warn(
            "Make sure it contains both [bold]LABELEER_ACCESS_TOKEN[/bold] "
            "and [bold]LABELEER_PROJECT_ID[/bold]."
        )
        return inquire_project_config(terminal)

    logger.info("Using project %s from %s", project.project_id, env_path)
    return project
