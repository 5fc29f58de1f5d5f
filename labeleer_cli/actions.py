"""User actions: retrieve, publish and create labels."""

import logging
from enum import Enum
from pathlib import Path
from typing import Callable

from rich.markup import escape

from labeleer_cli import labels
from labeleer_cli.config import ProjectConfig
from labeleer_cli.discovery import to_relative_path
from labeleer_cli.errors import (
    MalformedLabelFileError,
    RemoteRequestFailed,
    UnresolvedFormatError,
    UnsupportedPublishFormatError,
)
from labeleer_cli.formats import SupportedFormat, display_name, infer_format, supports_publish
from labeleer_cli.gateway import LabeleerClient, LocaleEntry
from labeleer_cli.locales import display_name as locale_display_name
from labeleer_cli.terminal import Choice, Terminal

logger = logging.getLogger(__name__)


class UserAction(str, Enum):
    RETRIEVE = "retrieve"
    PUBLISH = "publish"
    CREATE = "create"
    CANCEL = "cancel"


def inquire_user_action(terminal: Terminal, is_new: bool) -> UserAction:
    """Ask which action to run. Publishing is unavailable for new label files."""
    return terminal.select(
        "What would you like to do?",
        [
            Choice(name="Retrieve", value=UserAction.RETRIEVE),
            Choice(name="Publish", value=UserAction.PUBLISH, disabled=is_new),
            Choice(name="Create New Label", value=UserAction.CREATE),
            Choice(name="⨯ Cancel", value=UserAction.CANCEL),
        ],
    )


# Retrieve


def infer_or_inquire_format(terminal: Terminal, label_file_path: Path) -> SupportedFormat | None:
    """Infer the label file format from its name, asking the user if that fails."""
    fmt = infer_format(label_file_path)
    if fmt is not None:
        return fmt

    return terminal.select(
        "Select the label file format to fetch:",
        [Choice(name=display_name(f), value=f) for f in SupportedFormat]
        + [Choice(name="⨯ Cancel", value=None)],
    )


def retrieve_labels(terminal: Terminal, config: ProjectConfig, client: LabeleerClient) -> None:
    """Fetch the project's labels and overwrite the local label file with them.

    Raises:
        UnresolvedFormatError: If no format could be inferred or selected.
        RemoteRequestFailed: If the export request fails.
    """
    fmt = infer_or_inquire_format(terminal, config.local_file_path)
    if fmt is None:
        raise UnresolvedFormatError("No label file format selected. Unable to proceed.")

    try:
        with terminal.status("Retrieving labels..."):
            body = client.export_translations(config.project_id, fmt)
    except RemoteRequestFailed as e:
        raise RemoteRequestFailed(
            f"Failed to fetch labels: {e}",
            status_code=e.status_code,
            reason=e.reason,
            body=e.body,
        ) from e

    config.local_file_path.write_bytes(body)
    logger.info("Wrote %d bytes of %s labels to %s", len(body), fmt.value, config.local_file_path)
    terminal.success(
        f"Labels have been written to [cyan underline]{escape(to_relative_path(config.local_file_path, Path.cwd()))}[/cyan underline]"
    )


# Publish


def check_publishable(label_file_path: Path) -> SupportedFormat:
    """Return the label file format if it can be published.

    Raises:
        UnsupportedPublishFormatError: If the format is unknown or not JSON.
    """
    fmt = infer_format(label_file_path)
    if fmt is None:
        raise UnsupportedPublishFormatError("Unable to infer file format from label file name. Sync aborted.")
    if not supports_publish(fmt):
        raise UnsupportedPublishFormatError(
            f"Unsupported format {display_name(fmt)}. "
            "Currently, only JSON is supported for remote synchronization."
        )
    return fmt


def publish_labels(terminal: Terminal, config: ProjectConfig, client: LabeleerClient) -> bool:
    """Upload the local label file to the project.

    Failures are reported and abort only this action.

    Returns:
        True if the labels were published.
    """
    try:
        check_publishable(config.local_file_path)
    except UnsupportedPublishFormatError as e:
        terminal.error(escape(str(e)))
        return False

    try:
        content = labels.read_text(config.local_file_path)
    except MalformedLabelFileError as e:
        terminal.error(escape(str(e)))
        return False

    if not content.strip():
        terminal.error("Unable to read local file content. Aborting.")
        return False

    try:
        data = labels.parse(content, config.local_file_path)
    except MalformedLabelFileError as e:
        terminal.error(escape(str(e)))
        return False

    try:
        with terminal.status("Synchronizing with project..."):
            client.publish_translations(config.project_id, data)
    except RemoteRequestFailed as e:
        terminal.error(f"Something went wrong with the synchronization: {escape(str(e))}")
        if e.body:
            terminal.log(escape(e.body))
        return False

    logger.info("Published %d label(s) to project %s", len(data), config.project_id)
    terminal.success("Local labels have been synchronized with remote project")
    return True


# Create


def inquire_translations(terminal: Terminal, locales: list[LocaleEntry]) -> dict[str, str]:
    """Ask for one value per locale.

    Reference locales (marked with a star) are re-prompted until a value is
    given; blank values for other locales are left out of the result.
    """
    translations: dict[str, str] = {}
    for entry in locales:
        marker = " ★" if entry.is_reference else ""
        value = terminal.ask(
            f"Enter the value for locale [underline]{escape(locale_display_name(entry.locale))}[/underline]{marker}:",
            required=entry.is_reference,
        )
        if value.strip():
            translations[entry.locale] = value
    return translations


def create_label(terminal: Terminal, config: ProjectConfig, client: LabeleerClient) -> str | None:
    """Create a single label interactively.

    Returns:
        The name of the label written, or None if creation was aborted.
    """
    try:
        with terminal.status("Loading languages from project"):
            locales = client.fetch_locales(config.project_id)
    except RemoteRequestFailed as e:
        terminal.error(f"Failed to load languages from project: {escape(str(e))}")
        return None

    if not locales:
        terminal.warn("No languages found in the project. Please add languages before creating labels.")
        return None

    label_name = terminal.ask(
        "Enter the name of the new label:",
        validate=labels.is_valid_label_name,
        invalid_message="Label names may only contain letters, digits, '.', '_' and '-'.",
    )

    translations = inquire_translations(terminal, locales)
    if not translations:
        terminal.warn("No translations provided. Label creation aborted.")
        return None

    try:
        label_file = labels.load(config.local_file_path)
    except MalformedLabelFileError as e:
        terminal.error(escape(str(e)))
        return None

    labels.upsert(label_file, label_name, translations)
    labels.save(config.local_file_path, label_file)
    logger.info("Saved label %s with %d translation(s)", label_name, len(translations))
    terminal.log(f"[blue]Label '{escape(label_name)}' has been added to the label file.[/blue]")
    return label_name


def create_labels(terminal: Terminal, config: ProjectConfig, client: LabeleerClient) -> list[str]:
    """Create labels until the user is done or a creation is aborted.

    Locales are fetched again for every label.

    Returns:
        Names of the labels written.
    """
    if infer_format(config.local_file_path) is not SupportedFormat.JSON:
        terminal.error("Creating labels is currently supported for JSON label files only.")
        return []

    created: list[str] = []
    while True:
        label_name = create_label(terminal, config, client)
        if label_name is None:
            break
        created.append(label_name)
        if not terminal.confirm("Would you like to create another one?"):
            break
    return created


ActionHandler = Callable[[Terminal, ProjectConfig, LabeleerClient], object]

ACTION_HANDLERS: dict[UserAction, ActionHandler] = {
    UserAction.RETRIEVE: retrieve_labels,
    UserAction.PUBLISH: publish_labels,
    UserAction.CREATE: create_labels,
}


def dispatch(
    terminal: Terminal,
    config: ProjectConfig,
    client: LabeleerClient,
    is_new: bool,
) -> None:
    """Run user-selected actions until the user cancels.

    Args:
        terminal: Terminal used for prompts and output.
        config: Fully resolved project configuration.
        client: API client authenticated for the project.
        is_new: Whether the label file was created during this run.
    """
    while True:
        action = inquire_user_action(terminal, is_new=is_new)
        if action is UserAction.CANCEL:
            terminal.goodbye()
            return

        logger.debug("Running action %s", action.value)
        ACTION_HANDLERS[action](terminal, config, client)
