"""Resolve which local label file the session works on."""

import logging
from dataclasses import dataclass
from pathlib import Path

from rich.markup import escape

from labeleer_cli.discovery import to_relative_path
from labeleer_cli.errors import ResolutionCancelled
from labeleer_cli.formats import SupportedFormat, display_name, extensions_for
from labeleer_cli.terminal import Choice, Terminal

logger = logging.getLogger(__name__)

DEFAULT_LABEL_FILE_NAME = "labels"


@dataclass(frozen=True)
class LabelFileResolution:
    """Outcome of label file resolution.

    ``is_new`` is True when the file was created empty during this run;
    publishing is disabled for such files.
    """

    path: Path
    is_new: bool


def create_label_file(directory: str | Path, fmt: SupportedFormat) -> Path:
    """Create an empty ``labels.<ext>`` file for ``fmt`` inside ``directory``.

    Raises:
        OSError: If the file cannot be written.
    """
    path = Path(directory).resolve() / f"{DEFAULT_LABEL_FILE_NAME}{extensions_for(fmt)[0]}"
    path.write_text("", encoding="utf-8")
    logger.info("Created empty %s label file at %s", fmt.value, path)
    return path


def _handle_missing_label_files(terminal: Terminal, cwd: Path) -> LabelFileResolution:
    """Offer to create a label file when none was found."""
    terminal.warn("Unable to locate any label files in your project.")

    if not terminal.confirm("Would you like to create and import a new labels file?"):
        raise ResolutionCancelled("No label file available.")

    fmt = terminal.select(
        "Select the label file format to create:",
        [Choice(name=display_name(f), value=f) for f in SupportedFormat],
    )
    path = create_label_file(cwd, fmt)
    terminal.log(f"[blue]Created new label file at [cyan underline]{escape(to_relative_path(path, cwd))}[/cyan underline][/blue]")
    return LabelFileResolution(path=path, is_new=True)


def resolve_label_file(
    terminal: Terminal,
    candidates: list[Path],
    cwd: str | Path,
) -> LabelFileResolution:
    """Resolve the discovered candidates to exactly one label file.

    Args:
        terminal: Terminal used for prompts.
        candidates: Label files found by discovery, in display order.
        cwd: Directory where a new file is created and relative to which
            paths are shown.

    Returns:
        The chosen path and whether it was freshly created.

    Raises:
        ResolutionCancelled: If no candidate exists and the user declines
            to create a new file.
    """
    cwd = Path(cwd).resolve()
    if not candidates:
        return _handle_missing_label_files(terminal, cwd)

    if len(candidates) == 1:
        path = Path(candidates[0])
    else:
        path = terminal.select(
            "Multiple label files found. Please select one to use:",
            [Choice(name=to_relative_path(c, cwd), value=Path(c)) for c in candidates],
        )

    terminal.log(
        f"[blue]Using label file at [bold underline]{escape(to_relative_path(path, cwd))}[/bold underline][/blue]"
    )
    return LabelFileResolution(path=path, is_new=False)
