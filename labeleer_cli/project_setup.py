"""Persisted project setup (``labeleer.json``) describing where label files live.

A setup names the project's file format and one or more path entries. Each
entry binds a file either to one locale or, with the ``*`` wildcard, to all
locales at once.
"""

import logging
import re
from pathlib import Path
from typing import Callable

from pydantic import BaseModel, Field, ValidationError, field_validator

from labeleer_cli.discovery import iter_project_files
from labeleer_cli.errors import InvalidProjectSetupError
from labeleer_cli.formats import SupportedFormat, display_name, extensions_for
from labeleer_cli.locales import classify, try_classify
from labeleer_cli.terminal import Choice, Terminal

logger = logging.getLogger(__name__)

PROJECT_FILE_NAME = "labeleer.json"
WILDCARD_LOCALE = "*"

_ANDROID_REGION = re.compile(r"-r([A-Z]{2})$")


class ProjectPathEntry(BaseModel):
    """A label file path bound to one locale or to all of them (``*``)."""

    locale: str
    path: str

    @field_validator("locale")
    @classmethod
    def _canonical_locale(cls, value: str) -> str:
        """Classify every locale except the wildcard."""
        if value == WILDCARD_LOCALE:
            return value
        return classify(value)


class ProjectSetup(BaseModel):
    variant: SupportedFormat
    paths: list[ProjectPathEntry] = Field(min_length=1)


def project_setup_path(root: str | Path) -> Path:
    """Path of the labeleer.json file under root."""
    return Path(root).resolve() / PROJECT_FILE_NAME


def has_project_setup(root: str | Path) -> bool:
    """Return True if root holds a labeleer.json file."""
    return project_setup_path(root).is_file()


def load_project_setup(root: str | Path) -> ProjectSetup:
    """Read and validate ``labeleer.json`` from the project root.

    Raises:
        FileNotFoundError: If the project has no setup file.
        InvalidProjectSetupError: If the file does not match the schema.
    """
    path = project_setup_path(root)
    if not path.is_file():
        raise FileNotFoundError(f"Project setup file not found: {path}")

    try:
        return ProjectSetup.model_validate_json(path.read_text(encoding="utf-8"))
    except ValidationError as e:
        raise InvalidProjectSetupError(f"{path}: {e}") from e


def create_project_setup(
    root: str | Path,
    variant: SupportedFormat,
    paths: list[ProjectPathEntry],
) -> ProjectSetup:
    """Persist a new project setup.

    An existing setup file is never overwritten; it is loaded and returned
    instead.

    Raises:
        InvalidProjectSetupError: If ``paths`` is empty.
    """
    if has_project_setup(root):
        return load_project_setup(root)

    if not paths:
        raise InvalidProjectSetupError(f"No {display_name(variant)} label files found to set up.")

    setup = ProjectSetup(variant=variant, paths=paths)
    project_setup_path(root).write_text(setup.model_dump_json(indent=2) + "\n", encoding="utf-8")
    logger.info("Created %s with %d path(s)", PROJECT_FILE_NAME, len(paths))
    return setup


def _relative(path: Path, root: Path) -> str:
    """Return ``path`` relative to ``root`` with forward slashes."""
    return path.relative_to(root).as_posix()


def _find_single_path(variant: SupportedFormat, root: Path) -> list[ProjectPathEntry]:
    """Use the first labels.<ext> file for every locale."""
    names = {f"labels{ext}" for ext in extensions_for(variant)}
    for path in iter_project_files(root):
        if path.name in names:
            return [ProjectPathEntry(locale=WILDCARD_LOCALE, path=_relative(path, root))]
    return []


def _find_ts_paths(root: Path) -> list[ProjectPathEntry]:
    """List every labels.ts file under the wildcard locale."""
    return [
        ProjectPathEntry(locale=WILDCARD_LOCALE, path=_relative(path, root))
        for path in iter_project_files(root)
        if path.name == "labels.ts"
    ]


def _find_apple_strings_paths(root: Path) -> list[ProjectPathEntry]:
    """Map each <locale>.lproj/Localizable.strings file to its locale."""
    entries = []
    for path in iter_project_files(root):
        if path.name != "Localizable.strings" or path.parent.suffix != ".lproj":
            continue
        locale = try_classify(path.parent.stem)
        if locale is None:
            logger.debug("Skipping %s: %s is not a locale", path, path.parent.stem)
            continue
        entries.append(ProjectPathEntry(locale=locale, path=_relative(path, root)))
    return entries


def android_qualifier_to_tag(directory_name: str) -> str | None:
    """Turn an Android ``values-*`` directory name into a BCP 47 style tag.

    >>> android_qualifier_to_tag("values-pt-rBR")
    'pt-BR'
    >>> android_qualifier_to_tag("values-b+sr+Latn")
    'sr-Latn'
    """
    if not directory_name.startswith("values-"):
        return None
    qualifier = directory_name.removeprefix("values-")
    if qualifier.startswith("b+"):
        return qualifier[2:].replace("+", "-")
    return _ANDROID_REGION.sub(r"-\1", qualifier)


def _find_android_strings_paths(root: Path) -> list[ProjectPathEntry]:
    """Map each values-<qualifier>/strings.xml file to its locale."""
    entries = []
    for path in iter_project_files(root):
        if path.name != "strings.xml":
            continue
        tag = android_qualifier_to_tag(path.parent.name)
        locale = try_classify(tag) if tag else None
        if locale is None:
            logger.debug("Skipping %s: no locale qualifier", path)
            continue
        entries.append(ProjectPathEntry(locale=locale, path=_relative(path, root)))
    return entries


def _no_automatic_layout(root: Path) -> list[ProjectPathEntry]:
    """Formats without a known directory layout yield no paths."""
    return []


_PATH_LOCATORS: dict[SupportedFormat, Callable[[Path], list[ProjectPathEntry]]] = {
    SupportedFormat.JSON: lambda root: _find_single_path(SupportedFormat.JSON, root),
    SupportedFormat.YAML: lambda root: _find_single_path(SupportedFormat.YAML, root),
    SupportedFormat.XCSTRINGS: lambda root: _find_single_path(SupportedFormat.XCSTRINGS, root),
    SupportedFormat.TS: _find_ts_paths,
    SupportedFormat.APPLE_STRINGS: _find_apple_strings_paths,
    SupportedFormat.ANDROID_STRINGS: _find_android_strings_paths,
    # TODO: locate per-locale XLIFF and PO catalogs once their directory conventions are settled.
    SupportedFormat.XLIFF: _no_automatic_layout,
    SupportedFormat.PO: _no_automatic_layout,
}


def locate_paths_for_variant(variant: SupportedFormat, root: str | Path) -> list[ProjectPathEntry]:
    """Find the label files of a project laid out for ``variant``.

    Args:
        variant: Project file format.
        root: Project root directory.

    Returns:
        Path entries relative to ``root``. Empty if nothing was found or the
        format has no automatic layout detection.
    """
    return _PATH_LOCATORS[variant](Path(root).resolve())


def inquire_project_setup(terminal: Terminal, root: str | Path) -> ProjectSetup | None:
    """Return the project setup, offering to create one if it is missing.

    Returns:
        The existing or newly created setup, or None if the user declined.

    Raises:
        InvalidProjectSetupError: If an existing file is invalid or no label
            files were found for the chosen format.
    """
    if has_project_setup(root):
        return load_project_setup(root)

    if not terminal.confirm("No project setup found. Would you like to create one?"):
        return None

    variant = terminal.select(
        "What kind of project would you like to create?",
        [Choice(name=display_name(fmt), value=fmt) for fmt in SupportedFormat],
    )
    paths = locate_paths_for_variant(variant, root)
    return create_project_setup(root, variant, paths)
