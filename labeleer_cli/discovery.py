"""Read-only discovery of credential and label files inside a project tree."""

import logging
import os
import re
from pathlib import Path
from typing import Literal

from labeleer_cli.formats import all_extensions

logger = logging.getLogger(__name__)

CandidateKind = Literal["env", "label"]

# Directories never descended into while looking for label files.
IGNORED_DIRECTORIES: frozenset[str] = frozenset(
    {
        "node_modules",
        "dist",
        "build",
        "out",
        "coverage",
        ".tmp",
        ".gradle",
        "DerivedData",
        "Pods",
        "xcuserdata",
        ".git",
        ".idea",
        "reports",
        "__tests__",
        ".venv",
        "__pycache__",
    }
)

LABEL_FILE_NAMES: tuple[str, ...] = ("labels", "strings")

_ENV_FILE_PATTERN = re.compile(r"^\.env(\..+)?$")


def iter_project_files(root: str | Path):
    """Yield every file below ``root``, skipping ignored directories.

    Directories are visited in sorted order so the traversal is
    reproducible for a fixed filesystem state.
    """
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if d not in IGNORED_DIRECTORIES)
        for filename in sorted(filenames):
            yield Path(dirpath) / filename


def _is_label_file_name(filename: str, extensions: set[str]) -> bool:
    """Return True for labels.<ext> or strings.<ext> with a known extension."""
    stem, dot, ext = filename.rpartition(".")
    return bool(dot) and stem in LABEL_FILE_NAMES and f".{ext}" in extensions


def find_env_files(root: str | Path) -> list[Path]:
    """Return ``.env`` and ``.env.<suffix>`` files directly inside ``root``."""
    root_path = Path(root).resolve()
    return sorted(
        entry
        for entry in root_path.iterdir()
        if entry.is_file() and _ENV_FILE_PATTERN.match(entry.name)
    )


def find_label_files(root: str | Path) -> list[Path]:
    """Return label files anywhere below ``root``.

    A label file is named ``labels`` or ``strings`` with one of the
    registry's extensions, e.g. ``labels.json`` or ``strings.xml``.
    """
    root_path = Path(root).resolve()
    extensions = set(all_extensions())
    return sorted(
        path
        for path in iter_project_files(root_path)
        if _is_label_file_name(path.name, extensions)
    )


def find_candidates(kind: CandidateKind, root: str | Path) -> list[Path]:
    """Find candidate files of the given kind as sorted absolute paths.

    Args:
        kind: ``"env"`` for credential files, ``"label"`` for label files.
        root: Project root directory.

    Returns:
        Sorted absolute paths.
    """
    if kind == "env":
        candidates = find_env_files(root)
    elif kind == "label":
        candidates = find_label_files(root)
    else:
        raise ValueError(f"Unknown candidate kind: {kind}")

    logger.debug("Found %d %s candidate(s) under %s", len(candidates), kind, root)
    return candidates


def to_relative_path(path: str | Path, root: str | Path) -> str:
    """Render ``path`` relative to ``root`` as ``./...`` when it lies inside it."""
    try:
        relative = Path(path).resolve().relative_to(Path(root).resolve())
    except ValueError:
        return str(path)
    return f"./{relative.as_posix()}"
