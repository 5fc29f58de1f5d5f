"""Reader and writer for JSON label files."""

import json
import os
import re
import shutil
import tempfile
from pathlib import Path

from labeleer_cli.errors import MalformedLabelFileError

# A label file maps label names to {"translations": {locale: text}}.
LabelFile = dict[str, dict]

_FIRST_WHITESPACE_RUN = re.compile(r"\s+")
_DISALLOWED_RUN = re.compile(r"[^a-zA-Z0-9._-]+")


def canonical_label_name(name: str) -> str:
    """Coerce a name into label-name form.

    The first whitespace run becomes ``.`` and any remaining run of
    characters outside ``[a-zA-Z0-9._-]`` becomes ``-``.
    """
    return _DISALLOWED_RUN.sub("-", _FIRST_WHITESPACE_RUN.sub(".", name, count=1))


def is_valid_label_name(name: str) -> bool:
    """Return True if ``name`` is non-empty and already canonical.

    >>> is_valid_label_name("foo.bar")
    True
    >>> is_valid_label_name("foo bar")
    False
    """
    return bool(name) and canonical_label_name(name) == name


def _check_shape(data: object, path: str | Path) -> LabelFile:
    """Validate parsed JSON against the label file layout."""
    if not isinstance(data, dict):
        raise MalformedLabelFileError(f"{path}: expected a JSON object at the top level.")

    for name, record in data.items():
        if not isinstance(record, dict) or not isinstance(record.get("translations"), dict):
            raise MalformedLabelFileError(
                f"{path}: label {name!r} must be an object with a 'translations' object."
            )
        for locale, text in record["translations"].items():
            if not isinstance(text, str):
                raise MalformedLabelFileError(
                    f"{path}: translation {name!r}/{locale!r} must be a string."
                )
    return data


def parse(content: str, source: str | Path = "<string>") -> LabelFile:
    """Parse label file content.

    Whitespace-only content is an empty label file, matching the empty
    files created for new projects.

    Raises:
        MalformedLabelFileError: If the content is not valid JSON of the
            expected shape.
    """
    if not content.strip():
        return {}

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise MalformedLabelFileError(f"{source}: invalid JSON ({e})") from e

    return _check_shape(data, source)


def read_text(path: str | Path) -> str:
    """Read a label file as UTF-8 text.

    Raises:
        FileNotFoundError: If the file does not exist.
        MalformedLabelFileError: If the file is not valid UTF-8.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except UnicodeDecodeError as e:
        raise MalformedLabelFileError(f"{path}: not valid UTF-8 ({e.reason} at byte {e.start})") from e


def load(path: str | Path) -> LabelFile:
    """Load and validate a JSON label file.

    Raises:
        FileNotFoundError: If the file does not exist.
        MalformedLabelFileError: If the file content is malformed.
    """
    return parse(read_text(path), path)


def upsert(labels: LabelFile, label_name: str, translations: dict[str, str]) -> LabelFile:
    """Insert or update one label's translations.

    Each locale in ``translations`` replaces the stored value; locales not
    mentioned keep their current value.

    Args:
        labels: The label file data (modified in place).
        label_name: Name of the label to create or update.
        translations: Mapping of locale to translated text.

    Returns:
        The modified label file data.
    """
    record = labels.setdefault(label_name, {"translations": {}})
    record.setdefault("translations", {})
    for locale, text in translations.items():
        record["translations"][locale] = text
    return labels


def save(path: str | Path, labels: LabelFile) -> None:
    """Write label file data as 2-space indented JSON with a trailing newline.

    The content is written to a temporary sibling file first and then
    moved over the target, so an interrupted write never truncates it.
    """
    target = Path(path)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=target.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(labels, f, indent=2, ensure_ascii=False)
            f.write("\n")
        if target.exists():
            shutil.copymode(target, tmp_name)
        os.replace(tmp_name, target)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise
