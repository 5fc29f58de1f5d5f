"""Supported label file formats and their file extensions."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class SupportedFormat(str, Enum):
    """Label file formats understood by the Labeleer API.

    The value is sent verbatim as the ``format`` query parameter of the
    export endpoint.
    """

    JSON = "json"
    YAML = "yaml"
    XLIFF = "xliff"
    PO = "po"
    APPLE_STRINGS = "apple-strings"
    ANDROID_STRINGS = "android-strings"
    TS = "ts"
    XCSTRINGS = "xcstrings"


@dataclass(frozen=True)
class FormatInfo:
    """Static properties of a supported format."""

    extensions: tuple[str, ...]
    display_name: str
    supports_publish: bool = False


FORMATS: dict[SupportedFormat, FormatInfo] = {
    SupportedFormat.JSON: FormatInfo((".json",), "JSON (.json)", supports_publish=True),
    SupportedFormat.YAML: FormatInfo((".yaml", ".yml"), "YAML (.yaml/.yml)"),
    SupportedFormat.XLIFF: FormatInfo((".xliff", ".xlf"), "XLIFF (.xliff)"),
    SupportedFormat.PO: FormatInfo((".po",), "Gettext PO (.po)"),
    SupportedFormat.APPLE_STRINGS: FormatInfo((".strings",), "Apple Strings (.strings)"),
    SupportedFormat.ANDROID_STRINGS: FormatInfo((".xml",), "Android Strings (.xml)"),
    SupportedFormat.TS: FormatInfo((".ts",), "Qt Linguist (.ts)"),
    SupportedFormat.XCSTRINGS: FormatInfo((".xcstrings",), "XCStrings (.xcstrings)"),
}

_EXTENSION_INDEX: dict[str, SupportedFormat] = {
    ext: fmt for fmt, info in FORMATS.items() for ext in info.extensions
}


def extensions_for(fmt: SupportedFormat) -> tuple[str, ...]:
    """Return the extensions of a format, canonical extension first."""
    return FORMATS[fmt].extensions


def display_name(fmt: SupportedFormat) -> str:
    """Return the human-readable name of a format."""
    return FORMATS[fmt].display_name


def supports_publish(fmt: SupportedFormat) -> bool:
    """Return True if files of this format can be published."""
    return FORMATS[fmt].supports_publish


def all_extensions() -> list[str]:
    """Return every recognized extension in registry order."""
    return list(_EXTENSION_INDEX)


def format_for_extension(extension: str) -> SupportedFormat | None:
    """Look up the format owning an extension.

    Args:
        extension: Extension with or without the leading dot, any case.

    Returns:
        The matching format, or None if the extension is not recognized.
    """
    ext = extension.lower()
    if not ext.startswith("."):
        ext = f".{ext}"
    return _EXTENSION_INDEX.get(ext)


def infer_format(path: str | Path) -> SupportedFormat | None:
    """Infer a label file format from its file name."""
    suffix = Path(path).suffix
    if not suffix:
        return None
    return format_for_extension(suffix)
