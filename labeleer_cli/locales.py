"""Locale classification and display helpers backed by babel's CLDR data."""

import logging
import re
from functools import lru_cache

from babel import Locale, UnknownLocaleError
from babel.core import get_global, parse_locale
from babel.localedata import locale_identifiers

from labeleer_cli.errors import InvalidLocaleError

logger = logging.getLogger(__name__)

_ISO_639_1_PATTERN = re.compile(r"^[a-z]{2}$")
_BCP47_PATTERN = re.compile(r"^[A-Za-z]{2,3}(-[A-Za-z0-9]{1,8})*$")


@lru_cache(maxsize=1)
def _known_identifiers() -> frozenset[str]:
    """All locale identifiers known to the CLDR data."""
    return frozenset(locale_identifiers())


@lru_cache(maxsize=1)
def _known_languages() -> frozenset[str]:
    """Language codes that have an English display name."""
    return frozenset(Locale("en").languages)


def is_iso639_1_code(raw: str) -> bool:
    """Return True for a two-letter ISO 639-1 language code such as ``de``."""
    return bool(_ISO_639_1_PATTERN.match(raw)) and raw in _known_languages()


def is_canonical_locale(raw: str) -> bool:
    """Return True for an identifier babel ships data for, e.g. ``en_US``."""
    return raw in _known_identifiers()


def is_bcp47_tag(raw: str) -> bool:
    """Return True if the string looks like a hyphenated BCP-47 tag."""
    return bool(_BCP47_PATTERN.match(raw))


def default_locale_for(language: str) -> str:
    """Map a bare language code to its most likely canonical locale.

    Uses CLDR likely subtags, so ``en`` becomes ``en_US`` and ``sr``
    becomes ``sr_Cyrl_RS``. Falls back to the language itself when no
    regional locale is known.
    """
    likely = get_global("likely_subtags").get(language)
    if not likely:
        return language

    lang, territory, script, _variant = parse_locale(likely)[:4]
    candidates = []
    if territory:
        candidates.append(f"{lang}_{territory}")
        if script:
            candidates.append(f"{lang}_{script}_{territory}")

    for candidate in candidates:
        if is_canonical_locale(candidate):
            return candidate
    return language


def classify(raw: str) -> str:
    """Normalize a locale-like string into a canonical POSIX-style locale.

    Resolution order, first match wins:

    1. A two-letter ISO 639-1 code maps to the language's default locale.
    2. An already canonical identifier is returned unchanged.
    3. A well-formed BCP 47 tag is converted to POSIX form (``en-US`` to
       ``en_US``).

    Args:
        raw: The string to classify.

    Returns:
        The canonical locale identifier.

    Raises:
        InvalidLocaleError: If the string matches none of the above.
    """
    if is_iso639_1_code(raw):
        return default_locale_for(raw)

    if is_canonical_locale(raw):
        return raw

    if is_bcp47_tag(raw):
        try:
            parsed = Locale.parse(raw, sep="-")
        except (ValueError, UnknownLocaleError) as e:
            raise InvalidLocaleError(raw) from e

        identifier = str(parsed)
        if identifier == parsed.language:
            identifier = default_locale_for(parsed.language)
        if is_canonical_locale(identifier):
            return identifier
        logger.debug("BCP 47 tag %s resolved to unknown locale %s", raw, identifier)

    raise InvalidLocaleError(raw)


def try_classify(raw: str) -> str | None:
    """Like :func:`classify`, returning None instead of raising."""
    try:
        return classify(raw)
    except InvalidLocaleError:
        return None


def display_name(locale: str) -> str:
    """Render a locale as an English display name, e.g. ``English (United States)``.

    Accepts both ``en_US`` and ``en-US`` spellings and returns the input
    unchanged if babel does not know the locale.
    """
    try:
        name = Locale.parse(locale.replace("-", "_")).get_display_name("en")
    except (ValueError, TypeError, UnknownLocaleError):
        return locale
    return name or locale
