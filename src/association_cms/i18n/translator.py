"""Translation of API messages using python-i18n.

Translation files live in ``translations/<locale>.json`` with flat keys and
``%{name}`` interpolation. The request locale is mapped onto the available
files with resolve_locale, so "de-AT" reads de.json when there is no
de-AT.json.
"""

from functools import lru_cache
from pathlib import Path
from typing import ClassVar

import i18n  # type: ignore[import-untyped]

from association_cms.core.config import settings
from association_cms.i18n.context import get_locale
from association_cms.i18n.resolver import resolve_locale

TRANSLATIONS_DIR = Path(__file__).parent / "translations"

# Messages fall back to this file when a key or locale is missing
MESSAGES_FALLBACK_LOCALE = "en"


class _TranslationState:
    """Tracks translation initialization without a module-level global."""

    initialized: ClassVar[bool] = False


@lru_cache
def available_translation_locales() -> tuple[str, ...]:
    """Locales that have a translation file, sorted by code."""
    return tuple(sorted(path.stem for path in TRANSLATIONS_DIR.glob("*.json")))


def init_translations() -> None:
    """Configure python-i18n with our translation files.

    Called at application startup; safe to call repeatedly.
    """
    if _TranslationState.initialized:
        return

    i18n.set("file_format", "json")
    i18n.set("fallback", MESSAGES_FALLBACK_LOCALE)
    i18n.set("enable_memoization", True)
    # JSON files hold flat keys without a locale root element
    i18n.set("skip_locale_root_data", True)
    i18n.set("filename_format", "{locale}.{format}")

    if str(TRANSLATIONS_DIR) not in i18n.load_path:
        i18n.load_path.append(str(TRANSLATIONS_DIR))

    _TranslationState.initialized = True


def translation_locale_for(locale: str | None) -> str:
    """Map any locale onto a locale with a translation file."""
    resolved = resolve_locale(
        locale,
        available_translation_locales(),
        settings.I18N_DEFAULT_LOCALE,
    )
    if resolved is None or resolved not in available_translation_locales():
        return MESSAGES_FALLBACK_LOCALE
    return resolved


def translate(
    key: str,
    locale: str | None = None,
    **params: str | int | float,
) -> str:
    """Translate a key into the given (or current request) locale.

    Args:
        key: The translation key (e.g., "error_not_found")
        locale: Target locale. If None, uses the request locale.
        **params: Interpolation parameters (e.g., resource="Article")

    Returns:
        Translated string, or the key itself if not found.

    Example:
        translate("error_not_found", "de-AT", resource="Artikel")
        # Returns: "Artikel nicht gefunden"
    """
    init_translations()

    target_locale = translation_locale_for(locale or get_locale())
    # python-i18n returns the key when no translation exists
    result: str = i18n.t(key, locale=target_locale, **params)
    return result


def translate_with_fallback(
    key: str,
    locale: str | None = None,
    fallback: str | None = None,
    **params: str | int | float,
) -> str:
    """Translate a key, returning ``fallback`` instead of an untranslated key."""
    result = translate(key, locale, **params)

    if result == key and fallback is not None:
        return fallback

    return result
