"""Locale resolution, detection and fallback for the content API.

- resolve_locale maps a requested locale onto the configured locale set
- detect_locale_from_header picks a configured locale from Accept-Language
- fetch_with_fallback reads localized content, falling back to the default
- LocaleMiddleware normalizes the ``locale`` query parameter per request

API messages are translated with python-i18n JSON files (see translator).
"""

from association_cms.i18n.config import (
    ALL_LOCALES,
    KNOWN_LOCALES,
    LocaleConfig,
    SupportedLocale,
    get_locale_config,
)
from association_cms.i18n.context import get_locale, reset_locale, set_locale
from association_cms.i18n.detection import (
    detect_locale_from_header,
    parse_accept_language,
)
from association_cms.i18n.fallback import FallbackResult, fetch_with_fallback
from association_cms.i18n.middleware import LocaleMiddleware, resolve_request_locale
from association_cms.i18n.resolver import (
    pick_for_language,
    resolve_locale,
    split_locale,
)
from association_cms.i18n.switcher import LocaleInfo, LocaleSwitcher
from association_cms.i18n.translator import (
    init_translations,
    translate,
    translate_with_fallback,
)

__all__ = [
    "ALL_LOCALES",
    "KNOWN_LOCALES",
    "FallbackResult",
    "LocaleConfig",
    "LocaleInfo",
    "LocaleMiddleware",
    "LocaleSwitcher",
    "SupportedLocale",
    "detect_locale_from_header",
    "fetch_with_fallback",
    "get_locale",
    "get_locale_config",
    "init_translations",
    "parse_accept_language",
    "pick_for_language",
    "reset_locale",
    "resolve_locale",
    "resolve_request_locale",
    "set_locale",
    "split_locale",
    "translate",
    "translate_with_fallback",
]
