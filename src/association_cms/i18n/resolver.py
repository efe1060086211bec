"""Map a requested locale token onto the configured locale set.

Precedence:
1. No locale requested: the default locale, passed through unchecked.
2. Case-insensitive exact match against the configured locales.
3. Language-only ("de") or language-region ("en-GB") input: the preferred
   configured locale for that language (see pick_for_language).
4. Nothing matches: None.

The reserved "all" token is never resolved; callers must handle it first.

Region subtags are never compared once the exact match fails, so "en-GB"
can resolve to a configured "en-US". This is a language-family fallback,
not BCP 47 lookup, and downstream handlers rely on it.
"""

from collections.abc import Sequence

from association_cms.i18n.config import ALL_LOCALES


def split_locale(locale: str | None) -> tuple[str, str]:
    """Split a tag on its first hyphen into lowercased (language, region).

    >>> split_locale("en-US")
    ('en', 'us')
    >>> split_locale("de")
    ('de', '')
    """
    if not locale:
        return "", ""
    language, _, region = str(locale).partition("-")
    return language.lower(), region.lower()


def pick_for_language(
    language: str,
    configured_locales: Sequence[str],
    default_locale: str | None,
) -> str | None:
    """Choose the configured locale that best represents a language.

    Prefers the default locale when it shares the language and is itself
    configured, then the bare language entry, then the first configured
    variant in declaration order.
    """
    if not language:
        return None

    by_lower: dict[str, str] = {}
    for loc in configured_locales:
        by_lower.setdefault(str(loc).lower(), loc)

    default_lower = (default_locale or "").lower()
    if split_locale(default_lower)[0] == language and default_lower in by_lower:
        return by_lower[default_lower]

    if language in by_lower:
        return by_lower[language]

    for loc in configured_locales:
        if split_locale(loc)[0] == language:
            return loc

    return None


def resolve_locale(
    requested: str | None,
    configured_locales: Sequence[str] | None,
    default_locale: str | None,
) -> str | None:
    """Resolve a requested locale to a configured locale, or None.

    Args:
        requested: Raw locale token from the request (any casing).
        configured_locales: Configured locales in declaration order.
        default_locale: The configured default locale.

    Returns:
        The matching configured locale in its configured casing, the default
        locale when nothing was requested, or None when nothing matches.
    """
    if not requested:
        return default_locale or None

    if requested == ALL_LOCALES:
        return None

    locales = list(configured_locales or ())
    requested_lower = str(requested).lower()

    for loc in locales:
        if str(loc).lower() == requested_lower:
            return loc

    language, _region = split_locale(requested_lower)
    # With or without a region the outcome is the same: any configured
    # locale of that language, chosen by pick_for_language.
    return pick_for_language(language, locales, default_locale)
