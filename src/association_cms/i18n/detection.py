"""Accept-Language parsing and header-based locale detection.

Detection is intentionally simpler than resolve_locale: for a
language-only candidate the first configured locale of that language wins,
without preferring the default locale or the bare language entry.
"""

from collections.abc import Sequence
import math

# Missing, zero or unparseable q-values weigh like an unweighted tag
DEFAULT_QUALITY = 1.0


def _parse_quality(params: list[str]) -> float:
    for param in params:
        name, _, value = param.strip().partition("=")
        if name.strip().lower() != "q":
            continue
        try:
            quality = float(value.strip())
        except ValueError:
            return DEFAULT_QUALITY
        if quality == 0 or math.isnan(quality):
            return DEFAULT_QUALITY
        return quality
    return DEFAULT_QUALITY


def parse_accept_language(header: str | None) -> list[tuple[str, float]]:
    """Parse an Accept-Language header into weighted candidates.

    Handles formats like:
    - "en-US,en;q=0.9,de;q=0.8"
    - "de"
    - "de-AT;q=0.5, en"

    Tags are lowercased. Candidates are sorted by descending quality; equal
    qualities keep their header order. No candidate is dropped; q=0 counts
    as an unweighted tag.

    Args:
        header: The Accept-Language header value

    Returns:
        List of (tag, quality) tuples, best first.
    """
    if not header:
        return []

    languages: list[tuple[str, float]] = []

    for raw_part in header.split(","):
        tag, *params = raw_part.strip().split(";")
        tag = tag.strip().lower()
        if not tag:
            continue

        languages.append((tag, _parse_quality(params)))

    # list.sort is stable, so ties preserve header order
    languages.sort(key=lambda x: x[1], reverse=True)
    return languages


def match_candidate(tag: str, configured_locales: Sequence[str]) -> str | None:
    """Match one Accept-Language candidate against the configured locales.

    Tries a case-insensitive exact match, then the first configured locale
    that equals the candidate's language or starts with "<language>-".
    """
    for loc in configured_locales:
        if str(loc).lower() == tag:
            return loc

    language = tag.split("-", 1)[0]
    if not language or language == "*":
        return None

    for loc in configured_locales:
        loc_lower = str(loc).lower()
        if loc_lower == language or loc_lower.startswith(language + "-"):
            return loc

    return None


def detect_locale_from_header(
    accept_language: str | None,
    configured_locales: Sequence[str] | None,
    default_locale: str | None,
) -> str | None:
    """Detect the best configured locale from an Accept-Language header.

    Never returns None when a default locale is configured: an absent header
    or a header matching nothing yields default_locale.

    Example:
        detect_locale_from_header("de;q=0.5,en;q=0.9", ["en", "de"], "en")
        # Returns: "en"
    """
    if not accept_language:
        return default_locale

    locales = list(configured_locales or ())
    for tag, _quality in parse_accept_language(accept_language):
        match = match_candidate(tag, locales)
        if match is not None:
            return match

    return default_locale
