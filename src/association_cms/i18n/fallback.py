"""Fetch localized content, falling back to the default locale.

The requested locale is resolved against the configured set first. If the
resolved locale has no content, the same query is repeated once against the
default locale. The two queries are strictly sequential and there is never
more than one fallback query per call.

If the primary query fails and a different default exists, the fallback
query is attempted once; when that fails too, the original error is raised.
"""

from dataclasses import dataclass
from typing import Any

from association_cms.content.store import ContentStore
from association_cms.core.logging import get_logger
from association_cms.i18n.config import ALL_LOCALES, LocaleConfig, get_locale_config
from association_cms.i18n.resolver import resolve_locale

logger = get_logger(__name__)


@dataclass(frozen=True)
class FallbackResult:
    """Content plus the locale that actually produced it.

    data is a list for collection lookups and an entry or None for single
    lookups.
    """

    data: Any
    locale: str | None
    fallback: bool


def _has_content(content: Any) -> bool:
    if isinstance(content, list | tuple):
        return len(content) > 0
    return content is not None


def _empty(single: bool) -> Any:
    return None if single else []


async def fetch_with_fallback(
    store: ContentStore,
    content_type: str,
    requested_locale: str | None,
    filters: dict[str, Any] | None = None,
    *,
    config: LocaleConfig | None = None,
    single: bool = False,
    **options: Any,
) -> FallbackResult:
    """Query content in the requested locale, falling back to the default.

    Args:
        store: Content store to query
        content_type: Content type (e.g., "article")
        requested_locale: Raw requested locale; "all" disables locale filtering
        filters: Equality filters applied to both queries
        config: Locale configuration (read from settings when omitted)
        single: Return the first matching entry instead of a list
        **options: Passed through to store.find_many (sort, skip, limit)

    Returns:
        FallbackResult tagged with the locale that produced the data.

    Example:
        result = await fetch_with_fallback(store, "article", "de-AT", {"slug": "agm"})
        # result.fallback is True when only the default-locale article exists
    """
    config = config or get_locale_config()
    default_locale = config.default_locale
    filters = dict(filters or {})
    filters.pop("locale", None)
    if single:
        options["limit"] = 1

    async def query(locale: str | None) -> Any:
        entries = await store.find_many(
            content_type, filters=filters, locale=locale, **options
        )
        if single:
            return entries[0] if entries else None
        return list(entries)

    if requested_locale == ALL_LOCALES:
        return FallbackResult(await query(None), ALL_LOCALES, False)

    target_locale = (
        resolve_locale(requested_locale, config.locales, default_locale)
        or default_locale
    )
    if target_locale is None:
        # Nothing configured to resolve to; never query without a locale filter
        return FallbackResult(_empty(single), None, False)
    can_fall_back = default_locale is not None and target_locale != default_locale

    try:
        content = await query(target_locale)
    except Exception as primary_error:
        if not can_fall_back:
            raise
        logger.warning(
            "localized_query_failed",
            content_type=content_type,
            locale=target_locale,
            fallback_locale=default_locale,
            error=str(primary_error),
            error_type=type(primary_error).__name__,
        )
        try:
            fallback_content = await query(default_locale)
        except Exception as fallback_error:
            logger.error(
                "fallback_query_failed",
                content_type=content_type,
                locale=default_locale,
                error=str(fallback_error),
                error_type=type(fallback_error).__name__,
            )
            raise primary_error
        return FallbackResult(
            fallback_content if _has_content(fallback_content) else _empty(single),
            default_locale,
            True,
        )

    if _has_content(content):
        return FallbackResult(content, target_locale, False)

    if can_fall_back:
        fallback_content = await query(default_locale)
        if _has_content(fallback_content):
            logger.info(
                "content_locale_fallback",
                content_type=content_type,
                requested_locale=requested_locale,
                locale=target_locale,
                fallback_locale=default_locale,
            )
            return FallbackResult(fallback_content, default_locale, True)

    return FallbackResult(_empty(single), target_locale, False)
