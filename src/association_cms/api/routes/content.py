import uuid
from typing import Annotated, Any

from fastapi import APIRouter, Path, Query

from association_cms.api.deps import LocaleConfigDep, RequestLocaleDep, StoreDep
from association_cms.content import (
    ContentEntriesPublic,
    ContentEntryCreate,
    ContentEntryPublic,
    LocalizedContentPublic,
)
from association_cms.core.exceptions import (
    ResourceNotFoundError,
    UnsupportedLocaleError,
)
from association_cms.core.logging import get_logger
from association_cms.i18n import ALL_LOCALES, fetch_with_fallback, resolve_locale

logger = get_logger(__name__)

router = APIRouter(prefix="/content", tags=["content"])

ContentTypePath = Annotated[
    str,
    Path(
        description="Content type, e.g. article, tournament, sponsor",
        pattern=r"^[a-z][a-z0-9-]*$",
        max_length=100,
    ),
]


def _filters(slug: str | None) -> dict[str, Any]:
    return {"slug": slug} if slug else {}


@router.get("/{content_type}", response_model=ContentEntriesPublic)
async def list_entries(
    store: StoreDep,
    content_type: ContentTypePath,
    locale: RequestLocaleDep,
    slug: str | None = None,
    sort: str | None = Query(default=None, description="e.g. title:asc"),
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=25, ge=1, le=100),
) -> Any:
    """List entries in the request locale.

    ``?locale=all`` lists every localized variant. A locale that matches no
    configured locale yields an empty page rather than an error.
    """
    if locale is None:
        return ContentEntriesPublic(data=[], count=0)

    locale_filter = None if locale == ALL_LOCALES else locale
    filters = _filters(slug)
    count = await store.count(content_type, filters=filters, locale=locale_filter)
    entries = await store.find_many(
        content_type,
        filters=filters,
        locale=locale_filter,
        sort=sort,
        skip=skip,
        limit=limit,
    )
    return ContentEntriesPublic(data=entries, count=count)


@router.get("/{content_type}/localized", response_model=LocalizedContentPublic)
async def read_localized_entries(
    store: StoreDep,
    config: LocaleConfigDep,
    content_type: ContentTypePath,
    locale: str | None = None,
    slug: str | None = None,
    sort: str | None = None,
    limit: int = Query(default=25, ge=1, le=100),
) -> Any:
    """Entries in the requested locale, or in the default locale if it has none.

    ``fallback`` tells whether the default locale's content was returned.
    """
    result = await fetch_with_fallback(
        store,
        content_type,
        locale,
        _filters(slug),
        config=config,
        sort=sort,
        limit=limit,
    )
    return LocalizedContentPublic(
        data=result.data, locale=result.locale, fallback=result.fallback
    )


@router.get("/{content_type}/{entry_id}", response_model=ContentEntryPublic)
async def read_entry(
    store: StoreDep,
    content_type: ContentTypePath,
    entry_id: Annotated[uuid.UUID, Path(description="Entry UUID")],
) -> Any:
    entry = await store.find_one(content_type, entry_id)
    if entry is None:
        raise ResourceNotFoundError("Content entry", str(entry_id))
    return entry


@router.post("/{content_type}", response_model=ContentEntryPublic, status_code=201)
async def create_entry(
    store: StoreDep,
    config: LocaleConfigDep,
    content_type: ContentTypePath,
    entry_in: ContentEntryCreate,
) -> Any:
    """Create an entry; its locale is resolved against the configured locales."""
    locale = resolve_locale(entry_in.locale, config.locales, config.default_locale)
    if locale is None:
        raise UnsupportedLocaleError(entry_in.locale or "")

    entry = await store.create(
        content_type, {**entry_in.model_dump(), "locale": locale}
    )
    logger.info(
        "content_entry_created",
        content_type=content_type,
        entry_id=str(entry.id),
        locale=locale,
    )
    return entry
