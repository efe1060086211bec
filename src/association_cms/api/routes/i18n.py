import uuid
from typing import Annotated, Any

from fastapi import APIRouter, Header, Path, Query
from fastapi.responses import Response
from pydantic import BaseModel

from association_cms.api.deps import LocaleConfigDep, StoreDep
from association_cms.content.models import (
    BatchSummary,
    BulkTranslationItem,
    ContentEntryPublic,
    TranslationCreate,
    TranslationImport,
    TranslationOutcome,
)
from association_cms.content.translations import (
    bulk_create_translations,
    create_translation,
    export_translations,
    get_all_localizations,
    get_missing_translations,
    import_translations,
)
from association_cms.core.exceptions import UnsupportedLocaleError
from association_cms.i18n import (
    LocaleConfig,
    LocaleInfo,
    LocaleSwitcher,
    detect_locale_from_header,
    resolve_locale,
    translate,
)

router = APIRouter(prefix="/i18n", tags=["i18n"])

ContentTypePath = Annotated[str, Path(pattern=r"^[a-z][a-z0-9-]*$", max_length=100)]
EntryIdPath = Annotated[uuid.UUID, Path(description="Entry UUID")]


class LocalesPublic(BaseModel):
    data: list[LocaleInfo]
    default_locale: str | None


class DetectedLocalePublic(BaseModel):
    detected: str | None
    accept_language: str | None
    locale_info: LocaleInfo | None


class LocaleListPublic(BaseModel):
    data: list[str]


def _configured_locale(locale: str, config: LocaleConfig) -> str:
    """Resolve a target locale for writes; unknown locales are rejected."""
    resolved = resolve_locale(locale, config.locales, config.default_locale)
    if resolved is None:
        raise UnsupportedLocaleError(locale)
    return resolved


def _summary(outcomes: list[TranslationOutcome], message_key: str) -> BatchSummary:
    succeeded = sum(1 for outcome in outcomes if outcome.success)
    failed = len(outcomes) - succeeded
    return BatchSummary(
        data=outcomes,
        succeeded=succeeded,
        failed=failed,
        total=len(outcomes),
        message=translate(message_key, succeeded=succeeded, failed=failed),
    )


@router.get("/locales", response_model=LocalesPublic)
def read_locales(config: LocaleConfigDep) -> Any:
    """Configured locales with display names."""
    switcher = LocaleSwitcher(config)
    return LocalesPublic(
        data=[switcher.get_locale_info(loc) for loc in switcher.get_available_locales()],
        default_locale=switcher.get_default_locale(),
    )


@router.get("/detect", response_model=DetectedLocalePublic)
def detect_locale(
    config: LocaleConfigDep,
    accept_language: Annotated[str | None, Header()] = None,
) -> Any:
    """Detect the best configured locale from the Accept-Language header."""
    detected = detect_locale_from_header(
        accept_language, config.locales, config.default_locale
    )
    switcher = LocaleSwitcher(config)
    return DetectedLocalePublic(
        detected=detected,
        accept_language=accept_language,
        locale_info=switcher.get_locale_info(detected) if detected else None,
    )


@router.get(
    "/localizations/{content_type}/{entry_id}",
    response_model=list[ContentEntryPublic],
)
async def read_localizations(
    store: StoreDep, content_type: ContentTypePath, entry_id: EntryIdPath
) -> Any:
    """The entry and all its other localizations (empty if it does not exist)."""
    return await get_all_localizations(store, content_type, entry_id)


@router.get("/missing/{content_type}/{entry_id}", response_model=LocaleListPublic)
async def read_missing_translations(
    store: StoreDep,
    config: LocaleConfigDep,
    content_type: ContentTypePath,
    entry_id: EntryIdPath,
) -> Any:
    """Configured locales the entry has not been translated into yet."""
    missing = await get_missing_translations(store, content_type, entry_id, config)
    return LocaleListPublic(data=missing)


@router.post(
    "/translate/{content_type}/{entry_id}",
    response_model=ContentEntryPublic,
    status_code=201,
)
async def create_translation_endpoint(
    store: StoreDep,
    config: LocaleConfigDep,
    content_type: ContentTypePath,
    entry_id: EntryIdPath,
    translation_in: TranslationCreate,
) -> Any:
    """Copy an entry into another configured locale."""
    locale = _configured_locale(translation_in.locale, config)
    return await create_translation(
        store, content_type, entry_id, locale, translation_in.overrides()
    )


@router.post("/translate/{content_type}", response_model=BatchSummary)
async def bulk_create_translations_endpoint(
    store: StoreDep,
    config: LocaleConfigDep,
    content_type: ContentTypePath,
    items: list[BulkTranslationItem],
) -> Any:
    """Create several translations; each item reports its own outcome."""
    outcomes: list[TranslationOutcome] = []
    for item in items:
        locale = resolve_locale(item.locale, config.locales, config.default_locale)
        if locale is None:
            outcomes.append(
                TranslationOutcome(
                    success=False,
                    locale=item.locale,
                    source_id=item.entry_id,
                    error=UnsupportedLocaleError(item.locale).message,
                )
            )
            continue
        resolved = item.model_copy(update={"locale": locale})
        outcomes.extend(
            await bulk_create_translations(store, content_type, [resolved])
        )
    return _summary(outcomes, "translations_created")


@router.get("/export/{content_type}/{locale}")
async def export_translations_endpoint(
    store: StoreDep,
    config: LocaleConfigDep,
    content_type: ContentTypePath,
    locale: str,
    slug: str | None = None,
    download: bool = Query(default=False),
) -> Response:
    """Export a locale's entries as JSON, optionally as a file download."""
    target = _configured_locale(locale, config)
    payload = await export_translations(
        store, content_type, target, {"slug": slug} if slug else None
    )
    headers = {}
    if download:
        headers["Content-Disposition"] = (
            f'attachment; filename="{content_type}_{target}.json"'
        )
    return Response(content=payload, media_type="application/json", headers=headers)


@router.post("/import/{content_type}/{locale}", response_model=BatchSummary)
async def import_translations_endpoint(
    store: StoreDep,
    config: LocaleConfigDep,
    content_type: ContentTypePath,
    locale: str,
    import_in: TranslationImport,
) -> Any:
    """Import entries into a configured locale."""
    target = _configured_locale(locale, config)
    outcomes = await import_translations(
        store, content_type, import_in.data, target, overwrite=import_in.overwrite
    )
    return _summary(outcomes, "import_completed")
