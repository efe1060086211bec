"""Translation management helpers.

A document's localizations are the entries sharing its document_id, one
per locale. These helpers copy, list, export and import them through a
ContentStore; they never resolve locales themselves, callers pass
configured locale tags.
"""

from collections.abc import Iterable
import json
from typing import Any
import uuid

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from association_cms.content.models import (
    BulkTranslationItem,
    ContentEntry,
    ContentEntryPublic,
    TranslationOutcome,
)
from association_cms.content.store import ContentStore
from association_cms.core.exceptions import (
    AppException,
    ResourceExistsError,
    ResourceNotFoundError,
    ValidationError,
)
from association_cms.core.logging import get_logger
from association_cms.i18n.config import LocaleConfig

logger = get_logger(__name__)

_entries_adapter = TypeAdapter(list[ContentEntryPublic])

ALREADY_EXISTS_MESSAGE = "Translation already exists. Set overwrite=true to update."


async def get_all_localizations(
    store: ContentStore, content_type: str, entry_id: uuid.UUID
) -> list[ContentEntry]:
    """Return the entry followed by its other localizations.

    Returns an empty list when the entry does not exist.
    """
    entry = await store.find_one(content_type, entry_id)
    if entry is None:
        return []

    siblings = await store.find_many(
        content_type, filters={"document_id": entry.document_id}, limit=None
    )
    return [entry, *(s for s in siblings if s.id != entry.id)]


async def get_missing_translations(
    store: ContentStore,
    content_type: str,
    entry_id: uuid.UUID,
    config: LocaleConfig,
) -> list[str]:
    """Configured locales the entry's document has no localization for.

    Raises:
        ResourceNotFoundError: If the entry does not exist
    """
    localizations = await get_all_localizations(store, content_type, entry_id)
    if not localizations:
        raise ResourceNotFoundError("Content entry", str(entry_id))

    existing = {entry.locale.lower() for entry in localizations}
    return [locale for locale in config.locales if locale.lower() not in existing]


async def create_translation(
    store: ContentStore,
    content_type: str,
    source_id: uuid.UUID,
    target_locale: str,
    overrides: dict[str, Any] | None = None,
) -> ContentEntry:
    """Copy an entry into another locale of the same document.

    Title, slug and data are copied from the source, then overridden.
    Publication state is not copied.

    Raises:
        ResourceNotFoundError: If the source entry does not exist
        ResourceExistsError: If the document already has that locale
    """
    source = await store.find_one(content_type, source_id)
    if source is None:
        raise ResourceNotFoundError("Content entry", str(source_id))

    existing = await store.find_many(
        content_type,
        filters={"document_id": source.document_id},
        locale=target_locale,
        limit=1,
    )
    if existing:
        raise ResourceExistsError("Translation", "locale")

    values: dict[str, Any] = {
        "title": source.title,
        "slug": source.slug,
        "data": dict(source.data or {}),
        **(overrides or {}),
        "locale": target_locale,
        "document_id": source.document_id,
    }
    translation = await store.create(content_type, values)

    logger.info(
        "translation_created",
        content_type=content_type,
        source_id=str(source_id),
        entry_id=str(translation.id),
        locale=target_locale,
    )
    return translation


async def bulk_create_translations(
    store: ContentStore,
    content_type: str,
    items: Iterable[BulkTranslationItem],
) -> list[TranslationOutcome]:
    """Create several translations; a failing item does not stop the batch."""
    outcomes: list[TranslationOutcome] = []

    for item in items:
        try:
            translation = await create_translation(
                store, content_type, item.entry_id, item.locale, item.overrides()
            )
        except (AppException, PydanticValidationError) as e:
            logger.warning(
                "translation_create_failed",
                content_type=content_type,
                source_id=str(item.entry_id),
                locale=item.locale,
                error=str(e),
            )
            outcomes.append(
                TranslationOutcome(
                    success=False,
                    locale=item.locale,
                    source_id=item.entry_id,
                    error=str(e),
                )
            )
            continue

        outcomes.append(
            TranslationOutcome(
                success=True,
                locale=item.locale,
                source_id=item.entry_id,
                entry=ContentEntryPublic.model_validate(translation),
            )
        )

    return outcomes


async def export_translations(
    store: ContentStore,
    content_type: str,
    locale: str,
    filters: dict[str, Any] | None = None,
) -> str:
    """Export every entry of a content type in one locale as a JSON array."""
    entries = await store.find_many(
        content_type, filters=filters, locale=locale, limit=None
    )
    validated = _entries_adapter.validate_python(entries, from_attributes=True)
    return _entries_adapter.dump_json(validated, indent=2).decode()


def _load_import_payload(payload: str | bytes | dict | list) -> list[Any]:
    if isinstance(payload, str | bytes):
        try:
            payload = json.loads(payload)
        except ValueError as e:
            raise ValidationError(f"Invalid JSON: {e}", field="data") from e
    return payload if isinstance(payload, list) else [payload]


async def import_translations(
    store: ContentStore,
    content_type: str,
    payload: str | bytes | dict | list,
    target_locale: str,
    *,
    overwrite: bool = False,
) -> list[TranslationOutcome]:
    """Import entries (e.g. a previous export) into a locale.

    An entry whose slug and title match an existing entry in the target
    locale is reported as a failure, or updated in place when overwrite is
    set. Identifiers and timestamps in the payload are ignored; document_id
    is kept so imported entries stay linked to their source document.
    """
    outcomes: list[TranslationOutcome] = []

    for item in _load_import_payload(payload):
        source = item if isinstance(item, dict) else None
        try:
            if source is None:
                raise ValidationError("Imported entries must be objects")

            match = {k: source[k] for k in ("slug", "title") if source.get(k)}
            existing = (
                await store.find_many(
                    content_type, filters=match, locale=target_locale, limit=1
                )
                if match
                else []
            )
            if existing and not overwrite:
                outcomes.append(
                    TranslationOutcome(
                        success=False,
                        locale=target_locale,
                        source=source,
                        error=ALREADY_EXISTS_MESSAGE,
                    )
                )
                continue

            values = {**source, "locale": target_locale}
            if existing:
                entry = await store.update(content_type, existing[0].id, values)
                if entry is None:
                    raise ResourceNotFoundError("Content entry", str(existing[0].id))
            else:
                entry = await store.create(content_type, values)
        except (AppException, PydanticValidationError) as e:
            logger.warning(
                "translation_import_failed",
                content_type=content_type,
                locale=target_locale,
                error=str(e),
            )
            outcomes.append(
                TranslationOutcome(
                    success=False, locale=target_locale, source=source, error=str(e)
                )
            )
            continue

        outcomes.append(
            TranslationOutcome(
                success=True,
                locale=target_locale,
                source=source,
                entry=ContentEntryPublic.model_validate(entry),
            )
        )

    return outcomes
