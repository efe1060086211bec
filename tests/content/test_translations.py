from datetime import datetime
import json
import uuid

import pytest

from association_cms.content.models import BulkTranslationItem
from association_cms.content.translations import (
    ALREADY_EXISTS_MESSAGE,
    bulk_create_translations,
    create_translation,
    export_translations,
    get_all_localizations,
    get_missing_translations,
    import_translations,
)
from association_cms.core.exceptions import (
    ResourceExistsError,
    ResourceNotFoundError,
    ValidationError,
)


@pytest.fixture
def article(make_entry):
    return make_entry(
        title="Annual meeting", slug="agm", locale="en", data={"body": "Agenda"}
    )


@pytest.mark.asyncio
async def test_get_all_localizations_puts_entry_first(store, make_entry, article):
    german = make_entry(title="Jahresversammlung", locale="de", document_id=article.document_id)
    make_entry(title="Unrelated", locale="de")

    localizations = await get_all_localizations(store, "article", german.id)

    assert [e.id for e in localizations] == [german.id, article.id]


@pytest.mark.asyncio
async def test_get_all_localizations_missing_entry(store):
    assert await get_all_localizations(store, "article", uuid.uuid4()) == []


@pytest.mark.asyncio
async def test_get_missing_translations(store, make_entry, article, locale_config):
    make_entry(title="Jahresversammlung", locale="de", document_id=article.document_id)

    missing = await get_missing_translations(store, "article", article.id, locale_config)

    assert missing == ["de-AT"]


@pytest.mark.asyncio
async def test_get_missing_translations_missing_entry(store, locale_config):
    with pytest.raises(ResourceNotFoundError):
        await get_missing_translations(store, "article", uuid.uuid4(), locale_config)


@pytest.mark.asyncio
async def test_create_translation_copies_source(store, article):
    translation = await create_translation(
        store, "article", article.id, "de", {"title": "Jahresversammlung"}
    )

    assert translation.locale == "de"
    assert translation.title == "Jahresversammlung"
    assert translation.slug == "agm"
    assert translation.data == {"body": "Agenda"}
    assert translation.document_id == article.document_id
    assert translation.id != article.id


@pytest.mark.asyncio
async def test_create_translation_rejects_existing_locale(store, article):
    await create_translation(store, "article", article.id, "de")

    with pytest.raises(ResourceExistsError):
        await create_translation(store, "article", article.id, "de")


@pytest.mark.asyncio
async def test_create_translation_missing_source(store):
    with pytest.raises(ResourceNotFoundError):
        await create_translation(store, "article", uuid.uuid4(), "de")


@pytest.mark.asyncio
async def test_bulk_create_reports_each_item(store, article):
    items = [
        BulkTranslationItem(entry_id=article.id, locale="de"),
        BulkTranslationItem(entry_id=article.id, locale="de"),
        BulkTranslationItem(entry_id=uuid.uuid4(), locale="de-AT"),
    ]

    outcomes = await bulk_create_translations(store, "article", items)

    assert [o.success for o in outcomes] == [True, False, False]
    assert outcomes[0].entry is not None
    assert outcomes[0].entry.locale == "de"
    assert outcomes[1].error == "Translation with this locale already exists"
    assert outcomes[2].source_id == items[2].entry_id


@pytest.mark.asyncio
async def test_export_translations(store, make_entry, article):
    make_entry(title="Jahresversammlung", locale="de", document_id=article.document_id)

    exported = json.loads(await export_translations(store, "article", "en"))

    assert len(exported) == 1
    assert exported[0]["title"] == "Annual meeting"
    assert exported[0]["document_id"] == str(article.document_id)
    assert exported[0]["data"] == {"body": "Agenda"}


@pytest.mark.asyncio
async def test_import_creates_linked_entries(store, article):
    payload = await export_translations(store, "article", "en")

    outcomes = await import_translations(store, "article", payload, "de-AT")

    assert [o.success for o in outcomes] == [True]
    imported = outcomes[0].entry
    assert imported.locale == "de-AT"
    assert imported.id != article.id
    assert imported.document_id == article.document_id


@pytest.mark.asyncio
async def test_import_existing_entry_requires_overwrite(store, make_entry):
    existing = make_entry(title="Satzung", slug="statutes", locale="de")
    payload = {"title": "Satzung", "slug": "statutes", "data": {"version": 2}}

    refused = await import_translations(store, "article", payload, "de")
    updated = await import_translations(store, "article", payload, "de", overwrite=True)

    assert refused[0].success is False
    assert refused[0].error == ALREADY_EXISTS_MESSAGE
    assert updated[0].success is True
    assert updated[0].entry.id == existing.id
    assert updated[0].entry.data == {"version": 2}


@pytest.mark.asyncio
async def test_import_reports_invalid_items(store):
    outcomes = await import_translations(
        store, "article", [{"slug": "no-title"}, "not an object", {"title": "Ok"}], "en"
    )

    assert [o.success for o in outcomes] == [False, False, True]


@pytest.mark.asyncio
async def test_import_rejects_invalid_json(store):
    with pytest.raises(ValidationError):
        await import_translations(store, "article", "{not json", "en")


@pytest.mark.asyncio
async def test_overwrite_import_of_published_entry(store, make_entry):
    published_at = datetime(2026, 3, 1, 12, 0)
    existing = make_entry(
        title="Satzung", slug="statutes", locale="de", published_at=published_at
    )
    payload = await export_translations(store, "article", "de")

    outcomes = await import_translations(store, "article", payload, "de", overwrite=True)

    assert [o.success for o in outcomes] == [True]
    assert outcomes[0].entry.id == existing.id
    assert outcomes[0].entry.published_at == published_at
