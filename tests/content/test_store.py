from datetime import datetime
import uuid

from pydantic import ValidationError as PydanticValidationError
import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import create_engine

from association_cms.content.store import SQLModelContentStore
from association_cms.core.exceptions import ContentStoreError, ValidationError


@pytest.mark.asyncio
async def test_create_and_find_one(store):
    entry = await store.create(
        "article",
        {"title": "Annual meeting", "slug": "agm", "locale": "en", "data": {"body": "Hi"}},
    )

    found = await store.find_one("article", entry.id)
    assert found is not None
    assert found.title == "Annual meeting"
    assert found.data == {"body": "Hi"}
    assert found.document_id == entry.document_id
    assert await store.find_one("event", entry.id) is None
    assert await store.find_one("article", uuid.uuid4()) is None


@pytest.mark.asyncio
async def test_create_ignores_unknown_and_managed_fields(store):
    forced_id = uuid.uuid4()
    entry = await store.create(
        "article",
        {"id": forced_id, "title": "Hello", "locale": "en", "content_type": "event", "extra": 1},
    )

    assert entry.id != forced_id
    assert entry.content_type == "article"


@pytest.mark.asyncio
async def test_find_many_filters_by_locale_and_content_type(store, make_entry):
    make_entry(title="Welcome", locale="en")
    make_entry(title="Willkommen", locale="de")
    make_entry(title="Spring cup", locale="en", content_type="event")

    english = await store.find_many("article", locale="en")
    every_locale = await store.find_many("article", locale=None, sort="title:asc")

    assert [e.title for e in english] == ["Welcome"]
    assert [e.title for e in every_locale] == ["Welcome", "Willkommen"]


@pytest.mark.asyncio
async def test_find_many_filters_sort_and_pagination(store, make_entry):
    document_id = uuid.uuid4()
    make_entry(title="B", slug="b", locale="en", document_id=document_id)
    make_entry(title="A", slug="a", locale="de", document_id=document_id)
    make_entry(title="C", slug="c", locale="en")

    by_document = await store.find_many(
        "article", filters={"document_id": str(document_id)}, sort="title:desc"
    )
    by_slug = await store.find_many("article", filters={"slug": "c"})
    page = await store.find_many("article", sort="title", skip=1, limit=1)

    assert [e.title for e in by_document] == ["B", "A"]
    assert [e.title for e in by_slug] == ["C"]
    assert [e.title for e in page] == ["B"]


@pytest.mark.asyncio
async def test_count(store, make_entry):
    make_entry(locale="en")
    make_entry(locale="en")
    make_entry(locale="de")

    assert await store.count("article") == 3
    assert await store.count("article", locale="en") == 2
    assert await store.count("event") == 0


@pytest.mark.asyncio
async def test_rejects_unknown_filters_and_sort_fields(store):
    with pytest.raises(ValidationError):
        await store.find_many("article", filters={"data": "x"})
    with pytest.raises(ValidationError):
        await store.find_many("article", sort="data:asc")
    with pytest.raises(ValidationError):
        await store.find_many("article", sort="title:sideways")
    with pytest.raises(ValidationError):
        await store.find_many("article", filters={"document_id": "not-a-uuid"})


@pytest.mark.asyncio
async def test_update(store, make_entry):
    entry = make_entry(title="Draft", locale="en")

    updated = await store.update("article", entry.id, {"title": "Final", "id": uuid.uuid4()})

    assert updated is not None
    assert updated.id == entry.id
    assert updated.title == "Final"
    assert await store.update("event", entry.id, {"title": "x"}) is None
    assert await store.update("article", uuid.uuid4(), {"title": "x"}) is None


@pytest.mark.asyncio
async def test_database_errors_become_content_store_errors():
    # No tables created
    engine = create_engine(
        "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool
    )
    store = SQLModelContentStore(engine)

    with pytest.raises(ContentStoreError) as exc_info:
        await store.find_many("article", locale="en")

    assert exc_info.value.status_code == 503
    assert exc_info.value.details == {"operation": "find_many"}
    engine.dispose()


@pytest.mark.asyncio
async def test_update_validates_payload_values(store, make_entry):
    entry = make_entry(title="Draft", slug="draft", locale="en")

    updated = await store.update(
        "article",
        entry.id,
        {"published_at": "2026-03-01T12:00:00", "title": None, "slug": None},
    )

    assert updated.published_at == datetime(2026, 3, 1, 12, 0)
    assert updated.title == "Draft"
    assert updated.slug is None


@pytest.mark.asyncio
async def test_update_rejects_invalid_values(store, make_entry):
    entry = make_entry(title="Draft", locale="en")

    with pytest.raises(PydanticValidationError):
        await store.update("article", entry.id, {"published_at": "next tuesday"})

    assert (await store.find_one("article", entry.id)).published_at is None
