"""Content store: the persistence collaborator behind the content API.

ContentStore is the async interface the locale fallback and translation
helpers depend on. SQLModelContentStore implements it on a SQLAlchemy
engine, running every operation in a worker thread with its own Session.

Filters are equality matches on a fixed set of columns. A locale of None
means "no locale filter" (every localized variant).
"""

import asyncio
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any, Protocol, TypeVar
import uuid

from sqlalchemy import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, func, select
from sqlmodel.sql.expression import SelectOfScalar

from association_cms.content.models import ContentEntry, ContentEntryUpdate
from association_cms.core.exceptions import ContentStoreError, ValidationError
from association_cms.core.logging import get_logger

logger = get_logger(__name__)

FILTERABLE_FIELDS = frozenset({"document_id", "slug", "title", "locale"})
SORTABLE_FIELDS = frozenset(
    {"title", "slug", "locale", "created_at", "updated_at", "published_at"}
)
WRITABLE_FIELDS = frozenset(
    {"title", "slug", "locale", "document_id", "data", "published_at"}
)

R = TypeVar("R")


class ContentStore(Protocol):
    """Async access to localized content entries."""

    async def find_many(
        self,
        content_type: str,
        *,
        filters: dict[str, Any] | None = None,
        locale: str | None = None,
        sort: str | None = None,
        skip: int = 0,
        limit: int | None = 100,
    ) -> list[ContentEntry]: ...

    async def count(
        self,
        content_type: str,
        *,
        filters: dict[str, Any] | None = None,
        locale: str | None = None,
    ) -> int: ...

    async def find_one(
        self, content_type: str, entry_id: uuid.UUID
    ) -> ContentEntry | None: ...

    async def create(self, content_type: str, data: dict[str, Any]) -> ContentEntry: ...

    async def update(
        self, content_type: str, entry_id: uuid.UUID, data: dict[str, Any]
    ) -> ContentEntry | None: ...


def _coerce_uuid(field: str, value: Any) -> uuid.UUID:
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except ValueError as e:
        raise ValidationError(f"Invalid UUID for {field}: {value}", field=field) from e


def _writable(data: dict[str, Any]) -> dict[str, Any]:
    values = {k: v for k, v in data.items() if k in WRITABLE_FIELDS}
    if values.get("document_id") is not None:
        values["document_id"] = _coerce_uuid("document_id", values["document_id"])
    elif "document_id" in values:
        del values["document_id"]
    return values


def _parse_sort(sort: str) -> Any:
    field, _, direction = sort.partition(":")
    field = field.strip()
    direction = (direction or "asc").strip().lower()
    if field not in SORTABLE_FIELDS:
        raise ValidationError(f"Cannot sort by {field}", field="sort")
    if direction not in ("asc", "desc"):
        raise ValidationError(f"Invalid sort direction: {direction}", field="sort")
    column = getattr(ContentEntry, field)
    return column.desc() if direction == "desc" else column.asc()


class SQLModelContentStore:
    """ContentStore backed by the SQLModel ContentEntry table."""

    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    async def _run(self, operation: str, fn: Callable[..., R], *args: Any) -> R:
        try:
            return await asyncio.to_thread(fn, *args)
        except SQLAlchemyError as e:
            logger.error(
                "content_store_failed",
                operation=operation,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise ContentStoreError(operation, type(e).__name__) from e

    def _statement(
        self,
        content_type: str,
        filters: dict[str, Any] | None,
        locale: str | None,
    ) -> SelectOfScalar[ContentEntry]:
        statement = select(ContentEntry).where(ContentEntry.content_type == content_type)
        for field, value in (filters or {}).items():
            if field not in FILTERABLE_FIELDS:
                raise ValidationError(f"Cannot filter by {field}", field=field)
            if field == "document_id":
                value = _coerce_uuid(field, value)
            statement = statement.where(getattr(ContentEntry, field) == value)
        if locale is not None:
            statement = statement.where(ContentEntry.locale == locale)
        return statement

    def _find_many(
        self,
        content_type: str,
        filters: dict[str, Any] | None,
        locale: str | None,
        sort: str | None,
        skip: int,
        limit: int | None,
    ) -> list[ContentEntry]:
        statement = self._statement(content_type, filters, locale)
        if sort:
            statement = statement.order_by(_parse_sort(sort))
        else:
            statement = statement.order_by(ContentEntry.created_at)
        statement = statement.offset(skip)
        if limit is not None:
            statement = statement.limit(limit)
        with Session(self.engine) as session:
            return list(session.exec(statement).all())

    def _count(
        self,
        content_type: str,
        filters: dict[str, Any] | None,
        locale: str | None,
    ) -> int:
        statement = self._statement(content_type, filters, locale)
        count_statement = select(func.count()).select_from(statement.subquery())
        with Session(self.engine) as session:
            return session.exec(count_statement).one()

    def _find_one(self, content_type: str, entry_id: uuid.UUID) -> ContentEntry | None:
        with Session(self.engine) as session:
            entry = session.get(ContentEntry, entry_id)
            if entry is None or entry.content_type != content_type:
                return None
            return entry

    def _create(self, content_type: str, data: dict[str, Any]) -> ContentEntry:
        entry = ContentEntry.model_validate(
            _writable(data), update={"content_type": content_type}
        )
        with Session(self.engine) as session:
            session.add(entry)
            session.commit()
            session.refresh(entry)
            return entry

    def _update(
        self, content_type: str, entry_id: uuid.UUID, data: dict[str, Any]
    ) -> ContentEntry | None:
        entry_in = ContentEntryUpdate.model_validate(_writable(data))
        # Columns that cannot be NULL keep their value when the payload has null
        update_data = {
            k: v
            for k, v in entry_in.model_dump(exclude_unset=True).items()
            if v is not None or k in ("slug", "published_at")
        }
        with Session(self.engine) as session:
            entry = session.get(ContentEntry, entry_id)
            if entry is None or entry.content_type != content_type:
                return None
            entry.sqlmodel_update(update_data)
            entry.updated_at = datetime.now(UTC)
            session.add(entry)
            session.commit()
            session.refresh(entry)
            return entry

    async def find_many(
        self,
        content_type: str,
        *,
        filters: dict[str, Any] | None = None,
        locale: str | None = None,
        sort: str | None = None,
        skip: int = 0,
        limit: int | None = 100,
    ) -> list[ContentEntry]:
        return await self._run(
            "find_many", self._find_many, content_type, filters, locale, sort, skip, limit
        )

    async def count(
        self,
        content_type: str,
        *,
        filters: dict[str, Any] | None = None,
        locale: str | None = None,
    ) -> int:
        return await self._run("count", self._count, content_type, filters, locale)

    async def find_one(
        self, content_type: str, entry_id: uuid.UUID
    ) -> ContentEntry | None:
        return await self._run("find_one", self._find_one, content_type, entry_id)

    async def create(self, content_type: str, data: dict[str, Any]) -> ContentEntry:
        return await self._run("create", self._create, content_type, data)

    async def update(
        self, content_type: str, entry_id: uuid.UUID, data: dict[str, Any]
    ) -> ContentEntry | None:
        return await self._run("update", self._update, content_type, entry_id, data)
