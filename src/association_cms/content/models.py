from datetime import datetime
from typing import Any
import uuid

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel

from association_cms.core.base_models import (
    PaginatedResponse,
    TimestampedTable,
    TimestampResponseMixin,
)


class ContentEntryBase(SQLModel):
    title: str = Field(min_length=1, max_length=255)
    slug: str | None = Field(default=None, max_length=255, index=True)
    published_at: datetime | None = Field(default=None)


class ContentEntry(ContentEntryBase, TimestampedTable, table=True):
    """One localized variant of a document (article, event, sponsor, ...).

    All localizations of the same document share document_id.
    """

    content_type: str = Field(max_length=100, index=True)
    locale: str = Field(max_length=35, index=True)
    document_id: uuid.UUID = Field(default_factory=uuid.uuid4, index=True)
    data: dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON))


class ContentEntryCreate(ContentEntryBase):
    # Resolved against the configured locales; the default when omitted
    locale: str | None = Field(default=None, max_length=35)
    data: dict[str, Any] = Field(default_factory=dict)


class ContentEntryUpdate(SQLModel):
    """Partial update; only fields present in the payload are applied."""

    title: str | None = Field(default=None, min_length=1, max_length=255)
    slug: str | None = Field(default=None, max_length=255)
    published_at: datetime | None = None
    locale: str | None = Field(default=None, min_length=1, max_length=35)
    document_id: uuid.UUID | None = None
    data: dict[str, Any] | None = None


class ContentEntryPublic(ContentEntryBase, TimestampResponseMixin):
    id: uuid.UUID
    document_id: uuid.UUID
    content_type: str
    locale: str
    data: dict[str, Any]


ContentEntriesPublic = PaginatedResponse[ContentEntryPublic]


class LocalizedContentPublic(SQLModel):
    """Content fetched with default-locale fallback."""

    data: list[ContentEntryPublic]
    locale: str | None
    fallback: bool


class TranslationCreate(SQLModel):
    """Target locale plus fields that override the copied source values."""

    locale: str = Field(min_length=1, max_length=35)
    title: str | None = Field(default=None, min_length=1, max_length=255)
    slug: str | None = Field(default=None, max_length=255)
    data: dict[str, Any] | None = None

    def overrides(self) -> dict[str, Any]:
        return self.model_dump(exclude={"locale"}, exclude_none=True)


class BulkTranslationItem(TranslationCreate):
    entry_id: uuid.UUID


class TranslationOutcome(SQLModel):
    """Result of creating or importing one translation."""

    success: bool
    locale: str
    source_id: uuid.UUID | None = None
    source: dict[str, Any] | None = None
    entry: ContentEntryPublic | None = None
    error: str | None = None


class TranslationImport(SQLModel):
    data: list[dict[str, Any]] | dict[str, Any]
    overwrite: bool = False


class BatchSummary(SQLModel):
    data: list[TranslationOutcome]
    succeeded: int
    failed: int
    total: int
    message: str
