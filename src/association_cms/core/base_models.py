"""Base models and mixins for SQLModel schemas.

Database models (table=True) inherit from the composed base classes;
list endpoints respond with PaginatedResponse[T].

Example:
    class ContentEntry(ContentEntryBase, TimestampedTable, table=True):
        ...
"""

import uuid
from datetime import UTC, datetime
from typing import Generic, TypeVar

from sqlmodel import Field, SQLModel

T = TypeVar("T")


class UUIDPrimaryKeyMixin(SQLModel):
    """Standard UUID primary key for all models."""

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)


class TimestampMixin(SQLModel):
    """Created/updated timestamps for audit trail."""

    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class TimestampedTable(UUIDPrimaryKeyMixin, TimestampMixin):
    """Base for tables with timestamps."""

    pass


class TimestampResponseMixin(SQLModel):
    """For Public/Response schemas that include timestamps."""

    created_at: datetime
    updated_at: datetime


class PaginatedResponse(SQLModel, Generic[T]):
    """Standard paginated response wrapper.

    Example:
        @router.get("/content/{content_type}", response_model=PaginatedResponse[ContentEntryPublic])
        async def list_entries(...):
            return PaginatedResponse(data=entries, count=total)
    """

    data: list[T]
    count: int
