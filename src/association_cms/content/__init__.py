from association_cms.content.models import (
    ContentEntriesPublic,
    ContentEntry,
    ContentEntryBase,
    ContentEntryCreate,
    ContentEntryPublic,
    LocalizedContentPublic,
)
from association_cms.content.store import ContentStore, SQLModelContentStore

__all__ = [
    # Models
    "ContentEntriesPublic",
    "ContentEntry",
    "ContentEntryBase",
    "ContentEntryCreate",
    "ContentEntryPublic",
    "LocalizedContentPublic",
    # Store
    "ContentStore",
    "SQLModelContentStore",
]
