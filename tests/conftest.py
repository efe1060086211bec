from collections.abc import Callable, Generator
from typing import Any

from fastapi.testclient import TestClient
import pytest
from sqlalchemy import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from association_cms.api.deps import get_content_store
from association_cms.content.models import ContentEntry
from association_cms.content.store import SQLModelContentStore
from association_cms.i18n.config import LocaleConfig
from association_cms.main import app


@pytest.fixture
def engine() -> Generator[Engine, None, None]:
    # One shared in-memory connection so worker threads see the same data
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def store(engine: Engine) -> SQLModelContentStore:
    return SQLModelContentStore(engine)


@pytest.fixture
def locale_config() -> LocaleConfig:
    """Mirrors the default I18N_LOCALES / I18N_DEFAULT_LOCALE settings."""
    return LocaleConfig.from_values(["en", "de", "de-AT"], "en")


@pytest.fixture
def make_entry(engine: Engine) -> Callable[..., ContentEntry]:
    def _make(**values: Any) -> ContentEntry:
        values.setdefault("content_type", "article")
        values.setdefault("title", "Untitled")
        entry = ContentEntry(**values)
        with Session(engine) as session:
            session.add(entry)
            session.commit()
            session.refresh(entry)
        return entry

    return _make


@pytest.fixture
def client(store: SQLModelContentStore) -> Generator[TestClient, None, None]:
    app.dependency_overrides[get_content_store] = lambda: store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
