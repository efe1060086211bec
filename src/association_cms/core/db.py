from sqlalchemy import Engine
from sqlmodel import create_engine

from association_cms.core.config import settings

engine = create_engine(
    str(settings.SQLALCHEMY_DATABASE_URI),
    pool_size=5,
    max_overflow=10,
    pool_pre_ping=True,
    pool_recycle=3600,
    echo=settings.DEBUG and settings.ENVIRONMENT == "local",
)


def get_engine() -> Engine:
    return engine
