"""Seed a welcome article in the default locale and its translations.

Gives a fresh deployment something to exercise locale resolution and
fallback against: the article exists in the default locale, in "de", and
deliberately not in the other configured locales.
"""

import logging

from sqlalchemy import Engine
from sqlmodel import Session, select

from association_cms.content.models import ContentEntry
from association_cms.core.db import engine
from association_cms.i18n.config import LocaleConfig, get_locale_config
from association_cms.i18n.resolver import resolve_locale

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

WELCOME_SLUG = "welcome"
WELCOME_TITLES: dict[str, str] = {
    "en": "Welcome to the association",
    "de": "Willkommen im Verein",
}


def init(db_engine: Engine, config: LocaleConfig) -> list[ContentEntry]:
    """Create the welcome article once; returns the entries created."""
    created: list[ContentEntry] = []
    with Session(db_engine) as session:
        existing = session.exec(
            select(ContentEntry).where(
                ContentEntry.content_type == "article",
                ContentEntry.slug == WELCOME_SLUG,
            )
        ).first()
        if existing:
            logger.info(f"Welcome article already exists: {existing.document_id}")
            return created

        document: ContentEntry | None = None
        for language, title in WELCOME_TITLES.items():
            locale = resolve_locale(language, config.locales, config.default_locale)
            if locale is None:
                logger.info(f"Locale {language} not configured, skipping")
                continue
            entry = ContentEntry(
                content_type="article",
                locale=locale,
                title=title,
                slug=WELCOME_SLUG,
                data={"body": title},
            )
            if document is not None:
                entry.document_id = document.document_id
            document = document or entry
            session.add(entry)
            created.append(entry)

        session.commit()
        for entry in created:
            session.refresh(entry)
            logger.info(f"Created welcome article in {entry.locale}")
    return created


def main() -> None:
    logger.info("Creating initial data")
    init(engine, get_locale_config())
    logger.info("Initial data created")


if __name__ == "__main__":
    main()
