import pytest
from pydantic import ValidationError

from association_cms.core.config import Settings


def test_locale_settings_defaults(monkeypatch) -> None:
    for name in ("I18N_LOCALES", "I18N_DEFAULT_LOCALE", "I18N_DETECT_FROM_HEADER"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)

    assert settings.I18N_LOCALES == ["en", "de", "de-AT"]
    assert settings.I18N_DEFAULT_LOCALE == "en"
    assert settings.I18N_DETECT_FROM_HEADER is False


def test_locales_from_comma_separated_env(monkeypatch) -> None:
    monkeypatch.setenv("I18N_LOCALES", "de-AT, en ,,fr")
    monkeypatch.setenv("I18N_DETECT_FROM_HEADER", "true")

    settings = Settings(_env_file=None)

    assert settings.I18N_LOCALES == ["de-AT", "en", "fr"]
    assert settings.I18N_DETECT_FROM_HEADER is True


def test_locales_from_json_env(monkeypatch) -> None:
    monkeypatch.setenv("I18N_LOCALES", '["en", "de"]')

    assert Settings(_env_file=None).I18N_LOCALES == ["en", "de"]


def test_default_password_rejected_in_production() -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, ENVIRONMENT="production", POSTGRES_PASSWORD="changethis")


def test_database_uri() -> None:
    settings = Settings(
        _env_file=None, POSTGRES_SERVER="db", POSTGRES_PASSWORD="secret", POSTGRES_DB="cms"
    )

    assert str(settings.SQLALCHEMY_DATABASE_URI).startswith("postgresql+psycopg://")
    assert str(settings.SQLALCHEMY_DATABASE_URI).endswith("@db:5432/cms")
