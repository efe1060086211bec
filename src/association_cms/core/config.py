from functools import lru_cache
from typing import Annotated, Any, Literal, Self
import warnings

from pydantic import (
    AnyUrl,
    BeforeValidator,
    computed_field,
    model_validator,
)
from pydantic_core import MultiHostUrl
from pydantic_settings import BaseSettings, SettingsConfigDict


def parse_list(v: Any) -> list[str] | str:
    if isinstance(v, str) and not v.startswith("["):
        return [i.strip() for i in v.split(",") if i.strip()]
    if isinstance(v, list | str):
        return v
    raise ValueError(v)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    API_V1_STR: str = "/api"
    PROJECT_NAME: str = "Association CMS API"
    DEBUG: bool = False

    HOST: str = "0.0.0.0"
    PORT: int = 1337
    FRONTEND_URL: str = "http://localhost:3000"

    ENVIRONMENT: Literal["local", "staging", "production"] = "local"

    CORS_ORIGINS: Annotated[list[AnyUrl] | str, BeforeValidator(parse_list)] = []

    @computed_field  # type: ignore[prop-decorator]
    @property
    def all_cors_origins(self) -> list[str]:
        """Return all CORS origins as strings."""
        origins = [str(origin).rstrip("/") for origin in self.CORS_ORIGINS]
        if self.FRONTEND_URL and self.FRONTEND_URL not in origins:
            origins.append(self.FRONTEND_URL.rstrip("/"))
        return origins

    POSTGRES_SERVER: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "changethis"
    POSTGRES_DB: str = "app"

    @model_validator(mode="after")
    def _check_default_password(self) -> Self:
        if self.POSTGRES_PASSWORD != "changethis" or self.ENVIRONMENT == "local":
            return self
        if self.ENVIRONMENT == "production":
            raise ValueError("POSTGRES_PASSWORD must be changed in production")
        warnings.warn(
            "POSTGRES_PASSWORD is still the default 'changethis'",
            UserWarning,
            stacklevel=2,
        )
        return self

    @computed_field  # type: ignore[prop-decorator]
    @property
    def SQLALCHEMY_DATABASE_URI(self) -> MultiHostUrl:
        """Build PostgreSQL connection URI for SQLAlchemy."""
        return MultiHostUrl.build(
            scheme="postgresql+psycopg",
            username=self.POSTGRES_USER,
            password=self.POSTGRES_PASSWORD,
            host=self.POSTGRES_SERVER,
            port=self.POSTGRES_PORT,
            path=self.POSTGRES_DB,
        )

    # Locales the content API serves, in declaration order. The default locale
    # is passed through unchecked when a request names no locale.
    I18N_LOCALES: Annotated[list[str] | str, BeforeValidator(parse_list)] = [
        "en",
        "de",
        "de-AT",
    ]
    I18N_DEFAULT_LOCALE: str = "en"
    # Fall back to Accept-Language when a content request has no ?locale=
    I18N_DETECT_FROM_HEADER: bool = False
    # Path prefixes the locale middleware leaves untouched
    I18N_EXCLUDED_PATHS: Annotated[list[str] | str, BeforeValidator(parse_list)] = [
        "/api/docs",
        "/api/redoc",
        "/api/openapi.json",
    ]


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
