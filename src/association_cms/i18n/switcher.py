from pydantic import BaseModel
from starlette.datastructures import URL

from association_cms.i18n.config import KNOWN_LOCALE_NAMES, LocaleConfig


class LocaleInfo(BaseModel):
    code: str
    name: str
    is_default: bool
    is_available: bool


class LocaleSwitcher:
    """Read-only view over a LocaleConfig for locale pickers and links.

    Availability here is exact membership, unlike resolve_locale which
    matches case-insensitively and by language.
    """

    def __init__(self, config: LocaleConfig) -> None:
        self.config = config

    def get_available_locales(self) -> list[str]:
        return list(self.config.locales)

    def get_default_locale(self) -> str | None:
        return self.config.default_locale

    def is_locale_available(self, locale: str) -> bool:
        return locale in self.config.locales

    def get_localized_url(self, current_url: str, new_locale: str) -> str:
        """Point a URL at another locale via the ``locale`` query parameter.

        Returns the path and query only. Unavailable locales leave the URL
        unchanged.
        """
        if not self.is_locale_available(new_locale):
            return current_url

        url = URL(current_url).include_query_params(locale=new_locale)
        return f"{url.path or '/'}?{url.query}"

    def get_locale_name(self, locale: str) -> str:
        return KNOWN_LOCALE_NAMES.get(locale, locale)

    def get_locale_info(self, locale: str) -> LocaleInfo:
        return LocaleInfo(
            code=locale,
            name=self.get_locale_name(locale),
            is_default=locale == self.config.default_locale,
            is_available=self.is_locale_available(locale),
        )
