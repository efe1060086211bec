"""Locale configuration for the content API.

The configured locale set and the default locale come from settings
(I18N_LOCALES, I18N_DEFAULT_LOCALE) and are read fresh for every
resolution, so a request always sees one consistent snapshot.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import NamedTuple

from association_cms.core.config import settings

# Reserved query value: return every localized variant, skip resolution
ALL_LOCALES = "all"


class SupportedLocale(NamedTuple):
    """A locale with its display metadata."""

    code: str
    name: str
    native_name: str


# Display names for locales the association site has used
KNOWN_LOCALES: tuple[SupportedLocale, ...] = (
    SupportedLocale("en", "English", "English"),
    SupportedLocale("en-US", "English (US)", "English (US)"),
    SupportedLocale("en-GB", "English (UK)", "English (UK)"),
    SupportedLocale("de", "German", "Deutsch"),
    SupportedLocale("de-AT", "German (Austria)", "Deutsch (Österreich)"),
)

KNOWN_LOCALE_NAMES: dict[str, str] = {
    loc.code: loc.native_name for loc in KNOWN_LOCALES
}


@dataclass(frozen=True)
class LocaleConfig:
    """Ordered configured locales plus the designated default.

    Locales are unique case-insensitively; the first declaration wins and
    keeps its casing. default_locale is not required to be configured.
    """

    locales: tuple[str, ...] = ()
    default_locale: str | None = None

    @classmethod
    def from_values(
        cls, locales: Iterable[str] | str | None, default_locale: str | None
    ) -> "LocaleConfig":
        if isinstance(locales, str):
            locales = locales.split(",")

        seen: set[str] = set()
        unique: list[str] = []
        for raw in locales or ():
            code = str(raw).strip()
            if not code or code.lower() in seen:
                continue
            seen.add(code.lower())
            unique.append(code)

        return cls(tuple(unique), (default_locale or "").strip() or None)

    def is_configured(self, locale: str | None) -> bool:
        """Case-insensitive membership in the configured set."""
        if not locale:
            return False
        return locale.lower() in {loc.lower() for loc in self.locales}


def get_locale_config() -> LocaleConfig:
    """Build the locale configuration from current settings."""
    return LocaleConfig.from_values(
        settings.I18N_LOCALES, settings.I18N_DEFAULT_LOCALE
    )
