"""Locale middleware for content API requests.

Normalizes the ``locale`` query parameter before route handlers run:
1. ``?locale=all`` passes through untouched ("every localized variant")
2. ``?locale=<tag>`` is resolved against the configured locales
3. no ``?locale=``: Accept-Language detection when enabled, else the default

The outcome is published as request.state.locale (and the locale
contextvar): the configured tag, "all", or None when the requested locale
matches nothing. Handlers decide what None means. Resolved locales are also
written back into the query string in their configured casing.

Only paths under the API prefix are touched; docs, OpenAPI and any other
excluded prefixes are left alone.

Uses pure ASGI middleware to avoid BaseHTTPMiddleware's contextvars issues.
See: https://github.com/encode/starlette/discussions/1729
"""

from collections.abc import Callable, Sequence

from starlette.datastructures import Headers, MutableHeaders, QueryParams
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from association_cms.core.logging import get_logger
from association_cms.i18n.config import ALL_LOCALES, LocaleConfig, get_locale_config
from association_cms.i18n.context import (
    LOCALE_STATE_KEY,
    reset_locale,
    reset_request_state,
    set_locale,
    set_request_state,
)
from association_cms.i18n.detection import detect_locale_from_header
from association_cms.i18n.resolver import resolve_locale

logger = get_logger(__name__)

LOCALE_QUERY_PARAM = "locale"


def resolve_request_locale(
    requested: str | None,
    accept_language: str | None,
    config: LocaleConfig,
    *,
    detect_from_header: bool = False,
) -> str | None:
    """Decide the locale for one request.

    Returns "all" unchanged, the resolved configured locale, the default
    locale when nothing was requested or detected, or None when an explicit
    request cannot be resolved.
    """
    if requested == ALL_LOCALES:
        return ALL_LOCALES

    if not requested and detect_from_header and accept_language:
        detected = detect_locale_from_header(
            accept_language, config.locales, config.default_locale
        )
        # Nothing matched: an unconfigured default passes through unchecked
        if detected == config.default_locale and not config.is_configured(detected):
            return detected
        requested = detected

    return resolve_locale(requested, config.locales, config.default_locale)


class LocaleMiddleware:
    """Pure ASGI middleware resolving the request locale for content routes.

    Also adds a Content-Language header when a concrete locale was chosen.
    """

    def __init__(
        self,
        app: ASGIApp,
        path_prefix: str = "/api",
        exclude_paths: Sequence[str] = (),
        detect_from_header: bool = False,
        config_provider: Callable[[], LocaleConfig] = get_locale_config,
    ) -> None:
        self.app = app
        self.path_prefix = path_prefix.rstrip("/")
        self.exclude_paths = tuple(exclude_paths)
        self.detect_from_header = detect_from_header
        self.config_provider = config_provider

    def applies_to(self, path: str) -> bool:
        if path != self.path_prefix and not path.startswith(self.path_prefix + "/"):
            return False
        return not any(path.startswith(prefix) for prefix in self.exclude_paths)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI interface."""
        if scope["type"] != "http" or not self.applies_to(scope.get("path", "")):
            await self.app(scope, receive, send)
            return

        query = QueryParams(scope.get("query_string", b""))
        requested = query.get(LOCALE_QUERY_PARAM)
        accept_language = Headers(scope=scope).get("accept-language")

        # Read once per request so handlers see one consistent snapshot
        config = self.config_provider()
        locale = resolve_request_locale(
            requested,
            accept_language,
            config,
            detect_from_header=self.detect_from_header,
        )

        if locale is not None and locale != ALL_LOCALES and locale != requested:
            params = [(k, v) for k, v in query.multi_items() if k != LOCALE_QUERY_PARAM]
            params.append((LOCALE_QUERY_PARAM, locale))
            scope["query_string"] = str(QueryParams(params)).encode("latin-1")

        if locale is None:
            logger.debug("locale_unresolved", requested=requested, path=scope["path"])

        if "state" not in scope:
            scope["state"] = {}
        scope["state"][LOCALE_STATE_KEY] = locale

        state_token = set_request_state(scope["state"])
        locale_token = set_locale(locale)

        async def send_with_locale(message: Message) -> None:
            """Add Content-Language for concrete locales unless already set."""
            if message["type"] == "http.response.start":
                current_locale = scope["state"].get(LOCALE_STATE_KEY, locale)
                if current_locale and current_locale != ALL_LOCALES:
                    response_headers = MutableHeaders(raw=list(message.get("headers", [])))
                    response_headers.setdefault("Content-Language", current_locale)
                    message["headers"] = response_headers.raw

            await send(message)

        try:
            await self.app(scope, receive, send_with_locale)
        finally:
            reset_locale(locale_token)
            reset_request_state(state_token)
