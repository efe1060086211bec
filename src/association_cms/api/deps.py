from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy import Engine

from association_cms.content.store import ContentStore, SQLModelContentStore
from association_cms.core.config import settings
from association_cms.core.db import get_engine
from association_cms.i18n.config import LocaleConfig, get_locale_config
from association_cms.i18n.context import LOCALE_STATE_KEY
from association_cms.i18n.middleware import LOCALE_QUERY_PARAM, resolve_request_locale

LocaleConfigDep = Annotated[LocaleConfig, Depends(get_locale_config)]

_UNSET = object()


def get_content_store(engine: Annotated[Engine, Depends(get_engine)]) -> ContentStore:
    return SQLModelContentStore(engine)


StoreDep = Annotated[ContentStore, Depends(get_content_store)]


def get_request_locale(request: Request, config: LocaleConfigDep) -> str | None:
    """The locale chosen for this request.

    Normally set by LocaleMiddleware as request.state.locale; resolved here
    for routes the middleware does not cover. None means the requested
    locale matches no configured locale.
    """
    locale = getattr(request.state, LOCALE_STATE_KEY, _UNSET)
    if locale is not _UNSET:
        return locale  # type: ignore[return-value]

    return resolve_request_locale(
        request.query_params.get(LOCALE_QUERY_PARAM),
        request.headers.get("accept-language"),
        config,
        detect_from_header=settings.I18N_DETECT_FROM_HEADER,
    )


RequestLocaleDep = Annotated[str | None, Depends(get_request_locale)]
