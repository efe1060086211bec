"""Request-scoped locale context using contextvars.

The locale middleware publishes the resolved locale in two places:
- a ContextVar, for async code running in the request task
- the ASGI scope state dict (request.state.locale), which sync
  dependencies running in the threadpool can also see

A resolved locale of None means the request named a locale that matches no
configured locale; "all" means every localized variant was requested.
"""

from contextvars import ContextVar, Token
from typing import Any

# Context variable for the current request's locale
_locale_context: ContextVar[str | None] = ContextVar("locale", default=None)

# Reference to request.scope["state"], set by the middleware
_request_state: ContextVar[dict[str, Any] | None] = ContextVar(
    "request_state", default=None
)

# Key in request state; exposed to handlers as request.state.locale
LOCALE_STATE_KEY = "locale"


def get_locale() -> str | None:
    """Get the current request's resolved locale.

    Request state wins over the contextvar since sync dependencies may
    have updated it from another thread.
    """
    state = _request_state.get()
    if state is not None and LOCALE_STATE_KEY in state:
        locale_value = state[LOCALE_STATE_KEY]
        if locale_value is None or isinstance(locale_value, str):
            return locale_value

    return _locale_context.get()


def set_locale(locale: str | None) -> Token[str | None]:
    """Set the locale for the current request context.

    Returns:
        Token that can be used with reset_locale to restore previous value.
    """
    state = _request_state.get()
    if state is not None:
        state[LOCALE_STATE_KEY] = locale

    return _locale_context.set(locale)


def reset_locale(token: Token[str | None]) -> None:
    """Reset the locale to its previous value."""
    _locale_context.reset(token)


def set_request_state(state: dict[str, Any] | None) -> Token[dict[str, Any] | None]:
    """Point the context at the request's scope state dict (or clear it)."""
    return _request_state.set(state)


def reset_request_state(token: Token[dict[str, Any] | None]) -> None:
    _request_state.reset(token)
