"""FastAPI application entry point."""

from contextlib import asynccontextmanager
import uuid

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.routing import APIRoute
from structlog import contextvars

from association_cms import __version__
from association_cms.api.main import api_router
from association_cms.core.config import settings
from association_cms.core.exceptions import AppException
from association_cms.core.logging import get_logger, setup_logging
from association_cms.i18n import (
    LocaleMiddleware,
    get_locale,
    get_locale_config,
    init_translations,
    translate,
)
from association_cms.i18n.translator import translation_locale_for

setup_logging()
logger = get_logger(__name__)


def custom_generate_unique_id(route: APIRoute) -> str:
    """Generate operation IDs of the form {tag}-{route_name}."""
    if route.tags:
        return f"{route.tags[0]}-{route.name}"
    return route.name


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    init_translations()

    locale_config = get_locale_config()
    logger.info(
        "application_startup",
        environment=settings.ENVIRONMENT,
        debug=settings.DEBUG,
        locales=list(locale_config.locales),
        default_locale=locale_config.default_locale,
        default_locale_configured=locale_config.is_configured(
            locale_config.default_locale
        ),
        detect_from_header=settings.I18N_DETECT_FROM_HEADER,
    )

    yield

    logger.info("application_shutdown")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=__version__,
        openapi_url=f"{settings.API_V1_STR}/openapi.json",
        docs_url=f"{settings.API_V1_STR}/docs",
        redoc_url=f"{settings.API_V1_STR}/redoc",
        lifespan=lifespan,
        generate_unique_id_function=custom_generate_unique_id,
    )

    @app.exception_handler(AppException)
    async def app_exception_handler(
        request: Request, exc: AppException
    ) -> JSONResponse:
        """Render AppException subclasses as JSON in the request locale."""
        locale = translation_locale_for(get_locale())

        translated_message = exc.message
        if exc.message_key:
            translated_message = translate(exc.message_key, locale, **exc.params)

        logger.warning(
            "app_exception",
            error_code=exc.error_code,
            message=exc.message,
            translated_message=translated_message,
            locale=locale,
            status_code=exc.status_code,
            details=exc.details,
            path=str(request.url.path),
        )

        return JSONResponse(
            status_code=exc.status_code,
            content={**exc.to_dict(), "message": translated_message},
            headers={"Content-Language": locale},
        )

    @app.middleware("http")
    async def add_request_id(request: Request, call_next):
        """Add unique request ID to each request for tracing."""
        request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))
        contextvars.clear_contextvars()
        contextvars.bind_contextvars(request_id=request_id)

        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response

    if settings.all_cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.all_cors_origins,
            allow_credentials=True,
            allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
            allow_headers=[
                "Accept",
                "Accept-Language",
                "Content-Type",
                "Origin",
                "X-Request-ID",
            ],
            expose_headers=["Content-Language", "X-Request-ID"],
        )
        logger.info("cors_configured", origins=settings.all_cors_origins)

    app.include_router(api_router, prefix=settings.API_V1_STR)

    # Added last so it runs outermost: handlers and the exception handler
    # all see the resolved request locale.
    app.add_middleware(
        LocaleMiddleware,
        path_prefix=settings.API_V1_STR,
        exclude_paths=settings.I18N_EXCLUDED_PATHS,
        detect_from_header=settings.I18N_DETECT_FROM_HEADER,
    )

    return app


app = create_app()


@app.get("/health", tags=["health"])
async def root_health():
    """Root health check endpoint."""
    return {"status": "ok", "service": settings.PROJECT_NAME}
