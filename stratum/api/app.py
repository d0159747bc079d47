"""FastAPI application factory.

Creates and configures the FastAPI application with the cookie settings
middleware, exception handlers, and route registration.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from stratum import __version__
from stratum.api.dependencies import set_settings_manager
from stratum.api.exceptions import StratumAPIError
from stratum.api.middleware.settings_cookie import SettingsCookieMiddleware
from stratum.api.models.errors import ErrorBody, ErrorCode, ErrorDetail, ErrorResponse
from stratum.api.routes import register_routes
from stratum.config import get_settings
from stratum.config.settings import Settings
from stratum.observability.logging import get_logger, setup_logging
from stratum.providers.factory import create_settings_manager, find_cookie_provider
from stratum.settings.exceptions import ProviderError, ProviderNotFoundError
from stratum.settings.manager import SettingsManager

logger = get_logger(__name__)


def create_app(
    manager: SettingsManager | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        manager: Settings manager to serve; built from configuration when omitted
        settings: Settings to use instead of get_settings()

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()

    logging_config = settings.observability.logging
    setup_logging(
        level=logging_config.level,
        format=logging_config.format,
        redact_secrets=logging_config.redact_secrets,
    )

    if manager is None:
        manager = create_settings_manager(settings)
    set_settings_manager(manager)

    app = FastAPI(
        title="Stratum API",
        description="Layered settings resolution",
        version=__version__,
    )

    cookie_provider = find_cookie_provider(manager)
    if cookie_provider is not None and settings.api.settings_cookie_enabled:
        app.add_middleware(SettingsCookieMiddleware, provider=cookie_provider)
        logger.info("settings_cookie_middleware_enabled", cookie_name=cookie_provider.cookie_name)

    _register_exception_handlers(app)

    metrics = settings.observability.metrics
    register_routes(app, metrics.path if metrics.enabled else None)

    logger.info(
        "app_created",
        debug=settings.debug,
        providers=list(manager.providers),
    )

    return app


def _error_response(status_code: int, body: ErrorBody) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=body).model_dump(mode="json"),
    )


def _register_exception_handlers(app: FastAPI) -> None:
    """Register global exception handlers."""

    @app.exception_handler(StratumAPIError)
    async def stratum_api_error_handler(
        request: Request, exc: StratumAPIError
    ) -> JSONResponse:
        """Handle StratumAPIError and its subclasses."""
        logger.warning(
            "api_error",
            error_code=exc.error_code.value,
            message=exc.message,
            path=request.url.path,
        )
        return _error_response(
            exc.status_code,
            ErrorBody(code=exc.error_code, message=exc.message),
        )

    @app.exception_handler(ProviderNotFoundError)
    async def provider_not_found_handler(
        request: Request, exc: ProviderNotFoundError
    ) -> JSONResponse:
        """Handle requests naming a provider outside the chain."""
        logger.warning(
            "provider_not_found",
            provider_name=exc.provider_name,
            path=request.url.path,
        )
        return _error_response(
            404,
            ErrorBody(code=ErrorCode.PROVIDER_NOT_FOUND, message=exc.message),
        )

    @app.exception_handler(ProviderError)
    async def provider_error_handler(request: Request, exc: ProviderError) -> JSONResponse:
        """Handle a failure of the provider a request was aimed at."""
        logger.warning(
            "provider_unavailable",
            provider_name=exc.provider_name,
            error=exc.message,
            path=request.url.path,
        )
        return _error_response(
            503,
            ErrorBody(code=ErrorCode.PROVIDER_UNAVAILABLE, message=exc.message),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Handle FastAPI request validation errors."""
        logger.warning(
            "validation_error",
            errors=exc.errors(),
            path=request.url.path,
        )

        details = [
            ErrorDetail(field=".".join(str(loc) for loc in error["loc"]), message=error["msg"])
            for error in exc.errors()
        ]
        return _error_response(
            400,
            ErrorBody(
                code=ErrorCode.INVALID_REQUEST,
                message="Request validation failed",
                details=details,
            ),
        )
