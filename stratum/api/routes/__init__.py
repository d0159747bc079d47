"""API route registration."""

from fastapi import APIRouter, FastAPI

from stratum.observability.logging import get_logger

logger = get_logger(__name__)


def create_v1_router() -> APIRouter:
    """Create the v1 API router with all routes."""
    router = APIRouter(prefix="/v1")

    from stratum.api.routes.settings import router as settings_router

    router.include_router(settings_router, tags=["Settings"])

    return router


def register_routes(app: FastAPI, metrics_path: str | None = "/metrics") -> None:
    """Register all routes with the FastAPI application.

    Args:
        app: FastAPI application instance
        metrics_path: Where to expose Prometheus metrics; None disables it
    """
    app.include_router(create_v1_router())

    from stratum.api.routes.health import get_metrics, health_check

    health_router = APIRouter(tags=["Health"])
    health_router.add_api_route("/health", health_check, methods=["GET"])
    if metrics_path:
        health_router.add_api_route(metrics_path, get_metrics, methods=["GET"])
    app.include_router(health_router)

    logger.info("routes_registered", metrics_path=metrics_path)
