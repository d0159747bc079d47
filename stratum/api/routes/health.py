"""Health check and metrics endpoints."""

from fastapi import Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from stratum import __version__
from stratum.api.dependencies import SettingsManagerDep
from stratum.observability.logging import get_logger

logger = get_logger(__name__)


async def health_check(manager: SettingsManagerDep) -> dict[str, object]:
    """Report service status and the provider chain."""
    logger.debug("health_check_request")

    return {
        "status": "healthy",
        "version": __version__,
        "providers": [
            {"name": name, "read_only": provider.is_read_only()}
            for name, provider in manager.providers.items()
        ],
    }


async def get_metrics() -> Response:
    """Get Prometheus metrics in text format for scraping."""
    logger.debug("metrics_request")

    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST,
    )
