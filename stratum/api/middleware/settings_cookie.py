"""Middleware driving the cookie settings provider's request lifecycle."""

from collections.abc import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from stratum.observability.logging import get_logger
from stratum.providers.cookie import CookieInstruction, CookieSettingsProvider

logger = get_logger(__name__)


def apply_cookie_instruction(response: Response, instruction: CookieInstruction) -> None:
    """Write a cookie instruction onto a response."""
    if instruction.action == "clear":
        response.delete_cookie(
            instruction.name,
            path=instruction.path,
            domain=instruction.domain,
            secure=instruction.secure,
            httponly=instruction.http_only,
            samesite=instruction.same_site,
        )
        return

    response.set_cookie(
        instruction.name,
        instruction.value or "",
        max_age=instruction.max_age,
        path=instruction.path,
        domain=instruction.domain,
        secure=instruction.secure,
        httponly=instruction.http_only,
        samesite=instruction.same_site,
    )


class SettingsCookieMiddleware(BaseHTTPMiddleware):
    """Hydrates the cookie provider per request and writes the cookie back.

    The provider's state is bound before the endpoint runs and unbound
    once the response is ready. The response cookie is only touched when
    a setting was changed during the request.
    """

    def __init__(self, app: ASGIApp, provider: CookieSettingsProvider) -> None:
        super().__init__(app)
        self._provider = provider

    async def dispatch(  # type: ignore[override]
        self, request: Request, call_next: Callable[[Request], Response]
    ) -> Response:
        """Process request inside a cookie provider scope."""
        state = self._provider.begin_request(request.cookies)

        try:
            response = await call_next(request)  # type: ignore[misc]
        except Exception:
            self._provider.discard_request(state)
            raise

        instruction = self._provider.end_request(state)
        if instruction is not None:
            apply_cookie_instruction(response, instruction)
            logger.debug(
                "settings_cookie_applied",
                action=instruction.action,
                cookie_name=instruction.name,
                path=request.url.path,
            )

        return response  # type: ignore[no-any-return]
