"""FastAPI glue shared by every context router.

Collaborators (settings, payment gateway, mailer) hang off ``app.state`` and
reach handlers through the dependencies below, so tests can mount a bare
``FastAPI()`` with fakes.
"""

import hmac

from fastapi import Depends, FastAPI, Header, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

from storefront.config import Settings
from storefront.errors import StorefrontError, UnauthorizedError
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_gateway(request: Request):
    return request.app.state.gateway


def get_mailer(request: Request):
    return request.app.state.mailer


def require_admin(
    x_admin_password: str = Header(default=""),
    settings: Settings = Depends(get_settings),
) -> None:
    """Reject the request unless the shared admin password was supplied."""
    expected = settings.admin_password
    if not expected or not hmac.compare_digest(x_admin_password.encode(), expected.encode()):
        raise UnauthorizedError()


def _first_validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid value")
    return f"{location}: {message}" if location else message


def register_error_handlers(app: FastAPI) -> None:
    """Map storefront and Protean errors to JSON responses."""
    register_exception_handlers(app)

    @app.exception_handler(StorefrontError)
    async def storefront_error_handler(request: Request, exc: StorefrontError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("Request failed", path=request.url.path, error=exc.message)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": _first_validation_message(exc)})
