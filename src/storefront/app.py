"""Storefront FastAPI application.

Usage:
    uvicorn storefront.app:create_app --factory --host 0.0.0.0 --port 8000

The domain is initialized in the lifespan through ``init_domain()``, which
registers every element module before ``Domain.init()`` runs.
"""

from contextlib import asynccontextmanager
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from storefront.config import Settings
from storefront.domain import init_domain, storefront
from storefront.notifications.channel import build_mailer
from storefront.notifications.channel.email_port import EmailPort
from storefront.payments.gateway import build_gateway
from storefront.payments.gateway.port import PaymentGateway
from storefront.shared.http import register_error_handlers
from storefront.utils.logging import bind_request_context, clear_request_context, get_logger

logger = get_logger(__name__)

API_PREFIX = "/api/v1"


def create_app(
    settings: Settings | None = None,
    gateway: PaymentGateway | None = None,
    mailer: EmailPort | None = None,
) -> FastAPI:
    settings = settings or Settings.from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        init_domain()
        logger.info(
            "Storefront started",
            payment_gateway=type(app.state.gateway).__name__,
            mailer=type(app.state.mailer).__name__,
        )
        yield
        logger.info("Storefront stopped")

    app = FastAPI(
        title="Storefront API",
        description="Catalogue, checkout with email verification, payment webhooks and support",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.gateway = gateway or build_gateway(settings)
    app.state.mailer = mailer or build_mailer(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Push the Protean domain context and tag log lines for each request."""
        bind_request_context(request_id=request.headers.get("x-request-id") or uuid4().hex[:12])
        try:
            with storefront.domain_context():
                return await call_next(request)
        finally:
            clear_request_context()

    from storefront.catalogue.api import product_router, review_router
    from storefront.notifications.api import mail_router, verification_maintenance_router
    from storefront.ordering.api import maintenance_router, order_router, orders_admin_router
    from storefront.support.api import support_router

    for router in (
        product_router,
        review_router,
        order_router,
        orders_admin_router,
        mail_router,
        support_router,
        maintenance_router,
        verification_maintenance_router,
    ):
        app.include_router(router, prefix=API_PREFIX)

    register_error_handlers(app)

    @app.get("/health")
    async def health():
        return JSONResponse(content={"status": "ok", "domain": storefront.name})

    return app
