"""FastAPI endpoints for ordering: checkout, payment webhook, tracking and upkeep."""

from fastapi import APIRouter, Depends, Request
from protean.utils.globals import current_domain
from pydantic import ValidationError as PayloadValidationError

from storefront.config import Settings
from storefront.errors import StorefrontError
from storefront.ordering.api.schemas import (
    OrderIdRequest,
    OrderStatusResponse,
    OrderView,
    PlaceOrderRequest,
    PlaceOrderResponse,
    SweepResponse,
    WebhookPayload,
)
from storefront.ordering.checkout.service import CheckoutService
from storefront.ordering.order import queries
from storefront.ordering.order.abandonment import ExpireAbandonedOrders
from storefront.ordering.order.webhook import ProcessPaymentWebhook
from storefront.shared.http import get_gateway, get_mailer, get_settings, require_admin
from storefront.shared.schemas import MessageResponse
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

order_router = APIRouter(prefix="/order", tags=["orders"])
orders_admin_router = APIRouter(prefix="/orders", tags=["orders"], dependencies=[Depends(require_admin)])
maintenance_router = APIRouter(prefix="/maintenance", tags=["maintenance"], dependencies=[Depends(require_admin)])

WEBHOOK_ACK = "Webhook processed successfully"


def get_checkout_service(
    gateway=Depends(get_gateway),
    mailer=Depends(get_mailer),
    settings: Settings = Depends(get_settings),
) -> CheckoutService:
    return CheckoutService(gateway=gateway, mailer=mailer, settings=settings)


# --- Checkout ---


@order_router.post("", status_code=201, response_model=PlaceOrderResponse)
async def place_order(
    body: PlaceOrderRequest,
    service: CheckoutService = Depends(get_checkout_service),
) -> PlaceOrderResponse:
    placed = service.place_order(
        name=body.name,
        phone=body.phone,
        address=body.address,
        items=[item.as_line() for item in body.items],
        email=body.email,
    )
    return PlaceOrderResponse(
        order_id=placed.order_id,
        payment_session_id=placed.payment_session_id,
        total_amount=placed.total_amount,
    )


@order_router.post("/verify", response_model=OrderStatusResponse)
async def verify_order(body: OrderIdRequest) -> OrderStatusResponse:
    return OrderStatusResponse(**queries.order_status(body.order_id))


@order_router.post("/track", response_model=OrderView)
async def track_order(body: OrderIdRequest) -> OrderView:
    return OrderView(**queries.track_order(body.order_id))


@order_router.post("/webhook", response_model=MessageResponse)
async def payment_webhook(request: Request, gateway=Depends(get_gateway)) -> MessageResponse:
    """Receive a payment notification from the gateway.

    Always acknowledges with 200; problems are logged, never surfaced, so the
    gateway does not keep retrying a notification we cannot use.
    """
    raw_body = (await request.body()).decode("utf-8", errors="replace")
    signature = request.headers.get("x-webhook-signature", "")
    timestamp = request.headers.get("x-webhook-timestamp", "")

    if not gateway.verify_webhook_signature(raw_body, signature, timestamp):
        logger.warning("Webhook signature rejected", signature_present=bool(signature))
        return MessageResponse(message=WEBHOOK_ACK)

    try:
        payload = WebhookPayload.model_validate_json(raw_body)
        current_domain.process(
            ProcessPaymentWebhook(
                order_id=payload.order_id,
                payment_status=payload.payment_status,
                event_type=payload.type,
            ),
            asynchronous=False,
        )
    except PayloadValidationError as exc:
        logger.warning("Malformed webhook payload", error=str(exc))
    except StorefrontError as exc:
        logger.warning("Webhook not applied", error=exc.message)
    except Exception:
        logger.exception("Webhook processing failed")

    return MessageResponse(message=WEBHOOK_ACK)


# --- Administration ---


@orders_admin_router.get("", response_model=list[OrderView])
async def list_orders() -> list[OrderView]:
    return [OrderView(**view) for view in queries.list_orders()]


@maintenance_router.post("/expire-orders", response_model=SweepResponse)
async def expire_abandoned_orders(settings: Settings = Depends(get_settings)) -> SweepResponse:
    """Cancel unpaid orders older than the configured threshold.

    Designed to be called periodically by an external scheduler.
    """
    count = current_domain.process(
        ExpireAbandonedOrders(max_age_hours=settings.abandoned_order_hours),
        asynchronous=False,
    )
    return SweepResponse(count=count or 0)
