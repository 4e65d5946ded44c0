"""FastAPI endpoints for email verification and the feedback relay."""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from storefront.config import Settings
from storefront.notifications.api.schemas import (
    ConfirmationSentResponse,
    FeedbackRequest,
    PurgeResponse,
    SendConfirmationRequest,
    VerifyOtpRequest,
)
from storefront.notifications.feedback import send_feedback
from storefront.notifications.verification.purge import PurgeExpiredVerifications
from storefront.ordering.api.routes import get_checkout_service
from storefront.ordering.checkout.service import CheckoutService
from storefront.shared.http import get_mailer, get_settings, require_admin
from storefront.shared.schemas import MessageResponse

mail_router = APIRouter(prefix="/mail", tags=["mail"])
verification_maintenance_router = APIRouter(
    prefix="/maintenance", tags=["maintenance"], dependencies=[Depends(require_admin)]
)


@mail_router.post("/send-confirmation", response_model=ConfirmationSentResponse)
async def send_confirmation(
    body: SendConfirmationRequest,
    service: CheckoutService = Depends(get_checkout_service),
) -> ConfirmationSentResponse:
    email = service.send_confirmation(body.order_id, email=body.email)
    return ConfirmationSentResponse(email=email)


@mail_router.post("/verify", response_model=MessageResponse)
async def verify_otp(
    body: VerifyOtpRequest,
    service: CheckoutService = Depends(get_checkout_service),
) -> MessageResponse:
    service.verify_email(body.email, body.otp)
    return MessageResponse(message="Email verified successfully")


@mail_router.post("/feedback", response_model=MessageResponse)
async def feedback(
    body: FeedbackRequest,
    mailer=Depends(get_mailer),
    settings: Settings = Depends(get_settings),
) -> MessageResponse:
    send_feedback(mailer, settings.feedback_to, email=body.email, subject=body.subject, message=body.message)
    return MessageResponse(message="Feedback sent successfully")


@verification_maintenance_router.post("/purge-verifications", response_model=PurgeResponse)
async def purge_expired_verifications() -> PurgeResponse:
    count = current_domain.process(PurgeExpiredVerifications(), asynchronous=False)
    return PurgeResponse(count=count or 0)
