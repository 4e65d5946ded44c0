"""Pydantic request/response schemas for the mail API."""

from pydantic import Field

from storefront.shared.schemas import CamelModel


class SendConfirmationRequest(CamelModel):
    order_id: str = Field(..., min_length=1)
    email: str | None = Field(None, max_length=254)


class VerifyOtpRequest(CamelModel):
    email: str = Field(..., min_length=1, max_length=254)
    otp: str = Field(..., min_length=1, max_length=6)


class FeedbackRequest(CamelModel):
    email: str = Field(..., min_length=1, max_length=254)
    subject: str = Field(..., min_length=1, max_length=255)
    message: str = Field(..., min_length=1)


class ConfirmationSentResponse(CamelModel):
    message: str = "Verification code sent"
    email: str


class PurgeResponse(CamelModel):
    count: int
