"""Pydantic request/response schemas for the ordering API."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from storefront.shared.schemas import CamelModel

# --- Requests ---


class LineItemRequest(CamelModel):
    """A cart line. Any client-side price fields are ignored."""

    product_id: str = Field(..., min_length=1)
    quantity: int | None = None
    size: str | None = Field(None, max_length=100)
    color: str | None = Field(None, max_length=100)

    def as_line(self) -> dict:
        return {"product_id": self.product_id, "quantity": self.quantity, "size": self.size, "color": self.color}


class PlaceOrderRequest(CamelModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Asha Rao",
                    "email": "asha@example.com",
                    "phone": "+919812345678",
                    "address": "12 MG Road, Bengaluru",
                    "items": [{"productId": "3f1c...", "quantity": 2, "size": "XL", "color": "black"}],
                }
            ]
        }
    }

    name: str = Field(..., min_length=1, max_length=255)
    email: str | None = Field(None, max_length=254)
    phone: str = Field(..., min_length=1, max_length=30)
    address: str = Field(..., min_length=1)
    items: list[LineItemRequest] = Field(..., min_length=1)


class OrderIdRequest(CamelModel):
    order_id: str = Field(..., min_length=1)


# --- Webhook payload (as posted by the gateway, snake_case) ---


class WebhookOrder(BaseModel):
    model_config = ConfigDict(extra="ignore")

    order_id: str | None = None
    order_amount: float | None = None
    order_currency: str | None = None


class WebhookPayment(BaseModel):
    model_config = ConfigDict(extra="ignore")

    cf_payment_id: str | int | None = None
    payment_status: str | None = None
    payment_amount: float | None = None
    payment_currency: str | None = None
    payment_message: str | None = None
    payment_time: str | None = None


class WebhookData(BaseModel):
    model_config = ConfigDict(extra="ignore")

    order: WebhookOrder = Field(default_factory=WebhookOrder)
    payment: WebhookPayment | None = None
    customer_details: dict | None = None


class WebhookPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    data: WebhookData = Field(default_factory=WebhookData)
    event_time: str | None = None
    type: str | None = None

    @property
    def order_id(self) -> str | None:
        return self.data.order.order_id

    @property
    def payment_status(self) -> str | None:
        return self.data.payment.payment_status if self.data.payment else None


# --- Responses ---


class PlaceOrderResponse(CamelModel):
    order_id: str
    payment_session_id: str
    total_amount: float


class OrderStatusResponse(CamelModel):
    order_id: str
    status: str
    payment_status: str


class ProductSummary(CamelModel):
    name: str
    price: float
    file_id: str = ""


class OrderItemView(CamelModel):
    product_id: str
    quantity: int
    size: str | None = None
    color: str | None = None
    product: ProductSummary


class OrderView(CamelModel):
    order_id: str
    name: str
    email: str | None = None
    phone: str
    address: str
    status: str
    payment_status: str
    total_amount: float
    currency: str | None = None
    created_at: datetime | None = None
    items: list[OrderItemView]


class SweepResponse(CamelModel):
    count: int
