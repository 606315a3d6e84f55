"""Order Schemas — checkout requests, payment webhooks, orders and payouts.

Invariants:
    - OrderCreate needs at least one item; quantity defaults to 1
    - PaymentWebhook mirrors the gateway envelope {type, data: {object: {id}}};
      a missing id is reported by the settlement service, not by the schema
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class OrderItemIn(BaseModel):
    artifact_id: UUID
    quantity: int = 1


class OrderCreate(BaseModel):
    items: list[OrderItemIn] = Field(min_length=1)


class PaymentWebhook(BaseModel):
    type: str
    data: dict = Field(default_factory=dict)

    @property
    def payment_intent_id(self) -> str | None:
        obj = self.data.get("object")
        if isinstance(obj, dict):
            intent_id = obj.get("id")
            return intent_id if isinstance(intent_id, str) and intent_id else None
        return None


class OrderItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    artifact_id: UUID
    quantity: int
    unit_price_cents: int


class OrderResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    buyer_id: str
    items: list[OrderItemResponse]
    subtotal_cents: int
    fees_cents: int
    total_cents: int
    currency: str
    payment_intent_id: str
    status: str
    created_at: datetime
    paid_at: datetime | None


class PayoutResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    order_id: UUID
    recipient_id: str
    amount_cents: int
    status: str
    created_at: datetime
