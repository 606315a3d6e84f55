"""Order Routes — checkout and buyer order lookup.

Invariants:
    - POST returns the PENDING order and the client half of the payment intent;
      the order is only settled later through the payments webhook
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ethos_guild.api.deps import get_payment_gateway, require_identity
from ethos_guild.config import get_settings
from ethos_guild.core.repository_protocols import Identity, PaymentGateway
from ethos_guild.infrastructure.database import get_db
from ethos_guild.schemas.order import OrderCreate, OrderResponse, PayoutResponse
from ethos_guild.services.checkout import CheckoutService

router = APIRouter(prefix="/api/v1/orders", tags=["orders"])


def order_json(order) -> dict:
    return OrderResponse.model_validate(order).model_dump(mode="json")


def payouts_json(payouts) -> list[dict]:
    return [
        PayoutResponse.model_validate(p).model_dump(mode="json") for p in payouts
    ]


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_order(
    body: OrderCreate,
    identity: Identity = Depends(require_identity),
    gateway: PaymentGateway = Depends(get_payment_gateway),
    db: AsyncSession = Depends(get_db),
):
    settings = get_settings()
    checkout = CheckoutService(
        db, gateway, settings.platform_fee_percent, settings.currency,
    )
    order, intent = await checkout.create_order(
        identity, [item.model_dump() for item in body.items],
    )
    return {"order": order_json(order), "payment_intent": intent.to_dict()}


@router.get("/{order_id}")
async def get_order(
    order_id: UUID,
    identity: Identity = Depends(require_identity),
    gateway: PaymentGateway = Depends(get_payment_gateway),
    db: AsyncSession = Depends(get_db),
):
    settings = get_settings()
    order = await CheckoutService(
        db, gateway, settings.platform_fee_percent, settings.currency,
    ).get_order(order_id, identity.user_id)
    return {"order": order_json(order), "payouts": payouts_json(order.payouts)}
