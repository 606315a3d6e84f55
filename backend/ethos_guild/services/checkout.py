"""Checkout Engine — prices a cart, opens a payment intent, persists a PENDING order.

Invariants:
    - Buyer must be of legal age
    - Unit prices frozen into order items at checkout time
    - Supply is checked but never decremented here (payment not yet guaranteed);
      repeated lines for one artifact are checked against their combined quantity
    - No order is persisted when the payment gateway fails

Design Decisions:
    - estimated fee uses the same round_half_up rule as settlement, so an order
      with a single line has identical estimated and settled fees
"""

import logging
import uuid
from collections import defaultdict

from sqlalchemy.ext.asyncio import AsyncSession

from ethos_guild.core.domain_types import OrderId, OrderStatus
from ethos_guild.core.enforce_supply import (
    check_for_sale, check_quantity, check_supply_available,
)
from ethos_guild.core.errors import (
    InputValidationError, PermissionDeniedError, ResourceNotFoundError,
)
from ethos_guild.core.payouts import percent_of
from ethos_guild.core.repository_protocols import (
    Identity, PaymentGateway, PaymentIntent,
)
from ethos_guild.models.order import Order
from ethos_guild.models.order_item import OrderItem
from ethos_guild.services.catalog import CatalogService

logger = logging.getLogger(__name__)


class CheckoutService:
    """Builds orders from carts. Owns Order creation."""

    def __init__(
        self,
        db: AsyncSession,
        gateway: PaymentGateway,
        fee_percent: float,
        currency: str = "usd",
    ):
        self.db = db
        self.gateway = gateway
        self.fee_percent = fee_percent
        self.currency = currency
        self.catalog = CatalogService(db)

    async def create_order(
        self, buyer: Identity, items: list[dict],
    ) -> tuple[Order, PaymentIntent]:
        if not buyer.is_of_legal_age:
            raise PermissionDeniedError("Age verification required for this action")
        if not items:
            raise InputValidationError("Order items required", field="items")

        lines: list[OrderItem] = []
        requested: dict[uuid.UUID, int] = defaultdict(int)
        subtotal = 0
        for position, item in enumerate(items):
            artifact = await self.catalog.get_or_404(item["artifact_id"])
            unit_price = check_for_sale(artifact)
            quantity = item.get("quantity", 1)
            check_quantity(quantity)
            requested[artifact.id] += quantity
            check_supply_available(artifact, requested[artifact.id])
            lines.append(OrderItem(
                position=position,
                artifact_id=artifact.id,
                quantity=quantity,
                unit_price_cents=unit_price,
            ))
            subtotal += unit_price * quantity

        estimated_fee = percent_of(self.fee_percent, subtotal)
        intent = await self.gateway.open_intent(
            subtotal + estimated_fee, self.currency,
        )
        order = Order(
            buyer_id=buyer.user_id,
            items=lines,
            subtotal_cents=subtotal,
            fees_cents=estimated_fee,
            total_cents=subtotal + estimated_fee,
            currency=self.currency,
            payment_intent_id=intent.id,
            status=OrderStatus.PENDING.value,
            payouts=[],
        )
        self.db.add(order)
        await self.db.commit()
        logger.info(
            "Order created",
            extra={
                "order_id": str(order.id),
                "payment_intent_id": intent.id,
                "actor_id": buyer.user_id,
            },
        )
        return order, intent

    async def get_order(self, order_id: OrderId, user_id: str) -> Order:
        """Buyer-only read; other callers see not found."""
        order = await self.db.get(Order, order_id)
        if order is None or order.buyer_id != user_id:
            raise ResourceNotFoundError("Order", str(order_id))
        return order
