"""Payment Settlement Processor — idempotently finalizes orders on payment confirmation.

Invariants:
    - PENDING -> PAID claimed by one conditional UPDATE keyed on payment_intent_id;
      a delivery that does not win the claim returns the order unchanged
    - Payouts computed once per order, one QUEUED row per distinct recipient
    - Per line: fee + sum(allocations) == unit_price_cents * quantity
    - supply_sold incremented by one UPDATE clamped to supply_limit
    - Everything after the claim commits in the same transaction as the claim

Design Decisions:
    - Conditional UPDATE rather than SELECT ... FOR UPDATE; the loser of a race
      sees rowcount 0 and returns the settled order
    - Unrecognized event types are acknowledged, not rejected
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone

from sqlalchemy import case, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ethos_guild.core.domain_types import (
    PAYMENT_SUCCEEDED_EVENT, OrderStatus, PaymentIntentId, PayoutStatus, SupplyClass,
)
from ethos_guild.core.errors import InputValidationError, ResourceNotFoundError
from ethos_guild.core.payouts import PayoutPlan, compute_payouts, merge_allocations
from ethos_guild.models.artifact import Artifact
from ethos_guild.models.order import Order
from ethos_guild.models.payout import Payout
from ethos_guild.services.collaboration import CollaborationService

logger = logging.getLogger(__name__)


@dataclass
class SettlementResult:
    acknowledged_only: bool = False
    newly_settled: bool = False
    order: Order | None = None
    payouts: list[Payout] = field(default_factory=list)


class SettlementService:
    """Owns the PENDING -> PAID transition and Payout creation."""

    def __init__(self, db: AsyncSession, fee_percent: float):
        self.db = db
        self.fee_percent = fee_percent
        self.collabs = CollaborationService(db)

    async def handle_confirmation(
        self, event_type: str, payment_intent_id: PaymentIntentId | None,
    ) -> SettlementResult:
        if event_type != PAYMENT_SUCCEEDED_EVENT:
            logger.info(f"Ignoring payment event '{event_type}'")
            return SettlementResult(acknowledged_only=True)
        if not payment_intent_id:
            raise InputValidationError("Invalid payload", field="data.object.id")

        order = await self._order_by_intent(payment_intent_id)
        if not await self._claim(order):
            logger.info(
                f"Order already {order.status}; settlement skipped",
                extra={"order_id": str(order.id), "payment_intent_id": payment_intent_id},
            )
            return SettlementResult(order=order, payouts=list(order.payouts))

        plans: list[PayoutPlan] = []
        total_fees = 0
        paid_out = 0
        for item in order.items:
            artifact = await self.db.get(Artifact, item.artifact_id)
            if artifact is None:
                logger.warning(
                    "Artifact missing at settlement; line skipped",
                    extra={"order_id": str(order.id), "artifact_id": str(item.artifact_id)},
                )
                continue
            splits = await self.collabs.governing_splits(artifact)
            plan = compute_payouts(
                item.unit_price_cents * item.quantity, self.fee_percent, splits,
            )
            plans.append(plan)
            total_fees += plan.fee_cents
            paid_out += plan.distributed_cents
            if artifact.supply_class != SupplyClass.COMMON:
                await self._record_sale(artifact, item.quantity)

        order.fees_cents = total_fees
        order.total_cents = order.subtotal_cents + total_fees
        payouts = [
            Payout(
                order_id=order.id,
                position=position,
                recipient_id=recipient_id,
                amount_cents=amount,
                status=PayoutStatus.QUEUED.value,
            )
            for position, (recipient_id, amount)
            in enumerate(merge_allocations(plans).items())
        ]
        order.payouts.extend(payouts)
        await self.db.commit()
        logger.info(
            "Order settled",
            extra={
                "order_id": str(order.id),
                "payment_intent_id": payment_intent_id,
                "recipients": len(payouts),
                "payout_cents": paid_out,
            },
        )
        return SettlementResult(newly_settled=True, order=order, payouts=payouts)

    async def _order_by_intent(self, payment_intent_id: PaymentIntentId) -> Order:
        result = await self.db.execute(
            select(Order).where(Order.payment_intent_id == payment_intent_id),
        )
        order = result.scalar_one_or_none()
        if order is None:
            raise ResourceNotFoundError("Order", payment_intent_id)
        return order

    async def _claim(self, order: Order) -> bool:
        """Atomically move PENDING -> PAID. False when another delivery got there first."""
        paid_at = datetime.now(timezone.utc)
        result = await self.db.execute(
            update(Order)
            .where(Order.id == order.id)
            .where(Order.status == OrderStatus.PENDING.value)
            .values(status=OrderStatus.PAID.value, paid_at=paid_at)
            .execution_options(synchronize_session=False)
        )
        # Reload so the caller sees the committed status and payouts
        await self.db.refresh(order)
        return result.rowcount == 1

    async def _record_sale(self, artifact: Artifact, quantity: int) -> None:
        sold = Artifact.supply_sold + quantity
        await self.db.execute(
            update(Artifact)
            .where(Artifact.id == artifact.id)
            .values(
                supply_sold=case(
                    (sold > Artifact.supply_limit, Artifact.supply_limit),
                    else_=sold,
                ),
            )
            .execution_options(synchronize_session=False)
        )
