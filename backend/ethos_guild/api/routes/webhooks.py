"""Payment Webhook — entry point for gateway payment confirmations.

Invariants:
    - Signature verified (when a webhook secret is configured) before the body is trusted
    - Unrecognized event types answered 202 so the gateway stops retrying
    - Duplicate deliveries answered 200 with the already-settled order
    - The settlement receipt runs after the response, and only for the delivery
      that actually settled the order
"""

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, Header, Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from ethos_guild.api.deps import get_receipt_notary
from ethos_guild.api.routes.orders import order_json, payouts_json
from ethos_guild.config import get_settings
from ethos_guild.core.errors import InputValidationError
from ethos_guild.core.repository_protocols import ReceiptNotary
from ethos_guild.infrastructure.database import get_db
from ethos_guild.infrastructure.payment_gateway import parse_webhook_payload
from ethos_guild.schemas.order import PaymentWebhook
from ethos_guild.services.receipts import send_settlement_receipt
from ethos_guild.services.settlement import SettlementService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/webhooks", tags=["webhooks"])


@router.post("/payments")
async def payment_webhook(
    request: Request,
    background_tasks: BackgroundTasks,
    stripe_signature: str | None = Header(None),
    notary: ReceiptNotary = Depends(get_receipt_notary),
    db: AsyncSession = Depends(get_db),
):
    settings = get_settings()
    payload = parse_webhook_payload(
        await request.body(), stripe_signature, settings.stripe_webhook_secret,
    )
    try:
        event = PaymentWebhook.model_validate(payload)
    except ValidationError:
        raise InputValidationError("Invalid payload", field="body")

    result = await SettlementService(
        db, settings.platform_fee_percent,
    ).handle_confirmation(event.type, event.payment_intent_id)
    if result.acknowledged_only:
        return JSONResponse(
            status_code=status.HTTP_202_ACCEPTED, content={"received": True},
        )

    if result.newly_settled:
        background_tasks.add_task(
            send_settlement_receipt, notary, str(result.order.id),
        )
    return {
        "order": order_json(result.order),
        "payouts": payouts_json(result.payouts),
    }
