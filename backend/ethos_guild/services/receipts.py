"""Settlement Receipts — fire-and-forget notification of the notary after settlement.

Invariants:
    - send_settlement_receipt NEVER raises: failures are logged and reported as False
    - Never retried here: retry is the notary's responsibility

Design Decisions:
    - Scheduled as a FastAPI background task by the webhook route, so it runs after
      the settlement transaction has committed and the response has been sent
"""

import logging

from ethos_guild.core.repository_protocols import ReceiptNotary

logger = logging.getLogger(__name__)


async def send_settlement_receipt(notary: ReceiptNotary, order_id: str) -> bool:
    try:
        await notary.notify(order_id)
    except Exception as e:
        logger.warning(
            f"Failed to queue settlement receipt: {e}",
            extra={"order_id": order_id},
        )
        return False
    return True
