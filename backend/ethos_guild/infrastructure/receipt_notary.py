"""Receipt Notary Adapters — best-effort settlement receipt delivery.

Invariants:
    - notify() is bounded by receipt_timeout_seconds
    - Any transport or HTTP status failure raises ReceiptNotaryError; callers
      decide whether to swallow it (services/receipts.py always does)

Design Decisions:
    - httpx.AsyncClient per call: receipts are rare, pooling buys nothing
    - LoggingReceiptNotary when no URL is configured: the settlement path is
      identical in development and production
"""

import logging

import httpx

from ethos_guild.core.errors import ReceiptNotaryError

logger = logging.getLogger(__name__)


class HttpReceiptNotary:
    """ReceiptNotary that POSTs {"order_id"} to the notary service."""

    def __init__(self, url: str, timeout_seconds: float = 5.0):
        self.url = url
        self.timeout_seconds = timeout_seconds

    async def notify(self, order_id: str) -> None:
        try:
            async with httpx.AsyncClient(timeout=self.timeout_seconds) as client:
                response = await client.post(self.url, json={"order_id": order_id})
                response.raise_for_status()
        except httpx.HTTPError as e:
            raise ReceiptNotaryError(f"{type(e).__name__}: {e}")


class LoggingReceiptNotary:
    """ReceiptNotary that only records the receipt in the log."""

    async def notify(self, order_id: str) -> None:
        logger.info("Settlement receipt recorded", extra={"order_id": order_id})
