"""Payment Gateway Adapters — open payment intents and verify confirmation webhooks.

Invariants:
    - open_intent is bounded by payment_timeout_seconds; timeouts and SDK errors
      map to PaymentGatewayError (core/errors.py)
    - Webhook signatures verified with the Stripe SDK when a signing secret is set;
      a bad signature is an InputValidationError, never a 500
    - LocalPaymentGateway ids are pi_<uuid hex>: unique per intent

Design Decisions:
    - stripe SDK calls are synchronous: run in a worker thread with asyncio.wait_for
      so the event loop is never blocked by a slow gateway
    - No retry on open_intent: the buyer retries checkout, which opens a fresh intent
"""

import asyncio
import json
import logging
import uuid

import stripe

from ethos_guild.core.domain_types import Cents, PaymentIntentId
from ethos_guild.core.errors import InputValidationError, PaymentGatewayError
from ethos_guild.core.repository_protocols import PaymentIntent

logger = logging.getLogger(__name__)


class LocalPaymentGateway:
    """In-process gateway for development and tests: mints intents, never charges."""

    async def open_intent(self, amount_cents: Cents, currency: str) -> PaymentIntent:
        intent_id = f"pi_{uuid.uuid4().hex}"
        return PaymentIntent(
            id=PaymentIntentId(intent_id),
            client_secret=f"{intent_id}_secret",
            amount_cents=amount_cents,
            currency=currency,
            status="requires_payment_method",
        )


class StripePaymentGateway:
    """PaymentGateway backed by Stripe PaymentIntents."""

    def __init__(self, secret_key: str, timeout_seconds: float = 10.0):
        self.secret_key = secret_key
        self.timeout_seconds = timeout_seconds

    async def open_intent(self, amount_cents: Cents, currency: str) -> PaymentIntent:
        try:
            intent = await asyncio.wait_for(
                asyncio.to_thread(
                    stripe.PaymentIntent.create,
                    api_key=self.secret_key,
                    amount=amount_cents,
                    currency=currency,
                    automatic_payment_methods={"enabled": True},
                ),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError:
            logger.error(f"Stripe intent creation timed out after {self.timeout_seconds}s")
            raise PaymentGatewayError("timeout")
        except stripe.StripeError as e:
            logger.error(f"Stripe intent creation failed: {e}")
            raise PaymentGatewayError(str(e))
        logger.info(
            "Payment intent opened", extra={"payment_intent_id": intent["id"]},
        )
        return PaymentIntent(
            id=PaymentIntentId(intent["id"]),
            client_secret=intent["client_secret"],
            amount_cents=intent["amount"],
            currency=intent["currency"],
            status=intent["status"],
        )


def parse_webhook_payload(
    payload: bytes, signature: str | None, webhook_secret: str,
) -> dict:
    """Verify (when a secret is configured) and decode a gateway webhook body."""
    if webhook_secret:
        if not signature:
            raise InputValidationError(
                "Missing webhook signature", field="Stripe-Signature",
            )
        try:
            stripe.Webhook.construct_event(payload, signature, webhook_secret)
        except stripe.SignatureVerificationError:
            logger.warning("Rejected webhook with invalid signature")
            raise InputValidationError(
                "Invalid webhook signature", field="Stripe-Signature",
            )
        except ValueError:
            raise InputValidationError("Invalid payload", field="body")
    try:
        body = json.loads(payload)
    except ValueError:
        raise InputValidationError("Invalid payload", field="body")
    if not isinstance(body, dict):
        raise InputValidationError("Invalid payload", field="body")
    return body
