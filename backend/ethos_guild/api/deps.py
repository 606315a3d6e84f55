"""Request Dependencies — identity, payment gateway and receipt notary wiring.

Invariants:
    - Adapters are built once per process from Settings and reused
    - Anonymous callers get identity None; require_identity turns that into 401
    - Tests replace any of these through app.dependency_overrides

Design Decisions:
    - Empty stripe_secret_key selects LocalPaymentGateway and empty receipt_notary_url
      selects LoggingReceiptNotary, so a fresh checkout runs without external services
"""

import logging
from functools import lru_cache

from fastapi import Depends, Header

from ethos_guild.config import get_settings
from ethos_guild.core.errors import AuthenticationRequiredError
from ethos_guild.core.repository_protocols import (
    Identity, IdentityProvider, PaymentGateway, ReceiptNotary,
)
from ethos_guild.infrastructure.identity import SignedTokenIdentityProvider
from ethos_guild.infrastructure.payment_gateway import (
    LocalPaymentGateway, StripePaymentGateway,
)
from ethos_guild.infrastructure.receipt_notary import (
    HttpReceiptNotary, LoggingReceiptNotary,
)

logger = logging.getLogger(__name__)

_BEARER = "bearer "


@lru_cache
def get_identity_provider() -> IdentityProvider:
    return SignedTokenIdentityProvider(get_settings().identity_token_secret)


@lru_cache
def get_payment_gateway() -> PaymentGateway:
    settings = get_settings()
    if settings.stripe_secret_key:
        return StripePaymentGateway(
            settings.stripe_secret_key, settings.payment_timeout_seconds,
        )
    logger.warning("stripe_secret_key not set; using local payment gateway")
    return LocalPaymentGateway()


@lru_cache
def get_receipt_notary() -> ReceiptNotary:
    settings = get_settings()
    if settings.receipt_notary_url:
        return HttpReceiptNotary(
            settings.receipt_notary_url, settings.receipt_timeout_seconds,
        )
    return LoggingReceiptNotary()


def get_current_identity(
    authorization: str | None = Header(None),
    provider: IdentityProvider = Depends(get_identity_provider),
) -> Identity | None:
    """Resolve the bearer token, if any. Invalid tokens count as anonymous."""
    if not authorization or not authorization.lower().startswith(_BEARER):
        return None
    return provider.resolve(authorization[len(_BEARER):].strip())


def require_identity(
    identity: Identity | None = Depends(get_current_identity),
) -> Identity:
    if identity is None:
        raise AuthenticationRequiredError()
    return identity
