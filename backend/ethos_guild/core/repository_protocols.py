"""Boundary Protocols — contracts between the commerce core and external collaborators.

Invariants:
    - Core NEVER imports from infrastructure; dependency arrows point inward only
    - Identity, payment and notary IO accessed through Protocol types
    - Implementations provided by infrastructure via FastAPI dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
    - PaymentIntent is a frozen dataclass: the gateway response is a value, not an entity
"""

from dataclasses import dataclass
from typing import Protocol

from ethos_guild.core.domain_types import Cents, PaymentIntentId, UserId


@dataclass(frozen=True)
class Identity:
    """Caller identity as asserted by the external identity provider."""
    user_id: UserId
    is_of_legal_age: bool


@dataclass(frozen=True)
class PaymentIntent:
    id: PaymentIntentId
    client_secret: str
    amount_cents: Cents
    currency: str
    status: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "client_secret": self.client_secret,
            "amount_cents": self.amount_cents,
            "currency": self.currency,
            "status": self.status,
        }


class IdentityProvider(Protocol):
    """Resolve a bearer credential to an Identity, or None when it is not valid."""
    def resolve(self, credential: str) -> Identity | None: ...


class PaymentGateway(Protocol):
    """Opens payment intents; confirmations arrive later through the webhook."""
    async def open_intent(self, amount_cents: Cents, currency: str) -> PaymentIntent: ...


class ReceiptNotary(Protocol):
    """Best-effort settlement receipt sink. Raises on failure."""
    async def notify(self, order_id: str) -> None: ...
