"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId, ArtifactId, OrderId, EventId wrap UUIDs / opaque strings
    - All money is integer cents (Cents), never float
    - All valid states encoded as Enums, no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders and compare equal to DB strings
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", str)  # issued by the external identity provider
ArtifactId = NewType("ArtifactId", UUID)
OrderId = NewType("OrderId", UUID)
EventId = NewType("EventId", UUID)
PaymentIntentId = NewType("PaymentIntentId", str)


# ─── Value Types ─────────────────────────────────────────────────

Cents = NewType("Cents", int)


# ─── Enums ───────────────────────────────────────────────────────

class ArtifactKind(str, Enum):
    TEXT = "TEXT"
    IMAGE = "IMAGE"
    VIDEO = "VIDEO"
    AUDIO = "AUDIO"
    CODE = "CODE"
    MODEL3D = "MODEL3D"
    PHYSICAL = "PHYSICAL"


class SupplyClass(str, Enum):
    """COMMON is unlimited; RARE and LIMITED are capped by supply_limit."""
    COMMON = "COMMON"
    RARE = "RARE"
    LIMITED = "LIMITED"


class Visibility(str, Enum):
    PRIVATE = "PRIVATE"
    PUBLIC = "PUBLIC"
    FRIENDS = "FRIENDS"
    UNLISTED = "UNLISTED"


class PodProvider(str, Enum):
    PRINTFUL = "PRINTFUL"
    PRINTIFY = "PRINTIFY"
    NONE = "NONE"


class License(str, Enum):
    CC_BY = "CC-BY"
    CC_BY_NC = "CC-BY-NC"
    PROPRIETARY = "PROPRIETARY"


class CollabStatus(str, Enum):
    """Only ACTIVE agreements govern settlement."""
    DRAFT = "DRAFT"
    ACTIVE = "ACTIVE"
    ARCHIVED = "ARCHIVED"


class OrderStatus(str, Enum):
    """PENDING -> PAID happens exactly once per payment intent."""
    PENDING = "PENDING"
    PAID = "PAID"
    CANCELLED = "CANCELLED"
    REFUNDED = "REFUNDED"


class PayoutStatus(str, Enum):
    QUEUED = "QUEUED"
    SENT = "SENT"
    FAILED = "FAILED"


class TicketStatus(str, Enum):
    """USED is terminal except via REFUNDED."""
    VALID = "VALID"
    USED = "USED"
    REFUNDED = "REFUNDED"


class ShippingMode(str, Enum):
    SELF_SHIP = "SELF_SHIP"
    POD = "POD"


class QREntityType(str, Enum):
    """Entity kinds sharing the QR slug namespace."""
    ARTIFACT = "ARTIFACT"
    EVENT = "EVENT"
    VENUE = "VENUE"


class DiscoveryRole(str, Enum):
    """Discovery views; any other role falls back to the plain artifact listing."""
    CLIENT = "CLIENT"
    EXPLORER = "EXPLORER"
    CREATOR = "CREATOR"


PAYMENT_SUCCEEDED_EVENT = "payment_intent.succeeded"
