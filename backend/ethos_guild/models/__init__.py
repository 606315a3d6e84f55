"""ORM Models — SQLAlchemy declarative models for all commerce entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Artifact, Order, Event and Venue are aggregate roots; QRSlug is the shared namespace

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from ethos_guild.models.artifact import Artifact  # noqa: F401
from ethos_guild.models.collab_agreement import CollabAgreement  # noqa: F401
from ethos_guild.models.review import Review  # noqa: F401
from ethos_guild.models.order import Order  # noqa: F401
from ethos_guild.models.order_item import OrderItem  # noqa: F401
from ethos_guild.models.payout import Payout  # noqa: F401
from ethos_guild.models.event import Event  # noqa: F401
from ethos_guild.models.ticket import Ticket  # noqa: F401
from ethos_guild.models.venue import Venue  # noqa: F401
from ethos_guild.models.seller_catalog_item import SellerCatalogItem  # noqa: F401
from ethos_guild.models.qr_slug import QRSlug  # noqa: F401
from ethos_guild.models.qr_scan import QRScan  # noqa: F401
