"""Commerce schema — catalog, collabs, orders, payouts, events, venues, QR namespace.

Revision ID: 001_commerce
Revises: None
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_commerce"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at", sa.DateTime(timezone=True),
        nullable=False, server_default=sa.func.now(),
    )


def upgrade() -> None:
    op.create_table(
        "artifacts",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("owner_id", sa.String(64), nullable=False, index=True),
        sa.Column("collaborators", sa.JSON, nullable=False),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("kind", sa.String(20), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("media_urls", sa.JSON, nullable=False),
        sa.Column("source_repo_url", sa.String(500), nullable=True),
        sa.Column("supply_class", sa.String(20), nullable=False),
        sa.Column("supply_limit", sa.Integer, nullable=True),
        sa.Column("supply_sold", sa.Integer, nullable=False, server_default="0"),
        sa.Column("pod_provider", sa.String(20), nullable=False, server_default="NONE"),
        sa.Column("price_cents", sa.Integer, nullable=True),
        sa.Column("currency", sa.String(3), nullable=False, server_default="USD"),
        sa.Column("visibility", sa.String(20), nullable=False, server_default="PRIVATE"),
        sa.Column("reviews_enabled", sa.Boolean, nullable=False, server_default="true"),
        sa.Column("license", sa.String(20), nullable=True),
        sa.Column("qr_slug", sa.String(64), nullable=True, unique=True),
        _created_at(),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "collab_agreements",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "artifact_id", UUID(as_uuid=True),
            sa.ForeignKey("artifacts.id", ondelete="CASCADE"),
            nullable=False, index=True,
        ),
        sa.Column("splits", sa.JSON, nullable=False),
        sa.Column("terms_url", sa.String(500), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="DRAFT"),
        _created_at(),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "reviews",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "artifact_id", UUID(as_uuid=True),
            sa.ForeignKey("artifacts.id", ondelete="CASCADE"),
            nullable=False, index=True,
        ),
        sa.Column("reviewer_id", sa.String(64), nullable=False),
        sa.Column("rating_quality", sa.Integer, nullable=False),
        sa.Column("rating_style", sa.Integer, nullable=False),
        sa.Column("rating_skill_impact", sa.Integer, nullable=False),
        sa.Column("comment", sa.Text, nullable=True),
        sa.Column("tags", sa.JSON, nullable=False),
        _created_at(),
    )

    op.create_table(
        "orders",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("buyer_id", sa.String(64), nullable=False, index=True),
        sa.Column("subtotal_cents", sa.Integer, nullable=False),
        sa.Column("fees_cents", sa.Integer, nullable=False),
        sa.Column("total_cents", sa.Integer, nullable=False),
        sa.Column("currency", sa.String(3), nullable=False, server_default="usd"),
        sa.Column("payment_intent_id", sa.String(255), nullable=False, unique=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="PENDING"),
        _created_at(),
        sa.Column("paid_at", sa.DateTime(timezone=True), nullable=True),
    )

    op.create_table(
        "order_items",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "order_id", UUID(as_uuid=True),
            sa.ForeignKey("orders.id", ondelete="CASCADE"),
            nullable=False, index=True,
        ),
        sa.Column("position", sa.Integer, nullable=False),
        sa.Column("artifact_id", UUID(as_uuid=True), nullable=False),
        sa.Column("quantity", sa.Integer, nullable=False),
        sa.Column("unit_price_cents", sa.Integer, nullable=False),
    )

    op.create_table(
        "payouts",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "order_id", UUID(as_uuid=True),
            sa.ForeignKey("orders.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("position", sa.Integer, nullable=False),
        sa.Column("recipient_id", sa.String(64), nullable=False, index=True),
        sa.Column("amount_cents", sa.Integer, nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="QUEUED"),
        _created_at(),
        sa.UniqueConstraint("order_id", "recipient_id", name="uq_payouts_order_recipient"),
    )

    op.create_table(
        "events",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("organizer_id", sa.String(64), nullable=False, index=True),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("venue_id", UUID(as_uuid=True), nullable=True),
        sa.Column("start_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("ticket_price_cents", sa.Integer, nullable=True),
        sa.Column("capacity", sa.Integer, nullable=True),
        sa.Column("tickets_outstanding", sa.Integer, nullable=False, server_default="0"),
        sa.Column("qr_slug", sa.String(64), nullable=True, unique=True),
        _created_at(),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint(
            "capacity IS NULL OR tickets_outstanding <= capacity",
            name="ck_events_capacity",
        ),
    )

    op.create_table(
        "tickets",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "event_id", UUID(as_uuid=True),
            sa.ForeignKey("events.id", ondelete="CASCADE"),
            nullable=False, index=True,
        ),
        sa.Column("buyer_id", sa.String(64), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="VALID"),
        sa.Column("qr_code", sa.String(128), nullable=False, unique=True),
        _created_at(),
        sa.Column("used_at", sa.DateTime(timezone=True), nullable=True),
    )

    op.create_table(
        "venues",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("contact_email", sa.String(320), nullable=False),
        sa.Column("address", sa.String(500), nullable=True),
        sa.Column("qr_slug", sa.String(64), nullable=True, unique=True),
        _created_at(),
    )

    op.create_table(
        "seller_catalog_items",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "venue_id", UUID(as_uuid=True),
            sa.ForeignKey("venues.id", ondelete="CASCADE"),
            nullable=False, index=True,
        ),
        sa.Column("artifact_id", UUID(as_uuid=True), nullable=False),
        sa.Column("local_inventory", sa.Integer, nullable=True),
        sa.Column("price_cents", sa.Integer, nullable=False),
        sa.Column("shipping_mode", sa.String(20), nullable=False),
        _created_at(),
    )

    op.create_table(
        "qr_slugs",
        sa.Column("slug", sa.String(64), primary_key=True),
        sa.Column("entity_type", sa.String(20), nullable=False),
        sa.Column("entity_id", UUID(as_uuid=True), nullable=False),
        _created_at(),
    )

    op.create_table(
        "qr_scans",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("slug", sa.String(64), nullable=False, index=True),
        sa.Column("entity_type", sa.String(20), nullable=False),
        sa.Column("entity_id", UUID(as_uuid=True), nullable=False),
        sa.Column("scanned_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )


def downgrade() -> None:
    op.drop_table("qr_scans")
    op.drop_table("qr_slugs")
    op.drop_table("seller_catalog_items")
    op.drop_table("venues")
    op.drop_table("tickets")
    op.drop_table("events")
    op.drop_table("payouts")
    op.drop_table("order_items")
    op.drop_table("orders")
    op.drop_table("reviews")
    op.drop_table("collab_agreements")
    op.drop_table("artifacts")
