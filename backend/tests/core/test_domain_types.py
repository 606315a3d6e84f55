"""Domain Types — verifies type wrappers and enum values."""

from uuid import uuid4

from ethos_guild.core.domain_types import (
    ArtifactId, Cents, CollabStatus, License, OrderStatus, PAYMENT_SUCCEEDED_EVENT,
    QREntityType, SupplyClass, TicketStatus, UserId,
)


def test_identity_types_wrap_values():
    uid = uuid4()
    assert ArtifactId(uid) == uid
    assert UserId("user-1") == "user-1"
    assert Cents(150) == 150


def test_supply_classes():
    assert {s.value for s in SupplyClass} == {"COMMON", "RARE", "LIMITED"}


def test_status_enums_compare_equal_to_db_strings():
    assert OrderStatus.PAID == "PAID"
    assert TicketStatus.USED == "USED"
    assert CollabStatus("ACTIVE") is CollabStatus.ACTIVE


def test_license_values_use_hyphens():
    assert License.CC_BY.value == "CC-BY"
    assert License("CC-BY-NC") is License.CC_BY_NC


def test_qr_entity_types():
    assert set(QREntityType) == {
        QREntityType.ARTIFACT, QREntityType.EVENT, QREntityType.VENUE,
    }


def test_payment_succeeded_event_name():
    assert PAYMENT_SUCCEEDED_EVENT == "payment_intent.succeeded"
