"""Checkout & Settlement — route tests for the money path.

Invariants covered:
    - Checkout freezes prices, opens an intent and persists a PENDING order
    - Checkout beyond remaining supply fails "sold out"; nothing is decremented yet
    - Settlement is idempotent under duplicate webhook delivery
    - supply_sold is clamped to supply_limit
    - Payouts are merged per recipient and conserve cents:
      sum(payouts) + fees == subtotal
    - Receipt notification failures never affect the settlement response
"""

import logging
import uuid


def succeeded(payment_intent_id: str) -> dict:
    return {
        "type": "payment_intent.succeeded",
        "data": {"object": {"id": payment_intent_id}},
    }


async def _checkout(client, auth, items, buyer="buyer", of_age=True):
    return await client.post(
        "/api/v1/orders", json={"items": items}, headers=auth(buyer, of_age),
    )


async def _settle(client, payment_intent_id):
    return await client.post(
        "/api/v1/webhooks/payments", json=succeeded(payment_intent_id),
    )


# ─── Checkout ────────────────────────────────────────────────────

async def test_checkout_creates_pending_order(client, auth, create_artifact):
    artifact = await create_artifact(supply_class="LIMITED", supply_limit=10)
    res = await _checkout(client, auth, [{"artifact_id": artifact["id"], "quantity": 3}])
    assert res.status_code == 201
    body = res.json()
    order = body["order"]
    assert order["status"] == "PENDING"
    assert order["subtotal_cents"] == 1500
    assert order["fees_cents"] == 150
    assert order["total_cents"] == 1650
    assert order["items"] == [
        {"artifact_id": artifact["id"], "quantity": 3, "unit_price_cents": 500},
    ]
    assert body["payment_intent"]["id"] == order["payment_intent_id"]
    assert body["payment_intent"]["amount_cents"] == 1650
    assert body["payment_intent"]["client_secret"]


async def test_checkout_requires_legal_age(client, auth, create_artifact):
    artifact = await create_artifact()
    res = await _checkout(
        client, auth, [{"artifact_id": artifact["id"]}], of_age=False,
    )
    assert res.status_code == 403


async def test_checkout_requires_auth(client, create_artifact):
    artifact = await create_artifact()
    res = await client.post(
        "/api/v1/orders", json={"items": [{"artifact_id": artifact["id"]}]},
    )
    assert res.status_code == 401


async def test_checkout_rejects_empty_cart(client, auth):
    res = await _checkout(client, auth, [])
    assert res.status_code == 400


async def test_checkout_rejects_unpriced_artifact(client, auth, create_artifact):
    artifact = await create_artifact(price_cents=None)
    res = await _checkout(client, auth, [{"artifact_id": artifact["id"]}])
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "NOT_FOR_SALE"


async def test_checkout_rejects_zero_quantity(client, auth, create_artifact):
    artifact = await create_artifact()
    res = await _checkout(client, auth, [{"artifact_id": artifact["id"], "quantity": 0}])
    assert res.status_code == 400


async def test_checkout_unknown_artifact_404(client, auth):
    res = await _checkout(client, auth, [{"artifact_id": str(uuid.uuid4())}])
    assert res.status_code == 404


async def test_checkout_beyond_supply_is_sold_out(client, auth, create_artifact):
    artifact = await create_artifact(supply_class="LIMITED", supply_limit=2)
    res = await _checkout(client, auth, [{"artifact_id": artifact["id"], "quantity": 3}])
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "SOLD_OUT"
    assert "sold out" in error["message"]


async def test_checkout_counts_repeated_lines_together(client, auth, create_artifact):
    artifact = await create_artifact(supply_class="RARE", supply_limit=3)
    res = await _checkout(client, auth, [
        {"artifact_id": artifact["id"], "quantity": 2},
        {"artifact_id": artifact["id"], "quantity": 2},
    ])
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "SOLD_OUT"


# ─── Settlement ──────────────────────────────────────────────────

async def test_limited_sale_settles_with_owner_payout(client, auth, create_artifact):
    artifact = await create_artifact(supply_class="LIMITED", supply_limit=10)
    order = (await _checkout(
        client, auth, [{"artifact_id": artifact["id"], "quantity": 3}],
    )).json()["order"]

    res = await _settle(client, order["payment_intent_id"])
    assert res.status_code == 200
    body = res.json()
    assert body["order"]["status"] == "PAID"
    assert body["order"]["paid_at"] is not None
    assert body["order"]["fees_cents"] == 150
    assert body["order"]["total_cents"] == 1650
    assert [(p["recipient_id"], p["amount_cents"], p["status"]) for p in body["payouts"]] == [
        ("owner", 1350, "QUEUED"),
    ]

    refreshed = (await client.get(f"/api/v1/artifacts/{artifact['id']}")).json()["artifact"]
    assert refreshed["supply_sold"] == 3


async def test_duplicate_delivery_is_idempotent(client, auth, create_artifact, notary):
    artifact = await create_artifact(supply_class="LIMITED", supply_limit=10)
    order = (await _checkout(
        client, auth, [{"artifact_id": artifact["id"], "quantity": 3}],
    )).json()["order"]

    first = await _settle(client, order["payment_intent_id"])
    second = await _settle(client, order["payment_intent_id"])
    assert second.status_code == 200
    assert second.json()["order"]["status"] == "PAID"
    def _key(res):
        return [(p["id"], p["recipient_id"], p["amount_cents"]) for p in res.json()["payouts"]]
    assert _key(second) == _key(first)

    refreshed = (await client.get(f"/api/v1/artifacts/{artifact['id']}")).json()["artifact"]
    assert refreshed["supply_sold"] == 3
    assert notary.calls == [order["id"]]


async def test_supply_sold_clamped_to_limit(client, auth, create_artifact):
    artifact = await create_artifact(supply_class="LIMITED", supply_limit=2)
    line = [{"artifact_id": artifact["id"], "quantity": 2}]
    first = (await _checkout(client, auth, line)).json()["order"]
    second = (await _checkout(client, auth, line, buyer="buyer-2")).json()["order"]

    await _settle(client, first["payment_intent_id"])
    await _settle(client, second["payment_intent_id"])

    refreshed = (await client.get(f"/api/v1/artifacts/{artifact['id']}")).json()["artifact"]
    assert refreshed["supply_sold"] == 2


async def test_common_artifact_supply_untouched(client, auth, create_artifact):
    artifact = await create_artifact()
    order = (await _checkout(
        client, auth, [{"artifact_id": artifact["id"], "quantity": 5}],
    )).json()["order"]
    await _settle(client, order["payment_intent_id"])
    refreshed = (await client.get(f"/api/v1/artifacts/{artifact['id']}")).json()["artifact"]
    assert refreshed["supply_sold"] == 0


async def test_payouts_merged_across_lines(client, auth, create_artifact):
    shared = await create_artifact(price_cents=2000, collaborators=["ana"])
    await client.post("/api/v1/collabs", json={
        "artifact_id": shared["id"],
        "splits": [
            {"user_id": "owner", "percent": 70},
            {"user_id": "ana", "percent": 30},
        ],
        "status": "ACTIVE",
    }, headers=auth("owner"))
    solo = await create_artifact(owner="ana", price_cents=1000)

    order = (await _checkout(client, auth, [
        {"artifact_id": shared["id"]},
        {"artifact_id": solo["id"]},
    ])).json()["order"]
    body = (await _settle(client, order["payment_intent_id"])).json()

    payouts = {p["recipient_id"]: p["amount_cents"] for p in body["payouts"]}
    assert payouts == {"owner": 1260, "ana": 1440}
    assert [p["recipient_id"] for p in body["payouts"]] == ["owner", "ana"]
    assert body["order"]["fees_cents"] == 300
    assert sum(payouts.values()) + body["order"]["fees_cents"] == body["order"]["subtotal_cents"]


async def test_settlement_log_reports_distributed_cents(client, auth, create_artifact, caplog):
    artifact = await create_artifact(price_cents=1234)
    order = (await _checkout(client, auth, [{"artifact_id": artifact["id"]}])).json()["order"]

    with caplog.at_level(logging.INFO, logger="ethos_guild.services.settlement"):
        body = (await _settle(client, order["payment_intent_id"])).json()

    settled = [r for r in caplog.records if r.getMessage() == "Order settled"]
    assert len(settled) == 1
    assert settled[0].payout_cents == sum(p["amount_cents"] for p in body["payouts"])
    assert settled[0].payout_cents + body["order"]["fees_cents"] == 1234


async def test_draft_agreement_does_not_govern(client, auth, create_artifact):
    artifact = await create_artifact(price_cents=2000)
    await client.post("/api/v1/collabs", json={
        "artifact_id": artifact["id"],
        "splits": [
            {"user_id": "owner", "percent": 70},
            {"user_id": "ana", "percent": 30},
        ],
        "status": "DRAFT",
    }, headers=auth("owner"))
    order = (await _checkout(client, auth, [{"artifact_id": artifact["id"]}])).json()["order"]
    body = (await _settle(client, order["payment_intent_id"])).json()
    assert [(p["recipient_id"], p["amount_cents"]) for p in body["payouts"]] == [
        ("owner", 1800),
    ]


# ─── Webhook envelope ────────────────────────────────────────────

async def test_unrecognized_event_acknowledged(client):
    res = await client.post("/api/v1/webhooks/payments", json={
        "type": "charge.refunded", "data": {"object": {"id": "ch_1"}},
    })
    assert res.status_code == 202
    assert res.json() == {"received": True}


async def test_missing_intent_id_rejected(client):
    res = await client.post("/api/v1/webhooks/payments", json={
        "type": "payment_intent.succeeded", "data": {"object": {}},
    })
    assert res.status_code == 400
    assert res.json()["error"]["message"] == "Invalid payload"


async def test_malformed_body_rejected(client):
    res = await client.post(
        "/api/v1/webhooks/payments", content=b"not json",
        headers={"Content-Type": "application/json"},
    )
    assert res.status_code == 400


async def test_missing_type_rejected(client):
    res = await client.post("/api/v1/webhooks/payments", json={"data": {}})
    assert res.status_code == 400


async def test_unknown_intent_404(client):
    res = await _settle(client, "pi_does_not_exist")
    assert res.status_code == 404


# ─── Receipts & order lookup ─────────────────────────────────────

async def test_receipt_failure_does_not_fail_settlement(
    client, auth, create_artifact, notary, caplog,
):
    notary.fail = True
    artifact = await create_artifact()
    order = (await _checkout(client, auth, [{"artifact_id": artifact["id"]}])).json()["order"]

    with caplog.at_level(logging.WARNING, logger="ethos_guild.services.receipts"):
        res = await _settle(client, order["payment_intent_id"])

    assert res.status_code == 200
    assert res.json()["order"]["status"] == "PAID"
    assert notary.calls == [order["id"]]
    assert any("settlement receipt" in r.getMessage() for r in caplog.records)


async def test_buyer_reads_settled_order(client, auth, create_artifact):
    artifact = await create_artifact()
    order = (await _checkout(client, auth, [{"artifact_id": artifact["id"]}])).json()["order"]
    await _settle(client, order["payment_intent_id"])

    res = await client.get(f"/api/v1/orders/{order['id']}", headers=auth("buyer"))
    assert res.status_code == 200
    assert res.json()["order"]["status"] == "PAID"
    assert [p["amount_cents"] for p in res.json()["payouts"]] == [450]

    other = await client.get(f"/api/v1/orders/{order['id']}", headers=auth("someone"))
    assert other.status_code == 404
