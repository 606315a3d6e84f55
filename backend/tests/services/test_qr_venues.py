"""QR Namespace & Venues — route tests for slug exclusivity, redirects and catalogs.

Invariants covered:
    - One slug namespace across artifacts, events and venues (409 on reuse)
    - GET /qr/{slug} answers 302 to the entity page and records a scan
    - Catalog items need a positive price, a shipping mode and an existing artifact
"""

import uuid

from sqlalchemy import select

from ethos_guild.models.qr_scan import QRScan


async def test_venue_cannot_reuse_artifact_slug(client, auth, create_artifact):
    await create_artifact(qr_slug="aurora")
    res = await client.post("/api/v1/venues", json={
        "name": "Aurora Hall", "contact_email": "hall@example.com", "qr_slug": "aurora",
    }, headers=auth("venue-owner"))
    assert res.status_code == 409
    assert res.json()["error"]["message"] == "QR slug already in use"


async def test_event_cannot_reuse_venue_slug(client, auth):
    res = await client.post("/api/v1/venues", json={
        "name": "Dock 9", "contact_email": "dock@example.com", "qr_slug": "dock-9",
    }, headers=auth("venue-owner"))
    assert res.status_code == 201
    res = await client.post("/api/v1/events", json={
        "title": "Dock party",
        "start_time": "2026-11-01T18:00:00+00:00",
        "end_time": "2026-11-01T23:00:00+00:00",
        "qr_slug": "dock-9",
    }, headers=auth("organizer"))
    assert res.status_code == 409


async def test_artifact_slug_conflict(client, auth, create_artifact):
    await create_artifact(qr_slug="aurora")
    res = await client.post("/api/v1/artifacts", json={
        "title": "Copycat", "kind": "IMAGE", "supply_class": "COMMON", "qr_slug": "aurora",
    }, headers=auth("other"))
    assert res.status_code == 409


async def test_invalid_slug_format_rejected(client, auth):
    res = await client.post("/api/v1/venues", json={
        "name": "Bad", "contact_email": "bad@example.com", "qr_slug": "Not A Slug",
    }, headers=auth("venue-owner"))
    assert res.status_code == 400


async def test_blank_slug_rejected_on_every_entity(client, auth):
    artifact = await client.post("/api/v1/artifacts", json={
        "title": "Blank", "kind": "IMAGE", "supply_class": "COMMON", "qr_slug": "",
    }, headers=auth("owner"))
    venue = await client.post("/api/v1/venues", json={
        "name": "Blank Hall", "contact_email": "blank@example.com", "qr_slug": "",
    }, headers=auth("venue-owner"))
    event = await client.post("/api/v1/events", json={
        "title": "Blank night",
        "start_time": "2026-11-01T18:00:00+00:00",
        "end_time": "2026-11-01T23:00:00+00:00",
        "qr_slug": "",
    }, headers=auth("organizer"))
    assert artifact.status_code == 400
    assert venue.status_code == 400
    assert event.status_code == 400


async def test_second_blank_slug_is_not_a_server_error(client, auth):
    body = {"title": "Twin", "kind": "IMAGE", "supply_class": "COMMON", "qr_slug": ""}
    first = await client.post("/api/v1/artifacts", json=body, headers=auth("owner"))
    second = await client.post("/api/v1/artifacts", json=body, headers=auth("owner"))
    assert first.status_code == 400
    assert second.status_code == 400
    assert second.json()["error"]["code"] == first.json()["error"]["code"]


async def test_patch_to_blank_slug_rejected(client, auth, create_artifact):
    artifact = await create_artifact(qr_slug="aurora")
    res = await client.patch(
        f"/api/v1/artifacts/{artifact['id']}", json={"qr_slug": ""},
        headers=auth("owner"),
    )
    assert res.status_code == 400
    resolved = await client.get("/api/v1/qr/aurora", follow_redirects=False)
    assert resolved.status_code == 302


async def test_slug_change_frees_old_slug(client, auth, create_artifact):
    artifact = await create_artifact(qr_slug="aurora")
    res = await client.patch(
        f"/api/v1/artifacts/{artifact['id']}", json={"qr_slug": "borealis"},
        headers=auth("owner"),
    )
    assert res.status_code == 200
    assert res.json()["artifact"]["qr_slug"] == "borealis"

    res = await client.post("/api/v1/venues", json={
        "name": "Aurora Hall", "contact_email": "hall@example.com", "qr_slug": "aurora",
    }, headers=auth("venue-owner"))
    assert res.status_code == 201


async def test_resolve_redirects_and_records_scan(
    client, auth, create_artifact, test_session_factory,
):
    artifact = await create_artifact(qr_slug="aurora")
    res = await client.get("/api/v1/qr/aurora", follow_redirects=False)
    assert res.status_code == 302
    assert res.headers["location"] == f"/artifacts/{artifact['id']}"

    async with test_session_factory() as db:
        scans = (await db.execute(select(QRScan))).scalars().all()
    assert [(s.slug, s.entity_type, str(s.entity_id)) for s in scans] == [
        ("aurora", "ARTIFACT", artifact["id"]),
    ]


async def test_resolve_event_slug(client, auth):
    event = (await client.post("/api/v1/events", json={
        "title": "Night Market",
        "start_time": "2026-11-01T18:00:00+00:00",
        "end_time": "2026-11-01T23:00:00+00:00",
        "qr_slug": "night-market",
    }, headers=auth("organizer"))).json()["event"]
    res = await client.get("/api/v1/qr/night-market", follow_redirects=False)
    assert res.headers["location"] == f"/events/{event['id']}"


async def test_resolve_unknown_slug_404(client):
    res = await client.get("/api/v1/qr/nobody-home", follow_redirects=False)
    assert res.status_code == 404


# ─── Venues & catalog ────────────────────────────────────────────

async def _venue(client, auth) -> dict:
    res = await client.post("/api/v1/venues", json={
        "name": "Dock 9", "contact_email": "dock@example.com",
    }, headers=auth("venue-owner"))
    return res.json()["venue"]


async def test_add_catalog_item_and_read_venue(client, auth, create_artifact):
    venue = await _venue(client, auth)
    artifact = await create_artifact()
    res = await client.post(f"/api/v1/venues/{venue['id']}/catalog", json={
        "artifact_id": artifact["id"], "price_cents": 2500,
        "shipping_mode": "SELF_SHIP", "local_inventory": 4,
    }, headers=auth("venue-owner"))
    assert res.status_code == 201

    detail = (await client.get(f"/api/v1/venues/{venue['id']}")).json()
    assert detail["venue"]["name"] == "Dock 9"
    assert [(i["artifact_id"], i["price_cents"], i["shipping_mode"]) for i in detail["catalog"]] == [
        (artifact["id"], 2500, "SELF_SHIP"),
    ]


async def test_catalog_item_requires_price_and_shipping(client, auth, create_artifact):
    venue = await _venue(client, auth)
    artifact = await create_artifact()
    url = f"/api/v1/venues/{venue['id']}/catalog"

    no_price = await client.post(url, json={
        "artifact_id": artifact["id"], "shipping_mode": "POD",
    }, headers=auth("venue-owner"))
    zero_price = await client.post(url, json={
        "artifact_id": artifact["id"], "price_cents": 0, "shipping_mode": "POD",
    }, headers=auth("venue-owner"))
    no_shipping = await client.post(url, json={
        "artifact_id": artifact["id"], "price_cents": 100,
    }, headers=auth("venue-owner"))
    assert no_price.status_code == 400
    assert zero_price.status_code == 400
    assert no_shipping.status_code == 400


async def test_catalog_item_unknown_artifact_404(client, auth):
    venue = await _venue(client, auth)
    res = await client.post(f"/api/v1/venues/{venue['id']}/catalog", json={
        "artifact_id": str(uuid.uuid4()), "price_cents": 100, "shipping_mode": "POD",
    }, headers=auth("venue-owner"))
    assert res.status_code == 404


async def test_unknown_venue_404(client):
    assert (await client.get(f"/api/v1/venues/{uuid.uuid4()}")).status_code == 404
