"""Artifact Reviews — route tests for ratings and the summary."""


REVIEW = {
    "rating_quality": 5,
    "rating_style": 4,
    "rating_skill_impact": 3,
    "comment": "Lovely colors",
    "tags": ["vivid", "print"],
}


async def test_review_and_summary(client, auth, create_artifact):
    artifact = await create_artifact()
    url = f"/api/v1/artifacts/{artifact['id']}/reviews"

    assert (await client.post(url, json=REVIEW, headers=auth("fan"))).status_code == 201
    second = {**REVIEW, "rating_quality": 4, "tags": ["print", "bold"]}
    assert (await client.post(url, json=second, headers=auth("fan-2"))).status_code == 201

    reviews = (await client.get(url)).json()["reviews"]
    assert [r["reviewer_id"] for r in reviews] == ["fan", "fan-2"]

    summary = (await client.get(f"{url}/summary")).json()
    assert summary["count"] == 2
    assert summary["average"]["quality"] == 4.5
    assert summary["tags"] == ["vivid", "print", "bold"]


async def test_summary_without_reviews(client, create_artifact):
    artifact = await create_artifact()
    summary = (await client.get(f"/api/v1/artifacts/{artifact['id']}/reviews/summary")).json()
    assert summary == {"average": None, "tags": [], "count": 0}


async def test_owner_cannot_self_review(client, auth, create_artifact):
    artifact = await create_artifact()
    res = await client.post(
        f"/api/v1/artifacts/{artifact['id']}/reviews", json=REVIEW, headers=auth("owner"),
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "SELF_REVIEW"


async def test_reviews_disabled(client, auth, create_artifact):
    artifact = await create_artifact(reviews_enabled=False)
    res = await client.post(
        f"/api/v1/artifacts/{artifact['id']}/reviews", json=REVIEW, headers=auth("fan"),
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "REVIEWS_DISABLED"


async def test_rating_out_of_range(client, auth, create_artifact):
    artifact = await create_artifact()
    res = await client.post(
        f"/api/v1/artifacts/{artifact['id']}/reviews",
        json={**REVIEW, "rating_style": 6}, headers=auth("fan"),
    )
    assert res.status_code == 400
