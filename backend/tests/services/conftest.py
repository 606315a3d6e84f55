"""Service test fixtures — async DB, FastAPI test client and fake collaborators.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db, identity provider, payment gateway and receipt notary are all
      overridden; no test reaches a network service
    - Tokens are real signed tokens, so the bearer parsing path is exercised

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (PostgreSQL-specific features not exercised here)
    - FakeNotary records calls and can be told to fail, so receipt behavior is observable
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from ethos_guild.api.deps import (
    get_identity_provider, get_payment_gateway, get_receipt_notary,
)
from ethos_guild.core.errors import ReceiptNotaryError
from ethos_guild.db.base import Base
from ethos_guild.infrastructure.database import get_db
from ethos_guild.infrastructure.identity import SignedTokenIdentityProvider
from ethos_guild.infrastructure.payment_gateway import LocalPaymentGateway
from ethos_guild.main import app
import ethos_guild.models  # noqa: F401


class FakeNotary:
    def __init__(self):
        self.calls: list[str] = []
        self.fail = False

    async def notify(self, order_id: str) -> None:
        self.calls.append(order_id)
        if self.fail:
            raise ReceiptNotaryError("notary unreachable")


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def identity_provider():
    return SignedTokenIdentityProvider("service-test-secret")


@pytest.fixture
def notary():
    return FakeNotary()


@pytest.fixture
def auth(identity_provider):
    """auth("user-1") -> Authorization headers for that user (of age by default)."""
    def _headers(user_id: str, of_age: bool = True) -> dict:
        token = identity_provider.issue_token(user_id, of_age)
        return {"Authorization": f"Bearer {token}"}
    return _headers


@pytest.fixture
async def client(test_session_factory, identity_provider, notary):
    """FastAPI test client with every external dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    gateway = LocalPaymentGateway()
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_identity_provider] = lambda: identity_provider
    app.dependency_overrides[get_payment_gateway] = lambda: gateway
    app.dependency_overrides[get_receipt_notary] = lambda: notary

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def create_artifact(client, auth):
    """POST an artifact as owner and return its JSON."""
    async def _create(owner: str = "owner", **fields) -> dict:
        body = {
            "title": "Aurora Print",
            "kind": "IMAGE",
            "supply_class": "COMMON",
            "price_cents": 500,
            "visibility": "PUBLIC",
        }
        body.update(fields)
        res = await client.post("/api/v1/artifacts", json=body, headers=auth(owner))
        assert res.status_code == 201, res.text
        return res.json()["artifact"]
    return _create

