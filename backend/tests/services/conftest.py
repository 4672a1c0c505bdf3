"""Service test fixtures — async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - Payment gateway replaced by FakeGateway, storage by a tmp_path directory
    - db_manager patched so the readiness probe sees the test engine

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (PostgreSQL-specific behavior not exercised here)
    - Assertions on persisted state go through fresh sessions (read_fresh) so the
      identity map of test_db never hides what the routes committed
"""

from decimal import Decimal

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from event_site.api.dependencies import get_file_storage, get_payment_gateway
from event_site.config import get_settings
from event_site.core.webhook_signature import compute_signature
from event_site.db.base import Base
from event_site.infrastructure.credentials import (
    Principal, hash_password, issue_token,
)
from event_site.infrastructure.database import get_db, DatabaseSessionManager
from event_site.infrastructure.file_storage import LocalFileStorage
import event_site.infrastructure.database as db_module
from event_site.main import app
from event_site.models.gift import Gift
from event_site.models.site_config import SiteConfig
from event_site.models.user import User
from tests.services.fake_gateway import FakeGateway

ADMIN_EMAIL = "admin@casamento.com"
ADMIN_PASSWORD = "admin123"


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
def read_fresh(test_session_factory):
    """Load one row through a brand-new session."""
    async def _read(model, entity_id):
        async with test_session_factory() as session:
            return await session.get(model, entity_id)
    return _read


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def storage(tmp_path):
    return LocalFileStorage(tmp_path / "uploads", max_bytes=1024 * 1024)


@pytest.fixture
async def client(test_engine, test_session_factory, gateway, storage):
    """FastAPI test client with DB, gateway and storage overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_payment_gateway] = lambda: gateway
    app.dependency_overrides[get_file_storage] = lambda: storage

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
async def admin_user(test_db):
    user = User(
        name="Administrador",
        email=ADMIN_EMAIL,
        password_hash=hash_password(ADMIN_PASSWORD),
    )
    test_db.add(user)
    await test_db.commit()
    await test_db.refresh(user)
    return user


@pytest.fixture
def admin_headers(admin_user):
    settings = get_settings()
    token = issue_token(
        Principal(user_id=admin_user.id, email=admin_user.email, name=admin_user.name),
        settings.jwt_secret,
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def site_config(test_db):
    """Config row with gateway credentials, as an admin would leave it."""
    config = SiteConfig(
        site_title="Casamento Ana & Bob",
        mercado_pago_public_key="TEST-public-key",
        mercado_pago_access_token="TEST-access-token",
    )
    test_db.add(config)
    await test_db.commit()
    await test_db.refresh(config)
    return config


async def _add_gift(test_db, name, price, stock_count):
    gift = Gift(
        name=name, description=f"{name} description",
        price=Decimal(price), stock_count=stock_count,
    )
    test_db.add(gift)
    await test_db.commit()
    await test_db.refresh(gift)
    return gift


@pytest.fixture
async def gift(test_db):
    return await _add_gift(test_db, "Jogo de Panelas", "450.00", 1)


@pytest.fixture
async def sold_out_gift(test_db):
    return await _add_gift(test_db, "Liquidificador", "250.00", 0)


@pytest.fixture
def make_gift(test_db):
    async def _make(name="Cafeteira", price="320.00", stock_count=1):
        return await _add_gift(test_db, name, price, stock_count)
    return _make


@pytest.fixture
def signed_webhook(client):
    """POST a payment notification signed with the configured secret."""
    async def _post(body: bytes, signature: str | None = None):
        secret = get_settings().webhook_secret
        headers = {"Content-Type": "application/json"}
        headers["x-signature"] = (
            signature if signature is not None else compute_signature(secret, body)
        )
        return await client.post("/api/v1/payment-webhook", content=body, headers=headers)
    return _post
