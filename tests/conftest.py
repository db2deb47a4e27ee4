"""Test fixtures for the custom domain service test suite."""

import os
from collections.abc import AsyncGenerator, Callable
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Set test environment variables BEFORE importing app modules
os.environ.update({
    "DATABASE_URL": "sqlite+aiosqlite:///:memory:",
    "NETLIFY_ACCESS_TOKEN": "test-netlify-token",
    "NETLIFY_SITE_ID": "test-site-id",
    "NETLIFY_API_URL": "https://netlify.test/api/v1",
    "CUSTOM_DOMAIN_CNAME_TARGET": "tenant123.bookinghost.app",
    "DNS_RESOLVER_URL": "https://dns.test/resolve",
    "DNS_MAX_ATTEMPTS": "1",
    "NETLIFY_MAX_ATTEMPTS": "1",
    "RETRY_MAX_WAIT_SECONDS": "0",
    "SERVICE_API_KEY": "",
    "ENVIRONMENT": "test",
    "LOG_LEVEL": "WARNING",
})

from app.database import Base, get_session  # noqa: E402
from app.dependencies import get_dns_resolver, get_netlify_client  # noqa: E402
from app.main import create_app  # noqa: E402
from app.models.custom_domain import CustomDomain, DomainStatus, SslStatus  # noqa: E402
from app.services.netlify_client import NetlifyDomain  # noqa: E402
from tests.dns_fakes import fake_dns  # noqa: E402


@pytest.fixture
async def db() -> AsyncGenerator[AsyncSession, None]:
    """Provide a session on a fresh in-memory database for each test."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )
    async with factory() as session:
        yield session
    await engine.dispose()


@pytest.fixture
def make_domain(db: AsyncSession) -> Callable:
    """Factory inserting a custom domain row."""

    async def _make(
        domain: str | None = None,
        business_id=None,
        status: DomainStatus = DomainStatus.PENDING,
        dns_configured: bool = False,
        registrar_domain_id: str | None = None,
        ssl_certificate_status: SslStatus = SslStatus.PENDING,
        is_primary: bool = False,
    ) -> CustomDomain:
        row = CustomDomain(
            id=uuid4(),
            business_id=business_id or uuid4(),
            domain=domain or f"{uuid4().hex[:8]}.example.com",
            status=status,
            dns_configured=dns_configured,
            registrar_domain_id=registrar_domain_id,
            ssl_certificate_status=ssl_certificate_status,
            is_primary=is_primary,
        )
        db.add(row)
        await db.commit()
        return row

    return _make


@pytest.fixture
def mock_resolver():
    """Resolver mock with no records configured."""
    mock = AsyncMock()
    mock.lookup.side_effect = fake_dns()
    return mock


@pytest.fixture
def mock_netlify():
    """Mock the Netlify client to avoid real API calls."""
    mock = MagicMock()
    mock.configured = True
    mock.add_domain = AsyncMock(
        return_value=NetlifyDomain(id="nf-domain-1", domain="", ssl_state="pending")
    )
    mock.get_domain = AsyncMock(
        return_value=NetlifyDomain(id="nf-domain-1", domain="", ssl_state="issued")
    )
    mock.delete_domain = AsyncMock(return_value=True)
    return mock


@pytest.fixture
async def client(
    db: AsyncSession, mock_resolver, mock_netlify
) -> AsyncGenerator[AsyncClient, None]:
    """Create a test HTTP client with database and client overrides."""
    app = create_app()

    async def override_get_session():
        yield db

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_dns_resolver] = lambda: mock_resolver
    app.dependency_overrides[get_netlify_client] = lambda: mock_netlify

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
