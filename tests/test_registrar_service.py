"""Tests for registering verified domains with Netlify."""

from uuid import uuid4

import pytest

from app.models.custom_domain import DomainStatus, SslStatus
from app.services.errors import (
    DomainNotFoundError,
    PreconditionError,
    RegistrarNotConfiguredError,
)
from app.services.netlify_client import NetlifyDomain, NetlifyError
from app.services.registrar_service import DomainRegistrar


@pytest.fixture
def registrar(db, mock_netlify) -> DomainRegistrar:
    return DomainRegistrar(db, mock_netlify)


class TestRegisterPreconditions:
    async def test_credentials_checked_first(self, registrar, mock_netlify):
        mock_netlify.configured = False

        with pytest.raises(RegistrarNotConfiguredError, match="NETLIFY_ACCESS_TOKEN"):
            await registrar.register(uuid4())

    async def test_unknown_domain(self, registrar):
        with pytest.raises(DomainNotFoundError):
            await registrar.register(uuid4())

    async def test_requires_dns(self, registrar, make_domain, mock_netlify):
        domain = await make_domain(dns_configured=False)

        with pytest.raises(PreconditionError, match="DNS must be configured"):
            await registrar.register(domain.id)

        mock_netlify.add_domain.assert_not_called()
        assert domain.status == DomainStatus.PENDING

    async def test_refuses_already_registered(self, registrar, make_domain, mock_netlify):
        domain = await make_domain(
            status=DomainStatus.PROVISIONING,
            dns_configured=True,
            registrar_domain_id="nf-existing",
        )

        with pytest.raises(PreconditionError, match="already registered"):
            await registrar.register(domain.id)

        mock_netlify.add_domain.assert_not_called()


class TestRegister:
    async def test_pending_certificate(self, registrar, make_domain, mock_netlify):
        domain = await make_domain(
            domain="book.example.com", status=DomainStatus.VERIFIED, dns_configured=True
        )

        result = await registrar.register(domain.id)

        assert result.success is True
        assert result.registrar_domain_id == "nf-domain-1"
        assert result.ssl_status == "pending"
        assert domain.status == DomainStatus.PROVISIONING
        assert domain.registrar_domain_id == "nf-domain-1"
        assert domain.ssl_certificate_status == SslStatus.PROVISIONING
        assert domain.provisioned_at is not None
        mock_netlify.add_domain.assert_awaited_once_with("book.example.com")

    async def test_certificate_already_issued(self, registrar, make_domain, mock_netlify):
        mock_netlify.add_domain.return_value = NetlifyDomain(
            id="nf-9", domain="book.example.com", ssl_state="issued"
        )
        domain = await make_domain(status=DomainStatus.VERIFIED, dns_configured=True)

        result = await registrar.register(domain.id)

        assert result.success is True
        assert domain.status == DomainStatus.ACTIVE
        assert domain.ssl_certificate_status == SslStatus.ACTIVE

    async def test_platform_rejection_is_recorded(self, registrar, make_domain, mock_netlify):
        mock_netlify.add_domain.side_effect = NetlifyError("Domain already in use", 422)
        domain = await make_domain(status=DomainStatus.VERIFIED, dns_configured=True)

        result = await registrar.register(domain.id)

        assert result.success is False
        assert result.error == "Domain already in use"
        assert result.to_payload() == {"success": False, "error": "Domain already in use"}
        assert domain.status == DomainStatus.FAILED
        assert domain.registrar_api_error == "Domain already in use"
        assert domain.error_message == "Domain already in use"
        assert domain.registrar_domain_id is None

    async def test_retry_after_failure_clears_errors(self, registrar, make_domain, mock_netlify):
        mock_netlify.add_domain.side_effect = [
            NetlifyError("Netlify API error: 503", 503),
            NetlifyDomain(id="nf-3", domain="", ssl_state="pending"),
        ]
        domain = await make_domain(status=DomainStatus.VERIFIED, dns_configured=True)

        await registrar.register(domain.id)
        assert domain.status == DomainStatus.FAILED

        result = await registrar.register(domain.id)

        assert result.success is True
        assert domain.status == DomainStatus.PROVISIONING
        assert domain.registrar_api_error is None
        assert domain.error_message is None
