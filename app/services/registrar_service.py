"""Registration of verified domains with the hosting platform."""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.custom_domain import SslStatus
from app.services import domain_repository
from app.services.domain_state import DomainEvent, transition
from app.services.errors import PreconditionError, RegistrarNotConfiguredError
from app.services.netlify_client import NetlifyClient, NetlifyError

logger = logging.getLogger(__name__)


@dataclass
class RegistrationResult:
    success: bool
    domain: str | None = None
    registrar_domain_id: str | None = None
    ssl_status: str | None = None
    error: str | None = None

    def to_payload(self) -> dict[str, Any]:
        """Wire shape used by add-domain and verify-domain responses."""
        if not self.success:
            return {"success": False, "error": self.error}
        return {
            "success": True,
            "domain": self.domain,
            "netlify_domain_id": self.registrar_domain_id,
            "ssl_status": self.ssl_status,
        }


class DomainRegistrar:
    """Adds a DNS-verified domain to the Netlify site and records the outcome."""

    def __init__(self, db: AsyncSession, netlify: NetlifyClient):
        self.db = db
        self.netlify = netlify

    async def register(self, domain_id: UUID) -> RegistrationResult:
        """
        Register a domain with Netlify.

        Platform rejections are recorded on the domain (status ``failed``)
        and returned as an unsuccessful result rather than raised.

        Raises:
            RegistrarNotConfiguredError: Netlify credentials are missing
            DomainNotFoundError: No domain with this id
            PreconditionError: DNS not verified, or already registered
        """
        if not self.netlify.configured:
            raise RegistrarNotConfiguredError()

        domain = await domain_repository.get_domain_or_raise(self.db, domain_id)
        logger.info(
            f"Registering {domain.domain}: dns_configured={domain.dns_configured}"
        )

        if not domain.dns_configured:
            raise PreconditionError(
                "DNS must be configured and verified before adding to Netlify"
            )
        if domain.registrar_domain_id:
            raise PreconditionError(
                f"Domain is already registered with Netlify ({domain.registrar_domain_id})"
            )

        try:
            created = await self.netlify.add_domain(domain.domain)
        except NetlifyError as e:
            message = str(e)
            domain.status = transition(domain.status, DomainEvent.REGISTRATION_FAILED)
            domain.registrar_api_error = message
            domain.error_message = message
            await domain_repository.save(self.db, domain)
            logger.warning(f"Registration of {domain.domain} failed: {message}")
            return RegistrationResult(success=False, domain=domain.domain, error=message)

        issued = SslStatus.from_platform_state(created.ssl_state) == SslStatus.ACTIVE
        event = DomainEvent.REGISTERED_SSL_ISSUED if issued else DomainEvent.REGISTERED

        domain.status = transition(domain.status, event)
        domain.registrar_domain_id = created.id
        domain.provisioned_at = datetime.now(timezone.utc)
        domain.ssl_certificate_status = SslStatus.ACTIVE if issued else SslStatus.PROVISIONING
        domain.registrar_api_error = None
        domain.error_message = None
        await domain_repository.save(self.db, domain)

        logger.info(
            f"Domain {domain.domain} registered as {created.id}, "
            f"status={domain.status.value}, ssl={created.ssl_state}"
        )
        return RegistrationResult(
            success=True,
            domain=domain.domain,
            registrar_domain_id=created.id,
            ssl_status=created.ssl_state,
        )
