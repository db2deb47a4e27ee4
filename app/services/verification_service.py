"""DNS verification of custom domains."""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.custom_domain import DomainStatus, SslStatus
from app.services import domain_repository
from app.services.dns_resolver import DnsLookupError, DnsResolverClient, normalize_hostname
from app.services.domain_state import DomainEvent, transition
from app.services.errors import DomainServiceError
from app.services.registrar_service import DomainRegistrar, RegistrationResult

logger = logging.getLogger(__name__)


@dataclass
class DnsCheck:
    configured: bool
    error: str | None = None


@dataclass
class VerificationResult:
    configured: bool
    domain: str
    error: str | None = None
    registration: RegistrationResult | None = None

    def to_payload(self) -> dict[str, Any]:
        return {
            "success": True,
            "configured": self.configured,
            "error": self.error,
            "domain": self.domain,
            "netlify_status": self.registration.to_payload() if self.registration else None,
        }


def cname_matches(observed: str, expected: str) -> bool:
    """
    Containment match between an observed CNAME and the expected target.

    Case-insensitive and trailing-dot tolerant; the observed value only has
    to include the target so registrar-appended labels still verify.
    """
    return normalize_hostname(expected) in normalize_hostname(observed)


class DomainVerificationService:
    """Checks that a domain CNAMEs to the storefront and records the result."""

    def __init__(
        self,
        db: AsyncSession,
        resolver: DnsResolverClient,
        registrar: DomainRegistrar,
        expected_target: str,
    ):
        self.db = db
        self.resolver = resolver
        self.registrar = registrar
        self.expected_target = normalize_hostname(expected_target)

    async def check_dns(self, hostname: str) -> DnsCheck:
        """
        Inspect DNS for ``hostname`` without touching the database.

        Resolver failures are reported as not configured.
        """
        target = self.expected_target
        try:
            cname = await self.resolver.lookup(hostname, "CNAME")

            if not cname.configured:
                a_records = await self.resolver.lookup(hostname, "A")
                if not a_records.configured:
                    return DnsCheck(
                        configured=False,
                        error=(
                            "No DNS records found. Please add a CNAME record "
                            f"pointing to {target}."
                        ),
                    )
                return DnsCheck(
                    configured=False,
                    error=(
                        "Found A record but CNAME is required. Please use a "
                        f"subdomain with a CNAME record pointing to {target}."
                    ),
                )

            if not cname.records:
                return DnsCheck(
                    configured=False,
                    error="DNS records found but no CNAME record detected",
                )

            observed = cname.records[0]
            if not cname_matches(observed, target):
                return DnsCheck(
                    configured=False,
                    error=f"CNAME points to {observed} but should point to {target}",
                )

            return DnsCheck(configured=True)

        except DnsLookupError as e:
            logger.error(f"DNS check error for {hostname}: {e}")
            return DnsCheck(configured=False, error=f"DNS verification failed: {e}")

    async def verify(self, domain_id: UUID) -> VerificationResult:
        """
        Verify a domain's DNS and advance its status.

        On success, a domain that has never been registered is handed to the
        registrar; registration problems are reported in the result but do
        not fail verification.

        Raises:
            DomainNotFoundError: No domain with this id
        """
        domain = await domain_repository.get_domain_or_raise(self.db, domain_id)
        check = await self.check_dns(domain.domain)
        now = datetime.now(timezone.utc)

        domain.dns_configured = check.configured
        domain.last_checked_at = now

        if check.configured:
            domain.status = transition(domain.status, DomainEvent.DNS_VERIFIED)
            domain.verified_at = now
            domain.error_message = None
            if domain.status == DomainStatus.VERIFIED:
                domain.ssl_certificate_status = SslStatus.PROVISIONING
        else:
            domain.status = transition(domain.status, DomainEvent.DNS_FAILED)
            domain.error_message = check.error

        await domain_repository.save(self.db, domain)
        logger.info(
            f"Verified {domain.domain}: configured={check.configured}, "
            f"status={domain.status.value}"
        )

        name = domain.domain
        registration = None
        if check.configured and not domain.registrar_domain_id:
            try:
                registration = await self.registrar.register(domain.id)
            except DomainServiceError as e:
                logger.error(f"Registration after verifying {name} failed: {e}")
                registration = RegistrationResult(success=False, domain=name, error=str(e))
            except Exception as e:
                logger.exception(f"Unexpected error registering {name}")
                await self.db.rollback()
                registration = RegistrationResult(
                    success=False, domain=name, error=f"Failed to add domain to Netlify: {e}"
                )

        return VerificationResult(
            configured=check.configured,
            domain=name,
            error=check.error,
            registration=registration,
        )
