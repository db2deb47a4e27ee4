"""Custom domain catalog: creation, listing, DNS instructions and routing."""

import logging
from uuid import UUID, uuid4

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.custom_domain import CustomDomain, DomainStatus, SslStatus
from app.schemas.domain import DnsRecord
from app.services import domain_repository
from app.services.errors import DomainAlreadyExistsError, DomainNotFoundError, PreconditionError
from app.utils.hostname_validator import normalize_domain, validate_hostname

logger = logging.getLogger(__name__)

# Statuses in which a hostname can serve the storefront
ROUTABLE_STATUSES = (DomainStatus.VERIFIED, DomainStatus.PROVISIONING, DomainStatus.ACTIVE)


async def create_domain(db: AsyncSession, business_id: UUID, domain_name: str) -> CustomDomain:
    """
    Record a tenant's request for a custom domain.

    Args:
        db: Database session
        business_id: Owning tenant
        domain_name: Hostname to connect

    Returns:
        New domain in ``pending`` status

    Raises:
        PreconditionError: If the hostname is malformed
        DomainAlreadyExistsError: If the hostname is already claimed
    """
    is_valid, error = validate_hostname(domain_name)
    if not is_valid:
        raise PreconditionError(error)

    domain_name = normalize_domain(domain_name)

    existing = await domain_repository.find_by_hostname(db, domain_name)
    if existing:
        raise DomainAlreadyExistsError("This domain is already added")

    domain = CustomDomain(
        id=uuid4(),
        business_id=business_id,
        domain=domain_name,
        status=DomainStatus.PENDING,
        dns_configured=False,
        ssl_certificate_status=SslStatus.PENDING,
        is_primary=False,
    )
    await domain_repository.save(db, domain)

    logger.info(f"Domain {domain_name} requested by business {business_id}")
    return domain


def build_dns_records(domain: CustomDomain, cname_target: str) -> list[DnsRecord]:
    """
    Build the DNS records the owner must configure.

    Args:
        domain: Domain record
        cname_target: Hostname the CNAME must point to

    Returns:
        List of DNS records to configure
    """
    return [
        DnsRecord(
            type="CNAME",
            name=domain.domain,
            value=normalize_domain(cname_target),
        )
    ]


async def get_domain(db: AsyncSession, domain_id: UUID) -> CustomDomain:
    return await domain_repository.get_domain_or_raise(db, domain_id)


async def list_domains(db: AsyncSession, business_id: UUID) -> tuple[list[CustomDomain], int]:
    return await domain_repository.list_for_business(db, business_id)


async def set_primary(db: AsyncSession, domain_id: UUID) -> CustomDomain:
    """
    Make a domain the tenant's primary hostname.

    Clears the flag on the tenant's other domains so at most one is primary.
    """
    domain = await domain_repository.get_domain_or_raise(db, domain_id)

    await db.execute(
        update(CustomDomain)
        .where(
            CustomDomain.business_id == domain.business_id,
            CustomDomain.id != domain.id,
        )
        .values(is_primary=False)
        .execution_options(synchronize_session="fetch")
    )
    domain.is_primary = True
    await domain_repository.save(db, domain)

    logger.info(f"Domain {domain.domain} is now primary for business {domain.business_id}")
    return domain


async def resolve_hostname(db: AsyncSession, hostname: str) -> CustomDomain:
    """
    Find the tenant domain that serves an incoming storefront hostname.

    Raises:
        DomainNotFoundError: If the hostname is unknown or not yet verified
    """
    domain = await domain_repository.find_by_hostname(db, hostname)
    if (
        domain is None
        or not domain.dns_configured
        or domain.status not in ROUTABLE_STATUSES
    ):
        raise DomainNotFoundError(f"No verified custom domain for {normalize_domain(hostname)}")
    return domain
