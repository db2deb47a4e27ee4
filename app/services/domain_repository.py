"""Persistence helpers shared by the custom domain services."""

import logging
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.custom_domain import CustomDomain, DomainStatus, SslStatus
from app.services.errors import DomainNotFoundError

logger = logging.getLogger(__name__)


async def find_domain(db: AsyncSession, domain_id: UUID) -> CustomDomain | None:
    result = await db.execute(select(CustomDomain).where(CustomDomain.id == domain_id))
    return result.scalar_one_or_none()


async def get_domain_or_raise(db: AsyncSession, domain_id: UUID) -> CustomDomain:
    """
    Load a domain by id.

    Raises:
        DomainNotFoundError: If no row has this id
    """
    domain = await find_domain(db, domain_id)
    if domain is None:
        logger.info(f"Domain {domain_id} not found")
        raise DomainNotFoundError()
    return domain


async def find_by_hostname(db: AsyncSession, hostname: str) -> CustomDomain | None:
    result = await db.execute(
        select(CustomDomain).where(CustomDomain.domain == hostname.strip().lower().rstrip("."))
    )
    return result.scalar_one_or_none()


async def list_for_business(
    db: AsyncSession, business_id: UUID
) -> tuple[list[CustomDomain], int]:
    """
    List a tenant's domains, newest first.

    Returns:
        Tuple of (domain list, total count)
    """
    count_result = await db.execute(
        select(func.count())
        .select_from(CustomDomain)
        .where(CustomDomain.business_id == business_id)
    )
    total = count_result.scalar() or 0

    result = await db.execute(
        select(CustomDomain)
        .where(CustomDomain.business_id == business_id)
        .order_by(CustomDomain.created_at.desc())
    )
    return list(result.scalars().all()), total


async def list_awaiting_ssl(db: AsyncSession) -> list[CustomDomain]:
    """Registered domains whose certificate is not yet issued."""
    result = await db.execute(
        select(CustomDomain)
        .where(
            CustomDomain.registrar_domain_id.is_not(None),
            CustomDomain.ssl_certificate_status.in_(
                [SslStatus.PENDING, SslStatus.PROVISIONING]
            ),
            CustomDomain.status != DomainStatus.FAILED,
        )
        .order_by(CustomDomain.created_at)
    )
    return list(result.scalars().all())


async def save(db: AsyncSession, domain: CustomDomain) -> CustomDomain:
    """Write pending changes immediately; each status change is its own unit."""
    db.add(domain)
    await db.flush()
    await db.commit()
    return domain


async def delete(db: AsyncSession, domain: CustomDomain) -> None:
    await db.delete(domain)
    await db.flush()
    await db.commit()
    logger.info(f"Domain {domain.domain} deleted from database")
