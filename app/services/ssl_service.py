"""SSL issuance polling for registered domains."""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.custom_domain import CustomDomain, SslStatus
from app.services import domain_repository
from app.services.domain_state import DomainEvent, can_transition, transition
from app.services.errors import (
    InvalidTransitionError,
    PreconditionError,
    RegistrarNotConfiguredError,
)
from app.services.netlify_client import NetlifyClient

logger = logging.getLogger(__name__)


@dataclass
class SslCheckResult:
    domain: str
    ssl_status: str
    ssl_certificate_status: SslStatus


@dataclass
class SweepResult:
    checked: int = 0
    results: list[dict[str, Any]] = field(default_factory=list)


class SslStatusPoller:
    """Advances domains whose certificates are still being issued."""

    def __init__(self, db: AsyncSession, netlify: NetlifyClient):
        self.db = db
        self.netlify = netlify

    def _ensure_configured(self) -> None:
        if not self.netlify.configured:
            raise RegistrarNotConfiguredError()

    async def _refresh(self, domain: CustomDomain) -> SslCheckResult:
        remote = await self.netlify.get_domain(domain.registrar_domain_id)
        ssl_status = SslStatus.from_platform_state(remote.ssl_state)
        event = DomainEvent.SSL_ISSUED if ssl_status == SslStatus.ACTIVE else DomainEvent.SSL_PENDING

        domain.status = transition(domain.status, event)
        domain.ssl_certificate_status = ssl_status
        domain.last_checked_at = datetime.now(timezone.utc)
        await domain_repository.save(self.db, domain)

        logger.info(f"SSL for {domain.domain}: {remote.ssl_state} -> {domain.status.value}")
        return SslCheckResult(
            domain=domain.domain,
            ssl_status=remote.ssl_state,
            ssl_certificate_status=ssl_status,
        )

    async def check(self, domain_id: UUID) -> SslCheckResult:
        """
        Check one domain's certificate.

        Raises:
            RegistrarNotConfiguredError: Netlify credentials are missing
            DomainNotFoundError: No domain with this id
            PreconditionError: The domain was never registered
            InvalidTransitionError: The domain's status takes no SSL updates
            NetlifyError: The platform could not be queried
        """
        self._ensure_configured()
        domain = await domain_repository.get_domain_or_raise(self.db, domain_id)

        if not domain.registrar_domain_id:
            raise PreconditionError("Domain has not been added to Netlify yet")
        if not (
            can_transition(domain.status, DomainEvent.SSL_PENDING)
            or can_transition(domain.status, DomainEvent.SSL_ISSUED)
        ):
            raise InvalidTransitionError(
                f"Cannot check SSL for a domain in status {domain.status.value}"
            )

        return await self._refresh(domain)

    async def sweep(self) -> SweepResult:
        """
        Check every registered domain still awaiting its certificate.

        Domains are processed one at a time; a failure is recorded against
        that domain, the session is rolled back and the sweep moves on.
        """
        self._ensure_configured()
        pending = [(d.id, d.domain) for d in await domain_repository.list_awaiting_ssl(self.db)]
        sweep = SweepResult()

        for domain_id, name in pending:
            try:
                domain = await domain_repository.get_domain_or_raise(self.db, domain_id)
                outcome = await self._refresh(domain)
            except Exception as e:
                logger.exception(f"SSL check for {name} failed")
                await self.db.rollback()
                sweep.results.append({"domain": name, "error": str(e), "updated": False})
                continue
            sweep.results.append(
                {"domain": name, "ssl_status": outcome.ssl_status, "updated": True}
            )

        sweep.checked = len(sweep.results)
        logger.info(f"SSL sweep checked {sweep.checked} domains")
        return sweep
