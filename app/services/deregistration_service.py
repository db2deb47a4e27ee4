"""Removal of custom domains from the hosting platform and the database."""

import logging
from dataclasses import dataclass
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.services import domain_repository
from app.services.errors import RegistrarNotConfiguredError
from app.services.netlify_client import NetlifyClient, NetlifyError

logger = logging.getLogger(__name__)


@dataclass
class DeregistrationResult:
    success: bool
    domain: str | None = None
    message: str | None = None
    error: str | None = None

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"success": self.success, "message": self.message}
        if self.domain:
            payload["domain"] = self.domain
        if self.error:
            payload["error"] = self.error
        return payload


class DomainDeregistrar:
    """Deletes a domain, releasing it on Netlify first when it was registered."""

    def __init__(self, db: AsyncSession, netlify: NetlifyClient):
        self.db = db
        self.netlify = netlify

    async def deregister(self, domain_id: UUID) -> DeregistrationResult:
        """
        Remove a domain.

        The local row is deleted only once Netlify no longer holds the
        domain (deleted now, already gone, or never registered). Any other
        platform failure leaves the row in place so the removal can be retried.

        Raises:
            RegistrarNotConfiguredError: Netlify credentials are missing
            DomainNotFoundError: No domain with this id
        """
        if not self.netlify.configured:
            raise RegistrarNotConfiguredError()

        domain = await domain_repository.get_domain_or_raise(self.db, domain_id)
        name = domain.domain

        if not domain.registrar_domain_id:
            await domain_repository.delete(self.db, domain)
            return DeregistrationResult(
                success=True,
                message="Domain was not registered with Netlify. Removed from database.",
            )

        try:
            removed = await self.netlify.delete_domain(domain.registrar_domain_id)
        except NetlifyError as e:
            logger.error(f"Failed to remove {name} from Netlify: {e}")
            return DeregistrationResult(
                success=False,
                error=str(e),
                message="Failed to remove domain from Netlify. Please try again or contact support.",
            )

        if not removed:
            logger.info(f"{name} was already absent from Netlify")

        await domain_repository.delete(self.db, domain)
        return DeregistrationResult(
            success=True,
            domain=name,
            message="Domain successfully removed from Netlify and database.",
        )
