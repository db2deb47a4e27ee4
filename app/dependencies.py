"""Shared FastAPI dependencies."""

import secrets

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.database import get_session
from app.services.deregistration_service import DomainDeregistrar
from app.services.dns_resolver import DnsResolverClient
from app.services.netlify_client import NetlifyClient
from app.services.registrar_service import DomainRegistrar
from app.services.ssl_service import SslStatusPoller
from app.services.verification_service import DomainVerificationService

bearer = HTTPBearer(auto_error=False)


def require_service_key(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer),
) -> None:
    """Check the bearer token against SERVICE_API_KEY when one is configured."""
    expected = settings.SERVICE_API_KEY
    if not expected:
        return
    token = credentials.credentials if credentials else ""
    if not secrets.compare_digest(token, expected):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"success": False, "error": "Invalid credentials", "code": "UNAUTHORIZED"},
            headers={"WWW-Authenticate": "Bearer"},
        )


def get_netlify_client() -> NetlifyClient:
    return NetlifyClient()


def get_dns_resolver() -> DnsResolverClient:
    return DnsResolverClient()


def get_registrar(
    db: AsyncSession = Depends(get_session),
    netlify: NetlifyClient = Depends(get_netlify_client),
) -> DomainRegistrar:
    return DomainRegistrar(db, netlify)


def get_verification_service(
    db: AsyncSession = Depends(get_session),
    resolver: DnsResolverClient = Depends(get_dns_resolver),
    registrar: DomainRegistrar = Depends(get_registrar),
) -> DomainVerificationService:
    return DomainVerificationService(
        db,
        resolver,
        registrar,
        expected_target=settings.CUSTOM_DOMAIN_CNAME_TARGET,
    )


def get_ssl_poller(
    db: AsyncSession = Depends(get_session),
    netlify: NetlifyClient = Depends(get_netlify_client),
) -> SslStatusPoller:
    return SslStatusPoller(db, netlify)


def get_deregistrar(
    db: AsyncSession = Depends(get_session),
    netlify: NetlifyClient = Depends(get_netlify_client),
) -> DomainDeregistrar:
    return DomainDeregistrar(db, netlify)
