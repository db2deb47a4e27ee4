"""Custom domain catalog API routes."""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.database import get_session
from app.schemas.common import ERROR_RESPONSES, raise_api_error
from app.schemas.domain import (
    CreateDomainRequest,
    CreateDomainResponse,
    DomainItem,
    DomainListResponse,
    DomainRecordsResponse,
    ResolveDomainResponse,
)
from app.services import domain_service
from app.services.errors import DomainServiceError

logger = logging.getLogger(__name__)

router = APIRouter(responses=ERROR_RESPONSES)


@router.post(
    "/domains",
    response_model=CreateDomainResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_domain(
    request: CreateDomainRequest,
    db: AsyncSession = Depends(get_session),
) -> CreateDomainResponse:
    """
    Connect a new custom domain to a business.

    **Request Body:**
    ```json
    { "business_id": "1f6e...", "domain": "book.example.com" }
    ```

    The domain starts `pending`. Configure the returned CNAME record, then
    call `/api/verify-domain`.
    """
    try:
        domain = await domain_service.create_domain(db, request.business_id, request.domain)
    except DomainServiceError as e:
        raise_api_error(code=e.code, message=str(e), status_code=e.status_code)

    records = domain_service.build_dns_records(domain, settings.CUSTOM_DOMAIN_CNAME_TARGET)
    item = DomainItem.model_validate(domain)
    return CreateDomainResponse(**item.model_dump(), dns_records=records)


@router.get("/domains", response_model=DomainListResponse)
async def list_domains(
    business_id: UUID = Query(..., description="Owning business"),
    db: AsyncSession = Depends(get_session),
) -> DomainListResponse:
    """List a business's custom domains, newest first."""
    domains, total = await domain_service.list_domains(db, business_id)
    return DomainListResponse(items=domains, total=total)


@router.get("/domains/resolve", response_model=ResolveDomainResponse)
async def resolve_domain(
    hostname: str = Query(..., description="Incoming storefront hostname"),
    db: AsyncSession = Depends(get_session),
) -> ResolveDomainResponse:
    """
    Map a storefront hostname to its business.

    Only domains whose DNS has been verified are routable.
    """
    try:
        domain = await domain_service.resolve_hostname(db, hostname)
    except DomainServiceError as e:
        raise_api_error(code=e.code, message=str(e), status_code=e.status_code)

    return ResolveDomainResponse(
        domain=domain.domain,
        business_id=domain.business_id,
        is_primary=domain.is_primary,
    )


@router.get("/domains/{domain_id}", response_model=DomainItem)
async def get_domain(
    domain_id: UUID,
    db: AsyncSession = Depends(get_session),
) -> DomainItem:
    try:
        domain = await domain_service.get_domain(db, domain_id)
    except DomainServiceError as e:
        raise_api_error(code=e.code, message=str(e), status_code=e.status_code)
    return DomainItem.model_validate(domain)


@router.get("/domains/{domain_id}/records", response_model=DomainRecordsResponse)
async def get_domain_records(
    domain_id: UUID,
    db: AsyncSession = Depends(get_session),
) -> DomainRecordsResponse:
    """
    Get the DNS record the owner must configure.

    **Example DNS configuration:**
    ```
    book.example.com  CNAME  your-app.netlify.app
    ```
    """
    try:
        domain = await domain_service.get_domain(db, domain_id)
    except DomainServiceError as e:
        raise_api_error(code=e.code, message=str(e), status_code=e.status_code)

    return DomainRecordsResponse(
        domain=domain.domain,
        dns_records=domain_service.build_dns_records(domain, settings.CUSTOM_DOMAIN_CNAME_TARGET),
    )


@router.post("/domains/{domain_id}/primary", response_model=DomainItem)
async def set_primary_domain(
    domain_id: UUID,
    db: AsyncSession = Depends(get_session),
) -> DomainItem:
    """Make this the business's primary hostname; others lose the flag."""
    try:
        domain = await domain_service.set_primary(db, domain_id)
    except DomainServiceError as e:
        raise_api_error(code=e.code, message=str(e), status_code=e.status_code)
    return DomainItem.model_validate(domain)
