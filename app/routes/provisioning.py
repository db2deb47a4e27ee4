"""Custom domain provisioning workflow routes."""

import logging

from fastapi import APIRouter, Body, Depends, status

from app.dependencies import (
    get_deregistrar,
    get_registrar,
    get_ssl_poller,
    get_verification_service,
)
from app.schemas.common import ERROR_RESPONSES, raise_api_error
from app.schemas.domain import (
    AddDomainResponse,
    CheckSslRequest,
    DomainIdRequest,
    RemoveDomainResponse,
    SslStatusResponse,
    SslSweepResponse,
    VerifyDomainResponse,
)
from app.services.deregistration_service import DomainDeregistrar
from app.services.errors import DomainServiceError
from app.services.netlify_client import NetlifyError
from app.services.registrar_service import DomainRegistrar
from app.services.ssl_service import SslStatusPoller
from app.services.verification_service import DomainVerificationService

logger = logging.getLogger(__name__)

router = APIRouter(responses=ERROR_RESPONSES)


def _raise_service_error(e: DomainServiceError) -> None:
    raise_api_error(code=e.code, message=str(e), status_code=e.status_code)


@router.post("/verify-domain", response_model=VerifyDomainResponse)
async def verify_domain(
    request: DomainIdRequest,
    service: DomainVerificationService = Depends(get_verification_service),
) -> VerifyDomainResponse:
    """
    Check a domain's DNS and, once it CNAMEs to the storefront, register it.

    **Request Body:**
    ```json
    { "domain_id": "7d0c..." }
    ```

    **Response:**
    - `configured`: whether the CNAME points at the expected target
    - `error`: why DNS is not configured yet
    - `netlify_status`: registration outcome, when registration was attempted

    DNS problems are reported with HTTP 200 and `configured=false`; the
    domain is marked `failed` until the next verification.
    """
    try:
        result = await service.verify(request.domain_id)
    except DomainServiceError as e:
        _raise_service_error(e)

    return VerifyDomainResponse(**result.to_payload())


@router.post("/add-domain", response_model=AddDomainResponse)
async def add_domain(
    request: DomainIdRequest,
    registrar: DomainRegistrar = Depends(get_registrar),
) -> AddDomainResponse:
    """
    Register a DNS-verified domain with Netlify.

    **Error Codes:**
    - `REGISTRAR_NOT_CONFIGURED` (500): Netlify credentials missing
    - `DOMAIN_NOT_FOUND` (404)
    - `PRECONDITION_FAILED` (400): DNS not verified, or already registered
    - `REGISTRATION_FAILED` (400): Netlify rejected the domain
    """
    try:
        result = await registrar.register(request.domain_id)
    except DomainServiceError as e:
        _raise_service_error(e)

    if not result.success:
        raise_api_error(
            code="REGISTRATION_FAILED",
            message=result.error or "Failed to add domain to Netlify",
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    return AddDomainResponse(
        domain=result.domain,
        netlify_domain_id=result.registrar_domain_id,
        ssl_status=result.ssl_status,
    )


@router.post(
    "/check-ssl-status",
    response_model=SslStatusResponse | SslSweepResponse,
)
async def check_ssl_status(
    request: CheckSslRequest | None = Body(default=None),
    poller: SslStatusPoller = Depends(get_ssl_poller),
) -> SslStatusResponse | SslSweepResponse:
    """
    Poll certificate issuance.

    With a `domain_id`, checks that domain. Without one, sweeps every
    registered domain still waiting for its certificate; per-domain
    failures are reported in `results` with `updated: false`.
    Intended to be called on a schedule.
    """
    domain_id = request.domain_id if request else None

    try:
        if domain_id is None:
            sweep = await poller.sweep()
            return SslSweepResponse(checked=sweep.checked, results=sweep.results)

        result = await poller.check(domain_id)
    except DomainServiceError as e:
        _raise_service_error(e)
    except NetlifyError as e:
        logger.error(f"SSL status check for {domain_id} failed: {e}")
        raise_api_error(
            code="SSL_CHECK_FAILED",
            message=str(e),
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return SslStatusResponse(
        domain=result.domain,
        ssl_status=result.ssl_status,
        ssl_certificate_status=result.ssl_certificate_status,
    )


@router.post("/remove-domain", response_model=RemoveDomainResponse)
async def remove_domain(
    request: DomainIdRequest,
    deregistrar: DomainDeregistrar = Depends(get_deregistrar),
) -> RemoveDomainResponse:
    """
    Remove a domain from Netlify and delete it.

    If Netlify cannot release the domain the row is kept and a 500 is
    returned so the removal can be retried.
    """
    try:
        result = await deregistrar.deregister(request.domain_id)
    except DomainServiceError as e:
        _raise_service_error(e)

    if not result.success:
        raise_api_error(
            code="DEREGISTRATION_FAILED",
            message=result.error or "Failed to remove domain from Netlify",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            extra={"message": result.message},
        )

    return RemoveDomainResponse(domain=result.domain, message=result.message)
