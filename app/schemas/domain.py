"""Custom domain Pydantic schemas."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.models.custom_domain import DomainStatus, SslStatus


class DomainIdRequest(BaseModel):
    """Body shared by the verify, add and remove workflow endpoints."""

    domain_id: UUID = Field(..., description="Custom domain identifier")


class CheckSslRequest(BaseModel):
    """Omit ``domain_id`` to sweep every domain awaiting a certificate."""

    domain_id: UUID | None = Field(default=None, description="Custom domain identifier")


class CreateDomainRequest(BaseModel):
    """Request schema for connecting a new custom domain."""

    business_id: UUID = Field(..., description="Owning business")
    domain: str = Field(..., description="Hostname to connect (e.g., book.example.com)")

    @field_validator("domain")
    @classmethod
    def strip_domain(cls, v: str) -> str:
        return v.strip()


class DnsRecord(BaseModel):
    """A single DNS record the owner must configure."""

    type: str = Field(..., description="DNS record type")
    name: str = Field(..., description="DNS record name/host")
    value: str = Field(..., description="DNS record value")


class DomainItem(BaseModel):
    """Custom domain as returned by the catalog endpoints."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    business_id: UUID
    domain: str
    status: DomainStatus
    dns_configured: bool
    ssl_certificate_status: SslStatus
    registrar_domain_id: str | None
    is_primary: bool
    error_message: str | None
    registrar_api_error: str | None
    verified_at: datetime | None
    provisioned_at: datetime | None
    last_checked_at: datetime | None
    created_at: datetime


class CreateDomainResponse(DomainItem):
    dns_records: list[DnsRecord]


class DomainListResponse(BaseModel):
    items: list[DomainItem]
    total: int


class DomainRecordsResponse(BaseModel):
    domain: str
    dns_records: list[DnsRecord]


class ResolveDomainResponse(BaseModel):
    domain: str
    business_id: UUID
    is_primary: bool


class VerifyDomainResponse(BaseModel):
    success: bool = True
    configured: bool
    error: str | None = None
    domain: str
    netlify_status: dict[str, Any] | None = None


class AddDomainResponse(BaseModel):
    success: bool = True
    domain: str
    netlify_domain_id: str
    ssl_status: str


class SslStatusResponse(BaseModel):
    success: bool = True
    domain: str
    ssl_status: str
    ssl_certificate_status: SslStatus


class SslSweepResponse(BaseModel):
    success: bool = True
    checked: int
    results: list[dict[str, Any]]


class RemoveDomainResponse(BaseModel):
    success: bool = True
    domain: str | None = None
    message: str
