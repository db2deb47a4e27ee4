"""Custom domain model and its status enums."""

import enum
import uuid
from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import Boolean, DateTime, Enum, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DomainStatus(str, enum.Enum):
    """Lifecycle status of a custom domain."""

    PENDING = "pending"
    VERIFIED = "verified"
    PROVISIONING = "provisioning"
    ACTIVE = "active"
    FAILED = "failed"


class SslStatus(str, enum.Enum):
    """Certificate issuance status on the hosting platform."""

    PENDING = "pending"
    PROVISIONING = "provisioning"
    ACTIVE = "active"

    @classmethod
    def from_platform_state(cls, state: str | None) -> "SslStatus":
        """Netlify reports ``issued`` once the certificate is live."""
        return cls.ACTIVE if state == "issued" else cls.PROVISIONING


def _enum_column(enum_cls: type[enum.Enum]) -> Enum:
    # Stored as plain strings so the column stays portable
    return Enum(
        enum_cls,
        native_enum=False,
        length=20,
        values_callable=lambda members: [m.value for m in members],
        validate_strings=True,
    )


class CustomDomain(Base):
    """A tenant-owned hostname pointed at the booking storefront."""

    __tablename__ = "custom_domains"

    # Primary key
    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid4,
    )

    # Owning tenant
    business_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        nullable=False,
        index=True,
    )

    # Hostname (unique)
    domain: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
    )

    status: Mapped[DomainStatus] = mapped_column(
        _enum_column(DomainStatus),
        nullable=False,
        default=DomainStatus.PENDING,
    )

    dns_configured: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
    )

    # Identifier assigned by the hosting platform
    registrar_domain_id: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
    )

    ssl_certificate_status: Mapped[SslStatus] = mapped_column(
        _enum_column(SslStatus),
        nullable=False,
        default=SslStatus.PENDING,
    )

    is_primary: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
    )

    # Diagnostics
    error_message: Mapped[str | None] = mapped_column(Text, nullable=True)
    registrar_api_error: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Timestamps
    verified_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    provisioned_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    last_checked_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<CustomDomain(domain={self.domain}, status={self.status.value})>"
