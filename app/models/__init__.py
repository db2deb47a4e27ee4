"""SQLAlchemy models."""

from app.models.custom_domain import CustomDomain, DomainStatus, SslStatus

__all__ = [
    "CustomDomain",
    "DomainStatus",
    "SslStatus",
]
