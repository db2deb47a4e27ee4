"""Exceptions raised by the custom domain services."""


class DomainServiceError(Exception):
    """Base exception for custom domain operations."""

    code = "DOMAIN_ERROR"
    status_code = 500


class DomainNotFoundError(DomainServiceError):
    code = "DOMAIN_NOT_FOUND"
    status_code = 404

    def __init__(self, message: str = "Domain not found"):
        super().__init__(message)


class DomainAlreadyExistsError(DomainServiceError):
    code = "DOMAIN_ALREADY_EXISTS"
    status_code = 409


class PreconditionError(DomainServiceError):
    """An operation was attempted before the domain was ready for it."""

    code = "PRECONDITION_FAILED"
    status_code = 400


class InvalidTransitionError(PreconditionError):
    code = "INVALID_STATUS_TRANSITION"


class RegistrarNotConfiguredError(DomainServiceError):
    code = "REGISTRAR_NOT_CONFIGURED"
    status_code = 500

    def __init__(self) -> None:
        super().__init__(
            "Netlify credentials not configured. Please set NETLIFY_ACCESS_TOKEN "
            "and NETLIFY_SITE_ID environment variables."
        )
