"""Status transitions for custom domains.

Every component changes ``CustomDomain.status`` through :func:`transition`,
so the allowed moves live in one table:

    DNS_VERIFIED           pending|failed|verified -> verified
                           provisioning -> provisioning, active -> active
    DNS_FAILED             any -> failed
    REGISTERED             verified|failed -> provisioning
    REGISTERED_SSL_ISSUED  verified|failed -> active
    REGISTRATION_FAILED    any -> failed
    SSL_PENDING            verified|provisioning -> provisioning
    SSL_ISSUED             verified|provisioning|active -> active

``failed`` is only left through verification or registration, so an
active domain can never drop back to provisioning directly.
"""

import enum

from app.models.custom_domain import DomainStatus
from app.services.errors import InvalidTransitionError


class DomainEvent(str, enum.Enum):
    DNS_VERIFIED = "dns_verified"
    DNS_FAILED = "dns_failed"
    REGISTERED = "registered"
    REGISTERED_SSL_ISSUED = "registered_ssl_issued"
    REGISTRATION_FAILED = "registration_failed"
    SSL_PENDING = "ssl_pending"
    SSL_ISSUED = "ssl_issued"


_ALL = frozenset(DomainStatus)

_TRANSITIONS: dict[DomainEvent, dict[DomainStatus, DomainStatus]] = {
    DomainEvent.DNS_VERIFIED: {
        DomainStatus.PENDING: DomainStatus.VERIFIED,
        DomainStatus.FAILED: DomainStatus.VERIFIED,
        DomainStatus.VERIFIED: DomainStatus.VERIFIED,
        DomainStatus.PROVISIONING: DomainStatus.PROVISIONING,
        DomainStatus.ACTIVE: DomainStatus.ACTIVE,
    },
    DomainEvent.DNS_FAILED: {status: DomainStatus.FAILED for status in _ALL},
    DomainEvent.REGISTERED: {
        DomainStatus.VERIFIED: DomainStatus.PROVISIONING,
        DomainStatus.FAILED: DomainStatus.PROVISIONING,
    },
    DomainEvent.REGISTERED_SSL_ISSUED: {
        DomainStatus.VERIFIED: DomainStatus.ACTIVE,
        DomainStatus.FAILED: DomainStatus.ACTIVE,
    },
    DomainEvent.REGISTRATION_FAILED: {status: DomainStatus.FAILED for status in _ALL},
    DomainEvent.SSL_PENDING: {
        DomainStatus.VERIFIED: DomainStatus.PROVISIONING,
        DomainStatus.PROVISIONING: DomainStatus.PROVISIONING,
    },
    DomainEvent.SSL_ISSUED: {
        DomainStatus.VERIFIED: DomainStatus.ACTIVE,
        DomainStatus.PROVISIONING: DomainStatus.ACTIVE,
        DomainStatus.ACTIVE: DomainStatus.ACTIVE,
    },
}


def transition(current: DomainStatus, event: DomainEvent) -> DomainStatus:
    """
    Return the status a domain moves to when ``event`` happens.

    Raises:
        InvalidTransitionError: If ``event`` is not allowed from ``current``
    """
    allowed = _TRANSITIONS[event]
    try:
        return allowed[current]
    except KeyError:
        raise InvalidTransitionError(
            f"Cannot apply {event.value} to a domain in status {current.value}"
        ) from None


def can_transition(current: DomainStatus, event: DomainEvent) -> bool:
    return current in _TRANSITIONS[event]
