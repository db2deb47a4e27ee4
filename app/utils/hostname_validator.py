"""Hostname validation utilities for custom domains."""

import re
from typing import Tuple

# One or more DNS labels followed by an alphabetic TLD
HOSTNAME_REGEX = re.compile(
    r"^(?:[a-z0-9](?:[a-z0-9-]{0,61}[a-z0-9])?\.)+[a-z]{2,}$"
)


def normalize_domain(domain: str) -> str:
    """Trim, lower-case and drop a trailing root dot."""
    return domain.strip().lower().rstrip(".")


def validate_hostname(domain: str) -> Tuple[bool, str | None]:
    """
    Validate a custom domain hostname.

    Args:
        domain: Hostname to validate (normalized first)

    Returns:
        Tuple of (is_valid, error_message)
        If valid, error_message is None
    """
    if not domain or not domain.strip():
        return False, "Please enter a domain"

    domain = normalize_domain(domain)

    if len(domain) > 253:
        return False, "Domain is too long (max 253 characters)"

    if "@" in domain:
        return False, "Provide a domain, not an email address"

    if "://" in domain or "/" in domain:
        return False, "Provide a hostname without scheme or path"

    if not HOSTNAME_REGEX.match(domain):
        return False, "Please enter a valid domain (e.g., bookings.example.com)"

    return True, None
