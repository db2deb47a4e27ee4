"""DNS-over-HTTPS resolver client."""

import logging
from dataclasses import dataclass, field

import httpx

from app.config import settings
from app.utils.http_retry import transport_retrying

logger = logging.getLogger(__name__)

# DNS RR type codes as reported in the JSON API "type" field
RECORD_TYPES = {"A": 1, "CNAME": 5}


class DnsLookupError(Exception):
    """The resolver could not be queried or returned an unusable response."""

    pass


@dataclass
class DnsLookup:
    """Outcome of one resolver query."""

    hostname: str
    record_type: str
    status: int
    answers: list[dict] = field(default_factory=list)
    records: list[str] = field(default_factory=list)

    @property
    def configured(self) -> bool:
        """A non-zero status or an empty answer set means nothing is configured."""
        return self.status == 0 and bool(self.answers)


def normalize_hostname(value: str) -> str:
    return value.strip().lower().rstrip(".")


class DnsResolverClient:
    """Queries a public DNS-over-HTTPS JSON endpoint (Google / Cloudflare style)."""

    def __init__(
        self,
        resolver_url: str | None = None,
        timeout: float | None = None,
        max_attempts: int | None = None,
        max_wait: float | None = None,
    ):
        self.resolver_url = resolver_url or settings.DNS_RESOLVER_URL
        self.timeout = timeout if timeout is not None else settings.HTTP_TIMEOUT_SECONDS
        self.max_attempts = max_attempts or settings.DNS_MAX_ATTEMPTS
        self.max_wait = max_wait if max_wait is not None else settings.RETRY_MAX_WAIT_SECONDS

    async def lookup(self, hostname: str, record_type: str) -> DnsLookup:
        """
        Resolve ``record_type`` records for ``hostname``.

        Args:
            hostname: Name to query
            record_type: "CNAME" or "A"

        Returns:
            DnsLookup with the resolver status, every answer, and the
            normalized values of answers matching the requested type

        Raises:
            DnsLookupError: On transport failure, non-200 response or bad JSON
        """
        record_type = record_type.upper()
        if record_type not in RECORD_TYPES:
            raise ValueError(f"Unsupported record type: {record_type}")

        hostname = normalize_hostname(hostname)
        params = {"name": hostname, "type": record_type}

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                async for attempt in transport_retrying(self.max_attempts, self.max_wait):
                    with attempt:
                        response = await client.get(
                            self.resolver_url,
                            params=params,
                            headers={"Accept": "application/dns-json"},
                        )
        except httpx.HTTPError as e:
            logger.warning(f"DNS {record_type} lookup for {hostname} failed: {e}")
            raise DnsLookupError(f"Resolver request failed: {e}") from e

        if response.status_code != 200:
            raise DnsLookupError(f"Resolver returned HTTP {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            raise DnsLookupError("Resolver returned an invalid response") from e

        if not isinstance(data, dict):
            raise DnsLookupError("Resolver returned an invalid response")
        answers = data.get("Answer") or []
        if not isinstance(answers, list) or not all(isinstance(a, dict) for a in answers):
            raise DnsLookupError("Resolver returned an invalid response")
        try:
            status = int(data.get("Status", -1))
        except (TypeError, ValueError) as e:
            raise DnsLookupError("Resolver returned an invalid response") from e

        wanted = RECORD_TYPES[record_type]
        records = [
            normalize_hostname(answer["data"])
            for answer in answers
            if answer.get("type") == wanted and isinstance(answer.get("data"), str)
        ]

        logger.debug(
            f"DNS {record_type} {hostname}: status={status} records={records}"
        )
        return DnsLookup(
            hostname=hostname,
            record_type=record_type,
            status=status,
            answers=answers,
            records=records,
        )
