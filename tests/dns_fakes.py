"""Canned resolver answers for tests that mock ``DnsResolverClient.lookup``."""

from app.services.dns_resolver import RECORD_TYPES, DnsLookup

EXPECTED_TARGET = "tenant123.bookinghost.app"


def dns_lookup(hostname: str, record_type: str, values: list[str] | None, status: int = 0) -> DnsLookup:
    """Build a resolver result holding ``values`` as answers of ``record_type``."""
    answers = [
        {"name": hostname, "type": RECORD_TYPES[record_type], "TTL": 300, "data": value}
        for value in values or []
    ]
    return DnsLookup(
        hostname=hostname,
        record_type=record_type,
        status=status,
        answers=answers,
        records=[v.lower().rstrip(".") for v in values or []],
    )


def fake_dns(cname: list[str] | None = None, a: list[str] | None = None, status: int = 0):
    """Side effect for a mocked ``DnsResolverClient.lookup``; no values means NXDOMAIN."""

    async def _lookup(hostname: str, record_type: str) -> DnsLookup:
        values = cname if record_type == "CNAME" else a
        return dns_lookup(hostname, record_type, values, status=status if values else 3)

    return _lookup
