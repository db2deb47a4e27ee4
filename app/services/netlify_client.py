"""Netlify site-domain API client."""

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from app.config import settings
from app.utils.http_retry import transport_retrying

logger = logging.getLogger(__name__)


class NetlifyError(Exception):
    """Base exception for Netlify API operations."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


@dataclass
class NetlifyDomain:
    """The fields of a Netlify domain resource this service relies on."""

    id: str
    domain: str
    ssl_state: str


def _error_message(response: httpx.Response) -> str:
    """Prefer the JSON ``message`` field, then the raw body, then the status."""
    fallback = f"Netlify API error: {response.status_code}"
    text = response.text
    try:
        data = response.json()
    except ValueError:
        return text or fallback
    if isinstance(data, dict):
        return data.get("message") or fallback
    return text or fallback


def _json_object(response: httpx.Response) -> dict[str, Any]:
    """Decode a success body, which must be a JSON object."""
    try:
        data = response.json()
    except ValueError as e:
        raise NetlifyError(
            "Netlify returned an invalid response", status_code=response.status_code
        ) from e
    if not isinstance(data, dict):
        raise NetlifyError(
            "Netlify returned an invalid response", status_code=response.status_code
        )
    return data


def _parse_domain(data: dict[str, Any], default_state: str) -> NetlifyDomain:
    ssl = data.get("ssl")
    if not isinstance(ssl, dict):
        ssl = {}
    return NetlifyDomain(
        id=str(data.get("id") or ""),
        domain=data.get("domain", ""),
        ssl_state=ssl.get("state") or default_state,
    )


class NetlifyClient:
    """Registers, inspects and removes custom domains bound to a Netlify site."""

    def __init__(
        self,
        access_token: str | None = None,
        site_id: str | None = None,
        api_url: str | None = None,
        timeout: float | None = None,
        max_attempts: int | None = None,
        max_wait: float | None = None,
    ):
        self.access_token = access_token if access_token is not None else settings.NETLIFY_ACCESS_TOKEN
        self.site_id = site_id if site_id is not None else settings.NETLIFY_SITE_ID
        self.api_url = (api_url or settings.NETLIFY_API_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.HTTP_TIMEOUT_SECONDS
        self.max_attempts = max_attempts or settings.NETLIFY_MAX_ATTEMPTS
        self.max_wait = max_wait if max_wait is not None else settings.RETRY_MAX_WAIT_SECONDS

    @property
    def configured(self) -> bool:
        return bool(self.access_token and self.site_id)

    def _domains_url(self, domain_id: str | None = None) -> str:
        url = f"{self.api_url}/sites/{self.site_id}/domains"
        if domain_id:
            url = f"{url}/{domain_id}"
        return url

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        headers = {"Authorization": f"Bearer {self.access_token}"}
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                async for attempt in transport_retrying(self.max_attempts, self.max_wait):
                    with attempt:
                        response = await client.request(method, url, headers=headers, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"Netlify {method} {url} failed: {e}")
            raise NetlifyError(f"Failed to reach Netlify: {e}") from e

        logger.info(f"Netlify {method} {url} -> {response.status_code}")
        return response

    async def add_domain(self, domain: str) -> NetlifyDomain:
        """
        Register a custom domain on the site.

        Args:
            domain: Hostname to register

        Returns:
            The created domain resource; ``ssl_state`` defaults to "pending"

        Raises:
            NetlifyError: If the API rejects the request or is unreachable
        """
        logger.info(f"Adding domain {domain} to Netlify site {self.site_id}")
        response = await self._request("POST", self._domains_url(), json={"domain": domain})

        if not response.is_success:
            message = _error_message(response)
            logger.error(f"Netlify rejected domain {domain}: {message}")
            raise NetlifyError(message, status_code=response.status_code)

        created = _parse_domain(_json_object(response), default_state="pending")
        if not created.id:
            raise NetlifyError(
                "Netlify response did not include a domain id", status_code=response.status_code
            )
        logger.info(f"Netlify registered {domain} with ID {created.id}")
        return created

    async def get_domain(self, domain_id: str) -> NetlifyDomain:
        """
        Fetch a registered domain, including its SSL state.

        Raises:
            NetlifyError: If the API returns an error or is unreachable
        """
        response = await self._request("GET", self._domains_url(domain_id))

        if not response.is_success:
            raise NetlifyError(_error_message(response), status_code=response.status_code)

        return _parse_domain(_json_object(response), default_state="unknown")

    async def delete_domain(self, domain_id: str) -> bool:
        """
        Remove a domain from the site.

        Returns:
            True if Netlify deleted it, False if it was already gone (404)

        Raises:
            NetlifyError: On any other error response or transport failure
        """
        response = await self._request("DELETE", self._domains_url(domain_id))

        if response.status_code == 404:
            logger.info(f"Netlify domain {domain_id} already removed")
            return False

        if not response.is_success:
            raise NetlifyError(_error_message(response), status_code=response.status_code)

        return True
