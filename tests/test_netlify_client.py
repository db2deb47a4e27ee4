"""Tests for the Netlify site-domain API client."""

from unittest.mock import AsyncMock, patch

import httpx
import pytest

from app.services.netlify_client import NetlifyClient, NetlifyError


def _mock_http(mock_client_cls, *, response=None, side_effect=None) -> AsyncMock:
    mock_client = AsyncMock()
    if side_effect is not None:
        mock_client.request.side_effect = side_effect
    else:
        mock_client.request.return_value = response
    mock_client.__aenter__ = AsyncMock(return_value=mock_client)
    mock_client.__aexit__ = AsyncMock(return_value=False)
    mock_client_cls.return_value = mock_client
    return mock_client


@pytest.fixture
def netlify() -> NetlifyClient:
    return NetlifyClient(
        access_token="token-abc",
        site_id="site-1",
        api_url="https://netlify.test/api/v1/",
        max_attempts=1,
        max_wait=0,
    )


class TestConfigured:
    def test_requires_token_and_site(self):
        assert NetlifyClient(access_token="t", site_id="s").configured is True
        assert NetlifyClient(access_token="", site_id="s").configured is False
        assert NetlifyClient(access_token="t", site_id="").configured is False


class TestAddDomain:
    @patch("app.services.netlify_client.httpx.AsyncClient")
    async def test_success(self, mock_client_cls, netlify):
        mock_client = _mock_http(mock_client_cls, response=httpx.Response(201, json={
            "id": "nf-1",
            "domain": "book.example.com",
            "ssl": {"state": "pending"},
        }))

        created = await netlify.add_domain("book.example.com")

        assert created.id == "nf-1"
        assert created.ssl_state == "pending"
        args, kwargs = mock_client.request.call_args
        assert args == ("POST", "https://netlify.test/api/v1/sites/site-1/domains")
        assert kwargs["json"] == {"domain": "book.example.com"}
        assert kwargs["headers"]["Authorization"] == "Bearer token-abc"

    @patch("app.services.netlify_client.httpx.AsyncClient")
    async def test_missing_ssl_defaults_to_pending(self, mock_client_cls, netlify):
        _mock_http(mock_client_cls, response=httpx.Response(200, json={"id": "nf-2"}))

        created = await netlify.add_domain("book.example.com")

        assert created.ssl_state == "pending"

    @patch("app.services.netlify_client.httpx.AsyncClient")
    async def test_error_uses_json_message(self, mock_client_cls, netlify):
        _mock_http(
            mock_client_cls,
            response=httpx.Response(422, json={"message": "Domain already in use"}),
        )

        with pytest.raises(NetlifyError, match="Domain already in use") as exc_info:
            await netlify.add_domain("book.example.com")
        assert exc_info.value.status_code == 422

    @patch("app.services.netlify_client.httpx.AsyncClient")
    async def test_error_falls_back_to_raw_text(self, mock_client_cls, netlify):
        _mock_http(mock_client_cls, response=httpx.Response(500, text="upstream exploded"))

        with pytest.raises(NetlifyError, match="upstream exploded"):
            await netlify.add_domain("book.example.com")

    @patch("app.services.netlify_client.httpx.AsyncClient")
    async def test_error_falls_back_to_status(self, mock_client_cls, netlify):
        _mock_http(mock_client_cls, response=httpx.Response(503))

        with pytest.raises(NetlifyError, match="Netlify API error: 503"):
            await netlify.add_domain("book.example.com")

    @patch("app.services.netlify_client.httpx.AsyncClient")
    async def test_transport_error(self, mock_client_cls, netlify):
        _mock_http(mock_client_cls, side_effect=httpx.ConnectError("no route"))

        with pytest.raises(NetlifyError, match="Failed to reach Netlify"):
            await netlify.add_domain("book.example.com")

    @patch("app.services.netlify_client.httpx.AsyncClient")
    async def test_non_json_success_body(self, mock_client_cls, netlify):
        _mock_http(mock_client_cls, response=httpx.Response(201, text="<html>ok</html>"))

        with pytest.raises(NetlifyError, match="invalid response") as exc_info:
            await netlify.add_domain("book.example.com")
        assert exc_info.value.status_code == 201

    @patch("app.services.netlify_client.httpx.AsyncClient")
    async def test_non_object_success_body(self, mock_client_cls, netlify):
        _mock_http(mock_client_cls, response=httpx.Response(200, json=["nf-1"]))

        with pytest.raises(NetlifyError, match="invalid response"):
            await netlify.add_domain("book.example.com")

    @patch("app.services.netlify_client.httpx.AsyncClient")
    async def test_success_without_id(self, mock_client_cls, netlify):
        _mock_http(mock_client_cls, response=httpx.Response(201, json={"id": None}))

        with pytest.raises(NetlifyError, match="domain id"):
            await netlify.add_domain("book.example.com")


class TestGetDomain:
    @patch("app.services.netlify_client.httpx.AsyncClient")
    async def test_reads_ssl_state(self, mock_client_cls, netlify):
        mock_client = _mock_http(mock_client_cls, response=httpx.Response(200, json={
            "id": "nf-1",
            "domain": "book.example.com",
            "ssl": {"state": "issued"},
        }))

        remote = await netlify.get_domain("nf-1")

        assert remote.ssl_state == "issued"
        args, _ = mock_client.request.call_args
        assert args == ("GET", "https://netlify.test/api/v1/sites/site-1/domains/nf-1")

    @patch("app.services.netlify_client.httpx.AsyncClient")
    async def test_unknown_ssl_state(self, mock_client_cls, netlify):
        _mock_http(mock_client_cls, response=httpx.Response(200, json={"id": "nf-1"}))

        remote = await netlify.get_domain("nf-1")

        assert remote.ssl_state == "unknown"


class TestDeleteDomain:
    @patch("app.services.netlify_client.httpx.AsyncClient")
    async def test_deleted(self, mock_client_cls, netlify):
        _mock_http(mock_client_cls, response=httpx.Response(204))

        assert await netlify.delete_domain("nf-1") is True

    @patch("app.services.netlify_client.httpx.AsyncClient")
    async def test_already_gone(self, mock_client_cls, netlify):
        _mock_http(mock_client_cls, response=httpx.Response(404, json={"message": "Not Found"}))

        assert await netlify.delete_domain("nf-1") is False

    @patch("app.services.netlify_client.httpx.AsyncClient")
    async def test_other_error_raises(self, mock_client_cls, netlify):
        _mock_http(mock_client_cls, response=httpx.Response(500, json={"message": "Internal"}))

        with pytest.raises(NetlifyError, match="Internal"):
            await netlify.delete_domain("nf-1")


class TestGetDomainBody:
    @patch("app.services.netlify_client.httpx.AsyncClient")
    async def test_non_json_body(self, mock_client_cls, netlify):
        _mock_http(mock_client_cls, response=httpx.Response(200, text="maintenance"))

        with pytest.raises(NetlifyError, match="invalid response"):
            await netlify.get_domain("nf-1")

    @patch("app.services.netlify_client.httpx.AsyncClient")
    async def test_non_object_ssl_is_unknown(self, mock_client_cls, netlify):
        _mock_http(mock_client_cls, response=httpx.Response(200, json={"id": "nf-1", "ssl": "issued"}))

        remote = await netlify.get_domain("nf-1")

        assert remote.ssl_state == "unknown"
