"""Unit tests for app.services.peer_deletion with mocked httpx (no network)."""

import asyncio
import unittest
from unittest.mock import AsyncMock, MagicMock, patch

import httpx

from app.core.errors import PeerFailureError
from app.services.peer_deletion import PeerDeletionClient, build_peer_client


def _response(status_code: int, json_body: object = None, text: str = "") -> MagicMock:
    resp = MagicMock()
    resp.status_code = status_code
    if json_body is None:
        resp.json.side_effect = ValueError("No JSON body")
    else:
        resp.json.return_value = json_body
    resp.text = text
    return resp


def _mock_client(mock_client_class: MagicMock, delete: AsyncMock) -> None:
    instance = MagicMock()
    instance.delete = delete
    mock_client_class.return_value.__aenter__ = AsyncMock(return_value=instance)
    mock_client_class.return_value.__aexit__ = AsyncMock(return_value=None)


class TestUserDataUrl(unittest.TestCase):
    def test_url_pattern(self) -> None:
        client = PeerDeletionClient("http://peer:3002/", resource="properties")
        self.assertEqual(
            client.user_data_url("abc-123"),
            "http://peer:3002/properties/user/abc-123",
        )

    def test_user_id_is_escaped(self) -> None:
        client = PeerDeletionClient("http://peer:3002")
        self.assertEqual(
            client.user_data_url("a/b"),
            "http://peer:3002/properties/user/a%2Fb",
        )


class TestDeleteUserData(unittest.TestCase):
    def setUp(self) -> None:
        self.client = PeerDeletionClient("http://peer:3002", resource="properties", timeout=5.0)

    @patch("app.services.peer_deletion.httpx.AsyncClient")
    def test_success_on_2xx(self, mock_client_class: MagicMock) -> None:
        for status_code in (200, 204):
            delete = AsyncMock(return_value=_response(status_code))
            _mock_client(mock_client_class, delete)
            self.assertIsNone(asyncio.run(self.client.delete_user_data("u1")))
            delete.assert_awaited_once_with("http://peer:3002/properties/user/u1")

    @patch("app.services.peer_deletion.httpx.AsyncClient")
    def test_error_status_carries_peer_detail(self, mock_client_class: MagicMock) -> None:
        delete = AsyncMock(return_value=_response(500, {"error": "db down"}))
        _mock_client(mock_client_class, delete)
        with self.assertRaises(PeerFailureError) as ctx:
            asyncio.run(self.client.delete_user_data("u1"))
        self.assertEqual(ctx.exception.message, "db down")
        self.assertEqual(ctx.exception.peer_status, 500)

    @patch("app.services.peer_deletion.httpx.AsyncClient")
    def test_error_status_with_text_body(self, mock_client_class: MagicMock) -> None:
        delete = AsyncMock(return_value=_response(404, text="Not Found"))
        _mock_client(mock_client_class, delete)
        with self.assertRaises(PeerFailureError) as ctx:
            asyncio.run(self.client.delete_user_data("u1"))
        self.assertEqual(ctx.exception.message, "Not Found")
        self.assertEqual(ctx.exception.peer_status, 404)

    @patch("app.services.peer_deletion.httpx.AsyncClient")
    def test_error_status_without_body(self, mock_client_class: MagicMock) -> None:
        delete = AsyncMock(return_value=_response(502))
        _mock_client(mock_client_class, delete)
        with self.assertRaises(PeerFailureError) as ctx:
            asyncio.run(self.client.delete_user_data("u1"))
        self.assertIn("502", ctx.exception.message)

    @patch("app.services.peer_deletion.httpx.AsyncClient")
    def test_connect_error(self, mock_client_class: MagicMock) -> None:
        delete = AsyncMock(side_effect=httpx.ConnectError("connection refused"))
        _mock_client(mock_client_class, delete)
        with self.assertRaises(PeerFailureError) as ctx:
            asyncio.run(self.client.delete_user_data("u1"))
        self.assertIn("unreachable", ctx.exception.message)
        self.assertIsNone(ctx.exception.peer_status)

    @patch("app.services.peer_deletion.httpx.AsyncClient")
    def test_timeout(self, mock_client_class: MagicMock) -> None:
        delete = AsyncMock(side_effect=httpx.ReadTimeout("too slow"))
        _mock_client(mock_client_class, delete)
        with self.assertRaises(PeerFailureError) as ctx:
            asyncio.run(self.client.delete_user_data("u1"))
        self.assertIn("timed out", ctx.exception.message)

    @patch("app.services.peer_deletion.httpx.AsyncClient")
    def test_invalid_url(self, mock_client_class: MagicMock) -> None:
        delete = AsyncMock(side_effect=httpx.InvalidURL("Invalid port: 'abc'"))
        _mock_client(mock_client_class, delete)
        with self.assertRaises(PeerFailureError) as ctx:
            asyncio.run(self.client.delete_user_data("u1"))
        self.assertIn("invalid", ctx.exception.message)
        self.assertIsNone(ctx.exception.peer_status)

    @patch("app.services.peer_deletion.httpx.AsyncClient")
    def test_single_attempt(self, mock_client_class: MagicMock) -> None:
        delete = AsyncMock(return_value=_response(503, {"message": "busy"}))
        _mock_client(mock_client_class, delete)
        with self.assertRaises(PeerFailureError):
            asyncio.run(self.client.delete_user_data("u1"))
        self.assertEqual(delete.await_count, 1)


class TestBuildPeerClient(unittest.TestCase):
    def test_none_when_not_configured(self) -> None:
        settings = MagicMock()
        settings.PEER_SERVICE_URL = None
        self.assertIsNone(build_peer_client(settings))

    def test_built_from_settings(self) -> None:
        settings = MagicMock()
        settings.PEER_SERVICE_URL = "http://peer:3002"
        settings.PEER_RESOURCE = "properties"
        settings.PEER_REQUEST_TIMEOUT_SEC = 7.5
        client = build_peer_client(settings)
        self.assertIsNotNone(client)
        self.assertEqual(client.base_url, "http://peer:3002")
        self.assertEqual(client.resource, "properties")
        self.assertEqual(client.timeout, 7.5)


if __name__ == "__main__":
    unittest.main()
