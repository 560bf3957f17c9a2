"""Cascade delete of a user's data held by the peer service."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING
from urllib.parse import quote

import httpx

from app.core.errors import PeerFailureError

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)

MAX_DETAIL_CHARS = 500


def _error_detail(response: httpx.Response) -> str:
    """Best-effort error text reported by the peer: JSON error/message field, else raw body."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        for key in ("error", "message", "detail"):
            value = body.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()[:MAX_DETAIL_CHARS]
    text = (response.text or "").strip()
    if text:
        return text[:MAX_DETAIL_CHARS]
    return f"peer returned status {response.status_code}"


class PeerDeletionClient:
    """Sends DELETE {base_url}/{resource}/user/{user_id}; one attempt, no retry."""

    def __init__(self, base_url: str, resource: str = "properties", timeout: float = 10.0) -> None:
        self.base_url = base_url.rstrip("/")
        self.resource = resource.strip("/")
        self.timeout = timeout

    def user_data_url(self, user_id: str) -> str:
        return f"{self.base_url}/{self.resource}/user/{quote(user_id, safe='')}"

    async def delete_user_data(self, user_id: str) -> None:
        """
        Ask the peer to delete everything it holds for user_id.

        Returns on any 2xx response. Raises PeerFailureError on a non-2xx
        response, connection failure or timeout, carrying the peer's detail
        when it reported one.
        """
        url = self.user_data_url(user_id)
        start = time.perf_counter()
        try:
            async with httpx.AsyncClient(timeout=httpx.Timeout(self.timeout)) as client:
                response = await client.delete(url)
        except httpx.ConnectError as e:
            self._log_failure(user_id, start, "unreachable")
            raise PeerFailureError(f"{self.resource} service is unreachable") from e
        except httpx.TimeoutException as e:
            self._log_failure(user_id, start, "timeout")
            raise PeerFailureError(f"{self.resource} service request timed out") from e
        except httpx.InvalidURL as e:
            self._log_failure(user_id, start, "invalid_url")
            raise PeerFailureError(f"{self.resource} service URL is invalid: {e!s}") from e
        except httpx.HTTPError as e:
            self._log_failure(user_id, start, "transport_error")
            raise PeerFailureError(f"{self.resource} service request failed: {e!s}") from e

        if not 200 <= response.status_code < 300:
            detail = _error_detail(response)
            self._log_failure(user_id, start, "error_status", response.status_code)
            raise PeerFailureError(detail, peer_status=response.status_code)

        logger.info(
            "Peer data deletion completed",
            extra={
                "user_id": user_id,
                "peer_resource": self.resource,
                "peer_status": response.status_code,
                "peer_latency_seconds": time.perf_counter() - start,
            },
        )

    def _log_failure(
        self,
        user_id: str,
        start: float,
        reason: str,
        peer_status: int | None = None,
    ) -> None:
        logger.warning(
            "Peer data deletion failed",
            extra={
                "user_id": user_id,
                "peer_resource": self.resource,
                "peer_status": peer_status,
                "reason": reason,
                "peer_latency_seconds": time.perf_counter() - start,
            },
        )


def build_peer_client(settings: Settings) -> PeerDeletionClient | None:
    """Return a client for the configured peer, or None when PEER_SERVICE_URL is unset."""
    if not settings.PEER_SERVICE_URL:
        return None
    return PeerDeletionClient(
        settings.PEER_SERVICE_URL,
        resource=settings.PEER_RESOURCE,
        timeout=settings.PEER_REQUEST_TIMEOUT_SEC,
    )
