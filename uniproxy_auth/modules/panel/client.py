"""
UniProxy panel client.

Synchronous request/response transport for the two panel endpoints:
the user list (GET) and the traffic report (POST). Every failure mode is
surfaced as FetchError or PushError so callers handle a single type.
"""

import logging
import time
from typing import List, Optional, Tuple, Type

import httpx
from pydantic import ValidationError

from ...config.provider import PanelConfig
from ...errors import FetchError, PanelError, PushError
from ...logging_config import redact_token
from .models import PanelUser, TrafficReport, UserListResponse

logger = logging.getLogger(__name__)

USER_PATH = "/api/v1/server/UniProxy/user"
PUSH_PATH = "/api/v1/server/UniProxy/push"


class PanelClient:
    """
    Client for the panel's UniProxy endpoints.

    The underlying httpx.Client is created lazily and reused across calls.
    Tests inject a ``transport`` (e.g. httpx.MockTransport).
    """

    def __init__(
        self,
        config: PanelConfig,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Initialize panel client.

        Args:
            config: Panel configuration (host, key, node id, timeouts)
            transport: Optional httpx transport override
        """
        self.config = config
        self._transport = transport
        self._client: Optional[httpx.Client] = None

    @property
    def params(self) -> dict:
        return {
            "token": self.config.api_key,
            "node_id": str(self.config.node_id),
            "node_type": self.config.node_type,
        }

    def _get_client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(
                base_url=self.config.api_host,
                timeout=httpx.Timeout(self.config.timeout, connect=self.config.connect_timeout),
                transport=self._transport,
            )
        return self._client

    def _url(self, path: str) -> str:
        return redact_token(f"{self.config.api_host}{path}?token={self.config.api_key}")

    def _request(
        self, method: str, path: str, label: str, error_cls: Type[PanelError], **kwargs
    ) -> Tuple[int, bytes]:
        """
        Send one request and read the whole body within ``config.timeout``.

        httpx timeouts bound each network wait separately, so a panel that
        trickles its body can keep a request open indefinitely. The body is
        streamed and the overall deadline checked after every chunk.

        Returns:
            Tuple of (status_code, body)

        Raises:
            error_cls: On transport error, timeout or an exceeded deadline
        """
        url = self._url(path)
        deadline = time.monotonic() + self.config.timeout
        try:
            with self._get_client().stream(method, path, params=self.params, **kwargs) as response:
                chunks = []
                for chunk in response.iter_bytes():
                    chunks.append(chunk)
                    if time.monotonic() > deadline:
                        raise error_cls(
                            f"{label} exceeded the {self.config.timeout}s total timeout",
                            url=url,
                            status_code=response.status_code,
                        )
        except httpx.HTTPError as e:
            raise error_cls(f"{label} failed: {e}", url=url) from e

        return response.status_code, b"".join(chunks)

    def fetch_users(self) -> List[PanelUser]:
        """
        Fetch the node's user list.

        Returns:
            Validated list of users

        Raises:
            FetchError: On transport error, timeout, non-2xx status,
                malformed JSON or schema mismatch
        """
        status_code, body = self._request("GET", USER_PATH, "User list request", FetchError)
        url = self._url(USER_PATH)

        if not 200 <= status_code < 300:
            raise FetchError(
                f"User list request returned HTTP {status_code}",
                url=url,
                status_code=status_code,
            )

        try:
            parsed = UserListResponse.model_validate_json(body)
        except ValidationError as e:
            raise FetchError(
                f"Invalid user list response: {e.error_count()} error(s), "
                f"first: {e.errors()[0]['msg']}",
                url=url,
                status_code=status_code,
            ) from e

        return parsed.users

    def push_traffic(self, report: TrafficReport) -> None:
        """
        Report traffic to the panel.

        Args:
            report: Per-account totals

        Raises:
            PushError: On transport error, timeout or non-2xx status
        """
        status_code, _ = self._request(
            "POST", PUSH_PATH, "Traffic push", PushError, json=report.to_payload()
        )

        if not 200 <= status_code < 300:
            raise PushError(
                f"Traffic push returned HTTP {status_code}",
                url=self._url(PUSH_PATH),
                status_code=status_code,
            )

    def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        if self._client is not None:
            self._client.close()
            self._client = None
