"""Lightweight HTTP client for the Papertrail REST API.

This module provides:
- `PapertrailClient`: a blocking client with sane timeouts that injects the
  API token header and returns `ApiResponse` records.

It does no interpretation of status codes; the reconcilers do that.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from trailctl.constants import TOKEN_HEADER
from trailctl.core.config import ClientConfig
from trailctl.core.errors import TransportError
from trailctl.core.interfaces import ApiResponse

logger = logging.getLogger(__name__)


class PapertrailClient:
    """Minimal Papertrail API client.

    Parameters
    ----------
    config : ClientConfig
        Token, base URL and timeout. The token is required; `ClientConfig`
        refuses an empty one.
    transport : httpx.BaseTransport | None
        Optional transport override (used by tests with `httpx.MockTransport`).
    """

    def __init__(self, config: ClientConfig, *, transport: httpx.BaseTransport | None = None) -> None:
        self.config = config
        base_url = config.base_url if config.base_url.endswith("/") else config.base_url + "/"
        self.client = httpx.Client(
            base_url=base_url,
            headers={TOKEN_HEADER: config.token, "Accept": "application/json"},
            timeout=httpx.Timeout(config.timeout_s),
            transport=transport,
        )

    def request(self, method: str, path: str, body: Any = None) -> ApiResponse:
        """Issue one call; GET bodies are sent as query parameters."""
        kwargs: dict[str, Any] = {}
        if body is not None:
            if method.upper() == "GET":
                kwargs["params"] = body
            else:
                kwargs["content"] = json.dumps(body)
                kwargs["headers"] = {"Content-Type": "application/json"}
        logger.debug("%s %s %s", method, path, body if body is not None else "")
        try:
            r = self.client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            raise TransportError(f"{method} {path}: {e}") from e

        if not r.content:
            return ApiResponse(status_code=r.status_code, body=None)
        try:
            data = r.json()
        except ValueError as e:
            if r.status_code != 200:
                # error pages are not always JSON; the status code is what matters
                return ApiResponse(status_code=r.status_code, body=r.text)
            raise TransportError(f"{method} {path}: invalid JSON in response: {e}") from e
        return ApiResponse(status_code=r.status_code, body=data)

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self.client.close()

    def __enter__(self) -> PapertrailClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
