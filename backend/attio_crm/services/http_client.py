"""
httpx transport for the Attio REST API.

Prefixes the base URL, injects the bearer token, decodes JSON, maps error
responses to typed exceptions and retries 429 responses until the instant the
server names in Retry-After.
"""
import logging
from typing import Any, Awaitable, Callable, Optional

import httpx

from attio_crm.core.config import DEFAULT_BASE_URL
from attio_crm.core.error_transforms import decode_error, parse_retry_after
from attio_crm.core.exceptions import (
    AttioAPIError,
    ConfigurationError,
    RateLimitError,
    UnauthorizedError,
    UnexpectedResponseError,
)
from attio_crm.services.base import JSON, AttioTransport, Params
from attio_crm.utils.rate_limiter import RateLimitRetrier

logger = logging.getLogger(__name__)


def _body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


class AttioHttpClient(AttioTransport):
    """
    Attio API client over ``httpx.AsyncClient``.

    Args:
        api_key: Attio access token
        base_url: API root, ``https://api.attio.com`` by default
        timeout: Per-request timeout in seconds
        retry_rate_limits: Retry 429 responses transparently
        max_retries: Retry budget for 429 responses
        transport: Optional httpx transport (``httpx.MockTransport`` in tests)
        sleep: Awaitable used to wait between retries
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        retry_rate_limits: bool = True,
        max_retries: int = 5,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep: Optional[Callable[[float], Awaitable[Any]]] = None,
    ):
        if not api_key:
            raise ConfigurationError("An Attio API key is required (set ATTIO_API_KEY)")
        self.base_url = base_url.rstrip("/")
        self.retry_rate_limits = retry_rate_limits
        self.retrier = RateLimitRetrier(max_retries=max_retries, **({"sleep": sleep} if sleep else {}))
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
            headers={
                "Authorization": f"Bearer {api_key}",
                "Accept": "application/json",
                "Content-Type": "application/json",
            },
        )

    async def request(self, method: str, path: str, json: JSON = None, params: Params = None) -> JSON:
        if not self.retry_rate_limits:
            return await self._send(method, path, json, params)
        return await self.retrier.execute_with_backoff(
            self._send, method, path, json, params, description=f"{method} {path}"
        )

    async def _send(self, method: str, path: str, json: JSON, params: Params) -> JSON:
        logger.debug(f"[Attio HTTP] {method} {path}", extra={"method": method, "path": path})
        response = await self.client.request(
            method,
            path,
            json=json,
            params={k: v for k, v in (params or {}).items() if v is not None} or None,
        )
        logger.debug(
            f"[Attio HTTP] {method} {path} -> {response.status_code}",
            extra={"method": method, "path": path, "status_code": response.status_code},
        )
        if response.is_success:
            return _body(response)
        raise self._error_for(response)

    @staticmethod
    def _error_for(response: httpx.Response) -> AttioAPIError:
        body = _body(response)
        error = decode_error(response.status_code, body, response.headers)
        if not isinstance(error, UnexpectedResponseError):
            return error
        # 401 and 429 are reported by the gateway and may lack Attio's error body
        if response.status_code == 429:
            return RateLimitError(
                "Rate limit exceeded",
                retry_after=parse_retry_after(response.headers.get("retry-after")),
                code="rate_limit_exceeded",
                details={"body": body},
            )
        if response.status_code == 401:
            return UnauthorizedError("Invalid or missing Attio API key", code="unauthorized", details={"body": body})
        return error

    async def aclose(self) -> None:
        await self.client.aclose()
