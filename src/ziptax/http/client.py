"""
HTTP client for the ZipTax API.

Wraps a persistent httpx AsyncClient. Every request is expressed as a
zero-argument operation that either returns the decoded payload or raises a
classified ZiptaxError, and that operation is run by the retry engine under
the client's RetryPolicy.
"""

from typing import Any, Mapping, Optional

import httpx
import structlog

from ziptax.__version__ import __version__
from ziptax.http.classifier import classify
from ziptax.retry.engine import execute_with_retry
from ziptax.retry.policy import RetryPolicy

logger = structlog.get_logger(__name__)

USER_AGENT = f"ziptax-python/{__version__}"


class HTTPClient:
    """
    Async HTTP client with error classification and retry.

    Features:
    - Connection pooling via a persistent AsyncClient (created lazily)
    - Failures mapped onto the ZipTax error taxonomy
    - Bounded exponential backoff for network and 5xx failures
    - Optional request/response logging through httpx event hooks

    Attributes:
        base_url: API root URL
        timeout: Request timeout in seconds
        retry_policy: Policy applied to every request
        enable_logging: Whether event hooks log traffic
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = 30.0,
        retry_policy: Optional[RetryPolicy] = None,
        enable_logging: bool = False,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize HTTP client.

        Args:
            base_url: API root URL
            api_key: Sent as the X-API-Key header
            timeout: Request timeout in seconds
            retry_policy: Retry policy (None uses RetryPolicy defaults)
            enable_logging: Log method/URL/params and response status
            transport: Custom httpx transport (tests, proxies)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.retry_policy = retry_policy or RetryPolicy()
        self.enable_logging = enable_logging
        self._api_key = api_key
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def headers(self) -> dict[str, str]:
        return {
            "X-API-Key": self._api_key,
            "Content-Type": "application/json",
            "User-Agent": USER_AGENT,
        }

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create the async HTTP client."""
        if self._client is None or self._client.is_closed:
            event_hooks: dict[str, list] = {"request": [], "response": []}
            if self.enable_logging:
                event_hooks["request"].append(_log_request)
                event_hooks["response"].append(_log_response)

            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(self.timeout),
                headers=self.headers,
                transport=self._transport,
                event_hooks=event_hooks,
            )
            logger.debug("Created new httpx AsyncClient", base_url=self.base_url)
        return self._client

    async def get(self, url: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        """Make a GET request."""
        return await self.request("GET", url, params=params)

    async def post(
        self,
        url: str,
        json: Any = None,
        params: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        """Make a POST request."""
        return await self.request("POST", url, params=params, json=json)

    async def request(
        self,
        method: str,
        url: str,
        params: Optional[Mapping[str, Any]] = None,
        json: Any = None,
    ) -> Any:
        """
        Make a request with retry.

        None-valued query parameters are dropped.

        Returns:
            Decoded JSON payload, or the text body for non-JSON responses

        Raises:
            ZiptaxNetworkError: No response obtained
            ZiptaxAuthenticationError: 401/403
            ZiptaxRateLimitError: 429
            ZiptaxAPIError: Any other non-2xx status
        """
        query = {k: v for k, v in params.items() if v is not None} if params else None

        async def make_request() -> Any:
            client = self._get_client()
            try:
                response = await client.request(method, url, params=query, json=json)
                response.raise_for_status()
            except httpx.HTTPError as e:
                error = classify(e)
                if self.enable_logging:
                    logger.error(
                        "Response error",
                        method=method,
                        url=url,
                        error_type=type(error).__name__,
                        status_code=getattr(error, "status_code", None),
                        message=str(error),
                    )
                raise error from e
            return _decode_payload(response)

        return await execute_with_retry(make_request, self.retry_policy)

    async def close(self) -> None:
        """Close the HTTP client connection."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            logger.debug("Closed ZipTax HTTP client connection")

    async def __aenter__(self) -> "HTTPClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(base_url={self.base_url}, timeout={self.timeout}s)"


def _decode_payload(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        # format=xml responses
        return response.text


async def _log_request(request: httpx.Request) -> None:
    logger.info(
        "Request",
        method=request.method,
        url=str(request.url.copy_with(query=None)),
        params=dict(request.url.params),
    )


async def _log_response(response: httpx.Response) -> None:
    logger.info(
        "Response",
        method=response.request.method,
        url=str(response.request.url.copy_with(query=None)),
        status_code=response.status_code,
    )
