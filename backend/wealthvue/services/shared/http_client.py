"""Shared httpx transport for the exchange-rate source and the extraction model.

Transient failures (timeouts, refused connections) are retried with
exponential backoff through tenacity. Everything that still fails surfaces as
a single HTTPClientError carrying the status, body and any Retry-After hint,
so callers can tell quota exhaustion apart from outages.
"""

import logging
from typing import Any, Self

import httpx
from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

logger = logging.getLogger(__name__)

TRANSIENT_ERRORS = (httpx.TimeoutException, httpx.ConnectError)


class HTTPClientError(Exception):
    """Raised for HTTP errors, timeouts, connection failures and bad JSON."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_body: str | None = None,
        retry_after: float | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body
        self.retry_after = retry_after

    @property
    def is_rate_limited(self) -> bool:
        return self.status_code == 429


def parse_retry_after(value: str | None) -> float | None:
    """Seconds from a Retry-After header; HTTP-date values are ignored."""
    if not value:
        return None
    try:
        seconds = float(value)
    except ValueError:
        return None
    return seconds if seconds >= 0 else None


def _to_client_error(exc: httpx.HTTPError, method: str, url: str) -> HTTPClientError:
    if isinstance(exc, httpx.HTTPStatusError):
        response = exc.response
        logger.warning("%s %s returned %s: %s", method, url, response.status_code, response.text[:200])
        return HTTPClientError(
            f"HTTP {response.status_code}: {response.reason_phrase}",
            status_code=response.status_code,
            response_body=response.text,
            retry_after=parse_retry_after(response.headers.get("Retry-After")),
        )
    if isinstance(exc, httpx.TimeoutException):
        logger.warning("%s %s timed out", method, url)
        return HTTPClientError(f"Request timed out: {url}")

    logger.warning("%s %s failed: %s", method, url, exc)
    return HTTPClientError(f"Request failed: {url}")


class HTTPClient:
    """Lazily opened ``httpx.Client`` with retries and error translation.

    Subclasses set the base URL, timeout and auth headers and call
    ``get_json``/``post_json``.
    """

    max_attempts = 3

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float = 30.0,
        headers: dict[str, str] | None = None,
    ):
        self.base_url = base_url
        self.timeout = timeout
        self.default_headers = headers or {}
        self._client: httpx.Client | None = None

    @property
    def client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(
                base_url=self.base_url or "",
                timeout=self.timeout,
                headers=self.default_headers,
            )
        return self._client

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> Self:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def _send(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """Send one request, retrying transient transport errors."""
        retrying = Retrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(multiplier=1, min=1, max=10),
            retry=retry_if_exception_type(TRANSIENT_ERRORS),
            reraise=True,
        )
        for attempt in retrying:
            with attempt:
                return self.client.request(method, url, **kwargs)

    def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """Send a request and raise HTTPClientError for anything but a 2xx.

        Raises:
            HTTPClientError: On HTTP errors, timeouts, or connection failures
        """
        try:
            response = self._send(method, url, **kwargs)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise _to_client_error(e, method, url) from e
        return response

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise HTTPClientError(
                "Response body is not valid JSON",
                status_code=response.status_code,
                response_body=response.text[:500],
            ) from e

    def get_json(self, url: str, params: dict | None = None) -> Any:
        return self._json(self._request("GET", url, params=params))

    def post_json(
        self,
        url: str,
        json: dict | None = None,
        params: dict | None = None,
    ) -> Any:
        """POST a JSON body and return the parsed JSON response."""
        return self._json(self._request("POST", url, params=params, json=json))
