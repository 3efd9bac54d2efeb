"""Gemini generateContent client with model rotation.

Flash models carry small per-model daily quotas, so requests rotate through
the configured models: a quota error moves on to the next model, any other
error stops. If every model is quota-limited while search grounding was
requested, one last attempt runs on the first model without tools.
"""

import logging
import re
from typing import Any

from wealthvue.config import settings
from wealthvue.services.shared.http_client import HTTPClient, HTTPClientError

logger = logging.getLogger(__name__)

QUOTA_STATUS = "RESOURCE_EXHAUSTED"
_RETRY_DELAY_RE = re.compile(r'"retryDelay"\s*:\s*"(\d+(?:\.\d+)?)s"')


class GeminiResponseError(ValueError):
    """The model answered without any usable text."""


def is_quota_error(error: HTTPClientError) -> bool:
    return error.is_rate_limited or QUOTA_STATUS in (error.response_body or "")


def quota_retry_after(error: HTTPClientError) -> float | None:
    """Retry hint from the Retry-After header or the RetryInfo error detail."""
    if error.retry_after is not None:
        return error.retry_after
    match = _RETRY_DELAY_RE.search(error.response_body or "")
    return float(match.group(1)) if match else None


class GeminiClient(HTTPClient):
    """Client for the Gemini REST API.

    Usage:
        with GeminiClient() as client:
            text = client.generate([{"text": "1 BTC on Binance"}], system_instruction)
    """

    def __init__(
        self,
        api_key: str | None = None,
        models: list[str] | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
    ):
        self.api_key = api_key if api_key is not None else settings.gemini_api_key
        self.models = list(models if models is not None else settings.gemini_models)
        super().__init__(
            base_url=base_url or settings.gemini_api_url,
            timeout=timeout if timeout is not None else settings.gemini_timeout_seconds,
            headers={"x-goog-api-key": self.api_key},
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key) and bool(self.models)

    def _generate_with_model(
        self,
        model: str,
        parts: list[dict[str, Any]],
        system_instruction: str,
        use_search: bool,
    ) -> str:
        body: dict[str, Any] = {
            "systemInstruction": {"parts": [{"text": system_instruction}]},
            "contents": [{"role": "user", "parts": parts}],
        }
        if use_search:
            body["tools"] = [{"googleSearch": {}}]

        payload = self.post_json(f"/models/{model}:generateContent", json=body)
        return extract_text(payload)

    def generate(
        self,
        parts: list[dict[str, Any]],
        system_instruction: str,
        use_search: bool = True,
    ) -> str:
        """Generate a response, rotating models on quota errors.

        Args:
            parts: Content parts (text and/or inlineData)
            system_instruction: System prompt
            use_search: Enable Google Search grounding

        Returns:
            Concatenated response text

        Raises:
            HTTPClientError: The last quota error, or the first non-quota error
            GeminiResponseError: When a response carries no text
        """
        if not self.models:
            raise HTTPClientError("No extraction models configured")

        last_error: HTTPClientError | None = None
        for model in self.models:
            try:
                return self._generate_with_model(model, parts, system_instruction, use_search)
            except HTTPClientError as e:
                last_error = e
                if is_quota_error(e):
                    logger.warning("Model %s quota exhausted, trying next model", model)
                    continue
                raise

        if use_search:
            logger.warning("All models exhausted search quota, final attempt without live search")
            try:
                return self._generate_with_model(self.models[0], parts, system_instruction, False)
            except HTTPClientError as e:
                raise (last_error or e) from e

        raise last_error


def extract_text(payload: Any) -> str:
    """Pull the text parts out of a generateContent response."""
    try:
        parts = payload["candidates"][0]["content"]["parts"]
    except (KeyError, IndexError, TypeError) as e:
        raise GeminiResponseError("Response contained no candidates") from e

    text = "".join(part.get("text", "") for part in parts if isinstance(part, dict))
    if not text.strip():
        raise GeminiResponseError("Response contained no text")
    return text
