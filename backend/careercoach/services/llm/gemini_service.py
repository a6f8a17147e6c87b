"""
Gemini text-generation service for the career coach backend.

Thin async client over the Gemini REST ``generateContent`` endpoint. It only
turns a prompt into text and classifies failures; retries, cleanup and
parsing live in ``ResilientStructuredGenerator``.

Failure classes:
- HTTP 429 -> RateLimitedError (transient, retried by the caller)
- HTTP 401/403/404 or missing API key -> ModelNotAvailableError (configuration)
- anything else -> ServiceError
"""

import logging
import time
from typing import Any, Dict, Optional

import httpx

from careercoach.core.exceptions import ModelNotAvailableError, RateLimitedError, ServiceError
from careercoach.core.logging import performance_logger

logger = logging.getLogger(__name__)

JSON_RESPONSE = "application/json"
TEXT_RESPONSE = "text/plain"


class GeminiService:
    """Client for the Gemini generateContent API."""

    def __init__(
        self,
        api_key: Optional[str],
        model: str = "gemini-2.5-flash-lite",
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        timeout: float = 60.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_key = api_key
        self.model_name = model
        self.service_url = base_url.rstrip("/")
        self.timeout = timeout
        self.temperature = 0.7
        self.client = client or httpx.AsyncClient(timeout=timeout)

    async def aclose(self) -> None:
        await self.client.aclose()

    async def health_check(self) -> bool:
        """
        Check that the configured model exists and the key is accepted.

        Returns:
            True if service is healthy, False otherwise
        """
        if not self.api_key:
            return False
        try:
            response = await self.client.get(
                f"{self.service_url}/models/{self.model_name}",
                params={"key": self.api_key},
            )
            return response.status_code == 200
        except httpx.RequestError as e:
            logger.warning(f"Gemini health check failed: {str(e)}")
            return False

    async def generate_text(self, prompt: str, response_format: Optional[str] = None) -> str:
        """
        Generate text for a prompt.

        Args:
            prompt: Natural-language instruction
            response_format: Expected output MIME type hint, e.g. ``application/json``

        Returns:
            Text of the first candidate

        Raises:
            RateLimitedError: Quota exceeded (HTTP 429)
            ModelNotAvailableError: Unknown model or rejected/missing API key
            ServiceError: Any other failure
        """
        if not self.api_key:
            raise ModelNotAvailableError("GEMINI_API_KEY is not configured")

        payload: Dict[str, Any] = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {"temperature": self.temperature},
        }
        if response_format:
            payload["generationConfig"]["responseMimeType"] = response_format

        start_time = time.perf_counter()
        status_code = None
        try:
            response = await self.client.post(
                f"{self.service_url}/models/{self.model_name}:generateContent",
                params={"key": self.api_key},
                json=payload,
                headers={"Content-Type": "application/json"},
            )
            status_code = response.status_code
        except httpx.RequestError as e:
            self._log_call(start_time, status_code, success=False)
            logger.error(f"Request to Gemini service failed: {str(e)}")
            raise ServiceError("Gemini service unavailable") from e

        self._log_call(start_time, status_code, success=status_code == 200)

        if status_code == 200:
            try:
                return self._extract_text(response.json())
            except (ValueError, AttributeError, TypeError) as e:
                logger.error(f"Unreadable Gemini response: {str(e)}")
                raise ServiceError("Gemini returned an unreadable response") from e
        if status_code == 429:
            raise RateLimitedError("Gemini quota exceeded")
        if status_code == 404:
            raise ModelNotAvailableError(f"Model '{self.model_name}' is not available")
        if status_code in (401, 403):
            raise ModelNotAvailableError("Gemini rejected the configured API key")
        raise ServiceError(f"Model API error: {status_code}")

    def _extract_text(self, body: Dict[str, Any]) -> str:
        candidates = body.get("candidates") or []
        if not candidates:
            raise ServiceError("Gemini returned no candidates")
        parts = (candidates[0].get("content") or {}).get("parts") or []
        return "".join(part.get("text", "") for part in parts)

    def _log_call(self, start_time: float, status_code: Optional[int], success: bool) -> None:
        performance_logger.log_llm_request(
            model=self.model_name,
            duration=time.perf_counter() - start_time,
            status_code=status_code,
            success=success,
        )
