import httpx
from octane_nexus.config import settings
from typing import Any, Dict, List, Optional
import logging

logger = logging.getLogger(__name__)


class GeminiError(Exception):
    """Raised when the Gemini API is unavailable or returns nothing usable"""


def _error_message(response: httpx.Response) -> str:
    """Message of an error reply: {"error": {"message": ...}}, {"error": "..."} or the status code"""
    fallback = f"Gemini API error: {response.status_code}"
    try:
        body = response.json()
    except ValueError:
        return fallback
    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict):
        error = error.get("message")
    return error if isinstance(error, str) and error.strip() else fallback


class GeminiClient:
    """Thin wrapper over the generateContent REST endpoint. One request per call."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None
    ):
        self.api_key = api_key if api_key is not None else settings.gemini_api_key
        self.model = model or settings.gemini_model
        self.base_url = (base_url or settings.gemini_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.gemini_timeout_seconds
        self.transport = transport

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    def generate(self, prompt: str, inline_data: Optional[Dict[str, str]] = None) -> str:
        """Send one prompt (plus optional inline image) and return the first candidate's text"""
        if not self.api_key:
            raise GeminiError("GEMINI_API_KEY is not configured")

        parts: List[Dict[str, Any]] = [{"text": prompt}]
        if inline_data:
            parts.append({"inline_data": inline_data})

        url = f"{self.base_url}/models/{self.model}:generateContent"
        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                response = client.post(
                    url,
                    params={"key": self.api_key},
                    json={"contents": [{"parts": parts}]},
                )
        except httpx.HTTPError as e:
            raise GeminiError(f"Gemini request failed: {e}") from e

        if response.status_code >= 400:
            raise GeminiError(_error_message(response))

        try:
            data = response.json()
            text = data["candidates"][0]["content"]["parts"][0]["text"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise GeminiError("Unexpected response format from Gemini API") from e

        if not isinstance(text, str) or not text.strip():
            raise GeminiError("Gemini returned an empty response")
        return text.strip()
