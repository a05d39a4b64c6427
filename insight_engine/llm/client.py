"""
Text-Completion Client

Issues chat-completion requests to an OpenAI-compatible endpoint.
Every failure (transport, non-success status, malformed response) comes
back as a GenerationResult carrying an error string; nothing is raised.

Uses a shared pooled HTTP client. No request timeout is applied here:
cancellation is left to the caller.
"""

import httpx
import logging
from typing import Optional

from pydantic import BaseModel

from insight_engine.config import AIConfig
from insight_engine.schemas.insights import GenerationMode

logger = logging.getLogger(__name__)

GENERATION_TEMPERATURE = 0.7

# Shared HTTP client for connection pooling across requests
_shared_client: Optional[httpx.AsyncClient] = None


async def get_shared_client() -> httpx.AsyncClient:
    """Get or create the shared HTTP client with connection pooling."""
    global _shared_client
    if _shared_client is None or _shared_client.is_closed:
        _shared_client = httpx.AsyncClient(
            timeout=None,
            limits=httpx.Limits(
                max_keepalive_connections=10,
                max_connections=20,
                keepalive_expiry=30.0,
            ),
            http2=True,
        )
    return _shared_client


async def close_shared_client():
    """Close the shared client (call on app shutdown)."""
    global _shared_client
    if _shared_client is not None and not _shared_client.is_closed:
        await _shared_client.aclose()
        _shared_client = None


class GenerationResult(BaseModel):
    """Outcome of one generation call, identical in shape for both modes."""
    text: str = ""
    mode: GenerationMode
    model: Optional[str] = None
    tokens_used: Optional[int] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class CompletionClient:
    """Client for an OpenAI-compatible chat-completions endpoint."""

    def __init__(self, config: AIConfig):
        self.config = config
        self.model = config.model
        self.headers = {
            "Authorization": f"Bearer {config.api_key}",
            "Content-Type": "application/json",
        }

    def build_payload(self, system_prompt: str, user_prompt: str) -> dict:
        return {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            "max_tokens": self.config.max_tokens,
            "temperature": GENERATION_TEMPERATURE,
        }

    def _failure(self, error: str) -> GenerationResult:
        logger.warning(f"Completion request failed: {error}")
        return GenerationResult(
            text="",
            mode=GenerationMode.REAL,
            model=self.model,
            error=error,
        )

    async def complete(self, system_prompt: str, user_prompt: str) -> GenerationResult:
        """
        Send one system/user message pair and return the generated text.

        Returns:
            GenerationResult with text and token usage on success, or empty
            text and a descriptive error on any failure
        """
        try:
            client = await get_shared_client()
            response = await client.post(
                self.config.api_endpoint,
                headers=self.headers,
                json=self.build_payload(system_prompt, user_prompt),
            )
            if not response.is_success:
                return self._failure(f"API error {response.status_code}: {response.text}")

            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            return self._failure(f"Request failed: {e}")

        choices = data.get("choices") if isinstance(data, dict) else None
        if not isinstance(choices, list) or not choices:
            return self._failure("Invalid API response: no choices returned")

        first = choices[0] if isinstance(choices[0], dict) else {}
        message = first.get("message")
        content = message.get("content") if isinstance(message, dict) else None
        if not isinstance(content, str):
            return self._failure("Invalid API response: no content in message")

        usage = data.get("usage")
        tokens_used = usage.get("total_tokens") if isinstance(usage, dict) else None
        if not isinstance(tokens_used, int):
            tokens_used = None

        logger.info(f"Completion received from {self.model} ({tokens_used or 'unknown'} tokens)")
        return GenerationResult(
            text=content,
            mode=GenerationMode.REAL,
            model=self.model,
            tokens_used=tokens_used,
        )
